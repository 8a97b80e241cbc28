# fleet_auth/db/bootstrap.py
import logging
import os
from alembic import command
from alembic.config import Config
from sqlalchemy.orm import Session

from fleet_auth.core.config import normalize_url
from fleet_auth.db.session import SessionLocal, make_engine
from fleet_auth.db.init_db import init_db

logger = logging.getLogger(__name__)

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", ".."))


def alembic_config(url: str | None = None) -> Config:
    # Aponta explicitamente para alembic.ini e migrations/
    cfg = Config(os.path.join(BASE_DIR, "alembic.ini"))
    cfg.set_main_option("script_location", os.path.join(BASE_DIR, "migrations"))
    if url:
        # ConfigParser interpola "%"
        cfg.set_main_option("sqlalchemy.url", normalize_url(url).replace("%", "%%"))
    return cfg


def run_migrations(revision: str = "head", url: str | None = None) -> None:
    logger.info("applying migrations up to %s", revision)
    command.upgrade(alembic_config(url), revision)


def run_migrations_and_seed(url: str | None = None) -> None:
    run_migrations(url=url)
    if url is None:
        with SessionLocal() as db:
            init_db(db)
        return
    engine = make_engine(url)
    try:
        with Session(engine) as db:
            init_db(db)
    finally:
        engine.dispose()
