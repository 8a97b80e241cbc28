# fleet_auth/core/logging.py
import logging
import sys

from fleet_auth.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configura o logger raiz uma única vez (stream em stderr)."""
    root = logging.getLogger()
    root.setLevel((level or settings.LOG_LEVEL).upper())
    if any(getattr(h, "_fleet_auth", False) for h in root.handlers):
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._fleet_auth = True  # type: ignore[attr-defined]
    root.addHandler(handler)

    # o SQL do engine só aparece com DB_ECHO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
