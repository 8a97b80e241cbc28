import logging
from contextlib import contextmanager
from typing import TypeVar, Generic, Type, Any, Iterator, Optional, List, Dict
from sqlalchemy import Select, exists, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session
from pydantic import BaseModel
from fleet_auth.core.errors import ConstraintViolation, StorageError
from fleet_auth.db.base_class import Base

logger = logging.getLogger(__name__)

ModelType = TypeVar("ModelType", bound=Base)
CreateSchema = TypeVar("CreateSchema", bound=BaseModel)
UpdateSchema = TypeVar("UpdateSchema", bound=BaseModel)


@contextmanager
def write_guard(db: Session) -> Iterator[None]:
    """Commit no fim do bloco; em erro faz rollback e traduz a exceção."""
    try:
        yield
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise ConstraintViolation("Registro duplicado ou referência inválida.", str(exc.orig)) from exc
    except SQLAlchemyError as exc:
        db.rollback()
        raise StorageError("Falha no armazenamento.", str(exc)) from exc


class CRUDBase(Generic[ModelType, CreateSchema, UpdateSchema]):
    def __init__(self, model: Type[ModelType]): self.model = model

    # -- helpers de consulta -------------------------------------------------
    def _one(self, db: Session, stmt: Select) -> Optional[ModelType]:
        return db.scalars(stmt.limit(1)).first()

    def _all(self, db: Session, stmt: Select) -> List[ModelType]:
        return list(db.scalars(stmt).all())

    def _exists(self, db: Session, *criteria) -> bool:
        return bool(db.scalar(select(exists().where(*criteria))))

    def _count(self, db: Session, *criteria) -> int:
        return db.scalar(select(func.count()).select_from(self.model).where(*criteria)) or 0

    # -- CRUD genérico -------------------------------------------------------
    def get(self, db: Session, id: Any) -> Optional[ModelType]:
        return db.get(self.model, id)

    def get_multi(self, db: Session, skip=0, limit=100) -> List[ModelType]:
        return db.query(self.model).offset(skip).limit(limit).all()

    def create(self, db: Session, obj_in: CreateSchema, extra: Dict[str, Any] | None=None) -> ModelType:
        data = obj_in.model_dump()
        if extra: data.update(extra)
        obj = self.model(**data)
        return self.save(db, obj)

    def save(self, db: Session, obj: ModelType) -> ModelType:
        with write_guard(db):
            db.add(obj)
        db.refresh(obj)
        logger.debug("saved %r", obj)
        return obj

    def update(self, db: Session, db_obj: ModelType, obj_in: UpdateSchema | Dict[str, Any]) -> ModelType:
        data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)
        for f,v in data.items(): setattr(db_obj, f, v)
        return self.save(db, db_obj)

    def remove(self, db: Session, id: Any) -> Optional[ModelType]:
        obj = self.get(db, id)
        if not obj: return None
        with write_guard(db):
            db.delete(obj)
        logger.info("removed %s id=%s", self.model.__name__, id)
        return obj
