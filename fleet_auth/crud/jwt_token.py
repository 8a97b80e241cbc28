import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import delete, or_, select
from fleet_auth.crud.base import CRUDBase, write_guard
from fleet_auth.db.base_class import utcnow
from fleet_auth.models.tokens import JwtToken
from fleet_auth.models.user import User
from fleet_auth.schemas.token import JwtTokenCreate

logger = logging.getLogger(__name__)


def _active_at(now: datetime):
    return (
        JwtToken.revoked_at.is_(None),
        or_(JwtToken.expires_at.is_(None), JwtToken.expires_at > now),
    )


def _expired_at(now: datetime):
    return (JwtToken.expires_at.is_not(None), JwtToken.expires_at <= now)


class CRUDJwtToken(CRUDBase[JwtToken, JwtTokenCreate, JwtTokenCreate]):
    def create(self, db: Session, obj_in: JwtTokenCreate, extra: Dict[str, Any] | None = None) -> JwtToken:
        data = obj_in.model_dump()
        if extra: data.update(extra)
        if data.get("client_id") is None:
            user = db.get(User, data["user_id"])
            data["client_id"] = user.client_id if user else None
        return self.save(db, JwtToken(**data))

    def get_by_jti(self, db: Session, jti: str) -> Optional[JwtToken]:
        return self._one(db, select(JwtToken).where(JwtToken.jti == jti))

    def exists_by_jti(self, db: Session, jti: str) -> bool:
        return self._exists(db, JwtToken.jti == jti)

    def list_by_user(self, db: Session, user_id: uuid.UUID) -> List[JwtToken]:
        return self._all(db, select(JwtToken).where(JwtToken.user_id == user_id))

    def list_by_client(self, db: Session, client_id: uuid.UUID) -> List[JwtToken]:
        return self._all(db, select(JwtToken).where(JwtToken.client_id == client_id))

    def list_by_type(self, db: Session, token_type: str) -> List[JwtToken]:
        return self._all(db, select(JwtToken).where(JwtToken.token_type == token_type))

    def list_active_by_user(self, db: Session, user_id: uuid.UUID, now: datetime | None = None) -> List[JwtToken]:
        stmt = select(JwtToken).where(JwtToken.user_id == user_id, *_active_at(now or utcnow()))
        return self._all(db, stmt)

    def list_active_by_user_and_type(
        self, db: Session, user_id: uuid.UUID, token_type: str, now: datetime | None = None
    ) -> List[JwtToken]:
        stmt = select(JwtToken).where(
            JwtToken.user_id == user_id,
            JwtToken.token_type == token_type,
            *_active_at(now or utcnow()),
        )
        return self._all(db, stmt)

    def list_revoked_by_user(self, db: Session, user_id: uuid.UUID) -> List[JwtToken]:
        return self._all(db, select(JwtToken).where(JwtToken.user_id == user_id, JwtToken.revoked_at.is_not(None)))

    def list_expired(self, db: Session, now: datetime | None = None) -> List[JwtToken]:
        return self._all(db, select(JwtToken).where(*_expired_at(now or utcnow())))

    def list_expired_by_client(self, db: Session, client_id: uuid.UUID, now: datetime | None = None) -> List[JwtToken]:
        stmt = select(JwtToken).where(JwtToken.client_id == client_id, *_expired_at(now or utcnow()))
        return self._all(db, stmt)

    def list_expiring_before(self, db: Session, before: datetime) -> List[JwtToken]:
        return self._all(db, select(JwtToken).where(*_expired_at(before)))

    def list_issued_since(self, db: Session, since: datetime, client_id: uuid.UUID) -> List[JwtToken]:
        return self._all(db, select(JwtToken).where(JwtToken.client_id == client_id, JwtToken.issued_at >= since))

    def list_replaced_by_client(self, db: Session, client_id: uuid.UUID) -> List[JwtToken]:
        stmt = select(JwtToken).where(JwtToken.client_id == client_id, JwtToken.replaced_by_jti.is_not(None))
        return self._all(db, stmt)

    def get_by_replaced_by_jti(self, db: Session, replaced_by_jti: str) -> Optional[JwtToken]:
        return self._one(db, select(JwtToken).where(JwtToken.replaced_by_jti == replaced_by_jti))

    def count_active_by_user(self, db: Session, user_id: uuid.UUID, now: datetime | None = None) -> int:
        return self._count(db, JwtToken.user_id == user_id, *_active_at(now or utcnow()))

    def count_by_client(self, db: Session, client_id: uuid.UUID) -> int:
        return self._count(db, JwtToken.client_id == client_id)

    def list_by_user_newest_first(self, db: Session, user_id: uuid.UUID) -> List[JwtToken]:
        stmt = select(JwtToken).where(JwtToken.user_id == user_id).order_by(JwtToken.issued_at.desc())
        return self._all(db, stmt)

    # -- transições de estado ----------------------------------------------
    def revoke(self, db: Session, jti: str, revoked_by: uuid.UUID | None) -> Optional[JwtToken]:
        token = self.get_by_jti(db, jti)
        if not token:
            return None
        with write_guard(db):
            token.revoke(revoked_by)
        logger.info("token %s revoked by %s", jti, revoked_by)
        return token

    def replace(self, db: Session, jti: str, new_jti: str) -> Optional[JwtToken]:
        token = self.get_by_jti(db, jti)
        if not token:
            return None
        with write_guard(db):
            token.mark_as_replaced(new_jti)
        logger.info("token %s replaced by %s", jti, new_jti)
        return token

    # -- limpeza em lote ---------------------------------------------------
    def delete_expired_before(self, db: Session, before: datetime) -> int:
        stmt = delete(JwtToken).where(*_expired_at(before)).execution_options(synchronize_session=False)
        with write_guard(db):
            deleted = db.execute(stmt).rowcount
        logger.info("deleted %d expired tokens (expires_at <= %s)", deleted, before.isoformat())
        return deleted

    def delete_revoked_before(self, db: Session, before: datetime) -> int:
        stmt = (
            delete(JwtToken)
            .where(JwtToken.revoked_at.is_not(None), JwtToken.revoked_at <= before)
            .execution_options(synchronize_session=False)
        )
        with write_guard(db):
            deleted = db.execute(stmt).rowcount
        logger.info("deleted %d revoked tokens (revoked_at <= %s)", deleted, before.isoformat())
        return deleted


jwt_token_crud = CRUDJwtToken(JwtToken)
