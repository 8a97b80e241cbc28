import uuid
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import or_, select
from fleet_auth.crud.base import CRUDBase, write_guard
from fleet_auth.db.base_class import utcnow
from fleet_auth.models.user import User
from fleet_auth.models.role import Role
from fleet_auth.models.permission import Permission
from fleet_auth.schemas.user import UserCreate, UserUpdate


class CRUDUser(CRUDBase[User, UserCreate, UserUpdate]):
    def get_by_email(self, db: Session, email: str) -> Optional[User]:
        # o mesmo e-mail pode existir em vários tenants: pega o mais novo
        stmt = select(User).where(User.email == email).order_by(User.created_at.desc())
        return self._one(db, stmt)

    def get_by_email_and_client(self, db: Session, email: str, client_id: uuid.UUID) -> Optional[User]:
        return db.execute(
            select(User).where(User.email == email, User.client_id == client_id)
        ).scalar_one_or_none()

    def exists_by_email(self, db: Session, email: str) -> bool:
        return self._exists(db, User.email == email)

    def exists_by_email_and_client(self, db: Session, email: str, client_id: uuid.UUID) -> bool:
        return self._exists(db, User.email == email, User.client_id == client_id)

    def list_by_client(self, db: Session, client_id: uuid.UUID) -> List[User]:
        return self._all(db, select(User).where(User.client_id == client_id))

    def list_active_by_client(self, db: Session, client_id: uuid.UUID) -> List[User]:
        return self._all(db, select(User).where(User.client_id == client_id, User.is_active.is_(True)))

    def list_active(self, db: Session) -> List[User]:
        return self._all(db, select(User).where(User.is_active.is_(True)))

    def list_email_verified_by_client(self, db: Session, client_id: uuid.UUID) -> List[User]:
        return self._all(db, select(User).where(User.client_id == client_id, User.is_email_verified.is_(True)))

    def list_by_role_name(self, db: Session, role_name: str, client_id: uuid.UUID) -> List[User]:
        stmt = (
            select(User)
            .join(User.roles)
            .where(Role.name == role_name, User.client_id == client_id)
            .distinct()
        )
        return self._all(db, stmt)

    def search(self, db: Session, text: str, client_id: uuid.UUID) -> List[User]:
        stmt = select(User).where(
            User.client_id == client_id,
            or_(User.email.icontains(text, autoescape=True), User.full_name.icontains(text, autoescape=True)),
        )
        return self._all(db, stmt)

    def list_logged_in_since(self, db: Session, since: datetime, client_id: uuid.UUID) -> List[User]:
        return self._all(db, select(User).where(User.client_id == client_id, User.last_login >= since))

    def list_never_logged_in(self, db: Session, client_id: uuid.UUID) -> List[User]:
        return self._all(db, select(User).where(User.client_id == client_id, User.last_login.is_(None)))

    def count_active_by_client(self, db: Session, client_id: uuid.UUID) -> int:
        return self._count(db, User.client_id == client_id, User.is_active.is_(True))

    def count_by_client(self, db: Session, client_id: uuid.UUID) -> int:
        return self._count(db, User.client_id == client_id)

    def list_by_permission_name(self, db: Session, permission_name: str, client_id: uuid.UUID) -> List[User]:
        stmt = (
            select(User)
            .join(User.roles)
            .join(Role.permissions)
            .where(Permission.name == permission_name, User.client_id == client_id)
            .distinct()
        )
        return self._all(db, stmt)

    def list_by_client_newest_first(self, db: Session, client_id: uuid.UUID) -> List[User]:
        return self._all(db, select(User).where(User.client_id == client_id).order_by(User.created_at.desc()))

    def touch_last_login(self, db: Session, user: User, when: datetime | None = None) -> User:
        with write_guard(db):
            user.last_login = when or utcnow()
        db.refresh(user)
        return user


user_crud = CRUDUser(User)
