import uuid
from typing import List, Optional, Sequence
from sqlalchemy.orm import Session
from sqlalchemy import func, or_, select
from fleet_auth.crud.base import CRUDBase
from fleet_auth.models.role import Role
from fleet_auth.models.user import User
from fleet_auth.models.permission import Permission
from fleet_auth.models.user_role import user_roles
from fleet_auth.schemas.role import RoleCreate, RoleUpdate


class CRUDRole(CRUDBase[Role, RoleCreate, RoleUpdate]):
    def get_by_name_and_client(self, db: Session, name: str, client_id: uuid.UUID) -> Optional[Role]:
        return db.execute(
            select(Role).where(Role.name == name, Role.client_id == client_id)
        ).scalar_one_or_none()

    def exists_by_name_and_client(self, db: Session, name: str, client_id: uuid.UUID) -> bool:
        return self._exists(db, Role.name == name, Role.client_id == client_id)

    def list_by_client(self, db: Session, client_id: uuid.UUID) -> List[Role]:
        return self._all(db, select(Role).where(Role.client_id == client_id))

    def list_system_roles(self, db: Session, client_id: uuid.UUID) -> List[Role]:
        return self._all(db, select(Role).where(Role.client_id == client_id, Role.is_system.is_(True)))

    def list_custom_roles(self, db: Session, client_id: uuid.UUID) -> List[Role]:
        return self._all(db, select(Role).where(Role.client_id == client_id, Role.is_system.is_(False)))

    def search(self, db: Session, text: str, client_id: uuid.UUID) -> List[Role]:
        stmt = select(Role).where(
            Role.client_id == client_id,
            or_(Role.name.icontains(text, autoescape=True), Role.description.icontains(text, autoescape=True)),
        )
        return self._all(db, stmt)

    def list_by_client_ordered_by_name(self, db: Session, client_id: uuid.UUID) -> List[Role]:
        return self._all(db, select(Role).where(Role.client_id == client_id).order_by(Role.name.asc()))

    def list_by_names(self, db: Session, names: Sequence[str], client_id: uuid.UUID) -> List[Role]:
        if not names:
            return []
        return self._all(db, select(Role).where(Role.name.in_(list(names)), Role.client_id == client_id))

    def list_by_permission_name(self, db: Session, permission_name: str, client_id: uuid.UUID) -> List[Role]:
        stmt = (
            select(Role)
            .join(Role.permissions)
            .where(Permission.name == permission_name, Role.client_id == client_id)
            .distinct()
        )
        return self._all(db, stmt)

    def list_by_user(self, db: Session, user_id: uuid.UUID, client_id: uuid.UUID) -> List[Role]:
        stmt = (
            select(Role)
            .join(Role.users)
            .where(User.id == user_id, Role.client_id == client_id)
            .distinct()
        )
        return self._all(db, stmt)

    def count_by_client(self, db: Session, client_id: uuid.UUID) -> int:
        return self._count(db, Role.client_id == client_id)

    def count_system_roles(self, db: Session, client_id: uuid.UUID) -> int:
        return self._count(db, Role.client_id == client_id, Role.is_system.is_(True))

    def count_users(self, db: Session, role_id: uuid.UUID) -> int:
        stmt = select(func.count()).select_from(user_roles).where(user_roles.c.role_id == role_id)
        return db.scalar(stmt) or 0

    def list_unassigned(self, db: Session, client_id: uuid.UUID) -> List[Role]:
        return self._all(db, select(Role).where(Role.client_id == client_id, ~Role.users.any()))


role_crud = CRUDRole(Role)
