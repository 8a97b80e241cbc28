import uuid
from typing import List, Optional, Sequence
from sqlalchemy.orm import Session
from sqlalchemy import func, or_, select
from fleet_auth.crud.base import CRUDBase
from fleet_auth.models.permission import Permission
from fleet_auth.models.role import Role
from fleet_auth.models.user import User
from fleet_auth.models.role_permission import role_permissions
from fleet_auth.schemas.permission import PermissionCreate, PermissionUpdate


class CRUDPermission(CRUDBase[Permission, PermissionCreate, PermissionUpdate]):
    def get_by_name(self, db: Session, name: str) -> Optional[Permission]:
        return self._one(db, select(Permission).where(Permission.name == name))

    def exists_by_name(self, db: Session, name: str) -> bool:
        return self._exists(db, Permission.name == name)

    def search(self, db: Session, text: str) -> List[Permission]:
        stmt = select(Permission).where(
            or_(
                Permission.name.icontains(text, autoescape=True),
                Permission.description.icontains(text, autoescape=True),
            )
        )
        return self._all(db, stmt)

    def list_ordered_by_name(self, db: Session) -> List[Permission]:
        return self._all(db, select(Permission).order_by(Permission.name.asc()))

    def list_by_names(self, db: Session, names: Sequence[str]) -> List[Permission]:
        if not names:
            return []
        return self._all(db, select(Permission).where(Permission.name.in_(list(names))))

    def list_by_role(self, db: Session, role_id: uuid.UUID) -> List[Permission]:
        stmt = select(Permission).join(Permission.roles).where(Role.id == role_id).distinct()
        return self._all(db, stmt)

    def list_by_client(self, db: Session, client_id: uuid.UUID) -> List[Permission]:
        stmt = select(Permission).join(Permission.roles).where(Role.client_id == client_id).distinct()
        return self._all(db, stmt)

    def list_by_user(self, db: Session, user_id: uuid.UUID) -> List[Permission]:
        stmt = (
            select(Permission)
            .join(Permission.roles)
            .join(Role.users)
            .where(User.id == user_id)
            .distinct()
        )
        return self._all(db, stmt)

    def list_by_user_and_client(self, db: Session, user_id: uuid.UUID, client_id: uuid.UUID) -> List[Permission]:
        stmt = (
            select(Permission)
            .join(Permission.roles)
            .join(Role.users)
            .where(User.id == user_id, Role.client_id == client_id)
            .distinct()
        )
        return self._all(db, stmt)

    def count_all(self, db: Session) -> int:
        return self._count(db)

    def count_roles(self, db: Session, permission_id: uuid.UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(role_permissions)
            .where(role_permissions.c.permission_id == permission_id)
        )
        return db.scalar(stmt) or 0

    def list_unassigned(self, db: Session) -> List[Permission]:
        return self._all(db, select(Permission).where(~Permission.roles.any()))

    def list_unassigned_by_client(self, db: Session, client_id: uuid.UUID) -> List[Permission]:
        used = (
            select(role_permissions.c.permission_id)
            .join(Role, Role.id == role_permissions.c.role_id)
            .where(Role.client_id == client_id)
        )
        return self._all(db, select(Permission).where(Permission.id.not_in(used)))

    def list_by_name_prefix(self, db: Session, prefix: str) -> List[Permission]:
        return self._all(db, select(Permission).where(Permission.name.startswith(prefix, autoescape=True)))

    def list_most_used(self, db: Session, limit: int = 10) -> List[Permission]:
        usage = func.count(role_permissions.c.role_id)
        stmt = (
            select(Permission)
            .join(role_permissions, role_permissions.c.permission_id == Permission.id)
            .group_by(Permission.id)
            .order_by(usage.desc())
            .limit(limit)
        )
        return self._all(db, stmt)


permission_crud = CRUDPermission(Permission)
