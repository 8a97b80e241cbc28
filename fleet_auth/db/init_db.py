# fleet_auth/db/init_db.py
import logging
from sqlalchemy.orm import Session

from fleet_auth.crud.client import client_crud
from fleet_auth.crud.permission import permission_crud
from fleet_auth.crud.role import role_crud
from fleet_auth.models.associations import add_role_to_client, grant_permission_to_role
from fleet_auth.models.client import Client
from fleet_auth.models.permission import Permission
from fleet_auth.models.role import Role

logger = logging.getLogger(__name__)

BASE_PERMISSIONS = {
    "vehicles:read": "Consultar veículos",
    "vehicles:write": "Cadastrar e editar veículos",
    "users:manage": "Administrar usuários do tenant",
}
# papel de sistema -> permissões
SYSTEM_ROLES = {
    "admin": list(BASE_PERMISSIONS),
    "viewer": ["vehicles:read"],
}


def init_db(db: Session, tenant_slug: str = "demo") -> Client:
    """Seed idempotente: permissões globais + tenant demo com papéis de sistema."""
    perms = {p.name: p for p in permission_crud.list_by_names(db, list(BASE_PERMISSIONS))}
    for name, description in BASE_PERMISSIONS.items():
        if name not in perms:
            p = Permission(name=name, description=description)
            db.add(p); db.flush()
            perms[name] = p

    tenant = client_crud.get_by_slug(db, tenant_slug)
    if not tenant:
        tenant = Client(name="Cliente Demo", slug=tenant_slug)
        db.add(tenant); db.flush()
        logger.info("created seed tenant %s", tenant_slug)

    for role_name, perm_names in SYSTEM_ROLES.items():
        role = role_crud.get_by_name_and_client(db, role_name, tenant.id)
        if not role:
            role = Role(name=role_name, is_system=True)
            add_role_to_client(tenant, role)
            db.add(role); db.flush()
        for perm_name in perm_names:
            grant_permission_to_role(role, perms[perm_name])

    db.commit()
    return tenant
