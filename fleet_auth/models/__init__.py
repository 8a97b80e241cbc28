# Carrega módulos para registrar tabelas no metadata:
from fleet_auth.models.client import Client
from fleet_auth.models.user_role import user_roles
from fleet_auth.models.role_permission import role_permissions
from fleet_auth.models.user import User
from fleet_auth.models.role import Role
from fleet_auth.models.permission import Permission
from fleet_auth.models.tokens import JwtToken

__all__ = [
    "Client",
    "User",
    "Role",
    "Permission",
    "JwtToken",
    "user_roles",
    "role_permissions",
]
