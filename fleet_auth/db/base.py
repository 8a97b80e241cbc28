# fleet_auth/db/base.py
from fleet_auth.db.base_class import Base, SCHEMA

# 🔴 IMPORTE TODOS OS MODELS AQUI (Alembic lê Base.metadata daqui)
from fleet_auth.models.client import Client
from fleet_auth.models.user import User
from fleet_auth.models.user_role import user_roles
from fleet_auth.models.role import Role
from fleet_auth.models.role_permission import role_permissions
from fleet_auth.models.permission import Permission
from fleet_auth.models.tokens import JwtToken
