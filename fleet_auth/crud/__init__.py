from fleet_auth.crud.client import client_crud
from fleet_auth.crud.user import user_crud
from fleet_auth.crud.role import role_crud
from fleet_auth.crud.permission import permission_crud
from fleet_auth.crud.jwt_token import jwt_token_crud

__all__ = ["client_crud", "user_crud", "role_crud", "permission_crud", "jwt_token_crud"]
