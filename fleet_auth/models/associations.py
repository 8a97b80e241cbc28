"""Manutenção explícita dos dois lados de cada relacionamento.

Cada função ajusta as duas pontas no mesmo passo, em memória; a gravação
fica para o commit da sessão de quem chamou.
"""
from fleet_auth.models.client import Client
from fleet_auth.models.permission import Permission
from fleet_auth.models.role import Role
from fleet_auth.models.user import User


def add_user_to_client(client: Client, user: User) -> None:
    client.users.add(user)
    user.client = client


def remove_user_from_client(client: Client, user: User) -> None:
    # delete-orphan: o usuário é apagado no próximo flush
    client.users.discard(user)
    user.client = None


def add_role_to_client(client: Client, role: Role) -> None:
    client.roles.add(role)
    role.client = client


def remove_role_from_client(client: Client, role: Role) -> None:
    # delete-orphan: o papel é apagado no próximo flush
    client.roles.discard(role)
    role.client = None


def assign_role_to_user(user: User, role: Role) -> None:
    user.roles.add(role)
    role.users.add(user)


def remove_role_from_user(user: User, role: Role) -> None:
    user.roles.discard(role)
    role.users.discard(user)


def grant_permission_to_role(role: Role, permission: Permission) -> None:
    role.permissions.add(permission)
    permission.roles.add(role)


def revoke_permission_from_role(role: Role, permission: Permission) -> None:
    role.permissions.discard(permission)
    permission.roles.discard(role)
