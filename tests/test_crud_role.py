"""Repositório de papéis: escopo por tenant, sistema x custom, navegação e contagens."""

import pytest

from fleet_auth.core.errors import ConstraintViolation
from fleet_auth.crud.role import role_crud
from fleet_auth.models.associations import assign_role_to_user
from fleet_auth.schemas.role import RoleCreate


@pytest.fixture
def roles(acme, make_client, make_role):
    beta = make_client("Beta", "beta")
    return {
        "admin": acme["role"],
        "dispatcher": make_role(acme["client"], "dispatcher", description="Routes the fleet"),
        "auditor": make_role(acme["client"], "auditor", description="Read-only ADMIN helper"),
        "beta_admin": make_role(beta, "admin", is_system=True),
        "beta": beta,
    }


def test_name_unique_per_client(db, roles, acme):
    with pytest.raises(ConstraintViolation):
        role_crud.create(db, RoleCreate(name="admin", client_id=acme["client"].id))
    # mesmo nome em outro tenant é permitido (fixture beta_admin)
    assert role_crud.get_by_name_and_client(db, "admin", roles["beta"].id) == roles["beta_admin"]


def test_lookup_and_exists_by_name_and_client(db, roles, acme):
    client_id = acme["client"].id
    assert role_crud.get_by_name_and_client(db, "dispatcher", client_id) == roles["dispatcher"]
    assert role_crud.get_by_name_and_client(db, "dispatcher", roles["beta"].id) is None
    assert role_crud.exists_by_name_and_client(db, "auditor", client_id)
    assert not role_crud.exists_by_name_and_client(db, "auditor", roles["beta"].id)


def test_tenant_scoped_lists_never_leak(db, roles, acme):
    client_id = acme["client"].id
    found = role_crud.list_by_client(db, client_id)
    assert set(found) == {roles["admin"], roles["dispatcher"], roles["auditor"]}
    assert all(r.client_id == client_id for r in found)
    assert role_crud.count_by_client(db, client_id) == 3


def test_system_and_custom_roles(db, roles, acme):
    client_id = acme["client"].id
    assert role_crud.list_system_roles(db, client_id) == [roles["admin"]]
    assert set(role_crud.list_custom_roles(db, client_id)) == {roles["dispatcher"], roles["auditor"]}
    assert role_crud.count_system_roles(db, client_id) == 1


def test_search_name_or_description(db, roles, acme):
    client_id = acme["client"].id
    assert set(role_crud.search(db, "admin", client_id)) == {roles["admin"], roles["auditor"]}
    assert role_crud.search(db, "FLEET", client_id) == [roles["dispatcher"]]
    assert role_crud.search(db, "admin", roles["beta"].id) == [roles["beta_admin"]]
    assert role_crud.search(db, "%", client_id) == []
    assert role_crud.search(db, "_", client_id) == []


def test_ordered_by_name_and_name_in(db, roles, acme):
    client_id = acme["client"].id
    names = [r.name for r in role_crud.list_by_client_ordered_by_name(db, client_id)]
    assert names == ["admin", "auditor", "dispatcher"]
    picked = role_crud.list_by_names(db, ["admin", "dispatcher", "ghost"], client_id)
    assert {r.name for r in picked} == {"admin", "dispatcher"}
    assert role_crud.list_by_names(db, [], client_id) == []


def test_permission_and_user_traversal(db, roles, acme):
    client_id = acme["client"].id
    assert role_crud.list_by_permission_name(db, "vehicles:read", client_id) == [roles["admin"]]
    assert role_crud.list_by_permission_name(db, "vehicles:read", roles["beta"].id) == []
    assert role_crud.list_by_user(db, acme["user"].id, client_id) == [roles["admin"]]
    assert role_crud.list_by_user(db, acme["user"].id, roles["beta"].id) == []


def test_user_counts_and_unassigned_roles(db, roles, acme, make_user):
    client_id = acme["client"].id
    bob = make_user(acme["client"], "bob@acme.com")
    assign_role_to_user(bob, roles["admin"])
    db.commit()

    assert role_crud.count_users(db, roles["admin"].id) == 2
    assert role_crud.count_users(db, roles["auditor"].id) == 0
    assert set(role_crud.list_unassigned(db, client_id)) == {roles["dispatcher"], roles["auditor"]}
