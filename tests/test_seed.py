from fleet_auth.core.errors import ConstraintViolation, StorageError
from fleet_auth.crud import client_crud, permission_crud, role_crud
from fleet_auth.db.init_db import BASE_PERMISSIONS, init_db


def test_seed_is_idempotent(db):
    first = init_db(db)
    second = init_db(db)

    assert first == second
    assert client_crud.get_by_slug(db, "demo") == first
    assert permission_crud.count_all(db) == len(BASE_PERMISSIONS)
    assert role_crud.count_system_roles(db, first.id) == 2

    admin = role_crud.get_by_name_and_client(db, "admin", first.id)
    assert {p.name for p in admin.permissions} == set(BASE_PERMISSIONS)
    viewer = role_crud.get_by_name_and_client(db, "viewer", first.id)
    assert [p.name for p in viewer.permissions] == ["vehicles:read"]


def test_seed_reuses_existing_permissions(db, acme):
    tenant = init_db(db, tenant_slug="seeded")
    assert permission_crud.count_all(db) == len(BASE_PERMISSIONS)
    assert role_crud.list_by_permission_name(db, "vehicles:read", tenant.id)


def test_error_payload():
    err = ConstraintViolation("Registro duplicado ou referência inválida.", "slug")
    assert isinstance(err, StorageError)
    assert err.to_dict() == {
        "code": "UNIQUE_VIOLATION",
        "message": "Registro duplicado ou referência inválida.",
        "details": "slug",
    }
    assert StorageError("boom").to_dict()["code"] == "STORAGE_ERROR"
