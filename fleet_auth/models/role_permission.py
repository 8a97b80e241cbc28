from sqlalchemy import Table, Column, ForeignKey
from fleet_auth.db.base_class import Base, SCHEMA

role_permissions = Table(
    "role_permissions",
    Base.metadata,
    Column("role_id", ForeignKey(f"{SCHEMA}.roles.id", ondelete="CASCADE"), primary_key=True),
    Column("permission_id", ForeignKey(f"{SCHEMA}.permissions.id", ondelete="CASCADE"), primary_key=True),
    schema=SCHEMA,
)
