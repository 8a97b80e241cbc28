from sqlalchemy import Table, Column, ForeignKey
from fleet_auth.db.base_class import Base, SCHEMA

user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("user_id", ForeignKey(f"{SCHEMA}.users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", ForeignKey(f"{SCHEMA}.roles.id", ondelete="CASCADE"), primary_key=True),
    schema=SCHEMA,
)
