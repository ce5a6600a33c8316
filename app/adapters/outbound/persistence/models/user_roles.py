# app/adapters/outbound/persistence/models/user_roles.py

from sqlalchemy import Column, ForeignKey, Table, Uuid
from app.adapters.outbound.persistence.models.base_model import Base, BigIntegerPK

########################################################################
# Tabela de associação many-to-many entre contas e perfis
########################################################################

user_roles = Table(
    "user_roles",
    Base.metadata,
    Column("user_id", Uuid(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("role_id", BigIntegerPK, ForeignKey("roles.id", ondelete="CASCADE"), primary_key=True),
)
