# app/adapters/outbound/persistence/models/user_model.py

"""
Modelo de conta de usuário.

Toda associação e todo catador possui exatamente uma conta. A conta guarda
as credenciais, o status (ativo/inativo) e os perfis atribuídos.
"""

from sqlalchemy import (
    Column,
    Boolean,
    String,
    DateTime,
    Uuid,
)
from sqlalchemy.orm import relationship
import uuid
from app.adapters.outbound.persistence.models.base_model import Base, utcnow
from app.adapters.outbound.persistence.models.user_roles import user_roles


class User(Base):
    """
    Modelo de conta do sistema.

    Attributes:
        id: Identificador único da conta (UUID)
        email: Email da conta (único)
        password: Hash da senha
        name: Nome de exibição (opcional)
        is_active: Indica se a conta está ativa
        created_at: Data e hora de criação
        updated_at: Data e hora da última atualização
        roles: Perfis atribuídos à conta
    """
    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)
    name = Column(String(255), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, onupdate=utcnow)

    # Relação many-to-many com perfis
    roles = relationship(
        "Role",
        secondary=user_roles,
        lazy="selectin"  # Carrega os perfis sempre que carregar uma conta
    )

    def __repr__(self) -> str:
        """Representação em string do objeto User."""
        return f"<User(email={self.email}, active={self.is_active})>"
