# app/adapters/outbound/persistence/models/role_model.py

"""
Modelo de perfil (role) de acesso.

Este módulo define o perfil atribuído às contas. Os perfis "associacao"
e "catador" são criados sob demanda pelo provisionamento.
"""

from sqlalchemy import Column, Boolean, String
from app.adapters.outbound.persistence.models.base_model import Base, BigIntegerPK


class Role(Base):
    """
    Modelo de perfil de acesso.

    Attributes:
        id: Identificador único do perfil
        name: Nome do perfil (ex: "associacao", "catador"), único
        description: Descrição legível do perfil
        is_active: Indica se o perfil está ativo
    """
    __tablename__ = "roles"

    id = Column(BigIntegerPK, primary_key=True, autoincrement=True)
    name = Column(String(150), unique=True, nullable=False, index=True)
    description = Column(String(255), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        """Representação em string do objeto Role."""
        return f"<Role(name={self.name}, active={self.is_active})>"
