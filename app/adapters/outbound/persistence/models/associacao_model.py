# app/adapters/outbound/persistence/models/associacao_model.py

"""
Modelo de associação (cooperativa).

Cada associação pertence a exatamente uma conta (`user_id`) e é
referenciada por zero ou mais catadores.
"""

from sqlalchemy import Column, String, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from app.adapters.outbound.persistence.models.base_model import Base, BigIntegerPK


class Associacao(Base):
    """
    Modelo de associação.

    Attributes:
        id: Identificador único da associação
        cnpj: CNPJ da associação (único)
        endereco: Endereço
        bairro: Bairro
        user_id: Conta dona da associação (1:1)
        user: Relação com a conta
    """
    __tablename__ = "associacoes"

    id = Column(BigIntegerPK, primary_key=True, autoincrement=True)
    cnpj = Column(String(18), unique=True, nullable=False, index=True)
    endereco = Column(String(255), nullable=True)
    bairro = Column(String(255), nullable=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), unique=True, nullable=False)

    user = relationship("User", lazy="joined")

    def __repr__(self) -> str:
        """Representação em string do objeto Associacao."""
        return f"<Associacao(cnpj={self.cnpj})>"
