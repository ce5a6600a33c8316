# app/adapters/outbound/persistence/models/catador_model.py

"""
Modelo de catador.

Cada catador pertence a exatamente uma conta (`user_id`) e referencia
obrigatoriamente uma associação existente.
"""

from sqlalchemy import Column, String, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from app.adapters.outbound.persistence.models.base_model import Base, BigIntegerPK


class Catador(Base):
    """
    Modelo de catador.

    Attributes:
        id: Identificador único do catador
        cpf: CPF do catador (único)
        endereco: Endereço
        bairro: Bairro
        user_id: Conta do catador (1:1)
        associacao_id: Associação à qual o catador pertence
        etnia_id: Etnia declarada (opcional)
        genero_id: Gênero declarado (opcional)
    """
    __tablename__ = "catadores"

    id = Column(BigIntegerPK, primary_key=True, autoincrement=True)
    cpf = Column(String(14), unique=True, nullable=False, index=True)
    endereco = Column(String(255), nullable=True)
    bairro = Column(String(255), nullable=True)
    user_id = Column(Uuid(as_uuid=True), ForeignKey("users.id"), unique=True, nullable=False)
    associacao_id = Column(BigIntegerPK, ForeignKey("associacoes.id"), nullable=False, index=True)
    etnia_id = Column(BigIntegerPK, ForeignKey("etnias.id"), nullable=True)
    genero_id = Column(BigIntegerPK, ForeignKey("generos.id"), nullable=True)

    user = relationship("User", lazy="joined")
    associacao = relationship("Associacao", lazy="joined")
    etnia = relationship("Etnia", lazy="joined")
    genero = relationship("Genero", lazy="joined")

    def __repr__(self) -> str:
        """Representação em string do objeto Catador."""
        return f"<Catador(cpf={self.cpf})>"
