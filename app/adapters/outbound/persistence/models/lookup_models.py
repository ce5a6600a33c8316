# app/adapters/outbound/persistence/models/lookup_models.py

"""
Tabelas de apoio (etnia e gênero) referenciadas pelos catadores.
"""

from sqlalchemy import Column, String
from app.adapters.outbound.persistence.models.base_model import Base, BigIntegerPK


class Etnia(Base):
    __tablename__ = "etnias"

    id = Column(BigIntegerPK, primary_key=True, autoincrement=True)
    nomenclatura = Column(String(100), nullable=False)

    def __repr__(self) -> str:
        return f"<Etnia(nomenclatura={self.nomenclatura})>"


class Genero(Base):
    __tablename__ = "generos"

    id = Column(BigIntegerPK, primary_key=True, autoincrement=True)
    nomenclatura = Column(String(100), nullable=False)

    def __repr__(self) -> str:
        return f"<Genero(nomenclatura={self.nomenclatura})>"
