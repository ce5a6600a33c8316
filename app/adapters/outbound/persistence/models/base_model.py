# app/adapters/outbound/persistence/models/base_model.py

"""
Classe base declarativa de todos os modelos ORM.

Também define o tipo de chave primária inteira usado pelas tabelas,
que no SQLite precisa ser INTEGER para autoincrementar.
"""

from datetime import datetime, timezone

from sqlalchemy import BigInteger, Integer
from sqlalchemy.orm import declarative_base

# Cria a classe pai de todos os modelos ORM para controle de metadados
Base = declarative_base()

BigIntegerPK = BigInteger().with_variant(Integer, "sqlite")


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)
