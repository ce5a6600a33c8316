# app/adapters/outbound/persistence/models/__init__.py

"""
Módulo de modelos de dados.

Este módulo exporta todos os modelos SQLAlchemy do sistema,
facilitando a importação e uso em outros módulos.
"""

# Importar Base
from app.adapters.outbound.persistence.models.base_model import Base

# Importar modelos de conta e perfis
from app.adapters.outbound.persistence.models.user_roles import user_roles
from app.adapters.outbound.persistence.models.role_model import Role
from app.adapters.outbound.persistence.models.user_model import User

# Importar modelos de domínio
from app.adapters.outbound.persistence.models.lookup_models import Etnia, Genero
from app.adapters.outbound.persistence.models.associacao_model import Associacao
from app.adapters.outbound.persistence.models.catador_model import Catador

# Exportar todos os modelos
__all__ = [
    # Base
    "Base",

    # Tabelas de associação
    "user_roles",

    # Conta e perfis
    "User",
    "Role",

    # Modelos de domínio
    "Associacao",
    "Catador",
    "Etnia",
    "Genero",
]
