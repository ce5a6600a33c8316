# app/adapters/outbound/persistence/repositories/__init__.py (async version)

"""
CRUD (Create, Read, Update, Delete) module.

This module exports classes and instances of the repositories CRUD
for different system entities, implementing the Repository pattern.
"""

# Import CRUD classes
from app.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from app.adapters.outbound.persistence.repositories.user_repository import AsyncUserCRUD
from app.adapters.outbound.persistence.repositories.role_repository import AsyncRoleCRUD
from app.adapters.outbound.persistence.repositories.associacao_repository import AsyncAssociacaoCRUD
from app.adapters.outbound.persistence.repositories.catador_repository import AsyncCatadorCRUD

# Import singleton CRUD instances
from app.adapters.outbound.persistence.repositories.user_repository import user_repository
from app.adapters.outbound.persistence.repositories.role_repository import role_repository
from app.adapters.outbound.persistence.repositories.associacao_repository import associacao_repository
from app.adapters.outbound.persistence.repositories.catador_repository import catador_repository
from app.adapters.outbound.persistence.repositories.lookup_repository import (
    etnia_repository,
    genero_repository,
)

# Export all classes and instances
__all__ = [
    # Classes
    "AsyncCRUDBase",
    "AsyncUserCRUD",
    "AsyncRoleCRUD",
    "AsyncAssociacaoCRUD",
    "AsyncCatadorCRUD",

    # Instances
    "user_repository",
    "role_repository",
    "associacao_repository",
    "catador_repository",
    "etnia_repository",
    "genero_repository",
]
