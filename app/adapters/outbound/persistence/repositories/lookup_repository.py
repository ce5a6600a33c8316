# app/adapters/outbound/persistence/repositories/lookup_repository.py (async version)

from typing import Any, Dict

from app.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from app.adapters.outbound.persistence.models import Etnia, Genero

# Read-only use: catadores only reference existing rows
etnia_repository: AsyncCRUDBase[Etnia, Dict[str, Any], Dict[str, Any]] = AsyncCRUDBase(Etnia)
genero_repository: AsyncCRUDBase[Genero, Dict[str, Any], Dict[str, Any]] = AsyncCRUDBase(Genero)
