# app/adapters/outbound/persistence/repositories/catador_repository.py (async version)

"""
Repository for catador records.

Every query loads the account, the associação, the etnia and the gênero
together with the catador.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import SQLAlchemyError

from app.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from app.adapters.outbound.persistence.models import Catador
from app.application.ports.outbound import ICatadorRepository
from app.domain.exceptions import ResourceAlreadyExistsException


class AsyncCatadorCRUD(AsyncCRUDBase[Catador, Dict[str, Any], Dict[str, Any]], ICatadorRepository):
    """
    Async implementation of CRUD repository for the Catador entity.
    """

    async def get_with_relations(self, db: AsyncSession, id: int) -> Optional[Catador]:
        """
        Find a catador by ID with all its relations loaded.

        Rows already in the session are refreshed from the database.

        Raises:
            DatabaseOperationException: In case of database error
        """
        try:
            query = (
                select(Catador)
                .where(Catador.id == id)
                .execution_options(populate_existing=True)
            )
            result = await db.execute(query)
            return result.unique().scalar_one_or_none()
        except SQLAlchemyError as e:
            self._storage_error("fetching", e)

    async def list_with_relations(self, db: AsyncSession) -> List[Catador]:
        return await self.get_multi(db)

    async def list_by_associacao(self, db: AsyncSession, associacao_id: int) -> List[Catador]:
        return await self.get_multi(db, associacao_id=associacao_id)

    async def ensure_cpf_available(self, db: AsyncSession, cpf: str) -> None:
        """
        Reject a CPF already registered.

        Raises:
            ResourceAlreadyExistsException: If the CPF is taken
        """
        if await self.exists(db, cpf=cpf):
            self.logger.warning(f"Attempt to register existing CPF: {cpf}")
            raise ResourceAlreadyExistsException(
                detail="Já existe um catador com o CPF cadastrado."
            )

    async def create_for_user(self, db: AsyncSession, *, data: Dict[str, Any], user_id: UUID) -> Catador:
        return await self.create(db, obj_in={**data, "user_id": user_id})


catador_repository = AsyncCatadorCRUD(Catador)
