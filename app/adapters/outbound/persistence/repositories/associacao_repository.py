# app/adapters/outbound/persistence/repositories/associacao_repository.py (async version)

"""
Repository for associação records.

Every query loads the owning account together with the associação.
"""

from typing import Any, Dict, List, Optional
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import SQLAlchemyError

from app.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from app.adapters.outbound.persistence.models import Associacao
from app.application.ports.outbound import IAssociacaoRepository
from app.domain.exceptions import ResourceAlreadyExistsException


class AsyncAssociacaoCRUD(AsyncCRUDBase[Associacao, Dict[str, Any], Dict[str, Any]], IAssociacaoRepository):
    """
    Async implementation of CRUD repository for the Associacao entity.
    """

    async def get_with_user(self, db: AsyncSession, id: int) -> Optional[Associacao]:
        """
        Find an associação by ID with its account loaded.

        Rows already in the session are refreshed from the database.

        Args:
            db: Async database session
            id: Associação ID

        Returns:
            Associacao found or None if doesn't exist

        Raises:
            DatabaseOperationException: In case of database error
        """
        try:
            query = (
                select(Associacao)
                .where(Associacao.id == id)
                .execution_options(populate_existing=True)
            )
            result = await db.execute(query)
            return result.unique().scalar_one_or_none()
        except SQLAlchemyError as e:
            self._storage_error("fetching", e)

    async def get_by_user_id(self, db: AsyncSession, user_id: UUID) -> Optional[Associacao]:
        return await self.get_by_field(db, "user_id", user_id)

    async def list_with_user(self, db: AsyncSession) -> List[Associacao]:
        return await self.get_multi(db)

    async def ensure_cnpj_available(self, db: AsyncSession, cnpj: str) -> None:
        """
        Reject a CNPJ already registered.

        Raises:
            ResourceAlreadyExistsException: If the CNPJ is taken
        """
        if await self.exists(db, cnpj=cnpj):
            self.logger.warning(f"Attempt to register existing CNPJ: {cnpj}")
            raise ResourceAlreadyExistsException(
                detail="Já existe uma associacão com o CNPJ cadastrado."
            )

    async def create_for_user(self, db: AsyncSession, *, data: Dict[str, Any], user_id: UUID) -> Associacao:
        return await self.create(db, obj_in={**data, "user_id": user_id})


associacao_repository = AsyncAssociacaoCRUD(Associacao)
