# app/adapters/outbound/persistence/uow.py
# Unit of Work assíncrono para SQLAlchemy

from __future__ import annotations

import logging

from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class AsyncUnitOfWork:
    """
    Agrupa várias operações de repositório em uma única transação.

    Os repositórios apenas fazem `flush`; o commit acontece uma vez aqui.
    Se o bloco terminar com exceção, ou sem commit explícito, tudo é desfeito.
    """

    def __init__(self, db_session: AsyncSession) -> None:
        self.db = db_session
        self._committed = False  # mantemos só para o __aexit__

    async def commit(self) -> None:
        await self.db.commit()
        self._committed = True

    async def rollback(self) -> None:
        await self.db.rollback()
        self._committed = True

    async def __aenter__(self) -> AsyncUnitOfWork:
        self._committed = False
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if exc or not self._committed:
            if exc:
                logger.debug(f"Rolling back unit of work after {type(exc).__name__}")
            await self.db.rollback()
