# app/application/ports/inbound.py

from abc import ABC, abstractmethod
from typing import Any, List
from uuid import UUID

from app.application.dtos.associacao_dto import AssociacaoCreate, AssociacaoUpdate, AssociacaoCreatedOutput
from app.application.dtos.catador_dto import CatadorCreate, CatadorUpdate, CatadorCreatedOutput


class IAssociacaoUseCase(ABC):
    """Interface for associação use cases."""

    @abstractmethod
    async def create_associacao(self, data: AssociacaoCreate) -> AssociacaoCreatedOutput:
        """Provision an associação together with its account."""
        pass

    @abstractmethod
    async def list_associacoes(self) -> List[Any]:
        """List every associação with its account."""
        pass

    @abstractmethod
    async def get_associacao(self, associacao_id: int) -> Any:
        """Get an associação by ID."""
        pass

    @abstractmethod
    async def get_associacao_by_user_id(self, user_id: UUID) -> Any:
        """Get the associação owned by an account."""
        pass

    @abstractmethod
    async def update_associacao(self, associacao_id: int, data: AssociacaoUpdate) -> Any:
        """Partially update an associação and its account."""
        pass

    @abstractmethod
    async def disable_associacao(self, associacao_id: int) -> Any:
        """Deactivate the account that owns an associação."""
        pass

    @abstractmethod
    async def delete_associacao(self, associacao_id: int) -> None:
        """Delete an associação and then its account."""
        pass

    @abstractmethod
    async def get_associated_catadores_by_user(self, user_id: UUID) -> List[Any]:
        """List the catadores of the associação owned by an account."""
        pass


class ICatadorUseCase(ABC):
    """Interface for catador use cases."""

    @abstractmethod
    async def create_catador(self, data: CatadorCreate) -> CatadorCreatedOutput:
        """Provision a catador together with its account."""
        pass

    @abstractmethod
    async def list_catadores(self) -> List[Any]:
        """List every catador with its relations."""
        pass

    @abstractmethod
    async def get_catador(self, catador_id: int) -> Any:
        """Get a catador by ID."""
        pass

    @abstractmethod
    async def update_catador(self, catador_id: int, data: CatadorUpdate) -> Any:
        """Partially update a catador and its account."""
        pass

    @abstractmethod
    async def delete_catador(self, catador_id: int) -> None:
        """Delete a catador and then its account."""
        pass
