# app/application/ports/outbound.py

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.models.role_domain_model import RoleLookupResult


class IAccountRepository(ABC):
    """Account (user) repository interface."""

    @abstractmethod
    async def ensure_email_available(self, db: AsyncSession, email: str) -> None:
        """Raise a conflict if an account already uses the email."""
        pass

    @abstractmethod
    async def resolve_role_ids_by_name(self, db: AsyncSession, names: Sequence[str]) -> RoleLookupResult:
        """Resolve role names to ids; absence is reported, never raised."""
        pass

    @abstractmethod
    async def create_account(self, db: AsyncSession, *, email: str, password: str,
                             name: Optional[str] = None) -> Any:
        """Create an account with a hashed password."""
        pass

    @abstractmethod
    async def add_roles(self, db: AsyncSession, *, account: Any, role_ids: Sequence[int]) -> Any:
        """Attach roles to an account."""
        pass

    @abstractmethod
    async def update_account(self, db: AsyncSession, *, account: Any, data: Dict[str, Any]) -> Any:
        """Update account fields, re-hashing the password when present."""
        pass

    @abstractmethod
    async def set_active(self, db: AsyncSession, *, user_id: UUID, is_active: bool) -> Any:
        """Activate or deactivate an account."""
        pass

    @abstractmethod
    async def delete_account(self, db: AsyncSession, *, user_id: UUID) -> None:
        """Delete an account."""
        pass


class IRoleRepository(ABC):
    """Role repository interface."""

    @abstractmethod
    async def create_role(self, db: AsyncSession, *, name: str, description: str,
                          is_active: bool = True) -> Any:
        """Create a role and return it with its id."""
        pass


class IRecordRepository(ABC):
    """Operations shared by the domain record stores."""

    @abstractmethod
    async def exists(self, db: AsyncSession, **filters) -> bool:
        """Check if a record matches the filters."""
        pass

    @abstractmethod
    async def update(self, db: AsyncSession, *, db_obj: Any, obj_in: Dict[str, Any]) -> Any:
        """Apply field changes to a loaded record."""
        pass

    @abstractmethod
    async def remove_obj(self, db: AsyncSession, *, db_obj: Any) -> Any:
        """Delete a loaded record."""
        pass


class IAssociacaoRepository(IRecordRepository):
    """Associação repository interface."""

    @abstractmethod
    async def get_with_user(self, db: AsyncSession, id: int) -> Optional[Any]:
        """Get associação joined with its account."""
        pass

    @abstractmethod
    async def get_by_user_id(self, db: AsyncSession, user_id: UUID) -> Optional[Any]:
        """Get the associação owned by an account."""
        pass

    @abstractmethod
    async def list_with_user(self, db: AsyncSession) -> List[Any]:
        """List associações joined with their accounts."""
        pass

    @abstractmethod
    async def ensure_cnpj_available(self, db: AsyncSession, cnpj: str) -> None:
        """Raise a conflict if the CNPJ is already registered."""
        pass

    @abstractmethod
    async def create_for_user(self, db: AsyncSession, *, data: Dict[str, Any], user_id: UUID) -> Any:
        """Create an associação linked to an account."""
        pass


class ICatadorRepository(IRecordRepository):
    """Catador repository interface."""

    @abstractmethod
    async def get_with_relations(self, db: AsyncSession, id: int) -> Optional[Any]:
        """Get catador joined with account, associação, etnia and gênero."""
        pass

    @abstractmethod
    async def list_with_relations(self, db: AsyncSession) -> List[Any]:
        """List catadores joined with their relations."""
        pass

    @abstractmethod
    async def list_by_associacao(self, db: AsyncSession, associacao_id: int) -> List[Any]:
        """List the catadores of an associação."""
        pass

    @abstractmethod
    async def ensure_cpf_available(self, db: AsyncSession, cpf: str) -> None:
        """Raise a conflict if the CPF is already registered."""
        pass

    @abstractmethod
    async def create_for_user(self, db: AsyncSession, *, data: Dict[str, Any], user_id: UUID) -> Any:
        """Create a catador linked to an account."""
        pass


class INotificationSender(ABC):
    """Outbound message transport."""

    @abstractmethod
    async def send(self, to: str, subject: str, body: str) -> None:
        """Deliver a message to a single recipient."""
        pass


class IPasswordGenerator(ABC):
    """Initial password source."""

    @abstractmethod
    def generate(self, length: int) -> str:
        """Return a random password of the given length."""
        pass
