# app/adapters/outbound/persistence/repositories/role_repository.py (async version)

from typing import Any, Dict
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from app.adapters.outbound.persistence.models import Role
from app.application.ports.outbound import IRoleRepository


class AsyncRoleCRUD(AsyncCRUDBase[Role, Dict[str, Any], Dict[str, Any]], IRoleRepository):
    """Role storage used when provisioning creates a missing role."""

    async def create_role(self, db: AsyncSession, *, name: str, description: str,
                          is_active: bool = True) -> Role:
        """
        Create a role.

        Raises:
            ResourceAlreadyExistsException: If a role with the same name was created concurrently
            DatabaseOperationException: In case of database error
        """
        return await self.create(
            db,
            obj_in={"name": name, "description": description, "is_active": is_active},
        )


role_repository = AsyncRoleCRUD(Role)
