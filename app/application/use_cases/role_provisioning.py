# app/application/use_cases/role_provisioning.py (async version)

"""
Ensure-or-create of the roles required by a provisioning workflow.
"""

import logging
from typing import List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.outbound.persistence.repositories.user_repository import user_repository
from app.adapters.outbound.persistence.repositories.role_repository import role_repository
from app.application.ports.outbound import IAccountRepository, IRoleRepository
from app.domain.exceptions import (
    DependencyProvisioningException,
    ResourceAlreadyExistsException,
)
from app.domain.models.role_domain_model import EntityRole

# Configure logger
logger = logging.getLogger(__name__)


def role_description(name: str) -> str:
    try:
        return EntityRole(name).description
    except ValueError:
        return f"Usuário {name}"


class RoleProvisioningService:
    """
    Resolves role names to ids, creating the roles that do not exist yet.

    Only a NOT_FOUND lookup leads to creation. Every missing role is created
    once per call with the fixed description and active status, and the new
    id is used directly without a second lookup.
    """

    def __init__(
            self,
            db_session: AsyncSession,
            accounts: Optional[IAccountRepository] = None,
            roles: Optional[IRoleRepository] = None,
    ):
        self.db = db_session
        self.accounts = accounts or user_repository
        self.roles = roles or role_repository

    async def ensure_roles(self, names: Sequence[str]) -> List[int]:
        """
        Return the ids of the given roles, creating the missing ones.

        Args:
            names: Role names required by the workflow

        Returns:
            Role ids, one per distinct name

        Raises:
            ResourceAlreadyExistsException: If a concurrent request created the same role first
            DependencyProvisioningException: If the lookup or the creation fails for any other reason
        """
        try:
            lookup = await self.accounts.resolve_role_ids_by_name(self.db, names)
        except Exception as e:
            logger.exception(f"Error resolving roles {list(names)}: {str(e)}")
            raise DependencyProvisioningException(
                detail="Erro ao consultar perfis.",
                original_error=e
            )

        if lookup.is_found:
            return lookup.ids()

        role_ids = lookup.ids()
        for name in lookup.missing_names:
            try:
                role = await self.roles.create_role(
                    self.db,
                    name=name,
                    description=role_description(name),
                    is_active=True,
                )
            except ResourceAlreadyExistsException:
                logger.warning(f"Role '{name}' was created concurrently")
                raise
            except Exception as e:
                logger.exception(f"Error creating role '{name}': {str(e)}")
                raise DependencyProvisioningException(
                    detail="Erro ao criar perfil.",
                    original_error=e
                )

            logger.info(f"Role created: {name} (ID: {role.id})")
            role_ids.append(role.id)

        return role_ids

    async def ensure_entity_role(self, role: EntityRole) -> List[int]:
        return await self.ensure_roles([role.value])
