# app/application/use_cases/associacao_use_cases.py (async version)

"""
Service for associação management.

This module implements provisioning (account + role + associação in a
single unit of work), reads, partial updates, account deactivation and
the cascading delete of an associação.
"""

from typing import List, Optional
from uuid import UUID
import logging
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.configuration.config import settings
from app.adapters.outbound.persistence.models import Associacao, Catador
from app.adapters.outbound.persistence.repositories.user_repository import user_repository
from app.adapters.outbound.persistence.repositories.associacao_repository import associacao_repository
from app.adapters.outbound.persistence.repositories.catador_repository import catador_repository
from app.adapters.outbound.persistence.uow import AsyncUnitOfWork
from app.adapters.outbound.security.password_generator import password_generator as default_password_generator
from app.application.dtos.associacao_dto import AssociacaoCreate, AssociacaoUpdate, AssociacaoCreatedOutput
from app.application.ports.inbound import IAssociacaoUseCase
from app.application.ports.outbound import (
    IAccountRepository,
    IAssociacaoRepository,
    ICatadorRepository,
    IPasswordGenerator,
)
from app.application.use_cases.role_provisioning import RoleProvisioningService
from app.domain.exceptions import (
    DomainException,
    ResourceNotFoundException,
    DatabaseOperationException,
    CascadeDeleteException,
)
from app.domain.models.role_domain_model import EntityRole

# Configure logger
logger = logging.getLogger(__name__)


class AsyncAssociacaoService(IAssociacaoUseCase):
    """
    Service for associação management.

    Collaborators default to the application's repositories and can be
    replaced, which the tests use to observe the workflow.
    """

    def __init__(
            self,
            db_session: AsyncSession,
            accounts: Optional[IAccountRepository] = None,
            associacoes: Optional[IAssociacaoRepository] = None,
            catadores: Optional[ICatadorRepository] = None,
            role_provisioning: Optional[RoleProvisioningService] = None,
            password_generator: Optional[IPasswordGenerator] = None,
    ):
        """
        Initialize the service with a database session.

        Args:
            db_session: Active AsyncSession
        """
        self.db = db_session
        self.accounts = accounts or user_repository
        self.associacoes = associacoes or associacao_repository
        self.catadores = catadores or catador_repository
        self.role_provisioning = role_provisioning or RoleProvisioningService(db_session, accounts=self.accounts)
        self.password_generator = password_generator or default_password_generator

    async def _get_associacao(self, associacao_id: int) -> Associacao:
        """
        Get an associação by ID or raise an exception if it doesn't exist.

        Raises:
            ResourceNotFoundException: If the associação is not found
            DatabaseOperationException: If the lookup itself fails
        """
        associacao = await self.associacoes.get_with_user(self.db, associacao_id)
        if not associacao:
            logger.warning(f"Associacao not found: ID {associacao_id}")
            raise ResourceNotFoundException(
                detail="Associação não encontrada.",
                resource_id=associacao_id
            )
        return associacao

    async def create_associacao(self, data: AssociacaoCreate) -> AssociacaoCreatedOutput:
        """
        Provision an associação with its account.

        Account creation, role attachment and the associação record are
        committed together; any failure leaves nothing behind.

        Args:
            data: Associação fields and the account to create

        Returns:
            The associação with its account, including the assigned password

        Raises:
            ResourceAlreadyExistsException: If the CNPJ or the email is already registered
            DependencyProvisioningException: If the role could not be resolved or created
            DatabaseOperationException: If there's an error in the process
        """
        async with AsyncUnitOfWork(self.db) as uow:
            try:
                # Caller-supplied roles are discarded
                role_ids = await self.role_provisioning.ensure_entity_role(EntityRole.ASSOCIACAO)

                password = data.user.password or self.password_generator.generate(
                    settings.GENERATED_PASSWORD_LENGTH
                )

                await self.associacoes.ensure_cnpj_available(self.db, data.cnpj)
                await self.accounts.ensure_email_available(self.db, data.user.email)

                account = await self.accounts.create_account(
                    self.db,
                    email=data.user.email,
                    password=password,
                    name=data.user.name,
                )
                await self.accounts.add_roles(self.db, account=account, role_ids=role_ids)

                record = await self.associacoes.create_for_user(
                    self.db,
                    data=data.dict(exclude={"user"}),
                    user_id=account.id,
                )
                await uow.commit()

            except DomainException:
                # Pass through already formatted exceptions
                raise

            except Exception as e:
                logger.exception(f"Error creating associacao: {str(e)}")
                raise DatabaseOperationException(
                    detail="Ocorreu um erro ao criar associação",
                    original_error=e
                )

        associacao = await self.associacoes.get_with_user(self.db, record.id)
        if not associacao:
            logger.error(f"Associacao {record.id} missing right after creation")
            raise DatabaseOperationException(detail="Ocorreu um erro ao criar associação")

        logger.info(f"Associacao created: {associacao.cnpj} (ID: {associacao.id})")
        return AssociacaoCreatedOutput.from_record(associacao, password)

    async def list_associacoes(self) -> List[Associacao]:
        return await self.associacoes.list_with_user(self.db)

    async def get_associacao(self, associacao_id: int) -> Associacao:
        return await self._get_associacao(associacao_id)

    async def get_associacao_by_user_id(self, user_id: UUID) -> Associacao:
        """
        Get the associação owned by an account.

        Raises:
            ResourceNotFoundException: If the account owns no associação
        """
        associacao = await self.associacoes.get_by_user_id(self.db, user_id)
        if not associacao:
            logger.warning(f"No associacao owned by user {user_id}")
            raise ResourceNotFoundException(detail="Associação não encontrada.")
        return associacao

    async def update_associacao(self, associacao_id: int, data: AssociacaoUpdate) -> Associacao:
        """
        Partially update an associação and its account.

        Uniqueness is checked only for a CNPJ or email that actually changes.

        Args:
            associacao_id: Associação ID
            data: Fields to change

        Returns:
            Updated associação with its account

        Raises:
            ResourceNotFoundException: If the associação is not found
            ResourceAlreadyExistsException: If the new CNPJ or email is already in use
            DatabaseOperationException: If there's an error in the process
        """
        async with AsyncUnitOfWork(self.db) as uow:
            try:
                associacao = await self._get_associacao(associacao_id)

                changes = data.changes(exclude={"user"})
                account_changes = data.user.changes() if data.user else {}

                if "cnpj" in changes and changes["cnpj"] != associacao.cnpj:
                    await self.associacoes.ensure_cnpj_available(self.db, changes["cnpj"])

                if "email" in account_changes and account_changes["email"] != associacao.user.email:
                    await self.accounts.ensure_email_available(self.db, account_changes["email"])

                if account_changes:
                    await self.accounts.update_account(self.db, account=associacao.user, data=account_changes)
                if changes:
                    await self.associacoes.update(self.db, db_obj=associacao, obj_in=changes)

                await uow.commit()

            except DomainException:
                raise

            except Exception as e:
                logger.exception(f"Error updating associacao: {str(e)}")
                raise DatabaseOperationException(
                    detail="Erro ao atualizar associação.",
                    original_error=e
                )

        logger.info(f"Associacao updated: ID {associacao_id}")
        return await self._get_associacao(associacao_id)

    async def disable_associacao(self, associacao_id: int) -> Associacao:
        """
        Deactivate the account that owns an associação.

        The associação record itself is not changed.

        Raises:
            ResourceNotFoundException: If the associação is not found
            DatabaseOperationException: If there's an error in the process
        """
        async with AsyncUnitOfWork(self.db) as uow:
            associacao = await self._get_associacao(associacao_id)
            await self.accounts.set_active(self.db, user_id=associacao.user_id, is_active=False)
            await uow.commit()

        logger.info(f"Associacao disabled: ID {associacao_id}")
        return await self._get_associacao(associacao_id)

    async def delete_associacao(self, associacao_id: int) -> None:
        """
        Delete an associação and then its account.

        Both deletes are committed together. An associação still referenced
        by catadores cannot be removed.

        Raises:
            ResourceNotFoundException: If the associação is not found
            CascadeDeleteException: If any step of the cascade fails
        """
        associacao = await self._get_associacao(associacao_id)
        user_id = associacao.user_id

        try:
            async with AsyncUnitOfWork(self.db) as uow:
                await self.associacoes.remove_obj(self.db, db_obj=associacao)
                await self.accounts.delete_account(self.db, user_id=user_id)
                await uow.commit()
        except Exception as e:
            logger.exception(f"Error deleting associacao {associacao_id}: {str(e)}")
            raise CascadeDeleteException(
                detail="Erro ao apagar associação.",
                original_error=e
            )

        logger.info(f"Associacao deleted: ID {associacao_id}")

    async def get_associated_catadores_by_user(self, user_id: UUID) -> List[Catador]:
        """
        List the catadores of the associação owned by an account.

        Args:
            user_id: ID of the account that owns the associação

        Returns:
            Catadores ordered by ID

        Raises:
            ResourceNotFoundException: If the account owns no associação
        """
        associacao = await self.get_associacao_by_user_id(user_id)
        return await self.catadores.list_by_associacao(self.db, associacao.id)
