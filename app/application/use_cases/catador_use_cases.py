# app/application/use_cases/catador_use_cases.py (async version)

"""
Service for catador management.

Provisioning creates the account, attaches the catador role and creates the
record in a single unit of work, then sends the login password by email
without waiting for the delivery.
"""

from typing import List, Optional
import logging
from sqlalchemy.ext.asyncio import AsyncSession

from app.adapters.configuration.config import settings
from app.adapters.outbound.notification.dispatcher import NotificationDispatcher
from app.adapters.outbound.persistence.models import Catador
from app.adapters.outbound.persistence.repositories.user_repository import user_repository
from app.adapters.outbound.persistence.repositories.associacao_repository import associacao_repository
from app.adapters.outbound.persistence.repositories.catador_repository import catador_repository
from app.adapters.outbound.persistence.repositories.lookup_repository import (
    etnia_repository,
    genero_repository,
)
from app.adapters.outbound.persistence.uow import AsyncUnitOfWork
from app.adapters.outbound.security.password_generator import password_generator as default_password_generator
from app.application.dtos.catador_dto import CatadorCreate, CatadorUpdate, CatadorCreatedOutput
from app.application.ports.inbound import ICatadorUseCase
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

WELCOME_SUBJECT = "Conta criada com sucesso"
WELCOME_BODY = (
    "Conta criada com sucesso! Sua senha para login é {password}. "
    "Para trocar de senha, faça login na plataforma, vá em perfil e troque sua senha!"
)


class AsyncCatadorService(ICatadorUseCase):
    """
    Service for catador management.
    """

    def __init__(
            self,
            db_session: AsyncSession,
            notifier: Optional[NotificationDispatcher] = None,
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
            notifier: Dispatcher for the welcome email (application instance if omitted)
        """
        if notifier is None:
            from app.adapters.outbound.notification.email_notifier import notification_dispatcher
            notifier = notification_dispatcher

        self.db = db_session
        self.notifier = notifier
        self.accounts = accounts or user_repository
        self.associacoes = associacoes or associacao_repository
        self.catadores = catadores or catador_repository
        self.role_provisioning = role_provisioning or RoleProvisioningService(db_session, accounts=self.accounts)
        self.password_generator = password_generator or default_password_generator

    async def _get_catador(self, catador_id: int) -> Catador:
        """
        Get a catador by ID or raise an exception if it doesn't exist.

        Raises:
            ResourceNotFoundException: If the catador is not found
            DatabaseOperationException: If the lookup itself fails
        """
        catador = await self.catadores.get_with_relations(self.db, catador_id)
        if not catador:
            logger.warning(f"Catador not found: ID {catador_id}")
            raise ResourceNotFoundException(
                detail="Catador não encontrado.",
                resource_id=catador_id
            )
        return catador

    async def _ensure_associacao_exists(self, associacao_id: int) -> None:
        if not await self.associacoes.exists(self.db, id=associacao_id):
            logger.warning(f"Catador references missing associacao {associacao_id}")
            raise ResourceNotFoundException(
                detail="Associação não encontrada.",
                resource_id=associacao_id
            )

    async def _ensure_lookups_exist(self, etnia_id: Optional[int], genero_id: Optional[int]) -> None:
        if etnia_id is not None and not await etnia_repository.exists(self.db, id=etnia_id):
            raise ResourceNotFoundException(detail="Etnia não encontrada.", resource_id=etnia_id)
        if genero_id is not None and not await genero_repository.exists(self.db, id=genero_id):
            raise ResourceNotFoundException(detail="Gênero não encontrado.", resource_id=genero_id)

    async def create_catador(self, data: CatadorCreate) -> CatadorCreatedOutput:
        """
        Provision a catador with its account.

        The welcome email carrying the plaintext password is scheduled only
        after the commit; its outcome does not affect the result.

        Args:
            data: Catador fields and the account to create

        Returns:
            The catador with its relations, including the assigned password

        Raises:
            ResourceNotFoundException: If the associação, etnia or gênero does not exist
            ResourceAlreadyExistsException: If the CPF or the email is already registered
            DependencyProvisioningException: If the role could not be resolved or created
            DatabaseOperationException: If there's an error in the process
        """
        async with AsyncUnitOfWork(self.db) as uow:
            try:
                # Caller-supplied roles are discarded
                role_ids = await self.role_provisioning.ensure_entity_role(EntityRole.CATADOR)

                password = data.user.password or self.password_generator.generate(
                    settings.GENERATED_PASSWORD_LENGTH
                )

                await self._ensure_associacao_exists(data.associacao_id)
                await self.catadores.ensure_cpf_available(self.db, data.cpf)
                await self._ensure_lookups_exist(data.etnia_id, data.genero_id)
                await self.accounts.ensure_email_available(self.db, data.user.email)

                account = await self.accounts.create_account(
                    self.db,
                    email=data.user.email,
                    password=password,
                    name=data.user.name,
                )
                await self.accounts.add_roles(self.db, account=account, role_ids=role_ids)

                record = await self.catadores.create_for_user(
                    self.db,
                    data=data.dict(exclude={"user"}),
                    user_id=account.id,
                )
                await uow.commit()

            except DomainException:
                # Pass through already formatted exceptions
                raise

            except Exception as e:
                logger.exception(f"Error creating catador: {str(e)}")
                raise DatabaseOperationException(
                    detail="Ocorreu um erro ao criar catador",
                    original_error=e
                )

        catador = await self.catadores.get_with_relations(self.db, record.id)
        if not catador:
            logger.error(f"Catador {record.id} missing right after creation")
            raise DatabaseOperationException(detail="Ocorreu um erro ao criar catador")

        self.notifier.dispatch(
            catador.user.email,
            WELCOME_SUBJECT,
            WELCOME_BODY.format(password=password),
        )

        logger.info(f"Catador created: ID {catador.id}")
        return CatadorCreatedOutput.from_record(catador, password)

    async def list_catadores(self) -> List[Catador]:
        return await self.catadores.list_with_relations(self.db)

    async def get_catador(self, catador_id: int) -> Catador:
        return await self._get_catador(catador_id)

    async def update_catador(self, catador_id: int, data: CatadorUpdate) -> Catador:
        """
        Partially update a catador and its account.

        Uniqueness is checked only for a CPF or email that actually changes;
        a new associação, etnia or gênero must exist.

        Raises:
            ResourceNotFoundException: If the catador or a referenced row is not found
            ResourceAlreadyExistsException: If the new CPF or email is already in use
            DatabaseOperationException: If there's an error in the process
        """
        async with AsyncUnitOfWork(self.db) as uow:
            try:
                catador = await self._get_catador(catador_id)

                changes = data.changes(exclude={"user"})
                account_changes = data.user.changes() if data.user else {}

                if "cpf" in changes and changes["cpf"] != catador.cpf:
                    await self.catadores.ensure_cpf_available(self.db, changes["cpf"])

                if "associacao_id" in changes and changes["associacao_id"] != catador.associacao_id:
                    await self._ensure_associacao_exists(changes["associacao_id"])

                await self._ensure_lookups_exist(changes.get("etnia_id"), changes.get("genero_id"))

                if "email" in account_changes and account_changes["email"] != catador.user.email:
                    await self.accounts.ensure_email_available(self.db, account_changes["email"])

                if account_changes:
                    await self.accounts.update_account(self.db, account=catador.user, data=account_changes)
                if changes:
                    await self.catadores.update(self.db, db_obj=catador, obj_in=changes)

                await uow.commit()

            except DomainException:
                raise

            except Exception as e:
                logger.exception(f"Error updating catador: {str(e)}")
                raise DatabaseOperationException(
                    detail="Erro ao atualizar catador.",
                    original_error=e
                )

        logger.info(f"Catador updated: ID {catador_id}")
        return await self._get_catador(catador_id)

    async def delete_catador(self, catador_id: int) -> None:
        """
        Delete a catador and then its account, committed together.

        Raises:
            ResourceNotFoundException: If the catador is not found
            CascadeDeleteException: If any step of the cascade fails
        """
        catador = await self._get_catador(catador_id)
        user_id = catador.user_id

        try:
            async with AsyncUnitOfWork(self.db) as uow:
                await self.catadores.remove_obj(self.db, db_obj=catador)
                await self.accounts.delete_account(self.db, user_id=user_id)
                await uow.commit()
        except Exception as e:
            logger.exception(f"Error deleting catador {catador_id}: {str(e)}")
            raise CascadeDeleteException(
                detail="Erro ao apagar catador.",
                original_error=e
            )

        logger.info(f"Catador deleted: ID {catador_id}")
