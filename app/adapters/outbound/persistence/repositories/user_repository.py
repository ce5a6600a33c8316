# app/adapters/outbound/persistence/repositories/user_repository.py (async version)

"""
Repository for account operations.

This module implements the account collaborator used by the provisioning
workflows: account creation with a hashed password, role resolution and
attachment, status changes and removal. Every write only flushes; the
caller's unit of work commits.
"""

from typing import Optional, Dict, Any, Sequence
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.exc import SQLAlchemyError

from app.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from app.adapters.outbound.persistence.models import User, Role
from app.adapters.outbound.security.auth_user_manager import UserAuthManager
from app.application.ports.outbound import IAccountRepository
from app.domain.models.role_domain_model import RoleLookupResult
from app.domain.exceptions import (
    ResourceNotFoundException,
    ResourceAlreadyExistsException,
)


class AsyncUserCRUD(AsyncCRUDBase[User, Dict[str, Any], Dict[str, Any]], IAccountRepository):
    """
    Account repository: the only place that hashes passwords.
    """

    async def ensure_email_available(self, db: AsyncSession, email: str) -> None:
        """
        Reject an email already used by another account.

        Raises:
            ResourceAlreadyExistsException: If the email is taken
            DatabaseOperationException: In case of database error
        """
        if await self.exists(db, email=email):
            self.logger.warning(f"Attempt to reuse existing email: {email}")
            raise ResourceAlreadyExistsException(
                detail="Já existe um usuário com o email cadastrado."
            )

    async def resolve_role_ids_by_name(self, db: AsyncSession, names: Sequence[str]) -> RoleLookupResult:
        """
        Resolve role names to role ids.

        Absence is not an error: when any name has no role record the result
        is tagged NOT_FOUND and lists the missing names.

        Args:
            db: Async database session
            names: Role names to resolve

        Returns:
            RoleLookupResult with the ids in the order of `names`

        Raises:
            DatabaseOperationException: If the lookup itself fails
        """
        wanted = list(dict.fromkeys(names))
        try:
            query = select(Role.id, Role.name).where(Role.name.in_(wanted))
            result = await db.execute(query)
            by_name = {name: role_id for role_id, name in result.all()}
        except SQLAlchemyError as e:
            self._storage_error("resolving roles for", e)

        ids = [by_name[name] for name in wanted if name in by_name]
        missing = [name for name in wanted if name not in by_name]
        if missing:
            return RoleLookupResult.not_found(ids, missing)
        return RoleLookupResult.found(ids)

    async def create_account(self, db: AsyncSession, *, email: str, password: str,
                             name: Optional[str] = None) -> User:
        """
        Create a new account storing only the password hash.

        Args:
            db: Async database session
            email: Account email
            password: Plain text password
            name: Optional display name

        Returns:
            New User, with an empty role collection

        Raises:
            ResourceAlreadyExistsException: If the email is already in use
            DatabaseOperationException: In case of database error
        """
        hashed = await UserAuthManager.hash_password(password)
        user = await self.create(
            db,
            obj_in={"email": email, "password": hashed, "name": name, "roles": []},
        )
        self.logger.info(f"User created with email: {user.email}")
        return user

    async def add_roles(self, db: AsyncSession, *, account: User, role_ids: Sequence[int]) -> User:
        """
        Attach roles to an account, skipping the ones it already has.

        Raises:
            ResourceNotFoundException: If a role id does not exist
            DatabaseOperationException: In case of database error
        """
        try:
            result = await db.execute(select(Role).where(Role.id.in_(list(role_ids))))
            roles = {role.id: role for role in result.scalars().all()}
        except SQLAlchemyError as e:
            self._storage_error("loading roles for", e)

        missing = [role_id for role_id in role_ids if role_id not in roles]
        if missing:
            raise ResourceNotFoundException(detail="Perfil não encontrado", resource_id=missing[0])

        current = {role.id for role in account.roles}
        for role_id in role_ids:
            if role_id not in current:
                account.roles.append(roles[role_id])
                current.add(role_id)

        try:
            await db.flush()
        except SQLAlchemyError as e:
            self._storage_error("attaching roles to", e)
        return account

    async def update_account(self, db: AsyncSession, *, account: User, data: Dict[str, Any]) -> User:
        """
        Update account fields (email, password, name).

        A non-empty password is re-hashed; an empty one is ignored.

        Raises:
            ResourceAlreadyExistsException: If the new email is already in use
            DatabaseOperationException: In case of database error
        """
        update_data = {k: v for k, v in data.items() if k in ("email", "password", "name")}

        if update_data.get("password"):
            update_data["password"] = await UserAuthManager.hash_password(update_data["password"])
        else:
            update_data.pop("password", None)

        if not update_data:
            return account
        return await self.update(db, db_obj=account, obj_in=update_data)

    async def set_active(self, db: AsyncSession, *, user_id: UUID, is_active: bool) -> User:
        """
        Activate or deactivate an account.

        Raises:
            ResourceNotFoundException: If the account is not found
            DatabaseOperationException: In case of database error
        """
        user = await self.get(db, id=user_id)
        if not user:
            raise ResourceNotFoundException(
                detail="Usuário não encontrado",
                resource_id=user_id
            )

        user = await self.update(db, db_obj=user, obj_in={"is_active": is_active})
        status_text = "activated" if is_active else "deactivated"
        self.logger.info(f"User {user.id} {status_text}")
        return user

    async def delete_account(self, db: AsyncSession, *, user_id: UUID) -> None:
        """
        Delete an account by ID.

        Raises:
            ResourceNotFoundException: If the account is not found
            DatabaseOperationException: In case of database error
        """
        await self.remove(db, id=user_id)


# Public instance to be used by use cases
user_repository = AsyncUserCRUD(User)
