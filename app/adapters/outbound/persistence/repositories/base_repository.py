# app/adapters/outbound/persistence/repositories/base_repository.py (async version)

from typing import Any, Dict, Generic, List, NoReturn, Optional, Type, TypeVar, Union
from fastapi.encoders import jsonable_encoder
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from sqlalchemy.future import select
from sqlalchemy.sql import Select
import logging

from app.adapters.outbound.persistence.models.base_model import Base
from app.domain.exceptions import (
    ResourceNotFoundException,
    ResourceAlreadyExistsException,
    DatabaseOperationException
)

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType")
UpdateSchemaType = TypeVar("UpdateSchemaType")

logger = logging.getLogger(__name__)


def is_unique_violation(error: IntegrityError) -> bool:
    """Tell whether an IntegrityError comes from a unique constraint."""
    error_msg = str(error).lower()
    return "unique" in error_msg or "duplicate" in error_msg


class AsyncCRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    Generic async repository over one SQLAlchemy model.

    Write operations only flush: the surrounding unit of work owns the
    transaction and decides when to commit or roll back. Every storage
    failure is raised as DatabaseOperationException with the driver error
    attached, so an outage is never mistaken for a missing row.

    Attributes:
        model: SQLAlchemy model class
        logger: Logger named after the model
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model
        self.logger = logging.getLogger(f"{__name__}.{model.__name__}")

    @property
    def name(self) -> str:
        return self.model.__name__

    def _storage_error(self, action: str, e: SQLAlchemyError) -> NoReturn:
        self.logger.error(f"Error {action} {self.name}: {str(e)}")
        raise DatabaseOperationException(
            detail=f"Error {action} {self.name}",
            original_error=e
        )

    def _integrity_error(self, action: str, e: IntegrityError) -> NoReturn:
        if is_unique_violation(e):
            self.logger.warning(f"Uniqueness violation {action} {self.name}: {str(e)}")
            raise ResourceAlreadyExistsException(
                detail=f"{self.name} with these data already exists"
            )
        self._storage_error(action, e)

    def _filtered(self, query: Select, filters: Dict[str, Any]) -> Select:
        # Unknown columns and None values are ignored
        for field, value in filters.items():
            if value is not None and hasattr(self.model, field):
                query = query.where(getattr(self.model, field) == value)
        return query

    async def get(self, db: AsyncSession, id: Any) -> Optional[ModelType]:
        """Get an entity by ID, or None."""
        return await self.get_by_field(db, "id", id)

    async def get_by_field(self, db: AsyncSession, field_name: str, value: Any) -> Optional[ModelType]:
        """
        Get the entity whose column `field_name` equals `value`.

        Args:
            db: Async database session
            field_name: Column to filter on
            value: Value to compare

        Returns:
            Entity found or None if it doesn't exist

        Raises:
            DatabaseOperationException: If the query fails
        """
        try:
            result = await db.execute(
                select(self.model).where(getattr(self.model, field_name) == value)
            )
            return result.unique().scalar_one_or_none()
        except SQLAlchemyError as e:
            self._storage_error(f"fetching by {field_name}", e)

    async def exists(self, db: AsyncSession, **filters) -> bool:
        """
        Check whether a row matches the equality filters.

        Raises:
            DatabaseOperationException: If the query fails
        """
        try:
            query = self._filtered(select(self.model.id), filters)
            result = await db.execute(select(query.exists()))
            return bool(result.scalar())
        except SQLAlchemyError as e:
            self._storage_error("checking existence of", e)

    async def get_multi(self, db: AsyncSession, **filters) -> List[ModelType]:
        """
        Every entity matching the equality filters, ordered by ID.

        There is no pagination.
        """
        try:
            query = self._filtered(select(self.model), filters).order_by(self.model.id)
            result = await db.execute(query)
            return list(result.unique().scalars().all())
        except SQLAlchemyError as e:
            self._storage_error("listing", e)

    async def create(self, db: AsyncSession, *, obj_in: Union[CreateSchemaType, Dict[str, Any]]) -> ModelType:
        """
        Add a new entity and flush it to obtain its ID.

        Args:
            db: Async database session
            obj_in: Creation schema or dictionary with entity data

        Returns:
            Newly created entity

        Raises:
            ResourceAlreadyExistsException: If a unique constraint is violated
            DatabaseOperationException: If another database error occurs
        """
        data = obj_in if isinstance(obj_in, dict) else jsonable_encoder(obj_in)
        db_obj = self.model(**data)
        try:
            db.add(db_obj)
            await db.flush()
        except IntegrityError as e:
            self._integrity_error("creating", e)
        except SQLAlchemyError as e:
            self._storage_error("creating", e)

        self.logger.info(f"{self.name} created with ID: {db_obj.id}")
        return db_obj

    async def update(
            self, db: AsyncSession, *, db_obj: ModelType, obj_in: Union[UpdateSchemaType, Dict[str, Any]]
    ) -> ModelType:
        """
        Apply the given attributes to a loaded entity and flush.

        A schema contributes only the fields that were explicitly set.

        Raises:
            ResourceAlreadyExistsException: If a unique constraint is violated
            DatabaseOperationException: If another database error occurs
        """
        data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump(exclude_unset=True)
        for field, value in data.items():
            if hasattr(self.model, field):
                setattr(db_obj, field, value)
        try:
            await db.flush()
        except IntegrityError as e:
            self._integrity_error("updating", e)
        except SQLAlchemyError as e:
            self._storage_error("updating", e)

        self.logger.info(f"{self.name} with ID {db_obj.id} updated")
        return db_obj

    async def remove(self, db: AsyncSession, *, id: Any) -> ModelType:
        """
        Remove an entity by ID.

        Raises:
            ResourceNotFoundException: If the entity doesn't exist
            DatabaseOperationException: If the removal fails
        """
        obj = await self.get(db, id)
        if not obj:
            raise ResourceNotFoundException(
                detail=f"{self.name} not found",
                resource_id=id
            )
        return await self.remove_obj(db, db_obj=obj)

    async def remove_obj(self, db: AsyncSession, *, db_obj: ModelType) -> ModelType:
        """
        Remove an already loaded entity.

        A row still referenced by a foreign key fails here, inside the
        caller's transaction.
        """
        try:
            await db.delete(db_obj)
            await db.flush()
        except IntegrityError as e:
            self.logger.error(f"{self.name} {db_obj.id} is still referenced: {str(e)}")
            raise DatabaseOperationException(
                detail=f"Cannot remove {self.name} as it is being used by other entities",
                original_error=e
            )
        except SQLAlchemyError as e:
            self._storage_error("removing", e)

        self.logger.info(f"{self.name} with ID {db_obj.id} removed")
        return db_obj
