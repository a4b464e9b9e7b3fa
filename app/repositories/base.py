"""Base repository for database operations."""

from collections.abc import Mapping
from typing import Any
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.engine import Result
from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Executable
from sqlmodel import SQLModel

from app.errors.database import DatabaseConnectionError, DatabaseError

CONNECTION_ERRORS = (OperationalError, InterfaceError, OSError)


def wrap_database_error(exc: Exception, action: str) -> DatabaseError:
    """
    Translate a driver or SQLAlchemy failure into an application error.

    Args:
        exc: The original exception.
        action: Short description of what was being attempted.

    Returns:
        DatabaseError: ``DatabaseConnectionError`` for connectivity problems,
        ``DatabaseError`` otherwise.
    """
    if isinstance(exc, CONNECTION_ERRORS) or (
        isinstance(exc, DBAPIError) and exc.connection_invalidated
    ):
        return DatabaseConnectionError(detail=f"Failed to {action}: {exc}")
    return DatabaseError(detail=f"Failed to {action}: {exc}")


class BaseRepository[ModelT: SQLModel, CreateSchemaT: BaseModel, UpdateSchemaT: BaseModel]:
    """
    Base repository implementing common CRUD operations.

    Every write is committed before the method returns, so callers can rely
    on the row being durable once they get the result back.

    Attributes:
        model: The SQLModel database model type.
        id_field: The name of the primary key field (default: "id").
    """

    model: type[ModelT]
    id_field: str = "id"

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def _execute(self, statement: Executable, action: str) -> Result[Any]:
        try:
            return await self.session.execute(statement)
        except (SQLAlchemyError, OSError) as e:
            raise wrap_database_error(e, action) from e

    async def create(self, schema: CreateSchemaT, **extra: Any) -> ModelT:  # noqa: ANN401
        """
        Create a new record in the database.

        Args:
            schema: Creation schema with data
            **extra: Column values not carried by the schema

        Returns:
            ModelT: Created database model
        """
        data = {**schema.model_dump(exclude_unset=True), **extra}
        db_obj = self.model.model_validate(data)
        return await self._add_and_refresh(db_obj)

    async def get_by_id(self, record_id: UUID) -> ModelT | None:
        """
        Get a record by its ID.

        Args:
            record_id: Record UUID

        Returns:
            ModelT | None: Record if found, None otherwise
        """
        id_column = getattr(self.model, self.id_field)
        statement = select(self.model).where(id_column == record_id)
        result = await self._execute(statement, f"load {self.model.__name__}")
        return result.scalar_one_or_none()

    async def get_all(
        self,
        skip: int = 0,
        limit: int = 10,
    ) -> list[ModelT]:
        """
        Get all records with pagination.

        Args:
            skip: Number of records to skip
            limit: Maximum number of records to return

        Returns:
            list[ModelT]: List of records
        """
        statement = select(self.model).offset(skip).limit(limit)
        result = await self._execute(statement, f"list {self.model.__name__}")
        return list(result.scalars().all())

    async def update(
        self,
        record_id: UUID,
        schema: UpdateSchemaT,
        **extra: Any,  # noqa: ANN401
    ) -> ModelT | None:
        """
        Update a record with the fields set on the schema.

        Args:
            record_id: Record UUID
            schema: Update schema with fields to update
            **extra: Column values not carried by the schema

        Returns:
            ModelT | None: Updated record if found, None otherwise
        """
        db_obj = await self.get_by_id(record_id)
        if not db_obj:
            return None

        changes: Mapping[str, Any] = {
            **{k: v for k, v in schema.model_dump(exclude_unset=True).items() if v is not None},
            **extra,
        }
        for key, value in changes.items():
            setattr(db_obj, key, value)

        return await self._add_and_refresh(db_obj)

    async def delete(self, record_id: UUID) -> bool:
        """
        Delete a record by ID.

        Args:
            record_id: Record UUID

        Returns:
            bool: True if record was deleted, False if not found
        """
        record = await self.get_by_id(record_id)
        if not record:
            return False

        try:
            await self.session.delete(record)
            await self.session.commit()
        except (SQLAlchemyError, OSError) as e:
            await self.session.rollback()
            raise wrap_database_error(e, f"delete {self.model.__name__}") from e
        return True

    async def count(self) -> int:
        """
        Count total records.

        Returns:
            int: Total number of records
        """
        statement = select(func.count()).select_from(self.model)
        result = await self._execute(statement, f"count {self.model.__name__}")
        return result.scalar() or 0

    async def _add_and_refresh(self, record: ModelT) -> ModelT:
        """
        Add a record, commit, and refresh it from the database.

        Args:
            record: Record to add

        Returns:
            ModelT: Refreshed record

        Raises:
            DatabaseConnectionError: If the database is unreachable
            DatabaseError: For other database errors
        """
        try:
            self.session.add(record)
            await self.session.commit()
            await self.session.refresh(record)
        except (SQLAlchemyError, OSError) as e:
            await self.session.rollback()
            raise wrap_database_error(e, f"save {self.model.__name__}") from e
        return record
