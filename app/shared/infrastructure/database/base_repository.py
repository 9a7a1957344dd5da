# 📄 File: app/shared/infrastructure/database/base_repository.py
#
# 🧭 Purpose (Layman Explanation):
# One shared helper that knows how to find, save, list and delete any kind of record,
# so each part of the menu service doesn't have to re-write the same database steps.
#
# 🧪 Purpose (Technical Summary):
# Generic async SQLAlchemy repository: lookup by id, paginated/sorted/searched listing,
# counting, and commit with IntegrityError -> DuplicateResourceError translation.
#
# 🔗 Dependencies:
# - sqlalchemy (select, func, exceptions)
# - app.shared.utils.query (QueryParams, search_clause, apply_sorting)
# - app.shared.core.exceptions (NotFoundError, DuplicateResourceError, DatabaseError)
#
# 🔄 Connected Modules / Calls From:
# - Every module's domain service (one repository per entity)

"""
Base Repository

Models plug into the repository through three class attributes:

- ``SEARCH_FIELDS``: attribute names OR-ed together for the ``search`` filter
- ``SORT_FIELDS``: public field name -> attribute name accepted by ``sort``
- ``to_dict()``: the public representation handed to populate and the envelope
"""

import logging
from typing import Any, Generic, Iterable, List, Mapping, Optional, Tuple, Type, TypeVar
from uuid import UUID

from sqlalchemy import and_, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.elements import ColumnElement

from app.shared.core.exceptions import DatabaseError, DuplicateResourceError, NotFoundError
from app.shared.utils.query import QueryParams, apply_sorting, search_clause

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class BaseRepository(Generic[ModelT]):
    """
    Generic CRUD repository bound to one model and one session.
    """

    def __init__(self, session: AsyncSession, model: Type[ModelT], resource_name: str):
        self._session = session
        self.model = model
        self.resource_name = resource_name

    @property
    def session(self) -> AsyncSession:
        return self._session

    # =========================================================================
    # READS
    # =========================================================================

    async def get_by_id(self, entity_id: UUID) -> Optional[ModelT]:
        return await self._session.get(self.model, entity_id)

    async def get_or_404(self, entity_id: UUID, message: Optional[str] = None) -> ModelT:
        """
        Load an entity or raise.

        Raises:
            NotFoundError: If no record has this id
        """
        instance = await self.get_by_id(entity_id)
        if instance is None:
            raise NotFoundError(
                message=message or f"{self.resource_name} not found",
                resource_type=self.resource_name.lower(),
                resource_id=str(entity_id),
            )
        return instance

    async def find_one(self, *conditions: ColumnElement) -> Optional[ModelT]:
        stmt = select(self.model).where(and_(*conditions)).limit(1)
        result = await self._session.execute(stmt)
        return result.scalars().first()

    async def find_all(self, *conditions: ColumnElement) -> List[ModelT]:
        stmt = select(self.model)
        if conditions:
            stmt = stmt.where(and_(*conditions))
        result = await self._session.execute(stmt)
        return list(result.scalars().all())

    async def count(self, *conditions: ColumnElement) -> int:
        stmt = select(func.count()).select_from(self.model)
        if conditions:
            stmt = stmt.where(and_(*conditions))
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    async def paginate(
        self,
        params: QueryParams,
        filters: Iterable[ColumnElement] = (),
    ) -> Tuple[List[ModelT], int]:
        """
        List one page of records.

        Args:
            params: Normalized page/limit/sort/order/search options
            filters: Equality filters combined with the search OR-group

        Returns:
            Tuple of (page of records, total matching the same filters)
        """
        conditions = list(filters)
        search_columns = [getattr(self.model, name) for name in getattr(self.model, "SEARCH_FIELDS", ())]
        clause = search_clause(search_columns, params.search)
        if clause is not None:
            conditions.append(clause)

        total = await self.count(*conditions)

        stmt = select(self.model)
        if conditions:
            stmt = stmt.where(and_(*conditions))
        stmt = apply_sorting(stmt, self.sort_fields, params, tiebreaker=self.model.id)
        stmt = stmt.offset(params.skip).limit(params.limit)

        result = await self._session.execute(stmt)
        return list(result.scalars().all()), total

    @property
    def sort_fields(self) -> Mapping[str, Any]:
        return {
            public: getattr(self.model, attribute)
            for public, attribute in self.model.SORT_FIELDS.items()
        }

    # =========================================================================
    # WRITES
    # =========================================================================

    def add(self, instance: ModelT) -> ModelT:
        self._session.add(instance)
        return instance

    async def delete(self, instance: ModelT) -> None:
        await self._session.delete(instance)

    async def commit(self, conflict_message: Optional[str] = None) -> None:
        """
        Commit the unit of work.

        A unique-index violation becomes a 409 so concurrent identical writes that
        both passed the pre-check still end in exactly one success.

        Raises:
            DuplicateResourceError: On a uniqueness violation
            DatabaseError: On any other store failure
        """
        try:
            await self._session.commit()
        except IntegrityError as e:
            await self._session.rollback()
            logger.warning(f"{self.resource_name} write rejected by store constraint: {e.orig}")
            raise DuplicateResourceError(
                message=conflict_message or f"{self.resource_name} already exists",
                resource_type=self.resource_name.lower(),
            ) from e
        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.error(f"Database error while saving {self.resource_name}: {e}", exc_info=True)
            raise DatabaseError(
                message=f"Failed to save {self.resource_name}",
                operation="commit",
            ) from e

    async def refresh(self, instance: ModelT) -> ModelT:
        await self._session.refresh(instance)
        return instance
