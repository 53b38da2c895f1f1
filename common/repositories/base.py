from contextlib import asynccontextmanager
from typing import (
    Any,
    AsyncGenerator,
    Generic,
    List,
    Optional,
    Sequence,
    Type,
    TypeVar,
)

from sqlalchemy import delete, inspect, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from pydantic import BaseModel

from common.core.otel_axiom_exporter import trace_span
from common.db.scoped import get_session

EntityType = TypeVar("EntityType")
DomainModelType = TypeVar("DomainModelType")
CreateModelType = TypeVar("CreateModelType", bound=BaseModel)
UpdateModelType = TypeVar("UpdateModelType", bound=BaseModel)


class BaseRepository(Generic[EntityType, DomainModelType]):
    """
    Base repository with support for both explicit and lazy session management.

    Two modes of operation:
    1. Explicit session: Pass db_session to constructor
       - Session is used directly, caller manages lifecycle
       - Use when the caller needs savepoints on a known session

    2. Lazy session: Don't pass db_session
       - Sessions acquired per-operation, released immediately
       - Joins an enclosing transaction() if there is one

    Identities are looked up through the mapper, so entities keep their own
    primary key names (qid, aid, dvid, ...).

    Example (explicit):
        repo = AnswerRepository(db_session)
        answers = await repo.get_by_qid(12)

    Example (lazy):
        repo = AnswerRepository()
        answers = await repo.get_by_qid(12)  # Acquires and releases session
    """

    def __init__(
        self,
        entity_class: Type[EntityType],
        domain_class: Type[DomainModelType],
        db_session: Optional[AsyncSession] = None,
    ):
        self.entity_class = entity_class
        self.domain_class = domain_class
        self.db_session = db_session
        self.primary_key = inspect(entity_class).primary_key[0]

    @asynccontextmanager
    async def _get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get a session for an operation.

        If an explicit session was provided to __init__ it is used as is.
        Otherwise get_session() acquires one per operation, respecting the
        current transaction / readonly context.
        """
        if self.db_session is not None:
            yield self.db_session
        else:
            async with get_session() as session:
                yield session

    def _column(self, name: str):
        try:
            return getattr(self.entity_class, name)
        except AttributeError:
            raise AttributeError(
                f"{self.entity_class.__name__} has no column '{name}'"
            ) from None

    def _entity_to_domain(self, entity: EntityType) -> DomainModelType:
        """Convert database entity to domain model."""
        return self.domain_class.model_validate(entity)

    def _entities_to_domain(
        self, entities: Sequence[EntityType]
    ) -> List[DomainModelType]:
        """Convert list of database entities to domain models."""
        return [self._entity_to_domain(entity) for entity in entities]

    @trace_span
    async def get(self, id: int) -> Optional[DomainModelType]:
        """Find one entity by primary key."""
        query = select(self.entity_class).where(self.primary_key == id)

        async with self._get_session() as session:
            result = await session.execute(query)
            entity = result.scalar_one_or_none()
            return self._entity_to_domain(entity) if entity else None

    @trace_span
    async def get_all_by(self, **filters: Any) -> List[DomainModelType]:
        """Find all entities whose columns equal the given values, in identity order."""
        query = select(self.entity_class)
        for name, value in filters.items():
            query = query.where(self._column(name) == value)
        query = query.order_by(self.primary_key.asc())

        async with self._get_session() as session:
            result = await session.execute(query)
            return self._entities_to_domain(result.scalars().all())

    @trace_span
    async def get_first_by(self, **filters: Any) -> Optional[DomainModelType]:
        entities = await self.get_all_by(**filters)
        return entities[0] if entities else None

    @trace_span
    async def create(self, create_model: CreateModelType) -> DomainModelType:
        """Create a new entity from a typed create model.

        The identity is assigned by the database on flush.
        """
        # mode='json' ensures enums are serialized to their values
        data = create_model.model_dump(exclude_none=True, mode="json")
        db_obj = self.entity_class(**data)
        async with self._get_session() as session:
            session.add(db_obj)
            await session.flush()
            await session.refresh(db_obj)
            return self._entity_to_domain(db_obj)

    @trace_span
    async def update(
        self, id: int, update_model: UpdateModelType
    ) -> Optional[DomainModelType]:
        """Update an entity with a typed update model."""
        data = update_model.model_dump(exclude_unset=True, mode="json")
        if not data:
            return await self.get(id)

        async with self._get_session() as session:
            await session.execute(
                update(self.entity_class).where(self.primary_key == id).values(data)
            )
            await session.flush()
        return await self.get(id)

    @trace_span
    async def delete(self, id: int) -> bool:
        async with self._get_session() as session:
            result = await session.execute(
                delete(self.entity_class).where(self.primary_key == id)
            )
            await session.flush()
            return result.rowcount > 0

    @trace_span
    async def get_ids_where_in(self, column: str, values: List[int]) -> List[int]:
        """Identities of the entities whose `column` is one of `values`."""
        if not values:
            return []

        query = select(self.primary_key).where(self._column(column).in_(values))
        async with self._get_session() as session:
            result = await session.execute(query)
            return [row[0] for row in result.fetchall()]

    @trace_span
    async def delete_where_in(self, column: str, values: List[int]) -> int:
        """Bulk delete entities whose `column` is one of `values`."""
        if not values:
            return 0

        async with self._get_session() as session:
            result = await session.execute(
                delete(self.entity_class).where(self._column(column).in_(values))
            )
            await session.flush()
            return result.rowcount
