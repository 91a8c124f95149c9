from abc import ABC
from typing import Generic, TypeVar, Type, Optional, Any, Dict
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, func

ModelType = TypeVar("ModelType")


class BaseRepository(Generic[ModelType], ABC):
    """
    Base repository class providing the read/insert operations the service needs.
    Rows are never updated or deleted through the service.
    """

    def __init__(self, db: AsyncSession, model: Type[ModelType]):
        self.db = db
        self.model = model

    async def get_by_id(self, id: int) -> Optional[ModelType]:
        """Get a single record by ID."""
        result = await self.db.execute(select(self.model).filter(self.model.id == id))
        return result.scalar_one_or_none()

    async def create(self, obj_data: Dict[str, Any]) -> ModelType:
        """Insert a new record.

        The flush sends the INSERT immediately so constraint violations
        surface here as IntegrityError rather than at commit time.
        """
        obj = self.model(**obj_data)
        self.db.add(obj)
        await self.db.flush()
        await self.db.refresh(obj)
        return obj

    async def exists(self, id: int) -> bool:
        """Check if a record exists by ID."""
        result = await self.db.execute(
            select(self.model.id).filter(self.model.id == id)
        )
        return result.scalar_one_or_none() is not None

    async def count(self) -> int:
        """Count total records."""
        result = await self.db.execute(
            select(func.count(self.model.id))
        )
        return result.scalar()
