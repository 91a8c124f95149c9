from typing import List
from sqlalchemy import select, desc
from sqlalchemy.ext.asyncio import AsyncSession

from signup_backend.models.signup import Signup
from signup_backend.repositories.base import BaseRepository


class SignupRepository(BaseRepository[Signup]):
    """Repository for Signup model operations."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, Signup)

    async def create_signup(self, first_name: str, last_name: str, email: str) -> Signup:
        """Insert a signup. Raises IntegrityError when the email already exists."""
        return await self.create(
            {"first_name": first_name, "last_name": last_name, "email": email}
        )

    async def list_newest_first(self) -> List[Signup]:
        """All signups, newest first. Equal timestamps fall back to id, highest first."""
        result = await self.db.execute(
            select(Signup).order_by(desc(Signup.created_at), desc(Signup.id))
        )
        return list(result.scalars().all())
