from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession

from signup_backend.models.admin_credential import AdminCredential, SINGLETON_ID
from signup_backend.repositories.base import BaseRepository


class AdminCredentialRepository(BaseRepository[AdminCredential]):
    """Repository for the singleton admin credential row."""

    def __init__(self, db: AsyncSession):
        super().__init__(db, AdminCredential)

    async def get_singleton(self) -> Optional[AdminCredential]:
        return await self.get_by_id(SINGLETON_ID)

    async def singleton_exists(self) -> bool:
        return await self.exists(SINGLETON_ID)

    async def create_singleton(self, password_hash: str) -> AdminCredential:
        """Insert the credential row.

        A second insert violates the primary key and raises IntegrityError,
        which keeps concurrent first-time setups from both succeeding.
        """
        return await self.create({"id": SINGLETON_ID, "password_hash": password_hash})
