from typing import Optional
import logging

from sqlalchemy.exc import IntegrityError

from signup_backend.core.config import settings
from signup_backend.core.errors import ClientInputError, ConflictError
from signup_backend.core.security import hash_password, parse_basic_credentials, verify_password
from signup_backend.repositories.unit_of_work import AbstractUnitOfWork

logger = logging.getLogger(__name__)


class AdminService:
    """Admin bootstrap and Basic-auth verification.

    The admin panel has two states. With no credential row it is
    uninitialized and serves the setup form; once the row exists it is
    active and every request must carry the password. The transition is
    one-way.
    """

    def __init__(self, uow: AbstractUnitOfWork):
        self.uow = uow

    async def is_initialized(self) -> bool:
        return await self.uow.admin_credentials.singleton_exists()

    async def setup_password(self, password: Optional[str]) -> None:
        """Store the admin password hash, once.

        Raises:
            ClientInputError: If the password is missing or too short
            ConflictError: If another setup already stored a credential
        """
        if not password or len(password) < settings.ADMIN_MIN_PASSWORD_LENGTH:
            raise ClientInputError(
                f"Password must be at least {settings.ADMIN_MIN_PASSWORD_LENGTH} characters"
            )

        try:
            async with self.uow:
                await self.uow.admin_credentials.create_singleton(hash_password(password))
        except IntegrityError:
            logger.warning("Admin setup rejected: credential already exists")
            raise ConflictError("Admin password already set")

        logger.info("Admin password set; admin panel is now active")

    async def authenticate(self, authorization: Optional[str]) -> bool:
        """Check a Basic Authorization header. The username is not checked."""
        credentials = parse_basic_credentials(authorization)
        if credentials is None:
            return False

        credential = await self.uow.admin_credentials.get_singleton()
        if credential is None:
            return False

        _, password = credentials
        if not verify_password(password, credential.password_hash):
            logger.warning("Admin authentication failed: invalid password")
            return False
        return True
