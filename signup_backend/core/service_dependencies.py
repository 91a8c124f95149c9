from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from signup_backend.core.database import get_db
from signup_backend.repositories.unit_of_work import SqlAlchemyUnitOfWork
from signup_backend.services.admin_service import AdminService
from signup_backend.services.signup_service import SignupService


async def get_signup_service(db: AsyncSession = Depends(get_db)) -> SignupService:
    """Dependency to provide SignupService."""
    uow = SqlAlchemyUnitOfWork(db)
    return SignupService(uow)


async def get_admin_service(db: AsyncSession = Depends(get_db)) -> AdminService:
    """Dependency to provide AdminService."""
    uow = SqlAlchemyUnitOfWork(db)
    return AdminService(uow)
