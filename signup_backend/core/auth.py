import logging

from fastapi import Depends, Request

from signup_backend.core.config import settings
from signup_backend.core.errors import AuthError
from signup_backend.core.service_dependencies import get_admin_service
from signup_backend.services.admin_service import AdminService

# Configure logging for auth module
logger = logging.getLogger(__name__)


def challenge_headers() -> dict:
    return {"WWW-Authenticate": f'Basic realm="{settings.ADMIN_REALM}"'}


async def require_admin(
    request: Request, admin_service: AdminService = Depends(get_admin_service)
) -> None:
    """Dependency for admin pages: plain 401 with a Basic challenge."""
    if not await admin_service.authenticate(request.headers.get("Authorization")):
        logger.info(f"Admin page access denied for {request.url.path}")
        raise AuthError("Unauthorized", headers=challenge_headers(), plain=True)


async def require_admin_api(
    request: Request, admin_service: AdminService = Depends(get_admin_service)
) -> None:
    """Dependency for admin JSON endpoints: JSON 401 body."""
    if not await admin_service.authenticate(request.headers.get("Authorization")):
        logger.info(f"Admin API access denied for {request.url.path}")
        raise AuthError("Unauthorized")
