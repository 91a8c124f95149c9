from datetime import datetime, timezone
from typing import Optional
import logging

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from signup_backend.core.auth import challenge_headers, require_admin, require_admin_api
from signup_backend.core.config import settings
from signup_backend.core.errors import AuthError, ClientInputError, MethodNotAllowedError
from signup_backend.core.service_dependencies import get_admin_service, get_signup_service
from signup_backend.core.templates import templates
from signup_backend.schemas.signup import SignupListResponse, SignupOut
from signup_backend.services.admin_service import AdminService
from signup_backend.services.signup_service import SignupService

logger = logging.getLogger(__name__)

# Mounted under settings.ADMIN_PATH
router = APIRouter(tags=["admin"])


def render_setup(request: Request, error: Optional[str] = None, status_code: int = 200):
    return templates.TemplateResponse(
        request,
        "admin/setup.html",
        {"error": error, "min_length": settings.ADMIN_MIN_PASSWORD_LENGTH},
        status_code=status_code,
    )


@router.get("", response_class=HTMLResponse)
async def admin_panel(
    request: Request, admin_service: AdminService = Depends(get_admin_service)
):
    """Setup form until a password exists, then the password-protected panel."""
    if not await admin_service.is_initialized():
        return render_setup(request)

    if not await admin_service.authenticate(request.headers.get("Authorization")):
        raise AuthError("Unauthorized", headers=challenge_headers(), plain=True)

    return templates.TemplateResponse(request, "admin/panel.html", {})


@router.post("")
async def admin_setup(
    request: Request,
    setup_password: Optional[str] = Form(None),
    admin_service: AdminService = Depends(get_admin_service),
):
    """One-time admin password setup."""
    if await admin_service.is_initialized():
        raise MethodNotAllowedError("Method not allowed", plain=True)

    try:
        await admin_service.setup_password(setup_password)
    except ClientInputError as e:
        return render_setup(request, error=e.message, status_code=400)

    return PlainTextResponse("Password set successfully!")


@router.get(
    "/api/signups",
    response_model=SignupListResponse,
    dependencies=[Depends(require_admin_api)],
)
async def list_signups(signup_service: SignupService = Depends(get_signup_service)):
    signups = await signup_service.list_signups()
    return SignupListResponse(
        signups=[SignupOut.model_validate(signup) for signup in signups]
    )


@router.get("/export", dependencies=[Depends(require_admin)])
async def export_signups(signup_service: SignupService = Depends(get_signup_service)):
    """Download every signup as a CSV attachment."""
    content = await signup_service.export_csv()
    filename = f"signups-{datetime.now(timezone.utc).date().isoformat()}.csv"
    logger.info("Signups exported to CSV")
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
