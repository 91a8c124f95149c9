from fastapi import APIRouter, Depends, Request

from signup_backend.core.errors import ClientInputError
from signup_backend.core.rate_limiter import enforce_signup_rate_limit
from signup_backend.core.service_dependencies import get_signup_service
from signup_backend.schemas.signup import SignupSuccess
from signup_backend.services.signup_service import SignupService

router = APIRouter(tags=["signup"])


@router.post(
    "/api/signup",
    response_model=SignupSuccess,
    dependencies=[Depends(enforce_signup_rate_limit)],
)
async def signup(
    request: Request, signup_service: SignupService = Depends(get_signup_service)
):
    """Subscribe an email address from the site's signup form."""
    try:
        data = await request.json()
    except ValueError:
        raise ClientInputError("Invalid JSON")

    await signup_service.subscribe(data)
    return SignupSuccess()
