"""Registration, login and current-user routes."""

from fastapi import APIRouter, Depends

from livestock_api.models.responses import AuthResponse, UserResponse
from livestock_api.services import get_credential_service
from livestock_api.services.auth import get_current_identity
from livestock_common.models.user import AuthenticatedIdentity, LoginRequest, RegisterRequest
from livestock_common.services.credential_service import CredentialService

router = APIRouter(tags=["auth"], redirect_slashes=False)


@router.post("/register", response_model=AuthResponse)
def register(
    payload: RegisterRequest,
    credential_service: CredentialService = Depends(get_credential_service),
) -> AuthResponse:
    """Create an account and return a bearer token for it."""
    result = credential_service.register(payload)
    return AuthResponse(message="Registered", token=result.token, user=result.user)


@router.post("/login", response_model=AuthResponse)
def login(
    payload: LoginRequest,
    credential_service: CredentialService = Depends(get_credential_service),
) -> AuthResponse:
    result = credential_service.login(payload)
    return AuthResponse(message="Logged in", token=result.token, user=result.user)


@router.get("/me", response_model=UserResponse)
async def me(identity: AuthenticatedIdentity = Depends(get_current_identity)) -> UserResponse:
    return UserResponse(message="Authenticated", user=identity.to_public())
