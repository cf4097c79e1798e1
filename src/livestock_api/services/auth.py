"""Authentication gate dependencies.

Handlers receive an immutable AuthenticatedIdentity; nothing is attached to
the request object.
"""

import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from livestock_api.config import Settings
from livestock_api.services import get_app_settings, get_credential_service
from livestock_common.exceptions import InvalidTokenError, UnknownUserError
from livestock_common.models.user import AuthenticatedIdentity
from livestock_common.services.credential_service import CredentialService

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def _token(credentials: HTTPAuthorizationCredentials | None) -> str | None:
    return credentials.credentials if credentials else None


def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    credential_service: CredentialService = Depends(get_credential_service),
) -> AuthenticatedIdentity:
    """Require a valid bearer token; the route handler does not run otherwise."""
    return credential_service.authenticate(_token(credentials))


def get_optional_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    credential_service: CredentialService = Depends(get_credential_service),
) -> AuthenticatedIdentity | None:
    """Resolve a bearer token if one is sent; a stale or invalid token counts as anonymous."""
    token = _token(credentials)
    if token is None:
        return None
    try:
        return credential_service.authenticate(token)
    except (InvalidTokenError, UnknownUserError):
        logger.debug("Ignoring unusable bearer token on optional-auth route")
        return None


def get_listing_actor(
    settings: Settings = Depends(get_app_settings),
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    credential_service: CredentialService = Depends(get_credential_service),
) -> AuthenticatedIdentity | None:
    """Identity for listing and upload mutations.

    Required when REQUIRE_AUTH_FOR_LISTINGS is enabled, optional otherwise.
    """
    if settings.require_auth_for_listings:
        return get_current_identity(credentials, credential_service)
    return get_optional_identity(credentials, credential_service)
