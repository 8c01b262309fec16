"""
Route dependencies.

Provides the storage facade, the services and bearer-token authentication
to API endpoints.
"""

from typing import Annotated, Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ecodata.core.exceptions import (
    AuthenticationError,
    InvalidTokenError,
    PermissionDeniedError,
    StorageUnavailableError,
)
from ecodata.core.security import TokenClaims, decode_access_token
from ecodata.core.storage import Storage
from ecodata.server.services.auth import AuthService
from ecodata.server.services.email_service import EmailService, get_email_service
from ecodata.server.services.payments import PaymentService, get_payment_service

bearer_scheme = HTTPBearer(auto_error=False)


def get_storage(request: Request) -> Storage:
    """Storage initialised by the application lifespan."""
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        raise StorageUnavailableError()
    return storage


StorageDep = Annotated[Storage, Depends(get_storage)]
EmailServiceDep = Annotated[EmailService, Depends(get_email_service)]
PaymentServiceDep = Annotated[PaymentService, Depends(get_payment_service)]


def get_auth_service(storage: StorageDep, email_service: EmailServiceDep) -> AuthService:
    return AuthService(storage, email_service)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]


async def get_current_user_claims(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> TokenClaims:
    """
    Decode the bearer token.

    Raises:
        AuthenticationError: No ``Authorization: Bearer`` header (401).
        InvalidTokenError: The token is malformed, forged or expired (403).
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()
    return decode_access_token(credentials.credentials)


CurrentUserDep = Annotated[TokenClaims, Depends(get_current_user_claims)]


async def require_admin(claims: CurrentUserDep) -> TokenClaims:
    if not claims.is_admin:
        raise PermissionDeniedError()
    return claims


AdminDep = Annotated[TokenClaims, Depends(require_admin)]


async def get_optional_user_claims(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> Optional[TokenClaims]:
    """Claims when a valid token is sent; anonymous requests and bad tokens yield None."""
    if credentials is None or not credentials.credentials:
        return None
    try:
        return decode_access_token(credentials.credentials)
    except InvalidTokenError:
        return None


OptionalUserDep = Annotated[Optional[TokenClaims], Depends(get_optional_user_claims)]
