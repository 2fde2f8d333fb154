from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from rental.core import messages
from rental.core.config import settings
from rental.core.security import TokenService
from rental.db import SessionLocal
from rental.errors import ForbiddenError, UnauthorizedError
from rental.schemas.auth import TokenClaims
from rental.services.notification import NotificationDispatcher

# auto_error=False so a missing header yields our own localized 401 instead of FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_token_service() -> TokenService:
    return TokenService(secret=settings.jwt_secret, algorithm=settings.jwt_algorithm)


def get_notifier() -> NotificationDispatcher:
    return NotificationDispatcher.from_settings(settings)


def get_current_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    tokens: TokenService = Depends(get_token_service),
) -> TokenClaims:
    """Verify the bearer token and return its claims."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError(messages.UNAUTHORIZED)

    return tokens.verify(credentials.credentials)


def require_roles(*role_names: str):
    """
    Create a dependency that requires the caller's token to carry one of the specified roles.

    Example:
        Depends(require_roles("admin"))
        Depends(require_roles("tenant"))
    """
    def role_checker(claims: TokenClaims = Depends(get_current_claims)) -> TokenClaims:
        if claims.role not in role_names:
            detail = messages.ADMIN_ONLY if role_names == ("admin",) else messages.UNAUTHORIZED
            raise ForbiddenError(detail)
        return claims

    return role_checker
