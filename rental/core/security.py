from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from passlib.context import CryptContext
from pydantic import ValidationError

from rental.errors import ConfigurationError, InvalidTokenError
from rental.schemas.auth import TokenClaims

# Sessions are not refreshable; an expired token requires a new login.
TOKEN_LIFETIME = timedelta(hours=24)

# Password hashing context (bcrypt, cost factor 10)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


class TokenService:
    """Issues and verifies the signed session tokens for both roles."""

    def __init__(
        self,
        secret: str | None,
        algorithm: str = "HS256",
        lifetime: timedelta = TOKEN_LIFETIME,
    ):
        self.secret = secret
        self.algorithm = algorithm
        self.lifetime = lifetime

    def _require_secret(self) -> str:
        if not self.secret:
            raise ConfigurationError("JWT_SECRET is not configured")
        return self.secret

    def issue(self, claims: TokenClaims) -> str:
        """Sign the claims together with issued-at and a fixed expiry."""
        secret = self._require_secret()
        issued_at = datetime.now(timezone.utc)
        to_encode: dict[str, Any] = claims.model_dump(by_alias=True, exclude_none=True)
        to_encode.update({"iat": issued_at, "exp": issued_at + self.lifetime})
        return jwt.encode(to_encode, secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """
        Decode and verify a token.

        Raises:
            InvalidTokenError: Bad signature, malformed payload or expired token.
        """
        secret = self._require_secret()
        try:
            payload = jwt.decode(token, secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError("Invalid token") from e

        try:
            return TokenClaims.model_validate(payload)
        except ValidationError as e:
            raise InvalidTokenError("Invalid token claims") from e
