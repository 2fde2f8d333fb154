"""Auth service: admin and tenant login."""

import logging

from sqlalchemy.orm import Session

from rental.core import messages
from rental.core.security import TokenService, verify_password
from rental.errors import InvalidCredentialsError
from rental.repositories.contract import get_contract_for_login
from rental.repositories.user import get_user_by_username_and_role
from rental.schemas.auth import (
    LoginContract,
    LoginRequest,
    LoginResponse,
    LoginUser,
    TokenClaims,
)

logger = logging.getLogger(__name__)

ADMIN_USERNAME = "admin"


def login(db: Session, tokens: TokenService, credentials: LoginRequest) -> LoginResponse:
    """
    Authenticate either the admin or a tenant and return a signed token.

    The admin branch is chosen by `username == "admin"`, the tenant branch by
    the presence of both contractNumber and accessCode.

    Raises:
        InvalidCredentialsError: For every failure, without saying which part was wrong.
    """
    if credentials.username == ADMIN_USERNAME:
        user = get_user_by_username_and_role(db, credentials.username, "admin")
        if user and credentials.password and verify_password(
            credentials.password, user.password_hash
        ):
            token = tokens.issue(TokenClaims(role="admin", user_id=user.id))
            return LoginResponse(token=token, user=LoginUser.model_validate(user))

    elif credentials.contract_number and credentials.access_code:
        contract = get_contract_for_login(
            db, credentials.contract_number, credentials.access_code
        )
        if contract:
            token = tokens.issue(TokenClaims(role="tenant", contract_id=contract.id))
            return LoginResponse(
                token=token, contract=LoginContract.model_validate(contract)
            )

    logger.info("Rejected login attempt")
    raise InvalidCredentialsError(messages.INVALID_CREDENTIALS)
