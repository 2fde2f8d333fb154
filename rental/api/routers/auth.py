from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rental.api.deps import get_db, get_token_service
from rental.core.security import TokenService
from rental.schemas.auth import LoginRequest, LoginResponse
from rental.services.auth import login as login_service

router = APIRouter(tags=["auth"])


@router.post("/login", response_model=LoginResponse, response_model_exclude_none=True)
def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
):
    """
    Login endpoint - returns a JWT token.

    Send `{username, password}` for the admin or `{contractNumber, accessCode}`
    for a tenant. Every failure gets the same 401 response.
    """
    return login_service(db, tokens, credentials)
