from datetime import timedelta

import jwt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from rental.api.deps import get_token_service
from rental.core import messages
from rental.core.config import settings
from rental.core.security import TokenService, get_password_hash, verify_password
from rental.domain.contract_status import allows_tenant_login
from rental.errors import ConfigurationError, InvalidTokenError
from rental.main import app
from rental.repositories.contract import get_contract_for_login
from rental.schemas.auth import TokenClaims


# ============================================================================
# TOKEN SERVICE TESTS
# ============================================================================


def test_issue_and_verify_admin_token(token_service: TokenService):
    """Test an admin token round-trips its role and user id."""
    token = token_service.issue(TokenClaims(role="admin", user_id=7))
    claims = token_service.verify(token)
    assert claims.role == "admin"
    assert claims.user_id == 7
    assert claims.contract_id is None


def test_token_expires_after_24_hours(token_service: TokenService):
    """Test the token carries iat and an exp 24 hours later."""
    token = token_service.issue(TokenClaims(role="tenant", contract_id="contract_1"))
    claims = token_service.verify(token)
    assert claims.exp - claims.iat == 24 * 60 * 60


def test_verify_expired_token_fails():
    """Test an expired token is rejected."""
    tokens = TokenService(secret=settings.jwt_secret, lifetime=timedelta(seconds=-1))
    token = tokens.issue(TokenClaims(role="admin", user_id=1))
    with pytest.raises(InvalidTokenError):
        tokens.verify(token)


def test_verify_token_with_wrong_secret_fails(token_service: TokenService):
    """Test a token signed with another secret is rejected."""
    other = TokenService(secret="another-secret-key-min-32-characters-long")
    token = other.issue(TokenClaims(role="admin", user_id=1))
    with pytest.raises(InvalidTokenError):
        token_service.verify(token)


def test_verify_garbage_token_fails(token_service: TokenService):
    with pytest.raises(InvalidTokenError):
        token_service.verify("not.a.token")


def test_verify_token_with_unknown_role_fails(token_service: TokenService):
    """Test a validly signed token with a foreign role is rejected."""
    token = jwt.encode({"role": "landlord", "userId": 1}, settings.jwt_secret, algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        token_service.verify(token)


def test_issue_without_secret_fails():
    """Test issuing a token without a signing secret is a configuration error."""
    with pytest.raises(ConfigurationError):
        TokenService(secret=None).issue(TokenClaims(role="admin", user_id=1))


def test_password_hash_uses_cost_factor_10():
    password_hash = get_password_hash("s3cret")
    assert password_hash.startswith("$2b$10$")
    assert verify_password("s3cret", password_hash)
    assert not verify_password("wrong", password_hash)


# ============================================================================
# ADMIN LOGIN TESTS
# ============================================================================


def test_admin_login_success(client, db: Session, admin_user: dict, token_service: TokenService):
    """Test successful admin login returns a token and user info."""
    response = client.post(
        "/api/login",
        json={"username": "admin", "password": admin_user["password"]},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["user"] == {"id": admin_user["id"], "username": "admin", "role": "admin"}
    assert "contract" not in data

    claims = token_service.verify(data["token"])
    assert claims.role == "admin"
    assert claims.user_id == admin_user["id"]


def test_admin_login_wrong_password(client, db: Session, admin_user: dict):
    """Test admin login with wrong password returns the generic message."""
    response = client.post(
        "/api/login",
        json={"username": "admin", "password": "WrongPassword123!"},
    )
    assert response.status_code == 401
    data = response.json()
    assert data["success"] is False
    assert data["message"] == messages.INVALID_CREDENTIALS


def test_admin_login_wrong_password_twice_identical_body(client, db: Session, admin_user: dict):
    """Test repeated failures produce byte-identical responses."""
    first = client.post("/api/login", json={"username": "admin", "password": "nope"})
    second = client.post("/api/login", json={"username": "admin", "password": "nope"})
    assert first.status_code == second.status_code == 401
    assert first.json() == second.json()


def test_login_unknown_username(client, db: Session):
    """Test a username other than admin falls through to the generic failure."""
    response = client.post(
        "/api/login",
        json={"username": "root", "password": "AdminTest123!"},
    )
    assert response.status_code == 401
    assert response.json()["message"] == messages.INVALID_CREDENTIALS


def test_admin_login_missing_password(client, db: Session):
    response = client.post("/api/login", json={"username": "admin"})
    assert response.status_code == 401
    assert response.json()["message"] == messages.INVALID_CREDENTIALS


def test_login_empty_body(client, db: Session):
    response = client.post("/api/login", json={})
    assert response.status_code == 401
    assert response.json()["message"] == messages.INVALID_CREDENTIALS


# ============================================================================
# TENANT LOGIN TESTS
# ============================================================================


def test_tenant_login_success(client, db: Session, contract, token_service: TokenService):
    """Test tenant login with contract number and access code."""
    response = client.post(
        "/api/login",
        json={"contractNumber": contract.contract_number, "accessCode": contract.access_code},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["contract"] == {"id": contract.id, "contractNumber": contract.contract_number}
    assert "user" not in data

    claims = token_service.verify(data["token"])
    assert claims.role == "tenant"
    assert claims.contract_id == contract.id


def test_tenant_login_signed_contract_success(client, db: Session, contract_factory):
    """Test tenants keep access after signing."""
    signed = contract_factory(status="signed")
    response = client.post(
        "/api/login",
        json={"contractNumber": signed.contract_number, "accessCode": signed.access_code},
    )
    assert response.status_code == 200


@pytest.mark.parametrize(
    "field, value",
    [("accessCode", "000000"), ("contractNumber", "RNT0000000000000000")],
)
def test_tenant_login_wrong_credentials(client, db: Session, contract, field, value):
    """Test a wrong access code or contract number fails with the generic message."""
    body = {"contractNumber": contract.contract_number, "accessCode": contract.access_code}
    body[field] = value
    response = client.post("/api/login", json=body)
    assert response.status_code == 401
    assert response.json()["message"] == messages.INVALID_CREDENTIALS


def test_tenant_login_numeric_access_code(client, db: Session, contract):
    """Test a numeric JSON access code is read as its digits."""
    response = client.post(
        "/api/login",
        json={"contractNumber": contract.contract_number, "accessCode": int(contract.access_code)},
    )
    assert response.status_code == 200
    assert response.json()["contract"]["id"] == contract.id


def test_tenant_login_wrong_numeric_access_code(client, db: Session, contract):
    response = client.post(
        "/api/login",
        json={"contractNumber": contract.contract_number, "accessCode": 123},
    )
    assert response.status_code == 401
    assert response.json()["message"] == messages.INVALID_CREDENTIALS


def test_tenant_login_terminated_contract_fails(client, db: Session, contract_factory):
    """Test a terminated contract can no longer be used to log in."""
    terminated = contract_factory(status="terminated")
    response = client.post(
        "/api/login",
        json={"contractNumber": terminated.contract_number, "accessCode": terminated.access_code},
    )
    assert response.status_code == 401
    assert response.json()["message"] == messages.INVALID_CREDENTIALS


def test_tenant_login_missing_access_code(client, db: Session, contract):
    response = client.post("/api/login", json={"contractNumber": contract.contract_number})
    assert response.status_code == 401


def test_login_without_secret_is_server_error(client, db: Session, contract):
    """Test a missing signing secret surfaces as a configuration error, not a login failure."""
    from rental.api.deps import get_token_service
    from rental.main import app

    app.dependency_overrides[get_token_service] = lambda: TokenService(secret=None)
    response = client.post(
        "/api/login",
        json={"contractNumber": contract.contract_number, "accessCode": contract.access_code},
    )
    assert response.status_code == 500
    assert response.json()["code"] == "CONFIGURATION_ERROR"


# ============================================================================
# AUTH GATE TESTS
# ============================================================================


def test_protected_route_without_token(client, db: Session):
    """Test a protected route without a token is rejected before the handler runs."""
    response = client.get("/api/contracts")
    assert response.status_code == 401
    assert response.json()["message"] == messages.UNAUTHORIZED


def test_protected_route_with_invalid_token(client, db: Session):
    response = client.get(
        "/api/contracts",
        headers={"Authorization": "Bearer invalid_token"},
    )
    assert response.status_code == 401
    assert response.json()["message"] == messages.UNAUTHORIZED


def test_protected_route_with_non_bearer_scheme(client, db: Session, admin_token: str):
    response = client.get(
        "/api/contracts",
        headers={"Authorization": f"Basic {admin_token}"},
    )
    assert response.status_code == 401


def test_admin_route_with_tenant_token(client, db: Session, tenant_token: str):
    """Test the admin-only gate returns 403 for tenants."""
    response = client.get(
        "/api/charts/status",
        headers={"Authorization": f"Bearer {tenant_token}"},
    )
    assert response.status_code == 403
    assert response.json()["message"] == messages.ADMIN_ONLY
    assert response.json()["code"] == "FORBIDDEN"


def test_unexpected_error_is_localized_server_error(client, db: Session, admin_token: str):
    """Test an unhandled exception becomes a JSON 500 without leaking details."""

    def broken_token_service():
        raise RuntimeError("token backend exploded")

    app.dependency_overrides[get_token_service] = broken_token_service
    server = TestClient(app, raise_server_exceptions=False)

    response = server.get(
        "/api/contracts",
        headers={"Authorization": f"Bearer {admin_token}"},
    )
    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "message": messages.INTERNAL_ERROR,
        "code": "INTERNAL_ERROR",
    }
    assert "exploded" not in response.text


def test_health_needs_no_token(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "OK"
    assert "timestamp" in data


@pytest.mark.parametrize(
    "status, allowed",
    [("draft", True), ("active", True), ("signed", True), ("terminated", False), ("deleted", False)],
)
def test_tenant_login_rule_matches_query(db: Session, contract_factory, status, allowed):
    """Test the login rule and its SQL predicate agree for every status."""
    contract = contract_factory(status=status)
    assert allows_tenant_login(status) is allowed

    found = get_contract_for_login(db, contract.contract_number, contract.access_code)
    assert (found is not None) is allowed
