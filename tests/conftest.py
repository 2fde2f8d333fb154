import os
import tempfile
from pathlib import Path

# Set environment variables BEFORE any imports that might use settings
# Use a temporary directory for test database to avoid permission issues
_test_db_dir = tempfile.mkdtemp()
_test_db_path = os.path.join(_test_db_dir, "test_rental.db")
os.environ["DATABASE_URL"] = f"sqlite:///{_test_db_path}"
os.environ["JWT_SECRET"] = "test-secret-key-min-32-characters-long-for-testing"
os.environ["JWT_ALGORITHM"] = "HS256"
os.environ["ADMIN_PASSWORD"] = "AdminTest123!"
# Outbound channels are configured per test through the notifier fixture
for _name in (
    "EMAIL_USER",
    "EMAIL_PASS",
    "EMAIL_HOST",
    "EMAIL_PORT",
    "TELEGRAM_BOT_TOKEN",
    "TELEGRAM_CHAT_ID",
    "WHATSAPP_ACCOUNT_SID",
    "WHATSAPP_AUTH_TOKEN",
    "WHATSAPP_TO_NUMBER",
    "FRONTEND_URL",
):
    os.environ[_name] = ""

import httpx
import pytest
from alembic import command
from alembic.config import Config
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session

from rental.main import app
from rental.core.config import Settings, settings
from rental.core.security import TokenService
from rental.db.models.contract import Contract as ContractModel
from rental.repositories.notification_settings import upsert_notification_settings
from rental.repositories.user import get_user_by_username_and_role
from rental.schemas.auth import TokenClaims
from rental.services.notification import NotificationDispatcher

ALEMBIC_INI = Path(__file__).resolve().parent.parent / "alembic.ini"


@pytest.fixture(scope="function")
def db_session():
    """Create a fresh database for each test and run migrations."""
    # Use a temporary file for SQLite database
    temp_db_dir = tempfile.mkdtemp()
    test_db_path = os.path.join(temp_db_dir, "test.db")
    test_db_url = f"sqlite:///{test_db_path}"

    # Create test engine and session with proper SQLite settings
    test_engine = create_engine(
        test_db_url,
        connect_args={"check_same_thread": False},
        poolclass=None,  # Don't use connection pooling for SQLite
    )

    # Enable WAL mode to reduce locking issues
    @event.listens_for(test_engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=test_engine
    )

    # Run Alembic migrations to set up the database schema and seed data
    alembic_cfg = Config(str(ALEMBIC_INI))
    alembic_cfg.set_main_option("sqlalchemy.url", test_db_url)
    command.upgrade(alembic_cfg, "head")

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        # Dispose the engine to close all connections
        test_engine.dispose()

        # Clean up - remove test database file and directory
        for suffix in ["", "-wal", "-shm"]:
            path = f"{test_db_path}{suffix}"
            if os.path.exists(path):
                os.remove(path)
        if os.path.exists(temp_db_dir):
            os.rmdir(temp_db_dir)


@pytest.fixture(scope="function")
def db(db_session):
    """Alias for db_session to match test naming conventions."""
    return db_session


# ============================================================================
# OUTBOUND NOTIFICATIONS
# ============================================================================


@pytest.fixture(scope="function")
def outbox() -> list[httpx.Request]:
    """Every HTTP request the notifier sent during the test."""
    return []


def _provider_response(request: httpx.Request) -> httpx.Response:
    if request.url.host == "api.telegram.org":
        return httpx.Response(200, json={"ok": True, "result": {"message_id": 1}})
    if request.url.host == "api.twilio.com":
        return httpx.Response(201, json={"sid": "SM123", "status": "queued"})
    return httpx.Response(200, json={"id": "email-1"})


@pytest.fixture(scope="function")
def mock_transport(outbox) -> httpx.MockTransport:
    """Transport answering like the email, Telegram and Twilio APIs."""

    def handler(request: httpx.Request) -> httpx.Response:
        outbox.append(request)
        return _provider_response(request)

    return httpx.MockTransport(handler)


@pytest.fixture(scope="function")
def failing_transport(outbox) -> httpx.MockTransport:
    """Transport for which every provider answers 500."""

    def handler(request: httpx.Request) -> httpx.Response:
        outbox.append(request)
        return httpx.Response(500, json={"ok": False, "description": "provider down"})

    return httpx.MockTransport(handler)


def make_notifier(transport: httpx.AsyncBaseTransport, **overrides) -> NotificationDispatcher:
    """A dispatcher with every channel configured, talking to `transport`."""
    values = {
        "DATABASE_URL": settings.database_url,
        "EMAIL_USER": "noreply@rental.example.com",
        "EMAIL_PASS": "re_test_key",
        "TELEGRAM_BOT_TOKEN": "123:ABC",
        "TELEGRAM_CHAT_ID": "@rental_channel",
        "WHATSAPP_ACCOUNT_SID": "AC123",
        "WHATSAPP_AUTH_TOKEN": "twilio-token",
        "WHATSAPP_TO_NUMBER": "09121234567",
    }
    values.update(overrides)
    return NotificationDispatcher.from_settings(Settings(**values), transport=transport)


@pytest.fixture(scope="function")
def notifier(mock_transport) -> NotificationDispatcher:
    return make_notifier(mock_transport)


@pytest.fixture(scope="function")
def client(db_session, notifier):
    """Create a test client with database and notifier dependency overrides."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    from rental.api.deps import get_db, get_notifier

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_notifier] = lambda: notifier

    yield TestClient(app)

    app.dependency_overrides.clear()


# ============================================================================
# USERS, TOKENS AND CONTRACTS
# ============================================================================


@pytest.fixture(scope="function")
def token_service() -> TokenService:
    return TokenService(secret=settings.jwt_secret, algorithm=settings.jwt_algorithm)


@pytest.fixture(scope="function")
def admin_user(db: Session) -> dict:
    """The admin user seeded by the users migration."""
    user = get_user_by_username_and_role(db, "admin", "admin")
    if not user:
        raise RuntimeError("Admin user not found. Check migration 001.")

    return {
        "id": user.id,
        "username": user.username,
        "password": settings.admin_password,  # Plaintext password from env
    }


@pytest.fixture(scope="function")
def admin_token(admin_user: dict, token_service: TokenService) -> str:
    """Get JWT token for the admin user."""
    return token_service.issue(TokenClaims(role="admin", user_id=admin_user["id"]))


def build_contract(db: Session, **overrides) -> ContractModel:
    """Insert a contract row directly, bypassing the service layer."""
    n = db.query(ContractModel).count() + 1
    fields = {
        "id": f"contract_test_{n}",
        "contract_number": f"RNT{1700000000000 + n}000",
        "access_code": f"{123455 + n}",
        "tenant_name": "Sara Tenant",
        "tenant_email": "tenant@example.com",
        "landlord_name": "Reza Landlord",
        "landlord_email": "landlord@example.com",
        "property_address": "12 Valiasr St, Tehran",
        "rent_amount": "10000000",
        "start_date": "2025-01-01",
        "end_date": "2025-12-31",
        "status": "draft",
    }
    fields.update(overrides)
    contract = ContractModel(**fields)
    db.add(contract)
    db.commit()
    db.refresh(contract)
    return contract


@pytest.fixture(scope="function")
def contract(db: Session) -> ContractModel:
    """A draft contract."""
    return build_contract(db)


@pytest.fixture(scope="function")
def tenant_token(contract: ContractModel, token_service: TokenService) -> str:
    """Get JWT token scoped to the `contract` fixture."""
    return token_service.issue(TokenClaims(role="tenant", contract_id=contract.id))


@pytest.fixture(scope="function")
def contract_factory(db: Session):
    """Build extra contracts inside a test: `contract_factory(status="signed")`."""

    def factory(**overrides) -> ContractModel:
        return build_contract(db, **overrides)

    return factory


@pytest.fixture(scope="function")
def notifier_factory(mock_transport):
    """Build a dispatcher with custom channel settings: `notifier_factory(EMAIL_USER="")`."""

    def factory(transport: httpx.AsyncBaseTransport | None = None, **overrides):
        return make_notifier(transport or mock_transport, **overrides)

    return factory


@pytest.fixture(scope="function")
def enable_channels(db: Session):
    """Switch channels on in the stored settings: `enable_channels("email", telegram_chat_id="-1")`."""

    def enable(*channels: str, **fields):
        values = {f"{channel}_enabled": True for channel in channels}
        values.update(fields)
        return upsert_notification_settings(db, **values)

    return enable
