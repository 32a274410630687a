import pytest
from fastapi.testclient import TestClient

from config import Settings
from database import Store
from main import create_app
from models.users import User
from utils.identity import create_access_token

ADMIN_EMAIL = "admin@example.com"


class FakePaymentProcessor:
    def __init__(self):
        self.calls = []
        self.error = None

    async def create_payment_intent(self, amount, currency="usd"):
        self.calls.append((amount, currency))
        if self.error:
            raise self.error
        return f"pi_{amount}_secret_test"


def make_settings(**overrides):
    values = dict(
        DATABASE_URL="sqlite://",
        IDENTITY_PROVIDER="jwt",
        SECRET_KEY="test-secret",
        FRONTEND_URL=None,
        LOG_LEVEL="WARNING",
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def store(settings):
    return Store(settings.DATABASE_URL)


@pytest.fixture
def processor():
    return FakePaymentProcessor()


@pytest.fixture
def client(settings, store, processor):
    app = create_app(settings=settings, store=store, payment_processor=processor)
    # Entering the client runs the lifespan, which connects the store
    with TestClient(app) as c:
        yield c


@pytest.fixture
def fetch(store, client):
    """Query helper using a short-lived session."""
    def _fetch(model, **filters):
        session = store.session()
        try:
            return session.query(model).filter_by(**filters).all()
        finally:
            session.close()
    return _fetch


@pytest.fixture
def make_user(store, client):
    def _make(email, role="user"):
        session = store.session()
        try:
            user = User(email=email, role=role, profile={})
            session.add(user)
            session.commit()
            session.refresh(user)
            return user
        finally:
            session.close()
    return _make


@pytest.fixture
def auth_headers(settings):
    def _headers(email):
        token = create_access_token({"sub": email}, settings)
        return {"Authorization": f"Bearer {token}"}
    return _headers


@pytest.fixture
def admin_headers(make_user, auth_headers):
    make_user(ADMIN_EMAIL, role="admin")
    return auth_headers(ADMIN_EMAIL)
