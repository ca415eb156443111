"""Shared fixtures: in-memory database, app client, sessions and a fake Stripe."""
import os

# Settings are read at import time, so the environment must be ready first
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_famous_since")
os.environ.setdefault("SESSION_SECRET", "test-session-secret")
os.environ.setdefault("SESSION_COOKIE_SECURE", "false")

import httpx
import pytest
from fastapi.testclient import TestClient

from data.database.connection import Base, SessionLocal, engine, init_db
from data.database.catalog_models import Product, ProductSize, ProductType
from data.database.store_models import StripeConnectAccount
from famous_since.auth.session import SessionUser, create_session_token
from famous_since.main import app
from famous_since.payments.stripe_client import StripeClient, get_stripe_client


@pytest.fixture(autouse=True)
def reset_database():
    """Fresh tables and default site switches for every test."""
    Base.metadata.drop_all(bind=engine)
    init_db()
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


def auth_headers(role=None, user_id="1", email="someone@famousince.com"):
    token = create_session_token(SessionUser(id=user_id, email=email, name="Someone", role=role))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers():
    return auth_headers(role="admin", user_id="1", email="admin@famousince.com")


@pytest.fixture
def user_headers():
    return auth_headers(role="user", user_id="2", email="fan@famousince.com")


class FakeStripe:
    """Records requests and answers from a route table keyed by (method, path)."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def on(self, method, path, status_code=200, json=None):
        self.routes[(method, path)] = (status_code, json or {})

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json={"error": {"message": f"No such route: {key}"}})
        status_code, payload = self.routes[key]
        return httpx.Response(status_code, json=payload)

    def client(self) -> StripeClient:
        return StripeClient(
            secret_key="sk_test_famous_since",
            api_base="https://api.stripe.test/v1",
            transport=httpx.MockTransport(self.handler)
        )


@pytest.fixture
def fake_stripe():
    fake = FakeStripe()
    app.dependency_overrides[get_stripe_client] = fake.client
    return fake


@pytest.fixture
def catalog(db):
    """A regular T-shirt type and a branded hoodie type, one product each."""
    tshirt = ProductType(name="T-Shirt", base_price=28, is_default=True)
    tshirt.sizes = [ProductSize(size=size) for size in ("S", "M", "L")]
    hoodie = ProductType(name="Famous Since Hoodie", base_price=55, is_branded_item=True)
    hoodie.sizes = [ProductSize(size="XL")]
    db.add_all([tshirt, hoodie])
    db.flush()

    shirt = Product(
        name="Famous Since T-Shirt",
        description="Famous Since 1999",
        price=28,
        product_type_id=tshirt.id
    )
    sweatshirt = Product(
        name="Famous Since Hoodie",
        description="Stay Famous Black Hoodie",
        price=55,
        product_type_id=hoodie.id
    )
    db.add_all([shirt, sweatshirt])
    db.commit()

    return {
        "tshirt_type_id": tshirt.id,
        "hoodie_type_id": hoodie.id,
        "shirt_id": shirt.id,
        "hoodie_id": sweatshirt.id
    }


@pytest.fixture
def make_headers():
    return auth_headers


@pytest.fixture
def connect_account(db):
    """The owner's Connect account, with onboarding finished."""
    account = StripeConnectAccount(
        email="owner@famousince.com",
        business_name="Famous Since",
        business_type="company",
        account_id="acct_owner",
        onboarding_complete=True
    )
    db.add(account)
    db.commit()
    return account.account_id
