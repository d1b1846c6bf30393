import os

# Settings are read at import time, so the environment must be ready first
os.environ.setdefault("ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite:///./test.db")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ALGORITHM", "HS256")

import pytest
from datetime import datetime, timedelta, timezone
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.orm import Session
from typing import Generator

from main import app
from core.config import settings
from core.database import Base, create_db_engine, create_session_factory
from models.orders import Order, OrderStatus
from models.users import User
from services.identity_service import IdentityVerifier
from services.payment_gateway import PaymentOutcome
from utils.deps import get_db, get_identity_verifier, get_payment_gateway

SQLALCHEMY_DATABASE_URL = "sqlite:///./test.db"

engine = create_db_engine(SQLALCHEMY_DATABASE_URL)
TestingSessionLocal = create_session_factory(engine)

BUYER_EMAIL = "a@x.com"
OTHER_EMAIL = "b@y.com"
ADMIN_EMAIL = "admin@x.com"
LIBRARIAN_EMAIL = "librarian@x.com"


class FakePaymentGateway:
    """
    In-memory stand-in for Stripe Checkout.

    Sessions are unpaid until a test marks them paid with complete().
    Unknown session ids are reported as not paid, like the Stripe adapter;
    setting failure makes every call raise it instead.
    """

    def __init__(self):
        self.created = []
        self.outcomes = {}
        self.failure = None

    def create_session(self, amount_cents, metadata, description):
        if self.failure:
            raise self.failure
        session_id = f"cs_test_{len(self.created) + 1}"
        self.created.append({
            "id": session_id,
            "amount_cents": amount_cents,
            "metadata": dict(metadata),
            "description": description
        })
        self.outcomes[session_id] = PaymentOutcome(paid=False, metadata=dict(metadata))
        return f"https://checkout.test/pay/{session_id}"

    def complete(self, session_id, transaction_id="pi_test_123"):
        outcome = self.outcomes[session_id]
        outcome.paid = True
        outcome.transaction_id = transaction_id

    def retrieve_session(self, session_id):
        if self.failure:
            raise self.failure
        return self.outcomes.get(session_id, PaymentOutcome(paid=False))


def make_token(email: str, expires_delta: timedelta = timedelta(hours=1), secret: str | None = None) -> str:
    payload = {
        "sub": email,
        "email": email,
        "exp": datetime.now(timezone.utc) + expires_delta
    }
    return jwt.encode(payload, secret or settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def auth_headers(email: str) -> dict:
    return {"Authorization": f"Bearer {make_token(email)}"}


@pytest.fixture
def session() -> Generator[Session, None, None]:
    """
    Fresh, empty database for each test.
    """
    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()

    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def gateway() -> FakePaymentGateway:
    return FakePaymentGateway()


@pytest.fixture
async def client(session: Session, gateway: FakePaymentGateway):
    """
    HTTP client against the app, wired to the test database, a real token
    verifier using the test secret and the fake payment gateway.
    """
    def override_get_db():
        try:
            yield session
        finally:
            pass  # session fixture closes it

    verifier = IdentityVerifier(secret_key=settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_identity_verifier] = lambda: verifier
    app.dependency_overrides[get_payment_gateway] = lambda: gateway

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def admin_user(session: Session) -> User:
    user = User(email=ADMIN_EMAIL, name="Admin", role="admin")
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def librarian_user(session: Session) -> User:
    user = User(email=LIBRARIAN_EMAIL, name="Librarian", role="librarian")
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def pending_order(session: Session) -> Order:
    order = Order(
        book_id="b1",
        book_title="Dune",
        email=BUYER_EMAIL,
        author=LIBRARIAN_EMAIL,
        price=10,
        status=OrderStatus.PENDING.value,
        date=datetime.now(timezone.utc)
    )
    session.add(order)
    session.commit()
    session.refresh(order)
    return order
