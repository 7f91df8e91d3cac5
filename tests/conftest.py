import os

# Must be set before camrent.config is imported anywhere
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SUBSCRIPTION_CRON_ENABLED"] = "false"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["MAILGUN_API_KEY"] = ""
os.environ["MAILGUN_DOMAIN"] = ""
os.environ["ADMIN_EMAILS"] = "root@camrent.cm"

import asyncio
from datetime import datetime, timedelta, timezone
from itertools import count

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from camrent.database import Base, get_db
from camrent.main import app
from camrent.models.property import ContractType, Property, PropertyType
from camrent.models.region import Division
from camrent.models.user import SubscriptionStatus, SubscriptionType, User, UserRole
from camrent.seed import seed_regions
from camrent.services.auth import create_access_token, get_password_hash
from camrent.services.relay import relay

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

LITTORAL = 5
CENTRE = 2
PASSWORD = "Password123!"

_emails = count(1)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(autouse=True)
def _database():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        seed_regions(session)
    finally:
        session.close()
    app.dependency_overrides[get_db] = override_get_db
    yield
    app.dependency_overrides.clear()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def _fresh_relay():
    # The relay is process-wide; each test gets an empty registry and a lock for its own loop
    relay._connections.clear()
    relay._lock = asyncio.Lock()
    yield
    relay._connections.clear()


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def division_id(db):
    """First division of the Littoral region (Moungo)."""
    return (
        db.query(Division.id)
        .filter(Division.region_id == LITTORAL)
        .order_by(Division.name)
        .first()[0]
    )


@pytest.fixture
def make_user(db):
    def _make_user(
        role: UserRole = UserRole.renter,
        *,
        verified: bool = False,
        subscribed: bool = False,
        expires_in: timedelta | None = timedelta(days=30),
        is_admin: bool = False,
        email: str | None = None,
        phone_number: str | None = "+237 6 70 00 00 00",
    ) -> User:
        user = User(
            email=email or f"user{next(_emails)}@camrent.cm",
            hashed_password=get_password_hash(PASSWORD),
            role=role,
            first_name="Test",
            last_name="User",
            phone_number=phone_number,
            is_verified=verified,
            is_admin=is_admin,
        )
        if subscribed:
            user.subscription_type = SubscriptionType.monthly
            user.subscription_status = SubscriptionStatus.active
            user.subscription_expires_at = (
                datetime.now(timezone.utc) + expires_in if expires_in is not None else None
            )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def landlord(make_user):
    """Verified, subscribed landlord allowed to create listings."""
    return make_user(UserRole.landlord, verified=True, subscribed=True)


@pytest.fixture
def renter(make_user):
    return make_user(UserRole.renter)


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user)}"}


@pytest.fixture
def make_property(db, division_id):
    def _make_property(landlord: User, **overrides) -> Property:
        values = dict(
            landlord_id=landlord.id,
            title="Two-bedroom flat in Bonapriso",
            description="Bright flat close to the market.",
            property_type=PropertyType.apartment,
            contract_type=ContractType.monthly,
            region_id=LITTORAL,
            division_id=division_id,
            address="Rue des Palmiers 12, Douala",
            price_per_month=150000,
            rooms=2,
            size=80,
            amenities=["wifi", "parking"],
            images=["https://img.camrent.cm/1.jpg"],
            is_active=True,
        )
        values.update(overrides)
        prop = Property(**values)
        db.add(prop)
        db.commit()
        db.refresh(prop)
        return prop

    return _make_property
