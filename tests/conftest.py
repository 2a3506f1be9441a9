from datetime import timedelta

import pytest
from fastapi import Depends, HTTPException, status
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.base import Base
from app.db.session import get_db
from app.dependencies.auth import get_current_user
from app.main import app
from app.models.user import User
from app.services.billing import BillingService
from app.utils.dates import utcnow

# One in-memory database shared by every connection in a test
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def make_user(db_session):
    """Create a user whose account is `age` old."""
    counter = {"n": 0}

    def _make(age=timedelta(0), is_premium=False, user_id=None, email=None):
        counter["n"] += 1
        user_id = user_id or f"user-{counter['n']}"
        user = User(
            id=user_id,
            email=email or f"{user_id}@example.com",
            is_premium=is_premium,
            created_at=utcnow() - age,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make


@pytest.fixture
def client_for(db_session):
    """Return a TestClient authenticated as the given user."""
    signed_in = {"id": None}

    def override_get_db():
        yield db_session

    def override_get_current_user(db=Depends(get_db)):
        user = db.query(User).filter(User.id == signed_in["id"]).first()
        if not user:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not signed in")
        return user

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = override_get_current_user
    previous_billing = app.state.billing
    app.state.billing = BillingService()

    def _client_for(user):
        signed_in["id"] = user.id
        return TestClient(app)

    yield _client_for

    app.dependency_overrides.clear()
    app.state.billing = previous_billing
