from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.sessions import SessionStore
from app.db.base import Base, get_db
from app.main import create_app
from app.services import accounts, sitters


class FakeClock:
    def __init__(self, start: datetime = datetime(2024, 6, 1, 12, 0, 0)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session_store(clock):
    return SessionStore(ttl=timedelta(hours=24), clock=clock)


@pytest.fixture
def client(session_factory, session_store):
    app = create_app(session_store=session_store)

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    return TestClient(app)


@pytest.fixture
def make_owner(db):
    def _make(email="owner@example.com", first_name="Olivia", last_name="Owner", phone="555-0100"):
        return accounts.register(
            db,
            email=email,
            password="whiskers123",
            first_name=first_name,
            last_name=last_name,
            role="owner",
            phone=phone,
        )

    return _make


@pytest.fixture
def make_sitter(db):
    def _make(email, first_name="Sam", last_name="Sitter", rating=None, **profile):
        user = accounts.register(
            db,
            email=email,
            password="purring456",
            first_name=first_name,
            last_name=last_name,
            role="sitter",
        )
        if profile:
            sitters.update_own_profile(db, user, **profile)
        if rating is not None:
            # fixture shortcut; production code only sets this from reviews
            user.sitter_profile.rating_average = rating
            db.commit()
        db.refresh(user)
        return user.sitter_profile

    return _make
