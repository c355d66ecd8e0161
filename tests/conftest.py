import os

# Configure the app for an isolated in-memory database before it is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["TRUST_PROXY"] = "true"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import models  # noqa: F401
from database import Base, get_db
from main import app
from utils.bootstrap import seed_users

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

ACCOUNTS = [
    {"email": "admin@portal.com", "password": "admin123", "first_name": "Admin", "last_name": "Portal", "role": "admin"},
    {"email": "agent@portal.com", "password": "agent123", "first_name": "Agent", "last_name": "Smith", "role": "moderator"},
    {"email": "zeno@portal.com", "password": "zeno123", "first_name": "Zeno", "last_name": "Martinez", "role": "moderator"},
    {"email": "khay@portal.com", "password": "khay123", "first_name": "Khay", "last_name": "Brown", "role": "moderator", "is_active": False},
]


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


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
def seeded(db_session):
    seed_users(db_session, ACCOUNTS)
    return db_session


@pytest.fixture
def make_client(seeded):
    app.dependency_overrides[get_db] = override_get_db
    clients = []

    def _make():
        client = TestClient(app)
        clients.append(client)
        return client

    yield _make

    for client in clients:
        client.close()
    app.dependency_overrides.clear()


def login(client, email, password):
    return client.post("/api/auth/login", json={"email": email, "password": password})


@pytest.fixture
def admin_client(make_client):
    client = make_client()
    assert login(client, "admin@portal.com", "admin123").status_code == 200
    return client


@pytest.fixture
def moderator_client(make_client):
    client = make_client()
    assert login(client, "agent@portal.com", "agent123").status_code == 200
    return client


@pytest.fixture
def anonymous_client(make_client):
    return make_client()
