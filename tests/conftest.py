"""Shared pytest fixtures: in-memory SQLite, fast password hashing, API client."""

import os

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

from typing import Dict, Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from config.database import Base, engine_options, get_db
from common.exceptions import StoreError, UniqueConstraintViolation
from modules.user.models import User
from modules.user.repository import UserStore
import modules.catalog.models  # noqa: F401


class FakeHasher:
    """Reversible stand-in for bcrypt: fast, and obviously not a real hash."""

    def __init__(self):
        self.hashed = []

    def hash(self, secret: str) -> str:
        self.hashed.append(secret)
        return "fake$" + secret[::-1]

    def verify(self, secret: str, digest: str) -> bool:
        return digest == "fake$" + secret[::-1]


class InMemoryUserStore(UserStore):
    """User store kept in a dict, with switches to simulate store failures."""

    def __init__(self):
        self.users: Dict[str, User] = {}
        self.fail_lookup = False
        self.fail_insert: Optional[Exception] = None
        self.hide_existing = False

    def find_by_email(self, email):
        if self.fail_lookup:
            raise StoreError("connection refused")
        if self.hide_existing:
            return None
        return self.users.get(email)

    def insert(self, nom, prenom, email, telephone, password_hash):
        if self.fail_insert is not None:
            raise self.fail_insert
        if email in self.users:
            raise UniqueConstraintViolation("duplicate key value violates unique constraint")
        user = User(
            id=len(self.users) + 1, nom=nom, prenom=prenom, email=email,
            telephone=telephone, password_hash=password_hash,
        )
        self.users[email] = user
        return user.id


@pytest.fixture
def hasher():
    return FakeHasher()


@pytest.fixture
def user_store():
    return InMemoryUserStore()


@pytest.fixture
def db_engine():
    url = "sqlite://"
    engine = create_engine(url, **engine_options(url))
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    Session = sessionmaker(bind=db_engine, autocommit=False, autoflush=False)
    session = Session()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def app(db_engine):
    from main import create_app

    Session = sessionmaker(bind=db_engine, autocommit=False, autoflush=False)

    def override_get_db():
        db = Session()
        try:
            yield db
        finally:
            db.close()

    application = create_app()
    application.dependency_overrides[get_db] = override_get_db
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
