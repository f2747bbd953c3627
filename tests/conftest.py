"""
Shared fixtures: an in-memory SQLite database per test, factories for the
organization tables, and a TestClient wired to the same database.
"""

import os

# Must be set before chapterdesk.core.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SECRET_KEY", "test-secret-key")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from chapterdesk.core.security import create_access_token
from chapterdesk.crud.role_assignment import RoleAssignmentRepository
from chapterdesk.db.database import Base, get_db
from chapterdesk.main import app
from chapterdesk.models import Chapter, Member, User, UserRole, Zone
from chapterdesk.services.access_scope_service import AccessScopeResolver
from chapterdesk.services.role_assignment_service import RoleAssignmentService


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
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


class Factory:
    """Creates and commits organization rows."""

    def __init__(self, db):
        self.db = db
        self._counter = 0

    def _next(self) -> int:
        self._counter += 1
        return self._counter

    def _save(self, obj):
        self.db.add(obj)
        self.db.commit()
        self.db.refresh(obj)
        return obj

    def zone(self, name=None) -> Zone:
        return self._save(Zone(name=name or f"Zone {self._next()}"))

    def chapter(self, zone, name=None) -> Chapter:
        return self._save(Chapter(name=name or f"Chapter {self._next()}", zone_id=zone.id))

    def user(self, email=None, role=UserRole.USER, full_name=None) -> User:
        n = self._next()
        return self._save(User(
            email=email or f"user{n}@example.com",
            full_name=full_name or f"User {n}",
            role=role,
            is_active=True,
        ))

    def member(self, chapter=None, user=None, name=None) -> Member:
        return self._save(Member(
            member_name=name or f"Member {self._next()}",
            chapter_id=chapter.id if chapter is not None else None,
            user_id=user.id if user is not None else None,
        ))

    def member_with_user(self, chapter=None, role=UserRole.USER):
        user = self.user(role=role)
        return self.member(chapter=chapter, user=user), user


@pytest.fixture
def factory(db):
    return Factory(db)


@pytest.fixture
def repository(db):
    return RoleAssignmentRepository(db)


@pytest.fixture
def role_service(repository):
    return RoleAssignmentService(repository)


@pytest.fixture
def resolver(repository):
    return AccessScopeResolver(repository)


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {create_access_token(user.email)}"}


@pytest.fixture
def auth():
    return auth_headers
