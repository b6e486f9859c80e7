"""
pytest Fixtures for Catalog API Tests

This file contains shared fixtures used across all test files.

Every test gets its own application instance built with create_app(),
its own in-memory SQLite database and its own event channel. Nothing is
shared between tests, so there are no dependency overrides to undo.

FIXTURE GRAPH:
    settings ─┐
    database ─┼─> app ─> client
              └─> db_session ─> sample_author ─> sample_book
                              └─> sample_user ─> auth_token
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app.
# catalog.main builds a process-wide app from get_settings() at import
# time, which needs a valid secret key and shouldn't touch a file database.
import os

os.environ["SECRET_KEY"] = "test-secret-key-for-unit-tests-at-least-32-characters-long"
os.environ["DATABASE_URL"] = "sqlite://"

from collections.abc import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from catalog.config import Settings
from catalog.database import Database
from catalog.main import create_app
from catalog.models import Author, Book, User
from catalog.services.security import create_access_token, hash_password

TEST_SECRET_KEY = os.environ["SECRET_KEY"]


# =============================================================================
# APPLICATION FIXTURES
# =============================================================================


@pytest.fixture
def settings() -> Settings:
    """Settings for one test application (in-memory database, masked errors)."""
    return Settings(
        secret_key=TEST_SECRET_KEY,
        database_url="sqlite://",
        debug=False,
    )


@pytest.fixture
def database(settings: Settings) -> Generator[Database, None, None]:
    """
    Create a fresh in-memory database with all tables.

    Database uses a StaticPool for "sqlite://", so the test's own session
    and the sessions the app opens per request see the same data.
    """
    database = Database(settings.database_url)
    database.create_tables()

    yield database

    database.drop_tables()
    database.dispose()


@pytest.fixture
def db_session(database: Database) -> Generator[Session, None, None]:
    """Session for arranging data and checking results directly."""
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def app(settings: Settings, database: Database) -> FastAPI:
    """Application instance bound to the test settings and database."""
    return create_app(settings=settings, database=database)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient, None, None]:
    """
    Create a test client for the application.

    Using TestClient as a context manager runs the lifespan, so the app
    is marked ready before the first request.
    """
    with TestClient(app) as test_client:
        yield test_client


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================


@pytest.fixture
def sample_author(db_session: Session) -> Author:
    """Create a sample author for testing."""
    author = Author(name="Robert Martin", born=1952)
    db_session.add(author)
    db_session.commit()
    db_session.refresh(author)
    return author


@pytest.fixture
def sample_book(db_session: Session, sample_author: Author) -> Book:
    """Create a sample book by sample_author."""
    book = Book(
        title="Clean Code",
        published=2008,
        author=sample_author,
        genres=["refactoring"],
    )
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def multiple_books(db_session: Session, sample_author: Author) -> list[Book]:
    """
    Create a small catalog with two authors and overlapping genres.

    Robert Martin: Clean Code (refactoring),
                   Agile software development (agile, patterns, design)
    Martin Fowler: Refactoring, edition 2 (refactoring)
    """
    fowler = Author(name="Martin Fowler", born=1963)
    db_session.add(fowler)

    books = [
        Book(
            title="Clean Code",
            published=2008,
            author=sample_author,
            genres=["refactoring"],
        ),
        Book(
            title="Agile software development",
            published=2002,
            author=sample_author,
            genres=["agile", "patterns", "design"],
        ),
        Book(
            title="Refactoring, edition 2",
            published=2018,
            author=fowler,
            genres=["refactoring"],
        ),
    ]
    db_session.add_all(books)
    db_session.commit()
    for book in books:
        db_session.refresh(book)

    return books


@pytest.fixture
def sample_user(db_session: Session) -> User:
    """Create a sample user for testing."""
    user = User(
        username="testuser",
        favorite_genre="refactoring",
        password_hash=hash_password("SecurePass123"),
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


@pytest.fixture
def auth_token(sample_user: User) -> str:
    """Bearer token for sample_user, signed with the test secret."""
    return create_access_token(
        {"sub": str(sample_user.id), "username": sample_user.username},
        TEST_SECRET_KEY,
    )
