"""
Database Configuration Module

Sets up SQLAlchemy 2.0 for the catalog.

Storage Handle
==============
The engine and session factory live on a Database object instead of at
module level. The application bootstrap creates one, keeps it on
app.state, and disposes it on shutdown:

    database = Database(settings.database_url)
    database.create_tables()
    with database.session() as db:
        ...

Session Management Pattern
==========================
"Session per request": the get_db dependency opens a session from the
Database attached to the current app, hands it to the GraphQL context,
and closes it when the request (or WebSocket connection) ends.
"""

from collections.abc import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool
from starlette.requests import HTTPConnection


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Alembic uses Base.metadata to discover tables for migrations.
    """
    pass


# =============================================================================
# Storage Handle
# =============================================================================
class Database:
    """
    Owns one engine and its session factory.

    SQLite URLs get check_same_thread=False (sessions are used from the
    server's worker threads) and, for in-memory databases, a StaticPool so
    every session sees the same database. Other URLs get a sized
    connection pool with pre-ping.
    """

    def __init__(
        self,
        url: str,
        pool_size: int = 5,
        max_overflow: int = 10,
        echo: bool = False,
    ) -> None:
        self.url = url

        if url.startswith("sqlite"):
            engine_kwargs: dict = {"connect_args": {"check_same_thread": False}}
            if url in ("sqlite://", "sqlite:///:memory:"):
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs = {
                "pool_size": pool_size,
                "max_overflow": max_overflow,
                "pool_pre_ping": True,
            }

        self.engine = create_engine(url, echo=echo, **engine_kwargs)

        # autoflush off: writes reach the database on commit() or an
        # explicit flush(), never as a side effect of a query
        self._session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=self.engine,
        )

    def session(self) -> Session:
        """Create a new session bound to this database."""
        return self._session_factory()

    def ping(self) -> bool:
        """Run a trivial query to confirm the database is reachable."""
        with self.engine.connect() as connection:
            connection.execute(text("SELECT 1"))
        return True

    def create_tables(self) -> None:
        """
        Create all tables that don't exist yet.

        Convenient for development and tests. Production schemas are
        managed with Alembic migrations.
        """
        # Importing the models registers them with Base.metadata
        import catalog.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self) -> None:
        """Drop all tables. Deletes all data."""
        import catalog.models  # noqa: F401

        Base.metadata.drop_all(bind=self.engine)

    def dispose(self) -> None:
        """Close every pooled connection."""
        self.engine.dispose()

    def __repr__(self) -> str:
        return f"Database(url='{self.engine.url!r}')"


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db(connection: HTTPConnection) -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Works for both HTTP requests and WebSocket connections: the session
    comes from the Database stored on the app that received the
    connection, and is closed when the request or connection ends.

    Yields:
        SQLAlchemy Session instance
    """
    database: Database = connection.app.state.database
    db = database.session()
    try:
        yield db
    finally:
        db.close()
