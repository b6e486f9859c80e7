"""
Alembic Environment Configuration

This file controls how Alembic runs migrations.

Key responsibilities:
1. Load database URL from application settings (not alembic.ini)
2. Import all SQLAlchemy models for autogenerate
3. Configure migration context
4. Handle online vs offline migrations

COMMANDS:
- alembic revision --autogenerate -m "message"  # Create migration
- alembic upgrade head                           # Apply all migrations
- alembic downgrade -1                           # Rollback one migration
"""

from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool

from alembic import context

from catalog.config import get_settings
from catalog.database import Base
from catalog.models import Author, Book, BookGenre, User  # noqa: F401 - needed for autogenerate

settings = get_settings()

config = context.config

# Environment variables win over alembic.ini
config.set_main_option("sqlalchemy.url", settings.database_url)

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def run_migrations_offline() -> None:
    """
    Run migrations in 'offline' mode.

    Generates SQL scripts without connecting to the database:
        alembic upgrade head --sql > migration.sql
    """
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        url=url,
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        compare_type=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode, connected to the database."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,  # Don't pool connections for migrations
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
            # SQLite can't ALTER most constraints in place
            render_as_batch=connection.dialect.name == "sqlite",
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
