"""
Book Catalog API Application Package

A GraphQL backend for a catalog of books and authors.

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy storage handle and session dependency
- main.py: FastAPI application factory and lifespan
- models/: SQLAlchemy ORM models
- graphql/: Strawberry schema, resolvers and request context
- services/: Password hashing, tokens, publish/subscribe
"""

__version__ = "0.1.0"
