"""
SQLAlchemy Models Package

Model Relationships:
- Author <- Book: One-to-Many (a book has exactly one author,
                  an author can have many books)
- Book <- BookGenre: One-to-Many ordered list of genre names

Importing this package registers every model with Base.metadata, which
Database.create_tables() and Alembic rely on.
"""

from catalog.models.author import Author
from catalog.models.book import Book, BookGenre
from catalog.models.user import User

__all__ = [
    "Author",
    "Book",
    "BookGenre",
    "User",
]
