#!/usr/bin/env python3
"""
Database Seed Script

Populates the database with sample data for development.

USAGE:
    # From the project root, with the package installed
    python scripts/seed_data.py
    python scripts/seed_data.py --keep   # don't clear existing data

This script:
1. Connects to the database configured in catalog settings
2. Clears existing data (unless --keep)
3. Creates sample authors and books
4. Creates a demo user that can log in and add books
"""

import argparse

from sqlalchemy import delete
from sqlalchemy.orm import Session

from catalog.config import get_settings
from catalog.database import Database
from catalog.models import Author, Book, BookGenre, User
from catalog.services.security import hash_password

DEMO_USERNAME = "mluukkai"
DEMO_PASSWORD = "secret"

AUTHORS = [
    {"name": "Robert Martin", "born": 1952},
    {"name": "Martin Fowler", "born": 1963},
    {"name": "Fyodor Dostoevsky", "born": 1821},
    {"name": "Joshua Kerievsky"},
    {"name": "Sandi Metz"},
]

BOOKS = [
    {
        "title": "Clean Code",
        "published": 2008,
        "author": "Robert Martin",
        "genres": ["refactoring"],
    },
    {
        "title": "Agile software development",
        "published": 2002,
        "author": "Robert Martin",
        "genres": ["agile", "patterns", "design"],
    },
    {
        "title": "Refactoring, edition 2",
        "published": 2018,
        "author": "Martin Fowler",
        "genres": ["refactoring"],
    },
    {
        "title": "Refactoring to patterns",
        "published": 2008,
        "author": "Joshua Kerievsky",
        "genres": ["refactoring", "patterns"],
    },
    {
        "title": "Practical Object-Oriented Design, An Agile Primer Using Ruby",
        "published": 2012,
        "author": "Sandi Metz",
        "genres": ["refactoring", "design"],
    },
    {
        "title": "Crime and punishment",
        "published": 1866,
        "author": "Fyodor Dostoevsky",
        "genres": ["classic", "crime"],
    },
    {
        "title": "Demons",
        "published": 1872,
        "author": "Fyodor Dostoevsky",
        "genres": ["classic", "revolution"],
    },
]


def clear_data(db: Session) -> None:
    """Clear all existing data from the database."""
    print("Clearing existing data...")
    db.execute(delete(BookGenre))
    db.execute(delete(Book))
    db.execute(delete(Author))
    db.execute(delete(User))
    db.commit()
    print("Data cleared.")


def create_authors(db: Session) -> dict[str, Author]:
    """Create sample authors."""
    print("Creating authors...")

    authors = {}
    for data in AUTHORS:
        author = Author(**data)
        db.add(author)
        authors[data["name"]] = author

    db.commit()
    print(f"Created {len(authors)} authors.")
    return authors


def create_books(db: Session, authors: dict[str, Author]) -> list[Book]:
    """Create sample books referencing the sample authors."""
    print("Creating books...")

    books = []
    for data in BOOKS:
        book = Book(
            title=data["title"],
            published=data["published"],
            author=authors[data["author"]],
            genres=data["genres"],
        )
        db.add(book)
        books.append(book)

    db.commit()
    print(f"Created {len(books)} books.")
    return books


def create_demo_user(db: Session) -> User:
    """Create a user that can log in and edit the catalog."""
    user = User(
        username=DEMO_USERNAME,
        favorite_genre="refactoring",
        password_hash=hash_password(DEMO_PASSWORD),
    )
    db.add(user)
    db.commit()
    print(f"Created user '{DEMO_USERNAME}' (password: '{DEMO_PASSWORD}').")
    return user


def seed_database(clear_existing: bool = True) -> None:
    """
    Main function to seed the database.

    Args:
        clear_existing: If True, clears existing data before seeding.
    """
    settings = get_settings()
    database = Database(settings.database_url)

    print("=" * 60)
    print("Starting database seed...")
    print("=" * 60)

    database.create_tables()
    db = database.session()

    try:
        if clear_existing:
            clear_data(db)

        authors = create_authors(db)
        books = create_books(db, authors)
        create_demo_user(db)

        print("=" * 60)
        print("Database seeding completed successfully!")
        print("=" * 60)
        print("\nSummary:")
        print(f"  - Authors: {len(authors)}")
        print(f"  - Books: {len(books)}")
        print(f"\nGraphQL endpoint at http://localhost:{settings.port}/graphql")

    except Exception as e:
        print(f"Error seeding database: {e}")
        db.rollback()
        raise
    finally:
        db.close()
        database.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the catalog database")
    parser.add_argument(
        "--keep",
        action="store_true",
        help="Keep existing data instead of clearing it first",
    )
    args = parser.parse_args()

    seed_database(clear_existing=not args.keep)


if __name__ == "__main__":
    main()
