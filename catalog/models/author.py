"""
Author Model

Represents an author in the catalog.

Authors are never created directly through the API: adding a book whose
author name has not been seen before creates the author record on the
fly. The only later change is setting the birth year.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from catalog.database import Base

if TYPE_CHECKING:
    from catalog.models.book import Book

AUTHOR_NAME_MIN_LENGTH = 2


class Author(Base):
    """
    Author model representing writers in the catalog.

    Table: authors

    Relationships:
    - books: One-to-Many (every book references exactly one author)

    Indexes:
    - Primary key on id (automatic)
    - name: Unique index; the catalog looks authors up by exact name

    Example:
        author = Author(name="J.R.R. Tolkien")
        db.add(author)
        db.commit()
    """

    __tablename__ = "authors"

    id: Mapped[int] = mapped_column(primary_key=True)

    # unique=True makes the database reject a second author with the same
    # name (IntegrityError), which the add-book flow relies on
    name: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        nullable=False,
        comment="Author's full name"
    )

    born: Mapped[int | None] = mapped_column(
        Integer,
        nullable=True,
        comment="Year of birth"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="When the author record was created"
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
        comment="When the author record was last updated"
    )

    books: Mapped[list["Book"]] = relationship(
        "Book",
        back_populates="author",
    )

    @validates("name")
    def validate_name(self, key: str, value: str) -> str:
        if value is None or len(value.strip()) < AUTHOR_NAME_MIN_LENGTH:
            raise ValueError(
                f"Author name must be at least {AUTHOR_NAME_MIN_LENGTH} characters long"
            )
        return value

    def __repr__(self) -> str:
        return f"Author(id={self.id}, name='{self.name}')"
