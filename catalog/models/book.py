"""
Book Model

The central model of the catalog.

Each book references exactly one author through a foreign key (many books
to one author). Genres are an ordered list of plain strings; since a
relational table has no list column, they are stored one row per genre in
the book_genres child table and exposed on the model as Book.genres.

WHY a child table for genres?
=============================
The catalog filters books by "genre list contains X". With one row per
genre that is a portable EXISTS query:

    select(Book).where(Book.genre_entries.any(BookGenre.name == "fantasy"))

ordering_list keeps the position column in step with list order, and
association_proxy lets callers read and assign genres as list[str]:

    book = Book(title="The Hobbit", published=1937, genres=["fantasy"])
    book.genres  # ["fantasy"]
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, func
from sqlalchemy.ext.associationproxy import AssociationProxy, association_proxy
from sqlalchemy.ext.orderinglist import ordering_list
from sqlalchemy.orm import Mapped, mapped_column, relationship, validates

from catalog.database import Base

if TYPE_CHECKING:
    from catalog.models.author import Author

BOOK_TITLE_MIN_LENGTH = 2


class BookGenre(Base):
    """
    One genre of one book.

    Table: book_genres

    position preserves the order genres were given in.
    """

    __tablename__ = "book_genres"

    id: Mapped[int] = mapped_column(primary_key=True)
    book_id: Mapped[int] = mapped_column(
        ForeignKey("books.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(
        String(100),
        index=True,
        nullable=False,
        comment="Genre name"
    )

    def __init__(self, name: str, position: int | None = None) -> None:
        self.name = name
        if position is not None:
            self.position = position

    def __repr__(self) -> str:
        return f"BookGenre(book_id={self.book_id}, position={self.position}, name='{self.name}')"


class Book(Base):
    """
    Book model representing books in the catalog.

    Table: books

    Fields:
    - title: Book title (required)
    - published: Publication year (required)
    - author_id: Foreign key to the author (required)
    - genres: Ordered list of genre names

    Books are created by the add-book mutation and never updated or
    deleted afterwards.

    Example:
        book = Book(
            title="The Hobbit",
            published=1937,
            author=tolkien,
            genres=["fantasy", "classic"],
        )
    """

    __tablename__ = "books"

    id: Mapped[int] = mapped_column(primary_key=True)

    title: Mapped[str] = mapped_column(
        String(255),
        index=True,
        nullable=False,
        comment="Book title"
    )

    published: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        comment="Year of publication"
    )

    author_id: Mapped[int] = mapped_column(
        ForeignKey("authors.id"),
        index=True,
        nullable=False,
        comment="The author who wrote the book"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="When the book record was created"
    )

    # -------------------------------------------------------------------------
    # Relationships
    # -------------------------------------------------------------------------
    author: Mapped["Author"] = relationship(
        "Author",
        back_populates="books",
    )

    genre_entries: Mapped[list[BookGenre]] = relationship(
        BookGenre,
        order_by=BookGenre.position,
        collection_class=ordering_list("position"),
        cascade="all, delete-orphan",
    )

    genres: AssociationProxy[list[str]] = association_proxy("genre_entries", "name")

    @validates("title")
    def validate_title(self, key: str, value: str) -> str:
        if value is None or len(value.strip()) < BOOK_TITLE_MIN_LENGTH:
            raise ValueError(
                f"Book title must be at least {BOOK_TITLE_MIN_LENGTH} characters long"
            )
        return value

    def __repr__(self) -> str:
        return f"Book(id={self.id}, title='{self.title}')"
