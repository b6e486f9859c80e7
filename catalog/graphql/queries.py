"""
GraphQL Query Resolvers

Defines all read operations (queries) for the GraphQL API.
Each resolver fetches data from the database using the context.
"""

import strawberry
from sqlalchemy import func, select
from sqlalchemy.orm import Session, selectinload
from strawberry.types import Info

from catalog.graphql.context import GraphQLContext
from catalog.graphql.types import AuthorType, BookType, UserType
from catalog.models import Author, Book, BookGenre, User


def author_to_graphql(author: Author) -> AuthorType:
    """Convert SQLAlchemy Author model to GraphQL AuthorType."""
    return AuthorType(
        id=strawberry.ID(str(author.id)),
        name=author.name,
        born=author.born,
    )


def book_to_graphql(book: Book) -> BookType:
    """Convert SQLAlchemy Book model to GraphQL BookType."""
    return BookType(
        id=strawberry.ID(str(book.id)),
        title=book.title,
        published=book.published,
        author=author_to_graphql(book.author),
        genres=list(book.genres),
    )


def user_to_graphql(user: User) -> UserType:
    """Convert SQLAlchemy User model to GraphQL UserType."""
    return UserType(
        id=strawberry.ID(str(user.id)),
        username=user.username,
        favorite_genre=user.favorite_genre,
    )


def find_author_by_name(db: Session, name: str) -> Author | None:
    """Look up an author by exact name."""
    return db.execute(
        select(Author).where(Author.name == name)
    ).scalar_one_or_none()


@strawberry.type
class Query:
    """
    GraphQL Query type containing all read operations.

    All resolvers receive an `info` parameter that contains the
    GraphQL context with database session and current user.
    """

    @strawberry.field(description="Total number of books")
    def book_count(self, info: Info[GraphQLContext, None]) -> int:
        stmt = select(func.count()).select_from(Book)
        return info.context.db.execute(stmt).scalar_one()

    @strawberry.field(description="Total number of authors")
    def author_count(self, info: Info[GraphQLContext, None]) -> int:
        stmt = select(func.count()).select_from(Author)
        return info.context.db.execute(stmt).scalar_one()

    @strawberry.field(description="List books, optionally filtered by author and genre")
    def all_books(
        self,
        info: Info[GraphQLContext, None],
        author: str | None = None,
        genre: str | None = None,
    ) -> list[BookType]:
        """
        Get books matching every filter given.

        Args:
            author: Exact author name. An unknown name matches no books.
            genre: Genre the book's genre list must contain

        Returns:
            Matching books with their authors resolved
        """
        db = info.context.db

        stmt = select(Book).options(
            selectinload(Book.author), selectinload(Book.genre_entries)
        )

        if author is not None:
            author_row = find_author_by_name(db, author)
            if author_row is None:
                return []
            stmt = stmt.where(Book.author_id == author_row.id)

        if genre is not None:
            stmt = stmt.where(Book.genre_entries.any(BookGenre.name == genre))

        books = db.execute(stmt.order_by(Book.id)).scalars().all()

        return [book_to_graphql(b) for b in books]

    @strawberry.field(description="List all authors")
    def all_authors(self, info: Info[GraphQLContext, None]) -> list[AuthorType]:
        authors = info.context.db.execute(
            select(Author).order_by(Author.id)
        ).scalars().all()

        return [author_to_graphql(a) for a in authors]

    @strawberry.field(description="Get the currently authenticated user")
    def me(self, info: Info[GraphQLContext, None]) -> UserType | None:
        """
        Get the current authenticated user.

        Returns None if not authenticated.
        """
        user = info.context.user

        if user is None:
            return None

        return user_to_graphql(user)
