"""
GraphQL Mutation Resolvers

Defines all write operations (mutations) for the GraphQL API.
Editing the catalog requires authentication; creating an account and
signing in don't.

Every error raised here carries a machine-checkable
`extensions.code` so clients can branch on it:
- UNAUTHENTICATED: no current user on a mutation that needs one
- NOT_FOUND: the author to edit doesn't exist
- BAD_USER_INPUT: invalid or duplicate input, failed sign-in
"""

import logging
from datetime import timedelta

import strawberry
from graphql import GraphQLError
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from strawberry.types import Info

from catalog.graphql.context import GraphQLContext
from catalog.graphql.queries import (
    author_to_graphql,
    book_to_graphql,
    find_author_by_name,
    user_to_graphql,
)
from catalog.graphql.types import AuthorType, BookType, TokenType, UserType
from catalog.models import Author, Book, User
from catalog.services.events import EventType
from catalog.services.security import (
    create_access_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Error classes for GraphQL
# =============================================================================


class AuthenticationError(GraphQLError):
    """Raised when authentication is required but not provided."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message, extensions={"code": "UNAUTHENTICATED"})


class NotFoundError(GraphQLError):
    """Raised when a requested resource is not found."""

    def __init__(self, message: str, **extensions):
        super().__init__(message, extensions={"code": "NOT_FOUND", **extensions})


class UserInputError(GraphQLError):
    """Raised when input is invalid or rejected by the database."""

    def __init__(self, message: str, **extensions):
        super().__init__(message, extensions={"code": "BAD_USER_INPUT", **extensions})


def require_auth(info: Info[GraphQLContext, None]) -> User:
    """Helper to require authentication and return the user."""
    user = info.context.user
    if user is None:
        raise AuthenticationError()
    return user


def storage_error_message(error: Exception) -> str:
    """Message of a model validation error or database constraint error."""
    if isinstance(error, IntegrityError):
        return str(error.orig)
    return str(error)


def find_or_create_author(db: Session, name: str) -> Author:
    """
    Return the author with this exact name, creating it if needed.

    A new author is committed before the caller goes on. If another
    request inserted the same name in the meantime, the unique
    constraint rejects ours and the existing record is returned instead.

    Raises:
        ValueError: If the name fails model validation
    """
    author = find_author_by_name(db, name)
    if author is not None:
        return author

    author = Author(name=name)
    db.add(author)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        existing = find_author_by_name(db, name)
        if existing is None:
            raise
        logger.info(f"Author '{name}' was created concurrently, reusing it")
        return existing

    logger.info(f"Created author '{name}' (id={author.id})")
    return author


# =============================================================================
# Mutation Type
# =============================================================================


@strawberry.type
class Mutation:
    """
    GraphQL Mutation type containing all write operations.

    addBook and editAuthor require a bearer token.
    """

    # =========================================================================
    # Catalog Mutations
    # =========================================================================

    @strawberry.mutation(description="Add a book, creating its author if needed")
    def add_book(
        self,
        info: Info[GraphQLContext, None],
        title: str,
        author: str,
        published: int,
        genres: list[str],
    ) -> BookType | None:
        """
        Add a book to the catalog.

        Requires authentication. Subscribers of bookAdded are notified
        once the book is saved.
        """
        require_auth(info)
        db = info.context.db

        try:
            author_row = find_or_create_author(db, author)

            book = Book(
                title=title,
                published=published,
                author=author_row,
                genres=genres,
            )
            db.add(book)
            db.commit()
        except (ValueError, IntegrityError) as e:
            db.rollback()
            message = storage_error_message(e)
            raise UserInputError(
                f"Saving book failed: {message}",
                invalidArgs=title,
                error=message,
            ) from e

        result = book_to_graphql(book)

        info.context.events.publish(EventType.BOOK_ADDED, result)

        return result

    @strawberry.mutation(description="Set the birth year of an author")
    def edit_author(
        self,
        info: Info[GraphQLContext, None],
        name: str,
        set_born_to: int,
    ) -> AuthorType | None:
        """
        Update an existing author's birth year.

        Requires authentication. Never creates an author.
        """
        require_auth(info)
        db = info.context.db

        author = find_author_by_name(db, name)

        if author is None:
            raise NotFoundError(f"Author '{name}' not found", invalidArgs=name)

        author.born = set_born_to
        db.commit()
        db.refresh(author)

        return author_to_graphql(author)

    # =========================================================================
    # Authentication Mutations
    # =========================================================================

    @strawberry.mutation(description="Register a new user account")
    def create_user(
        self,
        info: Info[GraphQLContext, None],
        username: str,
        favorite_genre: str,
        password: str,
    ) -> UserType | None:
        """
        Create a new user account.

        The supplied password is hashed with bcrypt before storage.
        """
        db = info.context.db

        stmt = select(User).where(User.username == username)
        if db.execute(stmt).scalar_one_or_none():
            raise UserInputError(
                f"Username '{username}' is already taken",
                invalidArgs=username,
            )

        try:
            user = User(
                username=username,
                favorite_genre=favorite_genre,
                password_hash=hash_password(password),
            )
            db.add(user)
            db.commit()
        except (ValueError, IntegrityError) as e:
            db.rollback()
            message = storage_error_message(e)
            raise UserInputError(
                f"Creating user failed: {message}",
                invalidArgs=username,
                error=message,
            ) from e

        db.refresh(user)

        return user_to_graphql(user)

    @strawberry.mutation(description="Login with username and password")
    def login(
        self,
        info: Info[GraphQLContext, None],
        username: str,
        password: str,
    ) -> TokenType | None:
        """
        Authenticate with username and password.

        Returns a bearer token and the user's favorite genre on success.
        """
        db = info.context.db
        settings = info.context.settings

        stmt = select(User).where(User.username == username)
        user = db.execute(stmt).scalar_one_or_none()

        if user is None:
            raise UserInputError("User not found")

        if not verify_password(password, user.password_hash):
            raise UserInputError("Wrong credentials")

        expires_delta = None
        if settings.access_token_expire_minutes:
            expires_delta = timedelta(minutes=settings.access_token_expire_minutes)

        token = create_access_token(
            {"sub": str(user.id), "username": user.username},
            settings.secret_key,
            expires_delta=expires_delta,
        )

        return TokenType(value=token, favorite_genre=user.favorite_genre)
