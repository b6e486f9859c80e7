"""
GraphQL Author Type

Defines the Author type for GraphQL queries.
"""

import strawberry
from sqlalchemy import func, select
from strawberry.types import Info

from catalog.graphql.context import GraphQLContext
from catalog.models import Book


@strawberry.type(name="Author")
class AuthorType:
    """
    GraphQL type representing a book author.

    Maps to the Author SQLAlchemy model. bookCount is not stored; it is
    counted from the books table each time it is requested.
    """

    id: strawberry.ID
    name: str
    born: int | None = None

    @strawberry.field(description="Number of books in the catalog by this author")
    def book_count(self, info: Info[GraphQLContext, None]) -> int:
        stmt = (
            select(func.count())
            .select_from(Book)
            .where(Book.author_id == int(self.id))
        )
        return info.context.db.execute(stmt).scalar_one()
