"""
GraphQL Book Type

Defines the Book type for GraphQL queries and subscriptions.
"""

import strawberry

from catalog.graphql.types.author import AuthorType


@strawberry.type(name="Book")
class BookType:
    """
    GraphQL type representing a book.

    The author is always resolved to the full Author object, never
    returned as a bare reference.
    """

    id: strawberry.ID
    title: str
    published: int
    author: AuthorType
    genres: list[str] = strawberry.field(default_factory=list)
