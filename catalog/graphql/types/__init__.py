"""
GraphQL Types Package

GraphQL type definitions that map to the SQLAlchemy models, written with
Strawberry's decorator syntax.

Types defined here (GraphQL names in parentheses):
- AuthorType (Author): Author with computed book count
- BookType (Book): Book with its resolved author and genres
- UserType (User): Public user information
- TokenType (Token): Login result
"""

from catalog.graphql.types.author import AuthorType
from catalog.graphql.types.book import BookType
from catalog.graphql.types.user import TokenType, UserType

__all__ = [
    "AuthorType",
    "BookType",
    "UserType",
    "TokenType",
]
