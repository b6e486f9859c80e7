"""
GraphQL User Type

Defines the User and Token types for GraphQL queries.
Only exposes public/safe fields.
"""

import strawberry


@strawberry.type(name="User")
class UserType:
    """
    GraphQL type representing a registered user.

    Maps to the User SQLAlchemy model but never exposes the password
    hash.
    """

    id: strawberry.ID
    username: str
    favorite_genre: str


@strawberry.type(name="Token")
class TokenType:
    """
    Response type for the login mutation.

    value is the signed bearer credential. favoriteGenre is copied from
    the user at sign-in time so clients don't need a second round trip.
    """

    value: str
    favorite_genre: str
