"""
GraphQL Package

This package provides the catalog's GraphQL API using Strawberry GraphQL.

Features:
- Query resolvers for books, authors and the current user
- Mutation resolvers for adding books, editing authors and accounts
- Subscription for books added in real time
- Authentication via JWT bearer tokens in context

Usage:
    The GraphQL endpoint is available at /graphql (HTTP and WebSocket)
    with an interactive Apollo Sandbox for development.

Example Query:
    query {
        allBooks(genre: "fantasy") {
            title
            published
            author { name bookCount }
        }
    }
"""

import strawberry
from graphql import GraphQLError
from strawberry.extensions import MaskErrors
from strawberry.fastapi import GraphQLRouter

from catalog.config import Settings
from catalog.graphql.context import get_context
from catalog.graphql.mutations import Mutation
from catalog.graphql.queries import Query
from catalog.graphql.subscriptions import Subscription

MASKED_ERROR_MESSAGE = "Unexpected error."


def should_mask_error(error: GraphQLError) -> bool:
    """
    Mask errors that didn't originate as a GraphQLError.

    Errors the resolvers raise on purpose (with an extensions.code) and
    query validation errors reach the client unchanged; anything else
    (database failures, bugs) is reported with a generic message.
    """
    original = error.original_error
    return original is not None and not isinstance(original, GraphQLError)


def create_schema(mask_errors: bool = False) -> strawberry.Schema:
    """
    Build the GraphQL schema.

    Args:
        mask_errors: Hide messages of unexpected errors from clients
    """
    extensions = []
    if mask_errors:
        # One extension instance per execution
        extensions.append(
            lambda: MaskErrors(
                should_mask_error=should_mask_error,
                error_message=MASKED_ERROR_MESSAGE,
            )
        )

    return strawberry.Schema(
        query=Query,
        mutation=Mutation,
        subscription=Subscription,
        extensions=extensions,
    )


# Unmasked schema, used for SDL export and direct execution in tests
schema = create_schema()


def create_graphql_router(settings: Settings) -> GraphQLRouter:
    """
    Create the GraphQL router for FastAPI.

    Serves queries and mutations over HTTP and subscriptions over
    WebSocket on the same path.

    Returns:
        GraphQLRouter configured with schema and context
    """
    return GraphQLRouter(
        create_schema(mask_errors=not settings.debug),
        context_getter=get_context,
        graphql_ide="apollo-sandbox" if settings.graphql_ide_enabled else None,
    )


__all__ = ["schema", "create_schema", "create_graphql_router", "should_mask_error"]
