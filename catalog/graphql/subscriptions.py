"""
GraphQL Subscription Resolvers

Real-time operations served over WebSocket at /graphql
(graphql-transport-ws and the legacy graphql-ws protocol).
"""

from collections.abc import AsyncGenerator

import strawberry
from strawberry.types import Info

from catalog.graphql.context import GraphQLContext
from catalog.graphql.types import BookType
from catalog.services.events import EventType


@strawberry.type
class Subscription:
    """
    GraphQL Subscription type.

    Subscribers only receive events published while they are connected;
    there is no replay of earlier events.
    """

    @strawberry.subscription(description="Notified with every book added from now on")
    async def book_added(
        self,
        info: Info[GraphQLContext, None],
    ) -> AsyncGenerator[BookType, None]:
        async for book in info.context.events.subscribe(EventType.BOOK_ADDED):
            yield book
