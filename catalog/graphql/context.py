"""
GraphQL Context

Provides request context to all GraphQL resolvers including:
- Database session for queries
- Settings the application was built with
- Event channel for subscriptions
- Current authenticated user (if any)

The context is created fresh for each GraphQL request (and once per
WebSocket connection) and passed to all resolvers via the `info`
parameter.

Authentication never rejects a request here. A missing, malformed or
invalid bearer credential leaves the user unset and the operation runs
anonymously; mutations that need a user raise their own error. Each
fallback other than "no header" is logged with an `auth_failure`
attribute on the log record.
"""

import logging

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.orm import Session
from starlette.requests import HTTPConnection
from strawberry.fastapi import BaseContext

from catalog.config import Settings
from catalog.database import get_db
from catalog.models import User
from catalog.services.events import PubSub
from catalog.services.security import verify_token_type

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


class GraphQLContext(BaseContext):
    """
    Context object available to all GraphQL resolvers.

    Inherits from Strawberry's BaseContext for proper integration.

    Attributes:
        db: SQLAlchemy database session
        settings: Application settings (token secret, expiry)
        events: Publish/subscribe channel of this application instance
        user: Currently authenticated user (None if anonymous)
    """

    def __init__(
        self,
        db: Session,
        settings: Settings,
        events: PubSub,
        user: User | None = None,
    ):
        super().__init__()
        self.db = db
        self.settings = settings
        self.events = events
        self.user = user


def _anonymous(reason: str, detail: str) -> None:
    logger.warning(
        f"Proceeding anonymously ({reason}): {detail}",
        extra={"auth_failure": reason},
    )
    return None


def extract_bearer_token(authorization: str) -> str | None:
    """
    Pull the credential out of an Authorization header value.

    Returns:
        The token, or None if the header doesn't use the Bearer scheme
        or carries no token
    """
    if not authorization.lower().startswith(BEARER_PREFIX):
        return None

    token = authorization[len(BEARER_PREFIX):].strip()
    return token or None


def get_user_from_authorization(
    db: Session,
    settings: Settings,
    authorization: str | None,
) -> User | None:
    """
    Resolve the current user from an Authorization header value.

    Args:
        db: Database session
        settings: Settings holding the token secret
        authorization: Raw header value, None if the header is absent

    Returns:
        User object if the credential is valid, None otherwise
    """
    if not authorization:
        return None

    token = extract_bearer_token(authorization)
    if token is None:
        return _anonymous("malformed_header", "expected 'Bearer <token>'")

    payload = verify_token_type(token, settings.secret_key, "access")
    if payload is None:
        return _anonymous("invalid_token", "token failed verification")

    user_id = payload.get("sub")
    if user_id is None or not str(user_id).isdigit():
        return _anonymous("missing_subject", "token carries no user id")

    user = db.execute(
        select(User).where(User.id == int(user_id))
    ).scalar_one_or_none()

    if user is None:
        return _anonymous("unknown_user", f"no user with id {user_id}")

    return user


async def get_context(
    connection: HTTPConnection,
    db: Session = Depends(get_db),
) -> GraphQLContext:
    """
    Create GraphQL context for each request.

    Called by Strawberry for every HTTP request and for every WebSocket
    connection. For WebSockets the Authorization header of the upgrade
    request is used.

    Args:
        connection: The incoming HTTP request or WebSocket
        db: Database session from get_db

    Returns:
        GraphQLContext with db session, settings, event channel and
        optional user
    """
    settings: Settings = connection.app.state.settings
    user = get_user_from_authorization(
        db,
        settings,
        connection.headers.get("Authorization"),
    )

    return GraphQLContext(
        db=db,
        settings=settings,
        events=connection.app.state.events,
        user=user,
    )
