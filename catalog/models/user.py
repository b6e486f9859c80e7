"""
User Model

Represents an account that can sign in and edit the catalog.

The password hash is write-only from the API's point of view: it is set
when the account is created and read only to verify a login. No GraphQL
type exposes it.
"""

from datetime import datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column, validates

from catalog.database import Base

USERNAME_MIN_LENGTH = 3


class User(Base):
    """
    User model representing registered users.

    Table: users

    Indexes:
    - Primary key on id (automatic)
    - username: Unique index for login lookups

    Example:
        user = User(
            username="mluukkai",
            favorite_genre="refactoring",
            password_hash=hash_password("secret"),
        )
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)

    username: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,
        nullable=False,
        comment="Unique username used to sign in"
    )

    favorite_genre: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Genre used to build the user's recommendations"
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="When the account was created"
    )

    @validates("username")
    def validate_username(self, key: str, value: str) -> str:
        if value is None or len(value.strip()) < USERNAME_MIN_LENGTH:
            raise ValueError(
                f"Username must be at least {USERNAME_MIN_LENGTH} characters long"
            )
        return value

    def __repr__(self) -> str:
        return f"User(id={self.id}, username='{self.username}')"
