"""Create catalog tables

Revision ID: 3f9c1e7a2b10
Revises:
Create Date: 2026-10-16 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9c1e7a2b10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('authors',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False, comment="Author's full name"),
        sa.Column('born', sa.Integer(), nullable=True, comment='Year of birth'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False, comment='When the author record was created'),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False, comment='When the author record was last updated'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_authors_name'), 'authors', ['name'], unique=True)

    op.create_table('users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(length=50), nullable=False, comment='Unique username used to sign in'),
        sa.Column('favorite_genre', sa.String(length=100), nullable=False, comment="Genre used to build the user's recommendations"),
        sa.Column('password_hash', sa.String(length=255), nullable=False, comment='Bcrypt hashed password'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False, comment='When the account was created'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_users_username'), 'users', ['username'], unique=True)

    op.create_table('books',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False, comment='Book title'),
        sa.Column('published', sa.Integer(), nullable=False, comment='Year of publication'),
        sa.Column('author_id', sa.Integer(), nullable=False, comment='The author who wrote the book'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False, comment='When the book record was created'),
        sa.ForeignKeyConstraint(['author_id'], ['authors.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_books_title'), 'books', ['title'], unique=False)
    op.create_index(op.f('ix_books_author_id'), 'books', ['author_id'], unique=False)

    op.create_table('book_genres',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('book_id', sa.Integer(), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False, comment='Genre name'),
        sa.ForeignKeyConstraint(['book_id'], ['books.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_book_genres_book_id'), 'book_genres', ['book_id'], unique=False)
    op.create_index(op.f('ix_book_genres_name'), 'book_genres', ['name'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_book_genres_name'), table_name='book_genres')
    op.drop_index(op.f('ix_book_genres_book_id'), table_name='book_genres')
    op.drop_table('book_genres')
    op.drop_index(op.f('ix_books_author_id'), table_name='books')
    op.drop_index(op.f('ix_books_title'), table_name='books')
    op.drop_table('books')
    op.drop_index(op.f('ix_users_username'), table_name='users')
    op.drop_table('users')
    op.drop_index(op.f('ix_authors_name'), table_name='authors')
    op.drop_table('authors')
