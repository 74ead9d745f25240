"""Create author, genre, book and book_genre tables

Revision ID: 001
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel


# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the catalog tables."""
    op.create_table(
        'author',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('first_name', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('family_name', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('date_of_death', sa.Date(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_author_family_name', 'author', ['family_name'])

    op.create_table(
        'genre',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_genre_name', 'genre', ['name'], unique=True)

    op.create_table(
        'book',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('title', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('summary', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('isbn', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('author_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['author_id'], ['author.id']),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_book_author_id', 'book', ['author_id'])

    op.create_table(
        'book_genre',
        sa.Column('book_id', sa.Integer(), nullable=False),
        sa.Column('genre_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['book_id'], ['book.id']),
        sa.ForeignKeyConstraint(['genre_id'], ['genre.id']),
        sa.PrimaryKeyConstraint('book_id', 'genre_id')
    )
    op.create_index('ix_book_genre_genre_id', 'book_genre', ['genre_id'])


def downgrade() -> None:
    """Drop the catalog tables."""
    op.drop_index('ix_book_genre_genre_id', table_name='book_genre')
    op.drop_table('book_genre')
    op.drop_index('ix_book_author_id', table_name='book')
    op.drop_table('book')
    op.drop_index('ix_genre_name', table_name='genre')
    op.drop_table('genre')
    op.drop_index('ix_author_family_name', table_name='author')
    op.drop_table('author')
