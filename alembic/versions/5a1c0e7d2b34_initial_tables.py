"""Initial locales, tags, translations and translation_tag tables.

Revision ID: 5a1c0e7d2b34
Revises:
Create Date: 2025-01-28 13:40:12.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel


revision: str = '5a1c0e7d2b34'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'locales',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('code', sqlmodel.sql.sqltypes.AutoString(length=32), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_locales_code', 'locales', ['code'], unique=True)

    op.create_table(
        'tags',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    op.create_table(
        'translations',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('locale_id', sa.Integer(), nullable=False),
        sa.Column('key', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=False),
        sa.Column('value', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['locale_id'], ['locales.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('locale_id', 'key', name='uq_translations_locale_id_key')
    )

    op.create_table(
        'translation_tag',
        sa.Column('translation_id', sa.Integer(), nullable=False),
        sa.Column('tag_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['translation_id'], ['translations.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tag_id'], ['tags.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('translation_id', 'tag_id')
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table('translation_tag')
    op.drop_table('translations')
    op.drop_table('tags')
    op.drop_index('ix_locales_code', table_name='locales')
    op.drop_table('locales')
