"""Add indexes backing the listing filters and export joins.

Revision ID: 9e3f41b6c8d2
Revises: 5a1c0e7d2b34
Create Date: 2025-01-28 13:56:47.000000

"""
from typing import Sequence, Union

from alembic import op


revision: str = '9e3f41b6c8d2'
down_revision: Union[str, Sequence[str], None] = '5a1c0e7d2b34'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_index('ix_locales_name', 'locales', ['name'])

    op.create_index('ix_translations_locale_id', 'translations', ['locale_id'])
    op.create_index('ix_translations_key', 'translations', ['key'])
    op.create_index('ix_translations_value', 'translations', ['value'])

    op.create_index('ix_tags_name', 'tags', ['name'], unique=True)

    # The composite (translation_id, tag_id) index is the primary key
    op.create_index('ix_translation_tag_translation_id', 'translation_tag', ['translation_id'])
    op.create_index('ix_translation_tag_tag_id', 'translation_tag', ['tag_id'])


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index('ix_translation_tag_tag_id', table_name='translation_tag')
    op.drop_index('ix_translation_tag_translation_id', table_name='translation_tag')
    op.drop_index('ix_tags_name', table_name='tags')
    op.drop_index('ix_translations_value', table_name='translations')
    op.drop_index('ix_translations_key', table_name='translations')
    op.drop_index('ix_translations_locale_id', table_name='translations')
    op.drop_index('ix_locales_name', table_name='locales')
