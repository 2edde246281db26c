"""create url mappings table

Revision ID: a1c3e5f70b21
Revises:
Create Date: 2026-10-19 10:12:31

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1c3e5f70b21'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table('url_mappings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('long_url', sa.Text(), nullable=False),
        sa.Column('short_url', sa.String(length=32), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('short_url', name='uq_url_mappings_short_url')
    )
    op.create_index(op.f('ix_url_mappings_long_url'), 'url_mappings', ['long_url'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_url_mappings_long_url'), table_name='url_mappings')
    op.drop_table('url_mappings')
