"""create_signups_and_admin_credentials

Revision ID: 3f1c9a7d2b10
Revises:
Create Date: 2026-10-18 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3f1c9a7d2b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the signups table and the singleton admin credential table."""
    op.create_table(
        'signups',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=254), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True),
                  server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_signups_email', 'signups', ['email'], unique=True)
    op.create_index('ix_signups_created_at', 'signups', ['created_at'])

    op.create_table(
        'admin_credentials',
        sa.Column('id', sa.Integer(), autoincrement=False, nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True),
                  server_default=sa.text('CURRENT_TIMESTAMP'), nullable=False),
        sa.CheckConstraint('id = 1', name='ck_admin_credentials_singleton'),
        sa.PrimaryKeyConstraint('id'),
    )


def downgrade() -> None:
    """Drop both tables."""
    op.drop_table('admin_credentials')
    op.drop_index('ix_signups_created_at', table_name='signups')
    op.drop_index('ix_signups_email', table_name='signups')
    op.drop_table('signups')
