"""create users table

Revision ID: 001
Revises:
Create Date: 2026-10-12

One row per registered chat user, with their cadence and the instant of
their next reminder. Timestamps are stored in UTC.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('external_id', sa.Text(), nullable=False),
        sa.Column('destination_id', sa.Text(), nullable=False),
        sa.Column(
            'cadence',
            sa.Enum(
                'daily', 'twice_weekly', 'weekly', 'biweekly', 'monthly',
                name='cadence', native_enum=False, length=20,
            ),
            server_default='weekly',
            nullable=False,
        ),
        sa.Column('next_due_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('is_paused', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_users')),
        sa.UniqueConstraint('external_id', name=op.f('uq_users_external_id')),
    )
    op.create_index('idx_users_next_due_at', 'users', ['next_due_at'], unique=False)
    op.create_index('idx_users_external_id', 'users', ['external_id'], unique=False)


def downgrade() -> None:
    op.drop_index('idx_users_external_id', table_name='users')
    op.drop_index('idx_users_next_due_at', table_name='users')
    op.drop_table('users')
