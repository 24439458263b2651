"""create users, donation_goals, donations

Revision ID: 4b1d6c0e9a21
Revises:
Create Date: 2026-10-18 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4b1d6c0e9a21'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

donation_status = sa.Enum('PENDING', 'CONFIRMED', 'FAILED', name='donationstatus')


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.BigInteger(), nullable=False),
        sa.Column('username', sa.String(length=100), nullable=True),
        sa.Column('first_name', sa.String(length=100), nullable=True),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('is_admin', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', name='uq_users_user_id'),
    )
    op.create_index('ix_users_user_id', 'users', ['user_id'])
    op.create_index('ix_users_is_admin', 'users', ['is_admin'])
    op.create_index('ix_users_created_at', 'users', ['created_at'])

    op.create_table(
        'donation_goals',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('target_amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('current_amount', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('target_amount > 0', name='chk_goal_target_positive'),
    )
    op.create_index('ix_donation_goals_created_at', 'donation_goals', ['created_at'])
    op.create_index(
        'idx_donation_goals_active',
        'donation_goals',
        ['is_active'],
        unique=True,
        postgresql_where=sa.text('is_active IS true'),
        sqlite_where=sa.text('is_active = 1'),
    )

    op.create_table(
        'donations',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('user_telegram_id', sa.BigInteger(), nullable=False),
        sa.Column('goal_id', sa.UUID(), nullable=True),
        sa.Column('amount', sa.Numeric(12, 2), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False, server_default='RUB'),
        sa.Column('provider_payment_id', sa.String(length=255), nullable=False),
        sa.Column('status', donation_status, nullable=False, server_default='PENDING'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('provider_payment_id'),
        sa.CheckConstraint('amount > 0', name='chk_donation_amount_positive'),
        sa.ForeignKeyConstraint(['user_telegram_id'], ['users.user_id'], ondelete='RESTRICT'),
        sa.ForeignKeyConstraint(['goal_id'], ['donation_goals.id'], ondelete='RESTRICT'),
    )
    op.create_index('ix_donations_user_telegram_id', 'donations', ['user_telegram_id'])
    op.create_index('ix_donations_goal_id', 'donations', ['goal_id'])
    op.create_index('ix_donations_status', 'donations', ['status'])
    op.create_index('ix_donations_created_at', 'donations', ['created_at'])


def downgrade():
    op.drop_table('donations')
    op.drop_table('donation_goals')
    op.drop_table('users')
    donation_status.drop(op.get_bind(), checkfirst=True)
