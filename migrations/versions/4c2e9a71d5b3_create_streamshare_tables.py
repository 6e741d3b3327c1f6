"""create_streamshare_tables

Revision ID: 4c2e9a71d5b3
Revises:
Create Date: 2026-10-19 09:12:05.301744

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '4c2e9a71d5b3'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create clients, service_accounts and assignments tables."""
    op.create_table('clients',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('whatsapp', sa.String(length=32), nullable=False),
        sa.Column('notes', sa.Text(), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('whatsapp'),
    )

    op.create_table('service_accounts',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password', sa.Text(), nullable=False),
        sa.Column(
            'profiles',
            sa.JSON().with_variant(postgresql.JSONB(), 'postgresql'),
            nullable=False,
        ),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='Active'),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint("status IN ('Active', 'Inactive')", name='ck_service_accounts_status'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
        sa.UniqueConstraint('email'),
    )

    op.create_table('assignments',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('client_id', sa.Uuid(), nullable=False),
        sa.Column('service_account_id', sa.Uuid(), nullable=False),
        sa.Column('profile_name', sa.String(length=100), nullable=False),
        sa.Column('pin', sa.String(length=20), nullable=False),
        sa.Column('assigned_date', sa.DateTime(), nullable=True),
        sa.Column('expiry_date', sa.DateTime(), nullable=False),
        sa.Column('payment_status', sa.String(length=20), nullable=False, server_default='Pending'),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.CheckConstraint(
            "payment_status IN ('Paid', 'Pending')", name='ck_assignments_payment_status'
        ),
        sa.ForeignKeyConstraint(['client_id'], ['clients.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['service_account_id'], ['service_accounts.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_assignments_expiry_date', 'assignments', ['expiry_date'], unique=False)
    op.create_index(
        'ix_assignments_client_expiry', 'assignments', ['client_id', 'expiry_date'], unique=False
    )
    op.create_index(
        'ix_assignments_account_expiry',
        'assignments',
        ['service_account_id', 'expiry_date'],
        unique=False,
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index('ix_assignments_account_expiry', table_name='assignments')
    op.drop_index('ix_assignments_client_expiry', table_name='assignments')
    op.drop_index('ix_assignments_expiry_date', table_name='assignments')
    op.drop_table('assignments')
    op.drop_table('service_accounts')
    op.drop_table('clients')
