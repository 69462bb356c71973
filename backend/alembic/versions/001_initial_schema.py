"""contacts and checkouts tables

Revision ID: 001
Revises: 
Create Date: 2026-10-18 00:00:00.000000

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
        'contacts',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('idx_contacts_created_at', 'contacts', ['created_at'])

    op.create_table(
        'checkouts',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('address', sa.String(500), nullable=False),
        sa.Column('city', sa.String(255), nullable=False),
        sa.Column('state', sa.String(255), nullable=True),
        sa.Column('country', sa.String(255), nullable=False),
        sa.Column('zip', sa.String(32), nullable=False),
        sa.Column('items', sa.JSON(), nullable=False),
        sa.Column('total_amount', sa.Float(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('idx_checkouts_created_at', 'checkouts', ['created_at'])


def downgrade() -> None:
    op.drop_index('idx_checkouts_created_at', table_name='checkouts')
    op.drop_table('checkouts')
    op.drop_index('idx_contacts_created_at', table_name='contacts')
    op.drop_table('contacts')
