"""Document records for waivers and forms

Revision ID: 0002_documents
Revises: 0001_baseline
Create Date: 2026-10-19

Creates:
- documents (metadata only; files are kept in external storage)
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0002_documents'
down_revision: Union[str, Sequence[str], None] = '0001_baseline'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'documents',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('contact_id', sa.Uuid(), nullable=False),
        sa.Column('booking_id', sa.Uuid(), nullable=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('url', sa.String(512), nullable=False),
        sa.Column('type', sa.String(30), server_default=sa.text("'waiver'"), nullable=False),
        sa.Column('uploaded_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['contact_id'], ['contacts.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['booking_id'], ['bookings.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_documents_contact_uploaded', 'documents', ['contact_id', 'uploaded_at'])


def downgrade() -> None:
    op.drop_index('idx_documents_contact_uploaded', table_name='documents')
    op.drop_table('documents')
