"""Baseline migration - contacts, relationships, bookings and program reports

Revision ID: 0001_baseline
Revises:
Create Date: 2026-10-19

Creates:
- contacts, entities, relationship_types, contact_entity_roles
- memberships
- bookings, booking_report_annotations
- program_types, program_entries
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '0001_baseline'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSON = sa.JSON().with_variant(postgresql.JSONB(astext_type=sa.Text()), 'postgresql')


def upgrade() -> None:
    # ==========================================================================
    # contacts
    # ==========================================================================
    op.create_table(
        'contacts',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('email', sa.String(320), nullable=True),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('organization', sa.String(255), nullable=True),
        sa.Column('contact_types', JSON, nullable=True),
        sa.Column('tags', JSON, nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('referred_by', sa.String(255), nullable=True),
        sa.Column('marketing_consent', sa.Boolean(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_contacts_email', 'contacts', ['email'])
    op.create_index('idx_contacts_name', 'contacts', ['name'])

    # ==========================================================================
    # entities & roles
    # ==========================================================================
    op.create_table(
        'entities',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('entity_type', sa.String(30), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_entities_type', 'entities', ['entity_type'])

    op.create_table(
        'relationship_types',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('entity_type', sa.String(30), nullable=False),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('is_default', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('entity_type', 'name', name='uq_relationship_type_name'),
    )

    op.create_table(
        'contact_entity_roles',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('contact_id', sa.Uuid(), nullable=False),
        sa.Column('entity_id', sa.Uuid(), nullable=False),
        sa.Column('role', sa.String(100), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['contact_id'], ['contacts.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['entity_id'], ['entities.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('contact_id', 'entity_id', 'role', name='uq_contact_entity_role'),
    )
    op.create_index('idx_contact_entity_roles_entity', 'contact_entity_roles', ['entity_id'])

    # ==========================================================================
    # memberships
    # ==========================================================================
    op.create_table(
        'memberships',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('contact_id', sa.Uuid(), nullable=True),
        sa.Column('membership_type', sa.String(100), nullable=True),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('code', sa.String(100), nullable=True),
        sa.Column('status', sa.String(30), server_default=sa.text("'active'"), nullable=False),
        sa.ForeignKeyConstraint(['contact_id'], ['contacts.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_memberships_contact', 'memberships', ['contact_id'])
    op.create_index('idx_memberships_status', 'memberships', ['status'])

    # ==========================================================================
    # bookings
    # ==========================================================================
    op.create_table(
        'bookings',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('contact_id', sa.Uuid(), nullable=True),
        sa.Column('booking_type', sa.String(50), nullable=True),
        sa.Column('date', sa.Date(), nullable=True),
        sa.Column('timeslot', sa.String(20), nullable=True),
        sa.Column('program_name', sa.String(255), nullable=True),
        sa.Column('kids_count', sa.Integer(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('form_responses', JSON, nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['contact_id'], ['contacts.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_bookings_program_date', 'bookings', ['program_name', 'date'])
    op.create_index('idx_bookings_contact', 'bookings', ['contact_id'])

    op.create_table(
        'booking_report_annotations',
        sa.Column('booking_id', sa.Uuid(), nullable=False),
        sa.Column('data', JSON, nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['booking_id'], ['bookings.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('booking_id'),
    )

    # ==========================================================================
    # program reports
    # ==========================================================================
    op.create_table(
        'program_types',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('slug', sa.String(100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('field_schema', JSON, nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('slug'),
    )

    op.create_table(
        'program_entries',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('program_type_id', sa.Uuid(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('contact_id', sa.Uuid(), nullable=True),
        sa.Column('entity_id', sa.Uuid(), nullable=True),
        sa.Column('data', JSON, nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(['program_type_id'], ['program_types.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['contact_id'], ['contacts.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['entity_id'], ['entities.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_program_entries_type_date', 'program_entries', ['program_type_id', 'date'])


def downgrade() -> None:
    op.drop_table('program_entries')
    op.drop_table('program_types')
    op.drop_table('booking_report_annotations')
    op.drop_table('bookings')
    op.drop_table('memberships')
    op.drop_table('contact_entity_roles')
    op.drop_table('relationship_types')
    op.drop_table('entities')
    op.drop_table('contacts')
