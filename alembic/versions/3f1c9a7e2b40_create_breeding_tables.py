"""Create animals, breeding events, breeding settings and calendar tables

Revision ID: 3f1c9a7e2b40
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '3f1c9a7e2b40'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the breeding schema."""

    # --- animals ---
    op.create_table(
        'animals',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('tag', sa.String(length=128), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('breed', sa.String(length=255), nullable=True),
        sa.Column('birth_date', sa.Date(), nullable=True),
        sa.Column('sex', sa.String(length=6), nullable=True),
        sa.Column('dam_id', sa.Uuid(), nullable=True),
        sa.Column('weight_kg', sa.Float(), nullable=True),
        sa.Column('health_status', sa.String(length=32), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('production_status', sa.String(length=16), server_default='heifer', nullable=False),
        sa.Column('pre_service_status', sa.String(length=16), nullable=True),
        sa.Column('service_date', sa.Date(), nullable=True),
        sa.Column('expected_calving_date', sa.Date(), nullable=True),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('version', sa.Integer(), server_default='1', nullable=False),
        sa.ForeignKeyConstraint(['dam_id'], ['animals.id'], name='fk_animals_dam_id_animals'),
        sa.PrimaryKeyConstraint('id', name='pk_animals'),
        sa.UniqueConstraint('farm_id', 'tag', name='ux_animals_farm_tag'),
        sa.UniqueConstraint('farm_id', 'id', name='ux_animals_farm_id'),
    )
    op.create_index('ix_animals_farm_id', 'animals', ['farm_id'], unique=False)

    # --- breeding_events ---
    op.create_table(
        'breeding_events',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('animal_id', sa.Uuid(), nullable=False),
        sa.Column('event_type', sa.String(length=32), nullable=False),
        sa.Column('event_date', sa.Date(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('recorded_by', sa.String(length=255), nullable=True),
        sa.Column('heat_signs', postgresql.ARRAY(sa.String()), nullable=False),
        sa.Column('heat_action_taken', sa.String(length=255), nullable=True),
        sa.Column('insemination_method', sa.String(length=32), nullable=True),
        sa.Column('semen_bull_code', sa.String(length=64), nullable=True),
        sa.Column('semen_batch', sa.String(length=128), nullable=True),
        sa.Column('technician_name', sa.String(length=255), nullable=True),
        sa.Column('pregnancy_result', sa.String(length=16), nullable=True),
        sa.Column('examination_method', sa.String(length=64), nullable=True),
        sa.Column('veterinarian_name', sa.String(length=255), nullable=True),
        sa.Column('estimated_due_date', sa.Date(), nullable=True),
        sa.Column('calving_outcome', sa.String(length=16), nullable=True),
        sa.Column('calf', sa.JSON(), nullable=True),
        sa.Column('create_calf', sa.Boolean(), server_default='false', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(
            ['animal_id'], ['animals.id'], name='fk_breeding_events_animal_id_animals'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_breeding_events'),
    )
    op.create_index(
        'ix_breeding_events_farm_date', 'breeding_events', ['farm_id', 'event_date'], unique=False
    )
    op.create_index(
        'ix_breeding_events_animal_date',
        'breeding_events',
        ['farm_id', 'animal_id', 'event_date'],
        unique=False,
    )

    # --- farm_breeding_settings ---
    op.create_table(
        'farm_breeding_settings',
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('default_gestation_days', sa.Integer(), server_default='280', nullable=False),
        sa.Column('pregnancy_check_days', sa.Integer(), server_default='45', nullable=False),
        sa.Column('days_pregnant_at_dryoff', sa.Integer(), server_default='220', nullable=False),
        sa.Column(
            'postpartum_breeding_delay_days', sa.Integer(), server_default='60', nullable=False
        ),
        sa.Column('minimum_breeding_age_months', sa.Integer(), server_default='15', nullable=False),
        sa.Column('default_cycle_interval', sa.Integer(), server_default='21', nullable=False),
        sa.Column(
            'auto_schedule_pregnancy_check', sa.Boolean(), server_default='true', nullable=False
        ),
        sa.Column('auto_create_dry_off', sa.Boolean(), server_default='true', nullable=False),
        sa.Column('auto_create_lactation', sa.Boolean(), server_default='true', nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('farm_id', name='pk_farm_breeding_settings'),
    )

    # --- breeding_calendar ---
    op.create_table(
        'breeding_calendar',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('farm_id', sa.Uuid(), nullable=False),
        sa.Column('animal_id', sa.Uuid(), nullable=False),
        sa.Column('event_type', sa.String(length=32), nullable=False),
        sa.Column('scheduled_date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(length=16), server_default='scheduled', nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('source_event_id', sa.Uuid(), nullable=True),
        sa.Column('completed_event_id', sa.Uuid(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(
            ['animal_id'], ['animals.id'], name='fk_breeding_calendar_animal_id_animals'
        ),
        sa.ForeignKeyConstraint(
            ['source_event_id'],
            ['breeding_events.id'],
            name='fk_breeding_calendar_source_event_id_breeding_events',
        ),
        sa.ForeignKeyConstraint(
            ['completed_event_id'],
            ['breeding_events.id'],
            name='fk_breeding_calendar_completed_event_id_breeding_events',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_breeding_calendar'),
    )
    op.create_index(
        'ix_breeding_calendar_farm_date',
        'breeding_calendar',
        ['farm_id', 'scheduled_date'],
        unique=False,
    )
    op.create_index(
        'ix_breeding_calendar_open',
        'breeding_calendar',
        ['farm_id', 'animal_id', 'event_type', 'status'],
        unique=False,
    )


def downgrade() -> None:
    """Drop the breeding schema."""
    op.drop_index('ix_breeding_calendar_open', table_name='breeding_calendar')
    op.drop_index('ix_breeding_calendar_farm_date', table_name='breeding_calendar')
    op.drop_table('breeding_calendar')
    op.drop_table('farm_breeding_settings')
    op.drop_index('ix_breeding_events_animal_date', table_name='breeding_events')
    op.drop_index('ix_breeding_events_farm_date', table_name='breeding_events')
    op.drop_table('breeding_events')
    op.drop_index('ix_animals_farm_id', table_name='animals')
    op.drop_table('animals')
