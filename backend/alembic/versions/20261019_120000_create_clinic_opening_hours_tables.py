"""Create clinics, clinic_hours and clinic_special_hours tables

Revision ID: 20261019_120000
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_120000'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'clinics',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('is_permanently_closed', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), nullable=False),
    )
    op.create_index('ix_clinics_id', 'clinics', ['id'])
    op.create_index('ix_clinics_slug', 'clinics', ['slug'], unique=True)

    op.create_table(
        'clinic_hours',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('clinic_id', sa.Integer(), sa.ForeignKey('clinics.id', ondelete='CASCADE'), nullable=False),
        sa.Column('day_of_week', sa.Integer(), nullable=False),
        sa.Column('open_time', sa.Time(), nullable=True),
        sa.Column('close_time', sa.Time(), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), nullable=True),
        sa.CheckConstraint('day_of_week BETWEEN 0 AND 6', name='ck_clinic_hours_day_of_week'),
    )
    op.create_index('ix_clinic_hours_id', 'clinic_hours', ['id'])
    op.create_index('idx_clinic_hours_clinic_day', 'clinic_hours', ['clinic_id', 'day_of_week'])

    op.create_table(
        'clinic_special_hours',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('clinic_id', sa.Integer(), sa.ForeignKey('clinics.id', ondelete='CASCADE'), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('is_closed', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('open_time', sa.Time(), nullable=True),
        sa.Column('close_time', sa.Time(), nullable=True),
        sa.Column('created_at', sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=True), nullable=True),
        sa.UniqueConstraint('clinic_id', 'date', name='uq_clinic_special_hours_clinic_date'),
    )
    op.create_index('ix_clinic_special_hours_id', 'clinic_special_hours', ['id'])


def downgrade() -> None:
    op.drop_index('ix_clinic_special_hours_id', table_name='clinic_special_hours')
    op.drop_table('clinic_special_hours')
    op.drop_index('idx_clinic_hours_clinic_day', table_name='clinic_hours')
    op.drop_index('ix_clinic_hours_id', table_name='clinic_hours')
    op.drop_table('clinic_hours')
    op.drop_index('ix_clinics_slug', table_name='clinics')
    op.drop_index('ix_clinics_id', table_name='clinics')
    op.drop_table('clinics')
