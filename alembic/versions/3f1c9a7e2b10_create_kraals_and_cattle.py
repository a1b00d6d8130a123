"""create kraals, cattle and kraal assignments

Revision ID: 3f1c9a7e2b10
Revises:
Create Date: 2026-10-16 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a7e2b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'memberships',
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('tenant_id', sa.Uuid(), nullable=False),
        sa.Column(
            'role',
            sa.Enum('ADMIN', 'MANAGER', 'WORKER', name='role', native_enum=False),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint('user_id', 'tenant_id', name='pk_memberships'),
    )

    op.create_table(
        'locations',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('tenant_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_locations'),
    )
    op.create_index('ix_locations_tenant_id', 'locations', ['tenant_id'], unique=False)

    op.create_table(
        'kraals',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('tenant_id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('capacity', sa.Integer(), server_default='0', nullable=False),
        sa.Column('location_id', sa.Uuid(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(
            ['location_id'], ['locations.id'],
            name='fk_kraals_location_id_locations', ondelete='SET NULL',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_kraals'),
    )
    op.create_index('ix_kraals_tenant_id', 'kraals', ['tenant_id'], unique=False)
    op.create_index(
        'ux_kraals_tenant_lower_name',
        'kraals',
        ['tenant_id', sa.text('lower(name)')],
        unique=True,
    )

    op.create_table(
        'cattle',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('tenant_id', sa.Uuid(), nullable=False),
        sa.Column('user_id', sa.Uuid(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('tag_number', sa.String(length=128), nullable=True),
        sa.Column('breed', sa.String(length=32), nullable=False),
        sa.Column('gender', sa.String(length=6), nullable=False),
        sa.Column('is_ox', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('health_status', sa.String(length=32), nullable=True),
        sa.Column('vaccination_records', sa.Text(), nullable=True),
        sa.Column('main_image', sa.String(length=1024), nullable=True),
        sa.Column('sire_id', sa.Uuid(), nullable=True),
        sa.Column('dam_id', sa.Uuid(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.ForeignKeyConstraint(
            ['sire_id'], ['cattle.id'], name='fk_cattle_sire_id_cattle', ondelete='SET NULL'
        ),
        sa.ForeignKeyConstraint(
            ['dam_id'], ['cattle.id'], name='fk_cattle_dam_id_cattle', ondelete='SET NULL'
        ),
        sa.PrimaryKeyConstraint('id', name='pk_cattle'),
        sa.UniqueConstraint('tenant_id', 'tag_number', name='ux_cattle_tenant_tag_number'),
    )
    op.create_index('ix_cattle_tenant_id', 'cattle', ['tenant_id'], unique=False)
    op.create_index('ix_cattle_sire_id', 'cattle', ['sire_id'], unique=False)
    op.create_index('ix_cattle_dam_id', 'cattle', ['dam_id'], unique=False)

    op.create_table(
        'cattle_kraal_assignments',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('tenant_id', sa.Uuid(), nullable=False),
        sa.Column('cattle_id', sa.Uuid(), nullable=False),
        sa.Column('kraal_id', sa.Uuid(), nullable=False),
        sa.Column('start_date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_date', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(
            ['cattle_id'], ['cattle.id'],
            name='fk_cattle_kraal_assignments_cattle_id_cattle', ondelete='CASCADE',
        ),
        sa.ForeignKeyConstraint(
            ['kraal_id'], ['kraals.id'],
            name='fk_cattle_kraal_assignments_kraal_id_kraals', ondelete='RESTRICT',
        ),
        sa.PrimaryKeyConstraint('id', name='pk_cattle_kraal_assignments'),
    )
    op.create_index(
        'ix_cattle_kraal_assignments_tenant_id', 'cattle_kraal_assignments', ['tenant_id'], unique=False
    )
    op.create_index(
        'ix_cattle_kraal_assignments_cattle_id', 'cattle_kraal_assignments', ['cattle_id'], unique=False
    )
    op.create_index(
        'ix_cattle_kraal_assignments_kraal_id', 'cattle_kraal_assignments', ['kraal_id'], unique=False
    )
    # At most one open assignment per animal
    op.create_index(
        'ux_cattle_kraal_assignments_open',
        'cattle_kraal_assignments',
        ['cattle_id'],
        unique=True,
        postgresql_where=sa.text('end_date IS NULL'),
        sqlite_where=sa.text('end_date IS NULL'),
    )


def downgrade() -> None:
    op.drop_index('ux_cattle_kraal_assignments_open', table_name='cattle_kraal_assignments')
    op.drop_index('ix_cattle_kraal_assignments_kraal_id', table_name='cattle_kraal_assignments')
    op.drop_index('ix_cattle_kraal_assignments_cattle_id', table_name='cattle_kraal_assignments')
    op.drop_index('ix_cattle_kraal_assignments_tenant_id', table_name='cattle_kraal_assignments')
    op.drop_table('cattle_kraal_assignments')
    op.drop_index('ix_cattle_dam_id', table_name='cattle')
    op.drop_index('ix_cattle_sire_id', table_name='cattle')
    op.drop_index('ix_cattle_tenant_id', table_name='cattle')
    op.drop_table('cattle')
    op.drop_index('ux_kraals_tenant_lower_name', table_name='kraals')
    op.drop_index('ix_kraals_tenant_id', table_name='kraals')
    op.drop_table('kraals')
    op.drop_index('ix_locations_tenant_id', table_name='locations')
    op.drop_table('locations')
    op.drop_table('memberships')
