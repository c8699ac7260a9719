"""Bring legacy locations tables up to the current column set

Revision ID: 002_add_legacy_location_columns
Revises: 001_create_locations_table
Create Date: 2025-07-01 10:05:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '002_add_legacy_location_columns'
down_revision = '001_create_locations_table'
branch_labels = None
depends_on = None

# Legacy column name -> current column name
RENAMED_COLUMNS = {
    'name': 'title',
    'image_data': 'image',
}

# Columns older deployments may lack (types before 003 conversions)
OPTIONAL_COLUMNS = [
    ('description', sa.Text()),
    ('date', sa.String(length=64)),
    ('image', sa.LargeBinary()),
    ('image_type', sa.String(length=100)),
    ('thumbnail', sa.LargeBinary()),
    ('created_at', sa.DateTime(timezone=True)),
]

# Columns that legacy schemas declared NOT NULL but are optional now
NULLABLE_COLUMNS = ['description', 'date', 'image', 'image_type', 'thumbnail']


def _columns() -> dict:
    inspector = sa.inspect(op.get_bind())
    return {col['name']: col for col in inspector.get_columns('locations')}


def upgrade() -> None:
    columns = _columns()

    for old_name, new_name in RENAMED_COLUMNS.items():
        if old_name in columns and new_name not in columns:
            op.alter_column('locations', old_name, new_column_name=new_name)

    columns = _columns()
    for name, column_type in OPTIONAL_COLUMNS:
        if name in columns:
            continue
        if name == 'created_at':
            op.add_column(
                'locations',
                sa.Column(
                    name, column_type, server_default=sa.func.now(), nullable=True
                ),
            )
        else:
            op.add_column('locations', sa.Column(name, column_type, nullable=True))

    columns = _columns()
    for name in NULLABLE_COLUMNS:
        if not columns[name]['nullable']:
            op.alter_column('locations', name, nullable=True)


def downgrade() -> None:
    # Legacy layouts differ between deployments; they are not restored.
    pass
