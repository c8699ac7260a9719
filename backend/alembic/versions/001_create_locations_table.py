"""Create locations table

Revision ID: 001_create_locations_table
Revises:
Create Date: 2025-07-01 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '001_create_locations_table'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Deployments that predate migrations already have a locations table;
    # 002 and 003 bring it up to date.
    inspector = sa.inspect(op.get_bind())
    if 'locations' in inspector.get_table_names():
        return

    op.create_table(
        'locations',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('date', sa.String(length=64), nullable=True),
        sa.Column('latitude', postgresql.DOUBLE_PRECISION(), nullable=False),
        sa.Column('longitude', postgresql.DOUBLE_PRECISION(), nullable=False),
        sa.Column('image', sa.LargeBinary(), nullable=True),
        sa.Column('image_type', sa.String(length=100), nullable=True),
        sa.Column('thumbnail', sa.LargeBinary(), nullable=True),
        sa.Column(
            'created_at',
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    )


def downgrade() -> None:
    op.drop_table('locations')
