"""Create couple_image table

Revision ID: 004_create_couple_image_table
Revises: 003_convert_legacy_column_types
Create Date: 2025-07-01 10:15:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '004_create_couple_image_table'
down_revision = '003_convert_legacy_column_types'
branch_labels = None
depends_on = None


def upgrade() -> None:
    inspector = sa.inspect(op.get_bind())

    if 'couple_image' not in inspector.get_table_names():
        op.create_table(
            'couple_image',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('image', sa.LargeBinary(), nullable=False),
            sa.Column('image_type', sa.String(length=100), nullable=False),
            sa.Column(
                'created_at',
                sa.DateTime(timezone=True),
                server_default=sa.func.now(),
                nullable=False,
            ),
        )
        return

    # Legacy deployments stored the couple image as base64 text
    columns = {col['name']: col['type'] for col in inspector.get_columns('couple_image')}
    if isinstance(columns.get('image'), sa.String):
        op.execute(
            "ALTER TABLE couple_image ALTER COLUMN image TYPE bytea "
            "USING decode(regexp_replace(image, '^data:[^,]*,', ''), 'base64')"
        )


def downgrade() -> None:
    op.drop_table('couple_image')
