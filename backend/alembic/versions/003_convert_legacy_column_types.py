"""Convert legacy text coordinates and base64 images to native types

Revision ID: 003_convert_legacy_column_types
Revises: 002_add_legacy_location_columns
Create Date: 2025-07-01 10:10:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '003_convert_legacy_column_types'
down_revision = '002_add_legacy_location_columns'
branch_labels = None
depends_on = None


def _column_types() -> dict:
    inspector = sa.inspect(op.get_bind())
    return {col['name']: col['type'] for col in inspector.get_columns('locations')}


def upgrade() -> None:
    column_types = _column_types()

    for name in ('latitude', 'longitude'):
        column_type = column_types[name]
        if isinstance(column_type, sa.Float):
            continue
        if isinstance(column_type, sa.String):
            # Text coordinates may use a decimal comma
            using = f"NULLIF(trim(replace({name}, ',', '.')), '')::double precision"
        else:
            using = f"{name}::double precision"
        op.execute(
            f"ALTER TABLE locations ALTER COLUMN {name} "
            f"TYPE double precision USING {using}"
        )

    if isinstance(column_types['image'], sa.String):
        # Recover the MIME type from data URIs before stripping the prefix
        op.execute(
            """
            UPDATE locations
            SET image_type = substring(image from '^data:([^;,]+)')
            WHERE image_type IS NULL AND image LIKE 'data:%'
            """
        )

    for name in ('image', 'thumbnail'):
        if isinstance(column_types[name], sa.String):
            op.execute(
                f"ALTER TABLE locations ALTER COLUMN {name} TYPE bytea "
                f"USING decode(regexp_replace({name}, '^data:[^,]*,', ''), 'base64')"
            )

    op.execute(
        """
        UPDATE locations
        SET image_type = 'image/jpeg'
        WHERE image IS NOT NULL AND image_type IS NULL
        """
    )


def downgrade() -> None:
    # Native columns are kept; legacy text encodings are not restored.
    pass
