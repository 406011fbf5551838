"""Allow at most one visit per appointment

Revision ID: 8e4b2d6a1f07
Revises: 3c1f9a7e2b4d
Create Date: 2026-01-12 10:00:00.000000+00:00

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "8e4b2d6a1f07"
down_revision: Union[str, Sequence[str], None] = "3c1f9a7e2b4d"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # Walk-in visits have no appointment and stay unconstrained
    op.create_index(
        "uq_visits_studio_appointment",
        "visits",
        ["studio_id", "appointment_id"],
        unique=True,
        postgresql_where=sa.text("appointment_id IS NOT NULL"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("uq_visits_studio_appointment", table_name="visits")
