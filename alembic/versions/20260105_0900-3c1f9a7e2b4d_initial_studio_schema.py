"""initial_studio_schema

Revision ID: 3c1f9a7e2b4d
Revises:
Create Date: 2026-01-05 09:00:00.000000+00:00

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f9a7e2b4d"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _base_columns(mutable: bool = True) -> list[sa.Column]:
    """id, created_at (+ updated_at) and studio_id shared by every table."""
    columns = [
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]
    if mutable:
        columns.append(
            sa.Column(
                "updated_at",
                sa.DateTime(timezone=True),
                server_default=sa.text("now()"),
                nullable=False,
            )
        )
    columns.append(
        sa.Column(
            "studio_id", sa.Uuid(), nullable=False, comment="Owning studio (tenant)"
        )
    )
    return columns


def _priced_line_columns() -> list[sa.Column]:
    """Columns of a priced service line (money as BIGINT cents)."""
    return [
        sa.Column(
            "position",
            sa.Integer(),
            nullable=False,
            comment="Order of the line within its parent",
        ),
        sa.Column(
            "service_id",
            sa.Uuid(),
            nullable=True,
            comment="Catalog service (NULL for custom services)",
        ),
        sa.Column("service_name", sa.String(length=255), nullable=False),
        sa.Column("base_price_net", sa.BigInteger(), nullable=False),
        sa.Column("vat_rate", sa.SmallInteger(), nullable=False),
        sa.Column("adjustment_type", sa.String(length=20), nullable=False),
        sa.Column("adjustment_value", sa.BigInteger(), nullable=False),
        sa.Column("final_price_net", sa.BigInteger(), nullable=False),
        sa.Column("final_price_gross", sa.BigInteger(), nullable=False),
        sa.Column("custom_note", sa.Text(), nullable=True),
    ]


def _studio_index(table: str) -> None:
    op.create_index(f"ix_{table}_studio_id", table, ["studio_id"], unique=False)


def upgrade() -> None:
    """Create the studio schema."""
    # Reference data
    op.create_table(
        "customers",
        *_base_columns(),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("phone", sa.String(length=50), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    _studio_index("customers")

    op.create_table(
        "vehicles",
        *_base_columns(),
        sa.Column(
            "customer_id",
            sa.Uuid(),
            nullable=False,
            comment="FK to customers table (owner)",
        ),
        sa.Column("brand", sa.String(length=100), nullable=False),
        sa.Column("model", sa.String(length=100), nullable=False),
        sa.Column("year_of_production", sa.Integer(), nullable=True),
        sa.Column("license_plate", sa.String(length=20), nullable=True),
        sa.Column("vin", sa.String(length=17), nullable=True),
        sa.Column("color", sa.String(length=50), nullable=True),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    _studio_index("vehicles")
    op.create_index("ix_vehicles_customer_id", "vehicles", ["customer_id"])

    op.create_table(
        "appointment_colors",
        *_base_columns(),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column(
            "hex_color",
            sa.String(length=7),
            nullable=False,
            comment="CSS hex color, e.g. #3B82F6",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    _studio_index("appointment_colors")

    op.create_table(
        "catalog_services",
        *_base_columns(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column(
            "base_price_net",
            sa.BigInteger(),
            nullable=False,
            comment="Net list price in cents",
        ),
        sa.Column(
            "vat_rate",
            sa.SmallInteger(),
            nullable=False,
            comment="VAT code (23/8/5/0/-1)",
        ),
        sa.Column("requires_manual_price", sa.Boolean(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    _studio_index("catalog_services")

    # Appointments
    op.create_table(
        "appointments",
        *_base_columns(),
        sa.Column("customer_id", sa.Uuid(), nullable=False),
        sa.Column("vehicle_id", sa.Uuid(), nullable=True),
        sa.Column("title", sa.String(length=255), nullable=True),
        sa.Column("color_id", sa.Uuid(), nullable=True),
        sa.Column("note", sa.Text(), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("is_all_day", sa.Boolean(), nullable=False),
        sa.Column("start_datetime", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_datetime", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_by", sa.Uuid(), nullable=False),
        sa.Column("updated_by", sa.Uuid(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"]),
        sa.ForeignKeyConstraint(["vehicle_id"], ["vehicles.id"]),
        sa.ForeignKeyConstraint(
            ["color_id"], ["appointment_colors.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    _studio_index("appointments")
    op.create_index("ix_appointments_customer_id", "appointments", ["customer_id"])
    op.create_index("ix_appointments_status", "appointments", ["status"])
    op.create_index(
        "ix_appointments_studio_start", "appointments", ["studio_id", "start_datetime"]
    )

    op.create_table(
        "appointment_line_items",
        *_base_columns(mutable=False),
        *_priced_line_columns(),
        sa.Column("appointment_id", sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(
            ["appointment_id"], ["appointments.id"], ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    _studio_index("appointment_line_items")
    op.create_index(
        "ix_appointment_line_items_appointment_id",
        "appointment_line_items",
        ["appointment_id"],
    )

    # Visits
    op.create_table(
        "visits",
        *_base_columns(),
        sa.Column("visit_number", sa.String(length=20), nullable=False),
        sa.Column("customer_id", sa.Uuid(), nullable=False),
        sa.Column("vehicle_id", sa.Uuid(), nullable=False),
        sa.Column("appointment_id", sa.Uuid(), nullable=True),
        sa.Column("brand_snapshot", sa.String(length=100), nullable=False),
        sa.Column("model_snapshot", sa.String(length=100), nullable=False),
        sa.Column("license_plate_snapshot", sa.String(length=20), nullable=True),
        sa.Column("vin_snapshot", sa.String(length=17), nullable=True),
        sa.Column("year_of_production_snapshot", sa.Integer(), nullable=True),
        sa.Column("color_snapshot", sa.String(length=50), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("scheduled_date", sa.Date(), nullable=False),
        sa.Column("completed_date", sa.DateTime(timezone=True), nullable=True),
        sa.Column("mileage_at_arrival", sa.Integer(), nullable=True),
        sa.Column("keys_handed_over", sa.Boolean(), nullable=False),
        sa.Column("documents_handed_over", sa.Boolean(), nullable=False),
        sa.Column("technical_notes", sa.Text(), nullable=True),
        sa.Column("damage_map_file_id", sa.String(length=500), nullable=True),
        sa.Column("created_by", sa.Uuid(), nullable=False),
        sa.Column("updated_by", sa.Uuid(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["customer_id"], ["customers.id"]),
        sa.ForeignKeyConstraint(["vehicle_id"], ["vehicles.id"]),
        sa.ForeignKeyConstraint(
            ["appointment_id"], ["appointments.id"], ondelete="SET NULL"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("studio_id", "visit_number", name="uq_visits_studio_number"),
    )
    _studio_index("visits")
    op.create_index("ix_visits_customer_id", "visits", ["customer_id"])
    op.create_index("ix_visits_appointment_id", "visits", ["appointment_id"])
    op.create_index("ix_visits_status", "visits", ["status"])

    op.create_table(
        "visit_service_items",
        *_base_columns(mutable=False),
        *_priced_line_columns(),
        sa.Column("visit_id", sa.Uuid(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.ForeignKeyConstraint(["visit_id"], ["visits.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    _studio_index("visit_service_items")
    op.create_index(
        "ix_visit_service_items_visit_id", "visit_service_items", ["visit_id"]
    )

    op.create_table(
        "visit_photos",
        *_base_columns(mutable=False),
        sa.Column("visit_id", sa.Uuid(), nullable=False),
        sa.Column("photo_type", sa.String(length=30), nullable=False),
        sa.Column("file_id", sa.String(length=500), nullable=False),
        sa.Column("file_name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("uploaded_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["visit_id"], ["visits.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    _studio_index("visit_photos")
    op.create_index("ix_visit_photos_visit_id", "visit_photos", ["visit_id"])

    op.create_table(
        "visit_documents",
        *_base_columns(mutable=False),
        sa.Column("visit_id", sa.Uuid(), nullable=False),
        sa.Column(
            "file_key",
            sa.String(length=500),
            nullable=False,
            comment="Object storage key",
        ),
        sa.Column("file_name", sa.String(length=255), nullable=False),
        sa.Column("document_type", sa.String(length=50), nullable=False),
        sa.Column("uploaded_by", sa.Uuid(), nullable=False),
        sa.Column("uploaded_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["visit_id"], ["visits.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    _studio_index("visit_documents")
    op.create_index("ix_visit_documents_visit_id", "visit_documents", ["visit_id"])

    # Protocols
    op.create_table(
        "protocol_rules",
        *_base_columns(),
        sa.Column("template_id", sa.Uuid(), nullable=False),
        sa.Column("trigger_type", sa.String(length=20), nullable=False),
        sa.Column("stage", sa.String(length=20), nullable=False),
        sa.Column("service_ids", postgresql.ARRAY(sa.Uuid()), nullable=False),
        sa.Column("is_mandatory", sa.Boolean(), nullable=False),
        sa.Column("display_order", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    _studio_index("protocol_rules")
    op.create_index(
        "ix_protocol_rules_studio_stage", "protocol_rules", ["studio_id", "stage"]
    )

    op.create_table(
        "visit_protocols",
        *_base_columns(),
        sa.Column("visit_id", sa.Uuid(), nullable=False),
        sa.Column("template_id", sa.Uuid(), nullable=False),
        sa.Column("stage", sa.String(length=20), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.Column("is_mandatory", sa.Boolean(), nullable=False),
        sa.Column("status", sa.String(length=30), nullable=False),
        sa.Column("filled_document_key", sa.String(length=500), nullable=True),
        sa.Column("signed_document_key", sa.String(length=500), nullable=True),
        sa.Column("signature_image_key", sa.String(length=500), nullable=True),
        sa.Column("signed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("signed_by", sa.String(length=255), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(["visit_id"], ["visits.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    _studio_index("visit_protocols")
    op.create_index(
        "ix_visit_protocols_visit_stage", "visit_protocols", ["visit_id", "stage"]
    )


def downgrade() -> None:
    """Drop the studio schema (children first)."""
    for table in (
        "visit_protocols",
        "protocol_rules",
        "visit_documents",
        "visit_photos",
        "visit_service_items",
        "visits",
        "appointment_line_items",
        "appointments",
        "catalog_services",
        "appointment_colors",
        "vehicles",
        "customers",
    ):
        op.drop_table(table)
