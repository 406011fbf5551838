"""Pricing snapshot columns shared by appointment and visit line rows.

Money columns are BIGINT cents; the VAT rate is stored as its integer code
and the adjustment type as its lowercase value.
"""

from uuid import UUID

from sqlalchemy import BigInteger, Integer, SmallInteger, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column


class PricedLineMixin:
    """Columns of a frozen ServiceLineItem."""

    position: Mapped[int] = mapped_column(
        Integer, nullable=False, comment="Order of the line within its parent"
    )
    service_id: Mapped[UUID | None] = mapped_column(
        Uuid, nullable=True, comment="Catalog service (NULL for custom services)"
    )
    service_name: Mapped[str] = mapped_column(String(255), nullable=False)
    base_price_net: Mapped[int] = mapped_column(BigInteger, nullable=False)
    vat_rate: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    adjustment_type: Mapped[str] = mapped_column(String(20), nullable=False)
    adjustment_value: Mapped[int] = mapped_column(BigInteger, nullable=False)
    final_price_net: Mapped[int] = mapped_column(BigInteger, nullable=False)
    final_price_gross: Mapped[int] = mapped_column(BigInteger, nullable=False)
    custom_note: Mapped[str | None] = mapped_column(Text, nullable=True)
