"""Service catalog database model."""

from sqlalchemy import BigInteger, Boolean, SmallInteger, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel, TenantMixin


class CatalogServiceModel(TenantMixin, BaseMutableModel):
    """Detailing service offered by a studio.

    Fields:
        name: Display name
        base_price_net: List net price in cents (BIGINT)
        vat_rate: VAT code (23, 8, 5, 0 or -1 for exempt)
        requires_manual_price: Price is agreed per booking
        is_active: Bookable flag
    """

    __tablename__ = "catalog_services"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    base_price_net: Mapped[int] = mapped_column(
        BigInteger, nullable=False, comment="Net list price in cents"
    )
    vat_rate: Mapped[int] = mapped_column(
        SmallInteger, nullable=False, comment="VAT code (23/8/5/0/-1)"
    )
    requires_manual_price: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
