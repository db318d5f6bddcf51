from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Numeric, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base
from app.models._mixins import TimestampMixin


class VendorCategory(Base, TimestampMixin):
    __tablename__ = "vendor_categories"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    icon: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class Vendor(Base, TimestampMixin):
    __tablename__ = "vendors"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    vendor_code: Mapped[str] = mapped_column(String(20), nullable=False, unique=True, index=True)
    category_id: Mapped[str] = mapped_column(String(36), ForeignKey("vendor_categories.id"), nullable=False, index=True)

    company_name: Mapped[str] = mapped_column(String(255), nullable=False)
    contact_person: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    phone: Mapped[str] = mapped_column(String(20), nullable=False)
    address: Mapped[str] = mapped_column(Text, nullable=False, default="")
    city: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    province: Mapped[str] = mapped_column(String(100), nullable=False, default="")

    status: Mapped[str] = mapped_column(String(16), nullable=False, default="active")  # active/inactive/blacklisted
    rating_level: Mapped[str] = mapped_column(String(16), nullable=False, default="standard")  # platinum/gold/silver/bronze/standard

    # Maintained from vendor_ratings on every rating write
    average_rating: Mapped[float] = mapped_column(Numeric(3, 2, asdecimal=False), nullable=False, default=0)
    total_reviews: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    minimum_order: Mapped[float] = mapped_column(Numeric(15, 2, asdecimal=False), nullable=False, default=0)
    payment_terms_days: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    bank_name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    bank_account_number: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    bank_account_holder: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    tax_id: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")

    category: Mapped[VendorCategory] = relationship("VendorCategory")
    ratings: Mapped[list["VendorRating"]] = relationship("VendorRating", back_populates="vendor", cascade="all, delete-orphan")


class VendorRating(Base, TimestampMixin):
    __tablename__ = "vendor_ratings"
    __table_args__ = (UniqueConstraint("vendor_id", "order_id", name="uq_vendor_rating_order"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    vendor_id: Mapped[str] = mapped_column(String(36), ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False, index=True)
    order_id: Mapped[str | None] = mapped_column(String(36), ForeignKey("orders.id", ondelete="SET NULL"), nullable=True)

    rating: Mapped[int] = mapped_column(Integer, nullable=False)  # 1..5
    quality_rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    timeliness_rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    professionalism_rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    value_rating: Mapped[int | None] = mapped_column(Integer, nullable=True)

    review: Mapped[str] = mapped_column(Text, nullable=False, default="")
    pros: Mapped[str] = mapped_column(Text, nullable=False, default="")
    cons: Mapped[str] = mapped_column(Text, nullable=False, default="")
    would_recommend: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_verified: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    vendor_response: Mapped[str] = mapped_column(Text, nullable=False, default="")
    responded_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    vendor: Mapped[Vendor] = relationship("Vendor", back_populates="ratings")

    @property
    def overall_rating(self) -> float:
        """Mean of the detailed scores given, or the headline rating when none are."""
        parts = [
            r
            for r in (self.quality_rating, self.timeliness_rating, self.professionalism_rating, self.value_rating)
            if r
        ]
        if not parts:
            return float(self.rating)
        return round(sum(parts) / len(parts), 2)
