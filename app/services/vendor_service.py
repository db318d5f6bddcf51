from __future__ import annotations

import logging
import re
from datetime import datetime, timezone

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.core.errors import InvalidRequest, ResourceNotFound
from app.models.order import Order
from app.models.vendor import Vendor, VendorCategory, VendorRating
from app.services.numbering import commit_numbered, next_number

logger = logging.getLogger(__name__)

VENDOR_PREFIX = "VEN-"


def slugify(value: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")
    return slug or "category"


def generate_vendor_code(db: Session) -> str:
    """VEN- + 6-digit running number."""
    last = db.execute(
        select(Vendor.vendor_code).where(Vendor.vendor_code.like(f"{VENDOR_PREFIX}%")).order_by(Vendor.vendor_code.desc()).limit(1)
    ).scalar_one_or_none()
    return next_number(VENDOR_PREFIX, last, width=6)


def get_category(db: Session, category_id: str) -> VendorCategory:
    category = db.get(VendorCategory, category_id)
    if category is None:
        raise ResourceNotFound(f"Vendor category {category_id} not found")
    return category


def get_vendor(db: Session, vendor_id: str) -> Vendor:
    vendor = db.get(Vendor, vendor_id)
    if vendor is None:
        raise ResourceNotFound(f"Vendor {vendor_id} not found")
    return vendor


def get_rating(db: Session, rating_id: str) -> VendorRating:
    rating = db.get(VendorRating, rating_id)
    if rating is None:
        raise ResourceNotFound(f"Rating {rating_id} not found")
    return rating


def create_category(
    db: Session,
    *,
    name: str,
    slug: str | None = None,
    description: str = "",
    icon: str = "",
    is_active: bool = True,
) -> VendorCategory:
    slug = slug or slugify(name)
    if db.execute(select(VendorCategory.id).where(VendorCategory.slug == slug)).first():
        raise InvalidRequest(f"Category slug '{slug}' already in use")

    category = VendorCategory(name=name, slug=slug, description=description, icon=icon, is_active=is_active)
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def create_vendor(db: Session, **fields) -> Vendor:
    get_category(db, fields["category_id"])

    def build() -> Vendor:
        vendor = Vendor(vendor_code=generate_vendor_code(db), average_rating=0, total_reviews=0, **fields)
        db.add(vendor)
        return vendor

    vendor = commit_numbered(db, build, "vendor")
    db.refresh(vendor)
    logger.info("Created vendor %s (%s)", vendor.vendor_code, vendor.company_name)
    return vendor


def refresh_average_rating(db: Session, vendor: Vendor) -> Vendor:
    db.flush()
    avg, count = db.execute(
        select(func.avg(VendorRating.rating), func.count(VendorRating.id)).where(VendorRating.vendor_id == vendor.id)
    ).one()
    vendor.average_rating = round(float(avg or 0), 2)
    vendor.total_reviews = int(count or 0)
    return vendor


def add_rating(db: Session, vendor_id: str, **fields) -> VendorRating:
    vendor = get_vendor(db, vendor_id)
    order_id = fields.get("order_id")
    if order_id:
        if db.get(Order, order_id) is None:
            raise ResourceNotFound(f"Order {order_id} not found")
        dup = db.execute(
            select(VendorRating.id).where(VendorRating.vendor_id == vendor.id, VendorRating.order_id == order_id)
        ).first()
        if dup:
            raise InvalidRequest("This vendor has already been reviewed for this order")

    try:
        rating = VendorRating(**fields)
        vendor.ratings.append(rating)
        refresh_average_rating(db, vendor)
        db.commit()
    except Exception:
        db.rollback()
        raise

    db.refresh(rating)
    logger.info("Rated vendor %s: %d (avg %.2f over %d)", vendor.vendor_code, rating.rating, vendor.average_rating, vendor.total_reviews)
    return rating


def update_rating(db: Session, rating_id: str, changes: dict) -> VendorRating:
    rating = get_rating(db, rating_id)
    for k, v in changes.items():
        setattr(rating, k, v)
    if "rating" in changes:
        refresh_average_rating(db, rating.vendor)
    db.commit()
    db.refresh(rating)
    return rating


def respond_to_rating(db: Session, rating_id: str, response: str) -> VendorRating:
    rating = get_rating(db, rating_id)
    rating.vendor_response = response
    rating.responded_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(rating)
    return rating


def delete_rating(db: Session, rating_id: str) -> None:
    rating = get_rating(db, rating_id)
    vendor = rating.vendor
    db.delete(rating)
    refresh_average_rating(db, vendor)
    db.commit()
    logger.info("Deleted rating %s of %s", rating_id, vendor.vendor_code)


def rating_summary(db: Session, vendor_id: str) -> dict:
    ratings = db.execute(select(VendorRating).where(VendorRating.vendor_id == vendor_id)).scalars().all()
    total = len(ratings)
    return {
        "total_reviews": total,
        "average_rating": round(sum(r.rating for r in ratings) / total, 2) if total else 0.0,
        "rating_distribution": {score: sum(1 for r in ratings if r.rating == score) for score in (5, 4, 3, 2, 1)},
        "would_recommend_count": sum(1 for r in ratings if r.would_recommend),
        "verified_count": sum(1 for r in ratings if r.is_verified),
    }
