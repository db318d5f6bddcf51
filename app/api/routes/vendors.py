from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.deps import get_db
from app.models.vendor import Vendor, VendorCategory, VendorRating
from app.schemas.vendor import (
    VendorCategoryCreate,
    VendorCategoryOut,
    VendorCategoryUpdate,
    VendorCreate,
    VendorOut,
    VendorRatingCreate,
    VendorRatingOut,
    VendorRatings,
    VendorRatingUpdate,
    VendorResponseIn,
    VendorUpdate,
)
from app.services import vendor_service
from app.services.audit_service import write_audit_log

router = APIRouter()

# Detail scores are optional and may be cleared
CLEARABLE_SCORES = {"quality_rating", "timeliness_rating", "professionalism_rating", "value_rating"}


@router.get("/categories", response_model=list[VendorCategoryOut])
def list_categories(active_only: bool = False, db: Session = Depends(get_db)):
    q = select(VendorCategory).order_by(VendorCategory.name)
    if active_only:
        q = q.where(VendorCategory.is_active == True)
    return db.execute(q).scalars().all()


@router.post("/categories", response_model=VendorCategoryOut, status_code=201)
def create_category(payload: VendorCategoryCreate, request: Request, db: Session = Depends(get_db)):
    c = vendor_service.create_category(db, **payload.model_dump())

    write_audit_log(db, action_type="VENDOR_CATEGORY_CREATE", target_type="vendor_category", target_id=c.id, summary=f"Created vendor category {c.slug}", request=request)
    return c


@router.patch("/categories/{category_id}", response_model=VendorCategoryOut)
def update_category(category_id: str, payload: VendorCategoryUpdate, request: Request, db: Session = Depends(get_db)):
    c = vendor_service.get_category(db, category_id)
    data = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "slug" in data:
        taken = db.execute(select(VendorCategory.id).where(VendorCategory.slug == data["slug"], VendorCategory.id != category_id)).first()
        if taken:
            raise HTTPException(status_code=422, detail="Category slug already in use")
    for k, v in data.items():
        setattr(c, k, v)
    db.commit()
    db.refresh(c)

    write_audit_log(db, action_type="VENDOR_CATEGORY_UPDATE", target_type="vendor_category", target_id=c.id, summary="Updated vendor category", diff_json={"keys": sorted(data.keys())}, request=request)
    return c


@router.delete("/categories/{category_id}")
def delete_category(category_id: str, request: Request, db: Session = Depends(get_db)):
    c = vendor_service.get_category(db, category_id)
    if db.execute(select(Vendor.id).where(Vendor.category_id == category_id)).first():
        raise HTTPException(status_code=422, detail="Cannot delete category with existing vendors")
    db.delete(c)
    db.commit()

    write_audit_log(db, action_type="VENDOR_CATEGORY_DELETE", target_type="vendor_category", target_id=category_id, summary="Deleted vendor category", request=request)
    return {"ok": True}


@router.get("", response_model=list[VendorOut])
def list_vendors(
    category_id: str | None = None,
    status: str | None = None,
    rating_level: str | None = None,
    min_rating: float | None = None,
    city: str | None = None,
    search: str | None = None,
    db: Session = Depends(get_db),
):
    q = select(Vendor).order_by(Vendor.company_name)
    if category_id:
        q = q.where(Vendor.category_id == category_id)
    if status:
        q = q.where(Vendor.status == status)
    if rating_level:
        q = q.where(Vendor.rating_level == rating_level)
    if min_rating is not None:
        q = q.where(Vendor.average_rating >= min_rating)
    if city:
        q = q.where(Vendor.city.ilike(f"%{city}%"))
    if search:
        like = f"%{search}%"
        q = q.where(Vendor.vendor_code.ilike(like) | Vendor.company_name.ilike(like) | Vendor.contact_person.ilike(like))
    return db.execute(q.limit(get_settings().list_limit)).scalars().all()


@router.post("", response_model=VendorOut, status_code=201)
def create_vendor(payload: VendorCreate, request: Request, db: Session = Depends(get_db)):
    if db.execute(select(Vendor.id).where(Vendor.email == str(payload.email))).first():
        raise HTTPException(status_code=422, detail="Vendor email already in use")

    data = payload.model_dump()
    data["email"] = str(payload.email)
    vendor = vendor_service.create_vendor(db, **data)

    write_audit_log(db, action_type="VENDOR_CREATE", target_type="vendor", target_id=vendor.vendor_code, summary=f"Created vendor {vendor.company_name}", request=request)
    return vendor


@router.get("/{vendor_id}", response_model=VendorOut)
def get_vendor(vendor_id: str, db: Session = Depends(get_db)):
    return vendor_service.get_vendor(db, vendor_id)


@router.patch("/{vendor_id}", response_model=VendorOut)
def update_vendor(vendor_id: str, payload: VendorUpdate, request: Request, db: Session = Depends(get_db)):
    vendor = vendor_service.get_vendor(db, vendor_id)
    data = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "email" in data:
        data["email"] = str(data["email"])
        taken = db.execute(select(Vendor.id).where(Vendor.email == data["email"], Vendor.id != vendor_id)).first()
        if taken:
            raise HTTPException(status_code=422, detail="Vendor email already in use")
    if "category_id" in data:
        vendor_service.get_category(db, data["category_id"])
    for k, v in data.items():
        setattr(vendor, k, v)
    db.commit()
    db.refresh(vendor)

    write_audit_log(db, action_type="VENDOR_UPDATE", target_type="vendor", target_id=vendor.vendor_code, summary="Updated vendor", diff_json={"keys": sorted(data.keys())}, request=request)
    return vendor


@router.delete("/{vendor_id}")
def delete_vendor(vendor_id: str, request: Request, db: Session = Depends(get_db)):
    vendor = vendor_service.get_vendor(db, vendor_id)
    code = vendor.vendor_code
    db.delete(vendor)
    db.commit()

    write_audit_log(db, action_type="VENDOR_DELETE", target_type="vendor", target_id=code, summary="Deleted vendor", request=request)
    return {"ok": True}


@router.get("/{vendor_id}/ratings", response_model=VendorRatings)
def list_ratings(vendor_id: str, db: Session = Depends(get_db)):
    vendor_service.get_vendor(db, vendor_id)
    ratings = db.execute(
        select(VendorRating).where(VendorRating.vendor_id == vendor_id).order_by(VendorRating.created_at.desc())
    ).scalars().all()
    return VendorRatings(
        ratings=[VendorRatingOut.model_validate(r) for r in ratings],
        summary=vendor_service.rating_summary(db, vendor_id),
    )


@router.post("/{vendor_id}/ratings", response_model=VendorRatingOut, status_code=201)
def add_rating(vendor_id: str, payload: VendorRatingCreate, request: Request, db: Session = Depends(get_db)):
    rating = vendor_service.add_rating(db, vendor_id, **payload.model_dump())
    vendor = rating.vendor

    write_audit_log(
        db,
        action_type="VENDOR_RATING_CREATE",
        target_type="vendor",
        target_id=vendor.vendor_code,
        summary=f"Rated {rating.rating}/5",
        diff_json={"rating_id": rating.id, "order_id": rating.order_id, "average_rating": vendor.average_rating},
        request=request,
    )
    return rating


@router.patch("/ratings/{rating_id}", response_model=VendorRatingOut)
def update_rating(rating_id: str, payload: VendorRatingUpdate, request: Request, db: Session = Depends(get_db)):
    data = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None or k in CLEARABLE_SCORES}
    rating = vendor_service.update_rating(db, rating_id, data)

    write_audit_log(db, action_type="VENDOR_RATING_UPDATE", target_type="vendor_rating", target_id=rating.id, summary="Updated vendor rating", diff_json={"keys": sorted(data.keys())}, request=request)
    return rating


@router.post("/ratings/{rating_id}/response", response_model=VendorRatingOut)
def respond_to_rating(rating_id: str, payload: VendorResponseIn, request: Request, db: Session = Depends(get_db)):
    rating = vendor_service.respond_to_rating(db, rating_id, payload.vendor_response)

    write_audit_log(db, action_type="VENDOR_RATING_RESPONSE", target_type="vendor_rating", target_id=rating.id, summary="Vendor responded to rating", request=request)
    return rating


@router.delete("/ratings/{rating_id}")
def delete_rating(rating_id: str, request: Request, db: Session = Depends(get_db)):
    vendor_service.delete_rating(db, rating_id)

    write_audit_log(db, action_type="VENDOR_RATING_DELETE", target_type="vendor_rating", target_id=rating_id, summary="Deleted vendor rating", request=request)
    return {"ok": True}
