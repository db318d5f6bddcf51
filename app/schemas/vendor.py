from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, EmailStr, Field

VendorStatus = Literal["active", "inactive", "blacklisted"]
RatingLevel = Literal["platinum", "gold", "silver", "bronze", "standard"]


class VendorCategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=255)
    slug: str | None = Field(default=None, max_length=255)
    description: str = ""
    icon: str = Field(default="", max_length=50)
    is_active: bool = True


class VendorCategoryUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    slug: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    icon: str | None = Field(default=None, max_length=50)
    is_active: bool | None = None


class VendorCategoryOut(BaseModel):
    id: str
    name: str
    slug: str
    description: str
    icon: str
    is_active: bool

    class Config:
        from_attributes = True


class VendorCreate(BaseModel):
    category_id: str
    company_name: str = Field(min_length=1, max_length=255)
    contact_person: str = Field(min_length=1, max_length=255)
    email: EmailStr
    phone: str = Field(min_length=1, max_length=20)
    address: str = ""
    city: str = Field(default="", max_length=100)
    province: str = Field(default="", max_length=100)
    status: VendorStatus = "active"
    rating_level: RatingLevel = "standard"
    minimum_order: float = Field(default=0, ge=0)
    payment_terms_days: int = Field(default=0, ge=0)
    bank_name: str = Field(default="", max_length=100)
    bank_account_number: str = Field(default="", max_length=50)
    bank_account_holder: str = Field(default="", max_length=255)
    tax_id: str = Field(default="", max_length=50)
    notes: str = ""


class VendorUpdate(BaseModel):
    category_id: str | None = None
    company_name: str | None = Field(default=None, min_length=1, max_length=255)
    contact_person: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, min_length=1, max_length=20)
    address: str | None = None
    city: str | None = Field(default=None, max_length=100)
    province: str | None = Field(default=None, max_length=100)
    status: VendorStatus | None = None
    rating_level: RatingLevel | None = None
    minimum_order: float | None = Field(default=None, ge=0)
    payment_terms_days: int | None = Field(default=None, ge=0)
    bank_name: str | None = Field(default=None, max_length=100)
    bank_account_number: str | None = Field(default=None, max_length=50)
    bank_account_holder: str | None = Field(default=None, max_length=255)
    tax_id: str | None = Field(default=None, max_length=50)
    notes: str | None = None


class VendorOut(BaseModel):
    id: str
    vendor_code: str
    category_id: str
    company_name: str
    contact_person: str
    email: str
    phone: str
    address: str
    city: str
    province: str
    status: str
    rating_level: str
    average_rating: float
    total_reviews: int
    minimum_order: float
    payment_terms_days: int
    notes: str

    class Config:
        from_attributes = True


class VendorRatingCreate(BaseModel):
    order_id: str | None = None
    rating: int = Field(ge=1, le=5)
    quality_rating: int | None = Field(default=None, ge=1, le=5)
    timeliness_rating: int | None = Field(default=None, ge=1, le=5)
    professionalism_rating: int | None = Field(default=None, ge=1, le=5)
    value_rating: int | None = Field(default=None, ge=1, le=5)
    review: str = ""
    pros: str = ""
    cons: str = ""
    would_recommend: bool = True
    is_verified: bool = False


class VendorRatingUpdate(BaseModel):
    rating: int | None = Field(default=None, ge=1, le=5)
    quality_rating: int | None = Field(default=None, ge=1, le=5)
    timeliness_rating: int | None = Field(default=None, ge=1, le=5)
    professionalism_rating: int | None = Field(default=None, ge=1, le=5)
    value_rating: int | None = Field(default=None, ge=1, le=5)
    review: str | None = None
    pros: str | None = None
    cons: str | None = None
    would_recommend: bool | None = None
    is_verified: bool | None = None


class VendorResponseIn(BaseModel):
    vendor_response: str = Field(min_length=1)


class VendorRatingOut(BaseModel):
    id: str
    vendor_id: str
    order_id: str | None
    rating: int
    quality_rating: int | None
    timeliness_rating: int | None
    professionalism_rating: int | None
    value_rating: int | None
    overall_rating: float
    review: str
    pros: str
    cons: str
    would_recommend: bool
    is_verified: bool
    vendor_response: str
    responded_at: datetime | None = None
    created_at: datetime

    class Config:
        from_attributes = True


class RatingSummary(BaseModel):
    total_reviews: int
    average_rating: float
    rating_distribution: dict[int, int]
    would_recommend_count: int
    verified_count: int


class VendorRatings(BaseModel):
    ratings: list[VendorRatingOut]
    summary: RatingSummary
