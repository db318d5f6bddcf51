from __future__ import annotations

from datetime import date

import pytest

from app.core.errors import InvalidRequest, ResourceNotFound
from app.services import order_service, vendor_service


@pytest.fixture()
def category(db):
    return vendor_service.create_category(db, name="Florist & Decor")


def _vendor(db, category, email="info@tamanbunga.example", **kwargs):
    return vendor_service.create_vendor(
        db,
        category_id=category.id,
        company_name=kwargs.pop("company_name", "Taman Bunga Florist"),
        contact_person="Lina Kusuma",
        email=email,
        phone="081311112222",
        **kwargs,
    )


def test_vendor_codes_and_category_slug(db, category):
    assert category.slug == "florist-decor"
    first = _vendor(db, category)
    second = _vendor(db, category, email="hello@melati.example", company_name="Melati Fresh Flowers")

    assert first.vendor_code == "VEN-000001"
    assert second.vendor_code == "VEN-000002"
    assert (first.status, first.rating_level, first.average_rating, first.total_reviews) == ("active", "standard", 0, 0)

    with pytest.raises(InvalidRequest):
        vendor_service.create_category(db, name="Florist decor")
    with pytest.raises(ResourceNotFound):
        vendor_service.create_vendor(db, category_id="missing", company_name="X", contact_person="Y", email="x@y.example", phone="0")


def test_average_rating_follows_rating_writes(db, category):
    vendor = _vendor(db, category)

    five = vendor_service.add_rating(db, vendor.id, rating=5)
    vendor_service.add_rating(db, vendor.id, rating=4)
    three = vendor_service.add_rating(db, vendor.id, rating=3, quality_rating=4, value_rating=5)
    db.refresh(vendor)
    assert (vendor.average_rating, vendor.total_reviews) == (4.0, 3)
    assert three.overall_rating == 4.5
    assert five.overall_rating == 5.0

    vendor_service.update_rating(db, three.id, {"rating": 1})
    db.refresh(vendor)
    assert vendor.average_rating == 3.33

    vendor_service.delete_rating(db, five.id)
    db.refresh(vendor)
    assert (vendor.average_rating, vendor.total_reviews) == (2.5, 2)


def test_one_review_per_vendor_and_order(db, category):
    vendor = _vendor(db, category)
    order = order_service.create_order(db, client_name="Ayu", event_date=date(2025, 6, 14), total_price=1000)

    vendor_service.add_rating(db, vendor.id, order_id=order.id, rating=5)
    with pytest.raises(InvalidRequest):
        vendor_service.add_rating(db, vendor.id, order_id=order.id, rating=2)
    with pytest.raises(ResourceNotFound):
        vendor_service.add_rating(db, vendor.id, order_id="missing", rating=2)

    # Reviews without an order are not limited
    vendor_service.add_rating(db, vendor.id, rating=4)
    vendor_service.add_rating(db, vendor.id, rating=4)
    db.refresh(vendor)
    assert vendor.total_reviews == 3


def test_rating_summary(db, category):
    vendor = _vendor(db, category)
    vendor_service.add_rating(db, vendor.id, rating=5, is_verified=True)
    vendor_service.add_rating(db, vendor.id, rating=5)
    vendor_service.add_rating(db, vendor.id, rating=2, would_recommend=False)

    summary = vendor_service.rating_summary(db, vendor.id)
    assert summary["total_reviews"] == 3
    assert summary["average_rating"] == 4.0
    assert summary["rating_distribution"] == {5: 2, 4: 0, 3: 0, 2: 1, 1: 0}
    assert summary["would_recommend_count"] == 2
    assert summary["verified_count"] == 1

    assert vendor_service.rating_summary(db, "nobody")["average_rating"] == 0.0


def test_vendor_endpoints(client):
    res = client.post("/api/vendors/categories", json={"name": "Catering"})
    assert res.status_code == 201
    category = res.json()
    assert category["slug"] == "catering"
    assert client.post("/api/vendors/categories", json={"name": "Catering"}).status_code == 422

    body = {
        "category_id": category["id"],
        "company_name": "Dapur Nusantara Catering",
        "contact_person": "Wati Rahayu",
        "email": "order@dapurnusantara.com",
        "phone": "081322223333",
        "city": "Jakarta",
    }
    res = client.post("/api/vendors", json=body)
    assert res.status_code == 201
    vendor = res.json()
    assert vendor["vendor_code"] == "VEN-000001"
    assert client.post("/api/vendors", json=body).status_code == 422
    assert client.post("/api/vendors", json={**body, "email": "x@dapurnusantara.com", "category_id": "missing"}).status_code == 404

    other = client.post("/api/vendors", json={**body, "email": "sales@othercatering.com", "company_name": "Other Catering"}).json()
    res = client.patch(f"/api/vendors/{other['id']}", json={"email": "order@dapurnusantara.com"})
    assert res.status_code == 422

    res = client.post(f"/api/vendors/{vendor['id']}/ratings", json={"rating": 4, "review": "Tasty and on time"})
    assert res.status_code == 201
    rating = res.json()
    assert client.post(f"/api/vendors/{vendor['id']}/ratings", json={"rating": 6}).status_code == 422
    client.post(f"/api/vendors/{vendor['id']}/ratings", json={"rating": 5})

    assert client.get(f"/api/vendors/{vendor['id']}").json()["average_rating"] == 4.5
    assert [v["id"] for v in client.get("/api/vendors", params={"min_rating": 4.5}).json()] == [vendor["id"]]

    res = client.post(f"/api/vendors/ratings/{rating['id']}/response", json={"vendor_response": "Thank you!"})
    assert res.json()["vendor_response"] == "Thank you!"
    assert res.json()["responded_at"] is not None

    listing = client.get(f"/api/vendors/{vendor['id']}/ratings").json()
    assert listing["summary"]["total_reviews"] == 2
    assert len(listing["ratings"]) == 2

    assert client.delete(f"/api/vendors/ratings/{rating['id']}").json() == {"ok": True}
    assert client.get(f"/api/vendors/{vendor['id']}").json()["average_rating"] == 5.0

    assert client.delete(f"/api/vendors/categories/{category['id']}").status_code == 422
    assert client.delete(f"/api/vendors/{vendor['id']}").json() == {"ok": True}
    assert client.delete(f"/api/vendors/{other['id']}").json() == {"ok": True}
    assert client.delete(f"/api/vendors/categories/{category['id']}").json() == {"ok": True}
    assert client.get("/api/vendors/nope").status_code == 404
