from datetime import timedelta

from conftest import CENTRE, LITTORAL, auth_headers

from camrent.models.conversation import Conversation
from camrent.models.inquiry import Inquiry
from camrent.models.property import Property
from camrent.models.region import Division
from camrent.models.user import SubscriptionStatus, User, UserRole


def _payload(division_id, **overrides):
    payload = {
        "title": "Studio meublé à Akwa",
        "description": "Furnished studio with generator backup.",
        "property_type": "studio",
        "contract_type": "short_stay",
        "region_id": LITTORAL,
        "division_id": division_id,
        "address": "Boulevard de la Liberté, Douala",
        "price_per_night": 25000,
        "price_per_month": None,
        "rooms": 1,
        "size": 30,
        "amenities": ["wifi", "generator", "wifi"],
        "images": ["https://img.camrent.cm/a.jpg", "https://img.camrent.cm/b.jpg"],
        "video_url": None,
    }
    payload.update(overrides)
    return payload


def test_create_then_fetch_round_trip(client, landlord, division_id):
    response = client.post("/api/landlord/properties", json=_payload(division_id), headers=auth_headers(landlord))
    assert response.status_code == 201
    created = response.json()
    assert created["amenities"] == ["wifi", "generator"]

    fetched = client.get(f"/api/properties/{created['id']}", headers=auth_headers(landlord)).json()
    expected = _payload(division_id, amenities=["wifi", "generator"])
    for key, value in expected.items():
        assert fetched[key] == value, key
    assert fetched["landlord_id"] == landlord.id
    assert fetched["is_active"] is True


def test_unverified_landlord_is_blocked_and_nothing_persisted(client, db, make_user, division_id):
    landlord = make_user(UserRole.landlord, verified=False, subscribed=True)
    response = client.post("/api/landlord/properties", json=_payload(division_id), headers=auth_headers(landlord))
    assert response.status_code == 403
    detail = response.json()["detail"]
    assert detail["verification_required"] is True
    assert detail["subscription_required"] is False
    assert db.query(Property).count() == 0


def test_unsubscribed_landlord_is_blocked(client, db, make_user, division_id):
    landlord = make_user(UserRole.landlord, verified=True, subscribed=False)
    response = client.post("/api/landlord/properties", json=_payload(division_id), headers=auth_headers(landlord))
    assert response.status_code == 403
    assert response.json()["detail"]["subscription_required"] is True
    assert db.query(Property).count() == 0


def test_expired_subscription_is_flipped_and_blocked(client, db, make_user, division_id):
    landlord = make_user(UserRole.landlord, verified=True, subscribed=True, expires_in=timedelta(days=-1))
    response = client.post("/api/landlord/properties", json=_payload(division_id), headers=auth_headers(landlord))
    assert response.status_code == 403
    assert response.json()["detail"]["subscription_expired"] is True
    db.expire_all()
    assert db.get(User, landlord.id).subscription_status == SubscriptionStatus.expired


def test_renter_cannot_use_landlord_routes(client, renter, division_id):
    assert client.get("/api/landlord/properties").status_code == 401
    response = client.post("/api/landlord/properties", json=_payload(division_id), headers=auth_headers(renter))
    assert response.status_code == 403
    assert response.json()["detail"] == "Landlord role required"
    assert client.get("/api/landlord/properties", headers=auth_headers(renter)).status_code == 403


def test_admin_bypasses_subscription_and_verification(client, make_user, division_id):
    admin = make_user(UserRole.landlord, is_admin=True)
    response = client.post("/api/landlord/properties", json=_payload(division_id), headers=auth_headers(admin))
    assert response.status_code == 201


def test_division_must_belong_to_region(client, db, landlord):
    centre_division = db.query(Division).filter(Division.region_id == CENTRE).first()
    response = client.post(
        "/api/landlord/properties", json=_payload(centre_division.id), headers=auth_headers(landlord)
    )
    assert response.status_code == 400
    assert db.query(Property).count() == 0


def test_price_beyond_column_range_is_rejected(client, db, landlord, division_id):
    response = client.post(
        "/api/landlord/properties",
        json=_payload(division_id, price_per_month=100_000_000),
        headers=auth_headers(landlord),
    )
    assert response.status_code == 400
    assert db.query(Property).count() == 0

    largest = _payload(division_id, price_per_month=99_999_999.99)
    assert client.post("/api/landlord/properties", json=largest, headers=auth_headers(landlord)).status_code == 201


def test_my_properties_include_inactive(client, landlord, make_user, make_property):
    other = make_user(UserRole.landlord, verified=True, subscribed=True)
    mine_active = make_property(landlord)
    mine_inactive = make_property(landlord, is_active=False)
    make_property(other)
    response = client.get("/api/landlord/properties", headers=auth_headers(landlord))
    assert sorted(p["id"] for p in response.json()) == sorted([mine_active.id, mine_inactive.id])


def test_update_partial_and_ignores_null_required_fields(client, landlord, make_property):
    prop = make_property(landlord)
    response = client.put(
        f"/api/landlord/properties/{prop.id}",
        json={"price_per_month": 175000, "title": None, "is_active": False},
        headers=auth_headers(landlord),
    )
    assert response.status_code == 200
    body = response.json()
    assert body["price_per_month"] == 175000
    assert body["title"] == prop.title
    assert body["is_active"] is False
    assert body["updated_at"] is not None


def test_non_owner_gets_404(client, landlord, make_user, make_property):
    prop = make_property(landlord)
    intruder = make_user(UserRole.landlord, verified=True, subscribed=True)
    headers = auth_headers(intruder)
    assert client.put(f"/api/landlord/properties/{prop.id}", json={"title": "Mine now"}, headers=headers).status_code == 404
    assert client.delete(f"/api/landlord/properties/{prop.id}", headers=headers).status_code == 404
    assert client.put("/api/landlord/properties/9999", json={"title": "x"}, headers=headers).status_code == 404


def test_delete_cascades_to_inquiries(client, db, landlord, make_property):
    prop = make_property(landlord)
    db.add(Inquiry(property_id=prop.id, guest_name="Eric", guest_email="eric@camrent.cm", message="Available?"))
    db.commit()
    response = client.delete(f"/api/landlord/properties/{prop.id}", headers=auth_headers(landlord))
    assert response.status_code == 200
    db.expire_all()
    assert db.query(Property).count() == 0
    assert db.query(Inquiry).count() == 0


def test_delete_blocked_by_active_conversation(client, db, landlord, renter, make_property):
    prop = make_property(landlord)
    db.add(Conversation(property_id=prop.id, landlord_id=landlord.id, renter_id=renter.id))
    db.commit()
    response = client.delete(f"/api/landlord/properties/{prop.id}", headers=auth_headers(landlord))
    assert response.status_code == 409
    db.expire_all()
    assert db.query(Property).count() == 1
