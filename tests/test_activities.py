from datetime import timedelta
from decimal import Decimal

import pytest

from partnerhub.api.activities.models.model_activity import (
    ActivityBookingModel,
    ActivityBookingStatus,
    ActivityModel,
)
from partnerhub.utils.database_utils import now_trimmed, today_local
from conftest import whoami

BASE = "/api/partner/activities"
STATS = "/api/partner/stats"

ACTIVITY = {
    "title": "Ha Long Bay Kayak Tour",
    "location": "Ha Long",
    "price": 850000,
    "duration": "4 hours",
    "images": ["https://cdn.example.com/kayak-1.jpg", "https://cdn.example.com/kayak-2.jpg"],
    "inclusions": ["Kayak", "Guide"],
}


def set_partner_status(client, admin_headers, user_id, value):
    resp = client.patch(
        f"/api/admin/users/{user_id}/partner-status", json={"partner_status": value}, headers=admin_headers
    )
    assert resp.status_code == 200, resp.text
    return resp.json()


@pytest.fixture
def partner_headers(client, owner_headers, admin_headers):
    user = whoami(client, owner_headers)
    set_partner_status(client, admin_headers, user["id"], "approved")
    return owner_headers


def create_activity(client, headers, **overrides):
    resp = client.post(BASE, json={**ACTIVITY, **overrides}, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


def seed_booking(db, activity_id, amount, status=ActivityBookingStatus.CONFIRMED, days_ago=0):
    db.add(
        ActivityBookingModel(
            activity_id=activity_id,
            participants=2,
            total_amount=Decimal(str(amount)),
            status=status,
            created_at=now_trimmed() - timedelta(days=days_ago),
        )
    )
    db.commit()


@pytest.mark.parametrize("status", [None, "pending", "rejected"])
def test_requires_approved_partner(client, owner_headers, admin_headers, status):
    user = whoami(client, owner_headers)
    if status:
        set_partner_status(client, admin_headers, user["id"], status)

    resp = client.get(BASE, headers=owner_headers)
    assert resp.status_code == 403, resp.text
    assert resp.json()["error"]["code"] == "FORBIDDEN"


def test_create_and_list(client, partner_headers):
    activity = create_activity(client, partner_headers)
    assert activity["image_url"] == ACTIVITY["images"][0]
    assert activity["category"] == "Activity"
    assert activity["is_active"] is True

    listing = client.get(BASE, headers=partner_headers).json()
    assert listing == [
        {
            "id": activity["id"],
            "title": "Ha Long Bay Kayak Tour",
            "location": "Ha Long",
            "price": 850000,
            "rating": 0,
            "type": "activity",
            "status": "active",
        }
    ]


def test_create_validation(client, partner_headers):
    assert client.post(BASE, json={**ACTIVITY, "price": 0}, headers=partner_headers).status_code == 422
    missing = {k: v for k, v in ACTIVITY.items() if k != "location"}
    resp = client.post(BASE, json=missing, headers=partner_headers)
    assert resp.status_code == 422
    assert any(e["field"] == "location" for e in resp.json()["detail"])


def test_update_and_deactivate(client, partner_headers):
    activity = create_activity(client, partner_headers)
    resp = client.patch(
        f"{BASE}/{activity['id']}",
        json={"images": ["https://cdn.example.com/new.jpg"], "is_active": False, "price": 900000},
        headers=partner_headers,
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["image_url"] == "https://cdn.example.com/new.jpg"
    assert body["price"] == 900000

    assert client.get(BASE, headers=partner_headers).json()[0]["status"] == "inactive"


def test_activities_of_other_partner_are_hidden(client, partner_headers, staff_headers, admin_headers):
    activity = create_activity(client, partner_headers)
    staff = whoami(client, staff_headers)
    set_partner_status(client, admin_headers, staff["id"], "approved")

    assert client.get(f"{BASE}/{activity['id']}", headers=staff_headers).status_code == 404
    assert client.delete(f"{BASE}/{activity['id']}", headers=staff_headers).status_code == 404
    assert client.get(BASE, headers=staff_headers).json() == []


def test_delete(client, db, partner_headers):
    free = create_activity(client, partner_headers)
    booked = create_activity(client, partner_headers, title="Sapa Trek")
    seed_booking(db, booked["id"], 100000, status=ActivityBookingStatus.PENDING)

    assert client.delete(f"{BASE}/{free['id']}", headers=partner_headers).status_code == 204
    assert client.get(f"{BASE}/{free['id']}", headers=partner_headers).status_code == 404

    blocked = client.delete(f"{BASE}/{booked['id']}", headers=partner_headers)
    assert blocked.status_code == 409, blocked.text


# ---------------- Estatísticas ----------------
def test_stats_without_activities(client, partner_headers):
    resp = client.get(STATS, headers=partner_headers)
    assert resp.status_code == 200, resp.text
    assert resp.json() == {"revenue": 0, "totalBookings": 0, "averageRating": 0, "activeListings": 0}


def test_stats_with_bookings(client, db, partner_headers):
    kayak = create_activity(client, partner_headers)
    trek = create_activity(client, partner_headers, title="Sapa Trek")
    db.query(ActivityModel).filter(ActivityModel.id == kayak["id"]).update({"rating": 4.5})
    db.commit()

    seed_booking(db, kayak["id"], 500000)
    seed_booking(db, trek["id"], 200000, days_ago=3)
    seed_booking(db, trek["id"], 100000, days_ago=30)
    seed_booking(db, kayak["id"], 999000, status=ActivityBookingStatus.PENDING)

    resp = client.get(STATS, params={"days": 7}, headers=partner_headers)
    assert resp.status_code == 200, resp.text
    stats = resp.json()
    assert stats["revenue"] == 800000
    assert stats["totalBookings"] == 3
    assert stats["averageRating"] == 4.5
    assert stats["activeListings"] == 2

    chart = stats["chartData"]
    assert len(chart) == 7
    assert chart[-1] == {"date": today_local().isoformat(), "revenue": 500000, "bookings": 1}
    assert chart[-4]["bookings"] == 1
    assert sum(p["revenue"] for p in chart) == 700000


def test_stats_days_bounds(client, partner_headers):
    assert client.get(STATS, params={"days": 0}, headers=partner_headers).status_code == 422
    assert client.get(STATS, params={"days": 366}, headers=partner_headers).status_code == 422


def test_null_on_required_fields_is_rejected(client, partner_headers):
    activity = create_activity(client, partner_headers)

    resp = client.patch(f"{BASE}/{activity['id']}", json={"price": None}, headers=partner_headers)
    assert resp.status_code == 422, resp.text
    assert [e["field"] for e in resp.json()["detail"]] == ["price"]

    cleared = client.patch(f"{BASE}/{activity['id']}", json={"duration": None}, headers=partner_headers)
    assert cleared.status_code == 200, cleared.text
