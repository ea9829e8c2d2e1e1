from datetime import timedelta, timezone
from zoneinfo import ZoneInfo
from decimal import Decimal

import pytest

from partnerhub.api.flight.models.model_booking import BookingStatus, FlightBookingModel
from partnerhub.api.flight.services.calculations import js_weekday
from partnerhub.config.settings import APP_TIMEZONE
from partnerhub.utils.database_utils import now_trimmed

BASE = "/api/partner/flight"


def register_airline(client, headers, code="VN", name="Lotus Air"):
    resp = client.post(f"{BASE}/partner", json={"airline_code": code, "name": name}, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


def flight_payload(departure=None, **overrides):
    departure = departure or (now_trimmed() + timedelta(days=10)).replace(hour=8, minute=0, second=0)
    body = {
        "flight_number": "VN213",
        "origin": "han",
        "destination": "sgn",
        "departure_at": departure.isoformat(),
        "arrival_at": (departure + timedelta(minutes=130)).isoformat(),
        "aircraft": "A321",
        "base_price": 1000000,
    }
    body.update(overrides)
    return body


def create_flight(client, headers, **overrides):
    resp = client.post(f"{BASE}/flights", json=flight_payload(**overrides), headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


def create_route(client, headers, origin="HAN", destination="SGN", distance_km=1150):
    resp = client.post(
        f"{BASE}/routes",
        json={"origin": origin, "destination": destination, "distance_km": distance_km, "duration_minutes": 130},
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def create_rule(client, headers, **body):
    resp = client.post(f"{BASE}/pricing-rules", json={"rule_type": "demand", **body}, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


def seed_booking(db, flight_id, reference, status=BookingStatus.CONFIRMED, passengers=1, total=1000000):
    booking = FlightBookingModel(
        flight_id=flight_id,
        booking_reference=reference,
        passenger_name="Tran Van An",
        passenger_count=passengers,
        total_price=Decimal(str(total)),
        status=status,
    )
    db.add(booking)
    db.commit()
    return booking.id


# ---------------- Companhia ----------------
def test_register_airline(client, owner_headers, staff_headers):
    partner = register_airline(client, owner_headers, code="vn")
    assert partner["airline_code"] == "VN"
    assert partner["contact_email"] == "owner@example.com"

    again = client.post(f"{BASE}/partner", json={"airline_code": "QH", "name": "Other"}, headers=owner_headers)
    assert again.status_code == 409
    assert again.json()["error"]["code"] == "ALREADY_PARTNER"

    taken = client.post(f"{BASE}/partner", json={"airline_code": "VN", "name": "Copy"}, headers=staff_headers)
    assert taken.status_code == 409
    assert taken.json()["error"]["code"] == "CONFLICT"

    assert client.get(f"{BASE}/partner", headers=owner_headers).json()["id"] == partner["id"]


def test_routes_require_airline(client, owner_headers):
    resp = client.get(f"{BASE}/flights", headers=owner_headers)
    assert resp.status_code == 404, resp.text
    assert resp.json()["error"]["code"] == "NOT_PARTNER"


# ---------------- Voos ----------------
def test_create_flight_derives_fields(client, owner_headers):
    register_airline(client, owner_headers)
    flight = create_flight(client, owner_headers)
    assert flight["airline_code"] == "VN"
    assert flight["origin"] == "HAN"
    assert flight["destination"] == "SGN"
    assert flight["duration_minutes"] == 130
    assert flight["total_seats"] == 180
    assert flight["status"] == "scheduled"
    assert flight["currency"]


def test_flight_validation(client, owner_headers):
    register_airline(client, owner_headers)
    departure = now_trimmed() + timedelta(days=3)

    backwards = flight_payload(departure=departure, arrival_at=(departure - timedelta(hours=1)).isoformat())
    assert client.post(f"{BASE}/flights", json=backwards, headers=owner_headers).status_code == 422

    same_airport = flight_payload(destination="HAN")
    assert client.post(f"{BASE}/flights", json=same_airport, headers=owner_headers).status_code == 422

    free = flight_payload(base_price=0)
    assert client.post(f"{BASE}/flights", json=free, headers=owner_headers).status_code == 422

    unknown_route = flight_payload(route_id=999)
    assert client.post(f"{BASE}/flights", json=unknown_route, headers=owner_headers).status_code == 404


def test_update_flight_rechecks_schedule(client, owner_headers):
    register_airline(client, owner_headers)
    flight = create_flight(client, owner_headers)
    departure = flight["departure_at"]

    bad = client.patch(f"{BASE}/flights/{flight['id']}", json={"arrival_at": departure}, headers=owner_headers)
    assert bad.status_code == 400, bad.text
    assert bad.json()["error"]["details"][0]["field"] == "arrival_at"

    delayed = client.patch(
        f"{BASE}/flights/{flight['id']}",
        json={"departure_at": flight_payload()["departure_at"], "status": "delayed"},
        headers=owner_headers,
    )
    assert delayed.status_code == 200, delayed.text
    assert delayed.json()["status"] == "delayed"


def test_delete_flight(client, db, owner_headers):
    register_airline(client, owner_headers)
    empty = create_flight(client, owner_headers)
    booked = create_flight(client, owner_headers, flight_number="VN215")
    seed_booking(db, booked["id"], "ABC123")

    assert client.delete(f"{BASE}/flights/{empty['id']}", headers=owner_headers).status_code == 204
    assert client.get(f"{BASE}/flights/{empty['id']}", headers=owner_headers).status_code == 404

    blocked = client.delete(f"{BASE}/flights/{booked['id']}", headers=owner_headers)
    assert blocked.status_code == 409, blocked.text


def test_flights_are_scoped_to_airline(client, owner_headers, staff_headers):
    register_airline(client, owner_headers)
    register_airline(client, staff_headers, code="QH", name="Bamboo Wings")
    flight = create_flight(client, owner_headers)

    assert client.get(f"{BASE}/flights/{flight['id']}", headers=staff_headers).status_code == 404
    assert client.get(f"{BASE}/flights", headers=staff_headers).json() == []


# ---------------- Rotas ----------------
def test_route_crud(client, owner_headers):
    register_airline(client, owner_headers)
    route = create_route(client, owner_headers, origin="han", destination="dad")
    assert route["origin"] == "HAN"
    assert route["frequency"] == "weekly"

    same = client.post(
        f"{BASE}/routes",
        json={"origin": "HAN", "destination": "HAN", "distance_km": 10, "duration_minutes": 5},
        headers=owner_headers,
    )
    assert same.status_code == 422

    loop = client.patch(f"{BASE}/routes/{route['id']}", json={"destination": "HAN"}, headers=owner_headers)
    assert loop.status_code == 400

    daily = client.patch(f"{BASE}/routes/{route['id']}", json={"frequency": "daily"}, headers=owner_headers)
    assert daily.json()["frequency"] == "daily"

    assert client.delete(f"{BASE}/routes/{route['id']}", headers=owner_headers).status_code == 204
    assert client.get(f"{BASE}/routes", headers=owner_headers).json() == []


# ---------------- Regras e cotação ----------------
def test_pricing_rule_validation(client, owner_headers):
    register_airline(client, owner_headers)
    resp = client.post(
        f"{BASE}/pricing-rules",
        json={
            "name": "Bad weekday",
            "rule_type": "seasonal",
            "adjustment_type": "percentage",
            "adjustment_value": 10,
            "conditions": {"days_of_week": [7]},
        },
        headers=owner_headers,
    )
    assert resp.status_code == 422

    rule = create_rule(
        client, owner_headers, name="Holiday", adjustment_type="fixed_amount", adjustment_value=50000
    )
    assert rule["conditions"] == {}
    updated = client.patch(
        f"{BASE}/pricing-rules/{rule['id']}", json={"priority": 3, "is_active": False}, headers=owner_headers
    ).json()
    assert updated["priority"] == 3
    assert updated["is_active"] is False


def test_price_quote_applies_matching_rules(client, db, owner_headers):
    register_airline(client, owner_headers)
    route = create_route(client, owner_headers)
    other_route = create_route(client, owner_headers, destination="PQC", distance_km=1200)
    flight = create_flight(client, owner_headers, route_id=route["id"])
    seed_booking(db, flight["id"], "SEAT01", passengers=2)

    departure = now_trimmed() + timedelta(days=10)
    early = create_rule(
        client, owner_headers, name="Early bird", adjustment_type="percentage", adjustment_value=-10,
        priority=10, conditions={"days_before_departure_min": 7},
    )
    weekday = create_rule(
        client, owner_headers, name="Weekday surcharge", adjustment_type="fixed_amount", adjustment_value=50000,
        priority=5, conditions={"days_of_week": [js_weekday(departure.date())]},
    )
    create_rule(
        client, owner_headers, name="Other route", route_id=other_route["id"],
        adjustment_type="percentage", adjustment_value=50,
    )
    create_rule(
        client, owner_headers, name="Disabled", adjustment_type="percentage", adjustment_value=30, is_active=False,
    )

    resp = client.get(f"{BASE}/flights/{flight['id']}/price-quote", headers=owner_headers)
    assert resp.status_code == 200, resp.text
    quote = resp.json()
    assert quote["base_price"] == 1000000
    assert quote["price"] == 950000
    assert quote["applied_rules"] == [early["id"], weekday["id"]]
    assert quote["seats_available"] == 178
    assert quote["days_before_departure"] == 10

    late_date = (departure - timedelta(days=2)).date().isoformat()
    late = client.get(
        f"{BASE}/flights/{flight['id']}/price-quote", params={"date": late_date}, headers=owner_headers
    ).json()
    assert late["days_before_departure"] == 2
    assert late["price"] == 1050000
    assert late["applied_rules"] == [weekday["id"]]


# ---------------- Reservas ----------------
def test_booking_list_filters(client, db, owner_headers):
    register_airline(client, owner_headers)
    flight = create_flight(client, owner_headers)
    seed_booking(db, flight["id"], "AAA111")
    seed_booking(db, flight["id"], "BBB222", status=BookingStatus.PENDING)

    page = client.get(f"{BASE}/bookings", headers=owner_headers).json()
    assert page["total"] == 2
    assert page["data"][0]["flight"]["flight_number"] == "VN213"

    pending = client.get(f"{BASE}/bookings", params={"status": "pending"}, headers=owner_headers).json()
    assert [b["booking_reference"] for b in pending["data"]] == ["BBB222"]

    by_ref = client.get(f"{BASE}/bookings", params={"booking_reference": "aaa111"}, headers=owner_headers).json()
    assert by_ref["total"] == 1

    by_name = client.get(f"{BASE}/bookings", params={"passenger_name": "van"}, headers=owner_headers).json()
    assert by_name["total"] == 2

    paged = client.get(f"{BASE}/bookings", params={"limit": 1, "offset": 1}, headers=owner_headers).json()
    assert paged["total"] == 2
    assert len(paged["data"]) == 1


@pytest.mark.parametrize("hours_ahead, percentage", [(240, 100), (30, 50), (5, 0)])
def test_cancel_booking_computes_refund(client, db, owner_headers, hours_ahead, percentage):
    register_airline(client, owner_headers)
    flight = create_flight(client, owner_headers, departure=now_trimmed() + timedelta(hours=hours_ahead))
    booking_id = seed_booking(db, flight["id"], "REF001", total=2000000)

    resp = client.patch(
        f"{BASE}/bookings/{booking_id}/status",
        json={"status": "cancelled", "notes": "Passenger request"},
        headers=owner_headers,
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["status"] == "cancelled"
    assert body["refund_percentage"] == percentage
    assert body["refund_amount"] == 2000000 * percentage / 100
    assert body["cancelled_at"] is not None

    detail = client.get(f"{BASE}/bookings/{booking_id}", headers=owner_headers).json()
    assert [e["event_type"] for e in detail["events"]] == ["status_cancelled"]
    assert detail["events"][0]["previous_status"] == "confirmed"
    assert detail["events"][0]["notes"] == "Passenger request"


def test_booking_transitions(client, db, owner_headers):
    register_airline(client, owner_headers)
    flight = create_flight(client, owner_headers)
    booking_id = seed_booking(db, flight["id"], "TRN001", status=BookingStatus.PENDING)

    jump = client.patch(f"{BASE}/bookings/{booking_id}/status", json={"status": "boarded"}, headers=owner_headers)
    assert jump.status_code == 400
    assert jump.json()["error"]["code"] == "INVALID_TRANSITION"

    for target in ("confirmed", "checked_in", "boarded", "completed"):
        step = client.patch(f"{BASE}/bookings/{booking_id}/status", json={"status": target}, headers=owner_headers)
        assert step.status_code == 200, step.text

    detail = client.get(f"{BASE}/bookings/{booking_id}", headers=owner_headers).json()
    assert len(detail["events"]) == 4


# ---------------- Analytics ----------------
def test_dashboard_and_capacity(client, db, owner_headers):
    register_airline(client, owner_headers)
    route = create_route(client, owner_headers)
    flight = create_flight(client, owner_headers, route_id=route["id"])
    seed_booking(db, flight["id"], "DSH001", passengers=2, total=2000000)
    seed_booking(db, flight["id"], "DSH002", status=BookingStatus.PENDING)

    resp = client.get(f"{BASE}/analytics/dashboard", params={"period": "last_7_days"}, headers=owner_headers)
    assert resp.status_code == 200, resp.text
    dash = resp.json()
    assert dash["total"] == {"bookings": 2, "revenue": 3000000, "passengers": 3}
    assert dash["status"] == {"confirmed": 1, "cancelled": 0, "pending": 1}
    assert dash["rates"]["confirmation_rate"] == 50
    assert dash["averages"]["booking_value"] == 1500000
    assert dash["growth"]["bookings"] == {"absolute": 2, "percentage": 100, "trend": "up"}

    capacity = client.get(f"{BASE}/analytics/capacity", headers=owner_headers).json()
    row = capacity["flights"][0]
    assert row["seats_booked"] == 3
    assert row["seats_available"] == 177
    assert row["load_factor"] == 1.67
    assert row["yield_per_seat"] == 1000000
    assert row["rask"] == pytest.approx(14.4928)
    assert capacity["average_load_factor"] == 1.67


def as_utc(local_naive):
    """Mesmo instante do horário local, em ISO-8601 UTC com sufixo Z."""
    aware = local_naive.replace(tzinfo=ZoneInfo(APP_TIMEZONE)).astimezone(timezone.utc)
    return aware.isoformat().replace("+00:00", "Z")


# ---------------- Fuso e nulos ----------------
def test_offset_datetimes_are_stored_in_local_time(client, owner_headers):
    register_airline(client, owner_headers)
    departure = (now_trimmed() + timedelta(days=10)).replace(hour=8, minute=0, second=0)
    arrival = departure + timedelta(minutes=130)

    resp = client.post(
        f"{BASE}/flights",
        json=flight_payload(departure_at=as_utc(departure), arrival_at=as_utc(arrival)),
        headers=owner_headers,
    )
    assert resp.status_code == 201, resp.text
    flight = resp.json()
    assert flight["departure_at"] == departure.isoformat()
    assert flight["arrival_at"] == arrival.isoformat()

    later = arrival + timedelta(minutes=50)
    resp = client.patch(f"{BASE}/flights/{flight['id']}", json={"arrival_at": as_utc(later)}, headers=owner_headers)
    assert resp.status_code == 200, resp.text
    assert resp.json()["arrival_at"] == later.isoformat()
    assert resp.json()["duration_minutes"] == 180


def test_refund_uses_converted_departure(client, db, owner_headers):
    register_airline(client, owner_headers)
    departure = now_trimmed() + timedelta(hours=30)
    payload = flight_payload(
        departure_at=as_utc(departure), arrival_at=as_utc(departure + timedelta(hours=2))
    )
    flight = client.post(f"{BASE}/flights", json=payload, headers=owner_headers).json()
    booking_id = seed_booking(db, flight["id"], "UTC001", total=2000000)

    resp = client.patch(f"{BASE}/bookings/{booking_id}/status", json={"status": "cancelled"}, headers=owner_headers)
    assert resp.status_code == 200, resp.text
    assert resp.json()["refund_percentage"] == 50


def test_null_on_required_fields_is_rejected(client, owner_headers):
    register_airline(client, owner_headers)
    flight = create_flight(client, owner_headers)
    route = create_route(client, owner_headers)
    rule = create_rule(client, owner_headers, name="Early", adjustment_type="percentage", adjustment_value=-5)

    cases = [
        (f"{BASE}/flights/{flight['id']}", {"departure_at": None}, "departure_at"),
        (f"{BASE}/flights/{flight['id']}", {"arrival_at": None}, "arrival_at"),
        (f"{BASE}/flights/{flight['id']}", {"base_price": None}, "base_price"),
        (f"{BASE}/routes/{route['id']}", {"distance_km": None}, "distance_km"),
        (f"{BASE}/pricing-rules/{rule['id']}", {"name": None}, "name"),
    ]
    for url, body, field in cases:
        resp = client.patch(url, json=body, headers=owner_headers)
        assert resp.status_code == 422, resp.text
        assert [e["field"] for e in resp.json()["detail"]] == [field]

    cleared = client.patch(f"{BASE}/flights/{flight['id']}", json={"origin_name": None}, headers=owner_headers)
    assert cleared.status_code == 200, cleared.text
    assert cleared.json()["departure_at"] == flight["departure_at"]


def test_unknown_period_reports_fallback(client, owner_headers):
    register_airline(client, owner_headers)
    resp = client.get(f"{BASE}/analytics/dashboard", params={"period": "fortnight"}, headers=owner_headers)
    assert resp.status_code == 200, resp.text
    assert resp.json()["period"] == "last_30_days"
