import pytest
from prometheus_client import REGISTRY

from partnerhub.core.errors import PartnerError, check_transition
from partnerhub.database.domain import registry
from partnerhub.database.domain.base import DomainInitializer
from partnerhub.utils.logger import logger
from partnerhub.utils.prometheus_metrics import route_of, vertical_of


def test_root_and_health_are_public(client):
    assert client.get("/").json() == {"status": "ok", "message": "API is running"}
    assert client.get("/health").json() == {"status": "healthy"}


def test_metrics_endpoint_is_public(client):
    client.get("/health")
    resp = client.get("/api/monitoring/metrics")
    assert resp.status_code == 200, resp.text
    assert "partnerhub_http_requests_total" in resp.text


def test_logs_viewer_requires_admin(client, owner_headers):
    assert client.get("/api/monitoring/logs").status_code == 401
    assert client.get("/api/monitoring/logs", headers=owner_headers).status_code == 403


def test_logs_viewer_filters_by_level(client, admin_headers):
    logger.warning("[TEST] linha de aviso para o visualizador")
    logger.info("[TEST] linha informativa")

    resp = client.get("/api/monitoring/logs", params={"level": "WARNING"}, headers=admin_headers)
    assert resp.status_code == 200, resp.text
    assert "linha de aviso para o visualizador" in resp.text
    assert "linha informativa" not in resp.text


def test_logs_json_parses_lines(client, admin_headers):
    logger.error("[TEST] falha simulada")

    resp = client.get("/api/monitoring/logs/json", params={"search": "falha simulada"}, headers=admin_headers)
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["total"] >= 1
    entry = body["logs"][-1]
    assert entry["level"] == "ERROR"
    assert entry["message"] == "[TEST] falha simulada"


def test_validation_errors_return_field_list(client, owner_headers):
    resp = client.post("/api/shop/partners/apply", json={"business_name": "x"}, headers=owner_headers)
    assert resp.status_code == 422, resp.text
    fields = {e["field"] for e in resp.json()["detail"]}
    assert "email" in fields


@pytest.mark.parametrize("path, vertical", [
    ("/api/partner/flight/flights/12", "flight"),
    ("/api/partner/restaurant/venues/3/menu", "dining"),
    ("/api/partner/activities", "activities"),
    ("/api/partner/stats", "activities"),
    ("/api/shop/partners/products", "shop"),
    ("/api/auth/me", "accounts"),
    ("/health", "other"),
])
def test_vertical_label(path, vertical):
    assert vertical_of(path) == vertical


def test_route_label_collapses_ids():
    assert route_of("/api/partner/flight/bookings/42/cancel") == "/api/partner/flight/bookings/{id}/cancel"


def test_transition_counter_tracks_outcome():
    transitions = {"pending": ["confirmed"]}
    labels = {"domain": "test_flow", "from_status": "pending", "to_status": "confirmed", "outcome": "accepted"}
    before = REGISTRY.get_sample_value("partnerhub_status_transitions_total", labels) or 0

    check_transition(transitions, "pending", "confirmed", domain="test_flow")
    with pytest.raises(PartnerError) as exc:
        check_transition(transitions, "confirmed", "pending", domain="test_flow")

    assert exc.value.code == "INVALID_TRANSITION"
    assert REGISTRY.get_sample_value("partnerhub_status_transitions_total", labels) == before + 1
    rejected = dict(labels, from_status="confirmed", to_status="pending", outcome="rejected")
    assert REGISTRY.get_sample_value("partnerhub_status_transitions_total", rejected) >= 1


class _Fake(DomainInitializer):
    def __init__(self, name, depends_on=()):
        self.name = name
        self.depends_on = depends_on


def test_domains_resolve_after_dependencies(monkeypatch):
    fakes = {
        "shop": _Fake("shop", ("accounts",)),
        "reviews": _Fake("reviews", ("shop", "accounts")),
        "accounts": _Fake("accounts"),
    }
    monkeypatch.setattr(registry, "_initializers", fakes)

    assert [i.name for i in registry.resolve_order()] == ["accounts", "shop", "reviews"]


def test_missing_domain_dependency_fails(monkeypatch):
    monkeypatch.setattr(registry, "_initializers", {"flight": _Fake("flight", ("accounts",))})

    with pytest.raises(RuntimeError, match="accounts"):
        registry.resolve_order()
