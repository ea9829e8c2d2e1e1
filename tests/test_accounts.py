from conftest import auth_headers, whoami


def test_me_requires_bearer_token(client):
    resp = client.get("/api/auth/me")
    assert resp.status_code == 401, resp.text
    assert resp.headers.get("www-authenticate") == "Bearer"


def test_me_rejects_invalid_token(client):
    resp = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401, resp.text


def test_me_provisions_user_from_claims(client):
    headers = auth_headers("user-1", email="ana@example.com", name="Ana")
    first = whoami(client, headers)
    assert first["external_id"] == "user-1"
    assert first["email"] == "ana@example.com"
    assert first["name"] == "Ana"
    assert first["is_admin"] is False
    assert first["partner_status"] == "none"

    # Segundo acesso reaproveita o mesmo registro
    again = whoami(client, headers)
    assert again["id"] == first["id"]


def test_admin_email_is_provisioned_as_admin(client, admin_headers):
    assert whoami(client, admin_headers)["is_admin"] is True


def test_partner_status_update_is_admin_only(client, owner_headers, admin_headers):
    user = whoami(client, owner_headers)

    resp = client.patch(
        f"/api/admin/users/{user['id']}/partner-status",
        json={"partner_status": "approved"},
        headers=owner_headers,
    )
    assert resp.status_code == 403, resp.text

    resp = client.patch(
        f"/api/admin/users/{user['id']}/partner-status",
        json={"partner_status": "approved"},
        headers=admin_headers,
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["partner_status"] == "approved"


def test_partner_status_update_unknown_user(client, admin_headers):
    resp = client.patch(
        "/api/admin/users/9999/partner-status",
        json={"partner_status": "approved"},
        headers=admin_headers,
    )
    assert resp.status_code == 404, resp.text
    assert resp.json()["error"]["code"] == "NOT_FOUND"
