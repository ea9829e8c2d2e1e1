from conftest import auth_headers, whoami
from partnerhub.api.shop.repositories.repo_partners import ShopPartnerRepository

APPLICATION = {
    "business_name": "Green Leaf Co",
    "email": "shop@example.com",
    "city": "Hanoi",
    "description": "Handmade tea and ceramics from small family workshops.",
}


def apply(client, headers, **overrides):
    resp = client.post("/api/shop/partners/apply", json={**APPLICATION, **overrides}, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_apply_creates_approved_partner_with_owned_slug(client, owner_headers):
    partner = apply(client, owner_headers)
    assert partner["status"] == "approved"
    assert partner["verified_at"] is not None
    assert partner["slug"] == f"green-leaf-co-{partner['id']}"
    assert partner["brand_id"] is not None
    assert partner["display_name"] == "Green Leaf Co"


def test_apply_twice_is_conflict(client, owner_headers):
    apply(client, owner_headers)
    resp = client.post("/api/shop/partners/apply", json=APPLICATION, headers=owner_headers)
    assert resp.status_code == 409, resp.text
    assert resp.json()["error"]["code"] == "ALREADY_PARTNER"


def test_me_without_partner_is_not_partner(client, owner_headers):
    resp = client.get("/api/shop/partners/me", headers=owner_headers)
    assert resp.status_code == 404, resp.text
    assert resp.json()["error"]["code"] == "NOT_PARTNER"


def test_me_returns_owner_membership(client, owner_headers):
    apply(client, owner_headers)
    body = client.get("/api/shop/partners/me", headers=owner_headers).json()
    assert body["role"] == "owner"
    assert body["permissions"] == {"products": True, "orders": True, "analytics": True}


def test_update_profile_is_visible_publicly(client, owner_headers):
    partner = apply(client, owner_headers)

    resp = client.patch(
        "/api/shop/partners/me",
        json={"display_name": "Green Leaf", "logo_url": "https://cdn.example.com/logo.png"},
        headers=owner_headers,
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["display_name"] == "Green Leaf"

    public = client.get(f"/api/shop/partners/public/{partner['slug']}")
    assert public.status_code == 200, public.text
    assert public.json()["display_name"] == "Green Leaf"
    assert public.json()["logo_url"] == "https://cdn.example.com/logo.png"


def test_public_profile_unknown_slug(client):
    resp = client.get("/api/shop/partners/public/nope-1")
    assert resp.status_code == 404, resp.text


# ---------------- Admin ----------------
def test_admin_list_and_suspend_blocks_partner_routes(client, owner_headers, admin_headers):
    partner = apply(client, owner_headers)

    assert client.get("/api/shop/admin/partners", headers=owner_headers).status_code == 403

    listing = client.get("/api/shop/admin/partners", headers=admin_headers).json()
    assert listing["total"] == 1
    assert listing["data"][0]["id"] == partner["id"]

    resp = client.post(
        f"/api/shop/admin/partners/{partner['id']}/review",
        json={"action": "suspend", "reason": "Policy violation"},
        headers=admin_headers,
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["status"] == "suspended"
    assert resp.json()["rejection_reason"] == "Policy violation"

    # /me continua acessível, rotas operacionais não
    assert client.get("/api/shop/partners/me", headers=owner_headers).status_code == 200
    blocked = client.get("/api/shop/partners/products", headers=owner_headers)
    assert blocked.status_code == 403, blocked.text
    assert blocked.json()["error"]["code"] == "PARTNER_SUSPENDED"

    # Suspenso some da vitrine pública
    assert client.get(f"/api/shop/partners/public/{partner['slug']}").status_code == 404

    filtered = client.get("/api/shop/admin/partners", params={"status": "approved"}, headers=admin_headers)
    assert filtered.json() == {"data": [], "total": 0}


def test_admin_approve_restores_access(client, db, owner_headers, admin_headers):
    partner = apply(client, owner_headers)
    client.post(f"/api/shop/admin/partners/{partner['id']}/review", json={"action": "ban"}, headers=admin_headers)
    resp = client.post(
        f"/api/shop/admin/partners/{partner['id']}/review", json={"action": "approve"}, headers=admin_headers
    )
    assert resp.json()["status"] == "approved"
    assert client.get("/api/shop/partners/products", headers=owner_headers).status_code == 200

    logs = ShopPartnerRepository(db).list_audit_logs(partner["id"])
    assert [(log.action, log.previous_status, log.new_status) for log in logs] == [
        ("partner_ban", "approved", "banned"),
        ("partner_approve", "banned", "approved"),
    ]


# ---------------- Equipe ----------------
def test_team_invite_accept_and_remove(client, owner_headers, staff_headers):
    apply(client, owner_headers)
    staff = whoami(client, staff_headers)

    resp = client.post("/api/shop/partners/team/invite", json={"email": staff["email"]}, headers=owner_headers)
    assert resp.status_code == 201, resp.text
    invite = resp.json()
    assert invite["status"] == "pending"
    assert invite["permissions"] == {"products": True, "orders": True, "analytics": False}

    # Antes de aceitar, o convidado não é parceiro
    assert client.get("/api/shop/partners/me", headers=staff_headers).status_code == 404

    accepted = client.post(f"/api/shop/partners/team/invitations/{invite['id']}/accept", headers=staff_headers)
    assert accepted.status_code == 200, accepted.text
    assert accepted.json()["status"] == "active"

    me = client.get("/api/shop/partners/me", headers=staff_headers).json()
    assert me["role"] == "staff"

    # Staff sem permissão de analytics
    denied = client.get("/api/shop/partners/analytics/dashboard", headers=staff_headers)
    assert denied.status_code == 403, denied.text

    # Staff não gerencia equipe
    assert client.post(
        "/api/shop/partners/team/invite", json={"email": "x@example.com"}, headers=staff_headers
    ).status_code == 403

    team = client.get("/api/shop/partners/team", headers=owner_headers).json()
    assert {m["role"] for m in team} == {"owner", "staff"}

    assert client.delete(f"/api/shop/partners/team/{invite['id']}", headers=owner_headers).status_code == 204
    assert len(client.get("/api/shop/partners/team", headers=owner_headers).json()) == 1
    assert client.get("/api/shop/partners/me", headers=staff_headers).status_code == 404


def test_team_update_permissions(client, owner_headers, staff_headers):
    apply(client, owner_headers)
    staff = whoami(client, staff_headers)
    invite = client.post(
        "/api/shop/partners/team/invite", json={"email": staff["email"]}, headers=owner_headers
    ).json()
    client.post(f"/api/shop/partners/team/invitations/{invite['id']}/accept", headers=staff_headers)

    resp = client.patch(
        f"/api/shop/partners/team/{invite['id']}",
        json={"permissions": {"products": False, "orders": True, "analytics": True}},
        headers=owner_headers,
    )
    assert resp.status_code == 200, resp.text
    assert client.get("/api/shop/partners/analytics/dashboard", headers=staff_headers).status_code == 200
    assert client.get("/api/shop/partners/products", headers=staff_headers).status_code == 403


def test_team_invite_errors(client, owner_headers):
    apply(client, owner_headers)
    owner = whoami(client, owner_headers)

    unknown = client.post("/api/shop/partners/team/invite", json={"email": "ghost@example.com"}, headers=owner_headers)
    assert unknown.status_code == 404, unknown.text

    self_invite = client.post("/api/shop/partners/team/invite", json={"email": owner["email"]}, headers=owner_headers)
    assert self_invite.status_code == 409, self_invite.text
    assert self_invite.json()["error"]["code"] == "ALREADY_PARTNER"


def test_owner_cannot_be_removed(client, owner_headers):
    apply(client, owner_headers)
    owner_member = client.get("/api/shop/partners/team", headers=owner_headers).json()[0]
    resp = client.delete(f"/api/shop/partners/team/{owner_member['id']}", headers=owner_headers)
    assert resp.status_code == 403, resp.text


def test_accept_foreign_invitation_is_not_found(client, owner_headers, staff_headers):
    apply(client, owner_headers)
    staff = whoami(client, staff_headers)
    invite = client.post(
        "/api/shop/partners/team/invite", json={"email": staff["email"]}, headers=owner_headers
    ).json()

    intruder = auth_headers("intruder")
    resp = client.post(f"/api/shop/partners/team/invitations/{invite['id']}/accept", headers=intruder)
    assert resp.status_code == 404, resp.text
