from decimal import Decimal

from partnerhub.api.shop.models.model_order import OrderItemModel, OrderStatus, ShopOrderModel
from test_shop_partners import apply
from test_shop_products import create_product

ORDERS = "/api/shop/partners/orders"


def seed_order(db, number, lines, status=OrderStatus.PENDING, recipient="Linh Tran"):
    """lines: (partner_id, product_id, qty, unit_price, title)"""
    order = ShopOrderModel(
        order_number=number,
        status=status,
        currency="VND",
        grand_total=sum(Decimal(str(q * p)) for _, _, q, p, _ in lines),
        shipping_address={"recipient_name": recipient, "city": "Hanoi"} if recipient else None,
    )
    for partner_id, product_id, qty, price, title in lines:
        order.items.append(
            OrderItemModel(
                partner_id=partner_id,
                product_id=product_id,
                qty=qty,
                unit_price=Decimal(str(price)),
                line_total=Decimal(str(qty * price)),
                title_snapshot=title,
            )
        )
    db.add(order)
    db.commit()
    return order.id


def test_orders_empty_state(client, owner_headers):
    apply(client, owner_headers)
    assert client.get(ORDERS, headers=owner_headers).json() == {"data": [], "total": 0}


def test_partner_sees_only_own_items_with_subtotal(client, db, owner_headers, staff_headers):
    mine = apply(client, owner_headers)
    product = create_product(client, owner_headers)
    other = apply(client, staff_headers, business_name="Other Shop", email="other@example.com")
    other_product = create_product(client, staff_headers, title="Bamboo Tray")

    order_id = seed_order(db, "ORD-1001", [
        (mine["id"], product["id"], 2, 150000, "Celadon Mug"),
        (mine["id"], product["id"], 1, 90000, "Celadon Mug"),
        (other["id"], other_product["id"], 5, 10000, "Bamboo Tray"),
    ])
    seed_order(db, "ORD-1002", [(other["id"], other_product["id"], 1, 10000, "Bamboo Tray")])

    listing = client.get(ORDERS, headers=owner_headers).json()
    assert listing["total"] == 1
    order = listing["data"][0]
    assert order["id"] == order_id
    assert order["customer_name"] == "Linh Tran"
    assert order["item_count"] == 2
    assert order["partner_subtotal"] == {"amount": 390000.0, "currency": "VND"}
    assert sum(i["line_total"]["amount"] for i in order["items"]) == order["partner_subtotal"]["amount"]

    assert client.get(f"{ORDERS}/{order_id}", headers=staff_headers).json()["item_count"] == 1


def test_order_without_address_uses_default_customer_name(client, db, owner_headers):
    partner = apply(client, owner_headers)
    product = create_product(client, owner_headers)
    order_id = seed_order(db, "ORD-2001", [(partner["id"], product["id"], 1, 1000, "Mug")], recipient=None)

    body = client.get(f"{ORDERS}/{order_id}", headers=owner_headers).json()
    assert body["customer_name"] == "Customer"


def test_order_status_filter_and_transitions(client, db, owner_headers):
    partner = apply(client, owner_headers)
    product = create_product(client, owner_headers)
    pending_id = seed_order(db, "ORD-3001", [(partner["id"], product["id"], 1, 1000, "Mug")])
    seed_order(db, "ORD-3002", [(partner["id"], product["id"], 1, 1000, "Mug")], status=OrderStatus.DELIVERED)

    filtered = client.get(ORDERS, params={"status": "pending"}, headers=owner_headers).json()
    assert [o["id"] for o in filtered["data"]] == [pending_id]

    skip = client.patch(f"{ORDERS}/{pending_id}/status", json={"status": "shipped"}, headers=owner_headers)
    assert skip.status_code == 400, skip.text
    assert skip.json()["error"]["code"] == "INVALID_TRANSITION"

    for target in ("confirmed", "processing", "shipped", "delivered"):
        resp = client.patch(f"{ORDERS}/{pending_id}/status", json={"status": target}, headers=owner_headers)
        assert resp.status_code == 200, resp.text
        assert resp.json()["status"] == target

    final = client.patch(f"{ORDERS}/{pending_id}/status", json={"status": "cancelled"}, headers=owner_headers)
    assert final.status_code == 400, final.text


def test_unknown_order_is_not_found(client, owner_headers):
    apply(client, owner_headers)
    assert client.get(f"{ORDERS}/999", headers=owner_headers).status_code == 404


# ---------------- Analytics ----------------
def test_dashboard_and_top_products(client, db, owner_headers):
    partner = apply(client, owner_headers)
    mug = create_product(client, owner_headers)
    pot = create_product(client, owner_headers, title="Clay Teapot")

    seed_order(db, "ORD-4001", [
        (partner["id"], mug["id"], 3, 100, "Celadon Mug"),
        (partner["id"], pot["id"], 1, 500, "Clay Teapot"),
    ])
    seed_order(db, "ORD-4002", [(partner["id"], mug["id"], 2, 100, "Celadon Mug")])

    resp = client.get("/api/shop/partners/analytics/dashboard", params={"period": "7d"}, headers=owner_headers)
    assert resp.status_code == 200, resp.text
    body = resp.json()
    stats = body["stats"]
    assert stats["revenue"]["amount"] == 100000  # centavos
    assert stats["orders"] == 2
    assert stats["product_views"] == 2 * 7 * 5
    assert stats["conversion_rate"] == round(2 / 70 * 100, 2)
    assert stats["revenue_change"] == 0
    assert len(body["chart"]["labels"]) == 7
    assert sum(body["chart"]["orders"]) == 2

    top = client.get(
        "/api/shop/partners/analytics/top-products", params={"limit": 1}, headers=owner_headers
    ).json()
    assert len(top) == 1
    assert top[0]["product_id"] == mug["id"]
    assert top[0]["sales_count"] == 5
    assert top[0]["revenue"]["amount"] == 50000


def test_product_with_orders_cannot_be_deleted(client, db, owner_headers):
    partner = apply(client, owner_headers)
    product = create_product(client, owner_headers)
    seed_order(db, "ORD-5001", [(partner["id"], product["id"], 1, 1000, "Mug")])

    resp = client.delete(f"/api/shop/partners/products/{product['id']}", headers=owner_headers)
    assert resp.status_code == 409, resp.text
    assert resp.json()["error"]["code"] == "HAS_ORDERS"
