from test_shop_partners import apply

BASE = "/api/shop/partners/products"
LONG_DESCRIPTION = "Hand-thrown stoneware mug glazed in celadon, fired twice for a durable finish."


def create_product(client, headers, title="Celadon Mug", description=LONG_DESCRIPTION):
    resp = client.post(BASE, json={"title": title, "description": description}, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


def add_variant(client, headers, product_id, sku="MUG-1", price=150000, stock=5, **extra):
    resp = client.post(
        f"{BASE}/{product_id}/variants",
        json={"sku": sku, "title": "Default", "price": price, "stock_on_hand": stock, **extra},
        headers=headers,
    )
    return resp


def add_image(client, headers, product_id, name):
    resp = client.post(
        f"{BASE}/{product_id}/images",
        json={"url": f"https://cdn.example.com/{name}.jpg"},
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_create_product_starts_as_draft(client, owner_headers):
    partner = apply(client, owner_headers)
    product = create_product(client, owner_headers)
    assert product["status"] == "draft"
    assert product["slug"] == f"celadon-mug-{partner['id']}"
    assert product["brand_id"] == partner["brand_id"]
    assert product["variants"] == [] and product["images"] == []


def test_duplicate_titles_get_suffixed_slugs(client, owner_headers):
    apply(client, owner_headers)
    first = create_product(client, owner_headers)
    second = create_product(client, owner_headers)
    assert second["slug"] == f"{first['slug']}-2"


def test_list_filters_and_empty_state(client, owner_headers):
    apply(client, owner_headers)
    assert client.get(BASE, headers=owner_headers).json() == {"data": [], "total": 0}

    create_product(client, owner_headers, title="Celadon Mug")
    teapot = create_product(client, owner_headers, title="Clay Teapot")
    client.post(f"{BASE}/{teapot['id']}/archive", headers=owner_headers)

    assert client.get(BASE, params={"status": "draft"}, headers=owner_headers).json()["total"] == 1
    assert client.get(BASE, params={"status": "archived"}, headers=owner_headers).json()["total"] == 1
    assert client.get(BASE, params={"status": "all"}, headers=owner_headers).json()["total"] == 2

    found = client.get(BASE, params={"search": "teapot"}, headers=owner_headers).json()
    assert [p["title"] for p in found["data"]] == ["Clay Teapot"]

    by_title = client.get(BASE, params={"sort": "title"}, headers=owner_headers).json()
    assert [p["title"] for p in by_title["data"]] == ["Celadon Mug", "Clay Teapot"]


def test_publish_reports_missing_requirements(client, owner_headers):
    apply(client, owner_headers)
    product = create_product(client, owner_headers, title="Mu", description="short")

    resp = client.post(f"{BASE}/{product['id']}/publish", headers=owner_headers)
    assert resp.status_code == 400, resp.text
    error = resp.json()["error"]
    assert error["code"] == "VALIDATION_ERROR"
    fields = {d["field"] for d in error["details"]}
    assert fields == {"title", "description", "variants", "images"}


def test_publish_complete_product(client, owner_headers):
    apply(client, owner_headers)
    product = create_product(client, owner_headers)
    assert add_variant(client, owner_headers, product["id"], sku="MUG-S", stock=3).status_code == 201
    assert add_variant(client, owner_headers, product["id"], sku="MUG-L", stock=4).status_code == 201
    add_image(client, owner_headers, product["id"], "front")

    resp = client.post(f"{BASE}/{product['id']}/publish", headers=owner_headers)
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["status"] == "active"
    assert body["stock_total"] == 7

    # Já ativo não publica de novo
    again = client.post(f"{BASE}/{product['id']}/publish", headers=owner_headers)
    assert again.status_code == 400, again.text


def test_variant_price_rules(client, owner_headers):
    apply(client, owner_headers)
    product = create_product(client, owner_headers)

    zero = add_variant(client, owner_headers, product["id"], price=0)
    assert zero.status_code == 400, zero.text

    bad_compare = add_variant(client, owner_headers, product["id"], price=100, compare_at_price=90)
    assert bad_compare.status_code == 400, bad_compare.text

    ok = add_variant(
        client, owner_headers, product["id"], price=100, compare_at_price=120,
        options=[{"name": "Size", "value": "L"}],
    )
    assert ok.status_code == 201, ok.text
    variant = ok.json()
    assert variant["options"] == [{"name": "Size", "value": "L"}]

    resp = client.patch(
        f"{BASE}/{product['id']}/variants/{variant['id']}", json={"price": 130}, headers=owner_headers
    )
    assert resp.status_code == 400, resp.text

    resp = client.patch(
        f"{BASE}/{product['id']}/variants/{variant['id']}", json={"stock_on_hand": 9}, headers=owner_headers
    )
    assert resp.status_code == 200, resp.text
    assert resp.json()["stock_on_hand"] == 9

    assert client.delete(f"{BASE}/{product['id']}/variants/{variant['id']}", headers=owner_headers).status_code == 204
    assert client.get(f"{BASE}/{product['id']}", headers=owner_headers).json()["variants"] == []


def test_images_primary_and_reorder(client, owner_headers):
    apply(client, owner_headers)
    product = create_product(client, owner_headers)
    first = add_image(client, owner_headers, product["id"], "a")
    second = add_image(client, owner_headers, product["id"], "b")
    assert first["is_primary"] is True and first["sort_order"] == 0
    assert second["is_primary"] is False and second["sort_order"] == 1

    resp = client.put(
        f"{BASE}/{product['id']}/images/order",
        json={"image_ids": [second["id"], first["id"]]},
        headers=owner_headers,
    )
    assert resp.status_code == 200, resp.text
    images = {i["id"]: i for i in resp.json()["images"]}
    assert images[second["id"]]["is_primary"] is True
    assert images[second["id"]]["sort_order"] == 0
    assert images[first["id"]]["is_primary"] is False

    bad = client.put(
        f"{BASE}/{product['id']}/images/order", json={"image_ids": [999]}, headers=owner_headers
    )
    assert bad.status_code == 400, bad.text

    # Removendo a principal, a próxima assume
    assert client.delete(f"{BASE}/{product['id']}/images/{second['id']}", headers=owner_headers).status_code == 204
    remaining = client.get(f"{BASE}/{product['id']}", headers=owner_headers).json()["images"]
    assert [(i["id"], i["is_primary"]) for i in remaining] == [(first["id"], True)]


def test_update_retitles_and_delete(client, owner_headers):
    partner = apply(client, owner_headers)
    product = create_product(client, owner_headers)

    resp = client.patch(f"{BASE}/{product['id']}", json={"title": "Jade Cup"}, headers=owner_headers)
    assert resp.status_code == 200, resp.text
    assert resp.json()["slug"] == f"jade-cup-{partner['id']}"

    assert client.delete(f"{BASE}/{product['id']}", headers=owner_headers).status_code == 204
    assert client.get(f"{BASE}/{product['id']}", headers=owner_headers).status_code == 404


def test_products_of_other_partner_are_hidden(client, owner_headers, staff_headers):
    apply(client, owner_headers)
    product = create_product(client, owner_headers)
    apply(client, staff_headers, business_name="Other Shop", email="other@example.com")

    assert client.get(f"{BASE}/{product['id']}", headers=staff_headers).status_code == 404


def test_null_on_required_fields_is_rejected(client, owner_headers):
    apply(client, owner_headers)
    product = create_product(client, owner_headers)
    variant = add_variant(client, owner_headers, product["id"]).json()

    for body, field in (({"title": None}, "title"), ({"description": None}, "description")):
        resp = client.patch(f"{BASE}/{product['id']}", json=body, headers=owner_headers)
        assert resp.status_code == 422, resp.text
        assert [e["field"] for e in resp.json()["detail"]] == [field]

    resp = client.patch(
        f"{BASE}/{product['id']}/variants/{variant['id']}", json={"price": None}, headers=owner_headers
    )
    assert resp.status_code == 422, resp.text
    assert [e["field"] for e in resp.json()["detail"]] == ["price"]

    cleared = client.patch(f"{BASE}/{product['id']}", json={"category": None}, headers=owner_headers)
    assert cleared.status_code == 200, cleared.text
    assert cleared.json()["title"] == "Celadon Mug"
