"""Tests for admin catalog management."""


def test_admin_routes_require_session(client):
    assert client.get("/api/admin/products").status_code == 401


def test_admin_routes_reject_non_admin(client, user_headers):
    assert client.get("/api/admin/products", headers=user_headers).status_code == 403


def test_create_product_type_with_sizes(client, admin_headers):
    response = client.post("/api/admin/product-types", headers=admin_headers, json={
        "name": "Crewneck Sweater",
        "base_price": 45,
        "is_branded_item": True,
        "sizes": ["s", "M", "m", " L "]
    })

    assert response.status_code == 201
    body = response.json()
    assert body["slug"] == "crewneck-sweater"
    assert [size["size"] for size in body["sizes"]] == ["S", "M", "L"]


def test_create_duplicate_product_type(client, admin_headers, catalog):
    response = client.post("/api/admin/product-types", headers=admin_headers, json={"name": "T-Shirt"})
    assert response.status_code == 400


def test_only_one_default_product_type(client, admin_headers, catalog):
    response = client.patch(
        f"/api/admin/product-types/{catalog['hoodie_type_id']}",
        headers=admin_headers,
        json={"is_default": True}
    )
    assert response.status_code == 200

    types = client.get("/api/admin/product-types", headers=admin_headers).json()
    assert [item["name"] for item in types if item["is_default"]] == ["Famous Since Hoodie"]


def test_add_size(client, admin_headers, catalog):
    url = f"/api/admin/product-types/{catalog['hoodie_type_id']}/sizes"

    created = client.post(url, headers=admin_headers, json={"size": "2xl"})
    duplicate = client.post(url, headers=admin_headers, json={"size": "2XL"})

    assert created.status_code == 201
    assert created.json()["size"] == "2XL"
    assert duplicate.status_code == 400


def test_create_product(client, admin_headers, catalog):
    response = client.post("/api/admin/products", headers=admin_headers, json={
        "name": "Famous Since T-Shirt",
        "description": "  Famous Since First Paycheck ",
        "price": 28,
        "product_type_id": catalog["tshirt_type_id"]
    })

    assert response.status_code == 201
    assert response.json()["description"] == "Famous Since First Paycheck"


def test_create_product_with_duplicate_description(client, admin_headers, catalog):
    response = client.post("/api/admin/products", headers=admin_headers, json={
        "name": "Famous Since T-Shirt",
        "description": "Famous Since 1999",
        "price": 28,
        "product_type_id": catalog["tshirt_type_id"]
    })
    assert response.status_code == 400


def test_create_product_with_unknown_type(client, admin_headers):
    response = client.post("/api/admin/products", headers=admin_headers, json={
        "name": "Mystery",
        "description": "Nothing",
        "price": 10,
        "product_type_id": 9999
    })
    assert response.status_code == 404


def test_update_product(client, admin_headers, catalog):
    response = client.patch(
        f"/api/admin/products/{catalog['shirt_id']}",
        headers=admin_headers,
        json={"price": 30, "image_url": "https://cdn.famousince.com/1999.png"}
    )

    assert response.status_code == 200
    body = response.json()
    assert float(body["price"]) == 30
    assert body["image_url"] == "https://cdn.famousince.com/1999.png"
    assert body["description"] == "Famous Since 1999"
