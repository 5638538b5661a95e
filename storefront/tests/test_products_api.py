from fastapi.testclient import TestClient
from storefront.main import app

client = TestClient(app)


def test_products_initially_empty():
    r = client.get("/products")
    assert r.status_code == 200
    assert r.json() == []


def test_create_product_then_listed():
    r = client.post("/products", json={"name": "Widget", "price": 9.99})
    assert r.status_code == 201
    created = r.json()
    assert created["id"]
    assert created["name"] == "Widget"
    assert created["price"] == 9.99

    r = client.get("/products")
    assert r.status_code == 200
    assert created in r.json()


def test_list_keeps_insertion_order():
    names = ["a", "b", "c"]
    for n in names:
        assert client.post("/products", json={"name": n, "price": 1}).status_code == 201
    assert [p["name"] for p in client.get("/products").json()] == names


def test_no_checks_on_price_sign_or_empty_name():
    r = client.post("/products", json={"name": "", "price": -3})
    assert r.status_code == 201
    assert r.json()["price"] == -3


def test_get_product_by_id():
    pid = client.post("/products", json={"name": "Lamp", "price": 20}).json()["id"]
    r = client.get(f"/products/{pid}")
    assert r.status_code == 200
    assert r.json()["name"] == "Lamp"

    assert client.get("/products/missing").status_code == 404


def test_malformed_product_rejected():
    r = client.post("/products", json={"name": "No price"})
    assert r.status_code == 422
    assert any("price" in e["loc"] for e in r.json()["detail"])

    r = client.post("/products", json={"name": "Bad", "price": "cheap"})
    assert r.status_code == 422
    assert client.get("/products").json() == []


def test_non_finite_price_rejected():
    for token in ("NaN", "Infinity", "-Infinity"):
        r = client.post(
            "/products",
            content='{"name": "Odd", "price": %s}' % token,
            headers={"Content-Type": "application/json"},
        )
        assert r.status_code == 422, token
    assert client.get("/products").json() == []
