from fastapi.testclient import TestClient
from storefront.main import app

WIDGET = {"id": "p1", "name": "Widget", "price": 10}
GIZMO = {"id": "p2", "name": "Gizmo", "price": 5}


def test_new_client_gets_empty_cart_and_cookie():
    client = TestClient(app)
    r = client.get("/cart")
    assert r.status_code == 200
    assert r.json() == {"items": [], "count": 0, "total": 0.0}
    assert "cart_session" in r.cookies


def test_add_remove_and_clear():
    client = TestClient(app)
    client.post("/cart/items", json=WIDGET)
    client.post("/cart/items", json=GIZMO)
    r = client.post("/cart/items", json=WIDGET)
    assert r.status_code == 200
    assert [i["id"] for i in r.json()["items"]] == ["p1", "p2", "p1"]
    assert r.json()["total"] == 25

    r = client.delete("/cart/items/p1")
    assert [i["id"] for i in r.json()["items"]] == ["p2"]

    r = client.delete("/cart")
    assert r.json()["count"] == 0
    r = client.delete("/cart")
    assert r.json()["count"] == 0


def test_carts_are_per_session():
    alice = TestClient(app)
    bob = TestClient(app)
    alice.post("/cart/items", json=WIDGET)
    assert alice.get("/cart").json()["count"] == 1
    assert bob.get("/cart").json()["count"] == 0


def test_bad_cart_item_rejected():
    client = TestClient(app)
    r = client.post("/cart/items", json={"id": "p1", "name": "Widget"})
    assert r.status_code == 422
    assert client.get("/cart").json()["count"] == 0


def test_non_finite_cart_price_rejected():
    client = TestClient(app)
    r = client.post(
        "/cart/items",
        content='{"id": "p1", "name": "Widget", "price": NaN}',
        headers={"Content-Type": "application/json"},
    )
    assert r.status_code == 422
    assert client.get("/cart").json()["total"] == 0
