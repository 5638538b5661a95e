from fastapi.testclient import TestClient
from storefront.main import app

client = TestClient(app)


def test_create_order_then_retrievable():
    body = {"products": [{"id": "p1", "quantity": 2}], "total": 19.98}
    r = client.post("/orders", json=body)
    assert r.status_code == 201
    order = r.json()
    oid = order["id"]
    assert oid
    assert order["products"] == body["products"]
    assert order["total"] == 19.98

    r = client.get(f"/orders/{oid}")
    assert r.status_code == 200
    assert r.json() == order

    r = client.get("/orders")
    assert r.status_code == 200
    assert [o["id"] for o in r.json()] == [oid]


def test_total_is_not_recomputed_and_ids_not_checked():
    body = {"products": [{"id": "does-not-exist", "quantity": 1}], "total": 1000}
    r = client.post("/orders", json=body)
    assert r.status_code == 201
    assert r.json()["total"] == 1000


def test_cart_item_lines_are_reduced_to_id_and_quantity():
    body = {"products": [{"id": "p1", "name": "Widget", "price": 4}], "total": 4}
    r = client.post("/orders", json=body)
    assert r.status_code == 201
    assert r.json()["products"] == [{"id": "p1", "quantity": 1}]


def test_unknown_order_404():
    assert client.get("/orders/nope").status_code == 404


def test_malformed_order_rejected():
    r = client.post("/orders", json={"products": [{"id": "p1"}]})
    assert r.status_code == 422
    r = client.post("/orders", json={"products": "p1", "total": 1})
    assert r.status_code == 422
