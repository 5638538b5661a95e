from fastapi.testclient import TestClient

from storefront.app.core.errors import StoreError
from storefront.app.services.cart_sessions import get_cart_sessions
from storefront.app.services.document_store import JsonFileCollection
from storefront.main import app


def test_page_renders_products_and_cart():
    client = TestClient(app)
    client.post("/products", json={"name": "Widget <b>", "price": 9.99})
    client.post("/cart/items", json={"id": "p1", "name": "Gizmo", "price": 5})

    r = client.get("/")
    assert r.status_code == 200
    assert r.headers["content-type"].startswith("text/html")
    html = r.text
    assert "My E-Commerce Store" in html
    assert "Widget &lt;b&gt;" in html
    assert 'data-cart-item="p1"' in html
    assert "Total: $5.00" in html
    assert '<script src="/static/js/bundle.js"></script>' in html


def test_any_path_serves_the_page():
    client = TestClient(app)
    r = client.get("/some/deep/link")
    assert r.status_code == 200
    assert 'id="root"' in r.text


def test_bundle_is_served():
    client = TestClient(app)
    r = client.get("/static/js/bundle.js")
    assert r.status_code == 200
    assert "/cart/checkout" in r.text


def test_store_failure_is_structured_500(monkeypatch):
    async def broken_find(self):
        raise StoreError("store offline")

    monkeypatch.setattr(JsonFileCollection, "find", broken_find)
    client = TestClient(app, raise_server_exceptions=False)
    r = client.get("/products")
    assert r.status_code == 500
    body = r.json()
    assert body["status"] == "error"
    assert "store offline" in body["detail"]
    assert body["method"] == "GET"


def test_page_visit_does_not_allocate_cart_session():
    client = TestClient(app)
    r = client.get("/favicon.ico")
    assert r.status_code == 200
    assert "cart_session" not in r.cookies
    assert len(get_cart_sessions()) == 0

    client.get("/")
    assert len(get_cart_sessions()) == 0
    client.post("/cart/items", json={"id": "p1", "name": "Gizmo", "price": 5})
    assert len(get_cart_sessions()) == 1


def test_unknown_cookie_renders_empty_cart():
    client = TestClient(app)
    client.cookies.set("cart_session", "forged")
    r = client.get("/")
    assert r.status_code == 200
    assert "Total: $0.00" in r.text
    assert len(get_cart_sessions()) == 0
