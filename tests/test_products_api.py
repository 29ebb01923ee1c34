# tests/test_products_api.py
import json

import pytest
from fastapi.testclient import TestClient

from product_api.config import Settings
from product_api.database import RecordStore
from product_api.errors import StorageUnavailable
from product_api.main import create_app

LAPTOP = {"name": "Laptop", "category": "Electronics", "price": 999.99}


def create(client, body=LAPTOP):
    r = client.post("/products", json=body)
    assert r.status_code == 200
    return r.json()


def test_list_starts_empty(client):
    r = client.get("/products")
    assert r.status_code == 200
    assert r.json() == []


def test_create_and_get_laptop(client):
    product = create(client)
    assert len(product["id"]) == 5
    assert {k: v for k, v in product.items() if k != "id"} == LAPTOP

    r = client.get(f"/products/{product['id']}")
    assert r.status_code == 200
    assert r.json() == product


def test_create_keeps_extra_fields(client):
    product = create(client, dict(LAPTOP, quantity=50, tags=["sale"]))
    assert product["quantity"] == 50
    assert product["tags"] == ["sale"]


def test_create_ignores_client_supplied_id(client):
    product = create(client, dict(LAPTOP, id="ABC3D"))
    assert product["id"] != "ABC3D"


def test_update_price_only(client):
    product = create(client)
    r = client.put(f"/products/{product['id']}", json={"price": 799.99})
    assert r.status_code == 200
    assert r.json() == dict(product, price=799.99)
    assert client.get(f"/products/{product['id']}").json() == dict(product, price=799.99)


def test_update_missing_product_is_404(client):
    r = client.put("/products/doesnotexist", json={"price": 1})
    assert r.status_code == 404
    assert r.content == b""


def test_get_missing_product_is_404(client):
    r = client.get("/products/doesnotexist")
    assert r.status_code == 404
    assert r.content == b""


def test_delete_missing_product_is_ok(client):
    product = create(client)
    r = client.delete("/products/doesnotexist")
    assert r.status_code == 200
    assert r.content == b""
    assert client.get("/products").json() == [product]


def test_delete_then_get_is_404(client):
    product = create(client)
    assert client.delete(f"/products/{product['id']}").status_code == 200
    assert client.get(f"/products/{product['id']}").status_code == 404
    assert client.get("/products").json() == []


def test_list_after_creates_keeps_order(client):
    names = [f"item-{i}" for i in range(4)]
    for n in names:
        create(client, {"name": n})
    assert [p["name"] for p in client.get("/products").json()] == names


def test_writes_reach_the_data_file(client, db_path):
    product = create(client)
    on_disk = json.loads(db_path.read_text(encoding="utf-8"))
    assert on_disk == {"products": [product]}


def test_persistence_failure_is_500_with_detail(client, store, tmp_path):
    store.path = tmp_path / "blocked"
    store.path.mkdir()
    r = client.post("/products", json=LAPTOP)
    assert r.status_code == 500
    assert "could not write" in r.json()["detail"]
    assert client.get("/products").json() == []


def test_update_persistence_failure_is_500(client, store, tmp_path):
    product = create(client)
    store.path = tmp_path / "blocked"
    store.path.mkdir()
    r = client.put(f"/products/{product['id']}", json={"price": 1})
    assert r.status_code == 500
    assert client.get(f"/products/{product['id']}").json() == product


def test_unreadable_data_file_stops_startup(db_path, test_settings):
    db_path.write_text("{broken", encoding="utf-8")
    with pytest.raises(StorageUnavailable):
        create_app(store=RecordStore(db_path), settings=test_settings)


def test_default_store_comes_from_settings(tmp_path):
    cfg = Settings(db_path=str(tmp_path / "data" / "db.json"), static_dir=str(tmp_path / "none"))
    client = TestClient(create_app(settings=cfg))
    product = create(client)
    assert json.loads((tmp_path / "data" / "db.json").read_text())["products"] == [product]


def test_id_length_setting(tmp_path):
    cfg = Settings(id_length=8, static_dir=str(tmp_path / "none"))
    client = TestClient(create_app(store=RecordStore(), settings=cfg))
    assert len(create(client)["id"]) == 8


def test_api_docs_are_served(client):
    assert client.get("/api-docs").status_code == 200
    schema = client.get("/openapi.json").json()
    assert schema["info"]["title"] == "Product Management API"
    assert "/products/{product_id}" in schema["paths"]


def test_static_build_is_served(tmp_path):
    build = tmp_path / "build"
    build.mkdir()
    (build / "index.html").write_text("<h1>shop</h1>", encoding="utf-8")
    cfg = Settings(static_dir=str(build))
    client = TestClient(create_app(store=RecordStore(), settings=cfg))
    assert "shop" in client.get("/").text
    assert client.get("/products").json() == []


def test_cors_headers(client):
    r = client.get("/products", headers={"Origin": "http://localhost:5173"})
    assert r.headers["access-control-allow-origin"] in ("*", "http://localhost:5173")


def test_nan_price_is_rejected_and_list_keeps_working(client, db_path):
    product = create(client)
    headers = {"content-type": "application/json"}

    r = client.post("/products", content='{"name": "x", "price": NaN}', headers=headers)
    assert r.status_code == 500
    r = client.put(f"/products/{product['id']}", content='{"price": Infinity}', headers=headers)
    assert r.status_code == 500

    r = client.get("/products")
    assert r.status_code == 200
    assert r.json() == [product]
    assert json.loads(db_path.read_text(encoding="utf-8")) == {"products": [product]}


def test_field_values_are_stored_as_sent(client):
    product = create(client, {"name": 5, "category": ["a", "b"], "price": "10"})
    assert product["name"] == 5
    assert product["category"] == ["a", "b"]
    assert product["price"] == "10"

    r = client.put(f"/products/{product['id']}", json={"price": "12.50", "name": None})
    assert r.json() == dict(product, price="12.50", name=None)
    assert client.get(f"/products/{product['id']}").json() == dict(product, price="12.50", name=None)
