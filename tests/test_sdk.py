# tests/test_sdk.py
import pytest
import requests
import httpx

from product_sdk.productstore import ProductClient, _parse_extra


@pytest.fixture
def sdk(client):
    # TestClient speaks the requests.Session call style
    return ProductClient(base_url="http://testserver/", session=client)


def test_crud_through_client(sdk):
    created = sdk.create_product("Laptop", "Electronics", 999.99, quantity=50)
    assert created["quantity"] == 50
    assert sdk.get_product(created["id"]) == created

    updated = sdk.update_product(created["id"], price=799.99)
    assert updated["price"] == 799.99
    assert updated["name"] == "Laptop"

    assert sdk.list_products() == [updated]
    assert sdk.delete_product(created["id"]) is True
    assert sdk.list_products() == []


def test_missing_product_raises(sdk):
    with pytest.raises((requests.exceptions.HTTPError, httpx.HTTPStatusError)):
        sdk.get_product("doesnotexist")


def test_base_url_is_normalised():
    c = ProductClient(base_url="http://example.com/api/")
    assert c._url() == "http://example.com/api/products"
    assert c._url("abc12") == "http://example.com/api/products/abc12"


def test_parse_extra_fields():
    assert _parse_extra(["quantity=50", "color=red", "tags=[1, 2]"]) == {
        "quantity": 50, "color": "red", "tags": [1, 2],
    }
    assert _parse_extra(None) == {}
