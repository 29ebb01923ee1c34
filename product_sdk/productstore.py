# product_sdk/productstore.py
import os
import json
import requests
import httpx
from typing import Optional, Dict, Any

DEFAULT_BASE_URL = os.getenv("PRODUCT_API_URL", "http://localhost:4000")


class ProductClient:
    """Thin client for the product API.

    ``session`` can be any object with the requests.Session call style;
    tests pass FastAPI's TestClient here.
    """

    def __init__(self, base_url: str = DEFAULT_BASE_URL, timeout: int = 10, session=None):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def _url(self, product_id: Optional[str] = None) -> str:
        if product_id is None:
            return f"{self.base_url}/products"
        return f"{self.base_url}/products/{product_id}"

    # Products
    def list_products(self):
        r = self.session.get(self._url(), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_product(self, product_id: str):
        r = self.session.get(self._url(product_id), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def create_product(self, name: str, category: str, price: float, **extra: Any):
        payload: Dict[str, Any] = {"name": name, "category": category, "price": price}
        payload.update(extra)
        r = self.session.post(self._url(), json=payload, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def update_product(self, product_id: str, **fields: Any):
        r = self.session.put(self._url(product_id), json=fields, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def delete_product(self, product_id: str) -> bool:
        # the API answers 200 whether or not the id existed
        r = self.session.delete(self._url(product_id), timeout=self.timeout)
        r.raise_for_status()
        return True

    # Async create (example)
    async def create_product_async(self, name: str, category: str, price: float, **extra: Any):
        payload: Dict[str, Any] = {"name": name, "category": category, "price": price}
        payload.update(extra)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            r = await client.post(self._url(), json=payload)
            r.raise_for_status()
            return r.json()


def _parse_extra(pairs):
    # --field quantity=50 ; values are parsed as JSON when possible
    out: Dict[str, Any] = {}
    for pair in pairs or []:
        key, _, raw = pair.partition("=")
        try:
            out[key] = json.loads(raw)
        except ValueError:
            out[key] = raw
    return out


if __name__ == "__main__":
    import argparse
    from rich import print

    parser = argparse.ArgumentParser(description="Product API CLI")
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL, help="API base URL")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list-products", help="List all products")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True, help="ID of the product")

    cp = subparsers.add_parser("create-product", help="Create a new product")
    cp.add_argument("--name", required=True, help="Product name")
    cp.add_argument("--category", required=True, help="Product category")
    cp.add_argument("--price", type=float, required=True, help="Product price")
    cp.add_argument("--field", action="append", help="Extra field as key=value (repeatable)")

    up = subparsers.add_parser("update-product", help="Update fields of a product")
    up.add_argument("--product-id", required=True, help="ID of the product")
    up.add_argument("--name", help="New name")
    up.add_argument("--category", help="New category")
    up.add_argument("--price", type=float, help="New price")
    up.add_argument("--field", action="append", help="Extra field as key=value (repeatable)")

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--product-id", required=True, help="ID of the product")

    args = parser.parse_args()
    c = ProductClient(base_url=args.base_url)

    if args.command == "list-products":
        print(c.list_products())

    elif args.command == "get-product":
        print(c.get_product(args.product_id))

    elif args.command == "create-product":
        print(c.create_product(args.name, args.category, args.price, **_parse_extra(args.field)))

    elif args.command == "update-product":
        fields = _parse_extra(args.field)
        for key in ("name", "category", "price"):
            if getattr(args, key) is not None:
                fields[key] = getattr(args, key)
        print(c.update_product(args.product_id, **fields))

    elif args.command == "delete-product":
        c.delete_product(args.product_id)
        print(f"Deleted {args.product_id}")
