#!/usr/bin/env python
from rich import print

from product_sdk.productstore import ProductClient, DEFAULT_BASE_URL


def main():
    c = ProductClient(base_url=DEFAULT_BASE_URL)

    # -----------------------------
    # Create products
    # -----------------------------
    print("\nCreating products...")
    laptop = c.create_product("Laptop", "Electronics", 999.99, quantity=50)
    mouse = c.create_product("Mouse", "Electronics", 19.5)
    print(laptop)
    print(mouse)

    # -----------------------------
    # List / get
    # -----------------------------
    print("\nListing products...")
    print(c.list_products())

    print(f"\nFetching {laptop['id']}...")
    print(c.get_product(laptop["id"]))

    # -----------------------------
    # Update
    # -----------------------------
    print("\nDropping the laptop price...")
    print(c.update_product(laptop["id"], price=799.99))

    # -----------------------------
    # Delete
    # -----------------------------
    print(f"\nDeleting {mouse['id']}...")
    c.delete_product(mouse["id"])
    print(c.list_products())


if __name__ == "__main__":
    main()
