import asyncio

import requests
from rich import print

from product_sdk.productstore import ProductClient, DEFAULT_BASE_URL


async def bump_stock(client: ProductClient, product_id: str, quantity: int):
    try:
        product = await asyncio.to_thread(client.update_product, product_id, quantity=quantity)
        print(f"✅ set quantity={quantity} -> {product}")
    except requests.exceptions.HTTPError as e:
        print(f"❌ update failed: {e}")


async def main():
    c = ProductClient(base_url=DEFAULT_BASE_URL)

    # Fire a batch of creates at once; none of them should be lost
    print("\n⚡ Creating 20 products concurrently...")
    created = await asyncio.gather(*[
        c.create_product_async(f"Widget {i}", "Gadgets", 1.0 + i) for i in range(20)
    ])
    ids = {p["id"] for p in created}
    print(f"📦 {len(ids)} distinct ids returned")

    listed = {p["id"] for p in c.list_products()}
    missing = ids - listed
    if missing:
        print(f"⚠️  missing after concurrent create: {missing}")
    else:
        print("✅ every created product is in the collection")

    # Concurrent updates to one record
    target = created[0]["id"]
    await asyncio.gather(*[bump_stock(c, target, q) for q in range(5)])
    print("\n📦 Final product state:", c.get_product(target))


if __name__ == "__main__":
    asyncio.run(main())
