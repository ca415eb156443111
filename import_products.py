"""Script to import the catalog from catalog.json through the admin API."""
import argparse
import json
import os
import httpx
from typing import Any, Dict, List, Optional


def load_catalog(file_path: str) -> Dict[str, Any]:
    """Load product types and products from a JSON file."""
    with open(file_path, 'r') as f:
        return json.load(f)


def create_product_type(client: httpx.Client, api_url: str, product_type: Dict[str, Any]) -> Optional[int]:
    """Create a product type via API and return its id."""
    try:
        response = client.post(f"{api_url}/api/admin/product-types", json=product_type, timeout=30.0)
    except httpx.HTTPError as e:
        print(f"✗ Error creating type {product_type['name']}: {str(e)}")
        return None

    if response.status_code == 201:
        created = response.json()
        print(f"✓ Created type: {created['name']} (/{created['slug']})")
        return created["id"]

    print(f"✗ Failed type: {product_type['name']} - {response.status_code}")
    print(f"  Error: {response.text}")
    return None


def create_product(client: httpx.Client, api_url: str, product: Dict[str, Any]) -> bool:
    """Create a single product via API."""
    try:
        response = client.post(f"{api_url}/api/admin/products", json=product, timeout=30.0)
    except httpx.HTTPError as e:
        print(f"✗ Error creating {product['name']}: {str(e)}")
        return False

    if response.status_code == 201:
        print(f"✓ Created: {product['name']} - {product['description']}")
        return True

    print(f"✗ Failed: {product['name']} - {response.status_code}")
    print(f"  Error: {response.text}")
    return False


def import_catalog(api_url: str, token: str, catalog: Dict[str, Any]) -> Dict[str, int]:
    """
    Create every product type, then every product under its type.

    Products reference their type by name (`product_type`) in the file.
    """
    counts = {"succeeded": 0, "failed": 0}
    type_ids: Dict[str, int] = {}

    with httpx.Client(headers={"Authorization": f"Bearer {token}"}) as client:
        for product_type in catalog.get("product_types", []):
            type_id = create_product_type(client, api_url, product_type)
            if type_id is None:
                counts["failed"] += 1
                continue
            type_ids[product_type["name"]] = type_id
            counts["succeeded"] += 1

        products: List[Dict[str, Any]] = catalog.get("products", [])
        for product in products:
            type_name = product.get("product_type")
            if type_name not in type_ids:
                print(f"✗ Skipped: {product['name']} - unknown product type '{type_name}'")
                counts["failed"] += 1
                continue

            payload = {k: v for k, v in product.items() if k != "product_type"}
            payload["product_type_id"] = type_ids[type_name]
            if create_product(client, api_url, payload):
                counts["succeeded"] += 1
            else:
                counts["failed"] += 1

    return counts


def main():
    parser = argparse.ArgumentParser(description="Import the catalog through the admin API")
    parser.add_argument("--file", default="data/catalog.json", help="Catalog JSON file")
    parser.add_argument("--url", default="http://localhost:8000", help="API base URL")
    parser.add_argument("--token", default=os.getenv("ADMIN_SESSION_TOKEN", ""), help="Admin session token")
    args = parser.parse_args()

    if not args.token:
        parser.error("an admin session token is required (--token or ADMIN_SESSION_TOKEN)")

    catalog = load_catalog(args.file)
    print(f"Found {len(catalog.get('product_types', []))} product types and {len(catalog.get('products', []))} products")
    print("-" * 60)

    counts = import_catalog(args.url.rstrip("/"), args.token, catalog)

    print("-" * 60)
    print(f"Import complete: {counts['succeeded']} succeeded, {counts['failed']} failed")


if __name__ == "__main__":
    main()
