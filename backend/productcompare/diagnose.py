"""
Checks the ScrapingDog product API directly for one or more ASINs and reports
which of the fields the comparison relies on are present.

    python -m productcompare.diagnose B07ZPKN6YR B07ZPKBL9V
"""

import argparse
import asyncio
import json
import sys
import time
from typing import Any, Dict, List, Optional

from productcompare.core.errors import ProductCompareError
from productcompare.core.normalizer import normalize
from productcompare.core.scrapingdog import ScrapingDogClient

IMPORTANT_FIELDS = ["title", "price", "average_rating", "total_reviews", "images"]
DEFAULT_ASINS = ["B07ZPKN6YR", "B07ZPKBL9V"]


def field_report(data: Dict[str, Any]) -> Dict[str, bool]:
    return {name: bool(data.get(name)) for name in IMPORTANT_FIELDS}


def _preview(value: Any) -> str:
    text = json.dumps(value, ensure_ascii=False) if isinstance(value, (dict, list)) else str(value)
    return text[:200]


async def diagnose_asin(client: ScrapingDogClient, asin: str) -> bool:
    print(f"\n=== FETCHING DATA FOR ASIN: {asin} ===")
    start = time.monotonic()
    try:
        data = await client.fetch_product(asin)
    except ProductCompareError as e:
        print(f"Error: {e.message}")
        if e.details is not None:
            print(f"Details: {_preview(e.details)}")
        return False

    print(f"Response time: {(time.monotonic() - start) * 1000:.0f}ms")
    print(f"Response data structure: {sorted(data.keys())}")
    for name, present in field_report(data).items():
        print(f"Field '{name}': {'Present' if present else 'Missing or null'}")
        if present:
            print(f"  Value: {_preview(data[name])}")

    try:
        record = normalize(data)
    except ProductCompareError as e:
        print(f"Normalization failed: {e.message}")
        return False

    print(
        f"Normalized: {len(record.customer_reviews)} reviews, "
        f"{len(record.product_information)} product info keys, "
        f"average rating {record.average_rating}"
    )
    return True


async def run(asins: List[str], client: Optional[ScrapingDogClient] = None) -> int:
    print("=== API DIAGNOSTIC TOOL ===")
    try:
        client = client or ScrapingDogClient.from_settings()
    except ProductCompareError as e:
        print(f"API Key: Missing ({e.details})")
        return 2
    print("API Key: Present")

    results = [await diagnose_asin(client, asin) for asin in asins]
    ok = all(results)
    print("\n=== DIAGNOSTIC COMPLETED ===" if ok else "\n=== DIAGNOSTIC FAILED ===")
    return 0 if ok else 1


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Diagnose ScrapingDog product responses")
    parser.add_argument("asins", nargs="*", default=DEFAULT_ASINS, help="ASINs to fetch")
    args = parser.parse_args(argv)
    return asyncio.run(run(args.asins))


if __name__ == "__main__":
    sys.exit(main())
