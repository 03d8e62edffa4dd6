#!/usr/bin/env python3
"""
Verify a running correction proxy end to end.

This script posts a sample item list to the app's correction endpoint and
prints each correction. Requires the app to be running.

Usage:
    python scripts/verify_correction.py
    python scripts/verify_correction.py --item bred --item "Amul Butr"
    python scripts/verify_correction.py --database "Bread, Butter, Milk"
"""
import argparse
import asyncio
import sys
import time

import httpx

BASE_URL = "http://localhost:8000"
DEFAULT_ITEMS = ["bred", "Amul Butr", "doodh", "tamatar"]
DEFAULT_DATABASE = "Bread, Amul Butter, Milk, Tomato, Onion, Potato"


async def check_app_running(base_url: str) -> dict | None:
    """Return the health payload, or None if the app is not reachable."""
    try:
        async with httpx.AsyncClient(base_url=base_url, timeout=5) as client:
            response = await client.get("/health")
            if response.status_code != 200:
                return None
            return response.json()
    except httpx.ConnectError:
        return None


async def request_corrections(
    client: httpx.AsyncClient,
    items: list[str],
    database: str | None
) -> dict:
    """
    Post items to the correction endpoint.

    Returns dict with status_code, body and duration_seconds.
    """
    payload = {"items": items}
    if database is not None:
        payload["database"] = database

    start = time.time()
    response = await client.post("/api/correct", json=payload)

    return {
        "status_code": response.status_code,
        "body": response.json(),
        "duration_seconds": round(time.time() - start, 1)
    }


async def main():
    parser = argparse.ArgumentParser(description="Verify the grocery correction endpoint")
    parser.add_argument(
        "--url",
        type=str,
        default=BASE_URL,
        help=f"Base URL of the running app (default: {BASE_URL})"
    )
    parser.add_argument(
        "--item",
        action="append",
        dest="items",
        help="Item to correct (repeatable, default: a built-in sample list)"
    )
    parser.add_argument(
        "--database",
        type=str,
        default=DEFAULT_DATABASE,
        help="Reference item list passed to the model"
    )
    args = parser.parse_args()
    items = args.items or DEFAULT_ITEMS

    print(f"Checking app at {args.url}...")
    health = await check_app_running(args.url)
    if health is None:
        print(f"Error: App not running at {args.url}")
        print("Start the app with: uvicorn app.main:app")
        sys.exit(1)
    print(f"App is running (provider: {health['correction_provider']})\n")

    if not health["configured"]:
        print("Warning: correction provider is not configured, expect a 500\n")

    async with httpx.AsyncClient(base_url=args.url, timeout=180) as client:
        print(f"Correcting {len(items)} items...")
        result = await request_corrections(client, items, args.database)

    print(f"Status: {result['status_code']} ({result['duration_seconds']}s)\n")

    body = result["body"]
    if result["status_code"] != 200:
        print(f"FAILED: {body.get('error')}")
        for key in ("details", "response", "message"):
            if key in body:
                print(f"  {key}: {body[key]}")
        sys.exit(1)

    print("=" * 60)
    print("CORRECTIONS")
    print("=" * 60)
    for entry in body["results"]:
        suggestions = ", ".join(entry.get("suggestions", []))
        print(
            f"  {entry.get('original')!r} -> {entry.get('corrected')!r} "
            f"({entry.get('confidence')})"
        )
        print(f"    suggestions: {suggestions}")


if __name__ == "__main__":
    asyncio.run(main())
