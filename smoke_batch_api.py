#!/usr/bin/env python3
"""Smoke test for a running contenthash API (python contenthash_api.py)."""

import sys
import time

import requests

API_URL = "http://localhost:5000"


def check_batch_api() -> bool:
    """Post a mixed batch and print what comes back."""

    cids = [
        "QmRAQB6YaCyidP37UdDnjFY5vQuiBrcqdyoW1CuDgwxkD4",
        "QmPK1s3pNYLi9ERiq3BDxKa4XosgWwFRQUydHUtz4YgpqB",
        "bafybeihkoviema7g3gxyt6la7v4mbgn2wh5qoxmkvqmv7k7n7qlomg4elu",
        "QmInvalidCID123456789",  # This one is rejected
    ]

    print(f"Encoding batch of {len(cids)} CIDs...")

    start_time = time.time()
    response = requests.post(
        f"{API_URL}/contenthash/batch",
        json={"cids": cids},
        headers={"Content-Type": "application/json"}
    )
    elapsed = time.time() - start_time

    print(f"\nResponse Status: {response.status_code}")
    print(f"Response Time: {elapsed:.3f} seconds")

    if response.status_code != 200:
        print(f"Error: {response.text}")
        return False

    data = response.json()
    print(f"\nResults:")
    print(f"  Total Requested: {data['total_requested']}")
    print(f"  Total Encoded: {data['total_encoded']}")
    print(f"  Total Failed: {data['total_failed']}")

    print(f"\nEncoded CIDs:")
    for cid, info in data['results'].items():
        print(f"  {cid}:")
        print(f"    {info['contenthash']}")
        print(f"    {info['version']}, {info['codec']}, {info['hash_function']}")

    if data['errors']:
        print(f"\nRejected CIDs:")
        for cid, info in data['errors'].items():
            print(f"  {cid}: {info['error']} ({info['message']})")

    return data['total_encoded'] == 3 and data['total_failed'] == 1


def check_performance(count: int = 100) -> None:
    """Encode the same CID many times; all but the first hit the LRU cache."""
    cids = ["QmRAQB6YaCyidP37UdDnjFY5vQuiBrcqdyoW1CuDgwxkD4"] * count

    print(f"\nPerformance test: {len(cids)} CIDs...")

    start_time = time.time()
    response = requests.post(f"{API_URL}/contenthash/batch", json={"cids": cids})
    elapsed = time.time() - start_time

    if response.status_code == 200:
        print(f"Processed {len(cids)} CIDs in {elapsed:.3f} seconds")
        print(f"Rate: {len(cids)/elapsed:.0f} CIDs/second")


if __name__ == "__main__":
    print("=== Batch API Smoke Test ===\n")

    ok = check_batch_api()
    if "--perf" in sys.argv:
        check_performance()
    sys.exit(0 if ok else 1)
