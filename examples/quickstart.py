#!/usr/bin/env python3
"""
Castline Quickstart — host and listener walk through the catalogue.

Host signs up → creates a podcast → adds episodes → edits it.
Listener browses, then tries (and fails) to change the host's podcast.
Host deletes the podcast; its episodes go with it.

Run with: python examples/quickstart.py
Backend must be running: http://localhost:8000
"""

import sys
import uuid

import httpx

BASE = "http://localhost:8000/api/v1"


def op(client: httpx.Client, operation: str, input: dict | None = None,
       token: str | None = None) -> dict:
    headers = {"x-jwt": token} if token else {}
    resp = client.post("/operations", json={"operation": operation, "input": input},
                       headers=headers)
    resp.raise_for_status()
    body = resp.json()
    if body.get("errors"):
        print(f"   ✗ {operation}: {body['errors'][0]['message']}")
        return {"ok": False}
    return body["data"][operation]


def signup(client: httpx.Client, email: str, role: str) -> str:
    op(client, "createAccount", {"email": email, "password": "demo-password", "role": role})
    return op(client, "login", {"email": email, "password": "demo-password"})["token"]


def main():
    run_id = uuid.uuid4().hex[:6]
    client = httpx.Client(base_url=BASE, timeout=10)

    print("Checking backend health...")
    try:
        health = client.get("/health").json()
    except httpx.ConnectError:
        print(f"Backend not reachable at {BASE}")
        sys.exit(1)
    print(f"  Database: {health['database']}")

    print("\n1. Signing up a host and a listener...")
    host = signup(client, f"host-{run_id}@example.com", "Host")
    listener = signup(client, f"listener-{run_id}@example.com", "Listener")
    print("   Both logged in")

    print("\n2. Host creates a podcast...")
    pid = op(client, "createPodcast", {"title": "Deep Dives", "category": "Tech"}, host)["id"]
    print(f"   Podcast #{pid}")

    print("\n3. Host adds two episodes...")
    for title in ("Pilot", "Second wind"):
        eid = op(client, "createEpisode",
                 {"podcastId": pid, "title": title, "category": "Tech"}, host)["id"]
        print(f"   Episode #{eid}: {title}")

    print("\n4. Host renames the podcast and rates it...")
    op(client, "updatePodcast",
       {"id": pid, "payload": {"title": "Deeper Dives", "rating": 4.8}}, host)

    print("\n5. Listener browses (no token needed)...")
    podcast = op(client, "getPodcast", {"id": pid})["podcast"]
    print(f"   {podcast['title']} ({podcast['rating']}) — {len(podcast['episodes'])} episodes")

    print("\n6. Listener tries to delete it...")
    result = op(client, "deletePodcast", {"id": pid}, listener)
    print(f"   ok={result['ok']} error={result['error']!r}")

    print("\n7. Host deletes it...")
    op(client, "deletePodcast", {"id": pid}, host)
    result = op(client, "getEpisodes", {"podcastId": pid})
    print(f"   getEpisodes → {result['error']!r}")

    print("\n✓ Done.")


if __name__ == "__main__":
    main()
