"""USER REGISTRY LIVE SMOKE TEST
================================
Run against a running instance (uvicorn app.main:app).

Usage:
  python3 scripts/smoke_test_live.py [BASE_URL]

BASE_URL defaults to $APP_URL or http://localhost:8000.

This script:
  - Creates a user through the add form
  - Opens its edit page and checks the form is prefilled
  - Updates it and checks the list shows the new name
  - Deletes it and checks it is gone
  - Checks that editing a deleted id redirects to the list

⚠️  Uses the REAL database behind the instance — creates and deletes one
    record. Test data is prefixed with 'SMOKE_TEST_' for safety.
"""
import os
import re
import sys

import httpx

PASS = 0
FAIL = 0

NAME = "SMOKE_TEST_Alice"
NEW_NAME = "SMOKE_TEST_Bob"


def check(name: str, condition: bool, detail: str = ""):
    global PASS, FAIL
    if condition:
        PASS += 1
        print(f"  ✓ {name}")
    else:
        FAIL += 1
        print(f"  ✗ {name}" + (f" — {detail}" if detail else ""))


def _find_id(html: str, name: str) -> int | None:
    m = re.search(rf"<td>(\d+)</td>\s*<td>{re.escape(name)}</td>", html)
    return int(m.group(1)) if m else None


def main(base_url: str) -> int:
    print("\n══════════════════════════════════════════════════════════")
    print(f"  USER REGISTRY LIVE SMOKE TEST — {base_url}")
    print("══════════════════════════════════════════════════════════")

    with httpx.Client(base_url=base_url, follow_redirects=False, timeout=10) as client:
        print("\n── Preflight ──")
        try:
            health = client.get("/health")
        except httpx.HTTPError as e:
            check("Instance reachable", False, str(e))
            return 1
        check("Health endpoint answers 200", health.status_code == 200, health.text[:200])

        print("\n── Create ──")
        resp = client.post("/users", data={"name": NAME, "email": "alice@example.com"})
        check("Create redirects with 303", resp.status_code == 303, str(resp.status_code))
        check("Create redirects to /users", resp.headers.get("location") == "/users")

        listing = client.get("/users").text
        user_id = _find_id(listing, NAME)
        check("Created user appears in list", user_id is not None)
        if user_id is None:
            return 1

        print("\n── Edit ──")
        resp = client.get(f"/users/{user_id}/edit")
        check("Edit page renders", resp.status_code == 200, str(resp.status_code))
        check("Edit form prefilled with name", f'value="{NAME}"' in resp.text)

        print("\n── Update ──")
        resp = client.post(f"/users/{user_id}", data={"id": "999999", "name": NEW_NAME})
        check("Update redirects with 303", resp.status_code == 303, str(resp.status_code))
        listing = client.get("/users").text
        check("Updated name shown under same id", _find_id(listing, NEW_NAME) == user_id)
        check("Old name gone", _find_id(listing, NAME) is None)

        print("\n── Delete ──")
        resp = client.post(f"/users/{user_id}/delete")
        check("Delete redirects with 303", resp.status_code == 303, str(resp.status_code))
        listing = client.get("/users").text
        check("Deleted user gone from list", _find_id(listing, NEW_NAME) is None)

        resp = client.get(f"/users/{user_id}/edit")
        check("Edit of deleted id redirects", resp.status_code == 303, str(resp.status_code))

    print(f"\n  {PASS} passed, {FAIL} failed\n")
    return 1 if FAIL else 0


if __name__ == "__main__":
    url = sys.argv[1] if len(sys.argv) > 1 else os.getenv("APP_URL", "http://localhost:8000")
    sys.exit(main(url.rstrip("/")))
