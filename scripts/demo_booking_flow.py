"""Demo: signup → add user → grant premium → book a premium meeting.

Runs against an in-process app via FastAPI TestClient; the conference
provider is left unconfigured so booking ids are generated locally.

Run with:
    python scripts/demo_booking_flow.py
"""

from __future__ import annotations

from fastapi.testclient import TestClient

from meetdesk.main import create_app


def main() -> None:
    app = create_app()
    client = TestClient(app)
    store = app.state.store

    # ── Step 1: POST /api/signup ────────────────────────────────────
    r = client.post(
        "/api/signup",
        json={
            "orgName": "Acme",
            "adminName": "Alice Admin",
            "adminEmail": "alice@acme.test",
            "password": "demo-pass",
        },
    )
    print(f"1. POST /api/signup                 → {r.status_code}  {r.text}")
    org_id = str(store.orgs.list_all()[0].id)
    base = f"/v1/orgs/{org_id}"

    # ── Step 2: add an org user ─────────────────────────────────────
    r = client.post(
        f"{base}/users", json={"name": "Bob", "email": "bob@acme.test", "plan": "Plus"}
    )
    bob = r.json()
    print(f"2. POST users                       → {r.status_code}  {bob['email']}")

    # ── Step 3: locations before the grant ──────────────────────────
    r = client.get(f"{base}/locations", params={"user_id": bob["id"]})
    print(f"3. GET  locations (no premium)      → {[o['value'] for o in r.json()]}")

    # ── Step 4: premium booking is refused ──────────────────────────
    booking = {
        "flow": "calendar",
        "title": "Quarterly review",
        "start": "2026-11-02T15:00:00",
        "end": "2026-11-02T15:45:00",
        "location_type": "premium",
        "participants": [
            {"name": "Carol", "email": "carol@acme.test", "phone": "555-0100"}
        ],
        "user_id": bob["id"],
    }
    r = client.post(f"{base}/bookings", json=booking)
    print(f"4. POST bookings (premium, denied)  → {r.status_code}")

    # ── Step 5: grant, then book ────────────────────────────────────
    r = client.post(f"{base}/users/{bob['id']}/premium-permission")
    print(f"5. POST premium-permission          → {r.json()['can_book_premium']}")
    r = client.get(f"{base}/locations", params={"user_id": bob["id"]})
    print(f"   GET  locations (premium)         → {[o['value'] for o in r.json()]}")
    r = client.post(f"{base}/bookings", json=booking)
    print(f"6. POST bookings (premium)          → {r.status_code}  id={r.json()['id']}")

    # ── Step 7: ledger ──────────────────────────────────────────────
    r = client.get(f"{base}/bookings")
    print(f"7. GET  bookings                    → {len(r.json())} booking(s)")


if __name__ == "__main__":
    main()
