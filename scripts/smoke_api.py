#!/usr/bin/env python3
"""Smoke test for the booking API against a running server."""

import sys
from datetime import date, timedelta

import httpx


BASE_URL = "http://127.0.0.1:8001"


def _next_open_day() -> str:
    day = date.today() + timedelta(days=1)
    while day.weekday() == 6:
        day += timedelta(days=1)
    return day.isoformat()


def test_catalog():
    """List categories and pick the first service."""
    print("=" * 60)
    print("Testing GET /api/v1/categories")
    print("=" * 60)

    try:
        categories = httpx.get(f"{BASE_URL}/api/v1/categories", timeout=10.0).json()
        print(f"✅ {len(categories)} categories")
        for category in categories:
            services = httpx.get(
                f"{BASE_URL}/api/v1/categories/{category['id']}/services",
                timeout=10.0,
            ).json()
            print(f"  {category['name']}: {', '.join(s['name'] for s in services)}")
            if services:
                return services[0]["id"]
        return None
    except httpx.HTTPError as e:
        print(f"❌ Error: {e}")
        return None


def test_wizard(service_id: str | None):
    """Walk the wizard to review and submit."""
    print("\n" + "=" * 60)
    print("Testing /api/v1/wizard")
    print("=" * 60)

    if not service_id:
        print("⚠️  No service from catalog, skipping")
        return None

    try:
        response = httpx.post(f"{BASE_URL}/api/v1/wizard", json={"service_id": service_id}, timeout=10.0)
        response.raise_for_status()
        session_id = response.json()["session_id"]
        print(f"✅ Session ID: {session_id}")

        steps = [
            ("put", "customer", {"name": "Smoke Test", "email": "smoke@example.com", "phone": "555-0100"}),
            ("post", "next", None),
            ("put", "schedule", {"booking_date": _next_open_day(), "booking_time": "10:00"}),
            ("post", "next", None),
        ]
        for method, path, payload in steps:
            response = httpx.request(
                method.upper(),
                f"{BASE_URL}/api/v1/wizard/{session_id}/{path}",
                json=payload,
                timeout=10.0,
            )
            response.raise_for_status()
            data = response.json()
            print(f"  {path}: accepted={data['accepted']} step={data['wizard']['step']}")

        summary = data["wizard"]["summary"]
        print(f"  total: {summary['total_label']} ({summary['total_duration_label']})")

        response = httpx.post(f"{BASE_URL}/api/v1/wizard/{session_id}/submit", timeout=30.0)
        response.raise_for_status()
        confirmation = response.json()["wizard"]["confirmation"]
        print(f"✅ Confirmed! Order: {confirmation['order_number']}")
        return confirmation["order_number"]
    except httpx.HTTPStatusError as e:
        print(f"❌ HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return None
    except httpx.HTTPError as e:
        print(f"❌ Error: {e}")
        return None


def test_admin(order_number: str | None):
    """Confirm the new booking from the dashboard."""
    print("\n" + "=" * 60)
    print("Testing /api/v1/admin/bookings")
    print("=" * 60)

    try:
        dashboard = httpx.get(f"{BASE_URL}/api/v1/admin/bookings", timeout=10.0).json()
        print(f"✅ Stats: {dashboard['stats']}")
        booking = next((b for b in dashboard["bookings"] if b["order_number"] == order_number), None)
        if booking is None:
            print("⚠️  Booking not found on dashboard")
            return False

        response = httpx.post(
            f"{BASE_URL}/api/v1/admin/bookings/{booking['id']}/status",
            json={"action": "confirm"},
            timeout=10.0,
        )
        response.raise_for_status()
        print(f"✅ Confirmed booking {booking['id']}")
        return True
    except httpx.HTTPStatusError as e:
        print(f"❌ HTTP Error: {e.response.status_code}")
        print(f"Response: {e.response.text}")
        return False
    except httpx.HTTPError as e:
        print(f"❌ Error: {e}")
        return False


def main():
    """Run all checks."""
    print("\n🚀 Testing Booking API\n")

    try:
        httpx.get(f"{BASE_URL}/health", timeout=5.0)
        print("✅ Server is running\n")
    except httpx.HTTPError:
        print("❌ Server is not running!")
        print("   Please start it with: uvicorn salon_booking.main:app --reload --port 8001")
        sys.exit(1)

    service_id = test_catalog()
    order_number = test_wizard(service_id)
    test_admin(order_number)

    print("\n" + "=" * 60)
    print("✅ Smoke test complete!")
    print("=" * 60 + "\n")


if __name__ == "__main__":
    main()
