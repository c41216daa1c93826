# tests/test_api.py
import pytest


@pytest.mark.asyncio
async def test_health(client):
    r = await client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_property_routes_require_user(client):
    r = await client.post("/property/check", json={"address": "1 A St", "city": "X", "state": "Y"})
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_check_missing_fields_is_400(client, auth_headers):
    r = await client.post("/property/check", json={"address": "1 A St"}, headers=auth_headers)
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["code"] == "MISSING_FIELD"
    assert body["error"] == "address, city, and state are required"


@pytest.mark.asyncio
async def test_check_report_watch_flow(client, auth_headers):
    r = await client.post(
        "/property/check",
        json={"address": "123 Main St", "city": "Austin", "state": "TX"},
        headers=auth_headers,
    )
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    prop = body["property"]
    assert prop["status"] == "active"
    assert prop["total_flags"] == 0
    assert body["history"]["price_range"] == {"min": 0.0, "max": 0.0}
    assert body["nearby_scams"] == 0

    r = await client.post(
        "/property/report",
        json={
            "address": "123 Main St, Austin, TX",
            "scam_type": "wire_fraud",
            "description": "Seller wants a wire before showing the house.",
        },
        headers=auth_headers,
    )
    assert r.status_code == 200
    assert r.json()["report_id"]

    r = await client.post(
        "/property/check",
        json={"address": "123 main st", "city": "austin", "state": "tx"},
        headers=auth_headers,
    )
    body = r.json()
    assert body["property"]["id"] == prop["id"]
    assert body["property"]["status"] == "flagged"
    assert body["property"]["total_flags"] == 1
    assert [a["alert_type"] for a in body["alerts"]] == ["danger"]
    assert body["alerts"][0]["scan_count"] == 2

    r = await client.post(
        "/property/watch",
        json={"property_id": prop["id"], "notifications_enabled": False},
        headers=auth_headers,
    )
    assert r.status_code == 200
    assert r.json()["watch"]["notifications_enabled"] is False

    r = await client.get("/property/watch", headers=auth_headers)
    body = r.json()
    assert [w["property_id"] for w in body["watches"]] == [prop["id"]]
    assert [p["id"] for p in body["properties"]] == [prop["id"]]

    r = await client.delete(f"/property/watch/{prop['id']}", headers=auth_headers)
    assert r.json() == {"success": True, "removed": True}


@pytest.mark.asyncio
async def test_report_errors(client, auth_headers):
    r = await client.post(
        "/property/report",
        json={"address": "123 Main St", "scam_type": "other", "description": "d"},
        headers=auth_headers,
    )
    assert r.status_code == 400
    assert r.json()["code"] == "MISSING_FIELD"

    r = await client.post(
        "/property/report",
        json={"property_id": "nope", "scam_type": "other", "description": "d"},
        headers=auth_headers,
    )
    assert r.status_code == 404
    assert r.json()["code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_demo_and_stats(client, auth_headers):
    r = await client.post("/property/demo", headers=auth_headers)
    assert r.status_code == 200
    assert r.json()["seeded"] == 5

    r = await client.get("/property/stats", headers=auth_headers)
    stats = r.json()
    assert stats["total_properties"] == 5
    assert stats["flagged_properties"] == 4
    assert stats["verified_scams"] == 2
    assert stats["total_reports"] == 5
    # wire_fraud, fake_listing, seller_fraud, rental_scam escalate; price_manipulation does not
    assert stats["active_alerts"] == 4
    assert stats["scams_by_type"]["price_manipulation"] == 1


@pytest.mark.asyncio
async def test_debug_config_is_redacted_and_route_dump_is_gone(client):
    r = await client.get("/debug/config")
    assert r.status_code == 200
    body = r.json()
    assert "DEFAULT_COUNTRY" in body
    assert "API_KEY" in body

    r = await client.get("/debug/routes")
    assert r.status_code == 404
