"""Integration tests: timezone setting drives the company clock; writes are admin only."""
import pytest


@pytest.mark.integration
async def test_list_and_get_settings(http_client):
    r = await http_client.get("/settings")
    assert r.status_code == 200, r.text
    assert "timezone" in [s["key"] for s in r.json()]

    r_one = await http_client.get("/settings/timezone")
    assert r_one.status_code == 200, r_one.text
    assert r_one.json()["value"] == "America/Denver"


@pytest.mark.integration
async def test_unknown_setting_returns_404(http_client):
    r = await http_client.get("/settings/does-not-exist")
    assert r.status_code == 404, r.text
    assert r.json()["errorCode"] == "SETTING_NOT_FOUND"


@pytest.mark.integration
async def test_update_requires_admin(http_client, staff_headers):
    r = await http_client.put("/settings/timezone", json={"value": "America/Chicago"})
    assert r.status_code == 401, r.text

    r_bad = await http_client.put("/settings/timezone", json={"value": "America/Chicago"}, headers={"X-User-Id": "not-a-uuid"})
    assert r_bad.status_code == 401, r_bad.text

    r_staff = await http_client.put("/settings/timezone", json={"value": "America/Chicago"}, headers=staff_headers)
    assert r_staff.status_code == 403, r_staff.text


@pytest.mark.integration
@pytest.mark.parametrize("value", ["Mountain Time", "America/Indiana"])
async def test_invalid_timezone_is_rejected(http_client, admin_headers, value):
    r = await http_client.put("/settings/timezone", json={"value": value}, headers=admin_headers)
    assert r.status_code == 422, r.text
    assert r.json()["errorCode"] == "INVALID_TIMEZONE"


@pytest.mark.integration
async def test_changing_timezone_changes_conversions(http_client, admin_headers):
    try:
        r = await http_client.put("/settings/timezone", json={"value": "America/Chicago"}, headers=admin_headers)
        assert r.status_code == 200, r.text
        assert r.json()["value"] == "America/Chicago"

        now = await http_client.get("/time/now")
        assert now.json()["timezone"] == "America/Chicago"

        conv = await http_client.post("/time/convert", json={"local": "2025-01-15T12:00"})
        assert conv.json()["instant"].startswith("2025-01-15T18:00:00")
    finally:
        restore = await http_client.put("/settings/timezone", json={"value": "America/Denver"}, headers=admin_headers)
        assert restore.status_code == 200, restore.text
