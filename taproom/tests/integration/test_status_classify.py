"""Integration tests: lifecycle status classification over HTTP."""
from datetime import UTC, datetime, timedelta

import pytest


def _iso(value: datetime) -> str:
    return value.isoformat().replace("+00:00", "Z")


@pytest.mark.integration
async def test_empty_entity_is_inactive(http_client):
    r = await http_client.post("/status/classify", json={})
    assert r.status_code == 200, r.text
    assert r.json()["statuses"] == ["inactive"]


@pytest.mark.integration
async def test_special_for_company_today_is_active(http_client):
    today = (await http_client.get("/time/now")).json()["today"]
    r = await http_client.post(
        "/status/classify",
        json={"isActive": True, "startDate": today, "endDate": today},
    )
    assert r.status_code == 200, r.text
    assert r.json()["statuses"] == ["active"]
    assert r.json()["today"] == today


@pytest.mark.integration
async def test_special_stored_as_equal_midnight_instants_is_active(http_client):
    today = (await http_client.get("/time/now")).json()["today"]
    stored = (await http_client.post("/time/date", json={"date": today})).json()["instant"]
    r = await http_client.post(
        "/status/classify",
        json={"isActive": True, "startDate": stored, "endDate": stored},
    )
    assert r.status_code == 200, r.text
    assert r.json()["statuses"] == ["active"]


@pytest.mark.integration
async def test_special_mixing_civil_date_and_stored_instant(http_client):
    stored = (await http_client.post("/time/date", json={"date": "2020-01-01"})).json()["instant"]
    r = await http_client.post(
        "/status/classify",
        json={"isActive": True, "startDate": "2020-01-01", "endDate": stored},
    )
    assert r.status_code == 200, r.text
    assert r.json()["statuses"] == ["past", "inactive"]


@pytest.mark.integration
@pytest.mark.parametrize(
    ("start_local", "end_local", "expected"),
    [
        ("2099-06-10T22:00", "2099-06-11T02:00", ["scheduled"]),
        ("2025-06-10T22:00", "2025-06-11T02:00", ["past"]),
    ],
)
async def test_cross_midnight_event_posted_as_instants(http_client, start_local, end_local, expected):
    start = (await http_client.post("/time/convert", json={"local": start_local})).json()["instant"]
    end = (await http_client.post("/time/convert", json={"local": end_local})).json()["instant"]
    r = await http_client.post("/status/classify", json={"startDateTime": start, "endDateTime": end})
    assert r.status_code == 200, r.text
    assert r.json()["statuses"] == expected


@pytest.mark.integration
async def test_old_special_is_past_and_inactive(http_client):
    r = await http_client.post(
        "/status/classify",
        json={"isActive": True, "startDate": "2020-01-01", "endDate": "2020-01-01"},
    )
    assert r.status_code == 200, r.text
    assert r.json()["statuses"] == ["past", "inactive"]


@pytest.mark.integration
async def test_future_cross_midnight_event_is_scheduled(http_client):
    start = datetime.now(UTC).replace(microsecond=0) + timedelta(days=3)
    r = await http_client.post(
        "/status/classify",
        json={"startDateTime": _iso(start), "endDateTime": _iso(start + timedelta(hours=4)), "isPublished": True},
    )
    assert r.status_code == 200, r.text
    assert r.json()["statuses"] == ["published", "scheduled"]


@pytest.mark.integration
async def test_end_before_start_is_rejected(http_client):
    start = datetime(2025, 6, 11, 4, 0, tzinfo=UTC)
    r = await http_client.post(
        "/status/classify",
        json={"startDateTime": _iso(start), "endDateTime": _iso(start - timedelta(hours=1))},
    )
    assert r.status_code == 422, r.text
    assert r.json()["errorCode"] == "INVALID_TIME_WINDOW"

    r_dates = await http_client.post("/status/classify", json={"startDate": "2025-06-10", "endDate": "2025-06-09"})
    assert r_dates.status_code == 422, r_dates.text


@pytest.mark.integration
async def test_malformed_day_value_is_rejected(http_client):
    r = await http_client.post("/status/classify", json={"startDate": "June 10th"})
    assert r.status_code == 422, r.text
    assert r.json()["errorCode"] == "INVALID_INPUT"
