"""Integration tests for POST /content/schedule."""

from datetime import UTC, datetime, timedelta

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio


def _payload(when: datetime, **overrides) -> dict:
    payload = {
        "content": "Big launch next week!\nMore details soon.",
        "type": "linkedin",
        "scheduleSettings": {
            "date": when.date().isoformat(),
            "time": when.strftime("%H:%M"),
            "repeat": "none",
            "platforms": ["linkedin"],
        },
    }
    payload.update(overrides)
    return payload


class TestScheduleContent:

    async def test_schedule_records_intent(self, async_client: AsyncClient, auth_headers: dict):
        when = datetime.now(UTC) + timedelta(days=2)

        response = await async_client.post("/content/schedule", headers=auth_headers, json=_payload(when))

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["status"] == "scheduled"
        assert data["title"] == "Big launch next week!"
        assert data["scheduledFor"].startswith(when.date().isoformat())
        assert data["metadata"]["kind"] == "schedule"
        assert data["metadata"]["platforms"] == ["linkedin"]
        assert "repeat" not in data["metadata"]
        assert data["currentVersion"] == 1
        assert data["versions"][0]["metadata"]["source"] == "schedule"

    async def test_repeat_rule_is_recorded(self, async_client: AsyncClient, auth_headers: dict):
        when = datetime.now(UTC) + timedelta(days=2)
        payload = _payload(when, title="Weekly tip")
        payload["scheduleSettings"]["repeat"] = "weekly"

        response = await async_client.post("/content/schedule", headers=auth_headers, json=payload)

        data = response.json()["data"]
        assert data["title"] == "Weekly tip"
        assert data["metadata"]["repeat"] == "weekly"

    async def test_past_time_rejected(self, async_client: AsyncClient, auth_headers: dict):
        when = datetime.now(UTC) - timedelta(days=1)

        response = await async_client.post("/content/schedule", headers=auth_headers, json=_payload(when))

        assert response.status_code == 400
        assert response.json()["message"] == "Scheduled time must be in the future"

    async def test_platforms_required(self, async_client: AsyncClient, auth_headers: dict):
        payload = _payload(datetime.now(UTC) + timedelta(days=1))
        payload["scheduleSettings"]["platforms"] = []

        response = await async_client.post("/content/schedule", headers=auth_headers, json=payload)

        assert response.status_code == 400

    async def test_invalid_type(self, async_client: AsyncClient, auth_headers: dict):
        payload = _payload(datetime.now(UTC) + timedelta(days=1), type="newsletter")

        response = await async_client.post("/content/schedule", headers=auth_headers, json=payload)

        assert response.status_code == 400

    async def test_scheduled_content_is_listed_by_schedule(
        self, async_client: AsyncClient, auth_headers: dict
    ):
        now = datetime.now(UTC)
        late = await async_client.post(
            "/content/schedule", headers=auth_headers, json=_payload(now + timedelta(days=5))
        )
        early = await async_client.post(
            "/content/schedule", headers=auth_headers, json=_payload(now + timedelta(days=1))
        )

        response = await async_client.get("/content?status=scheduled&sort=scheduled", headers=auth_headers)

        ids = [item["id"] for item in response.json()["data"]]
        assert ids == [early.json()["data"]["id"], late.json()["data"]["id"]]
