"""Integration tests for content listing, editing, versions and deletion."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from infrastructure.database.models import Content, ContentStatus, ContentVersion, User

pytestmark = pytest.mark.asyncio


async def _make_content(
    db_session: AsyncSession,
    user: User,
    body: str = "Original body",
    status: str = ContentStatus.DRAFT.value,
    scheduled_for: datetime | None = None,
    title: str = "A title",
) -> Content:
    content = Content(
        id=str(uuid4()),
        user_id=user.id,
        type="blog",
        title=title,
        body=body,
        status=status,
        scheduled_for=scheduled_for,
        current_version=1,
        content_metadata={"kind": "generation", "model": "claude-test", "settings": {}},
    )
    content.versions.append(
        ContentVersion(version=1, body=body, version_metadata={"source": "generation"})
    )
    db_session.add(content)
    await db_session.commit()
    return content


class TestListContent:

    async def test_only_own_content(
        self,
        async_client: AsyncClient,
        auth_headers: dict,
        test_user: User,
        other_user: User,
        db_session: AsyncSession,
    ):
        mine = await _make_content(db_session, test_user)
        await _make_content(db_session, other_user)

        response = await async_client.get("/content", headers=auth_headers)

        assert response.status_code == 200
        items = response.json()["data"]
        assert [item["id"] for item in items] == [mine.id]
        assert items[0]["versions"][0]["version"] == 1

    async def test_newest_first(
        self, async_client: AsyncClient, auth_headers: dict, test_user: User, db_session: AsyncSession
    ):
        first = await _make_content(db_session, test_user, title="first")
        second = await _make_content(db_session, test_user, title="second")

        response = await async_client.get("/content", headers=auth_headers)

        assert [item["id"] for item in response.json()["data"]] == [second.id, first.id]

    async def test_status_filter(
        self, async_client: AsyncClient, auth_headers: dict, test_user: User, db_session: AsyncSession
    ):
        await _make_content(db_session, test_user)
        scheduled = await _make_content(
            db_session,
            test_user,
            status=ContentStatus.SCHEDULED.value,
            scheduled_for=datetime.now(UTC) + timedelta(days=1),
        )

        response = await async_client.get("/content?status=scheduled", headers=auth_headers)

        assert [item["id"] for item in response.json()["data"]] == [scheduled.id]

    async def test_invalid_status_filter(self, async_client: AsyncClient, auth_headers: dict):
        response = await async_client.get("/content?status=archived", headers=auth_headers)

        assert response.status_code == 400

    async def test_sort_by_schedule(
        self, async_client: AsyncClient, auth_headers: dict, test_user: User, db_session: AsyncSession
    ):
        now = datetime.now(UTC)
        draft = await _make_content(db_session, test_user, title="draft")
        later = await _make_content(
            db_session, test_user, status="scheduled", scheduled_for=now + timedelta(days=3)
        )
        sooner = await _make_content(
            db_session, test_user, status="scheduled", scheduled_for=now + timedelta(days=1)
        )

        response = await async_client.get("/content?sort=scheduled", headers=auth_headers)

        assert [item["id"] for item in response.json()["data"]] == [sooner.id, later.id, draft.id]


class TestGetContent:

    async def test_get_own(
        self, async_client: AsyncClient, auth_headers: dict, test_user: User, db_session: AsyncSession
    ):
        content = await _make_content(db_session, test_user)

        response = await async_client.get(f"/content/{content.id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["data"]["content"] == "Original body"

    async def test_not_found_cases_are_identical(
        self,
        async_client: AsyncClient,
        auth_headers: dict,
        other_user: User,
        db_session: AsyncSession,
    ):
        foreign = await _make_content(db_session, other_user)

        responses = [
            await async_client.get(f"/content/{foreign.id}", headers=auth_headers),
            await async_client.get(f"/content/{uuid4()}", headers=auth_headers),
            await async_client.get("/content/not-a-uuid", headers=auth_headers),
        ]

        for response in responses:
            assert response.status_code == 404
            assert response.json() == {
                "status": "error",
                "message": "Content not found",
                "code": "not_found",
            }


class TestUpdateContent:

    async def test_each_edit_appends_a_version(
        self, async_client: AsyncClient, auth_headers: dict, test_user: User, db_session: AsyncSession
    ):
        content = await _make_content(db_session, test_user)

        for text in ("second", "third"):
            response = await async_client.put(
                f"/content/{content.id}", headers=auth_headers, json={"content": text}
            )
            assert response.status_code == 200

        data = response.json()["data"]
        assert data["content"] == "third"
        assert data["currentVersion"] == 3
        assert [v["version"] for v in data["versions"]] == [3, 2, 1]
        assert [v["content"] for v in data["versions"]] == ["third", "second", "Original body"]

    async def test_update_title(
        self, async_client: AsyncClient, auth_headers: dict, test_user: User, db_session: AsyncSession
    ):
        content = await _make_content(db_session, test_user)

        response = await async_client.put(
            f"/content/{content.id}",
            headers=auth_headers,
            json={"content": "new body", "title": "New title"},
        )

        assert response.json()["data"]["title"] == "New title"

    async def test_empty_body_rejected(
        self, async_client: AsyncClient, auth_headers: dict, test_user: User, db_session: AsyncSession
    ):
        content = await _make_content(db_session, test_user)

        response = await async_client.put(
            f"/content/{content.id}", headers=auth_headers, json={"content": "   "}
        )

        assert response.status_code == 400

    async def test_cannot_edit_others_content(
        self,
        async_client: AsyncClient,
        auth_headers: dict,
        other_user: User,
        db_session: AsyncSession,
    ):
        foreign = await _make_content(db_session, other_user)
        foreign_id = foreign.id

        response = await async_client.put(
            f"/content/{foreign_id}", headers=auth_headers, json={"content": "hijack"}
        )

        assert response.status_code == 404
        count = (
            await db_session.execute(
                select(func.count()).select_from(ContentVersion).where(ContentVersion.content_id == foreign_id)
            )
        ).scalar_one()
        assert count == 1


class TestVersions:

    async def test_list_and_get_version(
        self, async_client: AsyncClient, auth_headers: dict, test_user: User, db_session: AsyncSession
    ):
        content = await _make_content(db_session, test_user)
        await async_client.put(f"/content/{content.id}", headers=auth_headers, json={"content": "v2"})

        listed = await async_client.get(f"/content/{content.id}/versions", headers=auth_headers)
        single = await async_client.get(f"/content/{content.id}/versions/1", headers=auth_headers)
        missing = await async_client.get(f"/content/{content.id}/versions/9", headers=auth_headers)

        assert [v["version"] for v in listed.json()["data"]] == [2, 1]
        assert single.json()["data"]["content"] == "Original body"
        assert missing.status_code == 404

    async def test_restore_appends_new_version(
        self, async_client: AsyncClient, auth_headers: dict, test_user: User, db_session: AsyncSession
    ):
        content = await _make_content(db_session, test_user)
        await async_client.put(f"/content/{content.id}", headers=auth_headers, json={"content": "v2"})

        response = await async_client.post(
            f"/content/{content.id}/versions/1/restore", headers=auth_headers
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["content"] == "Original body"
        assert data["currentVersion"] == 3
        newest = data["versions"][0]
        assert newest["version"] == 3
        assert newest["metadata"]["source"] == "restore"
        assert newest["metadata"]["restoredFrom"] == 1


class TestDeleteContent:

    async def test_delete_cascades_versions(
        self, async_client: AsyncClient, auth_headers: dict, test_user: User, db_session: AsyncSession
    ):
        content = await _make_content(db_session, test_user)
        await async_client.put(f"/content/{content.id}", headers=auth_headers, json={"content": "v2"})
        content_id = content.id

        response = await async_client.delete(f"/content/{content_id}", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["data"] == {"id": content_id}
        remaining = (
            await db_session.execute(
                select(func.count()).select_from(ContentVersion).where(ContentVersion.content_id == content_id)
            )
        ).scalar_one()
        assert remaining == 0

        again = await async_client.get(f"/content/{content_id}", headers=auth_headers)
        assert again.status_code == 404

    async def test_cannot_delete_others_content(
        self,
        async_client: AsyncClient,
        auth_headers: dict,
        other_user: User,
        db_session: AsyncSession,
    ):
        foreign = await _make_content(db_session, other_user)

        response = await async_client.delete(f"/content/{foreign.id}", headers=auth_headers)

        assert response.status_code == 404
        assert await db_session.get(Content, foreign.id) is not None
