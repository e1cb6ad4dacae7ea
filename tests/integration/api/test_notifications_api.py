"""Integration tests for Notifications API."""

import pytest
from httpx import AsyncClient

from domain.entities.principal import Principal


@pytest.fixture
def fan(make_principal) -> Principal:
    return make_principal(name="Fan", email="fan@example.com")


@pytest.fixture
async def followed(
    authenticated_client: AsyncClient,
    anon_client: AsyncClient,
    make_headers,
    fan: Principal,
    test_principal: Principal,
) -> None:
    """The test user exists and ``fan`` follows them."""
    await authenticated_client.get("/api/v1/me")
    await anon_client.post(
        f"/api/v1/follows/{test_principal.principal_id}", headers=make_headers(fan)
    )


class TestNotificationFeed:
    @pytest.mark.asyncio
    async def test_follow_creates_notification_with_sender(
        self, authenticated_client: AsyncClient, followed: None, fan: Principal
    ) -> None:
        response = await authenticated_client.get("/api/v1/notifications")

        assert response.status_code == 200
        payload = response.json()
        assert payload["meta"]["unread_count"] == 1
        (item,) = payload["data"]
        assert item["kind"] == "follow"
        assert item["is_read"] is False
        assert item["sender"]["id"] == str(fan.principal_id)
        assert item["sender"]["handle"] == "fan"

    @pytest.mark.asyncio
    async def test_refollow_inside_window_is_deduplicated(
        self,
        authenticated_client: AsyncClient,
        anon_client: AsyncClient,
        make_headers,
        followed: None,
        fan: Principal,
        test_principal: Principal,
    ) -> None:
        target = f"/api/v1/follows/{test_principal.principal_id}"
        await anon_client.delete(target, headers=make_headers(fan))
        await anon_client.post(target, headers=make_headers(fan))

        response = await authenticated_client.get("/api/v1/notifications/unread-count")

        assert response.json() == {"count": 1}

    @pytest.mark.asyncio
    async def test_requires_login(self, anon_client: AsyncClient) -> None:
        response = await anon_client.get("/api/v1/notifications")

        assert response.status_code == 401


class TestMarkRead:
    @pytest.mark.asyncio
    async def test_mark_one_read(
        self, authenticated_client: AsyncClient, followed: None
    ) -> None:
        feed = await authenticated_client.get("/api/v1/notifications")
        notification_id = feed.json()["data"][0]["id"]

        response = await authenticated_client.patch(
            f"/api/v1/notifications/{notification_id}/read"
        )

        assert response.status_code == 204
        unread = await authenticated_client.get("/api/v1/notifications?unread_only=true")
        assert unread.json()["data"] == []

    @pytest.mark.asyncio
    async def test_only_recipient_can_mark_read(
        self,
        authenticated_client: AsyncClient,
        anon_client: AsyncClient,
        make_headers,
        followed: None,
        fan: Principal,
    ) -> None:
        feed = await authenticated_client.get("/api/v1/notifications")
        notification_id = feed.json()["data"][0]["id"]

        response = await anon_client.patch(
            f"/api/v1/notifications/{notification_id}/read", headers=make_headers(fan)
        )

        assert response.status_code == 404
        assert response.json()["error_code"] == "NOTIFICATION_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_mark_all_read(
        self, authenticated_client: AsyncClient, followed: None
    ) -> None:
        response = await authenticated_client.post("/api/v1/notifications/read-all")

        assert response.json() == {"count": 1}
        count = await authenticated_client.get("/api/v1/notifications/unread-count")
        assert count.json() == {"count": 0}
