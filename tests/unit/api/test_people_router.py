"""Tests for the people API routes."""

import pytest

from linkportal.core.errors import LinkNotFoundError

VERSION = {"api-version": "2019-02-01"}


class TestApiVersion:
    @pytest.mark.asyncio
    async def test_missing_version(self, client) -> None:
        response = await client.get("/api/people/1001")

        assert response.status_code == 422
        assert response.json() == {
            "error": "This endpoint requires that an API Version be provided.",
            "status": 422,
        }

    @pytest.mark.asyncio
    async def test_retired_preview_version(self, client) -> None:
        response = await client.get(
            "/api/people/1001", params={"api-version": "2016-09-22_preview"}
        )

        assert response.status_code == 422
        assert "no longer supports the original preview version" in response.json()["error"]
        assert "2019-02-01" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_unsupported_version(self, client) -> None:
        response = await client.get("/api/people/1001", params={"api-version": "2030-01-01"})

        assert response.status_code == 422
        assert "does not support the API version" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_version_header(self, client, create_key) -> None:
        key = await create_key()

        response = await client.get(
            "/api/people/1001", headers={"api-version": "2017-03-08", "X-API-Key": key}
        )

        assert response.status_code == 200


class TestAuthorization:
    @pytest.mark.asyncio
    async def test_missing_key(self, client) -> None:
        response = await client.get("/api/people/1001", params=VERSION)

        assert response.status_code == 401
        assert response.json()["status"] == 401

    @pytest.mark.asyncio
    async def test_unknown_key(self, client) -> None:
        response = await client.get(
            "/api/people/1001", params=VERSION, headers={"X-API-Key": "lp_nope"}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_key_without_apis(self, client, create_key) -> None:
        key = await create_key(apis=())

        response = await client.get(
            "/api/people/1001", params=VERSION, headers={"X-API-Key": key}
        )

        assert response.status_code == 401
        assert response.json()["error"] == "The key is not authorized for specific APIs"

    @pytest.mark.asyncio
    async def test_read_only_key_cannot_unlink(self, client, create_key, operations) -> None:
        key = await create_key(apis=("people",))

        response = await client.delete(
            "/api/people/1001/link", params=VERSION, headers={"X-API-Key": key}
        )

        assert response.status_code == 401
        assert "unlink" in response.json()["error"]
        operations.link_provider.delete_link.assert_not_called()


class TestPeople:
    @pytest.mark.asyncio
    async def test_get_person(self, client, create_key) -> None:
        key = await create_key()

        response = await client.get(
            "/api/people/1001", params=VERSION, headers={"X-API-Key": key}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["github"] == {
            "id": "1001",
            "login": "jdoe",
            "avatar": "https://avatars.example/u/1001",
        }
        assert body["corporate"]["alias"] == "jdoe"
        assert body["corporate"]["userPrincipalName"] == "jdoe@contoso.com"
        assert body["warnings"] == []

    @pytest.mark.asyncio
    async def test_get_unknown_person(self, client, create_key, operations) -> None:
        operations.github.call.return_value = {}
        operations.link_provider.get_links.return_value = []
        key = await create_key()

        response = await client.get(
            "/api/people/4242", params=VERSION, headers={"X-API-Key": key}
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_organizations_are_scoped_to_key(
        self, client, create_key, operations, make_organization
    ) -> None:
        operations.organizations = [
            make_organization("contoso"),
            make_organization("fabrikam"),
            make_organization("northwind", state=None),
        ]
        key = await create_key(orgs="contoso")

        response = await client.get(
            "/api/people/1001/organizations", params=VERSION, headers={"X-API-Key": key}
        )

        assert response.status_code == 200
        assert response.json() == {"id": "1001", "login": "jdoe", "organizations": ["contoso"]}

    @pytest.mark.asyncio
    async def test_unlink(self, client, create_key, operations) -> None:
        key = await create_key()

        response = await client.delete(
            "/api/people/1001/link", params=VERSION, headers={"X-API-Key": key}
        )

        assert response.status_code == 200
        assert response.json() == {
            "history": ["The link for ID 1001 has been removed from the link service"]
        }
        operations.link_provider.delete_link.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unlink_without_link(self, client, create_key, operations) -> None:
        operations.link_provider.get_by_third_party_id.return_value = None
        key = await create_key()

        response = await client.delete(
            "/api/people/1001/link", params=VERSION, headers={"X-API-Key": key}
        )

        assert response.status_code == 404
        assert "No link is associated" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_unlink_failure_returns_history(self, client, create_key, operations) -> None:
        operations.link_provider.delete_link.side_effect = LinkNotFoundError("gone")
        key = await create_key()

        response = await client.delete(
            "/api/people/1001/link", params=VERSION, headers={"X-API-Key": key}
        )

        assert response.status_code == 404
        body = response.json()
        assert body["status"] == 404
        assert body["history"] == ["The link for ID 1001 no longer exists: gone"]

    @pytest.mark.asyncio
    async def test_terminate(self, client, create_key, operations, make_organization) -> None:
        operations.organizations = [make_organization("contoso")]
        key = await create_key()

        response = await client.post(
            "/api/people/1001/terminate",
            params=VERSION,
            headers={"X-API-Key": key},
            json={"reason": "left the company"},
        )

        assert response.status_code == 200
        assert response.json()["history"] == [
            "Removed jdoe from contoso",
            "The link for ID 1001 has been removed from the link service",
        ]

    @pytest.mark.asyncio
    async def test_terminate_halts_on_membership_error(
        self, client, create_key, operations, make_organization
    ) -> None:
        operations.organizations = [
            make_organization("contoso", remove_error=RuntimeError("rate limited"))
        ]
        key = await create_key()

        response = await client.post(
            "/api/people/1001/terminate",
            params=VERSION,
            headers={"X-API-Key": key},
            json={},
        )

        assert response.status_code == 500
        assert response.json()["history"] == [
            "Error while removing jdoe from contoso: rate limited"
        ]
        operations.link_provider.delete_link.assert_not_called()


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, client) -> None:
        response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
