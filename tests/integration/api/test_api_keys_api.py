"""Integration tests for API key administration"""

import pytest
from httpx import AsyncClient

from config import ApplicationConfig

API_KEYS = f"{ApplicationConfig.API_PREFIX}/admin/api-keys"


class TestApiKeysAPI:

    @pytest.mark.asyncio
    async def test_create_verify_revoke(
        self, client: AsyncClient, super_admin_user, organization, auth_headers
    ):
        headers = await auth_headers(super_admin_user)

        created = await client.post(
            API_KEYS,
            json={"name": "Reporting", "scope": "org", "organization_id": organization.id, "key_prefix": "reports"},
            headers=headers,
        )

        assert created.status_code == 201
        full_key = created.json()["api_key"]
        assert full_key.startswith("sk_live_reports_")
        assert created.json()["key"]["key_id"].endswith("****")

        verified = await client.get(f"{API_KEYS}/verify", headers={"X-API-Key": full_key})

        assert verified.status_code == 200
        assert verified.json()["organization_id"] == organization.id
        assert verified.json()["permissions"] == "read"

        listed = await client.get(API_KEYS, headers=headers)
        assert listed.json()["total"] == 1
        assert "api_key" not in listed.json()["keys"][0]

        revoked = await client.post(f"{API_KEYS}/{created.json()['key']['id']}/revoke", headers=headers)
        assert revoked.json()["status"] == "revoked"

        rejected = await client.get(f"{API_KEYS}/verify", headers={"X-API-Key": full_key})
        assert rejected.status_code == 401

    @pytest.mark.asyncio
    async def test_org_admin_cannot_manage_keys(self, client: AsyncClient, admin_user, auth_headers):
        headers = await auth_headers(admin_user)

        response = await client.post(API_KEYS, json={"name": "Mine", "scope": "global"}, headers=headers)

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_verify_without_key(self, client: AsyncClient):
        response = await client.get(f"{API_KEYS}/verify")

        assert response.status_code == 401
