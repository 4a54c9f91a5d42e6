"""
Integration tests for sponsors.
"""
import pytest
import pytest_asyncio
from fastapi import status

from flexhub.models import FeatureType


@pytest_asyncio.fixture
async def sponsor_site(site, enable_feature):
    await enable_feature(site, FeatureType.SPONSORS)
    return site


class TestSponsors:

    @pytest.mark.asyncio
    async def test_sponsor_lifecycle(self, async_client, sponsor_site, member, auth_headers):
        headers = auth_headers(member)
        created = await async_client.post(
            f"/api/sites/{sponsor_site.id}/sponsors",
            json={"name": "Acme", "url": "https://acme.example.com"},
            headers=headers,
        )
        assert created.status_code == status.HTTP_201_CREATED
        sponsor = created.json()
        assert sponsor["active"] is True

        updated = await async_client.put(
            f"/api/sites/{sponsor_site.id}/sponsors/{sponsor['id']}",
            json={"logo": "https://cdn.example.com/acme.png"},
            headers=headers,
        )
        assert updated.json()["logo"] == "https://cdn.example.com/acme.png"
        assert updated.json()["name"] == "Acme"

        deleted = await async_client.delete(
            f"/api/sites/{sponsor_site.id}/sponsors/{sponsor['id']}", headers=headers
        )
        assert deleted.status_code == status.HTTP_200_OK

        missing = await async_client.get(
            f"/api/sites/{sponsor_site.id}/sponsors/{sponsor['id']}", headers=headers
        )
        assert missing.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_public_sponsors_are_active_only(self, async_client, sponsor_site, member, auth_headers):
        headers = auth_headers(member)
        await async_client.post(f"/api/sites/{sponsor_site.id}/sponsors", json={"name": "Shown"}, headers=headers)
        await async_client.post(
            f"/api/sites/{sponsor_site.id}/sponsors",
            json={"name": "Hidden", "active": False},
            headers=headers,
        )

        admin_view = await async_client.get(f"/api/sites/{sponsor_site.id}/sponsors", headers=headers)
        public_view = await async_client.get(f"/api/public/sites/{sponsor_site.id}/sponsors")

        assert {s["name"] for s in admin_view.json()} == {"Shown", "Hidden"}
        assert [s["name"] for s in public_view.json()] == ["Shown"]
        assert "active" not in public_view.json()[0]
        assert public_view.headers["cache-control"].startswith("public, max-age=300")

    @pytest.mark.asyncio
    async def test_sponsor_of_another_site_is_not_found(
        self, async_client, sponsor_site, admin, make_site, enable_feature, auth_headers
    ):
        other = await make_site("Other Site", [admin])
        await enable_feature(other, FeatureType.SPONSORS)
        sponsor = (await async_client.post(
            f"/api/sites/{other.id}/sponsors", json={"name": "Elsewhere"}, headers=auth_headers(admin)
        )).json()

        response = await async_client.get(
            f"/api/sites/{sponsor_site.id}/sponsors/{sponsor['id']}", headers=auth_headers(admin)
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
