"""
Integration tests for feature flags and the gating of optional modules.
"""
import pytest
from fastapi import status

from flexhub.models import FeatureType


class TestFeatureDefinitions:

    @pytest.mark.asyncio
    async def test_definitions_list_every_feature(self, async_client):
        response = await async_client.get("/api/features/definitions")

        assert response.status_code == status.HTTP_200_OK
        features = response.json()["features"]
        assert len(features) == len(FeatureType)
        job_board = next(f for f in features if f["value"] == "JOB_BOARD")
        assert job_board["label"] == "Job Board"


class TestSiteFeatures:

    @pytest.mark.asyncio
    async def test_super_admin_manages_features(self, async_client, site, super_admin, auth_headers):
        created = await async_client.post(
            f"/api/sites/{site.id}/features",
            json={"feature": "SPONSORS"},
            headers=auth_headers(super_admin),
        )
        assert created.status_code == status.HTTP_201_CREATED
        feature = created.json()
        assert feature["displayName"] == "Sponsors"
        assert feature["isEnabled"] is True

        duplicate = await async_client.post(
            f"/api/sites/{site.id}/features",
            json={"feature": "SPONSORS"},
            headers=auth_headers(super_admin),
        )
        assert duplicate.status_code == status.HTTP_409_CONFLICT

        toggled = await async_client.put(
            f"/api/sites/{site.id}/features/{feature['id']}",
            json={"isEnabled": False, "config": {"layout": "grid"}},
            headers=auth_headers(super_admin),
        )
        assert toggled.status_code == status.HTTP_200_OK
        assert toggled.json()["isEnabled"] is False
        assert toggled.json()["config"] == {"layout": "grid"}

        removed = await async_client.delete(
            f"/api/sites/{site.id}/features/{feature['id']}",
            headers=auth_headers(super_admin),
        )
        assert removed.status_code == status.HTTP_200_OK

        listed = await async_client.get(f"/api/sites/{site.id}/features", headers=auth_headers(super_admin))
        assert listed.json() == []

    @pytest.mark.asyncio
    async def test_admin_cannot_manage_features(self, async_client, site, admin, auth_headers):
        response = await async_client.post(
            f"/api/sites/{site.id}/features",
            json={"feature": "SPONSORS"},
            headers=auth_headers(admin),
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestFeatureGating:
    """Module endpoints answer 403 while their feature is off."""

    @pytest.mark.asyncio
    async def test_missing_feature_is_forbidden(self, async_client, site, member, auth_headers):
        response = await async_client.get(f"/api/sites/{site.id}/companies", headers=auth_headers(member))

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["detail"] == "Job Board feature is not enabled for this site"

    @pytest.mark.asyncio
    async def test_disabled_feature_is_forbidden(self, async_client, site, member, enable_feature, auth_headers):
        await enable_feature(site, FeatureType.SPONSORS, enabled=False)

        response = await async_client.get(f"/api/sites/{site.id}/sponsors", headers=auth_headers(member))

        assert response.status_code == status.HTTP_403_FORBIDDEN

    @pytest.mark.asyncio
    async def test_toggle_takes_effect_immediately(
        self, async_client, site, member, super_admin, enable_feature, auth_headers
    ):
        feature = await enable_feature(site, FeatureType.SPONSORS)
        assert (await async_client.get(
            f"/api/sites/{site.id}/sponsors", headers=auth_headers(member)
        )).status_code == status.HTTP_200_OK

        await async_client.put(
            f"/api/sites/{site.id}/features/{feature.id}",
            json={"isEnabled": False},
            headers=auth_headers(super_admin),
        )

        response = await async_client.get(f"/api/sites/{site.id}/sponsors", headers=auth_headers(member))
        assert response.status_code == status.HTTP_403_FORBIDDEN

    @pytest.mark.asyncio
    async def test_site_access_is_checked_before_feature(
        self, async_client, site, outsider, enable_feature, auth_headers
    ):
        await enable_feature(site, FeatureType.JOB_BOARD)

        response = await async_client.get(f"/api/sites/{site.id}/companies", headers=auth_headers(outsider))

        assert response.status_code == status.HTTP_404_NOT_FOUND
