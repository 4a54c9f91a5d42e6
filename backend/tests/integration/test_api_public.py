"""
Integration tests for the public API, its CORS policy and health checks.
"""
import uuid

import pytest
from fastapi import status

from flexhub.models import FeatureType


class TestPublicSites:

    @pytest.mark.asyncio
    async def test_sites_list_enabled_features_only(self, async_client, site, enable_feature):
        await enable_feature(site, FeatureType.JOB_BOARD)
        await enable_feature(site, FeatureType.SPONSORS, enabled=False)

        response = await async_client.get("/api/public/sites")

        assert response.status_code == status.HTTP_200_OK
        assert response.headers["cache-control"] == "public, max-age=600, stale-while-revalidate=300"
        data = response.json()
        assert data["count"] == 1
        assert data["lastUpdated"]
        assert [f["type"] for f in data["sites"][0]["features"]] == ["JOB_BOARD"]
        assert "users" not in data["sites"][0]

    @pytest.mark.asyncio
    async def test_unknown_site_is_404(self, async_client):
        response = await async_client.get(f"/api/public/sites/{uuid.uuid4()}/sponsors")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_disabled_feature_is_403(self, async_client, site):
        response = await async_client.get(f"/api/public/sites/{site.id}/job-board")

        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestPublicJobBoard:

    @pytest.mark.asyncio
    async def test_only_active_listings_of_active_companies(
        self, async_client, site, member, enable_feature, auth_headers
    ):
        await enable_feature(site, FeatureType.JOB_BOARD)
        headers = auth_headers(member)
        base = f"/api/sites/{site.id}"
        acme = (await async_client.post(f"{base}/companies", json={"name": "Acme"}, headers=headers)).json()
        globex = (await async_client.post(f"{base}/companies", json={"name": "Globex"}, headers=headers)).json()

        async def listing(company, **fields):
            body = {
                "title": "Engineer",
                "description": "Build things",
                "jobType": "FULL_TIME",
                "companyId": company["id"],
                **fields,
            }
            response = await async_client.post(f"{base}/job-listings", json=body, headers=headers)
            assert response.status_code == status.HTTP_201_CREATED

        await listing(acme, location="Berlin", remoteWorkType="HYBRID", salaryMin=60000, salaryMax=80000)
        await listing(acme, title="Intern", status="FILLED")
        await listing(globex, location="Paris", jobType="CONTRACT")
        await async_client.put(f"{base}/companies/{globex['id']}", json={"isActive": False}, headers=headers)

        response = await async_client.get(f"/api/public/sites/{site.id}/job-board")

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert [l["company"]["name"] for l in data["jobListings"]] == ["Acme"]
        assert data["pagination"]["total"] == 1
        assert [c["name"] for c in data["filters"]["companies"]] == ["Acme"]
        assert "HYBRID" in data["filters"]["remoteWorkTypes"]
        assert response.headers["cache-control"] == "public, max-age=300, stale-while-revalidate=150"

    @pytest.mark.asyncio
    async def test_salary_filters_match_overlapping_ranges(
        self, async_client, site, member, enable_feature, auth_headers
    ):
        await enable_feature(site, FeatureType.JOB_BOARD)
        headers = auth_headers(member)
        base = f"/api/sites/{site.id}"
        company = (await async_client.post(f"{base}/companies", json={"name": "Acme"}, headers=headers)).json()
        await async_client.post(
            f"{base}/job-listings",
            json={
                "title": "Engineer",
                "description": "Build things",
                "jobType": "FULL_TIME",
                "companyId": company["id"],
                "salaryMin": 60000,
                "salaryMax": 80000,
            },
            headers=headers,
        )

        overlapping = await async_client.get(
            f"/api/public/sites/{site.id}/job-board", params={"salaryMin": 75000}
        )
        above = await async_client.get(
            f"/api/public/sites/{site.id}/job-board", params={"salaryMin": 90000}
        )
        below = await async_client.get(
            f"/api/public/sites/{site.id}/job-board", params={"salaryMax": 50000}
        )

        assert overlapping.json()["pagination"]["total"] == 1
        assert above.json()["pagination"]["total"] == 0
        assert below.json()["pagination"]["total"] == 0


class TestPublicCORS:

    @pytest.mark.asyncio
    async def test_preflight_from_any_origin(self, async_client):
        response = await async_client.options(
            "/api/public/sites",
            headers={
                "Origin": "https://some-site.example.org",
                "Access-Control-Request-Method": "GET",
            },
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.headers["access-control-allow-origin"] == "*"
        assert "GET" in response.headers["access-control-allow-methods"]

    @pytest.mark.asyncio
    async def test_public_response_allows_any_origin(self, async_client):
        response = await async_client.get(
            "/api/public/sites", headers={"Origin": "https://some-site.example.org"}
        )

        assert response.headers["access-control-allow-origin"] == "*"
        assert "access-control-allow-credentials" not in response.headers

    @pytest.mark.asyncio
    async def test_admin_api_keeps_configured_origins(self, async_client):
        response = await async_client.get(
            "/api/features/definitions", headers={"Origin": "https://some-site.example.org"}
        )

        assert "access-control-allow-origin" not in response.headers

        allowed = await async_client.get(
            "/api/features/definitions", headers={"Origin": "http://admin.example.com"}
        )
        assert allowed.headers["access-control-allow-origin"] == "http://admin.example.com"


class TestHealth:

    @pytest.mark.asyncio
    async def test_liveness(self, async_client):
        response = await async_client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "healthy"

    @pytest.mark.asyncio
    async def test_readiness_checks_database(self, async_client):
        response = await async_client.get("/api/health")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "healthy"
