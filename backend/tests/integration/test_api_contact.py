"""
Integration tests for contact forms and submissions.
"""
import pytest
import pytest_asyncio
from fastapi import status
from sqlalchemy import update

from flexhub.models import FeatureType, SiteFeature

FIELDS = [
    {"fieldName": "name", "fieldLabel": "Name", "isRequired": True},
    {"fieldName": "email", "fieldLabel": "Email", "fieldType": "EMAIL", "isRequired": True},
    {"fieldName": "message", "fieldLabel": "Message", "fieldType": "TEXTAREA"},
]


@pytest_asyncio.fixture
async def contact_site(site, enable_feature):
    await enable_feature(site, FeatureType.CONTACT_MANAGEMENT)
    return site


@pytest_asyncio.fixture
async def contact_form(async_client, contact_site, member, auth_headers):
    response = await async_client.post(
        f"/api/sites/{contact_site.id}/contact-form",
        json={"name": "Get in touch", "fields": FIELDS},
        headers=auth_headers(member),
    )
    assert response.status_code == status.HTTP_201_CREATED
    return response.json()["contactForm"]


class TestContactForm:

    @pytest.mark.asyncio
    async def test_form_is_null_until_created(self, async_client, contact_site, member, auth_headers):
        response = await async_client.get(
            f"/api/sites/{contact_site.id}/contact-form", headers=auth_headers(member)
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["contactForm"] is None

    @pytest.mark.asyncio
    async def test_created_form_orders_fields(self, contact_form):
        assert [f["fieldName"] for f in contact_form["fields"]] == ["name", "email", "message"]
        assert [f["sortOrder"] for f in contact_form["fields"]] == [0, 1, 2]

    @pytest.mark.asyncio
    async def test_second_form_is_rejected(
        self, async_client, contact_site, contact_form, member, auth_headers
    ):
        response = await async_client.post(
            f"/api/sites/{contact_site.id}/contact-form",
            json={"fields": FIELDS},
            headers=auth_headers(member),
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Contact form already exists for this site"

    @pytest.mark.asyncio
    async def test_update_without_form_is_404(self, async_client, contact_site, member, auth_headers):
        response = await async_client.put(
            f"/api/sites/{contact_site.id}/contact-form",
            json={"name": "Nothing here"},
            headers=auth_headers(member),
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_fields_are_replaced_not_merged(self, async_client, contact_site, member, auth_headers):
        headers = auth_headers(member)
        await async_client.post(
            f"/api/sites/{contact_site.id}/contact-form",
            json={"fields": [
                {"fieldName": "a", "fieldLabel": "A"},
                {"fieldName": "b", "fieldLabel": "B"},
            ]},
            headers=headers,
        )

        response = await async_client.put(
            f"/api/sites/{contact_site.id}/contact-form",
            json={"fields": [{"fieldName": "c", "fieldLabel": "C"}]},
            headers=headers,
        )
        assert response.status_code == status.HTTP_200_OK
        assert [f["fieldName"] for f in response.json()["contactForm"]["fields"]] == ["c"]

        current = await async_client.get(f"/api/sites/{contact_site.id}/contact-form", headers=headers)
        assert [f["fieldName"] for f in current.json()["contactForm"]["fields"]] == ["c"]

    @pytest.mark.asyncio
    async def test_replacing_fields_drops_their_submission_values(
        self, async_client, contact_site, contact_form, member, auth_headers
    ):
        headers = auth_headers(member)
        await async_client.post(
            f"/api/public/sites/{contact_site.id}/contact",
            json={"data": {"name": "Ada", "email": "ada@example.com"}},
        )

        await async_client.put(
            f"/api/sites/{contact_site.id}/contact-form",
            json={"fields": [{"fieldName": "topic", "fieldLabel": "Topic"}]},
            headers=headers,
        )

        listed = await async_client.get(f"/api/sites/{contact_site.id}/contact-submissions", headers=headers)
        assert listed.json()["pagination"]["total"] == 1
        assert listed.json()["submissions"][0]["data"] == []

    @pytest.mark.asyncio
    async def test_contact_endpoints_need_the_feature(self, async_client, site, member, auth_headers):
        response = await async_client.get(f"/api/sites/{site.id}/contact-form", headers=auth_headers(member))

        assert response.status_code == status.HTTP_403_FORBIDDEN


class TestPublicSubmit:

    @pytest.mark.asyncio
    async def test_missing_required_fields_are_listed(self, async_client, contact_site, contact_form):
        response = await async_client.post(
            f"/api/public/sites/{contact_site.id}/contact",
            json={"data": {"name": "  ", "message": "Hello"}},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["missingFields"] == ["Name", "Email"]

    @pytest.mark.asyncio
    async def test_submission_records_client_and_values(
        self, async_client, contact_site, contact_form, member, auth_headers
    ):
        response = await async_client.post(
            f"/api/public/sites/{contact_site.id}/contact",
            json={"data": {"message": "x" * 6000, "name": "Ada", "email": "ada@example.com"}},
            headers={"x-forwarded-for": "203.0.113.7, 10.0.0.1", "user-agent": "pytest-agent"},
        )
        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["success"] is True

        listed = await async_client.get(
            f"/api/sites/{contact_site.id}/contact-submissions", headers=auth_headers(member)
        )
        submission = listed.json()["submissions"][0]
        assert submission["submitterIp"] == "203.0.113.7"
        assert submission["submitterUserAgent"] == "pytest-agent"
        assert submission["isRead"] is False
        assert [v["field"]["fieldName"] for v in submission["data"]] == ["name", "email", "message"]
        assert len(submission["data"][2]["value"]) == 5000

    @pytest.mark.asyncio
    async def test_inactive_form_is_not_available(
        self, async_client, contact_site, contact_form, member, auth_headers
    ):
        await async_client.put(
            f"/api/sites/{contact_site.id}/contact-form",
            json={"isActive": False},
            headers=auth_headers(member),
        )

        response = await async_client.post(
            f"/api/public/sites/{contact_site.id}/contact",
            json={"data": {"name": "Ada", "email": "ada@example.com"}},
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Contact form not available"

    @pytest.mark.asyncio
    async def test_active_form_accepts_submissions_without_the_feature(
        self, async_client, contact_site, contact_form, db_session
    ):
        await db_session.execute(
            update(SiteFeature)
            .where(SiteFeature.site_id == contact_site.id)
            .values(is_enabled=False)
        )
        await db_session.commit()

        response = await async_client.post(
            f"/api/public/sites/{contact_site.id}/contact",
            json={"data": {"name": "Ada", "email": "ada@example.com"}},
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["success"] is True


class TestSubmissions:

    @pytest.mark.asyncio
    async def test_mark_read_filter_and_delete(
        self, async_client, contact_site, contact_form, member, auth_headers
    ):
        headers = auth_headers(member)
        for name in ("Ada", "Grace"):
            await async_client.post(
                f"/api/public/sites/{contact_site.id}/contact",
                json={"data": {"name": name, "email": f"{name.lower()}@example.com"}},
            )
        listed = await async_client.get(f"/api/sites/{contact_site.id}/contact-submissions", headers=headers)
        first_id = listed.json()["submissions"][0]["id"]

        marked = await async_client.put(
            f"/api/sites/{contact_site.id}/contact-submissions/{first_id}",
            json={"isRead": True},
            headers=headers,
        )
        assert marked.json()["isRead"] is True

        unread = await async_client.get(
            f"/api/sites/{contact_site.id}/contact-submissions",
            params={"isRead": "false"},
            headers=headers,
        )
        assert unread.json()["pagination"]["total"] == 1

        deleted = await async_client.delete(
            f"/api/sites/{contact_site.id}/contact-submissions/{first_id}", headers=headers
        )
        assert deleted.status_code == status.HTTP_200_OK

        gone = await async_client.get(
            f"/api/sites/{contact_site.id}/contact-submissions/{first_id}", headers=headers
        )
        assert gone.status_code == status.HTTP_404_NOT_FOUND

    @pytest.mark.asyncio
    async def test_admin_view_spans_managed_sites(
        self, async_client, contact_site, contact_form, admin, super_admin, make_site, enable_feature,
        auth_headers,
    ):
        other = await make_site("Unmanaged Site")
        await enable_feature(other, FeatureType.CONTACT_MANAGEMENT)
        await async_client.post(
            f"/api/public/sites/{contact_site.id}/contact",
            json={"data": {"name": "Ada", "email": "ada@example.com"}},
        )

        as_admin = await async_client.get("/api/admin/contact-submissions", headers=auth_headers(admin))
        assert as_admin.status_code == status.HTTP_200_OK
        assert [s["name"] for s in as_admin.json()["sites"]] == ["Test Site"]
        assert as_admin.json()["sites"][0]["submissionCount"] == 1
        assert as_admin.json()["submissions"][0]["site"]["name"] == "Test Site"

        as_root = await async_client.get("/api/admin/contact-submissions", headers=auth_headers(super_admin))
        assert {s["name"] for s in as_root.json()["sites"]} == {"Test Site", "Unmanaged Site"}

    @pytest.mark.asyncio
    async def test_admin_view_is_closed_to_plain_users(self, async_client, member, auth_headers):
        response = await async_client.get("/api/admin/contact-submissions", headers=auth_headers(member))

        assert response.status_code == status.HTTP_403_FORBIDDEN
