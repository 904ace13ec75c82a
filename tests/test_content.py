#!/usr/bin/env python3
"""
Tests for site content: notices, doctors, about page, photos, cases, FAQs,
reviews, the home summary and the contact form.
"""

import pytest

PNG = ("photo.png", b"\x89PNG-data", "image/png")


@pytest.mark.integration
class TestNotices:
    async def test_admin_crud_and_public_read(self, client, admin_headers):
        created = await client.post(
            "/api/admin/notices",
            data={"title": "Holiday hours", "content": "Closed on the 15th", "category": "hours"},
            headers=admin_headers,
        )
        assert created.status_code == 201
        notice_id = created.json()["id"]

        public = await client.get(f"/api/notices/{notice_id}")
        assert public.json()["title"] == "Holiday hours"

        updated = await client.put(
            f"/api/admin/notices/{notice_id}",
            data={"title": "Holiday hours (updated)", "content": "Closed on the 16th", "category": "hours"},
            headers=admin_headers,
        )
        assert updated.json()["title"] == "Holiday hours (updated)"

        deleted = await client.delete(f"/api/admin/notices/{notice_id}", headers=admin_headers)
        assert deleted.status_code == 204
        assert (await client.get(f"/api/notices/{notice_id}")).status_code == 404

    async def test_update_keeps_existing_image(self, client, admin_headers):
        created = (
            await client.post(
                "/api/admin/notices",
                data={"title": "With image", "content": "body"},
                files={"image": PNG},
                headers=admin_headers,
            )
        ).json()

        updated = await client.put(
            f"/api/admin/notices/{created['id']}",
            data={"title": "With image", "content": "new body", "existingImageData": created["imageData"]},
            headers=admin_headers,
        )

        assert updated.json()["imageData"] == created["imageData"]

    async def test_category_filter(self, client, admin_headers):
        for title, category in (("A", "event"), ("B", "event"), ("C", "hours")):
            await client.post(
                "/api/admin/notices", data={"title": title, "content": "x", "category": category}, headers=admin_headers
            )

        events = (await client.get("/api/notices", params={"category": "event"})).json()
        everything = (await client.get("/api/notices", params={"category": "all"})).json()

        assert events["totalItems"] == 2
        assert everything["totalItems"] == 3


@pytest.mark.integration
class TestDoctorsAndAbout:
    async def test_doctor_lifecycle(self, client, admin_headers):
        created = await client.post(
            "/api/admin/doctors",
            data={"name": "Dr. Han", "position": "Orthodontist", "history": "15 years"},
            headers=admin_headers,
        )
        assert created.status_code == 201

        doctors = (await client.get("/api/doctors")).json()
        assert [d["name"] for d in doctors] == ["Dr. Han"]

        doctor_id = created.json()["id"]
        assert (await client.delete(f"/api/admin/doctors/{doctor_id}", headers=admin_headers)).status_code == 204
        assert (await client.get("/api/doctors")).json() == []

    async def test_about_is_seeded(self, client):
        response = await client.get("/api/about")

        assert response.status_code == 200
        assert response.json()["id"] == 1

    async def test_about_update(self, client, admin_headers):
        response = await client.put(
            "/api/admin/about",
            json={"title": "Our story", "subtitle": "Since 1998", "content": "Family dentistry"},
            headers=admin_headers,
        )
        assert response.status_code == 200

        about = (await client.get("/api/about")).json()
        assert about["title"] == "Our story"
        assert about["content"] == "Family dentistry"


@pytest.mark.integration
class TestGallery:
    async def test_clinic_photos_append_in_order(self, client, admin_headers):
        first = await client.post("/api/admin/clinic-photos", data={"caption": "Lobby"}, files={"image": PNG}, headers=admin_headers)
        second = await client.post("/api/admin/clinic-photos", data={"caption": "Room"}, files={"image": PNG}, headers=admin_headers)

        assert first.status_code == 201
        assert second.json()["displayOrder"] > first.json()["displayOrder"]

        page = (await client.get("/api/clinic-photos")).json()
        assert page["totalItems"] == 2
        assert [p["caption"] for p in page["items"]] == ["Lobby", "Room"]

    async def test_clinic_photo_requires_image(self, client, admin_headers):
        response = await client.post("/api/admin/clinic-photos", data={"caption": "Empty"}, headers=admin_headers)
        assert response.status_code == 400

    async def test_caption_update(self, client, admin_headers):
        photo = (
            await client.post("/api/admin/clinic-photos", data={"caption": "Old"}, files={"image": PNG}, headers=admin_headers)
        ).json()

        response = await client.put(
            f"/api/admin/clinic-photos/{photo['id']}", json={"caption": "New"}, headers=admin_headers
        )

        assert response.json()["caption"] == "New"

    async def test_cases_with_before_and_after(self, client, admin_headers):
        created = await client.post(
            "/api/admin/cases",
            data={"title": "Whitening", "category": "cosmetic", "description": "Two sessions"},
            files={"beforeImage": PNG, "afterImage": PNG},
            headers=admin_headers,
        )
        assert created.status_code == 201
        data = created.json()
        assert data["beforeImageData"].startswith("data:image/png;base64,")
        assert data["afterImageData"].startswith("data:image/png;base64,")

        cosmetic = (await client.get("/api/cases", params={"category": "cosmetic"})).json()
        other = (await client.get("/api/cases", params={"category": "implant"})).json()
        assert cosmetic["totalItems"] == 1
        assert other["totalItems"] == 0


@pytest.mark.integration
class TestFaqs:
    async def test_search(self, client, admin_headers):
        await client.post(
            "/api/admin/faqs",
            data={"category": "billing", "question": "Do you take insurance?", "answer": "Yes"},
            headers=admin_headers,
        )
        await client.post(
            "/api/admin/faqs",
            data={"category": "care", "question": "How often to floss?", "answer": "Daily"},
            headers=admin_headers,
        )

        assert len((await client.get("/api/faqs")).json()) == 2
        found = (await client.get("/api/faqs", params={"search": "insurance"})).json()
        assert [f["category"] for f in found] == ["billing"]


@pytest.mark.integration
class TestReviews:
    async def test_only_approved_reviews_are_public(self, client, admin_headers):
        created = await client.post(
            "/api/reviews", data={"patientName": "Lee", "rating": "5", "content": "Painless!"}
        )
        assert created.status_code == 201
        review_id = created.json()["id"]
        assert created.json()["isApproved"] is False

        assert (await client.get("/api/reviews")).json()["totalItems"] == 0

        await client.put(f"/api/admin/reviews/{review_id}/approve", json={"isApproved": True}, headers=admin_headers)
        replied = await client.post(
            f"/api/admin/reviews/{review_id}/reply", json={"reply": "Thank you!"}, headers=admin_headers
        )
        assert replied.json()["adminReply"] == "Thank you!"

        public = (await client.get("/api/reviews")).json()
        assert public["totalItems"] == 1
        assert public["items"][0]["adminReply"] == "Thank you!"

    @pytest.mark.parametrize("rating", ["0", "6"])
    async def test_rating_out_of_range(self, client, rating):
        response = await client.post("/api/reviews", data={"patientName": "Lee", "rating": rating, "content": "x"})
        assert response.status_code == 422


@pytest.mark.integration
class TestHomeAndContact:
    async def test_home_summary(self, client, admin_headers):
        for i in range(4):
            await client.post("/api/admin/notices", data={"title": f"N{i}", "content": "x"}, headers=admin_headers)

        summary = (await client.get("/api/home-summary")).json()

        assert len(summary["notices"]) == 3
        assert summary["notices"][0]["title"] == "N3"
        assert summary["cases"] == []
        assert summary["reviews"] == []

    async def test_contact_message(self, client):
        response = await client.post(
            "/api/contact", json={"name": "Choi", "email": "choi@example.com", "message": "Do you open Saturdays?"}
        )

        assert response.status_code == 201
        assert response.json()["success"] is True

    async def test_contact_requires_message(self, client):
        response = await client.post("/api/contact", json={"name": "Choi", "email": "choi@example.com", "message": ""})
        assert response.status_code == 422
