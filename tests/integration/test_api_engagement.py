"""Integration tests for reviews, leads, ownership claims and featured requests."""

import pytest

CLAIM_MESSAGE = "I opened this bakery in 2015 and can send the lease and business registration documents."


@pytest.fixture
def bakery(make_business, owner_user):
    return make_business(title="Corner Bakery", owner=owner_user)


@pytest.fixture
def unclaimed(make_business):
    return make_business(title="Night Owl Cafe")


def _review(client, placeid, rating=5, **extra):
    body = {"rating": rating, "content": "Great bread.", "author_name": "Ann", "author_email": "ann@example.com"}
    body.update(extra)
    return client.post(f"/api/businesses/{placeid}/reviews", json=body)


class TestReviews:
    """Test review submission and moderation over HTTP."""

    def test_pending_until_approved(self, client, bakery, admin_headers):
        created = _review(client, bakery.placeid)
        assert created.status_code == 201
        assert created.json()["status"] == "pending"
        assert client.get(f"/api/businesses/{bakery.placeid}/reviews").json() == []

        review_id = created.json()["id"]
        approved = client.patch(f"/api/admin/reviews/{review_id}/approve", headers=admin_headers)
        assert approved.status_code == 200

        listed = client.get(f"/api/businesses/{bakery.placeid}/reviews").json()
        assert [r["id"] for r in listed] == [review_id]
        business = client.get(f"/api/businesses/{bakery.placeid}").json()
        assert business["total_reviews"] == 1
        assert business["average_rating"] == 5.0

    def test_rating_out_of_range(self, client, bakery):
        assert _review(client, bakery.placeid, rating=6).status_code == 400

    def test_logged_in_review(self, client, bakery, user_headers, regular_user):
        response = client.post(
            "/api/reviews",
            json={"business_id": bakery.placeid, "rating": 4, "content": "Nice."},
            headers=user_headers,
        )

        assert response.status_code == 201
        assert response.json()["user_id"] == regular_user.id

    def test_reject_with_notes(self, client, bakery, admin_headers):
        review_id = _review(client, bakery.placeid).json()["id"]

        response = client.patch(
            f"/api/admin/reviews/{review_id}/reject", json={"admin_notes": "Spam"}, headers=admin_headers
        )

        assert response.json()["status"] == "rejected"
        assert response.json()["admin_notes"] == "Spam"

    def test_pending_queue(self, client, bakery, admin_headers):
        _review(client, bakery.placeid)

        pending = client.get("/api/admin/reviews/pending", headers=admin_headers).json()

        assert len(pending) == 1
        assert pending[0]["business_title"] == "Corner Bakery"

    def test_mass_action_partial(self, client, bakery, admin_headers):
        review_id = _review(client, bakery.placeid).json()["id"]

        response = client.patch(
            "/api/admin/reviews/mass-action",
            json={"review_ids": [review_id, 999], "action": "approve"},
            headers=admin_headers,
        )

        assert response.status_code == 207
        assert response.json()["success"] == 1
        assert response.json()["errors"][0]["id"] == 999

    def test_mass_action_limit(self, client, admin_headers):
        response = client.patch(
            "/api/admin/reviews/mass-action",
            json={"review_ids": list(range(1, 52)), "action": "approve"},
            headers=admin_headers,
        )

        assert response.status_code == 400


class TestLeads:
    """Test lead capture and visibility."""

    def _send(self, client, placeid):
        return client.post(
            "/api/leads",
            json={
                "business_id": placeid,
                "sender_name": "Bob",
                "sender_email": "bob@example.com",
                "message": "Do you cater weddings?",
            },
        )

    def test_public_submission(self, client, bakery):
        response = self._send(client, bakery.placeid)

        assert response.status_code == 201
        assert response.json()["message"] == "Your message has been sent"

    def test_owner_sees_own_leads(self, client, bakery, unclaimed, owner_headers, admin_headers):
        lead_id = self._send(client, bakery.placeid).json()["lead_id"]
        self._send(client, unclaimed.placeid)

        owner_leads = client.get("/api/leads", headers=owner_headers).json()
        assert [lead["id"] for lead in owner_leads] == [lead_id]

        admin_leads = client.get("/api/leads", headers=admin_headers).json()
        assert [lead["business_id"] for lead in admin_leads] == [unclaimed.placeid]

        all_leads = client.get("/api/admin/leads", headers=admin_headers).json()
        assert len(all_leads) == 2

    def test_status_update_and_access(self, client, bakery, owner_headers, user_headers):
        lead_id = self._send(client, bakery.placeid).json()["lead_id"]

        forbidden = client.patch(f"/api/leads/{lead_id}/status", json={"status": "contacted"}, headers=user_headers)
        updated = client.patch(f"/api/leads/{lead_id}/status", json={"status": "contacted"}, headers=owner_headers)

        assert forbidden.status_code == 403
        assert updated.json()["status"] == "contacted"

    def test_admin_bulk_delete(self, client, bakery, admin_headers):
        lead_id = self._send(client, bakery.placeid).json()["lead_id"]

        response = client.post(
            "/api/admin/leads/bulk-delete", json={"lead_ids": [lead_id, 12345]}, headers=admin_headers
        )

        assert response.status_code == 207
        assert response.json()["success"] == 1

    def test_business_leads_for_owner_only(self, client, bakery, owner_headers, user_headers):
        lead_id = self._send(client, bakery.placeid).json()["lead_id"]

        owner_view = client.get(f"/api/businesses/{bakery.placeid}/leads", headers=owner_headers)
        stranger_view = client.get(f"/api/businesses/{bakery.placeid}/leads", headers=user_headers)

        assert [lead["id"] for lead in owner_view.json()] == [lead_id]
        assert stranger_view.status_code == 403


class TestClaims:
    """Test the ownership claim workflow."""

    def test_claim_and_approve(self, client, unclaimed, user_headers, admin_headers, regular_user):
        created = client.post(
            "/api/ownership-claims",
            json={"business_id": unclaimed.placeid, "message": CLAIM_MESSAGE},
            headers=user_headers,
        )
        assert created.status_code == 201

        claim_id = created.json()["id"]
        decided = client.patch(
            f"/api/admin/ownership-claims/{claim_id}", json={"status": "approved"}, headers=admin_headers
        )
        assert decided.json()["status"] == "approved"

        assert client.get(f"/api/businesses/{unclaimed.placeid}").json()["owner_id"] == regular_user.id
        assert client.get("/api/auth/user", headers=user_headers).json()["role"] == "business_owner"

    def test_short_message(self, client, unclaimed, user_headers):
        response = client.post(
            "/api/ownership-claims", json={"business_id": unclaimed.placeid, "message": "mine"}, headers=user_headers
        )

        assert response.status_code == 400

    def test_duplicate_claim(self, client, unclaimed, user_headers):
        body = {"business_id": unclaimed.placeid, "message": CLAIM_MESSAGE}
        client.post("/api/ownership-claims", json=body, headers=user_headers)

        assert client.post("/api/ownership-claims", json=body, headers=user_headers).status_code == 409

    def test_rejection_requires_message(self, client, unclaimed, user_headers, admin_headers):
        claim_id = client.post(
            "/api/ownership-claims",
            json={"business_id": unclaimed.placeid, "message": CLAIM_MESSAGE},
            headers=user_headers,
        ).json()["id"]

        response = client.patch(
            f"/api/admin/ownership-claims/{claim_id}", json={"status": "rejected"}, headers=admin_headers
        )

        assert response.status_code == 400
        mine = client.get("/api/my-ownership-claims", headers=user_headers).json()
        assert mine[0]["status"] == "pending"

    def test_revert_removes_ownership(self, client, unclaimed, user_headers, admin_headers):
        claim_id = client.post(
            "/api/ownership-claims",
            json={"business_id": unclaimed.placeid, "message": CLAIM_MESSAGE},
            headers=user_headers,
        ).json()["id"]
        client.patch(f"/api/admin/ownership-claims/{claim_id}", json={"status": "approved"}, headers=admin_headers)

        reverted = client.put(f"/api/admin/ownership-claims/{claim_id}/revert", headers=admin_headers)

        assert reverted.status_code == 200
        assert reverted.json()["status"] == "rejected"
        assert client.get(f"/api/businesses/{unclaimed.placeid}").json()["owner_id"] is None


class TestFeaturedRequests:
    """Test featured listing requests."""

    def test_request_and_approve(self, client, bakery, owner_headers, admin_headers, owner_user):
        created = client.post(
            "/api/featured-requests", json={"business_id": bakery.placeid}, headers=owner_headers
        )
        assert created.status_code == 201

        mine = client.get(f"/api/featured-requests/user/{owner_user.id}", headers=owner_headers).json()
        assert [r["id"] for r in mine] == [created.json()["id"]]

        client.patch(
            f"/api/admin/featured-requests/{created.json()['id']}", json={"status": "approved"}, headers=admin_headers
        )
        assert client.get(f"/api/businesses/{bakery.placeid}").json()["featured"] is True

    def test_non_owner_forbidden(self, client, bakery, user_headers):
        response = client.post("/api/featured-requests", json={"business_id": bakery.placeid}, headers=user_headers)

        assert response.status_code == 403

    def test_cannot_read_other_users_requests(self, client, owner_user, user_headers):
        response = client.get(f"/api/featured-requests/user/{owner_user.id}", headers=user_headers)

        assert response.status_code == 403
