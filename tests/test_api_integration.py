"""End-to-end tests through the HTTP API."""

from uuid import uuid4

import pytest

from tests.helpers import TEST_PASSWORD


def register(client, role, first_name, last_name, email):
    response = client.post("/auth/register", json={
        "email": email,
        "password": TEST_PASSWORD,
        "first_name": first_name,
        "last_name": last_name,
        "role": role,
    })
    assert response.status_code == 201, response.text
    body = response.json()
    return body["account"], {"Authorization": f"Bearer {body['access_token']}"}


def posting_body(**overrides):
    body = {
        "title": "Platform Engineer",
        "description": "Keep the hiring platform running.",
        "requirements": ["Python", "PostgreSQL"],
        "salary": {"min": 90000, "max": 120000, "currency": "usd"},
        "location": "Berlin",
        "type": "FULL_TIME",
        "department": "Engineering",
        "status": "OPEN",
    }
    body.update(overrides)
    return body


@pytest.fixture
def hr_user(client):
    return register(client, "HR", "Hana", "Reyes", "hana@acme.io")


@pytest.fixture
def candidate_user(client):
    return register(client, "CANDIDATE", "Carl", "Diaz", "carl@acme.io")


@pytest.fixture
def open_posting(client, hr_user):
    _, headers = hr_user
    response = client.post("/job-postings", json=posting_body(), headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestAuth:

    def test_login_and_me(self, client, candidate_user):
        account, _ = candidate_user

        response = client.post("/auth/login", json={"email": "CARL@acme.io", "password": TEST_PASSWORD})
        assert response.status_code == 200
        token = response.json()["access_token"]

        me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert me.status_code == 200
        assert me.json()["id"] == account["id"]
        assert me.json()["full_name"] == "Carl Diaz"
        assert "hashed_password" not in me.json()

    def test_wrong_password(self, client, candidate_user):
        response = client.post("/auth/login", json={"email": "carl@acme.io", "password": "nope-nope"})

        assert response.status_code == 401
        assert response.json() == {"error": {"code": "UNAUTHENTICATED", "message": "Invalid email or password"}}

    def test_missing_token_is_unauthenticated(self, client):
        response = client.get("/job-postings")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHENTICATED"

    def test_duplicate_registration_conflicts(self, client, candidate_user):
        response = client.post("/auth/register", json={
            "email": "carl@acme.io",
            "password": TEST_PASSWORD,
            "first_name": "Carl",
            "last_name": "Again",
            "role": "CANDIDATE",
        })

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CONFLICT"


class TestJobPostings:

    def test_invalid_salary_is_a_validation_error(self, client, hr_user):
        _, headers = hr_user

        response = client.post(
            "/job-postings",
            json=posting_body(salary={"min": 100, "max": 50}),
            headers=headers
        )

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert "Maximum salary must be greater than or equal to minimum salary" in error["message"]

    def test_candidates_see_only_open_postings(self, client, hr_user, candidate_user, open_posting):
        _, hr_headers = hr_user
        _, candidate_headers = candidate_user
        draft = client.post("/job-postings", json=posting_body(title="Secret", status="DRAFT"), headers=hr_headers).json()

        listed = client.get("/job-postings?status=DRAFT", headers=candidate_headers).json()
        assert [p["id"] for p in listed["items"]] == [open_posting["id"]]

        assert client.get(f"/job-postings/{draft['id']}", headers=candidate_headers).status_code == 404
        hr_view = client.get("/job-postings?status=DRAFT", headers=hr_headers).json()
        assert [p["id"] for p in hr_view["items"]] == [draft["id"]]

    def test_candidate_cannot_create_posting(self, client, candidate_user):
        _, headers = candidate_user

        response = client.post("/job-postings", json=posting_body(), headers=headers)

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "FORBIDDEN"

    def test_page_size_is_clamped(self, client, hr_user, open_posting):
        _, headers = hr_user

        page = client.get("/job-postings?limit=1000", headers=headers).json()

        assert page["limit"] == 50
        assert page["total"] == 1
        assert page["total_pages"] == 1


class TestHiringFlow:

    def test_application_to_interview(self, client, hr_user, candidate_user, open_posting):
        hr_account, hr_headers = hr_user
        _, candidate_headers = candidate_user

        applied = client.post(
            "/applications",
            json={"job_posting_id": open_posting["id"], "resume": "r.pdf"},
            headers=candidate_headers
        )
        assert applied.status_code == 201, applied.text
        application = applied.json()
        assert application["status"] == "PENDING"

        updated = client.patch(
            f"/applications/{application['id']}",
            json={"status": "INTERVIEW"},
            headers=hr_headers
        )
        assert updated.json()["status"] == "INTERVIEW"

        feed = client.get("/notifications", headers=candidate_headers).json()
        assert feed["total"] == 1
        assert feed["items"][0]["is_read"] is False
        assert "Interview Stage" in feed["items"][0]["message"]

        scheduled = client.post("/interviews", json={
            "application_id": application["id"],
            "scheduled_at": "2031-11-03T14:30:00",
            "type": "VIDEO",
            "interviewer_ids": [hr_account["id"]],
        }, headers=hr_headers)
        assert scheduled.status_code == 201, scheduled.text
        interview = scheduled.json()
        assert interview["status"] == "SCHEDULED"

        detail = client.get(f"/applications/{application['id']}", headers=candidate_headers).json()
        assert detail["status"] == "INTERVIEW"
        assert [i["id"] for i in detail["interviews"]] == [interview["id"]]

        feed = client.get("/notifications", headers=candidate_headers).json()
        assert feed["total"] == 2
        assert {n["related_interview_id"] for n in feed["items"]} == {None, interview["id"]}

        counts = client.get("/notifications/count", headers=candidate_headers).json()
        assert counts == {"total": 2, "unread": 2}
        assert client.post("/notifications/read-all", headers=candidate_headers).json() == {"modified": 2}

    def test_two_candidates_apply_to_the_same_posting(self, client, hr_user, open_posting):
        _, hr_headers = hr_user
        for first_name, email in (("Ada", "ada@acme.io"), ("Ben", "ben@acme.io")):
            _, headers = register(client, "CANDIDATE", first_name, "Lane", email)
            response = client.post(
                "/applications",
                json={"job_posting_id": open_posting["id"], "resume": "cv.pdf"},
                headers=headers
            )
            assert response.status_code == 201

        posting = client.get(f"/job-postings/{open_posting['id']}", headers=hr_headers).json()
        assert posting["application_count"] == 2

        applications = client.get(
            f"/applications?job_posting_id={open_posting['id']}",
            headers=hr_headers
        ).json()
        assert applications["total"] == 2

        received = client.get("/notifications?unread_only=true", headers=hr_headers).json()
        assert received["total"] == 2

    def test_duplicate_application_conflicts(self, client, candidate_user, open_posting):
        _, headers = candidate_user
        body = {"job_posting_id": open_posting["id"], "resume": "r.pdf"}

        assert client.post("/applications", json=body, headers=headers).status_code == 201
        response = client.post("/applications", json=body, headers=headers)

        assert response.status_code == 409
        assert response.json()["error"]["message"] == "You have already applied to this job posting"

    def test_dashboard_reflects_role(self, client, hr_user, candidate_user, open_posting):
        _, hr_headers = hr_user
        _, candidate_headers = candidate_user
        client.post("/applications", json={"job_posting_id": open_posting["id"], "resume": "r.pdf"},
                    headers=candidate_headers)

        hr_stats = client.get("/dashboard/stats", headers=hr_headers).json()
        assert hr_stats["role"] == "HR"
        assert hr_stats["open_job_postings"] == 1
        assert hr_stats["pending_applications"] == 1

        candidate_stats = client.get("/dashboard/stats", headers=candidate_headers).json()
        assert candidate_stats["total_applications"] == 1
        assert candidate_stats["total_job_postings"] == 1


class TestSubscriptionAccess:

    def test_subscription_requires_token(self, client, candidate_user):
        account, _ = candidate_user

        response = client.get(f"/subscriptions/notifications?recipient_id={account['id']}")

        assert response.status_code == 401

    def test_cannot_subscribe_to_someone_elses_notifications(self, client, candidate_user):
        _, headers = candidate_user
        token = headers["Authorization"].split(" ", 1)[1]

        response = client.get(f"/subscriptions/notifications?recipient_id={uuid4()}&token={token}")

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "FORBIDDEN"

    def test_invalid_scope_is_rejected(self, client, candidate_user):
        _, headers = candidate_user
        token = headers["Authorization"].split(" ", 1)[1]

        response = client.get(f"/subscriptions/application-created?posting_id=not-a-uuid&token={token}")

        assert response.status_code == 400
