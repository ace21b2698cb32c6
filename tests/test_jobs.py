"""
Test suite for job-related endpoints and functionality.

Tests cover:
- Job creation and validation
- Owner-scoped retrieval, update and delete
- Isolation between users
"""

import pytest
from app.models.job import Job, JobStatus


class TestJobCreation:
    """Tests for job creation endpoint"""

    def test_create_job_success(self, client, register_user, sample_job_data):
        """Test creating a job with all fields"""
        user, headers = register_user()

        response = client.post("/jobs", headers=headers, json=sample_job_data)

        assert response.status_code == 201
        data = response.json()
        assert data["id"]
        assert data["title"] == sample_job_data["title"]
        assert data["company"] == sample_job_data["company"]
        assert data["status"] == "APPLIED"
        assert data["deadline"] == "2025-03-31"
        assert data["userId"] == user["id"]

    def test_create_job_minimal(self, client, register_user):
        """Test creating a job with only the required fields"""
        _, headers = register_user()

        response = client.post("/jobs", headers=headers, json={
            "title": "Eng",
            "company": "Acme",
            "status": "WISHLIST"
        })

        assert response.status_code == 201
        data = response.json()
        assert data["description"] is None
        assert data["notes"] is None
        assert data["deadline"] is None

    @pytest.mark.parametrize("missing", ["title", "company", "status"])
    def test_create_job_missing_field(self, client, register_user, sample_job_data, missing):
        """Test that each required field is reported when missing"""
        _, headers = register_user()
        del sample_job_data[missing]

        response = client.post("/jobs", headers=headers, json=sample_job_data)

        assert response.status_code == 400
        paths = [error["path"] for error in response.json()["errors"]]
        assert missing in paths

    @pytest.mark.parametrize("field", ["title", "company"])
    def test_create_job_empty_string(self, client, register_user, sample_job_data, field):
        """Test that empty title or company is rejected"""
        _, headers = register_user()
        sample_job_data[field] = ""

        response = client.post("/jobs", headers=headers, json=sample_job_data)

        assert response.status_code == 400
        assert response.json()["errors"][0]["path"] == field

    def test_create_job_invalid_status(self, client, register_user, sample_job_data):
        """Test that an unknown status is rejected"""
        _, headers = register_user()
        sample_job_data["status"] = "GHOSTED"

        response = client.post("/jobs", headers=headers, json=sample_job_data)

        assert response.status_code == 400
        assert response.json()["errors"][0]["path"] == "status"

    @pytest.mark.parametrize("status", [s.value for s in JobStatus])
    def test_create_job_every_status(self, client, register_user, sample_job_data, status):
        """Test that every known status is accepted"""
        _, headers = register_user()
        sample_job_data["status"] = status

        response = client.post("/jobs", headers=headers, json=sample_job_data)

        assert response.status_code == 201
        assert response.json()["status"] == status

    def test_legacy_rejected_spelling_normalised(self, client, register_user, sample_job_data):
        """Test that the legacy REJECTEDz status is stored as REJECTED"""
        _, headers = register_user()
        sample_job_data["status"] = "REJECTEDz"

        response = client.post("/jobs", headers=headers, json=sample_job_data)

        assert response.status_code == 201
        assert response.json()["status"] == "REJECTED"

    def test_owner_field_in_body_is_ignored(self, client, register_user, sample_job_data):
        """Test that the owner always comes from the token, never the body"""
        user, headers = register_user()
        sample_job_data["userId"] = "someone-else"
        sample_job_data["user_id"] = "someone-else"

        response = client.post("/jobs", headers=headers, json=sample_job_data)

        assert response.json()["userId"] == user["id"]


class TestJobRetrieval:
    """Tests for job retrieval endpoints"""

    def test_list_jobs_empty(self, client, register_user):
        """Test listing jobs for a user with none"""
        _, headers = register_user()

        response = client.get("/jobs", headers=headers)

        assert response.status_code == 200
        assert response.json() == []

    def test_list_only_own_jobs(self, client, register_user, sample_job_data):
        """Test that listing returns only the caller's jobs"""
        _, alice = register_user("alice@x.com")
        _, bob = register_user("bob@x.com")
        for i in range(3):
            client.post("/jobs", headers=alice, json={**sample_job_data, "title": f"Job {i}"})
        client.post("/jobs", headers=bob, json={**sample_job_data, "title": "Bob's job"})

        response = client.get("/jobs", headers=alice)

        titles = sorted(job["title"] for job in response.json())
        assert titles == ["Job 0", "Job 1", "Job 2"]

    def test_get_job_by_id(self, client, register_user, sample_job_data):
        """Test retrieving a single job"""
        _, headers = register_user()
        job_id = client.post("/jobs", headers=headers, json=sample_job_data).json()["id"]

        response = client.get(f"/jobs/{job_id}", headers=headers)

        assert response.status_code == 200
        assert response.json()["id"] == job_id
        assert response.json()["title"] == sample_job_data["title"]

    def test_get_nonexistent_job(self, client, register_user):
        """Test retrieving a job that does not exist"""
        _, headers = register_user()

        response = client.get("/jobs/99999", headers=headers)

        assert response.status_code == 404
        assert response.json() == {"error": "Job not found"}


class TestJobUpdate:
    """Tests for job update endpoint"""

    def test_update_job(self, client, register_user, sample_job_data):
        """Test replacing a job's fields"""
        user, headers = register_user()
        job_id = client.post("/jobs", headers=headers, json=sample_job_data).json()["id"]

        response = client.put(f"/jobs/{job_id}", headers=headers, json={
            "title": "Staff Engineer",
            "company": "Acme",
            "status": "OFFER",
            "notes": "Negotiating"
        })

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == job_id
        assert data["title"] == "Staff Engineer"
        assert data["status"] == "OFFER"
        assert data["notes"] == "Negotiating"
        assert data["description"] is None
        assert data["userId"] == user["id"]

    def test_update_persists(self, client, register_user, sample_job_data, db_session):
        """Test that an update is written to the database"""
        _, headers = register_user()
        job_id = client.post("/jobs", headers=headers, json=sample_job_data).json()["id"]

        client.put(f"/jobs/{job_id}", headers=headers, json={**sample_job_data, "status": "INTERVIEW"})

        job = db_session.query(Job).filter(Job.id == job_id).first()
        db_session.refresh(job)
        assert job.status == JobStatus.INTERVIEW

    def test_update_validates_body(self, client, register_user, sample_job_data):
        """Test that updates use the same validation as creation"""
        _, headers = register_user()
        job_id = client.post("/jobs", headers=headers, json=sample_job_data).json()["id"]

        response = client.put(f"/jobs/{job_id}", headers=headers, json={"title": "Only title"})

        assert response.status_code == 400
        paths = [error["path"] for error in response.json()["errors"]]
        assert "company" in paths
        assert "status" in paths

    def test_update_nonexistent_job(self, client, register_user, sample_job_data):
        """Test updating a job that does not exist"""
        _, headers = register_user()

        response = client.put("/jobs/99999", headers=headers, json=sample_job_data)

        assert response.status_code == 404


class TestJobDeletion:
    """Tests for job deletion endpoint"""

    def test_delete_job(self, client, register_user, sample_job_data):
        """Test deleting a job"""
        _, headers = register_user()
        job_id = client.post("/jobs", headers=headers, json=sample_job_data).json()["id"]

        response = client.delete(f"/jobs/{job_id}", headers=headers)

        assert response.status_code == 200
        assert response.json() == {"message": "Job deleted"}
        assert client.get(f"/jobs/{job_id}", headers=headers).status_code == 404

    def test_delete_twice_returns_404(self, client, register_user, sample_job_data):
        """Test that a second delete of the same job is a 404"""
        _, headers = register_user()
        job_id = client.post("/jobs", headers=headers, json=sample_job_data).json()["id"]

        first = client.delete(f"/jobs/{job_id}", headers=headers)
        second = client.delete(f"/jobs/{job_id}", headers=headers)

        assert first.status_code == 200
        assert second.status_code == 404


class TestJobIsolation:
    """Users cannot see or change each other's jobs"""

    @pytest.fixture
    def alice_job(self, client, register_user, sample_job_data):
        _, alice = register_user("alice@x.com")
        job_id = client.post("/jobs", headers=alice, json=sample_job_data).json()["id"]
        return job_id, alice

    @pytest.fixture
    def bob(self, register_user):
        _, headers = register_user("bob@x.com")
        return headers

    def test_get_other_users_job(self, client, alice_job, bob):
        """Test that another user's job looks the same as a missing one"""
        job_id, _ = alice_job

        foreign = client.get(f"/jobs/{job_id}", headers=bob)
        missing = client.get("/jobs/no-such-job", headers=bob)

        assert foreign.status_code == 404
        assert foreign.json() == missing.json()

    def test_update_other_users_job(self, client, alice_job, bob, sample_job_data):
        """Test that another user's job cannot be updated"""
        job_id, alice = alice_job

        foreign = client.put(f"/jobs/{job_id}", headers=bob, json={**sample_job_data, "title": "Hijacked"})
        missing = client.put("/jobs/no-such-job", headers=bob, json=sample_job_data)

        assert foreign.status_code == 404
        assert foreign.json() == missing.json()
        assert client.get(f"/jobs/{job_id}", headers=alice).json()["title"] == sample_job_data["title"]

    def test_delete_other_users_job(self, client, alice_job, bob):
        """Test that another user's job cannot be deleted"""
        job_id, alice = alice_job

        foreign = client.delete(f"/jobs/{job_id}", headers=bob)
        missing = client.delete("/jobs/no-such-job", headers=bob)

        assert foreign.status_code == 404
        assert foreign.json() == missing.json()
        assert client.get(f"/jobs/{job_id}", headers=alice).status_code == 200


class TestSignupToJobScenario:
    """End-to-end flow from signup to a cross-user delete"""

    def test_full_flow(self, client):
        """Test signup, login, job creation and a foreign delete attempt"""
        signup = client.post("/users", json={"email": "a@x.com", "password": "pw123456"})
        assert signup.status_code == 201
        user_id = signup.json()["id"]
        assert signup.json()["email"] == "a@x.com"

        login = client.post("/login", json={"email": "a@x.com", "password": "pw123456"})
        assert login.status_code == 200
        headers = {"Authorization": f"Bearer {login.json()['token']}"}

        jobs = client.get("/jobs", headers=headers)
        assert jobs.status_code == 200
        assert jobs.json() == []

        created = client.post("/jobs", headers=headers, json={
            "title": "Eng",
            "company": "Acme",
            "status": "WISHLIST"
        })
        assert created.status_code == 201
        assert created.json()["userId"] == user_id

        client.post("/users", json={"email": "b@x.com", "password": "pw654321"})
        other = client.post("/login", json={"email": "b@x.com", "password": "pw654321"})
        other_headers = {"Authorization": f"Bearer {other.json()['token']}"}

        response = client.delete(f"/jobs/{created.json()['id']}", headers=other_headers)
        assert response.status_code == 404
