"""
Test suite for company endpoints.

Tests cover:
- Creation and duplicate handles
- Name / employee-count filtering
- Detail view with jobs
- Partial updates and deletion
"""

from app.crud import company as company_crud


NEW_COMPANY = {
    "handle": "new",
    "name": "New",
    "description": "New Description",
    "numEmployees": 1,
    "logoUrl": "http://new.img",
}


class TestCompanyCreation:

    def test_create_company(self, client, admin_headers):
        response = client.post("/api/v1/companies/", json=NEW_COMPANY, headers=admin_headers)

        assert response.status_code == 201
        assert response.json() == NEW_COMPANY

    def test_create_duplicate(self, client, admin_headers):
        client.post("/api/v1/companies/", json=NEW_COMPANY, headers=admin_headers)
        response = client.post("/api/v1/companies/", json=NEW_COMPANY, headers=admin_headers)

        assert response.status_code == 400
        assert "Duplicate" in response.json()["detail"]

    def test_create_duplicate_name(self, client, admin_headers):
        """A new handle with another company's name is a client error"""
        response = client.post(
            "/api/v1/companies/",
            json={**NEW_COMPANY, "handle": "c9", "name": "C1"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert "C1" in response.json()["detail"]
        assert client.get("/api/v1/companies/c9").status_code == 404

    def test_create_requires_admin(self, client, u1_headers):
        response = client.post("/api/v1/companies/", json=NEW_COMPANY, headers=u1_headers)
        assert response.status_code == 403

    def test_create_missing_fields(self, client, admin_headers):
        response = client.post(
            "/api/v1/companies/", json={"handle": "x"}, headers=admin_headers
        )
        assert response.status_code == 422


class TestCompanyListing:
    """Tests for GET /companies filters"""

    def test_list_all(self, client, seed_data):
        response = client.get("/api/v1/companies/")

        assert response.status_code == 200
        assert [c["handle"] for c in response.json()] == ["c1", "c2", "c3"]
        assert response.json()[0] == {
            "handle": "c1",
            "name": "C1",
            "description": "Desc1",
            "numEmployees": 1,
            "logoUrl": "http://c1.img",
        }

    def test_filter_name(self, client, seed_data):
        response = client.get("/api/v1/companies/?name=c2")
        assert [c["handle"] for c in response.json()] == ["c2"]

    def test_min_employees_is_exclusive(self, client, seed_data):
        response = client.get("/api/v1/companies/?minEmployees=1")
        assert [c["handle"] for c in response.json()] == ["c2", "c3"]

    def test_max_employees_is_exclusive(self, client, seed_data):
        response = client.get("/api/v1/companies/?maxEmployees=3")
        assert [c["handle"] for c in response.json()] == ["c1", "c2"]

    def test_combined_filters(self, client, seed_data):
        response = client.get("/api/v1/companies/?name=c&minEmployees=1&maxEmployees=3")
        assert [c["handle"] for c in response.json()] == ["c2"]

    def test_min_greater_than_max(self, client, seed_data):
        response = client.get("/api/v1/companies/?minEmployees=3&maxEmployees=1")

        assert response.status_code == 400
        assert response.json()["detail"] == "Min employees cannot be greater than max"

    def test_zero_max_is_ignored(self, client, seed_data):
        """A zero bound adds no predicate, so it is not compared with the min"""
        response = client.get("/api/v1/companies/?minEmployees=2&maxEmployees=0")

        assert response.status_code == 200
        assert [c["handle"] for c in response.json()] == ["c3"]


class TestCompanyDetail:

    def test_get_with_jobs(self, client, seed_data):
        response = client.get("/api/v1/companies/c1")

        assert response.status_code == 200
        data = response.json()
        assert data["handle"] == "c1"
        assert [j["title"] for j in data["jobs"]] == ["j1", "j2"]
        assert data["jobs"][0]["id"] == seed_data["job_ids"][0]

    def test_get_without_jobs(self, client, seed_data):
        response = client.get("/api/v1/companies/c3")
        assert response.json()["jobs"] == []

    def test_get_nonexistent(self, client, seed_data):
        response = client.get("/api/v1/companies/nope")
        assert response.status_code == 404


class TestCompanyUpdate:

    def test_update(self, client, seed_data, admin_headers):
        response = client.patch(
            "/api/v1/companies/c1",
            json={"numEmployees": 10, "logoUrl": None, "name": "C1-new"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json() == {
            "handle": "c1",
            "name": "C1-new",
            "description": "Desc1",
            "numEmployees": 10,
            "logoUrl": None,
        }

    def test_update_to_taken_name(self, client, seed_data, admin_headers):
        response = client.patch(
            "/api/v1/companies/c2", json={"name": "C1"}, headers=admin_headers
        )

        assert response.status_code == 400
        assert client.get("/api/v1/companies/c2").json()["name"] == "C2"

    def test_update_keeps_own_name(self, client, seed_data, admin_headers):
        response = client.patch(
            "/api/v1/companies/c2",
            json={"name": "C2", "numEmployees": 20},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["numEmployees"] == 20

    def test_update_handle_not_allowed(self, client, seed_data, admin_headers):
        response = client.patch(
            "/api/v1/companies/c1", json={"handle": "c1-new"}, headers=admin_headers
        )
        assert response.status_code == 422

    def test_update_empty_body(self, client, seed_data, admin_headers):
        response = client.patch("/api/v1/companies/c1", json={}, headers=admin_headers)
        assert response.status_code == 400

    def test_update_nonexistent(self, client, seed_data, admin_headers):
        response = client.patch(
            "/api/v1/companies/nope", json={"name": "x"}, headers=admin_headers
        )
        assert response.status_code == 404


class TestCompanyDeletion:

    def test_delete_cascades_to_jobs(self, client, db_session, seed_data, admin_headers):
        response = client.delete("/api/v1/companies/c1", headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"deleted": "c1"}
        assert client.get("/api/v1/companies/c1").status_code == 404
        remaining = company_crud.get(db_session, "c2")["jobs"]
        assert len(remaining) == 1
        assert len(client.get("/api/v1/jobs/").json()) == 1

    def test_delete_requires_admin(self, client, seed_data, u1_headers):
        response = client.delete("/api/v1/companies/c1", headers=u1_headers)
        assert response.status_code == 403
