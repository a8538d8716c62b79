"""
Project CRUD through the HTTP API.

Another user's project is always reported as 404, never 403.
"""

import uuid
from datetime import datetime


def parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


class TestCreateProject:

    async def test_create(self, client, alice):
        response = await client.post(
            "/api/projects",
            json={"name": "P1", "description": "first", "dueDate": "2026-12-31", "status": "OPEN"},
            headers=alice,
        )
        assert response.status_code == 201
        body = response.json()
        assert body["name"] == "P1"
        assert body["status"] == "OPEN"
        assert body["dueDate"] == "2026-12-31"
        assert body["createdAt"] == body["updatedAt"]
        assert parse_timestamp(body["createdAt"]).utcoffset().total_seconds() == 0

        me = await client.get("/api/auth/me", headers=alice)
        assert body["ownerId"] == me.json()["id"]
        assert body["ownerEmail"] == "a@x.com"

    async def test_status_defaults_to_open(self, client, alice):
        response = await client.post("/api/projects", json={"name": "P1"}, headers=alice)
        assert response.status_code == 201
        assert response.json()["status"] == "OPEN"

    async def test_blank_name_rejected_before_write(self, client, alice):
        response = await client.post(
            "/api/projects", json={"name": "   ", "status": "OPEN"}, headers=alice
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Project name is required"

        listing = await client.get("/api/projects", headers=alice)
        assert listing.json()["totalElements"] == 0

    async def test_invalid_status_rejected(self, client, alice):
        response = await client.post(
            "/api/projects", json={"name": "P1", "status": "open"}, headers=alice
        )
        assert response.status_code == 400
        assert response.json()["message"].startswith("Invalid status: open")

    async def test_snake_case_keys_accepted(self, client, alice):
        response = await client.post(
            "/api/projects", json={"name": "P1", "due_date": "2026-12-31"}, headers=alice
        )
        assert response.status_code == 201
        assert response.json()["dueDate"] == "2026-12-31"

    async def test_unknown_key_rejected(self, client, alice):
        response = await client.post(
            "/api/projects", json={"name": "P1", "deadline": "2026-12-31"}, headers=alice
        )
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

        listing = await client.get("/api/projects", headers=alice)
        assert listing.json()["totalElements"] == 0

    async def test_malformed_body_is_400(self, client, alice):
        response = await client.post(
            "/api/projects", json={"name": "P1", "dueDate": "not-a-date"}, headers=alice
        )
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"


class TestGetProject:

    async def test_owner_can_read(self, client, alice, alice_project):
        response = await client.get(f"/api/projects/{alice_project['id']}", headers=alice)
        assert response.status_code == 200
        assert response.json() == alice_project

    async def test_other_user_gets_not_found(self, client, bob, alice_project):
        response = await client.get(f"/api/projects/{alice_project['id']}", headers=bob)
        assert response.status_code == 404

    async def test_missing_project(self, client, alice):
        response = await client.get(f"/api/projects/{uuid.uuid4()}", headers=alice)
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"


class TestUpdateProject:

    async def test_update_round_trip(self, client, alice, alice_project):
        project_id = alice_project["id"]
        response = await client.put(
            f"/api/projects/{project_id}",
            json={"name": "Renamed", "description": "d", "dueDate": "2027-01-15", "status": "DONE"},
            headers=alice,
        )
        assert response.status_code == 200

        fetched = (await client.get(f"/api/projects/{project_id}", headers=alice)).json()
        assert fetched["name"] == "Renamed"
        assert fetched["description"] == "d"
        assert fetched["dueDate"] == "2027-01-15"
        assert fetched["status"] == "DONE"
        assert fetched["id"] == alice_project["id"]
        assert fetched["ownerId"] == alice_project["ownerId"]
        assert fetched["createdAt"] == alice_project["createdAt"]
        assert parse_timestamp(fetched["updatedAt"]) > parse_timestamp(alice_project["updatedAt"])

    async def test_updated_at_strictly_increases(self, client, alice, alice_project):
        project_id = alice_project["id"]
        stamps = [alice_project["updatedAt"]]
        for _ in range(3):
            response = await client.put(
                f"/api/projects/{project_id}", json={"name": "P1", "status": "OPEN"}, headers=alice
            )
            stamps.append(response.json()["updatedAt"])
        parsed = [parse_timestamp(s) for s in stamps]
        assert all(earlier < later for earlier, later in zip(parsed, parsed[1:]))

    async def test_omitted_status_is_kept(self, client, alice):
        created = (await client.post(
            "/api/projects", json={"name": "P", "status": "IN_PROGRESS"}, headers=alice
        )).json()
        response = await client.put(f"/api/projects/{created['id']}", json={"name": "P"}, headers=alice)
        assert response.json()["status"] == "IN_PROGRESS"

    async def test_invalid_status(self, client, alice, alice_project):
        response = await client.put(
            f"/api/projects/{alice_project['id']}",
            json={"name": "P1", "status": "CLOSED"},
            headers=alice,
        )
        assert response.status_code == 400

        fetched = (await client.get(f"/api/projects/{alice_project['id']}", headers=alice)).json()
        assert fetched["status"] == "OPEN"

    async def test_other_user_gets_not_found(self, client, bob, alice_project):
        response = await client.put(
            f"/api/projects/{alice_project['id']}",
            json={"name": "Mine now", "status": "OPEN"},
            headers=bob,
        )
        assert response.status_code == 404


class TestDeleteProject:

    async def test_delete(self, client, alice, alice_project):
        response = await client.delete(f"/api/projects/{alice_project['id']}", headers=alice)
        assert response.status_code == 204

        again = await client.get(f"/api/projects/{alice_project['id']}", headers=alice)
        assert again.status_code == 404

    async def test_delete_cascades_to_tasks(self, client, alice, alice_project):
        task = (await client.post(
            f"/api/projects/{alice_project['id']}/tasks",
            json={"title": "T1", "status": "TODO"},
            headers=alice,
        )).json()

        await client.delete(f"/api/projects/{alice_project['id']}", headers=alice)

        response = await client.get(f"/api/tasks/{task['id']}", headers=alice)
        assert response.status_code == 404

    async def test_other_user_gets_not_found(self, client, alice, bob, alice_project):
        response = await client.delete(f"/api/projects/{alice_project['id']}", headers=bob)
        assert response.status_code == 404

        still_there = await client.get(f"/api/projects/{alice_project['id']}", headers=alice)
        assert still_there.status_code == 200


class TestListProjects:

    async def test_only_own_projects(self, client, alice, bob):
        for name in ("A1", "A2"):
            await client.post("/api/projects", json={"name": name}, headers=alice)
        await client.post("/api/projects", json={"name": "B1"}, headers=bob)

        response = await client.get("/api/projects", headers=alice)
        assert response.status_code == 200
        body = response.json()
        assert body["totalElements"] == 2
        assert {p["name"] for p in body["content"]} == {"A1", "A2"}

    async def test_defaults(self, client, alice):
        for name in ("first", "second"):
            await client.post("/api/projects", json={"name": name}, headers=alice)

        body = (await client.get("/api/projects", headers=alice)).json()
        assert body["page"] == 0
        assert body["size"] == 10
        # createdAt desc
        assert [p["name"] for p in body["content"]] == ["second", "first"]

    async def test_sort_by_name_asc(self, client, alice):
        for name in ("b", "c", "a"):
            await client.post("/api/projects", json={"name": name}, headers=alice)

        body = (await client.get(
            "/api/projects", params={"sortBy": "name", "direction": "ASC"}, headers=alice
        )).json()
        assert [p["name"] for p in body["content"]] == ["a", "b", "c"]

    async def test_paging_clamped(self, client, alice):
        for i in range(3):
            await client.post("/api/projects", json={"name": f"P{i}"}, headers=alice)

        body = (await client.get(
            "/api/projects", params={"page": -5, "size": 2}, headers=alice
        )).json()
        assert body["page"] == 0
        assert body["size"] == 2
        assert len(body["content"]) == 2
        assert body["totalPages"] == 2
        assert body["last"] is False

        body = (await client.get(
            "/api/projects", params={"size": 1000}, headers=alice
        )).json()
        assert body["size"] == 50
        assert body["last"] is True

    async def test_bad_direction(self, client, alice):
        response = await client.get("/api/projects", params={"direction": "sideways"}, headers=alice)
        assert response.status_code == 400
        assert response.json()["message"] == "direction must be asc or desc"

    async def test_unknown_sort_field_rejected(self, client, alice):
        response = await client.get(
            "/api/projects", params={"sortBy": "nonexistentField"}, headers=alice
        )
        assert response.status_code == 400
        assert response.json()["message"].startswith("Invalid sortBy")

    async def test_listing_carries_owner_email(self, client, alice, alice_project):
        body = (await client.get("/api/projects", headers=alice)).json()
        assert [p["ownerEmail"] for p in body["content"]] == ["a@x.com"]

    async def test_page_beyond_any_offset(self, client, alice, alice_project):
        response = await client.get(
            "/api/projects", params={"page": "100000000000000000000"}, headers=alice
        )
        assert response.status_code == 200
        body = response.json()
        assert body["content"] == []
        assert body["totalElements"] == 1
        assert body["last"] is True

    async def test_ties_do_not_repeat_across_pages(self, client, alice):
        ids = set()
        for i in range(5):
            created = await client.post(
                "/api/projects", json={"name": "same", "status": "OPEN"}, headers=alice
            )
            ids.add(created.json()["id"])

        seen = []
        for page in range(5):
            body = (await client.get(
                "/api/projects",
                params={"sortBy": "name", "page": page, "size": 1},
                headers=alice,
            )).json()
            seen.extend(p["id"] for p in body["content"])

        assert len(seen) == 5
        assert set(seen) == ids
