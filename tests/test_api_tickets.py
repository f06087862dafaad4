"""
API Tests for Tickets and Users

Tests:
- Ticket validation and visibility rules
- Update permissions and empty updates
- Staff statistics
- User directory and role management
"""

import pytest

from tests.conftest import auth


async def create_ticket(client, user, **overrides):
    payload = {"title": "Cannot reach VPN", "description": "Connection times out at login"}
    payload.update(overrides)
    response = await client.post("/tickets", json=payload, headers=auth(user))
    assert response.status_code == 201, response.text
    return response.json()["ticket"]


class TestCreateTicket:

    @pytest.mark.asyncio
    async def test_defaults(self, client, users):
        ticket = await create_ticket(client, users["alice"])

        assert ticket["status"] == "todo"
        assert ticket["priority"] == "medium"
        assert ticket["reporter_id"] == users["alice"].id
        assert ticket["reporter_name"] == "Alice Doe"
        assert ticket["assignee_id"] is None

    @pytest.mark.asyncio
    async def test_validation(self, client, users):
        response = await client.post(
            "/tickets", json={"title": "Hey", "description": "Too short title here"},
            headers=auth(users["alice"])
        )
        assert response.status_code == 400

        response = await client.post(
            "/tickets", json={"title": "Valid title", "description": "short"},
            headers=auth(users["alice"])
        )
        assert response.status_code == 400

        response = await client.post(
            "/tickets",
            json={"title": "Valid title", "description": "Long enough text", "priority": "critical"},
            headers=auth(users["alice"])
        )
        assert response.status_code == 400

        response = await client.post(
            "/tickets",
            json={"title": "    ab    ", "description": "          x         "},
            headers=auth(users["alice"])
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_surrounding_whitespace_is_stripped(self, client, users):
        response = await client.post(
            "/tickets",
            json={"title": "  Printer jammed  ", "description": "  Paper stuck in tray two  "},
            headers=auth(users["alice"])
        )
        assert response.status_code == 201
        ticket = response.json()["ticket"]
        assert ticket["title"] == "Printer jammed"
        assert ticket["description"] == "Paper stuck in tray two"


class TestVisibility:

    @pytest.mark.asyncio
    async def test_users_see_only_their_tickets(self, client, users):
        await create_ticket(client, users["alice"])
        bobs = await create_ticket(client, users["bob"], title="Monitor flickers")

        listing = (await client.get("/tickets", headers=auth(users["bob"]))).json()
        assert [t["id"] for t in listing["tickets"]] == [bobs["id"]]

        listing = (await client.get("/tickets", headers=auth(users["agent"]))).json()
        assert listing["pagination"]["total"] == 2

    @pytest.mark.asyncio
    async def test_cannot_read_others_ticket(self, client, users):
        ticket = await create_ticket(client, users["alice"])

        response = await client.get(f"/tickets/{ticket['id']}", headers=auth(users["bob"]))
        assert response.status_code == 403

        response = await client.get(f"/tickets/{ticket['id']}", headers=auth(users["agent"]))
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_missing_ticket(self, client, users):
        response = await client.get("/tickets/9999", headers=auth(users["agent"]))
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_filters(self, client, users):
        await create_ticket(client, users["alice"], priority="urgent", category="Network")
        await create_ticket(client, users["alice"], title="Keyboard missing keys", category="Hardware")

        response = await client.get(
            "/tickets", params={"priority": "urgent"}, headers=auth(users["agent"])
        )
        assert [t["category"] for t in response.json()["tickets"]] == ["Network"]

        response = await client.get(
            "/tickets", params={"search": "KEYBOARD"}, headers=auth(users["agent"])
        )
        assert response.json()["pagination"]["total"] == 1

    @pytest.mark.asyncio
    async def test_list_page_size(self, client, users):
        await create_ticket(client, users["alice"])

        listing = (await client.get("/tickets", headers=auth(users["agent"]))).json()
        assert listing["pagination"]["limit"] == 10

        listing = (await client.get(
            "/tickets", params={"limit": 250}, headers=auth(users["agent"])
        )).json()
        assert listing["pagination"] == {"page": 1, "limit": 250, "total": 1, "pages": 1}

    @pytest.mark.asyncio
    async def test_comments_oldest_first(self, client, users):
        ticket = await create_ticket(client, users["alice"])
        for text in ("first", "second"):
            await client.post(
                f"/tickets/{ticket['id']}/comments", json={"content": text}, headers=auth(users["agent"])
            )

        detail = (await client.get(f"/tickets/{ticket['id']}", headers=auth(users["alice"]))).json()

        assert [c["content"] for c in detail["comments"]] == ["first", "second"]
        assert detail["comments"][0]["author_name"] == "Agent One"


class TestUpdateTicket:

    @pytest.mark.asyncio
    async def test_empty_update_rejected(self, client, users):
        ticket = await create_ticket(client, users["alice"])

        response = await client.put(f"/tickets/{ticket['id']}", json={}, headers=auth(users["agent"]))
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_other_user_cannot_update(self, client, users):
        ticket = await create_ticket(client, users["alice"])

        response = await client.put(
            f"/tickets/{ticket['id']}", json={"priority": "low"}, headers=auth(users["bob"])
        )
        assert response.status_code == 403

        response = await client.post(
            f"/tickets/{ticket['id']}/comments", json={"content": "me too"}, headers=auth(users["bob"])
        )
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_padded_title_rejected_on_update(self, client, users):
        ticket = await create_ticket(client, users["alice"])

        response = await client.put(
            f"/tickets/{ticket['id']}", json={"title": "   ab   "}, headers=auth(users["alice"])
        )
        assert response.status_code == 400

        response = await client.put(
            f"/tickets/{ticket['id']}", json={"title": "  Printer still jammed  "}, headers=auth(users["alice"])
        )
        assert response.status_code == 200
        assert response.json()["ticket"]["title"] == "Printer still jammed"

    @pytest.mark.asyncio
    async def test_assign_to_staff_only(self, client, users):
        ticket = await create_ticket(client, users["alice"])

        response = await client.put(
            f"/tickets/{ticket['id']}", json={"assignee_id": users["bob"].id}, headers=auth(users["admin"])
        )
        assert response.status_code == 400

        response = await client.put(
            f"/tickets/{ticket['id']}", json={"assignee_id": users["agent"].id}, headers=auth(users["admin"])
        )
        assert response.status_code == 200
        assert response.json()["ticket"]["assignee_name"] == "Agent One"

    @pytest.mark.asyncio
    async def test_update_missing_ticket(self, client, users):
        response = await client.put("/tickets/9999", json={"status": "closed"}, headers=auth(users["agent"]))
        assert response.status_code == 404


class TestStats:

    @pytest.mark.asyncio
    async def test_staff_only(self, client, users):
        await create_ticket(client, users["alice"], category="Network")
        await create_ticket(client, users["alice"], priority="low")

        response = await client.get("/tickets/stats/overview", headers=auth(users["alice"]))
        assert response.status_code == 403

        stats = (await client.get("/tickets/stats/overview", headers=auth(users["agent"]))).json()
        assert stats["by_status"] == {"todo": 2}
        assert stats["by_priority"] == {"medium": 1, "low": 1}
        assert stats["by_category"] == {"Network": 1, "Uncategorized": 1}


class TestUsers:

    @pytest.mark.asyncio
    async def test_agents_directory(self, client, users):
        response = await client.get("/users/agents", headers=auth(users["alice"]))

        emails = [a["email"] for a in response.json()["agents"]]
        assert sorted(emails) == ["admin@company.com", "agent1@company.com"]

    @pytest.mark.asyncio
    async def test_profile_access(self, client, users):
        response = await client.get(f"/users/{users['alice'].id}", headers=auth(users["alice"]))
        assert response.status_code == 200

        response = await client.get(f"/users/{users['bob'].id}", headers=auth(users["alice"]))
        assert response.status_code == 403

        response = await client.get("/users/9999", headers=auth(users["admin"]))
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_list_users_admin_only(self, client, users):
        response = await client.get("/users", headers=auth(users["agent"]))
        assert response.status_code == 403

        response = await client.get("/users", params={"role": "user"}, headers=auth(users["admin"]))
        body = response.json()
        assert body["pagination"]["total"] == 2

    @pytest.mark.asyncio
    async def test_promotion_changes_who_hears_about_new_tickets(self, client, users):
        response = await client.put(
            f"/users/{users['bob'].id}/role", json={"role": "agent"}, headers=auth(users["admin"])
        )
        assert response.status_code == 200
        assert response.json()["user"]["role"] == "agent"

        await create_ticket(client, users["alice"])

        count = (await client.get("/notifications/unread-count", headers=auth(users["bob"]))).json()
        assert count["count"] == 1

    @pytest.mark.asyncio
    async def test_role_change_validation(self, client, users):
        response = await client.put(
            f"/users/{users['bob'].id}/role", json={"role": "superuser"}, headers=auth(users["admin"])
        )
        assert response.status_code == 400

        response = await client.put(
            f"/users/{users['bob'].id}/role", json={"role": "agent"}, headers=auth(users["agent"])
        )
        assert response.status_code == 403
