"""
Taskie Backend - API Endpoint Tests
=====================================

What:  End-to-end request/response behavior: envelopes, camelCase bodies,
       multipart uploads, status codes and the admin surface.
Why:   Services are covered on their own; these tests pin the wire format
       clients depend on.
How:   httpx AsyncClient over the ASGI app; each request gets its own session
       from the per-test SQLite database.

What we test:
    ✅ Auth and profile flows, JSON and multipart
    ✅ Task lifecycle over HTTP, including uploads and served files
    ✅ Messaging and favorites endpoints
    ✅ Public reference data, admin endpoints, health and error envelopes
"""

import json
import uuid

import pytest

from conftest import JPEG_BYTES, PNG_BYTES, auth_headers
from taskie.models.task import STATUS_COMPLETED
from taskie.models.user import ROLE_ADMIN, ROLE_REQUESTER, ROLE_TASKER

REGISTER_BODY = {
    "fullName": "Nguyen Van A",
    "dateOfBirth": "1995-05-01",
    "email": "a@x.com",
    "phone": "0912345678",
    "password": "secret123",
    "confirmPassword": "secret123",
}


def task_form(**overrides):
    values = {
        "title": "Fix the sink",
        "description": "Kitchen sink is leaking",
        "category": "Repair",
        "location": json.dumps({"province": "Hue", "ward": "Phu Hoi"}),
        "price": "150000",
        "deadline": "2030-01-01T10:00:00Z",
    }
    values.update(overrides)
    return values


def task_images(count=2):
    return [("images", (f"img{i}.jpg", JPEG_BYTES, "image/jpeg")) for i in range(count)]


# ══════════════════════════════════════════════════════════════════════════
# Auth & Profile
# ══════════════════════════════════════════════════════════════════════════

class TestAuthEndpoints:
    """Tests for registration, login, password and profile endpoints."""

    @pytest.mark.asyncio
    async def test_register_json_then_login(self, client):
        """A JSON registration should return a token usable for login."""
        response = await client.post("/api/auth/register", json=REGISTER_BODY)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["message"] == "User registered successfully"
        assert body["data"]["fullName"] == "Nguyen Van A"
        assert body["data"]["token"]

        login = await client.post(
            "/api/auth/login", json={"emailOrPhone": "0912345678", "password": "secret123"}
        )
        assert login.status_code == 200
        assert login.json()["data"]["id"] == body["data"]["id"]

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, client):
        """Reusing an email should be a 400 conflict."""
        await client.post("/api/auth/register", json=REGISTER_BODY)
        response = await client.post(
            "/api/auth/register", json={**REGISTER_BODY, "phone": "0987654321"}
        )
        assert response.status_code == 400
        assert response.json()["message"] == "User already exists with this email or phone number"

    @pytest.mark.asyncio
    async def test_register_without_email_or_phone(self, client):
        """Registration without email and phone should be a 400."""
        body = {k: v for k, v in REGISTER_BODY.items() if k not in ("email", "phone")}
        response = await client.post("/api/auth/register", json=body)
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_register_bad_date(self, client):
        """An unparseable date of birth should be a 400."""
        response = await client.post(
            "/api/auth/register", json={**REGISTER_BODY, "dateOfBirth": "yesterday"}
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_register_multipart_with_proof(self, client, storage):
        """A multipart registration should store the proof image."""
        form = {**REGISTER_BODY, "email": ""}
        response = await client.post(
            "/api/auth/register",
            data=form,
            files={"proofOfExperience": ("cert.png", PNG_BYTES, "image/png")},
        )

        assert response.status_code == 201
        assert response.json()["data"]["email"] is None
        assert len(list((storage / "proofs").iterdir())) == 1

        me = await client.get(
            "/api/auth/me",
            headers={"Authorization": f"Bearer {response.json()['data']['token']}"},
        )
        assert me.json()["data"]["proofOfExperienceUrl"].startswith("/uploads/proofs/proof-")

    @pytest.mark.asyncio
    async def test_login_failure(self, client, create_user):
        """A wrong password should be a 401 with the generic message."""
        await create_user(email="u@x.com")
        response = await client.post(
            "/api/auth/login", json={"emailOrPhone": "u@x.com", "password": "wrongpass"}
        )
        assert response.status_code == 401
        assert response.json()["message"] == "Email/phone number or password is incorrect"

    @pytest.mark.asyncio
    async def test_change_password(self, client, create_user):
        """The new password should work for the next login."""
        user = await create_user(email="u@x.com")
        response = await client.put(
            "/api/auth/password",
            json={"currentPassword": "secret123", "newPassword": "another1"},
            headers=auth_headers(user),
        )
        assert response.status_code == 200

        login = await client.post(
            "/api/auth/login", json={"emailOrPhone": "u@x.com", "password": "another1"}
        )
        assert login.status_code == 200

    @pytest.mark.asyncio
    async def test_profile_update_and_avatar(self, client, create_user):
        """Profile edits and the uploaded avatar should be served back."""
        user = await create_user(ROLE_TASKER)
        headers = auth_headers(user)

        updated = await client.put("/api/profile", json={"fullName": "Renamed"}, headers=headers)
        assert updated.status_code == 200
        assert updated.json()["data"]["fullName"] == "Renamed"

        avatar = await client.post(
            "/api/profile/avatar",
            files={"avatar": ("me.jpg", JPEG_BYTES, "image/jpeg")},
            headers=headers,
        )
        assert avatar.status_code == 200
        url = avatar.json()["data"]["avatarUrl"]

        served = await client.get(url)
        assert served.status_code == 200
        assert served.content == JPEG_BYTES

        profile = await client.get("/api/profile", headers=headers)
        assert profile.json()["data"]["avatarUrl"] == url

    @pytest.mark.asyncio
    async def test_avatar_wrong_type(self, client, create_user):
        """A non-image avatar should be a 400."""
        user = await create_user(ROLE_TASKER)
        response = await client.post(
            "/api/profile/avatar",
            files={"avatar": ("notes.txt", b"hello", "text/plain")},
            headers=auth_headers(user),
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Only image files (JPEG, JPG, PNG) are allowed"


# ══════════════════════════════════════════════════════════════════════════
# Tasks
# ══════════════════════════════════════════════════════════════════════════

class TestTaskEndpoints:
    """Tests for the task endpoints."""

    @pytest.mark.asyncio
    async def test_create_task_multipart(self, client, create_user, create_category):
        """A multipart task should copy the category fee and keep its images."""
        requester = await create_user(ROLE_REQUESTER)
        await create_category("Repair", posting_fee=15000)

        response = await client.post(
            "/api/tasks", data=task_form(), files=task_images(3), headers=auth_headers(requester)
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["postingFee"] == 15000
        assert data["status"] == "pending"
        assert data["location"] == {"province": "Hue", "ward": "Phu Hoi"}
        assert len(data["images"]) == 3
        assert data["requester"]["id"] == str(requester.id)

        mine = await client.get("/api/tasks/my", headers=auth_headers(requester))
        assert mine.json()["count"] == 1

    @pytest.mark.asyncio
    async def test_create_task_needs_two_images(self, client, create_user, create_category):
        """A single image should be rejected."""
        requester = await create_user(ROLE_REQUESTER)
        await create_category("Repair")
        response = await client.post(
            "/api/tasks", data=task_form(), files=task_images(1), headers=auth_headers(requester)
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Please upload at least 2 images of the task"

    @pytest.mark.asyncio
    async def test_search_and_detail(self, client, create_user, create_task):
        """Search should combine filters and skip completed tasks."""
        requester = await create_user(ROLE_REQUESTER)
        tasker = await create_user(ROLE_TASKER)
        cheap = await create_task(requester, title="Cheap job", price=50000)
        await create_task(requester, title="Pricey job", price=900000)
        await create_task(requester, title="Cheap but done", price=10000, status=STATUS_COMPLETED)
        headers = auth_headers(tasker)

        response = await client.get(
            "/api/tasks/search", params={"keyword": "cheap", "maxPrice": 100000}, headers=headers
        )
        assert response.status_code == 200
        assert response.json()["count"] == 1
        assert response.json()["data"][0]["id"] == str(cheap.id)

        detail = await client.get(f"/api/tasks/{cheap.id}", headers=headers)
        assert detail.json()["data"]["title"] == "Cheap job"

    @pytest.mark.asyncio
    async def test_unknown_and_malformed_task_ids(self, client, create_user):
        """Unknown ids should be 404, malformed ones 400."""
        user = await create_user(ROLE_TASKER)
        missing = await client.get(f"/api/tasks/{uuid.uuid4()}", headers=auth_headers(user))
        assert missing.status_code == 404
        assert missing.json()["message"] == "Task not found"

        malformed = await client.get("/api/tasks/not-a-uuid", headers=auth_headers(user))
        assert malformed.status_code == 400
        assert malformed.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_owner_lifecycle(self, client, create_user, create_task):
        """The owner should edit, prove payment, complete and delete a task."""
        requester = await create_user(ROLE_REQUESTER)
        stranger = await create_user(ROLE_REQUESTER)
        task = await create_task(requester)
        headers = auth_headers(requester)

        edit = await client.put(f"/api/tasks/{task.id}", json={"price": 123}, headers=headers)
        assert edit.json()["data"]["price"] == 123

        forbidden = await client.put(
            f"/api/tasks/{task.id}", json={"price": 1}, headers=auth_headers(stranger)
        )
        assert forbidden.status_code == 403
        assert forbidden.json()["message"] == "Not authorized to update this task"

        proof = await client.post(
            f"/api/tasks/{task.id}/payment-proof",
            files={"paymentProof": ("receipt.jpg", JPEG_BYTES, "image/jpeg")},
            headers=headers,
        )
        assert proof.status_code == 200
        assert proof.json()["data"]["paymentProofUrl"].startswith("/uploads/payments/payment-")

        complete = await client.put(f"/api/tasks/{task.id}/complete", headers=headers)
        assert complete.json()["data"]["status"] == "completed"

        reopen = await client.put(f"/api/tasks/{task.id}/status", json={"status": "pending"}, headers=headers)
        assert reopen.status_code == 400

        deleted = await client.delete(f"/api/tasks/{task.id}", headers=headers)
        assert deleted.status_code == 200
        assert deleted.json() == {"success": True, "message": "Task deleted successfully"}


# ══════════════════════════════════════════════════════════════════════════
# Messages & Favorites
# ══════════════════════════════════════════════════════════════════════════

class TestMessagingEndpoints:
    """Tests for the message and favorite endpoints."""

    @pytest.mark.asyncio
    async def test_conversation_flow(self, client, create_user, create_task):
        """Sending, listing, opening and reading a conversation should agree."""
        requester = await create_user(ROLE_REQUESTER)
        tasker = await create_user(ROLE_TASKER)
        task = await create_task(requester)

        sent = await client.post(
            "/api/messages",
            json={"taskId": str(task.id), "receiverId": str(requester.id), "content": "Can I help?"},
            headers=auth_headers(tasker),
        )
        assert sent.status_code == 201
        message_id = sent.json()["data"]["id"]

        conversations = await client.get("/api/messages/conversations", headers=auth_headers(requester))
        body = conversations.json()
        assert body["count"] == 1
        assert body["data"][0]["unreadCount"] == 1
        assert body["data"][0]["otherUser"]["id"] == str(tasker.id)
        assert body["data"][0]["lastMessage"] == "Can I help?"

        detail = await client.get(
            f"/api/messages/{task.id}/{tasker.id}", headers=auth_headers(requester)
        )
        assert detail.json()["count"] == 1
        assert detail.json()["data"]["task"]["id"] == str(task.id)

        again = await client.get("/api/messages/conversations", headers=auth_headers(requester))
        assert again.json()["data"][0]["unreadCount"] == 0

        read = await client.put(f"/api/messages/{message_id}/read", headers=auth_headers(requester))
        assert read.json()["message"] == "Message marked as read"

        not_mine = await client.put(f"/api/messages/{message_id}/read", headers=auth_headers(tasker))
        assert not_mine.status_code == 403

    @pytest.mark.asyncio
    async def test_send_missing_fields(self, client, create_user):
        """A message without task and receiver should be a 400."""
        user = await create_user(ROLE_TASKER)
        response = await client.post("/api/messages", json={"content": "hi"}, headers=auth_headers(user))
        assert response.status_code == 400
        assert response.json()["message"] == "Please provide taskId, receiverId, and content"

    @pytest.mark.asyncio
    async def test_favorites(self, client, create_user, create_task):
        """Add, check, list and remove should round through the API."""
        requester = await create_user(ROLE_REQUESTER)
        tasker = await create_user(ROLE_TASKER)
        task = await create_task(requester)
        headers = auth_headers(tasker)

        added = await client.post("/api/favorites", json={"taskId": str(task.id)}, headers=headers)
        assert added.status_code == 201

        duplicate = await client.post("/api/favorites", json={"taskId": str(task.id)}, headers=headers)
        assert duplicate.status_code == 400
        assert duplicate.json()["error"] == "conflict"

        check = await client.get(f"/api/favorites/check/{task.id}", headers=headers)
        assert check.json()["data"] == {"isFavorited": True}

        listing = await client.get("/api/favorites", headers=headers)
        assert listing.json()["count"] == 1

        removed = await client.delete(f"/api/favorites/{task.id}", headers=headers)
        assert removed.json()["message"] == "Task removed from favorites"

        gone = await client.delete(f"/api/favorites/{task.id}", headers=headers)
        assert gone.status_code == 404


# ══════════════════════════════════════════════════════════════════════════
# Reference, Admin, Infrastructure
# ══════════════════════════════════════════════════════════════════════════

class TestAdminAndPublicEndpoints:
    """Tests for reference, admin and infrastructure endpoints."""

    @pytest.mark.asyncio
    async def test_reference_data_is_public(self, client, create_category):
        """Categories and locations should need no token."""
        await create_category("Repair", posting_fee=15000)

        categories = await client.get("/api/categories")
        assert categories.status_code == 200
        assert categories.json()["count"] == 1
        assert categories.json()["data"][0]["postingFee"] == 15000

        locations = await client.get("/api/locations")
        assert locations.json() == {"success": True, "count": 0, "data": []}

    @pytest.mark.asyncio
    async def test_admin_seed_stats_and_reset(self, client, create_user):
        """Seed, stats and reset should work for an admin."""
        admin = await create_user(ROLE_ADMIN)
        headers = auth_headers(admin)

        seeded = await client.post("/api/admin/seed", json={"comprehensive": True}, headers=headers)
        assert seeded.status_code == 200
        assert seeded.json()["data"]["tasks"] == 10

        stats = await client.get("/api/admin/stats", headers=headers)
        assert stats.json()["data"]["tasks"]["total"] == 10

        users = await client.get("/api/admin/users", headers=headers)
        assert users.json()["count"] == 12

        reset = await client.post("/api/admin/reset", headers=headers)
        assert reset.status_code == 200
        assert reset.json()["data"]["deleted"]["users"] == 12

        # The calling admin went with the reset
        after = await client.get("/api/admin/stats", headers=headers)
        assert after.status_code == 401

    @pytest.mark.asyncio
    async def test_admin_seed_without_body(self, client, create_user):
        """Seeding without a body should use the defaults."""
        admin = await create_user(ROLE_ADMIN)
        response = await client.post("/api/admin/seed", headers=auth_headers(admin))
        assert response.status_code == 200
        assert response.json()["data"]["categories"] == 8

    @pytest.mark.asyncio
    async def test_health(self, client):
        """Health should report a connected database."""
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["database"] == "connected"

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, client):
        """The caller's X-Request-ID should come back unchanged."""
        response = await client.get("/api/categories", headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"

    @pytest.mark.asyncio
    async def test_unknown_route_envelope(self, client):
        """Unknown routes should answer with the error envelope."""
        response = await client.get("/api/nowhere", headers={"X-Request-ID": "r-1"})
        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "error": "not_found",
            "message": "Route not found",
            "requestId": "r-1",
        }

    @pytest.mark.asyncio
    async def test_upload_path_traversal(self, client):
        """Paths escaping the upload root should never be served."""
        response = await client.get("/uploads/..%2F..%2Fetc%2Fpasswd")
        assert response.status_code in (400, 404)
