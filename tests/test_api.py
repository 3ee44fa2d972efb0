"""
Integration tests for the hypermedia API.

Drives the endpoints through TestClient the way a HAL-FORMS client
would: follow templates, post hidden values back and use ``_method``
overrides for DELETE and PUT.
"""

import asyncio
import json

from fastapi.testclient import TestClient

from launchpad.core.constants import ERROR_AUTH_HEADER_FORMAT, ERROR_AUTH_REQUIRED, SESSION_COOKIE_NAME
from launchpad.hal.utils import get_template
from launchpad.models.user import Role



def promote(app, user_id: str, role: Role) -> None:
    repo = app.state.test_repos["users"]

    async def update():
        user = await repo.get(user_id)
        await repo.upsert(user.model_copy(update={"role": role}))

    asyncio.run(update())


def create_key(client: TestClient, user_id: str, label: str = "ci") -> dict:
    response = client.post(f"/users/{user_id}/api-keys/create", json={"label": label})
    assert response.status_code == 201, response.text
    return response.json()


class TestRootEndpoints:
    """Test the entry point, sitemap and health check."""

    def test_anonymous_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("application/hal+json")
        body = response.json()
        assert body["authenticated"] is False
        assert body["_templates"]["auth:federate"]["target"] == "/auth/federate"

    def test_signed_in_root(self, signed_in):
        client, identity = signed_in
        body = client.get("/").json()

        assert body["authenticated"] is True
        assert body["_links"]["user"]["href"] == f"/users/{identity['userId']}"

    def test_sitemap(self, client):
        body = client.get("/sitemap").json()

        assert body["title"] == "API Sitemap"
        assert body["_nav"][0]["title"] == "Public"

    def test_health(self, client):
        body = client.get("/health").json()

        assert body["status"] == "healthy"
        assert body["routes"] > 0

    def test_trace_id_is_echoed(self, client):
        response = client.get("/health", headers={"X-Trace-Id": "trace-123"})
        assert response.headers["X-Trace-Id"] == "trace-123"


class TestAuthEndpoints:
    """Test federate, verify and revoke."""

    def test_federate_sets_session_cookie(self, client, sign_in):
        identity = sign_in(client, email="grace@example.com")

        assert identity["email"] == "grace@example.com"
        assert identity["_embedded"]["access"]["type"] == "session"
        assert "revoke" in identity["_templates"]
        assert client.cookies.get(SESSION_COOKIE_NAME)

    def test_federate_requires_bearer(self, client):
        response = client.post("/auth/federate", json={"sessionKey": "k" * 32, "email": "a@b.co"})
        assert response.status_code == 401

    def test_federate_rejects_unknown_token(self, client):
        response = client.post(
            "/auth/federate",
            json={"sessionKey": "k" * 32, "email": "a@b.co"},
            headers={"Authorization": "Bearer wrong"},
        )

        assert response.status_code == 401
        assert response.json()["detail"] == "Bearer failed validation"

    def test_federate_validates_body(self, client, federation_token):
        response = client.post(
            "/auth/federate",
            json={"sessionKey": "short", "email": "a@b.co"},
            headers={"Authorization": f"Bearer {federation_token}"},
        )

        assert response.status_code == 400
        assert response.json()["violations"][0]["field"] == "sessionKey"

    def test_verify_with_cookie(self, signed_in):
        client, identity = signed_in
        response = client.post("/auth/verify")

        assert response.status_code == 200
        assert response.json()["userId"] == identity["userId"]

    def test_verify_with_session_token_header(self, client, sign_in):
        session_key = "s" * 32
        identity = sign_in(client, session_key=session_key)
        client.cookies.clear()

        response = client.post(
            "/auth/verify", headers={"Authorization": f"SessionToken {session_key}{identity['userId']}"}
        )
        assert response.status_code == 200

    def test_verify_rejects_api_key(self, signed_in):
        client, identity = signed_in
        key = create_key(client, identity["userId"])

        response = client.post("/auth/verify", headers={"Authorization": f"ApiKey {key['apiKey']}"})
        assert response.status_code == 401

    def test_revoke_ends_session(self, signed_in):
        client, _ = signed_in
        response = client.post("/auth/revoke")

        assert response.status_code == 200
        assert response.json()["message"] == "Session revoked successfully"
        assert response.json()["_links"]["federate"]["href"] == "/auth/federate"
        assert client.post("/auth/verify").status_code == 401

    def test_protected_endpoint_without_credentials(self, client):
        response = client.get("/users/u1")
        body = response.json()

        assert response.status_code == 401
        assert body["detail"] == ERROR_AUTH_REQUIRED
        assert body["_links"]["home"]["href"] == "/"
        assert body["traceId"]

    def test_malformed_authorization_header(self, client):
        response = client.get("/users/u1", headers={"Authorization": "Basic abc"})

        assert response.status_code == 401
        assert response.json()["detail"] == ERROR_AUTH_HEADER_FORMAT


class TestUserEndpoints:
    """Test profile read and update."""

    def test_get_own_profile(self, signed_in):
        client, identity = signed_in
        response = client.get(f"/users/{identity['userId']}")

        assert response.status_code == 200
        assert response.headers["ETag"]
        assert response.json()["_templates"]["edit"]["title"] == "Edit Profile"

    def test_update_with_put_override(self, signed_in):
        client, identity = signed_in
        edit = get_template(client.get(f"/users/{identity['userId']}").json(), "edit")

        response = client.post(edit.target, json={"firstName": "Grace", "lastName": "Hopper", "_method": "put"})

        assert response.status_code == 200
        assert response.json()["firstName"] == "Grace"
        assert client.get(f"/users/{identity['userId']}").json()["lastName"] == "Hopper"

    def test_base_user_cannot_change_role(self, signed_in):
        client, identity = signed_in
        response = client.post(f"/users/{identity['userId']}", json={"role": 3})

        assert response.status_code == 403

    def test_admin_updates_features(self, app, signed_in):
        client, identity = signed_in
        promote(app, identity["userId"], Role.ADMIN)

        response = client.post(f"/users/{identity['userId']}", json={"features": ["Contacts", "Links"]})

        assert response.status_code == 200
        assert response.json()["features"] == ["Contacts", "Links"]

    def test_unknown_feature_is_a_validation_error(self, app, signed_in):
        client, identity = signed_in
        promote(app, identity["userId"], Role.ADMIN)

        response = client.post(f"/users/{identity['userId']}", json={"features": ["Teleport"]})

        assert response.status_code == 400
        assert response.json()["violations"][0]["field"] == "features"

    def test_other_users_profile_is_forbidden(self, app, signed_in, sign_in):
        client, _ = signed_in
        other = sign_in(TestClient(app), email="other@example.com")

        assert client.get(f"/users/{other['userId']}").status_code == 403

    def test_account_manager_reads_other_profiles(self, app, signed_in, sign_in):
        client, identity = signed_in
        other = sign_in(TestClient(app), email="other@example.com")
        promote(app, identity["userId"], Role.ACCOUNT_MANAGER)

        response = client.get(f"/users/{other['userId']}")

        assert response.status_code == 200
        assert "edit" not in response.json()["_templates"]

    def test_missing_user(self, app, signed_in):
        client, identity = signed_in
        promote(app, identity["userId"], Role.ADMIN)

        assert client.get("/users/nobody").status_code == 404


class TestApiKeyEndpoints:
    """Test the API key collection."""

    def test_create_shows_key_once(self, signed_in):
        client, identity = signed_in
        created = create_key(client, identity["userId"], "deploy")

        assert created["message"] == "API key created successfully"
        assert len(created["apiKey"]) == 43
        assert created["keyPrefix"] == created["apiKey"][:8]
        assert created["_templates"]["collection"]["target"] == f"/users/{identity['userId']}/api-keys/list"

    def test_list_and_conditional_request(self, signed_in):
        client, identity = signed_in
        create_key(client, identity["userId"])
        list_url = f"/users/{identity['userId']}/api-keys/list"

        response = client.post(list_url)
        body = response.json()
        assert response.status_code == 200
        assert body["count"] == 1
        assert set(body["_templates"]) == {"self", "default", "bulk-delete"}

        cached = client.post(list_url, headers={"If-None-Match": response.headers["ETag"]})
        assert cached.status_code == 304

    def test_create_through_default_template(self, signed_in):
        client, identity = signed_in
        collection = client.post(f"/users/{identity['userId']}/api-keys/list").json()
        create = get_template(collection, "default")

        response = client.post(create.target, json={"label": "from template"})

        assert response.status_code == 201
        assert client.post(collection["_links"]["self"]["href"]).json()["count"] == 1

    def test_bulk_delete_with_method_override(self, signed_in):
        client, identity = signed_in
        first = create_key(client, identity["userId"], "one")
        second = create_key(client, identity["userId"], "two")
        collection = client.post(f"/users/{identity['userId']}/api-keys/list").json()
        bulk_delete = get_template(collection, "bulk-delete")

        response = client.post(
            bulk_delete.target,
            json={"apiKeyIds": [first["apiKeyId"], second["apiKeyId"]], "_method": "delete"},
        )

        assert response.status_code == 200
        assert response.json()["deletedCount"] == 2
        assert response.json()["message"] == f"Deleted 2 API keys for user {identity['userId']}"

    def test_item_delete_template(self, signed_in):
        client, identity = signed_in
        created = create_key(client, identity["userId"])
        item = client.get(f"/users/{identity['userId']}/api-keys/{created['apiKeyId']}").json()
        delete = get_template(item, "delete")

        response = client.post(delete.target, json={delete.properties[0].name: delete.properties[0].value})

        assert response.json()["deletedCount"] == 1
        assert client.get(f"/users/{identity['userId']}/api-keys/{created['apiKeyId']}").status_code == 404

    def test_api_key_cannot_create_keys(self, signed_in):
        client, identity = signed_in
        key = create_key(client, identity["userId"])
        client.cookies.clear()

        response = client.post(
            f"/users/{identity['userId']}/api-keys/create",
            json={"label": "nope"},
            headers={"Authorization": f"ApiKey {key['apiKey']}"},
        )

        assert response.status_code == 403
        listed = client.post(
            f"/users/{identity['userId']}/api-keys/list",
            headers={"Authorization": f"ApiKey {key['apiKey']}"},
        )
        assert listed.status_code == 200

    def test_other_users_keys_are_forbidden(self, app, signed_in, sign_in):
        client, _ = signed_in
        other = sign_in(TestClient(app), email="other@example.com")

        assert client.post(f"/users/{other['userId']}/api-keys/list").status_code == 403

    def test_invalid_paging_instruction(self, signed_in):
        client, identity = signed_in
        response = client.post(
            f"/users/{identity['userId']}/api-keys/list", json={"pagingInstruction": "{not json"}
        )

        assert response.status_code == 400
        assert response.json()["violations"][0]["field"] == "pagingInstruction"

    def test_cursor_instruction_is_rejected(self, signed_in):
        client, identity = signed_in
        response = client.post(
            f"/users/{identity['userId']}/api-keys/list",
            json={"pagingInstruction": json.dumps({"cursor": "abc"})},
        )

        assert response.status_code == 400

    def test_create_requires_label(self, signed_in):
        client, identity = signed_in
        response = client.post(f"/users/{identity['userId']}/api-keys/create", json={})

        assert response.status_code == 400
        assert response.json()["violations"][0]["field"] == "label"


class TestSessionEndpoints:
    """Test the session collection."""

    def test_lists_current_session(self, signed_in):
        client, identity = signed_in
        body = client.post(f"/users/{identity['userId']}/sessions/list").json()

        assert body["count"] == 1
        session = body["_embedded"]["sessions"][0]
        assert session["sessionId"] == identity["_embedded"]["access"]["_links"]["self"]["href"].rsplit("/", 1)[1]
        assert "default" not in body["_templates"]

    def test_next_page_round_trip(self, app, signed_in, sign_in):
        client, identity = signed_in
        for _ in range(2):
            sign_in(TestClient(app), email=identity["email"])
        list_url = f"/users/{identity['userId']}/sessions/list"

        first_page = client.post(list_url, json={"pagingInstruction": json.dumps({"limit": 2})}).json()
        assert first_page["count"] == 2

        next_template = get_template(first_page, "next")
        hidden = next_template.get_property("pagingInstruction")
        second_page = client.post(next_template.target, json={"pagingInstruction": hidden.value}).json()

        assert second_page["count"] == 1
        assert "next" not in second_page["_templates"]
        assert "prev" in second_page["_templates"]
        first_ids = {item["sessionId"] for item in first_page["_embedded"]["sessions"]}
        assert second_page["_embedded"]["sessions"][0]["sessionId"] not in first_ids

    def test_key_instruction_is_rejected(self, signed_in):
        client, identity = signed_in
        response = client.post(
            f"/users/{identity['userId']}/sessions/list",
            json={"pagingInstruction": json.dumps({"lastEvaluatedKey": {"sessionId": "s1"}})},
        )

        assert response.status_code == 400

    def test_delete_other_session(self, app, signed_in, sign_in):
        client, identity = signed_in
        other_client = TestClient(app)
        sign_in(other_client, email=identity["email"])
        sessions = client.post(f"/users/{identity['userId']}/sessions/list").json()["_embedded"]["sessions"]
        newest = sessions[0]["sessionId"]

        response = client.post(
            f"/users/{identity['userId']}/sessions/delete", json={"sessionIds": [newest], "_method": "delete"}
        )

        assert response.status_code == 200
        assert response.json()["deletedCount"] == 1
        assert other_client.post("/auth/verify").status_code == 401
        assert client.post("/auth/verify").status_code == 200

    def test_support_lists_other_users_sessions(self, app, signed_in, sign_in):
        client, identity = signed_in
        other = sign_in(TestClient(app), email="other@example.com")
        promote(app, identity["userId"], Role.SUPPORT)

        response = client.post(f"/users/{other['userId']}/sessions/list")

        assert response.status_code == 200
        assert response.json()["count"] == 1

    def test_get_session_item(self, signed_in):
        client, identity = signed_in
        href = identity["_embedded"]["access"]["_links"]["self"]["href"]

        body = client.get(href).json()

        assert body["userId"] == identity["userId"]
        assert body["_templates"]["collection"]["title"] == "View Sessions"
