"""
End-to-end tests through the FastAPI app (TestClient).
"""

import logging

import pytest


def _bearer(session_id: str) -> dict:
    return {"Authorization": f"Bearer {session_id}"}


def _signup(client, username: str, password: str = "secret1") -> str:
    resp = client.post(
        "/auth/signup",
        json={"username": username, "email": f"{username}@x.com", "password": password},
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["sessionId"]


class TestAuthEndpoints:
    def test_signup_response_shape(self, client):
        resp = client.post(
            "/auth/signup",
            json={"username": "alice", "email": "alice@x.com", "password": "secret1"},
        )
        assert resp.status_code == 201
        body = resp.json()
        assert set(body) == {"user", "sessionId"}
        assert set(body["user"]) == {"id", "username", "email"}
        assert body["user"]["username"] == "alice"

    def test_signup_validation_and_conflict(self, client):
        assert client.post("/auth/signup", json={"username": "alice"}).status_code == 400
        short = client.post(
            "/auth/signup",
            json={"username": "alice", "email": "alice@x.com", "password": "123"},
        )
        assert short.status_code == 400
        assert "error" in short.json()

        _signup(client, "alice")
        dup = client.post(
            "/auth/signup",
            json={"username": "alice", "email": "new@x.com", "password": "secret1"},
        )
        assert dup.status_code == 409
        assert dup.json() == {"error": "Username or email already exists"}

    def test_malformed_body_is_400(self, client):
        resp = client.post("/auth/signup", json={"username": 5, "email": [], "password": {}})
        assert resp.status_code == 400
        assert "error" in resp.json()

    def test_login(self, client):
        first = _signup(client, "alice")
        resp = client.post("/auth/login", json={"username": "alice", "password": "secret1"})
        assert resp.status_code == 200
        assert resp.json()["sessionId"] != first
        assert resp.json()["user"]["username"] == "alice"

    def test_login_failures(self, client):
        _signup(client, "alice")
        assert client.post("/auth/login", json={"username": "alice"}).status_code == 400

        unknown = client.post("/auth/login", json={"username": "bob", "password": "secret1"})
        wrong = client.post("/auth/login", json={"username": "alice", "password": "nope123"})
        assert unknown.status_code == wrong.status_code == 401
        assert unknown.json() == wrong.json() == {"error": "Invalid username or password"}

    def test_password_with_lone_surrogate(self, client):
        json_headers = {"Content-Type": "application/json"}
        created = client.post(
            "/auth/signup",
            content=b'{"username":"al","email":"a@x.com","password":"\\ud800secret"}',
            headers=json_headers,
        )
        assert created.status_code == 201, created.text

        login = client.post(
            "/auth/login",
            content=b'{"username":"al","password":"\\ud800secret"}',
            headers=json_headers,
        )
        assert login.status_code == 200
        assert login.json()["user"]["username"] == "al"

        wrong = client.post(
            "/auth/login",
            content=b'{"username":"al","password":"\\ud801secret"}',
            headers=json_headers,
        )
        assert wrong.status_code == 401

    def test_me(self, client):
        session = _signup(client, "alice")
        resp = client.get("/auth/me", headers=_bearer(session))
        assert resp.status_code == 200
        assert resp.json()["user"]["username"] == "alice"

    @pytest.mark.parametrize(
        "headers",
        [{}, {"Authorization": "Bearer "}, {"Authorization": "Token abc"}, {"Authorization": "Bearer nope"}],
    )
    def test_me_unauthenticated(self, client, headers):
        assert client.get("/auth/me", headers=headers).status_code == 401

    def test_me_with_dangling_session(self, client, app):
        session = _signup(client, "alice")
        state = app.state.services
        user_id = state.sessions.get_user_id(session)
        state.users.remove(user_id)
        resp = client.get("/auth/me", headers=_bearer(session))
        assert resp.status_code == 401
        assert session not in state.sessions

    def test_logout_always_204(self, client):
        session = _signup(client, "alice")
        resp = client.post("/auth/logout", headers=_bearer(session))
        assert resp.status_code == 204
        assert resp.content == b""
        assert client.post("/auth/logout", headers=_bearer(session)).status_code == 204
        assert client.post("/auth/logout").status_code == 204
        assert client.get("/auth/me", headers=_bearer(session)).status_code == 401


class TestTaskEndpoints:
    def test_requires_authentication(self, client):
        assert client.get("/tasks").status_code == 401
        assert client.post("/tasks", json={"title": "t", "description": "d"}).status_code == 401
        assert client.put("/tasks/x", json={"title": "t"}).status_code == 401
        assert client.delete("/tasks/x").status_code == 401
        assert client.patch("/tasks/x/complete").status_code == 401
        assert client.get("/tasks/x").status_code == 401
        body = client.get("/tasks").json()
        assert body == {"error": "Authentication required"}

    def test_crud_flow(self, client):
        headers = _bearer(_signup(client, "alice"))

        created = client.post(
            "/tasks", json={"title": "t1", "description": "d1"}, headers=headers,
        )
        assert created.status_code == 201
        task = created.json()
        assert task["status"] == "pending"
        assert task["isComplete"] is False
        assert {"id", "userId", "createdAt"} <= set(task)

        listed = client.get("/tasks", headers=headers).json()
        assert [t["id"] for t in listed] == [task["id"]]

        fetched = client.get(f"/tasks/{task['id']}", headers=headers)
        assert fetched.status_code == 200
        assert fetched.json()["title"] == "t1"

        updated = client.put(
            f"/tasks/{task['id']}", json={"description": "d2", "title": ""}, headers=headers,
        )
        assert updated.status_code == 200
        assert updated.json()["title"] == "t1"
        assert updated.json()["description"] == "d2"

        toggled = client.patch(f"/tasks/{task['id']}/complete", headers=headers)
        assert toggled.status_code == 200
        assert toggled.json()["isComplete"] is True
        assert toggled.json()["status"] == "complete"

        deleted = client.delete(f"/tasks/{task['id']}", headers=headers)
        assert deleted.status_code == 204
        assert client.get("/tasks", headers=headers).json() == []
        assert client.delete(f"/tasks/{task['id']}", headers=headers).status_code == 404

    def test_create_validation(self, client):
        headers = _bearer(_signup(client, "alice"))
        assert client.post("/tasks", json={"title": "t"}, headers=headers).status_code == 400
        assert client.post(
            "/tasks", json={"title": "t", "description": "d", "status": "done"}, headers=headers,
        ).status_code == 400

    def test_client_supplied_user_id_ignored(self, client, app):
        session = _signup(client, "alice")
        owner = app.state.services.sessions.get_user_id(session)
        resp = client.post(
            "/tasks",
            json={"title": "t", "description": "d", "userId": "someone-else"},
            headers=_bearer(session),
        )
        assert resp.json()["userId"] == owner


class TestScenarios:
    def test_users_cannot_see_each_others_tasks(self, client):
        s1 = _signup(client, "alice")
        created = client.post(
            "/tasks", json={"title": "t1", "description": "d1"}, headers=_bearer(s1),
        )
        assert created.status_code == 201
        task_id = created.json()["id"]

        s2 = _signup(client, "bob")
        assert client.get("/tasks", headers=_bearer(s2)).json() == []

        for method, path, kwargs in [
            ("get", f"/tasks/{task_id}", {}),
            ("put", f"/tasks/{task_id}", {"json": {"title": "mine"}}),
            ("patch", f"/tasks/{task_id}/complete", {}),
            ("delete", f"/tasks/{task_id}", {}),
        ]:
            resp = client.request(method.upper(), path, headers=_bearer(s2), **kwargs)
            assert resp.status_code == 404
            assert resp.json() == {"error": "Task not found or access denied"}

        missing = client.get("/tasks/no-such-task", headers=_bearer(s2))
        assert missing.json() == {"error": "Task not found or access denied"}

        still_there = client.get(f"/tasks/{task_id}", headers=_bearer(s1)).json()
        assert still_there["title"] == "t1"
        assert still_there["isComplete"] is False

    def test_logout_then_tasks_is_401(self, client):
        s1 = _signup(client, "alice")
        assert client.get("/tasks", headers=_bearer(s1)).status_code == 200
        client.post("/auth/logout", headers=_bearer(s1))
        resp = client.get("/tasks", headers=_bearer(s1))
        assert resp.status_code == 401
        assert resp.json() == {"error": "Invalid or expired session"}

    def test_apps_do_not_share_state(self, client, settings):
        from fastapi.testclient import TestClient
        from main import create_app

        session = _signup(client, "alice")
        other = TestClient(create_app(settings))
        assert other.get("/auth/me", headers=_bearer(session)).status_code == 401


class TestInfra:
    def test_health(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    def test_access_log_names_resolved_user(self, client, app, caplog):
        session = _signup(client, "alice")
        user_id = app.state.services.sessions.get_user_id(session)
        with caplog.at_level(logging.INFO, logger="api.middleware"):
            caplog.clear()
            client.get("/tasks", headers=_bearer(session))
        lines = [r.getMessage() for r in caplog.records if r.name == "api.middleware"]
        assert lines == [f"GET /tasks 200 (user={user_id})"]

    def test_access_log_warns_on_rejected_session(self, client, caplog):
        with caplog.at_level(logging.INFO, logger="api.middleware"):
            caplog.clear()
            client.get("/tasks", headers=_bearer("bogus"))
        records = [r for r in caplog.records if r.name == "api.middleware"]
        assert len(records) == 1
        assert records[0].levelno == logging.WARNING
        assert records[0].getMessage() == "GET /tasks rejected (user=anonymous)"
