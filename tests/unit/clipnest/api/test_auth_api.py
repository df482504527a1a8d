class TestRegisterLogin:
    def test_register_returns_public_user(self, register):
        response = register()
        assert response.status_code == 201
        body = response.json()
        assert body["username"] == "alice"
        assert "password_hash" not in body
        assert "refresh_token" not in body

    def test_register_missing_field(self, client):
        response = client.post("/api/v1/auth/register", json={"username": "alice"})
        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    def test_register_duplicate(self, register):
        register()
        response = register(email="other@example.com")
        assert response.status_code == 409
        assert response.json()["error"] == "conflict"

    def test_login_sets_cookies(self, client, register):
        register()
        response = client.post("/api/v1/auth/login", json={"email": "alice@example.com", "password": "correct-horse"})
        assert response.status_code == 200
        assert response.cookies.get("access_token") == response.json()["access_token"]
        assert response.cookies.get("refresh_token") == response.json()["refresh_token"]

    def test_login_failure_is_generic(self, client, register):
        register()
        unknown = client.post("/api/v1/auth/login", json={"username": "nobody", "password": "correct-horse"})
        wrong = client.post("/api/v1/auth/login", json={"username": "alice", "password": "nope"})
        assert unknown.status_code == wrong.status_code == 401
        assert unknown.json() == wrong.json()

    def test_login_needs_identifier(self, client):
        response = client.post("/api/v1/auth/login", json={"password": "x"})
        assert response.status_code == 400


class TestSession:
    def test_me_with_bearer_and_cookie(self, client, login):
        user, headers, data = login()
        assert client.get("/api/v1/users/me", headers=headers).json()["id"] == user["id"]

        client.cookies.set("access_token", data["access_token"])
        assert client.get("/api/v1/users/me").status_code == 200

    def test_me_requires_auth(self, client):
        response = client.get("/api/v1/users/me")
        assert response.status_code == 401
        assert response.json()["error"] == "authentication_error"

    def test_bad_authorization_header(self, client):
        response = client.get("/api/v1/users/me", headers={"Authorization": "Token abc"})
        assert response.status_code == 401

    def test_refresh_rotation_and_reuse(self, client, login):
        _, _, data = login()
        first = client.post("/api/v1/auth/refresh", json={"refresh_token": data["refresh_token"]})
        assert first.status_code == 200
        rotated = first.json()["refresh_token"]
        assert rotated != data["refresh_token"]

        reused = client.post("/api/v1/auth/refresh", json={"refresh_token": data["refresh_token"]})
        assert reused.status_code == 401
        # reuse revoked the session, so the rotated token is dead too
        client.cookies.clear()
        assert client.post("/api/v1/auth/refresh", json={"refresh_token": rotated}).status_code == 401

    def test_refresh_from_cookie(self, client, login):
        _, _, data = login()
        client.cookies.set("refresh_token", data["refresh_token"])
        response = client.post("/api/v1/auth/refresh")
        assert response.status_code == 200

    def test_refresh_without_token(self, client):
        assert client.post("/api/v1/auth/refresh").status_code == 401

    def test_logout_revokes(self, client, login):
        _, headers, data = login()
        response = client.post("/api/v1/auth/logout", headers=headers)
        assert response.status_code == 200
        assert client.post("/api/v1/auth/refresh", json={"refresh_token": data["refresh_token"]}).status_code == 401

    def test_change_password(self, client, login):
        _, headers, _ = login()
        wrong = client.post(
            "/api/v1/auth/change-password",
            json={"old_password": "nope", "new_password": "battery-staple"},
            headers=headers,
        )
        assert wrong.status_code == 401
        ok = client.post(
            "/api/v1/auth/change-password",
            json={"old_password": "correct-horse", "new_password": "battery-staple"},
            headers=headers,
        )
        assert ok.status_code == 200
        relogin = client.post("/api/v1/auth/login", json={"username": "alice", "password": "battery-staple"})
        assert relogin.status_code == 200


class TestPlumbing:
    def test_health(self, client):
        response = client.get("/api/v1/health")
        assert response.json() == {"status": "ok"}
        assert "X-Request-ID" in response.headers

    def test_request_id_is_echoed(self, client):
        response = client.get("/api/v1/health", headers={"X-Request-ID": "abc123"})
        assert response.headers["X-Request-ID"] == "abc123"
