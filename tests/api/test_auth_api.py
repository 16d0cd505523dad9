"""Endpoint tests for registration, login and profile updates."""


class TestRegister:
    def test_returns_token_and_profile(self, client):
        response = client.post("/api/auth/register", json={"name": "Ana", "email": "Ana@Example.com",
                                                            "password": "secret123", "athlete_type": "cyclist"})
        assert response.status_code == 201
        body = response.json()
        assert body["token"]
        assert body["user"]["email"] == "ana@example.com"
        assert body["user"]["athlete_type"] == "cyclist"
        assert body["user"]["fitness_level"] == "intermediate"
        assert "hashed_password" not in body["user"]

    def test_duplicate_email(self, client, register):
        register(email="dup@example.com")
        response = client.post("/api/auth/register",
                               json={"name": "Again", "email": "dup@example.com", "password": "secret123"})
        assert response.status_code == 400

    def test_short_password(self, client):
        response = client.post("/api/auth/register",
                               json={"name": "Short", "email": "short@example.com", "password": "123"})
        assert response.status_code == 422


class TestLogin:
    def test_json_login(self, client, register):
        register(email="login@example.com", password="secret123")
        response = client.post("/api/auth/login", json={"email": "login@example.com", "password": "secret123"})
        assert response.status_code == 200
        assert response.json()["user"]["email"] == "login@example.com"

    def test_wrong_password(self, client, register):
        register(email="login@example.com", password="secret123")
        response = client.post("/api/auth/login", json={"email": "login@example.com", "password": "nope-nope"})
        assert response.status_code == 401

    def test_oauth2_form_login(self, client, register):
        register(email="form@example.com", password="secret123")
        response = client.post("/api/auth/token", data={"username": "form@example.com", "password": "secret123"})
        assert response.status_code == 200
        assert response.json()["token_type"] == "bearer"

        me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {response.json()['access_token']}"})
        assert me.json()["email"] == "form@example.com"


class TestCurrentUser:
    def test_me(self, client, auth_headers):
        response = client.get("/api/auth/me", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["name"] == "Runner"

    def test_missing_token(self, client):
        assert client.get("/api/auth/me").status_code == 401

    def test_garbage_token(self, client):
        response = client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"


class TestProfile:
    def test_partial_update(self, client, auth_headers):
        response = client.put("/api/users/profile", headers=auth_headers, json={"age": 34, "weight": 70.5})
        assert response.status_code == 200
        body = response.json()
        assert body["age"] == 34
        assert body["weight"] == 70.5
        assert body["name"] == "Runner"

    def test_email_cannot_change(self, client, auth_headers):
        client.put("/api/users/profile", headers=auth_headers, json={"email": "new@example.com"})
        assert client.get("/api/auth/me", headers=auth_headers).json()["email"] == "runner@example.com"
