"""Tests for the profile and password endpoints."""

from tests.conftest import STRONG_PASSWORD, bearer, register


def profile_body(**overrides) -> dict:
    body = {"first_name": "Alicia", "last_name": "Smith", "email": "alicia@example.com"}
    body.update(overrides)
    return body


class TestProfile:

    def test_update_profile(self, client):
        token = register(client)
        response = client.put("/api/users/profile", json=profile_body(), headers=bearer(token))
        assert response.status_code == 200
        data = response.json()
        assert data["first_name"] == "Alicia"
        assert data["email"] == "alicia@example.com"

    def test_rename_keeps_old_activity_names(self, client):
        """History shows the name the actor had at the time."""
        headers = bearer(register(client))
        client.post("/api/recipes", json={"title": "Soup", "description": "d"}, headers=headers)
        client.put("/api/users/profile", json=profile_body(), headers=headers)
        client.post("/api/recipes", json={"title": "Stew", "description": "d"}, headers=headers)

        names = [a["user_name"] for a in client.get("/api/activities").json()["activities"]]
        assert names == ["Alicia Smith", "Alice Smith"]

    def test_email_taken(self, client):
        register(client, email="bob@example.com", first_name="Bob")
        token = register(client)
        response = client.put(
            "/api/users/profile",
            json=profile_body(email="BOB@example.com"),
            headers=bearer(token),
        )
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Email already exists"

    def test_requires_token(self, client):
        assert client.put("/api/users/profile", json=profile_body()).status_code == 401


class TestPassword:

    def test_change_password(self, client):
        token = register(client)
        response = client.put(
            "/api/users/password",
            json={"current_password": STRONG_PASSWORD, "new_password": "N3w!Passw0rd"},
            headers=bearer(token),
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Password updated successfully"

        login = client.post(
            "/api/auth/login",
            json={"email": "alice@example.com", "password": "N3w!Passw0rd"},
        )
        assert login.status_code == 200

    def test_wrong_current_password(self, client):
        token = register(client)
        response = client.put(
            "/api/users/password",
            json={"current_password": "Wr0ng!Pass", "new_password": "N3w!Passw0rd"},
            headers=bearer(token),
        )
        assert response.status_code == 401

    def test_weak_new_password(self, client):
        token = register(client)
        response = client.put(
            "/api/users/password",
            json={"current_password": STRONG_PASSWORD, "new_password": "weak"},
            headers=bearer(token),
        )
        assert response.status_code == 400
        assert response.json()["error"]["details"]
