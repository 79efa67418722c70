"""Tests for the recipe comment endpoints."""

from tests.conftest import bearer, register


def new_recipe(client, headers) -> str:
    response = client.post(
        "/api/recipes",
        json={"title": "Soup", "description": "Hot"},
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()["recipe"]["id"]


class TestComments:

    def test_add_and_list(self, client):
        alice = bearer(register(client))
        bob = bearer(register(client, email="bob@example.com", first_name="Bob", last_name="Jones"))
        recipe_id = new_recipe(client, alice)

        response = client.post(
            "/api/comments",
            json={"recipe_id": recipe_id, "comment": "Looks great"},
            headers=bob,
        )
        assert response.status_code == 201
        assert response.json()["message"] == "Comment added"
        assert response.json()["comment"]["author_name"] == "Bob Jones"

        client.post("/api/comments", json={"recipe_id": recipe_id, "comment": "Thanks"}, headers=alice)

        listed = client.get(f"/api/comments/{recipe_id}")
        assert listed.status_code == 200
        assert [(c["author_name"], c["comment"]) for c in listed.json()["comments"]] == [
            ("Alice Smith", "Thanks"),
            ("Bob Jones", "Looks great"),
        ]

    def test_author_name_matches_public_profile(self, client):
        """Comment authors are named the way the public profile names them."""
        alice = bearer(register(client))
        recipe_id = new_recipe(client, alice)
        comment = client.post(
            "/api/comments",
            json={"recipe_id": recipe_id, "comment": "Hi"},
            headers=alice,
        ).json()["comment"]

        profile = client.get(f"/api/auth/public/{comment['user_id']}", headers=alice).json()

        assert profile["user"]["display_name"] == comment["author_name"]

    def test_requires_token(self, client):
        response = client.post("/api/comments", json={"recipe_id": "r1", "comment": "Hi"})
        assert response.status_code == 401

    def test_requires_recipe_and_comment(self, client):
        alice = bearer(register(client))
        response = client.post("/api/comments", json={"comment": "Hi"}, headers=alice)
        assert response.status_code == 400
        assert response.json()["error"]["message"] == "Recipe ID and comment are required"

    def test_unknown_recipe(self, client):
        alice = bearer(register(client))
        response = client.post(
            "/api/comments",
            json={"recipe_id": "missing", "comment": "Hi"},
            headers=alice,
        )
        assert response.status_code == 404

    def test_list_is_public(self, client):
        response = client.get("/api/comments/anything")
        assert response.status_code == 200
        assert response.json() == {"comments": []}
