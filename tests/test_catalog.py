# tests/test_catalog.py

"""Categories plus the template users/items CRUD endpoints."""


class TestCategories:

    def test_create_derives_slug_and_defaults(self, client, register):
        _, headers = register("curator")
        response = client.post(
            "/api/categories",
            json={"name": "Machine  Learning", "description": "Models and data"},
            headers=headers,
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["slug"] == "machine-learning"
        assert data["color"] == "#007bff"
        assert data["icon"] == "💬"

    def test_lookup_by_id_or_slug(self, client, category_id):
        by_id = client.get(f"/api/categories/{category_id}").json()["data"]
        by_slug = client.get("/api/categories/python").json()["data"]
        assert by_id == by_slug

    def test_duplicate_name(self, client, register, category_id):
        _, headers = register("second")
        response = client.post(
            "/api/categories", json={"name": "Python", "description": "again"}, headers=headers
        )
        assert response.status_code == 400

    def test_create_requires_authentication(self, client):
        response = client.post("/api/categories", json={"name": "Go", "description": "gophers"})
        assert response.status_code == 401

    def test_list_and_missing(self, client, category_id):
        body = client.get("/api/categories").json()
        assert body["count"] == 1
        assert client.get("/api/categories/nope").status_code == 404


class TestUsers:

    def test_crud(self, client):
        created = client.post(
            "/api/users", json={"username": "templ", "email": "templ@example.com", "password": "secret1"}
        )
        assert created.status_code == 201
        user = created.json()["data"]
        assert "password" not in user and "hashed_password" not in user

        updated = client.put(f"/api/users/{user['id']}", json={"reputation": 42})
        assert updated.json()["data"]["reputation"] == 42

        listing = client.get("/api/users").json()
        assert listing["count"] == 1

        assert client.delete(f"/api/users/{user['id']}").json() == {"success": True, "data": {}}
        assert client.get(f"/api/users/{user['id']}").status_code == 404

    def test_cannot_delete_user_with_questions(self, client, register, ask):
        user_id, headers = register("author")
        ask(headers)
        response = client.delete(f"/api/users/{user_id}")
        assert response.status_code == 400

    def test_delete_retracts_votes(self, client, register, ask, answer):
        _, owner = register("owner")
        voter_id, voter = register("voter")
        question = ask(owner)
        reply = answer(question["id"], owner)
        client.post(f"/api/questions/{question['id']}/vote", json={"vote": "up"}, headers=voter)
        client.post(f"/api/answers/{reply['id']}/vote", json={"vote": "down"}, headers=voter)

        assert client.delete(f"/api/users/{voter_id}").status_code == 200

        refreshed = client.get(f"/api/questions/{question['id']}").json()["data"]
        assert refreshed["upvotes"] == []
        assert refreshed["vote_count"] == 0
        reply = client.get(f"/api/answers/{reply['id']}").json()["data"]
        assert reply["downvotes"] == []
        assert reply["vote_count"] == 0

    def test_update_rejects_taken_email(self, client, register):
        register("first")
        second_id, _ = register("second")
        response = client.put(f"/api/users/{second_id}", json={"email": "first@example.com"})
        assert response.status_code == 400
        assert response.json()["error"] == "Email already registered"


class TestItems:

    def test_crud(self, client, register):
        owner_id, _ = register("owner")
        created = client.post(
            "/api/items",
            json={"title": "Laptop", "description": "Lightly used", "category": "tech", "price": 500, "user": owner_id},
        )
        assert created.status_code == 201
        item = created.json()["data"]
        assert item["user"]["username"] == "owner"
        assert item["price"] == 500

        updated = client.put(f"/api/items/{item['id']}", json={"price": 450, "user": None})
        data = updated.json()["data"]
        assert data["price"] == 450
        assert data["user"] is None
        assert data["title"] == "Laptop"

        assert client.get("/api/items").json()["count"] == 1
        assert client.delete(f"/api/items/{item['id']}").status_code == 200
        assert client.get(f"/api/items/{item['id']}").status_code == 404

    def test_unknown_owner(self, client):
        response = client.post("/api/items", json={"title": "Chair", "user": 999})
        assert response.status_code == 404

    def test_missing_title(self, client):
        response = client.post("/api/items", json={"price": 3})
        assert response.status_code == 400
