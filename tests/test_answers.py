# tests/test_answers.py


def _answers(client, question_id):
    return client.get(f"/api/questions/{question_id}/answers").json()["data"]


class TestAnswerCrud:

    def test_create_and_fetch(self, client, register, ask, answer):
        _, owner = register("owner")
        helper_id, helper = register("helper")
        question = ask(owner)

        created = answer(question["id"], helper, body="Call next() on it.")

        assert created["question"] == question["id"]
        assert created["author"]["id"] == helper_id
        assert created["is_accepted"] is False
        assert created["vote_count"] == 0

        fetched = client.get(f"/api/answers/{created['id']}").json()
        assert fetched == {"success": True, "data": created}

    def test_answer_on_missing_question(self, client, register):
        _, helper = register("helper")
        response = client.post("/api/questions/999/answers", json={"body": "hello"}, headers=helper)
        assert response.status_code == 404
        assert response.json()["error"] == "Question not found"

    def test_list_answers_of_missing_question(self, client):
        assert client.get("/api/questions/999/answers").status_code == 404

    def test_only_author_can_edit_or_delete(self, client, register, ask, answer):
        _, owner = register("owner")
        _, helper = register("helper")
        question = ask(owner)
        reply = answer(question["id"], helper)

        assert client.put(f"/api/answers/{reply['id']}", json={"body": "x"}, headers=owner).status_code == 401
        assert client.delete(f"/api/answers/{reply['id']}", headers=owner).status_code == 401

        edited = client.put(f"/api/answers/{reply['id']}", json={"body": "Better answer"}, headers=helper)
        assert edited.status_code == 200
        assert edited.json()["data"]["body"] == "Better answer"

        assert client.delete(f"/api/answers/{reply['id']}", headers=helper).status_code == 200
        assert client.get(f"/api/answers/{reply['id']}").status_code == 404

    def test_missing_answer(self, client):
        response = client.get("/api/answers/999")
        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Answer not found"}


class TestAcceptAnswer:

    def test_switching_accepted_answer(self, client, register, ask, answer):
        _, owner = register("owner")
        _, helper = register("helper")
        question = ask(owner)
        a1 = answer(question["id"], helper, body="first")
        a2 = answer(question["id"], helper, body="second")

        client.post(f"/api/answers/{a1['id']}/accept", headers=owner)
        response = client.post(f"/api/answers/{a2['id']}/accept", headers=owner)

        assert response.status_code == 200
        assert response.json()["data"]["is_accepted"] is True

        flags = {a["id"]: a["is_accepted"] for a in _answers(client, question["id"])}
        assert flags == {a1["id"]: False, a2["id"]: True}

        refreshed = client.get(f"/api/questions/{question['id']}").json()["data"]
        assert refreshed["is_solved"] is True
        assert refreshed["accepted_answer"] == a2["id"]

    def test_non_author_cannot_accept(self, client, register, ask, answer):
        _, owner = register("owner")
        _, helper = register("helper")
        question = ask(owner)
        reply = answer(question["id"], helper)

        response = client.post(f"/api/answers/{reply['id']}/accept", headers=helper)

        assert response.status_code == 401
        assert response.json()["error"] == "Only question author can accept answers"
        assert client.get(f"/api/answers/{reply['id']}").json()["data"]["is_accepted"] is False

    def test_accept_missing_answer(self, client, register):
        _, owner = register("owner")
        assert client.post("/api/answers/999/accept", headers=owner).status_code == 404

    def test_deleting_accepted_answer_reopens_question(self, client, register, ask, answer):
        _, owner = register("owner")
        _, helper = register("helper")
        question = ask(owner)
        reply = answer(question["id"], helper)
        client.post(f"/api/answers/{reply['id']}/accept", headers=owner)

        client.delete(f"/api/answers/{reply['id']}", headers=helper)

        refreshed = client.get(f"/api/questions/{question['id']}").json()["data"]
        assert refreshed["is_solved"] is False
        assert refreshed["accepted_answer"] is None


class TestAnswerVotesAndOrdering:

    def test_vote_replaces_previous_vote(self, client, register, ask, answer):
        _, owner = register("owner")
        voter_id, voter = register("voter")
        question = ask(owner)
        reply = answer(question["id"], owner)

        for direction in ["down", "up", "up"]:
            data = client.post(
                f"/api/answers/{reply['id']}/vote", json={"vote": direction}, headers=voter
            ).json()["data"]

        assert data["upvotes"] == [voter_id]
        assert data["downvotes"] == []
        assert data["vote_count"] == 1

    def test_listing_puts_accepted_first_then_votes_then_oldest(self, client, register, ask, answer):
        _, owner = register("owner")
        _, helper = register("helper")
        question = ask(owner)
        oldest = answer(question["id"], helper, body="oldest")
        popular = answer(question["id"], helper, body="popular")
        accepted = answer(question["id"], helper, body="accepted")
        newest = answer(question["id"], helper, body="newest")

        client.post(f"/api/answers/{popular['id']}/vote", json={"vote": "up"}, headers=owner)
        client.post(f"/api/answers/{newest['id']}/vote", json={"vote": "down"}, headers=owner)
        client.post(f"/api/answers/{accepted['id']}/accept", headers=owner)

        body = client.get(f"/api/questions/{question['id']}/answers").json()
        assert body["count"] == 4
        assert [a["body"] for a in body["data"]] == ["accepted", "popular", "oldest", "newest"]
