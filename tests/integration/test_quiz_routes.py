"""Integration tests for the quiz endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from sql_quest.data.quiz_questions import QUIZ_QUESTIONS

pytestmark = pytest.mark.integration

CORRECT_ANSWERS = {q.id: q.correct_answer for q in QUIZ_QUESTIONS}


def _start(client: TestClient, **body) -> dict:
    response = client.post("/api/v1/quiz/sessions", json=body)
    assert response.status_code == 201
    return response.json()


class TestQuizFlow:
    """Tests for a full quiz through the API."""

    def test_start_default_quiz(self, client: TestClient) -> None:
        """Test a new quiz is started with the configured defaults."""
        data = _start(client)

        assert data["status"] == "in_progress"
        assert data["total_questions"] == 10
        assert data["time_left"] == 300
        assert data["current_index"] == 0
        assert data["current_question"]["correct_answer"] is None

    def test_start_without_body(self, client: TestClient) -> None:
        """Test the request body is optional."""
        response = client.post("/api/v1/quiz/sessions")
        assert response.status_code == 201

    def test_full_quiz(self, client: TestClient) -> None:
        """Test answering every question correctly."""
        data = _start(client, difficulty="beginner", question_count=3)
        session_id = data["session_id"]
        assert data["total_questions"] == 3

        for _ in range(3):
            question_id = data["current_question"]["id"]
            response = client.post(
                f"/api/v1/quiz/sessions/{session_id}/answer",
                json={"answer_index": CORRECT_ANSWERS[question_id]},
            )
            assert response.status_code == 200
            review = response.json()
            assert review["status"] == "reviewing"
            assert review["last_answer_correct"] is True
            assert review["current_question"]["correct_answer"] == CORRECT_ANSWERS[question_id]

            data = client.post(f"/api/v1/quiz/sessions/{session_id}/next").json()

        assert data["status"] == "completed"
        assert data["current_question"] is None
        assert data["score"] == 3
        assert data["weighted_score"] == 3
        assert data["percentage"] == 100
        assert data["passed"] is True

    def test_wrong_answer(self, client: TestClient) -> None:
        """Test a wrong answer is reported and not scored."""
        data = _start(client, category="JOINS")
        wrong = (CORRECT_ANSWERS[data["current_question"]["id"]] + 1) % 4

        review = client.post(
            f"/api/v1/quiz/sessions/{data['session_id']}/answer",
            json={"answer_index": wrong},
        ).json()

        assert review["last_answer_correct"] is False
        assert review["score"] == 0

    def test_get_session(self, client: TestClient) -> None:
        """Test reading back a session."""
        data = _start(client)
        response = client.get(f"/api/v1/quiz/sessions/{data['session_id']}")
        assert response.status_code == 200
        assert response.json()["session_id"] == data["session_id"]

    def test_complete_early(self, client: TestClient) -> None:
        """Test ending a quiz before the last question."""
        data = _start(client, question_count=5)
        response = client.post(f"/api/v1/quiz/sessions/{data['session_id']}/complete")

        assert response.status_code == 200
        assert response.json()["status"] == "completed"
        assert response.json()["passed"] is False


class TestQuizErrors:
    """Tests for quiz error responses."""

    def test_unknown_session(self, client: TestClient) -> None:
        """Test unknown ids are 404."""
        response = client.get("/api/v1/quiz/sessions/does-not-exist")

        assert response.status_code == 404
        data = response.json()
        assert data["error"] == "QuizSessionNotFoundError"
        assert data["error_code"] == "QUIZ_SESSION_NOT_FOUND"

    def test_delete_session(self, client: TestClient) -> None:
        """Test a deleted session can no longer be read."""
        data = _start(client)
        url = f"/api/v1/quiz/sessions/{data['session_id']}"

        response = client.delete(url)
        assert response.status_code == 204
        assert response.content == b""
        assert client.get(url).status_code == 404

    def test_delete_unknown_session(self, client: TestClient) -> None:
        """Test deleting an unknown id is 404."""
        response = client.delete("/api/v1/quiz/sessions/does-not-exist")

        assert response.status_code == 404
        assert response.json()["error_code"] == "QUIZ_SESSION_NOT_FOUND"

    def test_next_before_answer(self, client: TestClient) -> None:
        """Test advancing without answering is a conflict."""
        data = _start(client)
        response = client.post(f"/api/v1/quiz/sessions/{data['session_id']}/next")

        assert response.status_code == 409
        assert response.json()["error_code"] == "QUIZ_ERROR"

    def test_answer_twice(self, client: TestClient) -> None:
        """Test a question cannot be answered twice."""
        data = _start(client)
        url = f"/api/v1/quiz/sessions/{data['session_id']}/answer"
        client.post(url, json={"answer_index": 0})

        assert client.post(url, json={"answer_index": 1}).status_code == 409

    def test_answer_out_of_range(self, client: TestClient) -> None:
        """Test answer indices past the options are a conflict."""
        data = _start(client)
        response = client.post(
            f"/api/v1/quiz/sessions/{data['session_id']}/answer",
            json={"answer_index": 9},
        )
        assert response.status_code == 409

    def test_negative_answer_index(self, client: TestClient) -> None:
        """Test request validation rejects negative indices."""
        data = _start(client)
        response = client.post(
            f"/api/v1/quiz/sessions/{data['session_id']}/answer",
            json={"answer_index": -1},
        )
        assert response.status_code == 422

    def test_no_matching_questions(self, client: TestClient) -> None:
        """Test filters that match nothing."""
        response = client.post("/api/v1/quiz/sessions", json={"category": "NoSuchTopic"})
        assert response.status_code == 409
