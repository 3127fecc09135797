"""Tests for the FastAPI app: session-scoped quiz attempts end to end."""

import pytest
from fastapi.testclient import TestClient

import api.session as session
from api.app import create_app


@pytest.fixture
def client():
    with TestClient(create_app(start_cleanup=False)) as c:
        yield c


@pytest.fixture
def loaded(client):
    r = client.post("/api/load-quiz", json={"quiz_id": "history-gk"})
    assert r.status_code == 200
    return client


def _answer(client, question_id, value):
    return client.post("/api/answer", json={"question_id": question_id, "value": value})


class TestLoading:

    def test_not_loaded(self, client):
        assert client.get("/api/session-status").json()["load_status"] == "not-loaded"
        assert client.get("/api/quiz").status_code == 400
        assert _answer(client, "56", "1575").status_code == 400

    def test_list_quizzes(self, client):
        ids = [q["quiz_id"] for q in client.get("/api/quizzes").json()["quizzes"]]
        assert "history-gk" in ids

    def test_load_failure_is_explicit(self, client):
        r = client.post("/api/load-quiz", json={"quiz_id": "does-not-exist"})
        assert r.status_code == 404
        status = client.get("/api/session-status").json()
        assert status["load_status"] == "load-failed"
        assert status["load_error"]
        assert status["quiz_id"] is None
        assert _answer(client, "56", "1575").status_code == 400

    def test_quiz_hides_answers(self, loaded):
        data = loaded.get("/api/quiz").json()
        assert data["title"] == "History GK Test"
        assert data["time_limit"] == 300
        q = data["questions"][0]
        assert "correct_answer" not in q
        assert q["options"] == ["1532", "232", "1575", "1579"]
        assert data["questions"][1]["options"] == ["True", "False"]


class TestAttempt:

    def test_record_and_read(self, loaded):
        r = _answer(loaded, "57", "ff")
        assert r.json()["values"] == ["ff"]
        r = _answer(loaded, "57", "ww")
        assert r.json()["values"] == ["ff", "ww"]
        state = loaded.get("/api/attempt").json()
        assert state["answers"] == {"57": ["ff", "ww"]}
        assert state["answered_count"] == 1
        assert state["total"] == 4
        assert 0 <= state["remaining_seconds"] <= 300

    def test_unknown_question(self, loaded):
        assert _answer(loaded, "999", "x").status_code == 404
        assert loaded.get("/api/attempt").json()["answers"] == {}

    def test_submit_all_correct(self, loaded):
        for qid, value in [("56", "1575"), ("58", "True"), ("59", "was"), ("57", "ff"), ("57", "ww")]:
            assert _answer(loaded, qid, value).status_code == 200
        r = loaded.post("/api/submit")
        assert r.json() == {"score": 4, "total": 4, "ok": True}

    def test_submit_none(self, loaded):
        assert loaded.post("/api/submit").json()["score"] == 0

    def test_answer_after_submit_rejected(self, loaded):
        loaded.post("/api/submit")
        assert _answer(loaded, "56", "1575").status_code == 400


class TestResults:

    def test_results_require_submit(self, loaded):
        assert loaded.get("/api/results").status_code == 400

    def test_results(self, loaded):
        _answer(loaded, "57", "ff")
        _answer(loaded, "57", "ww")
        _answer(loaded, "59", "is")
        loaded.post("/api/submit")
        data = loaded.get("/api/results").json()
        assert data["score"] == 1
        assert data["percentage"] == 25.0
        assert data["passed"] is False
        assert data["unanswered_count"] == 2
        wrong = {q["question_id"]: q for q in data["incorrect_questions"]}
        assert set(wrong) == {"56", "58", "59"}
        assert wrong["59"]["user_answer"] == ["is"]
        assert wrong["59"]["correct_answer"] == "was"
        assert wrong["56"]["correct_options"] == ["1575"]

    def test_retry_starts_fresh_attempt(self, loaded):
        _answer(loaded, "56", "1575")
        loaded.post("/api/submit")
        assert loaded.post("/api/retry-quiz").json()["ok"]
        state = loaded.get("/api/attempt").json()
        assert state["answers"] == {}
        assert state["is_submitted"] is False


class TestExplainAndReset:

    def test_explain(self, loaded):
        r = loaded.post("/api/explain", json={"question_id": "59"})
        assert r.json()["explanation"] == (
            'This is a sample explanation for the question: "There _____ a cat".'
        )
        assert loaded.get("/api/attempt").json()["answers"] == {}

    def test_explanation_cached_and_listed(self, loaded):
        first = loaded.post("/api/explain", json={"question_id": "59"}).json()
        assert first["cached"] is False
        again = loaded.post("/api/explain", json={"question_id": "59"}).json()
        assert again["cached"] is True
        assert again["explanation"] == first["explanation"]
        shown = loaded.get("/api/attempt").json()["explanations"]
        assert shown == {"59": first["explanation"]}

    def test_explanations_cleared_on_new_load(self, loaded):
        loaded.post("/api/explain", json={"question_id": "59"})
        loaded.post("/api/load-quiz", json={"quiz_id": "history-gk"})
        assert loaded.get("/api/attempt").json()["explanations"] == {}

    def test_explain_unknown(self, loaded):
        assert loaded.post("/api/explain", json={"question_id": "0"}).status_code == 404

    def test_reset(self, loaded):
        loaded.post("/api/reset")
        assert loaded.get("/api/session-status").json()["load_status"] == "not-loaded"


class TestSessions:

    def test_sessions_isolated(self, loaded):
        _answer(loaded, "56", "1575")
        with TestClient(create_app(start_cleanup=False)) as other:
            assert other.get("/api/session-status").json()["load_status"] == "not-loaded"

    def test_update_sets_several_keys(self):
        sid = session.create_session()
        session.update(sid, load_status="load-failed", load_error="boom")
        assert session.get(sid, "load_status") == "load-failed"
        assert session.get(sid, "load_error") == "boom"
        assert session.get(sid, "engine") is None

    def test_cleanup_expired(self, monkeypatch):
        sid = session.create_session()
        monkeypatch.setattr(session, "SESSION_TTL", -1)
        assert session.cleanup_expired() >= 1
        assert session.get_session(sid) is None
