"""Tests for scoring_service: per-type correctness and score aggregation."""

import itertools

import pytest

from quiz_taker.models.question_model import Quiz
from quiz_taker.services.scoring_service import (
    calculate_type_scores,
    compute_score,
    get_incorrect_questions,
    is_correct,
    is_passed,
    score_percentage,
)

ALL_CORRECT = {
    "56": ["1575"],
    "58": ["True"],
    "59": ["was"],
    "57": ["ff", "ww"],
}


class TestComputeScore:

    def test_all_correct(self, quiz):
        assert compute_score(quiz, ALL_CORRECT) == 4

    def test_no_answers_scores_zero(self, quiz):
        assert compute_score(quiz, {}) == 0

    def test_only_multi_select_answered(self, quiz):
        assert compute_score(quiz, {"57": ["ww", "ff"]}) == 1

    def test_each_question_at_most_one_point(self, quiz):
        # multi-select must not also pass through the last-value check
        quiz_ms = Quiz(quiz_id="m", title="m", questions=[{
            "question_id": "q", "type": "multi-select", "correct_answer": "ff",
            "options": [{"text": "ff", "is_correct": True}],
        }])
        assert compute_score(quiz_ms, {"q": ["ff"]}) == 1

    def test_pure(self, quiz):
        answers = {"56": ["1575"], "57": ["ff"]}
        snapshot = {k: list(v) for k, v in answers.items()}
        assert compute_score(quiz, answers) == compute_score(quiz, answers)
        assert answers == snapshot


class TestIsCorrect:

    def test_last_value_wins(self, quiz):
        q = quiz.get_question("56")
        assert not is_correct(q, ["1532", "1575", "1532"])
        assert is_correct(q, ["1532", "1575"])

    def test_exact_match_case_sensitive(self, quiz):
        q = quiz.get_question("59")
        assert is_correct(q, ["was"])
        assert not is_correct(q, ["Was"])
        assert not is_correct(q, [" was "])

    def test_binary(self, quiz):
        q = quiz.get_question("58")
        assert is_correct(q, ["True"])
        assert not is_correct(q, ["False"])
        assert not is_correct(q, [])

    @pytest.mark.parametrize("selected", [["ff"], ["ff", "ww", "ss"], ["ss"], []])
    def test_multi_select_subset_or_superset(self, quiz, selected):
        assert not is_correct(quiz.get_question("57"), selected)

    def test_multi_select_trims_values(self, quiz):
        assert is_correct(quiz.get_question("57"), [" ww", "ff "])

    def test_multi_select_order_independent(self, quiz):
        q = quiz.get_question("57")
        for perm in itertools.permutations(["ff", "ww"]):
            assert is_correct(q, list(perm))

    def test_multi_select_empty_correct_set(self):
        quiz = Quiz(quiz_id="e", title="e", questions=[{
            "question_id": "q", "type": "multi-select",
            "options": [{"text": "a"}, {"text": "b"}],
        }])
        q = quiz.get_question("q")
        assert is_correct(q, [])
        assert not is_correct(q, ["a"])

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            is_correct(object(), ["x"])


class TestResultAnalysis:

    def test_incorrect_questions_keep_order(self, quiz):
        answers = {"56": ["1575"], "59": ["is"]}
        ids = [q.question_id for q in get_incorrect_questions(quiz, answers)]
        assert ids == ["58", "59", "57"]

    def test_type_scores(self, quiz):
        answers = {"56": ["1575"], "59": ["is"]}
        by_type = {r["type"]: r for r in calculate_type_scores(quiz, answers)}
        assert [r["type"] for r in calculate_type_scores(quiz, answers)] == [
            "single-choice", "binary", "free-text", "multi-select",
        ]
        assert by_type["single-choice"]["correct"] == 1
        assert by_type["single-choice"]["score"] == 100.0
        assert by_type["binary"]["unanswered"] == 1
        assert by_type["free-text"]["incorrect"] == 1
        assert by_type["multi-select"]["unanswered"] == 1

    def test_percentage_and_pass(self):
        assert score_percentage(3, 4) == 75.0
        assert score_percentage(0, 0) == 0.0
        assert is_passed(75.0)
        assert not is_passed(50.0)
        assert is_passed(50.0, pass_score=50.0)
