"""Shared fixtures: the built-in history quiz and a fresh engine on it."""

import pytest

from quiz_taker.services.quiz_engine import QuizEngine
from quiz_taker.services.quiz_loader import load_quiz


@pytest.fixture
def quiz():
    return load_quiz("history-gk")


@pytest.fixture
def engine(quiz):
    return QuizEngine(quiz)
