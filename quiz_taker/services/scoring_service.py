"""
services/scoring_service.py

퀴즈 채점 및 결과 분석 비즈니스 로직.
순수 Python 함수로 구성. UI 코드, 전역 상태 변경 없음.
같은 (quiz, answers)에 대해 몇 번을 호출해도 같은 결과를 반환한다.
"""

from collections import defaultdict
from typing import Dict, List, Sequence

from quiz_taker.models.question_model import (
    BinaryQuestion,
    FreeTextQuestion,
    MultiSelectQuestion,
    Question,
    QUESTION_TYPES,
    Quiz,
    SingleChoiceQuestion,
)

Answers = Dict[str, List[str]]


def _last_value_matches(question: Question, values: Sequence[str]) -> bool:
    # 미응답은 오답 (예외 아님)
    if not values:
        return False
    return values[-1] == question.correct_answer


def _selection_matches(question: MultiSelectQuestion, values: Sequence[str]) -> bool:
    correct = question.correct_options
    selected = [v.strip() for v in values]
    return len(correct) == len(selected) and set(correct) == set(selected)


def is_correct(question: Question, values: Sequence[str]) -> bool:
    """
    문제 유형별 정답 판정.

    - multi-select: 정답 보기 집합 == 선택 집합 (공백 제거, 순서 무관)
    - single-choice / binary / free-text: 마지막 값 == correct_answer
      (대소문자 구분, 공백 제거 없음)
    """
    if isinstance(question, MultiSelectQuestion):
        return _selection_matches(question, values)
    if isinstance(question, (SingleChoiceQuestion, BinaryQuestion, FreeTextQuestion)):
        return _last_value_matches(question, values)
    raise TypeError(f"지원하지 않는 문제 유형입니다: {type(question).__name__}")


def compute_score(quiz: Quiz, answers: Answers) -> int:
    """
    사용자 답안을 채점하여 맞힌 문제 수를 반환한다.

    문제당 최대 1점. 응답하지 않은 문제는 오답으로 처리.

    Args:
        quiz:    채점 대상 Quiz.
        answers: 답안지. {question_id: 값 리스트}

    Returns:
        0 ~ len(quiz.questions) 범위의 정수 점수.
    """
    return sum(
        1
        for q in quiz.questions
        if is_correct(q, answers.get(q.question_id, []))
    )


def get_incorrect_questions(quiz: Quiz, answers: Answers) -> List[Question]:
    """
    오답 문제 리스트를 반환한다 (오답 노트용). 미응답 포함, 원본 순서 유지.
    """
    return [
        q
        for q in quiz.questions
        if not is_correct(q, answers.get(q.question_id, []))
    ]


def calculate_type_scores(quiz: Quiz, answers: Answers) -> List[Dict[str, object]]:
    """
    문제 유형별 결과를 계산하여 반환한다.

    Returns:
        [{"type": str, "total": int, "correct": int,
          "incorrect": int, "unanswered": int, "score": float}, ...]
        QUESTION_TYPES 순서, 문제가 없는 유형은 제외.
    """
    buckets: Dict[str, Dict[str, int]] = defaultdict(
        lambda: {"total": 0, "correct": 0, "incorrect": 0, "unanswered": 0}
    )

    for q in quiz.questions:
        values = answers.get(q.question_id, [])
        bucket = buckets[q.type]
        bucket["total"] += 1
        if is_correct(q, values):
            bucket["correct"] += 1
        elif not values:
            bucket["unanswered"] += 1
        else:
            bucket["incorrect"] += 1

    result = []
    for qtype in QUESTION_TYPES:
        if qtype not in buckets:
            continue
        b = buckets[qtype]
        score = round(b["correct"] / b["total"] * 100, 1)
        result.append({"type": qtype, **b, "score": score})
    return result


def score_percentage(score: int, total: int) -> float:
    """맞힌 수를 100점 만점으로 환산 (소수점 둘째 자리 반올림). total이 0이면 0.0."""
    if total <= 0:
        return 0.0
    return round(score / total * 100, 2)


def is_passed(percentage: float, pass_score: float = 60.0) -> bool:
    """
    합격 여부를 반환한다.

    Args:
        percentage: score_percentage()가 반환한 점수 (0.0 ~ 100.0).
        pass_score: 합격 기준 점수 (기본값 60.0점).
    """
    return percentage >= pass_score
