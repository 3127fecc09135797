"""
services/quiz_engine.py

응시 한 번의 답안 상태를 소유하고 변경 이벤트를 적용하는 엔진.
렌더링/이벤트 루프 프레임워크에 의존하지 않는다.
API 레이어는 세션마다 QuizEngine 인스턴스 하나를 들고 이벤트를 전달만 한다.
"""

import logging
import time
from typing import List, Optional

from quiz_taker.models.question_model import (
    EXCLUSIVE_QUESTIONS,
    FreeTextQuestion,
    MultiSelectQuestion,
    Question,
    Quiz,
)
from quiz_taker.models.session_state import AttemptState
from quiz_taker.services.scoring_service import compute_score

logger = logging.getLogger(__name__)


class UnknownQuestionError(ValueError):
    """퀴즈에 없는 question_id로 답안 이벤트가 들어온 경우."""

    def __init__(self, question_id: str):
        super().__init__(f"문제 '{question_id}'를 찾을 수 없습니다.")
        self.question_id = question_id


class AttemptSubmittedError(RuntimeError):
    """이미 제출된 응시에 답안을 기록하려는 경우."""


def apply_answer(question: Question, current: List[str], value: str) -> List[str]:
    """
    문제 유형별 답안 변경 규칙을 적용한 새 값 리스트를 반환한다.

    - multi-select:           토글 (있으면 제거, 없으면 뒤에 추가)
    - single-choice / binary: 같은 값을 다시 고르면 선택 해제, 아니면 [value]로 교체
    - free-text:              같은 값을 다시 입력하면 비움, 아니면 [value]로 교체
                              (빈 문자열도 비움)
    """
    if isinstance(question, MultiSelectQuestion):
        if value in current:
            return [v for v in current if v != value]
        return current + [value]
    if isinstance(question, EXCLUSIVE_QUESTIONS):
        if current == [value]:
            return []
        return [value]
    if isinstance(question, FreeTextQuestion):
        if not value or current == [value]:
            return []
        return [value]
    raise TypeError(f"지원하지 않는 문제 유형입니다: {type(question).__name__}")


class QuizEngine:
    """
    로드된 Quiz 하나와 그에 대한 AttemptState 하나를 묶는다.

    Quiz는 생성 시점에 완전히 로드된 상태여야 하며 이후 변경되지 않는다.
    """

    def __init__(self, quiz: Quiz, state: Optional[AttemptState] = None):
        if state is None:
            state = AttemptState(quiz_id=quiz.quiz_id)
        elif state.quiz_id != quiz.quiz_id:
            raise ValueError(
                f"응시 상태의 퀴즈('{state.quiz_id}')가 로드된 퀴즈('{quiz.quiz_id}')와 다릅니다."
            )
        else:
            unknown = [qid for qid in state.answers if quiz.get_question(qid) is None]
            if unknown:
                raise UnknownQuestionError(unknown[0])
        self.quiz = quiz
        self.state = state

    @property
    def total(self) -> int:
        return len(self.quiz.questions)

    @property
    def answered_count(self) -> int:
        return len(self.state.answers)

    def answers_for(self, question_id: str) -> List[str]:
        """현재 기록된 값 리스트의 복사본."""
        return list(self.state.answers.get(question_id, []))

    def record_answer(self, question_id: str, value: str) -> None:
        """
        답안 변경 이벤트 하나를 적용한다. question_id 항목만 변경된다.

        Raises:
            UnknownQuestionError:  퀴즈에 없는 question_id.
            AttemptSubmittedError: 이미 제출된 응시.
        """
        if self.state.is_submitted:
            raise AttemptSubmittedError("이미 제출된 퀴즈입니다.")
        question = self.quiz.get_question(question_id)
        if question is None:
            raise UnknownQuestionError(question_id)

        updated = apply_answer(question, self.answers_for(question_id), value)
        if updated:
            self.state.answers[question_id] = updated
        else:
            self.state.answers.pop(question_id, None)

    def compute_score(self) -> int:
        return compute_score(self.quiz, self.state.answers)

    def submit(self) -> int:
        """채점 후 응시를 종료한다. 다시 호출하면 저장된 점수를 그대로 반환."""
        if self.state.is_submitted and self.state.score is not None:
            return self.state.score
        score = self.compute_score()
        self.state.score = score
        self.state.is_submitted = True
        logger.info(f"퀴즈 '{self.quiz.quiz_id}' 제출: {score}/{self.total}")
        return score

    def remaining_seconds(self, now: Optional[float] = None) -> int:
        """남은 시간 (초). 표시용이며 0이 되어도 자동 제출하지 않는다."""
        now = time.time() if now is None else now
        elapsed = now - self.state.start_time
        return int(max(0.0, self.quiz.time_limit - elapsed))
