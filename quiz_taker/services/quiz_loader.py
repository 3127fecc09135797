"""
services/quiz_loader.py

퀴즈 콘텐츠 로드 서비스.
Public API:
  - list_quizzes(quiz_dir) -> List[dict]     : 사용 가능한 퀴즈 목록
  - load_quiz(quiz_id, quiz_dir) -> Quiz     : 퀴즈 한 세트 로드

로드 순서: 내장 샘플 → <quiz_dir>/<quiz_id>.json
원본 포맷(option_text, multiple-choice 등)도 정규화하여 받아들인다.
로드 실패는 모두 QuizLoadError로 올린다. 일부만 로드된 Quiz는 반환하지 않음.
"""

import json
import logging
import os
import re
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from config import DEFAULT_TIME_LIMIT, QUIZ_DIR
from quiz_taker.data.sample_quizzes import SAMPLE_QUIZZES
from quiz_taker.models.question_model import Quiz

logger = logging.getLogger(__name__)


class QuizLoadError(RuntimeError):
    """퀴즈를 만들 수 없는 경우. not_found이면 해당 ID의 퀴즈가 아예 없음."""

    def __init__(self, message: str, not_found: bool = False):
        super().__init__(message)
        self.not_found = not_found


# ── 상수 ─────────────────────────────────────────────────────────────────────
_LEGACY_TYPES = {
    "multiple-choice": "single-choice",
    "true-false": "binary",
    "fill-in-the-blank": "free-text",
    "multiple-select": "multi-select",
}

_QUIZ_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


# ══════════════════════════════════════════════════════════════════════════════
# Public API
# ══════════════════════════════════════════════════════════════════════════════

def list_quizzes(quiz_dir: Optional[str] = None) -> List[Dict[str, str]]:
    """내장 샘플 + 디렉토리의 JSON 퀴즈 목록. [{"quiz_id", "title"}, ...]"""
    quiz_dir = QUIZ_DIR if quiz_dir is None else quiz_dir
    items = [
        {"quiz_id": qid, "title": payload.get("title", "")}
        for qid, payload in SAMPLE_QUIZZES.items()
    ]
    if quiz_dir and os.path.isdir(quiz_dir):
        for name in sorted(os.listdir(quiz_dir)):
            stem, ext = os.path.splitext(name)
            if ext != ".json" or stem in SAMPLE_QUIZZES:
                continue
            try:
                quiz = load_quiz(stem, quiz_dir)
            except QuizLoadError as e:
                logger.warning(f"퀴즈 목록에서 제외: {name} ({e})")
                continue
            items.append({"quiz_id": quiz.quiz_id, "title": quiz.title})
    return items


def load_quiz(quiz_id: str, quiz_dir: Optional[str] = None) -> Quiz:
    """
    quiz_id로 Quiz를 로드한다.

    Raises:
        QuizLoadError: 퀴즈가 없거나, 파일을 읽을 수 없거나, 형식이 잘못된 경우.
    """
    quiz_dir = QUIZ_DIR if quiz_dir is None else quiz_dir
    if not quiz_id or not _QUIZ_ID_PATTERN.match(quiz_id):
        raise QuizLoadError(f"잘못된 퀴즈 ID입니다: '{quiz_id}'", not_found=True)

    if quiz_id in SAMPLE_QUIZZES:
        payload = SAMPLE_QUIZZES[quiz_id]
    else:
        payload = _read_quiz_file(quiz_id, quiz_dir)

    quiz = build_quiz(payload, default_id=quiz_id)
    logger.info(f"load_quiz: '{quiz.quiz_id}' 로드 완료 ({len(quiz.questions)}문제)")
    return quiz


def build_quiz(payload: Any, default_id: str = "") -> Quiz:
    """원본/정규 포맷 dict → Quiz. 검증 실패 시 QuizLoadError."""
    if not isinstance(payload, dict):
        raise QuizLoadError("퀴즈 데이터는 JSON 객체여야 합니다.")

    data = dict(payload)
    data.setdefault("quiz_id", default_id)
    data.setdefault("time_limit", DEFAULT_TIME_LIMIT)
    questions = data.get("questions")
    if not isinstance(questions, list) or not questions:
        raise QuizLoadError("퀴즈에 문제가 없습니다.")
    data["questions"] = [_normalize_question(item) for item in questions]

    try:
        return Quiz(**data)
    except (ValidationError, TypeError) as e:
        logger.warning(f"build_quiz: Quiz 생성 실패: {e}")
        raise QuizLoadError(f"퀴즈 형식이 올바르지 않습니다: {e}") from e


# ══════════════════════════════════════════════════════════════════════════════
# 내부 헬퍼
# ══════════════════════════════════════════════════════════════════════════════

def _read_quiz_file(quiz_id: str, quiz_dir: str) -> Any:
    path = os.path.join(quiz_dir, f"{quiz_id}.json")
    if not os.path.isfile(path):
        raise QuizLoadError(f"퀴즈 '{quiz_id}'를 찾을 수 없습니다.", not_found=True)
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except OSError as e:
        logger.error(f"_read_quiz_file: 파일 읽기 실패 - {path}: {e}")
        raise QuizLoadError(f"퀴즈 파일을 읽을 수 없습니다: {quiz_id}") from e
    except json.JSONDecodeError as e:
        logger.error(f"_read_quiz_file: JSON 파싱 실패 - {path}: {e}")
        raise QuizLoadError(f"퀴즈 파일이 올바른 JSON이 아닙니다: {quiz_id}") from e


def _normalize_question(item: Any) -> Any:
    """원본 유형 태그와 숫자 ID를 정규 포맷으로 변환."""
    if not isinstance(item, dict):
        return item
    item = dict(item)
    qtype = item.get("type")
    if qtype in _LEGACY_TYPES:
        item["type"] = _LEGACY_TYPES[qtype]
    if isinstance(item.get("question_id"), int):
        item["question_id"] = str(item["question_id"])
    return item
