"""
api/routes.py — FastAPI 엔드포인트
"""

import logging

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

import api.session as session
from config import PASS_SCORE
from quiz_taker.models.question_model import Question
from quiz_taker.services.explainer import explain
from quiz_taker.services.quiz_engine import (
    AttemptSubmittedError, QuizEngine, UnknownQuestionError,
)
from quiz_taker.services.quiz_loader import QuizLoadError, list_quizzes, load_quiz
from quiz_taker.services.scoring_service import (
    calculate_type_scores, get_incorrect_questions, is_passed, score_percentage,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# ── Pydantic request bodies ──────────────────────────────────────────────────

class LoadQuizBody(BaseModel):
    quiz_id: str

class AnswerBody(BaseModel):
    question_id: str
    value: str

class ExplainBody(BaseModel):
    question_id: str


# ── 헬퍼 ─────────────────────────────────────────────────────────────────────

def _sid(request: Request) -> str:
    return request.state.session_id


def _question_to_dict(q: Question, reveal: bool = False) -> dict:
    """응시 중에는 정답 정보를 숨긴다."""
    d = {
        "question_id": q.question_id,
        "question_text": q.question_text,
        "type": q.type,
        "options": [o.text for o in q.options],
    }
    if reveal:
        d["correct_answer"] = q.correct_answer
        d["correct_options"] = [o.text for o in q.options if o.is_correct]
    return d


def _require_engine(sid: str) -> QuizEngine:
    engine: QuizEngine = session.get(sid, "engine")
    if engine is None:
        raise HTTPException(status_code=400, detail="로드된 퀴즈가 없습니다.")
    return engine


# ── 엔드포인트 ───────────────────────────────────────────────────────────────

@router.get("/api/quizzes")
async def get_quizzes():
    return {"quizzes": list_quizzes()}


@router.post("/api/load-quiz")
async def api_load_quiz(body: LoadQuizBody, request: Request):
    sid = _sid(request)
    session.reset(sid)
    try:
        quiz = load_quiz(body.quiz_id.strip())
    except QuizLoadError as e:
        logger.warning(f"퀴즈 로드 실패 ({body.quiz_id}): {e}")
        session.update(sid, load_status="load-failed", load_error=str(e))
        raise HTTPException(status_code=404 if e.not_found else 422, detail=str(e))

    session.update(sid, engine=QuizEngine(quiz), load_status="ready")
    return {"quiz_id": quiz.quiz_id, "total": len(quiz.questions), "ok": True}


@router.get("/api/session-status")
async def session_status(request: Request):
    sid = _sid(request)
    engine: QuizEngine | None = session.get(sid, "engine")
    return {
        "load_status": session.get(sid, "load_status", "not-loaded"),
        "load_error": session.get(sid, "load_error", ""),
        "quiz_id": engine.quiz.quiz_id if engine else None,
        "question_count": engine.total if engine else 0,
        "is_submitted": engine.state.is_submitted if engine else False,
    }


@router.get("/api/quiz")
async def get_quiz(request: Request):
    engine = _require_engine(_sid(request))
    quiz = engine.quiz
    return {
        "quiz_id": quiz.quiz_id,
        "title": quiz.title,
        "description": quiz.description,
        "time_limit": quiz.time_limit,
        "questions": [_question_to_dict(q) for q in quiz.questions],
    }


@router.post("/api/answer")
async def record_answer(body: AnswerBody, request: Request):
    engine = _require_engine(_sid(request))
    try:
        engine.record_answer(body.question_id, body.value)
    except UnknownQuestionError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except AttemptSubmittedError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "ok": True,
        "question_id": body.question_id,
        "values": engine.answers_for(body.question_id),
        "answered_count": engine.answered_count,
    }


@router.get("/api/attempt")
async def get_attempt(request: Request):
    sid = _sid(request)
    engine = _require_engine(sid)
    state = engine.state
    return {
        "quiz_id": state.quiz_id,
        "answers": state.answers,
        "answered_count": engine.answered_count,
        "total": engine.total,
        "is_submitted": state.is_submitted,
        "start_time": state.start_time,
        "remaining_seconds": engine.remaining_seconds(),
        "explanations": dict(session.get(sid, "explanations", {})),
    }


@router.post("/api/submit")
async def submit_quiz(request: Request):
    engine = _require_engine(_sid(request))
    score = engine.submit()
    return {"score": score, "total": engine.total, "ok": True}


@router.get("/api/results")
async def get_results(request: Request):
    engine = _require_engine(_sid(request))
    state = engine.state
    if not state.is_submitted:
        raise HTTPException(status_code=400, detail="퀴즈가 아직 제출되지 않았습니다.")

    quiz = engine.quiz
    incorrect = get_incorrect_questions(quiz, state.answers)
    incorrect_data = []
    for q in incorrect:
        d = _question_to_dict(q, reveal=True)
        d["user_answer"] = engine.answers_for(q.question_id)
        incorrect_data.append(d)

    percentage = score_percentage(state.score, engine.total)
    return {
        "score": state.score,
        "total": engine.total,
        "percentage": percentage,
        "passed": is_passed(percentage, PASS_SCORE),
        "correct_count": engine.total - len(incorrect),
        "incorrect_count": len(incorrect),
        "unanswered_count": engine.total - engine.answered_count,
        "type_scores": calculate_type_scores(quiz, state.answers),
        "incorrect_questions": incorrect_data,
    }


@router.post("/api/retry-quiz")
async def retry_quiz(request: Request):
    sid = _sid(request)
    engine = _require_engine(sid)
    session.update(sid, engine=QuizEngine(engine.quiz))
    return {"total": engine.total, "ok": True}


@router.post("/api/explain")
async def explain_question(body: ExplainBody, request: Request):
    sid = _sid(request)
    engine = _require_engine(sid)
    question = engine.quiz.get_question(body.question_id)
    if question is None:
        raise HTTPException(status_code=404, detail=f"문제 '{body.question_id}'를 찾을 수 없습니다.")

    explanations: dict = session.get(sid, "explanations", {})
    cached = question.question_id in explanations
    if not cached:
        explanations = {**explanations, question.question_id: explain(question.question_text)}
        session.update(sid, explanations=explanations)
    return {
        "question_id": question.question_id,
        "explanation": explanations[question.question_id],
        "cached": cached,
    }


@router.post("/api/reset")
async def reset_session(request: Request):
    session.reset(_sid(request))
    return {"ok": True}
