"""
api/session.py — 사용자별 응시 슬롯 (쿠키 기반 인메모리 저장소)

쿠키의 세션 ID마다 응시 슬롯 하나를 둔다. 슬롯에는
  - load_status : "not-loaded" | "ready" | "load-failed"
  - load_error  : 마지막 로드 실패 메시지
  - engine      : 진행 중인 QuizEngine (로드 전/실패 시 None)
  - explanations: {question_id: 해설 문자열} 캐시
가 들어 있다. 슬롯 사이에 공유되는 가변 상태는 없다.
마지막 접근 후 SESSION_TTL이 지나면 슬롯은 버려진다 (답안 영속화 없음).
"""

import threading
import time
import uuid
from typing import Any

from config import SESSION_TTL

_lock = threading.Lock()
_slots: dict[str, dict[str, Any]] = {}
_last_seen: dict[str, float] = {}


def _empty_slot() -> dict[str, Any]:
    return {
        "load_status": "not-loaded",
        "load_error": "",
        "engine": None,
        "explanations": {},
    }


def _expired(sid: str, now: float) -> bool:
    return now - _last_seen[sid] > SESSION_TTL


def _drop(sid: str) -> None:
    _slots.pop(sid, None)
    _last_seen.pop(sid, None)


def create_session() -> str:
    """빈 응시 슬롯을 만들고 세션 ID를 반환."""
    sid = uuid.uuid4().hex
    with _lock:
        _slots[sid] = _empty_slot()
        _last_seen[sid] = time.time()
    return sid


def get_session(sid: str) -> dict[str, Any] | None:
    """살아 있는 슬롯을 반환하고 접근 시각을 갱신. 만료/미존재면 None."""
    now = time.time()
    with _lock:
        if sid not in _slots:
            return None
        if _expired(sid, now):
            _drop(sid)
            return None
        _last_seen[sid] = now
        return _slots[sid]


def get(sid: str, key: str, default=None):
    slot = get_session(sid)
    if slot is None:
        return default
    return slot.get(key, default)


def update(sid: str, **values) -> None:
    """슬롯의 여러 키를 한 번에 갱신 (락 하나로 묶음)."""
    with _lock:
        if sid in _slots:
            _slots[sid].update(values)
            _last_seen[sid] = time.time()


def reset(sid: str) -> None:
    """로드된 퀴즈, 응시 상태, 해설 캐시를 모두 버린다."""
    with _lock:
        if sid in _slots:
            _slots[sid] = _empty_slot()
            _last_seen[sid] = time.time()


def cleanup_expired() -> int:
    """만료된 슬롯을 정리하고 제거된 수를 반환."""
    now = time.time()
    with _lock:
        expired = [sid for sid in _last_seen if _expired(sid, now)]
        for sid in expired:
            _drop(sid)
    return len(expired)
