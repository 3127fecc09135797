"""
models/session_state.py

응시(attempt) 한 번의 진행 상태를 담는 답안지 모델.
Pydantic BaseModel 기반. UI 코드 없음.
"""

import time
from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class AttemptState(BaseModel):
    """
    한 번의 응시 상태.

    Attributes:
        quiz_id:      응시 중인 퀴즈 ID.
        answers:      답안지. {question_id: 입력/선택 값 리스트 (입력 순서 유지)}
                      비어 있는 항목은 저장하지 않는다.
        is_submitted: 최종 제출 여부.
        score:        제출 시 계산된 점수. 제출 전에는 None.
        start_time:   응시 시작 시각 (Unix timestamp).
    """

    quiz_id: str = Field(..., description="응시 중인 퀴즈 ID")
    answers: Dict[str, List[str]] = Field(
        default_factory=dict,
        description="답안지. key: question_id, value: 값 리스트 (마지막 값이 최신)",
    )
    is_submitted: bool = Field(default=False, description="최종 제출 완료 여부")
    score: Optional[int] = Field(default=None, ge=0, description="제출 점수")
    start_time: float = Field(
        default_factory=time.time,
        description="응시 시작 시각 (Unix timestamp, time.time() 기준)",
    )
