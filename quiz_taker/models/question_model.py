"""
models/question_model.py

퀴즈 문제 / 퀴즈 모델.
Pydantic v2 적용. 문제 유형(type)을 태그로 하는 discriminated union.
로드 후에는 변경 불가(frozen).
"""

from typing import Annotated, List, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, Field, field_validator, model_validator

SINGLE_CHOICE = "single-choice"
BINARY = "binary"
FREE_TEXT = "free-text"
MULTI_SELECT = "multi-select"

QUESTION_TYPES = (SINGLE_CHOICE, BINARY, FREE_TEXT, MULTI_SELECT)

BINARY_VALUES = ("True", "False")


class QuestionOption(BaseModel):
    """보기 하나. 원본 포맷의 option_text 키도 허용."""

    text: str = Field(
        ...,
        validation_alias=AliasChoices("text", "option_text"),
        description="보기 문자열",
    )
    is_correct: bool = Field(
        default=False,
        description="정답 보기 여부",
    )

    model_config = {"frozen": True}


class _QuestionBase(BaseModel):
    question_id: str = Field(
        ...,
        min_length=1,
        description="문제 식별자 (퀴즈 내 고유)",
    )
    question_text: str = Field(
        default="",
        description="발문 (채점에는 사용하지 않음)",
    )

    model_config = {"frozen": True}


class SingleChoiceQuestion(_QuestionBase):
    """단일 선택 문제. 정답 보기는 정확히 하나."""

    type: Literal["single-choice"] = SINGLE_CHOICE
    options: List[QuestionOption] = Field(..., description="보기 리스트")
    correct_answer: str = Field(..., min_length=1, description="정답 보기 문자열")

    @field_validator("options")
    @classmethod
    def validate_options_length(cls, v: List[QuestionOption]) -> List[QuestionOption]:
        if len(v) < 2:
            raise ValueError("보기(options)는 최소 2개 이상의 항목이 필요합니다.")
        return v

    @model_validator(mode="after")
    def validate_answer_in_options(self) -> "SingleChoiceQuestion":
        """
        정답은 보기 리스트 안에 있어야 하고,
        is_correct 표시가 있다면 정답 보기 하나에만 있어야 한다.
        """
        texts = [o.text for o in self.options]
        if self.correct_answer not in texts:
            raise ValueError(
                f"정답('{self.correct_answer}')이 보기 리스트({texts})에 존재하지 않습니다."
            )
        flagged = [o.text for o in self.options if o.is_correct]
        if flagged and flagged != [self.correct_answer]:
            raise ValueError(
                f"정답 표시 보기({flagged})가 정답('{self.correct_answer}')과 일치하지 않습니다."
            )
        return self


def _binary_options() -> List[QuestionOption]:
    return [QuestionOption(text=v) for v in BINARY_VALUES]


class BinaryQuestion(_QuestionBase):
    """참/거짓 문제. 보기는 "True"/"False" 고정."""

    type: Literal["binary"] = BINARY
    options: List[QuestionOption] = Field(default_factory=_binary_options)
    correct_answer: Literal["True", "False"]

    @field_validator("options", mode="before")
    @classmethod
    def fixed_options(cls, v):
        # 원본 데이터의 빈 보기는 무시
        return _binary_options()


class FreeTextQuestion(_QuestionBase):
    """주관식(빈칸 채우기) 문제."""

    type: Literal["free-text"] = FREE_TEXT
    options: List[QuestionOption] = Field(default_factory=list)
    correct_answer: str = Field(..., min_length=1)

    @field_validator("options", mode="before")
    @classmethod
    def no_options(cls, v):
        return []


class MultiSelectQuestion(_QuestionBase):
    """복수 선택 문제. 정답 보기 집합과 선택 집합이 정확히 같아야 정답."""

    type: Literal["multi-select"] = MULTI_SELECT
    options: List[QuestionOption] = Field(..., min_length=1)
    correct_answer: str = Field(default="", description="사용하지 않음")

    @property
    def correct_options(self) -> List[str]:
        return [o.text.strip() for o in self.options if o.is_correct]


Question = Annotated[
    Union[SingleChoiceQuestion, BinaryQuestion, FreeTextQuestion, MultiSelectQuestion],
    Field(discriminator="type"),
]

# 한 번에 하나의 값만 활성화되는 유형
EXCLUSIVE_QUESTIONS = (SingleChoiceQuestion, BinaryQuestion)


class Quiz(BaseModel):
    """
    퀴즈 한 세트. 응시(attempt)마다 한 번 로드되고 변경되지 않는다.

    questions의 순서가 표시 순서이자 채점 순서.
    """

    quiz_id: str = Field(..., min_length=1, description="퀴즈 식별자")
    title: str = Field(..., description="퀴즈 제목")
    description: str = Field(default="", description="퀴즈 설명")
    questions: List[Question] = Field(..., description="문제 리스트 (순서 유지)")
    time_limit: int = Field(
        default=300,
        ge=0,
        description="제한 시간 (초). 표시용이며 자동 제출하지 않음.",
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "Quiz":
        seen = set()
        for q in self.questions:
            if q.question_id in seen:
                raise ValueError(f"문제 ID '{q.question_id}'가 중복되었습니다.")
            seen.add(q.question_id)
        return self

    def get_question(self, question_id: str) -> Optional[Question]:
        """question_id로 문제 조회. 없으면 None."""
        for q in self.questions:
            if q.question_id == question_id:
                return q
        return None
