from enum import Enum
from typing import List, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator, model_validator


class Category(str, Enum):
    easy = "easy"
    medium = "medium"
    hard = "hard"


class DraftStatus(str, Enum):
    pending = "pending"
    published = "published"


class CourseStatus(str, Enum):
    approved = "approved"
    rejected = "rejected"
    pending = "pending"


def _not_blank(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("no puede estar vacío")
    return value


def _http_url(value: str) -> str:
    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("debe ser una URL http(s) válida")
    return value


class QuizQuestion(BaseModel):
    question: str
    options: List[str] = Field(..., min_length=2)
    correctAnswer: int
    explanation: Optional[str] = None

    @field_validator("question")
    @classmethod
    def question_not_blank(cls, v: str) -> str:
        return _not_blank(v)

    @field_validator("options")
    @classmethod
    def options_not_blank(cls, v: List[str]) -> List[str]:
        return [_not_blank(o) for o in v]

    @model_validator(mode="after")
    def correct_answer_in_range(self) -> "QuizQuestion":
        if not 0 <= self.correctAnswer < len(self.options):
            raise ValueError(
                f"correctAnswer debe estar entre 0 y {len(self.options) - 1}"
            )
        return self


class DraftSubmission(BaseModel):
    title: str
    description: str
    videoUrl: str
    thumbnailUrl: Optional[str] = None
    category: Category
    duration: str
    quizQuestions: List[QuizQuestion] = []

    @field_validator("title", "description", "duration")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        return _not_blank(v)

    @field_validator("videoUrl")
    @classmethod
    def video_url_valid(cls, v: str) -> str:
        return _http_url(_not_blank(v))

    @field_validator("thumbnailUrl")
    @classmethod
    def thumbnail_url_valid(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not v.strip():
            return None
        return _http_url(v.strip())


class QuizAnswers(BaseModel):
    # Una entrada por pregunta; None si quedó sin responder
    answers: List[Optional[int]]


class QuestionResult(BaseModel):
    index: int
    selected: Optional[int] = None
    correctAnswer: int
    correct: bool
    explanation: Optional[str] = None


class QuizResult(BaseModel):
    score: int
    total: int
    percentage: int
    results: List[QuestionResult]


class AdminLoginRequest(BaseModel):
    accessKey: str
