"""
API Schemas - Request/Response models

JSON uses camelCase keys and Mongo-style ``_id`` identifiers.
"""

from datetime import datetime
from typing import Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from models.question import Difficulty, Question
from models.test_result import QuestionResult, TestResult
from models.user import User


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============== Users / auth ===============


class UserStatsSchema(CamelModel):
    tests_taken: int = 0
    practice_questions: int = 0
    average_score: float = 0
    best_score: int = 0
    study_streak: int = 0


class UserSchema(CamelModel):
    """User as returned to clients (never includes the password hash)"""
    id: str = Field(..., alias="_id")
    name: str
    email: str
    stats: UserStatsSchema
    preferences: Dict[str, str] = Field(default_factory=dict)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, user: User) -> "UserSchema":
        return cls(
            id=user.user_id,
            name=user.name,
            email=user.email,
            stats=UserStatsSchema(
                tests_taken=user.stats.tests_taken,
                practice_questions=user.stats.practice_questions,
                average_score=user.stats.average_score,
                best_score=user.stats.best_score,
                study_streak=user.stats.study_streak,
            ),
            preferences=user.preferences,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class RegisterRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=150)
    email: str = Field(..., min_length=3, max_length=254)
    password: str = Field(..., min_length=6, max_length=128)

    model_config = ConfigDict(json_schema_extra={
        "example": {"name": "Asha", "email": "asha@example.com", "password": "s3cret-pass"}
    })


class LoginRequest(CamelModel):
    email: str
    password: str

    model_config = ConfigDict(json_schema_extra={
        "example": {"email": "asha@example.com", "password": "s3cret-pass"}
    })


class AuthResponse(CamelModel):
    success: bool = True
    user: UserSchema
    token: str


class ProfileResponse(CamelModel):
    success: bool = True
    user: UserSchema


# =============== Questions ===============


class TestQuestionSchema(CamelModel):
    """Question as served inside a test (no correct answer)"""
    id: str = Field(..., alias="_id")
    topic: str
    question: str
    options: List[str]
    difficulty: Difficulty

    @classmethod
    def from_model(cls, q: Question) -> "TestQuestionSchema":
        return cls(id=q.question_id, topic=q.topic, question=q.text,
                   options=list(q.options), difficulty=q.difficulty)


class QuestionSchema(TestQuestionSchema):
    """Full question record"""
    correct_answer: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, q: Question) -> "QuestionSchema":
        return cls(id=q.question_id, topic=q.topic, question=q.text,
                   options=list(q.options), difficulty=q.difficulty,
                   correct_answer=q.correct_answer,
                   created_at=q.created_at, updated_at=q.updated_at)


class TopicsResponse(CamelModel):
    success: bool = True
    topics: List[str]


class QuestionsResponse(CamelModel):
    success: bool = True
    questions: List[QuestionSchema]


class TestQuestionSetRequest(CamelModel):
    """Request for the question set of a new test"""
    topics: List[str] = Field(..., min_length=1, description="Topics to draw questions from")
    count: Optional[int] = Field(default=None, ge=1, description="Number of questions wanted (server default when omitted)")

    model_config = ConfigDict(json_schema_extra={
        "example": {"topics": ["Physics", "Chemistry"], "count": 5}
    })


class TestQuestionSetResponse(CamelModel):
    success: bool = True
    questions: List[TestQuestionSchema]
    total_questions: int


# =============== Practice / tests ===============


class PracticeSubmitRequest(CamelModel):
    question_id: str
    user_answer: Optional[str] = None

    model_config = ConfigDict(json_schema_extra={
        "example": {"questionId": "66f1c0a2e4b0a1b2c3d4e5f6", "userAnswer": "Au"}
    })


class PracticeSubmitResponse(CamelModel):
    success: bool = True
    correct: bool
    correct_answer: str


class SubmittedQuestion(BaseModel):
    """
    Question echoed back by the client. Only the id is used; grading always
    reloads the stored question.
    """
    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., validation_alias=AliasChoices("_id", "id", "questionId"))


class TestSubmitRequest(CamelModel):
    questions: List[Union[str, SubmittedQuestion]]
    answers: List[Optional[str]]
    time_taken: float = Field(..., ge=0, description="Seconds spent on the test")
    topics: List[str] = Field(default_factory=list)

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "questions": [{"_id": "66f1c0a2e4b0a1b2c3d4e5f6"}, "66f1c0a2e4b0a1b2c3d4e5f7"],
            "answers": ["Au", "H2O"],
            "timeTaken": 42,
            "topics": ["Chemistry"],
        }
    })

    def question_ids(self) -> List[str]:
        return [q if isinstance(q, str) else q.id for q in self.questions]


class QuestionResultSchema(CamelModel):
    question_id: str
    question: str
    topic: str
    user_answer: Optional[str] = None
    correct_answer: str
    is_correct: bool
    options: List[str]

    @classmethod
    def from_model(cls, r: QuestionResult) -> "QuestionResultSchema":
        return cls(question_id=r.question_id, question=r.question, topic=r.topic,
                   user_answer=r.user_answer, correct_answer=r.correct_answer,
                   is_correct=r.is_correct, options=list(r.options))


class TestResultSchema(CamelModel):
    id: str = Field(..., alias="_id")
    user_id: str
    score: int = Field(..., ge=0, le=100)
    time_taken: float
    total_questions: int
    correct_answers: int
    topics: List[str]
    results: List[QuestionResultSchema]
    created_at: Optional[datetime] = None

    @classmethod
    def from_model(cls, result: TestResult) -> "TestResultSchema":
        return cls(
            id=result.result_id,
            user_id=result.user_id,
            score=result.score,
            time_taken=result.time_taken,
            total_questions=result.total_questions,
            correct_answers=result.correct_answers,
            topics=list(result.topics),
            results=[QuestionResultSchema.from_model(r) for r in result.results],
            created_at=result.created_at,
        )


class TestSubmitResponse(CamelModel):
    success: bool = True
    result: TestResultSchema
    stats_updated: bool = Field(
        ..., description="False when the result was stored but the user stats update failed"
    )


class TestHistoryResponse(CamelModel):
    success: bool = True
    tests: List[TestResultSchema]


class ErrorResponse(BaseModel):
    success: bool = False
    error: str
    message: str


# Error envelope documented on every router
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid credentials"},
    401: {"model": ErrorResponse, "description": "Missing access token"},
    403: {"model": ErrorResponse, "description": "Invalid or expired access token"},
    404: {"model": ErrorResponse, "description": "Unknown question or user"},
    409: {"model": ErrorResponse, "description": "Email already registered"},
    422: {"model": ErrorResponse, "description": "Validation error or empty question set"},
    500: {"model": ErrorResponse, "description": "Store failure"},
}
