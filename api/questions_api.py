"""
Question API endpoints
"""

from typing import Optional

from fastapi import APIRouter, Depends

from api.config import Settings, get_settings
from api.schemas import (
    QuestionSchema,
    QuestionsResponse,
    TestQuestionSchema,
    TestQuestionSetRequest,
    TestQuestionSetResponse,
    TopicsResponse,
)
from api.shared import get_question_bank, get_test_assembler
from services.errors import ValidationError
from services.question_bank_service import QuestionBankService
from services.test_assembler_service import TestAssemblerService

router = APIRouter(prefix="/api/questions", tags=["Questions"])


@router.get("/topics",
            response_model=TopicsResponse,
            summary="List distinct question topics")
async def list_topics(question_bank: QuestionBankService = Depends(get_question_bank)):
    topics = await question_bank.list_topics()
    return TopicsResponse(topics=topics)


@router.get("/by-topic",
            response_model=QuestionsResponse,
            summary="List questions of a topic")
async def list_questions_by_topic(
    topic: Optional[str] = None,
    question_bank: QuestionBankService = Depends(get_question_bank),
):
    """
    Args:
        topic: Topic name. When omitted, every question is returned.
    """
    questions = await question_bank.list_by_topic(topic)
    return QuestionsResponse(questions=[QuestionSchema.from_model(q) for q in questions])


@router.post("/for-test",
             response_model=TestQuestionSetResponse,
             summary="Build a randomized question set for a test")
async def get_questions_for_test(
    request: TestQuestionSetRequest,
    assembler: TestAssemblerService = Depends(get_test_assembler),
    settings: Settings = Depends(get_settings),
):
    """
    Draw a random sample (without replacement) from the requested topics.

    **Notes:**
    - When fewer questions exist than requested, all of them are returned
    - Correct answers are not included; grading happens server-side on submit
    """
    count = request.count or settings.DEFAULT_TEST_COUNT
    if count > settings.MAX_TEST_COUNT:
        raise ValidationError(f"count must not exceed {settings.MAX_TEST_COUNT}")

    questions = await assembler.assemble_test(request.topics, count)
    return TestQuestionSetResponse(
        questions=[TestQuestionSchema.from_model(q) for q in questions],
        total_questions=len(questions),
    )
