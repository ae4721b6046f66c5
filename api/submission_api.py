"""
Test submission and history API endpoints
"""

from fastapi import APIRouter, Depends

from api.schemas import TestHistoryResponse, TestResultSchema, TestSubmitRequest, TestSubmitResponse
from api.shared import get_current_user_id, get_scoring_service
from services.scoring_service import ScoringService

router = APIRouter(prefix="/api/test", tags=["Tests"])


@router.post("/submit",
             response_model=TestSubmitResponse,
             summary="Submit a finished test for grading")
async def submit_test(
    request: TestSubmitRequest,
    user_id: str = Depends(get_current_user_id),
    scoring: ScoringService = Depends(get_scoring_service),
):
    """
    Grade a test and store the result.

    Steps:
    1. Load the submitted questions from the store by id (client-sent answers
       keys are ignored)
    2. Compare each answer with exact string equality
    3. Store the TestResult
    4. Update testsTaken / bestScore of the user

    If step 4 fails the stored result is kept and ``statsUpdated`` is false.
    """
    result, stats_updated = await scoring.submit_test(
        user_id=user_id,
        question_ids=request.question_ids(),
        answers=request.answers,
        time_taken=request.time_taken,
        topics=request.topics,
    )
    return TestSubmitResponse(result=TestResultSchema.from_model(result), stats_updated=stats_updated)


@router.get("/history",
            response_model=TestHistoryResponse,
            summary="Test results of the authenticated user, newest first")
async def get_test_history(
    user_id: str = Depends(get_current_user_id),
    scoring: ScoringService = Depends(get_scoring_service),
):
    tests = await scoring.get_history(user_id)
    return TestHistoryResponse(tests=[TestResultSchema.from_model(t) for t in tests])
