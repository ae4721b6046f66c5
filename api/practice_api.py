"""
Practice API endpoints
"""

from fastapi import APIRouter, Depends

from api.schemas import PracticeSubmitRequest, PracticeSubmitResponse
from api.shared import get_current_user_id, get_scoring_service
from services.scoring_service import ScoringService

router = APIRouter(prefix="/api/practice", tags=["Practice"])


@router.post("/submit",
             response_model=PracticeSubmitResponse,
             summary="Check a single practice answer")
async def submit_practice_answer(
    request: PracticeSubmitRequest,
    user_id: str = Depends(get_current_user_id),
    scoring: ScoringService = Depends(get_scoring_service),
):
    """
    Grade one answer against the stored question and count it in the
    user's practiceQuestions. No test result is created.
    """
    outcome = await scoring.submit_practice(user_id, request.question_id, request.user_answer)
    return PracticeSubmitResponse(
        correct=outcome["is_correct"],
        correct_answer=outcome["correct_answer"],
    )
