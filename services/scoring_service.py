"""
Scoring Service
"""

import logging
from numbers import Number
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from database.base import TEST_RESULTS, DocumentStore, DESCENDING, new_id, utcnow
from models.question import Question
from models.test_result import QuestionResult, TestResult
from services.errors import InvalidInputError, QuizError, ValidationError
from services.question_bank_service import QuestionBankService
from services.stats_ledger_service import StatsLedgerService

logger = logging.getLogger(__name__)


def percentage_score(correct: int, total: int) -> int:
    """
    round(100 * correct / total) with halves rounded up, in integer arithmetic

    Raises:
        InvalidInputError: total is 0
    """
    if total <= 0:
        raise InvalidInputError("empty question set")
    return (200 * correct + total) // (2 * total)


def _ordered_unique(values: Iterable[str]) -> List[str]:
    seen = []
    for value in values:
        if value and value not in seen:
            seen.append(value)
    return seen


class ScoringService:
    """
    Grades tests and practice answers, stores results and updates the ledger.

    Answers are compared with exact string equality: no case folding and no
    whitespace trimming.
    """

    def __init__(self,
                 store: DocumentStore,
                 question_bank: QuestionBankService,
                 ledger: StatsLedgerService):
        self.store = store
        self.question_bank = question_bank
        self.ledger = ledger

    @staticmethod
    def grade_submission(questions: Sequence[Question],
                         answers: Sequence[Optional[str]],
                         time_taken: float,
                         topics: Iterable[str],
                         user_id: str,
                         result_id: Optional[str] = None,
                         created_at=None) -> TestResult:
        """
        Grade a test without any I/O

        Args:
            questions: Questions in the order they were shown
            answers: Answers matched to questions by position (None = skipped)
            time_taken: Seconds spent on the test (>= 0)
            topics: Topics the test was built from; falls back to the question topics
            user_id: Owner of the result

        Returns:
            TestResult with per-question snapshots
        """
        if not questions:
            raise InvalidInputError("empty question set")
        if len(answers) != len(questions):
            raise ValidationError(
                f"answers has {len(answers)} items but there are {len(questions)} questions"
            )
        if isinstance(time_taken, bool) or not isinstance(time_taken, Number) or time_taken < 0:
            raise ValidationError("timeTaken must be a non-negative number")

        results = []
        for question, answer in zip(questions, answers):
            results.append(QuestionResult(
                question_id=question.question_id,
                question=question.text,
                topic=question.topic,
                user_answer=answer,
                correct_answer=question.correct_answer,
                is_correct=answer == question.correct_answer,
                options=tuple(question.options),
            ))

        correct_answers = sum(1 for r in results if r.is_correct)
        total_questions = len(results)

        return TestResult(
            result_id=result_id or new_id(),
            user_id=user_id,
            score=percentage_score(correct_answers, total_questions),
            time_taken=time_taken,
            total_questions=total_questions,
            correct_answers=correct_answers,
            topics=_ordered_unique(topics) or _ordered_unique(q.topic for q in questions),
            results=tuple(results),
            created_at=created_at,
        )

    @staticmethod
    def grade_practice(question: Question, answer: Optional[str]) -> Dict:
        return {
            "is_correct": answer == question.correct_answer,
            "correct_answer": question.correct_answer,
        }

    async def submit_test(self,
                          user_id: str,
                          question_ids: List[str],
                          answers: List[Optional[str]],
                          time_taken: float,
                          topics: Iterable[str]) -> Tuple[TestResult, bool]:
        """
        Grade against the stored questions, persist the result, update the ledger

        The result insert and the ledger update are two separate atomic
        operations. A ledger failure after the insert leaves the result in
        place and is reported through the returned flag.

        Returns:
            (result, stats_updated)
        """
        if not question_ids:
            raise InvalidInputError("empty question set")
        questions = await self.question_bank.get_questions(question_ids)

        result = self.grade_submission(
            questions, answers, time_taken, topics, user_id, created_at=utcnow()
        )
        await self.store.insert_one(TEST_RESULTS, result.to_document())
        logger.info(
            "Stored test result %s for user %s: %d/%d (score %d)",
            result.result_id, user_id, result.correct_answers, result.total_questions, result.score,
        )

        try:
            await self.ledger.record_test(user_id, result.score)
        except QuizError as e:
            logger.warning("Stats update failed for user %s after result %s: %s",
                           user_id, result.result_id, e.message)
            return result, False
        return result, True

    async def submit_practice(self, user_id: str, question_id: str, answer: Optional[str]) -> Dict:
        question = await self.question_bank.get_question(question_id)
        outcome = self.grade_practice(question, answer)
        await self.ledger.record_practice(user_id)
        return outcome

    async def get_history(self, user_id: str) -> List[TestResult]:
        """Test results of a user, most recent first"""
        docs = await self.store.find(
            TEST_RESULTS, {"userId": user_id}, sort=[("createdAt", DESCENDING), ("_id", DESCENDING)]
        )
        return [TestResult.from_document(d) for d in docs]
