"""
Stats Ledger Service
"""

import logging
from numbers import Number

from database.base import USERS, DocumentStore
from models.user import STATS_FIELDS
from services.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class StatsLedgerService:
    """
    Per-user statistics counters.

    Only atomic store-level mutations are exposed (``$inc`` and ``$max``), so
    concurrent submissions from the same user never lose updates and the
    final counters do not depend on arrival order.
    """

    def __init__(self, store: DocumentStore):
        self.store = store

    @staticmethod
    def _path(field: str) -> str:
        if field not in STATS_FIELDS:
            raise ValidationError(f"Unknown stats field: {field}")
        return f"stats.{field}"

    async def increment(self, user_id: str, field: str, delta: int = 1) -> None:
        if isinstance(delta, bool) or not isinstance(delta, Number):
            raise ValidationError("delta must be a number")
        matched = await self.store.update_one(USERS, user_id, inc={self._path(field): delta})
        if not matched:
            raise NotFoundError(f"User not found: {user_id}")

    async def raise_max(self, user_id: str, field: str, candidate: Number) -> None:
        """Set field to max(field, candidate); never decreases it"""
        if isinstance(candidate, bool) or not isinstance(candidate, Number):
            raise ValidationError("candidate must be a number")
        matched = await self.store.update_one(USERS, user_id, max_={self._path(field): candidate})
        if not matched:
            raise NotFoundError(f"User not found: {user_id}")

    async def record_test(self, user_id: str, score: int) -> None:
        """testsTaken += 1 and bestScore = max(bestScore, score) in one atomic update"""
        matched = await self.store.update_one(
            USERS,
            user_id,
            inc={self._path("testsTaken"): 1},
            max_={self._path("bestScore"): score},
        )
        if not matched:
            raise NotFoundError(f"User not found: {user_id}")

    async def record_practice(self, user_id: str) -> None:
        await self.increment(user_id, "practiceQuestions", 1)
