"""
User Model
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Optional

# Counters the ledger is allowed to mutate
STATS_FIELDS = (
    "testsTaken",
    "practiceQuestions",
    "averageScore",
    "bestScore",
    "studyStreak",
)


@dataclass
class UserStats:
    """Rolling per-user statistics"""
    tests_taken: int = 0
    practice_questions: int = 0
    average_score: float = 0
    best_score: int = 0
    study_streak: int = 0

    @classmethod
    def from_document(cls, doc: Optional[Dict]) -> "UserStats":
        doc = doc or {}
        return cls(
            tests_taken=doc.get("testsTaken", 0),
            practice_questions=doc.get("practiceQuestions", 0),
            average_score=doc.get("averageScore", 0),
            best_score=doc.get("bestScore", 0),
            study_streak=doc.get("studyStreak", 0),
        )

    def to_document(self) -> Dict:
        return {
            "testsTaken": self.tests_taken,
            "practiceQuestions": self.practice_questions,
            "averageScore": self.average_score,
            "bestScore": self.best_score,
            "studyStreak": self.study_streak,
        }


@dataclass
class User:
    """Registered user (collection: users)"""
    user_id: str
    name: str
    email: str
    password_hash: str
    stats: UserStats = field(default_factory=UserStats)
    preferences: Dict[str, str] = field(default_factory=lambda: {"theme": "light"})
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_document(cls, doc: Dict) -> "User":
        return cls(
            user_id=str(doc["_id"]),
            name=doc.get("name", ""),
            email=doc.get("email", ""),
            password_hash=doc.get("password", ""),
            stats=UserStats.from_document(doc.get("stats")),
            preferences=dict(doc.get("preferences") or {"theme": "light"}),
            created_at=doc.get("createdAt"),
            updated_at=doc.get("updatedAt"),
        )

    def to_document(self) -> Dict:
        return {
            "_id": self.user_id,
            "name": self.name,
            "email": self.email,
            "password": self.password_hash,
            "stats": self.stats.to_document(),
            "preferences": dict(self.preferences),
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    def to_public_dict(self) -> Dict:
        """User document without the password hash"""
        doc = self.to_document()
        doc.pop("password")
        return doc
