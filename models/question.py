"""
Question Model
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Dict, List, Optional

OPTIONS_PER_QUESTION = 4


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass
class Question:
    """Multiple-choice question (collection: questions)"""
    question_id: str
    topic: str
    text: str
    options: List[str]
    correct_answer: str
    difficulty: Difficulty = Difficulty.MEDIUM
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """
        Rules enforced when a question is built:
        - exactly 4 options, no duplicates
        - correct_answer must be one of the options
        - difficulty is one of easy / medium / hard
        """
        if not self.topic:
            raise ValueError("Question topic is required")
        if not self.text:
            raise ValueError("Question text is required")

        self.options = list(self.options)
        if len(self.options) != OPTIONS_PER_QUESTION:
            raise ValueError(
                f"Question must have exactly {OPTIONS_PER_QUESTION} options, got {len(self.options)}"
            )
        if len(set(self.options)) != len(self.options):
            raise ValueError("Question options must be unique")
        if self.correct_answer not in self.options:
            raise ValueError("correctAnswer must equal one of the options")

        self.difficulty = Difficulty(self.difficulty)

    @classmethod
    def from_document(cls, doc: Dict) -> "Question":
        return cls(
            question_id=str(doc.get("_id", "")),
            topic=doc.get("topic", ""),
            text=doc.get("question", ""),
            options=doc.get("options", []),
            correct_answer=doc.get("correctAnswer", ""),
            difficulty=doc.get("difficulty") or Difficulty.MEDIUM,
            created_at=doc.get("createdAt"),
            updated_at=doc.get("updatedAt"),
        )

    def to_document(self) -> Dict:
        doc = {
            "_id": self.question_id,
            "topic": self.topic,
            "question": self.text,
            "options": list(self.options),
            "correctAnswer": self.correct_answer,
            "difficulty": self.difficulty.value,
        }
        if self.created_at is not None:
            doc["createdAt"] = self.created_at
        if self.updated_at is not None:
            doc["updatedAt"] = self.updated_at
        return doc
