"""
Question Bank Service
"""

import logging
from typing import Dict, Iterable, List, Optional

from database.base import QUESTIONS, DocumentStore, new_id, utcnow
from models.question import Question
from services.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class QuestionBankService:
    """
    Read access to the question collection plus bulk loading for seeding
    """

    def __init__(self, store: DocumentStore):
        self.store = store

    async def list_topics(self) -> List[str]:
        """Distinct topic names, sorted"""
        topics = await self.store.distinct(QUESTIONS, "topic")
        return sorted(str(t) for t in topics)

    async def list_by_topic(self, topic: Optional[str] = None) -> List[Question]:
        """All questions of a topic, or every question when topic is empty"""
        filter = {"topic": topic} if topic else {}
        docs = await self.store.find(QUESTIONS, filter, sort=[("_id", 1)])
        return [Question.from_document(d) for d in docs]

    async def find_by_topics(self, topics: Iterable[str]) -> List[Question]:
        docs = await self.store.find(QUESTIONS, {"topic": {"$in": list(topics)}}, sort=[("_id", 1)])
        return [Question.from_document(d) for d in docs]

    async def get_question(self, question_id: str) -> Question:
        doc = await self.store.find_one(QUESTIONS, {"_id": question_id})
        if doc is None:
            raise NotFoundError(f"Question not found: {question_id}")
        return Question.from_document(doc)

    async def get_questions(self, question_ids: List[str]) -> List[Question]:
        """
        Load questions by id, keeping the order (and repeats) of question_ids

        Raises:
            NotFoundError: if any id is unknown
        """
        docs = await self.store.find(QUESTIONS, {"_id": {"$in": list(set(question_ids))}})
        by_id: Dict[str, Question] = {str(d["_id"]): Question.from_document(d) for d in docs}

        missing = [qid for qid in question_ids if qid not in by_id]
        if missing:
            raise NotFoundError(f"Question not found: {', '.join(missing)}")
        return [by_id[qid] for qid in question_ids]

    async def add_questions(self, raw_questions: List[Dict], replace: bool = False) -> int:
        """
        Validate and insert questions given as documents
        ({topic, question, options, correctAnswer, difficulty})

        Args:
            raw_questions: question documents, ``_id`` optional
            replace: delete every existing question first

        Returns:
            Number of inserted questions
        """
        now = utcnow()
        questions = []
        seen_ids = set()
        for index, raw in enumerate(raw_questions):
            doc = dict(raw)
            doc.setdefault("_id", new_id())
            doc.setdefault("createdAt", now)
            doc.setdefault("updatedAt", now)
            try:
                question = Question.from_document(doc)
            except ValueError as e:
                raise ValidationError(f"Invalid question at index {index}: {e}") from e
            if question.question_id in seen_ids:
                raise ValidationError(f"Duplicate question _id at index {index}: {question.question_id}")
            seen_ids.add(question.question_id)
            questions.append(question)

        # Nothing is deleted until the whole batch is known to be insertable
        if replace:
            deleted = await self.store.delete_many(QUESTIONS)
            logger.info("Removed %d existing questions", deleted)

        await self.store.insert_many(QUESTIONS, [q.to_document() for q in questions])
        logger.info("Inserted %d questions", len(questions))
        return len(questions)
