import os

# Settings are read once and cached, so the API under test must see these first
os.environ.setdefault("QUIZ_STORE_BACKEND", "memory")
os.environ.setdefault("QUIZ_JWT_SECRET", "test-secret-key-with-at-least-32-bytes!")

import pytest

from database.memory_store import MemoryDocumentStore
from seed_questions import SAMPLE_QUESTIONS
from services.auth_service import AuthService, TokenService
from services.question_bank_service import QuestionBankService
from services.scoring_service import ScoringService
from services.stats_ledger_service import StatsLedgerService

TEST_SECRET = "test-secret-key-with-at-least-32-bytes!"


def make_question(topic: str, n: int, correct: str = "A") -> dict:
    return {
        "_id": f"{topic.lower()}-{n}",
        "topic": topic,
        "question": f"{topic} question {n}",
        "options": ["A", "B", "C", "D"],
        "correctAnswer": correct,
        "difficulty": "easy",
    }


@pytest.fixture
async def store():
    store = MemoryDocumentStore()
    await store.ensure_indexes()
    return store


@pytest.fixture
async def question_bank(store):
    bank = QuestionBankService(store)
    await bank.add_questions(SAMPLE_QUESTIONS)
    return bank


@pytest.fixture
def tokens():
    return TokenService(TEST_SECRET, expire_minutes=60)


@pytest.fixture
def auth(store, tokens):
    return AuthService(store, tokens)


@pytest.fixture
def ledger(store):
    return StatsLedgerService(store)


@pytest.fixture
def scoring(store, question_bank, ledger):
    return ScoringService(store, question_bank, ledger)


@pytest.fixture
async def user(auth):
    user, _ = await auth.register("Test User", "user@example.com", "password123")
    return user
