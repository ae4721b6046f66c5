"""Tests for data model classes."""
import pytest

from models.question import Difficulty, Question
from models.test_result import QuestionResult, TestResult
from models.user import User, UserStats


def _question(**overrides):
    fields = dict(
        question_id="q1",
        topic="Chemistry",
        text="The chemical symbol for gold is",
        options=["Go", "Gd", "Au", "Ag"],
        correct_answer="Au",
    )
    fields.update(overrides)
    return Question(**fields)


def test_question_defaults_to_medium():
    q = _question()
    assert q.difficulty is Difficulty.MEDIUM


def test_question_difficulty_from_string():
    q = _question(difficulty="hard")
    assert q.difficulty is Difficulty.HARD


def test_question_rejects_unknown_difficulty():
    with pytest.raises(ValueError):
        _question(difficulty="extreme")


def test_question_requires_four_options():
    with pytest.raises(ValueError):
        _question(options=["Go", "Au", "Ag"])


def test_question_rejects_duplicate_options():
    with pytest.raises(ValueError):
        _question(options=["Au", "Au", "Ag", "Go"])


def test_question_correct_answer_must_be_an_option():
    with pytest.raises(ValueError):
        _question(correct_answer="Fe")


def test_question_document_uses_camel_case_keys():
    doc = _question().to_document()
    assert doc["_id"] == "q1"
    assert doc["question"] == "The chemical symbol for gold is"
    assert doc["correctAnswer"] == "Au"
    assert doc["difficulty"] == "medium"
    assert Question.from_document(doc) == _question()


def test_user_public_dict_has_no_password():
    user = User(user_id="u1", name="Asha", email="a@example.com", password_hash="hash")
    public = user.to_public_dict()
    assert "password" not in public
    assert public["stats"]["testsTaken"] == 0
    assert public["preferences"] == {"theme": "light"}


def test_user_stats_from_partial_document():
    stats = UserStats.from_document({"bestScore": 80})
    assert stats.best_score == 80
    assert stats.tests_taken == 0


def test_test_result_document_keeps_snapshots():
    result = TestResult(
        result_id="r1",
        user_id="u1",
        score=50,
        time_taken=30,
        total_questions=2,
        correct_answers=1,
        topics=["Chemistry"],
        results=[
            QuestionResult("q1", "Gold?", "Chemistry", "Au", "Au", True, ["Go", "Gd", "Au", "Ag"]),
            QuestionResult("q2", "Water?", "Chemistry", "HO2", "H2O", False, ["H2O", "H2O2", "HO2", "H3O"]),
        ],
    )
    doc = result.to_document()
    assert doc["results"][1]["userAnswer"] == "HO2"
    assert doc["results"][0]["options"] == ["Go", "Gd", "Au", "Ag"]
    assert TestResult.from_document(doc) == result


def test_test_result_snapshot_cannot_be_mutated():
    options = ["Go", "Gd", "Au", "Ag"]
    topics = ["Chemistry"]
    answer = QuestionResult("q1", "Gold?", "Chemistry", "Au", "Au", True, options)
    result = TestResult("r1", "u1", 100, 30, 1, 1, topics, [answer])

    options.append("Pb")
    topics.append("Physics")
    assert answer.options == ("Go", "Gd", "Au", "Ag")
    assert result.topics == ("Chemistry",)
    assert isinstance(result.results, tuple)
    with pytest.raises(AttributeError):
        result.results.append(answer)
