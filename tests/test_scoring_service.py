from decimal import ROUND_HALF_UP, Decimal

import pytest

from database.base import TEST_RESULTS, USERS
from models.question import Question
from services.errors import InvalidInputError, NotFoundError, StoreError, ValidationError
from services.scoring_service import ScoringService, percentage_score


def _q(qid, correct, topic="Chemistry"):
    options = [correct] + [f"{correct}-wrong-{i}" for i in range(3)]
    return Question(question_id=qid, topic=topic, text=f"Question {qid}",
                    options=options, correct_answer=correct)


def test_single_correct_answer_scores_100():
    result = ScoringService.grade_submission([_q("q1", "Au")], ["Au"], 10, ["Chemistry"], "u1")
    assert result.correct_answers == 1
    assert result.total_questions == 1
    assert result.score == 100
    assert result.results[0].is_correct is True


def test_single_wrong_answer_scores_0():
    result = ScoringService.grade_submission([_q("q1", "Au")], ["Ag"], 10, ["Chemistry"], "u1")
    assert result.correct_answers == 0
    assert result.score == 0
    assert result.results[0].user_answer == "Ag"
    assert result.results[0].correct_answer == "Au"


def test_two_of_three_scores_67():
    questions = [_q("q1", "a"), _q("q2", "b"), _q("q3", "c")]
    result = ScoringService.grade_submission(questions, ["a", "b", "x"], 5, [], "u1")
    assert result.correct_answers == 2
    assert result.score == 67


def test_half_scores_round_up():
    # 1/8 = 12.5 %
    questions = [_q(f"q{i}", "a") for i in range(8)]
    answers = ["a"] + ["b"] * 7
    assert ScoringService.grade_submission(questions, answers, 0, [], "u1").score == 13


def test_percentage_score_matches_round_half_up_and_stays_in_range():
    for total in range(1, 60):
        for correct in range(total + 1):
            expected = int((Decimal(100 * correct) / Decimal(total)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
            score = percentage_score(correct, total)
            assert score == expected
            assert 0 <= score <= 100


def test_comparison_is_exact():
    questions = [_q("q1", "Au"), _q("q2", "Au"), _q("q3", "Au")]
    result = ScoringService.grade_submission(questions, ["au", "Au ", None], 1, [], "u1")
    assert result.correct_answers == 0
    assert [r.is_correct for r in result.results] == [False, False, False]


def test_grading_is_deterministic():
    questions = [_q("q1", "a"), _q("q2", "b"), _q("q3", "c")]
    answers = ["a", "x", "c"]
    first = ScoringService.grade_submission(questions, answers, 7, ["Chemistry"], "u1", result_id="r")
    second = ScoringService.grade_submission(questions, answers, 7, ["Chemistry"], "u1", result_id="r")
    assert first == second


def test_empty_question_set_is_rejected():
    with pytest.raises(InvalidInputError):
        ScoringService.grade_submission([], [], 0, ["Chemistry"], "u1")


def test_answer_count_must_match_question_count():
    with pytest.raises(ValidationError):
        ScoringService.grade_submission([_q("q1", "a")], ["a", "b"], 0, [], "u1")


def test_negative_time_is_rejected():
    with pytest.raises(ValidationError):
        ScoringService.grade_submission([_q("q1", "a")], ["a"], -1, [], "u1")


def test_topics_fall_back_to_question_topics():
    questions = [_q("q1", "a", "Physics"), _q("q2", "b", "Chemistry"), _q("q3", "c", "Physics")]
    result = ScoringService.grade_submission(questions, ["a", "b", "c"], 0, [], "u1")
    assert result.topics == ("Physics", "Chemistry")


def test_grade_practice():
    question = _q("q1", "Au")
    assert ScoringService.grade_practice(question, "Au") == {"is_correct": True, "correct_answer": "Au"}
    assert ScoringService.grade_practice(question, "Ag")["is_correct"] is False


async def _chemistry_ids(question_bank):
    questions = await question_bank.list_by_topic("Chemistry")
    return {q.correct_answer: q.question_id for q in questions}


async def test_submit_test_persists_result_and_updates_stats(scoring, question_bank, store, user):
    ids = await _chemistry_ids(question_bank)
    result, stats_updated = await scoring.submit_test(
        user.user_id, [ids["Au"], ids["H2O"]], ["Au", "HO2"], 42, ["Chemistry"]
    )

    assert stats_updated is True
    assert result.score == 50
    assert result.results[1].question == "Water has the chemical formula"

    stored = await store.find_one(TEST_RESULTS, {"_id": result.result_id})
    assert stored["userId"] == user.user_id
    assert stored["correctAnswers"] == 1

    doc = await store.find_one(USERS, {"_id": user.user_id})
    assert doc["stats"]["testsTaken"] == 1
    assert doc["stats"]["bestScore"] == 50


async def test_submit_test_grades_against_stored_answers(scoring, question_bank, user):
    ids = await _chemistry_ids(question_bank)
    # Whatever the client claims, the stored correct answer decides
    result, _ = await scoring.submit_test(user.user_id, [ids["Au"]], ["Go"], 3, [])
    assert result.score == 0
    assert result.results[0].correct_answer == "Au"


async def test_best_score_never_decreases(scoring, question_bank, store, user):
    ids = await _chemistry_ids(question_bank)
    await scoring.submit_test(user.user_id, [ids["Au"]], ["Au"], 3, [])
    await scoring.submit_test(user.user_id, [ids["Au"]], ["Ag"], 3, [])

    doc = await store.find_one(USERS, {"_id": user.user_id})
    assert doc["stats"]["testsTaken"] == 2
    assert doc["stats"]["bestScore"] == 100


async def test_submit_test_unknown_question(scoring, user):
    with pytest.raises(NotFoundError):
        await scoring.submit_test(user.user_id, ["missing"], ["a"], 3, [])


async def test_submit_test_with_no_questions(scoring, user):
    with pytest.raises(InvalidInputError):
        await scoring.submit_test(user.user_id, [], [], 3, [])


async def test_ledger_failure_keeps_result(scoring, question_bank, store, user, monkeypatch):
    ids = await _chemistry_ids(question_bank)

    async def broken_record_test(user_id, score):
        raise StoreError("connection reset")

    monkeypatch.setattr(scoring.ledger, "record_test", broken_record_test)
    result, stats_updated = await scoring.submit_test(user.user_id, [ids["Au"]], ["Au"], 3, [])

    assert stats_updated is False
    assert await store.find_one(TEST_RESULTS, {"_id": result.result_id}) is not None


async def test_submit_practice_counts_practice_questions(scoring, question_bank, store, user):
    ids = await _chemistry_ids(question_bank)
    outcome = await scoring.submit_practice(user.user_id, ids["Au"], "Ag")

    assert outcome == {"is_correct": False, "correct_answer": "Au"}
    doc = await store.find_one(USERS, {"_id": user.user_id})
    assert doc["stats"]["practiceQuestions"] == 1
    assert doc["stats"]["testsTaken"] == 0
    assert await store.count(TEST_RESULTS) == 0


async def test_submit_practice_unknown_question(scoring, user):
    with pytest.raises(NotFoundError):
        await scoring.submit_practice(user.user_id, "missing", "a")


async def test_history_is_most_recent_first(scoring, question_bank, user):
    ids = await _chemistry_ids(question_bank)
    first, _ = await scoring.submit_test(user.user_id, [ids["Au"]], ["Au"], 3, [])
    second, _ = await scoring.submit_test(user.user_id, [ids["H2O"]], ["H2O"], 3, [])

    history = await scoring.get_history(user.user_id)
    assert [r.result_id for r in history] == [second.result_id, first.result_id]
    assert await scoring.get_history("someone-else") == []
