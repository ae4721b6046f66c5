import argparse
import asyncio
import json
import logging
import sys
from typing import Dict, List

import requests

from api.config import get_settings
from database import create_store
from services.errors import QuizError
from services.question_bank_service import QuestionBankService

logger = logging.getLogger("seed_questions")

SAMPLE_QUESTIONS = [
    {
        "topic": "General Meteorology",
        "question": "Lowest layer of atmosphere is",
        "options": ["Troposphere", "Tropopause", "Stratosphere", "Mesosphere"],
        "correctAnswer": "Troposphere",
        "difficulty": "easy",
    },
    {
        "topic": "General Meteorology",
        "question": "The greenhouse effect is primarily caused by",
        "options": ["Oxygen", "Nitrogen", "Carbon dioxide", "Helium"],
        "correctAnswer": "Carbon dioxide",
        "difficulty": "medium",
    },
    {
        "topic": "Physics",
        "question": "The speed of light in vacuum is approximately",
        "options": ["3 × 10⁸ m/s", "3 × 10⁶ m/s", "3 × 10⁷ m/s", "3 × 10⁹ m/s"],
        "correctAnswer": "3 × 10⁸ m/s",
        "difficulty": "medium",
    },
    {
        "topic": "Physics",
        "question": "Newton's first law is also known as",
        "options": ["Law of inertia", "Law of acceleration", "Law of action-reaction", "Law of gravitation"],
        "correctAnswer": "Law of inertia",
        "difficulty": "easy",
    },
    {
        "topic": "Chemistry",
        "question": "The chemical symbol for gold is",
        "options": ["Go", "Gd", "Au", "Ag"],
        "correctAnswer": "Au",
        "difficulty": "easy",
    },
    {
        "topic": "Chemistry",
        "question": "Water has the chemical formula",
        "options": ["H2O", "H2O2", "HO2", "H3O"],
        "correctAnswer": "H2O",
        "difficulty": "easy",
    },
    {
        "topic": "Mathematics",
        "question": "What is the value of π (pi) approximately?",
        "options": ["3.14159", "2.71828", "1.41421", "1.73205"],
        "correctAnswer": "3.14159",
        "difficulty": "easy",
    },
    {
        "topic": "Mathematics",
        "question": "The square root of 144 is",
        "options": ["12", "14", "16", "10"],
        "correctAnswer": "12",
        "difficulty": "easy",
    },
]


def fetch_questions(url: str) -> List[Dict]:
    """
    Download a JSON list of questions

    Args:
        url: Address of a JSON document holding a list of question objects

    Returns:
        List of question documents
    """
    response = requests.get(url, timeout=60)
    response.raise_for_status()
    data = response.json()
    if isinstance(data, dict):
        data = data.get("questions", [])
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of questions from {url}")
    return data


def load_questions_file(path: str) -> List[Dict]:
    with open(path, 'r', encoding='utf-8') as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("questions", [])
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of questions in {path}")
    return data


async def seed(questions: List[Dict], replace: bool) -> int:
    settings = get_settings()
    store = create_store(settings.STORE_BACKEND, settings.MONGODB_URI, settings.MONGODB_DATABASE)
    await store.connect()
    try:
        await store.ensure_indexes()
        return await QuestionBankService(store).add_questions(questions, replace=replace)
    finally:
        await store.close()


def main():
    parser = argparse.ArgumentParser(description='Load questions into the question bank')
    source = parser.add_mutually_exclusive_group()
    source.add_argument('--file', type=str, default=None,
                        help='JSON file with a list of questions')
    source.add_argument('--url', type=str, default=None,
                        help='URL returning a JSON list of questions')
    parser.add_argument('--replace', action='store_true',
                        help='Delete existing questions before inserting')

    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.file:
            questions = load_questions_file(args.file)
        elif args.url:
            questions = fetch_questions(args.url)
        else:
            questions = SAMPLE_QUESTIONS
    except (OSError, ValueError, requests.exceptions.RequestException) as e:
        logger.error("Could not load questions: %s", e)
        sys.exit(1)

    logger.info("Seeding %d questions...", len(questions))
    try:
        inserted = asyncio.run(seed(questions, replace=args.replace))
    except QuizError as e:
        logger.error("Seeding failed: %s: %s", e.kind, e.message)
        sys.exit(1)

    logger.info("Sample questions inserted successfully! (%d)", inserted)


if __name__ == "__main__":
    main()
