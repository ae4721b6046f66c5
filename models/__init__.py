"""
Models module - data classes
"""

from .question import Question, Difficulty
from .user import User, UserStats
from .test_result import TestResult, QuestionResult

__all__ = [
    'Question',
    'Difficulty',
    'User',
    'UserStats',
    'TestResult',
    'QuestionResult'
]
