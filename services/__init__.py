"""
Services module - Business logic
"""

from .errors import QuizError
from .question_bank_service import QuestionBankService
from .test_assembler_service import TestAssemblerService
from .stats_ledger_service import StatsLedgerService
from .scoring_service import ScoringService
from .auth_service import AuthService, TokenService

__all__ = [
    'QuizError',
    'QuestionBankService',
    'TestAssemblerService',
    'StatsLedgerService',
    'ScoringService',
    'AuthService',
    'TokenService'
]
