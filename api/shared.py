"""
Shared dependencies for all API routes
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from database.base import DocumentStore
from services.auth_service import AuthService, TokenService
from services.question_bank_service import QuestionBankService
from services.scoring_service import ScoringService
from services.stats_ledger_service import StatsLedgerService
from services.test_assembler_service import TestAssemblerService

bearer_scheme = HTTPBearer(auto_error=False)


def get_store(request: Request) -> DocumentStore:
    """Store opened by the lifespan handler"""
    return request.app.state.store


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


def get_question_bank(store: DocumentStore = Depends(get_store)) -> QuestionBankService:
    return QuestionBankService(store)


def get_test_assembler(
    question_bank: QuestionBankService = Depends(get_question_bank),
) -> TestAssemblerService:
    return TestAssemblerService(question_bank)


def get_stats_ledger(store: DocumentStore = Depends(get_store)) -> StatsLedgerService:
    return StatsLedgerService(store)


def get_scoring_service(
    store: DocumentStore = Depends(get_store),
    question_bank: QuestionBankService = Depends(get_question_bank),
    ledger: StatsLedgerService = Depends(get_stats_ledger),
) -> ScoringService:
    return ScoringService(store, question_bank, ledger)


def get_auth_service(
    store: DocumentStore = Depends(get_store),
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    return AuthService(store, tokens)


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: AuthService = Depends(get_auth_service),
) -> str:
    """
    Auth gate: 401 when no bearer token is sent, 403 when it does not verify
    """
    token = credentials.credentials if credentials else None
    return auth.verify(token)
