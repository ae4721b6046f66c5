"""
Auth Service - registration, login and identity tokens
"""

import logging
from datetime import timedelta
from typing import Optional, Tuple

import jwt
from werkzeug.security import check_password_hash, generate_password_hash

from database.base import USERS, DocumentStore, new_id, utcnow
from models.user import User, UserStats
from services.errors import (
    ConflictError,
    ForbiddenError,
    InvalidCredentialsError,
    NotFoundError,
    UnauthenticatedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class TokenService:
    """Issues and verifies signed identity tokens (JWT)"""

    def __init__(self, secret: str, algorithm: str = "HS256", expire_minutes: Optional[int] = None):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self.secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue_token(self, user_id: str) -> str:
        now = utcnow()
        payload = {"sub": user_id, "iat": now}
        if self.expire_minutes:
            payload["exp"] = now + timedelta(minutes=self.expire_minutes)
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify_token(self, token: Optional[str]) -> str:
        """
        Returns:
            user id carried by the token

        Raises:
            UnauthenticatedError: no token
            ForbiddenError: bad signature, malformed or expired token
        """
        if not token:
            raise UnauthenticatedError("Access token required")
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise ForbiddenError("Token expired") from e
        except jwt.InvalidTokenError as e:
            logger.debug("Rejected token: %s", e)
            raise ForbiddenError("Invalid token") from e
        return str(payload["sub"])


class AuthService:
    """
    User accounts. Password hashing uses werkzeug, tokens come from TokenService.
    """

    def __init__(self, store: DocumentStore, tokens: TokenService):
        self.store = store
        self.tokens = tokens

    async def register(self, name: str, email: str, password: str) -> Tuple[User, str]:
        email = normalize_email(email)
        name = (name or "").strip()
        if not name:
            raise ValidationError("name is required")
        if "@" not in email:
            raise ValidationError("A valid email is required")
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"password must be at least {MIN_PASSWORD_LENGTH} characters")

        if await self.store.find_one(USERS, {"email": email}) is not None:
            raise ConflictError("User already exists")

        now = utcnow()
        user = User(
            user_id=new_id(),
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            stats=UserStats(),
            created_at=now,
            updated_at=now,
        )
        try:
            await self.store.insert_one(USERS, user.to_document())
        except ConflictError as e:
            # Lost a race with a concurrent registration of the same email
            raise ConflictError("User already exists") from e

        logger.info("Registered user %s", user.user_id)
        return user, self.tokens.issue_token(user.user_id)

    async def login(self, email: str, password: str) -> Tuple[User, str]:
        doc = await self.store.find_one(USERS, {"email": normalize_email(email)})
        if doc is None or not check_password_hash(doc.get("password", ""), password or ""):
            raise InvalidCredentialsError("Invalid credentials")
        user = User.from_document(doc)
        return user, self.tokens.issue_token(user.user_id)

    def verify(self, token: Optional[str]) -> str:
        return self.tokens.verify_token(token)

    async def get_profile(self, user_id: str) -> User:
        doc = await self.store.find_one(USERS, {"_id": user_id})
        if doc is None:
            raise NotFoundError("User not found")
        return User.from_document(doc)
