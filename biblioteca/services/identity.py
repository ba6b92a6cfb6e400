"""Identity — registration, login and bearer-token resolution.

Invariants:
    - One account per email; a duplicate (including a lost race on the unique
      index) -> ConflictError
    - Login failures share ONE message whether the email is unknown or the
      password wrong, so the endpoint cannot be used to enumerate accounts
    - Tokens live for settings.jwt_expiration_minutes (1 hour by default)
"""

import logging
from datetime import timedelta

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from biblioteca.config import Settings
from biblioteca.core.errors import ConflictError, UnauthorizedError
from biblioteca.infrastructure.credentials import (
    decode_token, hash_password_async, issue_token, verify_password_async,
)
from biblioteca.models.user import User
from biblioteca.schemas.identity import LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class IdentityService:

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings

    async def register(self, body: RegisterRequest) -> User:
        if await self._find_by_email(body.email):
            raise ConflictError("User already exists")

        user = User(
            username=body.username,
            email=body.email,
            password_hash=await hash_password_async(
                body.password, self.settings.bcrypt_rounds,
            ),
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError("User already exists")
        logger.info("User registered", extra={"user_id": str(user.id)})
        return user

    async def login(self, body: LoginRequest) -> str:
        """Return a signed bearer token for valid credentials."""
        user = await self._find_by_email(body.email)
        if not user:
            raise UnauthorizedError(INVALID_CREDENTIALS)
        if not await verify_password_async(body.password, user.password_hash):
            raise UnauthorizedError(INVALID_CREDENTIALS)
        return issue_token(
            user.id,
            self.settings.jwt_secret_key,
            algorithm=self.settings.jwt_algorithm,
            expires_in=timedelta(minutes=self.settings.jwt_expiration_minutes),
        )

    async def user_from_token(self, token: str) -> User:
        user_id = decode_token(
            token, self.settings.jwt_secret_key, self.settings.jwt_algorithm,
        )
        user = await self.db.get(User, user_id)
        if not user:
            raise UnauthorizedError("Invalid token")
        return user

    async def _find_by_email(self, email: str) -> User | None:
        result = await self.db.execute(select(User).where(User.email == email))
        return result.scalar_one_or_none()
