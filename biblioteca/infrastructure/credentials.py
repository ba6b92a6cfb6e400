"""Credential Service — password hashing (bcrypt) and bearer tokens (PyJWT).

Invariants:
    - Plaintext passwords are never stored or logged; only bcrypt hashes leave here
    - Tokens are HS256-signed JWTs whose subject is the user id and whose expiry
      is fixed at issue time (no refresh)
    - Every token failure (bad signature, expired, malformed, missing subject)
      surfaces as UnauthorizedError

Design Decisions:
    - bcrypt is CPU-bound: async wrappers push it to the threadpool so a login
      does not stall the event loop
"""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import bcrypt
import jwt
from starlette.concurrency import run_in_threadpool

from biblioteca.core.domain_types import UserId
from biblioteca.core.errors import UnauthorizedError


def hash_password(password: str, rounds: int = 12) -> str:
    hashed = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(
            password.encode("utf-8"), password_hash.encode("utf-8"),
        )
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


async def hash_password_async(password: str, rounds: int = 12) -> str:
    return await run_in_threadpool(hash_password, password, rounds)


async def verify_password_async(password: str, password_hash: str) -> bool:
    return await run_in_threadpool(verify_password, password, password_hash)


def issue_token(
    user_id: UserId,
    secret: str,
    algorithm: str = "HS256",
    expires_in: timedelta = timedelta(hours=1),
    now: datetime | None = None,
) -> str:
    """Sign a bearer token carrying the user's identity."""
    issued_at = now or datetime.now(timezone.utc)
    claims = {
        "sub": str(user_id),
        "iat": issued_at,
        "exp": issued_at + expires_in,
    }
    return jwt.encode(claims, secret, algorithm=algorithm)


def decode_token(token: str, secret: str, algorithm: str = "HS256") -> UserId:
    """Validate a bearer token and return the user id it was issued for."""
    try:
        claims = jwt.decode(
            token, secret, algorithms=[algorithm],
            options={"require": ["sub", "exp"]},
        )
        return UserId(UUID(claims["sub"]))
    except jwt.ExpiredSignatureError:
        raise UnauthorizedError("Token has expired")
    except (jwt.InvalidTokenError, ValueError):
        raise UnauthorizedError("Invalid token")
