"""Shared route dependencies — settings and bearer-token authentication."""

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from biblioteca.config import Settings, get_settings
from biblioteca.core.errors import UnauthorizedError
from biblioteca.infrastructure.database import get_db
from biblioteca.models.user import User
from biblioteca.services.identity import IdentityService

# auto_error=False: a missing header becomes UnauthorizedError (401 + JSON body)
# instead of FastAPI's bare 403
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> User:
    if credentials is None:
        raise UnauthorizedError("Missing bearer token")
    return await IdentityService(db, settings).user_from_token(
        credentials.credentials,
    )
