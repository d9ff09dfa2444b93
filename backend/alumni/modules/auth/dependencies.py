from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from typing import Optional

from alumni.core.database import get_db
from alumni.core.exceptions import MissingTokenError, AuthorizationError
from alumni.core.logging_config import set_user_id
from alumni.core.security import decode_token
from alumni.models.user import User
from alumni.schemas.auth import Identity

security = HTTPBearer(auto_error=False)


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Identity:
    """Decode the bearer token into the caller's identity (approval is not re-checked)"""
    if credentials is None or not credentials.credentials:
        raise MissingTokenError()

    payload = decode_token(credentials.credentials)
    identity = Identity(id=payload["sub"], email=payload.get("email"))
    set_user_id(identity.id)
    return identity


async def get_current_admin(
    identity: Identity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_db)
) -> Identity:
    """Require the caller to be an administrator; the role is re-read on every call"""
    result = await db.execute(select(User).where(User.id == identity.id))
    user = result.scalar_one_or_none()

    if not user or not user.is_admin:
        raise AuthorizationError()

    return identity
