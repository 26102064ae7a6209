import logging
import uuid

import httpx
import jwt as pyjwt
from jwt import PyJWK
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from billsplit.core.config import settings
from billsplit.core.database import get_db
from billsplit.models.user import User

logger = logging.getLogger(__name__)

security = HTTPBearer()

_jwks_cache: list | None = None


async def _get_jwks() -> list:
    global _jwks_cache
    if _jwks_cache is not None:
        return _jwks_cache
    jwks_url = f"{settings.supabase_url}/auth/v1/.well-known/jwks.json"
    async with httpx.AsyncClient() as client:
        resp = await client.get(jwks_url)
        resp.raise_for_status()
        keys = resp.json().get("keys", [])
        _jwks_cache = [PyJWK(k) for k in keys]
        logger.info(f"Loaded {len(_jwks_cache)} signing keys from {jwks_url}")
        return _jwks_cache


async def decode_token(token: str) -> dict:
    """Verify a bearer token against the provider's JWKS and return its claims."""
    jwks = await _get_jwks()
    kid = pyjwt.get_unverified_header(token).get("kid")
    key = next((k for k in jwks if k.key_id == kid), None)
    if key is None:
        raise pyjwt.InvalidTokenError("No matching key found")
    return pyjwt.decode(
        token,
        key,
        algorithms=settings.jwt_algorithms.split(","),
        audience=settings.jwt_audience,
    )


async def upsert_user(db: AsyncSession, claims: dict) -> User:
    """Create or refresh the local user row from verified token claims."""
    user_id = uuid.UUID(claims["sub"])
    metadata = claims.get("user_metadata") or {}

    user = await db.get(User, user_id)
    if user is None:
        user = User(id=user_id)
        db.add(user)
        logger.info(f"Created user {user_id}")

    user.email = claims.get("email") or user.email
    user.first_name = claims.get("given_name") or metadata.get("first_name") or user.first_name
    user.last_name = claims.get("family_name") or metadata.get("last_name") or user.last_name
    user.profile_image_url = (
        claims.get("picture") or metadata.get("avatar_url") or user.profile_image_url
    )
    await db.commit()
    return user


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    try:
        claims = await decode_token(credentials.credentials)
    except pyjwt.InvalidTokenError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    sub = claims.get("sub")
    if not sub:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    try:
        uuid.UUID(sub)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    return await upsert_user(db, claims)
