# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Verifies the bearer token issued by Supabase Auth.
#
# Supports both:
# - asymmetric keys (ES256/RS256) published at the project's JWKS endpoint
# - HS256 with the legacy project JWT secret (rejected when no secret is set)
# =============================================================================

import logging
import time
from uuid import UUID

import httpx
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt

from app.auth.models import AuthUser
from app.config import settings

logger = logging.getLogger(__name__)

security = HTTPBearer()

# JWKS cache, refreshed at most once per hour
_jwks_cache: dict = {}
_jwks_cache_time: float = 0
JWKS_CACHE_TTL = 3600


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def _fetch_jwks() -> dict:
    """Fetch the project's JWKS, falling back to the last good copy."""
    global _jwks_cache, _jwks_cache_time

    now = time.time()
    if _jwks_cache and (now - _jwks_cache_time) < JWKS_CACHE_TTL:
        return _jwks_cache

    jwks_url = f"{settings.SUPABASE_URL.rstrip('/')}/auth/v1/.well-known/jwks.json"
    try:
        async with httpx.AsyncClient(timeout=10) as client:
            response = await client.get(jwks_url)
        response.raise_for_status()
        _jwks_cache = response.json()
        _jwks_cache_time = now
        logger.debug(f"Fetched JWKS from {jwks_url}")
    except httpx.HTTPError as e:
        logger.warning(f"Failed to fetch JWKS: {e}")

    return _jwks_cache or {"keys": []}


def _hs256_key() -> tuple[str, str]:
    """
    The legacy shared secret.

    Raises:
        HTTPException: 401 if no secret is configured, so an HS256 token
        signed with an empty key is never accepted
    """
    if not settings.SUPABASE_JWT_SECRET:
        logger.warning("HS256 token received but SUPABASE_JWT_SECRET is not set")
        raise _unauthorized("Invalid token: HS256 tokens are not accepted")
    return settings.SUPABASE_JWT_SECRET, "HS256"


async def _get_signing_key(token: str) -> tuple[dict | str, str]:
    """
    Pick the verification key for a token.

    Returns:
        Tuple of (key, algorithm)
    """
    try:
        header = jwt.get_unverified_header(token)
    except JWTError:
        return _hs256_key()

    alg = header.get("alg", "HS256")
    kid = header.get("kid")

    if alg == "HS256" or not kid:
        return _hs256_key()

    jwks = await _fetch_jwks()
    for key in jwks.get("keys", []):
        if key.get("kid") == kid:
            return key, alg

    logger.warning(f"No JWKS key for alg={alg}, kid={kid}; falling back to HS256")
    return _hs256_key()


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> AuthUser:
    """
    Extract and validate the user from a Supabase JWT.

    Raises:
        HTTPException: 401 if the token is invalid, expired or has no user id
    """
    token = credentials.credentials

    try:
        signing_key, algorithm = await _get_signing_key(token)
        payload = jwt.decode(
            token,
            signing_key,
            algorithms=[algorithm],
            audience="authenticated"
        )
    except ExpiredSignatureError:
        logger.warning("JWT token has expired")
        raise _unauthorized("Token has expired")
    except JWTError as e:
        logger.warning(f"JWT validation failed: {e}")
        raise _unauthorized(f"Invalid token: {e}")

    user_id = payload.get("sub")
    if not user_id:
        logger.warning("JWT token missing 'sub' claim")
        raise _unauthorized("Invalid token: missing user ID")

    try:
        user_uuid = UUID(user_id)
    except ValueError:
        logger.warning(f"Invalid UUID in token: {user_id}")
        raise _unauthorized("Invalid token: malformed user ID")

    logger.debug(f"Authenticated user: {user_id}")
    return AuthUser(id=user_uuid, email=payload.get("email"), role=payload.get("role"))
