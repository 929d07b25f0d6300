# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Verifies Supabase Auth JWTs. Signup and login happen client-side against
# the identity provider; this API only checks the bearer token.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser

__all__ = [
    "get_current_user",
    "AuthUser",
]
