"""Caller identity — verifies the bearer token issued by the auth collaborator."""
from typing import Any, Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from eventroster.config import settings
from eventroster.errors import Unauthenticated

bearer_scheme = HTTPBearer(auto_error=False)


def decode_token(token: str) -> Dict[str, Any]:
    options = {"verify_aud": bool(settings.AUTH_JWT_AUDIENCE)}
    try:
        return jwt.decode(
            token,
            settings.AUTH_JWT_SECRET,
            algorithms=[settings.AUTH_JWT_ALGORITHM],
            audience=settings.AUTH_JWT_AUDIENCE or None,
            options=options,
        )
    except JWTError:
        raise Unauthenticated("Invalid token")


def get_current_uid(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """Return the authenticated caller's uid (the ``sub`` claim)."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise Unauthenticated("User must be authenticated.")

    claims = decode_token(credentials.credentials)
    uid = claims.get("sub")
    if not uid:
        raise Unauthenticated("Token missing sub")
    return str(uid)
