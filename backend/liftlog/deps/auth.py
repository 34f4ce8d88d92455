# liftlog/deps/auth.py
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose.exceptions import ExpiredSignatureError, JWTError

from liftlog.errors import Unauthorized
from liftlog.security import decode_token

# auto_error off so a missing header is a 401 like every other auth failure
bearer_scheme = HTTPBearer(auto_error=False)

def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """
    Identity guard: resolve the bearer token to the caller's owner id (the
    `sub` claim). Anything short of a valid, unexpired token ends the
    request with 401.
    """
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Not authenticated")
    try:
        payload = decode_token(credentials.credentials)
    except ExpiredSignatureError:
        raise Unauthorized("Token expired")
    except JWTError:
        raise Unauthorized("Invalid or expired token")

    sub = payload.get("sub")
    if not sub:
        raise Unauthorized("Not authenticated")
    return str(sub)
