"""
Authentication for the builder API: API keys and HS256 bearer tokens.
Provides FastAPI dependencies for securing endpoints.

Both schemes resolve to a CurrentUser carrying the user id and role. The
role decides which wizard steps the user sees (athletes cannot assign
artifacts to other athletes).
"""
import logging
from dataclasses import dataclass
from typing import Optional

import jwt
from fastapi import Depends, Header, HTTPException

from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"
DEFAULT_ROLE = "coach"
API_KEY_ADMIN_USER = "admin"


@dataclass(frozen=True)
class CurrentUser:
    user_id: str
    role: str = DEFAULT_ROLE


async def get_current_user(
    authorization: Optional[str] = Header(None),
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
    settings: Settings = Depends(get_settings),
) -> CurrentUser:
    """
    Authenticate via API key OR bearer token.

    Usage:
        @router.get("/protected")
        async def protected_route(user: CurrentUser = Depends(get_current_user)):
            return {"user_id": user.user_id}
    """
    # Option 1: API Key authentication
    if x_api_key:
        return validate_api_key(x_api_key, settings)

    # Option 2: Bearer token authentication
    if authorization:
        return validate_jwt(authorization, settings)

    raise HTTPException(
        status_code=401,
        detail="Missing authentication. Provide Authorization header or X-API-Key."
    )


def validate_api_key(api_key: str, settings: Settings) -> CurrentUser:
    """
    Validate API key and return the caller.

    API key format options:
    - Simple: "sk_test_abc123" -> user "admin", role "coach"
    - With user: "sk_test_abc123:user_12345" -> user "user_12345"
    - With user and role: "sk_test_abc123:user_12345:athlete"
    """
    valid_keys = settings.api_keys_list

    if not valid_keys:
        logger.warning("No API keys configured (API_KEYS env var empty)")
        raise HTTPException(status_code=401, detail="API key authentication not configured")

    key_part, _, rest = api_key.partition(":")

    if key_part not in valid_keys:
        raise HTTPException(status_code=401, detail="Invalid API key")

    if not rest:
        return CurrentUser(user_id=API_KEY_ADMIN_USER)

    user_id, _, role = rest.partition(":")
    return CurrentUser(user_id=user_id, role=role or DEFAULT_ROLE)


def validate_jwt(authorization: str, settings: Settings) -> CurrentUser:
    """Validate an HS256 bearer token; ``sub`` is the user id, ``role`` the role."""
    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid authorization header format")

    token = authorization.split(" ", 1)[1]

    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[JWT_ALGORITHM],
            issuer=settings.jwt_issuer,
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.InvalidTokenError as e:
        logger.warning(f"Invalid bearer token: {e}")
        raise HTTPException(status_code=401, detail=f"Invalid token: {str(e)}")

    user_id = payload.get("sub")
    if not user_id:
        raise HTTPException(status_code=401, detail="Token missing user ID")
    logger.debug(f"Bearer token validated for user: {user_id}")
    return CurrentUser(user_id=user_id, role=payload.get("role") or DEFAULT_ROLE)
