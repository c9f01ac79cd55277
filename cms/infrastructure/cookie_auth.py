import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Request, Response
from jose import JWTError, jwt

from ..core.config import Config


logger = logging.getLogger(__name__)

ALGORITHM = "HS256"
AUTH_COOKIE_MAX_AGE_DAYS = 30


def _secret() -> str:
    if not Config.AUTH_COOKIE_SECRET:
        raise ValueError("AUTH_COOKIE_SECRET environment variable is required")
    return Config.AUTH_COOKIE_SECRET


def _try_int(text: Optional[str]) -> Optional[int]:
    try:
        return int(text)
    except (TypeError, ValueError):
        return None


def create_auth_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """Signed token carrying the user id as its subject."""
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(days=AUTH_COOKIE_MAX_AGE_DAYS))
    to_encode = {"sub": str(user_id), "exp": expire}
    return jwt.encode(to_encode, _secret(), algorithm=ALGORITHM)


def set_auth(response: Response, user_id: int) -> None:
    token = create_auth_token(user_id)
    response.set_cookie(
        Config.AUTH_COOKIE_NAME,
        token,
        max_age=AUTH_COOKIE_MAX_AGE_DAYS * 24 * 60 * 60,
        httponly=True,
        samesite="lax",
    )


def get_user_id_via_auth_cookie(request: Request) -> Optional[int]:
    """User id from a valid auth cookie; None when it is absent, expired or tampered with."""
    token = request.cookies.get(Config.AUTH_COOKIE_NAME)
    if not token:
        return None

    if not Config.AUTH_COOKIE_SECRET:
        logger.error("AUTH_COOKIE_SECRET is not set, ignoring auth cookie")
        return None

    try:
        payload = jwt.decode(token, Config.AUTH_COOKIE_SECRET, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning(f"Rejected auth cookie: {e}")
        return None

    return _try_int(payload.get("sub"))


def logout(response: Response) -> None:
    response.delete_cookie(Config.AUTH_COOKIE_NAME)
