import logging
from typing import Any, Dict, Optional

from fastapi import HTTPException
from passlib.context import CryptContext

from ..core.validation import validate_email, validate_name, validate_password
from .supabase_service import fetch_one, insert_row, update_row, utc_now_iso


logger = logging.getLogger(__name__)

USERS_TABLE = 'users'

# pbkdf2_sha256 is pure Python, so no native hashing backend is needed
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_text(text: str) -> str:
    return pwd_context.hash(text)


def verify_hash(hashed_text: Optional[str], plain_text: str) -> bool:
    if not hashed_text:
        return False
    try:
        return pwd_context.verify(plain_text, hashed_text)
    except ValueError:
        # Stored value is not a recognised hash
        return False


def find_user_by_id(user_id: int) -> Optional[Dict[str, Any]]:
    return fetch_one(USERS_TABLE, 'id', user_id)


def find_user_by_email(email: str) -> Optional[Dict[str, Any]]:
    if not email:
        return None
    return fetch_one(USERS_TABLE, 'email', email.strip().lower())


def create_user(name: str, email: str, password: str, is_admin: bool = False) -> Dict[str, Any]:
    validate_name(name)
    validate_email(email)
    validate_password(password)

    email = email.strip().lower()
    if find_user_by_email(email):
        raise HTTPException(status_code=409, detail="A user with that email already exists")

    user = insert_row(USERS_TABLE, {
        'name': name.strip(),
        'email': email,
        'hashed_password': hash_text(password),
        'is_admin': bool(is_admin),
        'created_date': utc_now_iso(),
        'last_login': None,
    })
    logger.info(f"Created user {user.get('id')} ({email})")
    return user


def login_user(email: str, password: str) -> Optional[Dict[str, Any]]:
    """User matching the credentials, or None. A successful login stamps ``last_login``."""
    user = find_user_by_email(email)
    if not user:
        return None

    if not verify_hash(user.get('hashed_password'), password):
        logger.warning(f"Failed login for {email}")
        return None

    try:
        user = update_row(USERS_TABLE, user['id'], {'last_login': utc_now_iso()})
    except HTTPException as e:
        logger.warning(f"Failed to record last login for user {user['id']}: {e.detail}")

    return user


def public_profile(user: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    """User record without its password hash, safe to hand to templates."""
    if user is None:
        return None
    return {k: v for k, v in user.items() if k != 'hashed_password'}
