import logging
import re
from typing import Optional

from fastapi import HTTPException


logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 5
MAX_NAME_LENGTH = 100
EMAIL_PATTERN = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')
URL_PATH_PATTERN = re.compile(r'^[a-zA-Z0-9_\-/.]*$')


def normalize_url(url: Optional[str]) -> str:
    """Canonical form of a site path: no surrounding slashes, lower case."""
    if not url:
        return ''
    return url.strip().strip('/').lower()


def validate_email(email: Optional[str]) -> None:
    if not email or not EMAIL_PATTERN.match(email.strip()):
        raise HTTPException(status_code=400, detail="Invalid email address")


def validate_password(password: Optional[str]) -> None:
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(status_code=400, detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters")


def validate_name(name: Optional[str]) -> None:
    if not name or not name.strip():
        raise HTTPException(status_code=400, detail="Name is required")
    if len(name) > MAX_NAME_LENGTH:
        raise HTTPException(status_code=400, detail=f"Name must be at most {MAX_NAME_LENGTH} characters")


def validate_url_path(url: Optional[str]) -> None:
    if url is None or not URL_PATH_PATTERN.match(url):
        raise HTTPException(status_code=400, detail="Invalid URL path")
    if '..' in url:
        raise HTTPException(status_code=400, detail="Invalid URL path")


def validate_target_url(url: Optional[str]) -> None:
    """Redirect targets are absolute http(s) URLs or site-relative paths."""
    if not url or not url.strip():
        raise HTTPException(status_code=400, detail="Target URL is required")
    url = url.strip()
    if url.startswith('//'):
        raise HTTPException(status_code=400, detail="Invalid target URL")
    if not (url.startswith('/') or url.startswith('http://') or url.startswith('https://')):
        raise HTTPException(status_code=400, detail="Invalid target URL")
