import logging
from typing import Any, Dict, List, Optional

import markdown
from fastapi import HTTPException

from ..core.validation import normalize_url, validate_target_url, validate_url_path
from .supabase_service import fetch_all, fetch_one, insert_row, update_row, utc_now_iso


logger = logging.getLogger(__name__)

PAGES_TABLE = 'pages'
REDIRECTS_TABLE = 'redirects'

# First path segments owned by application routes; a CMS entry there would never be reached.
RESERVED_PREFIXES = {'account', 'admin', 'static', 'health'}

MARKDOWN_EXTENSIONS = ['fenced_code', 'tables']


def render_markdown(contents: Optional[str]) -> str:
    return markdown.markdown(contents or '', extensions=MARKDOWN_EXTENSIONS)


def get_page(base_url: str, include_unpublished: bool = False) -> Optional[Dict[str, Any]]:
    url = normalize_url(base_url)
    if not url:
        return None

    page = fetch_one(PAGES_TABLE, 'url', url)
    if page and not page.get('is_published', True) and not include_unpublished:
        return None
    return page


def get_redirect(base_url: str) -> Optional[Dict[str, Any]]:
    url = normalize_url(base_url)
    if not url:
        return None

    return fetch_one(REDIRECTS_TABLE, 'short_url', url)


def record_redirect_click(redirect: Dict[str, Any]) -> Dict[str, Any]:
    clicks = int(redirect.get('clicks') or 0) + 1
    return update_row(REDIRECTS_TABLE, redirect['id'], {'clicks': clicks})


def all_pages() -> List[Dict[str, Any]]:
    return fetch_all(PAGES_TABLE)


def all_redirects() -> List[Dict[str, Any]]:
    return fetch_all(REDIRECTS_TABLE)


def find_page_by_id(page_id: int) -> Optional[Dict[str, Any]]:
    return fetch_one(PAGES_TABLE, 'id', page_id)


def find_redirect_by_id(redirect_id: int) -> Optional[Dict[str, Any]]:
    return fetch_one(REDIRECTS_TABLE, 'id', redirect_id)


def _check_url_available(url: str, ignore_table: Optional[str] = None, ignore_id: Optional[int] = None) -> None:
    """Pages and redirects share one URL namespace."""
    validate_url_path(url)
    if not url:
        raise HTTPException(status_code=400, detail="URL is required")
    if url.split('/')[0] in RESERVED_PREFIXES:
        raise HTTPException(status_code=400, detail=f"URL '{url}' is reserved")

    for table, column in ((PAGES_TABLE, 'url'), (REDIRECTS_TABLE, 'short_url')):
        existing = fetch_one(table, column, url)
        if not existing:
            continue
        if table == ignore_table and existing.get('id') == ignore_id:
            continue
        raise HTTPException(status_code=409, detail=f"URL '{url}' is already in use")


def create_page(base_url: str, title: str, contents: str, is_published: bool = True,
                user_id: Optional[int] = None) -> Dict[str, Any]:
    url = normalize_url(base_url)
    _check_url_available(url)
    if not title or not title.strip():
        raise HTTPException(status_code=400, detail="Title is required")

    page = insert_row(PAGES_TABLE, {
        'url': url,
        'title': title.strip(),
        'contents': contents or '',
        'is_published': bool(is_published),
        'created_date': utc_now_iso(),
        'creating_user': user_id,
    })
    logger.info(f"Created page {page.get('id')} at /{url}")
    return page


def update_page(page_id: int, base_url: str, title: str, contents: str, is_published: bool = True) -> Dict[str, Any]:
    url = normalize_url(base_url)
    _check_url_available(url, ignore_table=PAGES_TABLE, ignore_id=page_id)
    if not title or not title.strip():
        raise HTTPException(status_code=400, detail="Title is required")

    page = update_row(PAGES_TABLE, page_id, {
        'url': url,
        'title': title.strip(),
        'contents': contents or '',
        'is_published': bool(is_published),
    })
    logger.info(f"Updated page {page_id} at /{url}")
    return page


def create_redirect(short_url: str, target_url: str, name: str, user_id: Optional[int] = None) -> Dict[str, Any]:
    url = normalize_url(short_url)
    _check_url_available(url)
    validate_target_url(target_url)

    redirect = insert_row(REDIRECTS_TABLE, {
        'short_url': url,
        'url': target_url.strip(),
        'name': (name or url).strip(),
        'clicks': 0,
        'created_date': utc_now_iso(),
        'creating_user': user_id,
    })
    logger.info(f"Created redirect {redirect.get('id')} /{url} -> {target_url}")
    return redirect


def update_redirect(redirect_id: int, short_url: str, target_url: str, name: str) -> Dict[str, Any]:
    url = normalize_url(short_url)
    _check_url_available(url, ignore_table=REDIRECTS_TABLE, ignore_id=redirect_id)
    validate_target_url(target_url)

    redirect = update_row(REDIRECTS_TABLE, redirect_id, {
        'short_url': url,
        'url': target_url.strip(),
        'name': (name or url).strip(),
    })
    logger.info(f"Updated redirect {redirect_id} /{url} -> {target_url}")
    return redirect
