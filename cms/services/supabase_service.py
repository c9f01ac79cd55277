import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import HTTPException
from supabase import create_client, Client

from ..core.config import Config


logger = logging.getLogger(__name__)


def get_client() -> Client:
    return create_client(Config.SUPABASE_URL, Config.SUPABASE_SERVICE_KEY)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def first_row(result: Any) -> Optional[Dict[str, Any]]:
    """First record of a query result, or None when it matched nothing."""
    data = getattr(result, 'data', None)
    if not data:
        return None
    if isinstance(data, list):
        return data[0]
    return data


def all_rows(result: Any) -> List[Dict[str, Any]]:
    data = getattr(result, 'data', None)
    if not data:
        return []
    if isinstance(data, list):
        return list(data)
    return [data]


def ping(table: str) -> None:
    """Cheap round trip used by the health check."""
    supabase = get_client()
    supabase.table(table).select('id').limit(1).execute()


def fetch_one(table: str, column: str, value: Any) -> Optional[Dict[str, Any]]:
    try:
        supabase: Client = get_client()
        result = (
            supabase
            .table(table)
            .select('*')
            .eq(column, value)
            .limit(1)
            .execute()
        )
        return first_row(result)
    except Exception as e:
        logger.error(f"Failed to fetch from {table} where {column}={value!r}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to read {table}")


def fetch_all(table: str, order_by: str = 'created_date', descending: bool = True) -> List[Dict[str, Any]]:
    try:
        supabase: Client = get_client()
        result = (
            supabase
            .table(table)
            .select('*')
            .order(order_by, desc=descending)
            .execute()
        )
        return all_rows(result)
    except Exception as e:
        logger.error(f"Failed to list {table}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to read {table}")


def insert_row(table: str, record: Dict[str, Any]) -> Dict[str, Any]:
    try:
        supabase: Client = get_client()
        result = supabase.table(table).insert(record).execute()
        row = first_row(result)
        if row is None:
            raise RuntimeError(f"Insert into {table} returned no data")
        return row
    except Exception as e:
        logger.error(f"Failed to insert into {table}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to write {table}")


def update_row(table: str, row_id: Any, changes: Dict[str, Any]) -> Dict[str, Any]:
    try:
        supabase: Client = get_client()

        check_result = supabase.table(table).select('id').eq('id', row_id).execute()
        if not check_result.data:
            raise HTTPException(status_code=404, detail=f"No {table} record with ID {row_id}")

        result = supabase.table(table).update(changes).eq('id', row_id).execute()
        row = first_row(result)
        if row is None:
            raise RuntimeError(f"Update of {table} {row_id} returned no data")
        return row
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Failed to update {table} {row_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to write {table}")
