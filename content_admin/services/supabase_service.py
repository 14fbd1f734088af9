import logging
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from supabase import Client, create_client

from ..core.config import Config
from ..core.errors import DATABASE_ERROR, ApiError


logger = logging.getLogger(__name__)


def get_client() -> Client:
    return create_client(Config.SUPABASE_URL, Config.SUPABASE_SERVICE_KEY)


def now_timestamp() -> str:
    return datetime.now().isoformat(timespec="seconds")


def _escape_pattern(keyword: str) -> str:
    # PostgREST or-filters are comma/paren delimited
    return "".join(ch for ch in keyword if ch not in ",()")


class TableRepository:
    """Soft-delete aware access to one Supabase table.

    Every read and write is restricted to rows with ``is_deleted = 0``; data
    store failures are logged and re-raised as ``DATABASE_ERROR``.
    """

    def __init__(self, client: Client, table_name: str, entity_name: Optional[str] = None):
        self.client = client
        self.table_name = table_name
        self.entity_name = entity_name or table_name

    def _table(self):
        return self.client.table(self.table_name)

    def _fail(self, action: str, e: Exception) -> ApiError:
        logger.error(f"Failed to {action} {self.table_name}: {e}")
        return ApiError(DATABASE_ERROR, f"Failed to {action} {self.entity_name}", status_code=500)

    def page(
        self,
        *,
        filters: Optional[Mapping[str, Sequence[Any]]] = None,
        keywords: Optional[str] = None,
        keyword_columns: Sequence[str] = ("name",),
        id_match: Optional[int] = None,
        order_by: str = "id",
        descending: bool = True,
        page_index: int = 1,
        page_size: int = 10,
    ) -> Tuple[List[Dict[str, Any]], int]:
        try:
            query = self._table().select("*", count="exact").eq("is_deleted", 0)
            for column, values in (filters or {}).items():
                if values:
                    query = query.in_(column, list(values))

            if id_match is not None:
                query = query.eq("id", id_match)
            elif keywords:
                pattern = f"%{_escape_pattern(keywords)}%"
                if len(keyword_columns) == 1:
                    query = query.ilike(keyword_columns[0], pattern)
                else:
                    query = query.or_(",".join(f"{column}.ilike.{pattern}" for column in keyword_columns))

            start = (page_index - 1) * page_size
            result = (
                query
                .order(order_by, desc=descending)
                .range(start, start + page_size - 1)
                .execute()
            )
            rows = result.data or []
            total = result.count if result.count is not None else len(rows)
            return rows, total
        except ApiError:
            raise
        except Exception as e:
            raise self._fail("query", e)

    def list_all(self, order_by: str = "id", descending: bool = False) -> List[Dict[str, Any]]:
        try:
            result = (
                self._table()
                .select("*")
                .eq("is_deleted", 0)
                .order(order_by, desc=descending)
                .execute()
            )
            return result.data or []
        except Exception as e:
            raise self._fail("list", e)

    def get(self, record_id: int) -> Optional[Dict[str, Any]]:
        try:
            result = self._table().select("*").eq("id", record_id).eq("is_deleted", 0).execute()
            return result.data[0] if result.data else None
        except Exception as e:
            raise self._fail("fetch", e)

    def get_many(self, record_ids: Iterable[int]) -> List[Dict[str, Any]]:
        ids = list(dict.fromkeys(record_ids))
        if not ids:
            return []
        try:
            result = self._table().select("*").in_("id", ids).eq("is_deleted", 0).execute()
            return result.data or []
        except Exception as e:
            raise self._fail("fetch", e)

    def exists(self, record_id: int) -> bool:
        try:
            result = self._table().select("id").eq("id", record_id).eq("is_deleted", 0).execute()
            return bool(result.data)
        except Exception as e:
            raise self._fail("check", e)

    def name_exists(self, name: str, exclude_id: Optional[int] = None) -> bool:
        try:
            query = self._table().select("id").eq("name", name).eq("is_deleted", 0)
            if exclude_id:
                query = query.neq("id", exclude_id)
            result = query.execute()
            return bool(result.data)
        except Exception as e:
            raise self._fail("check name of", e)

    def insert(self, record: Mapping[str, Any]) -> Dict[str, Any]:
        values = dict(record)
        timestamp = now_timestamp()
        values.setdefault("create_time", timestamp)
        values.setdefault("update_time", timestamp)
        values["is_deleted"] = 0
        try:
            result = self._table().insert(values).execute()
        except Exception as e:
            raise self._fail("create", e)
        if not result.data:
            raise ApiError(DATABASE_ERROR, f"Failed to create {self.entity_name}", status_code=500)
        return result.data[0]

    def update(self, record_id: int, record: Mapping[str, Any]) -> Optional[Dict[str, Any]]:
        values = dict(record)
        values["update_time"] = now_timestamp()
        try:
            result = self._table().update(values).eq("id", record_id).eq("is_deleted", 0).execute()
        except Exception as e:
            raise self._fail("update", e)
        return result.data[0] if result.data else None

    def update_many(self, ids: Iterable[int], values: Mapping[str, Any]) -> int:
        payload = dict(values)
        payload["update_time"] = now_timestamp()
        try:
            result = self._table().update(payload).in_("id", list(ids)).eq("is_deleted", 0).execute()
        except Exception as e:
            raise self._fail("update", e)
        return len(result.data or [])

    def soft_delete(self, ids: Iterable[int]) -> int:
        return self.update_many(ids, {"is_deleted": 1})


class ChildRepository:
    """Ordered child rows hanging off a parent record, replaced wholesale on save."""

    def __init__(self, client: Client, table_name: str, parent_column: str):
        self.client = client
        self.table_name = table_name
        self.parent_column = parent_column

    def list_for(self, parent_ids: Sequence[int]) -> List[Dict[str, Any]]:
        if not parent_ids:
            return []
        try:
            result = (
                self.client.table(self.table_name)
                .select("*")
                .in_(self.parent_column, list(parent_ids))
                .order("sort_order", desc=False)
                .execute()
            )
            return result.data or []
        except Exception as e:
            logger.error(f"Failed to list {self.table_name} rows: {e}")
            raise ApiError(DATABASE_ERROR, f"Failed to list {self.table_name}", status_code=500)

    def replace(self, parent_id: int, rows: Sequence[Mapping[str, Any]]) -> None:
        """Swap the parent's children for ``rows``; new rows go in before old ones are removed."""
        table = self.client.table
        try:
            existing = table(self.table_name).select("id").eq(self.parent_column, parent_id).execute()
            old_ids = [row["id"] for row in existing.data or []]
            if rows:
                timestamp = now_timestamp()
                payload = []
                for position, row in enumerate(rows, start=1):
                    values = dict(row)
                    values[self.parent_column] = parent_id
                    values["sort_order"] = position
                    values["create_time"] = timestamp
                    values["update_time"] = timestamp
                    payload.append(values)
                table(self.table_name).insert(payload).execute()
            if old_ids:
                table(self.table_name).delete().in_("id", old_ids).execute()
        except Exception as e:
            logger.error(f"Failed to replace {self.table_name} rows for {parent_id}: {e}")
            raise ApiError(DATABASE_ERROR, f"Failed to save {self.table_name}", status_code=500)
