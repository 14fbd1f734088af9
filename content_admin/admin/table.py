"""Remote-data table state: search, filters, paging, sorting, selection, columns.

``TableController`` owns the state of one table instance. Every data load
goes through ``fetch_data``; each call takes a request token and only the
most recently issued request may write rows back, so a slow response that
arrives after a newer one is dropped.
"""

import inspect
import logging
import math
from dataclasses import dataclass, field, replace
from typing import Any, Awaitable, Callable, Dict, List, Mapping, MutableMapping, Optional, Sequence

from .columns import ColumnDescriptor, FilterSection, VisibleColumn, render_cell, validate_columns
from .messages import MessageChannel
from .options import EnumRegistry


logger = logging.getLogger(__name__)

DEFAULT_SORT_FIELD = "id"
DEFAULT_SORT_DIRECTION = "DESC"


@dataclass
class ListParams:
    search: str = ""
    filters: Dict[str, Any] = field(default_factory=dict)
    page_index: int = 1
    page_size: int = 10
    sort_field: str = DEFAULT_SORT_FIELD
    sort_direction: str = DEFAULT_SORT_DIRECTION

    def to_query(self) -> Dict[str, Any]:
        """Query parameters understood by the ``/{module}/page`` endpoints."""
        query: Dict[str, Any] = {
            "pageIndex": self.page_index,
            "pageSize": self.page_size,
            "orderBy": self.sort_field,
            "orderDirection": self.sort_direction,
        }
        if self.search:
            query["keywords"] = self.search
        for key, value in self.filters.items():
            if isinstance(value, (list, tuple, set)):
                if value:
                    query[key] = ",".join(str(v) for v in value)
            elif value is not None and value != "":
                query[key] = value
        return query


@dataclass
class ListResult:
    rows: List[Dict[str, Any]]
    total: int


ListLoader = Callable[[ListParams], Awaitable[ListResult]]


@dataclass
class Pagination:
    page_index: int = 1
    page_size: int = 10
    total_count: int = 0
    sort_field: str = DEFAULT_SORT_FIELD
    sort_direction: str = DEFAULT_SORT_DIRECTION


class TableController:
    def __init__(
        self,
        columns: Sequence[ColumnDescriptor],
        load_list: ListLoader,
        *,
        module_key: Optional[str] = None,
        filter_sections: Sequence[FilterSection] = (),
        mandatory_column_keys: Sequence[str] = ("actions",),
        default_page_size: int = 10,
        registry: Optional[EnumRegistry] = None,
        messages: Optional[MessageChannel] = None,
        on_visibility_change: Optional[Callable[[List[str]], None]] = None,
        on_reorder: Optional[Callable[[List[Dict[str, Any]]], Any]] = None,
        on_action: Optional[Callable[[str, Dict[str, Any]], Any]] = None,
        column_store: Optional[MutableMapping[str, List[str]]] = None,
        keep_selection: bool = False,
        row_key: str = "id",
    ):
        self.columns = validate_columns(columns)
        self.filter_sections = list(filter_sections)
        self.mandatory_column_keys = list(mandatory_column_keys)
        self.default_page_size = default_page_size
        self.registry = registry or EnumRegistry()
        self.messages = messages or MessageChannel()
        self.keep_selection = keep_selection
        self.row_key = row_key

        self._load_list = load_list
        self._on_visibility_change = on_visibility_change
        self._on_reorder = on_reorder
        self._on_action = on_action
        self._column_store = column_store
        self._request_seq = 0

        self.module_key = module_key
        self.reset()

    def reset(self, module_key: Optional[str] = None) -> None:
        """Return to the freshly-mounted state; in-flight responses become stale."""
        if module_key is not None:
            self.module_key = module_key
        self._request_seq += 1
        self.rows: List[Dict[str, Any]] = []
        self.loading = False
        self.search_value = ""
        self.active_filters: Dict[str, Any] = {}
        self.pagination = Pagination(page_size=self.default_page_size)
        self.selected_keys: List[Any] = []
        self.selected_rows: List[Dict[str, Any]] = []
        self._configured_keys = self._stored_column_keys()

    # -- fetching ------------------------------------------------------------

    def build_params(self, **overrides: Any) -> ListParams:
        params = ListParams(
            search=self.search_value,
            filters=dict(self.active_filters),
            page_index=self.pagination.page_index,
            page_size=self.pagination.page_size,
            sort_field=self.pagination.sort_field,
            sort_direction=self.pagination.sort_direction,
        )
        return replace(params, **overrides) if overrides else params

    async def fetch_data(self, **overrides: Any) -> Optional[ListResult]:
        """Load one page; returns None when the request failed or was superseded."""
        self._request_seq += 1
        token = self._request_seq
        params = self.build_params(**overrides)
        self.loading = True
        try:
            result = await self._load_list(params)
        except Exception as e:
            if token != self._request_seq:
                logger.debug(f"Ignoring failure of superseded request {token}: {e}")
                return None
            logger.error(f"Failed to load {self.module_key or 'table'} data: {e}", exc_info=True)
            self.messages.error("Failed to fetch data")
            return None
        finally:
            if token == self._request_seq:
                self.loading = False

        if token != self._request_seq:
            logger.debug(f"Discarding stale response for request {token}")
            return None

        self.rows = list(result.rows)
        self.pagination.total_count = result.total
        self.pagination.page_index = params.page_index
        self.pagination.page_size = params.page_size
        if not self.keep_selection:
            self.clear_selection()
        return result

    @property
    def total_pages(self) -> int:
        if not self.pagination.page_size:
            return 0
        return math.ceil(self.pagination.total_count / self.pagination.page_size)

    async def set_search_value(self, text: str) -> Optional[ListResult]:
        self.search_value = text or ""
        self.pagination.page_index = 1
        return await self.fetch_data()

    async def set_active_filters(self, filters: Mapping[str, Any]) -> Optional[ListResult]:
        self.active_filters = dict(filters)
        self.pagination.page_index = 1
        return await self.fetch_data()

    async def reset_filters(self) -> Optional[ListResult]:
        return await self.set_active_filters({})

    async def set_sorter(self, field_name: Optional[str], direction: Optional[str] = None) -> Optional[ListResult]:
        if field_name:
            self.pagination.sort_field = field_name
            self.pagination.sort_direction = (direction or DEFAULT_SORT_DIRECTION).upper()
        else:
            self.pagination.sort_field = DEFAULT_SORT_FIELD
            self.pagination.sort_direction = DEFAULT_SORT_DIRECTION
        self.pagination.page_index = 1
        return await self.fetch_data()

    async def set_pagination_params(
        self,
        page_index: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> Optional[ListResult]:
        """Change page or page size; a new page size starts again from page 1."""
        if page_size is not None and page_size != self.pagination.page_size:
            self.pagination.page_size = page_size
            self.pagination.page_index = 1
        elif page_index is not None:
            self.pagination.page_index = page_index
        return await self.fetch_data()

    # -- columns -------------------------------------------------------------

    @property
    def storage_key(self) -> str:
        return f"{self.module_key or 'table'}:visibleColumns"

    def _stored_column_keys(self) -> List[str]:
        if self._column_store is not None and self.storage_key in self._column_store:
            return list(self._column_store[self.storage_key])
        return [c.key for c in self.columns if c.visible_column == VisibleColumn.SHOWN]

    def visible_column_keys(self) -> List[str]:
        wanted = set(self.mandatory_column_keys) | set(self._configured_keys)
        return [c.key for c in self.columns if c.key in wanted or c.always_visible]

    def visible_columns(self) -> List[ColumnDescriptor]:
        keys = set(self.visible_column_keys())
        return [c for c in self.columns if c.key in keys]

    def set_visible_columns(self, keys: Sequence[str]) -> List[str]:
        self._configured_keys = list(keys)
        final_keys = self.visible_column_keys()
        if self._column_store is not None:
            self._column_store[self.storage_key] = list(final_keys)
        if self._on_visibility_change:
            self._on_visibility_change(final_keys)
        return final_keys

    def column_options(self) -> List[Dict[str, Any]]:
        return [
            {"key": c.key, "title": c.title, "disabled": c.always_visible}
            for c in self.columns
            if not c.is_actions
        ]

    def render_cell(self, column: ColumnDescriptor, row: Mapping[str, Any]) -> Any:
        return render_cell(column, row, self.registry)

    def render_rows(self) -> List[Dict[str, Any]]:
        columns = self.visible_columns()
        return [{c.key: self.render_cell(c, row) for c in columns} for row in self.rows]

    # -- selection -----------------------------------------------------------

    def select(self, keys: Sequence[Any]) -> None:
        by_key = {row.get(self.row_key): row for row in self.rows}
        self.selected_keys = [k for k in keys if k in by_key]
        self.selected_rows = [by_key[k] for k in self.selected_keys]

    def clear_selection(self) -> None:
        self.selected_keys = []
        self.selected_rows = []

    # -- row actions and drag ------------------------------------------------

    def actions_column(self) -> Optional[ColumnDescriptor]:
        for column in self.columns:
            if column.action_buttons:
                return column
        return None

    def visible_actions(self, row: Mapping[str, Any]) -> List[str]:
        column = self.actions_column()
        return column.visible_actions(row) if column else []

    async def dispatch_action(self, name: str, row: Dict[str, Any]) -> Any:
        if name not in self.visible_actions(row):
            raise ValueError(f"Action '{name}' is not available for this row")
        if not self._on_action:
            logger.warning(f"No action handler registered for '{name}'")
            return None
        try:
            result = self._on_action(name, row)
            if inspect.isawaitable(result):
                result = await result
            return result
        except Exception as e:
            logger.error(f"Action '{name}' failed for row {row.get(self.row_key)}: {e}", exc_info=True)
            self.messages.error(f"Failed to {name}")
            return None

    @property
    def draggable(self) -> bool:
        return self._on_reorder is not None

    async def move_row(self, from_index: int, to_index: int) -> List[Dict[str, Any]]:
        """Emit the reordered rows to the reorder handler; the table keeps its own order."""
        if not self.draggable:
            raise RuntimeError("Drag reorder is not enabled for this table")
        if not (0 <= from_index < len(self.rows) and 0 <= to_index < len(self.rows)):
            raise IndexError("Row index out of range")
        reordered = list(self.rows)
        reordered.insert(to_index, reordered.pop(from_index))
        try:
            result = self._on_reorder(reordered)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.error(f"Reorder handler failed: {e}", exc_info=True)
            self.messages.error("Failed to save order")
        return reordered
