"""List loaders binding a ``TableController`` to the admin API."""

import asyncio
from typing import Any, Callable, Dict, Mapping, Optional

from ..core.config import Config
from ..core.errors import TransportError
from ..core.http import get_json
from .table import ListParams, ListResult


def result_from_envelope(body: Mapping[str, Any]) -> ListResult:
    if not body.get("success"):
        raise TransportError(body.get("errMessage") or "List request failed")
    return ListResult(rows=list(body.get("data") or []), total=int(body.get("totalCount") or 0))


class ApiListLoader:
    """Fetch ``GET {base_url}/{module}/page`` off the event loop."""

    def __init__(
        self,
        module_key: str,
        base_url: Optional[str] = None,
        timeout_seconds: Optional[int] = None,
        fetch: Callable[..., Dict[str, Any]] = get_json,
    ):
        self.module_key = module_key
        self.base_url = (base_url or Config.ADMIN_API_BASE_URL).rstrip("/")
        self.timeout_seconds = timeout_seconds or Config.ADMIN_API_TIMEOUT_SECONDS
        self._fetch = fetch

    @property
    def url(self) -> str:
        return f"{self.base_url}/{self.module_key}/page"

    async def __call__(self, params: ListParams) -> ListResult:
        body = await asyncio.to_thread(self._fetch, self.url, params.to_query(), self.timeout_seconds)
        return result_from_envelope(body)


class ServiceListLoader:
    """Call a CRUD service's ``page`` in-process, e.g. from scripts or tests."""

    def __init__(self, service: Any):
        self.service = service

    async def __call__(self, params: ListParams) -> ListResult:
        body = await asyncio.to_thread(self.service.page, params.to_query())
        return result_from_envelope(body)
