"""Uniform response envelopes.

Every body has ``success``, ``errCode``, ``errMessage`` and ``data``; list
responses additionally carry ``empty``/``notEmpty`` and page responses the
paging totals.
"""

import math
from typing import Any, Dict, List, Optional

from .errors import ERROR_MESSAGES


def success(data: Any = None, message: Optional[str] = None) -> Dict[str, Any]:
    body = {"success": True, "errCode": None, "errMessage": None, "data": data}
    if message:
        body["message"] = message
    return body


def success_list(data: Optional[List[Any]] = None, message: Optional[str] = None) -> Dict[str, Any]:
    data = data if data is not None else []
    body = success(data, message)
    is_empty = len(data) == 0
    body["empty"] = is_empty
    body["notEmpty"] = not is_empty
    return body


def success_page(rows: List[Any], total_count: int, page_index: int, page_size: int) -> Dict[str, Any]:
    body = success_list(rows)
    body["totalCount"] = total_count
    body["pageIndex"] = page_index
    body["pageSize"] = page_size
    body["totalPages"] = math.ceil(total_count / page_size) if page_size else 0
    return body


def error(err_code: str, message: Optional[str] = None, data: Any = None) -> Dict[str, Any]:
    return {
        "success": False,
        "errCode": err_code,
        "errMessage": message or ERROR_MESSAGES.get(err_code, "Unknown error"),
        "data": data,
    }
