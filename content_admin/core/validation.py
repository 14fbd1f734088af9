import logging
import re
from typing import Any, Iterable, List, Optional, Tuple

from .config import Config
from .errors import invalid


logger = logging.getLogger(__name__)

STATUSES = ("DRAFT", "ENABLED", "DISABLED")
SORT_DIRECTIONS = ("ASC", "DESC")

_DIGITS = re.compile(r"^\d+$")
_FIELD_NAME = re.compile(r"^[a-zA-Z][a-zA-Z0-9_]*$")


def validate_id_list(id_list: Any, param_name: str = "idList") -> List[int]:
    """Return the positive integer ids in ``id_list``; reject empty or all-invalid input."""
    if not id_list or not isinstance(id_list, (list, tuple)):
        raise invalid(f"{param_name} is required")

    valid_ids: List[int] = []
    for raw in id_list:
        try:
            value = int(raw)
        except (TypeError, ValueError):
            continue
        if value > 0:
            valid_ids.append(value)

    if not valid_ids:
        raise invalid(f"{param_name} contains no valid id")
    if len(valid_ids) != len(id_list):
        logger.debug(f"Ignored {len(id_list) - len(valid_ids)} invalid ids in {param_name}")
    return valid_ids


def validate_record_id(raw: Any) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise invalid("Invalid id")
    if value <= 0:
        raise invalid("Invalid id")
    return value


def validate_status(status: Optional[str]) -> None:
    if status not in STATUSES:
        raise invalid(f"status must be one of {', '.join(STATUSES)}")


def validate_page(page_index: Any, page_size: Any) -> Tuple[int, int]:
    try:
        index = int(page_index) if page_index not in (None, "") else 1
        size = int(page_size) if page_size not in (None, "") else Config.DEFAULT_PAGE_SIZE
    except (TypeError, ValueError):
        raise invalid("pageIndex and pageSize must be integers")
    if index < 1 or size < 1:
        raise invalid("pageIndex and pageSize must be positive")
    return index, min(size, Config.MAX_PAGE_SIZE)


def normalize_direction(direction: Optional[str]) -> str:
    if direction and direction.upper() in SORT_DIRECTIONS:
        return direction.upper()
    return "DESC"


def validate_order_field(field: Optional[str]) -> str:
    if not field:
        return "id"
    if not _FIELD_NAME.match(field):
        raise invalid("Invalid orderBy field")
    return field


def split_list_param(value: Any) -> List[str]:
    """Accept repeated values or a comma separated string, e.g. ``DRAFT,ENABLED``."""
    if value is None:
        return []
    items: Iterable[Any] = value if isinstance(value, (list, tuple)) else str(value).split(",")
    return [str(item).strip() for item in items if str(item).strip()]


def is_digits(value: str) -> bool:
    return bool(_DIGITS.match(value))


def require_fields(data: dict, fields: Iterable[str]) -> List[str]:
    errors = []
    for field in fields:
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            errors.append(f"{field} is required")
    return errors
