import json
import logging
from typing import Any, Dict, Optional
from urllib.error import URLError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from .errors import TransportError


logger = logging.getLogger(__name__)


def get_json(url: str, params: Optional[Dict[str, Any]] = None, timeout_seconds: int = 30) -> Dict[str, Any]:
    query = {key: value for key, value in (params or {}).items() if value is not None and value != ""}
    if query:
        url = f"{url}?{urlencode(query)}"
    try:
        request = Request(url, headers={"Accept": "application/json"})
        with urlopen(request, timeout=timeout_seconds) as resp:
            payload = resp.read()
        return json.loads(payload.decode("utf-8"))
    except (URLError, ValueError, OSError) as e:
        logger.error(f"Failed to fetch JSON from {url}: {str(e)}")
        raise TransportError(f"Failed to fetch {url}") from e
