import logging
import time
from typing import Callable

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .config import Config
from .errors import INTERNAL_ERROR, INVALID_PARAMETERS, ApiError
from .responses import error


logger = logging.getLogger(__name__)

SLOW_REQUEST_SECONDS = 1.0


def _request_id(request: Request) -> str:
    return f"{int(time.time() * 1000)}-{id(request)}"


def _with_cors(request: Request, response: JSONResponse) -> JSONResponse:
    """Error responses built by handlers bypass CORSMiddleware, so echo the origin here."""
    origin = request.headers.get("origin")
    if origin and origin in Config.allowed_origins():
        response.headers["Access-Control-Allow-Origin"] = origin
        response.headers["Access-Control-Allow-Credentials"] = "true"
        response.headers["Access-Control-Allow-Methods"] = "GET, POST, OPTIONS"
        response.headers["Access-Control-Allow-Headers"] = "*"
    return response


async def log_requests(request: Request, call_next: Callable):
    start_time = time.time()
    request_id = _request_id(request)
    path = f"{request.method} {request.url.path}"

    try:
        response = await call_next(request)
    except Exception as e:
        logger.error(f"[{request_id}] {path} - ERROR: {str(e)} - {time.time() - start_time:.2f}s")
        raise

    process_time = time.time() - start_time
    if response.status_code >= 500:
        logger.error(f"[{request_id}] {path} - {response.status_code} - {process_time:.2f}s")
    elif response.status_code >= 400 or process_time > SLOW_REQUEST_SECONDS:
        logger.info(f"[{request_id}] {path} - {response.status_code} - {process_time:.2f}s")
    return response


async def api_error_handler(request: Request, exc: ApiError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.err_code} {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.err_code} {exc.message}")
    response = JSONResponse(status_code=exc.status_code, content=error(exc.err_code, exc.message, exc.data))
    return _with_cors(request, response)


async def validation_error_handler(request: Request, exc: RequestValidationError):
    details = ", ".join(f"{'.'.join(str(p) for p in e.get('loc', ()))}: {e.get('msg')}" for e in exc.errors())
    logger.warning(f"{request.method} {request.url.path} rejected: {details}")
    response = JSONResponse(status_code=400, content=error(INVALID_PARAMETERS, details or None))
    return _with_cors(request, response)


async def global_exception_handler(request: Request, exc: Exception):
    logger.error(
        f"[{_request_id(request)}] Unhandled exception in {request.method} {request.url.path}: {str(exc)}",
        exc_info=True,
    )
    return _with_cors(request, JSONResponse(status_code=500, content=error(INTERNAL_ERROR)))
