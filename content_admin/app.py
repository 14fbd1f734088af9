import logging
import time
from datetime import datetime
from typing import Any, Callable, Dict, List, Type

from fastapi import APIRouter, Body, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from supabase import Client

from .core.config import Config
from .core.errors import ENUM_NOT_FOUND, ApiError
from .core.middleware import api_error_handler, global_exception_handler, log_requests, validation_error_handler
from .core.responses import success, success_list
from .services.category_service import CategoryService
from .services.crud_service import CrudService
from .services.enum_service import find_enum, list_enums
from .services.music_service import MusicService
from .services.plan_name_service import PlanNameSettingsService
from .services.playlist_service import PlaylistService
from .services.resource_service import ResourceService
from .services.sound_service import SoundService
from .services.supabase_service import get_client

logger = logging.getLogger(__name__)


class IdListRequest(BaseModel):
    idList: List[Any] = []


def service_dependency(service_cls: Type[CrudService]) -> Callable[..., CrudService]:
    def _get_service(client: Client = Depends(get_client)) -> CrudService:
        return service_cls(client)

    return _get_service


def module_router(module_key: str, service_cls: Type[CrudService]) -> APIRouter:
    """Page/detail/save/enable/disable/del endpoints for one module."""
    router = APIRouter(prefix=f"/{module_key}", tags=[module_key])
    get_service = service_dependency(service_cls)

    @router.get("/page")
    def page(request: Request, service: CrudService = Depends(get_service)):
        query = {key: ",".join(request.query_params.getlist(key)) for key in request.query_params.keys()}
        return service.page(query)

    @router.get("/detail/{record_id}")
    def detail(record_id: int, service: CrudService = Depends(get_service)):
        return success(service.detail(record_id))

    @router.post("/save")
    def save(body: Dict[str, Any] = Body(...), service: CrudService = Depends(get_service)):
        created = not body.get("id")
        result = service.save(body)
        return success(result, f"{service.entity_name} {'created' if created else 'updated'}")

    @router.post("/enable")
    def enable(body: IdListRequest, service: CrudService = Depends(get_service)):
        return success(service.enable(body.idList))

    @router.post("/disable")
    def disable(body: IdListRequest, service: CrudService = Depends(get_service)):
        return success(service.disable(body.idList))

    @router.post("/del")
    def delete(body: IdListRequest, service: CrudService = Depends(get_service)):
        return success(service.delete(body.idList))

    @router.get("/{record_id}")
    def detail_alias(record_id: int, service: CrudService = Depends(get_service)):
        return success(service.detail(record_id))

    return router


category_router = APIRouter(prefix="/category", tags=["category"])
get_category_service = service_dependency(CategoryService)


@category_router.get("/list")
def category_list(service: CategoryService = Depends(get_category_service)):
    return success_list(service.list_all())


@category_router.post("/sort")
def category_sort(body: IdListRequest, service: CategoryService = Depends(get_category_service)):
    return success(service.sort(body.idList))


enum_router = APIRouter(prefix="/enum", tags=["enum"])


@enum_router.get("/list")
def enum_list():
    return success_list(list_enums())


@enum_router.get("/{name}")
def enum_detail(name: str):
    group = find_enum(name)
    if group is None:
        raise ApiError(ENUM_NOT_FOUND, f"Enum not found: {name}", status_code=404)
    return success(group)


MODULES = {
    "sound": SoundService,
    "music": MusicService,
    "playlist": PlaylistService,
    "category": CategoryService,
    "resource": ResourceService,
    "planNameSettings": PlanNameSettingsService,
}


def create_app() -> FastAPI:
    app = FastAPI(title="Content Admin API", version="0.1.0")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=Config.allowed_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def _log_requests(request, call_next):
        return await log_requests(request, call_next)

    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    # category extras must be matched before the generic /category/{record_id}
    app.include_router(category_router)
    app.include_router(enum_router)
    for module_key, service_cls in MODULES.items():
        app.include_router(module_router(module_key, service_cls))

    @app.get("/health")
    def health_check():
        """Basic health and dependency checks for the API."""
        health_start_time = time.time()

        try:
            Config.validate()
            supabase = get_client()
            supabase.table("sound").select("id").limit(1).execute()

            health_duration = time.time() - health_start_time
            return {
                "status": "healthy",
                "service": "content-admin-api",
                "timestamp": datetime.now().isoformat(),
                "response_time_ms": round(health_duration * 1000, 2),
            }
        except Exception as e:
            health_duration = time.time() - health_start_time
            logger.error(f"Health check failed: {str(e)} - Duration: {health_duration:.1f}s")
            return {
                "status": "unhealthy",
                "service": "content-admin-api",
                "timestamp": datetime.now().isoformat(),
                "error": str(e),
                "response_time_ms": round(health_duration * 1000, 2),
            }

    @app.get("/")
    def root():
        """Return basic API information."""
        return {
            "service": "Content Admin API",
            "version": "0.1.0",
            "modules": list(MODULES),
            "endpoints": {
                "page": "/{module}/page",
                "detail": "/{module}/detail/{id}",
                "save": "/{module}/save",
                "enable": "/{module}/enable",
                "disable": "/{module}/disable",
                "delete": "/{module}/del",
                "enums": "/enum/list",
                "health": "/health",
            },
            "timestamp": datetime.now().isoformat(),
        }

    return app


app = create_app()
