"""System Routes для Taskly.

Баннер сервиса и health check.
"""

from fastapi import APIRouter, Response, status
from fastapi.responses import PlainTextResponse

from src.api.schemas import HealthResponse
from src.core.constants import SERVICE_BANNER
from src.core.dependencies import DocumentStoreDep, NotificationHubDep
from src.core.enums import HealthStatus

router = APIRouter(tags=["root"])


@router.get("/", response_class=PlainTextResponse)
async def root() -> str:
    """Проверка, что сервер запущен."""
    return SERVICE_BANNER


@router.get("/health", response_model=HealthResponse)
async def health(store: DocumentStoreDep, hub: NotificationHubDep, response: Response) -> HealthResponse:
    """Health check: доступность store и число observers."""
    store_ok = await store.health_check()
    if not store_ok:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    store_status = HealthStatus.OK if store_ok else HealthStatus.UNAVAILABLE
    return HealthResponse(
        status=store_status.value,
        store=store_status.value,
        observers=hub.connection_count,
    )
