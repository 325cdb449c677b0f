"""Taskly - FastAPI Application.

Главное приложение с инициализацией всех компонентов.
"""

import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from config.settings import Settings, settings
from src.api.routes import system, tasks, users, websocket
from src.core.constants import TASKS_COLLECTION, USERS_COLLECTION
from src.core.enums import IndexPolicy
from src.services.identity import IdentityService
from src.services.notification_hub import NotificationHub
from src.services.ordering import OrderingEngine
from src.services.task_service import TaskService
from src.shared.errors import get_trace_id, set_trace_id, setup_exception_handlers
from src.shared.logging import get_logger, setup_logging
from src.storage import create_document_store

# Setup logging
setup_logging()
logger = get_logger()


class TraceContextMiddleware:
    """Middleware для установки trace_id в контекст запроса."""

    def __init__(self, app: Any) -> None:
        self.app = app

    async def __call__(self, scope: dict, receive: Any, send: Any) -> None:
        """Установить trace_id из заголовка x-trace-id или сгенерировать новый."""
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers", []))
        trace_id = headers.get(b"x-trace-id", b"").decode() or str(uuid4())
        set_trace_id(trace_id)

        await self.app(scope, receive, send)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan context manager для startup/shutdown.

    Args:
        app: FastAPI application, на state которого вешаются компоненты

    Yields:
        None

    """
    app_settings: Settings = app.state.settings

    # =================================================================
    # Startup
    # =================================================================
    logger.info(
        "Taskly запускается",
        env=app_settings.app_env,
        debug=app_settings.debug,
        store_backend=app_settings.store_backend,
    )

    store = await create_document_store(app_settings)
    logger.info("DocumentStore инициализирован", backend=app_settings.store_backend)

    hub = NotificationHub(welcome_message=app_settings.welcome_message)
    task_collection = store.collection(TASKS_COLLECTION)
    engine = OrderingEngine(task_collection, serialize_moves=app_settings.ordering_serialize_moves)

    app.state.store = store
    app.state.hub = hub
    app.state.task_service = TaskService(
        task_collection,
        engine,
        hub,
        index_policy=IndexPolicy(app_settings.index_policy),
    )
    app.state.identity_service = IdentityService(store.collection(USERS_COLLECTION))

    logger.info(
        "Taskly готов",
        server_host=app_settings.server_host,
        server_port=app_settings.server_port,
        index_policy=app_settings.index_policy,
    )

    yield

    # =================================================================
    # Shutdown
    # =================================================================
    logger.info("Taskly останавливается")

    await store.close()
    logger.info("DocumentStore закрыт")

    logger.info("Taskly остановлен")


def create_app(app_settings: Settings | None = None) -> FastAPI:
    """Создание и настройка FastAPI приложения.

    Args:
        app_settings: Настройки (по умолчанию - из env)

    Returns:
        Настроенный экземпляр FastAPI

    """
    app_settings = app_settings or settings

    app = FastAPI(
        title=app_settings.app_name,
        description="Backend совместной доски задач с real-time уведомлениями",
        version="1.0.0",
        lifespan=lifespan,
        debug=app_settings.debug,
        docs_url="/docs" if app_settings.debug else None,  # Swagger UI только в debug
        redoc_url="/redoc" if app_settings.debug else None,
    )
    app.state.settings = app_settings

    # =================================================================
    # Middleware
    # =================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def timing_middleware(request: Request, call_next: Any) -> Any:
        """Измерить время выполнения запроса и добавить X-Trace-ID / X-Duration-Ms."""
        start_time = time.time()
        trace_id = get_trace_id()

        response = await call_next(request)

        duration_ms = round((time.time() - start_time) * 1000, 2)
        response.headers["X-Trace-ID"] = trace_id
        response.headers["X-Duration-Ms"] = str(duration_ms)

        logger.info(
            f"{request.method} {request.url.path} - {response.status_code}",
            duration_ms=duration_ms,
            status_code=response.status_code,
        )
        return response

    # Добавляется последним, чтобы выполняться первым
    app.add_middleware(TraceContextMiddleware)

    setup_exception_handlers(app)

    # =================================================================
    # Routes
    # =================================================================

    app.include_router(system.router)
    app.include_router(tasks.router)
    app.include_router(users.router)
    app.include_router(websocket.router)

    return app


app = create_app()
