"""Taskly - Entry Point.

Запускает FastAPI приложение через uvicorn.
"""

import uvicorn
from config.settings import settings


def main() -> None:
    """Запустить Taskly server."""
    uvicorn.run(
        "src.app:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.debug,  # Auto-reload только в debug
        log_level=settings.log_level.lower(),
        access_log=settings.debug,
        workers=1,  # ВАЖНО: Notification Hub хранит observers в памяти процесса
    )


if __name__ == "__main__":
    main()
