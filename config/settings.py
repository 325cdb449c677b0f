"""Taskly - Configuration Settings.

Pydantic Settings для управления конфигурацией через env vars.
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CORS_ORIGINS = [
    "http://localhost:5173",
    "https://management-server-rosy.vercel.app",
    "https://task-mangement-client.onrender.com",
]


class Settings(BaseSettings):
    """Главные настройки приложения."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =================================================================
    # Application
    # =================================================================
    app_name: str = Field(default="Taskly", description="Название приложения")
    app_env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Окружение"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Уровень логирования"
    )
    debug: bool = Field(default=False, description="Режим отладки")

    # =================================================================
    # Server
    # =================================================================
    server_host: str = Field(default="0.0.0.0", description="Хост сервера")
    server_port: int = Field(default=5000, description="Порт сервера")

    @field_validator("server_port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Валидация порта."""
        if not 1 <= v <= 65535:
            msg = f"Порт должен быть в диапазоне 1-65535, получено: {v}"
            raise ValueError(msg)
        return v

    cors_allowed_origins: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CORS_ORIGINS),
        description="Разрешённые origins для CORS"
    )

    # =================================================================
    # Storage
    # =================================================================
    store_backend: Literal["redis", "memory"] = Field(
        default="redis",
        description="Backend document store (memory - только для разработки и тестов)"
    )
    redis_url: str = Field(
        default="redis://localhost:6379/0",
        description="URL подключения к Redis"
    )
    database_name: str = Field(
        default="taskManagerDB",
        description="Namespace коллекций (префикс ключей Redis)"
    )
    store_timeout_seconds: float = Field(
        default=5.0,
        description="Таймаут одной операции store"
    )

    @field_validator("store_timeout_seconds")
    @classmethod
    def validate_store_timeout(cls, v: float) -> float:
        """Таймаут должен быть положительным."""
        if v <= 0:
            msg = f"store_timeout_seconds должен быть > 0, получено: {v}"
            raise ValueError(msg)
        return v

    # =================================================================
    # Ordering
    # =================================================================
    index_policy: Literal["caller-specified", "append-at-end"] = Field(
        default="caller-specified",
        description="Откуда берётся index новой задачи"
    )
    ordering_serialize_moves: bool = Field(
        default=False,
        description="Сериализовать перемещения внутри категории (in-process lock)"
    )

    # =================================================================
    # Realtime
    # =================================================================
    welcome_message: str = Field(
        default="Welcome to the task manager!",
        description="Сообщение welcome при подключении observer"
    )


# Singleton instance
settings = Settings()
