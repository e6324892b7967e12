"""modelgate FastAPI application entry point.

Loads ``Settings`` and the ``config/config.yaml`` manifest, configures
structured logging, builds the provider registry, and mounts the API.

Run with ``python -m src.main`` or ``uvicorn src.main:app``.
"""

from __future__ import annotations

import structlog
import uvicorn
from fastapi import FastAPI

from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from src.api.routes import router as api_router
from src.config.loader import enabled_providers, load_config
from src.config.settings import Settings
from src.providers.llm.registry import ProviderRegistry, build_default_registry
from src.utils.logging import configure_logging, get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


def create_app(
    app_settings: Settings | None = None,
    registry: ProviderRegistry | None = None,
    config_path: str = "config/config.yaml",
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        app_settings: Settings to use; read from the environment when omitted.
        registry: Pre-built provider registry (tests inject one with fakes).
        config_path: YAML manifest listing the enabled providers.
    """
    app_settings = app_settings or Settings()
    config = load_config(config_path, settings=app_settings)

    configure_logging(
        log_level=app_settings.log_level,
        json_output=(app_settings.app_env == "production"),
    )

    if registry is None:
        registry = build_default_registry(app_settings, enabled_providers(config))

    app = FastAPI(title="modelgate", version=config.get("app", {}).get("version", "0.1.0"))
    app.state.settings = app_settings
    app.state.config = config
    app.state.registry = registry

    # Added first so it runs innermost; RequestLogging then sees mapped statuses.
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    configure_cors(app, allowed_origins=[app_settings.app_origin])

    app.include_router(api_router)

    _logger.info(
        "app_started",
        providers=registry.names(),
        configured=app_settings.get_configured_providers(),
        env=app_settings.app_env,
    )
    return app


settings = Settings()
app = create_app(settings)


if __name__ == "__main__":
    uvicorn.run("src.main:app", host=settings.app_host, port=settings.app_port, reload=False)
