from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException

from conformance_server import __version__
from conformance_server.config import AppConfig, load_config
from conformance_server.http.problem import (
    handle_contract_violation,
    handle_http_exception,
    handle_unexpected_error,
)
from conformance_server.http.request_id import RequestIdMiddleware
from conformance_server.logging_setup import configure_logging
from conformance_server.logic.api_service import ConformanceApi
from conformance_server.logic.conformance_service import ConformanceApiService
from conformance_server.logic.fixtures_loader import load_conformance_tests
from conformance_server.logic.memory_service import InMemoryWidgetService
from conformance_server.logic.shaping import ResultContractViolation
from conformance_server.middleware.cors import apply_cors
from conformance_server.routes import api_router

logger = logging.getLogger(__name__)


def build_api(config: AppConfig) -> ConformanceApi:
    """Construct the API service selected by configuration."""
    service = config.service
    if service.mode == "conformance":
        if not service.tests_path:
            raise ValueError("service.tests_path is required when service.mode is 'conformance'")
        return ConformanceApiService(load_conformance_tests(service.tests_path))
    return InMemoryWidgetService(max_batch_size=service.max_batch_size, version=__version__)


def create_app(api: Optional[ConformanceApi] = None, config: Optional[AppConfig] = None) -> FastAPI:
    """Application factory.

    ``api`` overrides the configured service, which lets tests inject
    stubs; otherwise the service is built from ``config`` (loaded from the
    environment when omitted).
    """
    cfg = config or load_config()
    try:
        configure_logging(cfg.server.log_level)
    except Exception:
        logging.getLogger(__name__).error("global_logging_configuration_failed", exc_info=True)

    app = FastAPI(title="Conformance API", version=__version__)
    app.state.config = cfg
    app.state.api = api if api is not None else build_api(cfg)
    logger.info(
        "app.created",
        extra={"service": type(app.state.api).__name__, "mode": cfg.service.mode if api is None else "injected"},
    )

    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(ResultContractViolation, handle_contract_violation)
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.add_middleware(RequestIdMiddleware)
    apply_cors(app, origins=cfg.cors_origins)

    app.include_router(api_router)
    return app


__all__ = ["create_app", "build_api"]
