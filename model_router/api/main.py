"""FastAPI application entrypoint and HTTP endpoints."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import structlog
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from model_router.core.config_provider import SettingsRoutingConfigProvider
from model_router.core.errors import RoutingConfigError, RoutingConfigUnavailableError
from model_router.core.logging import configure_logging
from model_router.core.settings import get_settings
from model_router.models.routing_models import RoutingDecision, TaskClassification, TaskTypeMetadata
from model_router.routing.classifier import classify_task
from model_router.routing.router import ModelRouter

log = structlog.get_logger(__name__)


class RouteRequest(BaseModel):
    input: str = Field(default="", description="User request text")
    task_type: str | None = Field(default=None, description="Explicit task type; skips classification")


class ClassifyRequest(BaseModel):
    input: str = Field(default="", description="User request text")


@asynccontextmanager
async def lifespan(application: FastAPI):
    """FastAPI lifespan hook: configure logging."""
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    log.info("api_startup_complete", default_model=settings.DEFAULT_MODEL)
    yield
    log.info("api_shutdown_complete")


app = FastAPI(title="Model Router API", version="1.0.0", lifespan=lifespan)


def get_router() -> ModelRouter:
    """Build a router over the current settings (overridable in tests)."""
    provider = SettingsRoutingConfigProvider(get_settings())
    return ModelRouter(provider, provider)


@app.middleware("http")
async def api_key_guard(request: Request, call_next):
    # Allow unauthenticated health and docs endpoints.
    if request.url.path in {"/health", "/docs", "/openapi.json", "/redoc"}:
        return await call_next(request)

    settings = get_settings()
    if settings.API_KEY and request.url.path.startswith("/v1/"):
        provided = request.headers.get(settings.API_KEY_HEADER)
        if provided != settings.API_KEY:
            return JSONResponse(status_code=401, content={"detail": "Unauthorized"})

    return await call_next(request)


@app.post("/v1/routing/route", response_model=RoutingDecision)
async def route(request: RouteRequest, router: ModelRouter = Depends(get_router)) -> RoutingDecision:
    """Route a request to a model according to the configured preferences."""
    try:
        return await router.route_request(request.input, request.task_type)
    except RoutingConfigUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e)) from e


@app.post("/v1/routing/classify", response_model=TaskClassification)
async def classify(request: ClassifyRequest) -> TaskClassification:
    """Classify a request without consulting the routing table."""
    return classify_task(request.input)


@app.get("/v1/routing/task-types", response_model=list[TaskTypeMetadata])
async def task_types(router: ModelRouter = Depends(get_router)) -> list[TaskTypeMetadata]:
    try:
        return await router.get_available_task_types()
    except RoutingConfigUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e)) from e


@app.get("/health")
async def health() -> dict[str, Any]:
    """Health check: reports whether routing is enabled and the default model."""
    settings = get_settings()
    provider = SettingsRoutingConfigProvider(settings)
    config_ok = True
    config_error: str | None = None
    routing_enabled = False
    try:
        routing_config = provider.get_routing_config()
        routing_enabled = bool(routing_config and routing_config.enabled)
    except RoutingConfigError as e:
        config_ok = False
        config_error = str(e)

    payload: dict[str, Any] = {
        "status": "healthy" if config_ok else "degraded",
        "routing": {"ok": config_ok, "enabled": routing_enabled, "error": config_error},
        "default_model": provider.get_model(),
    }
    return JSONResponse(status_code=200 if config_ok else 503, content=payload)
