"""Home Gateway FastAPI application.

HTTP surface over the HomeClient: natural-language device commands,
discovery, context providers and the capability catalog.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Request, status
from pythonjsonlogger import jsonlogger

from home_gateway import __version__
from home_gateway.client import HomeClient
from home_gateway.core.errors import (
    DiscoveryFailed,
    HomeGatewayError,
    InvalidCommandArgument,
    OperationTimeout,
    TargetNotResolved,
    UnknownCommand,
    UnparseableCommand,
)
from home_gateway.models import CommandRequest, CommandResponse, Config, EntityResponse

logger = logging.getLogger(__name__)

_HANDLER_MARKER = "_home_gateway_handler"


def setup_logging(log_level: str = "INFO", access_log: bool = True) -> None:
    """Configure structured JSON logging.

    Calling it again replaces the handler installed by the previous call.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        access_log: Keep uvicorn's per-request access lines
    """
    formatter = jsonlogger.JsonFormatter(  # type: ignore[attr-defined]
        "%(asctime)s %(name)s %(levelname)s %(message)s",
        rename_fields={"asctime": "timestamp", "levelname": "level", "name": "logger"},
    )

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        if getattr(existing, _HANDLER_MARKER, False):
            root_logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    setattr(handler, _HANDLER_MARKER, True)

    root_logger.addHandler(handler)
    root_logger.setLevel(log_level.upper())

    logging.getLogger("httpx").setLevel(logging.WARNING)
    if not access_log:
        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the HomeClient on startup and stop it on shutdown."""
    config = Config()
    setup_logging(config.log_level, access_log=config.access_log)

    logger.info("Home Gateway starting up")
    logger.info(f"SmartThings URL: {config.smartthings_base_url}")
    logger.info(f"Polling interval: {config.poll_interval}s")

    client = HomeClient(config)
    await client.initialize()
    app.state.home_client = client

    yield

    logger.info("Home Gateway shutting down")
    await client.stop()


app = FastAPI(
    title="Home Gateway",
    description="Natural-language control of SmartThings devices",
    version=__version__,
    lifespan=lifespan,
)


def get_home_client(request: Request) -> HomeClient:
    """Dependency returning the client built by the lifespan.

    Raises:
        HTTPException: 503 if the client is not initialized
    """
    client: HomeClient | None = getattr(request.app.state, "home_client", None)
    if client is None or not client.initialized:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Gateway not initialized")
    return client


def _status_for(error: HomeGatewayError) -> int:
    if isinstance(error, (UnparseableCommand, UnknownCommand, InvalidCommandArgument, TargetNotResolved)):
        return 422
    if isinstance(error, OperationTimeout):
        return status.HTTP_504_GATEWAY_TIMEOUT
    return status.HTTP_502_BAD_GATEWAY


@app.post("/command", response_model=CommandResponse)
async def command(
    request: CommandRequest,
    client: HomeClient = Depends(get_home_client),
) -> CommandResponse:
    """Run a natural-language device command.

    Returns:
        CommandResponse with ``handled=False`` when the intent gate declined

    Raises:
        HTTPException: 422 for commands that cannot be understood or bound
            to a device, 502 for upstream failures, 504 on timeouts
    """
    try:
        result = await client.handle_command(request.text, request.user_id, device_id=request.device_id)
    except HomeGatewayError as e:
        raise HTTPException(status_code=_status_for(e), detail=str(e))

    if result is None:
        return CommandResponse(handled=False)

    return CommandResponse(
        handled=True,
        success=result.success,
        message=result.message,
        data=result.data,
        device_id=result.device_id,
    )


@app.post("/devices/discover", response_model=list[EntityResponse])
async def discover_devices(client: HomeClient = Depends(get_home_client)) -> list[EntityResponse]:
    """Rediscover all devices and return the new registry contents."""
    try:
        entities = await client.entity_registry.discover_entities()
    except DiscoveryFailed as e:
        raise HTTPException(status_code=_status_for(e), detail=str(e))

    return [
        EntityResponse(
            entity_id=entity.entity_id,
            name=entity.name,
            type=entity.type.value,
            capabilities=list(entity.capabilities),
            state=entity.state,
        )
        for entity in entities
    ]


@app.get("/providers/{name}")
async def get_provider(name: str, client: HomeClient = Depends(get_home_client)) -> dict[str, str]:
    """Render a context provider by name."""
    text = await client.providers.render(name)
    if text is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown provider: {name}")
    return {"name": name, "text": text}


@app.get("/capabilities")
async def list_capabilities(client: HomeClient = Depends(get_home_client)) -> list[dict[str, Any]]:
    """List registered control-surface capability descriptors."""
    return [descriptor.model_dump() for descriptor in client.capabilities.list_all()]


@app.get("/health")
async def health_check(client: HomeClient = Depends(get_home_client)) -> dict[str, Any]:
    """Liveness check with registry size and polling metrics."""
    polling = client.polling
    return {
        "status": "ok",
        "entities": len(client.entity_registry) if client.entity_registry is not None else 0,
        "polling": {
            "running": polling.running if polling else False,
            **(polling.metrics.to_dict() if polling else {}),
        },
    }
