from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import Body, FastAPI, Request
from fastapi.responses import JSONResponse

from .config import Settings, load_settings
from .errors import InvalidRequest
from .handler import WebhookHandler
from .models import ErrorResponse

logger = logging.getLogger("whattobring.app")


def configure_logging(settings: Settings) -> None:
    """Install the default log format once and apply the configured level."""
    log_level = getattr(logging, settings.log_level, logging.INFO)
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )
    logging.getLogger("whattobring").setLevel(log_level)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Purpose: Build the FastAPI application around a WebhookHandler.
    Inputs/Outputs: Input is optional Settings (loaded from env when omitted); returns FastAPI.
    Side Effects / State: Configures logging for the `whattobring` namespace.
    Dependencies: Uses WebhookHandler for fulfillment and InvalidRequest for 400 mapping.
    Failure Modes: load_settings raises ValueError on malformed env values.
    Testing Notes: Pass explicit Settings and drive routes with TestClient.
    """
    settings = settings or load_settings()
    configure_logging(settings)

    application = FastAPI(title="What To Bring Fulfillment")
    handler = WebhookHandler(settings, logging.getLogger("whattobring.webhook"))

    @application.exception_handler(InvalidRequest)
    def invalid_request(request: Request, exc: InvalidRequest) -> JSONResponse:
        logger.warning("rejected %s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(message=exc.message).model_dump(),
        )

    @application.post(settings.webhook_path)
    def fulfillment(body: Any = Body(default=None)) -> Dict[str, Any]:
        # Raw body: validation must report missing fields itself, not as 422.
        return handler.handle(body)

    @application.get("/health")
    def health() -> Dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()
