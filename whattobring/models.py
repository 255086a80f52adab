from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Body returned with HTTP 400 for unusable requests."""
    message: str


class Context(BaseModel):
    """Conversation context as seen by the handler, keyed by its short name."""
    name: str
    lifespan: int = 0
    parameters: Optional[Dict[str, Any]] = None


class OutputContext(BaseModel):
    """Context entry written back to Dialogflow in `outputContexts`."""
    name: str
    lifespanCount: int
    parameters: Optional[Dict[str, Any]] = None


class Text(BaseModel):
    text: List[str]


class TextMessage(BaseModel):
    """Single text fulfillment message."""
    text: Text


class WebhookResponse(BaseModel):
    """Fulfillment response built from reply lines and context mutations."""
    fulfillmentMessages: List[TextMessage] = Field(default_factory=list)
    outputContexts: List[OutputContext] = Field(default_factory=list)
