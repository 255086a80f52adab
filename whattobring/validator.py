from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List

from .errors import MissingFulfillmentMessages, MissingIntent
from .utils import prop


@dataclass(frozen=True)
class ValidatedRequest:
    """Fields the handler needs once a payload passes validation."""
    intent: str
    fulfillment_messages: List[Any]


def validate_request(body: Any) -> ValidatedRequest:
    """Purpose: Gate inbound payloads before any fulfillment work happens.
    Inputs/Outputs: Input is the decoded JSON body; output is a ValidatedRequest.
    Side Effects / State: None.
    Dependencies: Uses prop for null-safe nested access.
    Failure Modes: Raises MissingIntent when the intent display name is absent or empty,
        MissingFulfillmentMessages when the intent is present but the message list is absent.
    Testing Notes: An empty fulfillmentMessages list is present and must pass.
    """
    # Intent first; the second error message names the resolved intent.
    intent = prop(body, "queryResult", "intent", "displayName")
    if not intent:
        raise MissingIntent()

    fulfillment_messages = prop(body, "queryResult", "fulfillmentMessages")
    if fulfillment_messages is None:
        raise MissingFulfillmentMessages(str(intent))

    return ValidatedRequest(intent=str(intent), fulfillment_messages=fulfillment_messages)
