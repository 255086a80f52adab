from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from .accumulator import CONTINUE, RESET, accumulate
from .config import Settings
from .utils import parse_query, prop
from .validator import validate_request
from .webhook_client import WebhookClient


class WebhookHandler:
    """Runs one fulfillment turn of the memory game."""

    def __init__(self, settings: Settings, logger: Optional[logging.Logger] = None) -> None:
        """Purpose: Bind the handler to its configuration and logger.
        Inputs/Outputs: Inputs are Settings and an optional logger; no return value.
        Side Effects / State: None; the handler keeps no per-request state.
        Testing Notes: With settings.debug the request/response bodies log at INFO.
        """
        self._context_name = settings.context_name
        self._lifespan = settings.context_lifespan
        self._payload_level = logging.INFO if settings.debug else logging.DEBUG
        self._logger = logger or logging.getLogger("whattobring.webhook")

    def handle(self, body: Any) -> Dict[str, Any]:
        """Purpose: Validate the request, gate on the game context, and build the reply.
        Inputs/Outputs: Input is the decoded request body; output is the response body dict.
        Side Effects / State: None beyond logging.
        Dependencies: validate_request, WebhookClient, parse_query, accumulate.
        Failure Modes: InvalidRequest subclasses propagate to the HTTP layer.
        Testing Notes: Without the game context the platform messages are echoed verbatim.
        """
        self._logger.log(self._payload_level, "Dialogflow Request body: %s", _dump(body))
        request = validate_request(body)
        client = WebhookClient(body)

        context = client.get_context(self._context_name)
        if context is None:
            self._logger.info("intent=%s context=%s absent, passing through", request.intent, self._context_name)
            return {"fulfillmentMessages": request.fulfillment_messages}

        query = str(prop(body, "queryResult", "queryText") or "").strip().lower()
        client.clear_context(context.name)

        prior_words = self._stored_words(context.parameters)
        decision = accumulate(prior_words, parse_query(query), query)
        self._logger.info(
            "intent=%s outcome=%s prior=%s words=%s",
            request.intent,
            decision.outcome,
            len(prior_words),
            len(decision.words) if decision.words is not None else "-",
        )

        if decision.outcome == RESET:
            client.set_context(context.name, self._lifespan)
        elif decision.outcome == CONTINUE:
            parameters = dict(context.parameters) if context.parameters is not None else {}
            parameters["words"] = decision.words
            client.set_context(context.name, self._lifespan, parameters)
        client.add(decision.lines)

        payload = client.to_response().model_dump(exclude_none=True)
        self._logger.log(self._payload_level, "Dialogflow Response body: %s", _dump(payload))
        return payload

    def _stored_words(self, parameters: Optional[Dict[str, Any]]) -> List[str]:
        words = (parameters or {}).get("words")
        if words is None:
            return []
        if not isinstance(words, list):
            self._logger.warning("ignoring non-list words parameter: %r", words)
            return []
        return [str(word) for word in words]


def _dump(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False, default=str)
