from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from .models import Context, OutputContext, Text, TextMessage, WebhookResponse
from .utils import prop


class WebhookClient:
    """Narrow view of a Dialogflow v2 webhook exchange: contexts in, text lines and contexts out."""

    def __init__(self, body: Any) -> None:
        """Purpose: Index the inbound contexts and prepare an empty reply.
        Inputs/Outputs: Input is the decoded request body; no return value.
        Side Effects / State: Caches incoming contexts by short name.
        Failure Modes: Malformed context entries (non-dict or nameless) are skipped.
        Testing Notes: Contexts are matched by the last segment of their qualified name.
        """
        # Dialogflow names contexts "<session>/contexts/<name>".
        self._session = prop(body, "session") or ""
        self._contexts: Dict[str, Context] = {}
        for raw in prop(body, "queryResult", "outputContexts") or []:
            if not isinstance(raw, dict) or not raw.get("name"):
                continue
            short_name = str(raw["name"]).rsplit("/", 1)[-1]
            parameters = raw.get("parameters")
            self._contexts[short_name] = Context(
                name=short_name,
                lifespan=int(raw.get("lifespanCount") or 0),
                parameters=parameters if isinstance(parameters, dict) else None,
            )
        self._lines: List[str] = []
        self._outgoing: Dict[str, OutputContext] = {}

    def get_context(self, name: str) -> Optional[Context]:
        return self._contexts.get(name)

    def set_context(self, name: str, lifespan: int, parameters: Optional[Dict[str, Any]] = None) -> "WebhookClient":
        """Write (or overwrite) an outgoing context; returns self for chaining."""
        self._outgoing[name] = OutputContext(
            name=self._qualified_name(name),
            lifespanCount=lifespan,
            parameters=parameters,
        )
        return self

    def clear_context(self, name: str) -> "WebhookClient":
        """Expire a context on the next turn by sending it back with lifespanCount 0."""
        self._outgoing[name] = OutputContext(name=self._qualified_name(name), lifespanCount=0)
        return self

    def add(self, lines: Iterable[str]) -> "WebhookClient":
        self._lines.extend(str(line) for line in lines)
        return self

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    def to_response(self) -> WebhookResponse:
        """Purpose: Render the accumulated reply in the Dialogflow v2 response shape.
        Inputs/Outputs: No inputs; returns a WebhookResponse.
        Side Effects / State: None.
        Testing Notes: One text message per line; outputContexts in write order.
        """
        # Each line becomes its own text bubble.
        return WebhookResponse(
            fulfillmentMessages=[TextMessage(text=Text(text=[line])) for line in self._lines],
            outputContexts=list(self._outgoing.values()),
        )

    def _qualified_name(self, name: str) -> str:
        if not self._session:
            return name
        return f"{self._session}/contexts/{name}"
