"""
Shared fixtures: Dialogflow v2 request bodies and an app bound to test settings.
"""

import pytest
from fastapi.testclient import TestClient

from whattobring.app import create_app
from whattobring.config import Settings

SESSION = "projects/bring-game/agent/sessions/abc123"


def make_body(query="apple", words=None, with_context=True, intent="Bring", messages=None, parameters=None):
    """Build a fulfillment request; `words=None` omits the words parameter."""
    query_result = {
        "queryText": query,
        "intent": {"displayName": intent},
        "fulfillmentMessages": messages if messages is not None else [{"text": {"text": [""]}}],
        "outputContexts": [],
    }
    if with_context:
        params = dict(parameters or {})
        if words is not None:
            params["words"] = words
        query_result["outputContexts"].append(
            {"name": f"{SESSION}/contexts/playing", "lifespanCount": 1, "parameters": params}
        )
    return {"session": SESSION, "queryResult": query_result}


def lines_of(payload):
    return [message["text"]["text"][0] for message in payload["fulfillmentMessages"]]


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def client(settings):
    return TestClient(create_app(settings))
