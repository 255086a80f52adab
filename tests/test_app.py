"""
HTTP-level tests for the fulfillment webhook.
"""

import logging

from fastapi.testclient import TestClient

from whattobring.app import create_app
from whattobring.config import Settings

from .conftest import SESSION, lines_of, make_body

CONTEXT = f"{SESSION}/contexts/playing"


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


class TestValidation:
    def test_missing_intent(self, client):
        response = client.post("/", json={"queryResult": {}})
        assert response.status_code == 400
        assert "missing" in response.json()["message"]

    def test_non_object_body(self, client):
        response = client.post("/", json=["not", "a", "request"])
        assert response.status_code == 400
        assert "missing" in response.json()["message"]

    def test_missing_fulfillment_messages(self, client):
        body = make_body(intent="PackBag")
        del body["queryResult"]["fulfillmentMessages"]
        response = client.post("/", json=body)
        assert response.status_code == 400
        assert "PackBag" in response.json()["message"]


def test_pass_through_without_context(client):
    messages = [{"text": {"text": ["Welcome! What should I bring?"]}}, {"payload": {"x": 1}}]
    response = client.post("/", json=make_body(with_context=False, messages=messages))
    assert response.status_code == 200
    assert response.json() == {"fulfillmentMessages": messages}


class TestGame:
    def test_first_item(self, client):
        response = client.post("/", json=make_body(query="  An Apple. "))
        assert response.status_code == 200
        payload = response.json()
        assert lines_of(payload) == ["So all that you want to bring is:", "an apple,", "And what else?"]
        assert payload["outputContexts"] == [
            {"name": CONTEXT, "lifespanCount": 1, "parameters": {"words": ["apple"]}}
        ]

    def test_second_item_merges_parameters(self, client):
        body = make_body(query="apple, a banana", words=["apple"], parameters={"words.original": "apple"})
        payload = client.post("/", json=body).json()
        assert lines_of(payload)[0] == "So all that you want to bring are:"
        assert payload["outputContexts"][0]["parameters"] == {
            "words.original": "apple",
            "words": ["apple", "banana"],
        }

    def test_second_item(self, client):
        payload = client.post("/", json=make_body(query="apple banana", words=["apple"])).json()
        assert lines_of(payload) == [
            "So all that you want to bring are:",
            "an apple,",
            "a banana,",
            "And what else?",
        ]
        assert payload["outputContexts"][0]["parameters"]["words"] == ["apple", "banana"]

    def test_too_many_on_first_turn_resets(self, client):
        payload = client.post("/", json=make_body(query="apple banana")).json()
        assert lines_of(payload) == [
            "I can't remember more than one item at a time",
            "Let's just start over",
            "What item should I bring with me?",
        ]
        assert payload["outputContexts"] == [{"name": CONTEXT, "lifespanCount": 1}]

    def test_forgotten_item_clears_context(self, client):
        payload = client.post("/", json=make_body(query="apple", words=["apple", "banana"])).json()
        assert lines_of(payload) == ["You didn't say all the previous items", "apple", "apple"]
        assert payload["outputContexts"] == [{"name": CONTEXT, "lifespanCount": 0}]

    def test_same_items_again(self, client):
        payload = client.post("/", json=make_body(query="pear, fig", words=["fig", "pear"])).json()
        assert lines_of(payload) == [
            "You've only said the same items and forgot to add a new one",
            "pear, fig",
            "pear",
            "fig",
        ]

    def test_non_list_words_start_a_new_game(self, client):
        payload = client.post("/", json=make_body(query="kiwi", words="apple")).json()
        assert lines_of(payload) == ["So all that you want to bring is:", "a kiwi,", "And what else?"]
        assert payload["outputContexts"][0]["parameters"]["words"] == ["kiwi"]

    def test_missing_query_text(self, client):
        body = make_body(words=["apple"])
        del body["queryResult"]["queryText"]
        payload = client.post("/", json=body).json()
        # "" parses to a single empty token, echoed after the query
        assert lines_of(payload) == ["You didn't say all the previous items", "", ""]


def test_custom_settings(caplog):
    settings = Settings(context_name="game", webhook_path="/fulfillment", debug=True)
    client = TestClient(create_app(settings))
    body = make_body(query="egg")
    body["queryResult"]["outputContexts"][0]["name"] = f"{SESSION}/contexts/game"

    with caplog.at_level(logging.INFO, logger="whattobring.webhook"):
        response = client.post("/fulfillment", json=body)

    assert response.status_code == 200
    assert lines_of(response.json())[1] == "an egg,"
    assert response.json()["outputContexts"][0]["name"] == f"{SESSION}/contexts/game"
    assert any("Dialogflow Request body" in record.getMessage() for record in caplog.records)
