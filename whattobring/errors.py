"""
Request errors surfaced to the caller as HTTP 400 responses.
"""


class InvalidRequest(Exception):
    """Raised when an inbound payload is not a usable fulfillment request."""

    status_code = 400

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingIntent(InvalidRequest):
    """Raised when `queryResult.intent.displayName` cannot be resolved."""

    def __init__(self) -> None:
        super().__init__(
            "Invalid request, missing `queryResult.intent.displayName`. "
            "The request is probably not a request from Dialogflow or Actions on Google"
        )


class MissingFulfillmentMessages(InvalidRequest):
    """Raised when an intent was resolved but no fulfillment messages were sent."""

    def __init__(self, intent: str) -> None:
        super().__init__(f"The request for intent '{intent}' was not from DialogFlow or Actions on Google")
        self.intent = intent
