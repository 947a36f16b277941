"""
Error taxonomy for the prediction form.

ValidationError and SelectionError are raised to the caller and leave the
request lifecycle untouched. TransportError and MalformedResponseError are
raised by prediction clients; the controller turns them into a failed
prediction result.
"""

# Text shown to the user when a request fails for any reason
GENERIC_FAILURE_MESSAGE = "Failed to fetch prediction. Try again later."

# Text shown to the user when the form is incomplete
INCOMPLETE_FORM_MESSAGE = "Please select all fields!"


class PredictorError(Exception):
    """Base class for all prediction form errors."""


class ValidationError(PredictorError):
    """One or more required selections are missing at submit time."""

    def __init__(self, missing_fields: list[str]) -> None:
        self.missing_fields = list(missing_fields)
        super().__init__(INCOMPLETE_FORM_MESSAGE)

    @property
    def user_message(self) -> str:
        return INCOMPLETE_FORM_MESSAGE


class SelectionError(PredictorError):
    """A value outside the allowed set was offered to a form field."""

    def __init__(self, field: str, value: object, allowed: list[str]) -> None:
        self.field = field
        self.value = value
        self.allowed = list(allowed)
        super().__init__(f"{value!r} is not a valid {field}; expected one of {self.allowed}")


class TransportError(PredictorError):
    """The prediction request could not be completed."""


class PredictionTimeoutError(TransportError):
    """The prediction request exceeded its deadline."""


class PredictionCancelledError(TransportError):
    """The prediction request was cancelled before it resolved."""


class MalformedResponseError(PredictorError):
    """The service answered without a usable win probability."""


class InvalidTransitionError(PredictorError):
    """A lifecycle transition outside the state machine was attempted."""
