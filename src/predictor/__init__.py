"""
Match prediction form.

- Catalog: teams and venues that can be selected
- Selection: form state and its transactional update
- Lifecycle: request state machine and prediction result
- Client: prediction service contract (HTTP implementation included)
- Controller: ties selection, lifecycle and client together
- Display: pure derivation of what the view shows
"""

from .catalog import TEAMS, VENUES, VenueCategory
from .client import PredictionClient, PredictionRequest, PredictionResponse
from .controller import PredictionFormController
from .display import (
    FormView,
    ResultView,
    format_probability,
    predicted_winner,
    progress_fill,
    render_form,
    render_result,
)
from .errors import (
    GENERIC_FAILURE_MESSAGE,
    InvalidTransitionError,
    MalformedResponseError,
    PredictionCancelledError,
    PredictionTimeoutError,
    PredictorError,
    SelectionError,
    TransportError,
    ValidationError,
)
from .http_client import HttpPredictionClient
from .lifecycle import PredictionResult, RequestLifecycle
from .selection import SelectionField, SelectionState, update_selection

__all__ = [
    "TEAMS",
    "VENUES",
    "VenueCategory",
    "PredictionClient",
    "PredictionRequest",
    "PredictionResponse",
    "HttpPredictionClient",
    "PredictionFormController",
    "FormView",
    "ResultView",
    "format_probability",
    "predicted_winner",
    "progress_fill",
    "render_form",
    "render_result",
    "GENERIC_FAILURE_MESSAGE",
    "PredictorError",
    "InvalidTransitionError",
    "ValidationError",
    "SelectionError",
    "TransportError",
    "PredictionTimeoutError",
    "PredictionCancelledError",
    "MalformedResponseError",
    "PredictionResult",
    "RequestLifecycle",
    "SelectionField",
    "SelectionState",
    "update_selection",
]
