"""
Prediction form controller.

Responsibilities:
- Own the selection state, request lifecycle and prediction result
- Enforce field dependency rules through update_selection()
- Gate submission on a complete form and a non-pending lifecycle
- Drive one prediction request at a time, with a deadline and cancellation
"""

import asyncio
from typing import Any
from uuid import uuid4

from config.settings import get_settings
from src.utils.logging import get_logger, log_context

from .catalog import VenueCategory
from .client import PredictionClient, PredictionRequest
from .display import FormView, ResultView, render_form, render_result
from .errors import (
    GENERIC_FAILURE_MESSAGE,
    MalformedResponseError,
    PredictionCancelledError,
    PredictionTimeoutError,
    TransportError,
    ValidationError,
)
from .lifecycle import (
    SUBMITTABLE_STATES,
    PredictionResult,
    RequestLifecycle,
    check_transition,
)
from .selection import SelectionField, SelectionState, update_selection

logger = get_logger(__name__)


class PredictionFormController:
    """
    State machine behind the match prediction form.

    Lifecycle: IDLE -> PENDING -> SUCCEEDED | FAILED -> PENDING ...

    A submit() issued while a request is PENDING is ignored; the lifecycle
    is the only dispatch guard.
    """

    def __init__(
        self,
        client: PredictionClient,
        reset_dependent_fields: bool | None = None,
        request_timeout_seconds: float | None = None,
        default_venue_category: VenueCategory | str | None = None,
    ) -> None:
        """
        Initialize the controller.

        Args:
            client: Prediction service client
            reset_dependent_fields: Clear toss winner / venue when their
                governing field changes (defaults to FORM_RESET_DEPENDENT_FIELDS)
            request_timeout_seconds: Deadline for one request (defaults to
                PREDICTOR_REQUEST_TIMEOUT_SECONDS)
            default_venue_category: Initial venue category
        """
        settings = get_settings()

        self.client = client
        self.reset_dependent_fields = (
            settings.form.reset_dependent_fields
            if reset_dependent_fields is None
            else reset_dependent_fields
        )
        self.request_timeout_seconds = (
            settings.predictor.request_timeout_seconds
            if request_timeout_seconds is None
            else request_timeout_seconds
        )
        self.default_venue_category = VenueCategory(
            default_venue_category or settings.form.default_venue_category
        )

        self._selection = SelectionState(venue_category=self.default_venue_category)
        self._lifecycle = RequestLifecycle.IDLE
        self._result: PredictionResult | None = None
        self._inflight: asyncio.Task | None = None
        self._cancel_requested = False

        # Stats
        self._submissions_total = 0
        self._submissions_failed = 0
        self._submissions_ignored = 0

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------

    @property
    def selection(self) -> SelectionState:
        return self._selection

    @property
    def lifecycle(self) -> RequestLifecycle:
        return self._lifecycle

    @property
    def result(self) -> PredictionResult | None:
        return self._result

    @property
    def is_pending(self) -> bool:
        return self._lifecycle is RequestLifecycle.PENDING

    def form_view(self) -> FormView:
        return render_form(self._selection, self._lifecycle)

    def result_view(self) -> ResultView | None:
        return render_result(self._result)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def _update(self, field: SelectionField, value: Any) -> SelectionState:
        self._selection = update_selection(
            self._selection,
            field,
            value,
            reset_dependents=self.reset_dependent_fields,
        )
        logger.debug("Selection updated", field=field.value, value=value)
        return self._selection

    def set_team1(self, team: str | None) -> SelectionState:
        return self._update(SelectionField.TEAM1, team)

    def set_team2(self, team: str | None) -> SelectionState:
        return self._update(SelectionField.TEAM2, team)

    def set_toss_winner(self, team: str | None) -> SelectionState:
        """Set the toss winner; must be one of the two selected teams."""
        return self._update(SelectionField.TOSS_WINNER, team)

    def set_venue_category(self, category: VenueCategory | str) -> SelectionState:
        return self._update(SelectionField.VENUE_CATEGORY, category)

    def set_venue(self, venue: str | None) -> SelectionState:
        return self._update(SelectionField.VENUE, venue)

    # ------------------------------------------------------------------
    # Request lifecycle
    # ------------------------------------------------------------------

    def _transition(self, target: RequestLifecycle) -> None:
        check_transition(self._lifecycle, target)
        logger.info(
            "Lifecycle transition",
            from_state=self._lifecycle.value,
            to_state=target.value,
        )
        self._lifecycle = target

    def _build_request(self) -> PredictionRequest:
        selection = self._selection
        missing = selection.missing_fields()
        if missing:
            logger.info("Submission blocked, form incomplete", missing_fields=missing)
            raise ValidationError(missing)
        return PredictionRequest(
            team1=selection.team1,
            team2=selection.team2,
            toss_winner=selection.toss_winner,
            venue=selection.venue,
        )

    async def submit(self) -> PredictionResult | None:
        """
        Submit the current selection for prediction.

        Returns:
            The PredictionResult of this submission, or None if a request
            was already in flight and this call was ignored

        Raises:
            ValidationError: If a required field is empty (no request is
                sent and the lifecycle does not change)
        """
        if self._lifecycle not in SUBMITTABLE_STATES:
            self._submissions_ignored += 1
            logger.warning("Submission ignored, request already in flight")
            return None

        request = self._build_request()

        with log_context(submission_id=str(uuid4())):
            self._submissions_total += 1
            self._result = None
            self._cancel_requested = False
            self._transition(RequestLifecycle.PENDING)

            self._inflight = asyncio.create_task(self.client.predict(request))
            try:
                response = await asyncio.wait_for(
                    self._inflight,
                    timeout=self.request_timeout_seconds,
                )
            except TimeoutError:
                error: Exception = PredictionTimeoutError(
                    f"No response within {self.request_timeout_seconds}s"
                )
            except asyncio.CancelledError:
                if not self._cancel_requested:
                    # The caller itself was cancelled; settle state, then propagate
                    self._fail(request, PredictionCancelledError("Submission cancelled"))
                    raise
                error = PredictionCancelledError("Prediction request cancelled")
            except (TransportError, MalformedResponseError) as e:
                error = e
            except Exception as e:
                logger.exception("Prediction client raised unexpectedly")
                error = TransportError(str(e))
            else:
                self._result = PredictionResult.success(
                    team1=response.team1 or request.team1,
                    team2=response.team2 or request.team2,
                    win_probability=response.win_probability,
                )
                self._transition(RequestLifecycle.SUCCEEDED)
                logger.info(
                    "Prediction succeeded",
                    win_probability=response.win_probability,
                )
                return self._result
            finally:
                self._inflight = None
                self._cancel_requested = False

            self._fail(request, error)
            return self._result

    def _fail(self, request: PredictionRequest, error: Exception) -> None:
        self._submissions_failed += 1
        self._result = PredictionResult.failure(
            team1=request.team1,
            team2=request.team2,
            error_message=GENERIC_FAILURE_MESSAGE,
        )
        self._transition(RequestLifecycle.FAILED)
        logger.warning(
            "Prediction failed",
            error_type=type(error).__name__,
            error=str(error),
        )

    def cancel(self) -> bool:
        """
        Cancel the in-flight request.

        Returns:
            True if a request was cancelled; the pending submit() resolves
            as FAILED
        """
        if self._inflight is None or self._inflight.done():
            return False
        self._cancel_requested = True
        self._inflight.cancel()
        logger.info("Prediction request cancellation requested")
        return True

    def reset(self) -> None:
        """
        Clear selections and result.

        Raises:
            InvalidTransitionError: If a request is pending
        """
        if self._lifecycle is not RequestLifecycle.IDLE:
            self._transition(RequestLifecycle.IDLE)
        self._selection = SelectionState(venue_category=self.default_venue_category)
        self._result = None

    def get_stats(self) -> dict[str, Any]:
        """Get controller statistics."""
        return {
            "lifecycle": self._lifecycle.value,
            "submissions_total": self._submissions_total,
            "submissions_failed": self._submissions_failed,
            "submissions_ignored": self._submissions_ignored,
            "has_result": self._result is not None,
        }
