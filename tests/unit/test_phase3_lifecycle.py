"""
Phase 3 Tests: Lifecycle and Display

Tests for:
- Request lifecycle transitions
- Prediction result variants
- Winner / progress bar derivation
- Form view derivation
"""

import pytest

from src.predictor.catalog import VenueCategory
from src.predictor.display import (
    PENDING_LABEL,
    SUBMIT_LABEL,
    format_probability,
    predicted_winner,
    progress_fill,
    render_form,
    render_result,
)
from src.predictor.errors import PredictorError
from src.predictor.lifecycle import (
    InvalidTransitionError,
    PredictionResult,
    RequestLifecycle,
    check_transition,
)
from src.predictor.selection import SelectionState


class TestRequestLifecycle:
    """Test lifecycle transitions."""

    @pytest.mark.parametrize(
        "current,target",
        [
            (RequestLifecycle.IDLE, RequestLifecycle.PENDING),
            (RequestLifecycle.PENDING, RequestLifecycle.SUCCEEDED),
            (RequestLifecycle.PENDING, RequestLifecycle.FAILED),
            (RequestLifecycle.SUCCEEDED, RequestLifecycle.PENDING),
            (RequestLifecycle.FAILED, RequestLifecycle.PENDING),
        ],
    )
    def test_allowed_transitions(self, current, target):
        """Test transitions of the state machine."""
        check_transition(current, target)

    @pytest.mark.parametrize(
        "current,target",
        [
            (RequestLifecycle.IDLE, RequestLifecycle.SUCCEEDED),
            (RequestLifecycle.IDLE, RequestLifecycle.FAILED),
            (RequestLifecycle.PENDING, RequestLifecycle.PENDING),
            (RequestLifecycle.PENDING, RequestLifecycle.IDLE),
            (RequestLifecycle.FAILED, RequestLifecycle.SUCCEEDED),
        ],
    )
    def test_rejected_transitions(self, current, target):
        """Test that there is no direct recovery path."""
        with pytest.raises(InvalidTransitionError):
            check_transition(current, target)

    def test_invalid_transition_is_predictor_error(self):
        """Test that one except PredictorError clause covers misuse of the state machine."""
        with pytest.raises(PredictorError):
            check_transition(RequestLifecycle.PENDING, RequestLifecycle.IDLE)


class TestPredictionResult:
    """Test PredictionResult."""

    def test_success(self):
        """Test a successful result."""
        result = PredictionResult.success("India", "Australia", 73.4)

        assert result.is_success is True
        assert result.error_message is None
        assert result.to_dict() == {
            "team1": "India",
            "team2": "Australia",
            "win_probability": 73.4,
        }

    def test_failure(self):
        """Test a failed result."""
        result = PredictionResult.failure("India", "Australia", "Failed")

        assert result.is_success is False
        assert result.to_dict() == {"error": "Failed"}

    def test_exactly_one_variant(self):
        """Test that both or neither variant is rejected."""
        with pytest.raises(ValueError):
            PredictionResult(team1="India", team2="Australia")
        with pytest.raises(ValueError):
            PredictionResult(
                team1="India",
                team2="Australia",
                win_probability=50.0,
                error_message="Failed",
            )

    def test_zero_probability_is_success(self):
        """Test that 0.0 counts as a populated probability."""
        assert PredictionResult.success("India", "Australia", 0).is_success is True


class TestDisplay:
    """Test display derivation."""

    @pytest.mark.parametrize(
        "probability,winner",
        [
            (73.4, "India"),
            (50.0, "Australia"),
            (50.01, "India"),
            (12.0, "Australia"),
        ],
    )
    def test_predicted_winner(self, probability, winner):
        """Test the winner label with the tie going to team2."""
        assert predicted_winner(probability, "India", "Australia") == winner

    @pytest.mark.parametrize("probability", [0, 64.5, 100])
    def test_progress_fill(self, probability):
        """Test the progress bar width follows the probability."""
        assert progress_fill(probability) == probability

    def test_format_probability(self):
        """Test the two-decimal label."""
        assert format_probability(64.5) == "64.50%"
        assert format_probability(0) == "0.00%"

    def test_render_result_success(self):
        """Test rendering a successful result."""
        view = render_result(PredictionResult.success("India", "Australia", 64.5))

        assert view.is_error is False
        assert view.winner == "India"
        assert view.fill_width == 64.5
        assert view.label == "64.50%"

    def test_render_result_error(self):
        """Test rendering a failure."""
        view = render_result(PredictionResult.failure("India", "Australia", "Failed"))

        assert view.is_error is True
        assert view.to_dict() == {"error": "Failed"}

    def test_render_result_none(self):
        """Test that nothing renders without a result."""
        assert render_result(None) is None


class TestFormView:
    """Test form view derivation."""

    def test_empty_form(self):
        """Test options for an empty form."""
        view = render_form(SelectionState(), RequestLifecycle.IDLE)

        assert len(view.team1_options) == 5
        assert len(view.team2_options) == 5
        assert view.show_toss is False
        assert view.venue_options[0] == "India"
        assert view.submit_label == SUBMIT_LABEL
        assert view.submit_enabled is True

    def test_team_exclusion(self):
        """Test each team selector hides the other's pick."""
        view = render_form(SelectionState(team1="India", team2="England"), RequestLifecycle.IDLE)

        assert "India" not in view.team2_options
        assert "England" not in view.team1_options
        assert view.toss_options == ["India", "England"]

    def test_city_venues(self):
        """Test venue options follow the category."""
        view = render_form(
            SelectionState(venue_category=VenueCategory.CITIES),
            RequestLifecycle.IDLE,
        )

        assert view.venue_options == ["Mumbai", "Sydney", "London", "Lahore", "Auckland"]

    def test_pending_disables_submit(self):
        """Test the submit button while a request is in flight."""
        view = render_form(SelectionState(), RequestLifecycle.PENDING)

        assert view.submit_label == PENDING_LABEL
        assert view.submit_enabled is False
