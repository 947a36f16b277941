"""
Prediction client contract and wire models.

A PredictionClient turns a PredictionRequest into a PredictionResponse or
raises TransportError / MalformedResponseError. The HTTP implementation
lives in http_client.py.
"""

import math
from abc import ABC, abstractmethod
from typing import Any

import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import MalformedResponseError


class PredictionRequest(BaseModel):
    """Request body sent to the prediction service."""

    model_config = ConfigDict(frozen=True)

    team1: str = Field(..., min_length=1)
    team2: str = Field(..., min_length=1)
    toss_winner: str = Field(..., min_length=1)
    venue: str = Field(..., min_length=1)


class PredictionResponse(BaseModel):
    """Successful answer from the prediction service."""

    model_config = ConfigDict(extra="ignore")

    team1: str | None = None
    team2: str | None = None
    win_probability: float = Field(..., ge=0.0, le=100.0, description="Percent, scoped to team1")

    @field_validator("team1", "team2", mode="before")
    @classmethod
    def drop_invalid_echo(cls, v: Any) -> str | None:
        # The team echo is informational; callers fall back to the request
        return v if isinstance(v, str) and v else None

    @field_validator("win_probability", mode="before")
    @classmethod
    def validate_numeric(cls, v: Any) -> float:
        # Strings and booleans would coerce silently; only real numbers count
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("win_probability must be a number")
        if not math.isfinite(v):
            raise ValueError("win_probability must be finite")
        return float(v)


def parse_prediction_payload(payload: Any) -> PredictionResponse:
    """
    Validate a decoded response body.

    Raises:
        MalformedResponseError: If the payload is not an object or lacks a
            numeric win_probability in [0, 100]
    """
    if not isinstance(payload, dict):
        raise MalformedResponseError(
            f"Expected a JSON object, got {type(payload).__name__}"
        )
    try:
        return PredictionResponse.model_validate(payload)
    except pydantic.ValidationError as e:
        detail = payload.get("error")
        message = f"Service error: {detail}" if isinstance(detail, str) else str(e)
        raise MalformedResponseError(message) from e


class PredictionClient(ABC):
    """
    Abstract prediction service client.

    Subclasses must implement:
    - predict(request) -> PredictionResponse
    """

    @abstractmethod
    async def predict(self, request: PredictionRequest) -> PredictionResponse:
        """
        Request a win probability for a match.

        Raises:
            TransportError: If the request could not be completed
            MalformedResponseError: If the response has no usable probability
        """
        pass

    async def close(self) -> None:
        """Release any held resources."""
        return None

    async def __aenter__(self) -> "PredictionClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()
