"""
Shared test fixtures and configuration.
"""

import asyncio
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from src.predictor.client import PredictionClient, PredictionRequest, PredictionResponse
from src.predictor.controller import PredictionFormController

# ============================================================================
# Stub Clients
# ============================================================================


class ScriptedClient(PredictionClient):
    """
    Prediction client with caller-controlled timing.

    Each predict() call waits on its own future; tests resolve them in any
    order with resolve() / fail().
    """

    def __init__(self) -> None:
        self.requests: list[PredictionRequest] = []
        self.pending: list[asyncio.Future] = []

    async def predict(self, request: PredictionRequest) -> PredictionResponse:
        self.requests.append(request)
        future = asyncio.get_running_loop().create_future()
        self.pending.append(future)
        return await future

    def resolve(self, index: int, win_probability: float) -> None:
        request = self.requests[index]
        self.pending[index].set_result(
            PredictionResponse(
                team1=request.team1,
                team2=request.team2,
                win_probability=win_probability,
            )
        )

    def fail(self, index: int, error: Exception) -> None:
        self.pending[index].set_exception(error)


class StaticClient(PredictionClient):
    """Prediction client that answers immediately with a fixed outcome."""

    def __init__(self, win_probability: float = 73.4, error: Exception | None = None) -> None:
        self.win_probability = win_probability
        self.error = error
        self.calls = 0

    async def predict(self, request: PredictionRequest) -> PredictionResponse:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return PredictionResponse(
            team1=request.team1,
            team2=request.team2,
            win_probability=self.win_probability,
        )


# ============================================================================
# Controller Fixtures
# ============================================================================


@pytest.fixture
def scripted_client() -> ScriptedClient:
    return ScriptedClient()


@pytest.fixture
def static_client() -> StaticClient:
    return StaticClient()


def fill_form(controller: PredictionFormController) -> PredictionFormController:
    """Select India vs Australia, India won the toss, playing in Mumbai."""
    controller.set_team1("India")
    controller.set_team2("Australia")
    controller.set_toss_winner("India")
    controller.set_venue_category("Cities")
    controller.set_venue("Mumbai")
    return controller


@pytest.fixture
def form_filler() -> Callable[[PredictionFormController], PredictionFormController]:
    return fill_form


@pytest.fixture
def make_static_client() -> type[StaticClient]:
    return StaticClient


@pytest.fixture
def controller(static_client: StaticClient) -> PredictionFormController:
    """Controller with an empty form and an immediate client."""
    return PredictionFormController(static_client)


@pytest.fixture
def filled_controller(static_client: StaticClient) -> PredictionFormController:
    """Controller with a complete form and an immediate client."""
    return fill_form(PredictionFormController(static_client))


@pytest.fixture
def scripted_controller(scripted_client: ScriptedClient) -> PredictionFormController:
    """Controller with a complete form and a caller-controlled client."""
    return fill_form(
        PredictionFormController(
            scripted_client,
            request_timeout_seconds=5.0,
        )
    )


# ============================================================================
# HTTP Fixtures
# ============================================================================


@pytest.fixture
def mock_transport() -> Callable[..., httpx.MockTransport]:
    """Build an httpx MockTransport from a handler."""

    def factory(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.MockTransport:
        return httpx.MockTransport(handler)

    return factory


@pytest.fixture
def json_response() -> Callable[..., Callable[[httpx.Request], httpx.Response]]:
    """Handler factory returning a fixed JSON body and status code."""

    def factory(body: Any, status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(status_code, json=body)

        return handler

    return factory
