"""
HTTP prediction client.

POSTs the request as JSON to the prediction service and validates the
answer. Network failures, timeouts and non-2xx statuses become
TransportError; bodies without a usable probability become
MalformedResponseError.
"""

from typing import Any

import httpx

from config.settings import PredictorServiceSettings, get_settings
from src.utils.logging import get_logger

from .client import (
    PredictionClient,
    PredictionRequest,
    PredictionResponse,
    parse_prediction_payload,
)
from .errors import MalformedResponseError, PredictionTimeoutError, TransportError

logger = get_logger(__name__)


class HttpPredictionClient(PredictionClient):
    """Prediction client backed by httpx.AsyncClient."""

    def __init__(
        self,
        url: str | None = None,
        timeout_seconds: float | None = None,
        connect_timeout_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the HTTP client.

        Args:
            url: Prediction endpoint (defaults to PREDICTOR_URL)
            timeout_seconds: Overall request timeout
            connect_timeout_seconds: Connection timeout
            transport: Optional httpx transport (used for testing)
        """
        service: PredictorServiceSettings = get_settings().predictor

        self.url = url or service.url
        self.timeout_seconds = (
            service.request_timeout_seconds if timeout_seconds is None else timeout_seconds
        )
        self.connect_timeout_seconds = (
            service.connect_timeout_seconds
            if connect_timeout_seconds is None
            else connect_timeout_seconds
        )
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(
                    self.timeout_seconds, connect=self.connect_timeout_seconds
                ),
                headers={"Content-Type": "application/json"},
                transport=self._transport,
            )
        return self._client

    async def predict(self, request: PredictionRequest) -> PredictionResponse:
        """POST the request and return the validated response."""
        client = await self._get_client()
        body = request.model_dump()

        logger.debug("Sending prediction request", url=self.url, body=body)

        try:
            response = await client.post(self.url, json=body)
        except httpx.TimeoutException as e:
            logger.warning("Prediction request timed out", url=self.url, error=str(e))
            raise PredictionTimeoutError(
                f"No response from {self.url} within {self.timeout_seconds}s"
            ) from e
        except httpx.HTTPError as e:
            logger.warning("Prediction request failed", url=self.url, error=str(e))
            raise TransportError(str(e)) from e

        if response.is_error:
            logger.warning(
                "Prediction service error",
                url=self.url,
                status_code=response.status_code,
            )
            raise TransportError(
                f"Prediction service returned HTTP {response.status_code}"
            )

        payload = self._decode(response)
        logger.debug("Prediction response received", payload=payload)
        return parse_prediction_payload(payload)

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise MalformedResponseError("Response body is not valid JSON") from e

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None
