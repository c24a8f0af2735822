"""HTTP client for the shortening backend."""

import logging
from typing import List, Optional

import httpx
from pydantic import ValidationError as SchemaError

from .config import ClientConfig
from .errors import SemanticRejection, TransientError
from .models import HistoryEntry, SubmissionRequest
from .schemas import ErrorResponse, HistoryResponse, ShortenRequest, ShortenResponse
from .common.url_builder import build_history_url


class ShortlyAPIClient:
    """Async client for the shorten and history endpoints.

    Transport outcomes are mapped onto the client error taxonomy: HTTP 422
    raises ``SemanticRejection``; every other failure (network error,
    timeout, unexpected status, malformed body) raises ``TransientError``.
    """

    def __init__(
        self,
        config: ClientConfig,
        http_client: Optional[httpx.AsyncClient] = None,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize API client.

        Args:
            config: Client configuration
            http_client: Optional pre-built httpx client (owned by the caller)
            logger: Optional logger
        """
        self.config = config
        self.logger = logger or logging.getLogger(__name__)
        self._owns_client = http_client is None
        self.http = http_client or httpx.AsyncClient(timeout=config.request_timeout)

    async def shorten(self, request: SubmissionRequest) -> str:
        """Send one shorten request.

        Args:
            request: The submission to send

        Returns:
            Short-url fragment returned by the backend

        Raises:
            SemanticRejection: If the backend answers 422
            TransientError: On any other failure
        """
        self.logger.debug(f"POST {self.config.shorten_url} for {request.source_url}")
        payload = ShortenRequest(**request.to_payload()).model_dump()
        try:
            response = await self.http.post(self.config.shorten_url, json=payload)
        except httpx.HTTPError as e:
            raise TransientError(f"Shorten request failed: {e!r}") from e

        if response.status_code == 422:
            raise SemanticRejection(self._rejection_reason(response))

        if not response.is_success:
            raise TransientError(
                f"Shorten request returned HTTP {response.status_code}",
                status_code=response.status_code,
            )

        try:
            body = ShortenResponse.model_validate(response.json())
        except (ValueError, SchemaError) as e:
            raise TransientError(f"Malformed shorten response: {e}", status_code=response.status_code) from e

        return body.result_short_url

    async def fetch_history(self, email: str) -> List[HistoryEntry]:
        """Fetch the history of one user.

        Args:
            email: Email of the signed-in user

        Returns:
            History entries in the order the backend returned them

        Raises:
            TransientError: On any failure
        """
        url = build_history_url(self.config.history_url, email)
        self.logger.debug(f"GET {url}")
        try:
            response = await self.http.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransientError(
                f"History request returned HTTP {e.response.status_code}",
                status_code=e.response.status_code,
            ) from e
        except httpx.HTTPError as e:
            raise TransientError(f"History request failed: {e!r}") from e

        try:
            body = HistoryResponse.model_validate(response.json())
        except (ValueError, SchemaError) as e:
            raise TransientError(f"Malformed history response: {e}", status_code=response.status_code) from e

        return [HistoryEntry(original_url=u.original_url, short_url=u.short_url) for u in body.user_urls]

    def _rejection_reason(self, response: httpx.Response) -> str:
        try:
            reason = ErrorResponse.model_validate(response.json()).error
        except (ValueError, SchemaError):
            reason = None
        return reason if reason is not None else response.text

    async def close(self) -> None:
        """Close the underlying HTTP client if this instance created it."""
        if self._owns_client:
            await self.http.aclose()
