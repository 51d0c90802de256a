"""Shared HTTP client wrapper for rate-provider calls."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import requests
from requests import Response, Session
from requests.exceptions import RequestException

logger = logging.getLogger(__name__)


class HTTPClientError(RuntimeError):
    """Raised when the HTTP client cannot satisfy a request."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class HTTPClientConfig:
    """Configuration for the shared HTTP client."""

    base_url: str
    timeout: float = 5.0


class HTTPClient:
    """Small HTTP client issuing a single GET per call; retrying is the caller's decision."""

    def __init__(
        self,
        config: HTTPClientConfig,
        session: Optional[Session] = None,
    ) -> None:
        self._config = config
        self._session = session or requests.Session()

    def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        url = self._build_url(path)
        try:
            response = self._session.get(url, params=params, timeout=self._config.timeout)
        except RequestException as exc:
            logger.warning("HTTP request to %s failed: %s", url, exc)
            raise HTTPClientError(f"Failed to fetch {url}: {exc}") from exc
        return self._handle_response(response)

    def close(self) -> None:
        self._session.close()

    def _build_url(self, path: str) -> str:
        base = self._config.base_url.rstrip("/")
        suffix = path.lstrip("/")
        return f"{base}/{suffix}"

    @staticmethod
    def _handle_response(response: Response) -> Dict[str, Any]:
        status = response.status_code
        if status >= 500:
            raise HTTPClientError(f"Server error {status}", status_code=status)
        if status >= 400:
            raise HTTPClientError(f"Client error {status}: {response.text}", status_code=status)
        if status < 200 or status >= 300:
            raise HTTPClientError(f"Unexpected status {status}", status_code=status)

        try:
            payload = response.json()
        except ValueError as exc:
            raise HTTPClientError("Invalid JSON response", status_code=status) from exc

        if not isinstance(payload, dict):
            raise HTTPClientError("Expected a JSON object response", status_code=status)
        return payload
