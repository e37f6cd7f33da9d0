"""Transport layer for the AI command backend.

Defines the CommandTransport interface and implementations:
- HttpCommandTransport: posts commands to the backend over HTTP
- StaticCommandTransport: returns canned responses (tests, offline use)
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from typing import Any, Callable

import httpx
from loguru import logger

from ..widget.serializers import build_command_payload
from .models import CommandRequest, CommandResponse, parse_command_response

DEFAULT_BASE_URL = "http://localhost:8000"
EXECUTE_PATH = "/api/excel/execute"
DEFAULT_TIMEOUT = 60


# --- Exceptions ---


class CommandTransportError(Exception):
    """Base exception for command transport errors."""


class CommandTimeoutError(CommandTransportError):
    """Raised when the backend does not answer in time."""


class CommandHTTPError(CommandTransportError):
    """Raised when the backend answers with a non-2xx status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class CommandDecodeError(CommandTransportError):
    """Raised when the backend response is not a JSON object."""


# --- Abstract Transport ---


class CommandTransport(ABC):
    """Sends a command request and returns the parsed response."""

    @abstractmethod
    async def execute(self, request: CommandRequest) -> CommandResponse:
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections."""
        ...


# --- HTTP Transport ---


class HttpCommandTransport(CommandTransport):
    """Production transport posting JSON to ``<base_url>/api/excel/execute``."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            base_url: Backend root URL.
            timeout: Request timeout in seconds.
            client: Optional preconfigured client (e.g. with a mock transport).
        """
        self._url = base_url.rstrip("/") + EXECUTE_PATH
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    async def execute(self, request: CommandRequest) -> CommandResponse:
        payload = build_command_payload(request)
        logger.info(
            "Executing command on {} cell(s) {}",
            len(request.selected_cells),
            ", ".join(request.selected_ranges),
        )
        try:
            response = await self._client.post(self._url, json=payload)
        except httpx.TimeoutException as e:
            raise CommandTimeoutError(f"Command timed out: {e}") from e
        except httpx.HTTPError as e:
            raise CommandTransportError(f"Command request failed: {e}") from e

        if response.status_code >= 400:
            raise CommandHTTPError(
                f"Backend returned {response.status_code}: {response.text[:200]}",
                response.status_code,
            )
        try:
            data = response.json()
        except json.JSONDecodeError as e:
            raise CommandDecodeError(f"Backend returned invalid JSON: {e}") from e
        try:
            return parse_command_response(data)
        except TypeError as e:
            raise CommandDecodeError(str(e)) from e

    async def close(self) -> None:
        await self._client.aclose()


# --- Static Transport ---


class StaticCommandTransport(CommandTransport):
    """Test transport answering every request with ``responder(payload)``."""

    def __init__(self, responder: Callable[[dict[str, Any]], dict[str, Any]]) -> None:
        self._responder = responder
        self.requests: list[dict[str, Any]] = []

    async def execute(self, request: CommandRequest) -> CommandResponse:
        payload = build_command_payload(request)
        self.requests.append(payload)
        return parse_command_response(self._responder(payload))

    async def close(self) -> None:
        pass
