"""JSON POST helper for the backend endpoints: status mapping, 429 retry and a wall-clock deadline."""

import asyncio
from typing import Any, Optional

import httpx

from career_roadmap.config import RATE_LIMIT_MAX_ATTEMPTS, RETRY_INITIAL_DELAY_SECONDS
from career_roadmap.errors import (
    ApiError,
    NetworkError,
    ParseError,
    RateLimitError,
    RequestTimeoutError,
)
from career_roadmap.utils.logger import get_logger
from career_roadmap.utils.retry import retry_on_rate_limit

logger = get_logger(__name__)

GENERIC_STATUS_MESSAGES = {
    400: "The request was invalid. Please check your input and try again.",
    401: "You need to sign in again to continue.",
    403: "You do not have permission to perform this action.",
    404: "The requested service could not be found.",
    405: "This endpoint only supports POST requests.",
    408: "The server took too long to respond. Please try again.",
    413: "The request is too large. Try a shorter resume.",
    415: "Unsupported request format.",
    429: "Too many requests. Please wait a moment and try again.",
    500: "The server encountered an error. Please try again later.",
    502: "The server is temporarily unreachable. Please try again later.",
    503: "The service is temporarily unavailable. Please try again later.",
    504: "The server took too long to respond. Please try again later.",
}


def error_message_for_status(status_code: int) -> str:
    """Generic human-readable message for an HTTP status code."""
    if status_code in GENERIC_STATUS_MESSAGES:
        return GENERIC_STATUS_MESSAGES[status_code]
    if status_code >= 500:
        return GENERIC_STATUS_MESSAGES[500]
    return f"Request failed with status {status_code}."


def _error_body(response: httpx.Response) -> tuple[Optional[str], Any]:
    """(message, details) from a structured error body {error|message, details?}, if any."""
    try:
        body = response.json()
    except ValueError:
        return None, None
    if not isinstance(body, dict):
        return None, None
    message = body.get("message") or body.get("error")
    if not isinstance(message, str) or not message.strip():
        message = None
    return message, body.get("details")


async def _post_once(client: httpx.AsyncClient, url: str, payload: dict, label: str) -> Any:
    try:
        response = await client.post(url, json=payload)
    except httpx.TimeoutException as e:
        raise RequestTimeoutError(f"{label} request timed out") from e
    except httpx.TransportError as e:
        logger.warning("%s transport error for %s: %s", label, url, e)
        raise NetworkError() from e

    if response.status_code == 429:
        message, _ = _error_body(response)
        raise RateLimitError(message)
    if not response.is_success:
        message, details = _error_body(response)
        logger.error("%s failed: HTTP %s %s", label, response.status_code, message or "")
        raise ApiError(
            message or error_message_for_status(response.status_code),
            status_code=response.status_code,
            details=details,
        )
    try:
        return response.json()
    except ValueError as e:
        raise ParseError(f"{label} returned a body that is not JSON", raw=response.text[:200]) from e


async def post_json(
    url: str,
    payload: dict,
    *,
    timeout: float,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    max_attempts: int = RATE_LIMIT_MAX_ATTEMPTS,
    initial_delay: float = RETRY_INITIAL_DELAY_SECONDS,
    label: str = "Request",
) -> Any:
    """
    POST payload as JSON and return the decoded JSON body.
    The whole call, retries included, must finish within timeout seconds; when the deadline
    passes the in-flight request is cancelled and RequestTimeoutError is raised.
    """

    async def run() -> Any:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            return await retry_on_rate_limit(
                lambda: _post_once(client, url, payload, label),
                is_rate_limited=lambda e: isinstance(e, RateLimitError),
                max_attempts=max_attempts,
                initial_delay=initial_delay,
                label=label,
            )

    try:
        return await asyncio.wait_for(run(), timeout=timeout)
    except asyncio.TimeoutError as e:
        if isinstance(e, RequestTimeoutError):
            raise
        raise RequestTimeoutError(f"{label} timed out after {timeout:g}s") from e
