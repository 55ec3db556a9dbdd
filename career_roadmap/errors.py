"""Error taxonomy for the analysis and roadmap clients.

Every error carries a single human-readable ``user_message`` suitable for
showing in the UI. Pydantic validation errors are converted to one of these
at the module boundary and never leak out.
"""

from typing import Any, Optional


class CareerRoadmapError(Exception):
    """Base class for all pipeline errors."""

    default_message = "Something went wrong. Please try again."

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)

    @property
    def user_message(self) -> str:
        return self.message


class EmptyInputError(CareerRoadmapError):
    """Resume text is empty or whitespace-only."""

    default_message = "Resume text is empty. Please upload a resume with readable content."


class ValidationError(CareerRoadmapError):
    """Required generation inputs are missing (analysis or target companies)."""

    default_message = "Missing required input for roadmap generation."


class ParseError(CareerRoadmapError):
    """LLM or endpoint output is not valid, recoverable JSON."""

    default_message = "Failed to parse AI response."

    def __init__(self, message: Optional[str] = None, raw: str = "") -> None:
        super().__init__(message)
        self.raw = raw


class InvalidResponseError(CareerRoadmapError):
    """Well-formed JSON that is missing required fields."""

    default_message = "Received an invalid response from the server."


class RequestTimeoutError(CareerRoadmapError, TimeoutError):
    """Client-side deadline exceeded; the in-flight request was cancelled."""

    default_message = "The request timed out. Please try again."


class RateLimitError(CareerRoadmapError):
    """HTTP 429 persisted after all retry attempts."""

    default_message = "Too many requests. Please wait a moment and try again."


class NetworkError(CareerRoadmapError):
    """Transport failure (connection refused, DNS, reset)."""

    default_message = "Network error. Please check your connection and try again."


class ApiError(CareerRoadmapError):
    """Non-429 HTTP failure from the LLM service or a backend endpoint."""

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details
