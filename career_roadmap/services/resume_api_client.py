"""Client for the backend resume analysis endpoint (POST /api/analyze-resume)."""

from typing import Optional

import httpx

from career_roadmap.config import (
    ANALYZE_RESUME_PATH,
    LLM_TIMEOUT_SECONDS,
    ROADMAP_API_BASE_URL,
)
from career_roadmap.errors import EmptyInputError, InvalidResponseError
from career_roadmap.schemas.resume_analysis import ResumeAnalysis
from career_roadmap.services.http_client import post_json
from career_roadmap.utils.logger import get_logger

logger = get_logger(__name__)


async def request_resume_analysis(
    resume_text: str,
    *,
    base_url: str = ROADMAP_API_BASE_URL,
    timeout: float = LLM_TIMEOUT_SECONDS,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ResumeAnalysis:
    """
    Ask the backend to analyze resume text.
    200 responses carry {"data": ResumeAnalysis} (older deployments use "analysis");
    400/405/500 surface as ApiError with the server's message.
    """
    if not resume_text or not resume_text.strip():
        raise EmptyInputError()

    url = base_url.rstrip("/") + ANALYZE_RESUME_PATH
    body = await post_json(
        url,
        {"resumeText": resume_text},
        timeout=timeout,
        transport=transport,
        label="Resume analysis endpoint",
    )
    if not isinstance(body, dict):
        raise InvalidResponseError("Resume analysis response is not a JSON object")
    payload = body.get("data", body.get("analysis"))
    if not isinstance(payload, dict):
        raise InvalidResponseError("Resume analysis response is missing its data")
    analysis = ResumeAnalysis.from_payload(payload)
    logger.info("Resume analysis endpoint returned %s skills", len(analysis.skills))
    return analysis
