"""Roadmap generation client: validate inputs, call the backend endpoint, validate the roadmap."""

import asyncio
import time
from typing import Any, List, Optional, Union

import httpx

from career_roadmap.config import (
    GENERATE_ROADMAP_PATH,
    RATE_LIMIT_MAX_ATTEMPTS,
    RETRY_INITIAL_DELAY_SECONDS,
    ROADMAP_API_BASE_URL,
    ROADMAP_TIMEOUT_SECONDS,
)
from career_roadmap.errors import ValidationError
from career_roadmap.schemas.resume_analysis import ResumeAnalysis
from career_roadmap.schemas.roadmap import CareerRoadmap
from career_roadmap.schemas.target_company import (
    TargetCompany,
    normalize_target_companies,
    valid_target_companies,
)
from career_roadmap.services.http_client import post_json
from career_roadmap.utils.logger import get_logger

logger = get_logger(__name__)


def build_roadmap_request(
    resume_analysis: Union[ResumeAnalysis, dict, None],
    target_companies: List[Union[TargetCompany, dict, str]],
    candidate_id: Optional[str] = None,
) -> dict:
    """
    Validate generation inputs and build the request body.
    Raises ValidationError when the analysis is missing or no target company has a name and position.
    """
    if resume_analysis is None:
        raise ValidationError("Please upload your resume first to generate a roadmap.")
    companies = valid_target_companies(normalize_target_companies(target_companies))
    if not companies:
        raise ValidationError("Please provide at least one target company and position.")

    analysis = ResumeAnalysis.from_payload(resume_analysis)
    return {
        "resumeAnalysis": analysis.to_document(),
        "targetCompanies": [c.model_dump(exclude_none=True) for c in companies],
        "candidateId": candidate_id,
    }


async def generate_roadmap(
    resume_analysis: Union[ResumeAnalysis, dict, None],
    target_companies: List[Union[TargetCompany, dict, str]],
    candidate_id: Optional[str] = None,
    *,
    base_url: str = ROADMAP_API_BASE_URL,
    timeout: float = ROADMAP_TIMEOUT_SECONDS,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    max_attempts: int = RATE_LIMIT_MAX_ATTEMPTS,
    initial_delay: float = RETRY_INITIAL_DELAY_SECONDS,
) -> CareerRoadmap:
    """
    Request a roadmap for the candidate from the generation endpoint.

    Inputs are validated before any network call. The response must carry a non-empty
    id and a milestones array (possibly empty); milestones are migrated to the
    categorized shape. Callers delete the candidate's previous roadmaps first.
    """
    payload = build_roadmap_request(resume_analysis, target_companies, candidate_id)
    url = base_url.rstrip("/") + GENERATE_ROADMAP_PATH
    logger.info(
        "Generating roadmap: candidate=%s companies=%s",
        candidate_id or "-",
        len(payload["targetCompanies"]),
    )
    started = time.monotonic()
    data = await post_json(
        url,
        payload,
        timeout=timeout,
        transport=transport,
        max_attempts=max_attempts,
        initial_delay=initial_delay,
        label="Roadmap generation",
    )
    roadmap = CareerRoadmap.from_document(data)
    if candidate_id and not roadmap.candidate_id:
        roadmap = roadmap.model_copy(update={"candidate_id": candidate_id})
    logger.info(
        "Roadmap %s generated in %.2fs with %s milestones",
        roadmap.id,
        time.monotonic() - started,
        len(roadmap.milestones),
    )
    return roadmap


def run_roadmap_generation(
    resume_analysis: Union[ResumeAnalysis, dict, None],
    target_companies: List[Any],
    candidate_id: Optional[str] = None,
    **kwargs: Any,
) -> CareerRoadmap:
    """Generate a roadmap from a synchronous context on a private event loop."""
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(
            generate_roadmap(resume_analysis, target_companies, candidate_id, **kwargs)
        )
    finally:
        loop.close()
