"""LLM-based extraction of a structured resume analysis from raw resume text."""

import asyncio
import time
from typing import Any, Optional

import openai
from openai import AsyncOpenAI

from career_roadmap.analysis.skill_extractor import extract_skills_from_text
from career_roadmap.config import (
    LLM_TEMPERATURE,
    LLM_TIMEOUT_SECONDS,
    MODEL_NAME,
    OPENAI_API_KEY,
    RATE_LIMIT_MAX_ATTEMPTS,
    RESUME_MAX_CHARS,
    RETRY_INITIAL_DELAY_SECONDS,
)
from career_roadmap.errors import (
    ApiError,
    EmptyInputError,
    NetworkError,
    ParseError,
    RequestTimeoutError,
)
from career_roadmap.schemas.resume_analysis import ResumeAnalysis
from career_roadmap.utils.helpers import parse_llm_json, truncate_text
from career_roadmap.utils.logger import get_logger
from career_roadmap.utils.retry import retry_on_rate_limit

logger = get_logger(__name__)

RESUME_ANALYSIS_SYSTEM_PROMPT = """You are an AI resume analysis system.
Extract structured career data from the resume the user provides.
Respond with a single JSON object only: no markdown, no code block, no commentary.
If a field cannot be determined, use an empty array."""

RESUME_ANALYSIS_SCHEMA = """{
  "skills": ["string"],
  "skillLevels": [{"skill": "string", "level": 1-10, "evidence": "string"}],
  "experience": ["string"],
  "education": ["string"],
  "certifications": ["string"],
  "strengths": ["string"],
  "weaknesses": ["string"],
  "recommendations": ["string"]
}"""


def build_user_prompt(resume_text: str) -> str:
    return (
        "Analyze the following resume.\n\n"
        f"Resume:\n{resume_text}\n\n"
        f"Return JSON matching exactly this schema:\n{RESUME_ANALYSIS_SCHEMA}\n"
        "- skills: technical and soft skills.\n"
        "- skillLevels: proficiency 1-10 per key skill with the resume evidence for it.\n"
        "- experience: one entry per role (title, company, dates, key achievements).\n"
        "- education: one entry per degree or institution.\n"
        "- strengths / weaknesses: short phrases about the candidate's profile.\n"
        "- recommendations: concrete next steps to improve the candidate's career prospects."
    )


def _is_rate_limited(error: Exception) -> bool:
    return isinstance(error, openai.RateLimitError)


async def _create_completion(client: Any, user_prompt: str, timeout: float) -> Any:
    """One chat completion bounded by timeout; the request is cancelled when the deadline passes."""
    try:
        return await asyncio.wait_for(
            client.chat.completions.create(
                model=MODEL_NAME,
                messages=[
                    {"role": "system", "content": RESUME_ANALYSIS_SYSTEM_PROMPT},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=LLM_TEMPERATURE,
            ),
            timeout=timeout,
        )
    except asyncio.TimeoutError as e:
        raise RequestTimeoutError(f"Resume analysis timed out after {timeout:g}s") from e


async def analyze_resume(
    resume_text: str,
    client: Optional[Any] = None,
    *,
    max_chars: int = RESUME_MAX_CHARS,
    timeout: float = LLM_TIMEOUT_SECONDS,
    max_attempts: int = RATE_LIMIT_MAX_ATTEMPTS,
    initial_delay: float = RETRY_INITIAL_DELAY_SECONDS,
) -> ResumeAnalysis:
    """
    Analyze raw resume text with the LLM and return a fully populated ResumeAnalysis.

    The text is truncated to max_chars before sending. HTTP 429 responses are retried
    with exponential backoff; every other failure surfaces immediately as one of the
    errors in career_roadmap.errors.
    """
    if not resume_text or not resume_text.strip():
        raise EmptyInputError()

    text = resume_text.strip()
    content = truncate_text(text, max_chars)
    if len(content) != len(text):
        logger.warning(
            "Resume text truncated for analysis: original=%s processed=%s",
            len(text),
            len(content),
        )

    owns_client = client is None
    if owns_client:
        if not OPENAI_API_KEY:
            logger.error("OPENAI_API_KEY is not set; cannot run resume analysis")
            raise ApiError("Resume analysis is not configured (missing OPENAI_API_KEY)")
        # Retries are handled here so that only 429s are retried
        client = AsyncOpenAI(api_key=OPENAI_API_KEY, max_retries=0)
    elif callable(getattr(client, "with_options", None)):
        client = client.with_options(max_retries=0)

    user_prompt = build_user_prompt(content)
    started = time.monotonic()
    try:
        response = await retry_on_rate_limit(
            lambda: _create_completion(client, user_prompt, timeout),
            is_rate_limited=_is_rate_limited,
            max_attempts=max_attempts,
            initial_delay=initial_delay,
            label="Resume analysis",
        )
    except openai.APITimeoutError as e:
        raise RequestTimeoutError("Resume analysis request timed out") from e
    except openai.APIConnectionError as e:
        raise NetworkError(f"Could not reach the AI service: {e}") from e
    except openai.APIStatusError as e:
        logger.error("Resume analysis failed with HTTP %s: %s", e.status_code, e.message)
        raise ApiError(e.message or "Resume analysis failed", status_code=e.status_code) from e
    finally:
        if owns_client:
            await client.close()

    logger.info("Resume analysis LLM call finished in %.2fs", time.monotonic() - started)

    choice = response.choices[0] if response.choices else None
    if not choice or not choice.message or not choice.message.content:
        raise ParseError("AI response was empty")
    parsed = parse_llm_json(choice.message.content)

    analysis = ResumeAnalysis.from_payload(parsed)
    if not analysis.extracted_skills:
        analysis.extracted_skills = extract_skills_from_text(content)
    logger.info(
        "Resume analysis parsed: skills=%s experience=%s education=%s",
        len(analysis.skills),
        len(analysis.experience),
        len(analysis.education),
    )
    return analysis


def run_resume_analysis(resume_text: str, **kwargs: Any) -> ResumeAnalysis:
    """
    Analyze resume text from a synchronous context.
    Runs analyze_resume on a private event loop; errors propagate unchanged.
    """
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        return loop.run_until_complete(analyze_resume(resume_text, **kwargs))
    finally:
        loop.close()
