"""
End-to-end pipeline: resume text -> analysis -> stored profile -> regenerated roadmap.
Safe to call from synchronous code; the async clients run on a private event loop.
"""

import asyncio
from typing import Any, List, Optional

from career_roadmap.analysis.resume_analyzer import analyze_resume
from career_roadmap.schemas.roadmap import CareerRoadmap
from career_roadmap.schemas.target_company import TargetCompany, normalize_target_companies
from career_roadmap.services.document_store import DocumentStore
from career_roadmap.services.roadmap_service import (
    regenerate_roadmap,
    save_resume_analysis,
    save_target_companies,
)
from career_roadmap.utils.logger import get_logger

logger = get_logger(__name__)


async def _run(
    resume_text: str,
    target_companies: Optional[List[Any]],
    candidate_id: str,
    store: DocumentStore,
    llm_client: Optional[Any],
    roadmap_kwargs: dict,
) -> CareerRoadmap:
    analysis = await analyze_resume(resume_text, llm_client)
    save_resume_analysis(store, candidate_id, analysis)
    if target_companies is not None:
        companies: List[TargetCompany] = normalize_target_companies(target_companies)
        save_target_companies(store, candidate_id, companies)
    return await regenerate_roadmap(store, candidate_id, **roadmap_kwargs)


def run_roadmap_pipeline(
    resume_text: str,
    target_companies: Optional[List[Any]],
    candidate_id: str,
    store: DocumentStore,
    llm_client: Optional[Any] = None,
    **roadmap_kwargs: Any,
) -> CareerRoadmap:
    """
    Analyze the resume, store the analysis (and target companies, if given) on the
    candidate, then replace the candidate's roadmap with a freshly generated one.
    target_companies=None keeps the companies already stored on the candidate.
    """
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    try:
        roadmap = loop.run_until_complete(
            _run(resume_text, target_companies, candidate_id, store, llm_client, roadmap_kwargs)
        )
    finally:
        loop.close()
    logger.info("Pipeline finished for %s: roadmap=%s", candidate_id, roadmap.id)
    return roadmap
