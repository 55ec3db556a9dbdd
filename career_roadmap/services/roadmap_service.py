"""Candidate/roadmap persistence: migrate-on-first-read, at-most-one roadmap per candidate."""

from typing import Any, List, Optional

from career_roadmap.config import ROADMAPS_COLLECTION, USERS_COLLECTION
from career_roadmap.schemas.resume_analysis import ResumeAnalysis
from career_roadmap.schemas.roadmap import CareerRoadmap
from career_roadmap.schemas.target_company import TargetCompany, normalize_target_companies
from career_roadmap.services.document_store import DocumentStore
from career_roadmap.services.roadmap_client import build_roadmap_request, generate_roadmap
from career_roadmap.utils.logger import get_logger
from career_roadmap.utils.timestamps import to_datetime, utcnow

logger = get_logger(__name__)


def load_resume_analysis(store: DocumentStore, candidate_id: str) -> Optional[ResumeAnalysis]:
    """The analysis embedded in the candidate document, coerced; None if never analyzed."""
    user = store.get(USERS_COLLECTION, candidate_id) or {}
    raw = user.get("resumeAnalysis")
    if raw is None:
        return None
    return ResumeAnalysis.from_payload(raw)


def save_resume_analysis(store: DocumentStore, candidate_id: str, analysis: ResumeAnalysis) -> None:
    """Overwrite the candidate's embedded analysis wholesale."""
    store.set(
        USERS_COLLECTION,
        candidate_id,
        {"resumeAnalysis": analysis.to_document(), "updatedAt": utcnow()},
        merge=True,
    )


def load_target_companies(store: DocumentStore, candidate_id: str) -> List[TargetCompany]:
    """
    Target companies as objects. Legacy bare-string entries are upgraded and the
    upgraded list is written back so the conversion happens once.
    """
    user = store.get(USERS_COLLECTION, candidate_id) or {}
    raw = user.get("targetCompanies")
    companies = normalize_target_companies(raw)
    if isinstance(raw, list) and any(isinstance(item, str) for item in raw):
        save_target_companies(store, candidate_id, companies)
        logger.info("Upgraded %s legacy target companies for %s", len(companies), candidate_id)
    return companies


def save_target_companies(store: DocumentStore, candidate_id: str, companies: List[TargetCompany]) -> None:
    store.set(
        USERS_COLLECTION,
        candidate_id,
        {"targetCompanies": [c.model_dump(exclude_none=True) for c in companies]},
        merge=True,
    )


def _created_sort_key(item: tuple) -> float:
    created = to_datetime(item[1].get("createdAt"))
    return created.timestamp() if created else 0.0


def load_roadmap(store: DocumentStore, candidate_id: str) -> Optional[CareerRoadmap]:
    """
    The candidate's newest roadmap with milestones in the categorized shape.
    When the stored document differs from its migrated form it is written back,
    so later reads find it already migrated.
    """
    docs = store.query(ROADMAPS_COLLECTION, "candidateId", candidate_id)
    if not docs:
        return None
    if len(docs) > 1:
        logger.warning("Candidate %s has %s roadmaps; using the newest", candidate_id, len(docs))
    doc_id, doc = max(docs, key=_created_sort_key)

    data: dict[str, Any] = dict(doc)
    data["id"] = doc.get("id") or doc_id
    if not isinstance(data.get("milestones"), list):
        data["milestones"] = []
    roadmap = CareerRoadmap.from_document(data)

    migrated = roadmap.to_document()
    if migrated != doc:
        store.set(ROADMAPS_COLLECTION, doc_id, migrated)
        logger.info("Persisted migrated roadmap %s (%s milestones)", doc_id, len(roadmap.milestones))
    return roadmap


def save_roadmap(store: DocumentStore, roadmap: CareerRoadmap) -> None:
    store.set(ROADMAPS_COLLECTION, roadmap.id, roadmap.to_document())


def delete_roadmaps(store: DocumentStore, candidate_id: str) -> int:
    """Delete every roadmap belonging to the candidate; returns how many were deleted."""
    docs = store.query(ROADMAPS_COLLECTION, "candidateId", candidate_id)
    for doc_id, _ in docs:
        store.delete(ROADMAPS_COLLECTION, doc_id)
    if docs:
        logger.info("Deleted %s roadmaps for %s", len(docs), candidate_id)
    return len(docs)


async def regenerate_roadmap(store: DocumentStore, candidate_id: str, **client_kwargs: Any) -> CareerRoadmap:
    """
    Replace the candidate's roadmap with a newly generated one.
    Inputs are validated first so a doomed request does not delete the current roadmap.
    """
    analysis = load_resume_analysis(store, candidate_id)
    companies = load_target_companies(store, candidate_id)
    build_roadmap_request(analysis, companies, candidate_id)

    delete_roadmaps(store, candidate_id)
    roadmap = await generate_roadmap(analysis, companies, candidate_id, **client_kwargs)
    if roadmap.candidate_id != candidate_id:
        roadmap = roadmap.model_copy(update={"candidate_id": candidate_id})
    save_roadmap(store, roadmap)
    return roadmap
