import asyncio

import httpx
import pytest

from career_roadmap.config import ROADMAPS_COLLECTION, USERS_COLLECTION
from career_roadmap.errors import ValidationError
from career_roadmap.pipeline import run_roadmap_pipeline
from career_roadmap.schemas.resume_analysis import ResumeAnalysis
from career_roadmap.schemas.target_company import TargetCompany
from career_roadmap.services.roadmap_service import (
    delete_roadmaps,
    load_resume_analysis,
    load_roadmap,
    load_target_companies,
    regenerate_roadmap,
    save_resume_analysis,
    save_target_companies,
)
from tests.fakes import VALID_ANALYSIS, RecordingHandler, make_llm_client

LEGACY_ROADMAP = {
    "candidateId": "user-1",
    "createdAt": {"seconds": 1700000000, "nanoseconds": 0},
    "milestones": [
        {"id": "m1", "title": "Build REST API with Node.js", "skillType": "technical"},
        {"title": "Lead team standup meetings", "skills": ["Leadership"]},
    ],
}

GENERATED = {
    "id": "roadmap-new",
    "milestones": [{"id": "g1", "title": "Kubernetes in production", "priority": "high"}],
}


def _client_kwargs(handler):
    return {"base_url": "http://roadmap.test", "transport": handler.transport(), "initial_delay": 0}


def _seed_candidate(store, companies=None):
    save_resume_analysis(store, "user-1", ResumeAnalysis.from_payload(VALID_ANALYSIS))
    save_target_companies(
        store, "user-1", companies or [TargetCompany(name="Stripe", position="Backend Engineer")]
    )


@pytest.mark.unit
def test_load_roadmap_migrates_and_persists_once(store):
    store.set(ROADMAPS_COLLECTION, "r-old", LEGACY_ROADMAP)
    store.writes.clear()

    roadmap = load_roadmap(store, "user-1")
    assert roadmap.id == "r-old"
    assert [m.category for m in roadmap.milestones] == ["technical", "soft"]
    assert store.writes == [(ROADMAPS_COLLECTION, "r-old")]

    stored = store.get(ROADMAPS_COLLECTION, "r-old")
    assert all("category" in m and "attributes" in m for m in stored["milestones"])

    again = load_roadmap(store, "user-1")
    assert again == roadmap
    assert store.writes == [(ROADMAPS_COLLECTION, "r-old")]


@pytest.mark.unit
def test_load_roadmap_without_milestones_field(store):
    store.set(ROADMAPS_COLLECTION, "r-empty", {"candidateId": "user-1"})
    roadmap = load_roadmap(store, "user-1")
    assert roadmap.milestones == []
    assert load_roadmap(store, "someone-else") is None


@pytest.mark.unit
def test_load_roadmap_picks_newest(store):
    store.set(ROADMAPS_COLLECTION, "older", {"candidateId": "user-1", "milestones": [], "createdAt": "2023-01-01T00:00:00Z"})
    store.set(ROADMAPS_COLLECTION, "newer", {"candidateId": "user-1", "milestones": [], "createdAt": "2024-01-01T00:00:00Z"})
    assert load_roadmap(store, "user-1").id == "newer"


@pytest.mark.unit
def test_legacy_company_strings_are_upgraded_and_written_back(store):
    store.set(USERS_COLLECTION, "user-1", {"targetCompanies": ["Stripe", {"name": "Google", "position": "SRE"}]})
    store.writes.clear()

    companies = load_target_companies(store, "user-1")
    assert [(c.name, c.position) for c in companies] == [("Stripe", ""), ("Google", "SRE")]
    assert store.get(USERS_COLLECTION, "user-1")["targetCompanies"][0] == {"name": "Stripe", "position": ""}

    load_target_companies(store, "user-1")
    assert len(store.writes) == 1


@pytest.mark.unit
def test_analysis_round_trip_through_store(store):
    assert load_resume_analysis(store, "user-1") is None
    save_resume_analysis(store, "user-1", ResumeAnalysis.from_payload(VALID_ANALYSIS))
    loaded = load_resume_analysis(store, "user-1")
    assert loaded.skills == VALID_ANALYSIS["skills"]
    assert "updatedAt" in store.get(USERS_COLLECTION, "user-1")


@pytest.mark.unit
def test_regenerate_replaces_existing_roadmaps(store):
    _seed_candidate(store)
    store.set(ROADMAPS_COLLECTION, "r-old", LEGACY_ROADMAP)
    store.set(ROADMAPS_COLLECTION, "r-older", dict(LEGACY_ROADMAP))
    handler = RecordingHandler(httpx.Response(200, json=GENERATED))

    roadmap = asyncio.run(regenerate_roadmap(store, "user-1", **_client_kwargs(handler)))

    assert roadmap.id == "roadmap-new"
    assert roadmap.candidate_id == "user-1"
    assert store.size(ROADMAPS_COLLECTION) == 1
    assert load_roadmap(store, "user-1").id == "roadmap-new"
    assert handler.bodies[0]["targetCompanies"] == [{"name": "Stripe", "position": "Backend Engineer"}]


@pytest.mark.unit
def test_regenerate_without_companies_keeps_current_roadmap(store):
    _seed_candidate(store, companies=[TargetCompany(name="Stripe")])
    store.set(ROADMAPS_COLLECTION, "r-old", LEGACY_ROADMAP)
    handler = RecordingHandler(httpx.Response(200, json=GENERATED))

    with pytest.raises(ValidationError):
        asyncio.run(regenerate_roadmap(store, "user-1", **_client_kwargs(handler)))

    assert handler.requests == []
    assert store.get(ROADMAPS_COLLECTION, "r-old") is not None


@pytest.mark.unit
def test_regenerate_without_analysis(store):
    save_target_companies(store, "user-1", [TargetCompany(name="Stripe", position="SRE")])
    handler = RecordingHandler(httpx.Response(200, json=GENERATED))
    with pytest.raises(ValidationError):
        asyncio.run(regenerate_roadmap(store, "user-1", **_client_kwargs(handler)))


@pytest.mark.unit
def test_delete_roadmaps_counts(store):
    store.set(ROADMAPS_COLLECTION, "a", {"candidateId": "user-1"})
    store.set(ROADMAPS_COLLECTION, "b", {"candidateId": "user-2"})
    assert delete_roadmaps(store, "user-1") == 1
    assert delete_roadmaps(store, "user-1") == 0
    assert store.size(ROADMAPS_COLLECTION) == 1


@pytest.mark.unit
def test_pipeline_end_to_end(store):
    handler = RecordingHandler(httpx.Response(200, json=GENERATED))
    roadmap = run_roadmap_pipeline(
        "Backend engineer with Python and Kubernetes experience",
        ["Legacy Corp", {"name": "Stripe", "position": "Platform Engineer"}],
        "user-1",
        store,
        llm_client=make_llm_client(VALID_ANALYSIS),
        **_client_kwargs(handler),
    )

    assert roadmap.id == "roadmap-new"
    assert roadmap.milestones[0].category == "technical"
    assert load_resume_analysis(store, "user-1").skills == VALID_ANALYSIS["skills"]
    assert [c.name for c in load_target_companies(store, "user-1")] == ["Legacy Corp", "Stripe"]
    body = handler.bodies[0]
    assert body["targetCompanies"] == [{"name": "Stripe", "position": "Platform Engineer"}]
    assert body["resumeAnalysis"]["extractedSkills"] == ["Python", "Kubernetes"]
