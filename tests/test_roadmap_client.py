import asyncio

import httpx
import pytest

from career_roadmap.errors import (
    ApiError,
    EmptyInputError,
    InvalidResponseError,
    NetworkError,
    ParseError,
    RateLimitError,
    RequestTimeoutError,
    ValidationError,
)
from career_roadmap.schemas.resume_analysis import ResumeAnalysis
from career_roadmap.schemas.target_company import TargetCompany
from career_roadmap.services.http_client import error_message_for_status
from career_roadmap.services.resume_api_client import request_resume_analysis
from career_roadmap.services.roadmap_client import (
    build_roadmap_request,
    generate_roadmap,
    run_roadmap_generation,
)
from tests.fakes import RecordingHandler

COMPANIES = [{"name": "Stripe", "position": "Backend Engineer", "industry": "computer-science"}]

ROADMAP = {
    "id": "roadmap-1",
    "candidateId": "user-1",
    "createdAt": "2024-03-01T09:00:00Z",
    "milestones": [
        {"id": "m1", "title": "Build REST API with Node.js", "skillType": "technical", "skills": ["Node.js"]},
        {"id": "m2", "title": "Lead team standup meetings", "skills": ["Leadership"]},
    ],
}


def _generate(handler, analysis=None, companies=COMPANIES, candidate_id="user-1", **kwargs):
    kwargs.setdefault("initial_delay", 0)
    return asyncio.run(
        generate_roadmap(
            analysis if analysis is not None else {"skills": ["Python"]},
            companies,
            candidate_id,
            base_url="http://roadmap.test",
            transport=handler.transport(),
            **kwargs,
        )
    )


@pytest.mark.unit
def test_generates_roadmap_with_categorized_milestones():
    handler = RecordingHandler(httpx.Response(200, json=ROADMAP))
    roadmap = _generate(handler)
    assert roadmap.id == "roadmap-1"
    assert roadmap.candidate_id == "user-1"
    assert [m.category for m in roadmap.milestones] == ["technical", "soft"]
    assert roadmap.updated_at == roadmap.created_at
    assert handler.requests[0].url.path == "/api/generate-roadmap"


@pytest.mark.unit
def test_request_body_carries_complete_analysis_and_companies():
    handler = RecordingHandler(httpx.Response(200, json=ROADMAP))
    _generate(handler, analysis={"skills": "Python", "strengths": ["Grit"]})
    body = handler.bodies[0]
    assert body["candidateId"] == "user-1"
    assert body["targetCompanies"] == COMPANIES
    assert body["resumeAnalysis"]["skills"] == []
    assert body["resumeAnalysis"]["strengths"] == ["Grit"]
    assert body["resumeAnalysis"]["recommendations"] == []


@pytest.mark.unit
@pytest.mark.parametrize(
    "companies",
    [[], ["Stripe", "Google"], [{"name": "Stripe", "position": "  "}], [{"position": "Engineer"}]],
)
def test_unusable_companies_fail_before_any_request(companies):
    handler = RecordingHandler(httpx.Response(200, json=ROADMAP))
    with pytest.raises(ValidationError):
        _generate(handler, companies=companies)
    assert handler.requests == []


@pytest.mark.unit
def test_missing_analysis_fails_validation():
    with pytest.raises(ValidationError):
        build_roadmap_request(None, COMPANIES)


@pytest.mark.unit
def test_mixed_legacy_and_object_companies():
    payload = build_roadmap_request(
        ResumeAnalysis(skills=["Go"]),
        ["Legacy Corp", TargetCompany(name=" Stripe ", position="SRE", industry="finance")],
    )
    assert payload["targetCompanies"] == [{"name": "Stripe", "position": "SRE"}]
    assert payload["candidateId"] is None


@pytest.mark.unit
def test_empty_milestone_list_is_a_valid_roadmap():
    handler = RecordingHandler(httpx.Response(200, json={"id": "r2", "milestones": []}))
    roadmap = _generate(handler)
    assert roadmap.milestones == []
    assert roadmap.candidate_id == "user-1"


@pytest.mark.unit
@pytest.mark.parametrize(
    "body",
    [{"id": "r3"}, {"id": "r3", "milestones": "none"}, {"milestones": []}, {"id": " ", "milestones": []}, ["r3"]],
)
def test_roadmap_without_id_or_milestones_is_invalid(body):
    handler = RecordingHandler(httpx.Response(200, json=body))
    with pytest.raises(InvalidResponseError):
        _generate(handler)


@pytest.mark.unit
def test_non_json_body_is_a_parse_error():
    handler = RecordingHandler(httpx.Response(200, text="<html>oops</html>"))
    with pytest.raises(ParseError):
        _generate(handler)


@pytest.mark.unit
def test_error_body_message_is_surfaced():
    handler = RecordingHandler(
        httpx.Response(500, json={"error": "Failed to generate roadmap", "details": "model overloaded"})
    )
    with pytest.raises(ApiError) as exc_info:
        _generate(handler)
    assert exc_info.value.user_message == "Failed to generate roadmap"
    assert exc_info.value.status_code == 500
    assert exc_info.value.details == "model overloaded"
    assert len(handler.requests) == 1


@pytest.mark.unit
def test_generic_message_when_error_body_is_missing():
    handler = RecordingHandler(httpx.Response(503, text=""))
    with pytest.raises(ApiError) as exc_info:
        _generate(handler)
    assert exc_info.value.user_message == error_message_for_status(503)
    assert error_message_for_status(599) == error_message_for_status(500)
    assert "418" in error_message_for_status(418)


@pytest.mark.unit
def test_rate_limited_request_is_retried():
    handler = RecordingHandler(httpx.Response(429), httpx.Response(200, json=ROADMAP))
    roadmap = _generate(handler)
    assert roadmap.id == "roadmap-1"
    assert len(handler.requests) == 2


@pytest.mark.unit
def test_persistent_rate_limit():
    handler = RecordingHandler(httpx.Response(429, json={"message": "Slow down"}))
    with pytest.raises(RateLimitError) as exc_info:
        _generate(handler, max_attempts=2)
    assert exc_info.value.user_message == "Slow down"
    assert len(handler.requests) == 2


@pytest.mark.unit
def test_slow_backend_times_out():
    async def slow(request):
        await asyncio.sleep(5)
        return httpx.Response(200, json=ROADMAP)

    handler = RecordingHandler(slow)
    with pytest.raises(RequestTimeoutError):
        _generate(handler, timeout=0.05)


@pytest.mark.unit
def test_connection_failure_is_a_network_error():
    handler = RecordingHandler(httpx.ConnectError("connection refused"))
    with pytest.raises(NetworkError):
        _generate(handler)


@pytest.mark.unit
def test_sync_wrapper():
    handler = RecordingHandler(httpx.Response(200, json=ROADMAP))
    roadmap = run_roadmap_generation(
        {"skills": ["Python"]},
        COMPANIES,
        "user-1",
        base_url="http://roadmap.test",
        transport=handler.transport(),
    )
    assert len(roadmap.milestones) == 2


@pytest.mark.unit
def test_resume_analysis_endpoint():
    handler = RecordingHandler(httpx.Response(200, json={"data": {"skills": ["Go"], "education": None}}))
    analysis = asyncio.run(
        request_resume_analysis("Go developer", base_url="http://roadmap.test", transport=handler.transport())
    )
    assert analysis.skills == ["Go"]
    assert analysis.education == []
    assert handler.bodies[0] == {"resumeText": "Go developer"}
    assert handler.requests[0].url.path == "/api/analyze-resume"


@pytest.mark.unit
def test_resume_analysis_endpoint_errors():
    with pytest.raises(EmptyInputError):
        asyncio.run(request_resume_analysis("  "))

    handler = RecordingHandler(httpx.Response(400, json={"error": "Resume text is required"}))
    with pytest.raises(ApiError) as exc_info:
        asyncio.run(request_resume_analysis("x", base_url="http://roadmap.test", transport=handler.transport()))
    assert exc_info.value.user_message == "Resume text is required"

    handler = RecordingHandler(httpx.Response(200, json={"ok": True}))
    with pytest.raises(InvalidResponseError):
        asyncio.run(request_resume_analysis("x", base_url="http://roadmap.test", transport=handler.transport()))
