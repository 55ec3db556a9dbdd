"""Test doubles: LLM client, openai errors, backend transport handler and an instrumented document store."""

import asyncio
import json
from types import SimpleNamespace
from typing import Any, List

import httpx
import openai

from career_roadmap.services.document_store import InMemoryDocumentStore

OPENAI_URL = "https://api.openai.com/v1/chat/completions"

VALID_ANALYSIS = {
    "skills": ["Python", "Leadership"],
    "skillLevels": [{"skill": "Python", "level": 8, "evidence": "5 years of backend work"}],
    "experience": ["Backend Engineer at Acme (2019-2024)"],
    "education": ["BSc Computer Science"],
    "certifications": ["AWS Certified Developer"],
    "strengths": ["API design"],
    "weaknesses": ["Limited frontend exposure"],
    "recommendations": ["Build a React side project"],
}


class Slow:
    """Completion that never finishes before the test's timeout."""

    def __init__(self, seconds: float = 5.0) -> None:
        self.seconds = seconds


class FakeCompletions:
    def __init__(self, responses: List[Any]) -> None:
        self._responses = list(responses)
        self.calls: List[dict] = []

    async def create(self, **kwargs: Any) -> Any:
        self.calls.append(kwargs)
        item = self._responses.pop(0)
        if isinstance(item, Exception):
            raise item
        if isinstance(item, Slow):
            await asyncio.sleep(item.seconds)
            item = json.dumps(VALID_ANALYSIS)
        if isinstance(item, dict):
            item = json.dumps(item)
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=item))])


def make_llm_client(*responses: Any) -> SimpleNamespace:
    """Object shaped like AsyncOpenAI exposing chat.completions.create; responses are served in order."""
    completions = FakeCompletions(list(responses))
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


def openai_status_error(status_code: int, message: str = "error") -> openai.APIStatusError:
    response = httpx.Response(status_code, request=httpx.Request("POST", OPENAI_URL))
    if status_code == 429:
        return openai.RateLimitError(message, response=response, body=None)
    if status_code >= 500:
        return openai.InternalServerError(message, response=response, body=None)
    return openai.APIStatusError(message, response=response, body=None)


class RecordingHandler:
    """httpx.MockTransport handler that records requests and replays canned responses."""

    def __init__(self, *responses: Any) -> None:
        self._responses = list(responses)
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        item = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        if isinstance(item, Exception):
            raise item
        if callable(item):
            return item(request)
        # Fresh response per request so a canned response can be replayed
        return httpx.Response(item.status_code, headers=item.headers, content=item.content)

    @property
    def bodies(self) -> List[dict]:
        return [json.loads(r.content) for r in self.requests]

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


class CountingStore(InMemoryDocumentStore):
    """In-memory store that records every write."""

    def __init__(self) -> None:
        super().__init__()
        self.writes: List[tuple] = []

    def set(self, collection: str, doc_id: str, data: dict, merge: bool = False) -> None:
        self.writes.append((collection, doc_id))
        super().set(collection, doc_id, data, merge=merge)

