import json

import pytest

from tests.fakes import VALID_ANALYSIS, CountingStore


@pytest.fixture
def store() -> CountingStore:
    return CountingStore()


@pytest.fixture
def valid_analysis() -> dict:
    return json.loads(json.dumps(VALID_ANALYSIS))
