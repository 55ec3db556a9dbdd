"""Configuration loaded from environment variables."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env: try package dir then project root
_base = Path(__file__).resolve().parent
for _env_path in (_base / ".env", _base.parent / ".env"):
    if load_dotenv(_env_path):
        break
load_dotenv()  # also allow process env


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


# LLM – never hardcode keys
OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
MODEL_NAME: str = os.getenv("MODEL_NAME", "gpt-4o-mini")
LLM_TEMPERATURE: float = _env_float("LLM_TEMPERATURE", 0.2)

# Backend endpoints (roadmap generation / resume analysis)
ROADMAP_API_BASE_URL: str = os.getenv("ROADMAP_API_BASE_URL", "http://localhost:3000")
GENERATE_ROADMAP_PATH: str = "/api/generate-roadmap"
ANALYZE_RESUME_PATH: str = "/api/analyze-resume"

# Resume text sent to the LLM is cut to this many characters
RESUME_MAX_CHARS: int = _env_int("RESUME_MAX_CHARS", 4000)

# Timeouts (seconds): per LLM attempt, and overall deadline for roadmap generation
LLM_TIMEOUT_SECONDS: float = _env_float("LLM_TIMEOUT_SECONDS", 60.0)
ROADMAP_TIMEOUT_SECONDS: float = _env_float("ROADMAP_TIMEOUT_SECONDS", 60.0)

# Rate-limit (HTTP 429) retry policy
RATE_LIMIT_MAX_ATTEMPTS: int = _env_int("RATE_LIMIT_MAX_ATTEMPTS", 3)
RETRY_INITIAL_DELAY_SECONDS: float = _env_float("RETRY_INITIAL_DELAY_SECONDS", 1.0)
RETRY_JITTER_RATIO: float = 0.1

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# Document store collection names
USERS_COLLECTION: str = "users"
ROADMAPS_COLLECTION: str = "roadmaps"
