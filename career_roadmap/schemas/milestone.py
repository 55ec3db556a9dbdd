"""Categorized milestone schema (technical / fundamental / niche / soft) and its attribute bags."""

from datetime import datetime
from typing import Any, List, Literal, Optional, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from career_roadmap.utils.timestamps import to_datetime

Category = Literal["technical", "fundamental", "niche", "soft"]
Priority = Literal["low", "medium", "high", "critical"]

CATEGORIES: tuple = get_args(Category)
PRIORITIES: tuple = get_args(Priority)

DEFAULT_TITLE = "Untitled Milestone"
DEFAULT_DESCRIPTION = "No description provided"
DEFAULT_TIMEFRAME = "No timeframe specified"
DEFAULT_DIFFICULTY = 3
DEFAULT_PRIORITY = "medium"
DEFAULT_SUCCESS_CRITERIA = ["Complete all learning resources"]


class _Document(BaseModel):
    """camelCase on the wire, snake_case in Python; unknown keys are kept."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel, extra="allow")


Cost = Literal["free", "paid", "freemium"]
COSTS: tuple = get_args(Cost)


def _as_text(v: Any) -> str:
    if v is None:
        return ""
    return v.strip() if isinstance(v, str) else str(v)


def _as_optional_text(v: Any) -> Optional[str]:
    text = _as_text(v)
    return text or None


class Resource(_Document):
    title: str = ""
    url: str = ""
    type: str = "article"
    usage_guide: Optional[str] = None
    estimated_time: Optional[str] = None
    cost: Optional[Cost] = None

    @field_validator("title", "url", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str:
        return _as_text(v)

    @field_validator("type", mode="before")
    @classmethod
    def _type(cls, v: Any) -> str:
        return _as_text(v) or "article"

    @field_validator("usage_guide", "estimated_time", mode="before")
    @classmethod
    def _optional_text(cls, v: Any) -> Optional[str]:
        return _as_optional_text(v)

    @field_validator("cost", mode="before")
    @classmethod
    def _known_cost(cls, v: Any) -> Optional[str]:
        key = v.strip().lower() if isinstance(v, str) else ""
        return key if key in COSTS else None


class MilestoneTask(_Document):
    id: str = ""
    description: str = ""
    completed: bool = False
    due_date: Optional[datetime] = None
    notes: Optional[str] = None

    @field_validator("id", "description", mode="before")
    @classmethod
    def _text(cls, v: Any) -> str:
        return _as_text(v)

    @field_validator("completed", mode="before")
    @classmethod
    def _completed(cls, v: Any) -> bool:
        return v if isinstance(v, bool) else bool(v)

    @field_validator("due_date", mode="before")
    @classmethod
    def _due_date(cls, v: Any) -> Optional[datetime]:
        # Backend timestamp objects, {seconds, nanoseconds}, ISO strings and epoch ms
        return to_datetime(v)

    @field_validator("notes", mode="before")
    @classmethod
    def _notes(cls, v: Any) -> Optional[str]:
        return _as_optional_text(v)


class TechnicalAttributes(_Document):
    technologies: List[str] = Field(default_factory=list)
    programming_languages: List[str] = Field(default_factory=list)
    project_type: str = "frontend"
    complexity_level: str = "intermediate"
    deliverables: List[Any] = Field(default_factory=list)
    learning_path: str = "self-directed"


class FundamentalAttributes(_Document):
    competency_area: str = "problem-solving"
    industry_scope: str = "tech-specific"
    career_stage: str = "mid-level"
    conceptual_areas: List[str] = Field(default_factory=list)
    theoretical_depth: str = "intermediate"
    application_areas: List[str] = Field(default_factory=list)
    builds_upon: List[str] = Field(default_factory=list)
    enables_advancement: List[str] = Field(default_factory=list)
    knowledge_type: str = "conceptual"


class NicheAttributes(_Document):
    specialization_domain: str = ""
    market_demand: str = "growing"
    expertise_level: str = "working-knowledge"
    industry_adoption: str = "early-adopter"
    competitor_landscape: str = "moderate-competition"
    career_impact: str = "differentiator"
    salary_premium: Optional[float] = None
    learning_curve: str = "steep"
    resource_availability: str = "moderate"
    community_size: str = "medium"
    trend_direction: str = "rising"
    longevity_estimate: str = "3-5 years"


class BehavioralMarker(_Document):
    indicator: str = ""
    frequency: str = "situational"


class SoftAttributes(_Document):
    skill_category: str = "communication"
    development_method: str = "practice-based"
    application_scenarios: List[str] = Field(default_factory=list)
    role_relevance: str = "all-roles"
    assessment_difficulty: str = "somewhat-subjective"
    measurement_methods: List[str] = Field(default_factory=lambda: ["self-assessment"])
    behavioral_markers: List[BehavioralMarker] = Field(default_factory=list)
    development_timeframe: str = "months"
    improvement_pattern: str = "continuous"


class MilestoneAttributes(_Document):
    """Category-specific attribute bag; the variant matching the milestone category is the one in use."""

    technical: Optional[TechnicalAttributes] = None
    fundamental: Optional[FundamentalAttributes] = None
    niche: Optional[NicheAttributes] = None
    soft: Optional[SoftAttributes] = None


ATTRIBUTE_MODELS = {
    "technical": TechnicalAttributes,
    "fundamental": FundamentalAttributes,
    "niche": NicheAttributes,
    "soft": SoftAttributes,
}


class Milestone(BaseModel):
    """A single roadmap entry in the categorized shape consumed by the UI."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    id: str = Field(..., description="Milestone id")
    title: str = Field(default=DEFAULT_TITLE)
    description: str = Field(default=DEFAULT_DESCRIPTION)
    timeframe: str = Field(default=DEFAULT_TIMEFRAME, description="Expected timeframe, e.g. '3-6 months'")
    completed: bool = False
    skills: List[str] = Field(default_factory=list)
    resources: List[Resource] = Field(default_factory=list)

    category: Category = Field(..., description="technical | fundamental | niche | soft")
    subcategory: Optional[str] = None
    attributes: MilestoneAttributes = Field(default_factory=MilestoneAttributes)

    difficulty: int = Field(default=DEFAULT_DIFFICULTY, ge=1, le=5)
    priority: Priority = DEFAULT_PRIORITY
    estimated_hours: Optional[float] = None
    tasks: List[MilestoneTask] = Field(default_factory=list)
    success_criteria: List[str] = Field(default_factory=lambda: list(DEFAULT_SUCCESS_CRITERIA))
    prerequisites: List[str] = Field(default_factory=list)

    created_at: datetime
    completed_at: Optional[datetime] = None

    # Kept for records written before categorization existed
    skill_type: Optional[str] = None

    def to_document(self, mode: str = "python") -> dict:
        """camelCase dict for the document store (mode="json" for HTTP bodies)."""
        return self.model_dump(by_alias=True, exclude_none=True, mode=mode)
