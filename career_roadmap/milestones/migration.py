"""Upgrade legacy (skillType) and partially populated milestone records to the categorized schema."""

import math
import uuid
from typing import Any, List, Optional, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from career_roadmap.milestones.categorizer import categorize_milestone, normalize_category
from career_roadmap.schemas.milestone import (
    DEFAULT_DESCRIPTION,
    DEFAULT_DIFFICULTY,
    DEFAULT_PRIORITY,
    DEFAULT_SUCCESS_CRITERIA,
    DEFAULT_TIMEFRAME,
    DEFAULT_TITLE,
    PRIORITIES,
    Milestone,
    MilestoneAttributes,
    MilestoneTask,
    Resource,
)
from career_roadmap.utils.helpers import coerce_str_list
from career_roadmap.utils.logger import get_logger
from career_roadmap.utils.timestamps import to_datetime, to_datetime_or_now, utcnow

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def new_milestone_id() -> str:
    return f"milestone-{uuid.uuid4().hex[:12]}"


def has_new_format(raw: Any) -> bool:
    """Categorized shape: string category plus an attributes bag."""
    return isinstance(raw, dict) and isinstance(raw.get("category"), str) and "attributes" in raw


def has_legacy_format(raw: Any) -> bool:
    """Pre-categorization shape: string skillType and no attributes."""
    return isinstance(raw, dict) and isinstance(raw.get("skillType"), str) and "attributes" not in raw


def _text(value: Any, default: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return default


def _optional_text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def _difficulty(value: Any) -> int:
    try:
        level = int(value)
    except (TypeError, ValueError, OverflowError):
        return DEFAULT_DIFFICULTY
    if level == 0:
        return DEFAULT_DIFFICULTY
    return max(1, min(5, level))


def _priority(value: Any) -> str:
    key = value.strip().lower() if isinstance(value, str) else ""
    return key if key in PRIORITIES else DEFAULT_PRIORITY


def _estimated_hours(value: Any) -> Optional[float]:
    if isinstance(value, bool) or value is None:
        return None
    try:
        hours = float(value)
    except (TypeError, ValueError):
        return None
    return hours if math.isfinite(hours) and hours >= 0 else None


def _models(value: Any, model: Type[ModelT], label: str) -> List[ModelT]:
    """Validate each dict in a list; malformed entries are dropped."""
    if not isinstance(value, list):
        return []
    out: List[ModelT] = []
    for item in value:
        if isinstance(item, model):
            out.append(item)
            continue
        if not isinstance(item, dict):
            continue
        try:
            out.append(model.model_validate(item))
        except PydanticValidationError as e:
            logger.warning("Dropping malformed %s: %s", label, e.errors()[0].get("msg", e))
    return out


def _tasks(value: Any, milestone_id: str) -> List[MilestoneTask]:
    tasks = _models(value, MilestoneTask, "task")
    return [
        t if t.id else t.model_copy(update={"id": f"{milestone_id}-task-{i}"})
        for i, t in enumerate(tasks)
    ]


def _attributes(value: Any) -> MilestoneAttributes:
    if isinstance(value, MilestoneAttributes):
        return value
    if not isinstance(value, dict):
        return MilestoneAttributes()
    try:
        return MilestoneAttributes.model_validate(value)
    except PydanticValidationError as e:
        logger.warning("Resetting malformed milestone attributes: %s", e.errors()[0].get("msg", e))
        return MilestoneAttributes()


def default_milestone(milestone_id: Optional[str] = None) -> Milestone:
    """Minimally valid milestone with every field at its default."""
    return Milestone(
        id=milestone_id or new_milestone_id(),
        category=categorize_milestone({}),
        created_at=utcnow(),
    )


def _migrate(raw: Any) -> Milestone:
    if isinstance(raw, Milestone):
        raw = raw.to_document()
    if not isinstance(raw, dict):
        logger.warning("Milestone record is %s, not an object; using defaults", type(raw).__name__)
        return default_milestone()

    milestone_id = _text(raw.get("id"), "") or new_milestone_id()
    category = normalize_category(raw.get("category")) or categorize_milestone(raw)
    success_criteria = raw.get("successCriteria", raw.get("success_criteria"))

    return Milestone(
        id=milestone_id,
        title=_text(raw.get("title"), DEFAULT_TITLE),
        description=_text(raw.get("description"), DEFAULT_DESCRIPTION),
        timeframe=_text(raw.get("timeframe"), DEFAULT_TIMEFRAME),
        completed=bool(raw.get("completed")),
        skills=coerce_str_list(raw.get("skills")),
        resources=_models(raw.get("resources"), Resource, "resource"),
        category=category,
        subcategory=_optional_text(raw.get("subcategory")),
        attributes=_attributes(raw.get("attributes")),
        difficulty=_difficulty(raw.get("difficulty")),
        priority=_priority(raw.get("priority")),
        estimated_hours=_estimated_hours(raw.get("estimatedHours", raw.get("estimated_hours"))),
        tasks=_tasks(raw.get("tasks"), milestone_id),
        success_criteria=(
            coerce_str_list(success_criteria)
            if isinstance(success_criteria, list)
            else list(DEFAULT_SUCCESS_CRITERIA)
        ),
        prerequisites=coerce_str_list(raw.get("prerequisites")),
        created_at=to_datetime_or_now(raw.get("createdAt", raw.get("created_at"))),
        completed_at=to_datetime(raw.get("completedAt", raw.get("completed_at"))),
        skill_type=_optional_text(raw.get("skillType", raw.get("skill_type"))),
    )


def migrate_milestone(raw: Any) -> Milestone:
    """
    Convert any stored or generated milestone record to the categorized shape.
    Never raises: every field has a safe default, and a record that cannot be
    parsed at all still yields a minimally valid milestone.
    """
    try:
        return _migrate(raw)
    except Exception as e:
        logger.exception("Milestone migration failed; using defaults: %s", e)
        milestone_id = raw.get("id") if isinstance(raw, dict) else None
        return default_milestone(milestone_id if isinstance(milestone_id, str) and milestone_id else None)


def migrate_milestones(raw_milestones: Any) -> List[Milestone]:
    """Migrate a roadmap's milestones; output has one milestone per input record."""
    if not isinstance(raw_milestones, list):
        return []
    return [migrate_milestone(m) for m in raw_milestones]


def needs_migration(raw: Any) -> bool:
    """True when the stored record differs from its migrated form and should be written back."""
    if not isinstance(raw, dict):
        return True
    return migrate_milestone(raw).to_document() != raw
