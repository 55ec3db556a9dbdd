"""Grouping, ordering, validation and templates for categorized milestones."""

from typing import Any, Dict, List, Tuple

from career_roadmap.milestones.categorizer import categorize_milestone
from career_roadmap.milestones.migration import new_milestone_id
from career_roadmap.schemas.milestone import (
    ATTRIBUTE_MODELS,
    CATEGORIES,
    PRIORITIES,
    Milestone,
    MilestoneAttributes,
)
from career_roadmap.utils.timestamps import utcnow

PRIORITY_ORDER = {"critical": 4, "high": 3, "medium": 2, "low": 1}

# Category template overrides (difficulty, estimated hours)
_TEMPLATE_OVERRIDES: Dict[str, Dict[str, Any]] = {
    "technical": {},
    "fundamental": {},
    "niche": {"difficulty": 4, "estimated_hours": 80},
    "soft": {"difficulty": 2, "estimated_hours": 30},
}


def _category_of(milestone: Milestone) -> str:
    return milestone.category or categorize_milestone(milestone)


def milestone_stats(milestones: List[Milestone]) -> Dict[str, Dict[str, int]]:
    """Total and completed milestone counts per category."""
    stats = {c: {"total": 0, "completed": 0} for c in CATEGORIES}
    for m in milestones:
        bucket = stats[_category_of(m)]
        bucket["total"] += 1
        if m.completed:
            bucket["completed"] += 1
    return stats


def filter_by_category(milestones: List[Milestone], category: str) -> List[Milestone]:
    """Milestones in one category; "all" returns every milestone. Does not mutate the input list."""
    if category == "all":
        return list(milestones)
    return [m for m in milestones if _category_of(m) == category]


def sort_by_importance(milestones: List[Milestone]) -> List[Milestone]:
    """Higher priority first, then harder milestones first within the same priority."""
    return sorted(
        milestones,
        key=lambda m: (PRIORITY_ORDER.get(m.priority, 2), m.difficulty or 3),
        reverse=True,
    )


def total_estimated_hours(milestones: List[Milestone]) -> float:
    return sum(m.estimated_hours or 0 for m in milestones)


def get_prerequisites(milestones: List[Milestone], milestone_id: str) -> List[Milestone]:
    """Milestones listed as prerequisites of the given milestone."""
    target = next((m for m in milestones if m.id == milestone_id), None)
    if target is None or not target.prerequisites:
        return []
    wanted = set(target.prerequisites)
    return [m for m in milestones if m.id in wanted]


def get_dependents(milestones: List[Milestone], milestone_id: str) -> List[Milestone]:
    """Milestones that list the given milestone as a prerequisite."""
    return [m for m in milestones if milestone_id in (m.prerequisites or [])]


def validate_milestone(data: Any) -> Tuple[bool, List[str]]:
    """
    Check a raw milestone document against the categorized schema.
    Returns (is_valid, errors); does not coerce anything.
    """
    if isinstance(data, Milestone):
        data = data.to_document()
    if not isinstance(data, dict):
        return False, ["Milestone must be an object"]

    errors: List[str] = []
    for field in ("id", "title", "description", "category", "timeframe"):
        if not data.get(field):
            errors.append(f"Missing required field: {field}")
    if not isinstance(data.get("skills"), list):
        errors.append("Skills must be an array")
    if not isinstance(data.get("completed"), bool):
        errors.append("Completed must be a boolean")
    if not isinstance(data.get("resources"), list):
        errors.append("Resources must be an array")
    if not isinstance(data.get("successCriteria"), list):
        errors.append("Success criteria must be an array")

    difficulty = data.get("difficulty")
    if difficulty is not None and (not isinstance(difficulty, int) or not 1 <= difficulty <= 5):
        errors.append("Difficulty must be between 1 and 5")
    priority = data.get("priority")
    if priority and priority not in PRIORITIES:
        errors.append("Priority must be one of: " + ", ".join(PRIORITIES))
    category = data.get("category")
    if category and category not in CATEGORIES:
        errors.append("Category must be one of: " + ", ".join(CATEGORIES))

    return not errors, errors


def create_default_milestone(category: str, milestone_id: str = "") -> Milestone:
    """Blank milestone template for a category, with that category's attribute bag populated."""
    if category not in CATEGORIES:
        raise ValueError(f"Unknown milestone category: {category}")
    fields: Dict[str, Any] = {
        "id": milestone_id or new_milestone_id(),
        "title": "",
        "description": "",
        "category": category,
        "timeframe": "1-2 months",
        "difficulty": 3,
        "priority": "medium",
        "estimated_hours": 40,
        "success_criteria": [],
        "attributes": MilestoneAttributes(**{category: ATTRIBUTE_MODELS[category]()}),
        "created_at": utcnow(),
    }
    fields.update(_TEMPLATE_OVERRIDES[category])
    return Milestone(**fields)
