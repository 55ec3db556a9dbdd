"""Milestone categorization, legacy migration and roadmap helpers."""

from .categorizer import categorize_milestone, matching_categories, normalize_category
from .migration import (
    default_milestone,
    has_legacy_format,
    has_new_format,
    migrate_milestone,
    migrate_milestones,
    needs_migration,
)
from .milestone_utils import (
    create_default_milestone,
    filter_by_category,
    get_dependents,
    get_prerequisites,
    milestone_stats,
    sort_by_importance,
    total_estimated_hours,
    validate_milestone,
)

__all__ = [
    "categorize_milestone",
    "matching_categories",
    "normalize_category",
    "migrate_milestone",
    "migrate_milestones",
    "default_milestone",
    "has_new_format",
    "has_legacy_format",
    "needs_migration",
    "milestone_stats",
    "filter_by_category",
    "sort_by_importance",
    "total_estimated_hours",
    "get_prerequisites",
    "get_dependents",
    "validate_milestone",
    "create_default_milestone",
]
