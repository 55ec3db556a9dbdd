"""Schema exports."""

from .milestone import (
    CATEGORIES,
    PRIORITIES,
    Milestone,
    MilestoneAttributes,
    MilestoneTask,
    Resource,
)
from .resume_analysis import ResumeAnalysis, SkillLevel
from .roadmap import CareerRoadmap
from .target_company import TargetCompany, normalize_target_companies, valid_target_companies

__all__ = [
    "CATEGORIES",
    "PRIORITIES",
    "Milestone",
    "MilestoneAttributes",
    "MilestoneTask",
    "Resource",
    "ResumeAnalysis",
    "SkillLevel",
    "CareerRoadmap",
    "TargetCompany",
    "normalize_target_companies",
    "valid_target_companies",
]
