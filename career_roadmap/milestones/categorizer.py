"""Infer a milestone category from explicit fields or keyword heuristics over its content."""

import re
from typing import Any, Dict, List, Optional, Pattern

from career_roadmap.schemas.milestone import CATEGORIES

DEFAULT_CATEGORY = "technical"

# First matching category wins, in this order
CATEGORY_PRIORITY = ("technical", "fundamental", "niche", "soft")

# Keywords are matched on word boundaries after lowercasing and folding "-"/"_" to spaces
CATEGORY_KEYWORDS: Dict[str, List[str]] = {
    "technical": [
        "code", "coding", "programming", "software", "api", "apis", "rest", "graphql",
        "database", "databases", "frontend", "backend", "full stack", "deployment",
        "unit testing", "react", "angular", "vue", "next.js", "node", "node.js", "express",
        "javascript", "typescript", "python", "java", "kotlin", "swift", "c++", "c#",
        "golang", "rust", "ruby", "rails", "php", "html", "css", "tailwind", "sql",
        "postgresql", "mysql", "mongodb", "redis", "django", "flask", "fastapi", "spring",
        "docker", "kubernetes", "terraform", "aws", "azure", "gcp", "linux", "git", "github",
        "gitlab", "ci/cd", "jenkins", "webpack", "tensorflow", "pytorch", "pandas",
    ],
    "fundamental": [
        "system design", "algorithm", "algorithms", "data structures", "architecture",
        "design patterns", "computer science", "operating systems", "computer networks",
        "distributed systems", "concurrency", "scalability", "complexity", "big o",
        "discrete math", "object oriented", "oop", "problem solving", "analytical",
        "research", "documentation", "debugging", "best practices", "methodology",
        "principles", "foundations", "concepts", "theory", "fundamentals",
    ],
    "niche": [
        "blockchain", "ai", "artificial intelligence", "machine learning", "ml",
        "deep learning", "neural networks", "nlp", "computer vision", "llm", "quantum",
        "vr", "ar", "virtual reality", "augmented reality", "iot", "cybersecurity",
        "data science", "devops", "cloud native", "cryptocurrency", "smart contracts",
        "web3", "robotics", "embedded systems", "bioinformatics", "fintech",
    ],
    "soft": [
        "communication", "leadership", "teamwork", "team", "presentation", "presentations",
        "networking", "emotional intelligence", "time management", "collaboration",
        "mentoring", "mentorship", "negotiation", "conflict resolution", "public speaking",
        "coaching", "stakeholder", "stakeholders", "interpersonal", "storytelling",
    ],
}


def _compile(keywords: List[str]) -> Pattern[str]:
    alternation = "|".join(re.escape(k) for k in sorted(keywords, key=len, reverse=True))
    return re.compile(rf"(?<![a-z0-9])(?:{alternation})(?![a-z0-9])")


_CATEGORY_PATTERNS: Dict[str, Pattern[str]] = {
    category: _compile(words) for category, words in CATEGORY_KEYWORDS.items()
}


def normalize_category(value: Any) -> Optional[str]:
    """Return the category if value names one (case-insensitive, trimmed), else None."""
    if not isinstance(value, str):
        return None
    key = value.strip().lower()
    return key if key in CATEGORIES else None


def _get(milestone: Any, *names: str) -> Any:
    for name in names:
        if isinstance(milestone, dict):
            if name in milestone:
                return milestone[name]
        elif hasattr(milestone, name):
            return getattr(milestone, name)
    return None


def _content_text(milestone: Any) -> str:
    title = _get(milestone, "title")
    description = _get(milestone, "description")
    skills = _get(milestone, "skills")
    parts = [title if isinstance(title, str) else "", description if isinstance(description, str) else ""]
    if isinstance(skills, (list, tuple)):
        parts.extend(str(s) for s in skills if s is not None)
    text = " ".join(parts).lower()
    text = re.sub(r"[-_]", " ", text)
    return re.sub(r"\s+", " ", text).strip()


def matching_categories(milestone: Any) -> List[str]:
    """Categories whose keyword sets match the milestone content, in priority order."""
    content = _content_text(milestone)
    if not content:
        return []
    return [c for c in CATEGORY_PRIORITY if _CATEGORY_PATTERNS[c].search(content)]


def categorize_milestone(milestone: Any) -> str:
    """
    Category for a milestone: an explicit category/skillType wins, then keyword matching
    (technical > fundamental > niche > soft), then the technical default.
    Pure and total: any input, including non-mappings, gets a category.
    """
    if not isinstance(milestone, dict) and not hasattr(milestone, "title"):
        return DEFAULT_CATEGORY

    for value in (_get(milestone, "category"), _get(milestone, "skillType", "skill_type")):
        explicit = normalize_category(value)
        if explicit:
            return explicit

    matches = matching_categories(milestone)
    return matches[0] if matches else DEFAULT_CATEGORY
