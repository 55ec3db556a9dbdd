"""Keyword-based extraction of well-known technology names from resume text."""

import re
from typing import List

# Canonical spelling of each recognized skill (extensible)
KNOWN_TECHNICAL_SKILLS: List[str] = [
    "JavaScript", "TypeScript", "Python", "Java", "C#", "C++", "Ruby", "Go", "Rust",
    "React", "Angular", "Vue", "Node.js", "Express", "Django", "Flask", "Spring",
    "AWS", "Azure", "GCP", "Docker", "Kubernetes", "Terraform", "CI/CD",
    "SQL", "NoSQL", "MongoDB", "PostgreSQL", "MySQL", "Redis", "Elasticsearch",
    "Machine Learning", "AI", "Data Science", "TensorFlow", "PyTorch", "NLP",
    "HTML", "CSS", "SASS", "LESS", "Bootstrap", "Tailwind", "Material UI",
    "Git", "GitHub", "GitLab", "Bitbucket", "Jira", "Confluence", "Agile", "Scrum",
]

# Short or common-word skills only count when written as in the list
_CASE_SENSITIVE = {"Go", "LESS", "AI"}


def _pattern(skill: str) -> re.Pattern:
    flags = 0 if skill in _CASE_SENSITIVE else re.IGNORECASE
    return re.compile(rf"(?<![\w+#]){re.escape(skill)}(?![\w+#])", flags)


_SKILL_PATTERNS = [(skill, _pattern(skill)) for skill in KNOWN_TECHNICAL_SKILLS]


def extract_skills_from_text(text: str) -> List[str]:
    """Return known technical skills mentioned in text, in list order, without duplicates."""
    if not text or not text.strip():
        return []
    return [skill for skill, pattern in _SKILL_PATTERNS if pattern.search(text)]
