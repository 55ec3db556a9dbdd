"""Structured resume analysis extracted by the LLM from raw resume text."""

from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from career_roadmap.utils.helpers import coerce_str_list, dedupe_preserve_order

# Array fields every analysis must carry (camelCase document keys)
ANALYSIS_LIST_FIELDS = (
    "skills",
    "experience",
    "education",
    "certifications",
    "strengths",
    "weaknesses",
    "recommendations",
)


class SkillLevel(BaseModel):
    """Proficiency estimate for one skill, with the resume evidence behind it."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    skill: str = Field(..., description="Skill name")
    level: int = Field(default=5, ge=1, le=10, description="Proficiency 1-10")
    evidence: str = Field(default="", description="Resume excerpt supporting the level")


def _coerce_level(value: Any) -> int:
    try:
        level = int(round(float(value)))
    except (TypeError, ValueError, OverflowError):
        return 5
    return max(1, min(10, level))


def _coerce_skill_levels(value: Any) -> List[SkillLevel]:
    if not isinstance(value, list):
        return []
    out: List[SkillLevel] = []
    for item in value:
        if isinstance(item, SkillLevel):
            out.append(item)
            continue
        if not isinstance(item, dict):
            continue
        skill = str(item.get("skill") or item.get("name") or "").strip()
        if not skill:
            continue
        out.append(
            SkillLevel(
                skill=skill,
                level=_coerce_level(item.get("level")),
                evidence=str(item.get("evidence") or "").strip(),
            )
        )
    return out


class ResumeAnalysis(BaseModel):
    """Skills, experience, education and coaching notes for one candidate's resume."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    skills: List[str] = Field(default_factory=list, description="Technical and soft skills")
    skill_levels: List[SkillLevel] = Field(default_factory=list, description="Per-skill proficiency")
    experience: List[str] = Field(default_factory=list, description="Work experience entries")
    education: List[str] = Field(default_factory=list, description="Degrees and institutions")
    certifications: List[str] = Field(default_factory=list, description="Certifications held")
    strengths: List[str] = Field(default_factory=list, description="Candidate strengths")
    weaknesses: List[str] = Field(default_factory=list, description="Areas for improvement")
    recommendations: List[str] = Field(default_factory=list, description="Suggested next steps")
    extracted_skills: List[str] = Field(
        default_factory=list, description="Technology names keyword-matched in the resume text"
    )

    @classmethod
    def from_payload(cls, data: Any) -> "ResumeAnalysis":
        """
        Build an analysis from an untrusted payload (LLM output or stored document).
        Every array field is coerced independently; a non-dict payload yields an empty analysis.
        Skill names are de-duplicated case-insensitively, keeping the first spelling.
        """
        if isinstance(data, ResumeAnalysis):
            return data.model_copy(deep=True)
        if not isinstance(data, dict):
            return cls()
        values = {name: coerce_str_list(data.get(name)) for name in ANALYSIS_LIST_FIELDS}
        values["skill_levels"] = _coerce_skill_levels(
            data.get("skillLevels", data.get("skill_levels"))
        )
        values["skills"] = dedupe_preserve_order(values["skills"])
        values["extracted_skills"] = dedupe_preserve_order(
            coerce_str_list(data.get("extractedSkills", data.get("extracted_skills")))
        )
        return cls(**values)

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True, mode="json")
