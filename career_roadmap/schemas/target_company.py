"""Target company the candidate wants to work for."""

from typing import Any, List, Literal, Optional, get_args

from pydantic import BaseModel, Field, field_validator

ProfessionalField = Literal["computer-science", "engineering", "medicine", "business", "law"]
PROFESSIONAL_FIELDS = get_args(ProfessionalField)


class TargetCompany(BaseModel):
    """Company name and desired position; industry is optional."""

    name: str = Field(default="", description="Company name")
    position: str = Field(default="", description="Target position at the company")
    industry: Optional[ProfessionalField] = Field(default=None, description="Target industry")

    @field_validator("name", "position", mode="before")
    @classmethod
    def _strip(cls, v: Any) -> str:
        return str(v).strip() if v is not None else ""

    @field_validator("industry", mode="before")
    @classmethod
    def _known_industry(cls, v: Any) -> Optional[str]:
        key = str(v).strip().lower() if v is not None else ""
        return key if key in PROFESSIONAL_FIELDS else None

    @property
    def is_complete(self) -> bool:
        return bool(self.name) and bool(self.position)


def normalize_target_companies(raw: Any) -> List[TargetCompany]:
    """
    Upgrade stored target companies to objects.
    Legacy records stored bare company names as strings; those become {name, position: ""}.
    Entries with no name are dropped.
    """
    if not isinstance(raw, list):
        return []
    companies: List[TargetCompany] = []
    for item in raw:
        if isinstance(item, TargetCompany):
            company = item
        elif isinstance(item, str):
            company = TargetCompany(name=item)
        elif isinstance(item, dict):
            company = TargetCompany(
                name=item.get("name"),
                position=item.get("position"),
                industry=item.get("industry"),
            )
        else:
            continue
        if company.name:
            companies.append(company)
    return companies


def valid_target_companies(companies: List[TargetCompany]) -> List[TargetCompany]:
    """Companies usable for roadmap generation: non-blank name and position."""
    return [c for c in companies if c.is_complete]
