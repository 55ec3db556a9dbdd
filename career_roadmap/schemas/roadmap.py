"""Career roadmap: the milestone collection generated for one candidate."""

from datetime import datetime
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from career_roadmap.errors import InvalidResponseError
from career_roadmap.schemas.milestone import Milestone


class CareerRoadmap(BaseModel):
    """One roadmap per candidate; regenerating replaces it entirely."""

    model_config = ConfigDict(populate_by_name=True, alias_generator=to_camel)

    id: str = Field(..., min_length=1, description="Roadmap id")
    candidate_id: str = Field(default="", description="User document id (unenforced reference)")
    milestones: List[Milestone] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_document(cls, data: Any) -> "CareerRoadmap":
        """
        Validate an endpoint response or stored document and migrate its milestones.
        Requires a non-empty id and a milestones array; an empty array is a valid roadmap.
        """
        from career_roadmap.milestones.migration import migrate_milestones
        from career_roadmap.utils.timestamps import to_datetime_or_now

        if not isinstance(data, dict):
            raise InvalidResponseError("Roadmap response is not a JSON object")
        roadmap_id = data.get("id")
        if not isinstance(roadmap_id, str) or not roadmap_id.strip():
            raise InvalidResponseError("Roadmap response is missing an id")
        milestones = data.get("milestones")
        if not isinstance(milestones, list):
            raise InvalidResponseError("Roadmap response is missing a milestones array")

        candidate_id = data.get("candidateId", data.get("candidate_id"))
        created_at = to_datetime_or_now(data.get("createdAt", data.get("created_at")))
        updated_at = data.get("updatedAt", data.get("updated_at"))
        return cls(
            id=roadmap_id.strip(),
            candidate_id=str(candidate_id) if candidate_id is not None else "",
            milestones=migrate_milestones(milestones),
            created_at=created_at,
            updated_at=to_datetime_or_now(updated_at) if updated_at is not None else created_at,
        )

    def to_document(self, mode: str = "python") -> dict:
        return self.model_dump(by_alias=True, exclude_none=True, mode=mode)
