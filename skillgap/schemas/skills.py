# skills.py
from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


# manual entry, document import, external profile import, auto-added for a role, guided self-assessment
SkillSource = Literal["manual", "pdf", "linkedin", "role_requirement", "self_assessment"]

PROFICIENCY_LABELS: dict[int, str] = {
    0: "Needs rating",
    1: "Beginner",
    2: "Elementary",
    3: "Intermediate",
    4: "Advanced",
    5: "Expert",
}


class SkillRecord(BaseModel):
    id: int | None = None
    skill_name: str
    proficiency_level: int = Field(ge=0, le=5, description="0 = needs rating, 1..5 = Beginner..Expert")
    source: SkillSource = "manual"
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class SkillInput(BaseModel):
    skill_name: str = Field(min_length=1, max_length=255)
    proficiency_level: int = Field(default=0, ge=0, le=5)
    source: SkillSource = "manual"

    @field_validator("skill_name")
    @classmethod
    def _strip_skill_name(cls, v: str) -> str:
        value = (v or "").strip()
        if not value:
            raise ValueError("skill_name must not be blank")
        return value


class SkillUpsertRequest(BaseModel):
    skills: list[SkillInput] = Field(default_factory=list)


class SkillListResponse(BaseModel):
    skills: list[SkillRecord] = Field(default_factory=list)
