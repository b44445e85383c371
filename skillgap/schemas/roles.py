# roles.py
from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


Priority = Literal["critical", "high", "medium", "low"]

PRIORITY_RANK: dict[str, int] = {"critical": 0, "high": 1, "medium": 2, "low": 3}


class RequiredSkill(BaseModel):
    skill_name: str = Field(min_length=1, max_length=255)
    required_level: int = Field(ge=1, le=5)
    priority: Priority = "medium"

    model_config = ConfigDict(from_attributes=True)

    @field_validator("skill_name")
    @classmethod
    def _strip_skill_name(cls, v: str) -> str:
        value = (v or "").strip()
        if not value:
            raise ValueError("skill_name must not be blank")
        return value


class RequiredSkillsUpdate(BaseModel):
    skills: list[RequiredSkill] = Field(min_length=1)


class TargetRoleCreate(BaseModel):
    target_career: str = Field(min_length=1, max_length=255)
    # Optional: requirements supplied by the planner; otherwise generated on first analysis.
    required_skills: list[RequiredSkill] = Field(default_factory=list)


class TargetRoleRead(BaseModel):
    id: str
    target_career: str
    created_at: datetime | None = None
    required_skills: list[RequiredSkill] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)
