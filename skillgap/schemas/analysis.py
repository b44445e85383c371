# analysis.py
from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


MatchType = Literal["exact", "similar", "transferable"]


class SkillGap(BaseModel):
    skill_name: str
    current_level: int = Field(ge=0, le=5)
    required_level: int = Field(ge=1, le=5)
    gap: int = Field(ge=0)
    priority: str
    # Only set when the credit came from a differently-named user skill.
    matched_user_skill: str | None = None
    recommendations: list[str] = Field(default_factory=list)


class SkillMatch(BaseModel):
    required_skill: str
    user_skill: str
    match_type: MatchType
    confidence: float = Field(ge=0.0, le=1.0)


class SkillGapAnalysis(BaseModel):
    role_id: str
    user_id: int
    overall_readiness: int = Field(ge=0, le=100)
    critical_gaps: list[SkillGap] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    skill_matches: list[SkillMatch] = Field(default_factory=list)
    analyzed_at: datetime | None = None


class RecommendationBundle(BaseModel):
    recommendations: list[str] = Field(default_factory=list)
    skill_recommendations: dict[str, list[str]] = Field(default_factory=dict)


class AnalysisResponse(BaseModel):
    analysis: SkillGapAnalysis
    message: str
