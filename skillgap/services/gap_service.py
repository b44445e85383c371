# gap_service.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping, Sequence

from skillgap.schemas.analysis import SkillGap, SkillMatch
from skillgap.schemas.roles import PRIORITY_RANK, RequiredSkill
from skillgap.schemas.skills import SkillRecord
from skillgap.services.skill_matcher import match_required_skill


# Unknown priorities sort after "low".
_UNRANKED = len(PRIORITY_RANK)


@dataclass
class GapComputation:
    # One entry per required skill, in requirement order (satisfied ones included).
    gaps: list[SkillGap] = field(default_factory=list)
    # Audit trail of non-exact matches.
    matches: list[SkillMatch] = field(default_factory=list)


def calculate_skill_gaps(required_skills: Sequence[RequiredSkill], user_skills: Sequence[SkillRecord]) -> GapComputation:
    result = GapComputation()
    for required in required_skills:
        outcome = match_required_skill(required.skill_name, user_skills)
        current_level = outcome.current_level_contribution if outcome else 0
        matched_user_skill: str | None = None
        if outcome is not None and outcome.match_type != "exact":
            matched_user_skill = outcome.matched_skill
            result.matches.append(
                SkillMatch(
                    required_skill=required.skill_name,
                    user_skill=outcome.matched_skill,
                    match_type=outcome.match_type,
                    confidence=outcome.confidence,
                )
            )
        result.gaps.append(
            SkillGap(
                skill_name=required.skill_name,
                current_level=current_level,
                required_level=required.required_level,
                gap=max(0, required.required_level - current_level),
                priority=required.priority,
                matched_user_skill=matched_user_skill,
            )
        )
    return result


def calculate_readiness(gaps: Sequence[SkillGap]) -> int:
    """Percentage of required capability present, capped per skill at the requirement."""
    total_required = sum(g.required_level for g in gaps)
    if total_required <= 0:
        return 0
    achieved = sum(min(g.current_level, g.required_level) for g in gaps)
    # Round half up in integer arithmetic.
    readiness = (200 * achieved + total_required) // (2 * total_required)
    # 100 only when nothing is open, even if rounding says otherwise.
    if readiness >= 100 and any(g.gap > 0 for g in gaps):
        return 99
    return readiness


def _priority_rank(priority: str) -> int:
    return PRIORITY_RANK.get((priority or "").lower(), _UNRANKED)


def order_remediation(gaps: Sequence[SkillGap]) -> list[SkillGap]:
    # sorted() is stable, so equal (priority, gap) keep requirement order.
    open_gaps = [g for g in gaps if g.gap > 0]
    return sorted(open_gaps, key=lambda g: (_priority_rank(g.priority), -g.gap))


def attach_skill_recommendations(gaps: Sequence[SkillGap], skill_recommendations: Mapping[str, list[str]]) -> list[SkillGap]:
    """Copy per-skill remediation text onto gaps by exact skill-name lookup."""
    merged: list[SkillGap] = []
    for gap in gaps:
        texts = skill_recommendations.get(gap.skill_name)
        if isinstance(texts, list):
            recs = [str(t) for t in texts if t]
        else:
            recs = []
        merged.append(gap.model_copy(update={"recommendations": recs}))
    return merged
