# skill_matcher.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from skillgap.data.skill_taxonomy import alias_groups_for, categories_for
from skillgap.schemas.skills import SkillRecord
from skillgap.services.skill_normalizer import normalize_skill_name


MATCH_CONFIDENCE: dict[str, float] = {
    "exact": 1.0,
    "similar": 0.8,
    "transferable": 0.5,
}

TRANSFERABLE_SUFFIX = " (transferable)"


@dataclass(frozen=True)
class SkillMatchOutcome:
    matched_skill: str
    match_type: str
    current_level_contribution: int

    @property
    def confidence(self) -> float:
        return MATCH_CONFIDENCE[self.match_type]


@dataclass(frozen=True)
class _Candidate:
    skill_name: str
    normalized: str
    level: int


def is_similar(first: str, second: str) -> bool:
    """Both arguments must already be normalized."""
    if not first or not second:
        return False
    if first == second:
        return True
    if first in second or second in first:
        return True
    return bool(alias_groups_for(first) & alias_groups_for(second))


def _candidates(user_skills: Sequence[SkillRecord]) -> list[_Candidate]:
    candidates: list[_Candidate] = []
    for skill in user_skills:
        level = int(skill.proficiency_level or 0)
        # Level 0 is a "needs rating" placeholder, not a held skill.
        if level <= 0:
            continue
        normalized = normalize_skill_name(skill.skill_name)
        if not normalized:
            continue
        candidates.append(_Candidate(skill_name=skill.skill_name, normalized=normalized, level=level))
    return candidates


def match_required_skill(required_name: str, user_skills: Sequence[SkillRecord]) -> SkillMatchOutcome | None:
    """Find the user skill that best corresponds to one required skill.

    Tiers are tried in order and the first hit wins: exact normalized name,
    similar (substring or shared alias group), then transferable (shared
    category, credited at half the donor level rounded down). Within a tier
    the first user skill in the supplied order is used. Level-0 records are
    skipped entirely, so an unrated record with the exact name does not win
    the exact tier. Returns None when no tier matches; never raises.
    """
    required = normalize_skill_name(required_name)
    if not required:
        return None
    candidates = _candidates(user_skills)

    for candidate in candidates:
        if candidate.normalized == required:
            return SkillMatchOutcome(candidate.skill_name, "exact", candidate.level)

    for candidate in candidates:
        if is_similar(required, candidate.normalized):
            return SkillMatchOutcome(candidate.skill_name, "similar", candidate.level)

    required_categories = categories_for(required)
    if required_categories:
        for candidate in candidates:
            if required_categories & categories_for(candidate.normalized):
                return SkillMatchOutcome(
                    f"{candidate.skill_name}{TRANSFERABLE_SUFFIX}",
                    "transferable",
                    candidate.level // 2,
                )

    return None
