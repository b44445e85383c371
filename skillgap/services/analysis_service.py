# analysis_service.py
from __future__ import annotations

import logging
from typing import Sequence

from sqlalchemy.orm import Session

from skillgap.schemas.analysis import RecommendationBundle, SkillGap, SkillGapAnalysis
from skillgap.services import analysis_store, requirement_service, skill_profile_service
from skillgap.services.errors import GeneratorUnavailableError, MalformedGeneratorResponseError
from skillgap.services.gap_service import (
    attach_skill_recommendations,
    calculate_readiness,
    calculate_skill_gaps,
    order_remediation,
)
from skillgap.services.generator_client import SkillGapGenerator
from skillgap.services.usage_service import record_api_usage


logger = logging.getLogger(__name__)


def _fetch_recommendations(
    generator: SkillGapGenerator,
    target_career: str,
    gaps: Sequence[SkillGap],
) -> RecommendationBundle:
    if not gaps:
        return RecommendationBundle()
    try:
        return generator.generate_recommendations(target_career, gaps)
    except (GeneratorUnavailableError, MalformedGeneratorResponseError) as exc:
        # Remediation text is enrichment; the analysis stands without it.
        logger.warning("analysis.recommendations_unavailable career=%s error=%s", target_career, exc)
        return RecommendationBundle()


def recompute(db: Session, user_id: int, role_id: str, generator: SkillGapGenerator) -> SkillGapAnalysis:
    """Run the full pipeline for one (role, user) pair and store the result.

    Raises RoleNotFoundError, RequirementsUnavailableError (nothing stored)
    or AnalysisStoreError (previous analysis left untouched).
    """
    role = requirement_service.get_role(db, role_id, user_id)
    required = requirement_service.get_or_generate_required_skills(db, role, generator)
    user_skills = skill_profile_service.list_user_skills(db, user_id)

    computation = calculate_skill_gaps(required, user_skills)
    readiness = calculate_readiness(computation.gaps)
    ordered = order_remediation(computation.gaps)

    # Every required skill must show up in the profile for self-rating.
    skill_profile_service.ensure_required_skills(db, user_id, required)

    bundle = _fetch_recommendations(generator, role.target_career, ordered)
    analysis = SkillGapAnalysis(
        role_id=role.id,
        user_id=user_id,
        overall_readiness=readiness,
        critical_gaps=attach_skill_recommendations(ordered, bundle.skill_recommendations),
        recommendations=bundle.recommendations,
        skill_matches=computation.matches,
    )
    saved = analysis_store.upsert_analysis(db, analysis)

    record_api_usage(db, user_id, "analyze_gaps", metadata={"role_id": role.id})
    logger.info(
        "analysis.recompute role_id=%s user_id=%s readiness=%s gaps=%s matches=%s",
        role.id,
        user_id,
        saved.overall_readiness,
        len(saved.critical_gaps),
        len(saved.skill_matches),
    )
    return saved


def get_latest(db: Session, user_id: int, role_id: str) -> SkillGapAnalysis | None:
    role = requirement_service.get_role(db, role_id, user_id)
    return analysis_store.get_latest_analysis(db, role.id, user_id)
