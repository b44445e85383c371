# requirement_service.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from skillgap.models.target_role import TargetRole, TargetRoleSkill
from skillgap.schemas.roles import RequiredSkill
from skillgap.services.errors import (
    GeneratorUnavailableError,
    MalformedGeneratorResponseError,
    RequirementsAlreadySetError,
    RequirementsUnavailableError,
    RoleNotFoundError,
)
from skillgap.services.generator_client import SkillGapGenerator
from skillgap.services.usage_service import record_api_usage


logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def create_role(db: Session, user_id: int, target_career: str, required_skills: Sequence[RequiredSkill] = ()) -> TargetRole:
    role = TargetRole(user_id=user_id, target_career=target_career.strip())
    if required_skills:
        role.requirements_set_at = _utc_now()
    db.add(role)
    db.flush()
    _add_required_skills(db, role, required_skills)
    db.commit()
    db.refresh(role)
    return role


def get_role(db: Session, role_id: str, user_id: int) -> TargetRole:
    role = db.query(TargetRole).filter(TargetRole.id == role_id).one_or_none()
    # Other users' roles are indistinguishable from missing ones.
    if role is None or role.user_id != user_id:
        raise RoleNotFoundError(f"role {role_id} not found")
    return role


def get_required_skills(db: Session, role_id: str) -> list[RequiredSkill]:
    rows = (
        db.query(TargetRoleSkill)
        .filter(TargetRoleSkill.role_id == role_id)
        .order_by(TargetRoleSkill.position, TargetRoleSkill.id)
        .all()
    )
    return [RequiredSkill.model_validate(row) for row in rows]


def _add_required_skills(db: Session, role: TargetRole, required_skills: Sequence[RequiredSkill]) -> None:
    seen: set[str] = set()
    position = 0
    for skill in required_skills:
        key = skill.skill_name.lower()
        if key in seen:
            continue
        seen.add(key)
        db.add(
            TargetRoleSkill(
                role_id=role.id,
                skill_name=skill.skill_name,
                required_level=skill.required_level,
                priority=skill.priority,
                position=position,
            )
        )
        position += 1


def _claim_requirements(db: Session, role_id: str) -> bool:
    # Conditional update: the database lets exactly one writer flip the marker.
    claimed = (
        db.query(TargetRole)
        .filter(TargetRole.id == role_id)
        .filter(TargetRole.requirements_set_at.is_(None))
        .update({TargetRole.requirements_set_at: _utc_now()}, synchronize_session=False)
    )
    return claimed == 1


def save_required_skills(db: Session, role: TargetRole, required_skills: Sequence[RequiredSkill]) -> list[RequiredSkill]:
    """Persist a role's requirement list. Requirements are immutable once set.

    The marker on the role row and the skill rows commit together, so a
    concurrent writer either sees the marker and gets RequirementsAlreadySetError
    or blocks until the winner's transaction ends.
    """
    role_id = role.id
    if not _claim_requirements(db, role_id):
        db.rollback()
        raise RequirementsAlreadySetError(f"role {role_id} already has required skills")
    _add_required_skills(db, role, required_skills)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise RequirementsAlreadySetError(f"role {role_id} already has required skills") from exc
    return get_required_skills(db, role_id)


def get_or_generate_required_skills(db: Session, role: TargetRole, generator: SkillGapGenerator) -> list[RequiredSkill]:
    existing = get_required_skills(db, role.id)
    if existing:
        return existing

    try:
        generated = generator.generate_required_skills(role.target_career)
    except (GeneratorUnavailableError, MalformedGeneratorResponseError) as exc:
        logger.warning("requirements.generation_failed role_id=%s error=%s", role.id, exc)
        raise RequirementsUnavailableError("required skills are unavailable, try again later") from exc

    if not generated:
        logger.warning("requirements.generation_empty role_id=%s", role.id)
        raise RequirementsUnavailableError("required skills are unavailable, try again later")

    try:
        saved = save_required_skills(db, role, generated)
    except RequirementsAlreadySetError:
        return get_required_skills(db, role.id)

    record_api_usage(db, role.user_id, "generate_requirements", metadata={"role_id": role.id, "skills": len(saved)})
    logger.info("requirements.generated role_id=%s count=%s", role.id, len(saved))
    return saved
