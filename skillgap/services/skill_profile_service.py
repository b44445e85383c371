# skill_profile_service.py
from __future__ import annotations

import logging
from typing import Iterable

from sqlalchemy.orm import Session

from skillgap.models.user_skill import UserSkill
from skillgap.schemas.roles import RequiredSkill
from skillgap.schemas.skills import SkillInput, SkillRecord
from skillgap.services.skill_normalizer import normalize_skill_name


logger = logging.getLogger(__name__)

AUTO_ADDED_SOURCE = "role_requirement"


def _to_record(row: UserSkill) -> SkillRecord:
    return SkillRecord.model_validate(row)


def list_user_skills(db: Session, user_id: int) -> list[SkillRecord]:
    rows = db.query(UserSkill).filter(UserSkill.user_id == user_id).order_by(UserSkill.id).all()
    return [_to_record(row) for row in rows]


def _find_by_normalized(db: Session, user_id: int, normalized: str) -> UserSkill | None:
    return (
        db.query(UserSkill)
        .filter(UserSkill.user_id == user_id)
        .filter(UserSkill.normalized_name == normalized)
        .one_or_none()
    )


def _apply(db: Session, user_id: int, item: SkillInput) -> UserSkill | None:
    normalized = normalize_skill_name(item.skill_name)
    if not normalized:
        return None
    row = _find_by_normalized(db, user_id, normalized)
    if row is None:
        row = UserSkill(
            user_id=user_id,
            skill_name=item.skill_name,
            normalized_name=normalized,
            proficiency_level=item.proficiency_level,
            source=item.source,
        )
        db.add(row)
    else:
        # Same skill under another spelling: update, never duplicate.
        row.proficiency_level = item.proficiency_level
        row.source = item.source
    return row


def upsert_user_skills(db: Session, user_id: int, items: Iterable[SkillInput]) -> list[SkillRecord]:
    rows: list[UserSkill] = []
    for item in items:
        row = _apply(db, user_id, item)
        if row is not None and row not in rows:
            rows.append(row)
        # Make the pending row visible to the next lookup in this batch.
        db.flush()
    db.commit()
    for row in rows:
        db.refresh(row)
    return [_to_record(row) for row in rows]


def upsert_user_skill(db: Session, user_id: int, item: SkillInput) -> SkillRecord | None:
    saved = upsert_user_skills(db, user_id, [item])
    return saved[0] if saved else None


def delete_user_skill(db: Session, user_id: int, skill_id: int) -> bool:
    row = db.query(UserSkill).filter(UserSkill.user_id == user_id).filter(UserSkill.id == skill_id).one_or_none()
    if row is None:
        return False
    db.delete(row)
    db.commit()
    return True


def ensure_required_skills(db: Session, user_id: int, required_skills: Iterable[RequiredSkill]) -> list[SkillRecord]:
    """Insert a level-0 record for every required skill the user does not have yet.

    Existing records (matched by normalized name) are left untouched, so a
    user's own rating is never overwritten. Returns the newly added records.
    """
    added: list[UserSkill] = []
    seen: set[str] = set()
    for required in required_skills:
        normalized = normalize_skill_name(required.skill_name)
        if not normalized or normalized in seen:
            continue
        seen.add(normalized)
        if _find_by_normalized(db, user_id, normalized) is not None:
            continue
        row = UserSkill(
            user_id=user_id,
            skill_name=required.skill_name,
            normalized_name=normalized,
            proficiency_level=0,
            source=AUTO_ADDED_SOURCE,
        )
        db.add(row)
        added.append(row)

    if not added:
        return []
    db.commit()
    for row in added:
        db.refresh(row)
    logger.info("skills.auto_added user_id=%s count=%s", user_id, len(added))
    return [_to_record(row) for row in added]
