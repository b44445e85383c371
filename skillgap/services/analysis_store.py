# analysis_store.py
from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from skillgap.models.skill_gap_analysis import SkillGapAnalysisRecord
from skillgap.schemas.analysis import SkillGapAnalysis
from skillgap.services.errors import AnalysisStoreError


logger = logging.getLogger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime | None) -> datetime | None:
    # sqlite hands back naive datetimes even for timezone-aware columns.
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def _find(db: Session, role_id: str, user_id: int) -> SkillGapAnalysisRecord | None:
    return (
        db.query(SkillGapAnalysisRecord)
        .filter(SkillGapAnalysisRecord.role_id == role_id)
        .filter(SkillGapAnalysisRecord.user_id == user_id)
        .one_or_none()
    )


def _to_schema(record: SkillGapAnalysisRecord) -> SkillGapAnalysis:
    return SkillGapAnalysis(
        role_id=record.role_id,
        user_id=record.user_id,
        overall_readiness=int(record.overall_readiness or 0),
        critical_gaps=record.critical_gaps or [],
        recommendations=record.recommendations or [],
        skill_matches=record.skill_matches or [],
        analyzed_at=_as_utc(record.analyzed_at),
    )


def _write(db: Session, analysis: SkillGapAnalysis, analyzed_at: datetime) -> SkillGapAnalysisRecord:
    payload = analysis.model_dump(mode="json")
    record = _find(db, analysis.role_id, analysis.user_id)
    if record is None:
        record = SkillGapAnalysisRecord(role_id=analysis.role_id, user_id=analysis.user_id)
        db.add(record)
    record.overall_readiness = analysis.overall_readiness
    record.critical_gaps = payload["critical_gaps"]
    record.recommendations = payload["recommendations"]
    record.skill_matches = payload["skill_matches"]
    record.analyzed_at = analyzed_at
    db.commit()
    return record


def upsert_analysis(db: Session, analysis: SkillGapAnalysis) -> SkillGapAnalysis:
    """Write or overwrite the single analysis for (role_id, user_id).

    The whole row is replaced in one transaction and analyzed_at is set to
    now. On failure the transaction is rolled back, so the previously stored
    analysis stays as it was, and AnalysisStoreError is raised.
    """
    analyzed_at = _utc_now()
    try:
        try:
            record = _write(db, analysis, analyzed_at)
        except IntegrityError:
            # Lost an insert race on (role_id, user_id): overwrite the winner's row.
            db.rollback()
            record = _write(db, analysis, analyzed_at)
        db.refresh(record)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.error(
            "analysis.store_failed role_id=%s user_id=%s error=%s",
            analysis.role_id,
            analysis.user_id,
            exc,
        )
        raise AnalysisStoreError("failed to save skill gap analysis") from exc
    return _to_schema(record)


def get_latest_analysis(db: Session, role_id: str, user_id: int) -> SkillGapAnalysis | None:
    record = _find(db, role_id, user_id)
    if record is None:
        return None
    return _to_schema(record)
