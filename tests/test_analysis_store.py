from __future__ import annotations

from datetime import datetime, timezone

import pytest
from sqlalchemy.exc import OperationalError

from skillgap.database import SessionLocal
from skillgap.models.skill_gap_analysis import SkillGapAnalysisRecord
from skillgap.schemas.analysis import SkillGap, SkillGapAnalysis
from skillgap.services import analysis_store, requirement_service
from skillgap.services.errors import AnalysisStoreError

from conftest import create_user


def _analysis(role_id: str, user_id: int, readiness: int, gaps: list[SkillGap] | None = None) -> SkillGapAnalysis:
    return SkillGapAnalysis(
        role_id=role_id,
        user_id=user_id,
        overall_readiness=readiness,
        critical_gaps=gaps or [],
        recommendations=["Keep going"],
    )


def test_get_latest_distinguishes_never_analyzed_from_clean(db) -> None:
    user_id = create_user()
    role = requirement_service.create_role(db, user_id, "Analyst")

    assert analysis_store.get_latest_analysis(db, role.id, user_id) is None

    analysis_store.upsert_analysis(db, _analysis(role.id, user_id, 100))
    stored = analysis_store.get_latest_analysis(db, role.id, user_id)
    assert stored is not None
    assert stored.critical_gaps == []
    assert stored.overall_readiness == 100


def test_upsert_overwrites_single_row_per_pair(db) -> None:
    user_id = create_user()
    role = requirement_service.create_role(db, user_id, "Analyst")
    gap = SkillGap(skill_name="SQL", current_level=1, required_level=4, gap=3, priority="critical")

    first = analysis_store.upsert_analysis(db, _analysis(role.id, user_id, 25, [gap]))
    second = analysis_store.upsert_analysis(db, _analysis(role.id, user_id, 60))

    assert db.query(SkillGapAnalysisRecord).count() == 1
    assert second.overall_readiness == 60
    assert second.critical_gaps == []
    assert first.analyzed_at is not None and second.analyzed_at is not None
    assert second.analyzed_at >= first.analyzed_at


def test_reads_do_not_delete(db) -> None:
    user_id = create_user()
    role = requirement_service.create_role(db, user_id, "Analyst")
    analysis_store.upsert_analysis(db, _analysis(role.id, user_id, 40))

    for _ in range(3):
        assert analysis_store.get_latest_analysis(db, role.id, user_id) is not None
    assert db.query(SkillGapAnalysisRecord).count() == 1


def test_store_failure_keeps_previous_analysis(db, monkeypatch: pytest.MonkeyPatch) -> None:
    user_id = create_user()
    role = requirement_service.create_role(db, user_id, "Analyst")
    analysis_store.upsert_analysis(db, _analysis(role.id, user_id, 40))

    def _broken_commit() -> None:
        raise OperationalError("COMMIT", {}, Exception("disk full"))

    monkeypatch.setattr(db, "commit", _broken_commit)
    with pytest.raises(AnalysisStoreError):
        analysis_store.upsert_analysis(db, _analysis(role.id, user_id, 90))
    monkeypatch.undo()

    stored = analysis_store.get_latest_analysis(db, role.id, user_id)
    assert stored is not None
    assert stored.overall_readiness == 40


def test_lost_insert_race_overwrites_the_winning_row(db, monkeypatch: pytest.MonkeyPatch) -> None:
    user_id = create_user()
    role = requirement_service.create_role(db, user_id, "Analyst")
    role_id = role.id
    real_find = analysis_store._find
    calls: list[str] = []

    def _find_after_concurrent_insert(session, find_role_id: str, find_user_id: int):
        if not calls:
            calls.append(find_role_id)
            # Another writer inserts the row after our lookup saw nothing.
            with SessionLocal() as other:
                other.add(
                    SkillGapAnalysisRecord(
                        role_id=find_role_id,
                        user_id=find_user_id,
                        overall_readiness=10,
                        analyzed_at=datetime.now(timezone.utc),
                    )
                )
                other.commit()
            return None
        return real_find(session, find_role_id, find_user_id)

    monkeypatch.setattr(analysis_store, "_find", _find_after_concurrent_insert)
    saved = analysis_store.upsert_analysis(db, _analysis(role_id, user_id, 75))
    monkeypatch.undo()

    assert saved.overall_readiness == 75
    rows = db.query(SkillGapAnalysisRecord).filter(SkillGapAnalysisRecord.role_id == role_id).all()
    assert len(rows) == 1
    assert rows[0].overall_readiness == 75
    assert rows[0].recommendations == ["Keep going"]
