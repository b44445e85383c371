from __future__ import annotations

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.sql import func

from skillgap.database import Base


class SkillGapAnalysisRecord(Base):
    __tablename__ = "skill_gap_analysis"

    id = Column(Integer, primary_key=True, index=True)
    role_id = Column(String(36), ForeignKey("target_roles.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    overall_readiness = Column(Integer, nullable=False, default=0)
    critical_gaps = Column(JSON, nullable=False, default=list)
    recommendations = Column(JSON, nullable=False, default=list)
    # Audit trail of every similar/transferable match made.
    skill_matches = Column(JSON, nullable=False, default=list)

    analyzed_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # One analysis per (role, user); later analyses update this row in place.
    __table_args__ = (
        UniqueConstraint("role_id", "user_id", name="uq_skill_gap_analysis_role_id_user_id"),
    )
