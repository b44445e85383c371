from __future__ import annotations

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.sql import func

from skillgap.database import Base


class UserSkill(Base):
    __tablename__ = "user_skills"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Stored as entered; normalized_name is the comparison key only.
    skill_name = Column(String(255), nullable=False)
    normalized_name = Column(String(255), nullable=False, index=True)

    # 0 = required by a role but not yet self-rated, 1..5 = Beginner..Expert
    proficiency_level = Column(Integer, nullable=False, default=0)
    source = Column(String(32), nullable=False, default="manual")

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("user_id", "normalized_name", name="uq_user_skills_user_id_normalized_name"),
    )
