from __future__ import annotations

from uuid import uuid4

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from skillgap.database import Base


class TargetRole(Base):
    __tablename__ = "target_roles"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid4()))
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    target_career = Column(String(255), nullable=False)
    # Set once, by whichever writer stores the requirement list first.
    requirements_set_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    required_skills = relationship(
        "TargetRoleSkill",
        back_populates="role",
        order_by="TargetRoleSkill.position",
        cascade="all, delete-orphan",
    )


class TargetRoleSkill(Base):
    __tablename__ = "target_role_skills"

    id = Column(Integer, primary_key=True, index=True)
    role_id = Column(String(36), ForeignKey("target_roles.id", ondelete="CASCADE"), nullable=False, index=True)

    skill_name = Column(String(255), nullable=False)
    required_level = Column(Integer, nullable=False, default=3)
    priority = Column(String(16), nullable=False, default="medium")

    # Insertion order; the tie-breaker for remediation ordering.
    position = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    role = relationship("TargetRole", back_populates="required_skills")

    __table_args__ = (
        UniqueConstraint("role_id", "skill_name", name="uq_target_role_skills_role_id_skill_name"),
    )
