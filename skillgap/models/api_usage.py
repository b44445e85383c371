from __future__ import annotations

from sqlalchemy import BigInteger, JSON, Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.sql import func

from skillgap.database import Base


class ApiUsage(Base):
    __tablename__ = "api_usage"

    # MySQL: BIGINT AUTO_INCREMENT
    # SQLite tests: uses INTEGER for reliable autoincrement.
    id = Column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True,
        index=True,
    )
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # e.g. "analyze_gaps", "generate_requirements"
    operation = Column(String(64), nullable=False, index=True)
    credits_used = Column(Integer, nullable=False, default=1)

    # `metadata` is reserved on declarative classes.
    usage_metadata = Column("metadata", JSON, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
