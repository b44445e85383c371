# usage_service.py
from __future__ import annotations

from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from skillgap.models.api_usage import ApiUsage


def record_api_usage(
    db: Session,
    user_id: int,
    operation: str,
    *,
    credits_used: int = 1,
    metadata: dict[str, Any] | None = None,
) -> ApiUsage:
    entry = ApiUsage(user_id=user_id, operation=operation, credits_used=credits_used, usage_metadata=metadata or {})
    db.add(entry)
    db.commit()
    return entry


def summarize_api_usage(db: Session, user_id: int) -> list[dict[str, Any]]:
    rows = (
        db.query(ApiUsage.operation, func.sum(ApiUsage.credits_used), func.count(ApiUsage.id))
        .filter(ApiUsage.user_id == user_id)
        .group_by(ApiUsage.operation)
        .order_by(ApiUsage.operation)
        .all()
    )
    return [
        {"operation": operation, "total_credits": int(total or 0), "usage_count": int(count or 0)}
        for operation, total, count in rows
    ]
