# analysis.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from skillgap.database import get_db
from skillgap.models.user import User
from skillgap.routers.dependencies import get_current_user, get_generator
from skillgap.schemas.analysis import AnalysisResponse
from skillgap.services import analysis_service
from skillgap.services.errors import AnalysisStoreError, RequirementsUnavailableError, RoleNotFoundError
from skillgap.services.generator_client import SkillGapGenerator


router = APIRouter(prefix="/roles", tags=["analysis"])

logger = logging.getLogger(__name__)


@router.post("/{role_id}/analysis", response_model=AnalysisResponse)
def recompute_analysis(
    role_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    generator: SkillGapGenerator = Depends(get_generator),
) -> AnalysisResponse:
    try:
        analysis = analysis_service.recompute(db, current_user.id, role_id, generator)
    except RoleNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Role not found") from exc
    except RequirementsUnavailableError as exc:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)) from exc
    except AnalysisStoreError as exc:
        logger.error("analysis.recompute_failed role_id=%s user_id=%s", role_id, current_user.id)
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Analysis could not be saved") from exc
    return AnalysisResponse(analysis=analysis, message="Skill gap analysis completed")


@router.get("/{role_id}/analysis", response_model=AnalysisResponse)
def read_latest_analysis(
    role_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> AnalysisResponse:
    try:
        analysis = analysis_service.get_latest(db, current_user.id, role_id)
    except RoleNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Role not found") from exc
    if analysis is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No analysis yet for this role")
    return AnalysisResponse(analysis=analysis, message="Latest skill gap analysis")
