# users.py
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session
from skillgap.database import get_db
from skillgap.models.user import User
from skillgap.routers.dependencies import get_current_user
from skillgap.schemas.skills import SkillListResponse, SkillUpsertRequest
from skillgap.schemas.usage import ApiUsageSummary
from skillgap.services import skill_profile_service
from skillgap.services.usage_service import summarize_api_usage


router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me/skills", response_model=SkillListResponse)
def read_my_skills(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)) -> SkillListResponse:
    return SkillListResponse(skills=skill_profile_service.list_user_skills(db, current_user.id))


@router.put("/me/skills", response_model=SkillListResponse)
def upsert_my_skills(
    payload: SkillUpsertRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> SkillListResponse:
    skill_profile_service.upsert_user_skills(db, current_user.id, payload.skills)
    return SkillListResponse(skills=skill_profile_service.list_user_skills(db, current_user.id))


@router.delete("/me/skills/{skill_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_my_skill(
    skill_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> Response:
    if not skill_profile_service.delete_user_skill(db, current_user.id, skill_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Skill not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/me/usage", response_model=list[ApiUsageSummary])
def read_my_usage(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)) -> list[ApiUsageSummary]:
    return [ApiUsageSummary(**row) for row in summarize_api_usage(db, current_user.id)]
