# roles.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from skillgap.database import get_db
from skillgap.models.user import User
from skillgap.routers.dependencies import get_current_user
from skillgap.schemas.roles import RequiredSkill, RequiredSkillsUpdate, TargetRoleCreate, TargetRoleRead
from skillgap.services import requirement_service
from skillgap.services.errors import RequirementsAlreadySetError, RoleNotFoundError


router = APIRouter(prefix="/roles", tags=["roles"])


def _role_or_404(db: Session, role_id: str, user: User):
    try:
        return requirement_service.get_role(db, role_id, user.id)
    except RoleNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Role not found") from exc


def _role_out(db: Session, role) -> TargetRoleRead:
    return TargetRoleRead(
        id=role.id,
        target_career=role.target_career,
        created_at=role.created_at,
        required_skills=requirement_service.get_required_skills(db, role.id),
    )


@router.post("", response_model=TargetRoleRead, status_code=status.HTTP_201_CREATED)
def create_role(
    payload: TargetRoleCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> TargetRoleRead:
    role = requirement_service.create_role(db, current_user.id, payload.target_career, payload.required_skills)
    return _role_out(db, role)


@router.get("/{role_id}", response_model=TargetRoleRead)
def read_role(role_id: str, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)) -> TargetRoleRead:
    return _role_out(db, _role_or_404(db, role_id, current_user))


@router.get("/{role_id}/skills", response_model=list[RequiredSkill])
def read_required_skills(
    role_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[RequiredSkill]:
    role = _role_or_404(db, role_id, current_user)
    return requirement_service.get_required_skills(db, role.id)


@router.put("/{role_id}/skills", response_model=list[RequiredSkill])
def set_required_skills(
    role_id: str,
    payload: RequiredSkillsUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[RequiredSkill]:
    role = _role_or_404(db, role_id, current_user)
    try:
        return requirement_service.save_required_skills(db, role, payload.skills)
    except RequirementsAlreadySetError as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Required skills are already set for this role") from exc
