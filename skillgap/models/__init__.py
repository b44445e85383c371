# __init__.py
from skillgap.models.api_usage import ApiUsage
from skillgap.models.skill_gap_analysis import SkillGapAnalysisRecord
from skillgap.models.target_role import TargetRole, TargetRoleSkill
from skillgap.models.user import User
from skillgap.models.user_skill import UserSkill

__all__ = [
	"ApiUsage",
	"SkillGapAnalysisRecord",
	"TargetRole",
	"TargetRoleSkill",
	"User",
	"UserSkill",
]
