# __init__.py
from skillgap.schemas.analysis import AnalysisResponse, RecommendationBundle, SkillGap, SkillGapAnalysis, SkillMatch
from skillgap.schemas.roles import RequiredSkill, RequiredSkillsUpdate, TargetRoleCreate, TargetRoleRead
from skillgap.schemas.skills import SkillInput, SkillListResponse, SkillRecord, SkillUpsertRequest
from skillgap.schemas.user import TokenData

__all__ = [
	"AnalysisResponse",
	"RecommendationBundle",
	"SkillGap",
	"SkillGapAnalysis",
	"SkillMatch",
	"RequiredSkill",
	"RequiredSkillsUpdate",
	"TargetRoleCreate",
	"TargetRoleRead",
	"SkillInput",
	"SkillListResponse",
	"SkillRecord",
	"SkillUpsertRequest",
	"TokenData",
]
