# errors.py
from __future__ import annotations


class SkillGapError(RuntimeError):
    pass


class RoleNotFoundError(SkillGapError):
    pass


class RequirementsUnavailableError(SkillGapError):
    """The role has no requirements and they could not be generated.

    Retryable by the user later; it does not mean the role requires nothing.
    """


class GeneratorUnavailableError(SkillGapError):
    pass


class MalformedGeneratorResponseError(SkillGapError):
    pass


class AnalysisStoreError(SkillGapError):
    pass


class RequirementsAlreadySetError(SkillGapError):
    pass
