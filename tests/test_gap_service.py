from __future__ import annotations

from skillgap.schemas.analysis import SkillGap
from skillgap.schemas.roles import RequiredSkill
from skillgap.schemas.skills import SkillRecord
from skillgap.services.gap_service import (
    attach_skill_recommendations,
    calculate_readiness,
    calculate_skill_gaps,
    order_remediation,
)


def _gap(name: str, priority: str, gap: int, required: int = 5) -> SkillGap:
    return SkillGap(
        skill_name=name,
        current_level=required - gap,
        required_level=required,
        gap=gap,
        priority=priority,
    )


def test_example_sql_and_leadership() -> None:
    required = [
        RequiredSkill(skill_name="SQL", required_level=4, priority="critical"),
        RequiredSkill(skill_name="Leadership", required_level=3, priority="high"),
    ]
    user = [
        SkillRecord(skill_name="sql", proficiency_level=2),
        SkillRecord(skill_name="Team Management", proficiency_level=4),
    ]

    result = calculate_skill_gaps(required, user)
    sql, leadership = result.gaps

    assert (sql.current_level, sql.gap, sql.priority) == (2, 2, "critical")
    assert sql.matched_user_skill is None
    assert (leadership.current_level, leadership.gap, leadership.priority) == (2, 1, "high")
    assert leadership.matched_user_skill == "Team Management (transferable)"
    assert calculate_readiness(result.gaps) == 57

    assert len(result.matches) == 1
    match = result.matches[0]
    assert match.required_skill == "Leadership"
    assert match.match_type == "transferable"


def test_empty_user_skills_give_full_gaps_and_zero_readiness() -> None:
    required = [RequiredSkill(skill_name="Python", required_level=5, priority="critical")]
    result = calculate_skill_gaps(required, [])
    assert result.gaps[0].current_level == 0
    assert result.gaps[0].gap == 5
    assert calculate_readiness(result.gaps) == 0


def test_readiness_caps_over_qualification() -> None:
    required = [
        RequiredSkill(skill_name="Python", required_level=2, priority="high"),
        RequiredSkill(skill_name="Docker", required_level=4, priority="high"),
    ]
    user = [SkillRecord(skill_name="Python", proficiency_level=5)]
    result = calculate_skill_gaps(required, user)
    # 2 of 6 levels present; the extra Python levels do not offset Docker.
    assert calculate_readiness(result.gaps) == 33


def test_readiness_bounds() -> None:
    assert calculate_readiness([]) == 0
    satisfied = [_gap("A", "high", 0, required=3), _gap("B", "low", 0, required=1)]
    assert calculate_readiness(satisfied) == 100
    almost = [_gap("A", "high", 0, required=5)] * 99 + [_gap("B", "low", 1, required=5)]
    assert calculate_readiness(almost) < 100


def test_readiness_is_never_100_with_an_open_gap() -> None:
    # 199 / 200 rounds to 100 without the cap.
    required = [RequiredSkill(skill_name=f"Skill{i}", required_level=5, priority="high") for i in range(40)]
    user = [SkillRecord(skill_name=f"Skill{i}", proficiency_level=5) for i in range(39)]
    user.append(SkillRecord(skill_name="Skill39", proficiency_level=4))
    result = calculate_skill_gaps(required, user)

    assert [(g.skill_name, g.gap) for g in order_remediation(result.gaps)] == [("Skill39", 1)]
    assert calculate_readiness(result.gaps) == 99


def test_readiness_rounds_half_up() -> None:
    # 5 / 8 = 62.5
    gaps = [
        SkillGap(skill_name="A", current_level=5, required_level=5, gap=0, priority="high"),
        SkillGap(skill_name="B", current_level=0, required_level=3, gap=3, priority="high"),
    ]
    assert calculate_readiness(gaps) == 63


def test_order_remediation_priority_then_gap_then_input_order() -> None:
    gaps = [
        _gap("low-big", "low", 5),
        _gap("high-small", "high", 1),
        _gap("critical-small", "critical", 1),
        _gap("high-big", "high", 3),
        _gap("high-small-2", "high", 1),
        _gap("satisfied", "critical", 0),
    ]
    ordered = [g.skill_name for g in order_remediation(gaps)]
    assert ordered == ["critical-small", "high-big", "high-small", "high-small-2", "low-big"]


def test_order_remediation_never_includes_satisfied_gaps() -> None:
    ordered = order_remediation([_gap("done", "critical", 0), _gap("open", "low", 2)])
    assert [g.skill_name for g in ordered] == ["open"]
    assert all(g.gap > 0 for g in ordered)


def test_unknown_priority_sorts_last() -> None:
    ordered = order_remediation([_gap("odd", "someday", 5), _gap("low", "low", 1)])
    assert [g.skill_name for g in ordered] == ["low", "odd"]


def test_attach_skill_recommendations_by_exact_name() -> None:
    gaps = [_gap("SQL", "critical", 2), _gap("Leadership", "high", 1)]
    merged = attach_skill_recommendations(gaps, {"SQL": ["Practice joins"], "leadership": ["ignored"]})
    assert merged[0].recommendations == ["Practice joins"]
    assert merged[1].recommendations == []
