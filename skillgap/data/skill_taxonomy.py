"""Fixed alias and category tables used by the skill matcher.

Both tables are plain data, normalized once at import into read-only
structures. Bump TAXONOMY_VERSION whenever an entry changes; /health/db
reports it so a deployment can be checked against the expected tables.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from skillgap.services.skill_normalizer import normalize_skill_name


TAXONOMY_VERSION = "2024.1"

# Each group lists names that mean the same skill (bidirectional).
_ALIAS_GROUPS: tuple[tuple[str, ...], ...] = (
    ("javascript", "js", "ecmascript"),
    ("typescript", "ts"),
    ("python", "py"),
    ("node.js", "nodejs", "node"),
    ("react", "react.js", "reactjs"),
    ("vue", "vue.js", "vuejs"),
    ("postgresql", "postgres", "psql"),
    ("mongodb", "mongo"),
    ("structured query language", "sql"),
    ("kubernetes", "k8s"),
    ("amazon web services", "aws"),
    ("google cloud platform", "google cloud", "gcp"),
    ("microsoft azure", "azure"),
    ("continuous integration", "ci/cd", "cicd"),
    ("machine learning", "ml"),
    ("deep learning", "dl"),
    ("artificial intelligence", "ai"),
    ("natural language processing", "nlp"),
    ("extract transform load", "etl"),
    ("business intelligence", "bi"),
    ("application programming interface", "api", "rest api", "restful api"),
    ("object oriented programming", "oop"),
    ("test driven development", "tdd"),
    ("quality assurance", "qa"),
    ("user experience", "ux", "ux design"),
    ("user interface", "ui", "ui design"),
    ("search engine optimization", "seo"),
    ("customer relationship management", "crm"),
    ("key performance indicators", "kpi", "kpis"),
    ("human resources", "hr"),
    ("c#", "csharp", "c sharp"),
    ("c++", "cpp"),
    ("golang", "go"),
    ("microsoft excel", "excel", "ms excel"),
)

# Broad categories of transferable skills: category name -> related phrases.
_CATEGORY_PHRASES: dict[str, tuple[str, ...]] = {
    "leadership": (
        "team management",
        "people management",
        "team lead",
        "mentoring",
        "coaching",
        "supervision",
        "managing teams",
        "delegation",
    ),
    "communication": (
        "public speaking",
        "presentation",
        "writing",
        "technical writing",
        "stakeholder management",
        "negotiation",
        "storytelling",
        "facilitation",
    ),
    "analytical": (
        "data analysis",
        "analytics",
        "problem solving",
        "critical thinking",
        "research",
        "statistics",
        "quantitative analysis",
    ),
    "project management": (
        "project planning",
        "program management",
        "agile",
        "scrum",
        "kanban",
        "roadmapping",
        "scheduling",
    ),
    "collaboration": (
        "teamwork",
        "cross functional",
        "partnership",
        "relationship building",
    ),
}


def _build_alias_index(groups: tuple[tuple[str, ...], ...]) -> Mapping[str, frozenset[int]]:
    index: dict[str, set[int]] = {}
    for group_id, group in enumerate(groups):
        for name in group:
            key = normalize_skill_name(name)
            if key:
                index.setdefault(key, set()).add(group_id)
    return MappingProxyType({key: frozenset(ids) for key, ids in index.items()})


def _build_category_terms(categories: dict[str, tuple[str, ...]]) -> tuple[tuple[str, tuple[str, ...]], ...]:
    built: list[tuple[str, tuple[str, ...]]] = []
    for category, phrases in categories.items():
        terms = [normalize_skill_name(category)] + [normalize_skill_name(p) for p in phrases]
        built.append((category, tuple(t for t in terms if t)))
    return tuple(built)


# normalized alias -> ids of the alias groups it belongs to
ALIAS_INDEX: Mapping[str, frozenset[int]] = _build_alias_index(_ALIAS_GROUPS)

# (category, normalized terms) in declaration order
CATEGORY_TERMS: tuple[tuple[str, tuple[str, ...]], ...] = _build_category_terms(_CATEGORY_PHRASES)


def alias_groups_for(normalized_name: str) -> frozenset[int]:
    return ALIAS_INDEX.get(normalized_name, frozenset())


def categories_for(normalized_name: str) -> frozenset[str]:
    """Categories whose name or a related phrase occurs inside the given name."""
    if not normalized_name:
        return frozenset()
    return frozenset(
        category
        for category, terms in CATEGORY_TERMS
        if any(term in normalized_name for term in terms)
    )
