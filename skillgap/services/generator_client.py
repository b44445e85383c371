"""Client for the external requirement / recommendation generator.

The generator is an OpenAI-compatible chat completions endpoint (Perplexity
by default). Both calls ask for a JSON document and parse it out of the
model's reply; everything about *how* to close a gap is delegated here.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Protocol, Sequence

import requests
from pydantic import ValidationError

from skillgap.config import Settings, is_generator_configured
from skillgap.schemas.analysis import RecommendationBundle, SkillGap
from skillgap.schemas.roles import PRIORITY_RANK, RequiredSkill
from skillgap.services.errors import GeneratorUnavailableError, MalformedGeneratorResponseError


logger = logging.getLogger(__name__)

_FENCED_JSON_RE = re.compile(r"```(?:json)?\s*\n?([\s\S]*?)\n?```")
_OBJECT_RE = re.compile(r"\{[\s\S]*\}")

DEFAULT_REQUIRED_LEVEL = 3
DEFAULT_PRIORITY = "medium"


class SkillGapGenerator(Protocol):
    def generate_required_skills(self, target_career: str) -> list[RequiredSkill]:
        ...

    def generate_recommendations(self, target_career: str, gaps: Sequence[SkillGap]) -> RecommendationBundle:
        ...


def extract_json_object(content: str) -> dict[str, Any]:
    if not content:
        raise MalformedGeneratorResponseError("empty generator reply")
    fenced = _FENCED_JSON_RE.search(content)
    if fenced is not None:
        raw = fenced.group(1)
    else:
        bare = _OBJECT_RE.search(content)
        raw = bare.group(0) if bare is not None else content
    try:
        parsed = json.loads(raw)
    except ValueError as exc:
        raise MalformedGeneratorResponseError("generator reply is not valid JSON") from exc
    if not isinstance(parsed, dict):
        raise MalformedGeneratorResponseError("generator reply is not a JSON object")
    return parsed


def _clamp_level(value: Any) -> int:
    try:
        level = int(value)
    except (TypeError, ValueError):
        return DEFAULT_REQUIRED_LEVEL
    if level == 0:
        return DEFAULT_REQUIRED_LEVEL
    return max(1, min(5, level))


def parse_required_skills(payload: dict[str, Any]) -> list[RequiredSkill]:
    items = payload.get("skills")
    if not isinstance(items, list):
        raise MalformedGeneratorResponseError("generator reply has no 'skills' list")

    skills: list[RequiredSkill] = []
    seen: set[str] = set()
    for item in items:
        if not isinstance(item, dict):
            continue
        name = str(item.get("skillName") or item.get("skill_name") or "").strip()
        if not name or name.lower() in seen:
            continue
        priority = str(item.get("priority") or "").strip().lower()
        if priority not in PRIORITY_RANK:
            priority = DEFAULT_PRIORITY
        level = item.get("requiredLevel", item.get("required_level"))
        try:
            skills.append(RequiredSkill(skill_name=name, required_level=_clamp_level(level), priority=priority))
        except ValidationError:
            logger.warning("generator.skill_rejected name=%r", name[:80])
            continue
        seen.add(name.lower())
    return skills


def parse_recommendations(payload: dict[str, Any]) -> RecommendationBundle:
    general = payload.get("recommendations") or []
    per_skill = payload.get("skillRecommendations") or payload.get("skill_recommendations") or {}
    if not isinstance(general, list) or not isinstance(per_skill, dict):
        raise MalformedGeneratorResponseError("generator recommendations have the wrong shape")
    cleaned: dict[str, list[str]] = {}
    for skill_name, texts in per_skill.items():
        if isinstance(texts, list):
            cleaned[str(skill_name)] = [str(t) for t in texts if t]
    try:
        return RecommendationBundle(
            recommendations=[str(r) for r in general if r],
            skill_recommendations=cleaned,
        )
    except ValidationError as exc:
        raise MalformedGeneratorResponseError("generator recommendations failed validation") from exc


def _required_skills_prompt(target_career: str) -> str:
    return f"""List the most important skills required for a {target_career} role.

Your response must be valid JSON:
{{
  "skills": [
    {{
      "skillName": "Skill name",
      "requiredLevel": 4,
      "priority": "critical|high|medium|low"
    }}
  ]
}}

Include 6-10 skills with:
- requiredLevel: 1 (Beginner) to 5 (Expert)
- priority: how critical the skill is for the role"""


def _recommendations_prompt(target_career: str, gaps: Sequence[SkillGap]) -> str:
    described = ", ".join(
        f"{g.skill_name} (current: {g.current_level}, required: {g.required_level})" for g in gaps
    )
    return f"""A person wants to become a {target_career}. Their main skill gaps are: {described}.

Provide 3-5 actionable recommendations to help them close these gaps. Focus on practical steps they can take immediately.

Your response must be valid JSON:
{{
  "recommendations": [
    "Recommendation 1",
    "Recommendation 2"
  ],
  "skillRecommendations": {{
    "SkillName": ["Specific recommendation for this skill"]
  }}
}}"""


class ChatCompletionsGenerator:
    def __init__(self, settings: Settings, session: requests.Session | None = None) -> None:
        self._settings = settings
        self._session = session or requests.Session()

    @property
    def max_gaps(self) -> int:
        return self._settings.generator_max_gaps

    def _complete(self, prompt: str, *, temperature: float) -> str:
        if not is_generator_configured(self._settings):
            raise GeneratorUnavailableError("generator API key not configured")

        url = f"{self._settings.generator_base_url.rstrip('/')}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self._settings.generator_api_key}",
            "Content-Type": "application/json",
        }
        body = {
            "model": self._settings.generator_model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": temperature,
        }
        try:
            response = self._session.post(
                url,
                headers=headers,
                json=body,
                timeout=self._settings.generator_timeout_seconds,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            logger.warning("generator.request_failed url=%s error=%s", url, exc)
            raise GeneratorUnavailableError("generator request failed") from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise MalformedGeneratorResponseError("generator response is not JSON") from exc

        try:
            return str(data["choices"][0]["message"]["content"])
        except (KeyError, IndexError, TypeError) as exc:
            raise MalformedGeneratorResponseError("generator response has no message content") from exc

    def generate_required_skills(self, target_career: str) -> list[RequiredSkill]:
        content = self._complete(_required_skills_prompt(target_career), temperature=0.2)
        return parse_required_skills(extract_json_object(content))

    def generate_recommendations(self, target_career: str, gaps: Sequence[SkillGap]) -> RecommendationBundle:
        if not gaps:
            return RecommendationBundle()
        top = list(gaps)[: self.max_gaps]
        content = self._complete(_recommendations_prompt(target_career, top), temperature=0.3)
        return parse_recommendations(extract_json_object(content))
