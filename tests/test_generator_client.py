from __future__ import annotations

import json
from typing import Any

import pytest
import requests

from skillgap.config import Settings
from skillgap.schemas.analysis import SkillGap
from skillgap.services.errors import GeneratorUnavailableError, MalformedGeneratorResponseError
from skillgap.services.generator_client import (
    ChatCompletionsGenerator,
    extract_json_object,
    parse_recommendations,
    parse_required_skills,
)


class _FakeResponse:
    def __init__(self, payload: Any, status_code: int = 200) -> None:
        self._payload = payload
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"status {self.status_code}")

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class _FakeSession:
    def __init__(self, response: _FakeResponse | Exception) -> None:
        self.response = response
        self.calls: list[dict[str, Any]] = []

    def post(self, url: str, **kwargs: Any) -> _FakeResponse:
        self.calls.append({"url": url, **kwargs})
        if isinstance(self.response, Exception):
            raise self.response
        return self.response


def _reply(content: str) -> _FakeResponse:
    return _FakeResponse({"choices": [{"message": {"content": content}}]})


def _settings(**overrides: Any) -> Settings:
    values = {"generator_api_key": "test-key", "generator_base_url": "https://llm.example.com/"}
    values.update(overrides)
    return Settings(**values)


def test_extract_json_from_fenced_block() -> None:
    content = 'Here you go:\n```json\n{"skills": []}\n```\nGood luck'
    assert extract_json_object(content) == {"skills": []}


def test_extract_json_from_bare_object() -> None:
    assert extract_json_object('Sure! {"recommendations": ["a"]} done') == {"recommendations": ["a"]}


def test_extract_json_rejects_garbage() -> None:
    with pytest.raises(MalformedGeneratorResponseError):
        extract_json_object("no json here")
    with pytest.raises(MalformedGeneratorResponseError):
        extract_json_object("")


def test_parse_required_skills_clamps_and_defaults() -> None:
    skills = parse_required_skills(
        {
            "skills": [
                {"skillName": "SQL", "requiredLevel": 9, "priority": "critical"},
                {"skillName": "Statistics", "requiredLevel": None, "priority": "urgent"},
                {"skillName": "sql", "requiredLevel": 2, "priority": "low"},
                {"skillName": "", "requiredLevel": 2},
                "not a dict",
            ]
        }
    )
    assert [(s.skill_name, s.required_level, s.priority) for s in skills] == [
        ("SQL", 5, "critical"),
        ("Statistics", 3, "medium"),
    ]


def test_parse_required_skills_requires_list() -> None:
    with pytest.raises(MalformedGeneratorResponseError):
        parse_required_skills({"skills": "SQL"})


def test_parse_recommendations_shape() -> None:
    bundle = parse_recommendations(
        {"recommendations": ["Build a project"], "skillRecommendations": {"SQL": ["Practice joins"], "Bad": "x"}}
    )
    assert bundle.recommendations == ["Build a project"]
    assert bundle.skill_recommendations == {"SQL": ["Practice joins"]}
    with pytest.raises(MalformedGeneratorResponseError):
        parse_recommendations({"recommendations": "Build a project"})


def test_generate_required_skills_posts_chat_completion() -> None:
    content = json.dumps({"skills": [{"skillName": "Python", "requiredLevel": 4, "priority": "high"}]})
    session = _FakeSession(_reply(content))
    generator = ChatCompletionsGenerator(_settings(), session=session)  # type: ignore[arg-type]

    skills = generator.generate_required_skills("Data Scientist")

    assert [(s.skill_name, s.required_level, s.priority) for s in skills] == [("Python", 4, "high")]
    call = session.calls[0]
    assert call["url"] == "https://llm.example.com/chat/completions"
    assert call["headers"]["Authorization"] == "Bearer test-key"
    assert "Data Scientist" in call["json"]["messages"][0]["content"]
    assert call["timeout"] == 30.0


def test_generate_recommendations_sends_only_top_gaps() -> None:
    content = json.dumps({"recommendations": ["Start with SQL"], "skillRecommendations": {}})
    session = _FakeSession(_reply(content))
    generator = ChatCompletionsGenerator(_settings(generator_max_gaps=2), session=session)  # type: ignore[arg-type]
    gaps = [
        SkillGap(skill_name=name, current_level=0, required_level=3, gap=3, priority="high")
        for name in ("SQL", "Python", "Tableau")
    ]

    bundle = generator.generate_recommendations("Data Analyst", gaps)

    assert bundle.recommendations == ["Start with SQL"]
    prompt = session.calls[0]["json"]["messages"][0]["content"]
    assert "SQL (current: 0, required: 3)" in prompt
    assert "Tableau" not in prompt


def test_generate_recommendations_without_gaps_skips_request() -> None:
    session = _FakeSession(_reply("{}"))
    generator = ChatCompletionsGenerator(_settings(), session=session)  # type: ignore[arg-type]
    assert generator.generate_recommendations("Data Analyst", []).recommendations == []
    assert session.calls == []


def test_unconfigured_generator_is_unavailable() -> None:
    session = _FakeSession(_reply("{}"))
    generator = ChatCompletionsGenerator(_settings(generator_api_key=""), session=session)  # type: ignore[arg-type]
    with pytest.raises(GeneratorUnavailableError):
        generator.generate_required_skills("Data Analyst")
    assert session.calls == []


def test_transport_failures_are_unavailable() -> None:
    timeout = _FakeSession(requests.Timeout("slow"))
    with pytest.raises(GeneratorUnavailableError):
        ChatCompletionsGenerator(_settings(), session=timeout).generate_required_skills("X")  # type: ignore[arg-type]

    server_error = _FakeSession(_FakeResponse({}, status_code=502))
    with pytest.raises(GeneratorUnavailableError):
        ChatCompletionsGenerator(_settings(), session=server_error).generate_required_skills("X")  # type: ignore[arg-type]


def test_unexpected_payload_is_malformed() -> None:
    session = _FakeSession(_FakeResponse({"choices": []}))
    with pytest.raises(MalformedGeneratorResponseError):
        ChatCompletionsGenerator(_settings(), session=session).generate_required_skills("X")  # type: ignore[arg-type]
