from __future__ import annotations

import os
from typing import Any, Sequence

import pytest
from fastapi.testclient import TestClient


def pytest_configure() -> None:
    # Ensure the SQLAlchemy engine is created against sqlite for tests.
    os.environ["DB_URL"] = "sqlite:///./test.db"
    os.environ["ORM_DB_URL"] = "sqlite:///./test.db"
    os.environ["JWT_SECRET"] = "test-secret"

    # Ensure local .env cannot point tests at a real generator.
    os.environ["ENVIRONMENT"] = "test"
    os.environ["GENERATOR_API_KEY"] = ""


class FakeGenerator:
    """In-memory stand-in for the chat completions generator."""

    def __init__(
        self,
        required_skills: Sequence[Any] = (),
        recommendations: list[str] | None = None,
        skill_recommendations: dict[str, list[str]] | None = None,
        requirements_error: Exception | None = None,
        recommendations_error: Exception | None = None,
    ) -> None:
        self.required_skills = list(required_skills)
        self.recommendations = recommendations or []
        self.skill_recommendations = skill_recommendations or {}
        self.requirements_error = requirements_error
        self.recommendations_error = recommendations_error
        self.requirement_calls: list[str] = []
        self.recommendation_calls: list[tuple[str, list[str]]] = []

    def generate_required_skills(self, target_career: str):
        self.requirement_calls.append(target_career)
        if self.requirements_error is not None:
            raise self.requirements_error
        return list(self.required_skills)

    def generate_recommendations(self, target_career: str, gaps):
        from skillgap.schemas.analysis import RecommendationBundle

        self.recommendation_calls.append((target_career, [g.skill_name for g in gaps]))
        if self.recommendations_error is not None:
            raise self.recommendations_error
        return RecommendationBundle(
            recommendations=list(self.recommendations),
            skill_recommendations=dict(self.skill_recommendations),
        )


def reset_database() -> None:
    from skillgap.database import Base, engine
    import skillgap.models  # noqa: F401

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)


@pytest.fixture()
def db() -> Any:
    from skillgap.database import SessionLocal

    reset_database()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def fake_generator() -> FakeGenerator:
    return FakeGenerator()


@pytest.fixture()
def client(fake_generator: FakeGenerator) -> Any:
    from skillgap.main import create_app
    from skillgap.routers.dependencies import get_generator

    reset_database()
    app = create_app()
    app.dependency_overrides[get_generator] = lambda: fake_generator
    with TestClient(app) as c:
        yield c


def create_user(email: str = "student@example.com") -> int:
    from skillgap.database import SessionLocal
    from skillgap.models.user import User

    with SessionLocal() as session:
        user = User(email=email, name=email.split("@")[0])
        session.add(user)
        session.commit()
        session.refresh(user)
        return user.id


def auth_headers(user_id: int) -> dict[str, str]:
    from skillgap.utils.jwt_handler import create_access_token

    return {"Authorization": f"Bearer {create_access_token(user_id)}"}
