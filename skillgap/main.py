# main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from skillgap.config import settings
from skillgap.config import build_sqlalchemy_db_url
from skillgap.database import Base, engine
import skillgap.models  # noqa: F401  # ensure all models are registered
from skillgap.api.routes.health import router as health_router
from skillgap.routers import analysis, roles, users


def create_app() -> FastAPI:
    application = FastAPI(
        title=settings.app_name,
        version=settings.version,
        debug=settings.debug,
    )
    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Health endpoints (do not depend on API_PREFIX)
    application.include_router(health_router)

    application.include_router(users.router, prefix=settings.api_prefix)
    application.include_router(roles.router, prefix=settings.api_prefix)
    application.include_router(analysis.router, prefix=settings.api_prefix)

    # Avoid accidental schema changes in shared MySQL databases.
    # For local/test sqlite usage, auto-create ORM tables is still convenient.
    db_url = build_sqlalchemy_db_url(settings)
    if db_url.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)
    logging.getLogger("uvicorn.error").info("skillgap app created environment=%s", settings.environment)
    return application


app = create_app()
