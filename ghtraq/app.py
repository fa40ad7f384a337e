"""the beautiful world start from here."""

from __future__ import annotations

from fastapi import FastAPI

from ghtraq.config import Settings, settings as default_settings
from ghtraq.routers import gh, info


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the relay app; ``settings`` are validated before use."""
    app = FastAPI(title="GitHub → traQ webhook relay")
    app.state.settings = (settings or default_settings).validate()
    app.include_router(info.router)
    app.include_router(gh.router)
    return app
