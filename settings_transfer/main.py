from __future__ import annotations

from fastapi import FastAPI

from .db import Base, get_engine
from .env_settings import get_env
from .log_config import setup_logging
from .routers import settings as settings_router

# Register models on Base.metadata.
from . import models  # noqa: F401

_env = get_env()
setup_logging(level=_env.log_level, retention_days=_env.log_retention_days, log_dir=_env.log_dir)

Base.metadata.create_all(bind=get_engine())

app = FastAPI(title="Settings Transfer")
app.include_router(settings_router.router)
