"""Bootstrap for the users service: config, logging, context and web app."""

from __future__ import annotations

import contextlib
from collections.abc import AsyncIterator
from pathlib import Path

import structlog
from starlette.applications import Starlette

from flyaop.config.properties import AppProperties, UsersProperties
from flyaop.context.application_context import ApplicationContext
from flyaop.core.config import Config
from flyaop.logging.structlog_adapter import StructlogAdapter
from flyaop.users.aspect import UserServiceAspect
from flyaop.users.controller import UsersController
from flyaop.web.app import create_app

logger = structlog.get_logger("flyaop.users")


def build_context(config: Config) -> ApplicationContext:
    """Register the users beans; the aspect only when ``flyaop.users.aspect-enabled``."""
    ctx = ApplicationContext(config)
    ctx.register_bean(UsersController)
    if config.bind(UsersProperties).aspect_enabled:
        ctx.register_bean(UserServiceAspect)
    return ctx


async def start_context(config: Config) -> ApplicationContext:
    ctx = build_context(config)
    await ctx.start()
    return ctx


async def create_users_app(config: Config | None = None, configure_logging: bool = True) -> Starlette:
    """Start the context and build the Starlette app for the users service."""
    config = config if config is not None else Config.from_file()
    if configure_logging:
        StructlogAdapter().configure(config)

    ctx = await start_context(config)

    @contextlib.asynccontextmanager
    async def lifespan(_app: Starlette) -> AsyncIterator[None]:
        app_props = config.bind(AppProperties)
        logger.info("application_ready", name=app_props.name, version=app_props.version)
        yield
        await ctx.stop()

    app = create_app(context=ctx, lifespan=lifespan)
    app.state.flyaop_context = ctx
    return app


def load_config(path: str | Path | None, profiles: list[str] | None = None) -> Config:
    """Defaults, then *path* (``flyaop.yaml`` in the working dir when omitted)."""
    if path is None:
        candidate = Path("flyaop.yaml")
        path = candidate if candidate.is_file() else None
    return Config.from_file(path, active_profiles=profiles)
