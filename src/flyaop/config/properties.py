"""Application, server and users-module configuration properties."""

from __future__ import annotations

from dataclasses import dataclass

from flyaop.core.config import config_properties


@config_properties(prefix="flyaop.app")
@dataclass
class AppProperties:
    """Application metadata (flyaop.app.*)."""

    name: str = "flyaop-users"
    version: str = "0.1.0"


@config_properties(prefix="flyaop.server")
@dataclass
class ServerProperties:
    """Configuration for the uvicorn server (flyaop.server.*)."""

    host: str = "0.0.0.0"
    port: int = 8080


@config_properties(prefix="flyaop.users")
@dataclass
class UsersProperties:
    """Users module switches (flyaop.users.*).

    ``aspect_enabled`` controls whether ``UserServiceAspect`` is registered.
    With it off, controller errors reach the HTTP layer unchanged.
    """

    aspect_enabled: bool = True
