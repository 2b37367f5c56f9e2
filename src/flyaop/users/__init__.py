"""Users service — a two-endpoint controller wrapped by a logging aspect."""

from flyaop.users.application import build_context, create_users_app, load_config, start_context
from flyaop.users.aspect import UserServiceAspect
from flyaop.users.controller import FAULT_MESSAGE, SUCCESS, UsersController

__all__ = [
    "FAULT_MESSAGE",
    "SUCCESS",
    "UserServiceAspect",
    "UsersController",
    "build_context",
    "create_users_app",
    "load_config",
    "start_context",
]
