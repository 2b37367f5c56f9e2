"""Users REST controller — one endpoint that succeeds, one that always fails."""

from __future__ import annotations

import structlog

from flyaop.container.stereotypes import rest_controller
from flyaop.kernel.exceptions import SimulatedError
from flyaop.web.mappings import get_mapping

logger = structlog.get_logger("flyaop.users")

SUCCESS = "success"
FAULT_MESSAGE = "Simulating an exception in getAllUsers()"


@rest_controller
class UsersController:
    """Stateless handlers for ``/users``.

    Neither handler knows about the aspect that wraps it.
    """

    @get_mapping("/users")
    async def list_users(self) -> str:
        """Return the fixed success token."""
        logger.info("get_all_users", controller=type(self).__name__)
        return SUCCESS

    @get_mapping("/users/exceptions")
    async def list_users_faulting(self) -> str:
        """Always raise :class:`SimulatedError`."""
        logger.info("get_all_users", controller=type(self).__name__)
        raise SimulatedError(FAULT_MESSAGE)
