"""Logging aspect around every UsersController method."""

from __future__ import annotations

from typing import Any

import structlog

from flyaop.aop.decorators import after, after_returning, after_throwing, around, aspect, before
from flyaop.aop.types import JoinPoint, Outcome

logger = structlog.get_logger("flyaop.users.aspect")

USERS_CONTROLLER_METHODS = "execution(* flyaop.users.controller.UsersController.*(..))"


@aspect
class UserServiceAspect:
    """Logs every lifecycle point of a UsersController call.

    The around advice swallows any error from the controller and returns
    ``None`` in its place, so with this aspect installed the faulting
    endpoint answers without an error. The error is still visible through
    ``after_throwing``.
    """

    @before(USERS_CONTROLLER_METHODS)
    def before_advice(self, jp: JoinPoint) -> None:
        logger.info("before_advice", **jp.describe())

    @after(USERS_CONTROLLER_METHODS)
    def after_advice(self, jp: JoinPoint, outcome: Outcome | None) -> None:
        logger.info("after_advice", executed=outcome is not None, **jp.describe())

    @after_returning(USERS_CONTROLLER_METHODS)
    def after_returning_advice(self, jp: JoinPoint, result: Any) -> None:
        logger.info("after_returning_advice", result=result, **jp.describe())

    @after_throwing(USERS_CONTROLLER_METHODS)
    def after_throwing_advice(self, jp: JoinPoint, exc: Exception) -> None:
        logger.info("after_throwing_advice", **jp.describe())
        logger.info("exception_message", message=str(exc))

    @around(USERS_CONTROLLER_METHODS)
    async def around_advice(self, jp: JoinPoint) -> Any | None:
        logger.info("around_advice_before", **jp.describe())
        try:
            return await jp.proceed()  # type: ignore[misc]
        except Exception:
            logger.exception("around_advice_suppressed", **jp.describe())
            return None
        finally:
            logger.info("around_advice_after", **jp.describe())
