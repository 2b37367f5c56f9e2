"""flyaop Logging — hexagonal logging port and structlog adapter."""

from flyaop.logging.port import LoggingPort
from flyaop.logging.structlog_adapter import StructlogAdapter

__all__ = ["LoggingPort", "StructlogAdapter"]
