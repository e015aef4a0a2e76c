"""Command results returned by mutating domain operations."""

import functools
from dataclasses import dataclass
from typing import Any, Callable, Optional

import structlog

from pocketbook.domain.errors import DomainError, StoreError, store_failure

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CommandResult:
    """Outcome of a command: success with an optional value, or failure.

    ``kind`` is None on success and the error category (``validation``,
    ``not_found``, ``store``...) on failure.
    """

    ok: bool
    message: str
    value: Any = None
    kind: Optional[str] = None

    @classmethod
    def success(cls, message: str, value: Any = None) -> "CommandResult":
        return cls(ok=True, message=message, value=value)

    @classmethod
    def failure(cls, message: str, kind: str = DomainError.kind) -> "CommandResult":
        return cls(ok=False, message=message, kind=kind)

    def __bool__(self) -> bool:
        return self.ok


def command(func: Callable[..., CommandResult]) -> Callable[..., CommandResult]:
    """Turn raised errors into failure results.

    Domain errors keep their message and kind. Anything else (driver errors,
    I/O errors) is logged and reported as a store failure.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> CommandResult:
        try:
            return func(*args, **kwargs)
        except DomainError as exc:
            logger.info("command_rejected", command=func.__name__, kind=exc.kind, reason=str(exc))
            return CommandResult.failure(str(exc), kind=exc.kind)
        except Exception as exc:
            logger.error("command_failed", command=func.__name__, exc_info=True)
            action = func.__name__.replace("_", " ")
            return CommandResult.failure(store_failure(action, exc), kind=StoreError.kind)

    return wrapper
