"""Logger capability used by client operations.

Operations report through an object implementing the :class:`Logger`
protocol. ``fail`` and ``crash`` decide whether a reported failure
ultimately raises; the operations themselves only hand the failure over.

Example:
    class QuietLogger:
        def info(self, *args): ...
        def warn(self, *args): ...
        def fail(self, code, cause, *args):
            metrics.increment(code)
        def crash(self, code, cause, *args):
            raise cause
"""

import logging
from typing import Any, NoReturn, Protocol, runtime_checkable

from .errors import OperationFailed

FAILED_API_SERVER_ERROR = "_failed_api_server_error"


@runtime_checkable
class Logger(Protocol):
    """Protocol for operation loggers."""

    def info(self, *args: Any) -> None:
        ...

    def warn(self, *args: Any) -> None:
        ...

    def fail(self, code: str, cause: Any, *args: Any) -> None:
        """Report a failure of the current operation."""
        ...

    def crash(self, code: str, cause: Any, *args: Any) -> None:
        """Report an unrecoverable failure."""
        ...


class DefaultLogger:
    """Logger backed by the standard ``logging`` module.

    ``fail`` and ``crash`` log the failure and then raise: the original
    exception when it is passed on its own, otherwise an
    :class:`OperationFailed` carrying the joined message.
    """

    def __init__(self, name: str = "gql_autoclient"):
        self._logger = logging.getLogger(name)

    def info(self, *args: Any) -> None:
        self._logger.info(_join(args))

    def warn(self, *args: Any) -> None:
        self._logger.warning(_join(args))

    def fail(self, code: str, cause: Any, *args: Any) -> NoReturn:
        self._logger.error("%s: %s", code, _join((cause, *args)))
        raise _to_exception(code, cause, args)

    def crash(self, code: str, cause: Any, *args: Any) -> NoReturn:
        self._logger.critical("%s: %s", code, _join((cause, *args)))
        raise _to_exception(code, cause, args)


def _join(args: tuple[Any, ...]) -> str:
    return "".join(str(a) for a in args)


def _to_exception(code: str, cause: Any, args: tuple[Any, ...]) -> BaseException:
    if isinstance(cause, BaseException) and not args:
        return cause
    return OperationFailed(code, _join((cause, *args)))
