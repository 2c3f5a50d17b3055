import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

_document_scope: ContextVar[str] = ContextVar("docfin_document_scope", default="")


class Log:
    """Centralized pipeline logging.

    Messages emitted inside ``Log.document(name)`` are prefixed with the
    document name so interleaved invocations stay readable.
    """

    _logger: logging.Logger = logging.getLogger("docfin")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Configure the logger with the specified level and stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    @contextmanager
    def document(cls, name: str) -> Iterator[None]:
        token = _document_scope.set(name)
        try:
            yield
        finally:
            _document_scope.reset(token)

    @classmethod
    def _scoped(cls, message: str) -> str:
        scope = _document_scope.get()
        return f"[{scope}] {message}" if scope else message

    @classmethod
    def info(cls, message: str, **kwargs: object) -> None:
        cls._logger.info(cls._scoped(message), extra=kwargs)

    @classmethod
    def error(cls, message: str, **kwargs: object) -> None:
        cls._logger.error(cls._scoped(message), extra=kwargs)

    @classmethod
    def warning(cls, message: str, **kwargs: object) -> None:
        """Log a recovered failure or degraded result."""
        cls._logger.warning(cls._scoped(message), extra=kwargs)

    @classmethod
    def debug(cls, message: str, **kwargs: object) -> None:
        cls._logger.debug(cls._scoped(message), extra=kwargs)
