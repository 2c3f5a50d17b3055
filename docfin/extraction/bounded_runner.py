"""Run a single blocking call in a child process under a wall-clock timeout.

The child is always terminated and joined before ``run`` returns, so a hung
parser never outlives its attempt.
"""

import multiprocessing
import queue
import threading
import time
from collections.abc import Callable, Sequence
from typing import Any

from docfin.extraction.cancellation import raise_if_cancelled

_POLL_INTERVAL_SECONDS = 0.1
_JOIN_GRACE_SECONDS = 5.0


class AttemptTimeoutError(Exception):
    """Raised when an attempt exceeds its wall-clock budget."""


class AttemptFailedError(Exception):
    """Raised when the target raised inside the child process.

    ``error_type`` is the class name of the original exception, which does not
    cross the process boundary itself.
    """

    def __init__(self, error_type: str, message: str) -> None:
        super().__init__(message)
        self.error_type = error_type


def _run_target(target: Callable[..., Any], args: Sequence[Any], results: Any) -> None:
    try:
        value = target(*args)
    except Exception as exc:
        results.put(("error", type(exc).__name__, str(exc)))
    else:
        results.put(("ok", value, ""))


class BoundedRunner:
    """Runs picklable callables in a fresh child process, one at a time."""

    def __init__(self, start_method: str = "spawn") -> None:
        self._context = multiprocessing.get_context(start_method)

    def run(
        self,
        target: Callable[..., Any],
        args: Sequence[Any] = (),
        *,
        timeout_seconds: float,
        cancel_event: threading.Event | None = None,
    ) -> Any:
        """Return ``target(*args)`` computed in a child process.

        Raises:
            AttemptTimeoutError: if no result arrived within ``timeout_seconds``.
            AttemptFailedError: if the target raised or the child died.
            PipelineCancelledError: if ``cancel_event`` was set while waiting.
        """
        raise_if_cancelled(cancel_event, "bounded attempt")
        results = self._context.Queue(maxsize=1)
        process = self._context.Process(
            target=_run_target,
            args=(target, tuple(args), results),
            daemon=True,
        )
        try:
            process.start()
        except Exception as exc:
            results.close()
            raise AttemptFailedError(
                "ProcessStartError", f"Could not start attempt process: {exc}"
            ) from exc

        try:
            status, payload, message = self._wait(
                process, results, timeout_seconds, cancel_event
            )
        finally:
            self._stop(process)
            results.close()

        if status == "error":
            raise AttemptFailedError(payload, message)
        return payload

    def _wait(
        self,
        process: Any,
        results: Any,
        timeout_seconds: float,
        cancel_event: threading.Event | None,
    ) -> tuple[str, Any, str]:
        deadline = time.monotonic() + timeout_seconds
        while True:
            raise_if_cancelled(cancel_event, "bounded attempt")
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise AttemptTimeoutError(
                    f"Attempt exceeded the {timeout_seconds:g}s timeout"
                )
            try:
                return results.get(timeout=min(_POLL_INTERVAL_SECONDS, remaining))
            except queue.Empty:
                if process.is_alive():
                    continue
            # Child exited: its queue feeder flushed before exit, if it reported at all.
            try:
                return results.get(timeout=_POLL_INTERVAL_SECONDS)
            except queue.Empty:
                raise AttemptFailedError(
                    "ProcessExit",
                    f"Attempt process exited with code {process.exitcode} without a result",
                ) from None

    @staticmethod
    def _stop(process: Any) -> None:
        if process.is_alive():
            process.terminate()
            process.join(timeout=_JOIN_GRACE_SECONDS)
            if process.is_alive():
                process.kill()
        process.join()
