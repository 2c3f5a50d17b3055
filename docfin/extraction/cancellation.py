import threading
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, wait
from typing import TypeVar

from docfin.processor.exceptions import PipelineCancelledError

T = TypeVar("T")

_POLL_INTERVAL_SECONDS = 0.1


def raise_if_cancelled(cancel_event: threading.Event | None, where: str = "") -> None:
    if cancel_event is not None and cancel_event.is_set():
        suffix = f" during {where}" if where else ""
        raise PipelineCancelledError(f"Analysis cancelled by caller{suffix}")


def call_cancellable(
    func: Callable[[], T],
    cancel_event: threading.Event | None,
    where: str = "",
) -> T:
    """Return ``func()`` unless ``cancel_event`` is set before it finishes.

    The call runs on a worker thread while this thread polls the event. On
    cancellation the caller gets PipelineCancelledError right away and the
    worker's eventual result is discarded; a thread cannot be interrupted, so
    the blocking call itself is left to finish or time out on its own.
    """
    raise_if_cancelled(cancel_event, where)
    if cancel_event is None:
        return func()

    executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="docfin-call")
    try:
        future = executor.submit(func)
        while True:
            done, _ = wait((future,), timeout=_POLL_INTERVAL_SECONDS)
            raise_if_cancelled(cancel_event, where)
            if done:
                return future.result()
    finally:
        executor.shutdown(wait=False, cancel_futures=True)
