"""Sequential retry driver over an ordered list of degrading configurations."""

import threading
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from docfin.extraction.cancellation import raise_if_cancelled
from docfin.logging.logger import Log
from docfin.processor.exceptions import PipelineCancelledError

C = TypeVar("C")
R = TypeVar("R")


@dataclass(frozen=True)
class AttemptFailure:
    """One recovered failure, kept for diagnostics."""

    label: str
    reason: str
    message: str


@dataclass
class RetryOutcome(Generic[R]):
    result: R | None = None
    attempts: int = 0
    failures: list[AttemptFailure] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.result is not None


def run_with_configs(
    attempt: Callable[[C, float], R],
    configs: Sequence[C],
    *,
    timeout_seconds: float,
    accept: Callable[[R], bool],
    classify: Callable[[Exception], str],
    describe: Callable[[C], str] = str,
    rejected_reason: str = "rejected",
    cancel_event: threading.Event | None = None,
) -> RetryOutcome[R]:
    """Try ``attempt(config, timeout_seconds)`` for each config in order.

    Returns on the first result ``accept`` approves. Failed or rejected
    attempts are recorded and the next configuration is tried. When every
    configuration is exhausted the outcome has no result; deciding what to
    degrade to is left to the caller.
    """
    outcome: RetryOutcome[R] = RetryOutcome()
    total = len(configs)
    for index, config in enumerate(configs, start=1):
        raise_if_cancelled(cancel_event, "retry")
        label = describe(config)
        outcome.attempts = index
        Log.info(f"Attempt {index}/{total} with {label}")
        try:
            result = attempt(config, timeout_seconds)
        except PipelineCancelledError:
            raise
        except Exception as exc:
            reason = classify(exc)
            Log.warning(f"Attempt {index}/{total} failed [{reason}]: {exc}")
            outcome.failures.append(AttemptFailure(label, reason, str(exc)))
            continue

        if accept(result):
            Log.info(f"Attempt {index}/{total} succeeded")
            outcome.result = result
            return outcome

        Log.info(f"Attempt {index}/{total} returned too little content, trying next")
        outcome.failures.append(
            AttemptFailure(label, rejected_reason, "result rejected by success criterion")
        )
    return outcome
