"""Multi-attempt, timeout-bounded PDF text extraction."""

import re
import threading
from functools import partial
from urllib.parse import unquote

from docfin.extraction.bounded_runner import (
    AttemptFailedError,
    AttemptTimeoutError,
    BoundedRunner,
)
from docfin.extraction.guidance import pdf_guidance
from docfin.extraction.models import ExtractedText
from docfin.extraction.retry import AttemptFailure, run_with_configs
from docfin.extraction.text_normalizer import normalize_text
from docfin.logging.logger import Log
from docfin.pdf.base import BasePdfEngine
from docfin.pdf.exceptions import PdfExtractionError
from docfin.pdf.models import ParsedPdf, PdfExtractionConfig, PdfFailureReason

DEFAULT_CONFIGS: tuple[PdfExtractionConfig, ...] = (
    PdfExtractionConfig(max_pages=0),
    PdfExtractionConfig(max_pages=10, verbose=True),
    PdfExtractionConfig(max_pages=5),
)
DEFAULT_TIMEOUT_SECONDS = 30.0
MIN_TEXT_LENGTH = 10

_PERCENT_ESCAPE = re.compile(r"%[0-9A-Fa-f]{2}")
_INIT_ERROR_TYPES = frozenset(
    {"PdfOpenError", "ProcessExit", "ProcessStartError", "PicklingError", "ImportError"}
)


def decode_text_run(run: str) -> str:
    """Percent-decode a text run, keeping the raw run if it is not valid UTF-8."""
    if not _PERCENT_ESCAPE.search(run):
        return run
    try:
        return unquote(run, errors="strict")
    except UnicodeDecodeError:
        return run


def render_text(parsed: ParsedPdf) -> str:
    """Put each run on its own line, end each page with a newline, then normalize.

    Runs are percent-decoded only when the engine marked them as encoded, so
    a literal ``%20`` in decoded text stays as written.
    """
    decode = decode_text_run if parsed.percent_encoded else str
    text = "".join(
        "\n".join(decode(run) for run in runs) + "\n" for runs in parsed.pages
    )
    if parsed.processed_pages < parsed.total_pages:
        text += f"\n[only {parsed.processed_pages}/{parsed.total_pages} pages processed]"
    return normalize_text(text)


def classify_failure(error_type: str, message: str) -> PdfFailureReason:
    lowered = message.lower()
    if "xref" in lowered or "cross-reference" in lowered:
        return PdfFailureReason.CORRUPTED_XREF
    if "password" in lowered:
        return PdfFailureReason.PASSWORD_PROTECTED
    if "encrypt" in lowered or "unsupported" in lowered:
        return PdfFailureReason.UNSUPPORTED_FEATURES
    if error_type in _INIT_ERROR_TYPES:
        return PdfFailureReason.INITIALIZATION_ERROR
    return PdfFailureReason.PARSE_ERROR


def _classify(exc: Exception) -> str:
    if isinstance(exc, AttemptTimeoutError):
        return PdfFailureReason.TIMEOUT.value
    if isinstance(exc, AttemptFailedError):
        return classify_failure(exc.error_type, str(exc)).value
    if isinstance(exc, PdfExtractionError) and exc.reason is not PdfFailureReason.PARSE_ERROR:
        return exc.reason.value
    return classify_failure(type(exc).__name__, str(exc)).value


class PdfTextExtractor:
    """Converts PDF bytes to text, degrading through configurations.

    Attempts run strictly one after another, each in its own child process
    under ``timeout_seconds``. When no configuration yields more than
    ``MIN_TEXT_LENGTH`` characters the static PDF guidance is returned
    instead of raising.
    """

    def __init__(
        self,
        engine: BasePdfEngine,
        *,
        runner: BoundedRunner | None = None,
        configs: tuple[PdfExtractionConfig, ...] = DEFAULT_CONFIGS,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self._engine = engine
        self._runner = runner if runner is not None else BoundedRunner()
        self._configs = configs
        self._timeout_seconds = timeout_seconds

    def extract(
        self,
        pdf_bytes: bytes,
        *,
        cancel_event: threading.Event | None = None,
        diagnostics: list[AttemptFailure] | None = None,
    ) -> ExtractedText:
        outcome = run_with_configs(
            partial(self._attempt, pdf_bytes, cancel_event),
            self._configs,
            timeout_seconds=self._timeout_seconds,
            accept=lambda result: len(result.text.strip()) > MIN_TEXT_LENGTH,
            classify=_classify,
            describe=PdfExtractionConfig.describe,
            rejected_reason=PdfFailureReason.INSUFFICIENT_TEXT.value,
            cancel_event=cancel_event,
        )
        if diagnostics is not None:
            diagnostics.extend(outcome.failures)
        if outcome.result is not None:
            return outcome.result

        reasons = ", ".join(failure.reason for failure in outcome.failures)
        Log.warning(
            f"All {len(self._configs)} PDF extraction attempts failed ({reasons}); "
            "returning guidance text"
        )
        return pdf_guidance()

    def _attempt(
        self,
        pdf_bytes: bytes,
        cancel_event: threading.Event | None,
        config: PdfExtractionConfig,
        timeout_seconds: float,
    ) -> ExtractedText:
        parsed: ParsedPdf = self._runner.run(
            self._engine.parse,
            (pdf_bytes, config.max_pages),
            timeout_seconds=timeout_seconds,
            cancel_event=cancel_event,
        )
        if config.verbose:
            for number, runs in enumerate(parsed.pages, start=1):
                Log.info(f"Page {number}/{parsed.total_pages}: {len(runs)} text runs")
        text = render_text(parsed)
        Log.info(
            f"Processed {parsed.processed_pages}/{parsed.total_pages} pages, "
            f"extracted {len(text)} chars"
        )
        return ExtractedText(text=text, page_count=parsed.total_pages, source="pdf")
