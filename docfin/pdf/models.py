from dataclasses import dataclass
from enum import Enum


class PdfFailureReason(str, Enum):
    """Why a structural parse attempt did not yield usable text."""

    CORRUPTED_XREF = "corrupted_xref"
    PASSWORD_PROTECTED = "password_protected"
    UNSUPPORTED_FEATURES = "unsupported_features"
    PARSE_ERROR = "parse_error"
    INITIALIZATION_ERROR = "initialization_error"
    TIMEOUT = "timeout"
    INSUFFICIENT_TEXT = "insufficient_text"


@dataclass(frozen=True)
class PdfExtractionConfig:
    """One extraction attempt; ``max_pages=0`` means no page ceiling."""

    max_pages: int = 0
    verbose: bool = False

    def describe(self) -> str:
        pages = "unlimited pages" if self.max_pages <= 0 else f"<= {self.max_pages} pages"
        return f"{pages}, verbose" if self.verbose else pages


@dataclass(frozen=True)
class ParsedPdf:
    """Text lines per processed page, as returned by an engine.

    ``percent_encoded`` is set by engines whose runs carry URI escapes; the
    bundled engines return decoded Unicode and leave it off.
    """

    total_pages: int
    pages: tuple[tuple[str, ...], ...] = ()
    percent_encoded: bool = False

    @property
    def processed_pages(self) -> int:
        return len(self.pages)
