import hashlib
from dataclasses import dataclass


@dataclass(frozen=True)
class RawDocument:
    """An uploaded document, already decoded from its transport encoding."""

    content: bytes
    declared_mime_type: str
    file_name: str = ""

    @property
    def content_hash(self) -> str:
        """SHA-256 hex digest used by the document store for duplicate detection."""
        return hashlib.sha256(self.content).hexdigest()

    @property
    def size_bytes(self) -> int:
        return len(self.content)

    @property
    def mime_type(self) -> str:
        """Declared MIME type, lower-cased and without parameters."""
        return self.declared_mime_type.split(";", 1)[0].strip().lower()


@dataclass(frozen=True)
class ExtractedText:
    """Plain text produced once per document.

    ``is_guidance_only`` marks instructional prose for a human rather than
    document content. Downstream stages still run on it.
    """

    text: str
    page_count: int = 0
    is_guidance_only: bool = False
    source: str = ""
