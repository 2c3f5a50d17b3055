"""Builds RawDocument values from data URIs and files on disk."""

import base64
import binascii
import mimetypes
import re
from pathlib import Path
from urllib.parse import unquote_to_bytes

from docfin.extraction.exceptions import DocumentLoadError
from docfin.extraction.models import RawDocument

_DATA_URI = re.compile(r"^data:(?P<mime>[^;,]*)(?P<params>(?:;[^;,]*)*),(?P<data>.*)$", re.DOTALL)

DEFAULT_MIME_TYPE = "application/octet-stream"


def decode_data_uri(data_uri: str, file_name: str = "") -> RawDocument:
    """Decode ``data:<mime>[;base64],<payload>`` into a RawDocument.

    Raises:
        DocumentLoadError: if the URI is malformed or the payload is not valid base64.
    """
    match = _DATA_URI.match(data_uri.strip())
    if match is None:
        raise DocumentLoadError("Invalid data URI format")
    mime_type = match["mime"].strip().lower() or "text/plain"
    params = [p.strip().lower() for p in match["params"].split(";") if p.strip()]
    payload = match["data"]
    if "base64" in params:
        try:
            content = base64.b64decode("".join(payload.split()), validate=True)
        except (binascii.Error, ValueError) as exc:
            raise DocumentLoadError(f"Invalid base64 payload in data URI: {exc}") from exc
    else:
        content = unquote_to_bytes(payload)
    return RawDocument(content=content, declared_mime_type=mime_type, file_name=file_name)


def load_file(path: Path, mime_type: str | None = None) -> RawDocument:
    """Read a document from disk, guessing its MIME type from the extension.

    Raises:
        FileNotFoundError: if the file does not exist.
    """
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")
    if mime_type is None:
        guessed, _encoding = mimetypes.guess_type(path.name)
        mime_type = guessed or DEFAULT_MIME_TYPE
    return RawDocument(
        content=path.read_bytes(),
        declared_mime_type=mime_type,
        file_name=path.name,
    )
