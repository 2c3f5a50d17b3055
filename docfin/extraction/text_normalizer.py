import re

_HORIZONTAL_WS = re.compile(r"[^\S\n]+")
_LINE_BREAKS = re.compile(r"\s*\n\s*")


def normalize_text(text: str) -> str:
    """Collapse whitespace and trim.

    Runs of spaces and tabs become one space; any whitespace run containing a
    line break becomes a single newline, so line and page boundaries survive.
    Applying it twice is a no-op.
    """
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = _HORIZONTAL_WS.sub(" ", text)
    text = _LINE_BREAKS.sub("\n", text)
    return text.strip()
