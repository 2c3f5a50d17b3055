from pathlib import Path

from docfin.analysis.exceptions import PromptLoadError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"

ANALYSIS_PROMPT = "analysis_prompt.txt"
ANALYSIS_SCHEMA = "analysis_schema.json"
SUMMARY_PROMPT = "summary_prompt.txt"


def load_prompt_template(path: Path | None = None, *, name: str = ANALYSIS_PROMPT) -> str:
    """Load a prompt template.

    Args:
        path: Explicit template file. Defaults to the bundled template ``name``.

    Returns:
        The raw template string with ``str.format`` placeholders.

    Raises:
        PromptLoadError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / name
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PromptLoadError(f"Failed to load prompt template: {exc}") from exc


def load_json_schema(path: Path | None = None) -> str:
    """Load the analysis output schema embedded in the extraction prompt.

    Raises:
        PromptLoadError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / ANALYSIS_SCHEMA
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PromptLoadError(f"Failed to load JSON schema: {exc}") from exc
