import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from docfin.analysis.models import AnalysisResult, DocumentSummary
from docfin.extraction.models import ExtractedText, RawDocument
from docfin.extraction.retry import AttemptFailure


@dataclass(slots=True)
class PipelineContext:
    """State carried through the steps of one invocation."""

    document: RawDocument
    cancel_event: threading.Event | None = None
    extracted: ExtractedText | None = None
    normalized_text: str = ""
    candidate: dict[str, Any] | None = None
    producer: str = ""
    result: AnalysisResult | None = None
    document_summary: DocumentSummary | None = None
    diagnostics: list[AttemptFailure] = field(default_factory=list)

    def record(self, label: str, reason: str, message: str) -> None:
        self.diagnostics.append(AttemptFailure(label=label, reason=reason, message=message))


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
