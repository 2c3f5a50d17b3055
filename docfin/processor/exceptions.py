class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class PipelineCancelledError(ProcessorError):
    """Raised when the caller cancelled the invocation; nothing is retried after it."""
