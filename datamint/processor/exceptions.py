class ProcessorError(Exception):
    """Base exception for pipeline wiring errors."""


class StepOrderError(ProcessorError):
    """Raised when a step runs before the step that produces its input."""
