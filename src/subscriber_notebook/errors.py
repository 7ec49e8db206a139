from __future__ import annotations


class NotebookError(Exception):
    """Base error. `message` is safe to show to HTTP callers."""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(NotebookError):
    status_code = 400
    message = "Username is required"


class InternalError(NotebookError):
    status_code = 500
    message = "Internal server error"


class LayoutResolutionError(NotebookError):
    """A line (or its text region) could not be located on the drawing surface."""

    status_code = 500
    message = "Line region not found"
