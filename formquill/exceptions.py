"""Custom exceptions for FormQuill."""

from typing import Optional


class FormQuillError(Exception):
    """Base exception for FormQuill errors."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class SchemaError(FormQuillError):
    """Exception raised when a form schema cannot be ingested."""

    pass


class LayoutError(FormQuillError):
    """Exception raised during layout calculation."""

    pass


class RenderingError(FormQuillError):
    """Exception raised when a backend document cannot be created or drawn."""

    pass


class MediaError(FormQuillError):
    """Exception raised for image and icon handling problems."""

    pass


class CompilationError(FormQuillError):
    """Exception raised when a generated document cannot be serialised."""

    pass
