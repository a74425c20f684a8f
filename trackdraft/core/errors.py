"""Error and warning types raised by the import pipeline."""

from typing import Optional


class AnnotationImportError(Exception):
    """Base class for errors that abort an import.

    The message is meant to be shown to the user verbatim.
    """

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnknownFormatError(AnnotationImportError):
    """The document matched none of the known annotation schemas."""

    def __init__(self, message: str = "Unknown annotation format"):
        super().__init__(message)


class UnsupportedFormatError(AnnotationImportError):
    """The format was recognized but no importer exists for it."""

    def __init__(self, format_tag: str, message: Optional[str] = None):
        self.format_tag = format_tag
        super().__init__(message or f"{format_tag} import not yet implemented")


class MalformedDataError(AnnotationImportError):
    """Required fields are missing or have the wrong type."""


class InferenceWarning(UserWarning):
    """Key detection, harmony or progression analysis fell back to defaults."""
