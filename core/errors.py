"""Custom exception types for CNIS extraction and parsing."""

from __future__ import annotations


class ExtractionError(Exception):
    """Base exception for extraction related issues."""


NOT_RECOGNIZED_MESSAGE = (
    "The text does not look like a supported CNIS extract. / O texto não parece"
    " ser um extrato CNIS suportado."
)


class DocumentNotRecognizedError(ExtractionError):
    """Raised when non-empty text contains no recognizable bond records."""

    def __init__(self, message: str | None = None, *, text_length: int = 0) -> None:
        super().__init__(message or NOT_RECOGNIZED_MESSAGE)
        self.text_length = text_length


class EmptyDocumentError(DocumentNotRecognizedError):
    """Raised when the extracted text is blank."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "The document text is empty.", text_length=0)
