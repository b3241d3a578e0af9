"""Resume extraction adapters."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..schemas import ParsedResume
from .pdf import PdfResumeExtractor
from .remote import HTTPResumeExtractor


@runtime_checkable
class ResumeExtractor(Protocol):
    """Resume extraction contract.

    Implementations turn an uploaded file into a best-effort
    :class:`ParsedResume` or raise :class:`~hrpipeline.errors.ExtractionFailure`.
    """

    name: str

    def can_handle(self, mime_type: str) -> bool:
        """Return True when the extractor accepts files of ``mime_type``."""

    def extract(self, content: bytes, mime_type: str) -> ParsedResume:
        """Extract structured fields from ``content``."""


__all__ = ["ResumeExtractor", "HTTPResumeExtractor", "PdfResumeExtractor"]
