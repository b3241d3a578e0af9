"""Offline extractor reading contact details out of PDF resumes."""

from __future__ import annotations

import re

from ..errors import ExtractionFailure
from ..pdf_utils import extract_markdown_from_bytes
from ..schemas import ParsedResume

_EMAIL = re.compile(r"[\w.+-]+@[\w-]+(?:\.[\w-]+)+")
_PHONE = re.compile(r"\+?\d[\d\s().-]{6,}\d")
_HEADING = re.compile(r"^#+\s*")


class PdfResumeExtractor:
    """Best-effort extraction used when no extraction service is configured.

    Only the name (first non-empty line), email and phone are recovered; the
    full markdown becomes the summary so the operator can copy from it.
    """

    name = "pdf"

    def can_handle(self, mime_type: str) -> bool:
        return mime_type == "application/pdf"

    def extract(self, content: bytes, mime_type: str) -> ParsedResume:
        try:
            markdown = extract_markdown_from_bytes(content)
        except Exception as exc:  # noqa: BLE001
            raise ExtractionFailure(f"Could not read PDF: {exc}") from exc

        lines = [line.strip() for line in markdown.splitlines() if line.strip()]
        if not lines:
            raise ExtractionFailure("PDF contains no extractable text")

        email = _EMAIL.search(markdown)
        phone = _PHONE.search(markdown)
        return ParsedResume(
            name=_clean_name(lines[0]),
            email=email.group(0) if email else "",
            phone=phone.group(0).strip() if phone else "",
            summary=markdown,
        )


def _clean_name(line: str) -> str:
    return _HEADING.sub("", line).strip("*_ ")
