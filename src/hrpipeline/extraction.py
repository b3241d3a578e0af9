"""Resume upload sessions and mapping of extraction results to intake drafts."""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Iterable, List

import structlog

from .adapters import ResumeExtractor
from .errors import ExtractionFailure, UploadInFlightError
from .schemas import CandidateDraft, ParsedResume, WorkExperience

MANUAL_ENTRY_MESSAGE = "Failed to parse resume automatically. Please enter details manually."

_MIME_BY_SUFFIX = {
    ".pdf": "application/pdf",
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".txt": "text/plain",
    ".doc": "application/msword",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


class ExtractorChain:
    """Ordered extractors; the first one accepting the MIME type is used."""

    def __init__(self, extractors: Iterable[ResumeExtractor]):
        self._extractors = list(extractors)

    def select(self, mime_type: str) -> ResumeExtractor:
        for extractor in self._extractors:
            if extractor.can_handle(mime_type):
                return extractor
        raise ExtractionFailure(f"No extractor available for {mime_type!r}")

    def names(self) -> List[str]:
        return [extractor.name for extractor in self._extractors]

    def extract(self, content: bytes, mime_type: str) -> ParsedResume:
        return self.select(mime_type).extract(content, mime_type)


def guess_mime_type(path: Path) -> str:
    return _MIME_BY_SUFFIX.get(path.suffix.lower(), "application/octet-stream")


def to_candidate_draft(parsed: ParsedResume, *, resume_ref: str | None = None) -> CandidateDraft:
    """Map an extraction result onto the intake form."""
    return CandidateDraft(
        name=parsed.name,
        email=parsed.email,
        phone=parsed.phone,
        role=parsed.skills[0] if parsed.skills else "Applicant",
        experience=parsed.experience_years,
        education=parsed.education,
        tags=list(parsed.skills),
        resume_ref=resume_ref,
        resume_text=parsed.summary or None,
        work_experience=[
            WorkExperience(
                company=item.company,
                role=item.role,
                start_date=item.start_date,
                end_date=item.end_date,
                description=item.description,
            )
            for item in parsed.work_experience
        ],
    )


class UploadSession:
    """One upload dialog: at most one extraction in flight.

    A failed extraction is not an error for the caller; it yields an empty
    draft and sets :attr:`error` so the operator fills the form by hand.
    Closing the session discards whatever result was pending.
    """

    def __init__(self, chain: ExtractorChain) -> None:
        self._chain = chain
        self._lock = threading.Lock()
        self._closed = False
        self._logger = structlog.get_logger(__name__)
        self.error: str | None = None
        self.draft: CandidateDraft | None = None

    @property
    def busy(self) -> bool:
        return self._lock.locked()

    @property
    def closed(self) -> bool:
        return self._closed

    def extract(
        self,
        content: bytes,
        mime_type: str,
        *,
        resume_ref: str | None = None,
    ) -> CandidateDraft | None:
        if self._closed:
            return None
        if not self._lock.acquire(blocking=False):
            raise UploadInFlightError("An extraction is already running for this upload")
        try:
            self.error = None
            try:
                parsed = self._chain.extract(content, mime_type)
                draft = to_candidate_draft(parsed, resume_ref=resume_ref)
                self._logger.info("extraction.completed", mime_type=mime_type, name=parsed.name)
            except ExtractionFailure as exc:
                self._logger.warning("extraction.failed", mime_type=mime_type, error=exc.message)
                self.error = MANUAL_ENTRY_MESSAGE
                draft = CandidateDraft(resume_ref=resume_ref)
        finally:
            self._lock.release()

        if self._closed:
            self._logger.info("extraction.discarded", mime_type=mime_type)
            return None
        self.draft = draft
        return draft

    def extract_file(self, path: Path) -> CandidateDraft | None:
        return self.extract(path.read_bytes(), guess_mime_type(path), resume_ref=str(path))

    def close(self) -> None:
        self._closed = True
        self.draft = None


__all__ = [
    "ExtractorChain",
    "MANUAL_ENTRY_MESSAGE",
    "UploadSession",
    "guess_mime_type",
    "to_candidate_draft",
]
