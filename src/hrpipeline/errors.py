"""Error taxonomy for pipeline operations.

Every error here is recoverable at the granularity of a single operation:
the store is left exactly as it was before the failing call.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(str, Enum):
    """Stable codes surfaced to callers (CLI exit messages, audit records)."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    DUPLICATE_IN_PIPELINE = "DUPLICATE_IN_PIPELINE"
    NOT_FOUND = "NOT_FOUND"
    ILLEGAL_TRANSITION = "ILLEGAL_TRANSITION"
    EXTRACTION_FAILED = "EXTRACTION_FAILED"
    UPLOAD_IN_FLIGHT = "UPLOAD_IN_FLIGHT"


class PipelineError(Exception):
    """Base exception for pipeline operations."""

    code: ErrorCode = ErrorCode.VALIDATION_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": {"code": self.code.value, "message": self.message}}


class IntakeValidationError(PipelineError):
    """Raised when a candidate draft lacks a required field."""

    def __init__(self, missing: list[str]) -> None:
        super().__init__(f"Missing required fields: {', '.join(missing)}")
        self.missing = missing


class EvaluationValidationError(PipelineError):
    """Raised when a scorecard cannot be applied (e.g. score off the 1-5 scale)."""


class DuplicateInPipelineError(PipelineError):
    """Raised when the candidate already has an application for the job."""

    code = ErrorCode.DUPLICATE_IN_PIPELINE

    def __init__(self, candidate_id: str, application_id: str) -> None:
        super().__init__(f"Candidate already in this pipeline (application {application_id}).")
        self.candidate_id = candidate_id
        self.application_id = application_id


class EntityNotFoundError(PipelineError, KeyError):
    """Raised when an id does not resolve to a stored entity."""

    code = ErrorCode.NOT_FOUND

    def __init__(self, kind: str, entity_id: str) -> None:
        super().__init__(f"Unknown {kind}: {entity_id!r}")
        self.kind = kind
        self.entity_id = entity_id

    def __str__(self) -> str:
        return self.message


class IllegalTransitionError(PipelineError):
    """Raised when the active transition policy refuses a status move."""

    code = ErrorCode.ILLEGAL_TRANSITION


class ExtractionFailure(PipelineError):
    """Raised by resume extractors; recovered locally by the upload session."""

    code = ErrorCode.EXTRACTION_FAILED


class UploadInFlightError(PipelineError):
    """Raised when an upload session already has a pending extraction."""

    code = ErrorCode.UPLOAD_IN_FLIGHT


__all__ = [
    "ErrorCode",
    "PipelineError",
    "IntakeValidationError",
    "EvaluationValidationError",
    "DuplicateInPipelineError",
    "EntityNotFoundError",
    "IllegalTransitionError",
    "ExtractionFailure",
    "UploadInFlightError",
]
