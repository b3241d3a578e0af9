"""HTTP client for the external resume extraction service."""

from __future__ import annotations

import base64
import http.client
import json
from urllib import error, request

import structlog
from pydantic import ValidationError

from ..errors import ExtractionFailure
from ..schemas import ParsedResume

EXTRACTION_PROMPT = (
    "Analyze this resume and extract the following information into a structured "
    "JSON format. Be precise with dates and company names."
)


class HTTPResumeExtractor:
    """Posts the uploaded file to an extraction endpoint and validates the reply."""

    name = "http"

    def __init__(self, endpoint: str | None, api_key: str | None = None, *, timeout: float = 30.0):
        self._endpoint = endpoint
        self._api_key = api_key
        self._timeout = timeout
        self._logger = structlog.get_logger(__name__)

    def can_handle(self, mime_type: str) -> bool:
        return bool(self._endpoint)

    def extract(self, content: bytes, mime_type: str) -> ParsedResume:
        if not self._endpoint:
            raise ExtractionFailure("No extraction endpoint configured")
        payload = {
            "mime_type": mime_type,
            "data": base64.b64encode(content).decode("ascii"),
            "instructions": EXTRACTION_PROMPT,
        }
        data = json.dumps(payload).encode("utf-8")
        headers = {"Content-Type": "application/json"}
        if self._api_key:
            headers["Authorization"] = f"Bearer {self._api_key}"

        req = request.Request(self._endpoint, data=data, headers=headers, method="POST")
        try:
            with request.urlopen(req, timeout=self._timeout) as resp:
                body = resp.read().decode("utf-8")
        except (error.URLError, OSError, http.client.HTTPException, UnicodeDecodeError) as exc:
            self._logger.warning("extraction.request_failed", error=str(exc))
            raise ExtractionFailure(f"Extraction request failed: {exc}") from exc

        if not body:
            raise ExtractionFailure("Empty response from extraction service")
        try:
            return ParsedResume.model_validate(json.loads(body))
        except (json.JSONDecodeError, ValidationError) as exc:
            self._logger.warning("extraction.invalid_response", error=str(exc))
            raise ExtractionFailure("Extraction service returned an invalid payload") from exc
