from __future__ import annotations

from pathlib import Path

import pytest

import hrpipeline.pdf_utils as pdf_utils
from hrpipeline.adapters import HTTPResumeExtractor, PdfResumeExtractor, ResumeExtractor
from hrpipeline.errors import ExtractionFailure

SAMPLE = (
    "# Alice Johnson\n"
    "alice@example.com | +1 555-0101\n"
    "1 / 2\n"
    "Senior Frontend Engineer\n"
    "Confidential resume, do not forward 2 / 2\n"
)


@pytest.fixture
def stub_markdown(monkeypatch: pytest.MonkeyPatch):
    def install(text: str) -> None:
        monkeypatch.setattr(pdf_utils.pymupdf4llm, "to_markdown", lambda path: text)

    install(SAMPLE)
    return install


def test_extract_markdown_drops_page_counters_and_excluded_lines(tmp_path: Path, stub_markdown) -> None:
    pdf_file = tmp_path / "resume.pdf"
    pdf_file.write_bytes(b"%PDF-1.4\n% Dummy")

    result = pdf_utils.extract_markdown(pdf_file, exclude_patterns=["Confidential resume"])

    assert "1 / 2" not in result
    assert "Confidential resume" not in result
    assert "Senior Frontend Engineer" in result


def test_extract_markdown_missing_file(tmp_path: Path, stub_markdown) -> None:
    with pytest.raises(FileNotFoundError):
        pdf_utils.extract_markdown(tmp_path / "missing.pdf")


def test_pdf_extractor_recovers_contact_details(stub_markdown) -> None:
    extractor = PdfResumeExtractor()

    parsed = extractor.extract(b"%PDF-1.4", "application/pdf")

    assert isinstance(extractor, ResumeExtractor)
    assert extractor.can_handle("application/pdf")
    assert not extractor.can_handle("image/png")
    assert parsed.name == "Alice Johnson"
    assert parsed.email == "alice@example.com"
    assert parsed.phone == "+1 555-0101"


def test_pdf_extractor_fails_on_empty_text(stub_markdown) -> None:
    stub_markdown("\n\n")

    with pytest.raises(ExtractionFailure):
        PdfResumeExtractor().extract(b"%PDF-1.4", "application/pdf")


def test_http_extractor_without_endpoint_is_disabled() -> None:
    extractor = HTTPResumeExtractor(None)

    assert not extractor.can_handle("application/pdf")
    with pytest.raises(ExtractionFailure):
        extractor.extract(b"%PDF", "application/pdf")
