"""Utilities for extracting markdown from PDF resumes."""

from __future__ import annotations

import re
import tempfile
from pathlib import Path
from typing import Iterable, Sequence

import pymupdf4llm

_PAGE_COUNTER = re.compile(r"^\s*(?:page\s+)?\d+\s*/\s*\d+\s*$", re.IGNORECASE)


def extract_markdown(
    pdf_path: str | Path,
    *,
    exclude_patterns: Sequence[str] | None = None,
) -> str:
    """Return markdown text extracted from a PDF, removing boilerplate lines.

    Parameters
    ----------
    pdf_path:
        Path to the source PDF file.
    exclude_patterns:
        Optional substrings; any line containing one of them is dropped,
        together with a trailing page counter such as ``1 / 3``. Bare page
        counter lines are always removed.
    """

    pdf_path = Path(pdf_path)
    if not pdf_path.exists():
        raise FileNotFoundError(pdf_path)

    markdown = pymupdf4llm.to_markdown(str(pdf_path))
    patterns = _build_patterns(exclude_patterns or ())

    cleaned_lines: list[str] = []
    for line in markdown.splitlines():
        if not line.strip():
            cleaned_lines.append(line)
            continue
        if _PAGE_COUNTER.match(line):
            continue
        if any(pattern.search(line) for pattern in patterns):
            continue
        cleaned_lines.append(line)
    return "\n".join(cleaned_lines)


def extract_markdown_from_bytes(
    content: bytes,
    *,
    exclude_patterns: Sequence[str] | None = None,
) -> str:
    """Same as :func:`extract_markdown` for an in-memory upload."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        path = Path(tmp_dir) / "upload.pdf"
        path.write_bytes(content)
        return extract_markdown(path, exclude_patterns=exclude_patterns)


def _build_patterns(excludes: Iterable[str]) -> list[re.Pattern[str]]:
    patterns: list[re.Pattern[str]] = []
    for text in excludes:
        escaped = re.escape(text)
        pattern = re.compile(rf"{escaped}(?:\s+\d+\s*/\s*\d+)?")
        patterns.append(pattern)
    return patterns


__all__ = ["extract_markdown", "extract_markdown_from_bytes"]
