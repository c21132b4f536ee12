"""
keno_analyzer/pipeline/source_loader.py
Read one uploaded file into text. PDFs go through pdfplumber page by page;
everything else is read as UTF-8 text.
"""
from __future__ import annotations

from pathlib import Path

import pdfplumber

from keno_analyzer.utils.logger import get_logger

log = get_logger("pipeline.loader")

PDF_SUFFIXES = {".pdf"}


class SourceError(Exception):
    """The file could not be turned into text; nothing was analyzed."""


class InputError(SourceError):
    pass


class ReadError(SourceError):
    pass


def extract_pdf_text(path: Path) -> str:
    """Concatenate every page's text in page order, one newline between pages."""
    with pdfplumber.open(path) as pdf:
        pages = [page.extract_text() or "" for page in pdf.pages]
    log.debug(f"Extracted {len(pages)} PDF pages from {path.name}")
    return "\n".join(pages)


def read_source(path: str | Path | None) -> str:
    """
    Return the full text of `path`.
    Raises InputError when no file is given and ReadError when reading fails.
    """
    if path is None or str(path).strip() == "":
        raise InputError("No file selected")

    path = Path(path)
    if not path.is_file():
        raise ReadError(f"Error reading file: {path} does not exist")

    try:
        if path.suffix.lower() in PDF_SUFFIXES:
            text = extract_pdf_text(path)
        else:
            text = path.read_text(encoding="utf-8", errors="replace")
    except Exception as exc:
        log.error(f"Failed to read {path}: {exc}")
        raise ReadError(f"Error reading file: {exc}") from exc

    log.info(f"Read {len(text)} characters from {path.name}")
    return text
