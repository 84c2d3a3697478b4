"""
Resume text loading for skill extraction.

The skills context never reads files itself; callers hand it text produced here.
PDF resumes are read page by page with pdfplumber, everything else is read as
UTF-8 text.
"""

from pathlib import Path

import pdfplumber

TEXT_SUFFIXES = {".txt", ".md", ".markdown", ".tex", ".rst"}


def extract_pdf_text(pdf_path: Path) -> str:
    """Concatenate the extracted text of every page of a PDF."""
    pages = []
    with pdfplumber.open(pdf_path) as pdf:
        for page in pdf.pages:
            pages.append(page.extract_text() or "")
    return "\n".join(pages)


def read_resume_text(path: Path) -> str:
    """
    Read resume content as plain text.

    Args:
        path: Resume file (.pdf, or any text format)

    Returns:
        Resume text (may be empty)

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If a non-PDF file cannot be decoded as UTF-8
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Resume not found: {path}")

    if path.suffix.lower() == ".pdf":
        return extract_pdf_text(path)

    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        supported = ", ".join(sorted(TEXT_SUFFIXES | {".pdf"}))
        raise ValueError(f"Could not read {path.name} as text (supported: {supported})") from e
