"""PDF helpers for compiled artifacts."""

from io import BytesIO
from pathlib import Path
from typing import Optional, Union

from PyPDF2 import PdfReader

PDF_MAGIC = b"%PDF-"


def is_pdf(content: bytes) -> bool:
    """Check for the PDF magic header."""
    return content.startswith(PDF_MAGIC)


def page_count(pdf: Union[bytes, Path]) -> Optional[int]:
    """Get page count from PDF bytes or a PDF file, or None if unreadable."""
    if isinstance(pdf, bytes):
        if not is_pdf(pdf):
            return None
        source = BytesIO(pdf)
    else:
        source = str(pdf)

    try:
        reader = PdfReader(source)
        return len(reader.pages)
    except Exception:
        return None
