import io

import pdfplumber

from docworker.pdf.base import BasePdfExtractor
from docworker.pdf.exceptions import CorruptDocumentError


class PdfPlumberAdapter(BasePdfExtractor):
    """Reads the PDF text layer with pdfplumber."""

    def extract_pages(self, pdf_bytes: bytes) -> list[str]:
        try:
            with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
                return [(page.extract_text() or "").strip() for page in pdf.pages]
        except Exception as exc:
            raise CorruptDocumentError(f"pdfplumber could not parse PDF: {exc}") from exc
