import pymupdf

from docworker.pdf.base import BasePdfExtractor
from docworker.pdf.exceptions import CorruptDocumentError


class PyMuPdfAdapter(BasePdfExtractor):
    """Reads the PDF text layer with PyMuPDF."""

    def extract_pages(self, pdf_bytes: bytes) -> list[str]:
        try:
            with pymupdf.open(stream=pdf_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                return [page.get_text().strip() for page in doc]
        except Exception as exc:
            raise CorruptDocumentError(f"pymupdf could not parse PDF: {exc}") from exc
