from abc import ABC, abstractmethod

PAGE_BREAK = "\n\n--- Page Break ---\n\n"


def join_pages(pages: list[str]) -> str:
    """Join non-blank page texts with the page-break marker."""
    return PAGE_BREAK.join(page for page in pages if page and page.strip())


class BasePdfExtractor(ABC):
    """Contract for embedded-text (text layer) PDF adapters."""

    @abstractmethod
    def extract_pages(self, pdf_bytes: bytes) -> list[str]:
        """Read the embedded text of every page, in page order.

        Args:
            pdf_bytes: Raw PDF file content.

        Returns:
            One string per page; image-only pages yield "".

        Raises:
            CorruptDocumentError: if the bytes cannot be parsed as a PDF.
        """

    def extract(self, pdf_bytes: bytes) -> str:
        """Embedded text of the whole document, pages joined by PAGE_BREAK."""
        return join_pages(self.extract_pages(pdf_bytes))
