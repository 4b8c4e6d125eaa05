import tempfile
from pathlib import Path

import pdf2image
from pdf2image.exceptions import (
    PDFInfoNotInstalledError,
    PDFPageCountError,
    PDFPopplerTimeoutError,
    PDFSyntaxError,
)

from docworker.logging.logger import Log
from docworker.ocr.base import BasePageRasterizer
from docworker.ocr.exceptions import RasterizationError


class Pdf2ImageRasterizer(BasePageRasterizer):
    """Renders pages to PNG with poppler's pdftoppm via pdf2image.

    Each call works in its own temporary directory, which is removed on
    both success and failure.
    """

    def __init__(self, dpi: int = 300, timeout_seconds: int | None = None) -> None:
        self._dpi = dpi
        self._timeout_seconds = timeout_seconds or None

    def rasterize(self, pdf_bytes: bytes) -> list[bytes]:
        with tempfile.TemporaryDirectory(prefix="docworker-ocr-") as work_dir:
            try:
                paths = pdf2image.convert_from_bytes(
                    pdf_bytes,
                    dpi=self._dpi,
                    fmt="png",
                    output_folder=work_dir,
                    output_file="page",
                    paths_only=True,
                    timeout=self._timeout_seconds,
                )
            except PDFInfoNotInstalledError as exc:
                raise RasterizationError(f"poppler is not installed: {exc}") from exc
            except PDFPopplerTimeoutError as exc:
                raise RasterizationError(f"pdftoppm timed out after {self._timeout_seconds}s") from exc
            except (PDFPageCountError, PDFSyntaxError) as exc:
                raise RasterizationError(f"pdftoppm could not read PDF: {exc}") from exc
            images = [Path(path).read_bytes() for path in paths]
        Log.info(f"Rasterized {len(images)} page(s) at {self._dpi} DPI")
        return images
