"""Two-phase text extraction: embedded text first, OCR when it is missing."""

from concurrent.futures import Future, ThreadPoolExecutor, wait

from docworker.config.settings import Settings
from docworker.logging.logger import Log
from docworker.ocr.base import BaseOcrEngine, BasePageRasterizer
from docworker.ocr.exceptions import OcrEngineUnavailableError, OcrError
from docworker.ocr.pdf2image_rasterizer import Pdf2ImageRasterizer
from docworker.ocr.tesseract_engine import TesseractOcrEngine
from docworker.pdf.base import BasePdfExtractor, join_pages
from docworker.pdf.exceptions import EmptyDocumentError
from docworker.pdf.factory import PdfExtractorFactory
from docworker.processor.cancellation import CancellationToken, ensure_token

_RASTERIZE_POLL_SECONDS = 0.5


class TextExtractor:
    """Extracts plain text from a PDF.

    Phase A reads the embedded text layer. When the result is shorter than
    `min_embedded_text_length`, Phase B renders each page and runs OCR on it.
    Unparseable input fails in Phase A, before any OCR work.
    """

    def __init__(
        self,
        *,
        pdf_extractor: BasePdfExtractor,
        rasterizer: BasePageRasterizer,
        ocr_engine: BaseOcrEngine,
        min_embedded_text_length: int = 50,
        executor: ThreadPoolExecutor | None = None,
    ) -> None:
        self._pdf_extractor = pdf_extractor
        self._rasterizer = rasterizer
        self._ocr_engine = ocr_engine
        self._min_embedded_text_length = min_embedded_text_length
        self._executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="rasterizer"
        )

    def extract(self, file_bytes: bytes, cancel_token: CancellationToken | None = None) -> str:
        """Return the document text, pages joined by the page-break marker.

        Raises:
            EmptyDocumentError: if `file_bytes` is empty.
            CorruptDocumentError: if the bytes are not a readable PDF.
            OcrError: if the OCR fallback cannot render or recognize the pages.
            OperationCancelledError: if `cancel_token` is cancelled mid-way.
        """
        token = ensure_token(cancel_token)
        if not file_bytes:
            raise EmptyDocumentError("Document has no content")

        token.raise_if_cancelled()
        direct_text = self._pdf_extractor.extract(file_bytes)
        if len(direct_text.strip()) >= self._min_embedded_text_length:
            Log.info(f"Using embedded PDF text: {len(direct_text)} characters")
            return direct_text

        Log.info(
            f"Embedded text too short ({len(direct_text.strip())} < "
            f"{self._min_embedded_text_length} chars), falling back to OCR"
        )
        return self._extract_with_ocr(file_bytes, token)

    def shutdown(self) -> None:
        self._executor.shutdown(wait=False, cancel_futures=True)

    def _extract_with_ocr(self, file_bytes: bytes, token: CancellationToken) -> str:
        images = self._rasterize(file_bytes, token)
        if not images:
            Log.warning("Rasterization produced no page images")
            return ""

        page_texts: list[str] = []
        for page_number, image in enumerate(images, start=1):
            token.raise_if_cancelled()
            page_texts.append(self._recognize_page(image, page_number))

        text = join_pages(page_texts)
        Log.info(f"OCR extracted {len(text)} characters from {len(images)} page(s)")
        return text

    def _rasterize(self, file_bytes: bytes, token: CancellationToken) -> list[bytes]:
        future: Future[list[bytes]] = self._executor.submit(self._rasterizer.rasterize, file_bytes)
        while True:
            if token.cancelled:
                future.cancel()
                token.raise_if_cancelled()
            done, _pending = wait([future], timeout=_RASTERIZE_POLL_SECONDS)
            if done:
                return future.result()

    def _recognize_page(self, image: bytes, page_number: int) -> str:
        try:
            text = self._ocr_engine.recognize(image)
        except OcrEngineUnavailableError:
            raise
        except OcrError as exc:
            Log.warning(f"OCR failed for page {page_number}, leaving it empty: {exc}")
            return ""
        Log.debug(f"Recognized {len(text)} characters on page {page_number}")
        return text


def build_text_extractor(settings: Settings) -> TextExtractor:
    """Wire the configured PDF, rasterizer and OCR adapters together."""
    return TextExtractor(
        pdf_extractor=PdfExtractorFactory.create(settings),
        rasterizer=Pdf2ImageRasterizer(
            dpi=settings.ocr_dpi,
            timeout_seconds=settings.ocr_page_timeout_seconds,
        ),
        ocr_engine=TesseractOcrEngine(
            language=settings.ocr_language,
            engine_mode=settings.ocr_engine_mode,
            page_segmentation_mode=settings.ocr_page_segmentation_mode,
            tessdata_path=settings.ocr_tessdata_path,
            timeout_seconds=settings.ocr_page_timeout_seconds,
        ),
        min_embedded_text_length=settings.ocr_min_embedded_text_length,
    )
