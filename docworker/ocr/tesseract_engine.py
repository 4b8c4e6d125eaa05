import io

import pytesseract
from PIL import Image, UnidentifiedImageError

from docworker.ocr.base import BaseOcrEngine
from docworker.ocr.exceptions import OcrEngineUnavailableError, OcrError


class TesseractOcrEngine(BaseOcrEngine):
    """Runs the tesseract binary on one page image through pytesseract."""

    def __init__(
        self,
        *,
        language: str = "eng",
        engine_mode: int = 3,
        page_segmentation_mode: int = 3,
        tessdata_path: str | None = None,
        timeout_seconds: int = 0,
    ) -> None:
        self._language = language
        self._timeout_seconds = timeout_seconds
        self._config = self._build_config(engine_mode, page_segmentation_mode, tessdata_path)

    @staticmethod
    def _build_config(
        engine_mode: int,
        page_segmentation_mode: int,
        tessdata_path: str | None,
    ) -> str:
        options = [f"--oem {engine_mode}", f"--psm {page_segmentation_mode}"]
        if tessdata_path:
            options.append(f'--tessdata-dir "{tessdata_path}"')
        return " ".join(options)

    def recognize(self, image_bytes: bytes) -> str:
        try:
            with Image.open(io.BytesIO(image_bytes)) as image:
                text: str = pytesseract.image_to_string(
                    image,
                    lang=self._language,
                    config=self._config,
                    timeout=self._timeout_seconds,
                )
        except pytesseract.TesseractNotFoundError as exc:
            raise OcrEngineUnavailableError(f"tesseract is not installed: {exc}") from exc
        except pytesseract.TesseractError as exc:
            raise OcrError(f"tesseract failed ({exc.status}): {exc.message}") from exc
        except UnidentifiedImageError as exc:
            raise OcrError(f"Page image could not be decoded: {exc}") from exc
        except RuntimeError as exc:
            # pytesseract signals its timeout with a bare RuntimeError
            raise OcrError(f"tesseract timed out: {exc}") from exc
        return text.strip()
