from abc import ABC, abstractmethod


class BasePageRasterizer(ABC):
    """Renders PDF pages to images for OCR."""

    @abstractmethod
    def rasterize(self, pdf_bytes: bytes) -> list[bytes]:
        """Render every page to an encoded image, in page order.

        Raises:
            RasterizationError: if the document cannot be rendered.
        """


class BaseOcrEngine(ABC):
    """Recognizes text on a single page image."""

    @abstractmethod
    def recognize(self, image_bytes: bytes) -> str:
        """Return the text found on the image ("" when nothing is found).

        Raises:
            OcrEngineUnavailableError: if the engine cannot run at all.
            OcrError: if recognition of this image failed.
        """
