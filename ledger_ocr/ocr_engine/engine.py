"""
Main OCR Engine Module.

This module provides the OCREngine class, the boundary between the ledger
and the OCR capability. It takes an invoice image and returns a
RecognitionResult. Capability failures are returned as data
(``success=False`` plus an error message), never raised, so callers can
tell "OCR failed" apart from "OCR found nothing".

Usage:
    from ledger_ocr.ocr_engine import OCREngine

    engine = OCREngine()
    result = engine.recognize("invoice.jpg")

    if result.success:
        print(result.lines)
    else:
        print(result.error)

Author: ML Engineering Team
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

from PIL import Image

from config import get_config
from ledger_ocr.utils.exceptions import LedgerOCRError, OCRProcessingError
from ledger_ocr.utils.logger import get_logger
from .ocr_result import OCRResult, RecognitionResult
from .tesseract_backend import TesseractBackend

logger = get_logger(__name__)

ImageInput = Union[Image.Image, str, Path]


class OCREngine:
    """
    OCR capability wrapper.

    The backend is created on first use unless one is injected. Any object
    with an ``extract(image) -> OCRResult`` method can serve as backend.

    Supported Backends:
        - tesseract: Tesseract OCR via pytesseract (default)

    Attributes:
        backend_name: Name of the OCR backend
        backend: The backend instance, None until first use

    Example:
        >>> engine = OCREngine()
        >>> result = engine.recognize(image)
        >>> result.success, result.confidence
        (True, 87.4)
    """

    SUPPORTED_BACKENDS = ['tesseract']

    RETRY_HINT = "Please retry, or check the OCR installation."

    def __init__(self, backend: Optional[Any] = None) -> None:
        """
        Initialize the OCR engine.

        Args:
            backend: Backend instance to use. If None, the backend named
                in configuration is created lazily.
        """
        self.backend = backend
        if backend is not None:
            self.backend_name = getattr(backend, 'name', type(backend).__name__)
        else:
            self.backend_name = get_config("ocr.engine", "tesseract")
            if self.backend_name == "pytesseract":
                self.backend_name = "tesseract"

        logger.debug(f"OCR Engine created with backend: {self.backend_name}")

    def _initialize_backend(self):
        """
        Create the configured backend.

        Raises:
            OCREngineNotAvailableError: If the backend cannot be initialized.
        """
        if self.backend_name not in self.SUPPORTED_BACKENDS:
            logger.warning(
                f"Unknown backend '{self.backend_name}', falling back to tesseract"
            )
            self.backend_name = "tesseract"

        backend = TesseractBackend()
        logger.info(f"OCR Engine initialized with backend: {self.backend_name}")
        return backend

    @staticmethod
    def _load_image(image: ImageInput) -> Image.Image:
        if isinstance(image, (str, Path)):
            image_path = str(image)
            logger.debug(f"Loading image from: {image_path}")
            try:
                loaded = Image.open(image_path)
                loaded.load()
                return loaded
            except Exception as e:
                raise OCRProcessingError(image_path, f"Failed to load image: {e}")

        if not isinstance(image, Image.Image):
            raise OCRProcessingError("unknown", "Invalid image input")

        return image

    def extract(self, image: ImageInput) -> OCRResult:
        """
        Run the backend on an image.

        Args:
            image: PIL Image or path to image file.

        Returns:
            Raw OCRResult.

        Raises:
            OCREngineNotAvailableError: If the backend cannot be initialized.
            OCRProcessingError: If loading or recognition fails.
        """
        image = self._load_image(image)

        if self.backend is None:
            self.backend = self._initialize_backend()

        logger.debug(f"Extracting text using {self.backend_name} backend")
        return self.backend.extract(image)

    def recognize(self, image: ImageInput) -> RecognitionResult:
        """
        Recognize the text of an invoice image.

        Args:
            image: PIL Image or path to image file.

        Returns:
            RecognitionResult; ``success=False`` with an error message when
            the OCR capability fails.
        """
        try:
            result = self.extract(image)
        except LedgerOCRError as e:
            logger.error(f"OCR recognition failed: {e}")
            return RecognitionResult.failure(f"{e}. {self.RETRY_HINT}", self.backend_name)
        except Exception as e:
            logger.exception(f"Unexpected OCR failure: {e}")
            return RecognitionResult.failure(
                f"OCR failed: {e}. {self.RETRY_HINT}", self.backend_name
            )

        recognition = RecognitionResult.from_ocr_result(result)
        if not recognition.lines:
            logger.warning("OCR succeeded but found no text")
        return recognition

    def get_backend_info(self) -> Dict[str, Any]:
        return {
            'backend': self.backend_name,
            'initialized': self.backend is not None
        }
