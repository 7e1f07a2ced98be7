"""
Invoice Pipeline Module.

Composition root of the engine. One InvoicePipeline wires an OCR engine,
a parser and a reconciler together and is passed to whatever needs it:

    image → OCREngine → InvoiceParser → TransactionReconciler → ReconciledInvoice

Only an OCR capability failure makes a result unsuccessful. Everything
else degrades to data: missing fields stay empty, arithmetic mismatches
are corrected, and an empty parse yields one editable placeholder item.

Author: ML Engineering Team
"""

from dataclasses import dataclass
from datetime import date
from typing import Any, Callable, Dict, Optional

from config import get_config
from ledger_ocr.models.invoice import LineItem, ReconciledInvoice
from ledger_ocr.models.recognized_text import RecognizedText
from ledger_ocr.ocr_engine import OCREngine
from ledger_ocr.ocr_engine.engine import ImageInput
from ledger_ocr.parser import InvoiceParser
from ledger_ocr.reconciler import TransactionReconciler
from ledger_ocr.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass
class PipelineResult:
    """
    Outcome of processing one invoice.

    Attributes:
        success: False only when the OCR capability failed
        data: Reconciled invoice on success
        error: Actionable message on failure
    """
    success: bool
    data: Optional[ReconciledInvoice] = None
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        if not self.success:
            return {'success': False, 'error': self.error}
        return {'success': True, 'data': self.data.to_dict()}


class InvoicePipeline:
    """
    End-to-end invoice processing.

    Example:
        >>> pipeline = InvoicePipeline()
        >>> result = pipeline.process_image("invoice.jpg")
        >>> if result.success:
        ...     print(result.data.validation_summary)
    """

    def __init__(
        self,
        ocr_engine: Optional[OCREngine] = None,
        parser: Optional[InvoiceParser] = None,
        reconciler: Optional[TransactionReconciler] = None,
        clock: Optional[Callable[[], date]] = None
    ) -> None:
        """
        Initialize the pipeline.

        Args:
            ocr_engine: OCR capability. Created lazily when needed.
            parser: Invoice parser.
            reconciler: Transaction reconciler.
            clock: Returns today's date; used for missing invoice dates.
        """
        self.clock = clock or date.today
        self._ocr_engine = ocr_engine
        self.parser = parser or InvoiceParser(clock=self.clock)
        self.reconciler = reconciler or TransactionReconciler()
        self.empty_item_name = get_config("pipeline.empty_item_name", "Item 1")

    @property
    def ocr_engine(self) -> OCREngine:
        if self._ocr_engine is None:
            self._ocr_engine = OCREngine()
        return self._ocr_engine

    def process_image(self, image: ImageInput) -> PipelineResult:
        """
        Recognize, parse and reconcile an invoice image.

        Args:
            image: PIL Image or path to image file

        Returns:
            PipelineResult; unsuccessful when OCR failed
        """
        logger.info("Processing invoice image")
        recognition = self.ocr_engine.recognize(image)

        if not recognition.success:
            logger.error(f"Invoice processing stopped: {recognition.error}")
            return PipelineResult(success=False, error=recognition.error)

        return self.process_recognized(recognition.to_recognized_text())

    def process_text(self, text: Optional[str], confidence: float = 0.0) -> PipelineResult:
        """Parse and reconcile already recognized text."""
        return self.process_recognized(RecognizedText.from_text(text, confidence))

    def process_recognized(self, recognized: RecognizedText) -> PipelineResult:
        """
        Parse and reconcile recognized text.

        Returns:
            Always successful PipelineResult with a ReconciledInvoice
        """
        parsed = self.parser.parse_invoice(recognized)

        if parsed.is_empty:
            logger.warning("No items or total found, adding an editable placeholder item")
            parsed.items = [LineItem(self.empty_item_name, 1, 0, 0)]

        if not parsed.date:
            parsed.date = self.clock().isoformat()

        reconciled = self.reconciler.reconcile(parsed)
        return PipelineResult(success=True, data=reconciled)
