"""
Excel Exporter Module.

This module writes reconciled invoices to an Excel workbook using
openpyxl:
    - Summary sheet: one row per processed invoice
    - Line Items sheet: one row per reconciled line item

Author: ML Engineering Team
"""

from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from config import get_config
from ledger_ocr.pipeline import PipelineResult
from ledger_ocr.utils.exceptions import ExcelExportError
from ledger_ocr.utils.helpers import ensure_directory, generate_timestamp
from ledger_ocr.utils.logger import get_logger

logger = get_logger(__name__)

# (source label, pipeline result)
ExportEntry = Tuple[str, PipelineResult]


class ExcelExporter:
    """
    Exports reconciled invoices to Excel format.

    Attributes:
        output_dir: Default directory for output files
        summary_sheet: Title of the per-invoice sheet
        items_sheet: Title of the per-line-item sheet

    Example:
        >>> exporter = ExcelExporter()
        >>> filepath = exporter.export([("invoice.jpg", result)], "ledger.xlsx")
        >>> print(f"Saved to: {filepath}")
    """

    SUMMARY_COLUMNS = [
        'Source', 'Status', 'Party', 'Date', 'Items', 'Subtotal', 'Tax', 'Tax %',
        'Total', 'Original Total', 'Corrections', 'Fully Valid', 'Summary', 'Confidence'
    ]

    ITEM_COLUMNS = [
        'Source', 'Party', 'Item', 'Quantity', 'Rate', 'Line Amount',
        'Corrected Amount', 'Auto Corrected'
    ]

    def __init__(self) -> None:
        """Initialize the Excel exporter with configuration."""
        self.output_dir = Path(get_config("paths.output_dir", "outputs"))
        self.summary_sheet = get_config("output.excel.summary_sheet", "Summary")
        self.items_sheet = get_config("output.excel.items_sheet", "Line Items")
        self.filename_pattern = get_config(
            "output.excel.filename_pattern",
            "reconciled_invoices_{timestamp}.xlsx"
        )

        logger.debug(f"ExcelExporter initialized (output_dir: {self.output_dir})")

    def export(
        self,
        entries: Sequence[ExportEntry],
        filename: Optional[str] = None,
        output_dir: Optional[str] = None
    ) -> str:
        """
        Export pipeline results to an Excel file.

        Args:
            entries: (source label, PipelineResult) pairs.
            filename: Output filename. If None, auto-generated.
            output_dir: Output directory. If None, uses configured dir.

        Returns:
            Path to the created Excel file.

        Raises:
            ExcelExportError: If export fails.
        """
        if not entries:
            raise ExcelExportError("No results", "No results to export")

        out_dir = Path(output_dir) if output_dir else self.output_dir
        ensure_directory(out_dir)

        filepath = out_dir / (filename or self.get_default_filename())

        try:
            workbook = Workbook()
            self._create_summary_sheet(workbook, entries)
            self._create_items_sheet(workbook, entries)
            workbook.save(filepath)
        except Exception as e:
            logger.error(f"Excel export failed: {e}")
            raise ExcelExportError(str(filepath), str(e))

        logger.info(f"Excel file saved: {filepath} ({len(entries)} invoices)")
        return str(filepath)

    @staticmethod
    def _write_header(sheet, columns: List[str], color: str) -> None:
        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color=color, end_color=color, fill_type="solid")
        thin_border = Border(
            left=Side(style='thin'),
            right=Side(style='thin'),
            top=Side(style='thin'),
            bottom=Side(style='thin')
        )

        for col, header in enumerate(columns, 1):
            cell = sheet.cell(row=1, column=col, value=header)
            cell.font = header_font
            cell.fill = header_fill
            cell.alignment = Alignment(horizontal="center", vertical="center")
            cell.border = thin_border

        sheet.freeze_panes = 'A2'

    @staticmethod
    def _adjust_widths(sheet, columns: List[str]) -> None:
        for col, header in enumerate(columns, 1):
            max_length = len(header)
            for row in range(2, sheet.max_row + 1):
                value = sheet.cell(row=row, column=col).value
                if value is not None:
                    max_length = max(max_length, len(str(value)))
            sheet.column_dimensions[get_column_letter(col)].width = min(max_length + 2, 50)

    def _create_summary_sheet(self, workbook, entries: Sequence[ExportEntry]) -> None:
        sheet = workbook.active
        sheet.title = self.summary_sheet
        self._write_header(sheet, self.SUMMARY_COLUMNS, "4472C4")

        for row, (source, result) in enumerate(entries, 2):
            if not result.success:
                values = [source, 'Failed'] + [None] * 10 + [result.error, None]
            else:
                invoice = result.data
                values = [
                    source, 'OK', invoice.party_name, invoice.date, len(invoice.items),
                    invoice.subtotal, invoice.tax, invoice.tax_percent, invoice.total,
                    invoice.original_total, invoice.corrections.total_corrections,
                    'Yes' if invoice.is_fully_valid else 'No',
                    invoice.validation_summary, round(invoice.confidence, 2)
                ]

            for col, value in enumerate(values, 1):
                sheet.cell(row=row, column=col, value=value)

        self._adjust_widths(sheet, self.SUMMARY_COLUMNS)

    def _create_items_sheet(self, workbook, entries: Sequence[ExportEntry]) -> None:
        sheet = workbook.create_sheet(title=self.items_sheet)
        self._write_header(sheet, self.ITEM_COLUMNS, "548235")

        row = 2
        for source, result in entries:
            if not result.success:
                continue

            for item in result.data.items:
                values = [
                    source, result.data.party_name, item.name, item.quantity, item.rate,
                    item.line_amount, item.corrected_amount,
                    'Yes' if item.was_auto_corrected else 'No'
                ]
                for col, value in enumerate(values, 1):
                    sheet.cell(row=row, column=col, value=value)
                row += 1

        self._adjust_widths(sheet, self.ITEM_COLUMNS)

    def get_default_filename(self) -> str:
        return self.filename_pattern.format(timestamp=generate_timestamp())
