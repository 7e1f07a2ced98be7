"""
Main Output Handler Module.

This module provides the OutputHandler class that writes pipeline
results as JSON or as an Excel workbook.

Author: ML Engineering Team
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from config import get_config
from ledger_ocr.utils.exceptions import OutputError, UnsupportedFileTypeError
from ledger_ocr.utils.helpers import ensure_directory, get_file_extension
from ledger_ocr.utils.logger import get_logger
from .excel_exporter import ExcelExporter, ExportEntry

logger = get_logger(__name__)


class OutputHandler:
    """
    Writes reconciled invoices to disk.

    The output format follows the file extension: ``.json`` or ``.xlsx``.

    Example:
        >>> handler = OutputHandler()
        >>> handler.save([("invoice.jpg", result)], "outputs/ledger.xlsx")
        'outputs/ledger.xlsx'
    """

    SUPPORTED_FORMATS = ['.json', '.xlsx']

    def __init__(self) -> None:
        self.json_indent = get_config("output.json.indent", 2)
        self._excel_exporter = None

    @property
    def excel_exporter(self) -> ExcelExporter:
        """Get or create the Excel exporter."""
        if self._excel_exporter is None:
            self._excel_exporter = ExcelExporter()
        return self._excel_exporter

    @staticmethod
    def build_records(entries: Sequence[ExportEntry]) -> List[Dict[str, Any]]:
        """One JSON-ready record per processed invoice."""
        records = []
        for source, result in entries:
            record = {'source': source}
            record.update(result.to_dict())
            records.append(record)
        return records

    def save(self, entries: Sequence[ExportEntry], output_path: Union[str, Path]) -> str:
        """
        Save results in the format given by the output file extension.

        Args:
            entries: (source label, PipelineResult) pairs.
            output_path: Destination file.

        Returns:
            Path to the written file.

        Raises:
            UnsupportedFileTypeError: For extensions other than .json/.xlsx.
        """
        extension = get_file_extension(output_path)

        if extension == '.json':
            return self.to_json(entries, output_path)
        if extension == '.xlsx':
            return self.to_excel(entries, output_path)

        raise UnsupportedFileTypeError(extension, self.SUPPORTED_FORMATS)

    def to_json(self, entries: Sequence[ExportEntry], output_path: Union[str, Path]) -> str:
        """
        Write results to a JSON file.

        Raises:
            OutputError: If the file cannot be written.
        """
        filepath = Path(output_path)
        ensure_directory(filepath.parent)

        try:
            with open(filepath, 'w', encoding='utf-8') as f:
                json.dump(self.build_records(entries), f, indent=self.json_indent, ensure_ascii=False)
        except OSError as e:
            logger.error(f"JSON export failed: {e}")
            raise OutputError(f"Failed to write {filepath}: {e}")

        logger.info(f"JSON file saved: {filepath} ({len(entries)} invoices)")
        return str(filepath)

    def to_excel(
        self,
        entries: Sequence[ExportEntry],
        output_path: Optional[Union[str, Path]] = None
    ) -> str:
        """Write results to an Excel workbook."""
        if output_path is None:
            return self.excel_exporter.export(entries)

        filepath = Path(output_path)
        return self.excel_exporter.export(entries, filepath.name, str(filepath.parent))
