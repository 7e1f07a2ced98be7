#!/usr/bin/env python3
"""
Ledger OCR - Main Entry Point.

Command-line interface to the invoice extraction and reconciliation
engine. Each input invoice (an image, or a .txt file holding already
recognized text) is parsed, reconciled and written to a JSON or Excel
report.

Usage:
    Command Line:
        python main.py --input invoice.jpg --output outputs/invoice.json
        python main.py --input ./invoices/ --output outputs/ledger.xlsx

    Python:
        from main import run_pipeline
        entries = run_pipeline([Path("invoice.txt")])

Author: ML Engineering Team
Version: 1.0.0
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

from config import ConfigurationManager
from ledger_ocr.output_handler import OutputHandler
from ledger_ocr.pipeline import InvoicePipeline, PipelineResult
from ledger_ocr.utils.exceptions import LedgerOCRError, UnsupportedFileTypeError
from ledger_ocr.utils.logger import ROOT_LOGGER_NAME, get_logger, setup_logger_from_config

IMAGE_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.tif', '.tiff', '.bmp', '.webp'}
TEXT_EXTENSIONS = {'.txt'}
SUPPORTED_EXTENSIONS = IMAGE_EXTENSIONS | TEXT_EXTENSIONS


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Invoice OCR extraction and reconciliation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    Process single invoice image:
        python main.py --input invoice.jpg --output outputs/invoice.json

    Process recognized text:
        python main.py --input scan.txt

    Process directory into a workbook:
        python main.py --input ./invoices/ --output outputs/ledger.xlsx
        """
    )

    parser.add_argument(
        "--input", "-i",
        type=str,
        required=True,
        help="Invoice image, .txt file of recognized text, or a directory of them"
    )

    parser.add_argument(
        "--output", "-o",
        type=str,
        default="outputs/reconciled_invoices.json",
        help="Output .json or .xlsx file (default: outputs/reconciled_invoices.json)"
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=None,
        help="Path to custom configuration file"
    )

    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Suppress console logging"
    )

    return parser.parse_args(argv)


def initialize_system(args: argparse.Namespace) -> ConfigurationManager:
    """
    Initialize configuration and logging.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Initialized configuration manager.

    Raises:
        ConfigurationError: If the settings file is missing or malformed.
    """
    ConfigurationManager.reset()
    config = ConfigurationManager(args.config)

    logger = setup_logger_from_config(
        level="DEBUG" if args.debug else None,
        quiet=args.quiet
    )

    logger.info("=" * 60)
    logger.info("LEDGER OCR - INVOICE EXTRACTION AND RECONCILIATION")
    logger.info("=" * 60)
    logger.info(f"Version: {config.get('project.version', '1.0.0')}")
    logger.info(f"Input: {args.input}")
    logger.info(f"Output: {args.output}")

    return config


def collect_inputs(input_path: str) -> List[Path]:
    """
    Resolve the input argument to the list of files to process.

    Raises:
        FileNotFoundError: If the input path doesn't exist.
        UnsupportedFileTypeError: If a single input file has an unsupported type.
    """
    logger = get_logger(__name__)
    path = Path(input_path)

    if not path.exists():
        raise FileNotFoundError(f"Input path not found: {path}")

    if path.is_file():
        if path.suffix.lower() not in SUPPORTED_EXTENSIONS:
            raise UnsupportedFileTypeError(path.suffix, sorted(SUPPORTED_EXTENSIONS))
        return [path]

    files = sorted(
        p for p in path.iterdir()
        if p.is_file() and p.suffix.lower() in SUPPORTED_EXTENSIONS
    )

    if not files:
        logger.warning(f"No supported files found in: {path}")
    else:
        logger.info(f"Found {len(files)} files to process")

    return files


def process_file(pipeline: InvoicePipeline, file_path: Path) -> PipelineResult:
    """Run one input file through the pipeline."""
    if file_path.suffix.lower() in TEXT_EXTENSIONS:
        text = file_path.read_text(encoding='utf-8', errors='replace')
        return pipeline.process_text(text)
    return pipeline.process_image(file_path)


def run_pipeline(
    input_files: List[Path],
    pipeline: Optional[InvoicePipeline] = None
) -> List[Tuple[str, PipelineResult]]:
    """
    Process input files.

    Args:
        input_files: Files to process.
        pipeline: Pipeline to use. Created with defaults when None.

    Returns:
        List of (file name, PipelineResult) pairs.
    """
    logger = get_logger(__name__)
    pipeline = pipeline or InvoicePipeline()
    entries = []

    for file_path in input_files:
        logger.info(f"Processing: {file_path.name}")
        result = process_file(pipeline, file_path)

        if result.success:
            invoice = result.data
            logger.info(
                f"  {invoice.party_name or 'Unknown party'}: {len(invoice.items)} items, "
                f"total {invoice.total:.2f} ({invoice.validation_summary})"
            )
        else:
            logger.error(f"  Failed: {result.error}")

        entries.append((file_path.name, result))

    return entries


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main function - entry point for command-line execution.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    args = parse_arguments(argv)

    try:
        initialize_system(args)
        logger = get_logger(__name__)

        input_files = collect_inputs(args.input)
        if not input_files:
            logger.error("No files to process")
            return 1

        entries = run_pipeline(input_files)
        output_file = OutputHandler().save(entries, args.output)

        succeeded = sum(1 for _, result in entries if result.success)
        logger.info("=" * 60)
        logger.info(f"Processed {len(entries)} files ({succeeded} succeeded). Output: {output_file}")
        logger.info("=" * 60)

        return 0 if succeeded else 1

    except (FileNotFoundError, LedgerOCRError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    except KeyboardInterrupt:
        print("\nOperation cancelled by user", file=sys.stderr)
        return 130

    except Exception as e:
        print(f"Unexpected error: {e}", file=sys.stderr)
        if args.debug:
            logging.getLogger(ROOT_LOGGER_NAME).exception("Unhandled error")
        return 1


if __name__ == "__main__":
    sys.exit(main())
