"""
Utility Module for the Ledger OCR Engine.

This module provides common utilities used across all other modules:
    - Logging configuration
    - Currency rounding and amount parsing
    - File operations and common helpers
"""

from .logger import setup_logger, setup_logger_from_config, get_logger
from .helpers import ensure_directory, get_file_extension, generate_timestamp
from .money import round2, parse_amount, parse_number, find_amounts

__all__ = [
    'setup_logger',
    'setup_logger_from_config',
    'get_logger',
    'ensure_directory',
    'get_file_extension',
    'generate_timestamp',
    'round2',
    'parse_amount',
    'parse_number',
    'find_amounts'
]
