"""
OCR Engine Module for the Ledger OCR Engine.

This module is the boundary to the OCR capability:
    - Text and confidence extraction from invoice images
    - Grouping of words into text lines
    - Failures reported as data, not exceptions

Backends:
    - Tesseract (pytesseract)

Author: ML Engineering Team
"""

from .engine import OCREngine
from .tesseract_backend import TesseractBackend
from .ocr_result import OCRResult, OCRWord, OCRLine, RecognitionResult

__all__ = [
    'OCREngine',
    'TesseractBackend',
    'OCRResult',
    'OCRWord',
    'OCRLine',
    'RecognitionResult'
]
