"""
OCR Result Data Classes.

This module defines the data structures produced at the OCR boundary.

Classes:
    OCRWord: Individual word with bounding box and confidence
    OCRLine: Line of text containing multiple words
    OCRResult: Raw backend output for one image
    RecognitionResult: Outcome of a recognize() call, success or failure

Author: ML Engineering Team
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ledger_ocr.models.recognized_text import RecognizedText, RecognizedWord


@dataclass
class OCRWord:
    """
    A single word/token recognized by the OCR backend.

    Attributes:
        text: The recognized text content
        bbox: Bounding box as (x1, y1, x2, y2) in pixels
        confidence: OCR confidence score (0-100)
        line_index: Index of the line this word belongs to

    Example:
        >>> word = OCRWord(text="Total", bbox=(100, 50, 200, 80), confidence=95.5)
    """
    text: str
    bbox: Tuple[int, int, int, int] = (0, 0, 0, 0)
    confidence: float = 0.0
    line_index: int = 0

    @property
    def x1(self) -> int:
        """Left coordinate."""
        return self.bbox[0]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'text': self.text,
            'bbox': list(self.bbox),
            'confidence': self.confidence,
            'line_index': self.line_index
        }

    def __repr__(self) -> str:
        return f"OCRWord('{self.text}', bbox={self.bbox}, conf={self.confidence:.1f})"


@dataclass
class OCRLine:
    """
    A line of text containing multiple words.

    Example:
        >>> line = OCRLine(words=[OCRWord("Rice"), OCRWord("10"), OCRWord("50")])
        >>> line.text
        'Rice 10 50'
    """
    words: List[OCRWord] = field(default_factory=list)
    bbox: Optional[Tuple[int, int, int, int]] = None
    line_index: int = 0

    @property
    def text(self) -> str:
        """Get the full text of the line."""
        return ' '.join(word.text for word in self.words)

    @property
    def average_confidence(self) -> float:
        if not self.words:
            return 0.0
        return sum(w.confidence for w in self.words) / len(self.words)

    def compute_bbox(self) -> Tuple[int, int, int, int]:
        """Compute bounding box from words."""
        if not self.words:
            return (0, 0, 0, 0)

        self.bbox = (
            min(w.bbox[0] for w in self.words),
            min(w.bbox[1] for w in self.words),
            max(w.bbox[2] for w in self.words),
            max(w.bbox[3] for w in self.words)
        )
        return self.bbox

    def to_dict(self) -> Dict[str, Any]:
        return {
            'text': self.text,
            'words': [w.to_dict() for w in self.words],
            'bbox': list(self.bbox) if self.bbox else None,
            'line_index': self.line_index,
            'average_confidence': self.average_confidence
        }


@dataclass
class OCRResult:
    """
    Raw OCR backend output for a single image.

    Attributes:
        words: All recognized words in reading order
        lines: Words grouped into text lines
        image_width: Width of the source image in pixels
        image_height: Height of the source image in pixels
        language: OCR language used
        engine: OCR engine name
        processing_time: Time taken for OCR in seconds
        metadata: Additional metadata dictionary
    """
    words: List[OCRWord] = field(default_factory=list)
    lines: List[OCRLine] = field(default_factory=list)
    image_width: int = 0
    image_height: int = 0
    language: str = "eng"
    engine: str = "unknown"
    processing_time: float = 0.0
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def text(self) -> str:
        """All text, one line per row."""
        if self.lines:
            return '\n'.join(line.text for line in self.lines)
        return ' '.join(word.text for word in self.words)

    @property
    def word_count(self) -> int:
        return len(self.words)

    @property
    def line_count(self) -> int:
        return len(self.lines)

    @property
    def average_confidence(self) -> float:
        """Average confidence across all words."""
        if not self.words:
            return 0.0
        return sum(w.confidence for w in self.words) / len(self.words)

    def is_empty(self) -> bool:
        return len(self.words) == 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'text': self.text,
            'word_count': self.word_count,
            'line_count': self.line_count,
            'average_confidence': self.average_confidence,
            'image_width': self.image_width,
            'image_height': self.image_height,
            'language': self.language,
            'engine': self.engine,
            'processing_time': self.processing_time,
            'words': [w.to_dict() for w in self.words],
            'lines': [l.to_dict() for l in self.lines],
            'metadata': self.metadata
        }

    def __repr__(self) -> str:
        return (
            f"OCRResult(words={self.word_count}, lines={self.line_count}, "
            f"confidence={self.average_confidence:.1f}%)"
        )


@dataclass
class RecognitionResult:
    """
    Outcome of recognizing one invoice image.

    A failed recognition (backend missing, unreadable image, engine error)
    has ``success=False`` and an ``error`` message. A successful
    recognition may still contain no text; the two are never confused.

    Attributes:
        success: Whether the OCR capability produced a result
        text: Full recognized text
        confidence: Overall confidence (0-100)
        lines: Recognized text lines
        words: Per-word text and confidence
        error: Failure message when success is False
        engine: Backend name
        processing_time: Time taken in seconds
    """
    success: bool
    text: str = ''
    confidence: float = 0.0
    lines: List[str] = field(default_factory=list)
    words: List[RecognizedWord] = field(default_factory=list)
    error: Optional[str] = None
    engine: str = "unknown"
    processing_time: float = 0.0

    @classmethod
    def from_ocr_result(cls, result: OCRResult) -> 'RecognitionResult':
        return cls(
            success=True,
            text=result.text,
            confidence=result.average_confidence,
            lines=[line.text for line in result.lines],
            words=[RecognizedWord(w.text, w.confidence) for w in result.words],
            engine=result.engine,
            processing_time=result.processing_time
        )

    @classmethod
    def failure(cls, error: str, engine: str = "unknown") -> 'RecognitionResult':
        return cls(success=False, error=error, engine=engine)

    def to_recognized_text(self) -> RecognizedText:
        """Parser input for a successful recognition."""
        lines = self.lines or self.text.splitlines()
        return RecognizedText(
            lines=tuple(lines),
            text=self.text,
            confidence=self.confidence,
            words=tuple(self.words)
        )

    def to_dict(self) -> Dict[str, Any]:
        if not self.success:
            return {'success': False, 'error': self.error}
        return {
            'success': True,
            'text': self.text,
            'confidence': self.confidence,
            'lines': list(self.lines),
            'words': [w.to_dict() for w in self.words]
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
