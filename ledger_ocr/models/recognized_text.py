"""
Recognized Text Data Classes.

Immutable input to the invoice parser: the ordered text lines produced by
the OCR capability, the undivided text blob and an overall confidence.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Tuple

from ledger_ocr.utils.money import parse_amount


@dataclass(frozen=True)
class RecognizedWord:
    """A single recognized word with its OCR confidence (0-100)."""
    text: str
    confidence: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {'text': self.text, 'confidence': self.confidence}


@dataclass(frozen=True)
class RecognizedText:
    """
    Text recognized from one invoice image.

    Lines are trimmed and empty lines are dropped on construction, so the
    parser can rely on every line being non-empty.

    Attributes:
        lines: Ordered, trimmed, non-empty text lines
        text: Original undivided text
        confidence: Overall confidence score in [0, 100]
        words: Optional per-word confidences

    Example:
        >>> recognized = RecognizedText.from_text("ABC Traders\\n\\nTotal 500")
        >>> recognized.lines
        ('ABC Traders', 'Total 500')
    """
    lines: Tuple[str, ...] = ()
    text: str = ''
    confidence: float = 0.0
    words: Tuple[RecognizedWord, ...] = field(default_factory=tuple)

    def __post_init__(self):
        cleaned = tuple(
            str(line).strip() for line in (self.lines or ())
            if line is not None and str(line).strip()
        )
        object.__setattr__(self, 'lines', cleaned)
        object.__setattr__(self, 'text', self.text or '')
        object.__setattr__(self, 'confidence', max(0.0, min(100.0, float(parse_amount(self.confidence)))))
        object.__setattr__(self, 'words', tuple(self.words or ()))

    @classmethod
    def from_text(cls, text: Optional[str], confidence: float = 0.0) -> 'RecognizedText':
        """Split a raw text blob into lines."""
        text = text or ''
        return cls(lines=tuple(text.splitlines()), text=text, confidence=confidence)

    @classmethod
    def from_lines(
        cls,
        lines: Iterable[str],
        confidence: float = 0.0,
        words: Iterable[RecognizedWord] = ()
    ) -> 'RecognizedText':
        """Build from already separated lines; the text blob is their join."""
        lines = tuple(lines or ())
        return cls(
            lines=lines,
            text='\n'.join(str(line) for line in lines if line is not None),
            confidence=confidence,
            words=tuple(words or ())
        )

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def to_dict(self) -> Dict[str, Any]:
        return {
            'lines': list(self.lines),
            'text': self.text,
            'confidence': self.confidence,
            'words': [w.to_dict() for w in self.words]
        }
