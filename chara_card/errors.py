# chara_card/errors.py
from typing import Optional


class CardExtractionError(Exception):
    """Base class for every fatal extraction failure."""


class NotAContainer(CardExtractionError):
    def __init__(self, message: str = "Not a PNG: signature missing or mismatched"):
        super().__init__(message)


class TruncatedChunk(CardExtractionError):
    def __init__(self, offset: int, tag: str, length: int, available: int):
        self.offset = offset
        self.tag = tag
        self.length = length
        self.available = available
        super().__init__(
            f"Truncated {tag!r} chunk at offset {offset}: "
            f"declares {length} bytes, only {available} available"
        )


class NoEmbeddedData(CardExtractionError):
    def __init__(self, message: str = "No textual chunks found"):
        super().__init__(message)


class UnrecoverableData(CardExtractionError):
    def __init__(self, raw_text: Optional[str], message: str = "Embedded text is not parseable JSON"):
        self.raw_text = raw_text
        super().__init__(message)


__all__ = [
    "CardExtractionError",
    "NotAContainer",
    "TruncatedChunk",
    "NoEmbeddedData",
    "UnrecoverableData",
]
