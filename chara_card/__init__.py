from .logging_config import setup_logging

# Configure logging on import so every module logs the same way.
setup_logging()

from .errors import (
    CardExtractionError,
    NoEmbeddedData,
    NotAContainer,
    TruncatedChunk,
    UnrecoverableData,
)
from .extract import extract_card, extract_card_file, scan_directory
from .loose_json import ExtractionResult

__all__ = [
    "CardExtractionError",
    "ExtractionResult",
    "NoEmbeddedData",
    "NotAContainer",
    "TruncatedChunk",
    "UnrecoverableData",
    "extract_card",
    "extract_card_file",
    "scan_directory",
]
