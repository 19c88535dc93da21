# chara_card/chunks.py
from __future__ import annotations
import logging
import struct
from dataclasses import dataclass
from typing import Iterator

from .errors import NotAContainer, TruncatedChunk

logger = logging.getLogger("chara_card.chunks")

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
END_TAG = "IEND"

_HEADER = struct.Struct(">I4s")  # length, type
_CRC_SIZE = 4


@dataclass(frozen=True)
class ChunkRecord:
    type: str      # 4-character tag, e.g. "tEXt"
    data: bytes


def _walk(data: bytes) -> Iterator[ChunkRecord]:
    pos = len(PNG_SIGNATURE)
    while pos + _HEADER.size <= len(data):
        length, raw_tag = _HEADER.unpack_from(data, pos)
        # latin-1 keeps exactly one character per tag byte
        tag = raw_tag.decode("latin-1")
        start = pos + _HEADER.size
        end = start + length
        if end > len(data):
            raise TruncatedChunk(pos, tag, length, len(data) - start)
        logger.debug("chunk %s at offset %d (%d bytes)", tag, pos, length)
        # CRC is skipped, not verified; a missing CRC just exhausts the stream
        pos = end + _CRC_SIZE
        yield ChunkRecord(tag, data[start:end])
        if tag == END_TAG:
            return


def iter_chunks(data: bytes) -> Iterator[ChunkRecord]:
    """Validate the PNG signature, then lazily yield the chunks that follow it.

    The signature is checked eagerly so that ``NotAContainer`` surfaces at the
    call site; ``TruncatedChunk`` is raised while iterating, when the offending
    chunk is reached. Scanning stops after ``IEND`` or when fewer than eight
    bytes remain.
    """
    if len(data) < len(PNG_SIGNATURE) or data[:len(PNG_SIGNATURE)] != PNG_SIGNATURE:
        logger.debug("signature mismatch: %r", bytes(data[:len(PNG_SIGNATURE)]))
        raise NotAContainer()
    return _walk(bytes(data))


__all__ = ["PNG_SIGNATURE", "END_TAG", "ChunkRecord", "iter_chunks"]
