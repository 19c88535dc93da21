# chara_card/text.py
from __future__ import annotations
import logging
import zlib
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Iterable, Iterator, Optional

from .chunks import ChunkRecord

logger = logging.getLogger("chara_card.text")

NUL = b"\x00"
DEFLATE = 0  # the only compression method PNG defines


class ChunkKind(Enum):
    PLAIN_TEXT = "tEXt"
    COMPRESSED_TEXT = "zTXt"
    INTERNATIONAL_TEXT = "iTXt"
    OTHER = None

    @classmethod
    def of(cls, tag: str) -> "ChunkKind":
        try:
            return cls(tag)
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class TextCandidate:
    keyword: str
    text: str


class _Malformed(Exception):
    pass


def _split_keyword(data: bytes) -> tuple[str, bytes]:
    keyword, sep, rest = data.partition(NUL)
    if not sep:
        raise _Malformed("keyword is not NUL-terminated")
    return keyword.decode("latin-1"), rest


def _inflate(payload: bytes) -> bytes:
    try:
        return zlib.decompress(payload)
    except zlib.error as e:
        raise _Malformed(f"inflate failed: {e}") from e


def _decode_plain(data: bytes) -> TextCandidate:
    keyword, sep, text = data.partition(NUL)
    if not sep:
        # no separator: the whole payload is text under an empty keyword
        return TextCandidate("", data.decode("latin-1"))
    return TextCandidate(keyword.decode("latin-1"), text.decode("latin-1"))


def _decode_compressed(data: bytes) -> TextCandidate:
    keyword, rest = _split_keyword(data)
    if not rest:
        raise _Malformed("missing compression method")
    if rest[0] != DEFLATE:
        raise _Malformed(f"unsupported compression method {rest[0]}")
    return TextCandidate(keyword, _inflate(rest[1:]).decode("latin-1"))


def _decode_international(data: bytes) -> TextCandidate:
    keyword, rest = _split_keyword(data)
    if len(rest) < 2:
        raise _Malformed("missing compression flag/method")
    flag, method = rest[0], rest[1]
    _language, sep, rest = rest[2:].partition(NUL)
    if not sep:
        raise _Malformed("language tag is not NUL-terminated")
    _translated, sep, payload = rest.partition(NUL)
    if not sep:
        raise _Malformed("translated keyword is not NUL-terminated")
    if flag == 1:
        if method != DEFLATE:
            raise _Malformed(f"unsupported compression method {method}")
        payload = _inflate(payload)
    elif flag != 0:
        raise _Malformed(f"invalid compression flag {flag}")
    # UTF-8 here, unlike tEXt/zTXt; bad sequences become U+FFFD
    return TextCandidate(keyword, payload.decode("utf-8", errors="replace"))


_DECODERS: Dict[ChunkKind, Callable[[bytes], TextCandidate]] = {
    ChunkKind.PLAIN_TEXT: _decode_plain,
    ChunkKind.COMPRESSED_TEXT: _decode_compressed,
    ChunkKind.INTERNATIONAL_TEXT: _decode_international,
}


def decode_chunk(chunk: ChunkRecord) -> Optional[TextCandidate]:
    """Decode one textual chunk, or return None for non-textual and malformed chunks."""
    decoder = _DECODERS.get(ChunkKind.of(chunk.type))
    if decoder is None:
        return None
    try:
        return decoder(chunk.data)
    except _Malformed as e:
        logger.debug("dropping %s chunk: %s", chunk.type, e)
        return None


def decode_text_chunks(chunks: Iterable[ChunkRecord]) -> Iterator[TextCandidate]:
    for chunk in chunks:
        cand = decode_chunk(chunk)
        if cand is not None:
            yield cand


__all__ = ["ChunkKind", "TextCandidate", "decode_chunk", "decode_text_chunks"]
