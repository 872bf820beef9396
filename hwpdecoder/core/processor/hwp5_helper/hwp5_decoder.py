# hwpdecoder/core/processor/hwp5_helper/hwp5_decoder.py
"""
HWP 5.0 Compression Utilities

Provides decompression for HWP 5.0 OLE streams.

HWP 5.0 uses zlib Deflate compression, in two framings:
- Raw deflate (no header, wbits=-15): DocInfo, BodyText/Section streams,
  BinData payloads
- zlib framed (standard header): a few auxiliary streams

Whether the primary streams are compressed at all is decided by the
FileHeader flags (bit 0 of bytes 36-39), see hwp5_fileheader.

Required streams propagate DecompressError; optional streams go through
decompress_optional() and degrade to None.
"""
import zlib
import logging
from enum import Enum
from typing import Optional

from hwpdecoder.core.processor.hwp5_helper.hwp5_errors import DecompressError

logger = logging.getLogger("document-processor.HWP5")


class CompressionMode(Enum):
    """Stream framing."""
    NONE = 'none'
    DEFLATE = 'deflate'   # raw, negative window bits
    ZLIB = 'zlib'         # standard 2-byte header + adler32


def decompress(data: bytes, mode: CompressionMode = CompressionMode.DEFLATE) -> bytes:
    """
    Decompress stream data.

    Args:
        data: Stream binary data
        mode: Stream framing

    Returns:
        Decompressed data (``data`` itself for CompressionMode.NONE)

    Raises:
        DecompressError: Data is not valid for the requested framing
    """
    if mode is CompressionMode.NONE:
        return data

    wbits = -15 if mode is CompressionMode.DEFLATE else 15
    decompressor = zlib.decompressobj(wbits)
    try:
        result = decompressor.decompress(data)
        result += decompressor.flush()
    except zlib.error as e:
        raise DecompressError(mode.value, str(e)) from e

    if not decompressor.eof:
        raise DecompressError(mode.value, "incomplete or truncated stream")
    if decompressor.unused_data:
        logger.debug(f"{mode.value}: ignoring {len(decompressor.unused_data)} trailing bytes")
    return result


def decompress_section(data: bytes, compressed: bool) -> bytes:
    """
    Decompress DocInfo or BodyText section data.

    Args:
        data: Section binary data
        compressed: FileHeader compression flag

    Returns:
        Decompressed data

    Raises:
        DecompressError: Deflate data is corrupt
    """
    mode = CompressionMode.DEFLATE if compressed else CompressionMode.NONE
    return decompress(data, mode)


def decompress_bindata(data: bytes) -> bytes:
    """
    Decompress BinData stream (images, OLE objects).

    Args:
        data: BinData binary data

    Returns:
        Decompressed data
    """
    return decompress(data, CompressionMode.DEFLATE)


def decompress_optional(data: bytes, mode: CompressionMode, stream: str) -> Optional[bytes]:
    """
    Decompress an optional auxiliary stream.

    Failure means the feature is treated as absent.

    Args:
        data: Stream binary data
        mode: Stream framing
        stream: Stream path (for logging)

    Returns:
        Decompressed data or None
    """
    try:
        return decompress(data, mode)
    except DecompressError as e:
        logger.warning(f"Optional stream {stream} ignored: {e}")
        return None


def decompress_auxiliary(data: bytes, stream: str) -> Optional[bytes]:
    """
    Decompress an optional auxiliary stream of a compressed document.

    Tries raw deflate first (most common in HWP), then zlib framing.

    Args:
        data: Stream binary data
        stream: Stream path (for logging)

    Returns:
        Decompressed data, or None if neither framing fits
    """
    errors = []
    for mode in (CompressionMode.DEFLATE, CompressionMode.ZLIB):
        try:
            return decompress(data, mode)
        except DecompressError as e:
            errors.append(str(e))
    logger.warning(f"Optional stream {stream} ignored: {'; '.join(errors)}")
    return None


__all__ = [
    'CompressionMode',
    'decompress',
    'decompress_section',
    'decompress_bindata',
    'decompress_optional',
    'decompress_auxiliary',
]
