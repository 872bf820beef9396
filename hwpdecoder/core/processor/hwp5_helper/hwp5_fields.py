# hwpdecoder/core/processor/hwp5_helper/hwp5_fields.py
"""
HWP 5.0 Field Decoding Primitives

Every record decoder is a pure function ``decode(payload, version)`` built
from a FieldReader: fields are read strictly left to right with an explicit
running offset, all integers little-endian.

Primitives:
- Fixed numeric reads (u8/u16/u32/i8/i16/i32, COLORREF, raw bytes)
- Length-prefixed WCHAR strings and typed arrays
- Bit-field extraction with total enum mapping (unknown codes -> default)
- Optional trailing fields, gated either by document version or by the
  number of bytes left in the payload. Both gates exist in the format and
  are chosen per field by the caller; they are never merged.

Any read past the end raises InsufficientData naming the record and field.
"""
import struct
import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Callable, Optional, Tuple, Type, TypeVar

from hwpdecoder.core.processor.hwp5_helper.hwp5_errors import InsufficientData

logger = logging.getLogger("document-processor.HWP5")

E = TypeVar('E', bound=IntEnum)
T = TypeVar('T')

_FORMATS = {
    'u8': '<B',
    'u16': '<H',
    'u32': '<I',
    'i8': '<b',
    'i16': '<h',
    'i32': '<i',
    'u64': '<Q',
    'f64': '<d',
}


# ==========================================================================
# Bit-field helpers
# ==========================================================================

def bits(value: int, shift: int, mask: int) -> int:
    """Extract ``(value >> shift) & mask``."""
    return (value >> shift) & mask


def flag(value: int, bit: int) -> bool:
    """True if ``bit`` (0-based) is set."""
    return bool((value >> bit) & 1)


def to_enum(code: int, enum_cls: Type[E], default: E) -> E:
    """
    Map an integer code onto ``enum_cls``.

    Total: codes with no member map to ``default``.
    """
    try:
        return enum_cls(code)
    except ValueError:
        return default


def enum_field(value: int, shift: int, mask: int, enum_cls: Type[E], default: E) -> E:
    """Bit-field extraction followed by to_enum()."""
    return to_enum(bits(value, shift, mask), enum_cls, default)


def decode_wchars(data: bytes) -> str:
    """UTF-16LE decode; unpaired surrogates become U+FFFD."""
    return data.decode('utf-16-le', errors='replace')


# ==========================================================================
# FieldReader
# ==========================================================================

class FieldReader:
    """
    Cursor over one record payload.

    Attributes:
        data: Payload bytes
        record: Record name used as prefix of error field names
        version: FileHeader version DWORD (0xMMnnPPrr)
        offset: Current read position

    Usage:
        reader = FieldReader(payload, 'CharShape', version)
        reader.require(66)
        base_size = reader.i32('base_size')
        border_fill_id = reader.u16_if('border_fill_id', reader.fits(2))
    """

    def __init__(self, data: bytes, record: str, version: int = 0):
        self.data = data
        self.record = record
        self.version = version
        self.offset = 0

    # ------------------------------------------------------------------
    # Bounds
    # ------------------------------------------------------------------

    def remaining(self) -> int:
        return len(self.data) - self.offset

    def at_end(self) -> bool:
        return self.offset >= len(self.data)

    def require(self, size: int, name: str = 'payload'):
        """
        Fail early if the whole payload is shorter than ``size`` bytes.

        Raises:
            InsufficientData
        """
        if len(self.data) < size:
            raise InsufficientData(f"{self.record}.{name}", size, len(self.data))

    def fits(self, size: int) -> bool:
        """Buffer gate: at least ``size`` bytes left."""
        return self.remaining() >= size

    def version_at_least(self, min_version: int) -> bool:
        """Version gate: document version is ``min_version`` or newer."""
        return self.version >= min_version

    def take(self, name: str, size: int) -> bytes:
        """
        Consume ``size`` raw bytes.

        Raises:
            InsufficientData: fewer than ``size`` bytes remain
        """
        if size < 0 or self.offset + size > len(self.data):
            raise InsufficientData(f"{self.record}.{name}", size, self.remaining())
        chunk = self.data[self.offset:self.offset + size]
        self.offset += size
        return chunk

    def skip(self, name: str, size: int):
        self.take(name, size)

    def rest(self) -> bytes:
        """Consume everything left."""
        chunk = self.data[self.offset:]
        self.offset = len(self.data)
        return chunk

    # ------------------------------------------------------------------
    # Fixed numeric reads
    # ------------------------------------------------------------------

    def _read(self, name: str, kind: str) -> int:
        fmt = _FORMATS[kind]
        return struct.unpack(fmt, self.take(name, struct.calcsize(fmt)))[0]

    def u8(self, name: str) -> int:
        return self._read(name, 'u8')

    def u16(self, name: str) -> int:
        return self._read(name, 'u16')

    def u32(self, name: str) -> int:
        return self._read(name, 'u32')

    def i8(self, name: str) -> int:
        return self._read(name, 'i8')

    def i16(self, name: str) -> int:
        return self._read(name, 'i16')

    def i32(self, name: str) -> int:
        return self._read(name, 'i32')

    def u64(self, name: str) -> int:
        return self._read(name, 'u64')

    def f64(self, name: str) -> float:
        return self._read(name, 'f64')

    def colorref(self, name: str) -> int:
        """COLORREF: 0x00bbggrr."""
        return self._read(name, 'u32')

    def ctrl_id(self, name: str) -> bytes:
        """
        Four-character control ID.

        Stored as a little-endian DWORD built from the ASCII characters,
        so the bytes are reversed on disk ('tbl ' is stored as ' lbt').
        """
        return self.take(name, 4)[::-1]

    def array(self, name: str, kind: str, count: int) -> Tuple[int, ...]:
        """Read ``count`` consecutive integers of ``kind`` ('u8', 'i16', ...)."""
        fmt = _FORMATS[kind]
        size = struct.calcsize(fmt)
        raw = self.take(name, size * count)
        return struct.unpack('<' + fmt[1] * count, raw)

    # ------------------------------------------------------------------
    # Variable length
    # ------------------------------------------------------------------

    def wchars(self, name: str, count: int) -> str:
        """``count`` WCHARs (UTF-16LE code units)."""
        return decode_wchars(self.take(name, count * 2))

    def wstring(self, name: str, count_kind: str = 'u16') -> str:
        """
        Length-prefixed WCHAR string.

        A u16 (or u32) character count followed by ``count`` UTF-16LE code
        units. Fails if the declared count exceeds the remaining bytes.
        """
        count = self._read(f"{name}.len", count_kind)
        return self.wchars(name, count)

    def wstring_lenient(self, name: str) -> str:
        """
        Length-prefixed string used by shapes whose trailing strings may be cut.

        Returns '' when the count or its characters do not fit; the cursor
        then moves to the end of the payload. An absent string (no bytes
        left) is not logged, a cut one is.
        """
        if not self.fits(2):
            if self.remaining():
                logger.debug(f"{self.record}.{name}: {self.remaining()} bytes left, "
                             f"too short for a string length")
            self.offset = len(self.data)
            return ''
        count = self.u16(f"{name}.len")
        if not self.fits(count * 2):
            logger.debug(f"{self.record}.{name}: {count} chars declared, "
                         f"{self.remaining()} bytes left; string dropped")
            self.offset = len(self.data)
            return ''
        return self.wchars(name, count)

    # ------------------------------------------------------------------
    # Optional trailers
    # ------------------------------------------------------------------

    def optional(self, present: bool, read: Callable[[], T]) -> Optional[T]:
        """
        Read a trailing field only when its gate is open.

        ``present`` is the caller's gate (fits(), version_at_least() or both).
        When the gate is open the read is strict and may still raise
        InsufficientData.
        """
        if not present:
            return None
        return read()

    def u8_if(self, name: str, present: bool) -> Optional[int]:
        return self.optional(present, lambda: self.u8(name))

    def u16_if(self, name: str, present: bool) -> Optional[int]:
        return self.optional(present, lambda: self.u16(name))

    def u32_if(self, name: str, present: bool) -> Optional[int]:
        return self.optional(present, lambda: self.u32(name))

    def i32_if(self, name: str, present: bool) -> Optional[int]:
        return self.optional(present, lambda: self.i32(name))

    def __repr__(self) -> str:
        return f"FieldReader(record={self.record}, offset={self.offset}, size={len(self.data)})"


# ==========================================================================
# Fallback shape
# ==========================================================================

@dataclass(frozen=True)
class UnknownRecord:
    """Undocumented or rare record kept as raw payload."""
    tag_id: int
    payload: bytes

    def __repr__(self) -> str:
        return f"UnknownRecord(tag_id={self.tag_id}, payload_size={len(self.payload)})"


def decode_unknown(tag_id: int, payload: bytes) -> UnknownRecord:
    return UnknownRecord(tag_id, bytes(payload))


__all__ = [
    'bits',
    'flag',
    'to_enum',
    'enum_field',
    'decode_wchars',
    'FieldReader',
    'UnknownRecord',
    'decode_unknown',
]
