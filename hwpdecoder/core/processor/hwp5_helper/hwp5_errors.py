# hwpdecoder/core/processor/hwp5_helper/hwp5_errors.py
"""
HWP 5.0 Decoding Errors

Every failure raised while decoding an HWP 5.0 file is an ``HwpError``.
Each subclass keeps the structured context of the failure (field name,
expected/actual sizes, stream path) as attributes so callers never have
to parse the message text.

Hierarchy:
- HwpError
  - ContainerError          malformed OLE directory / sector chains
  - StreamNotFound          named stream absent from the container
  - StreamReadError         stream present but unreadable
  - RequiredStreamMissing   FileHeader / DocInfo / declared section absent
  - DecompressError         deflate / zlib failure
  - InsufficientData        buffer shorter than a field requires
  - UnexpectedValue         field holds a value outside its domain
  - RecordParseError        record-level failure
    - RecordTreeParseError  record stream could not be turned into a tree
  - UnsupportedVersion      major version outside 5.x
  - InvalidSignature        FileHeader signature mismatch
"""
from typing import Any, Optional


class HwpError(Exception):
    """Base class for all HWP decoding failures."""


class ContainerError(HwpError):
    """The compound container itself is malformed."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid OLE container: {reason}")


class StreamNotFound(HwpError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Stream not found: {path}")


class StreamReadError(HwpError):
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read stream {path}: {reason}")


class RequiredStreamMissing(HwpError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Required stream missing: {path}")


class DecompressError(HwpError):
    """
    Decompression failure.

    Attributes:
        format: 'deflate' (raw, no header) or 'zlib' (framed)
        reason: zlib error text
    """

    def __init__(self, format: str, reason: str):
        self.format = format
        self.reason = reason
        super().__init__(f"Failed to decompress {format} data: {reason}")


class InsufficientData(HwpError):
    """
    Fewer bytes remain than a field needs.

    Attributes:
        field: Dotted field name (e.g. 'CharShape.base_size')
        expected: Number of bytes required
        actual: Number of bytes available
    """

    def __init__(self, field: str, expected: int, actual: int):
        self.field = field
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Insufficient data for {field}: expected {expected} bytes, got {actual}"
        )


class UnexpectedValue(HwpError):
    def __init__(self, field: str, expected: Any, found: Any):
        self.field = field
        self.expected = expected
        self.found = found
        super().__init__(f"Unexpected value for {field}: expected {expected}, found {found}")


class RecordParseError(HwpError):
    def __init__(self, record_type: str, reason: str):
        self.record_type = record_type
        self.reason = reason
        super().__init__(f"Failed to parse {record_type} record: {reason}")


class RecordTreeParseError(RecordParseError):
    """
    Record stream could not be turned into a tree.

    The tree algorithm itself never rejects a level sequence, so this is
    always a tokenizer failure; the original error is kept in ``cause``
    (and chained as ``__cause__``) with its field/offset context intact.
    """

    def __init__(self, stream: str, cause: Optional[HwpError] = None):
        self.stream = stream
        self.cause = cause
        super().__init__("RecordTree", f"{stream}: {cause}")


class UnsupportedVersion(HwpError):
    def __init__(self, version: str):
        self.version = version
        super().__init__(f"Unsupported HWP version: {version}")


class InvalidSignature(HwpError):
    def __init__(self, found: str):
        self.found = found
        super().__init__(f"Invalid HWP signature: {found!r}")


__all__ = [
    'HwpError',
    'ContainerError',
    'StreamNotFound',
    'StreamReadError',
    'RequiredStreamMissing',
    'DecompressError',
    'InsufficientData',
    'UnexpectedValue',
    'RecordParseError',
    'RecordTreeParseError',
    'UnsupportedVersion',
    'InvalidSignature',
]
