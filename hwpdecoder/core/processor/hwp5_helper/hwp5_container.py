# hwpdecoder/core/processor/hwp5_helper/hwp5_container.py
"""
HWP 5.0 OLE Container Reader

Thin read-only view over an OLE compound document (olefile) holding an
HWP 5.0 file. Streams are addressed by slash separated paths; at most two
levels are used by the format:

- FileHeader, DocInfo, PrvText, PrvImage, \\x05HwpSummaryInformation
- BodyText/Section0..N, ViewText/Section0..N
- BinData/BIN0001.png, Scripts/DefaultJScript, XMLTemplate/Schema

Streams are always returned whole; there is no partial read API.
"""
import io
import re
import logging
from typing import List, Optional, Tuple, Union

import olefile

from hwpdecoder.core.processor.hwp5_helper.hwp5_constants import (
    OLE_MAGIC,
    HWP_SIGNATURE,
    STORAGE_BODY_TEXT,
    SECTION_STREAM_PREFIX,
)
from hwpdecoder.core.processor.hwp5_helper.hwp5_errors import (
    ContainerError,
    StreamNotFound,
    StreamReadError,
)

logger = logging.getLogger("document-processor.HWP5")

# Header sector plus one FAT and one directory sector
MINIMAL_CONTAINER_SIZE = 1536

MAX_PATH_DEPTH = 2

_SECTION_PATTERN = re.compile(r'^Section(\d+)$')

StreamPath = Union[str, List[str], Tuple[str, ...]]


def check_file_signature(raw_data: bytes) -> Optional[str]:
    """
    Check file signature to identify file type.

    Args:
        raw_data: File binary data

    Returns:
        "OLE" for a compound document (HWP 5.0), "HWP_LEGACY" for HWP 2.0/3.0,
        "ZIP" for HWPX, or None if unknown
    """
    if len(raw_data) < 32:
        return None

    if raw_data[:8] == OLE_MAGIC:
        return "OLE"

    if HWP_SIGNATURE in raw_data[:32]:
        return "HWP_LEGACY"

    if raw_data[:4] == b'PK\x03\x04':
        return "ZIP"

    return None


def _split_path(path: StreamPath) -> List[str]:
    if isinstance(path, str):
        return [part for part in path.split('/') if part]
    return list(path)


class HwpContainer:
    """
    Opened OLE compound container.

    Usage:
        container = HwpContainer.open(file_data)
        header = container.read_stream("FileHeader")
        section = container.read_stream("BodyText/Section0")
    """

    def __init__(self, ole: olefile.OleFileIO, size: int):
        self._ole = ole
        self.size = size

    @classmethod
    def open(cls, data: bytes) -> 'HwpContainer':
        """
        Open a compound container held in memory.

        Validates the minimum size and magic number, then lets olefile check
        the header, FAT, mini FAT and directory sector chains.

        Args:
            data: Complete file contents

        Returns:
            HwpContainer instance

        Raises:
            ContainerError: Buffer is not a well-formed OLE container
        """
        if len(data) < MINIMAL_CONTAINER_SIZE:
            raise ContainerError(
                f"file is {len(data)} bytes, minimum is {MINIMAL_CONTAINER_SIZE}"
            )
        if data[:8] != OLE_MAGIC:
            raise ContainerError(f"bad magic {data[:8].hex()}")

        try:
            ole = olefile.OleFileIO(io.BytesIO(data))
        except Exception as e:
            raise ContainerError(str(e)) from e

        logger.debug(f"Opened OLE container: {len(data)} bytes, {len(ole.direntries)} directory entries")
        return cls(ole, len(data))

    def exists(self, path: StreamPath) -> bool:
        """True if ``path`` names a stream (not a storage)."""
        parts = _split_path(path)
        if not parts or len(parts) > MAX_PATH_DEPTH:
            return False
        return self._ole.get_type(parts) == olefile.STGTY_STREAM

    def read_stream(self, path: StreamPath) -> bytes:
        """
        Read a whole stream.

        Args:
            path: 'Name' or 'Storage/Name'

        Returns:
            Raw (still compressed) stream bytes

        Raises:
            StreamNotFound: No stream at that path
            StreamReadError: Stream exists but its sector chain is broken
        """
        parts = _split_path(path)
        name = '/'.join(parts)
        if not self.exists(parts):
            raise StreamNotFound(name)

        try:
            with self._ole.openstream(parts) as stream:
                data = stream.read()
        except Exception as e:
            raise StreamReadError(name, str(e)) from e

        expected = self._ole.get_size(parts)
        if len(data) != expected:
            raise StreamReadError(name, f"read {len(data)} bytes of {expected}")
        return data

    def list_streams(self, storage: Optional[str] = None) -> List[str]:
        """
        List stream paths, optionally only those inside ``storage``.

        Returns:
            Slash separated paths sorted by name
        """
        entries = self._ole.listdir(streams=True, storages=False)
        paths = []
        for entry in entries:
            if storage is not None and (len(entry) < 2 or entry[0] != storage):
                continue
            paths.append('/'.join(entry))
        return sorted(paths)

    def section_names(self, storage: str = STORAGE_BODY_TEXT) -> List[str]:
        """Section stream paths in numeric order (Section2 before Section10)."""
        sections = []
        for path in self.list_streams(storage):
            match = _SECTION_PATTERN.match(path.split('/')[-1])
            if match:
                sections.append((int(match.group(1)), path))
        return [path for _, path in sorted(sections)]

    def section_path(self, index: int, storage: str = STORAGE_BODY_TEXT) -> str:
        return f"{storage}/{SECTION_STREAM_PREFIX}{index}"

    def close(self):
        self._ole.close()

    def __enter__(self) -> 'HwpContainer':
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __repr__(self) -> str:
        return f"HwpContainer(size={self.size}, streams={len(self.list_streams())})"


__all__ = [
    'MINIMAL_CONTAINER_SIZE',
    'check_file_signature',
    'HwpContainer',
]
