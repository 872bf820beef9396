# hwpdecoder/core/processor/hwp5_helper/hwp5_fileheader.py
"""
HWP 5.0 FileHeader Stream

FileHeader structure (256 bytes, never compressed):
- 0-31: Signature "HWP Document File" (NUL padded)
- 32-35: Version DWORD 0xMMnnPPrr (e.g. 0x05000300 = 5.0.3.0)
- 36-39: Document flags (compression, password, distribution, ...)
- 40-43: License flags (CCL / KOGL, copy limits)
- 44-47: Encrypt version
- 48: KOGL license country
- 49-255: Reserved
"""
import logging
from dataclasses import dataclass

from hwpdecoder.core.processor.hwp5_helper.hwp5_constants import (
    HWP_SIGNATURE,
    FILE_HEADER_SIZE,
    SUPPORTED_MAJOR_VERSION,
    FLAG_COMPRESSED,
    FLAG_PASSWORD,
    FLAG_DISTRIBUTION,
    FLAG_SCRIPT,
    FLAG_DRM,
    FLAG_XML_TEMPLATE,
    FLAG_HISTORY,
    FLAG_SIGNATURE,
    FLAG_CERT_ENCRYPT,
    FLAG_SIGNATURE_SPARE,
    FLAG_CERT_DRM,
    FLAG_CCL,
    FLAG_MOBILE,
    FLAG_PRIVACY,
    FLAG_TRACK_CHANGE,
    FLAG_KOGL,
    FLAG_VIDEO,
    FLAG_ORDER_FIELD,
)
from hwpdecoder.core.processor.hwp5_helper.hwp5_errors import (
    InsufficientData,
    InvalidSignature,
    UnsupportedVersion,
)
from hwpdecoder.core.processor.hwp5_helper.hwp5_fields import FieldReader

logger = logging.getLogger("document-processor.HWP5")


def format_version(version: int) -> str:
    """0x05000300 -> '5.0.3.0'."""
    return f"{(version >> 24) & 0xFF}.{(version >> 16) & 0xFF}.{(version >> 8) & 0xFF}.{version & 0xFF}"


@dataclass(frozen=True)
class FileHeader:
    signature: str
    version: int
    document_flags: int
    license_flags: int
    encrypt_version: int
    kogl_country: int

    @property
    def version_string(self) -> str:
        return format_version(self.version)

    @property
    def major_version(self) -> int:
        return (self.version >> 24) & 0xFF

    def _has(self, mask: int) -> bool:
        return bool(self.document_flags & mask)

    @property
    def compressed(self) -> bool:
        return self._has(FLAG_COMPRESSED)

    @property
    def password_encrypted(self) -> bool:
        return self._has(FLAG_PASSWORD)

    @property
    def distributed(self) -> bool:
        return self._has(FLAG_DISTRIBUTION)

    @property
    def has_script(self) -> bool:
        return self._has(FLAG_SCRIPT)

    @property
    def drm(self) -> bool:
        return self._has(FLAG_DRM)

    @property
    def has_xml_template(self) -> bool:
        return self._has(FLAG_XML_TEMPLATE)

    @property
    def has_history(self) -> bool:
        return self._has(FLAG_HISTORY)

    @property
    def signed(self) -> bool:
        return self._has(FLAG_SIGNATURE)

    @property
    def certificate_encrypted(self) -> bool:
        return self._has(FLAG_CERT_ENCRYPT)

    @property
    def signature_spare(self) -> bool:
        return self._has(FLAG_SIGNATURE_SPARE)

    @property
    def certificate_drm(self) -> bool:
        return self._has(FLAG_CERT_DRM)

    @property
    def ccl(self) -> bool:
        return self._has(FLAG_CCL)

    @property
    def mobile_optimized(self) -> bool:
        return self._has(FLAG_MOBILE)

    @property
    def privacy_secured(self) -> bool:
        return self._has(FLAG_PRIVACY)

    @property
    def track_change(self) -> bool:
        return self._has(FLAG_TRACK_CHANGE)

    @property
    def kogl(self) -> bool:
        return self._has(FLAG_KOGL)

    @property
    def has_video_control(self) -> bool:
        return self._has(FLAG_VIDEO)

    @property
    def has_order_field(self) -> bool:
        return self._has(FLAG_ORDER_FIELD)

    # License flags (bytes 40-43)
    @property
    def license_ccl_kogl(self) -> bool:
        return bool(self.license_flags & 0x01)

    @property
    def copy_restricted(self) -> bool:
        return bool(self.license_flags & 0x02)

    @property
    def copy_same_condition(self) -> bool:
        return bool(self.license_flags & 0x04)


def parse_file_header(data: bytes) -> FileHeader:
    """
    Parse the FileHeader stream.

    Args:
        data: FileHeader stream bytes

    Returns:
        FileHeader

    Raises:
        InsufficientData: fewer than 256 bytes
        InvalidSignature: signature is not "HWP Document File"
        UnsupportedVersion: major version is not 5
    """
    if len(data) < FILE_HEADER_SIZE:
        raise InsufficientData("FileHeader", FILE_HEADER_SIZE, len(data))

    reader = FieldReader(data, 'FileHeader')
    raw_signature = reader.take('signature', 32)
    signature = raw_signature.rstrip(b'\x00')
    if signature != HWP_SIGNATURE:
        raise InvalidSignature(signature.decode('latin-1'))

    header = FileHeader(
        signature=signature.decode('ascii'),
        version=reader.u32('version'),
        document_flags=reader.u32('document_flags'),
        license_flags=reader.u32('license_flags'),
        encrypt_version=reader.u32('encrypt_version'),
        kogl_country=reader.u8('kogl_country'),
    )

    if header.major_version != SUPPORTED_MAJOR_VERSION:
        raise UnsupportedVersion(header.version_string)

    logger.debug(
        f"FileHeader: version={header.version_string}, compressed={header.compressed}, "
        f"encrypted={header.password_encrypted}, distributed={header.distributed}"
    )
    return header


__all__ = [
    'format_version',
    'FileHeader',
    'parse_file_header',
]
