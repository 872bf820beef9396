# hwpdecoder/core/processor/hwp5_helper/hwp5_metadata.py
"""
HWP 5.0 Auxiliary Streams

Decodes the streams a document may carry besides FileHeader, DocInfo and
BodyText:
- \\x05HwpSummaryInformation: OLE property set (title, author, dates, ...)
- PrvText: preview text, UTF-16LE
- PrvImage: preview image (PNG, GIF or BMP)
- Scripts/JScriptVersion, Scripts/DefaultJScript: document scripts
- XMLTemplate/_SchemaName, Schema, Instance: XML template
- BinData/BINxxxx.ext: embedded files

Every stream here is optional. The parse_* functions raise HwpError on
malformed data; read_auxiliary_streams() turns any failure of one stream
into "not present" with a warning and keeps going.
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Dict, Optional, Tuple

from hwpdecoder.core.processor.hwp5_helper.hwp5_constants import (
    STORAGE_BIN_DATA,
    STORAGE_SCRIPTS,
    STORAGE_XML_TEMPLATE,
    STREAM_SUMMARY_INFORMATION,
    STREAM_PREVIEW_TEXT,
    STREAM_PREVIEW_IMAGE,
    STREAM_SCRIPT_VERSION,
    STREAM_DEFAULT_SCRIPT,
    STREAM_XML_TEMPLATE_SCHEMA_NAME,
    STREAM_XML_TEMPLATE_SCHEMA,
    STREAM_XML_TEMPLATE_INSTANCE,
)
from hwpdecoder.core.processor.hwp5_helper.hwp5_container import HwpContainer
from hwpdecoder.core.processor.hwp5_helper.hwp5_decoder import (
    decompress_auxiliary,
    decompress_optional,
    CompressionMode,
)
from hwpdecoder.core.processor.hwp5_helper.hwp5_docinfo import (
    DocInfo,
    BinDataStream,
    scan_bindata_folder,
    find_bindata_stream,
)
from hwpdecoder.core.processor.hwp5_helper.hwp5_docinfo_records import BinDataRecord, BinDataType
from hwpdecoder.core.processor.hwp5_helper.hwp5_errors import HwpError, UnexpectedValue
from hwpdecoder.core.processor.hwp5_helper.hwp5_fields import FieldReader, decode_wchars
from hwpdecoder.core.processor.hwp5_helper.hwp5_fileheader import FileHeader

logger = logging.getLogger("document-processor.HWP5")


# ============================================================================
# Summary Information (OLE Property Set)
# ============================================================================

# Property set header: byte order, version, system id, CLSID, section count
PROPERTY_SET_HEADER_SIZE = 28
# First section: FMTID (16) + offset (4)
PROPERTY_SET_SECTION_ENTRY_SIZE = 20

VT_I2 = 0x02
VT_I4 = 0x03
VT_UI4 = 0x13
VT_LPWSTR = 0x1F
VT_FILETIME = 0x40

# 100-nanosecond intervals since 1601-01-01
FILETIME_EPOCH = datetime(1601, 1, 1)

SUMMARY_PROPERTIES = {
    0x02: 'title',
    0x03: 'subject',
    0x04: 'author',
    0x05: 'keywords',
    0x06: 'comments',
    0x07: 'template',
    0x08: 'last_saved_by',
    0x09: 'revision_number',
    0x0B: 'last_printed',
    0x0C: 'create_time',
    0x0D: 'last_saved_time',
    0x0E: 'page_count',
    0x14: 'date_string',
    0x15: 'paragraph_count',
}


@dataclass(frozen=True)
class SummaryInfo:
    """
    Document summary (HwpSummaryInformation).

    Named attributes hold the well-known properties; ``properties`` keeps
    every decoded property by ID, unnamed ones included.
    """
    title: Optional[str] = None
    subject: Optional[str] = None
    author: Optional[str] = None
    keywords: Optional[str] = None
    comments: Optional[str] = None
    template: Optional[str] = None
    last_saved_by: Optional[str] = None
    revision_number: Optional[str] = None
    last_printed: Optional[datetime] = None
    create_time: Optional[datetime] = None
    last_saved_time: Optional[datetime] = None
    page_count: Optional[int] = None
    date_string: Optional[str] = None
    paragraph_count: Optional[int] = None
    properties: Dict[int, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Named properties that are set."""
        result = {}
        for name in SUMMARY_PROPERTIES.values():
            value = getattr(self, name)
            if value is not None:
                result[name] = value
        return result


def filetime_to_datetime(filetime: int) -> Optional[datetime]:
    """FILETIME to naive UTC datetime; 0 means not set."""
    if filetime == 0:
        return None
    return FILETIME_EPOCH + timedelta(microseconds=filetime // 10)


def _read_property_value(reader: FieldReader, prop_type: int) -> Any:
    if prop_type == VT_LPWSTR:
        count = reader.u32('value.len')
        return reader.wchars('value', count).rstrip('\x00')
    if prop_type == VT_FILETIME:
        return filetime_to_datetime(reader.u64('value'))
    if prop_type == VT_I4:
        return reader.i32('value')
    if prop_type == VT_UI4:
        return reader.u32('value')
    if prop_type == VT_I2:
        return reader.i16('value')
    return None


def parse_summary_information(data: bytes) -> SummaryInfo:
    """
    Parse HwpSummaryInformation stream (OLE Property Set format).

    Only the first property section is read. Property types other than
    strings, FILETIME and integers are skipped.

    Args:
        data: HwpSummaryInformation stream binary data

    Returns:
        SummaryInfo

    Raises:
        InsufficientData: header, property table or a value runs past the end
        UnexpectedValue: byte order mark is not 0xFFFE
    """
    reader = FieldReader(data, 'HwpSummaryInformation')
    reader.require(PROPERTY_SET_HEADER_SIZE + PROPERTY_SET_SECTION_ENTRY_SIZE, 'header')

    byte_order = reader.u16('byte_order')
    if byte_order != 0xFFFE:
        raise UnexpectedValue('HwpSummaryInformation.byte_order', 0xFFFE, byte_order)

    reader.offset = PROPERTY_SET_HEADER_SIZE
    reader.skip('fmtid', 16)
    section_offset = reader.u32('section_offset')

    reader.offset = section_offset
    reader.u32('section_size')
    prop_count = reader.u32('property_count')
    entries = [
        (reader.u32('property_id'), reader.u32('property_offset'))
        for _ in range(prop_count)
    ]

    properties: Dict[int, Any] = {}
    for prop_id, prop_offset in entries:
        if prop_id < 2:
            # 0: dictionary, 1: code page
            continue
        reader.offset = section_offset + prop_offset
        prop_type = reader.u32('property_type') & 0xFFFF
        value = _read_property_value(reader, prop_type)
        if value is None:
            logger.debug(f"HwpSummaryInformation: property 0x{prop_id:02X} type 0x{prop_type:X} skipped")
            continue
        properties[prop_id] = value

    named = {
        name: properties[prop_id]
        for prop_id, name in SUMMARY_PROPERTIES.items()
        if prop_id in properties
    }
    logger.debug(f"HwpSummaryInformation: {len(properties)} properties, named {list(named.keys())}")
    return SummaryInfo(properties=properties, **named)


# ============================================================================
# Preview
# ============================================================================

_IMAGE_SIGNATURES = (
    (b'\x89PNG\r\n\x1a\n', 'png'),
    (b'GIF87a', 'gif'),
    (b'GIF89a', 'gif'),
    (b'BM', 'bmp'),
)


@dataclass(frozen=True)
class PreviewImage:
    data: bytes
    format: Optional[str]

    def __repr__(self) -> str:
        return f"PreviewImage(format={self.format!r}, size={len(self.data)})"


def detect_image_format(data: bytes) -> Optional[str]:
    """'png', 'gif', 'bmp' or None."""
    for signature, name in _IMAGE_SIGNATURES:
        if data.startswith(signature):
            return name
    return None


def parse_preview_text(data: bytes) -> str:
    """PrvText: UTF-16LE text, NUL padding removed."""
    return decode_wchars(data[:len(data) - len(data) % 2]).rstrip('\x00')


def parse_preview_image(data: bytes) -> PreviewImage:
    image_format = detect_image_format(data)
    if image_format is None:
        logger.debug(f"PrvImage: unrecognized format ({data[:4].hex()})")
    return PreviewImage(data, image_format)


# ============================================================================
# Scripts
# ============================================================================

@dataclass(frozen=True)
class ScriptVersion:
    high: int
    low: int


@dataclass(frozen=True)
class Script:
    """DefaultJScript: four u32 length-prefixed WCHAR strings."""
    header: str
    source: str
    pre_source: str
    post_source: str


@dataclass(frozen=True)
class Scripts:
    version: Optional[ScriptVersion] = None
    default_script: Optional[Script] = None


def parse_script_version(data: bytes) -> ScriptVersion:
    reader = FieldReader(data, 'JScriptVersion')
    reader.require(8)
    return ScriptVersion(high=reader.u32('high'), low=reader.u32('low'))


def parse_script(data: bytes) -> Script:
    reader = FieldReader(data, 'DefaultJScript')
    reader.require(16)
    return Script(
        header=reader.wstring('header', 'u32'),
        source=reader.wstring('source', 'u32'),
        pre_source=reader.wstring('pre_source', 'u32'),
        post_source=reader.wstring('post_source', 'u32'),
    )


# ============================================================================
# XML Template
# ============================================================================

@dataclass(frozen=True)
class XmlTemplate:
    schema_name: Optional[str] = None
    schema: Optional[str] = None
    instance: Optional[str] = None


def parse_xml_template_string(data: bytes, stream: str) -> str:
    """XMLTemplate stream: u32 character count + WCHARs."""
    reader = FieldReader(data, stream)
    reader.require(4)
    return reader.wstring('text', 'u32')


# ============================================================================
# BinData
# ============================================================================

@dataclass(frozen=True)
class BinDataEntry:
    """
    One BIN_DATA descriptor matched with its stream.

    Attributes:
        index: Position in DocInfo.bin_data (0-based; references are 1-based)
        record: BIN_DATA record
        stream: Matching BinData stream, None for links or missing streams
        data: Decompressed payload when loading was requested
    """
    index: int
    record: BinDataRecord
    stream: Optional[BinDataStream] = None
    data: Optional[bytes] = None

    def __repr__(self) -> str:
        path = self.stream.path if self.stream else None
        size = len(self.data) if self.data is not None else None
        return f"BinDataEntry(index={self.index}, stream={path!r}, size={size})"


def collect_bin_data(
    container: HwpContainer,
    doc_info: DocInfo,
    compressed: bool,
    load: bool = False,
) -> Tuple[BinDataEntry, ...]:
    """
    Match BIN_DATA records with BinData streams.

    Args:
        container: Opened container
        doc_info: Parsed DocInfo
        compressed: FileHeader compression flag
        load: Read and decompress each payload

    Returns:
        One BinDataEntry per BIN_DATA record, in record order
    """
    streams = scan_bindata_folder(container.list_streams(STORAGE_BIN_DATA))
    entries = []
    for index, record in enumerate(doc_info.bin_data):
        stream = None
        if record.storage_type != BinDataType.LINK:
            stream = find_bindata_stream(record, streams)
            if stream is None:
                logger.warning(f"BIN_DATA {index}: stream {record.stream_name} not found")

        data = None
        if load and stream is not None:
            data = _load_bin_data(container, stream, record.is_compressed(compressed))
        entries.append(BinDataEntry(index, record, stream, data))

    logger.debug(f"BinData: {len(entries)} records, {len(streams)} streams")
    return tuple(entries)


def _load_bin_data(container: HwpContainer, stream: BinDataStream, compressed: bool) -> Optional[bytes]:
    try:
        raw = container.read_stream(stream.path)
    except HwpError as e:
        logger.warning(f"Optional stream {stream.path} ignored: {e}")
        return None
    if not compressed:
        return raw
    return decompress_optional(raw, CompressionMode.DEFLATE, stream.path)


# ============================================================================
# Reader
# ============================================================================

@dataclass(frozen=True)
class AuxiliaryStreams:
    """Optional streams; None means absent or undecodable."""
    summary_info: Optional[SummaryInfo] = None
    preview_text: Optional[str] = None
    preview_image: Optional[PreviewImage] = None
    scripts: Optional[Scripts] = None
    xml_template: Optional[XmlTemplate] = None
    bin_data: Tuple[BinDataEntry, ...] = ()


class _OptionalStreamReader:
    """Reads optional streams, turning every failure into None."""

    def __init__(self, container: HwpContainer, compressed: bool):
        self.container = container
        self.compressed = compressed

    def read(self, path: str, compressible: bool = False) -> Optional[bytes]:
        if not self.container.exists(path):
            return None
        try:
            data = self.container.read_stream(path)
        except HwpError as e:
            logger.warning(f"Optional stream {path} ignored: {e}")
            return None
        if compressible and self.compressed:
            return decompress_auxiliary(data, path)
        return data

    def decode(self, path: str, parser, compressible: bool = False):
        data = self.read(path, compressible)
        if data is None:
            return None
        try:
            return parser(data)
        except HwpError as e:
            logger.warning(f"Optional stream {path} ignored: {e}")
            return None


def read_auxiliary_streams(
    container: HwpContainer,
    header: FileHeader,
    doc_info: DocInfo,
    load_bin_data: bool = False,
) -> AuxiliaryStreams:
    """
    Read every optional stream present in the container.

    Args:
        container: Opened container
        header: Parsed FileHeader (compression flag)
        doc_info: Parsed DocInfo (BIN_DATA records)
        load_bin_data: Also read BinData payloads

    Returns:
        AuxiliaryStreams
    """
    reader = _OptionalStreamReader(container, header.compressed)

    summary_info = reader.decode(STREAM_SUMMARY_INFORMATION, parse_summary_information)
    preview_text = reader.decode(STREAM_PREVIEW_TEXT, parse_preview_text)
    preview_image = reader.decode(STREAM_PREVIEW_IMAGE, parse_preview_image)

    scripts = None
    version_path = f"{STORAGE_SCRIPTS}/{STREAM_SCRIPT_VERSION}"
    script_path = f"{STORAGE_SCRIPTS}/{STREAM_DEFAULT_SCRIPT}"
    if container.exists(version_path) or container.exists(script_path):
        scripts = Scripts(
            version=reader.decode(version_path, parse_script_version, compressible=True),
            default_script=reader.decode(script_path, parse_script, compressible=True),
        )

    xml_template = None
    template_parts = {}
    for key, name in (
        ('schema_name', STREAM_XML_TEMPLATE_SCHEMA_NAME),
        ('schema', STREAM_XML_TEMPLATE_SCHEMA),
        ('instance', STREAM_XML_TEMPLATE_INSTANCE),
    ):
        path = f"{STORAGE_XML_TEMPLATE}/{name}"
        template_parts[key] = reader.decode(path, lambda data, p=path: parse_xml_template_string(data, p))
    if any(value is not None for value in template_parts.values()):
        xml_template = XmlTemplate(**template_parts)

    try:
        bin_data = collect_bin_data(container, doc_info, header.compressed, load_bin_data)
    except HwpError as e:
        logger.warning(f"Optional storage {STORAGE_BIN_DATA} ignored: {e}")
        bin_data = ()

    present = [
        name for name, value in (
            ('summary_info', summary_info),
            ('preview_text', preview_text),
            ('preview_image', preview_image),
            ('scripts', scripts),
            ('xml_template', xml_template),
        ) if value is not None
    ]
    logger.debug(f"Auxiliary streams: {present}, {len(bin_data)} BinData entries")

    return AuxiliaryStreams(
        summary_info=summary_info,
        preview_text=preview_text,
        preview_image=preview_image,
        scripts=scripts,
        xml_template=xml_template,
        bin_data=bin_data,
    )


__all__ = [
    'SUMMARY_PROPERTIES',
    'SummaryInfo',
    'filetime_to_datetime',
    'parse_summary_information',
    'PreviewImage',
    'detect_image_format',
    'parse_preview_text',
    'parse_preview_image',
    'ScriptVersion',
    'Script',
    'Scripts',
    'parse_script_version',
    'parse_script',
    'XmlTemplate',
    'parse_xml_template_string',
    'BinDataEntry',
    'collect_bin_data',
    'AuxiliaryStreams',
    'read_auxiliary_streams',
]
