# hwpdecoder/core/processor/hwp5_helper/__init__.py
"""
HWP 5.0 OLE Format Helper Module

Decodes HWP 5.0 documents into a read-only Document value.

HWP 5.0 is a binary format based on OLE (Object Linking and Embedding)
compound document structure. The file contains:
- FileHeader: Signature, version, compression / encryption flags
- DocInfo: ID tables (fonts, char/para shapes, border fills, styles, BinData)
- BodyText/SectionN: Paragraph, control and table record trees
- BinData: Embedded images and OLE objects
- HwpSummaryInformation, PrvText, PrvImage, Scripts, XMLTemplate: optional

File structure:
- hwp5_constants.py: Tag IDs, control IDs, flags, stream names, version gates
- hwp5_errors.py: Exception hierarchy
- hwp5_container.py: OLE container access (olefile)
- hwp5_decoder.py: Decompression utilities
- hwp5_fileheader.py: FileHeader stream
- hwp5_record.py: Record tokenizer and record tree
- hwp5_fields.py: Field reader, bit-field helpers, raw fallback record
- hwp5_idtable.py: ID tables and reference resolution
- hwp5_docinfo_records.py: DocInfo record shapes
- hwp5_docinfo.py: DocInfo stream parsing
- hwp5_bodytext_records.py: BodyText record shapes
- hwp5_ctrl_header.py: Control header shapes
- hwp5_bodytext.py: Record dispatch and section decoding
- hwp5_table.py: Table grid views
- hwp5_metadata.py: Auxiliary streams
- hwp5_document.py: Document / paragraph / control views
- hwp5_assembler.py: Document assembly and parser configuration
"""

# Constants
from hwpdecoder.core.processor.hwp5_helper.hwp5_constants import (
    HWPTAG_BEGIN,
    HWPTAG_BIN_DATA,
    HWPTAG_PARA_HEADER,
    HWPTAG_PARA_TEXT,
    HWPTAG_CTRL_HEADER,
    HWPTAG_LIST_HEADER,
    HWPTAG_SHAPE_COMPONENT,
    HWPTAG_SHAPE_COMPONENT_PICTURE,
    HWPTAG_TABLE,
    CTRL_ID_TABLE,
    tag_name,
)

# Errors
from hwpdecoder.core.processor.hwp5_helper.hwp5_errors import (
    HwpError,
    ContainerError,
    StreamNotFound,
    StreamReadError,
    RequiredStreamMissing,
    DecompressError,
    InsufficientData,
    UnexpectedValue,
    RecordParseError,
    RecordTreeParseError,
    UnsupportedVersion,
    InvalidSignature,
)

# Container / Decoder / FileHeader
from hwpdecoder.core.processor.hwp5_helper.hwp5_container import HwpContainer, check_file_signature
from hwpdecoder.core.processor.hwp5_helper.hwp5_decoder import (
    CompressionMode,
    decompress,
    decompress_section,
)
from hwpdecoder.core.processor.hwp5_helper.hwp5_fileheader import FileHeader, parse_file_header

# Records
from hwpdecoder.core.processor.hwp5_helper.hwp5_record import (
    RecordToken,
    RecordTokenizer,
    RecordNode,
    RecordTree,
    build_tree,
)
from hwpdecoder.core.processor.hwp5_helper.hwp5_fields import FieldReader, UnknownRecord
from hwpdecoder.core.processor.hwp5_helper.hwp5_idtable import (
    IdTable,
    ResolvedRef,
    UnresolvedRef,
    Reference,
)

# DocInfo / BodyText
from hwpdecoder.core.processor.hwp5_helper.hwp5_docinfo import (
    DocInfo,
    parse_doc_info,
    scan_bindata_folder,
)
from hwpdecoder.core.processor.hwp5_helper.hwp5_bodytext import Section, decode_section
from hwpdecoder.core.processor.hwp5_helper.hwp5_table import TableView, TableCellView

# Auxiliary streams
from hwpdecoder.core.processor.hwp5_helper.hwp5_metadata import (
    SummaryInfo,
    AuxiliaryStreams,
    read_auxiliary_streams,
)

# Document
from hwpdecoder.core.processor.hwp5_helper.hwp5_document import (
    Document,
    Paragraph,
    ControlView,
    CharRun,
)
from hwpdecoder.core.processor.hwp5_helper.hwp5_assembler import (
    HwpParserConfig,
    DocumentAssembler,
    parse_hwp,
)


__all__ = [
    # Constants
    'HWPTAG_BEGIN',
    'HWPTAG_BIN_DATA',
    'HWPTAG_PARA_HEADER',
    'HWPTAG_PARA_TEXT',
    'HWPTAG_CTRL_HEADER',
    'HWPTAG_LIST_HEADER',
    'HWPTAG_SHAPE_COMPONENT',
    'HWPTAG_SHAPE_COMPONENT_PICTURE',
    'HWPTAG_TABLE',
    'CTRL_ID_TABLE',
    'tag_name',
    # Errors
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
    # Container / Decoder / FileHeader
    'HwpContainer',
    'check_file_signature',
    'CompressionMode',
    'decompress',
    'decompress_section',
    'FileHeader',
    'parse_file_header',
    # Records
    'RecordToken',
    'RecordTokenizer',
    'RecordNode',
    'RecordTree',
    'build_tree',
    'FieldReader',
    'UnknownRecord',
    'IdTable',
    'ResolvedRef',
    'UnresolvedRef',
    'Reference',
    # DocInfo / BodyText
    'DocInfo',
    'parse_doc_info',
    'scan_bindata_folder',
    'Section',
    'decode_section',
    'TableView',
    'TableCellView',
    # Auxiliary streams
    'SummaryInfo',
    'AuxiliaryStreams',
    'read_auxiliary_streams',
    # Document
    'Document',
    'Paragraph',
    'ControlView',
    'CharRun',
    'HwpParserConfig',
    'DocumentAssembler',
    'parse_hwp',
]
