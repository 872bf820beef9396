# hwpdecoder/core/processor/hwp5_helper/hwp5_docinfo.py
"""
HWP 5.0 DocInfo Stream Parser

Decodes the DocInfo stream into ID tables referenced by index from the
BodyText sections.

Flow:
1. Build the record tree of the (decompressed) stream
2. Decode ID_MAPPINGS first: its counts are a hint of how many records of
   each type follow. The real counts come from the stream itself.
3. Decode every other record in stream order into its IdTable. Only
   levels 0 and 1 hold DocInfo records; deeper ones are nested in another
   record and are kept raw
4. Split face names into the 7 language groups using the font counts

BinData records map storage IDs to embedded files:
storage ID 0x0001 + extension 'png' -> stream BinData/BIN0001.png
"""
import re
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from hwpdecoder.core.processor.hwp5_helper.hwp5_constants import (
    HWPTAG_DOCUMENT_PROPERTIES,
    HWPTAG_ID_MAPPINGS,
    HWPTAG_BIN_DATA,
    HWPTAG_FACE_NAME,
    HWPTAG_BORDER_FILL,
    HWPTAG_CHAR_SHAPE,
    HWPTAG_TAB_DEF,
    HWPTAG_NUMBERING,
    HWPTAG_BULLET,
    HWPTAG_PARA_SHAPE,
    HWPTAG_STYLE,
    HWPTAG_COMPATIBLE_DOCUMENT,
    HWPTAG_LAYOUT_COMPATIBILITY,
    STREAM_DOC_INFO,
    STORAGE_BIN_DATA,
    tag_name,
)
from hwpdecoder.core.processor.hwp5_helper.hwp5_docinfo_records import (
    LANGUAGES,
    BinDataRecord,
    BorderFill,
    Bullet,
    CharShape,
    CompatibleDocument,
    DocumentProperties,
    FaceName,
    HeadingType,
    IdMappings,
    LayoutCompatibility,
    Numbering,
    ParaShape,
    Style,
    TabDef,
    decode_bin_data,
    decode_border_fill,
    decode_bullet,
    decode_char_shape,
    decode_compatible_document,
    decode_document_properties,
    decode_face_name,
    decode_id_mappings,
    decode_layout_compatibility,
    decode_numbering,
    decode_para_shape,
    decode_style,
    decode_tab_def,
)
from hwpdecoder.core.processor.hwp5_helper.hwp5_fields import UnknownRecord, decode_unknown
from hwpdecoder.core.processor.hwp5_helper.hwp5_idtable import (
    IdTable,
    Reference,
    UnresolvedRef,
    site_info,
)
from hwpdecoder.core.processor.hwp5_helper.hwp5_record import RecordTree

logger = logging.getLogger("document-processor.HWP5")

# tag -> (table name, decoder)
DOCINFO_TABLES: Dict[int, Tuple[str, Callable[[bytes, int], Any]]] = {
    HWPTAG_BIN_DATA: ('bin_data', decode_bin_data),
    HWPTAG_FACE_NAME: ('face_names', decode_face_name),
    HWPTAG_BORDER_FILL: ('border_fills', decode_border_fill),
    HWPTAG_CHAR_SHAPE: ('char_shapes', decode_char_shape),
    HWPTAG_TAB_DEF: ('tab_defs', decode_tab_def),
    HWPTAG_NUMBERING: ('numberings', decode_numbering),
    HWPTAG_BULLET: ('bullets', decode_bullet),
    HWPTAG_PARA_SHAPE: ('para_shapes', decode_para_shape),
    HWPTAG_STYLE: ('styles', decode_style),
}

# table name -> IdMappings count field
_ID_MAPPING_COUNTS = {
    'bin_data': 'bin_data',
    'border_fills': 'border_fill',
    'char_shapes': 'char_shape',
    'tab_defs': 'tab_def',
    'numberings': 'numbering',
    'bullets': 'bullet',
    'para_shapes': 'para_shape',
    'styles': 'style',
}

# Deepest level at which DocInfo records are collected
MAX_RECORD_LEVEL = 1

_BINDATA_PATTERN = re.compile(r'BIN([0-9A-Fa-f]{4})\.(\w+)', re.IGNORECASE)


@dataclass(frozen=True)
class DocInfo:
    """
    Decoded DocInfo stream.

    Attributes:
        document_properties: DOCUMENT_PROPERTIES (None if absent)
        id_mappings: ID_MAPPINGS (None if absent)
        bin_data .. styles: ID tables in stream order
        face_names: one IdTable per language, keyed by LANGUAGES entries
        tree: Record tree of the stream
        records: Typed record per tree node index (None for the root)
    """
    document_properties: Optional[DocumentProperties]
    id_mappings: Optional[IdMappings]
    bin_data: IdTable
    face_names: Dict[str, IdTable]
    border_fills: IdTable
    char_shapes: IdTable
    tab_defs: IdTable
    numberings: IdTable
    bullets: IdTable
    para_shapes: IdTable
    styles: IdTable
    compatible_document: Optional[CompatibleDocument] = None
    layout_compatibility: Optional[LayoutCompatibility] = None
    tree: Optional[RecordTree] = None
    records: Tuple[Any, ...] = ()
    unknown: Tuple[UnknownRecord, ...] = field(default_factory=tuple)

    @property
    def section_count(self) -> int:
        """Declared section count (defaults to 1)."""
        if self.document_properties is None or self.document_properties.area_count == 0:
            return 1
        return self.document_properties.area_count

    def table(self, name: str) -> IdTable:
        return getattr(self, name)

    def resolve(self, site: str, index: Optional[int], language: Optional[str] = None) -> Reference:
        """
        Resolve a reference from ``site`` (see REFERENCE_SITES).

        Args:
            site: e.g. 'ParaHeader.para_shape_id'
            index: Raw index stored in the referencing record
            language: Language group for 'CharShape.font_id'

        Returns:
            ResolvedRef or UnresolvedRef
        """
        table_name, base = site_info(site)
        if table_name == 'face_names':
            table = self.face_names.get(language or '')
            if table is None:
                return UnresolvedRef(f"face_names.{language}", index, "unknown language")
            return table.resolve(index, base)
        return self.table(table_name).resolve(index, base)

    def fonts_of(self, char_shape: CharShape) -> Dict[str, Reference]:
        """Resolve every language font of a char shape."""
        return {
            lang: self.resolve('CharShape.font_id', font_id, lang)
            for lang, font_id in zip(LANGUAGES, char_shape.font_ids)
        }

    def heading_of(self, para_shape: ParaShape) -> Optional[Reference]:
        """Numbering or bullet referenced by a para shape, None if it has no heading."""
        if para_shape.heading_type == HeadingType.BULLET:
            return self.resolve('ParaShape.bullet_id', para_shape.numbering_bullet_id)
        if para_shape.heading_type in (HeadingType.OUTLINE, HeadingType.NUMBER):
            return self.resolve('ParaShape.numbering_id', para_shape.numbering_bullet_id)
        return None


def _split_face_names(faces: List[FaceName], id_mappings: Optional[IdMappings]) -> Dict[str, IdTable]:
    """Split face names into language groups using the ID_MAPPINGS font counts."""
    if id_mappings is None:
        # Without counts every language shares the same list
        return {lang: IdTable(f"face_names.{lang}", faces) for lang in LANGUAGES}

    groups: Dict[str, IdTable] = {}
    pos = 0
    counts = id_mappings.font_counts
    for i, (lang, count) in enumerate(zip(LANGUAGES, counts)):
        end = len(faces) if i == len(LANGUAGES) - 1 else min(pos + count, len(faces))
        groups[lang] = IdTable(f"face_names.{lang}", faces[pos:end])
        pos = end

    declared = sum(counts)
    if declared != len(faces):
        logger.warning(f"DocInfo declares {declared} face names, stream holds {len(faces)}")
    return groups


def parse_doc_info(data: bytes, version: int) -> DocInfo:
    """
    Parse decompressed DocInfo stream data.

    Args:
        data: Decompressed DocInfo stream
        version: FileHeader version DWORD (for version gated fields)

    Returns:
        DocInfo

    Raises:
        RecordTreeParseError: record stream is truncated
        InsufficientData / UnexpectedValue: a record payload is malformed
    """
    tree = RecordTree.from_bytes(data, STREAM_DOC_INFO)
    logger.debug(f"DocInfo tree built with {len(tree.root.children)} top-level records")
    logger.debug(f"DocInfo tag distribution: {tree.tag_counts()}")

    nodes = list(tree.preorder())
    records: List[Any] = [None] * len(tree.nodes)

    # ID_MAPPINGS first: the counts drive the face name split
    id_mappings = None
    for node in nodes:
        if node.tag_id == HWPTAG_ID_MAPPINGS and node.level <= MAX_RECORD_LEVEL:
            id_mappings = decode_id_mappings(node.payload, version)
            records[node.index] = id_mappings
            break

    tables: Dict[str, List[Any]] = {name: [] for name, _ in DOCINFO_TABLES.values()}
    document_properties = None
    compatible_document = None
    layout_compatibility = None
    unknown = []
    nested = 0

    for node in nodes:
        if records[node.index] is not None:
            continue
        if node.level > MAX_RECORD_LEVEL:
            nested += 1
            record = decode_unknown(node.tag_id, node.payload)
            unknown.append(record)
        elif node.tag_id in DOCINFO_TABLES:
            name, decoder = DOCINFO_TABLES[node.tag_id]
            record = decoder(node.payload, version)
            tables[name].append(record)
        elif node.tag_id == HWPTAG_DOCUMENT_PROPERTIES:
            record = document_properties = decode_document_properties(node.payload, version)
        elif node.tag_id == HWPTAG_COMPATIBLE_DOCUMENT:
            record = compatible_document = decode_compatible_document(node.payload, version)
        elif node.tag_id == HWPTAG_LAYOUT_COMPATIBILITY:
            record = layout_compatibility = decode_layout_compatibility(node.payload, version)
        elif node.tag_id == HWPTAG_ID_MAPPINGS:
            logger.warning(f"Duplicate ID_MAPPINGS record at offset {node.offset}")
            record = decode_id_mappings(node.payload, version)
        else:
            record = decode_unknown(node.tag_id, node.payload)
            unknown.append(record)
        records[node.index] = record

    if id_mappings is not None:
        for name, count_field in _ID_MAPPING_COUNTS.items():
            expected = id_mappings.expected(count_field)
            if expected != len(tables[name]):
                logger.warning(
                    f"DocInfo {name}: ID_MAPPINGS declares {expected}, stream holds {len(tables[name])}"
                )

    if nested:
        logger.debug(f"DocInfo: {nested} records below level {MAX_RECORD_LEVEL} kept raw")
    if unknown:
        logger.debug(f"DocInfo kept {len(unknown)} records raw: {sorted({tag_name(r.tag_id) for r in unknown})}")

    doc_info = DocInfo(
        document_properties=document_properties,
        id_mappings=id_mappings,
        bin_data=IdTable('bin_data', tables['bin_data']),
        face_names=_split_face_names(tables['face_names'], id_mappings),
        border_fills=IdTable('border_fills', tables['border_fills']),
        char_shapes=IdTable('char_shapes', tables['char_shapes']),
        tab_defs=IdTable('tab_defs', tables['tab_defs']),
        numberings=IdTable('numberings', tables['numberings']),
        bullets=IdTable('bullets', tables['bullets']),
        para_shapes=IdTable('para_shapes', tables['para_shapes']),
        styles=IdTable('styles', tables['styles']),
        compatible_document=compatible_document,
        layout_compatibility=layout_compatibility,
        tree=tree,
        records=tuple(records),
        unknown=tuple(unknown),
    )
    logger.info(
        f"DocInfo parsed: {len(doc_info.bin_data)} BIN_DATA, {len(tables['face_names'])} fonts, "
        f"{len(doc_info.char_shapes)} char shapes, {len(doc_info.para_shapes)} para shapes, "
        f"{len(doc_info.styles)} styles"
    )
    return doc_info


@dataclass(frozen=True)
class BinDataStream:
    """A stream found under the BinData storage."""
    path: str
    storage_id: Optional[int]
    extension: str


def scan_bindata_folder(stream_paths: List[str]) -> List[BinDataStream]:
    """
    List embedded files found in the BinData storage.

    Pattern: BINxxxx.ext where xxxx is the hex storage ID. Streams with
    non-standard names are listed with storage_id None.

    Args:
        stream_paths: Container stream paths (e.g. HwpContainer.list_streams())

    Returns:
        BinDataStream list sorted by name
    """
    entries = []
    for path in sorted(stream_paths):
        parts = path.split('/')
        if len(parts) != 2 or parts[0] != STORAGE_BIN_DATA:
            continue
        match = _BINDATA_PATTERN.fullmatch(parts[1])
        if match:
            storage_id = int(match.group(1), 16)
            entries.append(BinDataStream(path, storage_id, match.group(2)))
            logger.debug(f"Scanned BinData: {parts[1]} -> storage_id={storage_id}, ext={match.group(2)}")
        else:
            entries.append(BinDataStream(path, None, ''))
    return entries


def find_bindata_stream(record: BinDataRecord, streams: List[BinDataStream]) -> Optional[BinDataStream]:
    """BinData stream matching a BIN_DATA record by storage ID, if any."""
    if record.bin_data_id is None:
        return None
    for stream in streams:
        if stream.storage_id == record.bin_data_id:
            return stream
    return None


__all__ = [
    'DOCINFO_TABLES',
    'MAX_RECORD_LEVEL',
    'DocInfo',
    'parse_doc_info',
    'BinDataStream',
    'scan_bindata_folder',
    'find_bindata_stream',
]
