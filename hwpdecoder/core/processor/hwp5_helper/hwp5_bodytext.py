# hwpdecoder/core/processor/hwp5_helper/hwp5_bodytext.py
"""
HWP 5.0 BodyText Section Decoding

Decodes one BodyText/SectionN stream:
1. Build the record tree (hwp5_record)
2. Decode every node with the decoder registered for its dispatch key

Dispatch key = (tag, sub identifier):
- CTRL_HEADER: the control's own ID ('tbl ', 'secd', ...), resolved in
  hwp5_ctrl_header
- LIST_HEADER: the ID of the owning CTRL_HEADER; under a table control a
  list header after the TABLE record carries cell attributes, one before
  it is the caption (CAPTION_LIST)
- everything else: (tag, None)

Tags without a decoder are kept as UnknownRecord. Decoding errors propagate
unchanged (InsufficientData names the record and field).
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from hwpdecoder.core.processor.hwp5_helper.hwp5_constants import (
    HWPTAG_PARA_HEADER,
    HWPTAG_PARA_TEXT,
    HWPTAG_PARA_CHAR_SHAPE,
    HWPTAG_PARA_LINE_SEG,
    HWPTAG_PARA_RANGE_TAG,
    HWPTAG_CTRL_HEADER,
    HWPTAG_LIST_HEADER,
    HWPTAG_PAGE_DEF,
    HWPTAG_FOOTNOTE_SHAPE,
    HWPTAG_PAGE_BORDER_FILL,
    HWPTAG_SHAPE_COMPONENT,
    HWPTAG_TABLE,
    HWPTAG_SHAPE_COMPONENT_PICTURE,
    HWPTAG_EQEDIT,
    CTRL_ID_TABLE,
    tag_name,
)
from hwpdecoder.core.processor.hwp5_helper.hwp5_bodytext_records import (
    decode_para_header,
    decode_para_text,
    decode_para_char_shape,
    decode_para_line_seg,
    decode_para_range_tag,
    decode_list_header,
    decode_caption,
    decode_table_cell,
    decode_table,
    decode_page_def,
    decode_footnote_shape,
    decode_page_border_fill,
    decode_shape_component,
    decode_picture,
    decode_eqedit,
)
from hwpdecoder.core.processor.hwp5_helper.hwp5_ctrl_header import (
    decode_ctrl_header,
    read_ctrl_id,
)
from hwpdecoder.core.processor.hwp5_helper.hwp5_fields import UnknownRecord, decode_unknown
from hwpdecoder.core.processor.hwp5_helper.hwp5_record import RecordNode, RecordTree

logger = logging.getLogger("document-processor.HWP5")

DispatchKey = Tuple[int, Optional[bytes]]
Decoder = Callable[[bytes, int], Any]

# LIST_HEADER of a table that precedes its TABLE record: the caption
CAPTION_LIST = b'caption'

SECTION_DECODERS: Dict[DispatchKey, Decoder] = {
    (HWPTAG_PARA_HEADER, None): decode_para_header,
    (HWPTAG_PARA_TEXT, None): decode_para_text,
    (HWPTAG_PARA_CHAR_SHAPE, None): decode_para_char_shape,
    (HWPTAG_PARA_LINE_SEG, None): decode_para_line_seg,
    (HWPTAG_PARA_RANGE_TAG, None): decode_para_range_tag,
    (HWPTAG_CTRL_HEADER, None): decode_ctrl_header,
    (HWPTAG_LIST_HEADER, None): decode_list_header,
    (HWPTAG_LIST_HEADER, CTRL_ID_TABLE): decode_table_cell,
    (HWPTAG_LIST_HEADER, CAPTION_LIST): decode_caption,
    (HWPTAG_TABLE, None): decode_table,
    (HWPTAG_PAGE_DEF, None): decode_page_def,
    (HWPTAG_FOOTNOTE_SHAPE, None): decode_footnote_shape,
    (HWPTAG_PAGE_BORDER_FILL, None): decode_page_border_fill,
    (HWPTAG_SHAPE_COMPONENT, None): decode_shape_component,
    (HWPTAG_SHAPE_COMPONENT_PICTURE, None): decode_picture,
    (HWPTAG_EQEDIT, None): decode_eqedit,
}


def dispatch_key(tree: RecordTree, node: RecordNode) -> DispatchKey:
    """(tag, sub identifier) used to select the decoder of ``node``."""
    if node.tag_id == HWPTAG_CTRL_HEADER:
        return node.tag_id, read_ctrl_id(node.payload)
    if node.tag_id == HWPTAG_LIST_HEADER:
        parent = tree.parent(node)
        if parent is not None and parent.tag_id == HWPTAG_CTRL_HEADER and len(parent.payload) >= 4:
            ctrl_id = read_ctrl_id(parent.payload)
            if ctrl_id == CTRL_ID_TABLE and not _follows_table(tree, parent, node):
                return node.tag_id, CAPTION_LIST
            return node.tag_id, ctrl_id
    return node.tag_id, None


def _follows_table(tree: RecordTree, parent: RecordNode, node: RecordNode) -> bool:
    """True if a TABLE sibling comes before ``node`` (cells follow TABLE, the caption precedes it)."""
    for index in parent.children:
        if index == node.index:
            return False
        if tree.node(index).tag_id == HWPTAG_TABLE:
            return True
    return False


def decode_record(tree: RecordTree, node: RecordNode, version: int) -> Any:
    """
    Decode one section record into its typed shape.

    Args:
        tree: Tree owning ``node`` (needed for parent-dependent shapes)
        node: Record node
        version: FileHeader version DWORD

    Returns:
        Typed record, or UnknownRecord for tags without a decoder
    """
    tag, sub_id = dispatch_key(tree, node)
    decoder = SECTION_DECODERS.get((tag, sub_id)) or SECTION_DECODERS.get((tag, None))
    if decoder is None:
        return decode_unknown(node.tag_id, node.payload)
    return decoder(node.payload, version)


@dataclass(frozen=True)
class Section:
    """
    One decoded BodyText section.

    Attributes:
        index: Section number (0-based)
        stream: Source stream path
        tree: Record tree
        records: Typed record per node index (None for the root)
        paragraphs: Paragraph views, filled in by the assembler
    """
    index: int
    stream: str
    tree: RecordTree
    records: Tuple[Any, ...]
    paragraphs: Tuple[Any, ...] = ()

    def record(self, node: RecordNode) -> Any:
        return self.records[node.index]

    def paragraph_nodes(self, parent: Optional[RecordNode] = None) -> List[RecordNode]:
        """PARA_HEADER children of ``parent`` (the root by default)."""
        parent = self.tree.root if parent is None else parent
        return self.tree.find_children_by_tag(parent, HWPTAG_PARA_HEADER)

    def iter_records(self, record_type: type) -> Iterator[Tuple[RecordNode, Any]]:
        """(node, record) pairs whose record is an instance of ``record_type``."""
        for node in self.tree.preorder():
            record = self.records[node.index]
            if isinstance(record, record_type):
                yield node, record

    @property
    def unknown_records(self) -> List[UnknownRecord]:
        return [r for r in self.records if isinstance(r, UnknownRecord)]

    def __repr__(self) -> str:
        return f"Section(index={self.index}, records={len(self.tree)}, paragraphs={len(self.paragraphs)})"


def decode_section(data: bytes, index: int, version: int, stream: str = '') -> Section:
    """
    Decode decompressed section stream data.

    Args:
        data: Decompressed BodyText/SectionN data
        index: Section number
        version: FileHeader version DWORD
        stream: Stream path for error messages

    Returns:
        Section

    Raises:
        RecordTreeParseError: record stream is truncated
        InsufficientData / UnexpectedValue: a record payload is malformed
    """
    stream = stream or f"Section{index}"
    tree = RecordTree.from_bytes(data, stream)
    logger.debug(f"{stream}: {len(data)} bytes, {len(tree)} records, "
                 f"{len(tree.root.children)} top-level")

    records: List[Any] = [None] * len(tree.nodes)
    unknown_tags: Dict[int, int] = {}
    for node in tree.preorder():
        record = decode_record(tree, node, version)
        if isinstance(record, UnknownRecord):
            unknown_tags[node.tag_id] = unknown_tags.get(node.tag_id, 0) + 1
        records[node.index] = record

    if unknown_tags:
        summary = {tag_name(tag): count for tag, count in unknown_tags.items()}
        logger.debug(f"{stream}: records kept raw: {summary}")

    return Section(index, stream, tree, tuple(records))


__all__ = [
    'DispatchKey',
    'CAPTION_LIST',
    'SECTION_DECODERS',
    'dispatch_key',
    'decode_record',
    'Section',
    'decode_section',
]
