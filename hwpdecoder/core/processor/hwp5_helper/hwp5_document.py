# hwpdecoder/core/processor/hwp5_helper/hwp5_document.py
"""
HWP 5.0 Document Model

Read-only views over the decoded streams:
- Document: FileHeader + DocInfo + Sections + auxiliary streams
- Paragraph: one PARA_HEADER with its text, shape references, char runs
  and controls
- ControlView: one CTRL_HEADER with the records it owns and the
  paragraphs of its lists (header/footer, footnote, text box, ...)

References into DocInfo are resolved when the views are built; indices
that fall outside their table stay UnresolvedRef.

Usage:
    document = parse_hwp(data)
    for section in document.sections:
        for paragraph in section.paragraphs:
            print(paragraph.text, paragraph.para_shape.resolved)
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Iterator, List, Optional, Tuple

from hwpdecoder.core.processor.hwp5_helper.hwp5_constants import (
    HWPTAG_PARA_HEADER,
    HWPTAG_PARA_TEXT,
    HWPTAG_PARA_CHAR_SHAPE,
    HWPTAG_PARA_LINE_SEG,
    HWPTAG_PARA_RANGE_TAG,
    HWPTAG_CTRL_HEADER,
    HWPTAG_LIST_HEADER,
    CTRL_ID_TABLE,
)
from hwpdecoder.core.processor.hwp5_helper.hwp5_bodytext import Section
from hwpdecoder.core.processor.hwp5_helper.hwp5_bodytext_records import (
    ParaHeader,
    ParaText,
    ParaLineSeg,
    ParaRangeTag,
    ListHeader,
    Picture,
    EqEdit,
)
from hwpdecoder.core.processor.hwp5_helper.hwp5_ctrl_header import ctrl_id_name
from hwpdecoder.core.processor.hwp5_helper.hwp5_docinfo import DocInfo
from hwpdecoder.core.processor.hwp5_helper.hwp5_fileheader import FileHeader
from hwpdecoder.core.processor.hwp5_helper.hwp5_idtable import Reference
from hwpdecoder.core.processor.hwp5_helper.hwp5_metadata import AuxiliaryStreams
from hwpdecoder.core.processor.hwp5_helper.hwp5_record import RecordNode
from hwpdecoder.core.processor.hwp5_helper.hwp5_table import TableView, build_table, cell_paragraph_nodes

logger = logging.getLogger("document-processor.HWP5")


# ============================================================================
# Views
# ============================================================================

@dataclass(frozen=True)
class CharRun:
    """Char shape run of a paragraph, starting at ``position`` (WCHARs)."""
    position: int
    shape_id: int
    char_shape: Reference


@dataclass(frozen=True)
class ControlView:
    """
    Extended control of a paragraph.

    Attributes:
        node: CTRL_HEADER node
        record: Decoded control header (ObjectCommon, SectionDef, ...)
        records: Records owned by the control, excluding list paragraphs
        paragraphs: Paragraphs of the control's lists, in order (the
            caption for tables)
        table: Table view for 'tbl ' controls
        bin_items: BinData references of the pictures it contains
    """
    node: RecordNode
    record: Any
    records: Tuple[Any, ...] = ()
    paragraphs: Tuple['Paragraph', ...] = ()
    table: Optional[TableView] = None
    bin_items: Tuple[Reference, ...] = ()

    @property
    def ctrl_id(self) -> Optional[bytes]:
        return getattr(self.record, 'ctrl_id', None)

    @property
    def name(self) -> str:
        return ctrl_id_name(self.ctrl_id) if self.ctrl_id else '?'

    @property
    def pictures(self) -> List[Picture]:
        return [r for r in self.records if isinstance(r, Picture)]

    @property
    def equation(self) -> Optional[EqEdit]:
        for record in self.records:
            if isinstance(record, EqEdit):
                return record
        return None

    @property
    def text(self) -> str:
        return "\n".join(p.text for p in self.paragraphs)

    def __repr__(self) -> str:
        return f"ControlView({self.name!r}, paragraphs={len(self.paragraphs)}, table={self.table is not None})"


@dataclass(frozen=True)
class Paragraph:
    """
    One paragraph.

    Attributes:
        node: PARA_HEADER node
        header: Decoded ParaHeader
        para_text: Decoded PARA_TEXT (None for empty paragraphs)
        para_shape: Reference into DocInfo.para_shapes
        style: Reference into DocInfo.styles
        char_runs: Char shape runs with resolved char shapes
        line_segments: Decoded PARA_LINE_SEG, if present
        range_tags: Decoded PARA_RANGE_TAG, if present
        controls: Extended controls, in stream order
    """
    node: RecordNode
    header: ParaHeader
    para_text: Optional[ParaText]
    para_shape: Reference
    style: Reference
    char_runs: Tuple[CharRun, ...] = ()
    line_segments: Optional[ParaLineSeg] = None
    range_tags: Optional[ParaRangeTag] = None
    controls: Tuple[ControlView, ...] = ()

    @property
    def text(self) -> str:
        if self.para_text is None:
            return ''
        return self.para_text.text.rstrip('\n')

    @property
    def tables(self) -> List[TableView]:
        return [c.table for c in self.controls if c.table is not None]

    def char_shape_at(self, position: int) -> Optional[Reference]:
        """Char shape of the run covering WCHAR ``position``."""
        current = None
        for run in self.char_runs:
            if run.position > position:
                break
            current = run.char_shape
        return current

    def iter_paragraphs(self) -> Iterator['Paragraph']:
        """This paragraph, then every nested paragraph (controls and cells), depth first."""
        yield self
        for control in self.controls:
            if control.table is not None:
                for cell in control.table.cells:
                    for paragraph in cell.paragraphs:
                        yield from paragraph.iter_paragraphs()
            for paragraph in control.paragraphs:
                yield from paragraph.iter_paragraphs()

    def __repr__(self) -> str:
        preview = self.text[:20]
        return f"Paragraph(text={preview!r}, controls={len(self.controls)})"


# ============================================================================
# Builders
# ============================================================================

def _owned_nodes(section: Section, ctrl_node: RecordNode) -> Iterator[RecordNode]:
    """Descendants of a control that are not inside its paragraphs."""
    tree = section.tree
    stack = list(reversed(tree.children(ctrl_node)))
    while stack:
        node = stack.pop()
        if node.tag_id == HWPTAG_PARA_HEADER:
            continue
        yield node
        stack.extend(reversed(tree.children(node)))


class ParagraphBuilder:
    """
    Builds Paragraph views for one section.

    Usage:
        builder = ParagraphBuilder(section, doc_info)
        paragraphs = builder.build_all()
    """

    def __init__(self, section: Section, doc_info: DocInfo):
        self.section = section
        self.doc_info = doc_info

    def build_all(self) -> Tuple[Paragraph, ...]:
        """Top-level paragraphs of the section."""
        return tuple(self.build(node) for node in self.section.paragraph_nodes())

    def build(self, node: RecordNode) -> Paragraph:
        """Paragraph view of one PARA_HEADER node."""
        section = self.section
        tree = section.tree
        header: ParaHeader = section.record(node)

        para_text = self._child_record(node, HWPTAG_PARA_TEXT)
        char_shape = self._child_record(node, HWPTAG_PARA_CHAR_SHAPE)
        runs = ()
        if char_shape is not None:
            runs = tuple(
                CharRun(
                    run.position,
                    run.shape_id,
                    self.doc_info.resolve('ParaCharShape.shape_id', run.shape_id),
                )
                for run in char_shape.runs
            )

        controls = tuple(
            self.build_control(ctrl_node)
            for ctrl_node in tree.find_children_by_tag(node, HWPTAG_CTRL_HEADER)
        )

        if para_text is not None:
            expected = len(para_text.extended_controls)
            if expected != len(controls):
                logger.debug(f"{section.stream}: paragraph at offset {node.offset} has "
                             f"{expected} extended control chars, {len(controls)} CTRL_HEADER")

        return Paragraph(
            node=node,
            header=header,
            para_text=para_text,
            para_shape=self.doc_info.resolve('ParaHeader.para_shape_id', header.para_shape_id),
            style=self.doc_info.resolve('ParaHeader.style_id', header.style_id),
            char_runs=runs,
            line_segments=self._child_record(node, HWPTAG_PARA_LINE_SEG),
            range_tags=self._child_record(node, HWPTAG_PARA_RANGE_TAG),
            controls=controls,
        )

    def build_control(self, ctrl_node: RecordNode) -> ControlView:
        section = self.section
        record = section.record(ctrl_node)
        owned = list(_owned_nodes(section, ctrl_node))
        records = tuple(section.record(n) for n in owned)

        bin_items = tuple(
            self.doc_info.resolve('Picture.bin_item_id', r.bin_item_id)
            for r in records if isinstance(r, Picture)
        )

        if getattr(record, 'ctrl_id', None) == CTRL_ID_TABLE:
            table = build_table(section, ctrl_node, self.doc_info, self.build)
            captions = table.caption_paragraphs if table is not None else ()
            return ControlView(ctrl_node, record, records, captions, table=table, bin_items=bin_items)

        paragraphs = []
        for list_node in owned:
            if list_node.tag_id != HWPTAG_LIST_HEADER:
                continue
            list_header = section.record(list_node)
            para_count = list_header.para_count if isinstance(list_header, ListHeader) else 0
            for para_node in cell_paragraph_nodes(section, list_node, para_count):
                paragraphs.append(self.build(para_node))

        return ControlView(ctrl_node, record, records, tuple(paragraphs), bin_items=bin_items)

    def _child_record(self, node: RecordNode, tag_id: int) -> Any:
        child = self.section.tree.find_first_child_by_tag(node, tag_id)
        return None if child is None else self.section.record(child)


def build_paragraphs(section: Section, doc_info: DocInfo) -> Tuple[Paragraph, ...]:
    """Paragraph views of a decoded section."""
    return ParagraphBuilder(section, doc_info).build_all()


# ============================================================================
# Document
# ============================================================================

@dataclass(frozen=True)
class Document:
    """
    Fully decoded HWP 5.0 document.

    Attributes:
        header: FileHeader
        doc_info: DocInfo (ID tables)
        sections: Sections in stream order, each with its paragraph views
        auxiliary: Optional streams (summary, preview, scripts, ...)
    """
    header: FileHeader
    doc_info: DocInfo
    sections: Tuple[Section, ...]
    auxiliary: AuxiliaryStreams = field(default_factory=AuxiliaryStreams)

    @property
    def version(self) -> int:
        return self.header.version

    @property
    def summary_info(self):
        return self.auxiliary.summary_info

    @property
    def preview_text(self) -> Optional[str]:
        return self.auxiliary.preview_text

    @property
    def preview_image(self):
        return self.auxiliary.preview_image

    @property
    def scripts(self):
        return self.auxiliary.scripts

    @property
    def xml_template(self):
        return self.auxiliary.xml_template

    @property
    def bin_data(self):
        return self.auxiliary.bin_data

    def iter_paragraphs(self, nested: bool = False) -> Iterator[Paragraph]:
        """
        Paragraphs of every section.

        Args:
            nested: Also yield paragraphs inside controls and table cells
        """
        for section in self.sections:
            for paragraph in section.paragraphs:
                if nested:
                    yield from paragraph.iter_paragraphs()
                else:
                    yield paragraph

    @property
    def text(self) -> str:
        """Top-level paragraph text, one line per paragraph, sections separated by a blank line."""
        return "\n\n".join(
            "\n".join(p.text for p in section.paragraphs)
            for section in self.sections
        )

    @property
    def tables(self) -> List[TableView]:
        """All tables, nested ones included, in document order."""
        return [table for p in self.iter_paragraphs(nested=True) for table in p.tables]

    def __repr__(self) -> str:
        return (f"Document(version={self.header.version_string!r}, sections={len(self.sections)}, "
                f"paragraphs={sum(len(s.paragraphs) for s in self.sections)})")


__all__ = [
    'CharRun',
    'ControlView',
    'Paragraph',
    'ParagraphBuilder',
    'build_paragraphs',
    'Document',
]
