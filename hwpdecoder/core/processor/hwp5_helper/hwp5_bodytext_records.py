# hwpdecoder/core/processor/hwp5_helper/hwp5_bodytext_records.py
"""
HWP 5.0 BodyText Record Shapes

Decoders for the records of the BodyText/SectionN streams (control headers
live in hwp5_ctrl_header.py). Same contract as the DocInfo decoders: a
pure function ``decode_xxx(payload, version)`` returning a frozen dataclass.

Paragraph layout in a section stream:
    PARA_HEADER (level n)
      PARA_TEXT        text + control characters
      PARA_CHAR_SHAPE  (position, char shape id) runs
      PARA_LINE_SEG    line layout cache
      PARA_RANGE_TAG   range tags
      CTRL_HEADER      controls anchored in the text (tables, shapes, ...)
        TABLE / LIST_HEADER / SHAPE_COMPONENT ... (level n + 2)
"""
import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Tuple, Union

from hwpdecoder.core.processor.hwp5_helper.hwp5_constants import (
    CTRL_CHAR_TAB,
    CTRL_CHAR_LINE_BREAK,
    CTRL_CHAR_PARA_BREAK,
    CTRL_CHAR_HYPHEN,
    CTRL_CHAR_BOUND_SPACE,
    CTRL_CHAR_FIXED_SPACE,
    CTRL_CHARS_SINGLE,
    CTRL_CHARS_INLINE,
    CTRL_CHAR_SPAN,
    VERSION_PARA_HEADER_MERGE,
    VERSION_TABLE_ZONES,
)
from hwpdecoder.core.processor.hwp5_helper.hwp5_errors import UnexpectedValue
from hwpdecoder.core.processor.hwp5_helper.hwp5_fields import (
    FieldReader,
    bits,
    flag,
    enum_field,
)

logger = logging.getLogger("document-processor.HWP5")


# ==========================================================================
# Enumerations
# ==========================================================================

class TextDirection(IntEnum):
    HORIZONTAL = 0
    VERTICAL = 1


class LineWrap(IntEnum):
    NORMAL = 0
    SINGLE_LINE = 1
    EXPAND = 2


class VerticalAlign(IntEnum):
    TOP = 0
    CENTER = 1
    BOTTOM = 2


class TablePageBreak(IntEnum):
    NONE = 0
    CELL = 1
    TABLE = 2


class CaptionAlign(IntEnum):
    LEFT = 0
    RIGHT = 1
    TOP = 2
    BOTTOM = 3


class FootnoteNumbering(IntEnum):
    CONTINUE = 0
    RESTART_SECTION = 1
    RESTART_PAGE = 2


class FootnotePlacement(IntEnum):
    EACH_COLUMN = 0
    MERGED = 1
    RIGHT_COLUMN = 2


class ControlCharKind(Enum):
    CHAR = 'char'           # 1 WCHAR
    INLINE = 'inline'       # 8 WCHARs, no child record
    EXTENDED = 'extended'   # 8 WCHARs, owns a CTRL_HEADER


def control_char_kind(code: int) -> ControlCharKind:
    """Classify a WCHAR code below 32."""
    if code in CTRL_CHARS_SINGLE:
        return ControlCharKind.CHAR
    if code in CTRL_CHARS_INLINE:
        return ControlCharKind.INLINE
    return ControlCharKind.EXTENDED


# ==========================================================================
# PARA_HEADER
# ==========================================================================

@dataclass(frozen=True)
class ParaHeader:
    """
    Paragraph header.

    The top bit of the stored character count marks the last paragraph of
    a list; text_char_count has it cleared.
    """
    text_char_count: int
    last_in_list: bool
    control_mask: int
    para_shape_id: int      # 0-based into para_shapes
    style_id: int           # 0-based into styles
    column_break: int
    char_shape_count: int
    range_tag_count: int
    line_align_count: int
    instance_id: int
    section_merge: Optional[int] = None

    def has_control(self, code: int) -> bool:
        """True if control character ``code`` occurs in the text (control mask bit)."""
        return flag(self.control_mask, code)

    @property
    def section_break(self) -> bool:
        return flag(self.column_break, 0)

    @property
    def multi_column_break(self) -> bool:
        return flag(self.column_break, 1)

    @property
    def page_break(self) -> bool:
        return flag(self.column_break, 2)

    @property
    def column_break_only(self) -> bool:
        return flag(self.column_break, 3)


def decode_para_header(payload: bytes, version: int = 0) -> ParaHeader:
    """
    Decode PARA_HEADER.

    22 fixed bytes; section_merge (UINT16) needs version >= 5.0.3.2 and the
    two bytes in the buffer.
    """
    reader = FieldReader(payload, 'ParaHeader', version)
    reader.require(22)
    raw_count = reader.u32('text_char_count')
    return ParaHeader(
        text_char_count=raw_count & 0x7FFFFFFF,
        last_in_list=bool(raw_count & 0x80000000),
        control_mask=reader.u32('control_mask'),
        para_shape_id=reader.u16('para_shape_id'),
        style_id=reader.u8('style_id'),
        column_break=reader.u8('column_break'),
        char_shape_count=reader.u16('char_shape_count'),
        range_tag_count=reader.u16('range_tag_count'),
        line_align_count=reader.u16('line_align_count'),
        instance_id=reader.u32('instance_id'),
        section_merge=reader.u16_if(
            'section_merge', reader.version_at_least(VERSION_PARA_HEADER_MERGE) and reader.fits(2)
        ),
    )


# ==========================================================================
# PARA_TEXT
# ==========================================================================

# 문자 컨트롤 -> 텍스트 변환
_CHAR_TEXT = {
    CTRL_CHAR_TAB: '\t',
    CTRL_CHAR_LINE_BREAK: '\n',
    CTRL_CHAR_PARA_BREAK: '\n',
    CTRL_CHAR_HYPHEN: '-',
    CTRL_CHAR_BOUND_SPACE: ' ',
    CTRL_CHAR_FIXED_SPACE: ' ',
}


@dataclass(frozen=True)
class ControlChar:
    """
    Control character embedded in paragraph text.

    Attributes:
        code: WCHAR code (0-31)
        kind: CHAR, INLINE or EXTENDED
        position: WCHAR offset inside the paragraph text
        data: 12 bytes between the leading and trailing code (inline / extended)
    """
    code: int
    kind: ControlCharKind
    position: int
    data: bytes = b''

    @property
    def ctrl_id(self) -> Optional[bytes]:
        """Four-character control ID of an extended control ('tbl ', 'gso ', ...)."""
        if self.kind != ControlCharKind.EXTENDED or len(self.data) < 4:
            return None
        return self.data[:4][::-1]

    @property
    def size(self) -> int:
        """Size in WCHARs."""
        return 1 if self.kind == ControlCharKind.CHAR else CTRL_CHAR_SPAN


TextItem = Union[str, ControlChar]


@dataclass(frozen=True)
class ParaText:
    items: Tuple[TextItem, ...]

    @property
    def text(self) -> str:
        """Plain text; tab, breaks, hyphen and special spaces are converted."""
        parts = []
        for item in self.items:
            if isinstance(item, str):
                parts.append(item)
            elif item.code in _CHAR_TEXT:
                parts.append(_CHAR_TEXT[item.code])
        return ''.join(parts)

    @property
    def controls(self) -> Tuple[ControlChar, ...]:
        return tuple(item for item in self.items if isinstance(item, ControlChar))

    @property
    def extended_controls(self) -> Tuple[ControlChar, ...]:
        """Controls owning a CTRL_HEADER, in text order."""
        return tuple(c for c in self.controls if c.kind == ControlCharKind.EXTENDED)


def decode_para_text(payload: bytes, version: int = 0) -> ParaText:
    """
    Decode PARA_TEXT (UTF-16LE with embedded control characters).

    Codes >= 32 are text. Codes 0, 10, 13, 24, 30, 31 take one WCHAR; every
    other code below 32 takes 8 WCHARs (code, 12 data bytes, code).
    """
    reader = FieldReader(payload, 'ParaText', version)
    items = []
    run = []
    position = 0

    while not reader.at_end():
        code = reader.u16(f"chars[{position}]")
        if code >= 32:
            run.append(code)
            position += 1
            continue

        if run:
            items.append(_wchars_to_str(run))
            run = []

        kind = control_char_kind(code)
        if kind == ControlCharKind.CHAR:
            items.append(ControlChar(code, kind, position))
            position += 1
        else:
            data = reader.take(f"chars[{position}].data", 12)
            reader.skip(f"chars[{position}].end", 2)
            items.append(ControlChar(code, kind, position, data))
            position += CTRL_CHAR_SPAN

    if run:
        items.append(_wchars_to_str(run))
    return ParaText(tuple(items))


def _wchars_to_str(codes) -> str:
    raw = b''.join(code.to_bytes(2, 'little') for code in codes)
    return raw.decode('utf-16-le', errors='replace')


# ==========================================================================
# PARA_CHAR_SHAPE / PARA_LINE_SEG / PARA_RANGE_TAG
# ==========================================================================

def _require_multiple(reader: FieldReader, unit: int) -> int:
    if len(reader.data) % unit:
        raise UnexpectedValue(f"{reader.record}.size", f"multiple of {unit}", len(reader.data))
    return len(reader.data) // unit


@dataclass(frozen=True)
class CharShapeRun:
    position: int           # WCHAR offset where the run starts
    shape_id: int           # 0-based into char_shapes


@dataclass(frozen=True)
class ParaCharShape:
    runs: Tuple[CharShapeRun, ...]

    def shape_at(self, position: int) -> Optional[int]:
        """Char shape id in effect at WCHAR ``position``."""
        current = None
        for run in self.runs:
            if run.position > position:
                break
            current = run.shape_id
        return current


def decode_para_char_shape(payload: bytes, version: int = 0) -> ParaCharShape:
    reader = FieldReader(payload, 'ParaCharShape', version)
    count = _require_multiple(reader, 8)
    runs = tuple(
        CharShapeRun(reader.u32(f"runs[{i}].position"), reader.u32(f"runs[{i}].shape_id"))
        for i in range(count)
    )
    return ParaCharShape(runs)


@dataclass(frozen=True)
class LineSegment:
    text_start: int
    vertical_position: int
    line_height: int
    text_height: int
    baseline_distance: int
    line_spacing: int
    column_start: int
    segment_width: int
    tag: int

    @property
    def first_in_page(self) -> bool:
        return flag(self.tag, 0)

    @property
    def first_in_column(self) -> bool:
        return flag(self.tag, 1)

    @property
    def empty_segment(self) -> bool:
        return flag(self.tag, 16)

    @property
    def first_in_line(self) -> bool:
        return flag(self.tag, 17)

    @property
    def last_in_line(self) -> bool:
        return flag(self.tag, 18)


@dataclass(frozen=True)
class ParaLineSeg:
    segments: Tuple[LineSegment, ...]


def decode_para_line_seg(payload: bytes, version: int = 0) -> ParaLineSeg:
    reader = FieldReader(payload, 'ParaLineSeg', version)
    count = _require_multiple(reader, 36)
    segments = []
    for i in range(count):
        text_start = reader.u32(f"segments[{i}].text_start")
        values = reader.array(f"segments[{i}]", 'i32', 7)
        tag = reader.u32(f"segments[{i}].tag")
        segments.append(LineSegment(text_start, *values, tag))
    return ParaLineSeg(tuple(segments))


@dataclass(frozen=True)
class RangeTag:
    start: int
    end: int
    tag: int

    @property
    def tag_type(self) -> int:
        return bits(self.tag, 24, 0xFF)

    @property
    def tag_data(self) -> int:
        return self.tag & 0x00FFFFFF


@dataclass(frozen=True)
class ParaRangeTag:
    tags: Tuple[RangeTag, ...]


def decode_para_range_tag(payload: bytes, version: int = 0) -> ParaRangeTag:
    reader = FieldReader(payload, 'ParaRangeTag', version)
    count = _require_multiple(reader, 12)
    tags = tuple(
        RangeTag(*reader.array(f"tags[{i}]", 'u32', 3)) for i in range(count)
    )
    return ParaRangeTag(tags)


# ==========================================================================
# LIST_HEADER / table cells
# ==========================================================================

@dataclass(frozen=True)
class ListHeader:
    """
    Paragraph list header (cell, header/footer, footnote, caption text).

    The paragraphs of the list follow the LIST_HEADER as siblings.
    """
    para_count: int
    attr: int

    @property
    def text_direction(self) -> TextDirection:
        return enum_field(self.attr, 0, 0x7, TextDirection, TextDirection.HORIZONTAL)

    @property
    def line_wrap(self) -> LineWrap:
        return enum_field(self.attr, 3, 0x3, LineWrap, LineWrap.NORMAL)

    @property
    def vertical_align(self) -> VerticalAlign:
        return enum_field(self.attr, 5, 0x3, VerticalAlign, VerticalAlign.TOP)


def _list_header(reader: FieldReader, header_size: int) -> ListHeader:
    para_count = reader.i16('para_count')
    if header_size == 8:
        reader.skip('reserved', 2)
    return ListHeader(para_count, reader.u32('attr'))


def decode_list_header(payload: bytes, version: int = 0) -> ListHeader:
    """
    Decode a generic LIST_HEADER.

    Stored either as 6 bytes (count, attr) or as 8 bytes with two
    reserved bytes between count and attr.
    """
    reader = FieldReader(payload, 'ListHeader', version)
    reader.require(6)
    return _list_header(reader, 8 if len(payload) >= 8 else 6)


@dataclass(frozen=True)
class Caption:
    """
    Caption of a table or drawing object.

    The caption text is an ordinary paragraph list: its paragraphs follow
    the LIST_HEADER like cell paragraphs do.
    """
    header: ListHeader
    attr: int
    width: int
    gap: int
    last_width: int

    @property
    def para_count(self) -> int:
        return self.header.para_count

    @property
    def align(self) -> CaptionAlign:
        return enum_field(self.attr, 0, 0x3, CaptionAlign, CaptionAlign.BOTTOM)

    @property
    def include_margin(self) -> bool:
        return flag(self.attr, 2)


def decode_caption(payload: bytes, version: int = 0) -> Union[Caption, ListHeader]:
    """
    Decode a caption LIST_HEADER: 8-byte list header + 14 caption bytes.

    Payloads too short for the caption part decode as a plain ListHeader.
    """
    if len(payload) < 8 + 14:
        return decode_list_header(payload, version)
    reader = FieldReader(payload, 'Caption', version)
    header = _list_header(reader, 8)
    return Caption(
        header=header,
        attr=reader.u32('attr'),
        width=reader.u32('width'),
        gap=reader.i16('gap'),
        last_width=reader.u32('last_width'),
    )


@dataclass(frozen=True)
class CellAttributes:
    col: int
    row: int
    col_span: int
    row_span: int
    width: int
    height: int
    margin_left: int
    margin_right: int
    margin_top: int
    margin_bottom: int
    border_fill_id: int     # 1-based into border_fills


@dataclass(frozen=True)
class TableCell:
    header: ListHeader
    cell: CellAttributes

    @property
    def para_count(self) -> int:
        return self.header.para_count


def decode_table_cell(payload: bytes, version: int = 0) -> TableCell:
    """
    Decode a LIST_HEADER owned by a table: list header + 26 cell bytes.

    The 8-byte list header form is used whenever the payload is long enough
    for it (34 bytes); shorter payloads fall back to the 6-byte form.
    """
    reader = FieldReader(payload, 'TableCell', version)
    reader.require(6 + 26)
    header = _list_header(reader, 8 if len(payload) >= 8 + 26 else 6)
    col, row, col_span, row_span = reader.array('address', 'u16', 4)
    width = reader.u32('width')
    height = reader.u32('height')
    margins = reader.array('margins', 'u16', 4)
    cell = CellAttributes(
        col, row, col_span, row_span, width, height,
        margins[0], margins[1], margins[2], margins[3],
        reader.u16('border_fill_id'),
    )
    return TableCell(header, cell)


# ==========================================================================
# TABLE
# ==========================================================================

@dataclass(frozen=True)
class TableZone:
    start_col: int
    start_row: int
    end_col: int
    end_row: int
    border_fill_id: int     # 1-based into border_fills


@dataclass(frozen=True)
class Table:
    attr: int
    row_count: int
    col_count: int
    cell_spacing: int
    padding_left: int
    padding_right: int
    padding_top: int
    padding_bottom: int
    row_sizes: Tuple[int, ...]      # cells per row
    border_fill_id: int             # 1-based into border_fills
    zones: Optional[Tuple[TableZone, ...]] = None

    @property
    def page_break(self) -> TablePageBreak:
        return enum_field(self.attr, 0, 0x3, TablePageBreak, TablePageBreak.NONE)

    @property
    def repeat_header(self) -> bool:
        return flag(self.attr, 2)


def decode_table(payload: bytes, version: int = 0) -> Table:
    """
    Decode TABLE.

    22 fixed bytes around a row size array; the zone list exists from
    version 5.0.1.0 on (version gate only, read strictly).
    """
    reader = FieldReader(payload, 'Table', version)
    reader.require(22)
    attr = reader.u32('attr')
    row_count = reader.u16('row_count')
    col_count = reader.u16('col_count')
    cell_spacing = reader.u16('cell_spacing')
    padding = reader.array('padding', 'u16', 4)
    row_sizes = reader.array('row_sizes', 'u16', row_count)
    border_fill_id = reader.u16('border_fill_id')

    def zones() -> Tuple[TableZone, ...]:
        # size in bytes, 10 per zone
        count = reader.u16('zone_info_size') // 10
        return tuple(
            TableZone(*reader.array(f"zones[{i}]", 'u16', 5)) for i in range(count)
        )

    return Table(
        attr, row_count, col_count, cell_spacing,
        padding[0], padding[1], padding[2], padding[3],
        row_sizes, border_fill_id,
        reader.optional(reader.version_at_least(VERSION_TABLE_ZONES), zones),
    )


# ==========================================================================
# PAGE_DEF / FOOTNOTE_SHAPE / PAGE_BORDER_FILL
# ==========================================================================

@dataclass(frozen=True)
class PageDef:
    """Paper size and margins (HWPUNIT, 1/7200 inch)."""
    width: int
    height: int
    margin_left: int
    margin_right: int
    margin_top: int
    margin_bottom: int
    margin_header: int
    margin_footer: int
    margin_binding: int
    attr: int

    @property
    def landscape(self) -> bool:
        return flag(self.attr, 0)

    @property
    def binding(self) -> int:
        """0 one-sided, 1 facing pages, 2 top-bound."""
        return bits(self.attr, 1, 0x3)


def decode_page_def(payload: bytes, version: int = 0) -> PageDef:
    reader = FieldReader(payload, 'PageDef', version)
    reader.require(40)
    return PageDef(*reader.array('dimensions', 'u32', 9), reader.u32('attr'))


@dataclass(frozen=True)
class FootnoteShape:
    attr: int
    user_symbol: str
    prefix: str
    suffix: str
    start_number: int
    divider_length: int
    divider_margin_top: int
    divider_margin_bottom: int
    note_spacing: int
    divider_line_type: int
    divider_line_width: int
    divider_color: int

    @property
    def number_shape(self) -> int:
        return bits(self.attr, 0, 0xFF)

    @property
    def placement(self) -> FootnotePlacement:
        return enum_field(self.attr, 8, 0x3, FootnotePlacement, FootnotePlacement.EACH_COLUMN)

    @property
    def numbering(self) -> FootnoteNumbering:
        return enum_field(self.attr, 10, 0x3, FootnoteNumbering, FootnoteNumbering.CONTINUE)

    @property
    def superscript(self) -> bool:
        return flag(self.attr, 12)

    @property
    def continues_from_text(self) -> bool:
        return flag(self.attr, 13)


def decode_footnote_shape(payload: bytes, version: int = 0) -> FootnoteShape:
    reader = FieldReader(payload, 'FootnoteShape', version)
    reader.require(26)
    return FootnoteShape(
        attr=reader.u32('attr'),
        user_symbol=reader.wchars('user_symbol', 1),
        prefix=reader.wchars('prefix', 1),
        suffix=reader.wchars('suffix', 1),
        start_number=reader.u16('start_number'),
        divider_length=reader.i16('divider_length'),
        divider_margin_top=reader.i16('divider_margin_top'),
        divider_margin_bottom=reader.i16('divider_margin_bottom'),
        note_spacing=reader.i16('note_spacing'),
        divider_line_type=reader.u8('divider_line_type'),
        divider_line_width=reader.u8('divider_line_width'),
        divider_color=reader.colorref('divider_color'),
    )


@dataclass(frozen=True)
class PageBorderFill:
    attr: int
    spacing_left: int
    spacing_right: int
    spacing_top: int
    spacing_bottom: int
    border_fill_id: int     # 1-based into border_fills

    @property
    def relative_to_paper(self) -> bool:
        return flag(self.attr, 0)

    @property
    def include_header(self) -> bool:
        return flag(self.attr, 1)

    @property
    def include_footer(self) -> bool:
        return flag(self.attr, 2)

    @property
    def fill_area(self) -> int:
        """0 paper, 1 page, 2 border."""
        return bits(self.attr, 3, 0x3)


def decode_page_border_fill(payload: bytes, version: int = 0) -> PageBorderFill:
    reader = FieldReader(payload, 'PageBorderFill', version)
    reader.require(12)
    attr = reader.u32('attr')
    spacing = reader.array('spacing', 'i16', 4)
    return PageBorderFill(attr, *spacing, reader.u16('border_fill_id'))


# ==========================================================================
# SHAPE_COMPONENT / PICTURE / EQEDIT
# ==========================================================================

Matrix = Tuple[float, ...]


@dataclass(frozen=True)
class ShapeComponent:
    """
    Common part of every drawing object.

    The control ID is written twice in real files; the second copy is read
    when the buffer holds it. Rendering matrices are 3x2 affine matrices
    (6 doubles). Line / fill / shadow data after them is kept raw.
    """
    ctrl_id: bytes
    ctrl_id2: Optional[bytes]
    x_offset: int
    y_offset: int
    group_level: int
    local_version: int
    initial_width: int
    initial_height: int
    width: int
    height: int
    attr: int
    rotation: int
    rotation_center_x: int
    rotation_center_y: int
    translation: Optional[Matrix] = None
    scale_rotation: Tuple[Tuple[Matrix, Matrix], ...] = ()
    extra: bytes = b''

    @property
    def flip_horizontal(self) -> bool:
        return flag(self.attr, 0)

    @property
    def flip_vertical(self) -> bool:
        return flag(self.attr, 1)


def decode_shape_component(payload: bytes, version: int = 0) -> ShapeComponent:
    reader = FieldReader(payload, 'ShapeComponent', version)
    reader.require(4)
    ctrl_id = reader.ctrl_id('ctrl_id')
    ctrl_id2 = reader.optional(reader.fits(4 + 42), lambda: reader.ctrl_id('ctrl_id2'))
    x_offset = reader.i32('x_offset')
    y_offset = reader.i32('y_offset')
    group_level = reader.u16('group_level')
    local_version = reader.u16('local_version')
    initial_width, initial_height, width, height, attr = reader.array('size', 'u32', 5)
    rotation = reader.i16('rotation')
    rotation_center_x = reader.i32('rotation_center_x')
    rotation_center_y = reader.i32('rotation_center_y')

    translation = None
    pairs = []
    if reader.fits(2):
        count = reader.u16('matrix_count')
        translation = reader.array('translation', 'f64', 6)
        for i in range(count):
            scale = reader.array(f"matrices[{i}].scale", 'f64', 6)
            rotate = reader.array(f"matrices[{i}].rotation", 'f64', 6)
            pairs.append((scale, rotate))

    return ShapeComponent(
        ctrl_id, ctrl_id2, x_offset, y_offset, group_level, local_version,
        initial_width, initial_height, width, height, attr,
        rotation, rotation_center_x, rotation_center_y,
        translation, tuple(pairs), reader.rest(),
    )


@dataclass(frozen=True)
class Picture:
    border_color: int
    border_width: int
    border_attr: int
    corners: Tuple[int, ...]        # x0, y0 .. x3, y3
    crop: Tuple[int, ...]           # left, top, right, bottom
    padding: Tuple[int, ...]        # left, right, top, bottom
    brightness: int
    contrast: int
    effect: int
    bin_item_id: int                # 1-based into bin_data
    border_transparency: Optional[int] = None
    instance_id: Optional[int] = None
    effect_data: bytes = b''


def decode_picture(payload: bytes, version: int = 0) -> Picture:
    """
    Decode SHAPE_COMPONENT_PICTURE.

    73 fixed bytes; border transparency and instance id follow when the
    buffer holds them, picture effects are kept raw.
    """
    reader = FieldReader(payload, 'Picture', version)
    reader.require(73)
    return Picture(
        border_color=reader.colorref('border_color'),
        border_width=reader.i32('border_width'),
        border_attr=reader.u32('border_attr'),
        corners=reader.array('corners', 'i32', 8),
        crop=reader.array('crop', 'i32', 4),
        padding=reader.array('padding', 'u16', 4),
        brightness=reader.i8('brightness'),
        contrast=reader.i8('contrast'),
        effect=reader.u8('effect'),
        bin_item_id=reader.u16('bin_item_id'),
        border_transparency=reader.u8_if('border_transparency', reader.fits(1)),
        instance_id=reader.u32_if('instance_id', reader.fits(4)),
        effect_data=reader.rest(),
    )


@dataclass(frozen=True)
class EqEdit:
    attr: int
    script: str
    char_size: int
    color: int
    baseline: int
    version_info: str = ''
    font_name: str = ''

    @property
    def line_mode(self) -> bool:
        return flag(self.attr, 0)


def decode_eqedit(payload: bytes, version: int = 0) -> EqEdit:
    """
    Decode EQEDIT.

    The script is read strictly; the trailing version and font strings are
    length-prefixed and read leniently.
    """
    reader = FieldReader(payload, 'EqEdit', version)
    reader.require(6)
    return EqEdit(
        attr=reader.u32('attr'),
        script=reader.wstring('script'),
        char_size=reader.u32('char_size'),
        color=reader.colorref('color'),
        baseline=reader.i16('baseline'),
        version_info=reader.wstring_lenient('version_info'),
        font_name=reader.wstring_lenient('font_name'),
    )


__all__ = [
    'TextDirection',
    'LineWrap',
    'VerticalAlign',
    'TablePageBreak',
    'FootnoteNumbering',
    'FootnotePlacement',
    'ControlCharKind',
    'control_char_kind',
    'ParaHeader',
    'decode_para_header',
    'ControlChar',
    'TextItem',
    'ParaText',
    'decode_para_text',
    'CharShapeRun',
    'ParaCharShape',
    'decode_para_char_shape',
    'LineSegment',
    'ParaLineSeg',
    'decode_para_line_seg',
    'RangeTag',
    'ParaRangeTag',
    'decode_para_range_tag',
    'ListHeader',
    'decode_list_header',
    'CaptionAlign',
    'Caption',
    'decode_caption',
    'CellAttributes',
    'TableCell',
    'decode_table_cell',
    'TableZone',
    'Table',
    'decode_table',
    'PageDef',
    'decode_page_def',
    'FootnoteShape',
    'decode_footnote_shape',
    'PageBorderFill',
    'decode_page_border_fill',
    'Matrix',
    'ShapeComponent',
    'decode_shape_component',
    'Picture',
    'decode_picture',
    'EqEdit',
    'decode_eqedit',
]
