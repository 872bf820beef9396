# hwpdecoder/core/processor/hwp5_helper/hwp5_ctrl_header.py
"""
HWP 5.0 Control Header (CTRL_HEADER) Decoding

CTRL_HEADER is a generic tag: its first 4 bytes are a control ID stored as
a little-endian DWORD (so 'tbl ' appears on disk as ' lbt'). The rest of
the payload is decoded by the shape registered for that ID.

Control IDs:
- 'tbl ', 'gso ', 'eqed': object common properties (position, size, wrap)
- 'secd': section definition, 'cold': column definition
- 'head' / 'foot': header / footer, 'fn  ' / 'en  ': footnote / endnote
- 'atno' / 'nwno': auto number / new number
- 'pghd': hide, 'pgct': odd/even page adjust, 'pgnp': page number position
- 'idxm': index mark, 'bokm': bookmark
- 'tcps': overlapping characters, 'tdut': dutmal
- '%xxx': fields (hyperlink, date, ...)
- anything else: RawControl

The child records of a control (TABLE, LIST_HEADER, SHAPE_COMPONENT, ...)
follow it one level deeper and are decoded separately.
"""
import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Callable, Dict, Optional, Tuple

from hwpdecoder.core.processor.hwp5_helper.hwp5_constants import (
    CTRL_ID_TABLE,
    CTRL_ID_GSO,
    CTRL_ID_EQUATION,
    CTRL_ID_SECTION,
    CTRL_ID_COLUMN,
    CTRL_ID_HEADER,
    CTRL_ID_FOOTER,
    CTRL_ID_FOOTNOTE,
    CTRL_ID_ENDNOTE,
    CTRL_ID_AUTO_NUM,
    CTRL_ID_NEW_NUM,
    CTRL_ID_PAGE_HIDE,
    CTRL_ID_PAGE_ADJUST,
    CTRL_ID_PAGE_NUM_POS,
    CTRL_ID_INDEX_MARK,
    CTRL_ID_BOOKMARK,
    CTRL_ID_OVERLAP,
    CTRL_ID_DUTMAL,
    FIELD_CTRL_PREFIX,
)
from hwpdecoder.core.processor.hwp5_helper.hwp5_fields import (
    FieldReader,
    bits,
    flag,
    enum_field,
)

logger = logging.getLogger("document-processor.HWP5")


def ctrl_id_name(ctrl_id: bytes) -> str:
    """b'tbl ' -> 'tbl '."""
    return ctrl_id.decode('latin-1')


# ==========================================================================
# Enumerations
# ==========================================================================

class VertRelTo(IntEnum):
    PAPER = 0
    PAGE = 1
    PARA = 2


class HorzRelTo(IntEnum):
    PAPER = 0
    PAGE = 1
    COLUMN = 2
    PARA = 3


class TextWrap(IntEnum):
    SQUARE = 0
    TIGHT = 1
    THROUGH = 2
    TOP_AND_BOTTOM = 3
    BEHIND_TEXT = 4
    IN_FRONT_OF_TEXT = 5


class NumberCategory(IntEnum):
    NONE = 0
    FIGURE = 1
    TABLE = 2
    EQUATION = 3


class ApplyPage(IntEnum):
    BOTH = 0
    EVEN = 1
    ODD = 2


class AutoNumberType(IntEnum):
    PAGE = 0
    FOOTNOTE = 1
    ENDNOTE = 2
    FIGURE = 3
    TABLE = 4
    EQUATION = 5


class ColumnType(IntEnum):
    NORMAL = 0
    DISTRIBUTE = 1
    PARALLEL = 2


# ==========================================================================
# Object common ('tbl ', 'gso ', 'eqed')
# ==========================================================================

@dataclass(frozen=True)
class ObjectCommon:
    """
    Placement shared by tables, drawing objects and equations.

    Offsets and sizes are HWPUNIT (1/7200 inch).
    """
    ctrl_id: bytes
    attr: int
    offset_y: int
    offset_x: int
    width: int
    height: int
    z_order: int
    margin_left: int
    margin_right: int
    margin_top: int
    margin_bottom: int
    instance_id: int
    page_divide: int
    description: Optional[str] = None

    @property
    def like_letters(self) -> bool:
        """Treated as a character in the text flow."""
        return flag(self.attr, 0)

    @property
    def affect_line_spacing(self) -> bool:
        return flag(self.attr, 2)

    @property
    def vert_rel_to(self) -> VertRelTo:
        return enum_field(self.attr, 3, 0x3, VertRelTo, VertRelTo.PAPER)

    @property
    def vert_align(self) -> int:
        return bits(self.attr, 5, 0x7)

    @property
    def horz_rel_to(self) -> HorzRelTo:
        return enum_field(self.attr, 8, 0x3, HorzRelTo, HorzRelTo.PAPER)

    @property
    def horz_align(self) -> int:
        return bits(self.attr, 10, 0x7)

    @property
    def flow_with_text(self) -> bool:
        return flag(self.attr, 13)

    @property
    def allow_overlap(self) -> bool:
        return flag(self.attr, 14)

    @property
    def width_rel_to(self) -> int:
        return bits(self.attr, 15, 0x7)

    @property
    def height_rel_to(self) -> int:
        return bits(self.attr, 18, 0x3)

    @property
    def size_protect(self) -> bool:
        return flag(self.attr, 20)

    @property
    def text_wrap(self) -> TextWrap:
        return enum_field(self.attr, 21, 0x7, TextWrap, TextWrap.SQUARE)

    @property
    def text_flow(self) -> int:
        return bits(self.attr, 24, 0x3)

    @property
    def number_category(self) -> NumberCategory:
        return enum_field(self.attr, 26, 0x7, NumberCategory, NumberCategory.NONE)


def _object_common(ctrl_id: bytes, reader: FieldReader) -> ObjectCommon:
    reader.require(4 + 40)
    attr = reader.u32('attr')
    offset_y = reader.i32('offset_y')
    offset_x = reader.i32('offset_x')
    width = reader.u32('width')
    height = reader.u32('height')
    z_order = reader.i32('z_order')
    # stored bottom, left, right, top
    bottom, left, right, top = reader.array('margins', 'i16', 4)
    return ObjectCommon(
        ctrl_id, attr, offset_y, offset_x, width, height, z_order,
        margin_left=left, margin_right=right, margin_top=top, margin_bottom=bottom,
        instance_id=reader.u32('instance_id'),
        page_divide=reader.i32('page_divide'),
        description=reader.optional(reader.fits(2), lambda: reader.wstring('description')),
    )


# ==========================================================================
# Section / column definition
# ==========================================================================

@dataclass(frozen=True)
class SectionDef:
    ctrl_id: bytes
    attr: int
    column_spacing: int
    vertical_grid: int
    horizontal_grid: int
    default_tab_stop: int
    numbering_shape_id: int
    page_start: int
    figure_start: int
    table_start: int
    equation_start: int
    language: Optional[int] = None

    @property
    def hide_header(self) -> bool:
        return flag(self.attr, 0)

    @property
    def hide_footer(self) -> bool:
        return flag(self.attr, 1)

    @property
    def hide_master_page(self) -> bool:
        return flag(self.attr, 2)

    @property
    def hide_border(self) -> bool:
        return flag(self.attr, 3)

    @property
    def hide_fill(self) -> bool:
        return flag(self.attr, 4)

    @property
    def hide_page_number(self) -> bool:
        return flag(self.attr, 5)

    @property
    def text_direction(self) -> int:
        return bits(self.attr, 16, 0x7)

    @property
    def hide_empty_line(self) -> bool:
        return flag(self.attr, 19)


def _section_def(ctrl_id: bytes, reader: FieldReader) -> SectionDef:
    reader.require(4 + 24)
    return SectionDef(
        ctrl_id,
        attr=reader.u32('attr'),
        column_spacing=reader.i16('column_spacing'),
        vertical_grid=reader.u16('vertical_grid'),
        horizontal_grid=reader.u16('horizontal_grid'),
        default_tab_stop=reader.u32('default_tab_stop'),
        numbering_shape_id=reader.u16('numbering_shape_id'),
        page_start=reader.u16('page_start'),
        figure_start=reader.u16('figure_start'),
        table_start=reader.u16('table_start'),
        equation_start=reader.u16('equation_start'),
        language=reader.u16_if('language', reader.fits(2)),
    )


@dataclass(frozen=True)
class ColumnDef:
    ctrl_id: bytes
    attr: int
    spacing: int
    widths: Tuple[int, ...] = ()
    attr2: Optional[int] = None
    divider_type: Optional[int] = None
    divider_width: Optional[int] = None
    divider_color: Optional[int] = None

    @property
    def column_type(self) -> ColumnType:
        return enum_field(self.attr, 0, 0x3, ColumnType, ColumnType.NORMAL)

    @property
    def column_count(self) -> int:
        return bits(self.attr, 2, 0xFF)

    @property
    def direction(self) -> int:
        return bits(self.attr, 10, 0x3)

    @property
    def equal_width(self) -> bool:
        return flag(self.attr, 12)


def _column_def(ctrl_id: bytes, reader: FieldReader) -> ColumnDef:
    reader.require(4 + 4)
    attr = reader.u16('attr')
    spacing = reader.i16('spacing')
    widths: Tuple[int, ...] = ()
    if not flag(attr, 12):
        # 단 너비: 버퍼에 남은 만큼만
        count = min(bits(attr, 2, 0xFF), reader.remaining() // 2)
        widths = reader.array('widths', 'u16', count)
    return ColumnDef(
        ctrl_id, attr, spacing, widths,
        attr2=reader.u16_if('attr2', reader.fits(2)),
        divider_type=reader.u8_if('divider_type', reader.fits(1)),
        divider_width=reader.u8_if('divider_width', reader.fits(1)),
        divider_color=reader.u32_if('divider_color', reader.fits(4)),
    )


# ==========================================================================
# Header / footer, footnote / endnote
# ==========================================================================

@dataclass(frozen=True)
class HeaderFooter:
    ctrl_id: bytes
    attr: int
    text_width: Optional[int] = None
    text_height: Optional[int] = None
    text_ref: Optional[int] = None
    number_ref: Optional[int] = None

    @property
    def apply_page(self) -> ApplyPage:
        return enum_field(self.attr, 0, 0x3, ApplyPage, ApplyPage.BOTH)

    @property
    def is_header(self) -> bool:
        return self.ctrl_id == CTRL_ID_HEADER


def _header_footer(ctrl_id: bytes, reader: FieldReader) -> HeaderFooter:
    reader.require(4 + 4)
    return HeaderFooter(
        ctrl_id,
        attr=reader.u32('attr'),
        text_width=reader.u32_if('text_width', reader.fits(4)),
        text_height=reader.u32_if('text_height', reader.fits(4)),
        text_ref=reader.u8_if('text_ref', reader.fits(1)),
        number_ref=reader.u8_if('number_ref', reader.fits(1)),
    )


@dataclass(frozen=True)
class FootnoteEndnote:
    ctrl_id: bytes
    number: int
    attr: int

    @property
    def is_footnote(self) -> bool:
        return self.ctrl_id == CTRL_ID_FOOTNOTE


def _footnote_endnote(ctrl_id: bytes, reader: FieldReader) -> FootnoteEndnote:
    reader.require(4 + 8)
    number = reader.u8('number')
    reader.skip('reserved', 5)
    attr = reader.u8('attr')
    reader.skip('reserved2', 1)
    return FootnoteEndnote(ctrl_id, number, attr)


# ==========================================================================
# Numbering and page controls
# ==========================================================================

@dataclass(frozen=True)
class AutoNumber:
    ctrl_id: bytes
    attr: int
    number: int
    user_symbol: str = ''
    prefix: str = ''
    suffix: str = ''

    @property
    def number_type(self) -> AutoNumberType:
        return enum_field(self.attr, 0, 0xF, AutoNumberType, AutoNumberType.PAGE)

    @property
    def number_shape(self) -> int:
        return bits(self.attr, 4, 0xFF)

    @property
    def superscript(self) -> bool:
        return flag(self.attr, 12)


def _auto_number(ctrl_id: bytes, reader: FieldReader) -> AutoNumber:
    reader.require(4 + 12)
    return AutoNumber(
        ctrl_id,
        attr=reader.u32('attr'),
        number=reader.u16('number'),
        user_symbol=reader.wchars('user_symbol', 1),
        prefix=reader.wchars('prefix', 1),
        suffix=reader.wchars('suffix', 1),
    )


def _new_number(ctrl_id: bytes, reader: FieldReader) -> AutoNumber:
    reader.require(4 + 6)
    return AutoNumber(ctrl_id, attr=reader.u32('attr'), number=reader.u16('number'))


@dataclass(frozen=True)
class PageHide:
    ctrl_id: bytes
    attr: int

    @property
    def hide_header(self) -> bool:
        return flag(self.attr, 0)

    @property
    def hide_footer(self) -> bool:
        return flag(self.attr, 1)

    @property
    def hide_master_page(self) -> bool:
        return flag(self.attr, 2)

    @property
    def hide_border(self) -> bool:
        return flag(self.attr, 3)

    @property
    def hide_fill(self) -> bool:
        return flag(self.attr, 4)

    @property
    def hide_page_number(self) -> bool:
        return flag(self.attr, 5)


def _page_hide(ctrl_id: bytes, reader: FieldReader) -> PageHide:
    reader.require(4 + 2)
    attr = reader.u32('attr') if reader.fits(4) else reader.u16('attr')
    return PageHide(ctrl_id, attr)


@dataclass(frozen=True)
class PageAdjust:
    ctrl_id: bytes
    attr: int

    @property
    def apply_page(self) -> ApplyPage:
        return enum_field(self.attr, 0, 0x3, ApplyPage, ApplyPage.BOTH)


def _page_adjust(ctrl_id: bytes, reader: FieldReader) -> PageAdjust:
    reader.require(4 + 4)
    return PageAdjust(ctrl_id, reader.u32('attr'))


@dataclass(frozen=True)
class PageNumberPosition:
    ctrl_id: bytes
    flags: int
    user_symbol: str
    prefix: str
    suffix: str

    @property
    def number_shape(self) -> int:
        return bits(self.flags, 0, 0xFF)

    @property
    def position(self) -> int:
        """0 none, 1-3 top left/centre/right, 4-6 bottom, 7-10 outer/inner."""
        return bits(self.flags, 8, 0xF)


def _page_number_position(ctrl_id: bytes, reader: FieldReader) -> PageNumberPosition:
    reader.require(4 + 10)
    return PageNumberPosition(
        ctrl_id,
        flags=reader.u32('flags'),
        user_symbol=reader.wchars('user_symbol', 1),
        prefix=reader.wchars('prefix', 1),
        suffix=reader.wchars('suffix', 1),
    )


# ==========================================================================
# Marks, overlap, dutmal, fields
# ==========================================================================

@dataclass(frozen=True)
class IndexMark:
    ctrl_id: bytes
    keyword1: str
    keyword2: str


def _index_mark(ctrl_id: bytes, reader: FieldReader) -> IndexMark:
    reader.require(4 + 4)
    return IndexMark(ctrl_id, reader.wstring('keyword1'), reader.wstring('keyword2'))


@dataclass(frozen=True)
class Bookmark:
    """Bookmark; the name is normally kept in the CTRL_DATA child."""
    ctrl_id: bytes
    name: str = ''


def _bookmark(ctrl_id: bytes, reader: FieldReader) -> Bookmark:
    return Bookmark(ctrl_id, reader.wstring_lenient('name'))


@dataclass(frozen=True)
class Overlap:
    ctrl_id: bytes
    text: str
    border_type: Optional[int] = None
    inner_size: Optional[int] = None
    spread: Optional[int] = None
    char_shape_ids: Tuple[int, ...] = ()


def _overlap(ctrl_id: bytes, reader: FieldReader) -> Overlap:
    reader.require(4 + 2)
    text = reader.wstring('text')
    if not reader.fits(4):
        return Overlap(ctrl_id, text)
    border_type = reader.u8('border_type')
    inner_size = reader.i8('inner_size')
    spread = reader.u8('spread')
    count = reader.u8('char_shape_count')
    return Overlap(
        ctrl_id, text, border_type, inner_size, spread,
        reader.array('char_shape_ids', 'u32', count),
    )


@dataclass(frozen=True)
class Dutmal:
    ctrl_id: bytes
    main_text: str
    sub_text: str
    position: Optional[int] = None
    size: Optional[int] = None
    option: Optional[int] = None
    style_number: Optional[int] = None
    align: Optional[int] = None


def _dutmal(ctrl_id: bytes, reader: FieldReader) -> Dutmal:
    reader.require(4 + 4)
    main_text = reader.wstring('main_text')
    sub_text = reader.wstring('sub_text')
    if not reader.fits(20):
        return Dutmal(ctrl_id, main_text, sub_text)
    return Dutmal(ctrl_id, main_text, sub_text, *reader.array('layout', 'u32', 5))


@dataclass(frozen=True)
class Field:
    """
    Field control ('%hlk', '%dte', ...).

    The command string holds the field parameters (e.g. the hyperlink
    target).
    """
    ctrl_id: bytes
    attr: int
    other_attr: int
    command: str
    instance_id: Optional[int] = None

    @property
    def field_type(self) -> str:
        return ctrl_id_name(self.ctrl_id)

    @property
    def editable_in_form(self) -> bool:
        return flag(self.attr, 0)

    @property
    def dirty(self) -> bool:
        return flag(self.attr, 15)


def _field(ctrl_id: bytes, reader: FieldReader) -> Field:
    reader.require(4 + 7)
    return Field(
        ctrl_id,
        attr=reader.u32('attr'),
        other_attr=reader.u8('other_attr'),
        command=reader.wstring('command'),
        instance_id=reader.u32_if('instance_id', reader.fits(4)),
    )


@dataclass(frozen=True)
class RawControl:
    """Control kept as raw bytes (no dedicated shape)."""
    ctrl_id: bytes
    data: bytes

    def __repr__(self) -> str:
        return f"RawControl(ctrl_id={self.ctrl_id!r}, data_size={len(self.data)})"


# ==========================================================================
# Dispatch
# ==========================================================================

CTRL_HEADER_DECODERS: Dict[bytes, Callable[[bytes, FieldReader], Any]] = {
    CTRL_ID_TABLE: _object_common,
    CTRL_ID_GSO: _object_common,
    CTRL_ID_EQUATION: _object_common,
    CTRL_ID_SECTION: _section_def,
    CTRL_ID_COLUMN: _column_def,
    CTRL_ID_HEADER: _header_footer,
    CTRL_ID_FOOTER: _header_footer,
    CTRL_ID_FOOTNOTE: _footnote_endnote,
    CTRL_ID_ENDNOTE: _footnote_endnote,
    CTRL_ID_AUTO_NUM: _auto_number,
    CTRL_ID_NEW_NUM: _new_number,
    CTRL_ID_PAGE_HIDE: _page_hide,
    CTRL_ID_PAGE_ADJUST: _page_adjust,
    CTRL_ID_PAGE_NUM_POS: _page_number_position,
    CTRL_ID_INDEX_MARK: _index_mark,
    CTRL_ID_BOOKMARK: _bookmark,
    CTRL_ID_OVERLAP: _overlap,
    CTRL_ID_DUTMAL: _dutmal,
}


def read_ctrl_id(payload: bytes) -> bytes:
    """Control ID of a CTRL_HEADER payload (InsufficientData if < 4 bytes)."""
    return FieldReader(payload, 'CtrlHeader').ctrl_id('ctrl_id')


def decode_ctrl_header(payload: bytes, version: int = 0):
    """
    Decode a CTRL_HEADER payload.

    Args:
        payload: Record payload (control ID + control data)
        version: FileHeader version DWORD

    Returns:
        Typed control (ObjectCommon, SectionDef, Field, ...) or RawControl
    """
    reader = FieldReader(payload, 'CtrlHeader', version)
    ctrl_id = reader.ctrl_id('ctrl_id')
    decoder = CTRL_HEADER_DECODERS.get(ctrl_id)
    if decoder is None and ctrl_id.startswith(FIELD_CTRL_PREFIX):
        decoder = _field
    if decoder is None:
        return RawControl(ctrl_id, reader.rest())

    reader.record = f"CtrlHeader[{ctrl_id_name(ctrl_id).strip()}]"
    return decoder(ctrl_id, reader)


__all__ = [
    'ctrl_id_name',
    'VertRelTo',
    'HorzRelTo',
    'TextWrap',
    'NumberCategory',
    'ApplyPage',
    'AutoNumberType',
    'ColumnType',
    'ObjectCommon',
    'SectionDef',
    'ColumnDef',
    'HeaderFooter',
    'FootnoteEndnote',
    'AutoNumber',
    'PageHide',
    'PageAdjust',
    'PageNumberPosition',
    'IndexMark',
    'Bookmark',
    'Overlap',
    'Dutmal',
    'Field',
    'RawControl',
    'CTRL_HEADER_DECODERS',
    'read_ctrl_id',
    'decode_ctrl_header',
]
