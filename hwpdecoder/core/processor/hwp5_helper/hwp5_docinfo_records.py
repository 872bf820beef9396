# hwpdecoder/core/processor/hwp5_helper/hwp5_docinfo_records.py
"""
HWP 5.0 DocInfo Record Shapes

Decoders for the records of the DocInfo stream. Each decoder is a pure
function ``decode_xxx(payload, version)`` returning a frozen dataclass.

Records:
- DOCUMENT_PROPERTIES: section count and starting numbers
- ID_MAPPINGS: how many records of each following type to expect
- BIN_DATA: link / embedding / storage descriptor of an embedded binary
- FACE_NAME: font name (+ alternate font, type info, default font)
- BORDER_FILL: four borders, diagonal, solid / gradient / image fill
- CHAR_SHAPE: per-language fonts and metrics, attribute bits, colours
- TAB_DEF, NUMBERING, BULLET, PARA_SHAPE, STYLE
- COMPATIBLE_DOCUMENT, LAYOUT_COMPATIBILITY

Bit-packed attributes are kept as raw integers; the properties on each
record extract the sub-fields.

Optional trailing fields use one of two gates, chosen per field:
- buffer gate: present if enough bytes are left (CharShape, Bullet, IdMappings)
- version gate and buffer gate together (ParaShape, Numbering)
"""
import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple

from hwpdecoder.core.processor.hwp5_helper.hwp5_constants import (
    BINDATA_LINK,
    BINDATA_EMBEDDING,
    BINDATA_STORAGE,
    VERSION_PARA_SHAPE_ATTR2,
    VERSION_PARA_SHAPE_ATTR3,
    VERSION_NUMBERING_LEVEL_START,
)
from hwpdecoder.core.processor.hwp5_helper.hwp5_errors import UnexpectedValue
from hwpdecoder.core.processor.hwp5_helper.hwp5_fields import (
    FieldReader,
    bits,
    flag,
    to_enum,
    enum_field,
)

logger = logging.getLogger("document-processor.HWP5")

LANGUAGES = ('korean', 'english', 'chinese', 'japanese', 'other', 'symbol', 'user')
LANGUAGE_COUNT = len(LANGUAGES)


# ==========================================================================
# Enumerations
# ==========================================================================

class BinDataType(IntEnum):
    LINK = BINDATA_LINK
    EMBEDDING = BINDATA_EMBEDDING
    STORAGE = BINDATA_STORAGE


class BinDataCompression(IntEnum):
    DEFAULT = 0     # follow FileHeader compression flag
    COMPRESS = 1
    NONE = 2


class BinDataState(IntEnum):
    NOT_ACCESSED = 0
    ACCESSED = 1
    FAILED = 2
    IGNORED = 3


class AlternateFontType(IntEnum):
    UNKNOWN = 0
    TTF = 1
    HFT = 2


class FillType(IntEnum):
    NONE = 0
    SOLID = 1
    IMAGE = 2
    GRADIENT = 4


class UnderlineType(IntEnum):
    NONE = 0
    BELOW = 1
    ABOVE = 3


class OutlineType(IntEnum):
    NONE = 0
    SOLID = 1
    DOT = 2
    THICK = 3
    DASH = 4
    DASH_DOT = 5
    DASH_DOT_DOT = 6


class ShadowType(IntEnum):
    NONE = 0
    DISCRETE = 1
    CONTINUOUS = 2


class ParaAlign(IntEnum):
    JUSTIFY = 0
    LEFT = 1
    RIGHT = 2
    CENTER = 3
    DISTRIBUTE = 4
    DIVIDE = 5


class ParaVerticalAlign(IntEnum):
    FONT = 0
    TOP = 1
    CENTER = 2
    BOTTOM = 3


class HeadingType(IntEnum):
    NONE = 0
    OUTLINE = 1
    NUMBER = 2
    BULLET = 3


class LineSpacingType(IntEnum):
    PERCENT = 0      # by character
    FIXED = 1
    BETWEEN_LINES = 2
    AT_LEAST = 3


class TabType(IntEnum):
    LEFT = 0
    RIGHT = 1
    CENTER = 2
    DECIMAL = 3


class HeadAlign(IntEnum):
    LEFT = 0
    CENTER = 1
    RIGHT = 2


class StyleType(IntEnum):
    PARAGRAPH = 0
    CHARACTER = 1


class TargetProgram(IntEnum):
    HWP = 0
    HWP2007 = 1
    MS_WORD = 2


# ==========================================================================
# DOCUMENT_PROPERTIES
# ==========================================================================

@dataclass(frozen=True)
class DocumentProperties:
    area_count: int            # number of sections
    page_start: int
    footnote_start: int
    endnote_start: int
    picture_start: int
    table_start: int
    equation_start: int
    list_id: int
    paragraph_id: int
    char_position: int


def decode_document_properties(payload: bytes, version: int = 0) -> DocumentProperties:
    reader = FieldReader(payload, 'DocumentProperties', version)
    reader.require(26)
    return DocumentProperties(
        area_count=reader.u16('area_count'),
        page_start=reader.u16('page_start'),
        footnote_start=reader.u16('footnote_start'),
        endnote_start=reader.u16('endnote_start'),
        picture_start=reader.u16('picture_start'),
        table_start=reader.u16('table_start'),
        equation_start=reader.u16('equation_start'),
        list_id=reader.u32('list_id'),
        paragraph_id=reader.u32('paragraph_id'),
        char_position=reader.u32('char_position'),
    )


# ==========================================================================
# ID_MAPPINGS
# ==========================================================================

ID_MAPPING_FIELDS = (
    'bin_data',
    'font_korean',
    'font_english',
    'font_chinese',
    'font_japanese',
    'font_other',
    'font_symbol',
    'font_user',
    'border_fill',
    'char_shape',
    'tab_def',
    'numbering',
    'bullet',
    'para_shape',
    'style',
)


@dataclass(frozen=True)
class IdMappings:
    bin_data: int
    font_korean: int
    font_english: int
    font_chinese: int
    font_japanese: int
    font_other: int
    font_symbol: int
    font_user: int
    border_fill: int
    char_shape: int
    tab_def: int
    numbering: int
    bullet: int
    para_shape: int
    style: int
    memo_shape: Optional[int] = None
    track_change: Optional[int] = None
    track_change_author: Optional[int] = None

    @property
    def font_counts(self) -> Tuple[int, ...]:
        """Face name counts in language order (korean .. user)."""
        return tuple(getattr(self, f"font_{lang}") for lang in LANGUAGES)

    def expected(self, name: str) -> int:
        return getattr(self, name) or 0


def decode_id_mappings(payload: bytes, version: int = 0) -> IdMappings:
    """
    Decode ID_MAPPINGS.

    15 INT32 counts, then memo shape (5.0.2.1+), track change and track
    change author (5.0.3.2+) counts, each present only if the buffer still
    holds it.
    """
    reader = FieldReader(payload, 'IdMappings', version)
    reader.require(len(ID_MAPPING_FIELDS) * 4)
    counts = {name: reader.i32(name) for name in ID_MAPPING_FIELDS}
    for name, count in counts.items():
        if count < 0:
            raise UnexpectedValue(f"IdMappings.{name}", ">= 0", count)
    return IdMappings(
        memo_shape=reader.i32_if('memo_shape', reader.fits(4)),
        track_change=reader.i32_if('track_change', reader.fits(4)),
        track_change_author=reader.i32_if('track_change_author', reader.fits(4)),
        **counts,
    )


# ==========================================================================
# BIN_DATA
# ==========================================================================

@dataclass(frozen=True)
class BinDataRecord:
    """
    Embedded binary descriptor.

    bin_data_id names the stream BinData/BIN{id:04X}.{extension} for
    embedding and storage types.
    """
    attr: int
    absolute_path: Optional[str] = None
    relative_path: Optional[str] = None
    bin_data_id: Optional[int] = None
    extension: Optional[str] = None

    @property
    def storage_type(self) -> BinDataType:
        return enum_field(self.attr, 0, 0xF, BinDataType, BinDataType.LINK)

    @property
    def compression(self) -> BinDataCompression:
        return enum_field(self.attr, 4, 0x3, BinDataCompression, BinDataCompression.DEFAULT)

    @property
    def state(self) -> BinDataState:
        return enum_field(self.attr, 8, 0x3, BinDataState, BinDataState.NOT_ACCESSED)

    @property
    def stream_name(self) -> Optional[str]:
        """Stream name inside the BinData storage, None for links."""
        if self.bin_data_id is None:
            return None
        extension = self.extension if self.storage_type == BinDataType.EMBEDDING else 'OLE'
        return f"BIN{self.bin_data_id:04X}.{extension}"

    def is_compressed(self, document_compressed: bool) -> bool:
        if self.compression == BinDataCompression.COMPRESS:
            return True
        if self.compression == BinDataCompression.NONE:
            return False
        return document_compressed


def decode_bin_data(payload: bytes, version: int = 0) -> BinDataRecord:
    reader = FieldReader(payload, 'BinData', version)
    reader.require(2)
    attr = reader.u16('attr')
    storage_type = to_enum(attr & 0xF, BinDataType, BinDataType.LINK)

    if storage_type == BinDataType.LINK:
        return BinDataRecord(
            attr=attr,
            absolute_path=reader.wstring('absolute_path'),
            relative_path=reader.wstring('relative_path'),
        )
    if storage_type == BinDataType.EMBEDDING:
        return BinDataRecord(
            attr=attr,
            bin_data_id=reader.u16('bin_data_id'),
            extension=reader.wstring('extension'),
        )
    return BinDataRecord(attr=attr, bin_data_id=reader.u16('bin_data_id'))


# ==========================================================================
# FACE_NAME
# ==========================================================================

@dataclass(frozen=True)
class FontTypeInfo:
    family: int
    serif: int
    weight: int
    proportion: int
    contrast: int
    stroke_variation: int
    stroke_type: int
    letter_type: int
    midline: int
    x_height: int


@dataclass(frozen=True)
class FaceName:
    attr: int
    name: str
    alternate_type: Optional[AlternateFontType] = None
    alternate_name: Optional[str] = None
    type_info: Optional[FontTypeInfo] = None
    default_name: Optional[str] = None


def decode_face_name(payload: bytes, version: int = 0) -> FaceName:
    """
    Decode FACE_NAME.

    attr bits: 0x80 alternate font follows, 0x40 type info follows,
    0x20 default font follows.
    """
    reader = FieldReader(payload, 'FaceName', version)
    reader.require(3)
    attr = reader.u8('attr')
    name = reader.wstring('name')

    alternate_type = alternate_name = type_info = default_name = None
    if attr & 0x80:
        alternate_type = to_enum(reader.u8('alternate_type'), AlternateFontType, AlternateFontType.UNKNOWN)
        alternate_name = reader.wstring('alternate_name')
    if attr & 0x40:
        type_info = FontTypeInfo(*reader.array('type_info', 'u8', 10))
    if attr & 0x20:
        default_name = reader.wstring('default_name')

    return FaceName(attr, name, alternate_type, alternate_name, type_info, default_name)


# ==========================================================================
# BORDER_FILL
# ==========================================================================

@dataclass(frozen=True)
class BorderLine:
    line_type: int
    width: int        # thickness code (0 = 0.1mm .. 15 = 5.0mm)
    color: int


@dataclass(frozen=True)
class SolidFill:
    background_color: int
    pattern_color: int
    pattern_type: int


@dataclass(frozen=True)
class GradientFill:
    gradient_type: int
    angle: int
    center_x: int
    center_y: int
    spread: int
    positions: Tuple[int, ...]
    colors: Tuple[int, ...]


@dataclass(frozen=True)
class ImageFill:
    fill_mode: int
    brightness: int
    contrast: int
    effect: int
    bin_item_id: int     # 1-based index into DocInfo bin_data


@dataclass(frozen=True)
class FillInfo:
    fill_type: int
    solid: Optional[SolidFill] = None
    gradient: Optional[GradientFill] = None
    image: Optional[ImageFill] = None
    extra: bytes = b''


@dataclass(frozen=True)
class BorderFill:
    attr: int
    left: BorderLine
    right: BorderLine
    top: BorderLine
    bottom: BorderLine
    diagonal: BorderLine
    fill: FillInfo

    @property
    def effect_3d(self) -> bool:
        return flag(self.attr, 0)

    @property
    def effect_shadow(self) -> bool:
        return flag(self.attr, 1)

    @property
    def slash_shape(self) -> int:
        return bits(self.attr, 2, 0x7)

    @property
    def backslash_shape(self) -> int:
        return bits(self.attr, 5, 0x7)

    @property
    def slash_broken(self) -> int:
        return bits(self.attr, 8, 0x3)

    @property
    def backslash_broken(self) -> bool:
        return flag(self.attr, 10)

    @property
    def slash_rotated(self) -> bool:
        return flag(self.attr, 11)

    @property
    def backslash_rotated(self) -> bool:
        return flag(self.attr, 12)

    @property
    def center_line(self) -> bool:
        return flag(self.attr, 13)


def _decode_fill(reader: FieldReader) -> FillInfo:
    if not reader.fits(4):
        return FillInfo(FillType.NONE)

    fill_type = reader.u32('fill.type')
    solid = gradient = image = None

    if fill_type & FillType.SOLID:
        solid = SolidFill(
            background_color=reader.colorref('fill.background_color'),
            pattern_color=reader.colorref('fill.pattern_color'),
            pattern_type=reader.i32('fill.pattern_type'),
        )
    if fill_type & FillType.GRADIENT:
        gradient_type = reader.i16('fill.gradient_type')
        angle = reader.i16('fill.angle')
        center_x = reader.i16('fill.center_x')
        center_y = reader.i16('fill.center_y')
        spread = reader.i16('fill.spread')
        count = reader.i16('fill.color_count')
        if count < 0:
            raise UnexpectedValue('BorderFill.fill.color_count', '>= 0', count)
        positions = reader.array('fill.positions', 'i32', count) if count > 2 else ()
        colors = reader.array('fill.colors', 'u32', count)
        gradient = GradientFill(gradient_type, angle, center_x, center_y, spread, positions, colors)
    if fill_type & FillType.IMAGE:
        image = ImageFill(
            fill_mode=reader.u8('fill.image_mode'),
            brightness=reader.i8('fill.brightness'),
            contrast=reader.i8('fill.contrast'),
            effect=reader.u8('fill.effect'),
            bin_item_id=reader.u16('fill.bin_item_id'),
        )

    # Additional fill attributes (size-prefixed, content unused)
    extra = b''
    if reader.fits(4):
        extra_size = reader.u32('fill.extra_size')
        extra = reader.take('fill.extra', min(extra_size, reader.remaining()))
    return FillInfo(fill_type, solid, gradient, image, extra)


def decode_border_fill(payload: bytes, version: int = 0) -> BorderFill:
    """
    Decode BORDER_FILL.

    Borders are stored interleaved: (type u8, width u8, colour u32) for
    left, right, top, bottom, followed by the diagonal line and fill info.
    """
    reader = FieldReader(payload, 'BorderFill', version)
    reader.require(32)
    attr = reader.u16('attr')

    def line(name: str) -> BorderLine:
        return BorderLine(
            line_type=reader.u8(f"{name}.type"),
            width=reader.u8(f"{name}.width"),
            color=reader.colorref(f"{name}.color"),
        )

    left = line('left')
    right = line('right')
    top = line('top')
    bottom = line('bottom')
    diagonal = line('diagonal')
    return BorderFill(attr, left, right, top, bottom, diagonal, _decode_fill(reader))


# ==========================================================================
# CHAR_SHAPE
# ==========================================================================

@dataclass(frozen=True)
class CharShape:
    """
    Character shape.

    font_ids[i] is a 0-based index into the face names of LANGUAGES[i].
    border_fill_id is 1-based into border_fills.
    """
    font_ids: Tuple[int, ...]
    stretch: Tuple[int, ...]
    spacing: Tuple[int, ...]
    relative_size: Tuple[int, ...]
    position: Tuple[int, ...]
    base_size: int              # 1/100 pt
    attr: int
    shadow_offset_x: int
    shadow_offset_y: int
    text_color: int
    underline_color: int
    shade_color: int
    shadow_color: int
    border_fill_id: Optional[int] = None
    strikethrough_color: Optional[int] = None

    @property
    def italic(self) -> bool:
        return flag(self.attr, 0)

    @property
    def bold(self) -> bool:
        return flag(self.attr, 1)

    @property
    def underline_type(self) -> UnderlineType:
        return enum_field(self.attr, 2, 0x3, UnderlineType, UnderlineType.NONE)

    @property
    def underline_style(self) -> int:
        return bits(self.attr, 4, 0xF)

    @property
    def outline(self) -> OutlineType:
        return enum_field(self.attr, 8, 0x7, OutlineType, OutlineType.NONE)

    @property
    def shadow(self) -> ShadowType:
        return enum_field(self.attr, 11, 0x3, ShadowType, ShadowType.NONE)

    @property
    def emboss(self) -> bool:
        return flag(self.attr, 13)

    @property
    def engrave(self) -> bool:
        return flag(self.attr, 14)

    @property
    def superscript(self) -> bool:
        return flag(self.attr, 15)

    @property
    def subscript(self) -> bool:
        return flag(self.attr, 16)

    @property
    def strikethrough(self) -> int:
        return bits(self.attr, 18, 0x7)

    @property
    def emphasis_mark(self) -> int:
        return bits(self.attr, 21, 0xF)

    @property
    def use_font_spacing(self) -> bool:
        return flag(self.attr, 25)

    @property
    def strikethrough_style(self) -> int:
        return bits(self.attr, 26, 0xF)

    @property
    def kerning(self) -> bool:
        return flag(self.attr, 30)

    @property
    def size_pt(self) -> float:
        return self.base_size / 100.0


def decode_char_shape(payload: bytes, version: int = 0) -> CharShape:
    """
    Decode CHAR_SHAPE.

    68 fixed bytes; border_fill_id (UINT16) and strikethrough colour
    (COLORREF) follow only when the buffer holds them.
    """
    reader = FieldReader(payload, 'CharShape', version)
    reader.require(68)
    return CharShape(
        font_ids=reader.array('font_ids', 'u16', LANGUAGE_COUNT),
        stretch=reader.array('stretch', 'u8', LANGUAGE_COUNT),
        spacing=reader.array('spacing', 'i8', LANGUAGE_COUNT),
        relative_size=reader.array('relative_size', 'u8', LANGUAGE_COUNT),
        position=reader.array('position', 'i8', LANGUAGE_COUNT),
        base_size=reader.i32('base_size'),
        attr=reader.u32('attr'),
        shadow_offset_x=reader.i8('shadow_offset_x'),
        shadow_offset_y=reader.i8('shadow_offset_y'),
        text_color=reader.colorref('text_color'),
        underline_color=reader.colorref('underline_color'),
        shade_color=reader.colorref('shade_color'),
        shadow_color=reader.colorref('shadow_color'),
        border_fill_id=reader.u16_if('border_fill_id', reader.fits(2)),
        strikethrough_color=reader.u32_if('strikethrough_color', reader.fits(4)),
    )


# ==========================================================================
# TAB_DEF
# ==========================================================================

@dataclass(frozen=True)
class TabItem:
    position: int
    tab_type: TabType
    fill_type: int


@dataclass(frozen=True)
class TabDef:
    attr: int
    items: Tuple[TabItem, ...]

    @property
    def auto_tab_left(self) -> bool:
        return flag(self.attr, 0)

    @property
    def auto_tab_right(self) -> bool:
        return flag(self.attr, 1)


def decode_tab_def(payload: bytes, version: int = 0) -> TabDef:
    reader = FieldReader(payload, 'TabDef', version)
    reader.require(6)
    attr = reader.u32('attr')
    count = reader.i16('count')
    if count < 0:
        raise UnexpectedValue('TabDef.count', '>= 0', count)

    items = []
    for i in range(count):
        position = reader.u32(f"items[{i}].position")
        tab_type = to_enum(reader.u8(f"items[{i}].type"), TabType, TabType.LEFT)
        fill_type = reader.u8(f"items[{i}].fill")
        reader.skip(f"items[{i}].reserved", 2)
        items.append(TabItem(position, tab_type, fill_type))
    return TabDef(attr, tuple(items))


# ==========================================================================
# NUMBERING / BULLET
# ==========================================================================

@dataclass(frozen=True)
class ParaHeadInfo:
    """
    Paragraph head (numbering / bullet) header.

    char_shape_id is 0-based into char_shapes; 0xFFFFFFFF means "use the
    paragraph's own shape".
    """
    attr: int
    width_adjust: int
    text_offset: int
    char_shape_id: int

    @property
    def align(self) -> HeadAlign:
        return enum_field(self.attr, 0, 0x3, HeadAlign, HeadAlign.LEFT)

    @property
    def follow_instance_width(self) -> bool:
        return flag(self.attr, 2)

    @property
    def auto_outdent(self) -> bool:
        return flag(self.attr, 3)

    @property
    def text_offset_is_ratio(self) -> bool:
        return not flag(self.attr, 4)


@dataclass(frozen=True)
class NumberingLevel:
    head: ParaHeadInfo
    format: str
    start_number: Optional[int] = None


@dataclass(frozen=True)
class Numbering:
    levels: Tuple[NumberingLevel, ...]
    start_number: Optional[int] = None
    extended_levels: Tuple[NumberingLevel, ...] = ()


def _decode_head(reader: FieldReader, name: str) -> ParaHeadInfo:
    return ParaHeadInfo(
        attr=reader.u32(f"{name}.attr"),
        width_adjust=reader.i16(f"{name}.width_adjust"),
        text_offset=reader.i16(f"{name}.text_offset"),
        char_shape_id=reader.u32(f"{name}.char_shape_id"),
    )


def decode_numbering(payload: bytes, version: int = 0) -> Numbering:
    """
    Decode NUMBERING.

    Up to 7 levels of (head info, format string); parsing stops early when
    fewer than 12 bytes remain. Then the start number, per-level start
    numbers (version and buffer gated) and up to 3 extended levels.
    """
    reader = FieldReader(payload, 'Numbering', version)
    reader.require(12)

    heads = []
    for i in range(7):
        if not reader.fits(12):
            break
        head = _decode_head(reader, f"levels[{i}]")
        heads.append((head, reader.wstring_lenient(f"levels[{i}].format")))

    start_number = reader.u16_if('start_number', reader.fits(2))

    level_starts = []
    if reader.version_at_least(VERSION_NUMBERING_LEVEL_START):
        for i in range(len(heads)):
            if not reader.fits(4):
                break
            level_starts.append(reader.u32(f"levels[{i}].start_number"))
    level_starts += [None] * (len(heads) - len(level_starts))
    levels = tuple(NumberingLevel(head, fmt, start) for (head, fmt), start in zip(heads, level_starts))

    extended = []
    for i in range(3):
        if not reader.fits(12):
            break
        head = _decode_head(reader, f"extended_levels[{i}]")
        extended.append(NumberingLevel(head, reader.wstring_lenient(f"extended_levels[{i}].format")))

    return Numbering(levels, start_number, tuple(extended))


@dataclass(frozen=True)
class Bullet:
    head: ParaHeadInfo
    bullet_char: Optional[str] = None
    image_bullet_id: Optional[int] = None
    image_attr: Optional[bytes] = None
    check_char: Optional[str] = None

    @property
    def is_image(self) -> bool:
        return bool(self.image_bullet_id)


def decode_bullet(payload: bytes, version: int = 0) -> Bullet:
    """Decode BULLET; everything after the 12-byte head is buffer gated."""
    reader = FieldReader(payload, 'Bullet', version)
    reader.require(12)
    head = _decode_head(reader, 'head')
    bullet_char = reader.optional(reader.fits(2), lambda: reader.wchars('bullet_char', 1))
    image_bullet_id = reader.i32_if('image_bullet_id', reader.fits(4))
    image_attr = reader.optional(reader.fits(4), lambda: reader.take('image_attr', 4))
    check_char = reader.optional(reader.fits(2), lambda: reader.wchars('check_char', 1))
    return Bullet(head, bullet_char, image_bullet_id, image_attr, check_char)


# ==========================================================================
# PARA_SHAPE
# ==========================================================================

@dataclass(frozen=True)
class ParaShape:
    """
    Paragraph shape.

    tab_def_id is 0-based into tab_defs; numbering_bullet_id is 1-based
    into numberings or bullets (by heading_type); border_fill_id is 1-based
    into border_fills.
    """
    attr1: int
    left_margin: int
    right_margin: int
    indent: int
    top_spacing: int
    bottom_spacing: int
    line_spacing_old: int
    tab_def_id: int
    numbering_bullet_id: int
    border_fill_id: int
    border_spacing_left: int
    border_spacing_right: int
    border_spacing_top: int
    border_spacing_bottom: int
    attr2: Optional[int] = None
    attr3: Optional[int] = None
    line_spacing: Optional[int] = None

    @property
    def line_spacing_type_old(self) -> LineSpacingType:
        return enum_field(self.attr1, 0, 0x3, LineSpacingType, LineSpacingType.PERCENT)

    @property
    def align(self) -> ParaAlign:
        return enum_field(self.attr1, 2, 0x7, ParaAlign, ParaAlign.JUSTIFY)

    @property
    def break_latin_word(self) -> int:
        return bits(self.attr1, 5, 0x3)

    @property
    def break_korean_word(self) -> bool:
        return flag(self.attr1, 7)

    @property
    def snap_to_grid(self) -> bool:
        return flag(self.attr1, 8)

    @property
    def min_space(self) -> int:
        return bits(self.attr1, 9, 0x7F)

    @property
    def widow_orphan(self) -> bool:
        return flag(self.attr1, 16)

    @property
    def keep_with_next(self) -> bool:
        return flag(self.attr1, 17)

    @property
    def keep_lines(self) -> bool:
        return flag(self.attr1, 18)

    @property
    def page_break_before(self) -> bool:
        return flag(self.attr1, 19)

    @property
    def vertical_align(self) -> ParaVerticalAlign:
        return enum_field(self.attr1, 20, 0x3, ParaVerticalAlign, ParaVerticalAlign.FONT)

    @property
    def font_line_height(self) -> bool:
        return flag(self.attr1, 22)

    @property
    def heading_type(self) -> HeadingType:
        return enum_field(self.attr1, 23, 0x3, HeadingType, HeadingType.NONE)

    @property
    def heading_level(self) -> int:
        return bits(self.attr1, 25, 0x7)

    @property
    def connect_border(self) -> bool:
        return flag(self.attr1, 28)

    @property
    def ignore_margin(self) -> bool:
        return flag(self.attr1, 29)

    @property
    def tail_shape(self) -> bool:
        return flag(self.attr1, 30)

    @property
    def single_line(self) -> Optional[int]:
        return None if self.attr2 is None else bits(self.attr2, 0, 0x3)

    @property
    def auto_space_korean_english(self) -> Optional[bool]:
        return None if self.attr2 is None else flag(self.attr2, 4)

    @property
    def auto_space_korean_number(self) -> Optional[bool]:
        return None if self.attr2 is None else flag(self.attr2, 5)

    @property
    def line_spacing_type(self) -> LineSpacingType:
        """attr3 line spacing type when present, else the legacy attr1 bits."""
        if self.attr3 is None:
            return self.line_spacing_type_old
        return enum_field(self.attr3, 0, 0x1F, LineSpacingType, LineSpacingType.PERCENT)


def decode_para_shape(payload: bytes, version: int = 0) -> ParaShape:
    """
    Decode PARA_SHAPE.

    attr2 needs version >= VERSION_PARA_SHAPE_ATTR2 and 4 more bytes;
    attr3 and line_spacing need version >= VERSION_PARA_SHAPE_ATTR3 and
    4 more bytes each.
    """
    reader = FieldReader(payload, 'ParaShape', version)
    reader.require(42)
    attr1 = reader.u32('attr1')
    left_margin = reader.i32('left_margin')
    right_margin = reader.i32('right_margin')
    indent = reader.i32('indent')
    top_spacing = reader.i32('top_spacing')
    bottom_spacing = reader.i32('bottom_spacing')
    line_spacing_old = reader.i32('line_spacing_old')
    tab_def_id = reader.u16('tab_def_id')
    numbering_bullet_id = reader.u16('numbering_bullet_id')
    border_fill_id = reader.u16('border_fill_id')
    spacing = reader.array('border_spacing', 'i16', 4)

    attr2 = reader.u32_if(
        'attr2', reader.version_at_least(VERSION_PARA_SHAPE_ATTR2) and reader.fits(4)
    )
    attr3 = reader.u32_if(
        'attr3', reader.version_at_least(VERSION_PARA_SHAPE_ATTR3) and reader.fits(4)
    )
    line_spacing = reader.i32_if(
        'line_spacing', reader.version_at_least(VERSION_PARA_SHAPE_ATTR3) and reader.fits(4)
    )

    return ParaShape(
        attr1, left_margin, right_margin, indent, top_spacing, bottom_spacing,
        line_spacing_old, tab_def_id, numbering_bullet_id, border_fill_id,
        spacing[0], spacing[1], spacing[2], spacing[3],
        attr2, attr3, line_spacing,
    )


# ==========================================================================
# STYLE
# ==========================================================================

@dataclass(frozen=True)
class Style:
    """
    Style definition.

    next_style_id is 0-based into styles; para_shape_id and char_shape_id
    are 0-based into para_shapes / char_shapes.
    """
    local_name: str
    english_name: str
    attr: int
    next_style_id: int
    lang_id: int
    para_shape_id: int
    char_shape_id: int

    @property
    def style_type(self) -> StyleType:
        return enum_field(self.attr, 0, 0x7, StyleType, StyleType.PARAGRAPH)

    @property
    def name(self) -> str:
        return self.local_name or self.english_name


def decode_style(payload: bytes, version: int = 0) -> Style:
    reader = FieldReader(payload, 'Style', version)
    reader.require(12)
    return Style(
        local_name=reader.wstring('local_name'),
        english_name=reader.wstring('english_name'),
        attr=reader.u8('attr'),
        next_style_id=reader.u8('next_style_id'),
        lang_id=reader.i16('lang_id'),
        para_shape_id=reader.u16('para_shape_id'),
        char_shape_id=reader.u16('char_shape_id'),
    )


# ==========================================================================
# Compatibility
# ==========================================================================

@dataclass(frozen=True)
class CompatibleDocument:
    target_program: TargetProgram


def decode_compatible_document(payload: bytes, version: int = 0) -> CompatibleDocument:
    reader = FieldReader(payload, 'CompatibleDocument', version)
    reader.require(4)
    return CompatibleDocument(to_enum(reader.u32('target_program'), TargetProgram, TargetProgram.HWP))


@dataclass(frozen=True)
class LayoutCompatibility:
    char_level: int
    paragraph_level: int
    section_level: int
    object_level: int
    field_level: int


def decode_layout_compatibility(payload: bytes, version: int = 0) -> LayoutCompatibility:
    reader = FieldReader(payload, 'LayoutCompatibility', version)
    reader.require(20)
    return LayoutCompatibility(*reader.array('levels', 'u32', 5))


__all__ = [
    'LANGUAGES',
    'LANGUAGE_COUNT',
    'ID_MAPPING_FIELDS',
    # Enums
    'BinDataType',
    'BinDataCompression',
    'BinDataState',
    'AlternateFontType',
    'FillType',
    'UnderlineType',
    'OutlineType',
    'ShadowType',
    'ParaAlign',
    'ParaVerticalAlign',
    'HeadingType',
    'LineSpacingType',
    'TabType',
    'HeadAlign',
    'StyleType',
    'TargetProgram',
    # Records
    'DocumentProperties',
    'IdMappings',
    'BinDataRecord',
    'FontTypeInfo',
    'FaceName',
    'BorderLine',
    'SolidFill',
    'GradientFill',
    'ImageFill',
    'FillInfo',
    'BorderFill',
    'CharShape',
    'TabItem',
    'TabDef',
    'ParaHeadInfo',
    'NumberingLevel',
    'Numbering',
    'Bullet',
    'ParaShape',
    'Style',
    'CompatibleDocument',
    'LayoutCompatibility',
    # Decoders
    'decode_document_properties',
    'decode_id_mappings',
    'decode_bin_data',
    'decode_face_name',
    'decode_border_fill',
    'decode_char_shape',
    'decode_tab_def',
    'decode_numbering',
    'decode_bullet',
    'decode_para_shape',
    'decode_style',
    'decode_compatible_document',
    'decode_layout_compatibility',
]
