# tests/test_bodytext_records.py
"""BodyText record shape tests."""
import struct

import pytest

from hwpdecoder.core.processor.hwp5_helper.hwp5_bodytext_records import (
    ControlCharKind,
    FootnoteNumbering,
    LineWrap,
    VerticalAlign,
    control_char_kind,
    decode_eqedit,
    decode_footnote_shape,
    decode_list_header,
    decode_page_border_fill,
    decode_page_def,
    decode_para_char_shape,
    decode_para_header,
    decode_para_line_seg,
    decode_para_range_tag,
    decode_para_text,
    decode_picture,
    decode_shape_component,
    decode_table,
    decode_table_cell,
)
from hwpdecoder.core.processor.hwp5_helper.hwp5_errors import (
    InsufficientData,
    UnexpectedValue,
)

from helpers import (
    cell,
    char_shape_runs,
    ctrl_id_bytes,
    extended_control,
    para_header,
    para_text,
    table_record,
    wstr,
)


class TestParaHeader:
    def test_fixed_part(self):
        """22 bytes; the top bit of the count marks the last paragraph."""
        header = decode_para_header(para_header(char_count=12, control_mask=1 << 11,
                                                para_shape_id=3, style_id=2, last=True))
        assert header.text_char_count == 12
        assert header.last_in_list
        assert header.para_shape_id == 3
        assert header.style_id == 2
        assert header.has_control(11)
        assert not header.has_control(2)
        assert header.section_merge is None

    def test_section_merge_version_gate(self):
        """The same 24-byte payload decodes differently around 5.0.3.2."""
        payload = para_header(trailer=struct.pack('<H', 7))
        assert len(payload) == 24
        assert decode_para_header(payload, 0x05000300).section_merge is None
        assert decode_para_header(payload, 0x05000302).section_merge == 7

    def test_section_merge_buffer_gate(self):
        """A new document without the trailing bytes has no merge flag."""
        assert decode_para_header(para_header(), 0x05000302).section_merge is None

    def test_column_break_bits(self):
        """Break kind bits."""
        payload = bytearray(para_header())
        payload[11] = 0b0100
        header = decode_para_header(bytes(payload))
        assert header.page_break
        assert not header.section_break

    def test_short(self):
        """Less than 22 bytes is an error."""
        with pytest.raises(InsufficientData):
            decode_para_header(para_header()[:21])


class TestParaText:
    def test_plain_text(self):
        """Text with a paragraph break."""
        text = decode_para_text(para_text('안녕 HWP'))
        assert text.text == '안녕 HWP\n'
        assert len(text.controls) == 1
        assert text.controls[0].kind == ControlCharKind.CHAR

    def test_char_controls_converted(self):
        """Tab, line break, hyphen and the special spaces become text."""
        payload = ('a'.encode('utf-16-le') + struct.pack('<H', 10) + 'b'.encode('utf-16-le')
                   + struct.pack('<HHH', 24, 30, 31))
        assert decode_para_text(payload).text == 'a\nb-  '

    def test_inline_tab(self):
        """Tab is an 8-WCHAR inline control rendered as '\\t'."""
        payload = 'a'.encode('utf-16-le') + struct.pack('<H', 9) + bytes(12) \
            + struct.pack('<H', 9) + 'b'.encode('utf-16-le')
        text = decode_para_text(payload)
        assert text.text == 'a\tb'
        assert text.controls[0].kind == ControlCharKind.INLINE
        assert text.controls[0].position == 1
        assert text.controls[0].size == 8

    def test_extended_control(self):
        """Extended controls keep their control id; positions count WCHARs."""
        payload = 'x'.encode('utf-16-le') + extended_control(11, b'tbl ') + para_text('y')
        text = decode_para_text(payload)
        assert text.text == 'xy\n'
        extended = text.extended_controls
        assert len(extended) == 1
        assert extended[0].ctrl_id == b'tbl '
        assert extended[0].position == 1
        assert text.items[-2] == 'y'
        assert text.controls[-1].position == 10

    def test_truncated_control(self):
        """An 8-WCHAR control cut short is an error."""
        with pytest.raises(InsufficientData):
            decode_para_text(struct.pack('<H', 11) + b' lbt')

    def test_control_char_kind(self):
        """Classification of codes below 32."""
        assert control_char_kind(13) == ControlCharKind.CHAR
        assert control_char_kind(9) == ControlCharKind.INLINE
        assert control_char_kind(19) == ControlCharKind.INLINE
        assert control_char_kind(2) == ControlCharKind.EXTENDED
        assert control_char_kind(11) == ControlCharKind.EXTENDED
        assert control_char_kind(17) == ControlCharKind.EXTENDED


class TestParaRuns:
    def test_char_shape_runs(self):
        """(position, shape id) pairs."""
        shapes = decode_para_char_shape(char_shape_runs((0, 1), (5, 3)))
        assert [(r.position, r.shape_id) for r in shapes.runs] == [(0, 1), (5, 3)]
        assert shapes.shape_at(0) == 1
        assert shapes.shape_at(4) == 1
        assert shapes.shape_at(5) == 3

    def test_char_shape_bad_length(self):
        """Length must be a multiple of 8."""
        with pytest.raises(UnexpectedValue) as exc_info:
            decode_para_char_shape(bytes(12))
        assert exc_info.value.field == 'ParaCharShape.size'

    def test_line_seg(self):
        """36-byte line segments."""
        payload = struct.pack('<I7iI', 0, 0, 1000, 1000, 850, 600, 0, 42520, 0b11)
        segments = decode_para_line_seg(payload).segments
        assert segments[0].line_height == 1000
        assert segments[0].segment_width == 42520
        assert segments[0].first_in_page
        with pytest.raises(UnexpectedValue):
            decode_para_line_seg(payload[:-1])

    def test_range_tag(self):
        """12-byte range tags with type in the top byte."""
        tags = decode_para_range_tag(struct.pack('<III', 2, 5, (3 << 24) | 0x123456)).tags
        assert (tags[0].start, tags[0].end) == (2, 5)
        assert tags[0].tag_type == 3
        assert tags[0].tag_data == 0x123456


class TestListHeaders:
    def test_six_byte_form(self):
        """count + attr."""
        header = decode_list_header(struct.pack('<hI', 2, (1 << 3) | (2 << 5)))
        assert header.para_count == 2
        assert header.line_wrap == LineWrap.SINGLE_LINE
        assert header.vertical_align == VerticalAlign.BOTTOM

    def test_eight_byte_form(self):
        """count + reserved + attr."""
        header = decode_list_header(struct.pack('<hHI', 3, 0xFFFF, 1 << 5))
        assert header.para_count == 3
        assert header.vertical_align == VerticalAlign.CENTER

    def test_table_cell(self):
        """List header followed by cell address, size, margins and border fill."""
        decoded = decode_table_cell(cell(col=1, row=2, col_span=2, row_span=1, para_count=1, border_fill_id=3))
        assert decoded.para_count == 1
        assert (decoded.cell.col, decoded.cell.row) == (1, 2)
        assert (decoded.cell.col_span, decoded.cell.row_span) == (2, 1)
        assert decoded.cell.width == 1000
        assert decoded.cell.border_fill_id == 3

    def test_table_cell_short_header(self):
        """32-byte cells use the 6-byte list header."""
        payload = struct.pack('<hI', 1, 0) + struct.pack('<4H2I4HH', 0, 1, 1, 1, 10, 20, 0, 0, 0, 0, 1)
        decoded = decode_table_cell(payload)
        assert decoded.cell.row == 1
        assert decoded.cell.height == 20


class TestTable:
    def test_with_zones(self):
        """Row sizes then the zone list (5.0.1.0 and later)."""
        zones = struct.pack('<H5H', 10, 0, 0, 1, 1, 2)
        table = decode_table(table_record(2, 3, zones=zones), 0x05000300)
        assert (table.row_count, table.col_count) == (2, 3)
        assert table.row_sizes == (3, 3)
        assert table.border_fill_id == 1
        assert len(table.zones) == 1
        assert table.zones[0].border_fill_id == 2

    def test_zone_info_size_in_bytes(self):
        """The zone prefix is a byte size, 10 bytes per zone."""
        zones = struct.pack('<H10H', 20, 0, 0, 0, 0, 3, 1, 1, 1, 1, 4)
        table = decode_table(table_record(2, 2, zones=zones), 0x05000300)
        assert [z.border_fill_id for z in table.zones] == [3, 4]
        assert table.zones[1].end_row == 1

    def test_zones_version_gate(self):
        """Older documents have no zone list."""
        table = decode_table(table_record(1, 1, zones=None), 0x05000000)
        assert table.zones is None

    def test_zones_read_strictly(self):
        """A new document missing its zone info size is malformed."""
        with pytest.raises(InsufficientData) as exc_info:
            decode_table(table_record(1, 1, zones=None), 0x05000300)
        assert exc_info.value.field == 'Table.zone_info_size'

    def test_repeat_header(self):
        """Attribute bits."""
        payload = bytearray(table_record(1, 1))
        payload[0] = 0b101
        table = decode_table(bytes(payload), 0x05000300)
        assert table.repeat_header
        assert table.page_break.value == 1


class TestPageRecords:
    def test_page_def(self):
        """A4 paper with the landscape bit set."""
        payload = struct.pack('<9II', 59528, 84188, 8504, 8504, 5668, 4252, 4252, 4252, 0, 1)
        page = decode_page_def(payload)
        assert page.width == 59528
        assert page.landscape

    def test_page_border_fill(self):
        """Attribute, spacing and 1-based border fill."""
        fill = decode_page_border_fill(struct.pack('<I4hH', 0b110, 1, 2, 3, 4, 1))
        assert fill.include_header
        assert fill.include_footer
        assert fill.spacing_bottom == 4
        assert fill.border_fill_id == 1

    def test_footnote_shape(self):
        """26 bytes: attribute, three symbols, numbering and divider line."""
        attr = 1 | (1 << 10) | (1 << 12)
        payload = struct.pack('<I', attr) + '*()'.encode('utf-16-le') + struct.pack(
            '<H4hBBI', 1, -1, 850, 567, 283, 1, 1, 0)
        assert len(payload) == 26
        shape = decode_footnote_shape(payload)
        assert shape.prefix == '('
        assert shape.suffix == ')'
        assert shape.start_number == 1
        assert shape.numbering == FootnoteNumbering.RESTART_SECTION
        assert shape.superscript
        assert shape.divider_length == -1


class TestShapes:
    def test_shape_component(self):
        """Both control ids, geometry and the translation matrix."""
        payload = ctrl_id_bytes(b'$pic') * 2 + struct.pack(
            '<iiHH5Ihii', 10, 20, 0, 1, 100, 200, 100, 200, 0b10, 0, 50, 100)
        payload += struct.pack('<H', 0) + struct.pack('<6d', 1, 0, 0, 0, 1, 0)
        shape = decode_shape_component(payload)
        assert shape.ctrl_id == b'$pic'
        assert shape.ctrl_id2 == b'$pic'
        assert shape.x_offset == 10
        assert shape.flip_vertical
        assert shape.translation == (1.0, 0.0, 0.0, 0.0, 1.0, 0.0)
        assert shape.scale_rotation == ()

    def test_picture(self):
        """73 fixed bytes ending with the BinData reference."""
        payload = struct.pack('<IiI8i4i4HbbBH', 0, 0, 0, *([0] * 8), *([0] * 4), *([0] * 4), 0, 0, 0, 2)
        assert len(payload) == 73
        picture = decode_picture(payload)
        assert picture.bin_item_id == 2
        assert picture.border_transparency is None
        assert picture.instance_id is None

    def test_picture_trailers(self):
        """Transparency and instance id when present."""
        payload = struct.pack('<IiI8i4i4HbbBH', 0, 0, 0, *([0] * 8), *([0] * 4), *([0] * 4), 0, 0, 0, 2)
        picture = decode_picture(payload + struct.pack('<BI', 50, 77))
        assert picture.border_transparency == 50
        assert picture.instance_id == 77

    def test_eqedit(self):
        """Script read strictly, trailing strings leniently."""
        payload = struct.pack('<I', 1) + wstr('a over b') + struct.pack('<IIh', 1000, 0, 85) + wstr('Equation Version 60')
        equation = decode_eqedit(payload)
        assert equation.line_mode
        assert equation.script == 'a over b'
        assert equation.baseline == 85
        assert equation.version_info == 'Equation Version 60'
        assert equation.font_name == ''
