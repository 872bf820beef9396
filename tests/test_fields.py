# tests/test_fields.py
"""FieldReader and bit-field helper tests."""
import logging
import struct
from enum import IntEnum

import pytest

from hwpdecoder.core.processor.hwp5_helper.hwp5_errors import InsufficientData
from hwpdecoder.core.processor.hwp5_helper.hwp5_fields import (
    FieldReader,
    UnknownRecord,
    bits,
    decode_unknown,
    decode_wchars,
    enum_field,
    flag,
    to_enum,
)

from helpers import wstr


class Color(IntEnum):
    RED = 0
    GREEN = 1
    BLUE = 2


class TestBitFields:
    def test_bits_and_flag(self):
        """bits() shifts and masks; flag() tests one bit."""
        assert bits(0b1011_0000, 4, 0xF) == 0b1011
        assert flag(0b100, 2)
        assert not flag(0b100, 1)

    def test_to_enum_is_total(self):
        """Unknown codes map to the default member."""
        assert to_enum(2, Color, Color.RED) is Color.BLUE
        assert to_enum(7, Color, Color.GREEN) is Color.GREEN

    def test_enum_field(self):
        """Bit-field extraction then enum mapping."""
        assert enum_field(0b10_00, 2, 0x3, Color, Color.RED) is Color.BLUE
        assert enum_field(0b11_00, 2, 0x3, Color, Color.RED) is Color.RED

    def test_decode_wchars_replaces_lone_surrogates(self):
        """Unpaired surrogates become U+FFFD."""
        assert decode_wchars(struct.pack('<HH', 0xD800, 0x41)) == '\ufffdA'


class TestFieldReader:
    def test_little_endian_reads(self):
        """Reads advance the offset left to right."""
        data = struct.pack('<BHIbhiQ', 1, 2, 3, -4, -5, -6, 7)
        reader = FieldReader(data, 'Test')
        assert reader.u8('a') == 1
        assert reader.u16('b') == 2
        assert reader.u32('c') == 3
        assert reader.i8('d') == -4
        assert reader.i16('e') == -5
        assert reader.i32('f') == -6
        assert reader.u64('g') == 7
        assert reader.at_end()

    def test_read_past_end_names_field(self):
        """InsufficientData carries the record and field name."""
        reader = FieldReader(b'\x01\x02', 'CharShape')
        reader.u8('first')
        with pytest.raises(InsufficientData) as exc_info:
            reader.u32('base_size')
        error = exc_info.value
        assert error.field == 'CharShape.base_size'
        assert error.expected == 4
        assert error.actual == 1

    def test_require(self):
        """require() checks the whole payload length."""
        reader = FieldReader(b'\x00' * 10, 'ParaShape')
        reader.require(10)
        with pytest.raises(InsufficientData) as exc_info:
            reader.require(42)
        assert exc_info.value.field == 'ParaShape.payload'

    def test_ctrl_id_reversed(self):
        """Control IDs are stored byte-reversed."""
        assert FieldReader(b' lbt', 'CtrlHeader').ctrl_id('id') == b'tbl '

    def test_array(self):
        """Typed arrays of a fixed count."""
        reader = FieldReader(struct.pack('<3h', -1, 0, 1), 'Test')
        assert reader.array('values', 'i16', 3) == (-1, 0, 1)

    def test_wstring(self):
        """u16 count then UTF-16LE code units."""
        reader = FieldReader(wstr('바탕') + b'\xff', 'FaceName')
        assert reader.wstring('name') == '바탕'
        assert reader.remaining() == 1

    def test_wstring_u32_count(self):
        """u32 count variant."""
        data = struct.pack('<I', 2) + 'hi'.encode('utf-16-le')
        assert FieldReader(data, 'Script').wstring('source', 'u32') == 'hi'

    def test_wstring_count_too_large(self):
        """Declared count beyond the buffer is an error."""
        reader = FieldReader(struct.pack('<H', 5) + b'a\x00', 'Style')
        with pytest.raises(InsufficientData):
            reader.wstring('local_name')

    def test_wstring_lenient(self):
        """Lenient strings give '' and move to the end when cut."""
        reader = FieldReader(struct.pack('<H', 5) + b'a\x00', 'EqEdit')
        assert reader.wstring_lenient('font_name') == ''
        assert reader.at_end()
        assert FieldReader(b'\x01', 'EqEdit').wstring_lenient('font_name') == ''

    def test_wstring_lenient_logs_cut_string(self, caplog):
        """A cut string is logged with its record and field; an absent one is not."""
        with caplog.at_level(logging.DEBUG, logger='document-processor.HWP5'):
            FieldReader(struct.pack('<H', 5) + b'a\x00', 'EqEdit').wstring_lenient('font_name')
            FieldReader(b'', 'Bookmark').wstring_lenient('name')
        messages = [r.getMessage() for r in caplog.records]
        assert any(m.startswith('EqEdit.font_name: 5 chars declared') for m in messages)
        assert not any('Bookmark.name' in m for m in messages)

    def test_buffer_gate(self):
        """Trailers gated by fits() are None when the bytes are absent."""
        reader = FieldReader(struct.pack('<H', 9), 'CharShape')
        assert reader.u16_if('border_fill_id', reader.fits(2)) == 9
        assert reader.u32_if('strikethrough_color', reader.fits(4)) is None

    def test_version_gate(self):
        """Trailers gated by version are None for older documents."""
        data = struct.pack('<H', 3)
        old = FieldReader(data, 'ParaHeader', 0x05000300)
        new = FieldReader(data, 'ParaHeader', 0x05000302)
        assert old.u16_if('section_merge', old.version_at_least(0x05000302)) is None
        assert new.u16_if('section_merge', new.version_at_least(0x05000302)) == 3

    def test_open_gate_reads_strictly(self):
        """An open gate with too few bytes still raises."""
        reader = FieldReader(b'\x01', 'Table')
        with pytest.raises(InsufficientData):
            reader.u16_if('zone_count', True)

    def test_rest(self):
        """rest() consumes everything left."""
        reader = FieldReader(b'abcd', 'Test')
        reader.skip('head', 1)
        assert reader.rest() == b'bcd'
        assert reader.rest() == b''


class TestUnknownRecord:
    def test_payload_kept(self):
        """Unknown records keep their raw payload."""
        record = decode_unknown(99, bytearray(b'\x01\x02'))
        assert record == UnknownRecord(99, b'\x01\x02')
        assert isinstance(record.payload, bytes)
