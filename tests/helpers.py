# tests/helpers.py
"""
Test data builders.

- record(): pack a record header + payload
- payload builders for the DocInfo / BodyText shapes used by the tests
- build_cfb(): minimal compound file (v3, 512-byte sectors, mini stream for
  streams under 4096 bytes) that olefile reads like a real container
- build_hwp(): FileHeader + DocInfo + BodyText sections in a container
"""
import struct
import zlib
from typing import Dict, Iterable, List, Optional, Sequence

from hwpdecoder.core.processor.hwp5_helper.hwp5_constants import (
    HWPTAG_DOCUMENT_PROPERTIES,
    HWPTAG_ID_MAPPINGS,
    HWPTAG_FACE_NAME,
    HWPTAG_BORDER_FILL,
    HWPTAG_CHAR_SHAPE,
    HWPTAG_PARA_SHAPE,
    HWPTAG_STYLE,
    HWPTAG_PARA_HEADER,
    HWPTAG_PARA_TEXT,
    HWPTAG_PARA_CHAR_SHAPE,
    HWPTAG_CTRL_HEADER,
    HWPTAG_LIST_HEADER,
    HWPTAG_TABLE,
)

DEFAULT_VERSION = 0x05000300


# ============================================================================
# Records
# ============================================================================

def record(tag_id: int, level: int, payload: bytes = b'') -> bytes:
    """Record header (extended form for payloads of 0xFFF bytes or more) + payload."""
    size = len(payload)
    if size >= 0xFFF:
        header = tag_id | (level << 10) | (0xFFF << 20)
        return struct.pack('<II', header, size) + payload
    return struct.pack('<I', tag_id | (level << 10) | (size << 20)) + payload


def wstr(text: str) -> bytes:
    """u16 character count + UTF-16LE."""
    encoded = text.encode('utf-16-le')
    return struct.pack('<H', len(encoded) // 2) + encoded


def ctrl_id_bytes(ctrl_id: bytes) -> bytes:
    """Control ID as stored on disk (reversed)."""
    return ctrl_id[::-1]


def deflate(data: bytes) -> bytes:
    """Raw deflate (no zlib header), as used by HWP streams."""
    compressor = zlib.compressobj(9, zlib.DEFLATED, -15)
    return compressor.compress(data) + compressor.flush()


# ============================================================================
# DocInfo payloads
# ============================================================================

def document_properties(area_count: int = 1) -> bytes:
    return struct.pack('<7H3I', area_count, 1, 1, 1, 1, 1, 1, 0, 0, 0)


def id_mappings(**counts) -> bytes:
    fields = (
        'bin_data', 'font_korean', 'font_english', 'font_chinese', 'font_japanese',
        'font_other', 'font_symbol', 'font_user', 'border_fill', 'char_shape',
        'tab_def', 'numbering', 'bullet', 'para_shape', 'style',
    )
    return struct.pack('<15i', *(counts.get(name, 0) for name in fields))


def face_name(name: str) -> bytes:
    return b'\x00' + wstr(name)


def border_fill() -> bytes:
    lines = b''.join(struct.pack('<BBI', 1, 0, 0) for _ in range(5))
    return struct.pack('<H', 0) + lines + struct.pack('<I', 0)


def char_shape(base_size: int = 1000, attr: int = 0, font_id: int = 0) -> bytes:
    return (
        struct.pack('<7H', *([font_id] * 7))
        + bytes([100] * 7) + bytes(7) + bytes([100] * 7) + bytes(7)
        + struct.pack('<iIbb4I', base_size, attr, 0, 0, 0, 0, 0xFFFFFF, 0)
    )


def para_shape(attr1: int = 0, trailer: bytes = b'') -> bytes:
    return (
        struct.pack('<I6i', attr1, 0, 0, 0, 0, 0, 160)
        + struct.pack('<3H4h', 0, 0, 0, 0, 0, 0, 0)
        + trailer
    )


def style(name: str, para_shape_id: int = 0, char_shape_id: int = 0) -> bytes:
    return wstr(name) + wstr(name) + struct.pack('<BBhHH', 0, 0, 1042, para_shape_id, char_shape_id)


def doc_info_stream(
    fonts: Sequence[str] = ('Batang',),
    char_shapes: int = 1,
    para_shapes: int = 1,
    styles: Sequence[str] = ('Normal',),
    area_count: int = 1,
) -> bytes:
    """DocInfo with every language using the same font list."""
    font_counts = {f"font_{lang}": len(fonts) for lang in (
        'korean', 'english', 'chinese', 'japanese', 'other', 'symbol', 'user')}
    data = record(HWPTAG_DOCUMENT_PROPERTIES, 0, document_properties(area_count))
    data += record(HWPTAG_ID_MAPPINGS, 0, id_mappings(
        border_fill=1, char_shape=char_shapes, para_shape=para_shapes,
        style=len(styles), **font_counts,
    ))
    for _ in range(7):
        for font in fonts:
            data += record(HWPTAG_FACE_NAME, 1, face_name(font))
    data += record(HWPTAG_BORDER_FILL, 1, border_fill())
    for i in range(char_shapes):
        data += record(HWPTAG_CHAR_SHAPE, 1, char_shape(base_size=1000 + i * 100))
    for _ in range(para_shapes):
        data += record(HWPTAG_PARA_SHAPE, 1, para_shape())
    for name in styles:
        data += record(HWPTAG_STYLE, 1, style(name))
    return data


# ============================================================================
# BodyText payloads
# ============================================================================

def para_header(
    char_count: int = 1,
    control_mask: int = 0,
    para_shape_id: int = 0,
    style_id: int = 0,
    last: bool = False,
    trailer: bytes = b'',
) -> bytes:
    count = char_count | (0x80000000 if last else 0)
    return struct.pack('<IIHBBHHHI', count, control_mask, para_shape_id, style_id, 0, 1, 0, 1, 0) + trailer


def para_text(text: str, para_end: bool = True) -> bytes:
    data = text.encode('utf-16-le')
    if para_end:
        data += struct.pack('<H', 13)
    return data


def extended_control(code: int, ctrl_id: bytes) -> bytes:
    """8-WCHAR control: code, ctrl id (reversed), 8 zero bytes, code."""
    return struct.pack('<H', code) + ctrl_id_bytes(ctrl_id) + bytes(8) + struct.pack('<H', code)


def char_shape_runs(*runs) -> bytes:
    return b''.join(struct.pack('<II', position, shape_id) for position, shape_id in runs)


def object_common(ctrl_id: bytes, attr: int = 0, width: int = 1000, height: int = 500) -> bytes:
    return ctrl_id_bytes(ctrl_id) + struct.pack('<IiiIIi4hIi', attr, 0, 0, width, height, 0, 0, 0, 0, 0, 7, 0)


def table_record(rows: int, cols: int, border_fill_id: int = 1, zones: Optional[bytes] = b'\x00\x00') -> bytes:
    data = struct.pack('<IHHH4H', 0, rows, cols, 0, 0, 0, 0, 0)
    data += struct.pack(f'<{rows}H', *([cols] * rows))
    data += struct.pack('<H', border_fill_id)
    if zones is not None:
        data += zones
    return data


def list_header(para_count: int = 1, attr: int = 0) -> bytes:
    return struct.pack('<hHI', para_count, 0, attr)


def cell(col: int, row: int, col_span: int = 1, row_span: int = 1, para_count: int = 1,
         border_fill_id: int = 1) -> bytes:
    return list_header(para_count) + struct.pack(
        '<4H2I4HH', col, row, col_span, row_span, 1000, 500, 0, 0, 0, 0, border_fill_id)


def paragraph(text: str, level: int = 0, shape_id: int = 0, para_shape_id: int = 0,
              style_id: int = 0, controls: bytes = b'', last: bool = False) -> bytes:
    """PARA_HEADER + PARA_TEXT + PARA_CHAR_SHAPE at ``level`` (children at level+1)."""
    text_data = controls + para_text(text)
    data = record(HWPTAG_PARA_HEADER, level, para_header(
        char_count=len(text_data) // 2, para_shape_id=para_shape_id, style_id=style_id, last=last))
    data += record(HWPTAG_PARA_TEXT, level + 1, text_data)
    data += record(HWPTAG_PARA_CHAR_SHAPE, level + 1, char_shape_runs((0, shape_id)))
    return data


def table_paragraph(cells: Iterable[tuple], rows: int, cols: int, text: str = '', level: int = 0) -> bytes:
    """
    Paragraph owning one table.

    Args:
        cells: (col, row, col_span, row_span, cell_text) tuples in stream order
    """
    data = paragraph(text, level, controls=extended_control(11, b'tbl '))
    data += record(HWPTAG_CTRL_HEADER, level + 1, object_common(b'tbl '))
    data += record(HWPTAG_TABLE, level + 2, table_record(rows, cols))
    for col, row, col_span, row_span, cell_text in cells:
        data += record(HWPTAG_LIST_HEADER, level + 2, cell(col, row, col_span, row_span))
        data += paragraph(cell_text, level + 2, last=True)
    return data


# ============================================================================
# FileHeader
# ============================================================================

def file_header(version: int = DEFAULT_VERSION, flags: int = 0x01, signature: bytes = b'HWP Document File') -> bytes:
    data = signature.ljust(32, b'\x00') + struct.pack('<IIII', version, flags, 0, 0)
    return data.ljust(256, b'\x00')


# ============================================================================
# Summary information
# ============================================================================

def lpwstr(text: str) -> bytes:
    """VT_LPWSTR property value (count includes the NUL)."""
    chars = text + '\x00'
    return struct.pack('<II', 0x1F, len(chars)) + chars.encode('utf-16-le')


def property_set(properties, byte_order: int = 0xFFFE) -> bytes:
    """Single-section OLE property set from (id, typed value bytes) pairs."""
    header = struct.pack('<HHI16sI', byte_order, 0, 0, bytes(16), 1) + bytes(16) + struct.pack('<I', 48)
    table_size = 8 + 8 * len(properties)
    entries = b''
    values = b''
    for prop_id, value in properties:
        entries += struct.pack('<II', prop_id, table_size + len(values))
        values += value
    section = struct.pack('<II', table_size + len(values), len(properties)) + entries + values
    return header + section


# ============================================================================
# Compound file writer
# ============================================================================

SECTOR_SIZE = 512
MINI_SECTOR_SIZE = 64
MINI_STREAM_CUTOFF = 4096
FREESECT = 0xFFFFFFFF
ENDOFCHAIN = 0xFFFFFFFE
FATSECT = 0xFFFFFFFD
NOSTREAM = 0xFFFFFFFF
OLE_MAGIC = b'\xD0\xCF\x11\xE0\xA1\xB1\x1A\xE1'

STGTY_STORAGE = 1
STGTY_STREAM = 2
STGTY_ROOT = 5


class _Entry:
    def __init__(self, name: str, entry_type: int, data: bytes = b''):
        self.name = name
        self.entry_type = entry_type
        self.data = data
        self.children: List['_Entry'] = []
        self.right = NOSTREAM
        self.child = NOSTREAM
        self.start = ENDOFCHAIN
        self.size = 0

    def pack(self) -> bytes:
        name = self.name.encode('utf-16-le') + b'\x00\x00'
        return struct.pack(
            '<64sHBBIII16sIQQIII',
            name.ljust(64, b'\x00'), len(name), self.entry_type, 1,
            NOSTREAM, self.right, self.child, bytes(16), 0, 0, 0,
            self.start, self.size, 0,
        )


_EMPTY_ENTRY = struct.pack(
    '<64sHBBIII16sIQQIII', bytes(64), 0, 0, 0, NOSTREAM, NOSTREAM, NOSTREAM,
    bytes(16), 0, 0, 0, 0, 0, 0,
)


def build_cfb(streams: Dict[str, bytes]) -> bytes:
    """
    Build a compound file holding ``streams`` ('Name' or 'Storage/Name').

    Siblings are chained through their right pointers, which olefile walks
    like any red-black tree.
    """
    root = _Entry('Root Entry', STGTY_ROOT)
    storages: Dict[str, _Entry] = {}
    for path in sorted(streams):
        parts = path.split('/')
        parent = root
        for depth, part in enumerate(parts[:-1]):
            key = '/'.join(parts[:depth + 1])
            if key not in storages:
                storages[key] = _Entry(part, STGTY_STORAGE)
                parent.children.append(storages[key])
            parent = storages[key]
        parent.children.append(_Entry(parts[-1], STGTY_STREAM, streams[path]))

    entries: List[_Entry] = []

    def visit(entry: _Entry):
        entries.append(entry)
        for child in entry.children:
            visit(child)

    visit(root)
    sids = {id(entry): i for i, entry in enumerate(entries)}
    for entry in entries:
        if entry.children:
            entry.child = sids[id(entry.children[0])]
            for left, right in zip(entry.children, entry.children[1:]):
                left.right = sids[id(right)]

    fat: List[int] = []
    body = bytearray()

    def allocate(data: bytes) -> int:
        if not data:
            return ENDOFCHAIN
        count = (len(data) + SECTOR_SIZE - 1) // SECTOR_SIZE
        start = len(fat)
        for i in range(count):
            fat.append(start + i + 1 if i < count - 1 else ENDOFCHAIN)
        body.extend(data.ljust(count * SECTOR_SIZE, b'\x00'))
        return start

    mini_stream = bytearray()
    mini_fat: List[int] = []
    for entry in entries:
        if entry.entry_type != STGTY_STREAM:
            continue
        entry.size = len(entry.data)
        if entry.size == 0:
            entry.start = ENDOFCHAIN
        elif entry.size < MINI_STREAM_CUTOFF:
            count = (entry.size + MINI_SECTOR_SIZE - 1) // MINI_SECTOR_SIZE
            entry.start = len(mini_fat)
            for i in range(count):
                mini_fat.append(entry.start + i + 1 if i < count - 1 else ENDOFCHAIN)
            mini_stream.extend(entry.data.ljust(count * MINI_SECTOR_SIZE, b'\x00'))
        else:
            entry.start = allocate(entry.data)

    root.size = len(mini_stream)
    root.start = allocate(bytes(mini_stream))

    directory = b''.join(entry.pack() for entry in entries)
    while len(directory) % SECTOR_SIZE:
        directory += _EMPTY_ENTRY
    dir_start = allocate(directory)

    mini_fat_start = ENDOFCHAIN
    mini_fat_sectors = 0
    if mini_fat:
        table = mini_fat + [FREESECT] * (-len(mini_fat) % (SECTOR_SIZE // 4))
        mini_fat_sectors = len(table) * 4 // SECTOR_SIZE
        mini_fat_start = allocate(struct.pack(f'<{len(table)}I', *table))

    while len(fat) < 2:
        fat.append(FREESECT)
        body.extend(bytes(SECTOR_SIZE))

    fat_count = 1
    while len(fat) + fat_count > fat_count * (SECTOR_SIZE // 4):
        fat_count += 1
    fat_start = len(fat)
    fat.extend([FATSECT] * fat_count)
    fat += [FREESECT] * (fat_count * (SECTOR_SIZE // 4) - len(fat))
    body.extend(struct.pack(f'<{len(fat)}I', *fat))

    header = bytearray(SECTOR_SIZE)
    header[0:8] = OLE_MAGIC
    struct.pack_into('<HHHHH', header, 24, 0x3E, 3, 0xFFFE, 9, 6)
    struct.pack_into(
        '<9I', header, 40,
        0, fat_count, dir_start, 0, MINI_STREAM_CUTOFF,
        mini_fat_start, mini_fat_sectors, ENDOFCHAIN, 0,
    )
    difat = [fat_start + i for i in range(fat_count)] + [FREESECT] * (109 - fat_count)
    struct.pack_into('<109I', header, 76, *difat)
    return bytes(header) + bytes(body)


def build_hwp(
    doc_info: bytes,
    sections: Sequence[bytes],
    compressed: bool = True,
    version: int = DEFAULT_VERSION,
    flags: Optional[int] = None,
    extra_streams: Optional[Dict[str, bytes]] = None,
) -> bytes:
    """HWP 5.0 file from decompressed DocInfo / section data."""
    if flags is None:
        flags = 0x01 if compressed else 0x00
    pack = deflate if compressed else (lambda data: data)
    streams = {
        'FileHeader': file_header(version, flags),
        'DocInfo': pack(doc_info),
    }
    for index, section in enumerate(sections):
        streams[f'BodyText/Section{index}'] = pack(section)
    streams.update(extra_streams or {})
    return build_cfb(streams)
