# hwpdecoder/core/processor/hwp5_helper/hwp5_constants.py
"""
HWP 5.0 OLE Format Constants

Defines stream names, record tag IDs, control IDs, control character codes,
file flags and version gates for HWP 5.0 OLE format decoding.

Record Structure:
- Header (4 bytes): TagID (10 bits) | Level (10 bits) | Size (12 bits)
- If Size == 0xFFF, next 4 bytes contain actual size
- Payload: Variable length data

Reference: HWP 5.0 File Format Specification (한글과컴퓨터)
"""

# ==========================================================================
# Stream Names
# ==========================================================================

STREAM_FILE_HEADER = "FileHeader"
STREAM_DOC_INFO = "DocInfo"
STORAGE_BODY_TEXT = "BodyText"
STORAGE_VIEW_TEXT = "ViewText"
STORAGE_BIN_DATA = "BinData"
STORAGE_SCRIPTS = "Scripts"
STORAGE_XML_TEMPLATE = "XMLTemplate"
STREAM_SUMMARY_INFORMATION = "\x05HwpSummaryInformation"
STREAM_PREVIEW_TEXT = "PrvText"
STREAM_PREVIEW_IMAGE = "PrvImage"
STREAM_SCRIPT_VERSION = "JScriptVersion"
STREAM_DEFAULT_SCRIPT = "DefaultJScript"
STREAM_XML_TEMPLATE_SCHEMA_NAME = "_SchemaName"
STREAM_XML_TEMPLATE_SCHEMA = "Schema"
STREAM_XML_TEMPLATE_INSTANCE = "Instance"

SECTION_STREAM_PREFIX = "Section"


# ==========================================================================
# HWP 5.0 Tag Constants
# ==========================================================================

HWPTAG_BEGIN = 0x10

# DocInfo 관련
HWPTAG_DOCUMENT_PROPERTIES = HWPTAG_BEGIN + 0   # 16 - Document properties
HWPTAG_ID_MAPPINGS = HWPTAG_BEGIN + 1           # 17 - ID mappings
HWPTAG_BIN_DATA = HWPTAG_BEGIN + 2               # 18 - Binary data info in DocInfo
HWPTAG_FACE_NAME = HWPTAG_BEGIN + 3              # 19 - Font face name
HWPTAG_BORDER_FILL = HWPTAG_BEGIN + 4            # 20 - Border/fill style
HWPTAG_CHAR_SHAPE = HWPTAG_BEGIN + 5             # 21 - Character shape
HWPTAG_TAB_DEF = HWPTAG_BEGIN + 6                # 22 - Tab definition
HWPTAG_NUMBERING = HWPTAG_BEGIN + 7              # 23 - Numbering
HWPTAG_BULLET = HWPTAG_BEGIN + 8                 # 24 - Bullet
HWPTAG_PARA_SHAPE = HWPTAG_BEGIN + 9             # 25 - Paragraph shape
HWPTAG_STYLE = HWPTAG_BEGIN + 10                 # 26 - Style
HWPTAG_DOC_DATA = HWPTAG_BEGIN + 11              # 27 - Document arbitrary data
HWPTAG_DISTRIBUTE_DOC_DATA = HWPTAG_BEGIN + 12   # 28 - Distribution document data
HWPTAG_COMPATIBLE_DOCUMENT = HWPTAG_BEGIN + 14   # 30 - Compatible document
HWPTAG_LAYOUT_COMPATIBILITY = HWPTAG_BEGIN + 15  # 31 - Layout compatibility
HWPTAG_TRACKCHANGE = HWPTAG_BEGIN + 16           # 32 - Track change info
HWPTAG_MEMO_SHAPE = HWPTAG_BEGIN + 76            # 92 - Memo shape
HWPTAG_FORBIDDEN_CHAR = HWPTAG_BEGIN + 78        # 94 - Forbidden characters
HWPTAG_TRACK_CHANGE = HWPTAG_BEGIN + 80          # 96 - Track change content
HWPTAG_TRACK_CHANGE_AUTHOR = HWPTAG_BEGIN + 81   # 97 - Track change author

# Section/Paragraph 관련
HWPTAG_PARA_HEADER = HWPTAG_BEGIN + 50           # 66 - Paragraph header
HWPTAG_PARA_TEXT = HWPTAG_BEGIN + 51             # 67 - Paragraph text
HWPTAG_PARA_CHAR_SHAPE = HWPTAG_BEGIN + 52       # 68 - Paragraph character shape
HWPTAG_PARA_LINE_SEG = HWPTAG_BEGIN + 53         # 69 - Paragraph line segment
HWPTAG_PARA_RANGE_TAG = HWPTAG_BEGIN + 54        # 70 - Paragraph range tag

# Control/Shape 관련
HWPTAG_CTRL_HEADER = HWPTAG_BEGIN + 55           # 71 - Control header
HWPTAG_LIST_HEADER = HWPTAG_BEGIN + 56           # 72 - List header (table cells)
HWPTAG_PAGE_DEF = HWPTAG_BEGIN + 57              # 73 - Page definition
HWPTAG_FOOTNOTE_SHAPE = HWPTAG_BEGIN + 58        # 74 - Footnote shape
HWPTAG_PAGE_BORDER_FILL = HWPTAG_BEGIN + 59      # 75 - Page border fill
HWPTAG_SHAPE_COMPONENT = HWPTAG_BEGIN + 60       # 76 - Shape component (container)
HWPTAG_TABLE = HWPTAG_BEGIN + 61                 # 77 - Table properties
HWPTAG_SHAPE_COMPONENT_LINE = HWPTAG_BEGIN + 62       # 78 - Line
HWPTAG_SHAPE_COMPONENT_RECTANGLE = HWPTAG_BEGIN + 63  # 79 - Rectangle
HWPTAG_SHAPE_COMPONENT_ELLIPSE = HWPTAG_BEGIN + 64    # 80 - Ellipse
HWPTAG_SHAPE_COMPONENT_ARC = HWPTAG_BEGIN + 65        # 81 - Arc
HWPTAG_SHAPE_COMPONENT_POLYGON = HWPTAG_BEGIN + 66    # 82 - Polygon
HWPTAG_SHAPE_COMPONENT_CURVE = HWPTAG_BEGIN + 67      # 83 - Curve
HWPTAG_SHAPE_COMPONENT_OLE = HWPTAG_BEGIN + 68        # 84 - OLE object (charts are OLE)
HWPTAG_SHAPE_COMPONENT_PICTURE = HWPTAG_BEGIN + 69    # 85 - Picture shape
HWPTAG_SHAPE_COMPONENT_CONTAINER = HWPTAG_BEGIN + 70  # 86 - Container
HWPTAG_CTRL_DATA = HWPTAG_BEGIN + 71                  # 87 - Control arbitrary data
HWPTAG_EQEDIT = HWPTAG_BEGIN + 72                     # 88 - Equation
HWPTAG_RESERVED = HWPTAG_BEGIN + 73                   # 89 - Reserved
HWPTAG_SHAPE_COMPONENT_TEXTART = HWPTAG_BEGIN + 74    # 90 - TextArt
HWPTAG_FORM_OBJECT = HWPTAG_BEGIN + 75                # 91 - Form object
HWPTAG_MEMO_LIST = HWPTAG_BEGIN + 77                  # 93 - Memo list
HWPTAG_CHART_DATA = HWPTAG_BEGIN + 79                 # 95 - Chart data
HWPTAG_VIDEO_DATA = HWPTAG_BEGIN + 82                 # 98 - Video data
HWPTAG_SHAPE_COMPONENT_UNKNOWN = HWPTAG_BEGIN + 99    # 115 - Unknown shape

TAG_NAMES = {
    HWPTAG_DOCUMENT_PROPERTIES: 'DOCUMENT_PROPERTIES',
    HWPTAG_ID_MAPPINGS: 'ID_MAPPINGS',
    HWPTAG_BIN_DATA: 'BIN_DATA',
    HWPTAG_FACE_NAME: 'FACE_NAME',
    HWPTAG_BORDER_FILL: 'BORDER_FILL',
    HWPTAG_CHAR_SHAPE: 'CHAR_SHAPE',
    HWPTAG_TAB_DEF: 'TAB_DEF',
    HWPTAG_NUMBERING: 'NUMBERING',
    HWPTAG_BULLET: 'BULLET',
    HWPTAG_PARA_SHAPE: 'PARA_SHAPE',
    HWPTAG_STYLE: 'STYLE',
    HWPTAG_DOC_DATA: 'DOC_DATA',
    HWPTAG_DISTRIBUTE_DOC_DATA: 'DISTRIBUTE_DOC_DATA',
    HWPTAG_COMPATIBLE_DOCUMENT: 'COMPATIBLE_DOCUMENT',
    HWPTAG_LAYOUT_COMPATIBILITY: 'LAYOUT_COMPATIBILITY',
    HWPTAG_TRACKCHANGE: 'TRACKCHANGE',
    HWPTAG_MEMO_SHAPE: 'MEMO_SHAPE',
    HWPTAG_FORBIDDEN_CHAR: 'FORBIDDEN_CHAR',
    HWPTAG_TRACK_CHANGE: 'TRACK_CHANGE',
    HWPTAG_TRACK_CHANGE_AUTHOR: 'TRACK_CHANGE_AUTHOR',
    HWPTAG_PARA_HEADER: 'PARA_HEADER',
    HWPTAG_PARA_TEXT: 'PARA_TEXT',
    HWPTAG_PARA_CHAR_SHAPE: 'PARA_CHAR_SHAPE',
    HWPTAG_PARA_LINE_SEG: 'PARA_LINE_SEG',
    HWPTAG_PARA_RANGE_TAG: 'PARA_RANGE_TAG',
    HWPTAG_CTRL_HEADER: 'CTRL_HEADER',
    HWPTAG_LIST_HEADER: 'LIST_HEADER',
    HWPTAG_PAGE_DEF: 'PAGE_DEF',
    HWPTAG_FOOTNOTE_SHAPE: 'FOOTNOTE_SHAPE',
    HWPTAG_PAGE_BORDER_FILL: 'PAGE_BORDER_FILL',
    HWPTAG_SHAPE_COMPONENT: 'SHAPE_COMPONENT',
    HWPTAG_TABLE: 'TABLE',
    HWPTAG_SHAPE_COMPONENT_LINE: 'SHAPE_COMPONENT_LINE',
    HWPTAG_SHAPE_COMPONENT_RECTANGLE: 'SHAPE_COMPONENT_RECTANGLE',
    HWPTAG_SHAPE_COMPONENT_ELLIPSE: 'SHAPE_COMPONENT_ELLIPSE',
    HWPTAG_SHAPE_COMPONENT_ARC: 'SHAPE_COMPONENT_ARC',
    HWPTAG_SHAPE_COMPONENT_POLYGON: 'SHAPE_COMPONENT_POLYGON',
    HWPTAG_SHAPE_COMPONENT_CURVE: 'SHAPE_COMPONENT_CURVE',
    HWPTAG_SHAPE_COMPONENT_OLE: 'SHAPE_COMPONENT_OLE',
    HWPTAG_SHAPE_COMPONENT_PICTURE: 'SHAPE_COMPONENT_PICTURE',
    HWPTAG_SHAPE_COMPONENT_CONTAINER: 'SHAPE_COMPONENT_CONTAINER',
    HWPTAG_CTRL_DATA: 'CTRL_DATA',
    HWPTAG_EQEDIT: 'EQEDIT',
    HWPTAG_RESERVED: 'RESERVED',
    HWPTAG_SHAPE_COMPONENT_TEXTART: 'SHAPE_COMPONENT_TEXTART',
    HWPTAG_FORM_OBJECT: 'FORM_OBJECT',
    HWPTAG_MEMO_LIST: 'MEMO_LIST',
    HWPTAG_CHART_DATA: 'CHART_DATA',
    HWPTAG_VIDEO_DATA: 'VIDEO_DATA',
    HWPTAG_SHAPE_COMPONENT_UNKNOWN: 'SHAPE_COMPONENT_UNKNOWN',
}


def tag_name(tag_id: int) -> str:
    """Human readable name for a tag ID (``TAG_<n>`` when unknown)."""
    return TAG_NAMES.get(tag_id, f"TAG_{tag_id}")


# ==========================================================================
# Record Header
# ==========================================================================

RECORD_TAG_MASK = 0x3FF
RECORD_LEVEL_SHIFT = 10
RECORD_LEVEL_MASK = 0x3FF
RECORD_SIZE_SHIFT = 20
RECORD_SIZE_MASK = 0xFFF
RECORD_EXTENDED_SIZE = 0xFFF     # Sentinel: real size follows as DWORD


# ==========================================================================
# Control Character Codes
# ==========================================================================

# PARA_TEXT에서 사용되는 컨트롤 문자 코드
CTRL_CHAR_TAB = 0x09                   # Inline: tab
CTRL_CHAR_LINE_BREAK = 0x0A            # Char: line break
CTRL_CHAR_PARA_BREAK = 0x0D            # Char: paragraph break
CTRL_CHAR_HYPHEN = 0x18                # Char: hyphen
CTRL_CHAR_BOUND_SPACE = 0x1E           # Char: non-breaking space
CTRL_CHAR_FIXED_SPACE = 0x1F           # Char: fixed-width space

# Codes occupying a single WCHAR; every other code below 32 spans 8 WCHARs
CTRL_CHARS_SINGLE = frozenset({0x00, 0x0A, 0x0D, 0x18, 0x1E, 0x1F})
# Inline controls carry 12 bytes of parameters but no CTRL_HEADER record
CTRL_CHARS_INLINE = frozenset({0x04, 0x05, 0x06, 0x07, 0x08, 0x09, 0x13, 0x14})
CTRL_CHAR_SPAN = 8


# ==========================================================================
# Control IDs (reverse byte order)
# ==========================================================================

CTRL_ID_TABLE = b'tbl '          # Table control
CTRL_ID_GSO = b'gso '            # Generic Shape Object
CTRL_ID_EQUATION = b'eqed'       # Equation
CTRL_ID_SECTION = b'secd'        # Section definition
CTRL_ID_COLUMN = b'cold'         # Column definition
CTRL_ID_HEADER = b'head'         # Header
CTRL_ID_FOOTER = b'foot'         # Footer
CTRL_ID_FOOTNOTE = b'fn  '       # Footnote
CTRL_ID_ENDNOTE = b'en  '        # Endnote
CTRL_ID_AUTO_NUM = b'atno'       # Auto number
CTRL_ID_NEW_NUM = b'nwno'        # New number
CTRL_ID_PAGE_HIDE = b'pghd'      # Hide header/footer/page number on page
CTRL_ID_PAGE_ADJUST = b'pgct'    # Odd/even page adjust
CTRL_ID_PAGE_NUM_POS = b'pgnp'   # Page number position
CTRL_ID_INDEX_MARK = b'idxm'     # Index mark
CTRL_ID_BOOKMARK = b'bokm'       # Bookmark
CTRL_ID_OVERLAP = b'tcps'        # Overlapping characters
CTRL_ID_DUTMAL = b'tdut'         # Dutmal (annotation text)

FIELD_CTRL_PREFIX = b'%'         # Every field control ID starts with '%'


# ==========================================================================
# File Signatures / FileHeader
# ==========================================================================

# OLE Compound Document signature
OLE_MAGIC = b'\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1'

# HWP file signature (in FileHeader stream)
HWP_SIGNATURE = b'HWP Document File'

FILE_HEADER_SIZE = 256
SUPPORTED_MAJOR_VERSION = 5

# FileHeader document flags (bytes 36-39)
FLAG_COMPRESSED = 0x01
FLAG_PASSWORD = 0x02
FLAG_DISTRIBUTION = 0x04
FLAG_SCRIPT = 0x08
FLAG_DRM = 0x10
FLAG_XML_TEMPLATE = 0x20
FLAG_HISTORY = 0x40
FLAG_SIGNATURE = 0x80
FLAG_CERT_ENCRYPT = 0x100
FLAG_SIGNATURE_SPARE = 0x200
FLAG_CERT_DRM = 0x400
FLAG_CCL = 0x800
FLAG_MOBILE = 0x1000
FLAG_PRIVACY = 0x2000
FLAG_TRACK_CHANGE = 0x4000
FLAG_KOGL = 0x8000
FLAG_VIDEO = 0x10000
FLAG_ORDER_FIELD = 0x20000


# ==========================================================================
# Version Gates
# ==========================================================================

# Values compared against the raw FileHeader version DWORD (0xMMnnPPrr).
# The two legacy gates below are smaller than any 5.x version and are kept
# exactly as observed in the format notes.
VERSION_PARA_SHAPE_ATTR2 = 0x00010107
VERSION_PARA_SHAPE_ATTR3 = 0x00020500
VERSION_NUMBERING_LEVEL_START = 0x00020500
VERSION_PARA_HEADER_MERGE = 0x05000302
VERSION_TABLE_ZONES = 0x05000100


# ==========================================================================
# BinData Storage Types
# ==========================================================================

BINDATA_LINK = 0        # External link
BINDATA_EMBEDDING = 1   # Embedded in BinData storage
BINDATA_STORAGE = 2     # OLE storage in BinData folder


# ==========================================================================
# Export List
# ==========================================================================

__all__ = [
    # Streams
    'STREAM_FILE_HEADER',
    'STREAM_DOC_INFO',
    'STORAGE_BODY_TEXT',
    'STORAGE_VIEW_TEXT',
    'STORAGE_BIN_DATA',
    'STORAGE_SCRIPTS',
    'STORAGE_XML_TEMPLATE',
    'STREAM_SUMMARY_INFORMATION',
    'STREAM_PREVIEW_TEXT',
    'STREAM_PREVIEW_IMAGE',
    'STREAM_SCRIPT_VERSION',
    'STREAM_DEFAULT_SCRIPT',
    'STREAM_XML_TEMPLATE_SCHEMA_NAME',
    'STREAM_XML_TEMPLATE_SCHEMA',
    'STREAM_XML_TEMPLATE_INSTANCE',
    'SECTION_STREAM_PREFIX',
    # Tag IDs
    'HWPTAG_BEGIN',
    'HWPTAG_DOCUMENT_PROPERTIES',
    'HWPTAG_ID_MAPPINGS',
    'HWPTAG_BIN_DATA',
    'HWPTAG_FACE_NAME',
    'HWPTAG_BORDER_FILL',
    'HWPTAG_CHAR_SHAPE',
    'HWPTAG_TAB_DEF',
    'HWPTAG_NUMBERING',
    'HWPTAG_BULLET',
    'HWPTAG_PARA_SHAPE',
    'HWPTAG_STYLE',
    'HWPTAG_DOC_DATA',
    'HWPTAG_DISTRIBUTE_DOC_DATA',
    'HWPTAG_COMPATIBLE_DOCUMENT',
    'HWPTAG_LAYOUT_COMPATIBILITY',
    'HWPTAG_TRACKCHANGE',
    'HWPTAG_MEMO_SHAPE',
    'HWPTAG_FORBIDDEN_CHAR',
    'HWPTAG_TRACK_CHANGE',
    'HWPTAG_TRACK_CHANGE_AUTHOR',
    'HWPTAG_PARA_HEADER',
    'HWPTAG_PARA_TEXT',
    'HWPTAG_PARA_CHAR_SHAPE',
    'HWPTAG_PARA_LINE_SEG',
    'HWPTAG_PARA_RANGE_TAG',
    'HWPTAG_CTRL_HEADER',
    'HWPTAG_LIST_HEADER',
    'HWPTAG_PAGE_DEF',
    'HWPTAG_FOOTNOTE_SHAPE',
    'HWPTAG_PAGE_BORDER_FILL',
    'HWPTAG_SHAPE_COMPONENT',
    'HWPTAG_TABLE',
    'HWPTAG_SHAPE_COMPONENT_LINE',
    'HWPTAG_SHAPE_COMPONENT_RECTANGLE',
    'HWPTAG_SHAPE_COMPONENT_ELLIPSE',
    'HWPTAG_SHAPE_COMPONENT_ARC',
    'HWPTAG_SHAPE_COMPONENT_POLYGON',
    'HWPTAG_SHAPE_COMPONENT_CURVE',
    'HWPTAG_SHAPE_COMPONENT_OLE',
    'HWPTAG_SHAPE_COMPONENT_PICTURE',
    'HWPTAG_SHAPE_COMPONENT_CONTAINER',
    'HWPTAG_CTRL_DATA',
    'HWPTAG_EQEDIT',
    'HWPTAG_RESERVED',
    'HWPTAG_SHAPE_COMPONENT_TEXTART',
    'HWPTAG_FORM_OBJECT',
    'HWPTAG_MEMO_LIST',
    'HWPTAG_CHART_DATA',
    'HWPTAG_VIDEO_DATA',
    'HWPTAG_SHAPE_COMPONENT_UNKNOWN',
    'TAG_NAMES',
    'tag_name',
    # Record header
    'RECORD_TAG_MASK',
    'RECORD_LEVEL_SHIFT',
    'RECORD_LEVEL_MASK',
    'RECORD_SIZE_SHIFT',
    'RECORD_SIZE_MASK',
    'RECORD_EXTENDED_SIZE',
    # Control chars
    'CTRL_CHAR_TAB',
    'CTRL_CHAR_LINE_BREAK',
    'CTRL_CHAR_PARA_BREAK',
    'CTRL_CHAR_HYPHEN',
    'CTRL_CHAR_BOUND_SPACE',
    'CTRL_CHAR_FIXED_SPACE',
    'CTRL_CHARS_SINGLE',
    'CTRL_CHARS_INLINE',
    'CTRL_CHAR_SPAN',
    # Control IDs
    'CTRL_ID_TABLE',
    'CTRL_ID_GSO',
    'CTRL_ID_EQUATION',
    'CTRL_ID_SECTION',
    'CTRL_ID_COLUMN',
    'CTRL_ID_HEADER',
    'CTRL_ID_FOOTER',
    'CTRL_ID_FOOTNOTE',
    'CTRL_ID_ENDNOTE',
    'CTRL_ID_AUTO_NUM',
    'CTRL_ID_NEW_NUM',
    'CTRL_ID_PAGE_HIDE',
    'CTRL_ID_PAGE_ADJUST',
    'CTRL_ID_PAGE_NUM_POS',
    'CTRL_ID_INDEX_MARK',
    'CTRL_ID_BOOKMARK',
    'CTRL_ID_OVERLAP',
    'CTRL_ID_DUTMAL',
    'FIELD_CTRL_PREFIX',
    # File signatures / header
    'OLE_MAGIC',
    'HWP_SIGNATURE',
    'FILE_HEADER_SIZE',
    'SUPPORTED_MAJOR_VERSION',
    'FLAG_COMPRESSED',
    'FLAG_PASSWORD',
    'FLAG_DISTRIBUTION',
    'FLAG_SCRIPT',
    'FLAG_DRM',
    'FLAG_XML_TEMPLATE',
    'FLAG_HISTORY',
    'FLAG_SIGNATURE',
    'FLAG_CERT_ENCRYPT',
    'FLAG_SIGNATURE_SPARE',
    'FLAG_CERT_DRM',
    'FLAG_CCL',
    'FLAG_MOBILE',
    'FLAG_PRIVACY',
    'FLAG_TRACK_CHANGE',
    'FLAG_KOGL',
    'FLAG_VIDEO',
    'FLAG_ORDER_FIELD',
    # Version gates
    'VERSION_PARA_SHAPE_ATTR2',
    'VERSION_PARA_SHAPE_ATTR3',
    'VERSION_NUMBERING_LEVEL_START',
    'VERSION_PARA_HEADER_MERGE',
    'VERSION_TABLE_ZONES',
    # BinData types
    'BINDATA_LINK',
    'BINDATA_EMBEDDING',
    'BINDATA_STORAGE',
]
