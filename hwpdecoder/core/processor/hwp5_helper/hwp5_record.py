# hwpdecoder/core/processor/hwp5_helper/hwp5_record.py
"""
HWP 5.0 Record Parser

Parses HWP 5.0 binary records from DocInfo and BodyText/Section streams.

Record Structure:
- Header (4 bytes): TagID (10 bits) | Level (10 bits) | Size (12 bits)
- Extended Size (4 bytes): Only if Size field == 0xFFF
- Payload: Variable length data

Records form a tree structure based on Level values.
Level 0 = root children, Level N+1 = children of the most recent Level N record.

The tree is stored as an arena: RecordTree.nodes is a flat list, node 0 is
the synthetic root (level -1), and parent/children are list indices.
"""
import struct
import logging
from dataclasses import dataclass
from itertools import islice
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from hwpdecoder.core.processor.hwp5_helper.hwp5_constants import (
    RECORD_TAG_MASK,
    RECORD_LEVEL_SHIFT,
    RECORD_LEVEL_MASK,
    RECORD_SIZE_SHIFT,
    RECORD_SIZE_MASK,
    RECORD_EXTENDED_SIZE,
    tag_name,
)
from hwpdecoder.core.processor.hwp5_helper.hwp5_errors import (
    HwpError,
    InsufficientData,
    RecordTreeParseError,
)

logger = logging.getLogger("document-processor.HWP5")

ROOT_INDEX = 0
ROOT_LEVEL = -1


# ==========================================================================
# Tokenizer
# ==========================================================================

@dataclass(frozen=True)
class RecordToken:
    """
    One flat record.

    Attributes:
        tag_id: Record type identifier (10 bits, 0-1023)
        level: Nesting depth (10 bits, 0-1023)
        size: Payload size; len(payload) == size
        payload: Record data
        offset: Byte offset of the header within its stream
    """
    tag_id: int
    level: int
    size: int
    payload: bytes
    offset: int = 0

    @property
    def header_size(self) -> int:
        return 8 if self.size >= RECORD_EXTENDED_SIZE else 4


def pack_record_header(tag_id: int, level: int, size: int) -> bytes:
    """Encode a record header (4 bytes, or 8 when the size needs the extended form)."""
    if size >= RECORD_EXTENDED_SIZE:
        header = (tag_id & RECORD_TAG_MASK) | ((level & RECORD_LEVEL_MASK) << RECORD_LEVEL_SHIFT) \
            | (RECORD_EXTENDED_SIZE << RECORD_SIZE_SHIFT)
        return struct.pack('<II', header, size)
    header = (tag_id & RECORD_TAG_MASK) | ((level & RECORD_LEVEL_MASK) << RECORD_LEVEL_SHIFT) \
        | (size << RECORD_SIZE_SHIFT)
    return struct.pack('<I', header)


def iter_records(data: bytes, stream: str = '') -> Iterator[RecordToken]:
    """
    Lazily split a decompressed stream into RecordTokens.

    Ends cleanly when the buffer is exhausted exactly. A partial header or
    a payload shorter than its declared size is an error, never a silent
    end of stream.

    Args:
        data: Decompressed stream bytes
        stream: Stream name (used in error field names)

    Yields:
        RecordToken in stream order

    Raises:
        InsufficientData: header or payload cut short
    """
    prefix = stream or 'Record'
    pos = 0
    size = len(data)

    while pos < size:
        if pos + 4 > size:
            raise InsufficientData(f"{prefix}@{pos}.header", 4, size - pos)

        header = struct.unpack('<I', data[pos:pos+4])[0]
        start = pos
        pos += 4

        tag_id = header & RECORD_TAG_MASK                                  # bits 0-9: Tag ID
        level = (header >> RECORD_LEVEL_SHIFT) & RECORD_LEVEL_MASK         # bits 10-19: Level
        rec_len = (header >> RECORD_SIZE_SHIFT) & RECORD_SIZE_MASK         # bits 20-31: Size

        # Extended size: if rec_len == 0xFFF, next 4 bytes contain actual size
        if rec_len == RECORD_EXTENDED_SIZE:
            if pos + 4 > size:
                raise InsufficientData(f"{prefix}@{start}.extended_size", 4, size - pos)
            rec_len = struct.unpack('<I', data[pos:pos+4])[0]
            pos += 4

        if pos + rec_len > size:
            raise InsufficientData(
                f"{prefix}@{start}.{tag_name(tag_id)}.payload", rec_len, size - pos
            )

        payload = data[pos:pos+rec_len]
        pos += rec_len
        yield RecordToken(tag_id, level, rec_len, payload, start)


class RecordTokenizer:
    """
    Restartable token sequence over one stream.

    Each iteration re-reads the buffer from the start.

    Usage:
        tokens = RecordTokenizer(section_data, "BodyText/Section0")
        for token in tokens:
            ...
        tags = [t.tag_id for t in tokens]  # iterates again
    """

    def __init__(self, data: bytes, stream: str = ''):
        self.data = data
        self.stream = stream

    def __iter__(self) -> Iterator[RecordToken]:
        return iter_records(self.data, self.stream)

    def __repr__(self) -> str:
        return f"RecordTokenizer(stream={self.stream!r}, size={len(self.data)})"


# ==========================================================================
# Tree
# ==========================================================================

@dataclass(frozen=True)
class RecordNode:
    """
    A RecordToken placed in the tree.

    Attributes:
        index: Position in RecordTree.nodes
        tag_id: Record type identifier
        level: Level as stored in the stream (-1 for the root)
        payload: Record data
        parent: Parent node index (None for the root)
        children: Child node indices in stream order
        offset: Byte offset of the record header in its stream
    """
    index: int
    tag_id: int
    level: int
    payload: bytes
    parent: Optional[int]
    children: Tuple[int, ...]
    offset: int = 0

    @property
    def size(self) -> int:
        return len(self.payload)

    def __repr__(self) -> str:
        return (f"RecordNode(index={self.index}, tag_id={self.tag_id}, level={self.level}, "
                f"payload_size={len(self.payload)}, children={len(self.children)})")


class RecordTree:
    """
    Immutable record tree for one stream.

    Attributes:
        nodes: Arena of RecordNode; nodes[0] is the synthetic root
        stream: Source stream name

    Usage:
        tree = RecordTree.from_bytes(section_data, "BodyText/Section0")
        for para in tree.find_children_by_tag(tree.root, HWPTAG_PARA_HEADER):
            text = tree.find_first_child_by_tag(para, HWPTAG_PARA_TEXT)
    """

    def __init__(self, nodes: List[RecordNode], stream: str = ''):
        self.nodes: Tuple[RecordNode, ...] = tuple(nodes)
        self.stream = stream

    @classmethod
    def from_bytes(cls, data: bytes, stream: str = '') -> 'RecordTree':
        """Tokenize ``data`` and build its tree."""
        return build_tree(RecordTokenizer(data, stream), stream)

    @property
    def root(self) -> RecordNode:
        return self.nodes[ROOT_INDEX]

    def __len__(self) -> int:
        """Number of records (the synthetic root is not counted)."""
        return len(self.nodes) - 1

    def node(self, index: int) -> RecordNode:
        return self.nodes[index]

    def parent(self, node: RecordNode) -> Optional[RecordNode]:
        if node.parent is None:
            return None
        return self.nodes[node.parent]

    def children(self, node: RecordNode) -> List[RecordNode]:
        return [self.nodes[i] for i in node.children]

    def depth(self, node: RecordNode) -> int:
        """Depth below the root (root children are depth 0)."""
        depth = -1
        while node.parent is not None:
            depth += 1
            node = self.nodes[node.parent]
        return depth

    def get_next_siblings(self, node: RecordNode, count: Optional[int] = None) -> Iterator[RecordNode]:
        """
        Get subsequent sibling records.

        Args:
            node: Reference node
            count: Maximum number of siblings to return (None for all)

        Returns:
            Iterator of sibling records
        """
        if node.parent is None:
            return iter(())
        siblings = self.nodes[node.parent].children
        start_idx = siblings.index(node.index) + 1
        end_idx = None if count is None else start_idx + count
        return (self.nodes[i] for i in islice(siblings, start_idx, end_idx))

    def find_children_by_tag(self, node: RecordNode, tag_id: int) -> List[RecordNode]:
        """All direct children with ``tag_id``."""
        return [self.nodes[i] for i in node.children if self.nodes[i].tag_id == tag_id]

    def find_first_child_by_tag(self, node: RecordNode, tag_id: int) -> Optional[RecordNode]:
        """First direct child with ``tag_id`` or None."""
        for i in node.children:
            if self.nodes[i].tag_id == tag_id:
                return self.nodes[i]
        return None

    def find_descendants_by_tag(self, node: RecordNode, tag_id: int) -> List[RecordNode]:
        """All descendants (node included) with ``tag_id``, preorder."""
        return [n for n in self.preorder(node) if n.tag_id == tag_id]

    def preorder(self, node: Optional[RecordNode] = None) -> Iterator[RecordNode]:
        """
        Preorder traversal.

        Starting at the root, the root itself is skipped, so the result is
        every record in stream order.
        """
        start = self.root if node is None else node
        stack = [start.index]
        while stack:
            index = stack.pop()
            if index != ROOT_INDEX:
                yield self.nodes[index]
            stack.extend(reversed(self.nodes[index].children))

    def flatten(self) -> List[RecordToken]:
        """
        Re-flatten the tree with levels recomputed from tree depth.

        For a stream whose levels never jump by more than one, this
        reproduces the original token sequence.
        """
        tokens = []
        depths: Dict[int, int] = {ROOT_INDEX: ROOT_LEVEL}
        for node in self.preorder():
            depth = depths[node.parent] + 1
            depths[node.index] = depth
            tokens.append(RecordToken(node.tag_id, depth, len(node.payload), node.payload, node.offset))
        return tokens

    def tag_counts(self) -> Dict[int, int]:
        counts: Dict[int, int] = {}
        for node in self.preorder():
            counts[node.tag_id] = counts.get(node.tag_id, 0) + 1
        return counts

    def __repr__(self) -> str:
        return f"RecordTree(stream={self.stream!r}, records={len(self)}, top_level={len(self.root.children)})"


def build_tree(tokens: Iterable[RecordToken], stream: str = '') -> RecordTree:
    """
    Build a record tree from a flat, level-annotated token sequence.

    ``stack[i]`` is the most recently appended node at level i. For a token
    at level L:
    - L == 0: parent is the root
    - stack shorter than L: pad it by repeating its last entry (the root if
      empty) until its length is L; levels that jump ahead attach to the
      deepest open node
    - otherwise truncate the stack to length L, closing deeper subtrees
    - parent is stack[L-1]; the new node becomes stack[L]

    The shape algorithm accepts every level sequence.

    Args:
        tokens: Token sequence (e.g. a RecordTokenizer)
        stream: Stream name for error reporting

    Returns:
        RecordTree

    Raises:
        RecordTreeParseError: tokenizer failed; the original error is chained
    """
    tag_ids = [0]
    levels = [ROOT_LEVEL]
    payloads = [b'']
    offsets = [0]
    parents: List[Optional[int]] = [None]
    children: List[List[int]] = [[]]

    stack: List[int] = []
    try:
        for token in tokens:
            level = token.level
            if level == 0:
                del stack[:]
                parent = ROOT_INDEX
            else:
                if len(stack) < level:
                    filler = stack[-1] if stack else ROOT_INDEX
                    stack.extend([filler] * (level - len(stack)))
                else:
                    del stack[level:]
                parent = stack[level - 1]

            index = len(tag_ids)
            tag_ids.append(token.tag_id)
            levels.append(level)
            payloads.append(token.payload)
            offsets.append(token.offset)
            parents.append(parent)
            children.append([])
            children[parent].append(index)
            stack.append(index)
    except HwpError as e:
        raise RecordTreeParseError(stream or 'Record', e) from e

    nodes = [
        RecordNode(i, tag_ids[i], levels[i], payloads[i], parents[i], tuple(children[i]), offsets[i])
        for i in range(len(tag_ids))
    ]
    logger.debug(f"Record tree {stream or '?'}: {len(nodes) - 1} records, {len(children[0])} top-level")
    return RecordTree(nodes, stream)


__all__ = [
    'ROOT_INDEX',
    'RecordToken',
    'pack_record_header',
    'iter_records',
    'RecordTokenizer',
    'RecordNode',
    'RecordTree',
    'build_tree',
]
