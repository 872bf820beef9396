# hwpdecoder/core/processor/hwp5_helper/hwp5_table.py
"""
HWP 5.0 Table Views

Builds a read-only grid view over a decoded table control.

HWP 5.0 Table Structure:
- CTRL_HEADER (ctrl_id='tbl '): object common properties
  - HWPTAG_LIST_HEADER (optional): caption, before TABLE
  - HWPTAG_TABLE: row / column counts, padding, border fill
  - HWPTAG_LIST_HEADER: one per cell (address, spans, size, border fill)
  - HWPTAG_PARA_HEADER ...: the cell paragraphs, following their
    LIST_HEADER as siblings (older writers nest them as children)

Usage:
    view = build_table(section, ctrl_node, doc_info, paragraph_builder)
    for row in view.grid():
        ...
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from hwpdecoder.core.processor.hwp5_helper.hwp5_constants import (
    HWPTAG_TABLE,
    HWPTAG_LIST_HEADER,
    HWPTAG_PARA_HEADER,
    CTRL_ID_TABLE,
)
from hwpdecoder.core.processor.hwp5_helper.hwp5_bodytext_records import Caption, Table, TableCell
from hwpdecoder.core.processor.hwp5_helper.hwp5_ctrl_header import ObjectCommon
from hwpdecoder.core.processor.hwp5_helper.hwp5_idtable import Reference
from hwpdecoder.core.processor.hwp5_helper.hwp5_record import RecordNode

logger = logging.getLogger("document-processor.HWP5")


# ============================================================================
# Data Classes
# ============================================================================

@dataclass(frozen=True)
class TableCellView:
    """
    One table cell.

    Attributes:
        node: LIST_HEADER node of the cell
        cell: Decoded list header + cell attributes
        border_fill: Resolved border fill (1-based reference)
        paragraphs: Paragraph views of the cell content
    """
    node: RecordNode
    cell: TableCell
    border_fill: Reference
    paragraphs: Tuple[Any, ...] = ()

    @property
    def row(self) -> int:
        return self.cell.cell.row

    @property
    def col(self) -> int:
        return self.cell.cell.col

    @property
    def row_span(self) -> int:
        return max(1, self.cell.cell.row_span)

    @property
    def col_span(self) -> int:
        return max(1, self.cell.cell.col_span)

    @property
    def text(self) -> str:
        return "\n".join(p.text for p in self.paragraphs).strip()


@dataclass(frozen=True)
class TableView:
    """
    Table control with its cells.

    Attributes:
        node: CTRL_HEADER node of the table
        control: Object common properties of the control
        table: Decoded TABLE record
        border_fill: Resolved table border fill
        cells: Cells in stream order
        caption: Decoded caption list header, if the table has one
        caption_paragraphs: Paragraph views of the caption text
    """
    node: RecordNode
    control: ObjectCommon
    table: Table
    border_fill: Reference
    cells: Tuple[TableCellView, ...]
    caption: Optional[Caption] = None
    caption_paragraphs: Tuple[Any, ...] = ()

    @property
    def row_count(self) -> int:
        return self.table.row_count

    @property
    def col_count(self) -> int:
        return self.table.col_count

    def _cell_map(self) -> Dict[Tuple[int, int], TableCellView]:
        grid: Dict[Tuple[int, int], TableCellView] = {}
        for cell in self.cells:
            for r in range(cell.row, min(cell.row + cell.row_span, self.row_count)):
                for c in range(cell.col, min(cell.col + cell.col_span, self.col_count)):
                    if (r, c) in grid:
                        logger.warning(f"Table cell ({r}, {c}) covered by more than one cell")
                        continue
                    grid[(r, c)] = cell
        return grid

    def cell_at(self, row: int, col: int) -> Optional[TableCellView]:
        """Cell covering (row, col), merged cells included."""
        return self._cell_map().get((row, col))

    def grid(self) -> List[List[Optional[TableCellView]]]:
        """
        row_count x col_count matrix.

        Positions covered by a merged cell hold that cell; positions not
        covered by any cell hold None.
        """
        cell_map = self._cell_map()
        return [
            [cell_map.get((r, c)) for c in range(self.col_count)]
            for r in range(self.row_count)
        ]

    def to_rows(self) -> List[List[str]]:
        """Cell texts by row; merged cells appear only at their origin."""
        rows = []
        for r, row in enumerate(self.grid()):
            texts = []
            for c, cell in enumerate(row):
                if cell is not None and cell.row == r and cell.col == c:
                    texts.append(cell.text)
                else:
                    texts.append("")
            rows.append(texts)
        return rows

    @property
    def is_container(self) -> bool:
        """1x1 table used as a layout box."""
        return self.row_count == 1 and self.col_count == 1


# ============================================================================
# Builder
# ============================================================================

def cell_paragraph_nodes(section, cell_node: RecordNode, para_count: int) -> List[RecordNode]:
    """
    Paragraph nodes of a cell.

    Children of the LIST_HEADER if any, otherwise the next ``para_count``
    PARA_HEADER siblings.
    """
    tree = section.tree
    children = tree.find_children_by_tag(cell_node, HWPTAG_PARA_HEADER)
    if children:
        return children

    nodes = []
    for sibling in tree.get_next_siblings(cell_node):
        if sibling.tag_id != HWPTAG_PARA_HEADER or len(nodes) >= para_count:
            break
        nodes.append(sibling)
    return nodes


def build_table(
    section,
    ctrl_node: RecordNode,
    doc_info,
    paragraph_builder: Callable[[RecordNode], Any],
) -> Optional[TableView]:
    """
    Build the table view of a 'tbl ' control.

    Args:
        section: Decoded Section owning ``ctrl_node``
        ctrl_node: CTRL_HEADER node with control ID 'tbl '
        doc_info: DocInfo used to resolve border fills
        paragraph_builder: Builds a paragraph view from a PARA_HEADER node
            (cells contain ordinary paragraphs, nested tables included)

    Returns:
        TableView, or None if the control has no TABLE record
    """
    control = section.record(ctrl_node)
    if not isinstance(control, ObjectCommon) or control.ctrl_id != CTRL_ID_TABLE:
        return None

    tree = section.tree
    table_node = tree.find_first_child_by_tag(ctrl_node, HWPTAG_TABLE)
    if table_node is None:
        logger.warning(f"{section.stream}: table control at offset {ctrl_node.offset} has no TABLE record")
        return None
    table = section.record(table_node)

    cells = []
    caption = None
    caption_paragraphs: Tuple[Any, ...] = ()
    for cell_node in tree.find_children_by_tag(ctrl_node, HWPTAG_LIST_HEADER):
        cell = section.record(cell_node)
        if isinstance(cell, Caption):
            caption = cell
            caption_paragraphs = tuple(
                paragraph_builder(node)
                for node in cell_paragraph_nodes(section, cell_node, cell.para_count)
            )
            continue
        if not isinstance(cell, TableCell):
            continue
        paragraphs = tuple(
            paragraph_builder(node)
            for node in cell_paragraph_nodes(section, cell_node, cell.para_count)
        )
        cells.append(TableCellView(
            node=cell_node,
            cell=cell,
            border_fill=doc_info.resolve('Cell.border_fill_id', cell.cell.border_fill_id),
            paragraphs=paragraphs,
        ))

    expected = sum(table.row_sizes) or table.row_count * table.col_count
    if len(cells) != expected:
        logger.debug(f"{section.stream}: table {table.row_count}x{table.col_count} "
                     f"expects {expected} cells, found {len(cells)}")

    return TableView(
        node=ctrl_node,
        control=control,
        table=table,
        border_fill=doc_info.resolve('Table.border_fill_id', table.border_fill_id),
        cells=tuple(cells),
        caption=caption,
        caption_paragraphs=caption_paragraphs,
    )


__all__ = [
    'TableCellView',
    'TableView',
    'cell_paragraph_nodes',
    'build_table',
]
