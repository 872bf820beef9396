# hwpdecoder/core/processor/hwp5_helper/hwp5_idtable.py
"""
HWP 5.0 ID Tables and Cross-References

DocInfo records (fonts, shapes, fills, binaries, ...) are stored in ordered
IdTables and referenced from elsewhere by integer index. The index base is
not uniform across the format, so it is fixed per reference site in
REFERENCE_SITES rather than per table:

- border/fill references are 1-based (0 = no border/fill)
- BinData references (pictures, image fills) are 1-based
- numbering / bullet references from paragraph shapes are 1-based
- everything else (fonts, char/para shapes, styles, tab defs) is 0-based

Out-of-range indices resolve to UnresolvedRef instead of raising.
"""
import logging
from dataclasses import dataclass
from typing import Generic, Iterator, Optional, Sequence, Tuple, TypeVar, Union

logger = logging.getLogger("document-processor.HWP5")

T = TypeVar('T')

# reference site -> (table name, index base)
REFERENCE_SITES = {
    'ParaHeader.para_shape_id': ('para_shapes', 0),
    'ParaHeader.style_id': ('styles', 0),
    'ParaCharShape.shape_id': ('char_shapes', 0),
    'CharShape.font_id': ('face_names', 0),
    'CharShape.border_fill_id': ('border_fills', 1),
    'ParaShape.border_fill_id': ('border_fills', 1),
    'ParaShape.tab_def_id': ('tab_defs', 0),
    'ParaShape.numbering_id': ('numberings', 1),
    'ParaShape.bullet_id': ('bullets', 1),
    'ParaHeadInfo.char_shape_id': ('char_shapes', 0),
    'Style.para_shape_id': ('para_shapes', 0),
    'Style.char_shape_id': ('char_shapes', 0),
    'Style.next_style_id': ('styles', 0),
    'Table.border_fill_id': ('border_fills', 1),
    'TableZone.border_fill_id': ('border_fills', 1),
    'Cell.border_fill_id': ('border_fills', 1),
    'PageBorderFill.border_fill_id': ('border_fills', 1),
    'Picture.bin_item_id': ('bin_data', 1),
    'ImageFill.bin_item_id': ('bin_data', 1),
}


@dataclass(frozen=True)
class ResolvedRef(Generic[T]):
    table: str
    index: int
    record: T

    @property
    def resolved(self) -> bool:
        return True


@dataclass(frozen=True)
class UnresolvedRef:
    """Reference kept as-is because it points outside its table."""
    table: str
    index: Optional[int]
    reason: str

    @property
    def resolved(self) -> bool:
        return False

    @property
    def record(self) -> None:
        return None


Reference = Union[ResolvedRef, UnresolvedRef]


class IdTable(Sequence[T]):
    """
    Ordered, read-only table of decoded DocInfo records.

    Positional access (``table[0]``) is always 0-based; resolve() applies the
    index base of the referencing site.
    """

    def __init__(self, name: str, records: Sequence[T] = ()):
        self.name = name
        self._records: Tuple[T, ...] = tuple(records)

    def __len__(self) -> int:
        return len(self._records)

    def __getitem__(self, position):
        return self._records[position]

    def __iter__(self) -> Iterator[T]:
        return iter(self._records)

    def resolve(self, index: Optional[int], base: int = 0) -> Reference:
        """
        Look up ``index`` using ``base`` (0 or 1).

        Returns:
            ResolvedRef when the index is inside the table, else UnresolvedRef
        """
        if index is None:
            return UnresolvedRef(self.name, None, "absent")
        position = index - base
        if position < 0:
            reason = "no reference" if base == 1 and index == 0 else "negative index"
            return UnresolvedRef(self.name, index, reason)
        if position >= len(self._records):
            return UnresolvedRef(self.name, index, f"out of range (table has {len(self._records)})")
        return ResolvedRef(self.name, index, self._records[position])

    def __repr__(self) -> str:
        return f"IdTable(name={self.name!r}, size={len(self._records)})"


def site_info(site: str) -> Tuple[str, int]:
    """(table name, index base) for a reference site."""
    try:
        return REFERENCE_SITES[site]
    except KeyError:
        raise KeyError(f"Unknown reference site: {site}") from None


__all__ = [
    'REFERENCE_SITES',
    'ResolvedRef',
    'UnresolvedRef',
    'Reference',
    'IdTable',
    'site_info',
]
