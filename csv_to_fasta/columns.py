"""
Column references.

A logical column (the sequence, the germline, the clone ID or one of the header
columns) is selected either by its name in the header row or by its 1-based
position. A ColumnRef captures that choice; it is resolved once against the
header row into a 0-based field index.
"""
from typing import List, Optional
from .errors import ColumnNotFoundError, ConfigError


class ColumnRef:
    """Base class for a reference to a column of a delimited row."""

    def resolve(self, header_row: Optional[List[str]]) -> Optional[int]:
        """
        Resolve the reference to a 0-based field index.

        :param header_row: Fields of the header row, or None if the input has none
        :return: 0-based index, or None if no column is referenced
        """
        raise NotImplementedError

    def __eq__(self, other) -> bool:
        return type(self) is type(other) and vars(self) == vars(other)

    def __hash__(self) -> int:
        return hash((type(self), tuple(sorted(vars(self).items()))))


class ByName(ColumnRef):
    """Reference to the first column whose header exactly matches a name."""

    def __init__(self, name: str):
        self.name = name

    def resolve(self, header_row: Optional[List[str]]) -> Optional[int]:
        if header_row is None:
            raise ConfigError(f"Column '{self.name}' is selected by name, but the input has no header row")
        try:
            return header_row.index(self.name)
        except ValueError:
            raise ColumnNotFoundError(self.name)

    def __repr__(self) -> str:
        return f"ByName({self.name!r})"


class ByIndex(ColumnRef):
    """Reference to a column by its 1-based position."""

    def __init__(self, position: int):
        if position < 1:
            raise ConfigError(f"Column positions are 1-based, got {position}")
        self.position = position

    def resolve(self, header_row: Optional[List[str]]) -> Optional[int]:
        return self.position - 1

    def __repr__(self) -> str:
        return f"ByIndex({self.position})"


class NoColumn(ColumnRef):
    """No column selected."""

    def resolve(self, header_row: Optional[List[str]]) -> Optional[int]:
        return None

    def __repr__(self) -> str:
        return "NoColumn()"


def column_ref(name: str, position: int, has_header_row: bool = True) -> ColumnRef:
    """
    Build the reference for a single logical column. A non-empty name has
    preference over the position. Names cannot be used without a header row,
    in which case the position is used.

    :param name: Column name, empty if unset
    :param position: 1-based column position
    :param has_header_row: Whether the input starts with a header row
    :return: A ColumnRef
    """
    if name and has_header_row:
        return ByName(name)
    return ByIndex(position)


def header_column_refs(names: List[str], positions: List[int], has_header_row: bool = True) -> List[ColumnRef]:
    """
    Build the references for the header columns. Names have preference over
    positions; positions below 1 (such as -1) mean "no header column".

    :param names: Header column names, in output order
    :param positions: 1-based header column positions, in output order
    :param has_header_row: Whether the input starts with a header row
    :return: List of ColumnRef, possibly empty
    """
    if names and has_header_row:
        return [ByName(name) for name in names]
    return [ByIndex(position) for position in positions if position >= 1]
