"""
FASTA rendering of parsed records.

Records are either printed one after the other (flat mode) or collected into
clone groups first. A clone group is printed as its germline record followed
by the other members of the clone. Groups are built in one of two ways:

- sorted: records are stably sorted by clone ID, so that every clone ends up
  in exactly one group and keeps the input order of its members;
- adjacent: records are scanned in input order and only neighbouring records
  with the same clone ID are merged, so a clone that is interrupted by another
  clone ends up in more than one group.
"""
from itertools import groupby
from typing import Iterable, List
from Bio.SeqRecord import SeqRecord
from .constants import CloneMode


def clone_id(record: SeqRecord) -> str:
    """Return the clone ID a record was parsed with, or an empty string."""
    return record.annotations.get('csv_fields', {}).get('clone') or ""


class CloneGroup:
    """A germline record and the remaining records of the same clone."""

    def __init__(self, clone_id: str, germline: SeqRecord, members: List[SeqRecord]):
        self.clone_id = clone_id
        self.germline = germline
        self.members = members

    @classmethod
    def from_records(cls, clone: str, records: List[SeqRecord]) -> 'CloneGroup':
        """
        Build a group from records sharing a clone ID. The first record
        encountered is the germline, the others follow in order.

        :param clone: The shared clone ID
        :param records: Non-empty list of records, in output order
        :return: CloneGroup
        """
        return cls(clone, records[0], records[1:])

    def records(self) -> List[SeqRecord]:
        """All records of the group, germline first."""
        return [self.germline] + self.members

    def __len__(self) -> int:
        return 1 + len(self.members)

    def __repr__(self) -> str:
        return f"CloneGroup(clone_id={self.clone_id!r}, size={len(self)})"


def group_clones(records: Iterable[SeqRecord], sort_before_clone: bool = True) -> List[CloneGroup]:
    """
    Collect records into clone groups.

    :param records: Parsed records
    :param sort_before_clone: Stably sort by clone ID first, so each clone forms one group
    :return: Clone groups in the order their first member appears (after sorting, if any)
    """
    records = list(records)
    if sort_before_clone:
        records = sorted(records, key=clone_id)
    return [CloneGroup.from_records(key, list(group)) for key, group in groupby(records, key=clone_id)]


def render_record(record: SeqRecord) -> str:
    """Render a single record as a two-line FASTA entry."""
    return format(record, "fasta-2line")


def format_fasta(include_clone: bool, sort_before_clone: bool, records: Iterable[SeqRecord]) -> str:
    """
    Render records as FASTA text without line wrapping.

    :param include_clone: Group the records by clone, germline first
    :param sort_before_clone: Sort by clone ID before grouping
    :param records: Parsed records
    :return: FASTA text, empty if there are no records
    """
    mode = CloneMode.from_flags(include_clone, sort_before_clone)
    if mode == CloneMode.NONE:
        ordered = list(records)
    else:
        groups = group_clones(records, mode == CloneMode.SORTED)
        ordered = [record for group in groups for record in group.records()]
    return "".join(render_record(record) for record in ordered)
