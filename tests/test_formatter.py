import pytest
from Bio.Seq import Seq
from Bio.SeqRecord import SeqRecord
from csv_to_fasta.constants import CloneMode
from csv_to_fasta.formatter import CloneGroup, clone_id, format_fasta, group_clones, render_record


def make_record(header, sequence, germline=None, clone=None):
    record = SeqRecord(Seq(sequence), id=header, name=header, description="")
    record.annotations['csv_fields'] = {'germline': germline, 'clone': clone}
    return record


@pytest.fixture
def clone_records():
    """Records of two interleaved clones"""
    return [
        make_record("r1,GGGG,c1", "AAAA", "GGGG", "c1"),
        make_record("r2,TTTT,c2", "CCCC", "TTTT", "c2"),
        make_record("r3,GGGG,c1", "GGGG", "GGGG", "c1"),
        make_record("r5,TTTT,c2", "TTTT", "TTTT", "c2"),
    ]


def test_render_record():
    """An entry is a header line and an unwrapped sequence line"""
    seq = "ACGT" * 40
    assert render_record(make_record("x|1", seq)) == f">x|1\n{seq}\n"


def test_render_empty_header():
    """An empty header still gets the marker"""
    assert render_record(make_record("", "ACGT")) == ">\nACGT\n"


def test_flat_mode():
    """Flat mode keeps input order"""
    records = [make_record("", "ACGT"), make_record("", "TTTT")]
    assert format_fasta(False, True, records) == ">\nACGT\n>\nTTTT\n"


def test_empty_input():
    """No records, no output"""
    assert format_fasta(False, True, []) == ""
    assert format_fasta(True, True, []) == ""
    assert format_fasta(True, False, []) == ""


def test_sorted_grouping(clone_records):
    """Sorting makes every clone contiguous with its first record as germline"""
    groups = group_clones(clone_records, sort_before_clone=True)
    assert [g.clone_id for g in groups] == ["c1", "c2"]
    assert [r.id for r in groups[0].records()] == ["r1,GGGG,c1", "r3,GGGG,c1"]
    assert [r.id for r in groups[1].records()] == ["r2,TTTT,c2", "r5,TTTT,c2"]


def test_sorted_output(clone_records):
    """Sorted clone output"""
    expected = (
        ">r1,GGGG,c1\nAAAA\n"
        ">r3,GGGG,c1\nGGGG\n"
        ">r2,TTTT,c2\nCCCC\n"
        ">r5,TTTT,c2\nTTTT\n"
    )
    assert format_fasta(True, True, clone_records) == expected


def test_adjacent_grouping(clone_records):
    """Without sorting only neighbouring records of a clone are merged"""
    groups = group_clones(clone_records, sort_before_clone=False)
    assert [g.clone_id for g in groups] == ["c1", "c2", "c1", "c2"]
    assert all(len(g) == 1 for g in groups)
    output = format_fasta(True, False, clone_records)
    assert output == "".join(render_record(r) for r in clone_records)


def test_adjacent_merge():
    """Neighbouring records of the same clone form one group"""
    records = [
        make_record("a", "AAAA", "CCCC", "c1"),
        make_record("b", "CCCC", "CCCC", "c1"),
        make_record("c", "GGGG", "TTTT", "c2"),
        make_record("d", "TTTT", "TTTT", "c1"),
    ]
    groups = group_clones(records, sort_before_clone=False)
    assert [g.clone_id for g in groups] == ["c1", "c2", "c1"]
    assert groups[0].germline.id == "a"
    assert [r.id for r in groups[0].members] == ["b"]


def test_sort_by_clone_id_is_stable():
    """Clones are ordered by ID, members keep their input order"""
    records = [
        make_record("z1", "AAAA", "NNNN", "z"),
        make_record("a1", "CCCC", "NNNN", "a"),
        make_record("z2", "GGGG", "NNNN", "z"),
        make_record("a2", "TTTT", "NNNN", "a"),
        make_record("z3", "ACGT", "NNNN", "z"),
    ]
    output = format_fasta(True, True, records)
    headers = [line[1:] for line in output.splitlines() if line.startswith(">")]
    assert headers == ["a1", "a2", "z1", "z2", "z3"]


def test_first_record_is_germline():
    """The first record encountered anchors the group"""
    records = [make_record("a", "AAAA", "GGGG", "c1"), make_record("b", "CCCC", "GGGG", "c1")]
    group = CloneGroup.from_records("c1", records)
    assert group.germline.id == "a"
    assert [r.id for r in group.members] == ["b"]


def test_germline_is_not_moved_forward():
    """A later record equal to its germline value does not jump ahead"""
    records = [
        make_record("r1,GGGG,c1", "AAAA", "GGGG", "c1"),
        make_record("r2,GGGG,c1", "GGGG", "GGGG", "c1"),
    ]
    assert format_fasta(True, True, records).startswith(">r1,GGGG,c1\nAAAA\n")
    group = CloneGroup.from_records("c1", records)
    assert group.germline.id == "r1,GGGG,c1"


def test_clone_mode_from_flags():
    assert CloneMode.from_flags(False, True) == CloneMode.NONE
    assert CloneMode.from_flags(True, True) == CloneMode.SORTED
    assert CloneMode.from_flags(True, False) == CloneMode.ADJACENT


def test_render_does_not_warn(recwarn):
    """Rendering uses the supported two-line FASTA format"""
    render_record(make_record("x", "ACGT"))
    assert not [w for w in recwarn if issubclass(w.category, DeprecationWarning)]


def test_clone_id_without_annotation():
    """Records parsed without a clone all share the empty clone ID"""
    record = SeqRecord(Seq("ACGT"), id="x", description="")
    assert clone_id(record) == ""


if __name__ == '__main__':
    pytest.main(['-v'])
