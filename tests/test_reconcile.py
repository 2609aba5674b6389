"""Tests for reconcile.py - writing unmatched filter nodes."""
import json

from babel_filter.reconcile import NON_BABEL_NODES_FILENAME, to_babel_record, write_non_babel_nodes
from babel_filter.records import BabelRecord, FilterRecord

from conftest import read_lines


def test_to_babel_record_shape():
    node = FilterRecord(id="NCBIGene:672", name="BRCA1", category=["biolink:Gene", "biolink:NamedThing"])
    record = to_babel_record(node.id, node)

    assert record == BabelRecord(
        curie="NCBIGene:672",
        names=["BRCA1"],
        types=["Gene", "NamedThing"],
        preferred_name="BRCA1",
        shortest_name_length=5,
        taxa=[],
    )


def test_to_babel_record_removes_every_prefix_occurrence():
    node = FilterRecord(id="X", name="x", category=["biolink:biolink:Thing", "Custom"])
    assert to_babel_record("X", node).types == ["Thing", "Custom"]


def test_write_non_babel_nodes(temp_dir):
    filter_set = {
        "A": FilterRecord(id="A", name="alpha", category=["biolink:Gene"]),
        "B": FilterRecord(id="B", name="beta", category=[]),
    }

    count = write_non_babel_nodes(filter_set, temp_dir)

    assert count == 2
    assert filter_set == {}
    path = temp_dir / NON_BABEL_NODES_FILENAME
    assert path.name == "NonBabelNodes.txt.gz"
    with open(path, 'rb') as f:
        assert f.read(2) == b'\x1f\x8b'

    records = {r["curie"]: r for r in map(json.loads, read_lines(path))}
    assert records["A"] == {
        "curie": "A",
        "names": ["alpha"],
        "types": ["Gene"],
        "preferred_name": "alpha",
        "shortest_name_length": 5,
        "taxa": [],
    }
    assert records["B"]["types"] == []


def test_write_non_babel_nodes_empty_set(temp_dir):
    assert write_non_babel_nodes({}, temp_dir) == 0
    assert read_lines(temp_dir / NON_BABEL_NODES_FILENAME) == []


def test_write_non_babel_nodes_skips_unencodable(temp_dir, caplog):
    filter_set = {
        "A": FilterRecord(id="A", name="alpha", category=[]),
        "B": FilterRecord(id="B", name="\ud800", category=[]),
    }

    assert write_non_babel_nodes(filter_set, temp_dir) == 1
    assert [json.loads(l)["curie"] for l in read_lines(temp_dir / NON_BABEL_NODES_FILENAME)] == ["A"]
    assert "Error converting a non-Babel node" in caplog.text


def test_to_babel_record_counts_name_length_in_utf8_bytes():
    node = FilterRecord(id="CHEBI:17925", name="α-glucose", category=["biolink:SmallMolecule"])
    record = to_babel_record(node.id, node)

    assert record.shortest_name_length == 10
    assert record.preferred_name == "α-glucose"
