"""Pytest configuration and shared fixtures."""
import gzip
import json
import tempfile
from pathlib import Path

import pytest


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def write_lines(path: Path, lines):
    """Write raw text lines (newline-terminated), gzipped if the name ends in .gz."""
    data = ''.join(line + '\n' for line in lines).encode('utf-8')
    if path.name.endswith('.gz'):
        with gzip.open(path, 'wb') as f:
            f.write(data)
    else:
        path.write_bytes(data)
    return path


def read_lines(path: Path):
    """Read text lines back, gunzipping if the name ends in .gz."""
    if path.name.endswith('.gz'):
        with gzip.open(path, 'rt', encoding='utf-8') as f:
            return f.read().splitlines()
    return path.read_text(encoding='utf-8').splitlines()


def filter_node(node_id, name, category=None):
    return json.dumps({
        "id": node_id,
        "name": name,
        "category": category if category is not None else ["biolink:NamedThing"],
        "equivalent_identifiers": [node_id],
    })


def babel_node(curie, name="x", **extra):
    node = {
        "curie": curie,
        "names": [name],
        "types": ["NamedThing"],
        "preferred_name": name,
        "shortest_name_length": len(name),
        "taxa": [],
    }
    node.update(extra)
    return json.dumps(node)


@pytest.fixture
def workspace(temp_dir):
    """Babel input directory, output directory and filter file path."""
    babel_dir = temp_dir / "babel"
    output_dir = temp_dir / "out"
    babel_dir.mkdir()
    output_dir.mkdir()
    return {
        "babel_dir": babel_dir,
        "output_dir": output_dir,
        "filter_file": temp_dir / "nodes.jsonl",
    }
