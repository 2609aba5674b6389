"""Tests for the babel-filter command line."""
import gzip
import json

from babel_filter.cli.babel_filter import build_parser, main
from babel_filter.reconcile import NON_BABEL_NODES_FILENAME

from conftest import babel_node, filter_node, read_lines, write_lines


def cli_args(workspace, *extra):
    return [
        "--babel-directory", str(workspace["babel_dir"]),
        "--filter-file", str(workspace["filter_file"]),
        "--output-directory", str(workspace["output_dir"]),
        "--no-progress",
        *extra,
    ]


def test_parser_exclude_category_accumulates():
    args = build_parser().parse_args([
        "-b", "in", "-f", "nodes.jsonl", "-o", "out",
        "-e", "biolink:Publication", "biolink:OrganismTaxon",
        "-e", "biolink:Gene",
    ])
    assert args.exclude_category == ["biolink:Publication", "biolink:OrganismTaxon", "biolink:Gene"]
    assert args.output_format is None


def test_parser_buffer_size_from_environment(monkeypatch):
    monkeypatch.setenv("BABEL_FILTER_BUFFER_SIZE", "4096")
    args = build_parser().parse_args(["-b", "in", "-f", "nodes.jsonl", "-o", "out"])
    assert args.buffer_size == 4096


def test_main_success(workspace, capsys):
    write_lines(workspace["filter_file"], [filter_node("A", "alpha"), filter_node("B", "beta")])
    write_lines(workspace["babel_dir"] / "Gene.txt.gz", [babel_node("A"), babel_node("C")])

    assert main(cli_args(workspace, "--output-format", "plaintext")) == 0

    output_dir = workspace["output_dir"]
    assert read_lines(output_dir / "Gene.txt") == [babel_node("A")]
    overflow = read_lines(output_dir / NON_BABEL_NODES_FILENAME)
    assert [json.loads(l)["curie"] for l in overflow] == ["B"]
    assert "Program took" in capsys.readouterr().out


def test_main_missing_directory(workspace, capsys, caplog):
    write_lines(workspace["filter_file"], [filter_node("A", "alpha")])
    workspace = dict(workspace, babel_dir=workspace["babel_dir"] / "missing")

    assert main(cli_args(workspace)) == 1
    assert "Babel directory" in caplog.text
    assert capsys.readouterr().out == ""


def test_main_unreadable_gzip_is_fatal(workspace):
    write_lines(workspace["filter_file"], [filter_node("A", "alpha")])
    (workspace["babel_dir"] / "Broken.txt.gz").write_bytes(b"this is not gzip data\n")

    assert main(cli_args(workspace)) == 1
    assert not (workspace["output_dir"] / NON_BABEL_NODES_FILENAME).exists()


def test_main_corrupt_gzip_body_is_fatal(workspace, caplog):
    write_lines(workspace["filter_file"], [filter_node("A", "alpha")])
    # Valid gzip header followed by an invalid deflate block
    header = gzip.compress(babel_node("A").encode("utf-8"))[:10]
    (workspace["babel_dir"] / "Broken.txt.gz").write_bytes(header + b"\xff" * 32)

    assert main(cli_args(workspace)) == 1
    assert "Fatal I/O error" in caplog.text
    assert not (workspace["output_dir"] / NON_BABEL_NODES_FILENAME).exists()
