"""End-to-end tests for the phases, pipeline and CLI."""

import csv
import json
import logging

import pytest

from entity_paths.cli import main, run_pipeline
from entity_paths.config import load_config
from entity_paths.errors import InputError, MalformedRow, OutputError
from entity_paths.graph_model import PathResult
from entity_paths.phases.export import read_edge_list, write_edge_list, write_results
from entity_paths.phases.ingestion import read_entity_documents
from entity_paths.pipeline import PipelinePhase, PipelineRunner

EXPECTED_RESULTS = (
    "Source entity ID,Source entity data source,Destination entity ID,"
    "Destination entity data source,Number of hops,Path,Link\n"
    "e-1,set-1,e-4,set-2,3,e-1|e-2|e-3|e-4,\"http://localhost/show/e-1,e-2,e-3,e-4\"\n"
    "e-2,set-1,e-4,set-2,2,e-2|e-3|e-4,\"http://localhost/show/e-2,e-3,e-4\"\n"
)


def test_read_entity_documents_skips_header_and_entities(run_dir):
    rows = read_entity_documents(run_dir / "entity_1.csv", skip_entities={"e-9"})

    assert [(row.entity_id, row.document_id) for row in rows] == [
        ("e-1", "d-1"),
        ("e-2", "d-1"),
        ("e-2", "d-2"),
        ("e-3", "d-2"),
    ]


def test_read_entity_documents_rejects_bad_rows(tmp_path):
    path = tmp_path / "bad.csv"
    path.write_text("entity_id,document_id\ne-1,d-1,extra\n", encoding="utf-8")

    with pytest.raises(MalformedRow):
        read_entity_documents(path)


def test_run_pipeline(run_dir):
    report = run_pipeline(load_config(run_dir / "config.json"))

    assert (run_dir / "results.csv").read_text(encoding="utf-8") == EXPECTED_RESULTS
    assert (run_dir / "unipartite.csv").read_text(encoding="utf-8") == "e-1|e-2\ne-2|e-3\ne-3|e-4\n"
    assert report["vertex_count"] == 4
    assert report["edge_count"] == 3
    assert report["fan_out"] == {"0-1": 2, "2": 3, "3": 0, "4+": 1}
    assert report["search"]["total_pairs"] == 6
    assert report["search"]["pairs_with_paths"] == 2
    assert set(report["phase_timings"]) == {"ingestion", "collapse", "search", "export", "report"}


def test_run_pipeline_all_paths_with_pairs(run_dir):
    config = load_config(run_dir / "config.json")
    config.entities.data_sources = []
    config.entities.pairs = ["e-1|e-3", "e-4|e-2"]
    config.output.find_all_paths = True

    report = run_pipeline(config)

    assert (run_dir / "results.csv").read_text(encoding="utf-8").splitlines() == [
        "Source entity ID,Destination entity ID,Number of hops,Path,Link",
        "e-1,e-3,2,e-1|e-2|e-3,\"http://localhost/show/e-1,e-2,e-3\"",
        "e-4,e-2,2,e-4|e-3|e-2,\"http://localhost/show/e-4,e-3,e-2\"",
    ]
    assert report["search"]["paths_found"] == 2


def test_run_pipeline_without_queries_writes_no_results(run_dir, caplog):
    config = load_config(run_dir / "config.json")
    config.entities.data_sources = config.entities.data_sources[:1]

    with caplog.at_level(logging.WARNING):
        report = run_pipeline(config)

    assert "results" not in report["written_files"]
    assert not (run_dir / "results.csv").exists()
    assert "At least two data sources" in caplog.text


def test_edge_list_round_trip(tmp_path, six_vertex_graph):
    path = tmp_path / "edges.csv"
    count = write_edge_list(path, six_vertex_graph.undirected_edge_list(), ",")

    assert count == 6
    assert read_edge_list(path, ",") == six_vertex_graph


def test_runner_rejects_non_dict_phase():
    class BrokenPhase(PipelinePhase):
        phase_name = "broken"

        def run(self, context):
            return None

    with pytest.raises(TypeError):
        PipelineRunner([BrokenPhase()]).run({})


def test_cli_main(run_dir, capsys):
    exit_code = main(["--config", str(run_dir / "config.json"), "--max-depth", "2", "--log-level", "WARNING"])

    assert exit_code == 0
    lines = (run_dir / "results.csv").read_text(encoding="utf-8").splitlines()
    assert lines[1:] == ["e-2,set-1,e-4,set-2,2,e-2|e-3|e-4,\"http://localhost/show/e-2,e-3,e-4\""]
    assert "pairs_with_paths=1" in capsys.readouterr().out


def test_cli_output_override(run_dir, tmp_path):
    output_file = tmp_path / "out" / "paths.csv"

    assert main(["--config", str(run_dir / "config.json"), "--output-file", str(output_file), "--all-paths"]) == 0
    assert output_file.read_text(encoding="utf-8") == EXPECTED_RESULTS


def test_cli_config_from_environment(run_dir, monkeypatch):
    monkeypatch.setenv("ENTITY_PATHS_CONFIG", str(run_dir / "config.json"))

    assert main(["--log-level", "ERROR"]) == 0
    assert (run_dir / "results.csv").exists()


def test_cli_missing_config(tmp_path):
    assert main(["--config", str(tmp_path / "missing.json")]) == 1


def test_cli_aborts_on_malformed_pair(run_dir):
    config = json.loads((run_dir / "config.json").read_text(encoding="utf-8"))
    config["entities"]["pairs"] = ["e-1|e-2|e-3"]
    (run_dir / "config.json").write_text(json.dumps(config), encoding="utf-8")

    assert main(["--config", str(run_dir / "config.json")]) == 1


def test_read_entity_documents_missing_file(tmp_path):
    with pytest.raises(InputError):
        read_entity_documents(tmp_path / "nope.csv")


def test_read_entity_documents_undecodable_file(tmp_path):
    path = tmp_path / "latin1.csv"
    path.write_bytes("entity_id,document_id\nM\xfcller,d-1\n".encode("latin-1"))

    with pytest.raises(InputError):
        read_entity_documents(path)


def test_read_entity_documents_quoted_ids(tmp_path):
    path = tmp_path / "quoted.csv"
    path.write_text('entity_id,document_id\n"Smith, J",d-1\n', encoding="utf-8")

    assert read_entity_documents(path)[0].entity_id == "Smith, J"


def test_write_results_quotes_fields_containing_delimiter(tmp_path):
    result = PathResult.build("Smith, J", "e-2", ["Smith, J", "e-2"], "<ENTITY_IDS>")
    path = tmp_path / "results.csv"

    write_results(path, [result], delimiter=",", path_delimiter="|", with_groups=False)

    rows = list(csv.reader(path.read_text(encoding="utf-8").splitlines()))
    assert rows[1] == ["Smith, J", "e-2", "1", "Smith, J|e-2", "Smith, J,e-2"]
    assert all(len(row) == 5 for row in rows)


def test_write_results_unwritable_path(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(OutputError):
        write_results(blocker / "results.csv", [], delimiter=",", path_delimiter="|", with_groups=False)


def test_write_edge_list_unwritable_path(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")

    with pytest.raises(OutputError):
        write_edge_list(blocker / "edges.csv", [("a", "b")], ",")


def test_read_edge_list_rejects_bad_line(tmp_path):
    path = tmp_path / "edges.csv"
    path.write_text("a,b\na,b,c\n", encoding="utf-8")

    with pytest.raises(MalformedRow):
        read_edge_list(path, ",")


def test_cli_missing_input_file(run_dir):
    config = json.loads((run_dir / "config.json").read_text(encoding="utf-8"))
    config["input_files"].append(str(run_dir / "nope.csv"))
    (run_dir / "config.json").write_text(json.dumps(config), encoding="utf-8")

    assert main(["--config", str(run_dir / "config.json")]) == 1
    assert not (run_dir / "results.csv").exists()


def test_cli_unwritable_output(run_dir):
    (run_dir / "blocker").write_text("", encoding="utf-8")

    assert main(["--config", str(run_dir / "config.json"), "--output-file", str(run_dir / "blocker" / "r.csv")]) == 1
