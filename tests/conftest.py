"""Shared graph fixtures."""

import json
import logging
from pathlib import Path

import pytest

from entity_paths.config import get_settings
from entity_paths.graph_model import Graph


def build_graph(*edges):
    graph = Graph()
    for a, b in edges:
        graph.add_undirected(a, b)
    return graph


@pytest.fixture
def diamond_graph():
    return build_graph(("a", "b"), ("a", "c"), ("b", "d"), ("c", "d"))


@pytest.fixture
def six_vertex_graph():
    return build_graph(("a", "b"), ("b", "c"), ("b", "d"), ("c", "e"), ("d", "e"), ("e", "f"))


@pytest.fixture
def components_graph():
    """Two components; the larger one has several equal-length routes into e-17."""
    return build_graph(
        ("e-1", "e-2"),
        ("e-3", "e-4"),
        ("e-4", "e-5"),
        ("e-4", "e-6"),
        ("e-3", "e-8"),
        ("e-8", "e-11"),
        ("e-3", "e-9"),
        ("e-9", "e-11"),
        ("e-11", "e-13"),
        ("e-3", "e-7"),
        ("e-7", "e-10"),
        ("e-10", "e-12"),
        ("e-3", "e-14"),
        ("e-3", "e-15"),
        ("e-3", "e-16"),
        ("e-14", "e-17"),
        ("e-15", "e-17"),
        ("e-16", "e-17"),
        ("e-17", "e-18"),
        ("e-18", "e-19"),
    )


@pytest.fixture(autouse=True)
def restore_root_logger():
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def run_dir(tmp_path: Path):
    """Two entity-document files and a config pointing at them."""
    (tmp_path / "entity_1.csv").write_text(
        "entity_id,document_id\n"
        "e-1,d-1\n"
        "e-2,d-1\n"
        "e-2,d-2\n"
        "e-3,d-2\n"
        "e-9,d-9\n",
        encoding="utf-8",
    )
    (tmp_path / "entity_2.csv").write_text(
        "entity_id,document_id\n"
        "e-3,d-3\n"
        "e-4,d-3\n"
        "e-5,d-4\n"
        "e-6,d-4\n"
        "e-7,d-4\n"
        "e-8,d-4\n"
        "e-1,d-5\n",
        encoding="utf-8",
    )
    config = {
        "input_files": [str(tmp_path / "entity_1.csv"), str(tmp_path / "entity_2.csv")],
        "entities": {
            "data_sources": [
                {"name": "set-1", "entity_ids": ["e-1", "e-2"]},
                {"name": "set-2", "entity_ids": ["e-4", "e-5", "e-100"]},
            ],
            "skip": [],
        },
        "output": {
            "max_depth": 3,
            "output_file": str(tmp_path / "results.csv"),
            "delimiter": ",",
            "path_delimiter": "|",
            "webapp_link": "http://localhost/show/<ENTITY_IDS>",
            "unipartite": str(tmp_path / "unipartite.csv"),
        },
    }
    (tmp_path / "config.json").write_text(json.dumps(config), encoding="utf-8")
    return tmp_path
