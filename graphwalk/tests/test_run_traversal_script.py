import importlib.util
from pathlib import Path

import pytest

_SCRIPT = Path(__file__).resolve().parents[2] / "scripts" / "run_traversal.py"


@pytest.fixture(scope="module")
def script():
    spec = importlib.util.spec_from_file_location("run_traversal", _SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


_EDGES = ["--edge", "0", "1", "--edge", "0", "2", "--edge", "1", "3", "7"]


@pytest.mark.parametrize(
    "kind, expected",
    [("dfs", "DFS: 0 -> 1 -> 3 -> 2"), ("bfs", "BFS: 0 -> 1 -> 2 -> 3")],
)
def test_prints_order(script, capsys, kind, expected):
    code = script.main(["--nodes", "4", *_EDGES, "--kind", kind, "--start", "0"])

    assert code == 0
    assert capsys.readouterr().out.strip() == expected


def test_rejects_edge_to_missing_node(script, capsys):
    code = script.main(["--nodes", "2", "--edge", "0", "5"])

    assert code == 1
    assert "Both nodes must exist" in capsys.readouterr().out


def test_rejects_malformed_edge(script, capsys):
    code = script.main(["--nodes", "2", "--edge", "0", "1", "2", "3"])

    assert code == 2
    assert capsys.readouterr().out.startswith("FAIL")
