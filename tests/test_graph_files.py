import json

import networkx as nx
import pytest

import check_mst
import create_graph_files
import prims_implementation
from create_graph_files import (
    create_random_graph,
    load_graph_metadata,
    write_graph_metadata,
)
from create_simple_test import create_example_test, create_simple_test
from mst_graph import Graph, GraphFileError, UnknownVertexError, total_weight
from prims_implementation import prims


def write_metadata(graph_dir, metadata):
    graph_dir.mkdir(parents=True, exist_ok=True)
    (graph_dir / "graph_metadata.json").write_text(json.dumps(metadata))
    return str(graph_dir)


def test_create_random_graph_is_connected_and_weighted():
    G = create_random_graph(num_nodes=8, edge_probability=0.3, seed=7)

    assert G.number_of_nodes() == 8
    assert nx.is_connected(G)
    assert all(1 <= d["weight"] <= 10 for _, _, d in G.edges(data=True))


def test_write_then_load_keeps_order_and_reverse_pairs(example_graph, tmp_path):
    write_graph_metadata(example_graph, str(tmp_path))

    metadata = json.loads((tmp_path / "graph_metadata.json").read_text())
    assert metadata["directed"] is True
    assert metadata["num_nodes"] == 7
    assert metadata["num_edges"] == 24

    loaded = load_graph_metadata(str(tmp_path))
    assert loaded.vertices == example_graph.vertices
    assert loaded.edges == example_graph.edges


def test_load_undirected_metadata(tmp_path):
    # Plain format: integer ids, undirected triples, no vertex list
    graph_dir = write_metadata(
        tmp_path / "plain",
        {"num_nodes": 4, "num_edges": 2, "edges": [[0, 1, 1], [0, 2, 2]]},
    )

    graph = load_graph_metadata(graph_dir)

    assert graph.vertices == ["0", "1", "2", "3"]
    assert graph.number_of_edges() == 4
    assert graph.edges_from("3") == []
    first = graph.edges[0]
    assert graph.reverse_edge(first).source == "1"


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_graph_metadata(str(tmp_path / "nowhere"))


def test_load_invalid_json(tmp_path):
    (tmp_path / "graph_metadata.json").write_text("{not json")

    with pytest.raises(GraphFileError):
        load_graph_metadata(str(tmp_path))


def test_load_missing_edges_field(tmp_path):
    graph_dir = write_metadata(tmp_path, {"num_nodes": 2})

    with pytest.raises(GraphFileError):
        load_graph_metadata(graph_dir)


def test_load_bad_edge_row(tmp_path):
    graph_dir = write_metadata(
        tmp_path, {"num_nodes": 2, "edges": [[0, 1, "heavy"]]}
    )

    with pytest.raises(GraphFileError):
        load_graph_metadata(graph_dir)


def test_load_edge_to_unknown_vertex(tmp_path):
    graph_dir = write_metadata(tmp_path, {"num_nodes": 2, "edges": [[0, 5, 1]]})

    with pytest.raises(UnknownVertexError):
        load_graph_metadata(graph_dir)


def test_simple_test_graph(tmp_path):
    graph_dir = create_simple_test(str(tmp_path / "simple"))

    mst_edges = prims(load_graph_metadata(graph_dir))

    assert [(e.source, e.sink) for e in mst_edges] == [("0", "1"), ("0", "2")]
    assert total_weight(mst_edges) == 3


def test_example_test_graph(example_graph, tmp_path):
    graph_dir = create_example_test(str(tmp_path / "example"))

    assert prims(load_graph_metadata(graph_dir)) == prims(example_graph)


def test_check_mst_passes_for_prims(example_graph, capsys):
    checks = check_mst.check_mst(example_graph, prims(example_graph))

    assert checks == {
        "tree_size": True,
        "spanning": True,
        "acyclic": True,
        "optimal": True,
    }
    assert "Total weight: 22" in capsys.readouterr().out


def test_check_mst_flags_heavier_tree(example_graph):
    heavier = [e for e in prims(example_graph) if e.sink != "c"]
    heavier.append(example_graph.edges_from("b")[1])  # b -> c (9)

    checks = check_mst.check_mst(example_graph, heavier)

    assert checks["tree_size"]
    assert checks["spanning"]
    assert checks["acyclic"]
    assert not checks["optimal"]


def test_check_mst_seed_component_only(two_component_graph):
    checks = check_mst.check_mst(two_component_graph, prims(two_component_graph))

    assert all(checks.values())


def test_reference_mst_restricted_to_vertices(two_component_graph):
    mst = check_mst.reference_mst(two_component_graph, {"x", "y"})

    assert set(mst.nodes()) == {"x", "y"}
    assert mst.number_of_edges() == 1
    assert mst.has_edge("x", "y")


def test_prims_main_on_example_graph(tmp_path, capsys):
    output = tmp_path / "results.json"

    results = prims_implementation.main(["--output", str(output)])

    assert len(results) == 1
    assert results[0]["mst_weight"] == 22
    assert results[0]["is_correct"]
    assert json.loads(output.read_text())[0]["edges_found"] == 6
    assert "✓ PASS" in capsys.readouterr().out


def test_prims_main_on_graph_dir(tmp_path):
    graph_dir = create_simple_test(str(tmp_path / "simple"))

    results = prims_implementation.main(
        ["--graph-dir", graph_dir, "--visualize", str(tmp_path / "plots")]
    )

    assert results[0]["mst_weight"] == 3
    assert (tmp_path / "plots" / "prims_mst_exp1.png").exists()


def test_prims_main_experiments():
    results = prims_implementation.main(["--experiments"])

    assert len(results) == len(prims_implementation.GRAPH_CONFIGS)
    assert all(result["is_correct"] for result in results)


def test_prims_main_missing_graph_dir(tmp_path, capsys):
    with pytest.raises(SystemExit) as exc_info:
        prims_implementation.main(["--graph-dir", str(tmp_path / "nowhere")])

    assert exc_info.value.code == 1
    assert "ERROR:" in capsys.readouterr().out


def test_create_graph_files_main(tmp_path):
    output_dir = str(tmp_path / "graph_data")

    create_graph_files.main(["--nodes", "5", "--seed", "3", "--output-dir", output_dir])

    graph = load_graph_metadata(output_dir)
    assert graph.number_of_vertices() == 5
    assert (tmp_path / "graph_data" / "input_graph.png").exists()


def test_check_mst_main(tmp_path):
    graph_dir = create_example_test(str(tmp_path / "example"))

    checks = check_mst.main(["--graph-dir", graph_dir])

    assert all(checks.values())


def test_check_mst_main_missing_graph_dir(tmp_path):
    with pytest.raises(SystemExit) as exc_info:
        check_mst.main(["--graph-dir", str(tmp_path / "nowhere")])

    assert exc_info.value.code == 1


def test_check_mst_on_directed_graph():
    g = Graph()
    for vertex in ["a", "b", "c"]:
        g.add_vertex(vertex)
    g.add_edge("a", "b", 1)
    g.add_edge("c", "a", 1)

    checks = check_mst.check_mst(g, prims(g))

    assert all(checks.values())


def test_check_mst_heavy_first_edge():
    g = Graph()
    for vertex in ["a", "b", "c"]:
        g.add_vertex(vertex)
    g.add_undirected_edge("a", "b", 100)
    g.add_undirected_edge("a", "c", 1)
    g.add_undirected_edge("b", "c", 1)

    checks = check_mst.check_mst(g, prims(g))

    assert checks["optimal"]
