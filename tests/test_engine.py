import io
import json
import math
import random
import warnings

import numpy as np
import pytest

from msdijkstra import (
    ConfigError,
    Digraph,
    EngineConfig,
    InvalidSourceSet,
    ShortestPathEngine,
    StdLogger,
    VertexOutOfRange,
    VertexState,
    dijkstra_reference,
    shortest_paths,
)
from msdijkstra.bench import random_digraph


def test_single_source_scenario(tiny_graph):
    res = shortest_paths(tiny_graph, [0])
    assert res.distances.tolist() == [0.0, 2.0, 3.0, 4.0]
    assert res.predecessors == (None, 0, 1, 2)


def test_multi_source_scenario(tiny_graph):
    res = shortest_paths(tiny_graph, [0, 2])
    assert res.distances.tolist() == [0.0, 2.0, 0.0, 1.0]
    assert res.predecessors == (None, 0, None, 2)


def test_unreachable_vertex(tiny_graph_isolated):
    res = shortest_paths(tiny_graph_isolated, [0])
    assert math.isinf(res.distances[4])
    assert res.predecessor(4) is None
    assert not res.is_reachable(4)
    assert res.reachable() == [0, 1, 2, 3]


def test_sources_have_zero_distance_and_no_predecessor():
    g = Digraph.from_edges(3, [(0, 1, 1.0), (1, 0, 1.0), (1, 2, 1.0)])
    res = shortest_paths(g, [0, 1])
    for s in (0, 1):
        assert res.distance(s) == 0.0
        assert res.predecessor(s) is None
        assert res.is_source(s)
    assert res.predecessor(2) == 1


def test_result_tables_are_read_only(tiny_graph):
    res = shortest_paths(tiny_graph, [0])
    with pytest.raises(ValueError):
        res.distances[1] = 0.0
    assert isinstance(res.predecessors, tuple)


def test_result_accessors(tiny_graph):
    res = shortest_paths(tiny_graph, [0])
    assert res.vertex_count == 4
    assert res.distance(3) == 4.0
    assert isinstance(res.distance(3), float)
    assert res.tree_edges() == [(0, 1), (1, 2), (2, 3)]
    assert res.sources == frozenset({0})
    with pytest.raises(VertexOutOfRange):
        res.distance(4)


def test_duplicate_sources_collapse(tiny_graph):
    res = shortest_paths(tiny_graph, [2, 0, 2])
    assert res.sources == frozenset({0, 2})
    assert res.distances.tolist() == [0.0, 2.0, 0.0, 1.0]


def test_single_int_source(tiny_graph):
    assert shortest_paths(tiny_graph, 0).distances.tolist() == [0.0, 2.0, 3.0, 4.0]


@pytest.mark.parametrize("sources", [[], [4], [-1], [0, 9], ["0"]])
def test_invalid_source_set(tiny_graph, sources):
    with pytest.raises(InvalidSourceSet):
        ShortestPathEngine(tiny_graph, sources)


def test_empty_graph_rejects_any_source():
    with pytest.raises(InvalidSourceSet):
        ShortestPathEngine(Digraph(0, 0, []), [0])


def test_vertex_states_after_run(tiny_graph_isolated):
    engine = ShortestPathEngine(tiny_graph_isolated, [1])
    engine.run()
    assert engine.state == [
        VertexState.UNVISITED,
        VertexState.SETTLED,
        VertexState.SETTLED,
        VertexState.SETTLED,
        VertexState.UNVISITED,
    ]


def test_decrease_key_path_is_taken(tiny_graph):
    engine = ShortestPathEngine(tiny_graph, [0])
    engine.run()
    counters = engine.summary()
    # 2 is queued at 5.0 via 0, then lowered to 3.0 via 1; 3 likewise via 2.
    assert counters["decrease_keys"] == 2
    assert counters["inserts"] == 4
    assert counters["settled"] == 4
    assert counters["edges_relaxed"] == 5


def test_zero_weight_cycle():
    g = Digraph.from_edges(3, [(0, 1, 0.0), (1, 0, 0.0), (1, 2, 0.0)])
    res = shortest_paths(g, [0])
    assert res.distances.tolist() == [0.0, 0.0, 0.0]
    assert res.predecessors == (None, 0, 1)


def test_self_loop_ignored():
    g = Digraph.from_edges(2, [(0, 0, 1.0), (0, 1, 3.0)])
    res = shortest_paths(g, [0])
    assert res.predecessors == (None, 0)


def test_equal_length_paths_keep_first_relaxation():
    g = Digraph.from_edges(4, [(0, 1, 1.0), (0, 2, 1.0), (1, 3, 1.0), (2, 3, 1.0)])
    res = shortest_paths(g, [0])
    assert res.distance(3) == 2.0
    assert res.predecessor(3) == 1


def test_rerun_is_deterministic(tiny_graph):
    engine = ShortestPathEngine(tiny_graph, [0, 2])
    first = engine.run()
    second = engine.run()
    assert np.array_equal(first.distances, second.distances)
    assert first.predecessors == second.predecessors
    assert first.distances is not second.distances


def test_graph_shared_across_engines(tiny_graph):
    a = ShortestPathEngine(tiny_graph, [0]).run()
    b = ShortestPathEngine(tiny_graph, [2]).run()
    assert a.distances.tolist() == [0.0, 2.0, 3.0, 4.0]
    assert b.distances.tolist()[2:] == [0.0, 1.0]
    assert math.isinf(b.distances[0])


def test_default_precision_is_single(tiny_graph):
    res = shortest_paths(tiny_graph, [0])
    assert res.distances.dtype == np.float32


def test_double_precision_config():
    g = Digraph.from_edges(3, [(0, 1, 0.1), (1, 2, 0.2)], dtype="float64")
    res = shortest_paths(g, [0], config=EngineConfig(dtype="float64"))
    assert res.distances.dtype == np.float64
    assert res.distance(2) == 0.1 + 0.2


def test_invalid_config_dtype():
    with pytest.raises(ConfigError):
        EngineConfig(dtype="float16")


def test_metrics_snapshot(tiny_graph):
    engine = ShortestPathEngine(tiny_graph, [0])
    engine.run()
    m = engine.metrics(wall_ms=1.5)
    assert (m.n, m.m, m.sources, m.dtype, m.wall_ms) == (4, 5, 1, "float32", 1.5)
    assert m.counters == engine.summary()


def test_run_and_settle_events_are_logged(tiny_graph):
    stream = io.StringIO()
    logger = StdLogger(level="debug", json_fmt=True, stream=stream)
    ShortestPathEngine(tiny_graph, [0], EngineConfig(log_settles=True), logger).run()
    events = [json.loads(line) for line in stream.getvalue().splitlines()]
    settles = [e for e in events if e["event"] == "settle"]
    assert [e["vertex"] for e in settles] == [0, 1, 2, 3]
    assert settles[-1]["distance"] == 4.0
    run = [e for e in events if e["event"] == "run"]
    assert run and run[0]["settled"] == 4 and run[0]["sources"] == [0]


@pytest.mark.parametrize("seed", range(5))
def test_matches_reference_on_random_graphs(seed):
    g = random_digraph(60, 240, seed, dtype="float64")
    sources = random.Random(seed).sample(range(60), 3)
    res = shortest_paths(g, sources, config=EngineConfig(dtype="float64"))
    ref = dijkstra_reference(g, sources)
    assert np.allclose(res.distances, ref.distances, equal_nan=False)
    assert np.array_equal(np.isinf(res.distances), np.isinf(ref.distances))


@pytest.mark.parametrize("seed", range(5))
def test_predecessors_form_shortest_path_forest(seed):
    g = random_digraph(50, 200, seed, dtype="float64")
    res = shortest_paths(g, [0, 1], config=EngineConfig(dtype="float64"))
    for p, v in res.tree_edges():
        assert res.is_reachable(p)
        assert res.distance(v) == pytest.approx(res.distance(p) + float(g.weight(p, v)))
    for v in range(g.vertex_count):
        if not res.is_reachable(v) or res.is_source(v):
            assert res.predecessor(v) is None


@pytest.mark.parametrize("seed", range(3))
def test_multi_source_is_min_of_single_sources(seed):
    g = random_digraph(40, 120, seed, dtype="float64")
    sources = random.Random(100 + seed).sample(range(40), 4)
    cfg = EngineConfig(dtype="float64")
    combined = shortest_paths(g, sources, config=cfg).distances
    singles = np.vstack([shortest_paths(g, [s], config=cfg).distances for s in sources])
    assert np.allclose(combined, singles.min(axis=0))


@pytest.mark.parametrize("seed", range(5))
def test_single_precision_matches_reference(seed):
    g = random_digraph(60, 240, seed)
    sources = random.Random(seed).sample(range(60), 3)
    res = shortest_paths(g, sources)
    ref = dijkstra_reference(g, sources)
    assert res.distances.dtype == np.float32
    assert np.allclose(res.distances, ref.distances, rtol=1e-5)
    assert np.array_equal(np.isinf(res.distances), np.isinf(ref.distances))


def test_single_precision_overflow_reports_unreachable():
    g = Digraph.from_edges(3, [(0, 1, 3e38), (1, 2, 3e38)])
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", RuntimeWarning)
        res = shortest_paths(g, [0])
    assert res.is_reachable(1)
    assert not res.is_reachable(2)
    assert res.predecessor(2) is None


def test_double_precision_avoids_overflow():
    g = Digraph.from_edges(3, [(0, 1, 3e38), (1, 2, 3e38)], dtype="float64")
    res = shortest_paths(g, [0], config=EngineConfig(dtype="float64"))
    assert res.distance(2) == pytest.approx(6e38)
    assert res.predecessor(2) == 1
