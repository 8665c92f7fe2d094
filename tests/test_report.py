import json

from msdijkstra import export_spt_json, format_spt, shortest_paths, spt_to_dict


def test_format_table_rows(tiny_graph_isolated):
    res = shortest_paths(tiny_graph_isolated, [0])
    lines = format_spt(tiny_graph_isolated, res).splitlines()
    assert lines[0].split() == ["Vertex", "Edge", "Edge", "Weight", "Total", "Weight"]
    assert lines[1] == ""
    assert lines[2].split() == ["0", "Source", "0.0", "0.0"]
    assert lines[3].split() == ["1", "0->1", "2.0", "2.0"]
    assert lines[4].split() == ["2", "1->2", "1.0", "3.0"]
    assert lines[5].split() == ["3", "2->3", "1.0", "4.0"]
    assert lines[6].split() == ["4", "-", "-", "inf"]


def test_format_marks_every_source(tiny_graph):
    res = shortest_paths(tiny_graph, [0, 2])
    rows = [line.split() for line in format_spt(tiny_graph, res).splitlines()[2:]]
    assert [r[1] for r in rows] == ["Source", "0->1", "Source", "2->3"]


def test_json_export(tiny_graph_isolated):
    res = shortest_paths(tiny_graph_isolated, [0])
    data = json.loads(export_spt_json(tiny_graph_isolated, res))
    assert data == spt_to_dict(tiny_graph_isolated, res)
    assert data["sources"] == [0]
    assert data["nodes"][0] == {"id": 0, "source": True, "distance": 0.0, "predecessor": None}
    assert data["nodes"][4]["distance"] is None
    assert data["edges"] == [
        {"source": 0, "target": 1, "weight": 2.0},
        {"source": 1, "target": 2, "weight": 1.0},
        {"source": 2, "target": 3, "weight": 1.0},
    ]
