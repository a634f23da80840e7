import re

import pytest

from netsimplex.cli import build_example_graph, format_solution, main
from netsimplex.graph import Arc, Graph
from netsimplex.simplex import FlowSolution

_LINE = re.compile(r"^X \((\d+),(\d+)\) = (\S+)$")


def _parse(output: str):
    lines = output.strip().splitlines()
    header = lines[0]
    assert header.startswith("optimal cost: ")
    cost = float(header[len("optimal cost: "):])
    flows = {}
    for line in lines[1:]:
        match = _LINE.match(line)
        assert match, line
        flows[Arc(int(match.group(1)), int(match.group(2)))] = float(match.group(3))
    return cost, flows


def test_example_graph_shape():
    graph = build_example_graph()
    assert graph.n_nodes == 6
    assert graph.n_arcs == 9
    assert graph.supplies[1] == 5
    assert sum(graph.supplies) == 0
    assert graph.is_original(5, 4)
    assert not graph.has_arc(4, 5)


def test_example_graph_is_fresh_each_call():
    first = build_example_graph()
    first.set_supply(1, 0)
    second = build_example_graph()
    assert second.supplies[1] == 5


def test_format_solution_lists_original_arcs_in_order():
    graph = Graph(n_nodes=3)
    graph.add_arc(2, 3, 4, 1)
    graph.add_arc(1, 2, 4, 2)
    solution = FlowSolution(
        cost=7.0,
        flows={Arc(1, 2): 2.0, Arc(2, 3): 3.0},
        potentials=(0.0, 0.0, 0.0, 0.0),
    )
    text = format_solution(graph, solution)
    assert text.splitlines() == [
        "optimal cost: 7",
        "X (1,2) = 2",
        "X (2,3) = 3",
    ]


def test_format_solution_missing_flow_is_zero():
    graph = Graph(n_nodes=2)
    graph.add_arc(1, 2, 1, 1)
    solution = FlowSolution(cost=0.0, flows={}, potentials=(0.0, 0.0, 0.0))
    assert format_solution(graph, solution).splitlines()[1] == "X (1,2) = 0"


def test_main_prints_feasible_flow(capsys):
    assert main([]) == 0
    cost, flows = _parse(capsys.readouterr().out)
    graph = build_example_graph()
    assert set(flows) == set(graph.original_arcs())

    for arc, value in flows.items():
        assert 0 <= value <= graph.capacities[arc]

    for node in range(1, graph.n_nodes + 1):
        out = sum(v for a, v in flows.items() if a.i == node)
        into = sum(v for a, v in flows.items() if a.j == node)
        assert out - into == pytest.approx(graph.supplies[node])

    expected = sum(v * graph.costs[a] for a, v in flows.items())
    assert cost == pytest.approx(expected)


def test_main_cost_independent_of_pivot_limits(capsys):
    main([])
    default_cost, _ = _parse(capsys.readouterr().out)
    main(["--major", "1", "--minor", "1"])
    small_cost, _ = _parse(capsys.readouterr().out)
    assert small_cost == pytest.approx(default_cost)


@pytest.mark.parametrize("argv", [["--major", "0"], ["--minor", "-3"], ["--major", "x"]])
def test_main_rejects_bad_limits(argv):
    with pytest.raises(SystemExit) as info:
        main(argv)
    assert info.value.code == 2