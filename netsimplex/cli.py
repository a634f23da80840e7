"""Command-line entry point: solve the bundled example network and print the flow."""

from __future__ import annotations

import argparse
import sys

from .graph import Graph
from .simplex import FlowSolution, InfeasibleError, network_simplex

DEFAULT_MAJOR = 10
DEFAULT_MINOR = 10

_EXAMPLE_ARCS = (
    # (tail, head, capacity, cost)
    (1, 2, 8, 3),
    (1, 3, 3, 2),
    (2, 3, 3, 2),
    (2, 4, 7, 5),
    (3, 5, 3, 4),
    (2, 5, 2, 2),
    (5, 4, 4, 5),
    (4, 6, 5, 3),
    (5, 6, 6, 4),
)

_EXAMPLE_SUPPLIES = {1: 5, 2: -1, 3: -1, 4: -1, 5: -1, 6: -1}


def build_example_graph() -> Graph:
    """The six-node example network: node 1 supplies five units, one to each other node."""
    graph = Graph(n_nodes=6)
    for tail, head, capacity, cost in _EXAMPLE_ARCS:
        graph.add_arc(tail, head, capacity, cost)
    for node, amount in _EXAMPLE_SUPPLIES.items():
        graph.set_supply(node, amount)
    return graph


def format_solution(graph: Graph, solution: FlowSolution) -> str:
    """Render the optimal cost followed by the flow on every original arc."""
    lines = [f"optimal cost: {solution.cost:g}"]
    for arc in graph.original_arcs():
        lines.append(f"X ({arc.i},{arc.j}) = {solution.flows.get(arc, 0.0):g}")
    return "\n".join(lines)


def _positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {value}")
    return value


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="netsimplex",
        description="Solve the example minimum-cost flow problem with the network simplex method.",
    )
    parser.add_argument(
        "--major",
        type=_positive_int,
        default=DEFAULT_MAJOR,
        help="maximum size of the candidate list (default: %(default)s)",
    )
    parser.add_argument(
        "--minor",
        type=_positive_int,
        default=DEFAULT_MINOR,
        help="maximum pivots per candidate list (default: %(default)s)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the solver on the example network and print the result."""
    args = _parser().parse_args(argv)
    graph = build_example_graph()
    try:
        solution = network_simplex(graph, args.major, args.minor)
    except InfeasibleError:
        print("Infeasible !!")
        return 0
    print(format_solution(graph, solution))
    return 0


if __name__ == "__main__":
    sys.exit(main())