# netsimplex

A small minimum-cost flow solver built on the network simplex method.

Nodes are numbered `1..n`; node `0` is reserved as the artificial root that
the solver attaches to every node, with an expensive artificial arc, while
building its starting spanning tree. A positive supply marks a source and a
negative supply marks a demand.

The solver uses a candidate-list pivot rule: each major iteration collects up
to `n_major` eligible arcs, and up to `n_minor` pivots are then made from that
list before it is refreshed.

## Installation

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Library use

```python
from netsimplex.graph import Graph
from netsimplex.simplex import network_simplex, InfeasibleError

graph = Graph(4)
graph.add_arc(1, 2, capacity=4, cost=2)
graph.add_arc(1, 3, capacity=2, cost=2)
graph.add_arc(2, 3, capacity=2, cost=1)
graph.add_arc(2, 4, capacity=3, cost=3)
graph.add_arc(3, 4, capacity=5, cost=1)
graph.set_supply(1, 4)
graph.set_supply(4, -4)

try:
    solution = network_simplex(graph, n_major=10, n_minor=10)
except InfeasibleError:
    print("no feasible flow")
else:
    print(solution.cost)
    for (i, j), flow in solution.flows.items():
        print(i, j, flow)
```

### `netsimplex.graph`

- `Graph(n_nodes)` holds arc kinds, capacities and costs keyed by `Arc`, and
  a `supplies` list indexed by node.
- `Graph.add_arc(i, j, capacity, cost)` adds or replaces an arc; nodes must lie
  in `1..n_nodes` and self-loops are rejected with `ValueError`.
- `Graph.set_supply(node, amount)`, `Graph.has_arc(i, j)`,
  `Graph.is_original(i, j)`, `Graph.original_arcs()` (row-major order),
  `Graph.copy()` and the `n_arcs` property.
- `Arc` is a named tuple `(i, j)`; `ArcKind` tells user arcs (`ORIGINAL`)
  from solver-added ones (`ARTIFICIAL`).

### `netsimplex.simplex`

- `network_simplex(graph, n_major, n_minor)` works on a copy, so the given
  graph is left unchanged. It returns a `FlowSolution` with the total `cost`,
  the `flows` on every original arc and the node `potentials`. It raises
  `InfeasibleError` (a `ValueError`) when flow is left on an artificial arc,
  and `ValueError` when `n_major` or `n_minor` is below 1.
- `SpanningTree` keeps the tree arcs, the arcs at lower and upper bound, the
  flows, node potentials and the predecessor, depth and thread indices. Its
  methods (`initialize`, `make_tree_struct`, `compute_flow`, `compute_phi`,
  `reduced_cost`, `check_optimality`, `entering_arc`, `leaving_arc`,
  `compute_delta`) are the individual steps of the method.
- `update_tree(tree, graph, entering, leaving)` applies one pivot to a tree.

## Command line

```
netsimplex
netsimplex --major 5 --minor 3
```

solves a built-in six-node example network (node 1 supplies five units, one
to each other node) and prints `optimal cost: <cost>` followed by one line
`X (i,j) = flow` for every arc of the network, or `Infeasible !!` when no
feasible flow exists. `--major` and `--minor` (both default 10, both at least
1) set the candidate-list size and the pivots per list.

## What it does not do

The command only solves its built-in example; it does not read networks from
files or standard input. Networks of your own are built in Python with
`Graph`.