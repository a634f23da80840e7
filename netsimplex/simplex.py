"""Network simplex method for the minimum-cost flow problem.

The solver uses a big-M start: an artificial root (node 0) is linked to
every node by an expensive artificial arc, and a candidate-list pivot rule
picks entering arcs.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .graph import Arc, ArcKind, Graph

ARTIFICIAL_COST = 1e10


class InfeasibleError(ValueError):
    """Raised when no flow meets every supply and demand within capacities."""


@dataclass(frozen=True)
class FlowSolution:
    """An optimal flow: total cost, flow on every original arc, node potentials."""

    cost: float
    flows: dict[Arc, float]
    potentials: tuple[float, ...]


@dataclass
class SpanningTree:
    """A basic solution: tree arcs, arcs at lower and upper bound, and flows."""

    n_nodes: int = 0
    root: int = 0
    tree_arcs: set[Arc] = field(default_factory=set)
    lower: set[Arc] = field(default_factory=set)
    upper: set[Arc] = field(default_factory=set)
    flow: dict[Arc, float] = field(default_factory=dict)
    phi: list[float] = field(default_factory=list)
    pred: list[int] = field(default_factory=list)
    depth: list[int] = field(default_factory=list)
    thread: list[int] = field(default_factory=list)
    eligibles: list[Arc] = field(default_factory=list)
    last_checked: Arc = Arc(0, 0)

    def initialize(self, graph: Graph) -> None:
        """Build the starting basis, adding artificial arcs to ``graph``."""
        n = graph.n_nodes
        self.n_nodes = n
        self.root = 0
        self.tree_arcs = set()
        self.upper = set()
        self.flow = {}
        self.phi = [0.0] * (n + 1)
        self.eligibles = []

        for node in range(1, n + 1):
            supply = graph.supplies[node]
            arc = Arc(node, 0) if supply >= 0 else Arc(0, node)
            self.tree_arcs.add(arc)
            if arc not in graph.kinds:
                graph.kinds[arc] = ArcKind.ARTIFICIAL
                graph.costs[arc] = ARTIFICIAL_COST
                graph.capacities[arc] = abs(supply)

        self.lower = {arc for arc, kind in graph.kinds.items() if kind is ArcKind.ORIGINAL}

        self.make_tree_struct()
        self.compute_flow(graph)
        self.compute_phi(graph)
        self.last_checked = Arc(0, 0)

    def make_tree_struct(self) -> None:
        """Recompute predecessor, depth and thread indices from the tree arcs."""
        n = self.n_nodes
        self.root = 0
        adjacency: dict[int, set[int]] = {node: set() for node in range(n + 1)}
        for i, j in self.tree_arcs:
            adjacency[i].add(j)
            adjacency[j].add(i)

        self.pred = [-1] * (n + 1)
        self.depth = [0] * (n + 1)
        marked = {self.root}
        order = [self.root]
        stack = [self.root]
        while stack:
            top = stack[-1]
            nxt = min((p for p in adjacency[top] if p not in marked), default=None)
            if nxt is None:
                stack.pop()
                continue
            marked.add(nxt)
            order.append(nxt)
            self.pred[nxt] = top
            self.depth[nxt] = self.depth[top] + 1
            stack.append(nxt)

        self.thread = [0] * (n + 1)
        for current, following in zip(order, order[1:]):
            self.thread[current] = following
        self.thread[order[-1]] = self.root

    def compute_phi(self, graph: Graph) -> None:
        """Set node potentials so that every tree arc has zero reduced cost."""
        self.phi[self.root] = 0.0
        node = self.thread[self.root]
        while node != self.root:
            parent = self.pred[node]
            if (parent, node) in self.tree_arcs:
                self.phi[node] = self.phi[parent] - graph.costs[Arc(parent, node)]
            if (node, parent) in self.tree_arcs:
                self.phi[node] = self.phi[parent] + graph.costs[Arc(node, parent)]
            node = self.thread[node]

    def reduced_cost(self, graph: Graph, i: int, j: int) -> float:
        """Reduced cost of arc ``i -> j`` under the current potentials."""
        return graph.costs[Arc(i, j)] - self.phi[i] + self.phi[j]

    def compute_flow(self, graph: Graph) -> None:
        """Derive tree-arc flows from supplies and the arcs at their bounds."""
        balance = list(graph.supplies)
        order = [self.root]
        for _ in range(self.n_nodes):
            order.append(self.thread[order[-1]])

        for arc in sorted(self.upper):
            capacity = graph.capacities[arc]
            self.flow[arc] = capacity
            balance[arc.i] -= capacity
            balance[arc.j] += capacity
        for arc in self.lower:
            self.flow[arc] = 0.0

        for node in reversed(order):
            if node == self.root:
                break
            parent = self.pred[node]
            if (parent, node) in self.tree_arcs:
                self.flow[Arc(parent, node)] = -balance[node]
            elif (node, parent) in self.tree_arcs:
                self.flow[Arc(node, parent)] = balance[node]
            balance[parent] += balance[node]

    def _is_eligible(self, graph: Graph, i: int, j: int) -> bool:
        rc = self.reduced_cost(graph, i, j)
        arc = Arc(i, j)
        return (rc > 0 and arc in self.upper) or (rc < 0 and arc in self.lower)

    def check_optimality(self, graph: Graph, n_major: int) -> bool:
        """Refill the candidate list; return True when no arc can improve."""
        n = self.n_nodes
        scanned = 0
        while scanned < graph.n_arcs and len(self.eligibles) < n_major:
            if self.last_checked == (n, n):
                self.last_checked = Arc(0, 0)
            start_i, start_j = self.last_checked
            last = self.last_checked
            for i in range(start_i, n + 1):
                for j in range(start_j, n + 1):
                    if len(self.eligibles) >= n_major:
                        break
                    if (i, j) in graph.kinds:
                        scanned += 1
                        if self._is_eligible(graph, i, j):
                            arc = Arc(i, j)
                            if arc not in self.eligibles:
                                self.eligibles.append(arc)
                    last = Arc(i, j)
                if len(self.eligibles) >= n_major:
                    break
            self.last_checked = last
        return not self.eligibles

    def entering_arc(self, graph: Graph) -> Arc | None:
        """Drop stale candidates and take the one with the largest |reduced cost|."""
        best: Arc | None = None
        best_value = 0.0
        kept: list[Arc] = []
        for arc in self.eligibles:
            rc = self.reduced_cost(graph, arc.i, arc.j)
            if (rc >= 0 and arc in self.lower) or (rc <= 0 and arc in self.upper):
                continue
            kept.append(arc)
            if abs(rc) > best_value:
                best_value = abs(rc)
                best = arc
        if best is not None:
            kept.remove(best)
        self.eligibles = kept
        return best

    def _tree_arc(self, a: int, b: int) -> Arc:
        return Arc(a, b) if (a, b) in self.tree_arcs else Arc(b, a)

    def _push(self, tail: int, head: int, amount: float) -> None:
        """Send ``amount`` along the tree edge between the nodes, from tail to head."""
        if (tail, head) in self.tree_arcs:
            arc = Arc(tail, head)
            self.flow[arc] = self.flow.get(arc, 0.0) + amount
        if (head, tail) in self.tree_arcs:
            arc = Arc(head, tail)
            self.flow[arc] = self.flow.get(arc, 0.0) - amount

    def leaving_arc(self, graph: Graph, entering: Arc) -> Arc:
        """Push flow around the cycle closed by ``entering``; return the blocking arc."""
        increasing = entering in self.lower
        current = self.flow.get(entering, 0.0)
        min_delta = graph.capacities[entering] if increasing else current

        i, j = entering
        while i != j:
            step_i = self.depth[i] >= self.depth[j]
            step_j = self.depth[j] >= self.depth[i]
            if step_i:
                min_delta = min(min_delta, self.compute_delta(graph, entering, self.pred[i], i))
                i = self.pred[i]
            if step_j:
                min_delta = min(min_delta, self.compute_delta(graph, entering, j, self.pred[j]))
                j = self.pred[j]
        apex = i

        amount = min_delta if increasing else -min_delta
        self.flow[entering] = current + amount

        first_blocking: Arc | None = None
        node = entering.i
        while node != apex:
            parent = self.pred[node]
            if first_blocking is None and min_delta == self.compute_delta(
                graph, entering, parent, node
            ):
                first_blocking = self._tree_arc(parent, node)
            self._push(parent, node, amount)
            node = parent

        last_blocking: Arc | None = None
        node = entering.j
        while node != apex:
            parent = self.pred[node]
            if min_delta == self.compute_delta(graph, entering, node, parent):
                last_blocking = self._tree_arc(node, parent)
            self._push(node, parent, amount)
            node = parent

        return last_blocking or first_blocking or entering

    def compute_delta(self, graph: Graph, entering: Arc, i: int, j: int) -> float:
        """How much flow the tree edge between ``i`` and ``j`` can carry from i to j."""
        increasing = entering in self.lower
        forward, backward = Arc(i, j), Arc(j, i)
        if increasing:
            if forward in self.tree_arcs:
                return graph.capacities[forward] - self.flow.get(forward, 0.0)
            if backward in self.tree_arcs:
                return self.flow.get(backward, 0.0)
        else:
            if forward in self.tree_arcs:
                return self.flow.get(forward, 0.0)
            if backward in self.tree_arcs:
                return graph.capacities[backward] - self.flow.get(backward, 0.0)
        return float("inf")


def update_tree(tree: SpanningTree, graph: Graph, entering: Arc, leaving: Arc) -> None:
    """Exchange ``leaving`` for ``entering`` in the basis and update potentials."""
    if entering == leaving:
        value = tree.flow.get(leaving, 0.0)
        if entering in tree.lower:
            if value > 0:
                tree.lower.discard(leaving)
                tree.upper.add(leaving)
        elif entering in tree.upper:
            if value == 0:
                tree.lower.add(leaving)
                tree.upper.discard(leaving)
        return

    tree.tree_arcs.discard(leaving)
    tree.tree_arcs.add(entering)
    if entering in tree.upper:
        tree.upper.discard(entering)
    elif entering in tree.lower:
        tree.lower.discard(entering)

    value = tree.flow.get(leaving, 0.0)
    if value == 0:
        tree.lower.add(leaving)
    elif value == graph.capacities[leaving]:
        tree.upper.add(leaving)

    subtree = leaving.j if tree.depth[leaving.i] < tree.depth[leaving.j] else leaving.i
    rc = tree.reduced_cost(graph, entering.i, entering.j)
    node = entering.i
    while node not in (tree.root, subtree):
        node = tree.pred[node]
    change = rc if node == subtree else -rc

    tree.phi[subtree] += change
    node = tree.thread[subtree]
    while tree.depth[node] > tree.depth[subtree]:
        tree.phi[node] += change
        node = tree.thread[node]

    tree.make_tree_struct()


def network_simplex(graph: Graph, n_major: int, n_minor: int) -> FlowSolution:
    """Solve the minimum-cost flow problem on ``graph``.

    ``n_major`` bounds the candidate list size and ``n_minor`` the pivots
    made from one candidate list. The input graph is left unchanged.
    """
    if n_major < 1 or n_minor < 1:
        raise ValueError("n_major and n_minor must both be at least 1")

    work = graph.copy()
    tree = SpanningTree()
    tree.initialize(work)

    optimal = False
    while not optimal:
        optimal = tree.check_optimality(work, n_major)
        for _ in range(n_minor):
            entering = tree.entering_arc(work)
            if entering is None:
                break
            leaving = tree.leaving_arc(work, entering)
            update_tree(tree, work, entering, leaving)
            if not tree.eligibles:
                break

    cost = sum(value * work.costs[arc] for arc, value in sorted(tree.flow.items()))
    if any(value > 0 and not work.is_original(*arc) for arc, value in tree.flow.items()):
        raise InfeasibleError("no flow satisfies the supplies within the arc capacities")

    flows = {arc: tree.flow.get(arc, 0.0) for arc in graph.original_arcs()}
    return FlowSolution(cost=cost, flows=flows, potentials=tuple(tree.phi))