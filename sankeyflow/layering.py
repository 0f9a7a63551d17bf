"""Node layering module.

Assigns every node a depth usable as a layout column index, using a
breadth-first topological ordering (Kahn's algorithm in waves) over the
aggregated links. Also derives node throughput for consumers that want
it precomputed.
"""

from collections import deque

from sankeyflow.schema import FlowLink, FlowNode


def calculate_node_depths(nodes: list[FlowNode], links: list[FlowLink]) -> list[FlowNode]:
    """Assign a depth to every node.

    Nodes with no incoming links form wave 0. Each wave is drained in
    enqueue order; for every outgoing link of a dequeued node the
    target's in-degree is decremented, and targets reaching zero join
    the next wave. For every link s->t on an acyclic path,
    depth(t) >= depth(s) + 1.

    Nodes that never reach in-degree zero (cycle members, self-loops and
    anything only reachable through them) get a fallback depth of the
    maximum assigned depth + 1, or 0 when no node was assigned.

    Links whose source or target is not in ``nodes`` are ignored.

    Args:
        nodes: Nodes of the graph. Not modified.
        links: Aggregated links of the graph.

    Returns:
        New FlowNode instances in the same order as ``nodes``, each with
        a non-negative integer depth.
    """
    names = [node.name for node in nodes]
    known = set(names)

    in_degree: dict[str, int] = dict.fromkeys(names, 0)
    outgoing: dict[str, list[str]] = {name: [] for name in names}

    for link in links:
        if link.source not in known or link.target not in known:
            continue
        in_degree[link.target] += 1
        outgoing[link.source].append(link.target)

    depths: dict[str, int] = {}
    queue = deque(name for name in names if in_degree[name] == 0)
    current_depth = 0

    while queue:
        for _ in range(len(queue)):
            name = queue.popleft()
            if name in depths:
                continue
            depths[name] = current_depth

            for target in outgoing[name]:
                in_degree[target] -= 1
                if in_degree[target] == 0 and target not in depths:
                    queue.append(target)

        current_depth += 1

    fallback = max(depths.values()) + 1 if depths else 0

    return [
        node.model_copy(update={"depth": depths.get(node.name, fallback)})
        for node in nodes
    ]


def compute_node_values(nodes: list[FlowNode], links: list[FlowLink]) -> list[FlowNode]:
    """Set each node's value to max(total inflow, total outflow).

    Links referencing unknown nodes are ignored. Isolated nodes get 0.

    Args:
        nodes: Nodes of the graph. Not modified.
        links: Aggregated links of the graph.

    Returns:
        New FlowNode instances in the same order as ``nodes``.
    """
    known = {node.name for node in nodes}
    inflow: dict[str, float] = {}
    outflow: dict[str, float] = {}

    for link in links:
        if link.source not in known or link.target not in known:
            continue
        outflow[link.source] = outflow.get(link.source, 0.0) + link.value
        inflow[link.target] = inflow.get(link.target, 0.0) + link.value

    return [
        node.model_copy(update={
            "value": max(inflow.get(node.name, 0.0), outflow.get(node.name, 0.0)),
        })
        for node in nodes
    ]
