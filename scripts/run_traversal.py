#!/usr/bin/env python3
"""Print a DFS/BFS visitation order for a small graph, without the server.

Examples:
  python scripts/run_traversal.py --nodes 4 \
    --edge 0 1 --edge 0 2 --edge 1 3 --kind dfs --start 0
  # DFS: 0 -> 1 -> 3 -> 2

  python scripts/run_traversal.py --nodes 4 \
    --edge 0 1 --edge 0 2 --edge 1 3 --kind bfs --start 0
  # BFS: 0 -> 1 -> 2 -> 3
"""

from __future__ import annotations

import argparse
import sys

from graphwalk.errors import InvalidEdgeEndpointError
from graphwalk.models.traversal import TraversalKind
from graphwalk.services.graph_store import GraphStore
from graphwalk.services.traversal import run_traversal


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Graph traversal order")
    parser.add_argument("--nodes", type=int, required=True, help="Number of nodes (ids 0..N-1)")
    parser.add_argument(
        "--edge",
        nargs="+",
        action="append",
        default=[],
        metavar="U V [WEIGHT]",
        help="Undirected edge; repeat for more edges",
    )
    parser.add_argument("--kind", choices=[k.value for k in TraversalKind], default="dfs")
    parser.add_argument("--start", default="0")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)

    store = GraphStore()
    for _ in range(args.nodes):
        store.add_node()

    for spec in args.edge:
        if len(spec) not in (2, 3):
            print(f"FAIL: --edge takes U V [WEIGHT], got {' '.join(spec)}")
            return 2
        u, v, *rest = spec
        try:
            store.add_edge(u, v, rest[0] if rest else "1")
        except InvalidEdgeEndpointError as exc:
            print(f"FAIL: edge {u} -- {v}: {exc}")
            return 1

    result = run_traversal(TraversalKind(args.kind), args.start, store.nodes, store.edges)
    print(result.log)
    return 0


if __name__ == "__main__":
    sys.exit(main())
