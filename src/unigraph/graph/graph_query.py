from __future__ import annotations

from collections import deque
from typing import Deque, Dict, List, Optional

from unigraph.graph.graph_schema import NodeId
from unigraph.graph.graph_store import GraphStore


class GraphQueryEngine:
    """
    Read-only traversal over a GraphStore.

    Traversal ignores edge direction: two nodes are adjacent when any
    edge joins them either way.
    """

    def __init__(self, store: GraphStore) -> None:
        self.store = store

    def find_path(self, start: NodeId, goal: NodeId) -> Optional[List[NodeId]]:
        """
        Shortest path by edge count between two nodes.

        Neighbours are expanded in ascending NodeId order, so among equally
        short paths the result is always the same one.
        """
        if not self.store.has_node(start) or not self.store.has_node(goal):
            return None
        if start == goal:
            return [start]

        parents: Dict[NodeId, NodeId] = {}
        visited = {start}
        frontier: Deque[NodeId] = deque([start])

        while frontier:
            node = frontier.popleft()
            for nbr in sorted(self.store.undirected_neighbors(node)):
                if nbr in visited:
                    continue
                visited.add(nbr)
                parents[nbr] = node
                if nbr == goal:
                    return self._unwind(parents, start, goal)
                frontier.append(nbr)

        return None

    @staticmethod
    def _unwind(
        parents: Dict[NodeId, NodeId],
        start: NodeId,
        goal: NodeId,
    ) -> List[NodeId]:
        path = [goal]
        while path[-1] != start:
            path.append(parents[path[-1]])
        path.reverse()
        return path
