from __future__ import annotations

import logging
from typing import List, Set

from unigraph.graph.graph_errors import DuplicateGraphId
from unigraph.graph.graph_schema import GraphId


class GraphRegistry:
    """
    Set of graph ids known to one process.

    The registry is passed explicitly to whatever creates graphs; it holds
    ids only, never the graphs themselves, so ownership stays with the
    caller.
    """

    def __init__(self) -> None:
        self._ids: Set[GraphId] = set()

    def register(self, graph_id: GraphId) -> None:
        if graph_id in self._ids:
            raise DuplicateGraphId(graph_id)
        self._ids.add(graph_id)
        logging.getLogger("unigraph.registry").debug("registered graph %s", graph_id)

    def release(self, graph_id: GraphId) -> None:
        self._ids.discard(graph_id)

    def ids(self) -> List[GraphId]:
        return sorted(self._ids)

    def __contains__(self, graph_id: object) -> bool:
        return graph_id in self._ids

    def __len__(self) -> int:
        return len(self._ids)
