"""
Graph utilities for task relationships.
Edge index: flat task_rels rows -> adjacency (parent -> children, child -> parents).
Shared by the flow chart builder and the store's connected-task discovery.
"""

import re
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

import networkx as nx
from loguru import logger
from pydantic import ValidationError

from flowchart.models import RawTaskRecord, RelationshipEdge, RelationshipKind

_DIGITS = re.compile(r"(\d+)")


def natural_id_key(task_id: str) -> Tuple:
    """Sort key: 't2' < 't10', '9' < '10'. Digit runs compare as ints."""
    parts = _DIGITS.split(task_id or "")
    return tuple(int(p) if i % 2 else p for i, p in enumerate(parts))


def _coerce(model, item: Union[Dict[str, Any], Any]):
    if isinstance(item, model):
        return item
    if not isinstance(item, dict):
        return None
    try:
        return model.model_validate(item)
    except ValidationError as e:
        logger.debug("Skipping malformed {}: {}", model.__name__, e.errors()[0].get("msg"))
        return None


def edge_endpoints(edge: RelationshipEdge) -> Tuple[str, str]:
    """Return (parent_id, child_id) for a relationship row."""
    if edge.kind == RelationshipKind.PARENT:
        return edge.source_task_id, edge.target_task_id
    return edge.target_task_id, edge.source_task_id


def build_relationship_graph(
    records: Iterable[RawTaskRecord],
    edges: Iterable[RelationshipEdge],
) -> nx.DiGraph:
    """
    Build parent -> child graph. Nodes are record ids; edges touching unknown ids
    and self references are dropped. Successor/predecessor order follows edge arrival.
    """
    G = nx.DiGraph()
    for rec in records:
        G.add_node(rec.id)
    for edge in edges:
        parent_id, child_id = edge_endpoints(edge)
        if parent_id not in G or child_id not in G:
            logger.debug("Ignoring relationship {} -> {}: unknown task", parent_id, child_id)
            continue
        if parent_id == child_id:
            logger.debug("Ignoring self relationship on {}", parent_id)
            continue
        G.add_edge(parent_id, child_id)
    return G


def build_edge_index(
    tasks: Optional[Iterable[Any]],
    relationships: Optional[Iterable[Any]],
) -> Dict[str, RawTaskRecord]:
    """
    Edge index: id -> RawTaskRecord with childIds/parentIds populated.
    Accepts models or raw dicts. Malformed input degrades to a smaller graph, never raises.
    Duplicate ids: last record wins.
    """
    by_id: Dict[str, RawTaskRecord] = {}
    for item in tasks or []:
        rec = _coerce(RawTaskRecord, item)
        if rec is None or not rec.id:
            continue
        by_id[rec.id] = rec.model_copy(update={"child_ids": [], "parent_ids": []})

    edges: List[RelationshipEdge] = []
    for item in relationships or []:
        edge = _coerce(RelationshipEdge, item)
        if edge is not None:
            edges.append(edge)

    G = build_relationship_graph(by_id.values(), edges)
    for tid, rec in by_id.items():
        rec.child_ids = list(G.successors(tid))
        rec.parent_ids = list(G.predecessors(tid))
    return by_id


def connected_task_ids(
    start_id: str,
    neighbours: Dict[str, List[str]],
    limit: int = 50,
) -> List[str]:
    """
    Breadth-first walk over undirected task links from start_id.
    Stops expanding once `limit` ids are known. Result keeps discovery order.
    """
    found = [start_id]
    seen = {start_id}
    queue = [start_id]
    while queue and len(seen) < limit:
        current = queue.pop(0)
        for other in neighbours.get(current, []):
            if other in seen:
                continue
            seen.add(other)
            found.append(other)
            queue.append(other)
    return found
