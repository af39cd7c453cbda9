"""Shared utilities for the flow chart builder, store and API."""

from .graph import build_edge_index, build_relationship_graph, connected_task_ids, natural_id_key

__all__ = ["build_edge_index", "build_relationship_graph", "connected_task_ids", "natural_id_key"]
