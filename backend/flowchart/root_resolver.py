"""Root resolver: climb parent links from the focus task to its topmost ancestor."""

from typing import Dict, Optional

from loguru import logger

from shared.graph import natural_id_key

from .config import DEFAULT_CONFIG, FlowChartConfig, ParentPolicy
from .models import RawTaskRecord


def pick_parent(record: RawTaskRecord, policy: ParentPolicy) -> Optional[str]:
    """Parent to climb through. None when the record has no parents."""
    if not record.parent_ids:
        return None
    if policy == ParentPolicy.FIRST_RECORDED:
        return record.parent_ids[0]
    return min(record.parent_ids, key=natural_id_key)


def resolve_root(
    index: Dict[str, RawTaskRecord],
    focus_id: str,
    config: FlowChartConfig = DEFAULT_CONFIG,
) -> str:
    """
    Walk parent-of-parent links from focus_id. Stops at a task with no parents,
    after max_ascent steps, or on an upward cycle; returns the last task reached.
    A focus id missing from the index is returned unchanged.
    """
    current = focus_id
    visited = {current}
    steps = 0
    while True:
        record = index.get(current)
        if record is None:
            return current
        parent_id = pick_parent(record, config.parent_policy)
        if parent_id is None:
            return current
        if steps >= config.max_ascent:
            logger.warning("Max ascent ({}) reached resolving root for {}, using {}", config.max_ascent, focus_id, current)
            return current
        if parent_id in visited:
            logger.warning("Circular parent chain at {} resolving root for {}, using {}", parent_id, focus_id, current)
            return current
        visited.add(parent_id)
        current = parent_id
        steps += 1
