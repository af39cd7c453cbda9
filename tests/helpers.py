"""Builders for flow chart wire records."""


def task(tid, status="To Do", **extra):
    return {"id": tid, "ticket": f"T-{tid}", "title": f"Task {tid}", "status": status, "projectId": "proj1", **extra}


def parent_of(parent, child, rid=None):
    return {"id": rid or f"{parent}-{child}", "taskId": parent, "relationship": "parent", "relatedTaskId": child}


def child_of(child, parent, rid=None):
    return {"id": rid or f"{child}-{parent}", "taskId": child, "relationship": "child", "relatedTaskId": parent}


def chain(n, prefix="n"):
    """n tasks linked top to bottom: n0 -> n1 -> ... -> n{n-1}."""
    tasks = [task(f"{prefix}{i}") for i in range(n)]
    rels = [parent_of(f"{prefix}{i}", f"{prefix}{i + 1}") for i in range(n - 1)]
    return tasks, rels


def sibling_overlaps(node, width_of, tol=1e-6):
    """Pairs of adjacent siblings (anywhere under node) whose subtree extents overlap."""
    bad = []
    for left, right in zip(node.children, node.children[1:]):
        if left.x + width_of(left) / 2 > right.x - width_of(right) / 2 + tol:
            bad.append((left.id, right.id))
    for child in node.children:
        bad.extend(sibling_overlaps(child, width_of, tol))
    return bad
