"""
Database Module
File-based storage: db/tasks.json, db/relationships.json, db/settings.json.
Serves flow chart data (connected tasks + their relationships) for a focus task.
Uses orjson for faster JSON parsing, json_repair for damaged files.
"""

import re
from pathlib import Path
from typing import Dict, List, Optional

import aiofiles
import json_repair
import orjson
from loguru import logger
from pydantic import ValidationError

from flowchart.config import FlowChartConfig
from shared.graph import connected_task_ids

DB_DIR = Path(__file__).parent
TASKS_FILE = "tasks.json"
RELATIONSHIPS_FILE = "relationships.json"
SETTINGS_FILE = "settings.json"
MAX_CONNECTED_TASKS = 50


def _validate_task_id(task_id: str) -> None:
    """Reject path traversal and invalid task_id. Letters, digits, underscore and hyphen."""
    if not task_id or not isinstance(task_id, str):
        raise ValueError("task_id must be a non-empty string")
    if not re.fullmatch(r"[a-zA-Z0-9_-]+", task_id):
        raise ValueError("task_id must contain only letters, digits, underscores and hyphens")


async def _read_json_file(filename: str, default):
    """Read DB_DIR/filename. Missing -> default; corrupt -> json_repair, else default."""
    file_path = DB_DIR / filename
    try:
        async with aiofiles.open(file_path, "rb") as f:
            raw = await f.read()
    except FileNotFoundError:
        return default
    try:
        return orjson.loads(raw)
    except orjson.JSONDecodeError as e:
        logger.warning("Invalid JSON in {}: {}, attempting repair", file_path, e)
    data = json_repair.loads(raw.decode("utf-8", errors="replace"))
    if not isinstance(data, type(default)):
        logger.warning("Could not repair {}, using empty data", file_path)
        return default
    return data


async def _write_json_file(filename: str, data) -> dict:
    """Atomic write: write to .tmp then rename to avoid partial/corrupt files on concurrent access."""
    DB_DIR.mkdir(parents=True, exist_ok=True)
    file_path = DB_DIR / filename
    tmp_path = file_path.with_suffix(file_path.suffix + ".tmp")
    content = orjson.dumps(data, option=orjson.OPT_INDENT_2).decode("utf-8")
    async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
        await f.write(content)
    tmp_path.replace(file_path)
    return {"success": True}


async def get_tasks() -> List[Dict]:
    data = await _read_json_file(TASKS_FILE, [])
    return [t for t in data if isinstance(t, dict) and t.get("id")]


async def save_tasks(tasks: List[Dict]) -> dict:
    await _write_json_file(TASKS_FILE, tasks or [])
    return {"success": True, "count": len(tasks or [])}


async def get_relationships() -> List[Dict]:
    data = await _read_json_file(RELATIONSHIPS_FILE, [])
    return [r for r in data if isinstance(r, dict)]


async def save_relationships(relationships: List[Dict]) -> dict:
    await _write_json_file(RELATIONSHIPS_FILE, relationships or [])
    return {"success": True, "count": len(relationships or [])}


async def import_dataset(tasks: List[Dict], relationships: List[Dict]) -> dict:
    """Replace stored tasks and relationships."""
    await save_tasks(tasks)
    await save_relationships(relationships)
    return {"success": True, "tasks": len(tasks or []), "relationships": len(relationships or [])}


async def clear_db() -> dict:
    """Clear DB: remove task and relationship files. Settings are kept."""
    removed = []
    for name in (TASKS_FILE, RELATIONSHIPS_FILE):
        p = DB_DIR / name
        try:
            if p.exists():
                p.unlink()
                removed.append(name)
        except OSError as e:
            logger.warning("Failed to remove {}: {}", p, e)
    return {"success": True, "removed": removed}


async def get_settings() -> dict:
    """Get full settings from db/settings.json."""
    data = await _read_json_file(SETTINGS_FILE, {})
    return data if isinstance(data, dict) else {}


async def save_settings(settings: dict) -> dict:
    """Save settings to db/settings.json. Atomic write to avoid corruption."""
    await _write_json_file(SETTINGS_FILE, settings or {})
    return {"success": True}


def _resolve_config(raw: dict) -> FlowChartConfig:
    """Resolve the flowChart section of settings over the defaults. Invalid values fall back to defaults."""
    section = (raw or {}).get("flowChart")
    if not isinstance(section, dict):
        return FlowChartConfig()
    try:
        return FlowChartConfig.model_validate(section)
    except ValidationError as e:
        logger.warning("Invalid flowChart settings, using defaults: {}", e)
        return FlowChartConfig()


async def get_flow_chart_config() -> FlowChartConfig:
    raw = await get_settings()
    return _resolve_config(raw)


def _key(value) -> Optional[str]:
    """Ids compare as strings, so numeric ids match their string form."""
    if value is None or value == "":
        return None
    return str(value)


def _neighbours(relationships: List[Dict]) -> Dict[str, List[str]]:
    """Undirected task links, both directions, first-seen order."""
    links: Dict[str, List[str]] = {}
    for rel in relationships:
        a, b = _key(rel.get("taskId")), _key(rel.get("relatedTaskId"))
        if not a or not b:
            continue
        for src, dst in ((a, b), (b, a)):
            bucket = links.setdefault(src, [])
            if dst not in bucket:
                bucket.append(dst)
    return links


def _task_payload(task: Dict) -> Dict:
    return {
        "id": _key(task["id"]),
        "ticket": task.get("ticket"),
        "title": task.get("title"),
        "memberId": task.get("memberId"),
        "memberName": task.get("memberName") or "Unknown",
        "memberColor": task.get("memberColor") or "#6366F1",
        "status": task.get("status") or "Unknown",
        "priority": task.get("priority") or "medium",
        "startDate": task.get("startDate"),
        "dueDate": task.get("dueDate"),
        "projectId": task.get("projectId"),
    }


async def get_flow_chart_data(task_id: str) -> Optional[Dict]:
    """
    Flow chart data for a focus task: every task reachable through relationships
    (either direction, capped at MAX_CONNECTED_TASKS) and the relationships among them.
    Returns None when the task does not exist.
    """
    _validate_task_id(task_id)
    tasks = await get_tasks()
    relationships = await get_relationships()
    by_id = {_key(t["id"]): t for t in tasks}
    if task_id not in by_id:
        return None

    ids = connected_task_ids(task_id, _neighbours(relationships), limit=MAX_CONNECTED_TASKS)
    id_set = set(ids)
    logger.debug("Found {} connected tasks for {}", len(ids), task_id)

    rels_out = []
    for rel in relationships:
        a, b = _key(rel.get("taskId")), _key(rel.get("relatedTaskId"))
        if a in id_set and b in id_set and a in by_id and b in by_id:
            rels_out.append({
                "id": rel.get("id"),
                "taskId": a,
                "relationship": rel.get("relationship"),
                "relatedTaskId": b,
                "taskTicket": by_id[a].get("ticket"),
                "relatedTaskTicket": by_id[b].get("ticket"),
            })

    return {
        "rootTaskId": task_id,
        "tasks": [_task_payload(by_id[i]) for i in ids if i in by_id],
        "relationships": rels_out,
    }
