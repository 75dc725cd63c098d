#===============================================================================
#  LeaderKey | interchange.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Import/export of the id-free interchange JSON shape
#  ({"type": "group", "actions": [...]}) used for files and the clipboard.
#  Ids are internal: export drops them, import mints fresh ones.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .constants import MAX_IMPORT_DEPTH
from .models import ACTION_TYPES, Action, Group, Node, NodeType, RootConfig
from .tree import generate_id

logger = logging.getLogger(__name__)


class InterchangeError(ValueError):
    """Raised when an interchange payload has the wrong shape."""


@dataclass
class ImportResult:
    ok: bool
    config: Optional[RootConfig] = None
    error: str = ""


def _optional_str(item: Dict[str, Any], name: str, where: str) -> Optional[str]:
    value = item.get(name)
    if value is None:
        return None
    if not isinstance(value, str):
        raise InterchangeError(f"Invalid config: {where}.{name} must be a string")
    return value or None


def _convert_item(item: Any, where: str, depth: int = 0) -> Node:
    if not isinstance(item, dict):
        raise InterchangeError(f"Invalid config: {where} must be an object")

    key = item.get("key")
    if not isinstance(key, str) or len(key) != 1:
        raise InterchangeError(f"Invalid config: {where}.key must be a single character")

    item_type = item.get("type")
    label = _optional_str(item, "label", where)
    browser = _optional_str(item, "browser", where)

    if item_type == NodeType.GROUP.value:
        return Group(
            id=generate_id(),
            key=key,
            label=label,
            actions=_convert_actions(item.get("actions"), where, depth + 1),
            browser=browser,
        )

    if item_type not in ACTION_TYPES:
        raise InterchangeError(f"Invalid config: {where}.type {item_type!r} is not a known type")

    value = item.get("value")
    if not isinstance(value, str):
        raise InterchangeError(f"Invalid config: {where}.value must be a string")
    return Action(id=generate_id(), key=key, type=item_type, label=label, value=value, browser=browser)


def _convert_actions(actions: Any, where: str, depth: int = 0) -> List[Node]:
    if depth > MAX_IMPORT_DEPTH:
        raise InterchangeError(f"Invalid config: {where} is nested deeper than {MAX_IMPORT_DEPTH} groups")
    if not isinstance(actions, list):
        raise InterchangeError(f"Invalid config: {where}.actions must be an array")

    converted: List[Node] = []
    seen = {}
    for i, child in enumerate(actions):
        node = _convert_item(child, f"{where}.actions[{i}]", depth)
        if node.key in seen:
            raise InterchangeError(
                f"Invalid config: {where}.actions[{i}] reuses key {node.key!r} of {where}.actions[{seen[node.key]}]"
            )
        seen[node.key] = i
        converted.append(node)
    return converted


def import_leader_key_config(external: Any) -> RootConfig:
    """Convert an interchange object into a tree with fresh ids.

    Raises InterchangeError naming the offending field.
    """
    if not isinstance(external, dict):
        raise InterchangeError("Invalid JSON: not an object")
    if external.get("type") != NodeType.GROUP.value:
        raise InterchangeError("Invalid config: root must have type 'group'")
    if not isinstance(external.get("actions"), list):
        raise InterchangeError("Invalid config: missing 'actions' array")
    return RootConfig(actions=_convert_actions(external["actions"], "root"))


def _export_item(item: Node) -> Dict[str, Any]:
    result: Dict[str, Any] = {"key": item.key, "type": item.type}
    if item.label:
        result["label"] = item.label
    if isinstance(item, Group):
        result["actions"] = [_export_item(child) for child in item.actions]
    else:
        result["value"] = item.value
    if item.browser:
        result["browser"] = item.browser
    return result


def export_leader_key_config(config: RootConfig) -> Dict[str, Any]:
    return {"type": NodeType.GROUP.value, "actions": [_export_item(item) for item in config.actions]}


def import_config_from_json(json_string: str) -> ImportResult:
    """Parse and validate interchange text. Never raises."""
    try:
        parsed = json.loads(json_string)
    except json.JSONDecodeError as e:
        return ImportResult(False, error=f"Parse error: {e}")
    except RecursionError:
        return ImportResult(False, error="Parse error: nesting too deep")

    try:
        config = import_leader_key_config(parsed)
    except InterchangeError as e:
        logger.warning("Import rejected: %s", e)
        return ImportResult(False, error=str(e))
    except RecursionError:
        logger.warning("Import rejected: groups nested too deeply")
        return ImportResult(False, error="Invalid config: groups nested too deeply")
    return ImportResult(True, config=config)


def export_config_to_json(config: RootConfig) -> str:
    return json.dumps(export_leader_key_config(config), indent=2, ensure_ascii=False)
