#===============================================================================
#  LeaderKey | tree.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Structural operations on the action tree: path resolution, add / update /
#  delete and the sibling key conflict check. Every mutation works on a deep
#  copy and returns a new tree; the input is never touched.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import copy
import dataclasses
import logging
import uuid
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

from .constants import INTERNAL_DEEPLINK_SCHEME
from .models import ACTION_TYPES, Action, Group, Node, NodeType, RootConfig, is_group

logger = logging.getLogger(__name__)

Container = Union[RootConfig, Group]

_ACTION_FIELDS = {"key", "type", "label", "value", "browser"}
_GROUP_FIELDS = {"key", "type", "label", "browser"}

TYPE_ORDER = (
    NodeType.GROUP.value,
    NodeType.APPLICATION.value,
    NodeType.URL.value,
    NodeType.FOLDER.value,
    NodeType.COMMAND.value,
)

TYPE_LABELS = {
    NodeType.GROUP.value: "Groups",
    NodeType.APPLICATION.value: "Applications",
    NodeType.URL.value: "URLs",
    NodeType.FOLDER.value: "Folders",
    NodeType.COMMAND.value: "Commands",
}


@dataclass
class TreeResult:
    """Outcome of a tree mutation. On failure `config` is the untouched input."""
    ok: bool
    config: RootConfig
    error: str = ""


@dataclass(frozen=True)
class KeyConflict:
    has_conflict: bool
    conflict_label: str = ""


def generate_id() -> str:
    return uuid.uuid4().hex


def display_label(node: Node) -> str:
    if node.label:
        return node.label
    if isinstance(node, Group):
        return node.key
    return node.value


def conflict_label(node: Node) -> str:
    if node.label:
        return node.label
    return "a group" if is_group(node) else node.value


# ----------------------------
# Lookup
# ----------------------------
def find_group_by_path(config: Container, path: Sequence[str]) -> Optional[Container]:
    """Walk `path` (ids) from `config`. Every step must land on a group.

    Returns `config` itself for an empty path and None when any id is missing
    or names an action.
    """
    current: Container = config
    for node_id in path:
        child = next((a for a in current.actions if a.id == node_id), None)
        if child is None or not is_group(child):
            return None
        current = child
    return current


def find_item_by_path(config: Container, path: Sequence[str]) -> Optional[Node]:
    if not path:
        return None
    parent = find_group_by_path(config, path[:-1])
    if parent is None:
        return None
    return next((a for a in parent.actions if a.id == path[-1]), None)


def iter_nodes(config: Container) -> Iterator[Tuple[Tuple[str, ...], Node]]:
    """Pre-order walk yielding (id-path, node)."""
    def walk(items: List[Node], prefix: Tuple[str, ...]):
        for item in items:
            item_path = prefix + (item.id,)
            yield item_path, item
            if isinstance(item, Group):
                yield from walk(item.actions, item_path)

    yield from walk(config.actions, ())


def collect_ids(config: Container) -> List[str]:
    return [node.id for _, node in iter_nodes(config)]


def check_key_conflict(group: Container, new_key: str, exclude_id: Optional[str] = None) -> KeyConflict:
    """Check the group's immediate children for `new_key` (case-sensitive).

    Sibling scope only: the same key may repeat in other groups.
    """
    for item in group.actions:
        if exclude_id and item.id == exclude_id:
            continue
        if item.key == new_key:
            return KeyConflict(True, conflict_label(item))
    return KeyConflict(False, "")


def conflict_message(key: str, conflict: KeyConflict) -> str:
    return f'Key "{key}" is already used by "{conflict.conflict_label}"'


# ----------------------------
# Mutations
# ----------------------------
def add_child(config: RootConfig, parent_path: Sequence[str], node: Node) -> TreeResult:
    """Append `node` to the end of the group at `parent_path`."""
    new_config = copy.deepcopy(config)
    parent = find_group_by_path(new_config, parent_path)
    if parent is None:
        return TreeResult(False, config, "Parent group not found")

    conflict = check_key_conflict(parent, node.key)
    if conflict.has_conflict:
        return TreeResult(False, config, conflict_message(node.key, conflict))

    existing_ids = set(collect_ids(new_config))
    incoming = [node.id] + ([n.id for _, n in iter_nodes(node)] if isinstance(node, Group) else [])
    if existing_ids.intersection(incoming) or len(set(incoming)) != len(incoming):
        return TreeResult(False, config, "Duplicate item id")

    parent.actions.append(copy.deepcopy(node))
    return TreeResult(True, new_config)


def _validate_updates(existing: Node, updates: Dict[str, Any]) -> Optional[str]:
    allowed = _GROUP_FIELDS if isinstance(existing, Group) else _ACTION_FIELDS
    unknown = sorted(set(updates) - allowed)
    if unknown:
        return f"Cannot update field(s): {', '.join(unknown)}"

    new_type = updates.get("type", existing.type)
    if isinstance(existing, Group) and new_type != NodeType.GROUP.value:
        return "Cannot change a group into an action"
    if isinstance(existing, Action) and new_type not in ACTION_TYPES:
        return f"Invalid action type: {new_type!r}"

    if "key" in updates and (not isinstance(updates["key"], str) or len(updates["key"]) != 1):
        return "Key must be a single character"
    for name in ("label", "browser"):
        if name in updates and updates[name] is not None and not isinstance(updates[name], str):
            return f"{name.capitalize()} must be text"
    if "value" in updates and not isinstance(updates["value"], str):
        return "Value must be text"
    return None


def update_node(config: RootConfig, path: Sequence[str], updates: Dict[str, Any]) -> TreeResult:
    """Merge `updates` into the node at `path`."""
    if not path:
        return TreeResult(False, config, "Item not found")

    new_config = copy.deepcopy(config)
    parent = find_group_by_path(new_config, path[:-1])
    if parent is None:
        return TreeResult(False, config, "Item not found")

    index = next((i for i, a in enumerate(parent.actions) if a.id == path[-1]), -1)
    if index == -1:
        return TreeResult(False, config, "Item not found")

    existing = parent.actions[index]
    error = _validate_updates(existing, updates)
    if error:
        return TreeResult(False, config, error)

    if "key" in updates and updates["key"] != existing.key:
        conflict = check_key_conflict(parent, updates["key"], exclude_id=existing.id)
        if conflict.has_conflict:
            return TreeResult(False, config, conflict_message(updates["key"], conflict))

    changes = dict(updates)
    if isinstance(existing, Group):
        changes.pop("type", None)
    parent.actions[index] = dataclasses.replace(existing, **copy.deepcopy(changes))
    return TreeResult(True, new_config)


def delete_node(config: RootConfig, path: Sequence[str]) -> TreeResult:
    """Remove the node at `path` together with its whole subtree."""
    if not path:
        return TreeResult(False, config, "Item not found")

    new_config = copy.deepcopy(config)
    parent = find_group_by_path(new_config, path[:-1])
    if parent is None or not any(a.id == path[-1] for a in parent.actions):
        return TreeResult(False, config, "Item not found")

    parent.actions = [a for a in parent.actions if a.id != path[-1]]
    return TreeResult(True, new_config)


# ----------------------------
# Presentation helpers
# ----------------------------
def resolve_browser(config: RootConfig, path: Sequence[str]) -> Optional[str]:
    """Effective browser for the action at `path`: its own, else the nearest group's."""
    item = find_item_by_path(config, path)
    if item is not None and item.browser:
        return item.browser

    inherited = None
    current: Container = config
    for node_id in path[:-1]:
        child = next((a for a in current.actions if a.id == node_id), None)
        if child is None or not isinstance(child, Group):
            break
        if child.browser:
            inherited = child.browser
        current = child
    return inherited


def breadcrumb(config: Optional[RootConfig], path: Sequence[str]) -> str:
    if config is None or not path:
        return ""
    parts = []
    current: Container = config
    for node_id in path:
        found = next((a for a in current.actions if a.id == node_id), None)
        if isinstance(found, Group):
            parts.append(found.label or found.key)
            current = found
    return " → ".join(parts)


def group_and_sort_items(items: Sequence[Node]) -> List[Tuple[str, str, List[Node]]]:
    """Bucket items by type (groups first) and sort each bucket by key.

    Returns (type, title, items) tuples, skipping empty buckets.
    """
    by_type: Dict[str, List[Node]] = {}
    for item in items:
        by_type.setdefault(item.type, []).append(item)

    result = []
    for node_type in TYPE_ORDER:
        bucket = by_type.get(node_type)
        if bucket:
            result.append((node_type, TYPE_LABELS[node_type], sorted(bucket, key=lambda n: n.key)))
    return result


def _truncate(value: str, limit: int = 40) -> str:
    return value[: limit - 3] + "..." if len(value) > limit else value


def value_preview(action: Action) -> str:
    value = action.value
    if action.type == NodeType.APPLICATION.value:
        return value.split("/")[-1].replace(".app", "") or value
    if action.type == NodeType.URL.value:
        if value.startswith(INTERNAL_DEEPLINK_SCHEME):
            return "Raycast: " + value.split("/")[-1]
        return _truncate(value)
    if action.type == NodeType.FOLDER.value:
        return value.split("/")[-1] or value
    if action.type == NodeType.COMMAND.value:
        return _truncate(value)
    return value
