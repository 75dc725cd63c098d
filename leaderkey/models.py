#===============================================================================
#  LeaderKey | models.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Shared data models: the action tree (groups and actions), search results
#  and the flat legacy key mapping records.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple, Union


class NodeType(str, Enum):
    GROUP = "group"
    APPLICATION = "application"
    URL = "url"
    FOLDER = "folder"
    COMMAND = "command"


ACTION_TYPES = (
    NodeType.APPLICATION.value,
    NodeType.URL.value,
    NodeType.FOLDER.value,
    NodeType.COMMAND.value,
)


class MatchField(str, Enum):
    LABEL = "label"
    VALUE = "value"
    KEY = "key"


class Mode(str, Enum):
    BROWSE = "browse"
    SEARCH = "search"
    CONFIRMED = "confirmed"


@dataclass
class Action:
    """A leaf command bound to a single key."""
    id: str
    key: str
    type: str           # "application" | "url" | "folder" | "command"
    value: str          # app path, URL/deeplink, folder path or shell command
    label: Optional[str] = None
    browser: Optional[str] = None   # url actions only


@dataclass
class Group:
    """A branch node; `browser` is the default for descendant URL actions."""
    id: str
    key: str
    label: Optional[str] = None
    actions: List["Node"] = field(default_factory=list)
    browser: Optional[str] = None
    type: str = field(default=NodeType.GROUP.value, init=False)


Node = Union[Action, Group]


@dataclass
class RootConfig:
    """The implicit top-level group. No id, key or label."""
    actions: List[Node] = field(default_factory=list)
    type: str = field(default=NodeType.GROUP.value, init=False)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "actions": [node_to_dict(n) for n in self.actions]}

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "RootConfig":
        if d.get("type") != NodeType.GROUP.value:
            raise ValueError("root must have type 'group'")
        return RootConfig(actions=[node_from_dict(n) for n in d.get("actions", [])])


def is_group(node: Any) -> bool:
    return getattr(node, "type", None) == NodeType.GROUP.value


def is_action(node: Any) -> bool:
    return getattr(node, "type", None) in ACTION_TYPES


def node_to_dict(node: Node) -> Dict[str, Any]:
    d: Dict[str, Any] = {"id": node.id, "key": node.key, "type": node.type}
    if node.label:
        d["label"] = node.label
    if isinstance(node, Group):
        d["actions"] = [node_to_dict(n) for n in node.actions]
    else:
        d["value"] = node.value
    if node.browser:
        d["browser"] = node.browser
    return d


def node_from_dict(d: Dict[str, Any]) -> Node:
    node_type = d.get("type")
    if node_type == NodeType.GROUP.value:
        return Group(
            id=d["id"],
            key=d["key"],
            label=d.get("label") or None,
            actions=[node_from_dict(n) for n in d.get("actions", [])],
            browser=d.get("browser") or None,
        )
    if node_type in ACTION_TYPES:
        return Action(
            id=d["id"],
            key=d["key"],
            type=node_type,
            value=d["value"],
            label=d.get("label") or None,
            browser=d.get("browser") or None,
        )
    raise ValueError(f"Unknown node type: {node_type!r}")


@dataclass(frozen=True)
class SearchResult:
    """A match produced by the search engine, with the paths walked to reach it."""
    item: Node
    path: Tuple[str, ...]           # ids from the root
    path_keys: Tuple[str, ...]
    path_labels: Tuple[str, ...]
    matched_on: str                 # MatchField value

    @property
    def key_sequence(self) -> str:
        return "".join(self.path_keys)

    @property
    def parent_path(self) -> Tuple[str, ...]:
        return self.path[:-1]

    @property
    def parent_label(self) -> str:
        return self.path_labels[-2] if len(self.path_labels) > 1 else "Root"


@dataclass
class LegacyAction:
    type: str       # "app" | "url" | "file" | "shell" | "raycast"
    target: str


@dataclass
class LegacyKeyMapping:
    """Flat record of the pre-tree format, addressed by its full key sequence."""
    id: str
    sequence: str
    label: str = ""
    description: Optional[str] = None
    is_group: bool = False
    group_name: Optional[str] = None
    action: Optional[LegacyAction] = None

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "LegacyKeyMapping":
        raw_action = d.get("action")
        action = None
        if isinstance(raw_action, dict):
            action = LegacyAction(type=str(raw_action.get("type", "")), target=str(raw_action.get("target", "")))
        return LegacyKeyMapping(
            id=str(d.get("id", "")),
            sequence=str(d.get("sequence", "")),
            label=str(d.get("label", "")),
            description=d.get("description"),
            is_group=bool(d.get("isGroup", False)),
            group_name=d.get("groupName"),
            action=action,
        )
