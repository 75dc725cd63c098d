#===============================================================================
#  LeaderKey | legacy.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  One-time conversion of the flat "sequence string" mappings into the tree.
#  A record with sequence "abc" lives in the group whose sequence is "ab";
#  missing groups are synthesized with an upper-cased label.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from .models import Action, Group, LegacyKeyMapping, NodeType, RootConfig
from .tree import check_key_conflict, generate_id

logger = logging.getLogger(__name__)

LEGACY_TYPE_MAP = {
    "app": NodeType.APPLICATION.value,
    "url": NodeType.URL.value,
    "raycast": NodeType.URL.value,
    "file": NodeType.FOLDER.value,
    "shell": NodeType.COMMAND.value,
}


def convert_legacy_type(legacy_type: str) -> str:
    return LEGACY_TYPE_MAP.get(legacy_type, NodeType.APPLICATION.value)


def _append(parent: Union[RootConfig, Group], node, sequence: str) -> None:
    conflict = check_key_conflict(parent, node.key)
    if conflict.has_conflict:
        logger.warning("Legacy mapping %r dropped: key already used by %r", sequence, conflict.conflict_label)
        return
    parent.actions.append(node)


def migrate_legacy_mappings(
    mappings: Iterable[Union[LegacyKeyMapping, Dict[str, Any]]],
) -> Optional[RootConfig]:
    """Build a tree from legacy records. Returns None when there is nothing to migrate."""
    records: List[LegacyKeyMapping] = [
        m if isinstance(m, LegacyKeyMapping) else LegacyKeyMapping.from_dict(m) for m in mappings
    ]
    records = [m for m in records if m.sequence]
    if not records:
        return None

    explicit = {m.sequence: m for m in records if m.is_group and m.action is None}
    groups: Dict[str, Group] = {}

    def make_group(prefix: str) -> Group:
        record = explicit.get(prefix)
        if record is None:
            return Group(id=generate_id(), key=prefix[-1], label=prefix.upper())
        return Group(
            id=record.id or generate_id(),
            key=prefix[-1],
            label=record.group_name or record.label or None,
        )

    def ensure_group(sequence: str) -> Group:
        # Parents first, so insertion order is shallow-to-deep
        for i in range(1, len(sequence) + 1):
            prefix = sequence[:i]
            if prefix not in groups:
                groups[prefix] = make_group(prefix)
        return groups[sequence]

    for sequence in explicit:
        ensure_group(sequence)

    root = RootConfig()
    placed_actions = []
    for m in records:
        if m.action is None:
            continue
        action = Action(
            id=m.id or generate_id(),
            key=m.sequence[-1],
            type=convert_legacy_type(m.action.type),
            label=m.label or None,
            value=m.action.target,
        )
        if len(m.sequence) > 1:
            placed_actions.append((ensure_group(m.sequence[:-1]), action, m.sequence))
        else:
            placed_actions.append((root, action, m.sequence))

    for parent, action, sequence in placed_actions:
        _append(parent, action, sequence)

    for sequence, group in groups.items():
        parent = root if len(sequence) == 1 else groups[sequence[:-1]]
        _append(parent, group, sequence)

    logger.info("Migrated %d legacy mappings into %d top-level items", len(records), len(root.actions))
    return root
