#===============================================================================
#  LeaderKey | controller.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Mutation commands (add / edit / delete / import / clear). Order is always:
#  validate -> mutate a copy -> persist -> swap the in-memory tree -> tell the
#  navigation session. Results are returned, never raised.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional, Sequence

from .interchange import export_config_to_json, import_config_from_json
from .models import ACTION_TYPES, Action, Group, NodeType, RootConfig
from .notifications import Notifier, failure, success
from .state import clear_config, get_config, save_config
from .storage import LocalStorage
from .tree import (
    add_child,
    check_key_conflict,
    conflict_message,
    delete_node,
    find_group_by_path,
    find_item_by_path,
    generate_id,
    update_node,
)

logger = logging.getLogger(__name__)


@dataclass
class MutationResult:
    ok: bool
    config: RootConfig
    error: str = ""


class ConfigController:
    def __init__(self, storage: LocalStorage, notifier: Optional[Notifier] = None, config: Optional[RootConfig] = None):
        self.storage = storage
        self.notifier = notifier
        self.config = config if config is not None else get_config(storage)
        self.session = None

    def bind_session(self, session) -> None:
        self.session = session
        session.set_config(self.config)

    # ----------------------------
    # Helpers
    # ----------------------------
    def _notify(self, notice) -> None:
        if self.notifier:
            self.notifier(notice)

    def _fail(self, title: str, message: str = "") -> MutationResult:
        self._notify(failure(title, message))
        return MutationResult(False, self.config, message or title)

    def _commit(self, new_config: RootConfig, title: str) -> MutationResult:
        try:
            save_config(self.storage, new_config)
        except OSError as e:
            logger.error("Saving configuration failed: %s", e)
            return self._fail("Save failed", str(e))

        self.config = new_config
        if self.session is not None:
            self.session.set_config(new_config)
        logger.info("%s", title)
        self._notify(success(title))
        return MutationResult(True, new_config)

    def _check_key(self, parent_path: Sequence[str], key: str, exclude_id: Optional[str] = None) -> Optional[MutationResult]:
        if not key:
            return self._fail("Key required", "Please enter a single character key")
        parent = find_group_by_path(self.config, parent_path)
        if parent is None:
            return self._fail("Parent group not found")
        conflict = check_key_conflict(parent, key, exclude_id)
        if conflict.has_conflict:
            return self._fail("Key conflict", conflict_message(key, conflict))
        return None

    # ----------------------------
    # Commands
    # ----------------------------
    def add_item(
        self,
        parent_path: Sequence[str],
        kind: str = "action",
        key: str = "",
        label: str = "",
        value: str = "",
        action_type: str = NodeType.APPLICATION.value,
        browser: str = "",
    ) -> MutationResult:
        key = (key or "")[:1]
        rejected = self._check_key(parent_path, key)
        if rejected:
            return rejected

        if kind == "group":
            node = Group(id=generate_id(), key=key, label=label or None, actions=[], browser=browser or None)
        else:
            if action_type not in ACTION_TYPES:
                return self._fail("Invalid action type", str(action_type))
            if not value:
                return self._fail("Value required", "Please enter a value for this action")
            node = Action(
                id=generate_id(),
                key=key,
                type=action_type,
                label=label or None,
                value=value,
                browser=(browser or None) if action_type == NodeType.URL.value else None,
            )

        result = add_child(self.config, parent_path, node)
        if not result.ok:
            return self._fail("Add failed", result.error)
        return self._commit(result.config, "Item added")

    def edit_item(self, path: Sequence[str], **fields: Any) -> MutationResult:
        item = find_item_by_path(self.config, path)
        if item is None:
            return self._fail("Item not found")

        updates = dict(fields)
        if "key" in updates:
            updates["key"] = (updates["key"] or "")[:1]
            rejected = self._check_key(path[:-1], updates["key"], exclude_id=item.id)
            if rejected:
                return rejected
        if "label" in updates:
            updates["label"] = updates["label"] or None
        if "browser" in updates:
            updates["browser"] = updates["browser"] or None

        if isinstance(item, Action):
            if "value" in updates and not updates["value"]:
                return self._fail("Value required", "Please enter a value for this action")
            if updates.get("type", item.type) != NodeType.URL.value:
                updates["browser"] = None

        result = update_node(self.config, path, updates)
        if not result.ok:
            return self._fail("Update failed", result.error)
        return self._commit(result.config, "Item updated")

    def delete_item(self, path: Sequence[str]) -> MutationResult:
        if find_item_by_path(self.config, path) is None:
            return self._fail("Item not found")
        result = delete_node(self.config, path)
        if not result.ok:
            return self._fail("Delete failed", result.error)
        return self._commit(result.config, "Item deleted")

    def import_json(self, text: str) -> MutationResult:
        if not text.strip():
            return self._fail("No JSON provided")
        imported = import_config_from_json(text)
        if not imported.ok:
            return self._fail("Import failed", imported.error)
        return self._commit(imported.config, "Config imported successfully")

    def import_file(self, path: Path) -> MutationResult:
        try:
            content = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            return self._fail("Failed to read file", str(e))
        return self.import_json(content)

    def export_json(self) -> str:
        return export_config_to_json(self.config)

    def export_file(self, path: Path) -> MutationResult:
        try:
            Path(path).write_text(self.export_json(), encoding="utf-8")
        except OSError as e:
            return self._fail("Failed to save", str(e))
        self._notify(success("Saved", str(path)))
        return MutationResult(True, self.config)

    def clear_config(self) -> MutationResult:
        """Drop all stored shortcuts (current and legacy) and reload defaults."""
        try:
            clear_config(self.storage)
            self.config = get_config(self.storage)
        except OSError as e:
            return self._fail("Clear failed", str(e))

        if self.session is not None:
            self.session.set_config(self.config)
            self.session.reset()
        self._notify(success("Configuration cleared", "All shortcuts have been deleted"))
        return MutationResult(True, self.config)
