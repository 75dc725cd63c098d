#===============================================================================
#  LeaderKey | state.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Load/save of the persisted action tree ({root, version}). On first start
#  the legacy flat mappings are migrated once, or the default tree is seeded.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import json
import logging
from typing import Optional

from .constants import CURRENT_VERSION, DEFAULT_CONFIG, LEGACY_STORAGE_KEY, STORAGE_KEY
from .legacy import migrate_legacy_mappings
from .models import RootConfig
from .storage import LocalStorage

logger = logging.getLogger(__name__)


def default_config() -> RootConfig:
    return RootConfig.from_dict(DEFAULT_CONFIG)


def save_config(storage: LocalStorage, config: RootConfig) -> None:
    """Persist the tree. Raises OSError if the store cannot be written."""
    data = {"root": config.to_dict(), "version": CURRENT_VERSION}
    storage.set_item(STORAGE_KEY, json.dumps(data, ensure_ascii=False))


def migrate_from_legacy(storage: LocalStorage) -> Optional[RootConfig]:
    stored = storage.get_item(LEGACY_STORAGE_KEY)
    if not stored:
        return None

    try:
        data = json.loads(stored)
        mappings = data.get("mappings") if isinstance(data, dict) else None
        if not mappings:
            return None
        root = migrate_legacy_mappings(mappings)
    except (ValueError, TypeError, AttributeError) as e:
        logger.warning("Legacy mappings could not be migrated: %s", e)
        return None

    if root is None:
        return None
    save_config(storage, root)
    logger.info("Legacy mappings migrated and saved")
    return root


def get_config(storage: LocalStorage) -> RootConfig:
    """Load the tree: current record, else legacy migration, else defaults."""
    stored = storage.get_item(STORAGE_KEY)

    if not stored:
        migrated = migrate_from_legacy(storage)
        if migrated is not None:
            return migrated
        config = default_config()
        save_config(storage, config)
        logger.info("Seeded default configuration")
        return config

    try:
        data = json.loads(stored)
        return RootConfig.from_dict(data["root"])
    except (ValueError, KeyError, TypeError, AttributeError) as e:
        logger.error("Stored configuration is corrupt (%s); using defaults", e)
        return default_config()


def clear_config(storage: LocalStorage) -> None:
    storage.remove_item(STORAGE_KEY)
    storage.remove_item(LEGACY_STORAGE_KEY)
