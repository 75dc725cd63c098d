#===============================================================================
#  LeaderKey | constants.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Central place for naming conventions, storage keys, timeout bounds and the
#  default action tree seeded on first start.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict

APP_TITLE = "LeaderKey"
DATA_DIR_NAME = ".leaderkey"
DATA_DIR_ENV = "LEADERKEY_HOME"
STORAGE_FILE_NAME = "storage.json"
PREFERENCES_FILE_NAME = "preferences.json"
LOGS_DIR_NAME = "logs"
LOG_FILE_NAME = "leaderkey.log"
COMMAND_LOG_FILE_NAME = "commands.log"
EXPORT_FILE_NAME = "leader-key-config.json"

# LocalStorage keys
STORAGE_KEY = "leader-key-config"
LEGACY_STORAGE_KEY = "key-mappings"
CURRENT_VERSION = 1

# Deepest group nesting accepted on import
MAX_IMPORT_DEPTH = 64

# Idle timeout (seconds); values outside the range are clamped
DEFAULT_TIMEOUT_MS = 2500
MIN_TIMEOUT_SECONDS = 2.5
MAX_TIMEOUT_SECONDS = 6.0

# URLs with this scheme never go through a browser override
INTERNAL_DEEPLINK_SCHEME = "raycast://"

# Window
WINDOW_WIDTH = 720
WINDOW_HEIGHT = 480

DEFAULT_CONFIG: Dict[str, Any] = {
    "type": "group",
    "actions": [
        {
            "id": "default-c",
            "key": "c",
            "type": "application",
            "label": "Calculator",
            "value": "/System/Applications/Calculator.app",
        },
        {
            "id": "default-a",
            "key": "a",
            "type": "group",
            "label": "Applications",
            "actions": [
                {
                    "id": "default-af",
                    "key": "f",
                    "type": "application",
                    "label": "Finder",
                    "value": "/System/Library/CoreServices/Finder.app",
                },
                {
                    "id": "default-at",
                    "key": "t",
                    "type": "application",
                    "label": "Terminal",
                    "value": "/System/Applications/Utilities/Terminal.app",
                },
            ],
        },
    ],
}


def default_data_dir() -> Path:
    """Data directory (storage, preferences, logs). Honors $LEADERKEY_HOME."""
    override = os.environ.get(DATA_DIR_ENV, "").strip()
    if override:
        return Path(override).expanduser()
    return Path.home() / DATA_DIR_NAME
