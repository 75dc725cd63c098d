#===============================================================================
#  LeaderKey | preferences.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  User preferences (idle timeout) kept in preferences.json.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any, Dict, Optional

from .constants import DEFAULT_TIMEOUT_MS, MAX_TIMEOUT_SECONDS, MIN_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


def default_preferences() -> Dict[str, Any]:
    return {
        "enable_timeout": True,
        "timeout_seconds": "2.5",
    }


def load_preferences(path: Path) -> Dict[str, Any]:
    """Load preferences from disk (or defaults)."""
    d = default_preferences()
    if not path.exists():
        return d
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable preferences %s: %s", path, e)
        return d
    if not isinstance(data, dict):
        return d
    for k in d:
        if k not in data:
            data[k] = d[k]
    return data


def save_preferences(path: Path, prefs: Dict[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(prefs, indent=2), encoding="utf-8")


def timeout_ms(prefs: Dict[str, Any]) -> Optional[int]:
    """Idle timeout in ms, or None when disabled. Clamped to [2.5, 6] seconds."""
    if not prefs.get("enable_timeout"):
        return None
    try:
        seconds = float(prefs.get("timeout_seconds"))
    except (TypeError, ValueError):
        return DEFAULT_TIMEOUT_MS
    if math.isnan(seconds):
        return DEFAULT_TIMEOUT_MS
    clamped = max(MIN_TIMEOUT_SECONDS, min(MAX_TIMEOUT_SECONDS, seconds))
    return int(clamped * 1000)
