#===============================================================================
#  LeaderKey | logging_utils.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Logger setup: console plus <data dir>/logs/leaderkey.log.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .constants import LOG_FILE_NAME

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logger(logs_dir: Optional[Path] = None, level: str = "INFO", name: str = "leaderkey") -> logging.Logger:
    logger = logging.getLogger(name)

    if not logger.handlers:  # Avoid duplicate handlers
        formatter = logging.Formatter(LOG_FORMAT)

        handler = logging.StreamHandler()
        if hasattr(handler.stream, "reconfigure"):
            handler.stream.reconfigure(encoding="utf-8")
        handler.setFormatter(formatter)
        logger.addHandler(handler)

        if logs_dir is not None:
            logs_dir.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(logs_dir / LOG_FILE_NAME, encoding="utf-8")
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    logger.setLevel(getattr(logging, level.upper()))
    return logger
