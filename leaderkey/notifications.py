#===============================================================================
#  LeaderKey | notifications.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  User-facing notices (toast/HUD style). The core only emits Notice objects;
#  how they are shown is up to the host.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List

logger = logging.getLogger(__name__)


class NoticeStyle(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"
    INFO = "info"


@dataclass(frozen=True)
class Notice:
    style: str
    title: str
    message: str = ""

    def text(self) -> str:
        return f"{self.title}: {self.message}" if self.message else self.title


Notifier = Callable[[Notice], None]


class LogNotifier:
    """Logs every notice, keeps a history and forwards to subscribers (the window)."""

    def __init__(self) -> None:
        self.history: List[Notice] = []
        self._listeners: List[Notifier] = []

    def subscribe(self, listener: Notifier) -> None:
        self._listeners.append(listener)

    def __call__(self, notice: Notice) -> None:
        self.history.append(notice)
        level = logging.WARNING if notice.style == NoticeStyle.FAILURE.value else logging.INFO
        logger.log(level, "%s", notice.text())
        for listener in self._listeners:
            listener(notice)

    @property
    def last(self) -> Notice:
        return self.history[-1]


def success(title: str, message: str = "") -> Notice:
    return Notice(NoticeStyle.SUCCESS.value, title, message)


def failure(title: str, message: str = "") -> Notice:
    return Notice(NoticeStyle.FAILURE.value, title, message)
