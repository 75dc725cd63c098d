#===============================================================================
#  LeaderKey | launcher.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  Executes resolved actions: applications, URLs (optionally with a specific
#  browser), folders and shell commands. Host primitives raise; the dispatcher
#  turns every outcome into a single success or failure notice.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import sys
import webbrowser
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .constants import INTERNAL_DEEPLINK_SCHEME
from .models import Action, NodeType
from .notifications import Notifier, failure, success

logger = logging.getLogger(__name__)


def _startfile(path: str) -> None:
    if hasattr(os, "startfile"):
        os.startfile(path)  # type: ignore[attr-defined]
    else:
        subprocess.Popen([path], cwd=str(Path(path).parent))


def _failure_message(rc: int, output: str) -> str:
    lines = [line.strip() for line in (output or "").splitlines() if line.strip()]
    return f"Command failed (rc={rc}): {lines[-1]}" if lines else f"Command failed (rc={rc})"


class SystemHost:
    """OS-level "open" primitives. Each one raises with a readable message on failure."""

    def __init__(self, command_log: Optional[Path] = None):
        self.command_log = command_log

    def open_application(self, path: str) -> None:
        target = Path(path).expanduser()
        if not target.exists():
            found = shutil.which(path)
            if not found:
                raise FileNotFoundError(f"Application not found: {path}")
            subprocess.Popen([found])
            return

        if sys.platform == "darwin":
            subprocess.Popen(["open", str(target)])
        else:
            _startfile(str(target))

    def open_url(self, url: str, browser: Optional[str] = None) -> None:
        if browser:
            if sys.platform == "darwin":
                subprocess.Popen(["open", "-a", browser, url])
                return
            try:
                if webbrowser.get(browser).open(url):
                    return
            except webbrowser.Error:
                logger.debug("Browser %r not registered with webbrowser; launching directly", browser)
            subprocess.Popen([browser, url])
            return

        if not webbrowser.open(url):
            raise RuntimeError(f"No browser available to open {url}")

    def open_folder(self, path: str) -> None:
        folder = Path(path).expanduser()
        if not folder.exists():
            raise FileNotFoundError(f"Folder not found: {path}")

        if sys.platform.startswith("win"):
            subprocess.Popen(["explorer", str(folder)])
        elif sys.platform == "darwin":
            subprocess.Popen(["open", str(folder)])
        else:
            subprocess.Popen(["xdg-open", str(folder)])

    def run_command(self, command: str) -> None:
        """Run through the shell and wait. Output goes to the command log, if any."""
        if self.command_log is None:
            p = subprocess.run(command, shell=True, stdout=subprocess.DEVNULL, stderr=subprocess.PIPE, text=True)
            if p.returncode != 0:
                raise RuntimeError(_failure_message(p.returncode, p.stderr))
            return

        self.command_log.parent.mkdir(parents=True, exist_ok=True)
        with open(self.command_log, "a", encoding="utf-8", errors="ignore") as f:
            f.write(f"\n$ {command}\n")
            f.flush()
            start = f.tell()
            p = subprocess.Popen(command, shell=True, stdout=f, stderr=subprocess.STDOUT, text=True)
            rc = p.wait()
        if rc != 0:
            with open(self.command_log, "r", encoding="utf-8", errors="ignore") as f:
                f.seek(start)
                output = f.read()
            raise RuntimeError(f"{_failure_message(rc, output)}. See log: {self.command_log}")


@dataclass
class DispatchResult:
    ok: bool
    message: str = ""


class ActionDispatcher:
    def __init__(self, host=None, notifier: Optional[Notifier] = None):
        self.host = host or SystemHost()
        self.notifier = notifier

    def _notify(self, notice) -> None:
        if self.notifier:
            self.notifier(notice)

    def execute(self, action: Action, browser: Optional[str] = None) -> DispatchResult:
        """Run `action` to completion. `browser` is the inherited group default."""
        value = action.value
        try:
            if action.type == NodeType.APPLICATION.value:
                self.host.open_application(value)
            elif action.type == NodeType.URL.value:
                effective = action.browser or browser
                if effective and not value.startswith(INTERNAL_DEEPLINK_SCHEME):
                    self.host.open_url(value, effective)
                else:
                    self.host.open_url(value)
            elif action.type == NodeType.FOLDER.value:
                self.host.open_folder(value)
            elif action.type == NodeType.COMMAND.value:
                self.host.run_command(value)
            else:
                raise ValueError(f"Unknown action type: {action.type}")
        except Exception as e:
            message = str(e) or "Unknown error"
            logger.warning("Action %s (%s) failed: %s", action.key, action.type, message)
            self._notify(failure("Action Failed", message))
            return DispatchResult(False, message)

        logger.info("Action %s (%s) executed: %s", action.key, action.type, value)
        text = f"✓ {action.label or value}"
        self._notify(success(text))
        return DispatchResult(True, text)
