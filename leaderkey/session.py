#===============================================================================
#  LeaderKey | session.py
#===============================================================================
#  Author      : Edwin A. Rodriguez
#  Role/Team   : SAP COE / SAP SRE (GRM-Testing-Automation & Governance)
#  Created     : 2026-02-10
#  Last Update : 2026-10-19
#
#  Summary
#  -------
#  The interactive navigation state machine. Three modes:
#    - browse    : one keystroke at a time inside the current group
#    - search    : free-text query over the whole tree
#    - confirmed : search results frozen, addressed by typing their key-path
#  Every state-changing event re-arms a single idle timer; when it fires the
#  whole session goes back to browse at the root.
#
#  Copyright (c) 2026 Edwin A. Rodriguez. All rights reserved.
#  Provided "AS IS", without warranty of any kind.
#===============================================================================

from __future__ import annotations

import logging
from typing import Any, Callable, List, Optional, Sequence

from PySide6.QtCore import QTimer

from .launcher import ActionDispatcher, DispatchResult
from .models import Action, Group, Mode, Node, RootConfig, SearchResult, is_group
from .notifications import Notifier, failure
from .search import search_all_items
from .tree import breadcrumb, find_group_by_path, resolve_browser

logger = logging.getLogger(__name__)

Scheduler = Callable[[int, Callable[[], None]], Any]


def qt_scheduler(delay_ms: int, callback: Callable[[], None]) -> None:
    QTimer.singleShot(delay_ms, callback)


class IdleTimer:
    """Single outstanding idle timer.

    Each reset() mints a new token; a callback only fires if its token is
    still the current one, so older schedules are dead on arrival.
    """

    def __init__(self, timeout_ms: Optional[int], on_expire: Callable[[], None], scheduler: Optional[Scheduler] = None):
        self.timeout_ms = timeout_ms
        self._on_expire = on_expire
        self._scheduler = scheduler or qt_scheduler
        self._token: Optional[object] = None

    @property
    def active(self) -> bool:
        return self._token is not None

    def reset(self) -> None:
        self.cancel()
        if self.timeout_ms is None:
            return
        token = object()
        self._token = token
        self._scheduler(self.timeout_ms, lambda: self._fire(token))

    def cancel(self) -> None:
        self._token = None

    def _fire(self, token: object) -> None:
        if token is not self._token:
            return
        self._token = None
        self._on_expire()


class NavigationSession:
    def __init__(
        self,
        config: RootConfig,
        dispatcher: ActionDispatcher,
        notifier: Optional[Notifier] = None,
        timeout_ms: Optional[int] = None,
        scheduler: Optional[Scheduler] = None,
        on_change: Optional[Callable[[], None]] = None,
    ):
        self.config = config
        self.dispatcher = dispatcher
        self.notifier = notifier
        self.on_change = on_change

        self.location: List[str] = []
        self.mode: str = Mode.BROWSE.value
        self.search_text = ""       # what the input box currently shows
        self.search_query = ""
        self.search_results: List[SearchResult] = []
        self.confirmed_results: List[SearchResult] = []
        self.key_sequence = ""

        self.timer = IdleTimer(timeout_ms, self._on_idle, scheduler)

    # ----------------------------
    # Derived state
    # ----------------------------
    @property
    def current_group(self):
        group = find_group_by_path(self.config, self.location)
        return group if group is not None else self.config

    @property
    def current_items(self) -> List[Node]:
        return list(self.current_group.actions)

    @property
    def results(self) -> List[SearchResult]:
        if self.mode == Mode.CONFIRMED.value:
            return self.confirmed_results
        if self.mode == Mode.SEARCH.value:
            return self.search_results
        return []

    def breadcrumb(self) -> str:
        return breadcrumb(self.config, self.location)

    def placeholder(self) -> str:
        if self.mode == Mode.CONFIRMED.value:
            sequences = ", ".join(r.key_sequence for r in self.confirmed_results[:3])
            more = "..." if len(self.confirmed_results) > 3 else ""
            return f"Type key sequence ({sequences}{more}) - Tab to go back"
        if self.mode == Mode.SEARCH.value:
            return "Search - Ctrl+Enter to lock results and type a key sequence, Tab to exit"
        if self.location:
            return f'{self.breadcrumb()} → Input a key | Use "Tab" to search'
        return 'Input a key | Use "Tab" to search'

    # ----------------------------
    # Events
    # ----------------------------
    def handle_text(self, text: str) -> None:
        """The input box changed. Meaning depends on the mode."""
        self.timer.reset()

        if self.mode == Mode.CONFIRMED.value:
            self._handle_key_sequence(text)
            return

        if self.mode == Mode.SEARCH.value:
            self.search_text = text
            self.search_query = text
            self.search_results = search_all_items(self.config, text) if text else []
            return

        self.search_text = text
        if not text:
            return

        if len(text) != 1:
            self.search_text = ""
            return

        group = self._resolve_location()
        match = next((item for item in group.actions if item.key == text), None)
        self.search_text = ""
        if match is None:
            logger.info("No action bound to key %r at %s", text, self.location or "root")
            self._notify(failure("No action assigned", f'Key "{text}" is not bound to any action'))
            return

        if is_group(match):
            self.location = self.location + [match.id]
        else:
            self._execute(match, self.location + [match.id])

    def press_key(self, char: str) -> None:
        """Append a single keystroke to whatever the input box holds."""
        self.handle_text(self.search_text + char)

    def _handle_key_sequence(self, text: str) -> None:
        self.search_text = text
        self.key_sequence = text
        if not text:
            return

        typed = tuple(text)
        exact = next((r for r in self.confirmed_results if r.path_keys == typed), None)
        has_longer = any(
            len(r.path_keys) > len(typed) and r.path_keys[: len(typed)] == typed
            for r in self.confirmed_results
        )

        if exact is not None and not has_longer:
            self._commit(exact)
            return

        if exact is None and not has_longer:
            self.search_text = ""
            self.key_sequence = ""

    # ----------------------------
    # Commands
    # ----------------------------
    def enter_search(self) -> None:
        self.timer.reset()
        self.mode = Mode.SEARCH.value
        self.search_query = ""
        self.search_text = ""
        self.search_results = []

    def exit_search(self) -> None:
        self.timer.reset()
        self._leave_search()

    def confirm_search(self) -> bool:
        """Freeze the current results and switch to key-sequence input."""
        self.timer.reset()
        if self.mode != Mode.SEARCH.value or not self.search_results:
            self._notify(failure("No results to confirm"))
            return False

        self.confirmed_results = list(self.search_results)
        self.mode = Mode.CONFIRMED.value
        self.search_query = ""
        self.search_text = ""
        self.search_results = []
        self.key_sequence = ""
        return True

    def go_back(self) -> None:
        self.timer.reset()
        if self.mode == Mode.CONFIRMED.value:
            self.confirmed_results = []
            self.key_sequence = ""
            self.search_text = ""
            self.search_query = ""
            self.search_results = []
            self.mode = Mode.SEARCH.value
            return

        if self.mode == Mode.SEARCH.value:
            self._leave_search()
            return

        if self.location:
            self.location = self.location[:-1]
            self.search_text = ""

    def open_item(self, item: Node) -> Optional[DispatchResult]:
        """Row activation in browse mode."""
        self.timer.reset()
        self.search_text = ""
        path = self.location + [item.id]
        if isinstance(item, Group):
            self._navigate(path)
            return None
        return self._execute(item, path)

    def select_search_result(self, result: SearchResult) -> None:
        self.timer.reset()
        self._leave_search()
        if is_group(result.item):
            self._navigate(result.path)
        else:
            self._navigate(result.parent_path)

    def go_to_parent(self, result: SearchResult) -> None:
        self.timer.reset()
        self._leave_search()
        self._navigate(result.parent_path)

    def execute_confirmed_result(self, result: SearchResult) -> Optional[DispatchResult]:
        self.timer.reset()
        return self._commit(result)

    def set_config(self, config: RootConfig) -> None:
        """Swap in a new tree after a mutation."""
        self.config = config
        if find_group_by_path(config, self.location) is None:
            self.location = []
        if self.mode == Mode.SEARCH.value and self.search_query:
            self.search_results = search_all_items(config, self.search_query)

    def reset(self) -> None:
        self.timer.cancel()
        self.location = []
        self.mode = Mode.BROWSE.value
        self.search_text = ""
        self.search_query = ""
        self.search_results = []
        self.confirmed_results = []
        self.key_sequence = ""

    def close(self) -> None:
        self.timer.cancel()

    # ----------------------------
    # Internals
    # ----------------------------
    def _notify(self, notice) -> None:
        if self.notifier:
            self.notifier(notice)

    def _on_idle(self) -> None:
        logger.debug("Idle timeout; resetting session")
        self.reset()
        if self.on_change:
            self.on_change()

    def _leave_search(self) -> None:
        self.mode = Mode.BROWSE.value
        self.search_query = ""
        self.search_text = ""
        self.search_results = []
        self.confirmed_results = []
        self.key_sequence = ""

    def _resolve_location(self):
        group = find_group_by_path(self.config, self.location)
        if group is None:
            logger.info("Stale location %s; back to root", self.location)
            self.location = []
            return self.config
        return group

    def _navigate(self, path: Sequence[str]) -> None:
        path = list(path)
        if find_group_by_path(self.config, path) is None:
            logger.info("Stale path %s; back to root", path)
            path = []
        self.location = path

    def _commit(self, result: SearchResult) -> Optional[DispatchResult]:
        self._leave_search()
        if is_group(result.item):
            self._navigate(result.path)
            return None
        return self._execute(result.item, list(result.path))

    def _execute(self, action: Action, path: Sequence[str]) -> DispatchResult:
        self.search_text = ""
        outcome = self.dispatcher.execute(action, resolve_browser(self.config, path))
        self.location = []
        return outcome
