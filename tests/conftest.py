"""Shared fixtures: a sample tree, a recording host and a manual scheduler."""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from leaderkey.launcher import ActionDispatcher
from leaderkey.models import Action, Group, RootConfig
from leaderkey.notifications import LogNotifier
from leaderkey.session import NavigationSession


def make_tree() -> RootConfig:
    return RootConfig(
        actions=[
            Action(id="c", key="c", type="application", label="Calculator", value="/Apps/Calculator.app"),
            Group(
                id="a",
                key="a",
                label="Applications",
                actions=[
                    Action(id="af", key="f", type="application", label="Finder", value="/Apps/Finder.app"),
                    Action(id="at", key="t", type="application", label="Terminal", value="/Apps/Terminal.app"),
                ],
            ),
            Group(
                id="w",
                key="w",
                label="Web",
                browser="Firefox",
                actions=[
                    Action(id="wg", key="g", type="url", label="GitHub", value="https://github.com"),
                    Action(
                        id="wd",
                        key="d",
                        type="url",
                        label="Docs",
                        value="https://docs.python.org",
                        browser="Safari",
                    ),
                    Group(
                        id="wn",
                        key="n",
                        label="News",
                        actions=[
                            Action(
                                id="wnh",
                                key="h",
                                type="url",
                                label="Hacker News",
                                value="https://news.ycombinator.com",
                            ),
                        ],
                    ),
                ],
            ),
            Action(id="s", key="s", type="command", label="Sync", value="make sync"),
            Action(id="d", key="d", type="folder", value="/tmp/downloads"),
        ]
    )


class FakeHost:
    """Records every primitive call; raises for targets listed in `failing`."""

    def __init__(self):
        self.calls = []
        self.failing = {}

    def _record(self, *call):
        self.calls.append(call)
        target = call[1]
        if target in self.failing:
            raise self.failing[target]

    def open_application(self, path):
        self._record("open_application", path)

    def open_url(self, url, browser=None):
        self._record("open_url", url, browser)

    def open_folder(self, path):
        self._record("open_folder", path)

    def run_command(self, command):
        self._record("run_command", command)


class FakeScheduler:
    """Collects scheduled callbacks so tests decide when (and which) fire."""

    def __init__(self):
        self.scheduled = []

    def __call__(self, delay_ms, callback):
        self.scheduled.append((delay_ms, callback))

    def fire(self, index):
        self.scheduled[index][1]()

    def fire_all(self):
        for _, callback in list(self.scheduled):
            callback()


@pytest.fixture
def tree():
    return make_tree()


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def notices():
    return LogNotifier()


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def dispatcher(host, notices):
    return ActionDispatcher(host, notifier=notices)


@pytest.fixture
def session(tree, dispatcher, notices, scheduler):
    return NavigationSession(tree, dispatcher, notifier=notices, timeout_ms=2500, scheduler=scheduler)
