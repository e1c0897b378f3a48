import os
import sys

import matplotlib

matplotlib.use("Agg")

import pytest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from scriptsims import RecordingView


class SleepRecorder:
    """Stands in for ``time.sleep``; optionally runs a hook on the n-th call."""

    def __init__(self):
        self.calls = []
        self.hooks = {}

    def on_call(self, number, hook):
        self.hooks[number] = hook

    def __call__(self, seconds):
        self.calls.append(seconds)
        hook = self.hooks.get(len(self.calls))
        if hook is not None:
            hook()


@pytest.fixture
def view():
    return RecordingView()


@pytest.fixture
def sleeps():
    return SleepRecorder()
