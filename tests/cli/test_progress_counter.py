from __future__ import annotations

import io

import pytest

from rules_kit.cli import ProgressCounter
from rules_kit.cli._progress import progress_enabled


def test_counter_renders_on_one_line() -> None:
    stream = io.StringIO()
    counter = ProgressCounter("Generating rules", stream=stream, enabled=True)
    counter(1, 2)
    counter(2, 2)
    counter.finish()
    assert stream.getvalue() == "\rGenerating rules: 1/2\rGenerating rules: 2/2\n"


def test_disabled_counter_only_records() -> None:
    stream = io.StringIO()
    counter = ProgressCounter(stream=stream, enabled=False)
    counter(3, 4)
    counter.finish()
    assert stream.getvalue() == ""
    assert counter.last == (3, 4)


def test_finish_without_updates_writes_nothing() -> None:
    stream = io.StringIO()
    ProgressCounter(stream=stream, enabled=True).finish()
    assert stream.getvalue() == ""


def test_environment_overrides_tty_detection(monkeypatch: pytest.MonkeyPatch) -> None:
    stream = io.StringIO()
    assert progress_enabled(stream) is False
    monkeypatch.setenv("RULES_KIT_CLI_PROGRESS", "on")
    assert progress_enabled(stream) is True
    monkeypatch.setenv("RULES_KIT_CLI_PROGRESS", "0")
    assert progress_enabled(stream) is False
