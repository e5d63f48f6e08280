"""Tests for the category-gated debug logger."""

from __future__ import annotations

import pytest

from pychip8.utils import debug
from pychip8.utils.debug import debug_enabled, debug_log, reload_categories


@pytest.fixture(autouse=True)
def _reset_categories():
    reload_categories()
    yield
    reload_categories()


def test_disabled_without_environment(monkeypatch, capsys) -> None:
    monkeypatch.delenv(debug.ENV_VARIABLE, raising=False)

    assert not debug_enabled("cpu")
    debug_log("cpu", "pc=%04x", 0x200)
    assert capsys.readouterr().out == ""


def test_selected_categories(monkeypatch, capsys) -> None:
    monkeypatch.setenv(debug.ENV_VARIABLE, "CPU, input")

    assert debug_enabled("cpu")
    assert debug_enabled("input")
    assert not debug_enabled("audio")

    debug_log("cpu", "pc=%04x", 0x200)
    assert capsys.readouterr().out == "[CHIP8][cpu] pc=0200\n"


def test_all_enables_everything(monkeypatch) -> None:
    monkeypatch.setenv(debug.ENV_VARIABLE, "all")

    assert debug_enabled("perf")
    assert debug_enabled()


def test_bad_format_arguments_are_appended(monkeypatch, capsys) -> None:
    monkeypatch.setenv(debug.ENV_VARIABLE, "cpu")

    debug_log("cpu", "value=%d", "x")

    assert capsys.readouterr().out == "[CHIP8][cpu] value=%d ('x',)\n"


def test_parse_categories_strips_blanks() -> None:
    assert debug.parse_categories(" cpu,,Trace ,") == frozenset({"cpu", "trace"})
