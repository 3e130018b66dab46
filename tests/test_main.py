import io
import logging

import pytest

import blinktree
from blinktree_render import CLEAR, HIDE_CURSOR, RESET, SHOW_CURSOR, move_to


@pytest.fixture
def bare_root_logger(monkeypatch):
    monkeypatch.delenv("BLINKTREE_LOG", raising=False)
    monkeypatch.delenv("BLINKTREE_LOG_LEVEL", raising=False)
    root = logging.getLogger()
    saved_handlers = root.handlers[:]
    saved_level = root.level
    root.handlers = []
    yield root
    for handler in root.handlers:
        if isinstance(handler, logging.FileHandler):
            handler.close()
    root.handlers = saved_handlers
    root.setLevel(saved_level)


def _interrupt(_delay):
    raise KeyboardInterrupt


def _run(out=None):
    out = out if out is not None else io.StringIO()
    assert blinktree.main(out, wait=_interrupt) == 0
    return out.getvalue()


def test_main_restores_terminal_on_interrupt(bare_root_logger):
    text = _run()

    assert text.startswith(HIDE_CURSOR + CLEAR)
    assert text.endswith(RESET + move_to(22, 1) + SHOW_CURSOR)
    assert text.count(CLEAR) == 1


def test_main_runs_several_ticks_before_interrupt(bare_root_logger):
    out = io.StringIO()
    waits = []

    def wait(delay):
        waits.append(delay)
        if len(waits) == 5:
            raise KeyboardInterrupt

    assert blinktree.main(out, wait=wait) == 0
    assert waits == [0.2] * 5
    assert out.getvalue().count(CLEAR) == 1


def test_logs_stay_off_the_terminal_without_log_file(bare_root_logger):
    text = _run()
    _run()

    assert "blinking" not in text
    assert "interrupted" not in text
    nulls = [h for h in bare_root_logger.handlers if isinstance(h, logging.NullHandler)]
    assert len(nulls) == 1


def test_log_file_at_debug_level(bare_root_logger, monkeypatch, tmp_path):
    path = tmp_path / "tree.log"
    monkeypatch.setenv("BLINKTREE_LOG", str(path))
    monkeypatch.setenv("BLINKTREE_LOG_LEVEL", "debug")

    text = _run()

    logged = path.read_text(encoding="utf-8")
    assert "painted 21 rows" in logged
    assert "blinking" in logged
    assert "interrupted" in logged
    assert "painted" not in text


def test_log_file_default_level_skips_debug(bare_root_logger, monkeypatch, tmp_path):
    path = tmp_path / "tree.log"
    monkeypatch.setenv("BLINKTREE_LOG", str(path))

    _run()

    logged = path.read_text(encoding="utf-8")
    assert "blinking" in logged
    assert "painted" not in logged


def test_log_file_honoured_after_quiet_run(bare_root_logger, monkeypatch, tmp_path):
    _run()

    path = tmp_path / "tree.log"
    monkeypatch.setenv("BLINKTREE_LOG", str(path))
    _run()

    assert path.is_file()
    assert "blinking" in path.read_text(encoding="utf-8")
