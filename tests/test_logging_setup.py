# ruff: noqa: S101
import logging

from courier.logging_setup import _handler_uses_path, _resolve_log_path, configure_logging


def test_resolve_log_path_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    resolved = _resolve_log_path()
    assert resolved == tmp_path / "courier.log"


def test_handler_uses_path(tmp_path):
    target = tmp_path / "log.txt"
    handler = logging.FileHandler(target)
    try:
        assert _handler_uses_path(handler, target)
        assert not _handler_uses_path(logging.StreamHandler(), target)
    finally:
        handler.close()


def test_configure_logging_disabled_returns_none(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert configure_logging(False) is None
    assert not (tmp_path / "courier.log").exists()


def test_configure_logging_creates_single_handler(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    root = logging.getLogger()
    initial = list(root.handlers)
    try:
        path = configure_logging(True)
        assert path == tmp_path / "courier.log"
        added = [h for h in root.handlers if h not in initial]
        assert len(added) == 1
        # Second call should not duplicate handlers
        configure_logging(True, log_path=path)
        assert [h for h in root.handlers if h not in initial] == added
        logging.getLogger("courier.test").debug("hello")
        added[0].flush()
        assert "[DEBUG] courier.test: hello" in path.read_text(encoding="utf-8")
    finally:
        for h in root.handlers[len(initial) :]:
            root.removeHandler(h)
            h.close()
