"""Tests for the command line entry point and the mdBook JSON protocol."""

import io
import json
import logging

import pytest
from rich.logging import RichHandler

from mdbook_inline_highlighting import app

_setup_logging = app.setup_logging


@pytest.fixture(autouse=True)
def _no_logging_setup(monkeypatch):
    """Keep pytest's log capture handlers in place."""
    monkeypatch.setattr(app, "setup_logging", lambda level: None)


def run_main(monkeypatch, capsys, payload, argv=()):
    monkeypatch.setattr("sys.stdin", io.StringIO(payload))
    code = app.main(list(argv))
    return code, capsys.readouterr().out


class TestSupports:
    def test_html_supported(self):
        assert app.main(["supports", "html"]) == 0

    def test_other_renderer_not_supported(self):
        assert app.main(["supports", "markdown"]) == 1


class TestPreprocessing:
    def test_round_trip(self, monkeypatch, capsys, context, book):
        code, out = run_main(monkeypatch, capsys, json.dumps([context, book]))
        assert code == 0
        result = json.loads(out)
        chapter = result["items"][0]["Chapter"]
        assert chapter["content"] == 'Run <code class="hljs language-sh">make</code> first.\n'
        assert result["items"][1] == "Separator"

    def test_invalid_json(self, monkeypatch, capsys, caplog):
        with caplog.at_level(logging.ERROR):
            code, out = run_main(monkeypatch, capsys, "{not json")
        assert code == 1
        assert out == ""
        assert "Unable to parse the input" in caplog.text

    def test_wrong_shape(self, monkeypatch, capsys):
        code, out = run_main(monkeypatch, capsys, json.dumps({"book": {}}))
        assert code == 1
        assert out == ""

    def test_context_must_be_object(self, monkeypatch, capsys):
        code, _ = run_main(monkeypatch, capsys, json.dumps([[], {"items": []}]))
        assert code == 1


class TestReadInput:
    def test_returns_pair(self, context, book):
        got_context, got_book = app.read_input(io.StringIO(json.dumps([context, book])))
        assert got_context == context
        assert got_book == book


class TestSetupLogging:
    def test_rich_handler_on_stderr(self, monkeypatch):
        calls = {}
        monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))
        _setup_logging("debug")
        assert calls["level"] == "DEBUG"
        assert calls["force"] is True
        (handler,) = calls["handlers"]
        assert isinstance(handler, RichHandler)
        assert handler.console.stderr is True
