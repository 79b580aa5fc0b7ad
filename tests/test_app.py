"""Tests for the TUI entry point."""

from inkwell import app


def test_main_configures_logging_before_running(monkeypatch):
    calls = []
    monkeypatch.setattr(app, "configure_logging", lambda *a, **kw: calls.append("logging"))
    monkeypatch.setattr(app.InkwellApp, "run", lambda self, *a, **kw: calls.append("run"))
    app.main()
    assert calls == ["logging", "run"]
