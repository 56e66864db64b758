"""Tests for the renderer availability probe."""

import logging
import subprocess

import pytest

from mermaid_check import renderer
from mermaid_check.check_exceptions import RendererUnavailableError
from mermaid_check.renderer import RendererProbe, check_renderer


class TestRendererProbe:
    def test_available_when_on_path(self, monkeypatch):
        monkeypatch.setattr(renderer.shutil, "which", lambda cmd: f"/usr/bin/{cmd}")
        assert RendererProbe("mmdc").is_available()

    def test_unavailable_when_missing(self, monkeypatch):
        monkeypatch.setattr(renderer.shutil, "which", lambda cmd: None)
        probe = RendererProbe("mmdc")
        assert not probe.is_available()
        assert probe.version() is None

    def test_version(self, monkeypatch):
        monkeypatch.setattr(renderer.shutil, "which", lambda cmd: "/usr/bin/mmdc")
        calls = []

        def fake_run(args, **kwargs):
            calls.append(args)
            return subprocess.CompletedProcess(args, 0, stdout="10.9.1\n", stderr="")

        monkeypatch.setattr(renderer.subprocess, "run", fake_run)
        assert RendererProbe().version() == "10.9.1"
        assert calls == [["/usr/bin/mmdc", "--version"]]

    def test_version_failure(self, monkeypatch):
        monkeypatch.setattr(renderer.shutil, "which", lambda cmd: "/usr/bin/mmdc")
        monkeypatch.setattr(
            renderer.subprocess,
            "run",
            lambda args, **kwargs: subprocess.CompletedProcess(args, 1, stdout="", stderr="boom"),
        )
        assert RendererProbe().version() is None

    def test_version_timeout(self, monkeypatch):
        monkeypatch.setattr(renderer.shutil, "which", lambda cmd: "/usr/bin/mmdc")

        def fake_run(args, **kwargs):
            raise subprocess.TimeoutExpired(args, kwargs.get("timeout"))

        monkeypatch.setattr(renderer.subprocess, "run", fake_run)
        assert RendererProbe().version() is None


class TestCheckRenderer:
    def test_available(self, make_probe):
        assert check_renderer(make_probe(available=True), required=True) is True

    def test_missing_not_required(self, make_probe):
        assert check_renderer(make_probe(available=False), required=False) is False

    def test_missing_required(self, make_probe):
        with pytest.raises(RendererUnavailableError) as exc_info:
            check_renderer(make_probe(available=False, command="mmdc"), required=True)
        assert "mmdc" in str(exc_info.value)
        assert "npm install -g @mermaid-js/mermaid-cli" in str(exc_info.value)

    def test_missing_not_required_logs_warning(self, make_probe, caplog):
        with caplog.at_level(logging.WARNING, logger="mermaid_check.renderer"):
            check_renderer(make_probe(available=False, command="mmdc"), required=False)
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "mmdc" in warnings[0].getMessage()
