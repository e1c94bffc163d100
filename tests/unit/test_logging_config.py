"""ロギング設定のテスト"""

import logging

import pytest

from vkire_proximity.shared.logging import config
from vkire_proximity.shared.logging.config import get_logger, setup_logging


def test_console_logs_go_to_stderr(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    """コンソールログはstderrに出力され、stdoutは空のまま"""
    root = logging.getLogger()
    monkeypatch.setattr(config, "_logger_configured", False)
    monkeypatch.setattr(root, "handlers", [])
    monkeypatch.setattr(root, "level", root.level)

    setup_logging(level="INFO")
    get_logger("vkire_proximity.demo").info("ranked 3 entities")

    captured = capsys.readouterr()
    assert "ranked 3 entities" in captured.err
    assert captured.out == ""
