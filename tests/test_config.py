"""Tests for configuration parsing."""

import pytest

from worktimer.config import Config, _parse_id_list


def test_parse_id_list():
    """Test admin ID list parsing."""
    assert _parse_id_list("") == frozenset()
    assert _parse_id_list("12, 34,,56 ") == frozenset({12, 34, 56})


def test_validate_requires_token(monkeypatch):
    """Test validation fails without a bot token."""
    monkeypatch.setattr(Config, "TELEGRAM_BOT_TOKEN", "")
    with pytest.raises(ValueError):
        Config.validate()


def test_validate_rejects_bad_interval(monkeypatch):
    """Test validation fails for a non-positive tick interval."""
    monkeypatch.setattr(Config, "TELEGRAM_BOT_TOKEN", "123:abc")
    monkeypatch.setattr(Config, "TICK_INTERVAL", 0)
    with pytest.raises(ValueError):
        Config.validate()

    monkeypatch.setattr(Config, "TICK_INTERVAL", 60)
    monkeypatch.setattr(Config, "PANEL_REFRESH_INTERVAL", 10)
    Config.validate()
