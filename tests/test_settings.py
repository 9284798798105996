"""Tests for configs.settings."""

import pytest

from configs.settings import Settings


def test_defaults(monkeypatch):
    for name in ("HOST", "PORT", "LOG_DIR", "FLAT_STORAGE", "TAIL_LIMIT", "COOKIE_NAME", "COOKIE_MAX_AGE"):
        monkeypatch.delenv(f"NUI_LOGGER_{name}", raising=False)

    s = Settings()

    assert s.host == "0.0.0.0"
    assert s.port == 7654
    assert str(s.log_dir) == "logs"
    assert s.flat_storage is False
    assert s.tail_limit == 200
    assert s.cookie_name == "nui_logger_auth"
    assert s.cookie_max_age == 86400
    assert s.max_body_bytes == 50 * 1024 * 1024


def test_missing_pin_raises(monkeypatch):
    monkeypatch.delenv("NUI_LOGGER_PIN", raising=False)
    with pytest.raises(RuntimeError):
        Settings().pin


@pytest.mark.parametrize("value, expected", [("true", True), ("1", True), ("off", False), ("garbage", False)])
def test_flat_storage_flag(monkeypatch, value, expected):
    monkeypatch.setenv("NUI_LOGGER_FLAT_STORAGE", value)
    assert Settings().flat_storage is expected


@pytest.mark.parametrize("value, expected", [("50", 50), ("200", 200), ("500", 200)])
def test_tail_limit_is_capped(monkeypatch, value, expected):
    monkeypatch.setenv("NUI_LOGGER_TAIL_LIMIT", value)
    assert Settings().tail_limit == expected
