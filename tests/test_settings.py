"""
Tests for environment-driven settings.
"""

import pytest

from employee_api.core.settings import AppSettings
from employee_api.db.config import StoreSettings


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("http://a.test, http://b.test", ["http://a.test", "http://b.test"]),
        ('["http://a.test"]', ["http://a.test"]),
        ("*", ["*"]),
    ],
)
def test_cors_origins_from_env(monkeypatch, raw, expected):
    monkeypatch.setenv("CORS_ORIGINS", raw)
    assert AppSettings().CORS_ORIGINS == expected


def test_defaults_from_test_environment():
    settings = AppSettings()
    assert settings.ACCESS_TOKEN_EXPIRE_MINUTES == 30
    assert settings.DEFAULT_PER_PAGE == 10
    assert settings.MAX_PER_PAGE == 100
    assert settings.is_production is False


def test_production_flag():
    assert AppSettings(ENVIRONMENT="Production").is_production is True


def test_store_paths(tmp_path, monkeypatch):
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    monkeypatch.setenv("EMPLOYEES_FILE", "staff.json")
    settings = StoreSettings()
    assert settings.users_path == tmp_path / "users.json"
    assert settings.employees_path == tmp_path / "staff.json"
    assert settings.STORE_STRICT_LOAD is False
