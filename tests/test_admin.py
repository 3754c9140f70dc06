"""
Tests for the admin gate and the settings it reads.
"""

import pytest
from pydantic import SecretStr

from codehunt.auth.admin import AdminGate, AuthenticationError
from codehunt.config.settings import AppSettings, load_settings


@pytest.fixture
def gate() -> AdminGate:
    return AdminGate("admin", SecretStr("s3cret-pass"))


def test_login_with_valid_credentials(gate):
    assert gate.login("admin", "s3cret-pass")
    assert gate.is_admin()
    gate.require_admin()


@pytest.mark.parametrize("username, password", [("admin", "wrong"), ("root", "s3cret-pass"), ("", "")])
def test_login_rejects_bad_credentials(gate, username, password):
    assert not gate.login(username, password)
    assert not gate.is_admin()
    with pytest.raises(AuthenticationError):
        gate.require_admin()


def test_logout(gate):
    gate.login("admin", "s3cret-pass")
    gate.logout()
    assert not gate.is_admin()


def test_gate_from_settings():
    settings = AppSettings(admin_username="host", admin_password="hunter22")
    gate = AdminGate.from_settings(settings)
    assert gate.login("host", "hunter22")


def test_settings_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("CODEHUNT_STORAGE_BACKEND", "memory")
    monkeypatch.setenv("CODEHUNT_STORAGE_NAMESPACE", "event-7")
    monkeypatch.setenv("CODEHUNT_LOG_LEVEL", "debug")
    settings = load_settings()
    assert settings.storage_backend.value == "memory"
    assert settings.storage_namespace == "event-7"
    assert settings.log_level == "DEBUG"


def test_invalid_log_level_falls_back_to_info(monkeypatch):
    monkeypatch.setenv("CODEHUNT_LOG_LEVEL", "chatty")
    assert load_settings().log_level == "INFO"
