import importlib

import pytest

from attendance_leave.config import get_settings_module
from attendance_leave.config.settings import REQUIRED_ENV_VARS, load_settings
from attendance_leave.config.testing import ENV_DEFAULTS
from attendance_leave.core.exceptions import ConfigurationError
from attendance_leave.main import load_app_settings


def test_every_required_variable_has_a_test_default():
    assert set(REQUIRED_ENV_VARS) <= set(ENV_DEFAULTS)


def test_load_settings_builds_immutable_settings():
    settings = load_settings(ENV_DEFAULTS)

    assert settings.port == 5000
    assert settings.sheets.spreadsheet_id == "test-spreadsheet"
    assert settings.sheets.service_account_info["private_key"].count("\n") == 3
    assert settings.cloudinary.cloud_name == "test-cloud"
    with pytest.raises(AttributeError):
        settings.port = 1


def test_missing_variables_are_all_listed():
    env = dict(ENV_DEFAULTS)
    del env["JWT_SECRET"]
    env["PORT"] = ""

    with pytest.raises(ConfigurationError) as exc:
        load_settings(env)

    assert "PORT" in str(exc.value)
    assert "JWT_SECRET" in str(exc.value)


def test_port_must_be_numeric():
    with pytest.raises(ConfigurationError):
        load_settings(dict(ENV_DEFAULTS, PORT="http"))


def test_secrets_not_in_repr():
    text = repr(load_settings(ENV_DEFAULTS))

    assert ENV_DEFAULTS["CLOUDINARY_API_SECRET"] not in text
    assert "PRIVATE KEY" not in text


@pytest.mark.parametrize(
    "env,module",
    [
        ("production", "attendance_leave.config.production"),
        ("test", "attendance_leave.config.testing"),
        ("anything", "attendance_leave.config.development"),
    ],
)
def test_settings_module_from_app_env(monkeypatch, env, module):
    monkeypatch.setenv("APP_ENV", env)

    assert get_settings_module() == module


def test_testing_module_fills_defaults(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")

    settings = load_app_settings({"SPREADSHEET_ID": "override"})

    assert settings.sheets.spreadsheet_id == "override"
    assert settings.debug is False


def test_production_refuses_to_start_without_env(monkeypatch):
    monkeypatch.setenv("APP_ENV", "production")

    with pytest.raises(ConfigurationError):
        load_app_settings({})


@pytest.mark.parametrize("env", ["development", "production", "testing"])
def test_settings_modules_only_carry_what_the_loader_reads(monkeypatch, env):
    monkeypatch.setenv("APP_ENV", env)
    module = importlib.import_module(get_settings_module())

    assert {name for name in vars(module) if name.isupper()} == {"DEBUG", "ENV_DEFAULTS"}
