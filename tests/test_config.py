import os

import pytest
from pydantic import ValidationError

from fileshare.app.config import Settings, load_settings
from fileshare.cli import settings_from_args


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in (
        "FILESHARE_BASE_PATH",
        "FILESHARE_DISABLE_LISTING",
        "FILESHARE_KEEP_PARTIAL",
        "FILESHARE_HOST",
        "FILESHARE_PORT",
        "FILESHARE_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults_serve_the_working_directory(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    s = load_settings()
    assert os.path.samefile(s.base_path, tmp_path)
    assert s.disable_directory_listing is False
    assert s.keep_partial_uploads_on_error is False
    assert s.port == 8123
    assert s.host == "0.0.0.0"


def test_environment_is_read(tmp_path, monkeypatch):
    monkeypatch.setenv("FILESHARE_BASE_PATH", str(tmp_path))
    monkeypatch.setenv("FILESHARE_DISABLE_LISTING", "yes")
    monkeypatch.setenv("FILESHARE_KEEP_PARTIAL", "1")
    monkeypatch.setenv("FILESHARE_PORT", "9000")
    monkeypatch.setenv("FILESHARE_LOG_LEVEL", "DEBUG")

    s = load_settings()
    assert s.base_path == str(tmp_path)
    assert s.disable_directory_listing is True
    assert s.keep_partial_uploads_on_error is True
    assert s.port == 9000
    assert s.log_level == "debug"


def test_none_overrides_keep_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("FILESHARE_BASE_PATH", str(tmp_path))
    monkeypatch.setenv("FILESHARE_KEEP_PARTIAL", "true")
    s = load_settings(keep_partial_uploads_on_error=None, port=None)
    assert s.keep_partial_uploads_on_error is True


def test_settings_are_frozen(tmp_path):
    s = Settings(base_path=str(tmp_path))
    with pytest.raises(ValidationError):
        s.port = 1


def test_base_path_must_be_a_directory(tmp_path):
    f = tmp_path / "file.txt"
    f.write_text("x")
    with pytest.raises(ValidationError):
        Settings(base_path=str(f))
    with pytest.raises(ValidationError):
        Settings(base_path=str(tmp_path / "missing"))


def test_cli_arguments_override_environment(tmp_path, monkeypatch):
    other = tmp_path / "other"
    other.mkdir()
    monkeypatch.setenv("FILESHARE_BASE_PATH", str(tmp_path))
    monkeypatch.setenv("FILESHARE_PORT", "9000")

    s = settings_from_args([str(other), "--port", "8080", "--disable-listing"])
    assert s.base_path == str(other)
    assert s.port == 8080
    assert s.disable_directory_listing is True
    assert s.keep_partial_uploads_on_error is False


def test_cli_without_arguments_uses_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("FILESHARE_BASE_PATH", str(tmp_path))
    s = settings_from_args([])
    assert s.base_path == str(tmp_path)
    assert s.port == 8123
