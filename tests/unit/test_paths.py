import os
from pathlib import Path

import pytest

from persistent_settings import ConfigurationError, SettingsPaths


@pytest.mark.skipif(os.name == "nt", reason="XDG layout applies outside Windows")
def test_config_dir_uses_xdg_config_home(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert SettingsPaths.config_dir("MyApp") == tmp_path / "MyApp"
    assert SettingsPaths.settings_file("MyApp", "app.ini") == tmp_path / "MyApp" / "app.ini"


@pytest.mark.skipif(os.name == "nt", reason="XDG layout applies outside Windows")
def test_config_dir_defaults_to_dot_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    assert SettingsPaths.config_dir("MyApp") == Path.home() / ".config" / "MyApp"


@pytest.mark.skipif(os.name != "nt", reason="APPDATA layout applies on Windows")
def test_config_dir_uses_appdata(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("APPDATA", str(tmp_path))
    assert SettingsPaths.config_dir("MyApp") == tmp_path / "MyApp"


def test_expand_path_expands_variables(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("SETTINGS_TEST_DIR", str(tmp_path))
    assert SettingsPaths.expand_path("$SETTINGS_TEST_DIR/app.ini") == tmp_path / "app.ini"


@pytest.mark.parametrize("path", ["", "   "])
def test_expand_path_rejects_blank(path: str) -> None:
    with pytest.raises(ConfigurationError):
        SettingsPaths.expand_path(path)


def test_ensure_parent_creates_directories(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b" / "settings.ini"
    assert SettingsPaths.ensure_parent(target) == target.parent
    assert target.parent.is_dir()
