from pathlib import Path

import pytest

from persistent_settings import (
    ConfigurationError,
    Field,
    FieldKind,
    IniSettings,
    XmlSettings,
)
from persistent_settings.core.ini_file import IniFile


class AppSettings(IniSettings):
    def __init__(self, path: Path, encryption=None, *, encrypt_token: bool = False) -> None:
        self.count = 0
        self.tags: list[str] = []
        self.token = ""
        self.window_title = "not persisted"
        self._encrypt_token = encrypt_token
        super().__init__(path, encryption, section="App")

    def fields(self) -> list[Field]:
        return [
            Field.attribute(self, "count", FieldKind.INT32, name="Count"),
            Field.attribute(self, "tags", FieldKind.STRING_ARRAY, name="Tags"),
            Field.attribute(self, "token", FieldKind.STRING, name="Token", encrypted=self._encrypt_token),
            Field.attribute(self, "window_title", FieldKind.STRING, name="WindowTitle", excluded=True),
        ]


def test_count_survives_save_and_load(tmp_path: Path) -> None:
    path = tmp_path / "app.ini"
    settings = AppSettings(path)
    settings.count = -59883
    settings.save()

    fresh = AppSettings(path)
    fresh.load()
    assert fresh.count == -59883


def test_tags_with_commas_and_quotes_survive(tmp_path: Path) -> None:
    path = tmp_path / "app.ini"
    settings = AppSettings(path)
    settings.tags = ["a,b", 'c"d', "e"]
    settings.save()

    fresh = AppSettings(path)
    fresh.load()
    assert fresh.tags == ["a,b", 'c"d', "e"]


def test_load_from_missing_file_keeps_defaults(tmp_path: Path) -> None:
    settings = AppSettings(tmp_path / "does" / "not" / "exist.ini")
    settings.count = 12
    assert settings.load() == []
    assert settings.count == 12
    assert settings.tags == []


def test_encrypted_field_without_adapter_fails_at_construction(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        AppSettings(tmp_path / "app.ini", encrypt_token=True)
    assert not (tmp_path / "app.ini").exists()


def test_encrypted_field_is_opaque_on_disk(tmp_path: Path) -> None:
    path = tmp_path / "app.ini"
    settings = AppSettings(path, "Password123", encrypt_token=True)
    settings.token = "s3cr3t-token"
    settings.save()

    ini = IniFile()
    ini.load(path)
    stored = ini.get_string("App", "Token")
    assert stored != "s3cr3t-token"
    assert "s3cr3t-token" not in path.read_text(encoding="utf-8")

    fresh = AppSettings(path, "Password123", encrypt_token=True)
    fresh.load()
    assert fresh.token == "s3cr3t-token"


def test_wrong_password_leaves_field_and_reports_error(tmp_path: Path) -> None:
    path = tmp_path / "app.ini"
    settings = AppSettings(path, "right", encrypt_token=True)
    settings.token = "value"
    settings.count = 5
    settings.save()

    fresh = AppSettings(path, "wrong", encrypt_token=True)
    errors = fresh.load()
    assert [e.field_name for e in errors] == ["Token"]
    assert fresh.last_errors == errors
    assert fresh.token == ""
    assert fresh.count == 5


def test_hand_edited_file_is_read_case_insensitively(tmp_path: Path) -> None:
    path = tmp_path / "app.ini"
    path.write_text(
        "; edited by hand\n"
        "[app]\n"
        "COUNT=42\n"
        "tags=x,y\n"
        "WindowTitle=ignored\n",
        encoding="utf-8",
    )
    settings = AppSettings(path)
    settings.load()
    assert settings.count == 42
    assert settings.tags == ["x", "y"]
    assert settings.window_title == "not persisted"


def test_corrupt_value_is_skipped_not_fatal(tmp_path: Path) -> None:
    path = tmp_path / "app.ini"
    path.write_text("[App]\nCount=lots\nTags=ok\n", encoding="utf-8")
    settings = AppSettings(path)
    settings.count = 3
    errors = settings.load()
    assert len(errors) == 1
    assert settings.count == 3
    assert settings.tags == ["ok"]


def test_save_replaces_previous_file_contents(tmp_path: Path) -> None:
    path = tmp_path / "app.ini"
    path.write_text("[Stale]\nOld=1\n", encoding="utf-8")
    settings = AppSettings(path)
    settings.count = 1
    settings.save()
    assert path.read_text(encoding="utf-8") == "[App]\nCount=1\nTags=\nToken=\n"


def test_blank_filename_rejected() -> None:
    with pytest.raises(ConfigurationError):
        XmlSettings("  ", fields=[])
