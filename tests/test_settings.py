"""Tests for settings loading."""

from pathlib import Path

import pytest

from quick_csv.settings import (
    CONFIG_ENV_VAR,
    DEFAULT_CONFIG_FILE,
    Settings,
    load_settings,
    settings_from_dict,
    settings_path,
)


def test_defaults() -> None:
    """Test default settings values."""
    settings = Settings()

    assert settings.max_display_rows == 1000
    assert settings.auto_detect_headers is True
    assert settings.default_delimiter == ""


def test_parse_options_defaults() -> None:
    """Test that defaults leave detection to the parser."""
    assert Settings().parse_options() == {
        "max_rows": 1000,
        "has_headers": None,
        "delimiter": None,
    }


def test_parse_options_overrides() -> None:
    """Test options derived from non-default settings."""
    settings = Settings(
        max_display_rows=50,
        auto_detect_headers=False,
        default_delimiter=";",
    )

    assert settings.parse_options() == {
        "max_rows": 50,
        "has_headers": True,
        "delimiter": ";",
    }


def test_load_missing_file_gives_defaults(tmp_path: Path) -> None:
    """Test that a missing settings file is not an error."""
    assert load_settings(tmp_path / "missing.toml") == Settings()


def test_load_settings_file(tmp_path: Path) -> None:
    """Test loading values from TOML."""
    path = tmp_path / "settings.toml"
    path.write_text(
        'max_display_rows = 25\nauto_detect_headers = false\ndefault_delimiter = "|"\n',
    )

    settings = load_settings(path)

    assert settings == Settings(
        max_display_rows=25,
        auto_detect_headers=False,
        default_delimiter="|",
    )


def test_unknown_keys_are_ignored(
    tmp_path: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Test that unknown settings only produce a warning."""
    path = tmp_path / "settings.toml"
    path.write_text('theme_mode = "dark"\nmax_display_rows = 10\n')

    settings = load_settings(path)

    assert settings.max_display_rows == 10
    assert "theme_mode" in caplog.text


def test_invalid_toml(tmp_path: Path) -> None:
    """Test that malformed TOML raises ValueError."""
    path = tmp_path / "settings.toml"
    path.write_text("max_display_rows = \n")

    with pytest.raises(ValueError, match="Invalid settings file"):
        load_settings(path)


@pytest.mark.parametrize(
    "values",
    [
        {"max_display_rows": "many"},
        {"max_display_rows": True},
        {"auto_detect_headers": 1},
        {"default_delimiter": 5},
    ],
)
def test_wrong_types(values: dict[str, object]) -> None:
    """Test that values of the wrong type are rejected."""
    with pytest.raises(ValueError, match="must be of type"):
        settings_from_dict(values)


def test_invalid_values() -> None:
    """Test validation of setting values."""
    with pytest.raises(ValueError, match="positive"):
        Settings(max_display_rows=0)
    with pytest.raises(ValueError, match="single character"):
        Settings(default_delimiter=";;")


def test_settings_path_resolution(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Test explicit path, environment variable and default location."""
    explicit = tmp_path / "explicit.toml"
    from_env = tmp_path / "env.toml"

    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    assert settings_path() == DEFAULT_CONFIG_FILE

    monkeypatch.setenv(CONFIG_ENV_VAR, str(from_env))
    assert settings_path() == from_env
    assert settings_path(explicit) == explicit
