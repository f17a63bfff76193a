"""
Tests for configuration loading.
"""

from pathlib import Path

import pytest

from librarium import Config
from librarium.Config import ConfigError, Settings, load_settings


def _environ(base: Path, prompts: Path, **extra) -> dict:
    env = {
        "DIRECTORY_BROWSING_PATH": str(base),
        "PROMPTS_DIR_PATH": str(prompts),
    }
    env.update(extra)
    return env


class TestLoadSettings:
    """Tests for load_settings."""

    def test_loads_required_paths(self, sample_tree, prompt_library):
        """Should resolve both directories."""
        settings = load_settings(environ=_environ(sample_tree, prompt_library))

        assert settings.base_directory == sample_tree.resolve()
        assert settings.prompts_directory == prompt_library.resolve()

    def test_defaults_applied(self, sample_tree, prompt_library):
        """Optional fields should fall back to schema defaults."""
        settings = load_settings(environ=_environ(sample_tree, prompt_library))

        assert settings.static_base_url == ""
        assert settings.port == 8000
        assert settings.log_level == "INFO"
        assert ".md" in settings.preview_extensions
        assert settings.prompt_extensions == [".yml", ".yaml", ".json"]

    def test_missing_required_fails_fast(self, sample_tree):
        """Should raise ConfigError naming every missing key."""
        with pytest.raises(ConfigError, match="PROMPTS_DIR_PATH"):
            load_settings(environ={"DIRECTORY_BROWSING_PATH": str(sample_tree)})

    def test_missing_base_directory_on_disk(self, temp_dir, prompt_library):
        """Should reject a base directory that does not exist."""
        with pytest.raises(ConfigError, match="does not exist"):
            load_settings(environ=_environ(temp_dir / "nope", prompt_library))

    def test_leading_equals_stripped_from_paths(self, sample_tree, prompt_library):
        """KEY==/path typos should still resolve."""
        env = _environ(sample_tree, prompt_library)
        env["PROMPTS_DIR_PATH"] = "=" + env["PROMPTS_DIR_PATH"]

        settings = load_settings(environ=env)

        assert settings.prompts_directory == prompt_library.resolve()

    def test_list_values_normalized(self, sample_tree, prompt_library):
        """Comma-separated extensions gain a leading dot and lower case."""
        env = _environ(sample_tree, prompt_library, PREVIEW_EXTENSIONS="TXT, .Md ,")

        settings = load_settings(environ=env)

        assert settings.preview_extensions == [".txt", ".md"]

    def test_static_base_url_trailing_slash_removed(self, sample_tree, prompt_library):
        """Static base URL should not end with a slash."""
        env = _environ(sample_tree, prompt_library, STATIC_FILE_BASE_URL="https://cdn.example.com/files/")

        settings = load_settings(environ=env)

        assert settings.static_base_url == "https://cdn.example.com/files"

    def test_invalid_port(self, sample_tree, prompt_library):
        """Non-numeric ports should be rejected."""
        with pytest.raises(ConfigError):
            load_settings(environ=_environ(sample_tree, prompt_library, PORT="eighty"))

    def test_invalid_log_level(self, sample_tree, prompt_library):
        """Unknown log levels should be rejected."""
        with pytest.raises(ConfigError):
            load_settings(environ=_environ(sample_tree, prompt_library, LOG_LEVEL="chatty"))

    def test_env_file_loaded(self, temp_dir, sample_tree, prompt_library, monkeypatch):
        """Should read values from a .env file."""
        monkeypatch.delenv("DIRECTORY_BROWSING_PATH", raising=False)
        monkeypatch.delenv("PROMPTS_DIR_PATH", raising=False)
        env_file = temp_dir / ".env"
        env_file.write_text(
            f"DIRECTORY_BROWSING_PATH={sample_tree}\nPROMPTS_DIR_PATH={prompt_library}\n"
        )

        settings = load_settings(env_file=env_file)

        assert settings.base_directory == sample_tree.resolve()
        monkeypatch.delenv("DIRECTORY_BROWSING_PATH", raising=False)
        monkeypatch.delenv("PROMPTS_DIR_PATH", raising=False)


class TestSettings:
    """Tests for the Settings model."""

    def test_settings_are_frozen(self, settings):
        """Settings cannot be mutated after construction."""
        with pytest.raises(Exception):
            settings.static_base_url = "https://elsewhere"

    def test_get_settings_cached(self, sample_tree, prompt_library, monkeypatch):
        """get_settings() should load once and reuse the instance."""
        monkeypatch.setenv("DIRECTORY_BROWSING_PATH", str(sample_tree))
        monkeypatch.setenv("PROMPTS_DIR_PATH", str(prompt_library))

        first = Config.get_settings()
        second = Config.get_settings()

        assert isinstance(first, Settings)
        assert first is second
