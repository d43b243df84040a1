"""Unit tests for configuration management."""

import pytest

from wasteless.utils.config import Config


ENV_VARS = (
    "DEFAULT_RECIPE_COUNT",
    "MAX_AUGMENTING_PATHS",
    "EXPIRY_WINDOW_DAYS",
    "NO_EXPIRY_DAYS",
    "MATCH_CACHE_SIZE",
    "MAX_RECIPE_CORPUS",
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove engine variables so defaults apply."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestConfigInitialization:
    """Test Config class initialization and environment variable loading."""

    def test_config_loads_default_values(self, clean_env):
        """Test that Config uses default values when env vars not set."""
        config = Config()

        assert config.DEFAULT_RECIPE_COUNT == 5
        assert config.MAX_AUGMENTING_PATHS == 100
        assert config.EXPIRY_WINDOW_DAYS == 7
        assert config.NO_EXPIRY_DAYS == 999
        assert config.MATCH_CACHE_SIZE == 4096
        assert config.MAX_RECIPE_CORPUS == 1000

    def test_config_loads_from_environment(self, clean_env):
        """Test that Config reads values from environment variables."""
        clean_env.setenv("DEFAULT_RECIPE_COUNT", "3")
        clean_env.setenv("MAX_AUGMENTING_PATHS", "10")
        clean_env.setenv("EXPIRY_WINDOW_DAYS", "3")
        clean_env.setenv("MATCH_CACHE_SIZE", "0")

        config = Config()

        assert config.DEFAULT_RECIPE_COUNT == 3
        assert config.MAX_AUGMENTING_PATHS == 10
        assert config.EXPIRY_WINDOW_DAYS == 3
        assert config.MATCH_CACHE_SIZE == 0

    def test_config_non_integer_value_raises(self, clean_env):
        clean_env.setenv("DEFAULT_RECIPE_COUNT", "five")

        with pytest.raises(ValueError):
            Config()


class TestConfigValidation:
    """Test Config.validate() range checks."""

    def test_defaults_are_valid(self, clean_env):
        Config().validate()

    @pytest.mark.parametrize(
        "name, value",
        [
            ("DEFAULT_RECIPE_COUNT", "0"),
            ("MAX_AUGMENTING_PATHS", "0"),
            ("EXPIRY_WINDOW_DAYS", "-1"),
            ("MATCH_CACHE_SIZE", "-5"),
            ("MAX_RECIPE_CORPUS", "0"),
        ],
    )
    def test_out_of_range_value_raises(self, clean_env, name, value):
        clean_env.setenv(name, value)

        with pytest.raises(ValueError, match=name):
            Config().validate()

    def test_no_expiry_sentinel_must_exceed_window(self, clean_env):
        """Test that the no-expiry sentinel can never count as expiring."""
        clean_env.setenv("EXPIRY_WINDOW_DAYS", "30")
        clean_env.setenv("NO_EXPIRY_DAYS", "30")

        with pytest.raises(ValueError, match="NO_EXPIRY_DAYS"):
            Config().validate()


class TestModuleLevelConfig:
    """Test module-level config instance."""

    def test_config_is_importable_and_valid(self):
        from wasteless.utils.config import config

        assert isinstance(config, Config)
        config.validate()
