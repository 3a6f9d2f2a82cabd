"""Tests for selection configuration."""

import pytest

from selection_config import (
    SELECTION_CONFIG_BASELINE,
    SELECTION_CONFIG_DEFAULT,
    SELECTION_CONFIG_RELEVANCE,
    SelectionConfig,
)


class TestSelectionConfig:
    """Test cases for SelectionConfig and presets."""

    def test_defaults(self):
        """Default config enables lazy optimization with adaptive k."""
        config = SelectionConfig()
        assert config.enabled is True
        assert config.alpha == 0.3
        assert config.k is None
        assert config.strategy == "lazy"
        assert config.embedder == "hashing"
        assert config.embedding_dim == 128

    def test_presets(self):
        """Presets differ only where intended."""
        assert SELECTION_CONFIG_DEFAULT == SelectionConfig()
        assert SELECTION_CONFIG_BASELINE.enabled is False
        assert SELECTION_CONFIG_RELEVANCE.alpha > SELECTION_CONFIG_DEFAULT.alpha


class TestFromEnv:
    """Test cases for SelectionConfig.from_env."""

    def test_empty_environment(self):
        """No variables gives the default config."""
        assert SelectionConfig.from_env({}) == SELECTION_CONFIG_DEFAULT

    def test_disable_flag(self):
        """USE_SUBMODULAR_OPTIMIZATION=false disables optimization."""
        config = SelectionConfig.from_env({"USE_SUBMODULAR_OPTIMIZATION": "False"})
        assert config.enabled is False

    def test_other_values_keep_enabled(self):
        """Any value other than 'false' keeps optimization on."""
        config = SelectionConfig.from_env({"USE_SUBMODULAR_OPTIMIZATION": "0"})
        assert config.enabled is True

    def test_numeric_overrides(self):
        """alpha, k and strategy can be overridden."""
        config = SelectionConfig.from_env({
            "SUBMODULAR_ALPHA": "0.5",
            "SUBMODULAR_K": "4",
            "SUBMODULAR_STRATEGY": " Eager ",
        })
        assert config.alpha == 0.5
        assert config.k == 4
        assert config.strategy == "eager"

    def test_base_not_mutated(self):
        """Overrides produce a new config and leave the base alone."""
        base = SelectionConfig(alpha=0.2)
        config = SelectionConfig.from_env({"SUBMODULAR_K": "2"}, base=base)
        assert config.k == 2
        assert config.alpha == 0.2
        assert base.k is None
        assert SELECTION_CONFIG_DEFAULT.k is None

    def test_invalid_number(self):
        """Unparseable numbers raise ValueError."""
        with pytest.raises(ValueError):
            SelectionConfig.from_env({"SUBMODULAR_K": "three"})

    def test_reads_os_environ(self, monkeypatch):
        """Without an explicit mapping, os.environ is used."""
        monkeypatch.setenv("USE_SUBMODULAR_OPTIMIZATION", "false")
        assert SelectionConfig.from_env().enabled is False


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
