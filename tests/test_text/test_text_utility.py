"""
Tests for the process-wide TextUtility instance.
"""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from textkit.core.config_loader import get_config
from textkit.text.text_utility import TextUtility, get_text_utility, reset_text_utility


class TestGetTextUtility:
    """Tests for get_text_utility and reset_text_utility."""

    def test_returns_same_instance(self, reset_text_utility_singleton):
        """Test that get_text_utility returns a singleton."""
        assert get_text_utility() is get_text_utility()

    def test_reset_creates_new_instance(self, reset_text_utility_singleton):
        """Test that reset_text_utility discards the instance."""
        first = get_text_utility()
        reset_text_utility()

        assert get_text_utility() is not first

    def test_uses_loaded_config(self, temp_config: Path, reset_text_utility_singleton):
        """Test that settings come from the loaded configuration."""
        get_config(temp_config)

        utility = get_text_utility()

        assert utility.config.slug_separator == "_"
        assert utility.slug("Hello World") == "hello_world"
        assert utility.snake("fooBar") == "foo-bar"
        assert utility.words("one two three four", end=None) == "one two three [more]"
        assert len(utility.random()) == 24

    def test_defaults_without_config(
        self, temp_dir: Path, monkeypatch, reset_text_utility_singleton
    ):
        """Test that defaults are used when no config file exists."""
        monkeypatch.chdir(temp_dir)

        utility = get_text_utility()

        assert utility.config.slug_separator == "-"
        assert utility.slug("Hello World") == "hello-world"

    def test_concurrent_first_use(self, reset_text_utility_singleton):
        """Test that concurrent first calls share one instance."""
        with ThreadPoolExecutor(max_workers=8) as pool:
            instances = list(pool.map(lambda _: get_text_utility(), range(32)))

        assert all(instance is instances[0] for instance in instances)
        assert isinstance(instances[0], TextUtility)
