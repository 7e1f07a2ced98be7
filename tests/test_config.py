"""Tests for the configuration manager."""

from pathlib import Path

import pytest

from config import ConfigurationManager, get_config
from ledger_ocr.utils.exceptions import ConfigurationError, LedgerOCRError


@pytest.fixture(autouse=True)
def fresh_config():
    ConfigurationManager.reset()
    yield
    ConfigurationManager.reset()


class TestConfigurationManager:
    """Tests for ConfigurationManager."""

    def test_default_values(self):
        config = ConfigurationManager()

        assert config.get("parser.items.max_rate") == 1000000
        assert config.get("parser.items.placeholder_name") == "Invoice Item"
        assert get_config("pipeline.empty_item_name") == "Item 1"

    def test_missing_key_default(self):
        assert get_config("parser.nonexistent.key", "fallback") == "fallback"

    def test_singleton(self):
        assert ConfigurationManager() is ConfigurationManager()

    def test_paths_resolved(self):
        assert Path(get_config("paths.output_dir")).is_absolute()

    def test_custom_file(self, tmp_path):
        custom = tmp_path / "custom.yaml"
        custom.write_text("parser:\n  total:\n    tail_lines: 3\n", encoding='utf-8')

        config = ConfigurationManager(str(custom))

        assert config.get("parser.total.tail_lines") == 3
        assert config.get("parser.party.scan_lines", 5) == 5

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            ConfigurationManager(str(tmp_path / "missing.yaml"))

        assert isinstance(exc_info.value, LedgerOCRError)
        assert exc_info.value.details["reason"] == "file not found"

    def test_invalid_yaml(self, tmp_path):
        broken = tmp_path / "broken.yaml"
        broken.write_text("parser: [unclosed\n", encoding='utf-8')

        with pytest.raises(ConfigurationError):
            ConfigurationManager(str(broken))

    def test_top_level_must_be_mapping(self, tmp_path):
        listing = tmp_path / "list.yaml"
        listing.write_text("- parser\n- ocr\n", encoding='utf-8')

        with pytest.raises(ConfigurationError):
            ConfigurationManager(str(listing))

    def test_failed_load_leaves_no_instance_behind(self, tmp_path):
        with pytest.raises(ConfigurationError):
            ConfigurationManager(str(tmp_path / "missing.yaml"))

        assert ConfigurationManager().get("parser.party.scan_lines") == 5

    def test_get_all_is_a_copy(self):
        config = ConfigurationManager()
        config.get_all().pop("parser")

        assert config.get("parser.party.scan_lines") == 5
