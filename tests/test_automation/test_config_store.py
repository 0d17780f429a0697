"""
Tests for ConfigStore: YAML persistence with per-field defaults.
"""
import json

import yaml
from adaptive_trader.automation.config_store import ConfigStore
from adaptive_trader.signals.config import StrategyConfig, DEFAULT_CONFIG


class TestConfigStore:
    """Load and save."""

    def test_missing_file_gives_defaults(self, tmp_path):
        store = ConfigStore(tmp_path / "strategy.yaml")
        assert store.load() == DEFAULT_CONFIG

    def test_save_and_load(self, tmp_path):
        store = ConfigStore(tmp_path / "nested" / "strategy.yaml")
        config = StrategyConfig(short_window=5, long_window=34, threshold=-0.25,
                                risk_per_trade=0.33, max_position=1.5, learning_rate=0.1)
        store.save(config)
        assert store.config_file.exists()
        assert store.load() == config

    def test_saved_file_is_flat_record(self, tmp_path):
        store = ConfigStore(tmp_path / "strategy.yaml")
        store.save(DEFAULT_CONFIG)
        with open(store.config_file) as f:
            assert yaml.safe_load(f) == DEFAULT_CONFIG.to_dict()

    def test_partially_corrupt_record(self, tmp_path):
        path = tmp_path / "strategy.yaml"
        path.write_text("short_window: 6\nlong_window: banana\nthreshold: 12\nrisk_per_trade: 0.4\n")
        config = ConfigStore(path).load()
        assert config.short_window == 6
        assert config.long_window == DEFAULT_CONFIG.long_window
        assert config.threshold == DEFAULT_CONFIG.threshold
        assert config.risk_per_trade == 0.4

    def test_invalid_yaml_gives_defaults(self, tmp_path):
        path = tmp_path / "strategy.yaml"
        path.write_text("short_window: [unclosed\n")
        assert ConfigStore(path).load() == DEFAULT_CONFIG

    def test_non_mapping_gives_defaults(self, tmp_path):
        path = tmp_path / "strategy.yaml"
        path.write_text("- 1\n- 2\n")
        assert ConfigStore(path).load() == DEFAULT_CONFIG

    def test_legacy_json_record(self, tmp_path):
        path = tmp_path / "agentic-config.json"
        path.write_text(json.dumps({
            'shortWindow': 9, 'longWindow': 26, 'threshold': 0.3,
            'riskPerTrade': 0.2, 'maxPosition': 2, 'learningRate': 0.15,
        }))
        config = ConfigStore(path).load()
        assert config == StrategyConfig(short_window=9, long_window=26, threshold=0.3,
                                        risk_per_trade=0.2, max_position=2.0, learning_rate=0.15)
