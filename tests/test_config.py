"""
Tests for LiquidConfig: defaults, overrides, JSON file loading.
"""

import json
import logging
import sys
import os

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from liquid_config import (
    BenchmarkConfig,
    LiquidConfig,
    NetworkConfig,
    NeuronConfig,
    PlasticityConfig,
    SynapseConfig,
    load_liquid_config,
)
from liquid_foundation import Network


# ══════════════════════════════════════════════════════════════════════
# Defaults
# ══════════════════════════════════════════════════════════════════════


class TestLiquidConfigDefaults:
    def test_default_neuron(self):
        cfg = load_liquid_config()
        assert cfg.neuron.threshold == 1.0
        assert cfg.neuron.time_constant == 10.0

    def test_default_synapse(self):
        cfg = load_liquid_config()
        assert cfg.synapse.initial_weight == 0.5
        assert cfg.synapse.delay == 1.0
        assert cfg.synapse.min_weight == 0.0
        assert cfg.synapse.max_weight == 10.0

    def test_default_network(self):
        cfg = load_liquid_config()
        assert cfg.network.process_delta_time == 0.1
        assert cfg.network.output_count == 1
        assert cfg.network.max_workers == 0

    def test_default_plasticity_disabled(self):
        cfg = load_liquid_config()
        assert cfg.plasticity.hebbian_rate == 0.0
        assert cfg.plasticity.decay_rate == 0.0

    def test_default_benchmark(self):
        cfg = load_liquid_config()
        assert cfg.benchmark.neuron_counts == [32, 64, 128]
        assert cfg.benchmark.connectivity == [0.3, 0.4, 0.5]
        assert cfg.benchmark.seed == 42
        assert cfg.benchmark.dataset_length == 1000

    def test_section_types(self):
        cfg = LiquidConfig()
        assert isinstance(cfg.neuron, NeuronConfig)
        assert isinstance(cfg.synapse, SynapseConfig)
        assert isinstance(cfg.network, NetworkConfig)
        assert isinstance(cfg.plasticity, PlasticityConfig)
        assert isinstance(cfg.benchmark, BenchmarkConfig)

    def test_list_defaults_not_shared(self):
        a, b = LiquidConfig(), LiquidConfig()
        a.benchmark.neuron_counts.append(256)
        assert b.benchmark.neuron_counts == [32, 64, 128]

    def test_to_dict(self):
        d = LiquidConfig().to_dict()
        assert set(d) == {"neuron", "synapse", "network", "plasticity", "benchmark"}
        assert d["synapse"]["max_weight"] == 10.0


# ══════════════════════════════════════════════════════════════════════
# Overrides
# ══════════════════════════════════════════════════════════════════════


class TestLiquidConfigOverrides:
    def test_override_neuron(self):
        cfg = load_liquid_config({"neuron": {"threshold": 0.8}})
        assert cfg.neuron.threshold == 0.8
        # Other defaults preserved
        assert cfg.neuron.time_constant == 10.0

    def test_override_multiple_sections(self):
        cfg = load_liquid_config({
            "network": {"output_count": 3},
            "plasticity": {"hebbian_rate": 0.05},
        })
        assert cfg.network.output_count == 3
        assert cfg.plasticity.hebbian_rate == 0.05

    def test_unknown_keys_ignored(self, caplog):
        with caplog.at_level(logging.WARNING, logger="liquidnet.config"):
            cfg = load_liquid_config({"synapse": {"nonexistent_key": 42}})
        assert not hasattr(cfg.synapse, "nonexistent_key")
        assert "nonexistent_key" in caplog.text

    def test_unknown_section_ignored(self):
        cfg = load_liquid_config({"bogus": {"threshold": 5.0}})
        assert cfg.neuron.threshold == 1.0


# ══════════════════════════════════════════════════════════════════════
# JSON file
# ══════════════════════════════════════════════════════════════════════


class TestLiquidConfigFile:
    def test_load_from_json_file(self, tmp_path):
        config_file = tmp_path / "liquidnet.json"
        config_file.write_text(json.dumps({
            "synapse": {"delay": 0.5},
            "benchmark": {"neuron_counts": [8], "connectivity": [0.2]},
        }))
        cfg = load_liquid_config(config_path=str(config_file))
        assert cfg.synapse.delay == 0.5
        assert cfg.benchmark.neuron_counts == [8]
        assert cfg.benchmark.connectivity == [0.2]

    def test_dict_overrides_win_over_file(self, tmp_path):
        config_file = tmp_path / "liquidnet.json"
        config_file.write_text(json.dumps({"neuron": {"threshold": 2.0}}))
        cfg = load_liquid_config(
            overrides={"neuron": {"threshold": 3.0}},
            config_path=str(config_file),
        )
        assert cfg.neuron.threshold == 3.0

    def test_missing_file_uses_defaults(self, caplog):
        with caplog.at_level(logging.WARNING, logger="liquidnet.config"):
            cfg = load_liquid_config(config_path="/nonexistent/liquidnet.json")
        assert cfg.neuron.threshold == 1.0
        assert "not found" in caplog.text

    def test_malformed_file_uses_defaults(self, tmp_path, caplog):
        config_file = tmp_path / "broken.json"
        config_file.write_text("{not json")
        with caplog.at_level(logging.WARNING, logger="liquidnet.config"):
            cfg = load_liquid_config(config_path=str(config_file))
        assert cfg == LiquidConfig()
        assert "Failed to load" in caplog.text

    def test_non_dict_section_uses_defaults(self, tmp_path, caplog):
        config_file = tmp_path / "scalar.json"
        config_file.write_text(json.dumps({"neuron": 5}))
        with caplog.at_level(logging.WARNING, logger="liquidnet.config"):
            cfg = load_liquid_config(config_path=str(config_file))
        assert cfg.neuron.threshold == 1.0
        assert "Failed to load" in caplog.text


# ══════════════════════════════════════════════════════════════════════
# Wiring into Network
# ══════════════════════════════════════════════════════════════════════


class TestNetworkUsesConfig:
    def test_process_delta_time(self):
        net = Network(load_liquid_config({"network": {"process_delta_time": 0.5}}))
        net.new_neuron()
        net.process([0.0])
        assert net.current_time == pytest.approx(0.5)

    def test_network_keeps_config_instance(self):
        cfg = load_liquid_config()
        assert Network(cfg).config is cfg
