"""Tests for the benchmark harness and its CLI."""

import json
import logging
import sys
import os

import numpy as np
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from liquid_benchmark import (
    build_reservoir,
    format_datasets,
    format_summary_report,
    main,
    run_baseline,
    run_comprehensive_benchmarks,
    run_sequence,
    run_single_benchmark,
)
from liquid_config import LiquidConfig, load_liquid_config
from liquid_datasets import generate_lorenz_attractor, generate_mackey_glass, generate_sine_wave


@pytest.fixture
def small_config():
    return load_liquid_config({
        "benchmark": {"neuron_counts": [6], "connectivity": [0.3], "dataset_length": 60},
    })


class TestBuildReservoir:

    def test_no_connectivity(self):
        net = build_reservoir(10, 0.0)
        assert len(net.neurons) == 10
        assert len(net.synapses) == 0

    def test_full_connectivity(self):
        net = build_reservoir(8, 1.0)
        assert len(net.synapses) == 8 * 7
        for syn in net.synapses.values():
            assert syn.pre is not syn.post
            assert 0.0 <= syn.weight <= 1.0

    def test_seeded(self):
        a = build_reservoir(12, 0.4, seed=9)
        b = build_reservoir(12, 0.4, seed=9)
        assert [s.weight for s in a.synapses.values()] == [s.weight for s in b.synapses.values()]

    def test_output_count_follows_output_dim(self):
        cfg = LiquidConfig()
        net = build_reservoir(5, 0.2, input_dim=3, output_dim=3, config=cfg)
        assert net.config.network.output_count == 3
        # The caller's config is not mutated.
        assert cfg.network.output_count == 1

    def test_too_few_neurons(self):
        with pytest.raises(ValueError):
            build_reservoir(2, 0.5, input_dim=3)

    @pytest.mark.parametrize("p", [-0.1, 1.5])
    def test_bad_connectivity(self, p):
        with pytest.raises(ValueError):
            build_reservoir(4, p)


class TestRunSequence:

    def test_scalar_series(self):
        net = build_reservoir(4, 0.5)
        out = run_sequence(net, [0.1, 0.5, 1.2, 0.0])
        assert out.shape == (4, 1)
        assert np.all(np.isfinite(out))
        assert net.current_time == pytest.approx(0.4)

    def test_vector_series(self):
        net = build_reservoir(6, 0.5, input_dim=3, output_dim=3)
        out = run_sequence(net, np.ones((5, 3)) * 0.2)
        assert out.shape == (5, 3)


class TestSingleBenchmark:

    def test_mackey_glass(self, small_config):
        ds = generate_mackey_glass(60)
        r = run_single_benchmark(ds, "LNN-6", 6, 0.3, small_config)
        assert r.model_name == "LNN-6"
        assert r.dataset_name == "Mackey-Glass"
        assert r.network_size == 6
        assert np.isfinite(r.mean_squared_error)
        assert r.mean_squared_error >= 0.0
        assert r.inference_time >= 0.0
        assert r.memory_usage >= 0.0
        assert r.additional_metrics["connectivity"] == 0.3
        assert r.additional_metrics["synapses"] >= 0

    def test_lorenz(self, small_config):
        ds = generate_lorenz_attractor(80)
        r = run_single_benchmark(ds, "LNN-6", 6, 0.3, small_config)
        assert np.isfinite(r.mean_squared_error)

    def test_deterministic(self, small_config):
        ds = generate_sine_wave(60)
        a = run_single_benchmark(ds, "LNN-6", 6, 0.3, small_config)
        b = run_single_benchmark(ds, "LNN-6", 6, 0.3, small_config)
        assert a.mean_squared_error == b.mean_squared_error


class TestBaseline:

    def test_persistence(self):
        ds = generate_sine_wave(60)
        r = run_baseline(ds)
        seq = ds.sequence_length
        last_seen = ds.series[seq - 1:seq - 1 + ds.samples]
        expected = np.mean((last_seen - ds.targets[:, 0]) ** 2)
        assert r.model_name == "Persistence"
        assert r.mean_squared_error == pytest.approx(expected)

    def test_multi_dimensional(self):
        r = run_baseline(generate_lorenz_attractor(80))
        assert np.isfinite(r.mean_squared_error)


class TestComprehensive:

    def test_sweep(self, small_config):
        datasets = [generate_mackey_glass(60), generate_sine_wave(60)]
        results = run_comprehensive_benchmarks(small_config, datasets)
        assert [(r.dataset_name, r.model_name) for r in results] == [
            ("Mackey-Glass", "LNN-6"),
            ("Sine Wave", "LNN-6"),
        ]

    def test_mismatched_lengths_warn(self, caplog):
        cfg = load_liquid_config({"benchmark": {"neuron_counts": [4, 6], "connectivity": [0.5]}})
        with caplog.at_level(logging.WARNING, logger="liquidnet.benchmark"):
            results = run_comprehensive_benchmarks(cfg, [generate_mackey_glass(60)])
        assert len(results) == 1
        assert "differ in length" in caplog.text

    def test_summary_report(self):
        datasets = [generate_mackey_glass(60), generate_sine_wave(60)]
        report = format_summary_report([run_baseline(ds) for ds in datasets])
        assert report.startswith("=== BENCHMARK SUMMARY REPORT ===")
        assert "Dataset: Mackey-Glass" in report
        assert "Dataset: Sine Wave" in report
        assert report.count("Best performing model: Persistence") == 2
        assert "=== OVERALL STATISTICS ===" in report
        assert "Total benchmarks run: 2" in report

    def test_empty_report(self):
        assert "OVERALL" not in format_summary_report([])

    def test_format_datasets(self):
        text = format_datasets([generate_mackey_glass(60)])
        assert "Dataset: Mackey-Glass" in text
        assert "Sequence length: 20" in text
        assert "Samples: 39" in text


class TestCLI:

    def test_datasets_command(self, capsys):
        assert main(["datasets", "--length", "100"]) == 0
        out = capsys.readouterr().out
        assert "Mackey-Glass" in out
        assert "Sine Wave" in out
        assert "Lorenz Attractor" in out

    def test_baseline_command(self, capsys):
        assert main(["baseline", "--length", "60"]) == 0
        out = capsys.readouterr().out
        assert "=== BENCHMARK SUMMARY REPORT ===" in out
        assert "Persistence" in out
        assert "LNN-" not in out

    def test_standard_command_with_config(self, tmp_path, capsys):
        config_file = tmp_path / "bench.json"
        config_file.write_text(json.dumps({
            "benchmark": {"neuron_counts": [6], "connectivity": [0.3], "dataset_length": 60},
        }))
        assert main(["standard", "--config", str(config_file)]) == 0
        out = capsys.readouterr().out
        assert out.count("Best performing model: LNN-6") == 3
        assert "Persistence" not in out

    def test_unknown_command(self):
        with pytest.raises(SystemExit):
            main(["nonsense"])
