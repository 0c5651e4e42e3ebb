#!/usr/bin/env python3
"""
liquid_benchmark.py: run liquid networks against the standard dataset corpus.

Builds randomly connected reservoirs of several sizes, streams each dataset's
series through ``Network.process`` one time step at a time, and scores the
raw output potentials against the next-value targets.  A naive persistence
baseline (predict the last observed value) is reported alongside.

No read-out is fitted: the numbers describe the untrained dynamics.

Usage:
    python3 liquid_benchmark.py [standard|baseline|datasets|all]
                                [--config PATH] [--length N] [--verbose]
"""

from __future__ import annotations

import argparse
import copy
import logging
import sys
import time
import tracemalloc
from typing import Iterable, List, Optional, Sequence

import numpy as np

from liquid_config import LiquidConfig, load_liquid_config
from liquid_datasets import BenchmarkDataset, get_all_datasets
from liquid_foundation import Network
from liquid_metrics import BenchmarkResults, calculate_comprehensive_metrics

logger = logging.getLogger("liquidnet.benchmark")


def build_reservoir(
    neuron_count: int,
    connectivity: float,
    input_dim: int = 1,
    output_dim: int = 1,
    seed: int = 42,
    config: Optional[LiquidConfig] = None,
) -> Network:
    """Create a randomly connected network.

    The first ``input_dim`` neurons receive inputs and the last
    ``output_dim`` neurons are read as outputs.  Each ordered pair of distinct
    neurons is connected with probability ``connectivity`` and a weight drawn
    uniformly from [0, 2 * initial_weight].
    """
    if neuron_count < max(input_dim, output_dim):
        raise ValueError(
            f"neuron_count {neuron_count} is smaller than the input/output arity"
        )
    if not 0.0 <= connectivity <= 1.0:
        raise ValueError(f"connectivity must be in [0, 1], got {connectivity}")

    cfg = copy.deepcopy(config) if config is not None else LiquidConfig()
    cfg.network.output_count = output_dim
    network = Network(cfg)
    rng = np.random.default_rng(seed)

    neurons = [network.new_neuron() for _ in range(neuron_count)]
    mask = rng.random((neuron_count, neuron_count)) < connectivity
    weights = rng.uniform(0.0, 2.0 * cfg.synapse.initial_weight, (neuron_count, neuron_count))
    for i in range(neuron_count):
        for j in range(neuron_count):
            if i != j and mask[i, j]:
                network.connect(neurons[i], neurons[j], weight=float(weights[i, j]))

    logger.debug(
        "Built reservoir: %d neurons, %d synapses (p=%.2f)",
        neuron_count, len(network.synapses), connectivity,
    )
    return network


def run_sequence(network: Network, series: Iterable) -> np.ndarray:
    """Feed a series through ``network.process`` one time step at a time.

    Each element may be a scalar or a vector of per-input values.  Returns an
    array of shape (steps, output_count).
    """
    outputs = []
    for value in series:
        inputs = np.atleast_1d(np.asarray(value, dtype=float)).tolist()
        outputs.append(network.process(inputs))
    return np.asarray(outputs, dtype=float)


def _aligned_targets(dataset: BenchmarkDataset) -> tuple:
    """Inputs observed before each target and the persistence predictions."""
    seq = dataset.sequence_length
    series = dataset.series if dataset.series.ndim > 1 else dataset.series[:, None]
    last_seen = series[seq - 1:seq - 1 + dataset.samples]
    return series, last_seen


def run_single_benchmark(
    dataset: BenchmarkDataset,
    model_name: str,
    neuron_count: int,
    connectivity: float,
    config: Optional[LiquidConfig] = None,
) -> BenchmarkResults:
    """Stream ``dataset`` through a fresh reservoir and score its outputs."""
    cfg = config or LiquidConfig()
    network = build_reservoir(
        neuron_count,
        connectivity,
        input_dim=dataset.input_dimension,
        output_dim=dataset.output_dimension,
        seed=cfg.benchmark.seed,
        config=cfg,
    )
    series, _ = _aligned_targets(dataset)
    seq = dataset.sequence_length

    tracemalloc.start()
    start = time.perf_counter()
    try:
        # Warm-up over the first window, then one prediction per target.
        run_sequence(network, series[:seq - 1])
        warmup_ms = (time.perf_counter() - start) * 1000.0
        start = time.perf_counter()
        predictions = run_sequence(network, series[seq - 1:seq - 1 + dataset.samples])
        inference_ms = (time.perf_counter() - start) * 1000.0
        _, peak = tracemalloc.get_traced_memory()
    finally:
        tracemalloc.stop()

    result = calculate_comprehensive_metrics(
        model_name,
        dataset.name,
        predictions,
        dataset.targets,
        training_time=warmup_ms,
        inference_time=inference_ms,
        memory_usage=peak / (1024 * 1024),
        network_size=neuron_count,
    )
    result.additional_metrics["synapses"] = len(network.synapses)
    result.additional_metrics["connectivity"] = connectivity
    return result


def run_baseline(dataset: BenchmarkDataset) -> BenchmarkResults:
    """Persistence baseline: the next value equals the last observed value."""
    _, last_seen = _aligned_targets(dataset)
    return calculate_comprehensive_metrics(
        "Persistence", dataset.name, last_seen, dataset.targets
    )


def run_comprehensive_benchmarks(
    config: Optional[LiquidConfig] = None,
    datasets: Optional[Sequence[BenchmarkDataset]] = None,
) -> List[BenchmarkResults]:
    """Sweep configured reservoir sizes over every dataset."""
    cfg = config or LiquidConfig()
    if datasets is None:
        datasets = list(get_all_datasets(cfg.benchmark.dataset_length))

    sizes = list(zip(cfg.benchmark.neuron_counts, cfg.benchmark.connectivity))
    if len(cfg.benchmark.neuron_counts) != len(cfg.benchmark.connectivity):
        logger.warning(
            "neuron_counts and connectivity differ in length; using %d configurations",
            len(sizes),
        )

    results: List[BenchmarkResults] = []
    for dataset in datasets:
        logger.info(
            "Dataset %s: %d samples, input dim %d, output dim %d",
            dataset.name, dataset.samples, dataset.input_dimension, dataset.output_dimension,
        )
        for neuron_count, connectivity in sizes:
            name = f"LNN-{neuron_count}"
            result = run_single_benchmark(dataset, name, neuron_count, connectivity, cfg)
            logger.info(
                "  %s: MSE=%.6f RMSE=%.6f MAE=%.6f R2=%.4f (%.1f ms)",
                name,
                result.mean_squared_error,
                result.root_mean_squared_error,
                result.mean_absolute_error,
                result.r2_score,
                result.inference_time,
            )
            results.append(result)
    return results


def format_summary_report(results: Sequence[BenchmarkResults]) -> str:
    """Per-dataset table ordered by MSE, followed by overall statistics."""
    lines = ["=== BENCHMARK SUMMARY REPORT ===", ""]
    by_dataset = {}
    for r in results:
        by_dataset.setdefault(r.dataset_name, []).append(r)

    for name, group in by_dataset.items():
        lines.append(f"Dataset: {name}")
        lines.append("-" * 40)
        ranked = sorted(group, key=lambda r: r.mean_squared_error)
        for r in ranked:
            lines.append(
                f"{r.model_name:<15} | MSE: {r.mean_squared_error:.6f} | "
                f"RMSE: {r.root_mean_squared_error:.6f} | R²: {r.r2_score:.4f} | "
                f"Time: {r.inference_time:.0f}ms"
            )
        best = ranked[0]
        lines.append(f"Best performing model: {best.model_name} (MSE: {best.mean_squared_error:.6f})")
        lines.append("")

    if results:
        mses = [r.mean_squared_error for r in results]
        lines.append("=== OVERALL STATISTICS ===")
        lines.append(f"Total benchmarks run: {len(results)}")
        lines.append(f"Average MSE: {np.mean(mses):.6f}")
        lines.append(f"Average R²: {np.nanmean([r.r2_score for r in results]):.4f}")
    return "\n".join(lines)


def format_datasets(datasets: Iterable[BenchmarkDataset]) -> str:
    lines = []
    for ds in datasets:
        lines.extend([
            f"Dataset: {ds.name}",
            f"  Description: {ds.description}",
            f"  Input dimensions: {ds.input_dimension}",
            f"  Output dimensions: {ds.output_dimension}",
            f"  Sequence length: {ds.sequence_length}",
            f"  Samples: {ds.samples}",
            f"  Source: {ds.source}",
            "",
        ])
    return "\n".join(lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Benchmark liquid networks against the standard dataset corpus"
    )
    parser.add_argument(
        "command",
        nargs="?",
        default="standard",
        choices=["standard", "baseline", "datasets", "all"],
        help="Which suite to run (default: standard)",
    )
    parser.add_argument("--config", type=str, default=None, help="Path to JSON config")
    parser.add_argument(
        "--length",
        type=int,
        default=None,
        help="Override dataset length (benchmark.dataset_length)",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
    )

    overrides = {"benchmark": {"dataset_length": args.length}} if args.length else None
    cfg = load_liquid_config(overrides, config_path=args.config)
    datasets = list(get_all_datasets(cfg.benchmark.dataset_length))

    if args.command == "datasets":
        print(format_datasets(datasets))
        return 0

    results: List[BenchmarkResults] = []
    if args.command in ("baseline", "all"):
        results.extend(run_baseline(ds) for ds in datasets)
    if args.command in ("standard", "all"):
        results.extend(run_comprehensive_benchmarks(cfg, datasets))

    print(format_summary_report(results))
    return 0


if __name__ == "__main__":
    sys.exit(main())
