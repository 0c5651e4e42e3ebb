"""
LiquidNet Configuration: centralized construction-time defaults.

Provides a single ``LiquidConfig`` dataclass that holds the tuneable
parameters for neurons, synapses, the network orchestrator, plasticity and
the benchmark harness.  Configuration can be loaded from a dict of
overrides, a JSON file, or left at the defaults.

Usage::

    from liquid_config import LiquidConfig, load_liquid_config

    # Defaults
    cfg = load_liquid_config()

    # With overrides
    cfg = load_liquid_config({"neuron": {"threshold": 0.8}})

    # From JSON file
    cfg = load_liquid_config(config_path="~/liquidnet.json")
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger("liquidnet.config")

_SECTIONS = ("neuron", "synapse", "network", "plasticity", "benchmark")


# ── Section dataclasses ────────────────────────────────────────────────


@dataclass
class NeuronConfig:
    """Defaults for neurons created through ``Network.new_neuron``."""

    threshold: float = 1.0
    time_constant: float = 10.0


@dataclass
class SynapseConfig:
    """Defaults for synapses created through ``Network.connect``."""

    initial_weight: float = 0.5
    delay: float = 1.0
    min_weight: float = 0.0
    max_weight: float = 10.0


@dataclass
class NetworkConfig:
    """Orchestrator settings.

    ``max_workers`` > 1 dispatches the per-neuron update pass of each step
    to a thread pool; 0 or 1 updates sequentially.
    """

    process_delta_time: float = 0.1
    output_count: int = 1
    max_workers: int = 0


@dataclass
class PlasticityConfig:
    """Rates for the default plasticity rules; 0 disables a rule."""

    hebbian_rate: float = 0.0
    decay_rate: float = 0.0


@dataclass
class BenchmarkConfig:
    """Reservoir sizes and connectivity swept by ``liquid_benchmark``."""

    neuron_counts: List[int] = field(default_factory=lambda: [32, 64, 128])
    connectivity: List[float] = field(default_factory=lambda: [0.3, 0.4, 0.5])
    seed: int = 42
    dataset_length: int = 1000


# ── Top-level config ───────────────────────────────────────────────────


@dataclass
class LiquidConfig:
    """Top-level LiquidNet configuration.

    Use ``load_liquid_config()`` to create an instance with user overrides
    applied.
    """

    neuron: NeuronConfig = field(default_factory=NeuronConfig)
    synapse: SynapseConfig = field(default_factory=SynapseConfig)
    network: NetworkConfig = field(default_factory=NetworkConfig)
    plasticity: PlasticityConfig = field(default_factory=PlasticityConfig)
    benchmark: BenchmarkConfig = field(default_factory=BenchmarkConfig)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ── Factory ────────────────────────────────────────────────────────────


def _apply_overrides(obj: Any, overrides: Dict[str, Any]) -> None:
    """Apply a dict of overrides to a dataclass instance (in-place)."""
    for key, value in overrides.items():
        if hasattr(obj, key):
            setattr(obj, key, value)
        else:
            logger.warning("Ignoring unknown config key %s.%s", type(obj).__name__, key)


def load_liquid_config(
    overrides: Optional[Dict[str, Any]] = None,
    config_path: Optional[str] = None,
) -> LiquidConfig:
    """Create a ``LiquidConfig`` with defaults, optionally overridden.

    Override precedence (highest wins):
        1. ``overrides`` dict argument
        2. ``config_path`` JSON file
        3. Built-in defaults

    Args:
        overrides: Dict keyed by section name (``neuron``, ``synapse``,
            ``network``, ``plasticity``, ``benchmark``) whose values are
            dicts of field→value pairs.
        config_path: Path to a JSON file with the same structure as
            ``overrides``.

    Returns:
        Fully populated ``LiquidConfig``.
    """
    cfg = LiquidConfig()

    # Layer 1: JSON file
    if config_path is not None:
        p = Path(config_path).expanduser()
        if p.exists():
            try:
                with open(p) as f:
                    file_data = json.load(f)
                for section in _SECTIONS:
                    if section in file_data:
                        _apply_overrides(getattr(cfg, section), file_data[section])
            except Exception as exc:
                logger.warning("Failed to load LiquidNet config from %s: %s", p, exc)
        else:
            logger.warning("LiquidNet config %s not found, using defaults", p)

    # Layer 2: dict overrides (win over file)
    if overrides is not None:
        for section in _SECTIONS:
            if section in overrides:
                _apply_overrides(getattr(cfg, section), overrides[section])

    return cfg
