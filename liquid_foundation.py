"""
LiquidNet Foundation - Core Simulation Engine

Implements a discrete-time liquid neural network: leaky integrate-and-fire
neurons, bounded plastic synapses, and a Network orchestrator that advances
simulation time and exposes a request/response entry point.

Design principles:
    - Consistent bidirectional graph: neurons list their synapses, synapses
      reference their endpoints, and registration validates both sides
    - Snapshot stepping: every neuron update within one step observes the
      pre-step activation flags, so the update pass is order-independent
    - Pluggable plasticity: learning rules are swappable strategy objects
      that run after the whole update pass
    - Weights always clamp; only contract violations raise
"""

from __future__ import annotations

import logging
import math
import uuid
from collections import deque
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import (
    Any,
    Callable,
    Deque,
    Dict,
    List,
    Mapping,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    runtime_checkable,
)

import numpy as np

from liquid_config import LiquidConfig

logger = logging.getLogger("liquidnet.foundation")


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class LiquidNetError(Exception):
    """Base class for all LiquidNet contract violations."""


class InvalidConfigurationError(LiquidNetError, ValueError):
    """Topology is inconsistent (wrong endpoint, self-connection, duplicate id)."""


class InvalidArgumentError(LiquidNetError, ValueError):
    """An argument is outside its domain (bad time step, missing endpoint)."""


def _check_delta_time(delta_time: float) -> float:
    if not math.isfinite(delta_time) or delta_time <= 0.0:
        raise InvalidArgumentError(
            f"delta_time must be finite and > 0, got {delta_time!r}"
        )
    return float(delta_time)


def _check_bounds(min_weight: float, max_weight: float) -> Tuple[float, float]:
    if math.isnan(min_weight) or math.isnan(max_weight) or min_weight > max_weight:
        raise InvalidConfigurationError(
            f"min_weight {min_weight} must not exceed max_weight {max_weight}"
        )
    return float(min_weight), float(max_weight)


def _check_delay(delay: float) -> float:
    if not math.isfinite(delay) or delay < 0.0:
        raise InvalidConfigurationError(f"delay must be finite and >= 0, got {delay!r}")
    return float(delay)


# ---------------------------------------------------------------------------
# Capabilities
# ---------------------------------------------------------------------------

@runtime_checkable
class SupportsPotentialInjection(Protocol):
    """Neuron variants that accept an externally written membrane potential."""

    def set_potential(self, value: float) -> None:
        ...


# ---------------------------------------------------------------------------
# Neuron
# ---------------------------------------------------------------------------

class Neuron:
    """Leaky integrate-and-fire neuron.

    Each update applies exponential leak, integrates the weights of input
    synapses whose presynaptic neuron is active, then fires and resets to
    zero when the potential reaches threshold. There is no refractory
    period: firing holds only until the next update.

    Args:
        threshold: Firing threshold (default 1.0).
        time_constant: Membrane time constant controlling the leak rate
            (default 10.0, must be finite and > 0).
        neuron_id: Optional explicit ID (auto-generated UUID if None).
    """

    def __init__(
        self,
        threshold: float = 1.0,
        time_constant: float = 10.0,
        neuron_id: Optional[str] = None,
    ):
        if not math.isfinite(threshold):
            raise InvalidArgumentError(f"threshold must be finite, got {threshold!r}")
        if not math.isfinite(time_constant) or time_constant <= 0.0:
            raise InvalidArgumentError(
                f"time_constant must be finite and > 0, got {time_constant!r}"
            )
        self._neuron_id = neuron_id or str(uuid.uuid4())
        self.potential: float = 0.0
        self.threshold = float(threshold)
        self.time_constant = float(time_constant)
        self._is_active = False
        self._input_synapses: List[Synapse] = []
        self._output_synapses: List[Synapse] = []
        # Charge from matured transmissions, added on the next update.
        self._pending_charge = 0.0

    def __repr__(self) -> str:
        return (
            f"Neuron(id={self._neuron_id!r}, potential={self.potential:.4f}, "
            f"threshold={self.threshold}, active={self._is_active})"
        )

    @property
    def neuron_id(self) -> str:
        return self._neuron_id

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def input_synapses(self) -> Tuple[Synapse, ...]:
        return tuple(self._input_synapses)

    @property
    def output_synapses(self) -> Tuple[Synapse, ...]:
        return tuple(self._output_synapses)

    def set_potential(self, value: float) -> None:
        self.potential = float(value)

    def receive(self, charge: float) -> None:
        """Queue a delivered charge for integration on the next update."""
        self._pending_charge += charge

    def input_current(self, active_snapshot: Optional[Mapping[str, bool]] = None) -> float:
        """Sum of weights over input synapses with an active presynaptic neuron.

        Activity is read from ``active_snapshot`` when given; neurons missing
        from the snapshot fall back to their live flag.
        """
        total = 0.0
        for syn in self._input_synapses:
            pre = syn.pre
            if active_snapshot is None:
                active = pre.is_active
            else:
                active = active_snapshot.get(pre.neuron_id, pre.is_active)
            if active:
                total += syn.weight
        return total

    def update(
        self,
        delta_time: float,
        active_snapshot: Optional[Mapping[str, bool]] = None,
    ) -> bool:
        """Advance this neuron by ``delta_time``; returns whether it fired."""
        dt = _check_delta_time(delta_time)

        self.potential *= math.exp(-dt / self.time_constant)
        self.potential += self.input_current(active_snapshot) * dt

        if self._pending_charge:
            self.potential += self._pending_charge
            self._pending_charge = 0.0

        if self.potential >= self.threshold:
            self._is_active = True
            self.potential = 0.0
        else:
            self._is_active = False
        return self._is_active

    def reset(self) -> None:
        """Return to quiescent zero potential. Synapse lists are kept."""
        self.potential = 0.0
        self._is_active = False
        self._pending_charge = 0.0

    def add_input_synapse(self, synapse: Synapse) -> None:
        if synapse.post is not self:
            raise InvalidConfigurationError(
                f"Synapse {synapse.synapse_id} postsynaptic neuron must be "
                f"neuron {self._neuron_id}"
            )
        self._input_synapses.append(synapse)

    def add_output_synapse(self, synapse: Synapse) -> None:
        if synapse.pre is not self:
            raise InvalidConfigurationError(
                f"Synapse {synapse.synapse_id} presynaptic neuron must be "
                f"neuron {self._neuron_id}"
            )
        self._output_synapses.append(synapse)

    def has_synapse(self, synapse: Synapse, incoming: bool) -> bool:
        """True if this exact synapse object is already in the input
        (``incoming=True``) or output list."""
        pool = self._input_synapses if incoming else self._output_synapses
        return any(s is synapse for s in pool)


# ---------------------------------------------------------------------------
# Synapse
# ---------------------------------------------------------------------------

class Synapse:
    """Directed, weighted connection between two distinct neurons.

    The synapse shares its endpoints (it does not own them) and owns its
    weight and plasticity bounds. ``min_weight <= weight <= max_weight``
    holds after every mutation.

    Attributes:
        synapse_id: Unique identifier.
        pre: Presynaptic neuron (sender).
        post: Postsynaptic neuron (receiver).
        weight: Connection strength, clamped to [min_weight, max_weight].
        min_weight / max_weight: Bounds; assigning either re-clamps weight.
        delay: Transmission latency (finite, >= 0) added to the send time.
        last_transmission_time: Network time of the latest transmit.
    """

    def __init__(
        self,
        pre: Neuron,
        post: Neuron,
        initial_weight: float = 0.5,
        delay: float = 1.0,
        min_weight: float = 0.0,
        max_weight: float = 10.0,
        synapse_id: Optional[str] = None,
    ):
        if pre is None:
            raise InvalidArgumentError("presynaptic neuron must not be None")
        if post is None:
            raise InvalidArgumentError("postsynaptic neuron must not be None")
        if pre is post:
            raise InvalidConfigurationError("Self-connections not allowed")
        if math.isnan(initial_weight):
            raise InvalidArgumentError("initial_weight must not be NaN")

        self._synapse_id = synapse_id or str(uuid.uuid4())
        self._pre = pre
        self._post = post
        self._min_weight, self._max_weight = _check_bounds(min_weight, max_weight)
        self._delay = _check_delay(delay)
        self.last_transmission_time = 0.0
        self._weight = self._clamp(float(initial_weight))
        self._pending: Deque[Tuple[float, float]] = deque()

    def __repr__(self) -> str:
        return (
            f"Synapse(id={self._synapse_id!r}, pre={self._pre.neuron_id!r}, "
            f"post={self._post.neuron_id!r}, weight={self._weight:.4f})"
        )

    @property
    def synapse_id(self) -> str:
        return self._synapse_id

    @property
    def pre(self) -> Neuron:
        return self._pre

    @property
    def post(self) -> Neuron:
        return self._post

    @property
    def weight(self) -> float:
        return self._weight

    @weight.setter
    def weight(self, value: float) -> None:
        if math.isnan(value):
            raise InvalidArgumentError("weight must not be NaN")
        self._weight = self._clamp(float(value))

    @property
    def min_weight(self) -> float:
        return self._min_weight

    @min_weight.setter
    def min_weight(self, value: float) -> None:
        self._min_weight, _ = _check_bounds(value, self._max_weight)
        self._weight = self._clamp(self._weight)

    @property
    def max_weight(self) -> float:
        return self._max_weight

    @max_weight.setter
    def max_weight(self, value: float) -> None:
        _, self._max_weight = _check_bounds(self._min_weight, value)
        self._weight = self._clamp(self._weight)

    @property
    def delay(self) -> float:
        return self._delay

    @delay.setter
    def delay(self, value: float) -> None:
        # Already queued deliveries keep their arrival times.
        self._delay = _check_delay(value)

    @property
    def pending(self) -> List[Tuple[float, float]]:
        """Queued (arrival_time, charge) pairs in arrival order."""
        return list(self._pending)

    def _clamp(self, value: float) -> float:
        if math.isnan(value):  # e.g. 0 * inf from an infinite decay rate
            return self._weight
        return max(self._min_weight, min(self._max_weight, value))

    # -- Transmission --------------------------------------------------------

    def transmit(self, signal: float, send_time: float) -> float:
        """Queue ``signal * weight`` to arrive at ``send_time + delay``.

        ``send_time`` is on the owning network's clock, normally
        ``network.current_time`` (see :meth:`Network.transmit`), so
        ``Network.step`` releases the charge once its time reaches the
        arrival time.

        Args:
            signal: Presynaptic signal strength.
            send_time: Network time of the transmission (finite, >= 0, and
                not earlier than ``last_transmission_time``).

        Returns:
            The queued charge.
        """
        if not math.isfinite(send_time) or send_time < self.last_transmission_time:
            raise InvalidArgumentError(
                f"send_time must be finite and >= {self.last_transmission_time}, "
                f"got {send_time!r}"
            )
        self.last_transmission_time = float(send_time)
        charge = signal * self._weight
        arrival = self.last_transmission_time + self._delay

        # Keep the queue sorted; out-of-order arrivals only happen if delay
        # was lowered between transmissions.
        if self._pending and self._pending[-1][0] > arrival:
            items = sorted([*self._pending, (arrival, charge)], key=lambda p: p[0])
            self._pending = deque(items)
        else:
            self._pending.append((arrival, charge))
        return charge

    def deliver_due(self, now: float) -> float:
        """Pop every queued delivery with arrival_time <= now; returns total charge."""
        total = 0.0
        while self._pending and self._pending[0][0] <= now:
            total += self._pending.popleft()[1]
        return total

    def clear_pending(self) -> None:
        self._pending.clear()
        self.last_transmission_time = 0.0

    # -- Plasticity ----------------------------------------------------------

    def update_weight(self, delta_weight: float) -> None:
        """Add ``delta_weight`` and clamp. A NaN delta leaves the weight as is."""
        if math.isnan(delta_weight):
            return
        self._weight = self._clamp(self._weight + delta_weight)

    def apply_hebbian_learning(self, learning_rate: float) -> bool:
        """Strengthen the connection when both endpoints are active.

        Both endpoints must already have been updated for the current step.
        Never weakens: a negative rate is ignored.

        Returns:
            True if the coincidence condition held.
        """
        if self._pre.is_active and self._post.is_active:
            if learning_rate > 0.0:
                self.update_weight(learning_rate)
            return True
        return False

    def apply_weight_decay(self, decay_rate: float) -> None:
        """Multiplicative decay toward zero, clamped to the weight bounds.

        A NaN rate is ignored.
        """
        if math.isnan(decay_rate):
            return
        self._weight = self._clamp(self._weight * (1.0 - decay_rate))


# ---------------------------------------------------------------------------
# Step Result / Telemetry
# ---------------------------------------------------------------------------

@dataclass
class StepResult:
    """Result returned from Network.step().

    Attributes:
        time: Simulation time after the step.
        fired_neuron_ids: Neurons that fired this step, in registration order.
        deliveries: Number of synapses that delivered queued charge.
    """

    time: float = 0.0
    fired_neuron_ids: List[str] = field(default_factory=list)
    deliveries: int = 0


@dataclass
class Telemetry:
    """Network statistics snapshot."""

    time: float = 0.0
    total_neurons: int = 0
    total_synapses: int = 0
    active_fraction: float = 0.0
    mean_potential: float = 0.0
    mean_weight: float = 0.0
    std_weight: float = 0.0
    pending_deliveries: int = 0


# ---------------------------------------------------------------------------
# Plasticity Rules (pluggable strategy objects)
# ---------------------------------------------------------------------------

class PlasticityRule:
    """Base class for pluggable plasticity rules.

    Rules run after the whole neuron update pass of a step, so they observe
    the post-update activation flags of both endpoints.
    """

    def apply(self, network: "Network", fired_neuron_ids: List[str]) -> None:
        raise NotImplementedError


class HebbianRule(PlasticityRule):
    """Coincidence rule: Δw = +learning_rate when pre and post are both active."""

    def __init__(self, learning_rate: float = 0.01):
        if not math.isfinite(learning_rate) or learning_rate < 0.0:
            raise InvalidArgumentError(
                f"learning_rate must be finite and >= 0, got {learning_rate!r}"
            )
        self.learning_rate = learning_rate

    def apply(self, network: "Network", fired_neuron_ids: List[str]) -> None:
        if not fired_neuron_ids:
            return
        # Only synapses whose postsynaptic neuron fired can be coincident.
        for nid in fired_neuron_ids:
            for syn in network.neurons[nid].input_synapses:
                syn.apply_hebbian_learning(self.learning_rate)


class WeightDecayRule(PlasticityRule):
    """Multiplicative weight decay applied to every synapse each step."""

    def __init__(self, decay_rate: float = 0.001):
        if not 0.0 <= decay_rate <= 1.0:
            raise InvalidArgumentError(f"decay_rate must be in [0, 1], got {decay_rate!r}")
        self.decay_rate = decay_rate

    def apply(self, network: "Network", fired_neuron_ids: List[str]) -> None:
        for syn in network.synapses.values():
            syn.apply_weight_decay(self.decay_rate)


# ---------------------------------------------------------------------------
# Network Container
# ---------------------------------------------------------------------------

class Network:
    """Owns neurons and synapses, advances simulation time, and orchestrates
    per-step updates.

    Neurons and synapses are kept in insertion-ordered dicts keyed by id.
    Not internally synchronized: a Network must be driven by one logical
    caller at a time.

    Args:
        config: Optional ``LiquidConfig``; defaults from ``liquid_config``.
    """

    def __init__(self, config: Optional[LiquidConfig] = None):
        self.config = config or LiquidConfig()

        self.neurons: Dict[str, Neuron] = {}
        self.synapses: Dict[str, Synapse] = {}
        self.current_time: float = 0.0

        self._plasticity_rules: List[PlasticityRule] = []
        plasticity = self.config.plasticity
        if plasticity.hebbian_rate > 0.0:
            self._plasticity_rules.append(HebbianRule(plasticity.hebbian_rate))
        if plasticity.decay_rate > 0.0:
            self._plasticity_rules.append(WeightDecayRule(plasticity.decay_rate))

        self._event_handlers: Dict[str, List[Callable]] = {}

        self._executor: Optional[ThreadPoolExecutor] = None
        self._executor_workers = 0

    def __repr__(self) -> str:
        return (
            f"Network(neurons={len(self.neurons)}, synapses={len(self.synapses)}, "
            f"time={self.current_time})"
        )

    # -----------------------------------------------------------------------
    # Topology Management
    # -----------------------------------------------------------------------

    def add_neuron(self, neuron: Neuron) -> Neuron:
        """Register a neuron as owned by this network."""
        if neuron is None:
            raise InvalidArgumentError("neuron must not be None")
        if neuron.neuron_id in self.neurons:
            raise InvalidConfigurationError(f"Neuron {neuron.neuron_id} already exists")
        self.neurons[neuron.neuron_id] = neuron
        return neuron

    def new_neuron(
        self,
        threshold: Optional[float] = None,
        time_constant: Optional[float] = None,
        neuron_id: Optional[str] = None,
    ) -> Neuron:
        """Create and register a neuron using the configured neuron defaults."""
        defaults = self.config.neuron
        neuron = Neuron(
            threshold=defaults.threshold if threshold is None else threshold,
            time_constant=defaults.time_constant if time_constant is None else time_constant,
            neuron_id=neuron_id,
        )
        return self.add_neuron(neuron)

    def add_synapse(self, synapse: Synapse) -> Synapse:
        """Register a synapse whose endpoints are registered neurons.

        The synapse is attached to its endpoints' output/input lists unless
        the caller already attached it.
        """
        if synapse is None:
            raise InvalidArgumentError("synapse must not be None")
        for role, neuron in (("Pre", synapse.pre), ("Post", synapse.post)):
            if self.neurons.get(neuron.neuron_id) is not neuron:
                raise InvalidArgumentError(
                    f"{role} neuron {neuron.neuron_id} is not registered in this network"
                )
        if synapse.synapse_id in self.synapses:
            raise InvalidConfigurationError(f"Synapse {synapse.synapse_id} already exists")

        if not synapse.pre.has_synapse(synapse, incoming=False):
            synapse.pre.add_output_synapse(synapse)
        if not synapse.post.has_synapse(synapse, incoming=True):
            synapse.post.add_input_synapse(synapse)

        self.synapses[synapse.synapse_id] = synapse
        return synapse

    def connect(
        self,
        pre: Neuron,
        post: Neuron,
        weight: Optional[float] = None,
        delay: Optional[float] = None,
    ) -> Synapse:
        """Create and register a synapse using the configured synapse defaults."""
        defaults = self.config.synapse
        syn = Synapse(
            pre,
            post,
            initial_weight=defaults.initial_weight if weight is None else weight,
            delay=defaults.delay if delay is None else delay,
            min_weight=defaults.min_weight,
            max_weight=defaults.max_weight,
        )
        return self.add_synapse(syn)

    def get_neuron(self, neuron_id: str) -> Neuron:
        neuron = self.neurons.get(neuron_id)
        if neuron is None:
            raise KeyError(f"Neuron {neuron_id} not found")
        return neuron

    def get_synapse(self, synapse_id: str) -> Synapse:
        syn = self.synapses.get(synapse_id)
        if syn is None:
            raise KeyError(f"Synapse {synapse_id} not found")
        return syn

    # -----------------------------------------------------------------------
    # Simulation Loop
    # -----------------------------------------------------------------------

    def step(self, delta_time: float) -> StepResult:
        """Advance one time step.

        Pipeline:
            1. Advance current_time
            2. Snapshot every neuron's activation flag
            3. Mature queued synaptic deliveries
            4. Update every neuron against the snapshot
            5. Apply plasticity rules
            6. Emit events

        Returns:
            StepResult with the new time and the neurons that fired.
        """
        dt = _check_delta_time(delta_time)
        self.current_time += dt
        result = StepResult(time=self.current_time)

        snapshot = {nid: n.is_active for nid, n in self.neurons.items()}

        for syn in self.synapses.values():
            charge = syn.deliver_due(self.current_time)
            if charge:
                syn.post.receive(charge)
                result.deliveries += 1

        workers = self.config.network.max_workers
        neurons = list(self.neurons.values())
        if workers > 1 and len(neurons) > 1:
            pool = self._update_pool(workers)
            fired_flags = list(pool.map(lambda n: n.update(dt, snapshot), neurons))
        else:
            fired_flags = [n.update(dt, snapshot) for n in neurons]

        result.fired_neuron_ids = [
            n.neuron_id for n, fired in zip(neurons, fired_flags) if fired
        ]

        self.apply_plasticity(result.fired_neuron_ids)

        if result.fired_neuron_ids:
            logger.debug(
                "t=%.4f: %d neuron(s) fired", self.current_time, len(result.fired_neuron_ids)
            )
            self._emit("spikes", neuron_ids=result.fired_neuron_ids, time=self.current_time)

        return result

    def step_n(self, n: int, delta_time: float) -> List[StepResult]:
        """Run n steps; returns all StepResults."""
        return [self.step(delta_time) for _ in range(n)]

    def reset(self) -> None:
        """Zero time and neuron state; synapse weights persist."""
        self.current_time = 0.0
        for neuron in self.neurons.values():
            neuron.reset()
        for syn in self.synapses.values():
            syn.clear_pending()
        self._emit("reset")

    def transmit(self, synapse: Synapse, signal: float) -> float:
        """Send ``signal`` through a registered synapse at the current time.

        The charge ``signal * weight`` reaches the postsynaptic neuron in the
        first step whose time is at least ``current_time + synapse.delay``.
        """
        if self.synapses.get(synapse.synapse_id) is not synapse:
            raise InvalidArgumentError(
                f"Synapse {synapse.synapse_id} is not registered in this network"
            )
        return synapse.transmit(signal, self.current_time)

    def _update_pool(self, workers: int) -> ThreadPoolExecutor:
        # One pool for the network's lifetime; rebuilt if max_workers changes.
        if self._executor is None or self._executor_workers != workers:
            self.close()
            self._executor = ThreadPoolExecutor(
                max_workers=workers, thread_name_prefix="liquidnet-update"
            )
            self._executor_workers = workers
        return self._executor

    def close(self) -> None:
        """Shut down the update thread pool, if one was started.

        The network stays usable; a later parallel step starts a new pool.
        """
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None
            self._executor_workers = 0

    # -----------------------------------------------------------------------
    # Request / Response
    # -----------------------------------------------------------------------

    def process(self, inputs: Sequence[float]) -> List[float]:
        """Inject inputs, perform exactly one step, and read outputs.

        ``inputs[i]`` is written into the potential of the i-th registered
        neuron when that neuron supports potential injection. Outputs are the
        potentials of the last registered neurons, last-registered first.
        """
        neurons = list(self.neurons.values())
        for value, neuron in zip(inputs, neurons):
            if isinstance(neuron, SupportsPotentialInjection):
                neuron.set_potential(value)

        self.step(self.config.network.process_delta_time)

        count = min(self.config.network.output_count, len(neurons))
        return [neurons[len(neurons) - 1 - i].potential for i in range(count)]

    async def process_async(self, inputs: Sequence[float]) -> List[float]:
        """Awaitable form of :meth:`process`; never suspends."""
        return self.process(inputs)

    # -----------------------------------------------------------------------
    # Query Methods
    # -----------------------------------------------------------------------

    def get_potentials(self) -> List[float]:
        return [n.potential for n in self.neurons.values()]

    def get_active_neurons(self) -> List[str]:
        return [nid for nid, n in self.neurons.items() if n.is_active]

    def get_telemetry(self) -> Telemetry:
        """Network statistics snapshot."""
        weights = [s.weight for s in self.synapses.values()]
        potentials = [n.potential for n in self.neurons.values()]
        active = sum(1 for n in self.neurons.values() if n.is_active)
        return Telemetry(
            time=self.current_time,
            total_neurons=len(self.neurons),
            total_synapses=len(self.synapses),
            active_fraction=active / len(self.neurons) if self.neurons else 0.0,
            mean_potential=float(np.mean(potentials)) if potentials else 0.0,
            mean_weight=float(np.mean(weights)) if weights else 0.0,
            std_weight=float(np.std(weights)) if weights else 0.0,
            pending_deliveries=sum(len(s.pending) for s in self.synapses.values()),
        )

    # -----------------------------------------------------------------------
    # Plasticity Configuration
    # -----------------------------------------------------------------------

    def set_plasticity_rules(self, rules: List[PlasticityRule]) -> None:
        self._plasticity_rules = list(rules)

    @property
    def plasticity_rules(self) -> List[PlasticityRule]:
        return list(self._plasticity_rules)

    def apply_plasticity(self, fired_neuron_ids: Optional[List[str]] = None) -> None:
        """Run every configured rule against the current activation flags."""
        if fired_neuron_ids is None:
            fired_neuron_ids = self.get_active_neurons()
        for rule in self._plasticity_rules:
            rule.apply(self, fired_neuron_ids)

    # -----------------------------------------------------------------------
    # Event System
    # -----------------------------------------------------------------------

    def register_event_handler(self, event_type: str, callback: Callable) -> None:
        """Subscribe to events: ``spikes`` (neuron_ids, time) and ``reset``."""
        self._event_handlers.setdefault(event_type, []).append(callback)

    def _emit(self, event_type: str, **kwargs: Any) -> None:
        for cb in self._event_handlers.get(event_type, []):
            cb(**kwargs)
