"""Simple usage example for LiquidNet Foundation.

Two neurons joined by one synapse; neuron 1 is stimulated above threshold
every third step and neuron 2 integrates its spikes one step later.
"""

import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from liquid_foundation import HebbianRule, Network, Neuron, Synapse


def main():
    net = Network()

    n1 = net.add_neuron(Neuron(threshold=1.0))
    n2 = net.add_neuron(Neuron(threshold=0.8))

    syn = Synapse(n1, n2, initial_weight=0.7)
    n1.add_output_synapse(syn)
    n2.add_input_synapse(syn)
    net.add_synapse(syn)

    print("=== Network ===")
    print(f"Neuron 1 ID: {n1.neuron_id}")
    print(f"Neuron 2 ID: {n2.neuron_id}")
    print(f"Synapse weight: {syn.weight:.3f}")

    print("\n=== Simulating (dt=0.1) ===")
    for step in range(10):
        if step % 3 == 0:
            n1.set_potential(1.2)
        net.step(0.1)
        print(
            f"Step {step + 1}: "
            f"N1 active={n1.is_active!s:<5} potential={n1.potential:.3f}  "
            f"N2 active={n2.is_active!s:<5} potential={n2.potential:.3f}"
        )

    print("\n=== Hebbian learning ===")
    net.reset()
    net.set_plasticity_rules([HebbianRule(learning_rate=0.05)])
    for _ in range(30):
        n1.set_potential(1.2)
        n2.set_potential(0.79)
        net.step(1.0)
    print(f"Synapse weight after pairing: {syn.weight:.3f}")

    print("\n=== Request / response ===")
    net.reset()
    print(f"process([1.5]) -> {net.process([1.5])}")
    print(f"process([0.0]) -> {net.process([0.0])}")

    tel = net.get_telemetry()
    print(f"\nTime: {tel.time:.2f}  Neurons: {tel.total_neurons}  Synapses: {tel.total_synapses}")


if __name__ == "__main__":
    main()
