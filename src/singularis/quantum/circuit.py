"""Quantum circuit simulation (simplified, probability-pattern based).

Entanglement is inferred from controlled gates, measurement probabilities
are skewed towards correlated outcomes, and nothing here evolves a state
vector.
"""

import logging
import math
import random
from dataclasses import dataclass, field
from typing import Any

from singularis.core.errors import ErrorCode, SingularisError, validation_error
from singularis.core.rng import get_rng
from singularis.core.serialization import camel_dict
from singularis.quantum.operations import sample_outcome, utc_timestamp
from singularis.quantum.optimization import (
    AIOptimization,
    OptimizationGoal,
    ResourceEstimate,
)

logger = logging.getLogger(__name__)

ENTANGLING_GATES = frozenset({"CNOT", "CZ"})
MAX_LISTED_STATES = 8
# Simulation enumerates all 2**n outcomes
MAX_CIRCUIT_QUBITS = 16


@dataclass(frozen=True, slots=True)
class Gate:
    """One gate application. ``position`` is the column in the circuit editor."""

    gate: str
    targets: tuple[int, ...]
    controls: tuple[int, ...] | None = None
    position: int | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Gate":
        controls = data.get("controls")
        return cls(
            gate=str(data["gate"]),
            targets=tuple(int(t) for t in data.get("targets") or ()),
            controls=tuple(int(c) for c in controls) if controls is not None else None,
            position=data.get("position"),
        )

    def label(self) -> str:
        targets = ",".join(str(t) for t in self.targets)
        if self.controls is None:
            return f"{self.gate}({targets})"
        controls = ",".join(str(c) for c in self.controls)
        return f"{self.gate}({targets}; controls={controls})"

    def qubits(self) -> tuple[int, ...]:
        return self.targets + (self.controls or ())


def _check_gates(gates: list[Gate], num_qubits: int | None = None) -> None:
    for gate in gates:
        if not gate.targets:
            raise SingularisError(
                ErrorCode.QUANTUM_INVALID_CIRCUIT,
                context={"detail": f"gate {gate.gate} has no targets"},
            )
        for qubit in gate.qubits():
            if qubit < 0 or (num_qubits is not None and qubit >= num_qubits):
                raise SingularisError(
                    ErrorCode.QUANTUM_INVALID_CIRCUIT,
                    context={"detail": f"qubit index {qubit} out of range for {gate.label()}"},
                )


def entanglement_groups(gates: list[Gate]) -> list[list[int]]:
    """Group qubits linked by controlled gates, merging overlapping groups."""
    groups: list[list[int]] = []
    for gate in gates:
        if gate.gate not in ENTANGLING_GATES or not gate.controls:
            continue
        for control in gate.controls:
            for target in gate.targets:
                if control == target:
                    continue
                for group in groups:
                    if control in group or target in group:
                        if control not in group:
                            group.append(control)
                        if target not in group:
                            group.append(target)
                        break
                else:
                    groups.append([control, target])

    merged = True
    while merged:
        merged = False
        for i in range(len(groups)):
            for j in range(i + 1, len(groups)):
                if set(groups[i]) & set(groups[j]):
                    groups[i] = groups[i] + [q for q in groups[j] if q not in groups[i]]
                    del groups[j]
                    merged = True
                    break
            if merged:
                break
    return groups


@dataclass(frozen=True, slots=True)
class CircuitSimulation:
    num_qubits: int
    circuit_depth: int
    gates: list[str]
    entangled_groups: list[list[int]]
    decoherence_probability: float
    measurement_probabilities: dict[str, float]
    outcome: str
    timestamp: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> dict[str, Any]:
        return camel_dict(self)


def simulate_quantum_circuit(
    gates: list[Gate], num_qubits: int = 2, rng: random.Random | None = None
) -> CircuitSimulation:
    """Simulate measurement statistics for ``gates`` over ``num_qubits`` qubits.

    Raises:
        SingularisError: If a gate has no targets or addresses a missing qubit,
            or ``num_qubits`` is outside 1..MAX_CIRCUIT_QUBITS.
    """
    if num_qubits < 1:
        raise SingularisError(
            ErrorCode.QUANTUM_INVALID_CIRCUIT,
            context={"detail": "numQubits must be at least 1"},
        )
    if num_qubits > MAX_CIRCUIT_QUBITS:
        raise validation_error(
            f"numQubits must be at most {MAX_CIRCUIT_QUBITS}", numQubits=num_qubits
        )
    _check_gates(gates, num_qubits)
    rng = get_rng(rng)

    groups = entanglement_groups(gates)
    depth = len(gates)

    probabilities: dict[str, float] = {}
    total_outcomes = 2**num_qubits
    for index in range(total_outcomes):
        bits = format(index, f"0{num_qubits}b")
        probability = 1 / total_outcomes
        for group in groups:
            if len(group) < 2:
                continue
            values = {bits[q] for q in group}
            probability *= 1.5 if len(values) == 1 else 0.5
        probabilities[bits] = probability

    total = sum(probabilities.values())
    probabilities = {bits: p / total for bits, p in probabilities.items()}

    return CircuitSimulation(
        num_qubits=num_qubits,
        circuit_depth=depth,
        gates=[gate.label() for gate in gates],
        entangled_groups=groups,
        decoherence_probability=1 - math.exp(-0.01 * depth * num_qubits),
        measurement_probabilities=probabilities,
        outcome=sample_outcome(probabilities, rng),
    )


# ═══════════════════════════════════════════════════════════════
# CIRCUIT SUMMARY (editor "simulate" button)
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class CircuitStatistics:
    entanglement: float
    complexity: float
    depth: int


@dataclass(frozen=True, slots=True)
class CircuitSummary:
    probabilities: dict[str, float]
    statistics: CircuitStatistics
    visualization: str = "Circuit visualization data"
    explanation: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data = camel_dict(self)
        if self.explanation is None:
            del data["explanation"]
        return data


def _explain(gates: list[Gate], num_qubits: int, has_hadamard: bool, entangled: bool) -> str:
    if entangled and num_qubits == 2:
        return (
            "This circuit creates a Bell state (|00⟩ + |11⟩)/√2, which demonstrates quantum "
            "entanglement between two qubits. Bell states are fundamental to quantum "
            "teleportation and superdense coding protocols."
        )
    if entangled and num_qubits == 3:
        return (
            "This circuit appears to create a GHZ state (|000⟩ + |111⟩)/√2, which is a "
            "maximally entangled state of three qubits. GHZ states are useful for testing "
            "quantum nonlocality and are important in quantum error correction."
        )
    if has_hadamard:
        return (
            f"This circuit creates a uniform superposition of {num_qubits} qubits, placing "
            "each qubit in an equal probability of being measured as 0 or 1. This is a "
            "fundamental building block for many quantum algorithms."
        )
    names = ", ".join(dict.fromkeys(gate.gate for gate in gates))
    return (
        f"This {num_qubits}-qubit circuit applies a series of gates including {names}. "
        "The resulting quantum state shows the probability distribution seen in the results."
    )


def summarize_circuit(
    gates: list[Gate], explain: bool = False, rng: random.Random | None = None
) -> CircuitSummary:
    """Pattern-based probability summary for the circuit editor.

    Two entangled qubits give a Bell pattern, three a GHZ pattern, more give
    noisy correlated pairs; Hadamard-only circuits give a uniform
    superposition and everything else stays in the all-zero basis state.
    """
    if not gates:
        raise SingularisError(
            ErrorCode.QUANTUM_INVALID_CIRCUIT, context={"detail": "circuit has no gates"}
        )
    _check_gates(gates, MAX_CIRCUIT_QUBITS)
    rng = get_rng(rng)

    num_qubits = max(max(gate.qubits()) for gate in gates) + 1
    has_hadamard = any(gate.gate == "H" for gate in gates)
    has_controlled = any(gate.gate in ENTANGLING_GATES for gate in gates)
    entangled = has_hadamard and has_controlled

    probabilities: dict[str, float] = {}
    if entangled and num_qubits == 2:
        probabilities = {"00": 0.5, "11": 0.5}
    elif entangled and num_qubits == 3:
        probabilities = {"000": 0.5, "111": 0.5}
    elif entangled:
        states = min(MAX_LISTED_STATES, 2**num_qubits)
        base = 1 / states
        for index in range(states // 2):
            bits = format(index, f"0{num_qubits}b")
            flipped = "".join("1" if b == "0" else "0" for b in bits)
            noise = rng.random() * 0.1 - 0.05
            probabilities[bits] = base + noise
            probabilities[flipped] = base - noise
    elif has_hadamard:
        states = min(MAX_LISTED_STATES, 2**num_qubits)
        for index in range(states):
            probabilities[format(index, f"0{num_qubits}b")] = 1 / states
    else:
        probabilities["0" * num_qubits] = 1.0

    depth = max((gate.position or 0) for gate in gates) + 1
    entanglement = 0.8 + rng.random() * 0.2 if entangled else rng.random() * 0.3

    return CircuitSummary(
        probabilities=probabilities,
        statistics=CircuitStatistics(
            entanglement=entanglement,
            complexity=(len(gates) / (num_qubits * 3)) * 0.8,
            depth=depth,
        ),
        explanation=_explain(gates, num_qubits, has_hadamard, entangled) if explain else None,
    )


# ═══════════════════════════════════════════════════════════════
# AI-OPTIMISED CIRCUITS
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class CircuitVersion:
    circuit: str
    gates: int
    depth: int
    simulation: CircuitSimulation
    explanation: str | None = None


@dataclass(frozen=True, slots=True)
class OptimizedCircuitReport:
    original: CircuitVersion
    optimized: CircuitVersion
    improvement: dict[str, float]
    explainability: float
    resource_estimates: ResourceEstimate
    timestamp: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> dict[str, Any]:
        data = camel_dict(self)
        data["original"].pop("explanation", None)
        return data


def _transform_gates(
    gates: list[Gate], goal: OptimizationGoal, num_qubits: int, rng: random.Random
) -> list[Gate]:
    optimized = list(gates)
    match goal:
        case OptimizationGoal.GATE_COUNT:
            if len(optimized) > 3:
                # The first gate is never removed
                del optimized[rng.randrange(1, len(optimized))]
        case OptimizationGoal.DEPTH:
            if len(optimized) > 2:
                i = rng.randrange(len(optimized) - 1)
                optimized[i], optimized[i + 1] = optimized[i + 1], optimized[i]
        case OptimizationGoal.ERROR_MITIGATION:
            if rng.random() < 0.7:
                optimized.append(Gate("Z", (rng.randrange(num_qubits),)))
        case OptimizationGoal.EXECUTION_TIME:
            if len(optimized) > 2:
                for i in range(len(optimized) - 1):
                    current, following = optimized[i], optimized[i + 1]
                    if current.gate == following.gate and current.targets == following.targets:
                        del optimized[i + 1]
                        break
        case OptimizationGoal.FIDELITY:
            qubit = rng.randrange(num_qubits)
            optimized.extend([Gate("H", (qubit,)), Gate("Z", (qubit,)), Gate("H", (qubit,))])
        case OptimizationGoal.EXPLAINABILITY:
            optimized.sort(key=lambda gate: gate.gate)
    return optimized


def simulate_ai_optimized_circuit(
    gates: list[Gate],
    num_qubits: int,
    optimization: AIOptimization,
    rng: random.Random | None = None,
) -> OptimizedCircuitReport:
    """Apply the optimisation goal's gate transformation and compare both runs."""
    rng = get_rng(rng)
    circuit_text = "\n".join(gate.label() for gate in gates)

    original = simulate_quantum_circuit(gates, num_qubits, rng=rng)
    result = optimization.optimize_circuit(circuit_text, rng=rng)
    optimized_gates = _transform_gates(gates, optimization.goal, num_qubits, rng)
    optimized = simulate_quantum_circuit(optimized_gates, num_qubits, rng=rng)

    delta = len(optimized_gates) - len(gates)
    improvement = {
        "gateCount": delta,
        "depthChange": delta / max(1, len(gates)),
        **result.improvement_metrics,
    }
    logger.debug(
        "Optimized %d-gate circuit for %s: %+d gates",
        len(gates), optimization.goal.value, delta,
    )

    return OptimizedCircuitReport(
        original=CircuitVersion(
            circuit=circuit_text,
            gates=len(gates),
            depth=len(gates),
            simulation=original,
        ),
        optimized=CircuitVersion(
            circuit=result.optimized_circuit,
            gates=len(optimized_gates),
            depth=len(optimized_gates),
            simulation=optimized,
            explanation=optimization.explain_optimization(),
        ),
        improvement=improvement,
        explainability=result.explainability,
        resource_estimates=optimization.estimate_resources(),
    )
