"""Tests for circuit simulation, summaries and AI-optimized circuits."""

import random

import pytest

from singularis.core.errors import ErrorCode, SingularisError
from singularis.quantum import (
    AIOptimization,
    Gate,
    simulate_ai_optimized_circuit,
    simulate_quantum_circuit,
    summarize_circuit,
)
from singularis.quantum.circuit import MAX_CIRCUIT_QUBITS, entanglement_groups

BELL = [Gate("H", (0,), position=0), Gate("CNOT", (1,), controls=(0,), position=1)]


class TestGate:
    def test_from_dict(self) -> None:
        gate = Gate.from_dict({"gate": "CNOT", "targets": [1], "controls": [0], "position": 2})
        assert gate == Gate("CNOT", (1,), (0,), 2)

    def test_label(self) -> None:
        assert Gate("H", (0,)).label() == "H(0)"
        assert Gate("CNOT", (1,), (0,)).label() == "CNOT(1; controls=0)"


class TestEntanglementGroups:
    def test_overlapping_groups_merge(self) -> None:
        gates = [
            Gate("CNOT", (1,), (0,)),
            Gate("CNOT", (3,), (2,)),
            Gate("CZ", (2,), (1,)),
        ]
        [group] = entanglement_groups(gates)
        assert sorted(group) == [0, 1, 2, 3]

    def test_single_qubit_gates_ignored(self) -> None:
        assert entanglement_groups([Gate("H", (0,)), Gate("X", (1,))]) == []


class TestSimulateCircuit:
    def test_entangled_outcomes_weighted(self, rng: random.Random) -> None:
        result = simulate_quantum_circuit(BELL, 2, rng=rng)
        probs = result.measurement_probabilities
        assert sum(probs.values()) == pytest.approx(1.0)
        assert probs["00"] > probs["01"]
        assert probs["11"] > probs["10"]
        assert result.entangled_groups == [[0, 1]]
        assert result.outcome in probs

    def test_out_of_range_qubit(self) -> None:
        with pytest.raises(SingularisError) as exc_info:
            simulate_quantum_circuit([Gate("X", (3,))], 2)
        assert exc_info.value.code == ErrorCode.QUANTUM_INVALID_CIRCUIT

    def test_zero_qubits(self) -> None:
        with pytest.raises(SingularisError):
            simulate_quantum_circuit([], 0)

    def test_qubit_limit(self, rng: random.Random) -> None:
        result = simulate_quantum_circuit([Gate("H", (0,))], MAX_CIRCUIT_QUBITS, rng=rng)
        assert len(result.measurement_probabilities) == 2**MAX_CIRCUIT_QUBITS
        with pytest.raises(SingularisError) as exc_info:
            simulate_quantum_circuit([Gate("H", (0,))], MAX_CIRCUIT_QUBITS + 1)
        assert exc_info.value.code == ErrorCode.VALIDATION_MISSING_FIELD


class TestSummarize:
    def test_bell_pattern(self, rng: random.Random) -> None:
        summary = summarize_circuit(BELL, explain=True, rng=rng)
        assert summary.probabilities == {"00": 0.5, "11": 0.5}
        assert summary.statistics.depth == 2
        assert 0.8 <= summary.statistics.entanglement <= 1.0
        assert "Bell state" in (summary.explanation or "")

    def test_ghz_pattern(self, rng: random.Random) -> None:
        gates = [*BELL, Gate("CNOT", (2,), (1,), 2)]
        assert summarize_circuit(gates, rng=rng).probabilities == {"000": 0.5, "111": 0.5}

    def test_uniform_superposition(self, rng: random.Random) -> None:
        summary = summarize_circuit([Gate("H", (0,)), Gate("H", (1,))], rng=rng)
        assert summary.probabilities == {"00": 0.25, "01": 0.25, "10": 0.25, "11": 0.25}

    def test_basis_state(self, rng: random.Random) -> None:
        summary = summarize_circuit([Gate("X", (2,))], rng=rng)
        assert summary.probabilities == {"000": 1.0}

    def test_explanation_omitted_unless_requested(self, rng: random.Random) -> None:
        assert "explanation" not in summarize_circuit(BELL, rng=rng).to_dict()

    def test_empty_circuit(self) -> None:
        with pytest.raises(SingularisError) as exc_info:
            summarize_circuit([])
        assert exc_info.value.code == ErrorCode.QUANTUM_INVALID_CIRCUIT

    def test_qubit_index_beyond_limit(self) -> None:
        with pytest.raises(SingularisError) as exc_info:
            summarize_circuit([Gate("H", (MAX_CIRCUIT_QUBITS,))])
        assert exc_info.value.code == ErrorCode.QUANTUM_INVALID_CIRCUIT


class TestOptimizedCircuit:
    def test_oversized_register_rejected_before_simulating(self) -> None:
        with pytest.raises(SingularisError) as exc_info:
            simulate_ai_optimized_circuit([Gate("H", (0,))], 40, AIOptimization("fidelity"))
        assert exc_info.value.code == ErrorCode.VALIDATION_MISSING_FIELD

    def test_fidelity_adds_three_gates(self, rng: random.Random) -> None:
        report = simulate_ai_optimized_circuit(BELL, 2, AIOptimization("fidelity"), rng=rng)
        assert report.original.gates == 2
        assert report.optimized.gates == 5
        assert report.improvement["gateCount"] == 3
        assert "fidelity" in report.improvement
        assert report.explainability == 0.85

    def test_gate_count_never_grows(self, rng: random.Random) -> None:
        gates = [Gate("H", (0,)), Gate("X", (1,)), Gate("X", (1,)), Gate("Z", (0,))]
        report = simulate_ai_optimized_circuit(gates, 2, AIOptimization("gate_count"), rng=rng)
        assert report.optimized.gates == 3

    def test_to_dict_shape(self, rng: random.Random) -> None:
        data = simulate_ai_optimized_circuit(
            BELL, 2, AIOptimization("explainability", method="heuristic"), rng=rng
        ).to_dict()
        assert "explanation" not in data["original"]
        assert data["optimized"]["explanation"].startswith("Optimization focused on")
        assert set(data["resourceEstimates"]) == {
            "computeTime", "memoryRequired", "classicalPreprocessing",
        }
