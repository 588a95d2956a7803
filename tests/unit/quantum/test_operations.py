"""Tests for the simulated quantum primitives."""

import random

import pytest

from singularis.core.errors import ErrorCode, SingularisError
from singularis.quantum import (
    simulate_bell_state,
    simulate_qkd,
    simulate_quantum_decoherence,
    simulate_quantum_entanglement,
    simulate_quantum_gate,
    simulate_zk_proof,
)
from singularis.quantum.operations import MAX_KEY_BITS, SUPERPOSITION_MINUS, SUPERPOSITION_PLUS


class TestEntanglement:
    def test_key_shape(self, rng: random.Random) -> None:
        result = simulate_quantum_entanglement("earth", "mars", rng=rng)
        assert result.key_bits == 256
        assert len(result.key) == 64
        int(result.key, 16)
        assert 0 <= result.decoherence_rate < 0.01
        assert 253 <= result.key_gen_rate <= 256

    def test_security_follows_eavesdropping(self, rng: random.Random) -> None:
        for _ in range(50):
            result = simulate_quantum_entanglement("a", "b", rng=rng)
            expected = "Compromised" if result.is_eavesdropping else "Quantum-Secure"
            assert result.security_level == expected

    def test_to_dict_is_camel_case(self, rng: random.Random) -> None:
        data = simulate_quantum_entanglement("a", "b", rng=rng).to_dict()
        assert data["nodeA"] == "a"
        assert "securityLevel" in data
        assert "isEavesdropping" in data


class TestBellAndQKD:
    def test_bell_state_measures_correlated(self, rng: random.Random) -> None:
        for _ in range(20):
            assert simulate_bell_state(rng=rng).measurement in ("00", "11")

    def test_qkd_lengths(self, rng: random.Random) -> None:
        result = simulate_qkd(64, rng=rng)
        assert result.protocol == "BB84"
        assert result.raw_key_length == 128
        assert 0 < result.sifted_key_length <= 128
        assert result.sifting_ratio == result.sifted_key_length / 128
        assert set(result.key) <= {"0", "1"}

    def test_qkd_security_matches_qber(self, rng: random.Random) -> None:
        result = simulate_qkd(rng=rng)
        expected = "Quantum-Secure" if result.qber < 0.11 else "Potentially Compromised"
        assert result.estimated_security_level == expected

    def test_qkd_rejects_zero_bits(self) -> None:
        with pytest.raises(SingularisError) as exc_info:
            simulate_qkd(0)
        assert exc_info.value.code == ErrorCode.VALIDATION_MISSING_FIELD

    def test_qkd_rejects_oversized_key(self) -> None:
        with pytest.raises(SingularisError) as exc_info:
            simulate_qkd(MAX_KEY_BITS + 1)
        assert exc_info.value.context["bits"] == MAX_KEY_BITS + 1


class TestGates:
    @pytest.mark.parametrize(
        ("gate", "state", "expected"),
        [
            ("H", "|0⟩", SUPERPOSITION_PLUS),
            ("H", SUPERPOSITION_MINUS, "|1⟩"),
            ("X", "|1⟩", "|0⟩"),
            ("Z", "|1⟩", "-|1⟩"),
            ("Y", "|0⟩", "i|1⟩"),
        ],
    )
    def test_known_transitions(self, gate: str, state: str, expected: str) -> None:
        assert simulate_quantum_gate(gate, state) == expected

    def test_unknown_combination_passes_through(self) -> None:
        assert simulate_quantum_gate("Y", SUPERPOSITION_PLUS) == SUPERPOSITION_PLUS
        assert simulate_quantum_gate("T", "|0⟩") == "|0⟩"


class TestDecoherence:
    def test_zero_distance_has_unbounded_coherence(self) -> None:
        model = simulate_quantum_decoherence(0, 4)
        assert model.base_decoherence_rate == 0
        assert model.qubit_survival_probability == 1
        assert model.estimated_coherence_time is None

    def test_error_correction_halves_rate(self) -> None:
        plain = simulate_quantum_decoherence(10_000, 2)
        corrected = simulate_quantum_decoherence(10_000, 2, error_correction_level=2)
        assert corrected.effective_decoherence_rate == pytest.approx(
            plain.effective_decoherence_rate / 4
        )

    def test_interplanetary_time_dilation(self) -> None:
        assert simulate_quantum_decoherence(60_000_000, 1).gravitational_time_dilation_factor > 1
        assert simulate_quantum_decoherence(1_000, 1).gravitational_time_dilation_factor == 1

    @pytest.mark.parametrize(("distance", "qubits"), [(-1, 2), (10, 0)])
    def test_invalid_inputs(self, distance: float, qubits: int) -> None:
        with pytest.raises(SingularisError):
            simulate_quantum_decoherence(distance, qubits)


class TestZKProof:
    def test_known_system(self, rng: random.Random) -> None:
        proof = simulate_zk_proof("stark", "x > 0", rng=rng)
        assert proof.proof_system == "STARK"
        assert proof.post_quantum_secure is True
        assert proof.proof.endswith("...")
        assert proof.to_dict()["proofSizeBytes"] == 16384

    def test_unknown_system(self) -> None:
        with pytest.raises(SingularisError) as exc_info:
            simulate_zk_proof("snarkish", "x")
        assert "snarkish" in exc_info.value.message
