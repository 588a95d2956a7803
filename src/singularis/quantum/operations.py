"""Simulated quantum primitives.

Everything here is pseudo-physics driven by a random generator. Functions
take an optional ``rng`` so callers (and tests) can make results
reproducible; the shared generator from ``singularis.core.rng`` is used otherwise.
"""

import math
import random
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from singularis.core.errors import validation_error
from singularis.core.rng import get_rng
from singularis.core.serialization import camel_dict

KEY_BITS = 256
MAX_KEY_BITS = 65_536
EAVESDROP_PROBABILITY = 0.05
QKD_FLIP_RATE = 0.03
QBER_SECURE_LIMIT = 0.11
ZK_VERIFY_RATE = 0.98

SUPERPOSITION_PLUS = "(|0⟩ + |1⟩)/√2"
SUPERPOSITION_MINUS = "(|0⟩ - |1⟩)/√2"


def utc_timestamp() -> str:
    return datetime.now(UTC).isoformat()


def _random_hex(rng: random.Random, num_bytes: int) -> str:
    return "".join(f"{rng.randrange(256):02x}" for _ in range(num_bytes))


# ═══════════════════════════════════════════════════════════════
# ENTANGLEMENT
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class EntanglementResult:
    """A simulated entanglement-based key exchange between two nodes."""

    node_a: str
    node_b: str
    key: str
    security_level: str
    key_bits: int
    key_gen_rate: int
    decoherence_rate: float
    is_eavesdropping: bool
    timestamp: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> dict[str, Any]:
        return camel_dict(self)


def simulate_quantum_entanglement(
    node_a: str, node_b: str, rng: random.Random | None = None
) -> EntanglementResult:
    rng = get_rng(rng)
    is_eavesdropping = rng.random() < EAVESDROP_PROBABILITY
    decoherence_rate = rng.random() * 0.01
    return EntanglementResult(
        node_a=node_a,
        node_b=node_b,
        key=_random_hex(rng, KEY_BITS // 8),
        security_level="Compromised" if is_eavesdropping else "Quantum-Secure",
        key_bits=KEY_BITS,
        key_gen_rate=math.floor(KEY_BITS * (1 - decoherence_rate)),
        decoherence_rate=decoherence_rate,
        is_eavesdropping=is_eavesdropping,
    )


# ═══════════════════════════════════════════════════════════════
# BELL STATE / QKD
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class BellState:
    state_name: str
    state_vector: str
    probabilities: dict[str, float]
    measurement: str
    is_entangled: bool = True

    def to_dict(self) -> dict[str, Any]:
        return camel_dict(self)


def simulate_bell_state(rng: random.Random | None = None) -> BellState:
    """Prepare |Φ⁺⟩ and sample one measurement."""
    rng = get_rng(rng)
    probabilities = {"00": 0.5, "11": 0.5, "01": 0.0, "10": 0.0}
    return BellState(
        state_name="Bell State |Φ⁺⟩",
        state_vector="(|00⟩ + |11⟩)/√2",
        probabilities=probabilities,
        measurement=sample_outcome(probabilities, rng),
    )


def sample_outcome(probabilities: dict[str, float], rng: random.Random) -> str:
    """Pick a key by cumulative probability. Falls back to the last key."""
    value = rng.random()
    cumulative = 0.0
    outcome = ""
    for outcome, probability in probabilities.items():
        cumulative += probability
        if value < cumulative:
            return outcome
    return outcome


@dataclass(frozen=True, slots=True)
class QKDResult:
    protocol: str
    raw_key_length: int
    sifted_key_length: int
    sifting_ratio: float
    qber: float
    estimated_security_level: str
    key: str
    timestamp: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> dict[str, Any]:
        return camel_dict(self)


def simulate_qkd(bits: int = KEY_BITS, rng: random.Random | None = None) -> QKDResult:
    """BB84-style sifting over ``2 * bits`` raw bits.

    Raises:
        SingularisError: If ``bits`` is not in 1..MAX_KEY_BITS.
    """
    if bits < 1:
        raise validation_error("bits must be a positive integer", bits=bits)
    if bits > MAX_KEY_BITS:
        raise validation_error(f"bits must be at most {MAX_KEY_BITS}", bits=bits)
    rng = get_rng(rng)

    raw_length = bits * 2
    alice = [rng.randrange(2) for _ in range(raw_length)]
    sifted: list[int] = []
    for bit in alice:
        if rng.random() < 0.5:
            flipped = rng.random() < QKD_FLIP_RATE
            sifted.append(1 - bit if flipped else bit)

    sample_size = min(100, math.floor(len(sifted) * 0.1))
    errors = sum(1 for _ in range(sample_size) if rng.random() < QKD_FLIP_RATE)
    qber = errors / sample_size if sample_size else 0.0

    return QKDResult(
        protocol="BB84",
        raw_key_length=raw_length,
        sifted_key_length=len(sifted),
        sifting_ratio=len(sifted) / raw_length,
        qber=qber,
        estimated_security_level=(
            "Quantum-Secure" if qber < QBER_SECURE_LIMIT else "Potentially Compromised"
        ),
        key="".join(str(bit) for bit in sifted[sample_size:]),
    )


# ═══════════════════════════════════════════════════════════════
# GATES
# ═══════════════════════════════════════════════════════════════

_GATE_TABLE: dict[str, dict[str, str]] = {
    "H": {
        "|0⟩": SUPERPOSITION_PLUS,
        "|1⟩": SUPERPOSITION_MINUS,
        SUPERPOSITION_PLUS: "|0⟩",
        SUPERPOSITION_MINUS: "|1⟩",
    },
    "X": {
        "|0⟩": "|1⟩",
        "|1⟩": "|0⟩",
        SUPERPOSITION_PLUS: SUPERPOSITION_PLUS,
        SUPERPOSITION_MINUS: SUPERPOSITION_MINUS,
    },
    "Z": {
        "|0⟩": "|0⟩",
        "|1⟩": "-|1⟩",
        SUPERPOSITION_PLUS: SUPERPOSITION_MINUS,
        SUPERPOSITION_MINUS: SUPERPOSITION_PLUS,
    },
    "Y": {
        "|0⟩": "i|1⟩",
        "|1⟩": "-i|0⟩",
    },
}

SUPPORTED_GATES = ("H", "X", "Y", "Z", "CNOT", "CZ", "SWAP")


def simulate_quantum_gate(gate: str, input_state: str) -> str:
    """Rewrite a symbolic single-qubit state. Unknown combinations pass through."""
    return _GATE_TABLE.get(gate, {}).get(input_state, input_state)


# ═══════════════════════════════════════════════════════════════
# DECOHERENCE / ZERO-KNOWLEDGE PROOFS
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class DecoherenceModel:
    distance_km: float
    num_qubits: int
    error_correction_level: int
    base_decoherence_rate: float
    effective_decoherence_rate: float
    qubit_survival_probability: float
    estimated_coherence_time: float | None
    recommended_error_correction_rate: float
    gravitational_time_dilation_factor: float
    timestamp: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> dict[str, Any]:
        return camel_dict(self)


def simulate_quantum_decoherence(
    distance_km: float, num_qubits: int, error_correction_level: int = 0
) -> DecoherenceModel:
    """Closed-form distance model for qubit survival over interplanetary links."""
    if distance_km < 0:
        raise validation_error("distanceKm must not be negative", distance_km=distance_km)
    if num_qubits < 1:
        raise validation_error("numQubits must be at least 1", num_qubits=num_qubits)

    base_rate = 1 - math.exp(-distance_km / 10000)
    effective_rate = base_rate * 0.5**error_correction_level
    # Zero decoherence means unbounded coherence time; reported as null
    coherence_time = (
        (100 / effective_rate) * (1 - effective_rate) if effective_rate > 0 else None
    )
    return DecoherenceModel(
        distance_km=distance_km,
        num_qubits=num_qubits,
        error_correction_level=error_correction_level,
        base_decoherence_rate=base_rate,
        effective_decoherence_rate=effective_rate,
        qubit_survival_probability=(1 - effective_rate) ** num_qubits,
        estimated_coherence_time=coherence_time,
        recommended_error_correction_rate=effective_rate * 3,
        gravitational_time_dilation_factor=1 + (0.00001 if distance_km > 50_000_000 else 0),
    )


@dataclass(frozen=True, slots=True)
class ProofSystem:
    name: str
    setup_required: bool
    proof_size_bytes: int
    verification_time_ms: int
    post_quantum: bool


PROOF_SYSTEMS: dict[str, ProofSystem] = {
    "bulletproofs": ProofSystem("Bulletproofs", False, 1024, 200, False),
    "groth16": ProofSystem("Groth16", True, 192, 5, False),
    "plonk": ProofSystem("PLONK", True, 192, 50, False),
    "stark": ProofSystem("STARK", False, 16384, 500, True),
}


@dataclass(frozen=True, slots=True)
class ZKProof:
    proof_system: str
    statement: str
    proof: str
    verified: bool
    proof_size_bytes: int
    verification_time_ms: int
    setup_required: bool
    post_quantum_secure: bool
    timestamp: str = field(default_factory=utc_timestamp)

    def to_dict(self) -> dict[str, Any]:
        return camel_dict(self)


def simulate_zk_proof(
    proof_type: str, statement: str, rng: random.Random | None = None
) -> ZKProof:
    """Generate and "verify" a zero-knowledge proof.

    Raises:
        SingularisError: If ``proof_type`` is not a known proof system.
    """
    system = PROOF_SYSTEMS.get(proof_type)
    if system is None:
        raise validation_error(
            f"Unknown proof type '{proof_type}'",
            supported=sorted(PROOF_SYSTEMS),
        )
    rng = get_rng(rng)
    return ZKProof(
        proof_system=system.name,
        statement=statement,
        proof=_random_hex(rng, 20) + "...",
        verified=rng.random() < ZK_VERIFY_RATE,
        proof_size_bytes=system.proof_size_bytes,
        verification_time_ms=system.verification_time_ms,
        setup_required=system.setup_required,
        post_quantum_secure=system.post_quantum,
    )
