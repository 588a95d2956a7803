"""Quantum simulation routes (operations and circuits)."""

from typing import Any

from fastapi import APIRouter

from singularis.config import get_config
from singularis.core.errors import validation_error
from singularis.quantum import (
    AIOptimization,
    Gate,
    simulate_ai_optimized_circuit,
    simulate_bell_state,
    simulate_qkd,
    simulate_quantum_decoherence,
    simulate_quantum_entanglement,
    simulate_quantum_gate,
    simulate_zk_proof,
    summarize_circuit,
)
from singularis.server.routes._models import (
    CircuitOptimizeRequest,
    CircuitSimulateRequest,
    DecoherenceRequest,
    EntangleRequest,
    GateModel,
    GateRequest,
    QKDRequest,
    ZKProofRequest,
)

router = APIRouter(prefix="/api/quantum", tags=["quantum"])


def _gates(models: list[GateModel]) -> list[Gate]:
    return [Gate.from_dict(m.model_dump()) for m in models]


# ═══════════════════════════════════════════════════════════════
# OPERATIONS
# ═══════════════════════════════════════════════════════════════


@router.post("/entangle")
async def entangle(request: EntangleRequest) -> dict[str, Any]:
    if not request.node_a or not request.node_b:
        raise validation_error("Two nodes are required for entanglement")
    return simulate_quantum_entanglement(request.node_a, request.node_b).to_dict()


@router.post("/qkd")
async def qkd(request: QKDRequest) -> dict[str, Any]:
    bits = get_config().runtime.default_qkd_bits if request.bits is None else request.bits
    return simulate_qkd(bits).to_dict()


@router.post("/bell-state")
async def bell_state() -> dict[str, Any]:
    return simulate_bell_state().to_dict()


@router.post("/gate")
async def gate(request: GateRequest) -> dict[str, Any]:
    return {
        "gate": request.gate,
        "inputState": request.input_state,
        "outputState": simulate_quantum_gate(request.gate, request.input_state),
    }


@router.post("/decoherence")
async def decoherence(request: DecoherenceRequest) -> dict[str, Any]:
    return simulate_quantum_decoherence(
        request.distance_km, request.num_qubits, request.error_correction_level
    ).to_dict()


@router.post("/zk-proof")
async def zk_proof(request: ZKProofRequest) -> dict[str, Any]:
    return simulate_zk_proof(request.proof_type, request.statement).to_dict()


# ═══════════════════════════════════════════════════════════════
# CIRCUITS
# ═══════════════════════════════════════════════════════════════


@router.post("/circuit/simulate")
async def simulate_circuit(request: CircuitSimulateRequest) -> dict[str, Any]:
    """Probability summary for the circuit designer."""
    summary = summarize_circuit(_gates(request.gates), explain=request.options.explain)
    return {"result": summary.to_dict()}


@router.post("/circuit/optimize")
async def optimize_circuit(request: CircuitOptimizeRequest) -> dict[str, Any]:
    spec = request.optimization
    optimization = AIOptimization(
        goal=spec.goal,
        method=spec.method,
        threshold=spec.threshold,
        priority=spec.priority,
        parameters=spec.parameters,
    )
    report = simulate_ai_optimized_circuit(_gates(request.gates), request.num_qubits, optimization)
    return report.to_dict()
