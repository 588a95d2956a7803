"""Simulated quantum operations, circuits, optimisation and geometry."""

from singularis.quantum.circuit import (
    Gate,
    simulate_ai_optimized_circuit,
    simulate_quantum_circuit,
    summarize_circuit,
)
from singularis.quantum.directives import (
    apply_optimization_directives,
    generate_optimization_suggestions,
    parse_optimization_directives,
)
from singularis.quantum.geometry import (
    QuantumGeometry,
    compute_topological_invariants,
    simulate_geometric_embedding,
    simulate_geometric_entanglement,
    simulate_geometric_transformation,
)
from singularis.quantum.operations import (
    simulate_bell_state,
    simulate_qkd,
    simulate_quantum_decoherence,
    simulate_quantum_entanglement,
    simulate_quantum_gate,
    simulate_zk_proof,
)
from singularis.quantum.optimization import AIOptimization

__all__ = [
    "AIOptimization",
    "Gate",
    "QuantumGeometry",
    "apply_optimization_directives",
    "compute_topological_invariants",
    "generate_optimization_suggestions",
    "parse_optimization_directives",
    "simulate_ai_optimized_circuit",
    "simulate_bell_state",
    "simulate_geometric_embedding",
    "simulate_geometric_entanglement",
    "simulate_geometric_transformation",
    "simulate_qkd",
    "simulate_quantum_circuit",
    "simulate_quantum_decoherence",
    "simulate_quantum_entanglement",
    "simulate_quantum_gate",
    "simulate_zk_proof",
    "summarize_circuit",
]
