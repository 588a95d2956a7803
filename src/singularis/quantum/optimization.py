"""AI-driven circuit optimisation (simulated)."""

import random
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

from singularis.core.errors import ErrorCode, SingularisError
from singularis.core.rng import get_rng
from singularis.core.serialization import camel_dict


class OptimizationGoal(str, Enum):
    FIDELITY = "fidelity"
    GATE_COUNT = "gate_count"
    DEPTH = "depth"
    ERROR_MITIGATION = "error_mitigation"
    EXECUTION_TIME = "execution_time"
    EXPLAINABILITY = "explainability"


class OptimizationMethod(str, Enum):
    GRADIENT_DESCENT = "gradient_descent"
    QUANTUM_ANNEALING = "quantum_annealing"
    TENSOR_NETWORK = "tensor_network"
    REINFORCEMENT_LEARNING = "reinforcement_learning"
    HEURISTIC = "heuristic"


class CircuitPriority(str, Enum):
    CRITICAL = "critical"
    APPROXIMATE_OK = "approximate_ok"
    ERROR_TOLERANT = "error_tolerant"


METHOD_EXPLAINABILITY: dict[OptimizationMethod, float] = {
    OptimizationMethod.GRADIENT_DESCENT: 0.85,
    OptimizationMethod.QUANTUM_ANNEALING: 0.75,
    OptimizationMethod.TENSOR_NETWORK: 0.8,
    OptimizationMethod.REINFORCEMENT_LEARNING: 0.7,
    OptimizationMethod.HEURISTIC: 0.95,
}

# (compute time, memory, classical preprocessing) base units per method
_BASE_RESOURCES: dict[OptimizationMethod, tuple[float, float, float]] = {
    OptimizationMethod.GRADIENT_DESCENT: (5, 4, 3),
    OptimizationMethod.QUANTUM_ANNEALING: (8, 2, 2),
    OptimizationMethod.TENSOR_NETWORK: (12, 8, 5),
    OptimizationMethod.REINFORCEMENT_LEARNING: (15, 6, 8),
    OptimizationMethod.HEURISTIC: (2, 1, 1),
}

_GOAL_EXPLANATIONS: dict[OptimizationGoal, str] = {
    OptimizationGoal.FIDELITY: "maximizing the accuracy of quantum operations",
    OptimizationGoal.GATE_COUNT: "reducing the total number of quantum gates",
    OptimizationGoal.DEPTH: "minimizing circuit depth for faster execution",
    OptimizationGoal.ERROR_MITIGATION: "reducing susceptibility to quantum errors",
    OptimizationGoal.EXECUTION_TIME: "optimizing for fastest possible execution",
    OptimizationGoal.EXPLAINABILITY: "ensuring operations are transparent and auditable",
}

_METHOD_EXPLANATIONS: dict[OptimizationMethod, str] = {
    OptimizationMethod.GRADIENT_DESCENT: "iterative parameter optimization",
    OptimizationMethod.QUANTUM_ANNEALING: "quantum-based search for optimal configuration",
    OptimizationMethod.TENSOR_NETWORK: "tensor contraction for efficient circuit simulation",
    OptimizationMethod.REINFORCEMENT_LEARNING: "adaptive learning of optimal transformations",
    OptimizationMethod.HEURISTIC: "rule-based transformations with proven effectiveness",
}

_PRIORITY_EXPLANATIONS: dict[CircuitPriority, str] = {
    CircuitPriority.CRITICAL: "with strict adherence to accuracy requirements",
    CircuitPriority.APPROXIMATE_OK: "allowing approximations where appropriate",
    CircuitPriority.ERROR_TOLERANT: "with focus on error resistance over precision",
}


E = TypeVar("E", bound=Enum)


def coerce_enum(enum_type: type[E], value: Any, field_name: str) -> E:
    try:
        return enum_type(value)
    except ValueError as e:
        allowed = ", ".join(member.value for member in enum_type)
        raise SingularisError(
            ErrorCode.VALIDATION_INVALID_VALUE,
            context={"field": field_name, "detail": f"expected one of {allowed}, got {value!r}"},
            cause=e,
        ) from e


@dataclass(frozen=True, slots=True)
class OptimizedCircuit:
    optimized_circuit: str
    improvement_metrics: dict[str, float]
    explainability: float


@dataclass(frozen=True, slots=True)
class ResourceEstimate:
    compute_time: float
    memory_required: float
    classical_preprocessing: float

    def to_dict(self) -> dict[str, Any]:
        return camel_dict(self)


class AIOptimization:
    """Optimisation strategy for a quantum circuit.

    Raises:
        SingularisError: If ``threshold`` is outside [0, 1] or an enum value
            is unknown.
    """

    def __init__(
        self,
        goal: OptimizationGoal | str,
        method: OptimizationMethod | str = OptimizationMethod.GRADIENT_DESCENT,
        threshold: float = 0.9,
        priority: CircuitPriority | str = CircuitPriority.CRITICAL,
        parameters: dict[str, float] | None = None,
    ) -> None:
        if not 0 <= threshold <= 1:
            raise SingularisError(
                ErrorCode.VALIDATION_THRESHOLD_RANGE, context={"threshold": threshold}
            )
        self.goal = coerce_enum(OptimizationGoal, goal, "goal")
        self.method = coerce_enum(OptimizationMethod, method, "method")
        self.priority = coerce_enum(CircuitPriority, priority, "priority")
        self.threshold = threshold
        self.parameters = dict(parameters or {})

    def optimize_circuit(self, circuit: str, rng: random.Random | None = None) -> OptimizedCircuit:
        rng = get_rng(rng)
        metrics: dict[str, float] = {}
        match self.goal:
            case OptimizationGoal.FIDELITY:
                metrics["fidelity"] = min(0.99, rng.random() * 0.1 + 0.85)
                metrics["overhead"] = rng.random() * 0.2 + 0.1
            case OptimizationGoal.GATE_COUNT:
                metrics["gateReduction"] = rng.random() * 0.3 + 0.1
                metrics["circuitDepth"] = rng.random() * 0.2 + 0.1
            case OptimizationGoal.DEPTH:
                metrics["depthReduction"] = rng.random() * 0.4 + 0.2
                metrics["gateCount"] = rng.random() * 0.1 - 0.05
            case OptimizationGoal.ERROR_MITIGATION:
                # Negative error rate change is an improvement
                metrics["errorRate"] = -(rng.random() * 0.3 + 0.2)
                metrics["fidelity"] = min(0.98, rng.random() * 0.15 + 0.8)
            case OptimizationGoal.EXECUTION_TIME:
                metrics["executionTime"] = -(rng.random() * 0.25 + 0.15)
                metrics["resourceUsage"] = -(rng.random() * 0.2 + 0.1)
            case OptimizationGoal.EXPLAINABILITY:
                metrics["explainabilityScore"] = rng.random() * 0.15 + 0.8
                metrics["humanReadability"] = rng.random() * 0.2 + 0.7

        header = (
            f"// AI-Optimized for {self.goal.value} using {self.method.value}\n"
            f"// Priority: {self.priority.value}, Threshold: {self.threshold}\n"
        )
        return OptimizedCircuit(
            optimized_circuit=header + circuit,
            improvement_metrics=metrics,
            explainability=METHOD_EXPLAINABILITY[self.method],
        )

    def estimate_resources(self) -> ResourceEstimate:
        values = list(self.parameters.values())
        scaling = sum(values) / max(1, len(values))
        base_time, base_memory, base_prep = _BASE_RESOURCES[self.method]
        return ResourceEstimate(
            compute_time=base_time * (1 + scaling * 0.2),
            memory_required=base_memory * (1 + scaling * 0.1),
            classical_preprocessing=base_prep * (1 + scaling * 0.15),
        )

    def explain_optimization(self) -> str:
        return (
            f"Optimization focused on {_GOAL_EXPLANATIONS[self.goal]} using "
            f"{_METHOD_EXPLANATIONS[self.method]} {_PRIORITY_EXPLANATIONS[self.priority]}."
        )
