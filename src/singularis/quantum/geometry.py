"""Quantum geometry: states embedded in simulated geometric spaces.

A ``QuantumGeometry`` is a named space with a dimension, a set of geometric
elements and a metric. Operations on it return descriptive strings and a few
closed-form numbers. The module-level ``simulate_*`` functions wrap it with
the extra effects the geometry panel displays.
"""

import math
import random
from dataclasses import dataclass
from typing import Any, Literal

from singularis.core.errors import ErrorCode, SingularisError, geometry_error, validation_error
from singularis.core.rng import get_rng
from singularis.core.serialization import camel_dict

GeometricElement = Literal["point", "line", "plane", "manifold"]
TopologicalProperty = Literal["connected", "compact", "orientable", "simply-connected"]
QuantumMetric = Literal["euclidean", "hyperbolic", "elliptic", "minkowski"]
TransformationType = Literal["rotation", "translation", "scaling", "entanglement"]

GEOMETRIC_ELEMENTS = ("point", "line", "plane", "manifold")
TOPOLOGICAL_PROPERTIES = ("connected", "compact", "orientable", "simply-connected")
METRICS = ("euclidean", "hyperbolic", "elliptic", "minkowski")
TRANSFORMATION_TYPES = ("rotation", "translation", "scaling", "entanglement")


def _check_choice(field_name: str, value: str, allowed: tuple[str, ...]) -> None:
    if value not in allowed:
        raise SingularisError(
            ErrorCode.VALIDATION_INVALID_VALUE,
            context={"field": field_name, "detail": f"expected one of {', '.join(allowed)}"},
        )


def _format_number(value: float) -> str:
    return f"{value:g}"


@dataclass(frozen=True, slots=True)
class Invariant:
    name: str
    value: float


@dataclass(frozen=True, slots=True)
class ProximityEntanglement:
    success: bool
    entanglement_strength: float
    description: str


class QuantumGeometry:
    """A simulated geometric space for quantum states.

    Raises:
        SingularisError: If ``dimension`` is below 1, or above 3 without a
            ``manifold`` element, or any element/metric/property is unknown.
    """

    def __init__(
        self,
        space_id: str,
        dimension: int,
        elements: list[GeometricElement] | tuple[GeometricElement, ...],
        metric: QuantumMetric = "minkowski",
        topological_properties: tuple[TopologicalProperty, ...] = ("connected",),
        energy_density: float = 1.0,
    ) -> None:
        if dimension < 1:
            raise geometry_error("Dimension must be at least 1")
        if dimension > 3 and "manifold" not in elements:
            raise geometry_error("Higher-dimensional spaces require manifold elements")
        for element in elements:
            _check_choice("elements", element, GEOMETRIC_ELEMENTS)
        _check_choice("metric", metric, METRICS)
        for prop in topological_properties:
            _check_choice("topologicalProperties", prop, TOPOLOGICAL_PROPERTIES)

        self.space_id = space_id
        self.dimension = dimension
        self.elements = list(elements)
        self.metric = metric
        self.topological_properties = list(topological_properties)
        self.energy_density = energy_density

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.space_id,
            "dimension": self.dimension,
            "elements": self.elements,
            "metric": self.metric,
            "topologicalProperties": self.topological_properties,
            "energyDensity": self.energy_density,
        }

    def create_space(self) -> str:
        return (
            f"Created {self.dimension}D quantum geometric space '{self.space_id}' "
            f"with {self.metric} metric"
        )

    def embed_quantum_state(self, state_id: str, coordinates: list[float]) -> str:
        if len(coordinates) != self.dimension:
            raise SingularisError(
                ErrorCode.QUANTUM_DIMENSION_MISMATCH, context={"expected": self.dimension}
            )
        coords = ", ".join(_format_number(c) for c in coordinates)
        return f"Embedded quantum state '{state_id}' at coordinates [{coords}] in space '{self.space_id}'"

    def transform(self, transformation_type: TransformationType, parameters: dict[str, float]) -> str:
        _check_choice("transformationType", transformation_type, TRANSFORMATION_TYPES)
        params = ", ".join(f"{key}: {_format_number(value)}" for key, value in parameters.items())
        return f"Applied {transformation_type} transformation ({params}) in space '{self.space_id}'"

    def compute_invariants(self) -> list[Invariant]:
        """Euler characteristic, curvature and entropy (all simplified)."""
        return [
            Invariant("euler-characteristic", len(self.elements) - self.dimension),
            Invariant("quantum-curvature", self.energy_density * (self.dimension - 2)),
            # Element-less spaces report zero entropy
            Invariant(
                "topological-entropy",
                math.log(self.dimension * len(self.elements)) if self.elements else 0.0,
            ),
        ]

    def entangle_by_proximity(self, state_a: str, state_b: str, distance: float) -> ProximityEntanglement:
        strength = 1.0 / (distance + 0.1)
        return ProximityEntanglement(
            success=distance < self.dimension * 2,
            entanglement_strength=min(strength, 1.0),
            description=(
                f"Entangled states '{state_a}' and '{state_b}' with geometric proximity "
                f"{_format_number(distance)} units"
            ),
        )


# ═══════════════════════════════════════════════════════════════
# SIMULATIONS
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Embedding:
    state_id: str
    coordinates: list[float]
    result: str


def simulate_geometric_embedding(
    space: QuantumGeometry, state_ids: list[str], coordinate_sets: list[list[float]]
) -> dict[str, Any]:
    """Embed each state; per-state failures are reported in its ``result``."""
    if len(state_ids) != len(coordinate_sets):
        raise validation_error("Number of state IDs must match number of coordinate sets")

    embeddings = []
    for state_id, coordinates in zip(state_ids, coordinate_sets, strict=True):
        try:
            result = space.embed_quantum_state(state_id, coordinates)
        except SingularisError as e:
            result = e.message
        embeddings.append(Embedding(state_id, coordinates, result))
    return {"embeddings": camel_dict(embeddings)}


def simulate_geometric_transformation(
    space: QuantumGeometry,
    transformation_type: TransformationType,
    parameters: dict[str, float],
    rng: random.Random | None = None,
) -> dict[str, Any]:
    rng = get_rng(rng)
    result = space.transform(transformation_type, parameters)

    energy_delta = 0.0
    match transformation_type:
        case "rotation":
            energy_delta = 0.01 * rng.random()
        case "translation":
            energy_delta = 0.0 if space.metric == "euclidean" else 0.1 * rng.random()
        case "scaling":
            energy_delta = space.energy_density * (parameters.get("factor", 1.0) - 1.0)
        case "entanglement":
            energy_delta = 0.5 - rng.random()

    return {
        "transformationType": transformation_type,
        "parameters": parameters,
        "result": result,
        "energyDelta": energy_delta,
    }


def simulate_geometric_entanglement(
    space: QuantumGeometry,
    state_a: str,
    state_b: str,
    distance: float,
    rng: random.Random | None = None,
) -> dict[str, Any]:
    if distance < 0:
        raise validation_error("distance must not be negative", distance=distance)
    rng = get_rng(rng)
    outcome = space.entangle_by_proximity(state_a, state_b, distance)
    strength = outcome.entanglement_strength

    preservation = 0.7 + 0.3 * strength if outcome.success else 0.2 + 0.3 * rng.random()
    resistance = (
        (0.3 if "compact" in space.topological_properties else 0.0)
        + (0.2 if space.energy_density < 1.0 else 0.0)
        + strength * 0.5
    )
    non_locality = (
        space.dimension * 0.1 + strength * 0.7 + (0.2 if space.metric == "minkowski" else 0.0)
    )
    return {
        "entanglementResult": camel_dict(outcome),
        "spaceProperties": {
            "spaceId": space.space_id,
            "dimension": space.dimension,
            "metric": space.metric,
        },
        "quantumEffects": {
            "informationPreservation": preservation,
            "decoherenceResistance": resistance,
            "nonLocalityMeasure": non_locality,
        },
    }


def _interpret(invariant: Invariant) -> dict[str, str] | None:
    value = invariant.value
    match invariant.name:
        case "euler-characteristic":
            if value == 0:
                implication = "Torus-like quantum structure, supports non-commutative operations"
            elif value > 0:
                implication = "Sphere-like quantum structure, favors stable qubit storage"
            else:
                implication = (
                    "Complex saddle-like structure, enables multi-directional quantum routing"
                )
            return {"property": "Topological structure", "implication": implication}
        case "quantum-curvature":
            if value < 0:
                implication = "Negative curvature enhances quantum state separation"
            elif value > 1:
                implication = "High positive curvature may cause quantum state congestion"
            else:
                implication = "Moderate curvature provides optimal balance for quantum operations"
            return {"property": "Information density", "implication": implication}
        case "topological-entropy":
            implication = (
                "High entropy space supports robust error correction schemes"
                if value > 2
                else "Low entropy space optimized for quantum state preservation"
            )
            return {"property": "Computational complexity", "implication": implication}
    return None


def compute_topological_invariants(space: QuantumGeometry) -> dict[str, Any]:
    invariants = space.compute_invariants()
    interpretation = [item for item in map(_interpret, invariants) if item is not None]
    return {"invariants": camel_dict(invariants), "interpretation": interpretation}
