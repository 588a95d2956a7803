"""Shared Pydantic models for API routes.

All models inherit from CamelModel, which accepts and emits camelCase keys
while the Python side keeps snake_case field names.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from singularis.core.serialization import to_camel
from singularis.quantum.circuit import MAX_CIRCUIT_QUBITS
from singularis.quantum.operations import MAX_KEY_BITS


class CamelModel(BaseModel):
    """Base model with camelCase JSON serialization."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


DetailLevel = Literal["basic", "moderate", "comprehensive"]


# ═══════════════════════════════════════════════════════════════
# LANGUAGE
# ═══════════════════════════════════════════════════════════════


class CodeRequest(CamelModel):
    code: str


class DetailedCodeRequest(CamelModel):
    code: str
    detail_level: str | None = None


class ExplainabilityRequest(CamelModel):
    code: str
    threshold: float = 0.8


# ═══════════════════════════════════════════════════════════════
# QUANTUM
# ═══════════════════════════════════════════════════════════════


class EntangleRequest(CamelModel):
    node_a: str | None = None
    node_b: str | None = None


class QKDRequest(CamelModel):
    bits: int | None = Field(None, le=MAX_KEY_BITS)


class GateRequest(CamelModel):
    gate: str
    input_state: str


class DecoherenceRequest(CamelModel):
    distance_km: float
    num_qubits: int
    error_correction_level: int = 0


class ZKProofRequest(CamelModel):
    proof_type: str
    statement: str


class GateModel(CamelModel):
    gate: str
    targets: list[int] = Field(default_factory=list)
    controls: list[int] | None = None
    position: int | None = None


class CircuitOptions(CamelModel):
    explain: bool = False


class CircuitSimulateRequest(CamelModel):
    gates: list[GateModel]
    options: CircuitOptions = Field(default_factory=CircuitOptions)


class OptimizationModel(CamelModel):
    goal: str
    method: str = "gradient_descent"
    threshold: float = 0.9
    priority: str = "critical"
    parameters: dict[str, float] = Field(default_factory=dict)


class CircuitOptimizeRequest(CamelModel):
    gates: list[GateModel]
    num_qubits: int = Field(2, le=MAX_CIRCUIT_QUBITS)
    optimization: OptimizationModel


# ═══════════════════════════════════════════════════════════════
# GEOMETRY
# ═══════════════════════════════════════════════════════════════


class SpaceRequest(CamelModel):
    space_id: str
    dimension: int
    elements: list[str]
    metric: str | None = None
    topological_properties: list[str] | None = None
    energy_density: float | None = None


class EmbedStatesRequest(SpaceRequest):
    state_ids: list[str]
    coordinate_sets: list[list[float]]


class TransformRequest(SpaceRequest):
    transformation_type: str
    parameters: dict[str, float]


class GeometricEntangleRequest(SpaceRequest):
    state_a: str
    state_b: str
    distance: float


# ═══════════════════════════════════════════════════════════════
# OPTIMIZATION DIRECTIVES
# ═══════════════════════════════════════════════════════════════


class DirectiveModel(CamelModel):
    goal: str
    line_number: int = 0
    method: str | None = None
    priority: str | None = None
    threshold: float | None = None
    parameters: dict[str, float] | None = None


class ApplyDirectivesRequest(CamelModel):
    code: str
    directives: list[DirectiveModel] | None = None


# ═══════════════════════════════════════════════════════════════
# AI
# ═══════════════════════════════════════════════════════════════


class AIEntityModel(CamelModel):
    id: str
    name: str
    expertise: list[str] = Field(default_factory=list)
    trust_level: float = 0.5
    explainability_score: float = 0.5


class NegotiateRequest(CamelModel):
    initiator: AIEntityModel
    responder: AIEntityModel
    terms: dict[str, Any] = Field(default_factory=dict)
    explainability_threshold: float = 0.8


class GovernanceRequest(CamelModel):
    current_model: str
    environmental_changes: list[str] = Field(default_factory=list)
    ethical_constraints: list[str] = Field(default_factory=list)


# ═══════════════════════════════════════════════════════════════
# ANALYSIS & GLYPH
# ═══════════════════════════════════════════════════════════════


class GenerateCodeRequest(CamelModel):
    operation: str
    dimensions: int | None = None
    temperature: float | None = None


class GlyphRequest(CamelModel):
    spell: str
