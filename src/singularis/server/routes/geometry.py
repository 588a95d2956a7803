"""Quantum geometry routes.

Every request carries the space definition; spaces are rebuilt per call.
"""

from typing import Any

from fastapi import APIRouter

from singularis.quantum import (
    QuantumGeometry,
    compute_topological_invariants,
    simulate_geometric_embedding,
    simulate_geometric_entanglement,
    simulate_geometric_transformation,
)
from singularis.server.routes._models import (
    EmbedStatesRequest,
    GeometricEntangleRequest,
    SpaceRequest,
    TransformRequest,
)

router = APIRouter(prefix="/api/quantum/geometry", tags=["geometry"])


def build_space(request: SpaceRequest) -> QuantumGeometry:
    options: dict[str, Any] = {}
    if request.metric:
        options["metric"] = request.metric
    if request.topological_properties:
        options["topological_properties"] = tuple(request.topological_properties)
    if request.energy_density is not None:
        options["energy_density"] = request.energy_density
    return QuantumGeometry(request.space_id, request.dimension, request.elements, **options)


@router.post("/create-space")
async def create_space(request: SpaceRequest) -> dict[str, Any]:
    space = build_space(request)
    return {"space": space.to_dict(), "creationResult": space.create_space()}


@router.post("/embed-states")
async def embed_states(request: EmbedStatesRequest) -> dict[str, Any]:
    return simulate_geometric_embedding(
        build_space(request), request.state_ids, request.coordinate_sets
    )


@router.post("/transform")
async def transform(request: TransformRequest) -> dict[str, Any]:
    return simulate_geometric_transformation(
        build_space(request), request.transformation_type, request.parameters
    )


@router.post("/entangle")
async def entangle(request: GeometricEntangleRequest) -> dict[str, Any]:
    return simulate_geometric_entanglement(
        build_space(request), request.state_a, request.state_b, request.distance
    )


@router.post("/invariants")
async def invariants(request: SpaceRequest) -> dict[str, Any]:
    return compute_topological_invariants(build_space(request))
