"""Optimization directive routes."""

from typing import Any

from fastapi import APIRouter

from singularis.quantum import (
    apply_optimization_directives,
    generate_optimization_suggestions,
    parse_optimization_directives,
)
from singularis.quantum.directives import OptimizationDirective
from singularis.server.routes._models import ApplyDirectivesRequest, CodeRequest

router = APIRouter(prefix="/api/optimization/directives", tags=["optimization"])


@router.post("/parse")
async def parse_directives(request: CodeRequest) -> dict[str, Any]:
    directives = parse_optimization_directives(request.code)
    return {"directives": [d.to_dict() for d in directives]}


@router.post("/apply")
async def apply_directives(request: ApplyDirectivesRequest) -> dict[str, Any]:
    """Apply explicit directives, or the ones in the code header when none are given."""
    if request.directives is None:
        directives = parse_optimization_directives(request.code)
    else:
        directives = [
            OptimizationDirective.from_dict(d.model_dump(exclude_none=True))
            for d in request.directives
        ]
    return apply_optimization_directives(request.code, directives).to_dict()


@router.post("/suggest")
async def suggest(request: CodeRequest) -> dict[str, Any]:
    return generate_optimization_suggestions(request.code).to_dict()
