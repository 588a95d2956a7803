"""AI protocol routes: negotiation, governance and self-documentation."""

from typing import Any

from fastapi import APIRouter

from singularis.ai import (
    AIEntity,
    ContractTerms,
    generate_self_documentation,
    negotiate_ai_contract,
    simulate_governance_adaptation,
)
from singularis.server.monitor import MessageType, SubscriptionChannel, get_monitor
from singularis.server.routes._models import (
    AIEntityModel,
    DetailedCodeRequest,
    GovernanceRequest,
    NegotiateRequest,
)
from singularis.server.routes.language import require_code

router = APIRouter(prefix="/api", tags=["ai"])


def _entity(model: AIEntityModel) -> AIEntity:
    return AIEntity(
        id=model.id,
        name=model.name,
        expertise=tuple(model.expertise),
        trust_level=model.trust_level,
        explainability_score=model.explainability_score,
    )


@router.post("/ai/negotiate")
async def negotiate(request: NegotiateRequest) -> dict[str, Any]:
    result = negotiate_ai_contract(
        _entity(request.initiator),
        _entity(request.responder),
        ContractTerms.from_dict(request.terms),
        request.explainability_threshold,
    )
    await get_monitor().broadcast(
        SubscriptionChannel.VERIFICATION_EVENTS,
        MessageType.VERIFICATION_EVENT,
        {
            "event": "contract_negotiated",
            "initiator": request.initiator.id,
            "responder": request.responder.id,
            "success": result.success,
            "explainabilityScore": result.explainability_score,
        },
    )
    return result.to_dict()


@router.post("/ai/governance/adapt")
async def adapt_governance(request: GovernanceRequest) -> dict[str, Any]:
    adaptation = simulate_governance_adaptation(
        request.current_model, request.environmental_changes, request.ethical_constraints
    )
    return adaptation.to_dict()


@router.post("/documentation")
async def documentation(request: DetailedCodeRequest) -> dict[str, str]:
    code = require_code(request.code)
    return {"documentation": generate_self_documentation(code, request.detail_level or "moderate")}
