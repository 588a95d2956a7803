"""Code analysis routes.

The analysis service holds the sample file registry; one instance is shared
by all requests.
"""

from typing import Any

from fastapi import APIRouter

from singularis.analysis import CodeAnalysisService, evaluate_explainability
from singularis.server.monitor import MessageType, SubscriptionChannel, get_monitor
from singularis.server.routes._models import (
    CodeRequest,
    ExplainabilityRequest,
    GenerateCodeRequest,
)
from singularis.server.routes.language import require_code

router = APIRouter(prefix="/api", tags=["analysis"])

_service: CodeAnalysisService | None = None


def get_analysis_service() -> CodeAnalysisService:
    global _service
    if _service is None:
        _service = CodeAnalysisService()
    return _service


@router.post("/analyze")
async def analyze(request: CodeRequest) -> dict[str, Any]:
    analysis = get_analysis_service().analyze_code(require_code(request.code))
    return {"analysis": analysis.to_dict()}


@router.post("/evaluate/explainability")
async def explainability(request: ExplainabilityRequest) -> dict[str, Any]:
    evaluation = evaluate_explainability(require_code(request.code), request.threshold)

    await get_monitor().broadcast(
        SubscriptionChannel.EXPLAINABILITY_MONITORING,
        MessageType.EXPLAINABILITY_MEASUREMENT,
        {"score": evaluation.score, "threshold": evaluation.threshold},
    )
    if not evaluation.meets_threshold:
        await get_monitor().broadcast(
            SubscriptionChannel.EXPLAINABILITY_MONITORING,
            MessageType.EXPLAINABILITY_ALERT,
            {"score": evaluation.score, "threshold": evaluation.threshold},
        )
    return evaluation.to_dict()


# ═══════════════════════════════════════════════════════════════
# CODE FILES
# ═══════════════════════════════════════════════════════════════


@router.get("/code/analysis/files")
async def list_files(type: str | None = None) -> dict[str, Any]:
    files = get_analysis_service().list_files(type)
    return {"files": [f.to_dict() for f in files]}


@router.get("/code/analysis/analyze/{file_id}")
async def analyze_file(file_id: str) -> dict[str, Any]:
    return get_analysis_service().analyze_file(file_id).to_dict()


@router.post("/code/analysis/generate-code")
async def generate_code(request: GenerateCodeRequest) -> dict[str, str]:
    code = get_analysis_service().generate_code(
        request.operation, request.dimensions, request.temperature
    )
    return {"code": code}
