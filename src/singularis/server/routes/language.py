"""Language routes: parse, execute, tokens and completions."""

from typing import Any

from fastapi import APIRouter

from singularis.core.errors import validation_error
from singularis.language import SingularisInterpreter, completion_items, parse_program, tokenize
from singularis.server.monitor import MessageType, SubscriptionChannel, get_monitor
from singularis.server.routes._models import CodeRequest

router = APIRouter(prefix="/api", tags=["language"])


def require_code(code: str) -> str:
    if not code.strip():
        raise validation_error("Code is required")
    return code


@router.post("/parse")
async def parse(request: CodeRequest) -> list[dict[str, Any]]:
    """Parse source into its AST."""
    ast = parse_program(require_code(request.code))
    return [node.to_dict() for node in ast]


@router.post("/execute")
async def execute(request: CodeRequest) -> dict[str, Any]:
    """Parse and run a program, returning the runtime log."""
    ast = parse_program(require_code(request.code))
    output = SingularisInterpreter(ast).execute()

    await get_monitor().broadcast(
        SubscriptionChannel.AUDIT_TRAIL,
        MessageType.AUDIT_ENTRY,
        {"action": "program_executed", "declarations": len(ast), "outputLines": len(output)},
    )
    return {"output": output}


@router.post("/language/tokens")
async def tokens(request: CodeRequest) -> dict[str, Any]:
    return {"tokens": [token.to_dict() for token in tokenize(request.code)]}


@router.get("/language/completions")
async def completions(prefix: str = "") -> dict[str, Any]:
    return {"items": [item.to_dict() for item in completion_items(prefix)]}
