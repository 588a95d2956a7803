"""G.L.Y.P.H. ritual routes."""

from typing import Any

from fastapi import APIRouter

from singularis.glyph import (
    execute_glyph_ritual,
    generate_ui_config,
    parse_glyphic_spell,
    verify_glyph_ritual,
)
from singularis.server.monitor import MessageType, SubscriptionChannel, get_monitor
from singularis.server.routes._models import GlyphRequest

router = APIRouter(prefix="/api/glyph", tags=["glyph"])


@router.post("/parse")
async def parse(request: GlyphRequest) -> dict[str, Any]:
    spell = parse_glyphic_spell(request.spell)
    return {"spell": spell.to_dict(), "uiConfig": generate_ui_config(spell)}


@router.post("/verify")
async def verify(request: GlyphRequest) -> dict[str, Any]:
    return verify_glyph_ritual(request.spell)


@router.post("/execute")
async def execute(request: GlyphRequest) -> dict[str, Any]:
    result = execute_glyph_ritual(request.spell)
    if result["success"]:
        await get_monitor().broadcast(
            SubscriptionChannel.AUDIT_TRAIL,
            MessageType.AUDIT_ENTRY,
            {"action": "ritual_executed", "ritualName": result["ritualName"]},
        )
    return result
