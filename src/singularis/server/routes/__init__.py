"""API route modules, one router per domain."""

from singularis.server.routes.ai import router as ai_router
from singularis.server.routes.analysis import router as analysis_router
from singularis.server.routes.geometry import router as geometry_router
from singularis.server.routes.glyph import router as glyph_router
from singularis.server.routes.language import router as language_router
from singularis.server.routes.misc import router as misc_router
from singularis.server.routes.monitor import router as monitor_router
from singularis.server.routes.optimization import router as optimization_router
from singularis.server.routes.quantum import router as quantum_router

__all__ = [
    "ai_router",
    "analysis_router",
    "geometry_router",
    "glyph_router",
    "language_router",
    "misc_router",
    "monitor_router",
    "optimization_router",
    "quantum_router",
]
