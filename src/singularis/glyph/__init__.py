"""G.L.Y.P.H. ceremonial syntax: spell parsing and quantum binding."""

from singularis.glyph.binding import (
    bind_glyph_to_quantum_code,
    execute_glyph_ritual,
    verify_glyph_ritual,
)
from singularis.glyph.interpreter import (
    EXAMPLE_SPELL,
    GlyphicSpell,
    generate_ui_config,
    parse_glyphic_spell,
)

__all__ = [
    "EXAMPLE_SPELL",
    "GlyphicSpell",
    "bind_glyph_to_quantum_code",
    "execute_glyph_ritual",
    "generate_ui_config",
    "parse_glyphic_spell",
    "verify_glyph_ritual",
]
