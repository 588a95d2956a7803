"""G.L.Y.P.H. (Generalized Lattice Yield Protocolic Hieroglyphs) interpreter.

Translates a glyphic spell into the panel/theme/logic configuration the
console UI renders. A spell looks like::

    🜁 BloomStellarConsole
    🜂 Panels:
        🜄 QuditEntangleGrid
        🜃 GlyphOscilloscope
        🝮 MessagePortal
    🜅 UI: DarkGlass + GoldLattice + PhaseBloom
    🜆 Logic: MuskCoreLive + EntropyMonitor + 🜹Recovery
    🜇 Deploy to: /control
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Any, Literal

logger = logging.getLogger(__name__)

GLYPH_COMMAND = "🜁"
GLYPH_PANELS = "🜂"
GLYPH_ENTANGLE_GRID = "🜄"
GLYPH_OSCILLOSCOPE = "🜃"
GLYPH_MESSAGE_PORTAL = "🝮"
GLYPH_UI = "🜅"
GLYPH_LOGIC = "🜆"
GLYPH_DEPLOY = "🜇"
GLYPH_RECOVERY = "🜹"

PanelType = Literal["QuditEntangleGrid", "GlyphOscilloscope", "MessagePortal"]
UIStyle = Literal["DarkGlass", "GoldLattice", "PhaseBloom", "BlackbodyGlass"]
LogicModule = Literal["MuskCoreLive", "EntropyMonitor", "Recovery"]

PANEL_GLYPHS: dict[str, PanelType] = {
    GLYPH_ENTANGLE_GRID: "QuditEntangleGrid",
    GLYPH_OSCILLOSCOPE: "GlyphOscilloscope",
    GLYPH_MESSAGE_PORTAL: "MessagePortal",
}

UI_STYLES: tuple[UIStyle, ...] = ("DarkGlass", "GoldLattice", "PhaseBloom", "BlackbodyGlass")

# Marker substring -> logic module
LOGIC_MARKERS: tuple[tuple[str, LogicModule], ...] = (
    ("MuskCore", "MuskCoreLive"),
    ("Entropy", "EntropyMonitor"),
    ("Recovery", "Recovery"),
)

DEFAULT_DEPLOY_PATH = "/control"

_DEPLOY_RE = re.compile(r"to:\s*(\S+)")

EXAMPLE_SPELL = f"""\
{GLYPH_COMMAND} BloomStellarConsole
{GLYPH_PANELS} Panels:
    {GLYPH_ENTANGLE_GRID} QuditEntangleGrid
    {GLYPH_OSCILLOSCOPE} GlyphOscilloscope
    {GLYPH_MESSAGE_PORTAL} MessagePortal
{GLYPH_UI} UI: DarkGlass + GoldLattice + PhaseBloom
{GLYPH_LOGIC} Logic: MuskCoreLive + EntropyMonitor + {GLYPH_RECOVERY}Recovery
{GLYPH_DEPLOY} Deploy to: /control
"""


@dataclass(slots=True)
class GlyphicSpell:
    command: str = ""
    panels: list[PanelType] = field(default_factory=list)
    ui_styles: list[UIStyle] = field(default_factory=list)
    logic_modules: list[LogicModule] = field(default_factory=list)
    deploy_path: str = DEFAULT_DEPLOY_PATH
    recovery_glyph: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "command": self.command,
            "panels": list(self.panels),
            "uiStyles": list(self.ui_styles),
            "logicModules": list(self.logic_modules),
            "deployPath": self.deploy_path,
        }
        if self.recovery_glyph is not None:
            data["recoveryGlyph"] = self.recovery_glyph
        return data


def parse_glyphic_spell(raw: str) -> GlyphicSpell:
    """Parse a spell. Unknown lines are ignored; nothing here raises."""
    spell = GlyphicSpell()
    section = ""

    for line in (line.strip() for line in raw.strip().splitlines()):
        if not line:
            continue

        if line.startswith(GLYPH_COMMAND):
            spell.command = line[len(GLYPH_COMMAND):].strip()
            section = "command"
        elif line.startswith(GLYPH_PANELS):
            section = "panels"
        elif line.startswith(GLYPH_UI):
            section = "ui"
            spell.ui_styles.extend(style for style in UI_STYLES if style in line)
        elif line.startswith(GLYPH_LOGIC):
            section = "logic"
            for marker, module in LOGIC_MARKERS:
                if marker in line:
                    spell.logic_modules.append(module)
            if "Recovery" in line and GLYPH_RECOVERY in line:
                spell.recovery_glyph = GLYPH_RECOVERY
        elif line.startswith(GLYPH_DEPLOY):
            section = "deploy"
            if match := _DEPLOY_RE.search(line):
                spell.deploy_path = match.group(1)
        elif section == "panels":
            for glyph, panel in PANEL_GLYPHS.items():
                if glyph in line:
                    spell.panels.append(panel)
                    break
        else:
            logger.debug("Ignoring glyph line outside a section: %r", line)

    return spell


def generate_ui_config(spell: GlyphicSpell) -> dict[str, Any]:
    """Theme, layout and logic switches for the console UI."""
    styles = spell.ui_styles
    layout: dict[str, Any] = {
        "panels": [{"type": panel, "visible": True, "expanded": True} for panel in spell.panels],
    }
    if spell.recovery_glyph is not None:
        layout["recoveryGlyph"] = spell.recovery_glyph
    return {
        "theme": {
            "dark": "DarkGlass" in styles or "BlackbodyGlass" in styles,
            "primaryColor": "amber" if "GoldLattice" in styles else "indigo",
            "glowEffect": "PhaseBloom" in styles,
            "glassEffect": any("Glass" in style for style in styles),
            "latticeLines": "GoldLattice" in styles,
        },
        "layout": layout,
        "logic": {
            "useMuskCore": "MuskCoreLive" in spell.logic_modules,
            "monitorEntropy": "EntropyMonitor" in spell.logic_modules,
            "enableRecovery": "Recovery" in spell.logic_modules,
        },
    }
