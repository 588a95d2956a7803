"""Binding of G.L.Y.P.H. spells to SINGULARIS PRIME quantum operations.

Each glyph maps to a named quantum operation. Binding a spell yields the
ordered operation list and a generated ritual script; executing it reports
what would be manifested.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Literal

from singularis.glyph.interpreter import (
    GLYPH_COMMAND,
    GLYPH_DEPLOY,
    GLYPH_ENTANGLE_GRID,
    GLYPH_LOGIC,
    GLYPH_MESSAGE_PORTAL,
    GLYPH_OSCILLOSCOPE,
    GLYPH_PANELS,
    GLYPH_RECOVERY,
    GLYPH_UI,
    GlyphicSpell,
    generate_ui_config,
    parse_glyphic_spell,
)

logger = logging.getLogger(__name__)

RITUAL_DIMENSIONALITY = 37

ApplicationContext = Literal["visualization", "computation", "ritual", "security"]


@dataclass(frozen=True, slots=True)
class GlyphBinding:
    glyph: str
    quantum_operation: str
    dimensionality: int
    application_context: ApplicationContext
    description: str


GLYPH_BINDINGS: dict[str, GlyphBinding] = {
    binding.glyph: binding
    for binding in (
        GlyphBinding(
            GLYPH_COMMAND, "initializeQuantumSpace", 37, "visualization",
            "Initializes a quantum space for visualization and computation",
        ),
        GlyphBinding(
            GLYPH_PANELS, "createComponentStructure", 5, "visualization",
            "Creates the component structure for the quantum interface",
        ),
        GlyphBinding(
            GLYPH_ENTANGLE_GRID, "generateEntanglementGrid", 37, "computation",
            "Generates a grid of entangled qudits with specified dimensionality",
        ),
        GlyphBinding(
            GLYPH_OSCILLOSCOPE, "visualizePhaseSpace", 7, "visualization",
            "Visualizes quantum phase space patterns and harmonics",
        ),
        GlyphBinding(
            GLYPH_MESSAGE_PORTAL, "createQuantumChannel", 3, "security",
            "Creates a quantum-secured communication channel",
        ),
        GlyphBinding(
            GLYPH_UI, "applyVisualTransformation", 2, "visualization",
            "Applies visual styling to the quantum interface",
        ),
        GlyphBinding(
            GLYPH_LOGIC, "bindLogicModules", 11, "computation",
            "Binds functional logic modules to the quantum interface",
        ),
        GlyphBinding(
            GLYPH_DEPLOY, "manifestInterface", 1, "visualization",
            "Manifests the interface at the specified deployment path",
        ),
        GlyphBinding(
            GLYPH_RECOVERY, "initiateQuantumRecovery", 37, "ritual",
            "Initiates the quantum recovery protocol for system stabilization",
        ),
    )
}

_PANEL_TO_GLYPH = {
    "QuditEntangleGrid": GLYPH_ENTANGLE_GRID,
    "GlyphOscilloscope": GLYPH_OSCILLOSCOPE,
    "MessagePortal": GLYPH_MESSAGE_PORTAL,
}


@dataclass(frozen=True, slots=True)
class QuantumOperation:
    type: str
    operation: str
    parameters: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "operation": self.operation, "parameters": self.parameters}


def _operation(kind: str, glyph: str, /, **parameters: Any) -> QuantumOperation:
    return QuantumOperation(kind, GLYPH_BINDINGS[glyph].quantum_operation, parameters)


def generate_quantum_operations(spell: GlyphicSpell) -> list[QuantumOperation]:
    """Ordered operations: command, panels, each panel, UI, logic, deploy, recovery."""
    operations = [
        _operation("command", GLYPH_COMMAND, name=spell.command, dimensionality=RITUAL_DIMENSIONALITY),
        _operation("panels", GLYPH_PANELS, count=len(spell.panels), types=list(spell.panels)),
    ]
    for panel in spell.panels:
        binding = GLYPH_BINDINGS[_PANEL_TO_GLYPH[panel]]
        operations.append(
            QuantumOperation(
                "panel",
                binding.quantum_operation,
                {"panelType": panel, "dimensionality": binding.dimensionality},
            )
        )
    operations.append(_operation("ui", GLYPH_UI, styles=list(spell.ui_styles)))
    operations.append(
        _operation(
            "logic",
            GLYPH_LOGIC,
            modules=list(spell.logic_modules),
            recoveryEnabled="Recovery" in spell.logic_modules,
        )
    )
    operations.append(_operation("deployment", GLYPH_DEPLOY, path=spell.deploy_path))
    if spell.recovery_glyph:
        operations.append(
            _operation(
                "recovery",
                GLYPH_RECOVERY,
                glyph=spell.recovery_glyph,
                dimensionality=RITUAL_DIMENSIONALITY,
            )
        )
    return operations


def _class_name(command: str) -> str:
    return re.sub(r"\s+", "", command) or "Unnamed"


def generate_ritual_code(spell: GlyphicSpell) -> str:
    """Render the ritual script for a spell."""
    name = _class_name(spell.command)
    panels = [panel.lower() for panel in spell.panels]
    lines = [
        "# SINGULARIS PRIME Ritual Code",
        f"# Generated from G.L.Y.P.H. spell: {spell.command}",
        "",
        "import singularis.quantum as quantum",
        "import singularis.visualization as visual",
        "import singularis.ritual as ritual",
        "from singularis.highdim import HighDimensionalQudit",
        "from singularis.geometry import KashiwaraManifold",
        "from singularis.security import QuantumEntanglementProtocol",
        "",
        f"class {name}Ritual:",
        "  def __init__(self):",
        "    # Initialize the quantum space",
        f"    self.space = quantum.Space(dimensions={RITUAL_DIMENSIONALITY})",
        f"    self.manifold = KashiwaraManifold(dimensions={RITUAL_DIMENSIONALITY})",
        "",
        "    # Create the panels",
        *(f"    self.{attr} = visual.{panel}()" for attr, panel in zip(panels, spell.panels, strict=True)),
        "",
        "    # Set up UI styling",
        "    self.theme = visual.QuantumTheme(",
        ",\n".join(f"      {style.lower()}=True" for style in spell.ui_styles),
        "    )",
        "",
        "    # Bind logic modules",
        *(f"    self.{module.lower()} = ritual.{module}()" for module in spell.logic_modules),
        "",
        "  def execute(self):",
        "    # Prepare the quantum state",
        "    qstate = self.space.createState()",
        "",
        "    # Generate high-dimensional qudits",
        f"    qudits = [HighDimensionalQudit(dim={RITUAL_DIMENSIONALITY}) "
        f"for _ in range({RITUAL_DIMENSIONALITY})]",
        "",
        "    # Entangle the qudits in the lattice structure",
        "    entangled_system = quantum.entangle_system(qudits)",
        "",
        "    # Apply the Kashiwara geometry",
        "    self.manifold.apply_to(entangled_system)",
        "",
        "    # Connect the quantum backend to the visualization panels",
        *(f"    self.{attr}.connect(entangled_system)" for attr in panels),
        "",
        "    # Apply the UI theme",
        "    visual.apply_theme(self.theme)",
        "",
    ]
    if "MessagePortal" in spell.panels:
        lines += [
            "    security_protocol = QuantumEntanglementProtocol()",
            "    security_protocol.secure_channel(self.messageportal)",
        ]
    else:
        lines.append("    # No message portal in this ritual")
    if spell.recovery_glyph:
        lines.append(
            f'    recovery_glyph = ritual.bind_recovery_glyph("{spell.recovery_glyph}", entangled_system)'
        )
    else:
        lines.append("    # No recovery glyph specified")
    lines += [
        "",
        "    # Manifest the interface",
        "    return visual.manifest(",
        "      entangled_system=entangled_system,",
        f'      deploy_path="{spell.deploy_path}",',
        f"      components=[{', '.join(f'self.{attr}' for attr in panels)}]",
        "    )",
        "",
        "# Create and execute the ritual",
        f"ritual = {name}Ritual()",
        "result = ritual.execute()",
        'print(f"G.L.Y.P.H. ritual manifested at {result.path}")',
        "",
    ]
    return "\n".join(lines)


@dataclass(frozen=True, slots=True)
class RitualBinding:
    spell: GlyphicSpell
    ui_config: dict[str, Any]
    operations: list[QuantumOperation]
    execution_code: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "spell": self.spell.to_dict(),
            "uiConfig": self.ui_config,
            "operations": [op.to_dict() for op in self.operations],
            "executionCode": self.execution_code,
        }


def bind_glyph_to_quantum_code(raw: str) -> RitualBinding:
    spell = parse_glyphic_spell(raw)
    return RitualBinding(
        spell=spell,
        ui_config=generate_ui_config(spell),
        operations=generate_quantum_operations(spell),
        execution_code=generate_ritual_code(spell),
    )


def verify_glyph_ritual(raw: str) -> dict[str, Any]:
    """Check that a spell names a command, panels, styles, logic and a path."""
    spell = parse_glyphic_spell(raw)
    checks = (
        (not spell.command, f"Missing command glyph ({GLYPH_COMMAND})"),
        (not spell.panels, f"No panels defined ({GLYPH_PANELS})"),
        (not spell.ui_styles, f"No UI styles defined ({GLYPH_UI})"),
        (not spell.logic_modules, f"No logic modules defined ({GLYPH_LOGIC})"),
        (not spell.deploy_path, f"No deployment path defined ({GLYPH_DEPLOY})"),
    )
    errors = [message for failed, message in checks if failed]
    if errors:
        return {"valid": False, "errors": errors}
    return {"valid": True, "spell": spell.to_dict()}


def execute_glyph_ritual(raw: str) -> dict[str, Any]:
    """Bind a spell and report the (simulated) manifestation.

    Invalid spells are reported with ``success: false`` rather than raised.
    """
    logger.info("Initiating G.L.Y.P.H. ritual binding")
    verification = verify_glyph_ritual(raw)
    if not verification["valid"]:
        return {
            "success": False,
            "error": "Ritual binding failed: " + "; ".join(verification["errors"]),
        }

    binding = bind_glyph_to_quantum_code(raw)
    logger.info(
        "Ritual binding complete for %r: %d quantum operations",
        binding.spell.command, len(binding.operations),
    )
    return {
        "success": True,
        "ritualName": binding.spell.command,
        "deployPath": binding.spell.deploy_path,
        "executionCode": binding.execution_code,
        "quantumDimensionality": RITUAL_DIMENSIONALITY,
        "operationCount": len(binding.operations),
    }
