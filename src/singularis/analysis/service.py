"""Heuristic analysis of SINGULARIS PRIME sources.

Everything here is local pattern matching over the text: there is no model
behind the scores, they only have to be stable and plausible.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from singularis.analysis.samples import CODE_FILE_TYPES, SAMPLE_FILES, CodeFileType
from singularis.analysis.templates import GENERATORS
from singularis.core.errors import not_found, validation_error

logger = logging.getLogger(__name__)

DEFAULT_DIMENSIONS = 37
DEFAULT_TEMPERATURE = 0.5

_FUNCTION_RE = re.compile(r"function\s+\w+\(")
_NESTED_BLOCK_RE = re.compile(r"{[^{}]*{")
_DIMENSION_RE = re.compile(r"dimensions?\s*(?::|=|==)\s*(\d+)", re.IGNORECASE)
_37D_RE = re.compile(r"37[\s-]?[dD]|37[\s-]dimensional")
_MODULE_RE = re.compile(r"^\s*(?:quantum\s+)?module\s+(\w+)", re.MULTILINE)
_EXPORT_FUNCTION_RE = re.compile(r"export\s+function\s+(\w+)\s*\(([^)]*)\)[^{]*{")
_DOC_BLOCK_RE = re.compile(r"/\*\*[\s\S]*?\*/")
_LINE_COMMENT_RE = re.compile(r"//.*$", re.MULTILINE)
_DESCRIPTIVE_NAME_RE = re.compile(r"\b[a-zA-Z][a-zA-Z0-9]{3,}\b")
_FUNCTION_SIGNATURE_RE = re.compile(r"function\s+\w+\s*\(([^)]*)\)")

ENTANGLEMENT_KEYWORDS = (
    "entangle",
    "entanglement",
    "createEntangledState",
    "entangleStates",
    "entanglementEntropy",
    "entangleByProximity",
)

# Regex -> feature label, checked case-insensitively
QUANTUM_FEATURES: tuple[tuple[str, str], ...] = (
    ("superposition", "Superposition"),
    ("entangle", "Entanglement"),
    ("qubit", "Qubits"),
    ("qudit", "Qudits"),
    ("hamiltonian", "Hamiltonian"),
    ("measurement", "Measurement"),
    ("amplitude", "Amplitude Manipulation"),
    ("phase", "Phase Manipulation"),
    ("error.*mitigation", "Error Mitigation"),
    ("quantum.*state", "Quantum States"),
    ("magneti", "Quantum Magnetism"),
    ("high.*dimension", "High-Dimensional"),
    ("37.*dimension", "37-Dimensional Light"),
    ("circuit", "Quantum Circuits"),
)

AI_INTEGRATION_POINTS: tuple[tuple[str, str], ...] = (
    ("ai.*model", "AI Model Integration"),
    ("neural", "Neural Network Integration"),
    ("machine.*learning", "Machine Learning"),
    ("optimization", "AI Optimization"),
    ("explain", "Explainability Framework"),
    ("reinforcement.*learning", "Reinforcement Learning"),
    ("classify", "Classification"),
    ("prediction", "Prediction"),
    ("quantum.*enhance.*ai", "Quantum-Enhanced AI"),
    ("explainability.*threshold", "Explainability Thresholds"),
    ("optimize.*circuit", "Circuit Optimization"),
)

EXPLAINABILITY_FACTORS = (
    "Comment density and quality",
    "Descriptive variable naming",
    "Function parameter documentation",
    "Use of explainability annotations",
)

EXPLAINABILITY_RECOMMENDATIONS = (
    "Add more detailed function documentation",
    "Use more descriptive variable names",
    "Add @explain annotations to complex quantum operations",
)


# ═══════════════════════════════════════════════════════════════
# TYPES
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class CodeFile:
    id: str
    name: str
    path: str
    content: str
    type: CodeFileType
    last_modified: datetime = field(default_factory=lambda: datetime.now(UTC))

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "path": self.path,
            "content": self.content,
            "type": self.type,
            "lastModified": self.last_modified.isoformat(),
        }


@dataclass(frozen=True, slots=True)
class CodeAnalysisResult:
    file: CodeFile | None
    complexity: float
    explainability: float
    entanglement_level: float
    dimensions: int
    quantum_features: list[str]
    ai_integration_points: list[str]
    improvements: list[str]
    optimized_code: str | None = None
    documentation: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "complexity": self.complexity,
            "explainability": self.explainability,
            "entanglementLevel": self.entanglement_level,
            "dimensions": self.dimensions,
            "quantumFeatures": self.quantum_features,
            "aiIntegrationPoints": self.ai_integration_points,
            "improvements": self.improvements,
        }
        if self.file is not None:
            data = {"file": self.file.to_dict(), **data}
        if self.optimized_code is not None:
            data["optimizedCode"] = self.optimized_code
        if self.documentation is not None:
            data["documentation"] = self.documentation
        return data


@dataclass(frozen=True, slots=True)
class ExplainabilityEvaluation:
    score: float
    threshold: float
    factors: list[str]
    recommendations: list[str]

    @property
    def meets_threshold(self) -> bool:
        return self.score >= self.threshold

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "threshold": self.threshold,
            "meetsThreshold": self.meets_threshold,
            "factors": self.factors,
            "recommendations": self.recommendations,
        }


# ═══════════════════════════════════════════════════════════════
# HEURISTICS
# ═══════════════════════════════════════════════════════════════


def _is_comment(line: str) -> bool:
    stripped = line.strip()
    return stripped.startswith("//") or stripped.startswith("/*")


def calculate_complexity(code: str) -> float:
    """Blend of non-blank lines, function count and nested blocks, capped at 1."""
    lines = [line for line in code.split("\n") if line.strip()]
    functions = len(_FUNCTION_RE.findall(code))
    nested = len(_NESTED_BLOCK_RE.findall(code))
    return min(1.0, (len(lines) / 200) * 0.4 + (functions / 15) * 0.3 + (nested / 10) * 0.3)


def estimate_explainability(code: str) -> float:
    lines = code.split("\n")
    comment_lines = sum(1 for line in lines if _is_comment(line))
    code_lines = sum(1 for line in lines if line.strip() and not _is_comment(line))
    descriptive = any(word in code for word in ("create", "generate", "calculate", "analyze"))
    ratio = comment_lines / code_lines if code_lines else 0.0
    return min(1.0, ratio * 0.6 + (0.4 if descriptive else 0.0))


def estimate_entanglement_level(code: str) -> float:
    count = sum(len(re.findall(keyword, code, re.IGNORECASE)) for keyword in ENTANGLEMENT_KEYWORDS)
    return min(1.0, count / 10)


def estimate_dimensions(code: str) -> int:
    """Explicit ``dimension = N`` wins, then a 37D mention, else a qubit (2)."""
    if match := _DIMENSION_RE.search(code):
        return int(match.group(1))
    if _37D_RE.search(code):
        return 37
    return 2


def _matching_labels(code: str, table: tuple[tuple[str, str], ...]) -> list[str]:
    return [label for pattern, label in table if re.search(pattern, code, re.IGNORECASE)]


def extract_quantum_features(code: str) -> list[str]:
    return _matching_labels(code, QUANTUM_FEATURES)


def extract_ai_integration_points(code: str) -> list[str]:
    return _matching_labels(code, AI_INTEGRATION_POINTS)


def generate_improvement_suggestions(code: str) -> list[str]:
    lines = code.split("\n")
    suggestions = []
    if sum(1 for line in lines if line.strip().startswith("//")) < len(lines) * 0.2:
        suggestions.append("Add more comments to improve explainability")
    if "error" not in code and "Error" not in code:
        suggestions.append("Implement error handling for quantum operations")
    if "test" not in code and "Test" not in code:
        suggestions.append("Add test cases for quantum operations")
    if "assert" not in code:
        suggestions.append("Add assertions to validate input parameters")
    suggestions.append("Consider adding explainability metrics for quantum operations")
    return suggestions


def _module_purpose(module_name: str) -> str:
    lowered = module_name.lower()
    for marker, purpose in (
        ("unified", "unified quantum operations"),
        ("magnetism", "quantum magnetism simulations"),
        ("ai", "AI-quantum integration"),
        ("kashiwara", "Kashiwara quantum formalism"),
    ):
        if marker in lowered:
            return purpose
    return "quantum operations"


def _describe_function(code: str, name: str, start: int) -> str:
    preceding = code[:start]
    index = preceding.rfind("//")
    if index < 0:
        spaced = re.sub(r"([A-Z])", r" \1", name).lower()
        return f"Function for {spaced}"
    return preceding[index:].split("\n")[0].replace("//", "", 1).strip()


def generate_local_documentation(code: str) -> str:
    """Markdown reference for every exported function in ``code``."""
    match = _MODULE_RE.search(code)
    module_name = match.group(1) if match else "SINGULARIS PRIME Module"

    parts = [
        f"# {module_name} Documentation\n\n",
        "## Overview\n\n",
        f"This module provides functionality for {_module_purpose(module_name)}.\n\n",
        "## Functions\n\n",
    ]
    for fn in _EXPORT_FUNCTION_RE.finditer(code):
        name, raw_params = fn.group(1), fn.group(2)
        params = [p.strip().split(":")[0].strip() for p in raw_params.split(",") if p.strip()]
        parts.append(f"### {name}\n\n")
        parts.append(f"```singularis\nfunction {name}({raw_params})\n```\n\n")
        parts.append(f"{_describe_function(code, name, fn.start())}\n\n")
        if params:
            parts.append("#### Parameters\n\n")
            parts.extend(f"- `{param}`: Parameter for the function\n" for param in params)
            parts.append("\n")
        parts.append("#### Returns\n\nReturns the result of the operation\n\n")
    return "".join(parts)


def evaluate_explainability(code: str, threshold: float = 0.8) -> ExplainabilityEvaluation:
    """Score documentation and naming quality on a 0.3 base."""
    if not 0.0 <= threshold <= 1.0:
        raise validation_error(f"threshold must be between 0 and 1, got {threshold}")

    comments = len(_DOC_BLOCK_RE.findall(code)) + len(_LINE_COMMENT_RE.findall(code))
    descriptive = len(_DESCRIPTIVE_NAME_RE.findall(code))
    signatures = len(_FUNCTION_SIGNATURE_RE.findall(code))

    score = 0.3
    if comments > 5:
        score += 0.2
    if descriptive > 10:
        score += 0.2
    if signatures > 3:
        score += 0.1
    if "@explain" in code or "@doc" in code:
        score += 0.2

    return ExplainabilityEvaluation(
        score=round(max(0.0, min(1.0, score)), 2),
        threshold=threshold,
        factors=list(EXPLAINABILITY_FACTORS),
        recommendations=list(EXPLAINABILITY_RECOMMENDATIONS),
    )


# ═══════════════════════════════════════════════════════════════
# SERVICE
# ═══════════════════════════════════════════════════════════════


class CodeAnalysisService:
    """In-memory registry of code files plus the analysis heuristics."""

    def __init__(self, files: list[CodeFile] | None = None) -> None:
        if files is None:
            files = [
                CodeFile(file_id, name, path, content, file_type)
                for file_id, name, path, file_type, content in SAMPLE_FILES
            ]
        self._files: dict[str, CodeFile] = {f.id: f for f in files}

    def list_files(self, type: str | None = None) -> list[CodeFile]:
        """All files, or those of one type. ``"all"`` is the same as no filter."""
        if not type or type == "all":
            return list(self._files.values())
        if type not in CODE_FILE_TYPES:
            raise validation_error(
                f"Unknown file type '{type}'. Expected one of: {', '.join(CODE_FILE_TYPES)}"
            )
        return [f for f in self._files.values() if f.type == type]

    def get_file(self, file_id: str) -> CodeFile:
        try:
            return self._files[file_id]
        except KeyError:
            raise not_found("Code file", file_id) from None

    def analyze_code(self, code: str, file: CodeFile | None = None) -> CodeAnalysisResult:
        return CodeAnalysisResult(
            file=file,
            complexity=round(calculate_complexity(code), 3),
            explainability=round(estimate_explainability(code), 3),
            entanglement_level=estimate_entanglement_level(code),
            dimensions=estimate_dimensions(code),
            quantum_features=extract_quantum_features(code),
            ai_integration_points=extract_ai_integration_points(code),
            improvements=generate_improvement_suggestions(code),
            documentation=generate_local_documentation(code),
        )

    def analyze_file(self, file_id: str) -> CodeAnalysisResult:
        code_file = self.get_file(file_id)
        logger.debug("Analyzing %s (%s)", code_file.name, code_file.type)
        return self.analyze_code(code_file.content, file=code_file)

    def generate_code(
        self,
        operation: str,
        dimensions: int | None = DEFAULT_DIMENSIONS,
        temperature: float | None = DEFAULT_TEMPERATURE,
    ) -> str:
        """Render a module template for ``operation``.

        Falsy ``dimensions``/``temperature`` fall back to the defaults. Unknown
        operations return a comment block instead of raising.
        """
        generator = GENERATORS.get(operation)
        if generator is None:
            logger.warning("Code generation requested for unknown operation %r", operation)
            return (
                f"// Unknown operation type: {operation}\n"
                "// Please specify a valid operation."
            )
        return generator(dimensions or DEFAULT_DIMENSIONS, temperature or DEFAULT_TEMPERATURE)
