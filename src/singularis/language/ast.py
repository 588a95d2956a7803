"""AST node types for SINGULARIS PRIME programs.

Nodes are immutable dataclasses. Each exposes ``type`` (the node name used on
the wire) and ``to_dict()`` producing the camelCase JSON the editor consumes.
"""

from dataclasses import dataclass, fields
from typing import Any, ClassVar

from singularis.core.serialization import to_camel

AI_OPTIMIZATION_DIRECTIVES: frozenset[str] = frozenset({
    "optimize_for_fidelity",
    "optimize_for_explainability",
    "minimize_gates",
    "minimize_depth",
    "minimize_errors",
    "optimize_execution_time",
    "differentiable",
    "approximate_ok",
    "critical_operation",
    "error_tolerant",
})


def _to_json(value: Any) -> Any:
    if isinstance(value, Node):
        return value.to_dict()
    if isinstance(value, tuple):
        return [_to_json(item) for item in value]
    return value


class Node:
    """Base class for AST nodes."""

    __slots__ = ()

    type: ClassVar[str] = "Node"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type}
        for f in fields(self):  # type: ignore[arg-type]
            value = getattr(self, f.name)
            # Unannotated declarations omit the key entirely
            if f.name == "annotations" and not value:
                continue
            data[to_camel(f.name)] = _to_json(value)
        return data


@dataclass(frozen=True, slots=True)
class NamedArgument(Node):
    """A ``name=value`` call argument."""

    type: ClassVar[str] = "NamedArgument"

    name: str
    value: str

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "value": self.value}


Argument = str | NamedArgument


@dataclass(frozen=True, slots=True)
class FunctionCall(Node):
    type: ClassVar[str] = "FunctionCall"

    name: str
    arguments: tuple[Argument, ...] = ()

    def argument(self, name: str) -> str | None:
        """Value of a named argument, or None when absent."""
        for arg in self.arguments:
            if isinstance(arg, NamedArgument) and arg.name == name:
                return arg.value
        return None


@dataclass(frozen=True, slots=True)
class Annotation(Node):
    type: ClassVar[str] = "Annotation"

    name: str
    parameters: str | None = None


@dataclass(frozen=True, slots=True)
class AIOptimizationDirective(Node):
    """An annotation whose name is one of AI_OPTIMIZATION_DIRECTIVES."""

    type: ClassVar[str] = "AIOptimizationDirective"

    directive: str
    parameters: str | None = None
    line: int = 0
    column: int = 0


AnnotationNode = Annotation | AIOptimizationDirective


@dataclass(frozen=True, slots=True)
class ImportDeclaration(Node):
    type: ClassVar[str] = "ImportDeclaration"

    path: str


@dataclass(frozen=True, slots=True)
class QuantumKeyDeclaration(Node):
    """``quantumKey name = entangle(a, b);``"""

    type: ClassVar[str] = "QuantumKeyDeclaration"

    name: str
    parameters: tuple[str, ...] = ()
    annotations: tuple[AnnotationNode, ...] = ()


@dataclass(frozen=True, slots=True)
class RequireStatement(Node):
    type: ClassVar[str] = "RequireStatement"

    identifier: str


@dataclass(frozen=True, slots=True)
class EnforceStatement(Node):
    type: ClassVar[str] = "EnforceStatement"

    function_call: FunctionCall


@dataclass(frozen=True, slots=True)
class ExecuteStatement(Node):
    type: ClassVar[str] = "ExecuteStatement"

    function_call: FunctionCall


ContractStatement = RequireStatement | EnforceStatement | ExecuteStatement


@dataclass(frozen=True, slots=True)
class ContractDeclaration(Node):
    type: ClassVar[str] = "ContractDeclaration"

    name: str
    body: tuple[ContractStatement, ...] = ()
    annotations: tuple[AnnotationNode, ...] = ()


@dataclass(frozen=True, slots=True)
class Condition(Node):
    """A binary comparison kept as raw operand text."""

    type: ClassVar[str] = "Condition"

    left: str = ""
    operator: str = ""
    right: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"left": self.left, "operator": self.operator, "right": self.right}

    def __str__(self) -> str:
        return f"{self.left} {self.operator} {self.right}".strip()


@dataclass(frozen=True, slots=True)
class FallbackStatement(Node):
    type: ClassVar[str] = "FallbackStatement"

    condition: Condition


@dataclass(frozen=True, slots=True)
class DeployModelDeclaration(Node):
    """``deployModel name to location { ... }``"""

    type: ClassVar[str] = "DeployModelDeclaration"

    name: str
    location: str
    body: tuple[FunctionCall | FallbackStatement, ...] = ()
    annotations: tuple[AnnotationNode, ...] = ()


@dataclass(frozen=True, slots=True)
class SyncLedgerDeclaration(Node):
    type: ClassVar[str] = "SyncLedgerDeclaration"

    name: str
    body: tuple[FunctionCall, ...] = ()


@dataclass(frozen=True, slots=True)
class ResolveParadoxDeclaration(Node):
    """``resolveParadox data using method(args);``"""

    type: ClassVar[str] = "ResolveParadoxDeclaration"

    data_name: str
    method: FunctionCall


@dataclass(frozen=True, slots=True)
class FunctionDeclaration(Node):
    """A function signature. Bodies are skipped by the parser."""

    type: ClassVar[str] = "FunctionDeclaration"

    name: str
    parameters: tuple[str, ...] = ()
    annotations: tuple[AnnotationNode, ...] = ()


Declaration = (
    ImportDeclaration
    | QuantumKeyDeclaration
    | ContractDeclaration
    | DeployModelDeclaration
    | SyncLedgerDeclaration
    | ResolveParadoxDeclaration
    | FunctionDeclaration
)
