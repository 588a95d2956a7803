"""Editor support: token classification, completions and the colour theme.

The token classes mirror the browser editor's language definition so the
server can pre-highlight snippets (docs, CLI output) the same way.
"""

import re
from dataclasses import asdict, dataclass
from typing import Any, Literal

TokenKind = Literal[
    "comment",
    "string",
    "number",
    "keyword",
    "function",
    "annotation",
    "operator",
    "identifier",
    "delimiter",
    "bracket",
]

KEYWORDS = (
    "quantumKey", "contract", "deployModel", "syncLedger", "resolveParadox",
    "require", "enforce", "execute", "to", "if", "using", "fallbackToHuman",
    "import", "function",
)

BUILTIN_FUNCTIONS = (
    "entangle", "explainabilityThreshold", "consensusProtocol",
    "monitorAuditTrail", "adaptiveLatency", "validateZeroKnowledgeProofs",
    "selfOptimizingLoop",
)

# Order matters: earlier alternatives win
_TOKEN_PATTERNS: tuple[tuple[str, str], ...] = (
    ("comment", r"//[^\n]*"),
    ("string", r'"(?:[^"\\\n]|\\.)*"?'),
    ("number", r"\d*\.\d+(?:[eE][-+]?\d+)?%?|\d+%?"),
    ("keyword", r"\b(?:" + "|".join(KEYWORDS) + r")\b"),
    ("function", r"\b(?:" + "|".join(BUILTIN_FUNCTIONS) + r")\b"),
    ("annotation", r"@\w+(?:\([\w.,= ]*\))?"),
    ("operator", r">=|<=|==|!=|&&|\|\||[<>=]"),
    ("identifier", r"[a-zA-Z_$][\w$]*"),
    ("bracket", r"[{}()\[\]]"),
    ("delimiter", r"[;,.]"),
    ("newline", r"\n"),
    ("whitespace", r"[ \t\r]+"),
    ("unknown", r"."),
)

_TOKEN_RE = re.compile("|".join(f"(?P<{name}>{pattern})" for name, pattern in _TOKEN_PATTERNS))


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    value: str
    line: int
    column: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def tokenize(code: str) -> list[Token]:
    """Classify ``code`` into editor tokens with 1-based positions.

    Whitespace and unrecognised characters are dropped.
    """
    tokens: list[Token] = []
    line = 1
    line_start = 0
    for match in _TOKEN_RE.finditer(code):
        kind = match.lastgroup
        if kind == "newline":
            line += 1
            line_start = match.end()
            continue
        if kind in ("whitespace", "unknown") or kind is None:
            continue
        tokens.append(Token(kind, match.group(), line, match.start() - line_start + 1))  # type: ignore[arg-type]
    return tokens


@dataclass(frozen=True, slots=True)
class CompletionItem:
    label: str
    kind: Literal["keyword", "function", "snippet"]
    insert_text: str
    documentation: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "label": self.label,
            "kind": self.kind,
            "insertText": self.insert_text,
            "isSnippet": "${" in self.insert_text,
            "documentation": self.documentation,
        }


_COMPLETIONS: tuple[CompletionItem, ...] = (
    CompletionItem(
        "quantumKey", "keyword",
        "quantumKey ${1:keyName} = entangle(${2:nodeA}, ${3:nodeB});",
        "Creates a quantum key using entangled particles",
    ),
    CompletionItem(
        "contract", "keyword",
        "contract ${1:contractName} {\n\tenforce explainabilityThreshold(${2:0.85});\n\t${3}\n}",
        "Creates an AI-to-AI smart contract with human oversight",
    ),
    CompletionItem(
        "deployModel", "keyword",
        "deployModel ${1:modelName} to ${2:location} {\n\tmonitorAuditTrail();\n"
        "\tfallbackToHuman if ${3:condition} > ${4:threshold};\n}",
        "Deploys an AI model with monitoring and human fallback",
    ),
    CompletionItem(
        "syncLedger", "keyword",
        "syncLedger ${1:ledgerName} {\n\tadaptiveLatency(max=${2:20} min);\n"
        "\tvalidateZeroKnowledgeProofs();\n}",
        "Synchronizes distributed ledgers with latency compensation",
    ),
    CompletionItem(
        "resolveParadox", "keyword",
        "resolveParadox ${1:dataName} using selfOptimizingLoop(max_iterations=${2:500});",
        "Resolves quantum information paradoxes through iterative optimization",
    ),
    CompletionItem(
        "entangle", "function",
        "entangle(${1:nodeA}, ${2:nodeB})",
        "Creates quantum entanglement between two nodes",
    ),
    CompletionItem(
        "@QuantumSecure", "snippet",
        "@QuantumSecure",
        "Marks code as requiring quantum security",
    ),
    CompletionItem(
        "@HumanAuditable", "snippet",
        "@HumanAuditable(${1:0.85})",
        "Specifies human auditability threshold",
    ),
)


def completion_items(prefix: str = "") -> list[CompletionItem]:
    """Snippet catalogue, optionally filtered by label prefix."""
    return [item for item in _COMPLETIONS if item.label.startswith(prefix)]


THEME: dict[str, Any] = {
    "name": "singularis-theme",
    "base": "vs-dark",
    "rules": {
        "comment": "6272a4",
        "string": "f1fa8c",
        "keyword": "ff79c6",
        "function": "8be9fd",
        "identifier": "f8f8f2",
        "number": "bd93f9",
        "operator": "ff79c6",
        "annotation": "50fa7b",
    },
    "colors": {
        "editor.foreground": "#f8f8f2",
        "editor.background": "#1a1a2e",
        "editor.selectionBackground": "#44475a",
        "editor.lineHighlightBackground": "#6a0dad20",
        "editorCursor.foreground": "#f8f8f2",
    },
}
