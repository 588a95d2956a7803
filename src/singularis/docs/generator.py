"""Documentation generator.

Scans source trees for docstrings and ``class``/``def`` definitions, groups
files into sections by path, and writes Markdown pages, an index, a
stylesheet, and HTML renderings of every page.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from markdown_it import MarkdownIt

from singularis.core.errors import ErrorCode, SingularisError

logger = logging.getLogger(__name__)

SECTIONS: tuple[str, ...] = (
    "overview",
    "language",
    "quantum",
    "ai",
    "explainability",
    "api",
    "security",
)

# Path substrings that place a file in a section. Overview takes no files.
SECTION_PATH_MARKERS: dict[str, tuple[str, ...]] = {
    "overview": (),
    "language": ("parser", "compiler", "interpreter", "highlighting"),
    "quantum": ("quantum",),
    "ai": ("/ai/", "assistant", "protocols"),
    "explainability": ("explain", "analysis"),
    "api": ("routes", "api"),
    "security": ("security", "crypto", "auth", "monitor"),
}

SECTION_INTROS: dict[str, str] = {
    "overview": """
SINGULARIS PRIME is a quantum computing development platform that combines quantum operations with artificial intelligence governance. This document provides an overview of the platform's architecture and design principles.

## Core Components

- **Quantum Runtime**: An environment for quantum simulation and computation
- **AI Governance**: Built-in mechanisms for explainable AI and human oversight
- **Security Framework**: Quantum key distribution and secure communication protocols
- **Development Tools**: Real-time code analysis, syntax highlighting and visualization data

## Key Features

- Quantum circuit design and simulation
- AI-enhanced code analysis and optimization
- Explainability metrics and visualization
- Quantum geometry and topological operations
""",
    "language": """
SINGULARIS PRIME is a specialized programming language designed for quantum computing and AI governance. This documentation covers its syntax, structures, and core concepts.

## Language Components

- **Syntax**: Declarations for quantum keys, contracts, model deployments and ledgers
- **Annotations**: `@QuantumSecure`, `@HumanAuditable` and AI optimization directives
- **Quantum Operations**: First-class support for quantum computations
- **AI Contracts**: Formalized structures for AI governance and oversight
""",
    "quantum": """
The quantum computing features of SINGULARIS PRIME enable developers to design, simulate, and optimize quantum circuits. This section documents the quantum operations, simulation capabilities, and geometric extensions.

## Quantum Features

- Quantum circuit design with gate-level operations
- Quantum key distribution (QKD) for secure communication
- Quantum geometry for topological quantum computing
- Decoherence simulation and error correction
""",
    "ai": """
SINGULARIS PRIME includes AI governance mechanisms to keep AI operations responsible and explainable. This section documents the AI contracts, negotiation protocols, and oversight systems.

## AI Governance Features

- AI contracts with explainability thresholds
- Multi-agent AI negotiation protocols
- Human oversight and fallback mechanisms
- Audit trails and monitoring
""",
    "explainability": """
Explainability is a cornerstone of SINGULARIS PRIME. This section documents the explainability metrics, assessment methods, and visualization tools.

## Explainability Features

- Quantitative explainability scoring (0.0-1.0)
- Factor analysis for positive and negative contributors
- Improvement recommendations based on code analysis
- Visual representations through charts and diagrams
""",
    "api": """
The SINGULARIS PRIME API provides programmatic access to quantum operations, AI governance mechanisms, and code analysis tools. This section documents the available endpoints and their usage.

## API Overview

- HTTP API with JSON responses
- WebSocket channel for AI monitoring events
- Quantum operation endpoints
- AI governance and analysis endpoints
""",
    "security": """
Security is fundamental to SINGULARIS PRIME. This section documents quantum key distribution, zero-knowledge proofs and the monitoring channel's access control.

## Security Features

- Quantum key distribution
- Zero-knowledge proofs
- Role-based monitoring subscriptions
- Audit trails and verification
""",
}

STYLESHEET = """\
body {
  font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Helvetica, Arial, sans-serif;
  line-height: 1.6;
  color: #333;
  max-width: 800px;
  margin: 0 auto;
  padding: 20px;
}

h1, h2, h3, h4 {
  color: #1a202c;
}

h1 {
  border-bottom: 2px solid #4299e1;
  padding-bottom: 10px;
}

h2 {
  border-bottom: 1px solid #e2e8f0;
  padding-bottom: 5px;
}

code {
  background-color: #f1f5f9;
  padding: 2px 4px;
  border-radius: 4px;
  font-family: "SFMono-Regular", Consolas, "Liberation Mono", Menlo, Courier, monospace;
  font-size: 0.9em;
}

pre {
  background-color: #f1f5f9;
  padding: 16px;
  border-radius: 8px;
  overflow-x: auto;
}

a {
  color: #3182ce;
  text-decoration: none;
}

a:hover {
  text-decoration: underline;
}

table {
  border-collapse: collapse;
  width: 100%;
}

th, td {
  border: 1px solid #e2e8f0;
  padding: 8px 12px;
  text-align: left;
}
"""

_HTML_PAGE = """\
<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <title>{title}</title>
  <link rel="stylesheet" href="style.css">
</head>
<body>
  <div class="container">
{body}  </div>
</body>
</html>
"""

_MODULE_DOC_RE = re.compile(r'\A\s*(?:#[^\n]*\n\s*)*(?:"""|\'\'\')(.*?)(?:"""|\'\'\')', re.DOTALL)
_DOCSTRING_RE = re.compile(r'"""(.*?)"""', re.DOTALL)
_CLASS_RE = re.compile(
    r'^[ \t]*class\s+(\w+)(?:\(([^)]*)\))?\s*:\s*(?:"""(.*?)""")?',
    re.MULTILINE | re.DOTALL,
)
_DEF_RE = re.compile(
    r'^[ \t]*(?:async\s+)?def\s+(\w+)\s*\(([^)]*)\)[^:\n]*:\s*(?:"""(.*?)""")?',
    re.MULTILINE | re.DOTALL,
)


# ═══════════════════════════════════════════════════════════════
# EXTRACTION
# ═══════════════════════════════════════════════════════════════


@dataclass(frozen=True, slots=True)
class Definition:
    kind: str
    """``class`` or ``function``."""

    name: str
    line: int
    bases: str = ""
    parameters: tuple[str, ...] = ()
    doc: str = ""

    def signature(self) -> str:
        if self.kind == "class":
            return f"class {self.name}({self.bases})" if self.bases else f"class {self.name}"
        return f"def {self.name}({', '.join(self.parameters)})"


@dataclass(frozen=True, slots=True)
class SourceFile:
    path: Path
    module_doc: str
    definitions: tuple[Definition, ...]
    docstring_count: int


def _clean_doc(raw: str | None) -> str:
    """First paragraph of a docstring, whitespace-normalised."""
    if not raw:
        return ""
    paragraph = raw.strip().split("\n\n", 1)[0]
    return " ".join(line.strip() for line in paragraph.splitlines())


def _line_of(content: str, index: int) -> int:
    return content.count("\n", 0, index) + 1


def _split_params(raw: str) -> tuple[str, ...]:
    params = (" ".join(p.split()) for p in raw.split(","))
    return tuple(p for p in params if p and p not in ("self", "cls"))


def extract_definitions(content: str) -> list[Definition]:
    definitions = [
        Definition(
            kind="class",
            name=m.group(1),
            line=_line_of(content, m.start(1)),
            bases=" ".join((m.group(2) or "").split()),
            doc=_clean_doc(m.group(3)),
        )
        for m in _CLASS_RE.finditer(content)
    ]
    definitions += [
        Definition(
            kind="function",
            name=m.group(1),
            line=_line_of(content, m.start(1)),
            parameters=_split_params(m.group(2)),
            doc=_clean_doc(m.group(3)),
        )
        for m in _DEF_RE.finditer(content)
        if not m.group(1).startswith("_")
    ]
    return sorted(definitions, key=lambda d: d.line)


def scan_source(path: Path, content: str) -> SourceFile:
    module_match = _MODULE_DOC_RE.match(content)
    return SourceFile(
        path=path,
        module_doc=_clean_doc(module_match.group(1) if module_match else None),
        definitions=tuple(extract_definitions(content)),
        docstring_count=len(_DOCSTRING_RE.findall(content)),
    )


def section_files(section: str, files: list[SourceFile]) -> list[SourceFile]:
    markers = SECTION_PATH_MARKERS[section]
    return [
        f for f in files
        if any(marker in f.path.as_posix().lower() for marker in markers)
    ]


# ═══════════════════════════════════════════════════════════════
# GENERATOR
# ═══════════════════════════════════════════════════════════════


@dataclass(slots=True)
class DocsResult:
    files_processed: int
    sections_generated: int
    output_dir: Path
    pages: list[Path] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "filesProcessed": self.files_processed,
            "sectionsGenerated": self.sections_generated,
            "outputDir": str(self.output_dir),
            "pages": [str(p) for p in self.pages],
        }


class DocumentationGenerator:
    """Render reference documentation for one or more source trees."""

    def __init__(
        self,
        source_dirs: list[Path] | list[str],
        output_dir: Path | str,
        extensions: tuple[str, ...] = (".py",),
        *,
        html: bool = True,
    ) -> None:
        self.source_dirs = [Path(d) for d in source_dirs]
        self.output_dir = Path(output_dir)
        self.extensions = extensions
        self.html = html
        self._markdown = MarkdownIt("commonmark").enable("table")

    def find_files(self) -> list[Path]:
        found: list[Path] = []
        for directory in self.source_dirs:
            if not directory.is_dir():
                logger.warning("Documentation source directory not found: %s", directory)
                continue
            found.extend(
                p for p in sorted(directory.rglob("*"))
                if p.is_file() and p.suffix in self.extensions
            )
        return found

    def scan(self) -> list[SourceFile]:
        scanned = []
        for path in self.find_files():
            try:
                content = path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                logger.warning("Skipping %s: %s", path, e)
                continue
            scanned.append(scan_source(path, content))
        return scanned

    def render_section(self, section: str, files: list[SourceFile]) -> str:
        parts = [f"# SINGULARIS PRIME {section.capitalize()}\n", SECTION_INTROS[section]]
        parts.append("\n## Reference\n\n")
        for source in section_files(section, files):
            parts.append(f"### {source.path.name}\n\n")
            if source.module_doc:
                parts.append(f"{source.module_doc}\n\n")
            for definition in source.definitions:
                parts.append(f"#### `{definition.signature()}`\n\n")
                if definition.doc:
                    parts.append(f"{definition.doc}\n\n")
        return "".join(parts)

    def render_index(self, generated_at: datetime | None = None, extension: str = "md") -> str:
        """Index page linking to each section's ``.md`` (or ``.html``) page."""
        generated_at = generated_at or datetime.now(UTC)
        links = "".join(f"- [{s.capitalize()}]({s}.{extension})\n" for s in SECTIONS)
        return (
            "# SINGULARIS PRIME Documentation\n\n"
            "Welcome to the SINGULARIS PRIME documentation. This documentation covers the "
            "quantum-secure, AI-native programming language and its development platform.\n\n"
            "## Documentation Sections\n\n"
            f"{links}\n"
            "## Getting Started\n\n"
            f"Visit the [Overview](overview.{extension}) section for an introduction to the "
            "platform's concepts and architecture.\n\n"
            "---\n\n"
            f"**Documentation generated on: {generated_at.isoformat()}**\n"
        )

    def render_html(self, markdown: str, title: str) -> str:
        body = self._markdown.render(markdown)
        return _HTML_PAGE.format(title=title, body=body)

    def _write(self, path: Path, content: str) -> Path:
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise SingularisError(ErrorCode.FILE_WRITE_FAILED, {"path": str(path)}, cause=e) from e
        logger.debug("Wrote %s", path)
        return path

    def generate(self) -> DocsResult:
        """Write every section, the index and the stylesheet."""
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise SingularisError(
                ErrorCode.FILE_WRITE_FAILED, {"path": str(self.output_dir)}, cause=e
            ) from e

        files = self.scan()
        logger.info("Found %d source files to document", len(files))

        result = DocsResult(
            files_processed=len(files),
            sections_generated=len(SECTIONS),
            output_dir=self.output_dir,
        )
        pages = {section: self.render_section(section, files) for section in SECTIONS}
        generated_at = datetime.now(UTC)
        pages["index"] = self.render_index(generated_at)

        for name, markdown in pages.items():
            result.pages.append(self._write(self.output_dir / f"{name}.md", markdown))
            if self.html:
                if name == "index":
                    markdown = self.render_index(generated_at, extension="html")
                title = "SINGULARIS PRIME " + ("Documentation" if name == "index" else name.capitalize())
                result.pages.append(
                    self._write(self.output_dir / f"{name}.html", self.render_html(markdown, title))
                )
        result.pages.append(self._write(self.output_dir / "style.css", STYLESHEET))

        logger.info("Generated %d documentation pages in %s", len(result.pages), self.output_dir)
        return result
