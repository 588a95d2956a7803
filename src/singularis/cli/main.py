"""Main CLI entry point.

    singularis run program.sp
    singularis parse program.sp --json
    singularis glyph ritual.glyph --verify
    singularis serve --dev
"""

import json
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from singularis import __version__
from singularis.cli.error_handler import handle_error
from singularis.cli.serve_cmd import serve
from singularis.config import get_config
from singularis.core.errors import SingularisError
from singularis.core.rng import seed_shared_rng
from singularis.foundation.logging import configure_logging

console = Console()

_SOURCE = click.Path(exists=True, dir_okay=False, path_type=Path)


def cli_entrypoint() -> None:
    """Wrapped entrypoint with global error handling.

    Called from pyproject.toml [project.scripts].
    """
    try:
        main(standalone_mode=False)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except click.Abort:
        console.print("\n  [dim]Interrupted[/]")
        sys.exit(130)
    except Exception as e:
        handle_error(e)


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _emit_json(data: object) -> None:
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


@click.group()
@click.version_option(__version__, prog_name="singularis")
@click.option("--debug", is_flag=True, help="Verbose logging")
def main(debug: bool) -> None:
    """SINGULARIS PRIME: a quantum and AI-native language playground."""
    config = get_config()
    configure_logging(debug=debug or config.debug)
    seed_shared_rng(config.runtime.seed)


main.add_command(serve)


# ═══════════════════════════════════════════════════════════════
# LANGUAGE
# ═══════════════════════════════════════════════════════════════


@main.command()
@click.argument("path", type=_SOURCE)
@click.option("--json", "json_output", is_flag=True, help="Print the transcript as JSON")
def run(path: Path, json_output: bool) -> None:
    """Execute a SINGULARIS PRIME program."""
    from singularis.language import run_source

    try:
        output = run_source(_read(path))
    except SingularisError as e:
        handle_error(e, json_output=json_output)

    if json_output:
        _emit_json({"output": output})
        return
    for line in output:
        console.print(line, markup=False, highlight=False)


@main.command()
@click.argument("path", type=_SOURCE)
@click.option("--json", "json_output", is_flag=True, help="Print the AST as JSON")
def parse(path: Path, json_output: bool) -> None:
    """Parse a program and show its top-level declarations."""
    from singularis.language import parse_program

    ast = [node.to_dict() for node in parse_program(_read(path))]
    if json_output:
        _emit_json(ast)
        return

    table = Table(title=f"{path.name}: {len(ast)} declarations", show_header=True)
    table.add_column("#", style="dim", justify="right")
    table.add_column("Type", style="cyan")
    table.add_column("Name")
    for i, node in enumerate(ast, 1):
        table.add_row(str(i), node["type"], str(node.get("name", "")))
    console.print(table)


@main.command()
@click.argument("path", type=_SOURCE)
@click.option("--json", "json_output", is_flag=True, help="Print tokens as JSON")
def tokens(path: Path, json_output: bool) -> None:
    """Show highlighting tokens for a program."""
    from singularis.language import tokenize

    found = tokenize(_read(path))
    if json_output:
        _emit_json([t.to_dict() for t in found])
        return

    table = Table(show_header=True)
    table.add_column("Line", justify="right", style="dim")
    table.add_column("Col", justify="right", style="dim")
    table.add_column("Kind", style="cyan")
    table.add_column("Value")
    for token in found:
        table.add_row(str(token.line), str(token.column), token.kind, token.value)
    console.print(table)


# ═══════════════════════════════════════════════════════════════
# GLYPH
# ═══════════════════════════════════════════════════════════════


@main.command()
@click.argument("path", type=_SOURCE)
@click.option("--verify", is_flag=True, help="Only check that the spell is complete")
@click.option("--json", "json_output", is_flag=True, help="Print the result as JSON")
def glyph(path: Path, verify: bool, json_output: bool) -> None:
    """Bind and execute a G.L.Y.P.H. ritual."""
    from singularis.glyph import execute_glyph_ritual, verify_glyph_ritual

    raw = _read(path)
    if verify:
        result = verify_glyph_ritual(raw)
        if json_output:
            _emit_json(result)
        elif result["valid"]:
            console.print(f"[green]✓[/green] {result['spell']['command']} is a complete ritual")
        else:
            console.print("[red]✗[/red] Incomplete ritual:")
            for error in result["errors"]:
                console.print(f"  • {error}")
        if not result["valid"]:
            sys.exit(1)
        return

    result = execute_glyph_ritual(raw)
    if json_output:
        _emit_json(result)
    elif result["success"]:
        console.print(f"[bold magenta]{result['ritualName']}[/] bound to {result['deployPath']}")
        console.print(
            f"[dim]{result['operationCount']} quantum operations, "
            f"{result['quantumDimensionality']} dimensions[/dim]"
        )
        console.print(Syntax(result["executionCode"], "python", theme="monokai"))
    else:
        console.print(f"[red]✗[/red] {result['error']}")
    if not result["success"]:
        sys.exit(1)


# ═══════════════════════════════════════════════════════════════
# ANALYSIS & DOCS
# ═══════════════════════════════════════════════════════════════


@main.command()
@click.argument("path", type=_SOURCE)
@click.option("--json", "json_output", is_flag=True, help="Print the analysis as JSON")
def analyze(path: Path, json_output: bool) -> None:
    """Analyze a program's complexity and quantum/AI features."""
    from singularis.analysis import CodeAnalysisService

    result = CodeAnalysisService().analyze_code(_read(path))
    if json_output:
        _emit_json(result.to_dict())
        return

    table = Table(title=path.name, show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value")
    table.add_row("Complexity", f"{result.complexity:.3f}")
    table.add_row("Explainability", f"{result.explainability:.3f}")
    table.add_row("Entanglement", f"{result.entanglement_level:.2f}")
    table.add_row("Dimensions", str(result.dimensions))
    table.add_row("Quantum features", ", ".join(result.quantum_features) or "-")
    table.add_row("AI integration", ", ".join(result.ai_integration_points) or "-")
    console.print(table)

    if result.improvements:
        console.print("\n[bold]Suggested improvements:[/]")
        for i, suggestion in enumerate(result.improvements, 1):
            console.print(f"  {i}. {suggestion}")


@main.command()
@click.option(
    "--source", "sources", multiple=True, type=click.Path(file_okay=False, path_type=Path),
    help="Source directory to scan (repeatable; default: docs.source_dirs)",
)
@click.option(
    "--output", type=click.Path(file_okay=False, path_type=Path), default=None,
    help="Output directory (default: docs.output_dir)",
)
@click.option("--no-html", is_flag=True, help="Write Markdown only")
@click.option("--json", "json_output", is_flag=True, help="Print the summary as JSON")
def docs(sources: tuple[Path, ...], output: Path | None, no_html: bool, json_output: bool) -> None:
    """Generate reference documentation from source files."""
    from singularis.docs import DocumentationGenerator

    settings = get_config().docs
    generator = DocumentationGenerator(
        list(sources) or settings.source_dirs,
        output or settings.output_dir,
        html=settings.html and not no_html,
    )
    try:
        result = generator.generate()
    except SingularisError as e:
        handle_error(e, json_output=json_output)

    if json_output:
        _emit_json(result.to_dict())
        return
    console.print(
        f"[green]✓[/green] Documented {result.files_processed} files in "
        f"{result.sections_generated} sections → {result.output_dir}"
    )
