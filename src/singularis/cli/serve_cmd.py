"""HTTP server command.

Usage:
    singularis serve              # Start on the configured host and port
    singularis serve --dev        # Enable CORS for the dev frontend
"""

import logging

import click
import uvicorn
from rich.console import Console

from singularis.config import get_config
from singularis.foundation.logging import uvicorn_log_level

console = Console()


@click.command()
@click.option("--port", type=int, default=None, help="Port to listen on (default: server.port)")
@click.option("--host", default=None, help="Host to bind to (default: server.host)")
@click.option("--dev", is_flag=True, help="Development mode (CORS enabled)")
def serve(port: int | None, host: str | None, dev: bool) -> None:
    """Start the SINGULARIS PRIME HTTP server.

    \b
    Examples:
        singularis serve              # Start on 127.0.0.1:5000
        singularis serve --dev        # API with CORS for a local frontend
        singularis serve --port 3000  # Custom port
    """
    from singularis.server import create_app

    settings = get_config().server
    host = host or settings.host
    port = port or settings.port

    app = create_app(dev_mode=dev)

    console.print()
    console.print("[bold magenta]⚛ SINGULARIS PRIME[/bold magenta]")
    console.print(f"   URL: http://{host}:{port}")
    console.print(f"   Monitor: ws://{host}:{port}/ws/ai-monitor")
    if dev:
        console.print("   Mode: [yellow]Development[/yellow] (CORS enabled)")
    console.print()
    console.print("[dim]Press Ctrl+C to stop[/dim]")
    console.print()

    # Never quieter than INFO
    level = min(logging.getLogger().level, logging.INFO)
    uvicorn.run(app, host=host, port=port, log_level=uvicorn_log_level(level))
