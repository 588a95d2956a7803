"""HTTP/WebSocket server for the SINGULARIS PRIME playground.

Usage:
    singularis serve --dev

Architecture:
    Browser ←HTTP→ FastAPI routes → language / quantum / ai / glyph
    Browser ←WebSocket→ AIMonitor (/ws/ai-monitor)
"""

from singularis.server.main import create_app
from singularis.server.monitor import AIMonitor, get_monitor

__all__ = ["AIMonitor", "create_app", "get_monitor"]
