"""Singularis - a playground for the SINGULARIS PRIME language.

Parses and interprets SINGULARIS PRIME programs, simulates the quantum and
AI-governance operations they describe, and serves the whole toolkit over
HTTP with a live AI monitoring channel.
"""

from singularis.core.errors import ErrorCode, SingularisError

__version__ = "0.1.0"

__all__ = [
    "ErrorCode",
    "SingularisError",
    "__version__",
]
