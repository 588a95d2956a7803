"""Foundation utilities: logging setup."""

from singularis.foundation.logging import configure_logging, resolve_level, uvicorn_log_level

__all__ = ["configure_logging", "resolve_level", "uvicorn_log_level"]
