"""Core types shared across Singularis."""

from singularis.core.errors import (
    ERROR_MESSAGES,
    RECOVERY_HINTS,
    ErrorCode,
    SingularisError,
    config_error,
    geometry_error,
    not_found,
    validation_error,
)
from singularis.core.rng import get_rng, seed_shared_rng
from singularis.core.serialization import camel_dict, to_camel

__all__ = [
    "camel_dict",
    "get_rng",
    "seed_shared_rng",
    "to_camel",
    "ERROR_MESSAGES",
    "RECOVERY_HINTS",
    "ErrorCode",
    "SingularisError",
    "config_error",
    "geometry_error",
    "not_found",
    "validation_error",
]
