"""Singularis Error System.

Provides structured error handling with:
- Numeric error codes for programmatic handling
- User-friendly messages
- Recovery hints
- Context for debugging
"""


from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Numeric error codes organized by category.

    Format: XYYY where X = category, YYY = specific error

    Categories:
        2xxx - Runtime/interpreter errors
        3xxx - Quantum simulation errors
        4xxx - Validation errors
        5xxx - Configuration errors
        7xxx - IO errors
    """

    # 2xxx - Runtime Errors
    RUNTIME_UNKNOWN_NODE = 2001
    RUNTIME_RESOURCE_NOT_FOUND = 2002
    RUNTIME_STATE_INVALID = 2003

    # 3xxx - Quantum Errors
    QUANTUM_INVALID_GEOMETRY = 3001
    QUANTUM_DIMENSION_MISMATCH = 3002
    QUANTUM_INVALID_CIRCUIT = 3003

    # 4xxx - Validation Errors
    VALIDATION_MISSING_FIELD = 4001
    VALIDATION_INVALID_VALUE = 4002
    VALIDATION_THRESHOLD_RANGE = 4003

    # 5xxx - Configuration Errors
    CONFIG_INVALID = 5001

    # 7xxx - IO Errors
    FILE_NOT_FOUND = 7001
    FILE_WRITE_FAILED = 7002
    RESOURCE_NOT_FOUND = 7003

    @property
    def category(self) -> str:
        """Get the error category name."""
        prefix = self.value // 1000
        return {
            2: "runtime",
            3: "quantum",
            4: "validation",
            5: "config",
            7: "io",
        }.get(prefix, "unknown")

    @property
    def is_recoverable(self) -> bool:
        """Whether this error type is typically recoverable."""
        non_recoverable = {
            ErrorCode.CONFIG_INVALID,
            ErrorCode.RUNTIME_STATE_INVALID,
        }
        return self not in non_recoverable


# Human-readable error messages
ERROR_MESSAGES: dict[ErrorCode, str] = {
    # Runtime errors
    ErrorCode.RUNTIME_UNKNOWN_NODE: "Unknown node type: {node_type}",
    ErrorCode.RUNTIME_RESOURCE_NOT_FOUND: "Required resource not found: {identifier}",
    ErrorCode.RUNTIME_STATE_INVALID: "Invalid runtime state: {detail}",

    # Quantum errors
    ErrorCode.QUANTUM_INVALID_GEOMETRY: "Invalid quantum geometry: {detail}",
    ErrorCode.QUANTUM_DIMENSION_MISMATCH: "Expected {expected} coordinates for this space",
    ErrorCode.QUANTUM_INVALID_CIRCUIT: "Invalid quantum circuit: {detail}",

    # Validation errors
    ErrorCode.VALIDATION_MISSING_FIELD: "{detail}",
    ErrorCode.VALIDATION_INVALID_VALUE: "Invalid value for '{field}': {detail}",
    ErrorCode.VALIDATION_THRESHOLD_RANGE: "Optimization threshold must be between 0 and 1",

    # Config errors
    ErrorCode.CONFIG_INVALID: "Invalid configuration for '{key}': {detail}",

    # IO errors
    ErrorCode.FILE_NOT_FOUND: "File not found: {path}",
    ErrorCode.FILE_WRITE_FAILED: "Failed to write file: {path}",
    ErrorCode.RESOURCE_NOT_FOUND: "{resource} not found: {identifier}",
}


RECOVERY_HINTS: dict[ErrorCode, list[str]] = {
    ErrorCode.RUNTIME_RESOURCE_NOT_FOUND: [
        "Declare '{identifier}' with quantumKey before the contract that requires it",
        "Check the spelling of the required identifier",
    ],
    ErrorCode.QUANTUM_INVALID_GEOMETRY: [
        "Use a dimension of at least 1",
        "Add a 'manifold' element for spaces above three dimensions",
    ],
    ErrorCode.QUANTUM_DIMENSION_MISMATCH: [
        "Provide exactly {expected} coordinates per state",
    ],
    ErrorCode.CONFIG_INVALID: [
        "Check .singularis/config.yaml for typos",
        "Unset SINGULARIS_* environment overrides and retry",
    ],
}


class SingularisError(Exception):
    """Base error type for all Singularis errors.

    Example:
        >>> err = SingularisError(
        ...     code=ErrorCode.RUNTIME_RESOURCE_NOT_FOUND,
        ...     context={"identifier": "qKey"},
        ... )
        >>> print(err)
        [SP-2002] Required resource not found: qKey
    """

    def __init__(
        self,
        code: ErrorCode,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        self.code = code
        self.context = context or {}
        self.cause = cause
        super().__init__(str(self))

    @property
    def message(self) -> str:
        """Get the formatted user-friendly message."""
        template = ERROR_MESSAGES.get(self.code, "An error occurred: {detail}")
        try:
            return template.format(**self.context)
        except KeyError:
            return template

    @property
    def recovery_hints(self) -> list[str]:
        """Get recovery suggestions for this error."""
        formatted = []
        for hint in RECOVERY_HINTS.get(self.code, []):
            try:
                formatted.append(hint.format(**self.context))
            except KeyError:
                formatted.append(hint)
        return formatted

    @property
    def is_recoverable(self) -> bool:
        return self.code.is_recoverable

    @property
    def category(self) -> str:
        return self.code.category

    @property
    def error_id(self) -> str:
        """Get the error ID string (e.g., 'SP-2002')."""
        return f"SP-{self.code.value}"

    def __str__(self) -> str:
        return f"[{self.error_id}] {self.message}"

    def __repr__(self) -> str:
        return f"SingularisError(code={self.code!r}, context={self.context!r})"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dict for logging/API responses."""
        return {
            "error_id": self.error_id,
            "code": self.code.value,
            "category": self.category,
            "message": self.message,
            "recoverable": self.is_recoverable,
            "recovery_hints": self.recovery_hints,
            "context": self.context,
        }


# Convenience factory functions

def validation_error(detail: str, **extra: Any) -> SingularisError:
    """Create a VALIDATION_MISSING_FIELD error with a ready-made message."""
    return SingularisError(
        code=ErrorCode.VALIDATION_MISSING_FIELD,
        context={"detail": detail, **extra},
    )


def not_found(resource: str, identifier: str) -> SingularisError:
    """Create a RESOURCE_NOT_FOUND error."""
    return SingularisError(
        code=ErrorCode.RESOURCE_NOT_FOUND,
        context={"resource": resource, "identifier": identifier},
    )


def geometry_error(detail: str) -> SingularisError:
    """Create a QUANTUM_INVALID_GEOMETRY error."""
    return SingularisError(
        code=ErrorCode.QUANTUM_INVALID_GEOMETRY,
        context={"detail": detail},
    )


def config_error(key: str, detail: str = "") -> SingularisError:
    """Create a configuration error."""
    return SingularisError(
        code=ErrorCode.CONFIG_INVALID,
        context={"key": key, "detail": detail},
    )
