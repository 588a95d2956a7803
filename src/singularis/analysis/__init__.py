"""Code analysis over SINGULARIS PRIME sources."""

from singularis.analysis.service import (
    CodeAnalysisResult,
    CodeAnalysisService,
    CodeFile,
    ExplainabilityEvaluation,
    evaluate_explainability,
)

__all__ = [
    "CodeAnalysisResult",
    "CodeAnalysisService",
    "CodeFile",
    "ExplainabilityEvaluation",
    "evaluate_explainability",
]
