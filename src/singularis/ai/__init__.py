"""AI governance protocols."""

from singularis.ai.protocols import (
    AIEntity,
    ContractTerms,
    generate_self_documentation,
    negotiate_ai_contract,
    simulate_governance_adaptation,
)

__all__ = [
    "AIEntity",
    "ContractTerms",
    "generate_self_documentation",
    "negotiate_ai_contract",
    "simulate_governance_adaptation",
]
