"""Simulated AI-to-AI negotiation and governance protocols."""

import logging
import random
import re
from dataclasses import dataclass, field
from typing import Any, Literal

from singularis.core.errors import ErrorCode, SingularisError
from singularis.core.rng import get_rng

logger = logging.getLogger(__name__)

DetailLevel = Literal["basic", "moderate", "comprehensive"]

_CONSTRUCT_RE = re.compile(r"\b(quantumKey|contract|deployModel|syncLedger|resolveParadox)\b")

_CONSTRUCT_DESCRIPTIONS: dict[str, str] = {
    "quantumKey": (
        "- **Quantum Key Distribution**: Establishes secure communication channels "
        "using quantum entanglement"
    ),
    "contract": (
        "- **AI Contract**: Defines autonomous AI-to-AI negotiations with human oversight"
    ),
    "deployModel": (
        "- **AI Model Deployment**: Configures AI model with monitoring and fallback mechanisms"
    ),
    "syncLedger": (
        "- **Distributed Ledger Sync**: Manages planetary-scale data synchronization "
        "with latency optimization"
    ),
    "resolveParadox": (
        "- **Quantum Paradox Resolution**: Implements self-optimizing algorithms for "
        "quantum information paradoxes"
    ),
}


def _check_unit_interval(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        raise SingularisError(
            ErrorCode.VALIDATION_INVALID_VALUE,
            context={"field": name, "detail": f"must be between 0 and 1, got {value}"},
        )


@dataclass(frozen=True, slots=True)
class AIEntity:
    """A negotiating AI agent. Scores are in [0, 1]."""

    id: str
    name: str
    expertise: tuple[str, ...] = ()
    trust_level: float = 0.5
    explainability_score: float = 0.5

    def __post_init__(self) -> None:
        _check_unit_interval("trustLevel", self.trust_level)
        _check_unit_interval("explainabilityScore", self.explainability_score)


@dataclass(slots=True)
class ContractTerms:
    objectives: list[str] = field(default_factory=list)
    constraints: list[str] = field(default_factory=list)
    success_criteria: list[str] = field(default_factory=list)
    compensation: Any = None
    duration: str = ""
    audit_requirements: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ContractTerms":
        return cls(
            objectives=list(data.get("objectives") or []),
            constraints=list(data.get("constraints") or []),
            success_criteria=list(data.get("success_criteria") or []),
            compensation=data.get("compensation"),
            duration=str(data.get("duration") or ""),
            audit_requirements=list(data.get("audit_requirements") or []),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "objectives": self.objectives,
            "constraints": self.constraints,
            "success_criteria": self.success_criteria,
            "compensation": self.compensation,
            "duration": self.duration,
            "audit_requirements": self.audit_requirements,
        }


@dataclass(frozen=True, slots=True)
class NegotiationResult:
    success: bool
    explanation: str
    explainability_score: float
    negotiations: list[str]
    contract: ContractTerms | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "success": self.success,
            "explanation": self.explanation,
            "explainabilityScore": self.explainability_score,
            "negotiations": self.negotiations,
        }
        if self.contract is not None:
            data["contract"] = self.contract.to_dict()
        return data


def _explain_contract(contract: ContractTerms) -> str:
    return (
        "This AI-to-AI contract establishes a collaboration with the following key points:\n"
        f"1. OBJECTIVES: {', '.join(contract.objectives)}\n"
        "2. CONSTRAINTS: The AI agents must operate within these boundaries: "
        f"{', '.join(contract.constraints)}\n"
        "3. SUCCESS CRITERIA: The collaboration will be measured by: "
        f"{', '.join(contract.success_criteria)}\n"
        f"4. DURATION: {contract.duration}\n"
        "5. AUDIT: Human oversight is maintained through: "
        f"{', '.join(contract.audit_requirements)}\n"
        "This explanation is designed to be comprehensible to human reviewers while "
        "preserving the precision needed for AI execution."
    )


def negotiate_ai_contract(
    initiator: AIEntity,
    responder: AIEntity,
    initial_terms: ContractTerms,
    explainability_threshold: float = 0.8,
    rng: random.Random | None = None,
) -> NegotiationResult:
    """Negotiate a contract between two agents.

    Negotiation stops immediately when the agents' mean explainability is
    below ``explainability_threshold``. Otherwise 2-4 proposal rounds run and
    agreement succeeds with probability equal to the mean trust level.
    """
    _check_unit_interval("explainabilityThreshold", explainability_threshold)
    rng = get_rng(rng)

    log = [f"Initiating contract negotiation between {initiator.name} and {responder.name}"]
    combined = (initiator.explainability_score + responder.explainability_score) / 2

    if combined < explainability_threshold:
        logger.info(
            "Negotiation %s/%s blocked: explainability %.2f < %.2f",
            initiator.id, responder.id, combined, explainability_threshold,
        )
        return NegotiationResult(
            success=False,
            explanation="Explainability threshold not met. Human oversight required.",
            explainability_score=combined,
            negotiations=log,
        )

    log.append(
        f"Explainability threshold check: {combined:.2f} >= {explainability_threshold} (PASS)"
    )
    term_names = list(initial_terms.to_dict())
    for index in range(rng.randint(2, 4)):
        log.append(f"Round {index + 1}: Exchanging proposals...")
        if rng.random() > 0.7:
            term = term_names[index % len(term_names)]
            log.append(f"{responder.name} proposes modification to {term}")

    agreement_probability = (initiator.trust_level + responder.trust_level) / 2
    if rng.random() >= agreement_probability:
        log.append("Negotiation failed. Parties could not reach agreement.")
        return NegotiationResult(
            success=False,
            explanation="Parties could not agree on final terms.",
            explainability_score=combined,
            negotiations=log,
        )

    log.append("Agreement reached. Generating smart contract...")
    contract = ContractTerms.from_dict(initial_terms.to_dict())
    contract.audit_requirements = [
        *initial_terms.audit_requirements,
        f"Explainability score: {combined:.2f}",
    ]
    return NegotiationResult(
        success=True,
        explanation=_explain_contract(contract),
        explainability_score=combined,
        negotiations=log,
        contract=contract,
    )


@dataclass(frozen=True, slots=True)
class GovernanceAdaptation:
    adapted_model: str
    changes: list[str]
    explainability: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "adaptedModel": self.adapted_model,
            "changes": self.changes,
            "explainability": self.explainability,
        }


def simulate_governance_adaptation(
    current_model: str,
    environmental_changes: list[str],
    ethical_constraints: list[str],
    rng: random.Random | None = None,
) -> GovernanceAdaptation:
    rng = get_rng(rng)
    changes = [f"Adapting to: {change}" for change in environmental_changes]
    changes += [f"Preserving ethical constraint: {c}" for c in ethical_constraints]
    return GovernanceAdaptation(
        adapted_model=f"{current_model}_adapted",
        changes=changes,
        explainability=min(1.0, 0.7 + rng.random() * 0.3),
    )


def generate_self_documentation(code: str, detail_level: DetailLevel = "moderate") -> str:
    """Markdown overview of the SINGULARIS constructs used in ``code``."""
    if detail_level not in ("basic", "moderate", "comprehensive"):
        raise SingularisError(
            ErrorCode.VALIDATION_INVALID_VALUE,
            context={"field": "detailLevel", "detail": "expected basic, moderate or comprehensive"},
        )
    constructs = list(dict.fromkeys(_CONSTRUCT_RE.findall(code)))

    parts = ["## SINGULARIS PRIME Code Documentation\n\n"]
    if detail_level == "basic":
        parts.append(
            f"This code contains {len(constructs)} key SINGULARIS constructs: "
            f"{', '.join(constructs)}.\n"
        )
        parts.append("The code appears to be implementing quantum-secured AI operations.\n")
        return "".join(parts)

    parts.append("### Overview\n")
    parts.append(
        "This SINGULARIS PRIME code implements a quantum-secured AI system with the "
        "following components:\n\n"
    )
    parts.extend(_CONSTRUCT_DESCRIPTIONS[name] + "\n" for name in constructs)

    if detail_level == "comprehensive":
        parts.append("\n### Security & Governance\n")
        parts.append("- Human auditability is enforced at the language level\n")
        parts.append("- All AI operations have fallback mechanisms to human oversight\n")
        parts.append("- Quantum security ensures post-quantum cryptographic resistance\n")
        parts.append("\n### Execution Flow\n")
        parts.append("1. Quantum entanglement establishes secure communication\n")
        parts.append("2. AI contracts execute with continuous auditability validation\n")
        parts.append("3. Distributed systems synchronize with latency compensation\n")
    return "".join(parts)
