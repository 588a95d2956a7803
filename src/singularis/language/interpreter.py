"""SINGULARIS PRIME interpreter.

Walks a parsed program and produces the runtime console transcript. Quantum
and AI behaviour is simulated: key declarations delegate to
``simulate_quantum_entanglement`` and everything else emits canned log lines
with a little randomness mixed in.
"""

import logging
import random
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from singularis.core.errors import ErrorCode, SingularisError
from singularis.core.rng import get_rng
from singularis.language.ast import (
    Argument,
    ContractDeclaration,
    DeployModelDeclaration,
    EnforceStatement,
    ExecuteStatement,
    FallbackStatement,
    FunctionCall,
    FunctionDeclaration,
    ImportDeclaration,
    NamedArgument,
    Node,
    QuantumKeyDeclaration,
    RequireStatement,
    ResolveParadoxDeclaration,
    SyncLedgerDeclaration,
)
from singularis.language.parser import parse_program
from singularis.quantum.operations import simulate_quantum_entanglement

logger = logging.getLogger(__name__)

RUNTIME_VERSION = "2.3.0"
DECOHERENCE_WARNING_RATE = 0.3
DEFAULT_MAX_LATENCY = 20
DEFAULT_MAX_ITERATIONS = 100


@dataclass(frozen=True, slots=True)
class ModuleInfo:
    name: str
    version: str


KNOWN_MODULES: dict[str, ModuleInfo] = {
    "quantum/entanglement": ModuleInfo("quantum-entanglement", "2.3.0"),
    "ai/negotiation/v4.2": ModuleInfo("ai-negotiation", "4.2.0"),
    "blockchain/ledger": ModuleInfo("blockchain-ledger", "1.7.3"),
}

_LEADING_NUMBER = re.compile(r"^\s*(-?\d+(?:\.\d+)?)")


def _leading_number(value: str | None) -> float | None:
    """Extract the leading number of ``"20 min"``-style argument values."""
    if value is None:
        return None
    match = _LEADING_NUMBER.match(value)
    return float(match.group(1)) if match else None


def _first_value(arguments: Sequence[Argument]) -> str | None:
    if not arguments:
        return None
    first = arguments[0]
    return first.value if isinstance(first, NamedArgument) else first


class SingularisInterpreter:
    """Evaluate a parsed program, collecting console output.

    Args:
        ast: Top-level nodes from the parser.
        rng: Random generator for the simulated values.
    """

    def __init__(self, ast: Sequence[Node], rng: random.Random | None = None) -> None:
        self.ast = list(ast)
        self.rng = get_rng(rng)
        self.output: list[str] = []
        self.environment: dict[str, Any] = {
            "entangle": simulate_quantum_entanglement,
            "explainabilityThreshold": self.explainability_threshold,
            "consensusProtocol": self.consensus_protocol,
            "monitorAuditTrail": self.monitor_audit_trail,
        }
        self._dispatch: dict[type, Callable[[Any], dict[str, Any]]] = {
            QuantumKeyDeclaration: self._eval_quantum_key,
            ContractDeclaration: self._eval_contract,
            DeployModelDeclaration: self._eval_deploy_model,
            SyncLedgerDeclaration: self._eval_sync_ledger,
            ResolveParadoxDeclaration: self._eval_resolve_paradox,
            ImportDeclaration: self._eval_import,
            FunctionDeclaration: self._eval_function,
        }

    def log(self, message: str) -> None:
        self.output.append(message)
        logger.debug("runtime: %s", message)

    def execute(self) -> list[str]:
        """Run every top-level node in order and return the transcript.

        Raises:
            SingularisError: On a missing required resource or an unknown node.
        """
        self.log(f"Initializing Quantum Runtime v{RUNTIME_VERSION}...")
        self.log("Loading quantum libraries...")
        for node in self.ast:
            self.evaluate(node)
        self.log("Program execution completed")
        return self.output

    def evaluate(self, node: Node) -> dict[str, Any]:
        handler = self._dispatch.get(type(node))
        if handler is None:
            raise SingularisError(
                ErrorCode.RUNTIME_UNKNOWN_NODE,
                context={"node_type": node.type},
            )
        return handler(node)

    # ═══════════════════════════════════════════════════════════════
    # BUILT-INS
    # ═══════════════════════════════════════════════════════════════

    def explainability_threshold(self, threshold: float) -> float:
        """Simulated explainability score within ±0.05 of ``threshold``."""
        score = threshold + (self.rng.random() * 0.1 - 0.05)
        return round(min(1.0, max(0.0, score)), 2)

    def consensus_protocol(self, arguments: Sequence[Argument]) -> dict[str, Any]:
        epoch = 0
        for arg in arguments:
            if isinstance(arg, NamedArgument) and arg.name == "epoch":
                number = _leading_number(arg.value)
                epoch = int(number) if number is not None else 0
        return {"epoch": epoch, "consensus": "achieved"}

    def monitor_audit_trail(self) -> dict[str, Any]:
        self.log("Monitoring audit trail for AI decisions...")
        return {"monitoring": "active"}

    # ═══════════════════════════════════════════════════════════════
    # NODE EVALUATION
    # ═══════════════════════════════════════════════════════════════

    def _eval_quantum_key(self, node: QuantumKeyDeclaration) -> dict[str, Any]:
        self.log("Establishing quantum entanglement channel...")
        node_a = node.parameters[0] if len(node.parameters) > 0 else ""
        node_b = node.parameters[1] if len(node.parameters) > 1 else ""
        result = simulate_quantum_entanglement(node_a, node_b, rng=self.rng)
        self.environment[node.name] = result
        self.log(f"Quantum key '{node.name}' established with {result.security_level} security")
        return {"type": "QuantumKey", "name": node.name, "securityLevel": result.security_level}

    def _eval_contract(self, node: ContractDeclaration) -> dict[str, Any]:
        self.log(f"Processing contract '{node.name}'...")
        for statement in node.body:
            if isinstance(statement, RequireStatement):
                if not self.environment.get(statement.identifier):
                    raise SingularisError(
                        ErrorCode.RUNTIME_RESOURCE_NOT_FOUND,
                        context={"identifier": statement.identifier},
                    )
                self.log(f"Verified required resource: {statement.identifier}")
            elif isinstance(statement, EnforceStatement):
                self._enforce(statement.function_call)
            elif isinstance(statement, ExecuteStatement):
                self._execute_call(node.name, statement.function_call)
        return {"type": "ContractInstance", "name": node.name}

    def _enforce(self, call: FunctionCall) -> None:
        if call.name != "explainabilityThreshold":
            logger.debug("Ignoring unsupported enforce target %s", call.name)
            return
        raw = _first_value(call.arguments)
        threshold = _leading_number(raw)
        if threshold is None:
            raise SingularisError(
                ErrorCode.VALIDATION_INVALID_VALUE,
                context={"field": "explainabilityThreshold", "detail": f"expected a number, got {raw!r}"},
            )
        score = self.explainability_threshold(threshold)
        verdict = "PASS" if score >= threshold else "FAIL"
        self.log(f"Verifying human-auditable threshold... {score:.2f} ({verdict})")

    def _execute_call(self, contract: str, call: FunctionCall) -> None:
        if call.name != "consensusProtocol":
            logger.debug("Ignoring unsupported execute target %s", call.name)
            return
        self.log(f"[INFO] Executing {contract} contract")
        self.consensus_protocol(call.arguments)
        if self.rng.random() < DECOHERENCE_WARNING_RATE:
            self.log("[WARNING] Potential quantum decoherence detected in sector 7.")
        tx_hash = f"{self.rng.randrange(16**6):06x}"
        self.log(f"[SUCCESS] Contract deployed. Transaction hash: 0x{tx_hash}...")

    def _eval_deploy_model(self, node: DeployModelDeclaration) -> dict[str, Any]:
        self.log(f"Deploying AI model to {node.location} node...")
        latency = self.rng.randrange(100, 400)
        self.log(f"Latency compensation: {latency}ms...")

        for statement in node.body:
            if isinstance(statement, FunctionCall) and statement.name == "monitorAuditTrail":
                self.monitor_audit_trail()
            elif isinstance(statement, FallbackStatement):
                self.log(f"Fallback condition set: {statement.condition}")

        score = self.rng.random() * 0.1 + 0.9
        self.log(f"[INFO] AI Model initialized with {score * 100:.1f}% verification score")
        return {"type": "DeployedModel", "name": node.name, "location": node.location}

    def _eval_sync_ledger(self, node: SyncLedgerDeclaration) -> dict[str, Any]:
        self.log(f"Synchronizing ledger '{node.name}' across planetary nodes...")
        for call in node.body:
            if call.name == "adaptiveLatency":
                maximum = _leading_number(call.argument("max"))
                shown = DEFAULT_MAX_LATENCY if maximum is None else f"{maximum:g}"
                self.log(f"Setting adaptive latency compensation to maximum {shown} minutes")
            elif call.name == "validateZeroKnowledgeProofs":
                self.log("Initializing zero-knowledge proof validation...")
                self.log("[SUCCESS] ZKP verification complete")
        return {"type": "SynchronizedLedger", "name": node.name}

    def _eval_resolve_paradox(self, node: ResolveParadoxDeclaration) -> dict[str, Any]:
        self.log(f"Attempting to resolve quantum paradox in '{node.data_name}'...")
        if node.method.name == "selfOptimizingLoop":
            parsed = _leading_number(node.method.argument("max_iterations"))
            max_iterations = max(1, int(parsed)) if parsed is not None else DEFAULT_MAX_ITERATIONS
            iterations = self.rng.randint(1, max_iterations)
            self.log(f"Running self-optimizing loop ({iterations}/{max_iterations} iterations)")
            convergence = self.rng.random() * 0.2 + 0.8
            self.log(f"[SUCCESS] Paradox resolved with {convergence:.2f} convergence rate")
        return {"type": "ResolvedParadox", "dataName": node.data_name}

    def _eval_import(self, node: ImportDeclaration) -> dict[str, Any]:
        self.log(f"Importing module: {node.path}")
        module = KNOWN_MODULES.get(node.path)
        if module is None:
            self.log(f"[WARNING] Module not found: {node.path}")
        else:
            self.log(f"Loaded module {module.name} v{module.version}")
        return {"type": "ImportedModule", "path": node.path}

    def _eval_function(self, node: FunctionDeclaration) -> dict[str, Any]:
        self.environment[node.name] = node
        params = ", ".join(node.parameters)
        self.log(f"Registered function {node.name}({params})")
        return {"type": "FunctionDefinition", "name": node.name}


def run_source(code: str, rng: random.Random | None = None) -> list[str]:
    """Parse and execute ``code``, returning the console transcript."""
    return SingularisInterpreter(parse_program(code), rng=rng).execute()
