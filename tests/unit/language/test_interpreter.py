"""Tests for the SINGULARIS PRIME interpreter."""

import random

import pytest

from singularis.core.errors import ErrorCode, SingularisError
from singularis.language import SingularisInterpreter, parse_program, run_source
from singularis.language.ast import NamedArgument


class TestTranscript:
    def test_frame_lines(self, rng: random.Random) -> None:
        output = run_source("", rng=rng)
        assert output == [
            "Initializing Quantum Runtime v2.3.0...",
            "Loading quantum libraries...",
            "Program execution completed",
        ]

    def test_full_program(self, sample_program: str, rng: random.Random) -> None:
        output = run_source(sample_program, rng=rng)

        assert "Importing module: quantum/entanglement" in output
        assert "Loaded module quantum-entanglement v2.3.0" in output
        assert "Establishing quantum entanglement channel..." in output
        assert "Processing contract 'AIAgreement'..." in output
        assert "Verified required resource: qKey" in output
        assert "[INFO] Executing AIAgreement contract" in output
        assert "Deploying AI model to marsOrbit node..." in output
        assert "Monitoring audit trail for AI decisions..." in output
        assert "Fallback condition set: confidence < 0.9" in output
        assert "Setting adaptive latency compensation to maximum 20 minutes" in output
        assert "[SUCCESS] ZKP verification complete" in output
        assert output[-1] == "Program execution completed"

    def test_same_seed_same_transcript(self, sample_program: str) -> None:
        first = run_source(sample_program, rng=random.Random(7))
        second = run_source(sample_program, rng=random.Random(7))
        assert first == second

    def test_quantum_key_security_level(self, rng: random.Random) -> None:
        output = run_source("quantumKey k = entangle(a, b);", rng=rng)
        [line] = [line for line in output if line.startswith("Quantum key 'k'")]
        assert line.endswith("Quantum-Secure security") or line.endswith("Compromised security")

    def test_verification_score_is_a_percentage(self, rng: random.Random) -> None:
        output = run_source("deployModel M to edge { }", rng=rng)
        [line] = [line for line in output if "verification score" in line]
        percent = float(line.split(" with ")[1].split("%")[0])
        assert 90.0 <= percent <= 100.0

    def test_paradox_iterations_bounded(self, rng: random.Random) -> None:
        output = run_source("resolveParadox d using selfOptimizingLoop(max_iterations=5);", rng=rng)
        [line] = [line for line in output if line.startswith("Running self-optimizing loop")]
        done, limit = line.split("(")[1].split(" ")[0].split("/")
        assert limit == "5"
        assert 1 <= int(done) <= 5

    def test_unknown_import_warns(self, rng: random.Random) -> None:
        output = run_source('import "nope/x";', rng=rng)
        assert "[WARNING] Module not found: nope/x" in output

    def test_function_is_registered(self, rng: random.Random) -> None:
        interpreter = SingularisInterpreter(parse_program("function f(a, b) { }"), rng=rng)
        output = interpreter.execute()
        assert "Registered function f(a, b)" in output
        assert interpreter.environment["f"].name == "f"


class TestErrors:
    def test_missing_required_resource(self, rng: random.Random) -> None:
        with pytest.raises(SingularisError) as exc_info:
            run_source("contract C { require missingKey; }", rng=rng)
        assert exc_info.value.code == ErrorCode.RUNTIME_RESOURCE_NOT_FOUND
        assert "missingKey" in exc_info.value.message

    def test_non_numeric_threshold(self, rng: random.Random) -> None:
        with pytest.raises(SingularisError) as exc_info:
            run_source("contract C { enforce explainabilityThreshold(high); }", rng=rng)
        assert exc_info.value.code == ErrorCode.VALIDATION_INVALID_VALUE


class TestBuiltins:
    def test_explainability_threshold_stays_near_target(self, rng: random.Random) -> None:
        interpreter = SingularisInterpreter([], rng=rng)
        for _ in range(50):
            assert 0.8 <= interpreter.explainability_threshold(0.85) <= 0.9

    def test_explainability_threshold_is_clamped(self, rng: random.Random) -> None:
        interpreter = SingularisInterpreter([], rng=rng)
        assert interpreter.explainability_threshold(1.0) <= 1.0

    def test_consensus_protocol_epoch(self, rng: random.Random) -> None:
        interpreter = SingularisInterpreter([], rng=rng)
        result = interpreter.consensus_protocol((NamedArgument("epoch", "500"),))
        assert result == {"epoch": 500, "consensus": "achieved"}
