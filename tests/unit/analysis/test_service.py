"""Tests for the heuristic code analysis service."""

import pytest

from singularis.analysis import CodeAnalysisService, evaluate_explainability
from singularis.analysis.service import (
    calculate_complexity,
    estimate_dimensions,
    estimate_entanglement_level,
    estimate_explainability,
    extract_ai_integration_points,
    extract_quantum_features,
    generate_improvement_suggestions,
    generate_local_documentation,
)
from singularis.core.errors import ErrorCode, SingularisError


@pytest.fixture
def service() -> CodeAnalysisService:
    return CodeAnalysisService()


class TestHeuristics:
    def test_empty_code(self) -> None:
        assert calculate_complexity("") == 0
        assert estimate_explainability("") == 0
        assert estimate_entanglement_level("") == 0

    @pytest.mark.parametrize(
        ("code", "expected"),
        [("dimension = 5", 5), ("dimensions: 12", 12), ("a 37D qudit", 37), ("qubit", 2)],
    )
    def test_dimensions(self, code: str, expected: int) -> None:
        assert estimate_dimensions(code) == expected

    def test_entanglement_counts_keywords(self) -> None:
        assert estimate_entanglement_level("entangle(a, b)\nentangle(c, d)") == pytest.approx(0.2)
        assert estimate_entanglement_level("entangle " * 20) == 1.0

    def test_commented_descriptive_code(self) -> None:
        assert estimate_explainability("// build it\ncreate(state)") == pytest.approx(1.0)

    def test_feature_tables(self) -> None:
        code = "apply superposition to each qubit; neural prediction"
        assert extract_quantum_features(code) == ["Superposition", "Qubits"]
        assert extract_ai_integration_points(code) == [
            "Neural Network Integration",
            "Prediction",
        ]

    def test_improvements_for_bare_code(self) -> None:
        assert generate_improvement_suggestions("x = 1") == [
            "Add more comments to improve explainability",
            "Implement error handling for quantum operations",
            "Add test cases for quantum operations",
            "Add assertions to validate input parameters",
            "Consider adding explainability metrics for quantum operations",
        ]

    def test_local_documentation(self) -> None:
        code = (
            "quantum module MagnetismTools {\n"
            "  // Flip every spin in the lattice\n"
            "  export function flipSpins(lattice: Lattice, axis) {\n"
            "  }\n"
            "  export function resetField() {\n"
            "  }\n"
            "}\n"
        )
        doc = generate_local_documentation(code)
        assert doc.startswith("# MagnetismTools Documentation")
        assert "quantum magnetism simulations" in doc
        assert "### flipSpins" in doc
        assert "Flip every spin in the lattice" in doc
        assert "- `lattice`: Parameter for the function" in doc
        assert "- `axis`: Parameter for the function" in doc
        assert "### resetField" in doc


class TestExplainability:
    def test_base_score(self) -> None:
        evaluation = evaluate_explainability("x")
        assert evaluation.score == 0.3
        assert evaluation.meets_threshold is False
        assert len(evaluation.factors) == 4

    def test_annotations_raise_score(self) -> None:
        evaluation = evaluate_explainability("@explain\nx", threshold=0.5)
        assert evaluation.score == 0.5
        assert evaluation.to_dict()["meetsThreshold"] is True

    def test_threshold_validated(self) -> None:
        with pytest.raises(SingularisError):
            evaluate_explainability("x", threshold=1.5)


class TestService:
    def test_sample_files(self, service: CodeAnalysisService) -> None:
        files = service.list_files()
        assert len(files) == 6
        assert service.list_files("all") == files
        [quantum] = service.list_files("quantum")
        assert quantum.id == "file-quantum"
        assert quantum.content.startswith("//")

    def test_unknown_type(self, service: CodeAnalysisService) -> None:
        with pytest.raises(SingularisError) as exc_info:
            service.list_files("cobol")
        assert exc_info.value.code == ErrorCode.VALIDATION_MISSING_FIELD

    def test_unknown_file(self, service: CodeAnalysisService) -> None:
        with pytest.raises(SingularisError) as exc_info:
            service.get_file("nope")
        assert exc_info.value.code == ErrorCode.RESOURCE_NOT_FOUND

    def test_analyze_file(self, service: CodeAnalysisService) -> None:
        result = service.analyze_file("file1")
        data = result.to_dict()
        assert data["file"]["type"] == "37d"
        assert result.dimensions == 37
        assert "Entanglement" in result.quantum_features
        assert 0 < result.complexity <= 1
        assert data["documentation"].startswith("# HighDimensionalQuantum Documentation")

    def test_analyze_code_without_file(self, service: CodeAnalysisService) -> None:
        assert "file" not in service.analyze_code("x").to_dict()

    def test_generate_code_defaults(self, service: CodeAnalysisService) -> None:
        code = service.generate_code("measure", dimensions=None, temperature=0)
        assert "measuring 37-dimensional quantum states" in code
        assert "noiseLevel: 0.50" in code

    def test_generate_unknown_operation(self, service: CodeAnalysisService) -> None:
        assert service.generate_code("teleport") == (
            "// Unknown operation type: teleport\n// Please specify a valid operation."
        )
