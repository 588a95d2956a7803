"""Tests for the SINGULARIS PRIME parser."""

from hypothesis import HealthCheck, given, settings, strategies as st

from singularis.language.ast import (
    AIOptimizationDirective,
    Annotation,
    Condition,
    ContractDeclaration,
    DeployModelDeclaration,
    EnforceStatement,
    ExecuteStatement,
    FallbackStatement,
    FunctionCall,
    FunctionDeclaration,
    ImportDeclaration,
    NamedArgument,
    QuantumKeyDeclaration,
    RequireStatement,
    ResolveParadoxDeclaration,
    SyncLedgerDeclaration,
)
from singularis.language.parser import parse_arguments, parse_condition, parse_program


class TestDeclarations:
    def test_import(self) -> None:
        assert parse_program('import "quantum/entanglement";') == [
            ImportDeclaration(path="quantum/entanglement")
        ]

    def test_quantum_key(self) -> None:
        [node] = parse_program("quantumKey qKey = entangle(nodeA, nodeB);")
        assert node == QuantumKeyDeclaration(name="qKey", parameters=("nodeA", "nodeB"))

    def test_contract_body(self) -> None:
        code = """
        contract AIAgreement {
            require qKey;
            enforce explainabilityThreshold(0.85);
            execute consensusProtocol(epoch=500);
        }
        """
        [node] = parse_program(code)
        assert isinstance(node, ContractDeclaration)
        assert node.name == "AIAgreement"
        assert node.body == (
            RequireStatement(identifier="qKey"),
            EnforceStatement(FunctionCall("explainabilityThreshold", ("0.85",))),
            ExecuteStatement(FunctionCall("consensusProtocol", (NamedArgument("epoch", "500"),))),
        )

    def test_deploy_model(self) -> None:
        code = """
        deployModel MarsColonyAI to marsOrbit {
            monitorAuditTrail();
            fallbackToHuman if confidence < 0.9;
        }
        """
        [node] = parse_program(code)
        assert node == DeployModelDeclaration(
            name="MarsColonyAI",
            location="marsOrbit",
            body=(
                FunctionCall(name="monitorAuditTrail"),
                FallbackStatement(Condition("confidence", "<", "0.9")),
            ),
        )

    def test_sync_ledger(self) -> None:
        code = "syncLedger L { adaptiveLatency(max=20 min); validateZeroKnowledgeProofs(); }"
        [node] = parse_program(code)
        assert node == SyncLedgerDeclaration(
            name="L",
            body=(
                FunctionCall("adaptiveLatency", (NamedArgument("max", "20 min"),)),
                FunctionCall("validateZeroKnowledgeProofs"),
            ),
        )

    def test_resolve_paradox(self) -> None:
        [node] = parse_program(
            "resolveParadox quantumData using selfOptimizingLoop(max_iterations=500);"
        )
        assert node == ResolveParadoxDeclaration(
            data_name="quantumData",
            method=FunctionCall("selfOptimizingLoop", (NamedArgument("max_iterations", "500"),)),
        )

    def test_function_body_is_skipped(self) -> None:
        [node] = parse_program("function route(a, b) { if (a) { return b; } }")
        assert node == FunctionDeclaration(name="route", parameters=("a", "b"))

    def test_full_program(self, sample_program: str) -> None:
        types = [node.type for node in parse_program(sample_program)]
        assert types == [
            "ImportDeclaration",
            "QuantumKeyDeclaration",
            "ContractDeclaration",
            "DeployModelDeclaration",
            "SyncLedgerDeclaration",
            "ResolveParadoxDeclaration",
        ]


class TestAnnotations:
    def test_annotation_attaches_to_next_declaration(self) -> None:
        [node] = parse_program("@QuantumSecure\nquantumKey k = entangle(a, b);")
        assert node.annotations == (Annotation(name="QuantumSecure"),)

    def test_annotation_parameters(self) -> None:
        [node] = parse_program("@HumanAuditable(0.85)\ncontract C { }")
        assert node.annotations == (Annotation(name="HumanAuditable", parameters="0.85"),)

    def test_stacked_annotations_with_comment(self) -> None:
        code = "@QuantumSecure\n// audited\n@HumanAuditable(0.9)\ndeployModel M to edge { }"
        [node] = parse_program(code)
        assert [a.name for a in node.annotations] == ["QuantumSecure", "HumanAuditable"]

    def test_optimization_directive(self) -> None:
        [node] = parse_program("@optimize_for_fidelity\nfunction f() { }")
        assert node.annotations == (
            AIOptimizationDirective(directive="optimize_for_fidelity", line=1, column=1),
        )

    def test_dangling_annotation_is_dropped(self) -> None:
        assert parse_program("@QuantumSecure\nnothing here;") == []


class TestToDict:
    def test_annotations_omitted_when_empty(self) -> None:
        [node] = parse_program("quantumKey k = entangle(a, b);")
        assert node.to_dict() == {
            "type": "QuantumKeyDeclaration",
            "name": "k",
            "parameters": ["a", "b"],
        }

    def test_nested_nodes_are_camel_cased(self) -> None:
        [node] = parse_program("resolveParadox d using loop(x=1);")
        assert node.to_dict() == {
            "type": "ResolveParadoxDeclaration",
            "dataName": "d",
            "method": {
                "type": "FunctionCall",
                "name": "loop",
                "arguments": [{"name": "x", "value": "1"}],
            },
        }


class TestTolerance:
    def test_keywords_need_word_boundaries(self) -> None:
        assert parse_program("contractor = 1; quantumKeys = 2;") == []

    def test_comments_are_skipped(self) -> None:
        assert parse_program("// quantumKey k = entangle(a, b);") == []

    def test_missing_delimiters(self) -> None:
        [node] = parse_program("contract Open { require qKey")
        assert node == ContractDeclaration(name="Open", body=(RequireStatement("qKey"),))

    @settings(suppress_health_check=[HealthCheck.function_scoped_fixture], max_examples=200)
    @given(st.text())
    def test_never_raises(self, code: str) -> None:
        parse_program(code)


class TestHelpers:
    def test_parse_arguments(self) -> None:
        assert parse_arguments("a, b=2, , c") == ("a", NamedArgument("b", "2"), "c")

    def test_two_character_operators_first(self) -> None:
        assert parse_condition("risk >= 0.5") == Condition("risk", ">=", "0.5")
        assert parse_condition("x != y") == Condition("x", "!=", "y")

    def test_condition_without_operator(self) -> None:
        assert parse_condition(" flag ") == Condition(left="flag")
