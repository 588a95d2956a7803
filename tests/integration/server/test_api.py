"""HTTP API tests."""

import pytest
from fastapi.testclient import TestClient

from singularis import __version__
from singularis.server import create_app

BELL_GATES = [
    {"gate": "H", "targets": [0], "position": 0},
    {"gate": "CNOT", "targets": [1], "controls": [0], "position": 1},
]

SPACE = {"spaceId": "lab", "dimension": 3, "elements": ["point", "line", "plane"]}


class TestLanguage:
    def test_parse(self, client, sample_program):
        response = client.post("/api/parse", json={"code": sample_program})
        assert response.status_code == 200
        nodes = response.json()
        assert nodes[0] == {"type": "ImportDeclaration", "path": "quantum/entanglement"}
        assert nodes[1]["annotations"][0]["name"] == "QuantumSecure"

    def test_parse_requires_code(self, client):
        response = client.post("/api/parse", json={"code": "   "})
        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Code is required"
        assert body["error"]["code"] == 4001

    def test_execute(self, client, sample_program):
        response = client.post("/api/execute", json={"code": sample_program})
        assert response.status_code == 200
        output = response.json()["output"]
        assert output[0] == "Initializing Quantum Runtime v2.3.0..."
        assert output[-1] == "Program execution completed"

    def test_execute_runtime_error(self, client):
        response = client.post("/api/execute", json={"code": "contract C { require k; }"})
        assert response.status_code == 500
        assert response.json()["error"]["error_id"] == "SP-2002"

    def test_tokens(self, client):
        response = client.post("/api/language/tokens", json={"code": "syncLedger L"})
        assert [t["kind"] for t in response.json()["tokens"]] == ["keyword", "identifier"]

    def test_completions(self, client):
        response = client.get("/api/language/completions", params={"prefix": "sync"})
        [item] = response.json()["items"]
        assert item["label"] == "syncLedger"
        assert item["isSnippet"] is True

    def test_missing_body_field(self, client):
        assert client.post("/api/parse", json={}).status_code == 422


class TestQuantum:
    def test_entangle(self, client):
        response = client.post("/api/quantum/entangle", json={"nodeA": "earth", "nodeB": "mars"})
        assert response.status_code == 200
        data = response.json()
        assert data["nodeA"] == "earth"
        assert data["keyBits"] == 256

    def test_entangle_needs_two_nodes(self, client):
        response = client.post("/api/quantum/entangle", json={"nodeA": "earth"})
        assert response.status_code == 400
        assert response.json()["message"] == "Two nodes are required for entanglement"

    @pytest.mark.parametrize(("body", "raw_length"), [({}, 512), ({"bits": 8}, 16)])
    def test_qkd(self, client, body, raw_length):
        response = client.post("/api/quantum/qkd", json=body)
        assert response.json()["rawKeyLength"] == raw_length

    def test_qkd_zero_bits_rejected(self, client):
        response = client.post("/api/quantum/qkd", json={"bits": 0})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == 4001

    def test_qkd_bits_capped(self, client):
        response = client.post("/api/quantum/qkd", json={"bits": 10**9})
        assert response.status_code == 422

    def test_bell_state(self, client):
        data = client.post("/api/quantum/bell-state").json()
        assert data["measurement"] in ("00", "11")
        assert data["isEntangled"] is True

    def test_gate(self, client):
        response = client.post("/api/quantum/gate", json={"gate": "X", "inputState": "|0⟩"})
        assert response.json() == {"gate": "X", "inputState": "|0⟩", "outputState": "|1⟩"}

    def test_decoherence(self, client):
        response = client.post("/api/quantum/decoherence", json={"distanceKm": 0, "numQubits": 2})
        assert response.status_code == 200
        assert response.json()["estimatedCoherenceTime"] is None

    def test_zk_proof_unknown_system(self, client):
        response = client.post(
            "/api/quantum/zk-proof", json={"proofType": "magic", "statement": "x"}
        )
        assert response.status_code == 400

    def test_circuit_simulate(self, client):
        response = client.post(
            "/api/quantum/circuit/simulate",
            json={"gates": BELL_GATES, "options": {"explain": True}},
        )
        result = response.json()["result"]
        assert result["probabilities"] == {"00": 0.5, "11": 0.5}
        assert "Bell state" in result["explanation"]

    def test_circuit_simulate_empty(self, client):
        response = client.post("/api/quantum/circuit/simulate", json={"gates": []})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == 3003

    def test_circuit_optimize(self, client):
        response = client.post(
            "/api/quantum/circuit/optimize",
            json={"gates": BELL_GATES, "numQubits": 2, "optimization": {"goal": "fidelity"}},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["original"]["gates"] == 2
        assert data["optimized"]["gates"] == 5

    @pytest.mark.parametrize(("num_qubits", "status"), [(17, 422), (0, 400)])
    def test_circuit_optimize_register_size(self, client, num_qubits, status):
        response = client.post(
            "/api/quantum/circuit/optimize",
            json={"gates": BELL_GATES, "numQubits": num_qubits, "optimization": {"goal": "fidelity"}},
        )
        assert response.status_code == status

    def test_circuit_optimize_bad_goal(self, client):
        response = client.post(
            "/api/quantum/circuit/optimize",
            json={"gates": BELL_GATES, "optimization": {"goal": "speed"}},
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == 4002


class TestGeometry:
    def test_create_space(self, client):
        response = client.post("/api/quantum/geometry/create-space", json=SPACE)
        data = response.json()
        assert data["space"]["metric"] == "minkowski"
        assert data["creationResult"].startswith("Created 3D quantum geometric space 'lab'")

    def test_high_dimension_without_manifold(self, client):
        response = client.post(
            "/api/quantum/geometry/create-space", json={**SPACE, "dimension": 5}
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == 3001

    def test_embed_states(self, client):
        response = client.post(
            "/api/quantum/geometry/embed-states",
            json={**SPACE, "stateIds": ["psi"], "coordinateSets": [[1, 2, 3]]},
        )
        [embedding] = response.json()["embeddings"]
        assert embedding["stateId"] == "psi"

    def test_transform(self, client):
        response = client.post(
            "/api/quantum/geometry/transform",
            json={**SPACE, "transformationType": "scaling", "parameters": {"factor": 3}},
        )
        assert response.json()["energyDelta"] == pytest.approx(2.0)

    def test_entangle(self, client):
        response = client.post(
            "/api/quantum/geometry/entangle",
            json={**SPACE, "stateA": "a", "stateB": "b", "distance": 1},
        )
        assert response.json()["entanglementResult"]["success"] is True

    def test_invariants(self, client):
        response = client.post("/api/quantum/geometry/invariants", json=SPACE)
        names = [i["name"] for i in response.json()["invariants"]]
        assert names == ["euler-characteristic", "quantum-curvature", "topological-entropy"]


class TestDirectives:
    CODE = "// @optimize_for_depth\n// @use_method(heuristic)\nX(0)\n"

    def test_parse(self, client):
        response = client.post("/api/optimization/directives/parse", json={"code": self.CODE})
        assert response.json() == {
            "directives": [{"goal": "depth", "lineNumber": 1, "method": "heuristic"}]
        }

    def test_apply_from_header(self, client):
        response = client.post("/api/optimization/directives/apply", json={"code": self.CODE})
        data = response.json()
        assert "Optimized for depth using heuristic method" in data["explanation"]
        assert data["metrics"]["improvementPercentage"] == 35

    def test_apply_explicit(self, client):
        response = client.post(
            "/api/optimization/directives/apply",
            json={"code": "X(0)", "directives": [{"goal": "fidelity", "lineNumber": 4}]},
        )
        assert response.json()["explanation"] == (
            "Applied 1 optimization directives:\n- Optimized for fidelity using default method"
        )

    def test_suggest(self, client):
        response = client.post("/api/optimization/directives/suggest", json={"code": "CNOT(0, 1)"})
        assert response.json()["potential_improvements"] == {"depth": 25}


class TestAI:
    def test_negotiate_blocked(self, client):
        response = client.post(
            "/api/ai/negotiate",
            json={
                "initiator": {"id": "a", "name": "Atlas", "explainabilityScore": 0.2},
                "responder": {"id": "h", "name": "Hermes", "explainabilityScore": 0.4},
                "terms": {"objectives": ["x"]},
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is False
        assert data["explainabilityScore"] == pytest.approx(0.3)

    def test_governance(self, client):
        response = client.post(
            "/api/ai/governance/adapt",
            json={"currentModel": "orbital", "environmentalChanges": ["dust storm"]},
        )
        data = response.json()
        assert data["adaptedModel"] == "orbital_adapted"
        assert data["changes"] == ["Adapting to: dust storm"]

    def test_documentation(self, client, sample_program):
        response = client.post(
            "/api/documentation", json={"code": sample_program, "detailLevel": "basic"}
        )
        assert "5 key SINGULARIS constructs" in response.json()["documentation"]

    def test_documentation_requires_code(self, client):
        assert client.post("/api/documentation", json={"code": ""}).status_code == 400


class TestAnalysis:
    def test_analyze(self, client, sample_program):
        response = client.post("/api/analyze", json={"code": sample_program})
        analysis = response.json()["analysis"]
        assert "Entanglement" in analysis["quantumFeatures"]
        assert "documentation" in analysis

    def test_explainability(self, client):
        response = client.post("/api/evaluate/explainability", json={"code": "x", "threshold": 0.2})
        data = response.json()
        assert data["score"] == 0.3
        assert data["meetsThreshold"] is True

    def test_list_files(self, client):
        assert len(client.get("/api/code/analysis/files").json()["files"]) == 6
        [f] = client.get("/api/code/analysis/files", params={"type": "ai"}).json()["files"]
        assert f["id"] == "file4"

    def test_list_files_bad_type(self, client):
        response = client.get("/api/code/analysis/files", params={"type": "cobol"})
        assert response.status_code == 400

    def test_analyze_file(self, client):
        response = client.get("/api/code/analysis/analyze/file2")
        assert response.status_code == 200
        assert response.json()["file"]["name"] == "quantum-magnetism.sp"

    def test_analyze_missing_file(self, client):
        response = client.get("/api/code/analysis/analyze/nope")
        assert response.status_code == 404
        assert response.json()["message"] == "Code file not found: nope"

    def test_generate_code(self, client):
        response = client.post(
            "/api/code/analysis/generate-code", json={"operation": "entangle", "dimensions": 5}
        )
        assert "5" in response.json()["code"]


class TestGlyph:
    def test_parse(self, client, example_spell):
        data = client.post("/api/glyph/parse", json={"spell": example_spell}).json()
        assert data["spell"]["command"] == "BloomStellarConsole"
        assert data["uiConfig"]["theme"]["primaryColor"] == "amber"

    def test_verify(self, client):
        data = client.post("/api/glyph/verify", json={"spell": "🜁 Bare"}).json()
        assert data["valid"] is False

    def test_execute(self, client, example_spell):
        data = client.post("/api/glyph/execute", json={"spell": example_spell}).json()
        assert data["success"] is True
        assert data["executionCode"].startswith("# SINGULARIS PRIME Ritual Code")


class TestApp:
    def test_health(self, client):
        assert client.get("/api/health").json() == {
            "status": "healthy",
            "version": __version__,
            "monitorClients": 0,
        }

    def test_cors_in_dev_mode(self):
        with TestClient(create_app(dev_mode=True)) as client:
            response = client.options(
                "/api/health",
                headers={
                    "Origin": "http://localhost:5173",
                    "Access-Control-Request-Method": "GET",
                },
            )
        assert response.headers["access-control-allow-origin"] == "http://localhost:5173"

    def test_no_cors_by_default(self, client):
        response = client.get("/api/health", headers={"Origin": "http://localhost:5173"})
        assert "access-control-allow-origin" not in response.headers
