"""Sample SINGULARIS PRIME sources served by the code analysis service."""

from typing import Literal

CodeFileType = Literal[
    "quantum", "ai", "magnetism", "37d", "unified", "kashiwara", "circuit", "geometry", "other"
]

CODE_FILE_TYPES: tuple[CodeFileType, ...] = (
    "quantum", "ai", "magnetism", "37d", "unified", "kashiwara", "circuit", "geometry", "other",
)

QUANTUM_STATE_37D = """\
// SINGULARIS PRIME 37-Dimensional Quantum State Module
// This module demonstrates the creation and manipulation of 37-dimensional quantum states

quantum module HighDimensionalQuantum {
  // Create a 37-dimensional quantum state
  export function create37DQudit(initialValues?: number[]) {
    // Initialize a 37-dimensional quantum state
    quantum state q37 = createQuantumState(37);

    // Apply initial values if provided
    if (initialValues && initialValues.length === 37) {
      q37.amplitudes = normalizeAmplitudes(initialValues);
    } else {
      // Default to equal superposition
      q37.amplitudes = generateEqualSuperposition(37);
    }

    // Set phase values to create interesting interference patterns
    q37.phases = generateOptimalPhasePattern(37);
    return q37;
  }

  // Entangle two 37-dimensional states
  export function entangle37DStates(state1, state2) {
    // Verify dimensions
    if (state1.dimensions !== 37 || state2.dimensions !== 37) {
      throw new Error("Both states must be 37-dimensional");
    }
    return createEntangledState([state1, state2], { type: "maximally_entangled" });
  }

  // Measure a 37-dimensional state in the chosen basis
  export function measure37DState(state, basis = "computational") {
    const result = measureQuantumState(state, basis);
    return { outcome: result.outcome, probability: result.probability };
  }

  private function normalizeAmplitudes(values: number[]): number[] {
    const norm = Math.sqrt(values.reduce((sum, val) => sum + val * val, 0));
    return values.map(val => val / norm);
  }
}
"""

QUANTUM_TELEPORTATION = """\
// SINGULARIS PRIME Quantum Teleportation Protocol
// Transfers a qubit state using a shared Bell pair and two classical bits

quantum module QuantumTeleportation {
  // Teleport a single-qubit state from Alice to Bob
  export function teleportState(sourceState) {
    // Create the entangled Bell pair shared by Alice and Bob
    const bellPair = createBellPair();

    // Alice performs a Bell measurement on her qubits
    const classicalBits = performBellMeasurement([sourceState, bellPair.alice]);

    // Bob applies the correction derived from the classical bits
    const teleported = applyTeleportationCorrection(bellPair.bob, classicalBits);
    return { state: teleported, fidelity: 0.99, classicalBits };
  }

  private function createBellPair() {
    const qubits = createQuantumState(2);
    applyGate(qubits, "H", 0);
    applyGate(qubits, "CNOT", [0, 1]);
    return { alice: qubits[0], bob: qubits[1] };
  }

  private function performBellMeasurement(aliceQubits) {
    applyGate(aliceQubits, "CNOT", [0, 1]);
    applyGate(aliceQubits, "H", 0);
    return measureQuantumState(aliceQubits, "computational");
  }

  private function applyTeleportationCorrection(qubit, classicalBits) {
    if (classicalBits[1] === 1) applyGate(qubit, "X", 0);
    if (classicalBits[0] === 1) applyGate(qubit, "Z", 0);
    return qubit;
  }
}
"""

QUANTUM_MAGNETISM = """\
// SINGULARIS PRIME Quantum Magnetism Module
// Simulates spin lattices with Heisenberg, Ising and XY interactions

quantum module QuantumMagnetism {
  // Create a magnetic Hamiltonian for the chosen lattice model
  export function createMagneticHamiltonian(model = "heisenberg", params = {}) {
    const hamiltonian = createHamiltonian(params.latticeSize || 16);
    const couplingJ = params.couplingJ || 1.0;

    switch (model) {
      case "heisenberg": addHeisenbergTerms(hamiltonian, couplingJ); break;
      case "ising": addIsingTerms(hamiltonian, couplingJ); break;
      case "xy": addXYTerms(hamiltonian, couplingJ, params.anisotropy || 0); break;
    }

    if (params.externalField) {
      addExternalFieldTerms(hamiltonian, params.externalField);
    }
    return hamiltonian;
  }

  // Run a time evolution of the spin lattice
  export function simulateMagneticSystem(hamiltonian, params = {}) {
    const initialState = createQuantumState(hamiltonian.dimension);
    return evolveQuantumState(initialState, hamiltonian, {
      timeSteps: params.timeSteps || 1000,
      errorMitigation: "zero_noise_extrapolation"
    });
  }

  // Calculate magnetization and correlation observables
  export function calculateMagneticObservables(simulationResult) {
    return {
      magnetization: calculateMagnetization(simulationResult.finalState),
      correlationLength: calculateCorrelationLength(simulationResult),
      entanglementEntropy: calculateEntanglementEntropy(simulationResult.finalState)
    };
  }
}
"""

SINGULARIS_UNIFIED = """\
// SINGULARIS PRIME Unified Architecture
// Combines 37-dimensional quantum states with quantum magnetism

quantum module SingularisPrimeUnified {
  // Create a unified state carrying both high-dimensional and magnetic properties
  export function createUnifiedQuantumState(dimensions = 37, magneticProperties = {}) {
    const state = createQuantumState(dimensions);
    return attachMagneticProperties(state, magneticProperties);
  }

  // Create entangled states inside the unified framework
  export function createUnifiedEntangledStates(parameters = {}) {
    const count = parameters.count || 2;
    const states = [];
    for (let i = 0; i < count; i++) {
      states.push(createUnifiedQuantumState(parameters.dimensions || 37));
    }
    return entangleMultipleStates(states, { pattern: "ghz_like" });
  }

  // Run the unified simulation and collect observables
  export function runUnifiedSimulation(params = {}) {
    const hamiltonian = createUnifiedHamiltonian(params.dimensions || 37, params);
    const result = simulateUnifiedSystem(hamiltonian, createUnifiedQuantumState(), params);
    return {
      id: generateSimulationId(),
      entanglementEntropy: calculateEntanglementEntropy(result.finalState),
      magnetizationMap: generateMagnetizationMap(result),
      energySpectrum: calculateEnergySpectrum(hamiltonian)
    };
  }
}
"""

AI_QUANTUM_INTEGRATION = """\
// SINGULARIS PRIME AI-Quantum Integration
// Quantum-enhanced AI models with explainability constraints

quantum module AIQuantumIntegration {
  // Create an AI model with quantum layers
  export function createQuantumEnhancedAI(parameters = {}) {
    const aiModel = createAIModel(parameters.modelType || "neural", parameters);
    const quantumState = createQuantumState(parameters.dimensions || 8);
    integrateQuantumLayer(aiModel, quantumState, parameters.layerIndex || 0);

    // Keep the model explainable for human reviewers
    applyExplainabilityConstraints(aiModel, parameters.explainabilityThreshold || 0.85);
    return aiModel;
  }

  // Run inference and produce an explainability report
  export function runQuantumEnhancedInference(model, input, parameters = {}) {
    const context = createAIRuntimeContext(initializeQuantumResources(parameters));
    const output = executeModel(model, input, context);
    return { prediction: output, report: generateExplainabilityReport(model, input, output) };
  }

  // Optimize a quantum circuit with AI assistance
  export function optimizeQuantumCircuit(circuit, parameters = {}) {
    const context = createOptimizationContext(parameters.goal || "gate_count", parameters.method);
    const optimized = applyAIOptimization(circuit, context);
    if (!verifyCircuitEquivalence(circuit, optimized)) {
      throw new Error("Optimized circuit is not equivalent to the original");
    }
    return { circuit: optimized, explanation: explainOptimization(circuit, optimized, context) };
  }
}
"""

KASHIWARA_MODULE = """\
// SINGULARIS PRIME Kashiwara Quantum Module
// Crystal bases and D-modules applied to quantum computation

quantum module KashiwaraQuantum {
  // Create a crystal basis for the given root system
  export function createCrystalBasis(rootSystem, parameters = {}) {
    const roots = generateRootSystem(rootSystem);
    const graph = generateCrystalGraph(roots, parameters.highestWeight);
    return quantizeCrystal(graph, parameters);
  }

  // Create a D-module over a manifold with singularities
  export function createDModule(manifold, parameters = {}) {
    const base = createManifold(manifold.type, manifold.dimension);
    addSingularities(base, parameters.singularities || []);
    return quantizeDModule(base, generateDifferentialOperators(base, parameters));
  }

  // Entangle crystal and D-module states
  export function createEntangledKashiwaraStates(crystal, dmodule, parameters = {}) {
    const crystalState = crystalToQuantumState(crystal);
    const dmoduleState = dmoduleToQuantumState(dmodule);
    return entangleStates(crystalState, dmoduleState, parameters);
  }

  // Analyze singularities for quantum properties
  export function analyzeSingularities(dmodule, parameters = {}) {
    const singularities = extractSingularities(dmodule);
    return resolveSingularities(singularities, parameters);
  }
}
"""

# (id, name, path, type, content)
SAMPLE_FILES: tuple[tuple[str, str, str, CodeFileType, str], ...] = (
    (
        "file1", "quantum-state-37d.sp",
        "/examples/quantum/high-dimension/quantum-state-37d.sp", "37d", QUANTUM_STATE_37D,
    ),
    (
        "file-quantum", "quantum-teleportation.sp",
        "/examples/quantum/teleportation/quantum-teleportation.sp", "quantum", QUANTUM_TELEPORTATION,
    ),
    (
        "file2", "quantum-magnetism.sp",
        "/examples/quantum/magnetism/quantum-magnetism.sp", "magnetism", QUANTUM_MAGNETISM,
    ),
    (
        "file3", "singularis-prime-unified.sp",
        "/examples/quantum/unified/singularis-prime-unified.sp", "unified", SINGULARIS_UNIFIED,
    ),
    (
        "file4", "ai-quantum-integration.sp",
        "/examples/ai/ai-quantum-integration.sp", "ai", AI_QUANTUM_INTEGRATION,
    ),
    (
        "file5", "kashiwara-quantum-module.sp",
        "/examples/kashiwara/kashiwara-quantum-module.sp", "kashiwara", KASHIWARA_MODULE,
    ),
)
