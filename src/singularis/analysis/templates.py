"""Code templates for ``CodeAnalysisService.generate_code``.

Each template takes the qudit dimension and a 0-1 "temperature" that steers
noise handling, error mitigation and entanglement pattern choices.
"""

from collections.abc import Callable


def _mitigation(temperature: float) -> str:
    return "zero_noise_extrapolation" if temperature < 0.3 else "dynamical_decoupling"


def _pattern(temperature: float) -> str:
    if temperature < 0.3:
        return "bell_like"
    if temperature < 0.7:
        return "ghz_like"
    return "cluster_like"


def unified_code(dimensions: int, temperature: float) -> str:
    t = f"{temperature:.2f}"
    anisotropy = "easy-axis" if temperature < 0.3 else "easy-plane"
    magnetic_type = "heisenberg" if temperature < 0.5 else "xy-model"
    return f"""\
// SINGULARIS PRIME Unified Quantum-Magnetism Module
// Generated code for {dimensions}-dimensional quantum states with magnetism

quantum module UnifiedQuantumMagnetism {{
  /**
   * Create a unified quantum state with both high-dimensional and magnetic properties
   * @param dimensions Number of dimensions in the quantum state
   * @return Unified quantum state
   */
  export function createUnifiedQuantumState(dimensions = {dimensions}, magneticProperties = {{}}) {{
    const quantumState = createQuantumState(dimensions);
    applyTemperatureEffects(quantumState, {t});

    return attachMagneticProperties(quantumState, {{
      type: "heisenberg",
      couplingStrength: 1.0 - {t} * 0.5,
      anisotropy: "{anisotropy}"
    }});
  }}

  /**
   * Run a simulation of the unified quantum-magnetic system
   * @return Simulation results
   */
  export function runUnifiedSimulation(initialState = null, params = {{}}) {{
    const state = initialState || createUnifiedQuantumState({dimensions});
    const hamiltonian = createUnifiedHamiltonian({dimensions}, {{
      temperature: {t},
      magneticType: "{magnetic_type}",
      externalField: [0, 0, {t}]
    }});

    const result = evolveQuantumState(state, hamiltonian, {{
      timeSteps: 1000,
      errorMitigation: "{_mitigation(temperature)}",
      temperature: {t}
    }});

    return {{
      dimensions: {dimensions},
      state: result.finalState,
      observables: {{
        magnetization: calculateMagnetization(result.finalState),
        entanglementEntropy: calculateEntanglementEntropy(result.finalState)
      }},
      errorEstimate: {t} * 0.1
    }};
  }}

  /**
   * Create entangled states within the unified framework
   * @param count Number of states to entangle
   */
  export function createEntangledUnifiedStates(count = 2) {{
    const states = [];
    for (let i = 0; i < count; i++) {{
      states.push(createUnifiedQuantumState({dimensions}));
    }}
    return entangleMultipleStates(states, {{
      pattern: "{_pattern(temperature)}",
      strength: 1.0 - {t} * 0.2
    }});
  }}
}}
"""


def magnetism_code(dimensions: int, temperature: float) -> str:
    t = f"{temperature:.2f}"
    return f"""\
// SINGULARIS PRIME Quantum Magnetism Module
// Generated code for quantum magnetism simulation with {dimensions}-dimensional states

quantum module QuantumMagnetism {{
  /**
   * Create a magnetic Hamiltonian for simulation
   * @param type Type of magnetic interaction
   * @param latticeSize Number of lattice sites
   */
  export function createMagneticHamiltonian(type = "heisenberg", latticeSize = 16) {{
    const hamiltonian = createHamiltonian(latticeSize, {{ siteDimension: {dimensions} }});
    const couplingJ = 1.0 - {t} * 0.3;

    switch (type) {{
      case "heisenberg": addHeisenbergTerms(hamiltonian, couplingJ); break;
      case "ising": addIsingTerms(hamiltonian, couplingJ); break;
      case "xy": addXYTerms(hamiltonian, couplingJ, {t}); break;
    }}
    return hamiltonian;
  }}

  /**
   * Simulate the magnetic system at the configured temperature
   */
  export function simulateMagneticSystem(hamiltonian, timeSteps = 1000) {{
    const initialState = createThermalState(hamiltonian, {t});
    return evolveQuantumState(initialState, hamiltonian, {{
      timeSteps: timeSteps,
      errorMitigation: "{_mitigation(temperature)}"
    }});
  }}

  /**
   * Calculate magnetization, susceptibility and correlation length
   */
  export function calculateMagneticObservables(result) {{
    return {{
      magnetization: calculateMagnetization(result.finalState),
      susceptibility: calculateSusceptibility(result, {t}),
      correlationLength: calculateCorrelationLength(result)
    }};
  }}
}}
"""


def qudit_creation_code(dimensions: int, temperature: float) -> str:
    t = f"{temperature:.2f}"
    measurement_mitigation = (
        "zero_noise_extrapolation" if temperature < 0.5 else "measurement_error_mitigation"
    )
    return f"""\
// SINGULARIS PRIME Qudit Creation Module
// Generated code for creating {dimensions}-dimensional quantum states

quantum module HighDimensionalQuantum {{
  /**
   * Create a {dimensions}-dimensional quantum state (qudit)
   * @param initialValues Optional initial amplitude values
   * @return {dimensions}-dimensional quantum state
   */
  export function create{dimensions}DQudit(initialValues = null, phaseValues = null) {{
    const qudit = createQuantumState({dimensions});

    if (initialValues && initialValues.length === {dimensions}) {{
      qudit.amplitudes = normalizeAmplitudes(initialValues);
    }} else {{
      const equalAmp = 1.0 / Math.sqrt({dimensions});
      qudit.amplitudes = Array({dimensions}).fill(equalAmp);
    }}

    qudit.phases = phaseValues || generateOptimalPhasePattern({dimensions}, {t});
    if ({t} > 0) {{
      applyThermalNoise(qudit, {t});
    }}
    return qudit;
  }}

  /**
   * Measure a {dimensions}-dimensional quantum state
   * @param basis Measurement basis
   */
  export function measure{dimensions}DQudit(qudit, basis = "computational", repetitions = 1000) {{
    if (qudit.dimensions !== {dimensions}) {{
      throw new Error("Expected {dimensions}-dimensional qudit");
    }}
    return measureRepeatedly(qudit, {{
      basis: basis,
      repetitions: repetitions,
      errorMitigation: "{measurement_mitigation}"
    }});
  }}
}}
"""


def entanglement_code(dimensions: int, temperature: float) -> str:
    t = f"{temperature:.2f}"
    return f"""\
// SINGULARIS PRIME Quantum Entanglement Module
// Generated code for entangling {dimensions}-dimensional quantum states

quantum module QuantumEntanglement {{
  /**
   * Create entangled {dimensions}-dimensional quantum states
   * @param entanglementType Type of entanglement to create
   * @param count Number of states to entangle
   */
  export function createEntangledStates(entanglementType = "{_pattern(temperature)}", count = 2) {{
    const states = [];
    for (let i = 0; i < count; i++) {{
      states.push(createQuantumState({dimensions}));
    }}
    return entangleMultipleStates(states, {{
      pattern: entanglementType,
      fidelity: 1.0 - {t} * 0.1
    }});
  }}

  /**
   * Measure the entanglement entropy between two subsystems
   */
  export function measureEntanglement(entangledSystem) {{
    const entropy = calculateEntanglementEntropy(entangledSystem);
    return {{
      entropy: entropy,
      maximalEntropy: Math.log2({dimensions}),
      normalized: entropy / Math.log2({dimensions})
    }};
  }}

  /**
   * Purify noisy entanglement
   */
  export function purifyEntanglement(entangledSystem, rounds = {max(1, round(temperature * 5))}) {{
    for (let i = 0; i < rounds; i++) {{
      entangledSystem = applyPurificationRound(entangledSystem);
    }}
    return entangledSystem;
  }}
}}
"""


def measurement_code(dimensions: int, temperature: float) -> str:
    t = f"{temperature:.2f}"
    return f"""\
// SINGULARIS PRIME Quantum Measurement Module
// Generated code for measuring {dimensions}-dimensional quantum states

quantum module QuantumMeasurement {{
  /**
   * Perform projective measurement on a {dimensions}-dimensional quantum state
   * @param qudit The quantum state to measure
   * @param basis Measurement basis
   */
  export function projectiveMeasurement(qudit, basis = "computational") {{
    const probabilities = calculateProbabilities(qudit, basis);
    const outcome = sampleOutcome(probabilities);
    return {{ outcome: outcome, probability: probabilities[outcome], basis: basis }};
  }}

  /**
   * Perform a weak measurement with the given coupling strength
   */
  export function weakMeasurement(qudit, strength = {1.0 - temperature * 0.5:.2f}) {{
    const pointer = createPointerState({dimensions});
    const coupled = coupleWeakly(qudit, pointer, strength);
    return readPointer(coupled);
  }}

  /**
   * Run quantum state tomography over {dimensions} bases
   */
  export function stateTomography(preparation, shots = 1000) {{
    const results = [];
    for (let basis = 0; basis < {dimensions}; basis++) {{
      results.push(measureRepeatedly(preparation(), {{ basis: basis, repetitions: shots }}));
    }}
    return reconstructDensityMatrix(results, {{ noiseLevel: {t} }});
  }}
}}
"""


def transformation_code(dimensions: int, temperature: float) -> str:
    t = f"{temperature:.2f}"
    return f"""\
// SINGULARIS PRIME Quantum Transformation Module
// Generated code for transforming {dimensions}-dimensional quantum states

quantum module QuantumTransformation {{
  /**
   * Apply unitary transformation to a {dimensions}-dimensional quantum state
   * @param qudit The quantum state to transform
   * @param unitary The {dimensions}x{dimensions} unitary matrix
   */
  export function applyUnitary(qudit, unitary) {{
    if (!isUnitary(unitary, {{ tolerance: 1e-6 }})) {{
      throw new Error("Transformation matrix must be unitary");
    }}
    return multiplyState(unitary, qudit);
  }}

  /**
   * Apply the generalized Fourier transform
   */
  export function quantumFourierTransform(qudit) {{
    return applyUnitary(qudit, createFourierMatrix({dimensions}));
  }}

  /**
   * Apply a generalized phase rotation
   */
  export function phaseRotation(qudit, angle = Math.PI / {dimensions}) {{
    const noisyAngle = angle * (1 + {t} * 0.05);
    return applyUnitary(qudit, createPhaseMatrix({dimensions}, noisyAngle));
  }}
}}
"""


GENERATORS: dict[str, Callable[[int, float], str]] = {
    "unified": unified_code,
    "magnetism": magnetism_code,
    "create_qudit": qudit_creation_code,
    "entangle": entanglement_code,
    "measure": measurement_code,
    "transform": transformation_code,
}
