"""Pytest fixtures for Singularis tests."""

import logging
import random
from pathlib import Path

import pytest

from singularis.config import reset_config
from singularis.glyph import EXAMPLE_SPELL
from singularis.server.monitor import set_monitor

SAMPLE_PROGRAM = """\
import "quantum/entanglement";

@QuantumSecure
quantumKey qKey = entangle(nodeA, nodeB);

@HumanAuditable(0.85)
contract AIAgreement {
    require qKey;
    enforce explainabilityThreshold(0.85);
    execute consensusProtocol(epoch=500);
}

deployModel MarsColonyAI to marsOrbit {
    monitorAuditTrail();
    fallbackToHuman if confidence < 0.9;
}

syncLedger EarthMarsLedger {
    adaptiveLatency(max=20 min);
    validateZeroKnowledgeProofs();
}

resolveParadox quantumData using selfOptimizingLoop(max_iterations=500);
"""


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep user and project config files and SINGULARIS_* env out of tests."""
    import os

    for key in list(os.environ):
        if key.startswith("SINGULARIS_"):
            monkeypatch.delenv(key)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)
    reset_config()
    yield
    reset_config()
    set_monitor(None)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo configure_logging() calls made by CLI and logging tests."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def rng() -> random.Random:
    """Deterministic random generator."""
    return random.Random(1234)


@pytest.fixture
def sample_program() -> str:
    return SAMPLE_PROGRAM


@pytest.fixture
def example_spell() -> str:
    return EXAMPLE_SPELL
