"""Shared random generator for the simulations.

Every stochastic function accepts an optional ``random.Random``. When it is
omitted the process-wide generator below is used, which can be seeded once at
startup from ``runtime.seed`` for reproducible sessions.
"""

import random

_shared = random.Random()


def get_rng(rng: random.Random | None = None) -> random.Random:
    """Return ``rng`` or the shared generator."""
    return _shared if rng is None else rng


def seed_shared_rng(seed: int | None) -> None:
    """Reseed the shared generator. ``None`` reseeds from system entropy."""
    _shared.seed(seed)
