import numpy as np

from pig_server.domain.pig_rules import MAX_FACE, MIN_FACE


class DiceRoller:
    """Fair six-sided die backed by a numpy Generator."""

    def __init__(self, seed: int | None = None):
        self.rng: np.random.Generator = np.random.default_rng(seed)

    def roll(self) -> int:
        # integers() excludes the upper bound
        return int(self.rng.integers(MIN_FACE, MAX_FACE + 1))
