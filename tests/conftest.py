import numpy as np


class ScriptedRng:
    """Stand-in for numpy's Generator that replays fixed draws."""

    def __init__(self, randoms=(), uniforms=(), integers=()):
        self._randoms = list(randoms)
        self._uniforms = list(uniforms)
        self._integers = list(integers)

    def random(self):
        return self._randoms.pop(0)

    def uniform(self, low=0.0, high=1.0, size=None):
        v = self._uniforms.pop(0)
        return v if size is None else np.full(size, v, dtype=float)

    def integers(self, n):
        return self._integers.pop(0)

    def shuffle(self, x):
        pass
