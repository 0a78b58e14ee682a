# runtime/rng.py
from __future__ import annotations

from functools import cache
from zlib import crc32

import numpy as np


def _u32(x: int) -> int:
    return int(x & 0xFFFFFFFF)


def _crc32_u32(s: str) -> int:
    return _u32(crc32(s.encode("utf-8")))


class RNGRegistry:
    """
    Named, reproducible numpy Generators.
    Derivation path: [seed, crc32(run name), crc32(stream name)]
    """

    def __init__(self, seed: int, *, run: str = "netfrag"):
        self.seed = _u32(seed)
        self.run_tag = _crc32_u32(run)

    @cache
    def stream(self, name: str) -> np.random.Generator:
        ss = np.random.SeedSequence(entropy=[self.seed, self.run_tag, _crc32_u32(name)])
        return np.random.Generator(np.random.PCG64(ss))
