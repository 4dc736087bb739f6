"""Type aliases shared across plotgen modules."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

import numpy as np

type ArrayLike3 = Sequence[float] | np.ndarray  # length-3 point or vector


class GraphMaker(Protocol):
    """Anything that can hand a block of plotting commands to ``Plot.add``."""

    def get_buffer(self) -> str: ...
