from __future__ import annotations

from typing import List

import numpy as np

from analytics.models import SpectrumPoint


def sine_signal(n: int) -> np.ndarray:
    """sin(0), sin(1), ..., sin(n - 1) as a complex signal."""
    return np.sin(np.arange(n, dtype=np.float64)).astype(np.complex128)


def compute_spectrum(n: int) -> List[SpectrumPoint]:
    """Magnitude of each forward DFT bin of the fixed sine signal."""
    if n < 0:
        raise ValueError(f"spectrum size must be non-negative, got {n}")
    if n == 0:
        return []
    magnitudes = np.abs(np.fft.fft(sine_signal(n)))
    return [SpectrumPoint(x=float(i), y=float(mag)) for i, mag in enumerate(magnitudes)]
