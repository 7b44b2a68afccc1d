import functools

import numpy as np
from scipy import integrate


@functools.cache
def lebedev(order: int) -> tuple[np.ndarray, np.ndarray]:
    """Lebedev quadrature on the unit sphere.

    Args:
        order: The degree of the rule. Spherical harmonics up to this degree
            are integrated exactly.

    Returns:
        points: Unit vectors, shape (n_angular, 3).
        weights: The weights, shape (n_angular,), summing to 4 pi.
    """
    x, w = integrate.lebedev_rule(order)

    points = np.ascontiguousarray(x.T, dtype=np.float64)
    weights = np.asarray(w, dtype=np.float64)
    weights = weights * (4.0 * np.pi / np.sum(weights))

    # The arrays are cached and shared by every atomic grid.
    points.flags.writeable = False
    weights.flags.writeable = False
    return points, weights
