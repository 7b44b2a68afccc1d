import numpy as np


def gauss_chebyshev(n: int, r_m: float) -> tuple[np.ndarray, np.ndarray]:
    r"""Radial quadrature on (0, inf) for volume integrals.

    Uses the Gauss-Chebyshev rule of the second kind on (-1, 1)

    x_i = cos(i pi / (n + 1)),  w_i = pi / (n + 1) sin^2(i pi / (n + 1))

    which integrates f(x) sqrt(1 - x^2), together with Becke's mapping
    r = r_m (1 + x) / (1 - x). The returned weights absorb the spherical
    volume element r^2, the derivative dr/dx and the 1 / sqrt(1 - x^2)
    factor, so that

    \int_0^inf f(r) r^2 dr ~= sum_i w_i f(r_i)

    Args:
        n: The number of radial points.
        r_m: The radius that is mapped to x = 0, in Bohr.

    Returns:
        r: The radial points in increasing order, shape (n,).
        w: The radial weights, shape (n,).
    """
    if n < 1:
        raise ValueError(f"The number of radial points must be >= 1. Got {n}")
    if r_m <= 0:
        raise ValueError(f"r_m must be positive. Got {r_m}")

    # Increasing x gives increasing r.
    t = np.arange(n, 0, -1) * np.pi / (n + 1)
    x = np.cos(t)

    r = r_m * (1.0 + x) / (1.0 - x)

    chebyshev_weights = np.pi / (n + 1) * np.sin(t) ** 2
    # r^2 dr/dx / sqrt(1 - x^2)
    jacobian = 2.0 * r_m**3 * np.sqrt((1.0 + x) ** 3 / (1.0 - x) ** 9)

    return r, chebyshev_weights * jacobian
