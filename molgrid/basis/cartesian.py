import functools

import numpy as np
from scipy import special

import molgrid.types as types


@functools.cache
def _cartesian_powers(l: int) -> tuple[tuple[int, int, int], ...]:
    return tuple(
        (i, j, l - i - j)
        for i in range(l, -1, -1)
        for j in range(l - i, -1, -1)
    )


def generate_cartesian_powers(l: int) -> np.ndarray:
    """Generates the Cartesian powers for the given angular momentum.

    Returns:
        A numpy array of shape (M, 3) where M is the total number of
        triples (i, j, k) of non-negative integers satisfying:
        i + j + k = l.
        The triples are in descending lexicographic order, e.g. for l=1:
        x, y, z.
    """
    if l < 0:
        raise ValueError(f"Angular momentum must be non-negative. Got {l}.")

    return np.array(_cartesian_powers(l), dtype=np.int32)


def compute_normalization_constants(
    powers: types.StaticArray, a: types.Array
) -> np.ndarray:
    """Computes the inverse L^2 norms of primitive Cartesian Gaussians.

    For the primitive x^i y^j z^k e^(-a r^2) the squared norm factorizes
    into one-dimensional Gaussian moments:

    ||g||^2 = (pi / 2a)^(3/2) * prod_{n in (i,j,k)} (2n - 1)!! / (4a)^n

    Args:
        powers: A numpy array of shape (N, 3) containing the Cartesian
                powers (i, j, k) for each basis function.
        a: The exponents of the Gaussian primitives. Shape (K,)

    Returns:
        A numpy array of shape (N, K) containing the inverse L^2 norm of each
        primitive Gaussian basis function.
    """
    powers = np.asarray(powers)
    a = np.atleast_1d(np.asarray(a, dtype=np.float64))

    # (2n - 1)!! with the convention (-1)!! = 1.
    # double_factorials: (N, 3)
    double_factorials = special.factorial2(2 * powers - 1, exact=False)
    double_factorials = np.where(powers == 0, 1.0, double_factorials)

    # l: (N, 1)
    l = np.sum(powers, axis=-1, keepdims=True)

    # norm_sq: (N, K)
    norm_sq = (
        np.prod(double_factorials, axis=-1, keepdims=True)
        * (np.pi / (2.0 * a)) ** 1.5
        / (4.0 * a) ** l
    )
    return 1.0 / np.sqrt(norm_sq)
