"""Becke's fuzzy Voronoi partition of space among atoms.

A multicenter numerical integration scheme for polyatomic molecules
A. D. Becke, J. Chem. Phys. 88, 2547 (1988)

For atoms i, j at distances d_i, d_j from a point p the confocal elliptical
coordinate is

    mu_ij(p) = (d_i - d_j) / R_ij

The step function s(mu) = (1 - f_k(mu)) / 2, where f_k is the k-fold iterate
of f_1(mu) = (3 mu - mu^3) / 2, is 1 deep inside atom i's half of space and 0
deep inside atom j's half. The cell function of atom i is the product of
s(mu_ij) over j != i, and the partition weight of atom i is its cell function
divided by the sum of all cell functions. The sum is always positive: the
nearest atom m has mu_mj <= 0 for every j, so its cell function is at least
2^-(n_atoms - 1).
"""

import functools

import jax
from jax import numpy as jnp
import numpy as np

from molgrid import types

# Number of iterations of the smoothing polynomial.
BECKE_ITERATIONS = 3

# Number of grid points evaluated together by the vectorized kernels. Peak
# memory is proportional to POINT_BATCH_SIZE * n_atoms^2.
POINT_BATCH_SIZE = 1024


def smoothing_polynomial(mu: types.Array, k: int = BECKE_ITERATIONS) -> jax.Array:
    """The k-fold iterate f_k of f_1(mu) = (3 mu - mu^3) / 2.

    f_k maps [-1, 1] onto itself and fixes -1, 0 and 1.
    """
    f = jnp.asarray(mu)
    for _ in range(k):
        f = 1.5 * f - 0.5 * f**3
    return f


def cutoff(mu: types.Array, k: int = BECKE_ITERATIONS) -> jax.Array:
    """The step function s(mu) = (1 - f_k(mu)) / 2."""
    return 0.5 * (1.0 - smoothing_polynomial(mu, k))


def _inverse_distances(centers: jax.Array) -> jax.Array:
    # 1 / R_ij off the diagonal, 0 on it.
    # R: (n_atoms, n_atoms)
    R = jnp.linalg.norm(centers[:, None, :] - centers[None, :, :], axis=-1)
    eye = jnp.eye(centers.shape[0], dtype=bool)
    return jnp.where(eye, 0.0, 1.0 / jnp.where(eye, 1.0, R))


def _point_cell_functions(
    point: jax.Array, centers: jax.Array, inv_distances: jax.Array, k: int
) -> jax.Array:
    # d: (n_atoms,)
    d = jnp.linalg.norm(point - centers, axis=-1)

    # mu[i, j] = (d_i - d_j) / R_ij
    # mu: (n_atoms, n_atoms)
    mu = (d[:, None] - d[None, :]) * inv_distances

    # The diagonal is excluded from the product.
    n_atoms = centers.shape[0]
    s = jnp.where(jnp.eye(n_atoms, dtype=bool), 1.0, cutoff(mu, k))

    return jnp.prod(s, axis=-1)


@functools.partial(jax.jit, static_argnames=("k", "batch_size"))
def cell_functions(
    points: types.Array,
    centers: types.Array,
    k: int = BECKE_ITERATIONS,
    batch_size: int = POINT_BATCH_SIZE,
) -> jax.Array:
    """Computes the unnormalized Becke cell functions.

    Args:
        points: The grid points, shape (n_points, 3).
        centers: The atomic positions, shape (n_atoms, 3). No two centers
            may coincide.
        k: The number of smoothing polynomial iterations.
        batch_size: The number of points evaluated at once.

    Returns:
        cells[p, i] = prod_{j != i} s(mu_ij(p)), shape (n_points, n_atoms).
    """
    centers = jnp.asarray(centers)
    inv_distances = _inverse_distances(centers)

    return jax.lax.map(
        lambda point: _point_cell_functions(point, centers, inv_distances, k),
        jnp.asarray(points),
        batch_size=batch_size,
    )


@functools.partial(jax.jit, static_argnames=("k", "batch_size"))
def partition_weights(
    points: types.Array,
    centers: types.Array,
    k: int = BECKE_ITERATIONS,
    batch_size: int = POINT_BATCH_SIZE,
) -> jax.Array:
    """Computes the normalized Becke partition weights P_i(p).

    Returns:
        An array of shape (n_points, n_atoms) whose rows sum to 1.
    """
    cells = cell_functions(points, centers, k, batch_size)
    return cells / jnp.sum(cells, axis=-1, keepdims=True)


@functools.partial(jax.jit, static_argnames=("k", "batch_size"))
def _owner_partition(
    points: jax.Array,
    centers: jax.Array,
    owners: jax.Array,
    k: int,
    batch_size: int,
) -> jax.Array:
    inv_distances = _inverse_distances(centers)

    def owner_weight(args):
        point, owner = args
        cells = _point_cell_functions(point, centers, inv_distances, k)
        return cells[owner] / jnp.sum(cells)

    return jax.lax.map(owner_weight, (points, owners), batch_size=batch_size)


def atomic_partition(
    points: types.Array,
    centers: types.Array,
    owners: types.Array,
    k: int = BECKE_ITERATIONS,
    batch_size: int = POINT_BATCH_SIZE,
) -> np.ndarray:
    """Computes the weight factor of each point with respect to its own atom.

    Only P_owner(p) is kept for each point, so memory does not grow with
    n_points * n_atoms.

    Args:
        points: The grid points, shape (n_points, 3).
        centers: The atomic positions, shape (n_atoms, 3).
        owners: The index of the atom that generated each point,
            shape (n_points,).
        k: The number of smoothing polynomial iterations.
        batch_size: The number of points evaluated at once.

    Returns:
        P_{owners[p]}(p) for each point, shape (n_points,).
    """
    factors = _owner_partition(
        jnp.asarray(points),
        jnp.asarray(centers),
        jnp.asarray(owners),
        k,
        batch_size,
    )
    return np.asarray(factors)
