import numpy as np
import numpy.typing as npt

from molgrid.basis import basis_block


def evaluate(
    block: basis_block.BasisBlock, points: npt.ArrayLike
) -> npt.NDArray[np.float64]:
    """Evaluates the Cartesian basis functions of a block at the given points.

    With (x, y, z) measured from the block center, function n is
    x^i y^j z^l * sum_m c_nm exp(-a_m r^2) where (i, j, l) are its
    Cartesian powers.

    Args:
        block: The basis block to evaluate.
        points: The evaluation points, shape (..., 3).

    Returns:
        The basis function values, shape (..., n_basis).
    """
    # diff: (..., 3)
    diff = np.asarray(points, dtype=np.float64) - block.center
    r_sq = np.sum(diff * diff, axis=-1, keepdims=True)

    # radial: (..., n_basis)
    radial = np.exp(-r_sq * block.exponents) @ block.contraction_matrix.T

    # monomials: (..., n_basis)
    monomials = np.prod(diff[..., None, :] ** block.cartesian_powers, axis=-1)

    return radial * monomials
