import dataclasses

import numpy as np

from molgrid import types
from molgrid.basis import contracted_gto
from molgrid.basis import cartesian


@dataclasses.dataclass
class BasisBlock:
    """A block representation of a contracted Gaussian-type orbital basis.

    This flattens the angular momentum shells into their individual Cartesian
    components and pre-multiplies them by normalization constants. Each
    Cartesian component is one basis function of the block.

    Note that N_cart is equal to the total number of Cartesian basis
    functions across all shells, i.e.
    N_cart = sum_{l=0}^{num_shells - 1} (angular_momentum[l] + 2 choose 2)
    """

    # shape (3,)
    center: types.Array

    # The common set of exponents for the Gaussian primitives in this block.
    # shape (K,)
    exponents: types.Array

    # The powers (i,j,k) for each Cartesian basis function in this block.
    # shape (N_cart, 3)
    cartesian_powers: types.StaticArray

    # A map from the Gaussian primitives to their normalized contraction
    # coefficients for each Cartesian basis function in this block.
    # shape (N_cart, K)
    contraction_matrix: types.Array

    @property
    def n_exponents(self) -> int:
        """The number of Gaussian primitives in this block."""
        return self.exponents.shape[0]

    @property
    def n_cart(self) -> int:
        """The number of Cartesian basis functions in this block."""
        return self.cartesian_powers.shape[0]

    @property
    def n_basis(self) -> int:
        """The number of basis functions in this block."""
        return self.n_cart

    def __post_init__(self):
        types.promote_dataclass_fields(self)


def build_basis_block(
    gto: contracted_gto.ContractedGTO, center: types.Array
) -> BasisBlock:
    """Builds a BasisBlock from a ContractedGTO at the given center."""
    if gto.primitive_type != contracted_gto.PrimitiveType.CARTESIAN:
        raise NotImplementedError(
            "Only Cartesian contracted GTOs are supported currently."
        )
    power_blocks = [
        cartesian.generate_cartesian_powers(l) for l in gto.angular_momentum
    ]
    power_block_sizes = np.array([powers.shape[0] for powers in power_blocks])

    cartesian_powers = np.vstack(power_blocks)

    # Each shell's coefficients are shared by all of its Cartesian components.
    contraction_matrix = np.repeat(
        gto.coefficients, power_block_sizes, axis=0
    )
    norm_factors = cartesian.compute_normalization_constants(
        cartesian_powers, gto.exponents
    )

    return BasisBlock(
        center=center,
        exponents=gto.exponents,
        cartesian_powers=cartesian_powers,
        contraction_matrix=norm_factors * contraction_matrix,
    )
