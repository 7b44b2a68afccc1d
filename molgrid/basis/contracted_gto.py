import dataclasses
import enum

from molgrid import types


class PrimitiveType(enum.Enum):
    """The type of primitive Gaussian function."""

    CARTESIAN = 1
    SPHERICAL = 2


@dataclasses.dataclass
class ContractedGTO:
    """A contracted Gaussian-type orbital (Contracted GTO).

    This represents a family of contracted Gaussian basis functions sharing
    one set of exponents. The center is supplied later by the atom that
    carries the shell.

    A contracted Gaussian basis function is defined as a linear combination of
    normalized primitive Gaussian functions with the same center but different
    exponents:

    psi(r) = sum_{d=1}^K c_d * N(alpha_d, l, m) Y(r; l, m) e^(-alpha_d * |r - A|^2)

    where:
    1. A = (A_x, A_y, A_z) is the center
    2. alpha_d = exponents[d] for 0 <= d < K
    3. c_d = coefficients[s, d] for some 0 <= s < num_shells
    4. Y(r; l, m) is an (unnormalized) Cartesian monomial with total degree
       l = angular_momentum[s]
    5. N(alpha, l, m) is the inverse of the L^2 norm of
       Y(r; l, m) e^(-alpha_d * |r - A|^2)
    """

    primitive_type: PrimitiveType

    # The angular momentum for each shell in this contracted GTO.
    # shape (N_shell,)
    angular_momentum: tuple[int, ...]

    # The exponents for the Gaussian primitives in this contracted GTO.
    # shape (K,)
    exponents: types.Array

    # The contraction coefficients for each shell in this contracted GTO.
    # shape (N_shell, K)
    coefficients: types.Array

    def __post_init__(self):
        types.promote_dataclass_fields(self)
        self.angular_momentum = tuple(int(l) for l in self.angular_momentum)

        if self.coefficients.ndim == 1:
            self.coefficients = self.coefficients[None, :]
        if self.coefficients.shape != (
            len(self.angular_momentum),
            self.exponents.shape[0],
        ):
            raise ValueError(
                "coefficients must have shape (n_shells, n_exponents). "
                f"Got {self.coefficients.shape} for "
                f"{len(self.angular_momentum)} shells and "
                f"{self.exponents.shape[0]} exponents."
            )
