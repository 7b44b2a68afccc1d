import functools

import numpy as np
import basis_set_exchange

from molgrid.basis import contracted_gto

_FUNCTION_TYPES = {
    "gto": contracted_gto.PrimitiveType.CARTESIAN,
    "gto_cartesian": contracted_gto.PrimitiveType.CARTESIAN,
    "gto_spherical": contracted_gto.PrimitiveType.SPHERICAL,
}


def _primitive_type(function_type: str) -> contracted_gto.PrimitiveType:
    try:
        return _FUNCTION_TYPES[function_type]
    except KeyError:
        raise ValueError(
            f"Unsupported basis function type {function_type!r}."
        ) from None


def _to_contracted_gto(shell: dict) -> contracted_gto.ContractedGTO:
    coefficients = np.array(shell["coefficients"], dtype=np.float64)

    # A general contraction lists one angular momentum for several rows.
    angular_momentum = list(shell["angular_momentum"])
    if len(angular_momentum) == 1:
        angular_momentum = angular_momentum * coefficients.shape[0]

    return contracted_gto.ContractedGTO(
        primitive_type=_primitive_type(shell["function_type"]),
        angular_momentum=tuple(angular_momentum),
        exponents=np.array(shell["exponents"], dtype=np.float64),
        coefficients=coefficients,
    )


@functools.cache
def _load_shells(
    basis_name: str, element: int
) -> tuple[contracted_gto.ContractedGTO, ...]:
    data = basis_set_exchange.get_basis(basis_name, elements=[element])
    shells = data["elements"][str(element)]["electron_shells"]
    return tuple(_to_contracted_gto(shell) for shell in shells)


def load(basis_name: str, element: int) -> list[contracted_gto.ContractedGTO]:
    """Loads contracted GTOs for a given element from the Basis Set Exchange.

    Results are cached per (basis_name, element), so atoms of the same
    element share their shells.
    """
    return list(_load_shells(basis_name.lower(), int(element)))
