import dataclasses
import logging

import numpy as np

from molgrid.quadrature import angular
from molgrid.quadrature import fineness as fineness_lib
from molgrid.quadrature import radial
from molgrid.quadrature import radii
from molgrid.structure import atom as atom_lib

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class AtomicGrid:
    """The quadrature points of one atom before Becke partitioning."""

    atom_index: int

    # shape (n_radial * n_angular, 3)
    points: np.ndarray

    # Radial weight * angular weight * r^2 Jacobian.
    # shape (n_radial * n_angular,)
    weights: np.ndarray

    @property
    def n_points(self) -> int:
        return self.points.shape[0]


def build(
    atom: atom_lib.Atom, atom_index: int, fineness: fineness_lib.Fineness
) -> AtomicGrid:
    """Builds the product radial x angular grid centered on an atom.

    Args:
        atom: The atom at the center of the grid.
        atom_index: The index of the atom in its molecule.
        fineness: The resolution of the quadratures.

    Returns:
        An AtomicGrid whose weights integrate functions over all of space
        with respect to the atom's center.
    """
    settings = fineness_lib.get_settings(fineness)
    n_radial = fineness_lib.radial_point_count(fineness, atom.number)

    r, w_r = radial.gauss_chebyshev(n_radial, radii.radial_scale(atom.number))
    directions, w_angular = angular.lebedev(settings.lebedev_order)

    # points: (n_radial, n_angular, 3)
    points = atom.position + r[:, None, None] * directions[None, :, :]

    # weights: (n_radial, n_angular)
    weights = w_r[:, None] * w_angular[None, :]

    logger.debug(
        "Atomic grid for atom %d (%s): %d radial x %d angular points",
        atom_index,
        atom.symbol,
        n_radial,
        directions.shape[0],
    )

    return AtomicGrid(
        atom_index=atom_index,
        points=points.reshape(-1, 3),
        weights=weights.reshape(-1),
    )
