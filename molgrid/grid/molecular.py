"""The molecular integration grid.

Real-space quantities that have no closed form in the Gaussian basis, such as
integrals of the electron density, are evaluated by numerical quadrature over
a set of grid points. The grid is the union of one radial x angular grid per
atom, with every point's weight multiplied by the Becke partition weight of
its atom:

A multicenter numerical integration scheme for polyatomic molecules
A. D. Becke, J. Chem. Phys. 88, 2547 (1988)
"""

from collections.abc import Iterator
import logging

import numpy as np
import numpy.typing as npt

from molgrid.grid import atomic
from molgrid.grid import becke
from molgrid.grid import point as point_lib
from molgrid.quadrature import fineness as fineness_lib
from molgrid.structure import molecular_basis
from molgrid.structure import molecule as molecule_lib
from molgrid.structure import real_space

logger = logging.getLogger(__name__)


class MolecularGrid:
    """Set of weighted grid points for numerical integration over a molecule.

    The grid holds a reference to the molecule it was built from. The atoms
    are read, never modified, and the number and positions of the points are
    fixed once the grid is created. Only the weights, basis function
    amplitudes and densities of the points change afterwards.
    """

    def __init__(
        self,
        molecule: molecule_lib.Molecule,
        fineness: fineness_lib.Fineness = fineness_lib.Fineness.MEDIUM,
    ) -> None:
        self.molecule = molecule
        self.basis = molecular_basis.build(molecule)
        self.fineness = fineness
        self.create_grid(fineness)

    def create_grid(self, fineness: fineness_lib.Fineness) -> None:
        """Creates the grid points and their weights.

        An atomic grid is built around every atom. The Becke weights of each
        point depend on the positions of all atoms, so they are applied only
        after every atomic grid exists.

        This runs once, at construction. The points of a grid are fixed after
        that, so a second call raises.

        Raises:
            RuntimeError: If the grid has already been created.
        """
        if hasattr(self, "_arrays"):
            raise RuntimeError(
                "The grid points have already been created. "
                "Build a new MolecularGrid to change the fineness."
            )

        atoms = self.molecule.atoms
        if not atoms:
            raise ValueError("Cannot build a grid for a molecule without atoms.")

        atomic_grids = [
            atomic.build(atom, index, fineness)
            for index, atom in enumerate(atoms)
        ]

        arrays = point_lib.GridArrays.allocate(
            atoms=atoms,
            positions=np.concatenate([g.points for g in atomic_grids]),
            atom_indices=np.concatenate(
                [np.full(g.n_points, g.atom_index) for g in atomic_grids]
            ),
            weights=np.concatenate([g.weights for g in atomic_grids]),
            n_basis=self.basis.n_basis,
        )

        logger.debug(
            "Computing Becke weights for %d points around %d atoms",
            arrays.n_points,
            len(atoms),
        )
        arrays.weights *= becke.atomic_partition(
            arrays.positions, self.molecule.coordinates, arrays.atom_indices
        )

        self.fineness = fineness
        self._arrays = arrays
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "Created %s grid with %d points, total weight %.6e",
                fineness.name,
                arrays.n_points,
                float(np.sum(arrays.weights)),
            )

    def __len__(self) -> int:
        return self._arrays.n_points

    def __getitem__(self, index: int) -> point_lib.GridPoint:
        if index < 0:
            index += len(self)
        return point_lib.GridPoint(self._arrays, index)

    def __iter__(self) -> Iterator[point_lib.GridPoint]:
        for index in range(len(self)):
            yield point_lib.GridPoint(self._arrays, index)

    @property
    def points(self) -> np.ndarray:
        """The positions of all grid points, shape (n_points, 3). Read-only."""
        return self._arrays.positions

    @property
    def atom_indices(self) -> np.ndarray:
        """The owning atom of each point, shape (n_points,). Read-only."""
        return self._arrays.atom_indices

    def set_basis_func_amp(self) -> None:
        """Evaluates all basis functions at all grid points."""
        self._arrays.amplitudes[:] = real_space.evaluate(
            self.basis, self._arrays.positions
        )

    def set_density(self, P: npt.ArrayLike) -> None:
        """Sets the density at every grid point from a density matrix.

        The basis function amplitudes are recomputed and the local density
        is rho(r) = phi(r) @ P @ phi(r).T

        Args:
            P: The density matrix, shape (n_basis, n_basis).
        """
        P = np.asarray(P, dtype=np.float64)
        n_basis = self.basis.n_basis
        if P.shape != (n_basis, n_basis):
            raise ValueError(
                f"Density matrix must have shape ({n_basis}, {n_basis}). "
                f"Got {P.shape}"
            )

        self.set_basis_func_amp()

        # phi: (n_points, n_basis)
        phi = self._arrays.amplitudes
        self._arrays.densities[:] = np.sum(np.matmul(phi, P) * phi, axis=-1)

    def integrate(self, values: npt.ArrayLike) -> float:
        """Integrates per-point values of a function over all of space.

        Args:
            values: The function evaluated at each grid point,
                shape (n_points,).
        """
        values = np.asarray(values, dtype=np.float64)
        if values.shape != (len(self),):
            raise ValueError(
                f"Expected values of shape ({len(self)},). Got {values.shape}"
            )
        return float(np.dot(self._arrays.weights, values))

    def calculate_density(self) -> float:
        """Calculates the total number of electrons.

        Returns:
            The sum over all points of weight * density.
        """
        return self.integrate(self._arrays.densities)

    def scale_density(self, nr_elec: float) -> None:
        """Rescales the densities so that they integrate to nr_elec.

        This corrects the quadrature error of the integrated electron count.
        Ratios between the densities of different points are unchanged.
        """
        total = self.calculate_density()
        if total == 0.0:
            raise ValueError(
                "The density integrates to zero and cannot be rescaled. "
                "Call set_density first."
            )
        self._arrays.densities *= nr_elec / total

    def get_weights(self) -> np.ndarray:
        """The weights of all grid points, shape (n_points,)."""
        return self._arrays.weights.copy()

    def get_densities(self) -> np.ndarray:
        """The densities of all grid points, shape (n_points,)."""
        return self._arrays.densities.copy()

    def get_amplitudes(self) -> np.ndarray:
        """The basis function amplitudes, shape (n_basis, n_points)."""
        return self._arrays.amplitudes.T.copy()
