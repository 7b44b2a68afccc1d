import dataclasses
from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

from molgrid.structure import atom as atom_lib
from molgrid.structure import molecular_basis
from molgrid.structure import molecule as molecule_lib
from molgrid.structure import real_space


@dataclasses.dataclass
class GridArrays:
    """Structure-of-arrays storage for the points of an integration grid.

    Row p of every array belongs to point p. The positions and atom indices
    are fixed after construction; weights, amplitudes and densities are
    updated in place.
    """

    # The atoms that own the points. Only read, never mutated.
    atoms: Sequence[atom_lib.Atom]

    # shape (n_points, 3)
    positions: npt.NDArray[np.float64]

    # Index into atoms of the atom that generated each point.
    # shape (n_points,)
    atom_indices: npt.NDArray[np.int64]

    # shape (n_points,)
    weights: npt.NDArray[np.float64]

    # Basis function amplitudes. shape (n_points, n_basis)
    amplitudes: npt.NDArray[np.float64]

    # Electron density. shape (n_points,)
    densities: npt.NDArray[np.float64]

    def __post_init__(self):
        self.positions.flags.writeable = False
        self.atom_indices.flags.writeable = False

    @property
    def n_points(self) -> int:
        return self.positions.shape[0]

    @property
    def n_basis(self) -> int:
        return self.amplitudes.shape[1]

    @classmethod
    def allocate(
        cls,
        atoms: Sequence[atom_lib.Atom],
        positions: npt.NDArray[np.float64],
        atom_indices: npt.NDArray[np.int64],
        weights: npt.NDArray[np.float64],
        n_basis: int,
    ) -> "GridArrays":
        """Builds the storage with zero amplitudes and densities."""
        n_points = positions.shape[0]
        return cls(
            atoms=atoms,
            positions=np.array(positions, dtype=np.float64).reshape(-1, 3),
            atom_indices=np.array(atom_indices, dtype=np.int64),
            weights=np.array(weights, dtype=np.float64),
            amplitudes=np.zeros((n_points, n_basis), dtype=np.float64),
            densities=np.zeros(n_points, dtype=np.float64),
        )


class GridPoint:
    """A point of the molecular integration grid.

    Grid point at position r; stores local information such as the amplitude
    of all the basis functions in the basis set and the local density.

    Integrals are evaluated by multiplying the local value of the integrand
    by the weight of the grid point and summing over all points. The weight
    accounts for:
    - the Jacobian of the spherical coordinates and of the radial mapping
    - the Gauss-Chebyshev radial weight
    - the Lebedev angular weight
    - the Becke partition weight of the owning atom

    A GridPoint is a view of one row of a GridArrays, so changes made through
    it are visible to the grid that owns the storage.
    """

    def __init__(self, arrays: GridArrays, index: int):
        if not 0 <= index < arrays.n_points:
            raise IndexError(
                f"Grid point index {index} out of range for "
                f"{arrays.n_points} points."
            )
        self._arrays = arrays
        self._index = index

    @classmethod
    def create(
        cls,
        position: npt.ArrayLike,
        atoms: Sequence[atom_lib.Atom],
        atom_index: int,
        n_basis: int = 0,
    ) -> "GridPoint":
        """Creates a single point with its own storage and zero weight."""
        arrays = GridArrays.allocate(
            atoms=atoms,
            positions=np.asarray(position, dtype=np.float64).reshape(1, 3),
            atom_indices=np.array([atom_index]),
            weights=np.zeros(1),
            n_basis=n_basis,
        )
        return cls(arrays, 0)

    @property
    def index(self) -> int:
        return self._index

    @property
    def position(self) -> np.ndarray:
        """The position of the point, shape (3,)."""
        return self._arrays.positions[self._index]

    @property
    def atom_index(self) -> int:
        return int(self._arrays.atom_indices[self._index])

    @property
    def atom(self) -> atom_lib.Atom:
        """The atom this point belongs to."""
        return self._arrays.atoms[self.atom_index]

    @property
    def atom_position(self) -> np.ndarray:
        return self.atom.position

    @property
    def weight(self) -> float:
        return float(self._arrays.weights[self._index])

    def set_weight(self, w: float) -> None:
        self._arrays.weights[self._index] = w

    def multiply_weight(self, factor: float) -> None:
        self._arrays.weights[self._index] *= factor

    @property
    def basis_func_amp(self) -> np.ndarray:
        """The amplitudes of all basis functions at the point, shape (n_basis,)."""
        return self._arrays.amplitudes[self._index]

    @property
    def density(self) -> float:
        return float(self._arrays.densities[self._index])

    def set_basis_func_amp(
        self, system: molecular_basis.MolecularBasis | molecule_lib.Molecule
    ) -> None:
        """Evaluates every basis function of the system at this point."""
        basis = molecular_basis.as_basis(system)
        if basis.n_basis != self._arrays.n_basis:
            raise ValueError(
                f"Basis has {basis.n_basis} functions but the grid stores "
                f"{self._arrays.n_basis} amplitudes per point."
            )
        self._arrays.amplitudes[self._index] = real_space.evaluate(
            basis, self.position
        )

    def set_density(self, D: npt.ArrayLike) -> None:
        """Sets the density to amp^T D amp using the stored amplitudes.

        Args:
            D: The density matrix, shape (n_basis, n_basis).
        """
        D = np.asarray(D, dtype=np.float64)
        n_basis = self._arrays.n_basis
        if D.shape != (n_basis, n_basis):
            raise ValueError(
                f"Density matrix must have shape ({n_basis}, {n_basis}). "
                f"Got {D.shape}"
            )
        amp = self.basis_func_amp
        self._arrays.densities[self._index] = amp @ D @ amp

    def scale_density(self, factor: float) -> None:
        self._arrays.densities[self._index] *= factor
