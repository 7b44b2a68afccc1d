from collections.abc import Sequence
import dataclasses
import itertools

import numpy as np

from molgrid.adapters import bse
from molgrid.structure import atom as atom_lib

# Atoms closer than this (in Bohr) are treated as coincident.
MIN_ATOM_DISTANCE = 1e-6


def validate_geometry(atoms: Sequence[atom_lib.Atom]) -> None:
    """Rejects geometries with coincident atoms.

    Raises:
        ValueError: If two atoms are closer than MIN_ATOM_DISTANCE.
    """
    for (i, atom1), (j, atom2) in itertools.combinations(enumerate(atoms), 2):
        dist = np.linalg.norm(atom1.position - atom2.position)
        if dist < MIN_ATOM_DISTANCE:
            raise ValueError(
                f"Atoms {i} ({atom1.symbol}) and {j} ({atom2.symbol}) are "
                f"{dist:.3e} Bohr apart. Coincident atoms are not allowed."
            )


@dataclasses.dataclass
class Molecule:
    atoms: Sequence[atom_lib.Atom]

    def __post_init__(self):
        self.atoms = tuple(self.atoms)
        validate_geometry(self.atoms)

    @property
    def n_electrons(self) -> int:
        """The total number of electrons in the neutral molecule."""
        return sum(atom.number for atom in self.atoms)

    @property
    def coordinates(self) -> np.ndarray:
        """The atomic positions, shape (n_atoms, 3)."""
        return np.array([atom.position for atom in self.atoms]).reshape(-1, 3)

    @classmethod
    def from_geometry(
        cls, atoms: Sequence[atom_lib.Atom], basis_name: str
    ) -> "Molecule":
        """Builds a Molecule from a sequence of atoms and a basis set name.

        The shells of each atom are loaded from the Basis Set Exchange.
        """
        atoms = [
            atom_lib.Atom(
                symbol=atom.symbol,
                number=atom.number,
                position=atom.position,
                shells=bse.load(basis_name=basis_name, element=atom.number),
            )
            for atom in atoms
        ]

        return cls(atoms=atoms)
