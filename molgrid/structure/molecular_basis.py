import dataclasses
from collections.abc import Sequence

from molgrid.structure import atom
from molgrid.structure import molecule
from molgrid.basis import basis_block


@dataclasses.dataclass
class MolecularBasis:
    atoms: Sequence[atom.Atom]
    basis_blocks: Sequence[basis_block.BasisBlock]

    @property
    def n_basis(self) -> int:
        """The total number of basis functions in this molecular basis."""
        return sum(block.n_basis for block in self.basis_blocks)


def build(mol: molecule.Molecule) -> MolecularBasis:
    """Builds the molecular basis from the shells carried by each atom."""
    basis_blocks = [
        basis_block.build_basis_block(gto, atom.position)
        for atom in mol.atoms
        for gto in atom.shells
    ]

    return MolecularBasis(atoms=mol.atoms, basis_blocks=basis_blocks)


def as_basis(
    system: MolecularBasis | molecule.Molecule,
) -> MolecularBasis:
    if isinstance(system, MolecularBasis):
        return system
    elif isinstance(system, molecule.Molecule):
        return build(system)
    else:
        raise TypeError(
            f"Expected input of type MolecularBasis or Molecule, got {type(system)}"
        )
