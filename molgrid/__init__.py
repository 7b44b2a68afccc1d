import jax

# Partition weights must sum to one to double precision.
jax.config.update("jax_enable_x64", True)

from .types import Array

from . import adapters

from . import basis
from .basis.basis_block import BasisBlock
from .basis.contracted_gto import ContractedGTO, PrimitiveType

from . import structure
from .structure.atom import Atom
from .structure.molecular_basis import MolecularBasis
from .structure.molecule import Molecule

from . import quadrature
from .quadrature.fineness import Fineness

from . import grid
from .grid.molecular import MolecularGrid
from .grid.point import GridPoint
