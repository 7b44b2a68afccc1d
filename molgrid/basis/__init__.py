from .contracted_gto import ContractedGTO, PrimitiveType
from .basis_block import BasisBlock, build_basis_block
from . import cartesian
from . import real_space
