from .molecular_basis import build as build_molecular_basis
from .molecule import MIN_ATOM_DISTANCE, validate_geometry
from . import real_space
from . import units
