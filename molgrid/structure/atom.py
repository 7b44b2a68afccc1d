import dataclasses
from collections.abc import Sequence

from molgrid import types
from molgrid.basis import contracted_gto


@dataclasses.dataclass
class Atom:
    symbol: str
    number: int  # Atomic number

    # Position in Bohr units
    position: types.Array

    shells: Sequence[contracted_gto.ContractedGTO] = ()

    def __post_init__(self):
        types.promote_dataclass_fields(self)
        self.position = self.position.copy()
        if self.position.shape != (3,):
            raise ValueError(
                f"Atom position must have shape (3,). Got {self.position.shape}"
            )
        # Grid points only read the position through their atom.
        self.position.flags.writeable = False
