from .atomic import AtomicGrid
from .becke import (
    BECKE_ITERATIONS,
    POINT_BATCH_SIZE,
    atomic_partition,
    cell_functions,
    cutoff,
    partition_weights,
    smoothing_polynomial,
)
from .molecular import MolecularGrid
from .point import GridArrays, GridPoint
