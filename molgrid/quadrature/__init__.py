from .fineness import (
    FINENESS_SETTINGS,
    RADIAL_POINTS_PER_PERIOD,
    Fineness,
    QuadratureSettings,
    get_settings,
    radial_point_count,
)
from .angular import lebedev
from .radial import gauss_chebyshev
from .radii import bragg_slater_radius, radial_scale
