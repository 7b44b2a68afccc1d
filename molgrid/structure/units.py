ANGSTROM_TO_BOHR = 1.0 / 0.52917721092
