import dataclasses
from typing import TypeAlias

import jax
import numpy as np

# Dynamic data, either numpy or jax.
Array: TypeAlias = np.ndarray | jax.Array

# Static metadata
StaticArray: TypeAlias = np.ndarray


def promote_dataclass_fields(obj):
    """Converts all Array/StaticArray fields to float64/int numpy arrays."""
    for field in dataclasses.fields(obj):
        value = getattr(obj, field.name)

        if field.type == Array:
            setattr(obj, field.name, np.asarray(value, dtype=np.float64))
        elif field.type == StaticArray:
            setattr(obj, field.name, np.asarray(value))
