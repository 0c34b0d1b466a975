"""Small numeric and identifier helpers used across palette-lut."""

import uuid

import numpy as np

UID_ROOT = '2.25.'  # UUID-derived UIDs, PS3.5 B.2
_MAX_UID_LENGTH = 64


def rescale(value, in_min: float, in_max: float, out_min: float, out_max: float):
    """Linearly map `value` from [in_min, in_max] to [out_min, out_max].

    Works on scalars and numpy arrays. Values outside the input range are
    extrapolated, not clipped.
    """
    if in_max == in_min:
        raise ValueError(f'Input range is empty: [{in_min}, {in_max}]')
    return out_min + (value - in_min) * (out_max - out_min) / (in_max - in_min)


def round_half_up(value):
    """Round to the nearest integer, halves away from negative infinity.

    Python's round() rounds halves to even; display tables expect 2.5 -> 3.
    """
    if isinstance(value, np.ndarray):
        return np.floor(value + 0.5).astype(np.int64)
    return int(np.floor(value + 0.5))


def generate_uid(prefix: str = UID_ROOT) -> str:
    """Return a new UID under `prefix` built from a random UUID."""
    if not prefix.endswith('.'):
        prefix += '.'
    if len(prefix) >= _MAX_UID_LENGTH:
        raise ValueError(f'UID prefix is too long: {prefix!r}')
    uid = f'{prefix}{uuid.uuid4().int}'
    return uid[:_MAX_UID_LENGTH]
