"""Named colormaps sampled into RGB triplets.

Each map is a list of control points ``(position, (r, g, b))`` on [0, 1].
`create_color_map` samples ``bins`` evenly spaced positions and linearly
interpolates between neighbouring control points in RGB.

The PHASE gradient is cyclic and is returned in reverse order; no other map
is reversed.
"""

from __future__ import annotations

from enum import Enum

import numpy as np

from palette_lut.core.errors import UnknownColorMapError
from palette_lut.core.utils import round_half_up


class ColorMaps(str, Enum):
    VIRIDIS = 'VIRIDIS'
    INFERNO = 'INFERNO'
    MAGMA = 'MAGMA'
    GRAY = 'GRAY'
    BLUE_RED = 'BLUE_RED'
    PHASE = 'PHASE'
    PORTLAND = 'PORTLAND'
    HOT = 'HOT'


ControlPoints = list[tuple[float, tuple[int, int, int]]]

_VIRIDIS: ControlPoints = [
    (0.0, (68, 1, 84)),
    (0.13, (71, 44, 122)),
    (0.25, (59, 81, 139)),
    (0.38, (44, 113, 142)),
    (0.5, (33, 144, 141)),
    (0.63, (39, 173, 129)),
    (0.75, (92, 200, 99)),
    (0.88, (170, 220, 50)),
    (1.0, (253, 231, 37)),
]

_INFERNO: ControlPoints = [
    (0.0, (0, 0, 4)),
    (0.13, (31, 12, 72)),
    (0.25, (85, 15, 109)),
    (0.38, (136, 34, 106)),
    (0.5, (186, 54, 85)),
    (0.63, (227, 89, 51)),
    (0.75, (249, 140, 10)),
    (0.88, (249, 201, 50)),
    (1.0, (252, 255, 164)),
]

_MAGMA: ControlPoints = [
    (0.0, (0, 0, 4)),
    (0.13, (28, 16, 68)),
    (0.25, (79, 18, 123)),
    (0.38, (129, 37, 129)),
    (0.5, (181, 54, 122)),
    (0.63, (229, 80, 100)),
    (0.75, (251, 135, 97)),
    (0.88, (254, 194, 135)),
    (1.0, (252, 253, 191)),
]

_GRAY: ControlPoints = [
    (0.0, (0, 0, 0)),
    (1.0, (255, 255, 255)),
]

_BLUE_RED: ControlPoints = [
    (0.0, (5, 10, 172)),
    (0.35, (106, 137, 247)),
    (0.5, (190, 190, 190)),
    (0.6, (220, 170, 132)),
    (0.7, (230, 145, 90)),
    (1.0, (178, 10, 28)),
]

_PHASE: ControlPoints = [
    (0.0, (145, 105, 18)),
    (0.13, (184, 71, 38)),
    (0.25, (186, 58, 115)),
    (0.38, (160, 71, 185)),
    (0.5, (110, 97, 218)),
    (0.63, (50, 123, 164)),
    (0.75, (31, 131, 110)),
    (0.88, (77, 129, 34)),
    (1.0, (145, 105, 18)),
]

_PORTLAND: ControlPoints = [
    (0.0, (12, 51, 131)),
    (0.25, (10, 136, 186)),
    (0.5, (242, 211, 56)),
    (0.75, (242, 143, 56)),
    (1.0, (217, 30, 30)),
]

_HOT: ControlPoints = [
    (0.0, (0, 0, 0)),
    (0.3, (230, 0, 0)),
    (0.6, (255, 210, 0)),
    (1.0, (255, 255, 255)),
]

# name -> (control points, reverse)
_COLORMAPS: dict[ColorMaps, tuple[ControlPoints, bool]] = {
    ColorMaps.VIRIDIS: (_VIRIDIS, False),
    ColorMaps.INFERNO: (_INFERNO, False),
    ColorMaps.MAGMA: (_MAGMA, False),
    ColorMaps.GRAY: (_GRAY, False),
    ColorMaps.BLUE_RED: (_BLUE_RED, False),
    ColorMaps.PHASE: (_PHASE, True),
    ColorMaps.PORTLAND: (_PORTLAND, False),
    ColorMaps.HOT: (_HOT, False),
}


def resolve_color_map(name: ColorMaps | str) -> ColorMaps:
    """Return the ColorMaps member for a member or its (case-insensitive) name."""
    if isinstance(name, ColorMaps):
        return name
    try:
        return ColorMaps(str(name).upper())
    except ValueError:
        available = ', '.join(m.value for m in ColorMaps)
        raise UnknownColorMapError(f'Unknown colormap "{name}". Available: {available}') from None


def is_reversed(name: ColorMaps | str) -> bool:
    """True if the map is returned in reverse order of its gradient."""
    return _COLORMAPS[resolve_color_map(name)][1]


def gradient(name: ColorMaps | str, bins: int) -> np.ndarray:
    """Sample the underlying gradient, in control-point order, as an int array of shape (bins, 3)."""
    if bins < 1:
        raise ValueError(f'Number of bins must be positive, got {bins}.')
    points, _reverse = _COLORMAPS[resolve_color_map(name)]
    positions = np.array([p for p, _rgb in points], dtype=np.float64)
    colours = np.array([rgb for _p, rgb in points], dtype=np.float64)

    t = np.linspace(0.0, 1.0, bins) if bins > 1 else np.zeros(1)
    channels = [np.interp(t, positions, colours[:, c]) for c in range(3)]
    return np.clip(round_half_up(np.stack(channels, axis=-1)), 0, 255)


def create_color_map(name: ColorMaps | str, bins: int) -> list[tuple[int, int, int]]:
    """Create a color map: one RGB triplet per bin."""
    colormap = resolve_color_map(name)
    samples = gradient(colormap, bins)
    if is_reversed(colormap):
        samples = samples[::-1]
    return [(int(r), int(g), int(b)) for r, g, b in samples]
