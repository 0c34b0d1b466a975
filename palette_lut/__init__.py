"""palette-lut: decode and materialize Palette Color Lookup Tables."""

from palette_lut.core.colormap import ColorMaps, create_color_map
from palette_lut.core.errors import (
    DataConflictError,
    DescriptorMismatchError,
    InvalidSegmentError,
    LengthMismatchError,
    MissingDataError,
    NonIntegralValueError,
    OutOfRangeError,
    PaletteLUTError,
    UnknownColorMapError,
    UnsupportedBitsPerEntryError,
    UnsupportedSegmentError,
)
from palette_lut.core.lut import PaletteColorLookupTable, build_palette_color_lookup_table
from palette_lut.core.segmented import expand_segmented_lut, parse_segments
from palette_lut.core.types import (
    ChannelDescriptor,
    DiscreteSegment,
    ExplicitData,
    IndirectSegment,
    LinearSegment,
    SegmentedData,
)
from palette_lut.core.utils import generate_uid, rescale

__all__ = [
    'ChannelDescriptor',
    'ColorMaps',
    'DataConflictError',
    'DescriptorMismatchError',
    'DiscreteSegment',
    'ExplicitData',
    'IndirectSegment',
    'InvalidSegmentError',
    'LengthMismatchError',
    'LinearSegment',
    'MissingDataError',
    'NonIntegralValueError',
    'OutOfRangeError',
    'PaletteColorLookupTable',
    'PaletteLUTError',
    'SegmentedData',
    'UnknownColorMapError',
    'UnsupportedBitsPerEntryError',
    'UnsupportedSegmentError',
    'build_palette_color_lookup_table',
    'create_color_map',
    'expand_segmented_lut',
    'generate_uid',
    'parse_segments',
    'rescale',
]
