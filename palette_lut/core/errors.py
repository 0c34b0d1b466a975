"""Exception types raised while building or materializing a palette LUT.

Every error derives from PaletteLUTError, itself a ValueError, so callers can
catch the whole family or a single kind.
"""


class PaletteLUTError(ValueError):
    """Base class for all palette lookup table errors."""


class DescriptorMismatchError(PaletteLUTError):
    """Red, Green and Blue descriptors disagree on a field."""


class UnsupportedBitsPerEntryError(PaletteLUTError):
    """Bits per entry is neither 8 nor 16."""


class DataConflictError(PaletteLUTError):
    """Both explicit and segmented data were given for one channel."""


class MissingDataError(PaletteLUTError):
    """Neither explicit nor segmented data was given for one channel."""


class LengthMismatchError(PaletteLUTError):
    """Channel data does not hold the expected number of entries."""


class UnsupportedSegmentError(PaletteLUTError, NotImplementedError):
    """Segment type is valid but not supported (Indirect)."""


class InvalidSegmentError(PaletteLUTError):
    """Segment program is malformed."""


class OutOfRangeError(PaletteLUTError):
    """A write falls outside the table or a value does not fit its width."""


class UnknownColorMapError(PaletteLUTError):
    """Colormap name is not one of ColorMaps."""


class NonIntegralValueError(PaletteLUTError):
    """A descriptor field, entry or segment value is not a whole number."""
