"""Palette Color Lookup Table: validation and lazy materialization.

A table is built from three channel descriptors and, for every channel,
either explicit entries or a segment program. Construction validates the
inputs and freezes the object; the RGB table is computed on first access to
`data` and cached for the object's lifetime.

Only 256-entry, 8-bit tables are suitable for display, so 16-bit tables are
resampled to 256 rows and rescaled to [0, 255].
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from typing import Any

import numpy as np

from palette_lut.core.errors import (
    DataConflictError,
    DescriptorMismatchError,
    LengthMismatchError,
    MissingDataError,
    OutOfRangeError,
)
from palette_lut.core.segmented import expand_segmented_lut
from palette_lut.core.types import (
    MAX_ENTRIES,
    ChannelDescriptor,
    ChannelSource,
    ExplicitData,
    SegmentedData,
    as_integer,
    dtype_for_bits,
    resolve_entry_count,
)
from palette_lut.core.utils import generate_uid, rescale, round_half_up

logger = logging.getLogger(__name__)

DISPLAY_ENTRIES = 2**8
_DESCRIPTOR_FIELDS = ('First', 'Second', 'Third')
_CHANNELS = ('Red', 'Green', 'Blue')


def _agreed_value(descriptors: Sequence[ChannelDescriptor], index: int) -> int:
    values = {d.as_tuple()[index] for d in descriptors}
    if len(values) != 1:
        raise DescriptorMismatchError(
            f'{_DESCRIPTOR_FIELDS[index]} value of Red, Green, and Blue Palette Color Lookup Table '
            f'Descriptor must be the same, got {sorted(values)}.'
        )
    return values.pop()


def _channel_source(channel: str, data: Any, segmented_data: Any, number_of_entries: int) -> ChannelSource:
    """Build the source for one channel, enforcing exactly one kind of data."""
    if data is not None and segmented_data is not None:
        raise DataConflictError(
            f'Either Segmented {channel} Palette Color Lookup Table Data or {channel} Palette '
            'Color Lookup Table Data should be provided, but not both.'
        )
    if data is None and segmented_data is None:
        raise MissingDataError(
            f'Either Segmented {channel} Palette Color Lookup Table Data or {channel} Palette '
            'Color Lookup Table Data must be provided.'
        )
    if segmented_data is not None:
        return SegmentedData(program=tuple(as_integer(v) for v in segmented_data))

    values = tuple(as_integer(v) for v in data)
    if len(values) != number_of_entries:
        raise LengthMismatchError(
            f'{channel} Palette Color Lookup Table Data has wrong number of entries: '
            f'expected {number_of_entries}, got {len(values)}.'
        )
    return ExplicitData(values=values)


class PaletteColorLookupTable:
    """A Palette Color Lookup Table.

    Descriptors may be ChannelDescriptor objects or raw
    ``(number_of_entries, first_value_mapped, bits_per_entry)`` tuples. For
    each channel give exactly one of ``<channel>_data`` or
    ``<channel>_segmented_data``.
    """

    def __init__(
        self,
        red_descriptor: ChannelDescriptor | Sequence[int],
        green_descriptor: ChannelDescriptor | Sequence[int],
        blue_descriptor: ChannelDescriptor | Sequence[int],
        red_data: Sequence[int] | np.ndarray | None = None,
        green_data: Sequence[int] | np.ndarray | None = None,
        blue_data: Sequence[int] | np.ndarray | None = None,
        red_segmented_data: Sequence[int] | np.ndarray | None = None,
        green_segmented_data: Sequence[int] | np.ndarray | None = None,
        blue_segmented_data: Sequence[int] | np.ndarray | None = None,
        uid: str | None = None,
    ):
        descriptors = [ChannelDescriptor.coerce(d) for d in (red_descriptor, green_descriptor, blue_descriptor)]
        number_of_entries = resolve_entry_count(_agreed_value(descriptors, 0))
        first_value_mapped = _agreed_value(descriptors, 1)
        bits_per_entry = _agreed_value(descriptors, 2)
        dtype = dtype_for_bits(bits_per_entry)

        sources = tuple(
            _channel_source(channel, data, segmented, number_of_entries)
            for channel, data, segmented in zip(
                _CHANNELS,
                (red_data, green_data, blue_data),
                (red_segmented_data, green_segmented_data, blue_segmented_data),
            )
        )

        attrs = {
            '_uid': uid if uid is not None else generate_uid(),
            '_descriptor': ChannelDescriptor(descriptors[0].number_of_entries, first_value_mapped, bits_per_entry),
            '_number_of_entries': number_of_entries,
            '_first_value_mapped': first_value_mapped,
            '_bits_per_entry': bits_per_entry,
            '_dtype': dtype,
            '_sources': sources,
            '_data': None,
            '_lock': threading.Lock(),
        }
        for name, value in attrs.items():
            object.__setattr__(self, name, value)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f'{type(self).__name__} is immutable')

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f'{type(self).__name__} is immutable')

    def __repr__(self) -> str:
        return (
            f'{type(self).__name__}(uid={self._uid!r}, number_of_entries={self._number_of_entries}, '
            f'first_value_mapped={self._first_value_mapped}, bits_per_entry={self._bits_per_entry})'
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PaletteColorLookupTable):
            return NotImplemented
        return (
            self._uid == other._uid
            and self._descriptor == other._descriptor
            and self._sources == other._sources
        )

    def __hash__(self) -> int:
        return hash(self._uid)

    def __len__(self) -> int:
        return len(self.data)

    @property
    def uid(self) -> str:
        """str: Palette Color Lookup Table UID"""
        return self._uid

    @property
    def first_value_mapped(self) -> int:
        """int: Pixel value mapped to the first entry of the table."""
        return self._first_value_mapped

    @property
    def number_of_entries(self) -> int:
        """int: Number of entries per channel, with the 0 sentinel resolved to 65536."""
        return self._number_of_entries

    @property
    def bits_per_entry(self) -> int:
        return self._bits_per_entry

    @property
    def descriptor(self) -> ChannelDescriptor:
        """ChannelDescriptor: The descriptor shared by all three channels, as given."""
        return self._descriptor

    @property
    def red(self) -> ChannelSource:
        return self._sources[0]

    @property
    def green(self) -> ChannelSource:
        return self._sources[1]

    @property
    def blue(self) -> ChannelSource:
        return self._sources[2]

    @property
    def data(self) -> np.ndarray:
        """numpy.ndarray: Read-only uint8 array of RGB triplets, shape (n, 3).

        n is the number of entries for 8-bit tables and always 256 for
        16-bit tables.
        """
        data = self._data
        if data is None:
            with self._lock:
                data = self._data
                if data is None:
                    data = self._materialize()
                    object.__setattr__(self, '_data', data)
        return data

    def get_table(self) -> np.ndarray:
        """Return the materialized table (same array as `data`)."""
        return self.data

    def _channel_lut(self, channel: str, source: ChannelSource) -> np.ndarray:
        if isinstance(source, SegmentedData):
            return expand_segmented_lut(source.program, self._number_of_entries, self._bits_per_entry)
        values = np.asarray(source.values, dtype=np.int64)
        max_value = np.iinfo(self._dtype).max
        if values.size and (values.min() < 0 or values.max() > max_value):
            raise OutOfRangeError(
                f'{channel} Palette Color Lookup Table Data has values outside [0, {max_value}].'
            )
        return values.astype(self._dtype)

    def _materialize(self) -> np.ndarray:
        red, green, blue = (
            self._channel_lut(channel, source) for channel, source in zip(_CHANNELS, self._sources)
        )
        lengths = {len(red), len(green), len(blue)}
        if len(lengths) > 1:
            raise LengthMismatchError(
                'Red, Green, and Blue Palette Color Lookup Tables must have the same size, '
                f'got {len(red)}, {len(green)} and {len(blue)}.'
            )
        (length,) = lengths
        if length != self._number_of_entries:
            raise LengthMismatchError(
                f'Palette Color Lookup Tables have {length} entries, descriptor declares {self._number_of_entries}.'
            )

        lut = np.stack([red, green, blue], axis=-1)
        if self._bits_per_entry == 16:
            lut = self._downsample(lut)
        else:
            lut = lut.astype(np.uint8)
        lut.setflags(write=False)
        logger.debug('materialized palette %s: %d rows from %d entries', self._uid, len(lut), length)
        return lut

    def _downsample(self, lut: np.ndarray) -> np.ndarray:
        """Resample a 16-bit table to 256 rows of 8-bit values."""
        steps = self._number_of_entries / DISPLAY_ENTRIES
        indices = (np.arange(DISPLAY_ENTRIES) * steps).astype(np.int64)
        sampled = lut[indices].astype(np.float64)
        scaled = rescale(sampled, 0, MAX_ENTRIES - 1, 0, DISPLAY_ENTRIES - 1)
        return np.clip(round_half_up(scaled), 0, DISPLAY_ENTRIES - 1).astype(np.uint8)


def build_palette_color_lookup_table(
    colormap: Sequence[Sequence[int]],
    first_value_mapped: int = 0,
    bits_per_entry: int = 8,
    uid: str | None = None,
) -> PaletteColorLookupTable:
    """Build a palette color lookup table from a colormap.

    Args:
        colormap: RGB triplet for each entry, e.g. from create_color_map().
        first_value_mapped: Pixel value mapped to the first triplet.
        bits_per_entry: Width of the stored entries, 8 or 16.
        uid: Table UID; generated when omitted.
    """
    rows = np.asarray(colormap, dtype=np.int64)
    if rows.ndim != 2 or rows.shape[1] != 3:
        raise ValueError(f'Colormap must be a sequence of RGB triplets, got shape {rows.shape}.')
    number_of_entries = len(rows)
    if not 0 < number_of_entries <= MAX_ENTRIES:
        raise LengthMismatchError(f'Colormap must have between 1 and {MAX_ENTRIES} entries, got {number_of_entries}.')

    # 2^16 entries is recorded as 0
    descriptor = (number_of_entries % MAX_ENTRIES, first_value_mapped, bits_per_entry)
    return PaletteColorLookupTable(
        red_descriptor=descriptor,
        green_descriptor=descriptor,
        blue_descriptor=descriptor,
        red_data=rows[:, 0],
        green_data=rows[:, 1],
        blue_data=rows[:, 2],
        uid=uid if uid is not None else generate_uid(),
    )
