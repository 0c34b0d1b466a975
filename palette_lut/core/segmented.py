"""Expansion of Segmented Palette Color Lookup Table Data.

A segmented channel is a flat sequence of integers read as consecutive
segments of three values each, ``(opcode, length, operand)``:

    0  Discrete  write ``operand`` into the next ``length`` entries
    1  Linear    interpolate from the last written entry to ``operand``
                 over the next ``length`` entries
    2  Indirect  replay earlier segments (not supported)

Linear segments keep a running real-valued position and round each entry
half-up from it, so ``[0, 1, 10, 1, 3, 20]`` expands to ``[10, 13, 17, 20]``.
Rounding again from each stored entry, as a typed-array implementation
that reads back the previous slot does, gives ``[10, 13, 16, 19]`` for the
same program; the running position keeps the last entry on ``operand``.

References: DICOM PS3.3 C.7.9.2.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

import numpy as np

from palette_lut.core.errors import InvalidSegmentError, OutOfRangeError, UnsupportedSegmentError
from palette_lut.core.types import (
    DiscreteSegment,
    IndirectSegment,
    LinearSegment,
    Segment,
    as_integer,
    dtype_for_bits,
    resolve_entry_count,
)
from palette_lut.core.utils import round_half_up

logger = logging.getLogger(__name__)

_SEGMENT_SIZE = 3


def iter_segments(program: Iterable[int]) -> Iterator[Segment]:
    """Yield typed segment records from a flat program, in order.

    Errors are raised lazily, when the offending segment is reached.
    """
    values = [as_integer(v) for v in program]
    for start in range(0, len(values), _SEGMENT_SIZE):
        chunk = values[start : start + _SEGMENT_SIZE]
        if len(chunk) < _SEGMENT_SIZE:
            raise InvalidSegmentError(
                f'Segmented Palette Color Lookup Table Data ends with an incomplete segment at position {start}.'
            )
        opcode, length, operand = chunk
        if opcode not in (0, 1, 2):
            raise InvalidSegmentError(
                f'Encountered unexpected segment type {opcode} at position {start} of '
                'Segmented Palette Color Lookup Table Data.'
            )
        if length < 0:
            raise InvalidSegmentError(f'Segment at position {start} has negative length {length}.')
        if opcode == 0:
            yield DiscreteSegment(length=length, value=operand)
        elif opcode == 1:
            yield LinearSegment(length=length, endpoint=operand)
        else:
            yield IndirectSegment(length=length, offset=operand)


def parse_segments(program: Iterable[int]) -> list[Segment]:
    """Parse a whole program into segment records."""
    return list(iter_segments(program))


def expand_segmented_lut(program: Iterable[int], number_of_entries: int, bits_per_entry: int) -> np.ndarray:
    """Expand a segment program into a flat array of fixed-width entries.

    The output dtype is uint8 or uint16 depending on `bits_per_entry`. The
    returned array holds only the entries actually written; a short program
    yields a short array, and writing past `number_of_entries` (0 = 65536)
    raises OutOfRangeError.
    """
    dtype = dtype_for_bits(bits_per_entry)
    max_value = np.iinfo(dtype).max
    size = resolve_entry_count(number_of_entries)
    lut = np.zeros(size, dtype=dtype)
    offset = 0
    count = 0

    for segment in iter_segments(program):
        if isinstance(segment, IndirectSegment):
            raise UnsupportedSegmentError(
                'Indirect segment type is not yet supported for Segmented Palette Color Lookup Table.'
            )
        end = offset + segment.length
        if end > size:
            raise OutOfRangeError(
                f'Segment writes entries [{offset}, {end}) beyond the table size of {size} entries.'
            )

        if isinstance(segment, DiscreteSegment):
            if not 0 <= segment.value <= max_value:
                raise OutOfRangeError(
                    f'Discrete segment value {segment.value} does not fit in {bits_per_entry} bits.'
                )
            lut[offset:end] = segment.value
        else:
            if offset == 0:
                raise InvalidSegmentError('A linear segment cannot be the first segment.')
            if not 0 <= segment.endpoint <= max_value:
                raise OutOfRangeError(
                    f'Linear segment endpoint {segment.endpoint} does not fit in {bits_per_entry} bits.'
                )
            if segment.length:
                position = float(lut[offset - 1])
                step = (segment.endpoint - position) / segment.length
                for j in range(offset, end):
                    position += step
                    lut[j] = min(max(round_half_up(position), 0), max_value)

        offset = end
        count += 1

    logger.debug('expanded %d segments into %d of %d entries', count, offset, size)
    return lut[:offset]
